"""
Progressive overload calculations.

Week rules:
    deload        iff week > 1 and week % 4 == 0
    sets          max(1, round(U(sets_range) × 0.6 on deload else 1.0))
    reps          max(1, round(U(reps_range) × 0.8 on deload else 1.0))
    target weight (week - 1) × increment, None in week 1 and on deload weeks

Sets, reps and rest are re-sampled for every exercise in every week; only
the exercise pool is held constant.
"""

import math
import random

from .config import (
    DELOAD_EVERY_WEEKS,
    DELOAD_REP_FACTOR,
    DELOAD_SET_FACTOR,
    UPPER_BODY_GROUPS,
)
from .models import GoalConfig, OverloadConfig, WeekParams


def is_deload_week(week_number: int) -> bool:
    """Return True for every 4th week after the first."""
    return week_number > 1 and week_number % DELOAD_EVERY_WEEKS == 0


def compute_week_params(week_number: int) -> WeekParams:
    """
    Compute the overload parameters for one week.

    Args:
        week_number: 1-based week index

    Returns:
        WeekParams with deload flag, set/rep scale factors and the number
        of weight increments to apply
    """
    deload = is_deload_week(week_number)
    return WeekParams(
        week_number=week_number,
        is_deload=deload,
        deload_factor=DELOAD_SET_FACTOR if deload else 1.0,
        rep_factor=DELOAD_REP_FACTOR if deload else 1.0,
        weight_bump_weeks=0 if deload else week_number - 1,
    )


def is_upper_body(muscle_group: str) -> bool:
    return muscle_group in UPPER_BODY_GROUPS


def increment_for_muscle_group(muscle_group: str, overload: OverloadConfig) -> float:
    """Upper-body groups use the upper increment; everything else the lower one."""
    if is_upper_body(muscle_group):
        return overload.upper_body_increment
    return overload.lower_body_increment


def target_weight(params: WeekParams, muscle_group: str, overload: OverloadConfig) -> float | None:
    """Weight delta over week 1, or None when no bump applies this week."""
    if params.weight_bump_weeks <= 0:
        return None
    return params.weight_bump_weeks * increment_for_muscle_group(muscle_group, overload)


def _scaled(value: int, factor: float) -> int:
    return max(1, int(math.floor(value * factor + 0.5)))


def prescribe(
    goal_config: GoalConfig,
    params: WeekParams,
    rng: random.Random,
) -> tuple[int, int, int]:
    """
    Sample one exercise prescription for a week.

    Returns:
        (sets, reps, rest_seconds)
    """
    sets = _scaled(rng.randint(*goal_config.sets_range), params.deload_factor)
    reps = _scaled(rng.randint(*goal_config.reps_range), params.rep_factor)
    rest = rng.randint(*goal_config.rest_range)
    return sets, reps, rest
