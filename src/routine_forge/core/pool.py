"""
Exercise pool construction.

For each day-focus the catalog is filtered and sampled once into a fixed
pool.  The same pool is reused for every week of a routine so exercise
identity and ordering never change between weeks; only the numbers do.
"""

import math
import random
from typing import Sequence

from .config import (
    ADVANCED_DIFFICULTY,
    ALWAYS_ALLOWED_EQUIPMENT,
    AVG_EXERCISE_MINUTES,
    COMPOUND_SHARE,
    FULL_BODY_GROUP,
    MAX_EXERCISES_PER_DAY,
    MIN_EXERCISES_PER_DAY,
)
from .models import CatalogExercise, GenerationRequest, GoalConfig, PoolEntry, PoolRole
from .templates import resolve_muscle_groups


def exercises_per_day(session_duration_min: int, goal_config: GoalConfig) -> int:
    """
    Number of exercises that fit in one session.

        strength_minutes = round(duration × strength_ratio)
        n = clamp(floor(strength_minutes / 5), 3, 8)
    """
    strength_minutes = _round_half_up(session_duration_min * goal_config.strength_ratio)
    n = strength_minutes // AVG_EXERCISE_MINUTES
    return max(MIN_EXERCISES_PER_DAY, min(MAX_EXERCISES_PER_DAY, n))


def _round_half_up(x: float) -> int:
    # round() is banker's rounding; 0.5 minutes must round up.
    return int(math.floor(x + 0.5))


def _sample(rng: random.Random, items: Sequence[CatalogExercise], count: int) -> list[CatalogExercise]:
    """Random sample without replacement, capped at the population size."""
    if count <= 0 or not items:
        return []
    return rng.sample(list(items), min(count, len(items)))


def filter_candidates(
    exercises: Sequence[CatalogExercise],
    target_groups: Sequence[str],
    available_equipment: Sequence[str],
    fitness_level: str,
) -> list[CatalogExercise]:
    """
    Apply the muscle-group, equipment and difficulty filters.

    - primary or any secondary muscle must be a target group
    - with an equipment list, equipment must be listed or bodyweight/none
    - beginners never get advanced exercises
    """
    targets = set(target_groups)
    pool = [
        e for e in exercises
        if e.muscle_group in targets or any(m in targets for m in e.secondary_muscles)
    ]

    if available_equipment:
        allowed = set(available_equipment) | ALWAYS_ALLOWED_EQUIPMENT
        pool = [e for e in pool if e.equipment in allowed]

    if fitness_level == "beginner":
        pool = [e for e in pool if e.difficulty != ADVANCED_DIFFICULTY]

    return pool


def _top_up(
    selected: list[PoolEntry],
    exercises: Sequence[CatalogExercise],
    rng: random.Random,
) -> list[PoolEntry]:
    """
    Fill a degenerate pool up to the minimum size.

    Draws distinct exercises from the catalog-wide full-body/compound pool
    first, then from the rest of the catalog.  Only a catalog with fewer
    than three distinct exercises forces a repeat.
    """
    result = list(selected)
    chosen = {entry.exercise.id for entry in result}

    fallback = [
        e for e in exercises
        if (e.muscle_group == FULL_BODY_GROUP or e.is_compound) and e.id not in chosen
    ]
    for ex in _sample(rng, fallback, MIN_EXERCISES_PER_DAY - len(result)):
        result.append(PoolEntry(exercise=ex, role="fallback"))
        chosen.add(ex.id)

    if len(result) < MIN_EXERCISES_PER_DAY:
        rest = [e for e in exercises if e.id not in chosen]
        for ex in _sample(rng, rest, MIN_EXERCISES_PER_DAY - len(result)):
            result.append(PoolEntry(exercise=ex, role="fallback"))
            chosen.add(ex.id)

    while exercises and len(result) < MIN_EXERCISES_PER_DAY:
        result.append(PoolEntry(exercise=rng.choice(list(exercises)), role="fallback"))

    return result


def build_pool(
    focus: str,
    request: GenerationRequest,
    goal_config: GoalConfig,
    exercises: Sequence[CatalogExercise],
    rng: random.Random | None = None,
) -> list[PoolEntry]:
    """
    Select the fixed exercise pool for one day-focus.

    Args:
        focus: Focus label, e.g. "Legs & Glutes"
        request: Generation request (equipment, level, session length)
        goal_config: Resolved goal policy
        exercises: Catalog snapshot for this generation run
        rng: Random source for sampling

    Returns:
        Between 3 and exercises_per_day entries (fewer only if the catalog
        is empty), compounds first when the goal prioritises them
    """
    rng = rng or random.Random()
    per_day = exercises_per_day(request.session_duration_min, goal_config)
    candidates = filter_candidates(
        exercises,
        resolve_muscle_groups(focus),
        request.available_equipment,
        request.fitness_level,
    )

    selected: list[PoolEntry]
    if goal_config.compound_priority and len(candidates) >= per_day:
        compounds = [e for e in candidates if e.is_compound]
        isolations = [e for e in candidates if not e.is_compound]
        compound_count = math.ceil(per_day * COMPOUND_SHARE)
        iso_count = per_day - compound_count
        selected = [PoolEntry(e, "compound") for e in _sample(rng, compounds, compound_count)]
        selected += [PoolEntry(e, "isolation") for e in _sample(rng, isolations, iso_count)]
    else:
        selected = [
            PoolEntry(e, _role_of(e)) for e in _sample(rng, candidates, per_day)
        ]

    if len(selected) < MIN_EXERCISES_PER_DAY:
        selected = _top_up(selected, exercises, rng)

    return selected[:per_day]


def _role_of(exercise: CatalogExercise) -> PoolRole:
    return "compound" if exercise.is_compound else "isolation"
