"""
Routine generation for routine-forge.

Generates a multi-week training plan from a GenerationRequest:

1. resolve the goal policy and the overload level config
2. pick a day-focus template for the (clamped) weekly frequency
3. build one exercise pool per focus from a single catalog snapshot
4. for each week, compute overload parameters and prescribe every
   pool entry

The result is a GeneratedRoutine value object (the "preview").  All
randomness comes from the ``rng`` argument; pass ``random.Random(seed)``
for reproducible output.
"""

import random

from .catalog.provider import ExerciseCatalog
from .goals import format_goal_name, resolve_goal_config, resolve_overload_config
from .models import (
    GeneratedDay,
    GeneratedExercise,
    GeneratedRoutine,
    GeneratedWeek,
    GenerationRequest,
    GoalConfig,
    OverloadConfig,
    PoolEntry,
    WeekParams,
)
from .overload import compute_week_params, prescribe, target_weight
from .pool import build_pool
from .templates import clamp_days, select_template


def routine_display_name(goal: str, days_per_week: int) -> str:
    """E.g. "Muscle Building – 4 Day Plan"."""
    return f"{format_goal_name(goal)} – {days_per_week} Day Plan"


def _prescribe_entry(
    entry: PoolEntry,
    order: int,
    goal_config: GoalConfig,
    overload: OverloadConfig,
    params: WeekParams,
    rng: random.Random,
) -> GeneratedExercise:
    ex = entry.exercise
    sets, reps, rest = prescribe(goal_config, params, rng)
    return GeneratedExercise(
        exercise_id=ex.id,
        exercise_name=ex.name,
        muscle_group=ex.muscle_group,
        equipment=ex.equipment,
        sets=sets,
        reps=reps,
        rest_seconds=rest,
        target_weight=target_weight(params, ex.muscle_group, overload),
        order=order,
        alternate_ids=list(ex.alternate_exercise_ids),
        image_urls=list(ex.image_urls),
        instructions=list(ex.instructions),
        tips=list(ex.tips),
    )


def assemble_week(
    params: WeekParams,
    focuses: list[str],
    pools: list[list[PoolEntry]],
    goal_config: GoalConfig,
    overload: OverloadConfig,
    rng: random.Random,
) -> GeneratedWeek:
    """Emit one week: one day per focus, one exercise per pool entry."""
    days: list[GeneratedDay] = []
    for idx, (focus, pool) in enumerate(zip(focuses, pools)):
        exercises = [
            _prescribe_entry(entry, order, goal_config, overload, params, rng)
            for order, entry in enumerate(pool, start=1)
        ]
        days.append(GeneratedDay(day_number=idx + 1, focus=focus, is_rest_day=False, exercises=exercises))
    return GeneratedWeek(week_number=params.week_number, is_deload=params.is_deload, days=days)


def generate_routine(
    request: GenerationRequest,
    catalog: ExerciseCatalog,
    rng: random.Random | None = None,
) -> GeneratedRoutine:
    """
    Generate a routine preview.

    Args:
        request: Validated generation request
        catalog: Exercise catalog; read once at the start of the call
        rng: Random source (a fresh unseeded Random when omitted)

    Returns:
        GeneratedRoutine with ``total_weeks`` weeks of
        ``clamp(days_per_week, 2, 6)`` days each
    """
    rng = rng or random.Random()
    goal_config = resolve_goal_config(request.goal)
    overload = resolve_overload_config(request.fitness_level)
    days = clamp_days(request.days_per_week)
    total_weeks = request.total_weeks

    exercises = list(catalog.all_exercises())
    focuses = select_template(days, rng)
    pools = [build_pool(focus, request, goal_config, exercises, rng) for focus in focuses]

    weeks = [
        assemble_week(compute_week_params(w), focuses, pools, goal_config, overload, rng)
        for w in range(1, total_weeks + 1)
    ]

    return GeneratedRoutine(
        name=routine_display_name(request.goal, days),
        goal=request.goal,
        days_per_week=days,
        session_duration_min=request.session_duration_min,
        fitness_level=request.fitness_level,
        available_equipment=list(request.available_equipment),
        total_weeks=total_weeks,
        weeks=weeks,
    )


def day_exercise_ids(routine: GeneratedRoutine) -> list[list[tuple[str, ...]]]:
    """
    Per week, per day, the ordered exercise ids.

    Every week of a routine yields the same inner lists, which is the
    pool-stability guarantee.
    """
    return [
        [tuple(e.exercise_id for e in day.exercises) for day in week.days]
        for week in routine.weeks
    ]
