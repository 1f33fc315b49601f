"""
Data models for routine-forge.

All core dataclasses: the generation request, goal/overload policies,
catalog exercises, the generated routine tree ("preview") and its stored
counterpart.  Configuration and catalog types are frozen; the routine tree
is a plain value object with no identity until it is persisted.
"""

from dataclasses import dataclass, field
from typing import Literal

PoolRole = Literal["compound", "isolation", "fallback"]
RoutineStatus = Literal["generated", "previewing", "active", "in-progress", "completed", "archived"]


@dataclass(frozen=True)
class GoalConfig:
    """Training parameters for one fitness goal."""

    goal_id: str
    strength_ratio: float       # share of the session spent on resistance work
    cardio_ratio: float
    preferred_intensity: tuple[str, ...]
    prefer_fun_cardio: bool
    compound_priority: bool     # fill ~60% of each day with compound lifts
    sets_range: tuple[int, int]
    reps_range: tuple[int, int]
    rest_range: tuple[int, int]  # seconds


@dataclass(frozen=True)
class OverloadConfig:
    """Per fitness level weight progression (pounds per non-deload week)."""

    level: str
    upper_body_increment: float
    lower_body_increment: float
    strategy: str  # "linear" | "undulating" | "wave-loading", informational


@dataclass(frozen=True)
class CatalogExercise:
    """One exercise as served by the exercise catalog."""

    id: str
    name: str
    muscle_group: str
    equipment: str
    difficulty: str
    secondary_muscles: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    alternate_exercise_ids: tuple[str, ...] = ()
    instructions: tuple[str, ...] = ()
    tips: tuple[str, ...] = ()
    image_urls: tuple[str, ...] = ()

    @property
    def is_compound(self) -> bool:
        return "compound" in self.tags


@dataclass
class GenerationRequest:
    """
    Input for one routine generation.

    Assumed validated by the caller (see io.serializers.validate_request):
    goal, days_per_week, session_duration_min and fitness_level are present.
    days_per_week is clamped to [2, 6] by the generator, not here.
    """

    goal: str
    days_per_week: int
    session_duration_min: int
    fitness_level: str
    available_equipment: list[str] = field(default_factory=list)
    total_weeks: int = 4


@dataclass(frozen=True)
class PoolEntry:
    """A catalog exercise selected for a day-focus, fixed for the whole routine."""

    exercise: CatalogExercise
    role: PoolRole


@dataclass(frozen=True)
class WeekParams:
    """Overload parameters for one week of the plan."""

    week_number: int
    is_deload: bool
    deload_factor: float      # multiplies sampled sets
    rep_factor: float         # multiplies sampled reps
    weight_bump_weeks: int    # number of increments applied this week


@dataclass
class GeneratedExercise:
    """One exercise prescription inside a generated day."""

    exercise_id: str
    exercise_name: str
    muscle_group: str
    equipment: str
    sets: int
    reps: int
    rest_seconds: int
    target_weight: float | None  # None in week 1 and deload weeks
    order: int                   # 1-based position within the day
    alternate_ids: list[str] = field(default_factory=list)
    image_urls: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    tips: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate prescription numbers."""
        if self.sets < 1:
            raise ValueError("sets must be at least 1")
        if self.reps < 1:
            raise ValueError("reps must be at least 1")
        if self.rest_seconds < 0:
            raise ValueError("rest_seconds must be non-negative")
        if self.order < 1:
            raise ValueError("order is 1-based")


@dataclass
class GeneratedDay:
    """A training day: focus label plus its ordered exercises."""

    day_number: int
    focus: str
    is_rest_day: bool = False
    exercises: list[GeneratedExercise] = field(default_factory=list)


@dataclass
class GeneratedWeek:
    """One week of the plan (one day per focus, not padded to seven)."""

    week_number: int
    is_deload: bool
    days: list[GeneratedDay] = field(default_factory=list)


@dataclass
class GeneratedRoutine:
    """
    The generated multi-week plan ("preview").

    Pure value object: no database ids.  Persist it with
    io.routine_store.RoutineStore.persist_routine.
    """

    name: str
    goal: str
    days_per_week: int
    session_duration_min: int
    fitness_level: str
    available_equipment: list[str]
    total_weeks: int
    weeks: list[GeneratedWeek] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.total_weeks < 1:
            raise ValueError("total_weeks must be at least 1")

    @property
    def exercise_count(self) -> int:
        """Total exercise rows across all weeks and days."""
        return sum(len(d.exercises) for w in self.weeks for d in w.days)


@dataclass
class StoredRoutine:
    """A persisted routine: storage-owned fields plus the routine tree."""

    id: str
    user_id: str
    status: RoutineStatus
    current_week: int
    created_at: str  # ISO-8601, UTC
    updated_at: str
    routine: GeneratedRoutine
