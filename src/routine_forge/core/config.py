"""
Configuration constants for the routine generator.

All tunable tables (goal policies, day-focus templates, overload steps)
are centralized here.  The goal and overload tables are built once at
import time from the defaults below, merged with any user overrides from
``~/.routine-forge/config.yaml`` (see engine/config_loader.py), and then
frozen behind read-only mappings.
"""

import warnings
from types import MappingProxyType
from typing import Final, Mapping

from .engine.config_loader import load_model_config
from .models import GoalConfig, OverloadConfig

# =============================================================================
# REQUEST DEFAULTS AND LIMITS
# =============================================================================

MIN_DAYS_PER_WEEK: Final[int] = 2
MAX_DAYS_PER_WEEK: Final[int] = 6
DEFAULT_TOTAL_WEEKS: Final[int] = 4
ROUTINE_WEEK_OPTIONS: Final[tuple[int, ...]] = (4, 8, 12)  # offered by the CLI help
MIN_SESSION_DURATION_MIN: Final[int] = 15
MAX_SESSION_DURATION_MIN: Final[int] = 120

DEFAULT_GOAL: Final[str] = "general-fitness"
DEFAULT_FITNESS_LEVEL: Final[str] = "beginner"
FITNESS_LEVELS: Final[tuple[str, ...]] = ("beginner", "intermediate", "advanced")

# =============================================================================
# EXERCISE POOL SIZING
# =============================================================================

AVG_EXERCISE_MINUTES: Final[int] = 5
MIN_EXERCISES_PER_DAY: Final[int] = 3
MAX_EXERCISES_PER_DAY: Final[int] = 8
COMPOUND_SHARE: Final[float] = 0.6  # fraction of the day filled with compounds

COMPOUND_TAG: Final[str] = "compound"
FULL_BODY_GROUP: Final[str] = "full-body"
ALWAYS_ALLOWED_EQUIPMENT: Final[frozenset[str]] = frozenset({"bodyweight", "none"})
ADVANCED_DIFFICULTY: Final[str] = "advanced"

# =============================================================================
# PROGRESSIVE OVERLOAD
# =============================================================================

DELOAD_EVERY_WEEKS: Final[int] = 4
DELOAD_SET_FACTOR: Final[float] = 0.6
DELOAD_REP_FACTOR: Final[float] = 0.8

UPPER_BODY_GROUPS: Final[frozenset[str]] = frozenset({"chest", "back", "shoulders", "arms"})

MUSCLE_GROUPS: Final[tuple[str, ...]] = (
    "chest",
    "back",
    "shoulders",
    "legs",
    "arms",
    "core",
    "glutes",
    "full-body",
)

# =============================================================================
# DAY-FOCUS TEMPLATES (keyed by clamped days per week)
# =============================================================================

DAY_FOCUS_TEMPLATES: Final[Mapping[int, tuple[tuple[str, ...], ...]]] = MappingProxyType({
    2: (
        ("Upper Body", "Lower Body & Core"),
    ),
    3: (
        ("Push Day (Chest & Shoulders)", "Pull Day (Back & Arms)", "Legs & Core"),
        ("Upper Body", "Lower Body & Core", "Full Body + Cardio"),
    ),
    4: (
        (
            "Push Day (Chest & Shoulders)",
            "Pull Day (Back & Arms)",
            "Legs & Glutes",
            "Core & Cardio Fun Day",
        ),
    ),
    5: (
        (
            "Chest & Triceps",
            "Back & Biceps",
            "Legs & Glutes",
            "Shoulders & Core",
            "Cardio Fun Day",
        ),
    ),
    6: (
        (
            "Push (Chest & Shoulders)",
            "Pull (Back & Biceps)",
            "Legs",
            "Push (Shoulders & Triceps)",
            "Pull (Back & Core)",
            "Legs & Cardio Fun",
        ),
    ),
})

# =============================================================================
# GOAL POLICY DEFAULTS
# =============================================================================

_DEFAULT_GOALS: Final[dict[str, dict]] = {
    "weight-loss": {
        "strength_ratio": 0.4, "cardio_ratio": 0.6,
        "preferred_intensity": ["hiit", "high"], "prefer_fun_cardio": True,
        "compound_priority": True,
        "sets_range": [3, 4], "reps_range": [12, 15], "rest_range": [30, 60],
    },
    "muscle-building": {
        "strength_ratio": 0.85, "cardio_ratio": 0.15,
        "preferred_intensity": ["low", "moderate"], "prefer_fun_cardio": False,
        "compound_priority": True,
        "sets_range": [3, 5], "reps_range": [6, 12], "rest_range": [60, 120],
    },
    "strength": {
        "strength_ratio": 0.9, "cardio_ratio": 0.1,
        "preferred_intensity": ["low"], "prefer_fun_cardio": False,
        "compound_priority": True,
        "sets_range": [4, 5], "reps_range": [3, 6], "rest_range": [120, 180],
    },
    "endurance": {
        "strength_ratio": 0.35, "cardio_ratio": 0.65,
        "preferred_intensity": ["moderate", "high"], "prefer_fun_cardio": True,
        "compound_priority": False,
        "sets_range": [2, 3], "reps_range": [15, 20], "rest_range": [30, 45],
    },
    "flexibility": {
        "strength_ratio": 0.3, "cardio_ratio": 0.7,
        "preferred_intensity": ["low", "moderate"], "prefer_fun_cardio": True,
        "compound_priority": False,
        "sets_range": [2, 3], "reps_range": [10, 15], "rest_range": [30, 60],
    },
    "general-fitness": {
        "strength_ratio": 0.5, "cardio_ratio": 0.5,
        "preferred_intensity": ["moderate", "high"], "prefer_fun_cardio": True,
        "compound_priority": True,
        "sets_range": [3, 4], "reps_range": [10, 12], "rest_range": [45, 90],
    },
    "athletic-performance": {
        "strength_ratio": 0.6, "cardio_ratio": 0.4,
        "preferred_intensity": ["high", "hiit"], "prefer_fun_cardio": False,
        "compound_priority": True,
        "sets_range": [3, 5], "reps_range": [5, 10], "rest_range": [60, 120],
    },
}

# Weight increments are in pounds.
_DEFAULT_OVERLOAD: Final[dict[str, dict]] = {
    "beginner": {
        "upper_body_increment": 2.5,
        "lower_body_increment": 5.0,
        "strategy": "linear",
    },
    "intermediate": {
        "upper_body_increment": 2.5,
        "lower_body_increment": 2.5,
        "strategy": "undulating",
    },
    "advanced": {
        "upper_body_increment": 1.25,
        "lower_body_increment": 2.5,
        "strategy": "wave-loading",
    },
}


def _range(raw, name: str) -> tuple[int, int]:
    low, high = (int(v) for v in raw)
    if low < 1 or high < low:
        raise ValueError(f"{name} must satisfy 1 <= min <= max, got ({low}, {high})")
    return low, high


def goal_config_from_dict(goal_id: str, d: dict) -> GoalConfig:
    """Convert a raw goal dict (defaults or YAML) to a GoalConfig."""
    return GoalConfig(
        goal_id=goal_id,
        strength_ratio=float(d["strength_ratio"]),
        cardio_ratio=float(d["cardio_ratio"]),
        preferred_intensity=tuple(str(v) for v in d.get("preferred_intensity", ())),
        prefer_fun_cardio=bool(d.get("prefer_fun_cardio", False)),
        compound_priority=bool(d["compound_priority"]),
        sets_range=_range(d["sets_range"], "sets_range"),
        reps_range=_range(d["reps_range"], "reps_range"),
        rest_range=_range(d["rest_range"], "rest_range"),
    )


def overload_config_from_dict(level: str, d: dict) -> OverloadConfig:
    """Convert a raw overload dict (defaults or YAML) to an OverloadConfig."""
    return OverloadConfig(
        level=level,
        upper_body_increment=float(d["upper_body_increment"]),
        lower_body_increment=float(d["lower_body_increment"]),
        strategy=str(d["strategy"]),
    )


def _build_table(defaults: dict[str, dict], overrides: dict, convert) -> Mapping:
    table = {}
    merged = {k: dict(v) for k, v in defaults.items()}
    for key, value in (overrides or {}).items():
        if not isinstance(value, dict):
            warnings.warn(f"routine-forge: ignoring non-mapping override for {key!r}", stacklevel=2)
            continue
        merged[str(key)] = {**merged.get(str(key), {}), **value}

    for key, raw in merged.items():
        try:
            table[key] = convert(key, raw)
        except (KeyError, TypeError, ValueError) as exc:
            if key in defaults:
                # Built-in entries survive a broken override.
                table[key] = convert(key, defaults[key])
            warnings.warn(f"routine-forge: skipping config entry {key!r} ({exc})", stacklevel=2)
    return MappingProxyType(table)


_model_config = load_model_config()

GOAL_CONFIGS: Final[Mapping[str, GoalConfig]] = _build_table(
    _DEFAULT_GOALS, _model_config.get("goals", {}), goal_config_from_dict
)
OVERLOAD_CONFIGS: Final[Mapping[str, OverloadConfig]] = _build_table(
    _DEFAULT_OVERLOAD, _model_config.get("overload", {}), overload_config_from_dict
)
