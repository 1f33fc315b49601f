"""
Goal policy and overload level lookups.

Both lookups are total: an unknown goal resolves to "general-fitness" and
an unknown fitness level resolves to "beginner".  Neither raises.
"""

from .config import DEFAULT_FITNESS_LEVEL, DEFAULT_GOAL, GOAL_CONFIGS, OVERLOAD_CONFIGS
from .models import GoalConfig, OverloadConfig


def resolve_goal_config(goal_id: str | None) -> GoalConfig:
    """
    Return the GoalConfig for a goal id.

    Unknown, empty or missing ids fall back to the "general-fitness" entry.
    Whether an unknown goal should instead be rejected is a product call;
    callers that want strictness should check ``is_known_goal`` first.
    """
    if goal_id and goal_id in GOAL_CONFIGS:
        return GOAL_CONFIGS[goal_id]
    return GOAL_CONFIGS[DEFAULT_GOAL]


def is_known_goal(goal_id: str | None) -> bool:
    return bool(goal_id) and goal_id in GOAL_CONFIGS


def list_goals() -> list[str]:
    """Return the configured goal ids in table order."""
    return list(GOAL_CONFIGS)


def resolve_overload_config(fitness_level: str | None) -> OverloadConfig:
    """Return the OverloadConfig for a fitness level, defaulting to beginner."""
    if fitness_level and fitness_level in OVERLOAD_CONFIGS:
        return OVERLOAD_CONFIGS[fitness_level]
    return OVERLOAD_CONFIGS[DEFAULT_FITNESS_LEVEL]


def format_goal_name(goal: str) -> str:
    """Turn a goal id into a display name ("weight-loss" → "Weight Loss")."""
    return " ".join(w[:1].upper() + w[1:] for w in goal.split("-"))
