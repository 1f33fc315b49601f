"""
Day-focus template selection.

Maps a weekly frequency to a named split and resolves each focus label
("Push Day (Chest & Shoulders)") to the muscle groups it targets.
"""

import random

from .config import DAY_FOCUS_TEMPLATES, FULL_BODY_GROUP, MAX_DAYS_PER_WEEK, MIN_DAYS_PER_WEEK


def clamp_days(days_per_week: int) -> int:
    """Clamp a requested training frequency to the supported [2, 6] range."""
    return max(MIN_DAYS_PER_WEEK, min(MAX_DAYS_PER_WEEK, days_per_week))


def select_template(days_per_week: int, rng: random.Random | None = None) -> list[str]:
    """
    Pick the focus labels for a week.

    Args:
        days_per_week: Requested frequency (clamped to [2, 6])
        rng: Random source; when several variants exist one is chosen uniformly

    Returns:
        Ordered list of focus labels, one per training day
    """
    rng = rng or random.Random()
    variants = DAY_FOCUS_TEMPLATES[clamp_days(days_per_week)]
    if len(variants) == 1:
        return list(variants[0])
    return list(rng.choice(variants))


def resolve_muscle_groups(focus: str) -> list[str]:
    """
    Resolve a focus label to target muscle groups by keyword.

    "push" adds chest and shoulders, "pull" adds back and arms, each only
    if not already present.  Labels matching nothing target full-body.
    """
    lower = focus.lower()
    groups: list[str] = []

    def add(*names: str) -> None:
        for name in names:
            if name not in groups:
                groups.append(name)

    if "chest" in lower:
        add("chest")
    if "back" in lower:
        add("back")
    if "shoulder" in lower:
        add("shoulders")
    if "leg" in lower:
        add("legs")
    if "arm" in lower or "bicep" in lower or "tricep" in lower:
        add("arms")
    if "core" in lower:
        add("core")
    if "glute" in lower:
        add("glutes")
    if "full body" in lower or "upper body" in lower:
        add("chest", "back", "shoulders", "arms")
    if "lower body" in lower:
        add("legs", "glutes")
    if "push" in lower:
        add("chest", "shoulders")
    if "pull" in lower:
        add("back", "arms")

    return groups or [FULL_BODY_GROUP]
