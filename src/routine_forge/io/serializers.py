"""
JSON serialization for routine-forge models.

Handles conversion between dataclasses and JSON-compatible dicts, and
validation of incoming generation requests.  Request validation lives
here, on the caller side: the generator itself assumes a valid request.
"""

import json
from typing import Any

from ..core.config import DEFAULT_TOTAL_WEEKS, MAX_SESSION_DURATION_MIN, MIN_SESSION_DURATION_MIN
from ..core.models import (
    GeneratedDay,
    GeneratedExercise,
    GeneratedRoutine,
    GeneratedWeek,
    GenerationRequest,
    GoalConfig,
    StoredRoutine,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


# camelCase keys accepted on input next to the snake_case ones
_REQUEST_ALIASES: dict[str, str] = {
    "daysPerWeek": "days_per_week",
    "sessionDurationMin": "session_duration_min",
    "fitnessLevel": "fitness_level",
    "availableEquipment": "available_equipment",
    "totalWeeks": "total_weeks",
}


def _require_int(data: dict, key: str) -> int:
    value = data.get(key)
    if value is None or value == "":
        raise ValidationError(f"{key} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{key} must be an integer, got {value!r}") from e


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{key} is required and must be a non-empty string")
    return value.strip()


def parse_equipment(value: str | list | None) -> list[str]:
    """
    Normalise an equipment list.

    Accepts a list or a comma-separated string ("barbell, dumbbell").
    Empty items are dropped and duplicates removed, order kept.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = []
        for v in value:
            if not isinstance(v, str):
                raise ValidationError(f"equipment entries must be strings, got {v!r}")
            items.extend(v.split(","))
    else:
        raise ValidationError(f"available_equipment must be a list, got {type(value).__name__}")

    result: list[str] = []
    for item in items:
        item = item.strip().lower()
        if item and item not in result:
            result.append(item)
    return result


def request_from_dict(data: dict[str, Any]) -> GenerationRequest:
    """
    Build and validate a GenerationRequest from a dict.

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    if not isinstance(data, dict):
        raise ValidationError("request must be a JSON object")
    data = {_REQUEST_ALIASES.get(k, k): v for k, v in data.items()}

    total_weeks = data.get("total_weeks")
    request = GenerationRequest(
        goal=_require_str(data, "goal"),
        days_per_week=_require_int(data, "days_per_week"),
        session_duration_min=_require_int(data, "session_duration_min"),
        fitness_level=_require_str(data, "fitness_level"),
        available_equipment=parse_equipment(data.get("available_equipment")),
        total_weeks=DEFAULT_TOTAL_WEEKS if total_weeks is None else _require_int(data, "total_weeks"),
    )
    validate_request(request)
    return request


def validate_request(request: GenerationRequest) -> GenerationRequest:
    """
    Check the caller-side preconditions of a generation request.

    days_per_week only has to be positive: out-of-range values are clamped
    to [2, 6] by the generator.

    Raises:
        ValidationError: If the request cannot be generated
    """
    if not request.goal:
        raise ValidationError("goal is required")
    if not request.fitness_level:
        raise ValidationError("fitness_level is required")
    if request.days_per_week <= 0:
        raise ValidationError(f"days_per_week must be positive, got {request.days_per_week}")
    if not MIN_SESSION_DURATION_MIN <= request.session_duration_min <= MAX_SESSION_DURATION_MIN:
        raise ValidationError(
            f"session_duration_min must be between {MIN_SESSION_DURATION_MIN} and "
            f"{MAX_SESSION_DURATION_MIN}, got {request.session_duration_min}"
        )
    if request.total_weeks < 1:
        raise ValidationError(f"total_weeks must be at least 1, got {request.total_weeks}")
    return request


def exercise_to_dict(ex: GeneratedExercise) -> dict[str, Any]:
    return {
        "exercise_id": ex.exercise_id,
        "exercise_name": ex.exercise_name,
        "muscle_group": ex.muscle_group,
        "equipment": ex.equipment,
        "sets": ex.sets,
        "reps": ex.reps,
        "rest_seconds": ex.rest_seconds,
        "target_weight": ex.target_weight,
        "order": ex.order,
        "alternate_ids": list(ex.alternate_ids),
        "image_urls": list(ex.image_urls),
        "instructions": list(ex.instructions),
        "tips": list(ex.tips),
    }


def dict_to_exercise(data: dict[str, Any]) -> GeneratedExercise:
    try:
        return GeneratedExercise(
            exercise_id=str(data["exercise_id"]),
            exercise_name=str(data.get("exercise_name", data["exercise_id"])),
            muscle_group=str(data.get("muscle_group", "")),
            equipment=str(data.get("equipment", "")),
            sets=int(data["sets"]),
            reps=int(data["reps"]),
            rest_seconds=int(data["rest_seconds"]),
            target_weight=None if data.get("target_weight") is None else float(data["target_weight"]),
            order=int(data["order"]),
            alternate_ids=list(data.get("alternate_ids", [])),
            image_urls=list(data.get("image_urls", [])),
            instructions=list(data.get("instructions", [])),
            tips=list(data.get("tips", [])),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid exercise entry: {e}") from e


def routine_to_dict(routine: GeneratedRoutine) -> dict[str, Any]:
    """
    Convert a GeneratedRoutine to a JSON-compatible dict.

    Args:
        routine: Routine preview to convert

    Returns:
        Nested dict: routine → weeks → days → exercises
    """
    return {
        "name": routine.name,
        "goal": routine.goal,
        "days_per_week": routine.days_per_week,
        "session_duration_min": routine.session_duration_min,
        "fitness_level": routine.fitness_level,
        "available_equipment": list(routine.available_equipment),
        "total_weeks": routine.total_weeks,
        "weeks": [
            {
                "week_number": week.week_number,
                "is_deload": week.is_deload,
                "days": [
                    {
                        "day_number": day.day_number,
                        "focus": day.focus,
                        "is_rest_day": day.is_rest_day,
                        "exercises": [exercise_to_dict(e) for e in day.exercises],
                    }
                    for day in week.days
                ],
            }
            for week in routine.weeks
        ],
    }


def dict_to_routine(data: dict[str, Any]) -> GeneratedRoutine:
    """
    Convert a dict (e.g. a saved preview) back to a GeneratedRoutine.

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    try:
        weeks = [
            GeneratedWeek(
                week_number=int(w["week_number"]),
                is_deload=bool(w["is_deload"]),
                days=[
                    GeneratedDay(
                        day_number=int(d["day_number"]),
                        focus=str(d["focus"]),
                        is_rest_day=bool(d.get("is_rest_day", False)),
                        exercises=[dict_to_exercise(e) for e in d.get("exercises", [])],
                    )
                    for d in w.get("days", [])
                ],
            )
            for w in data.get("weeks", [])
        ]
        return GeneratedRoutine(
            name=str(data["name"]),
            goal=str(data["goal"]),
            days_per_week=int(data["days_per_week"]),
            session_duration_min=int(data["session_duration_min"]),
            fitness_level=str(data["fitness_level"]),
            available_equipment=list(data.get("available_equipment", [])),
            total_weeks=int(data["total_weeks"]),
            weeks=weeks,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid routine data: {e}") from e


def stored_routine_to_dict(stored: StoredRoutine) -> dict[str, Any]:
    """Routine dict plus the storage-owned id, status and timestamps."""
    return {
        "id": stored.id,
        "user_id": stored.user_id,
        "status": stored.status,
        "current_week": stored.current_week,
        "created_at": stored.created_at,
        "updated_at": stored.updated_at,
        **routine_to_dict(stored.routine),
    }


def goal_config_to_dict(cfg: GoalConfig) -> dict[str, Any]:
    return {
        "goal_id": cfg.goal_id,
        "strength_ratio": cfg.strength_ratio,
        "cardio_ratio": cfg.cardio_ratio,
        "preferred_intensity": list(cfg.preferred_intensity),
        "prefer_fun_cardio": cfg.prefer_fun_cardio,
        "compound_priority": cfg.compound_priority,
        "sets_range": list(cfg.sets_range),
        "reps_range": list(cfg.reps_range),
        "rest_range": list(cfg.rest_range),
    }


def routine_to_json(routine: GeneratedRoutine, indent: int | None = 2) -> str:
    """Serialize a routine preview to a JSON string."""
    return json.dumps(routine_to_dict(routine), indent=indent, ensure_ascii=False)
