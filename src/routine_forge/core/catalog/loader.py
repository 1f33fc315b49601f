"""
YAML → CatalogExercise loader.

Loads the exercise catalog from the bundled ``routine_forge/catalog.yaml``.
A user catalog at ``~/.routine-forge/catalog.yaml`` is merged on top: an
entry whose id matches a bundled exercise is deep-merged over it (only the
changed keys need to be listed), any other entry is added as a new
exercise.

Both files share one layout:

    exercises:
      - id: barbell-bench-press
        name: Barbell Bench Press
        muscle_group: chest
        ...
"""

from __future__ import annotations

import importlib.resources
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..engine.config_loader import _deep_merge, get_user_yaml_path
from ..models import CatalogExercise

_REQUIRED_FIELDS: frozenset[str] = frozenset(
    {"id", "name", "muscle_group", "equipment", "difficulty"}
)

_LIST_FIELDS: tuple[str, ...] = (
    "secondary_muscles",
    "tags",
    "alternate_exercise_ids",
    "instructions",
    "tips",
    "image_urls",
)


def _str_tuple(value: Any, name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValueError(f"{name} must be a list, got {type(value).__name__}")
    return tuple(str(v) for v in value)


def exercise_from_dict(d: dict) -> CatalogExercise:
    """Convert a raw dict (from YAML or JSON) to a CatalogExercise.

    Raises ValueError if a required field is absent or a list field is malformed.
    """
    missing = _REQUIRED_FIELDS - set(d)
    if missing:
        raise ValueError(f"exercise missing fields: {sorted(missing)}")

    lists = {name: _str_tuple(d.get(name), name) for name in _LIST_FIELDS}
    return CatalogExercise(
        id=str(d["id"]),
        name=str(d["name"]),
        muscle_group=str(d["muscle_group"]),
        equipment=str(d["equipment"]),
        difficulty=str(d["difficulty"]),
        **lists,
    )


def exercise_to_dict(ex: CatalogExercise) -> dict[str, Any]:
    """Inverse of exercise_from_dict (lists instead of tuples)."""
    return {
        "id": ex.id,
        "name": ex.name,
        "muscle_group": ex.muscle_group,
        "equipment": ex.equipment,
        "difficulty": ex.difficulty,
        **{name: list(getattr(ex, name)) for name in _LIST_FIELDS},
    }


def _read_entries(path: Path) -> list[dict]:
    """Return the raw ``exercises`` list from a catalog file."""
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    entries = data.get("exercises", []) if isinstance(data, dict) else []
    if not isinstance(entries, list):
        raise ValueError(f"{path}: 'exercises' must be a list")
    return [e for e in entries if isinstance(e, dict)]


def get_bundled_catalog_path() -> Path:
    """Return the path of the catalog shipped with the package."""
    ref = importlib.resources.files("routine_forge").joinpath("catalog.yaml")
    return Path(str(ref))


def load_catalog_from_yaml(
    bundled_path: Path | None = None,
    user_path: Path | None = None,
    include_user: bool = True,
) -> dict[str, CatalogExercise]:
    """
    Return {exercise_id: CatalogExercise} in file order.

    Entries that fail validation are skipped with a warning.  A user file
    that cannot be parsed is ignored with a warning; an unreadable bundled
    file propagates its error.
    """
    bundled_path = bundled_path or get_bundled_catalog_path()
    raw: dict[str, dict] = {}
    for entry in _read_entries(bundled_path):
        if "id" in entry:
            raw[str(entry["id"])] = entry

    if user_path is None and include_user:
        user_path = get_user_yaml_path("catalog.yaml")
    if user_path is not None:
        try:
            user_entries = _read_entries(user_path)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            warnings.warn(f"routine-forge: ignoring user catalog {user_path} ({exc})", stacklevel=2)
            user_entries = []
        for entry in user_entries:
            if "id" not in entry:
                continue
            key = str(entry["id"])
            raw[key] = _deep_merge(raw[key], entry) if key in raw else entry

    result: dict[str, CatalogExercise] = {}
    for key, entry in raw.items():
        try:
            result[key] = exercise_from_dict(entry)
        except ValueError as exc:
            warnings.warn(f"routine-forge: skipping exercise {key!r} ({exc})", stacklevel=2)
    return result
