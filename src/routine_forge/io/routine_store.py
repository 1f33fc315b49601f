"""
JSON-based routine storage.

Persists generated routines as a normalized row tree in one JSON file:

    {
      "routines":          [{id, user_id, name, goal, status, ...}],
      "routine_weeks":     [{id, routine_id, week_number, is_deload}],
      "routine_days":      [{id, week_id, day_number, focus, ...}],
      "routine_exercises": [{id, day_id, exercise_id, order, sets, ...}]
    }

Every write builds the complete new table set in memory and swaps it in
with a single atomic file replace, so readers never see a routine with
only some of its weeks, days or exercises.
"""

import json
import os
import tempfile
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..core.catalog.provider import ExerciseCatalog, index_by_id
from ..core.engine.config_loader import get_app_home
from ..core.models import (
    GeneratedDay,
    GeneratedExercise,
    GeneratedRoutine,
    GeneratedWeek,
    StoredRoutine,
)

TABLES: tuple[str, ...] = ("routines", "routine_weeks", "routine_days", "routine_exercises")


class StorageError(Exception):
    """Raised when the routine store cannot be read or written."""

    pass


class RoutineNotFoundError(StorageError):
    """Raised when a routine id is not present in the store."""

    pass


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _new_id() -> str:
    return str(uuid.uuid4())


def build_rows(
    routine: GeneratedRoutine,
    user_id: str,
    routine_id: str | None = None,
    timestamp: str | None = None,
) -> dict[str, list[dict[str, Any]]]:
    """
    Flatten a routine preview into rows for the four tables.

    Rows are emitted in week/day/exercise order; ordering fields
    (week_number, day_number, order) are copied from the preview unchanged.
    """
    routine_id = routine_id or _new_id()
    timestamp = timestamp or _now_iso()
    rows: dict[str, list[dict[str, Any]]] = {t: [] for t in TABLES}

    rows["routines"].append({
        "id": routine_id,
        "user_id": user_id,
        "name": routine.name,
        "goal": routine.goal,
        "status": "active",
        "days_per_week": routine.days_per_week,
        "session_duration_min": routine.session_duration_min,
        "fitness_level": routine.fitness_level,
        "available_equipment": list(routine.available_equipment),
        "total_weeks": routine.total_weeks,
        "current_week": 1,
        "created_at": timestamp,
        "updated_at": timestamp,
    })

    for week in routine.weeks:
        week_id = _new_id()
        rows["routine_weeks"].append({
            "id": week_id,
            "routine_id": routine_id,
            "week_number": week.week_number,
            "is_deload": week.is_deload,
        })
        for day in week.days:
            day_id = _new_id()
            rows["routine_days"].append({
                "id": day_id,
                "week_id": week_id,
                "day_number": day.day_number,
                "focus": day.focus,
                "is_rest_day": day.is_rest_day,
                "completed": False,
                "completed_at": None,
            })
            for ex in day.exercises:
                rows["routine_exercises"].append({
                    "id": _new_id(),
                    "day_id": day_id,
                    "exercise_id": ex.exercise_id,
                    "order": ex.order,
                    "sets": ex.sets,
                    "reps": ex.reps,
                    "rest_seconds": ex.rest_seconds,
                    "target_weight": ex.target_weight,
                    "alternate_ids": list(ex.alternate_ids),
                })

    return rows


class RoutineStore:
    """
    Manages persisted routines stored as normalized JSON tables.

    A missing file reads as an empty store; it is created on first write.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the routine store.

        Args:
            path: Path to the JSON store file
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def exists(self) -> bool:
        """Check if the store file exists."""
        return self.path.exists()

    def _read_tables(self) -> dict[str, list[dict[str, Any]]]:
        if not self.path.exists():
            return {t: [] for t in TABLES}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read routine store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Corrupt routine store {self.path}: top level is not an object")
        return {t: list(data.get(t, [])) for t in TABLES}

    def _write_tables(self, tables: dict[str, list[dict[str, Any]]]) -> None:
        """Write all tables via a temp file and an atomic rename."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".routines-", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(tables, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def persist_routine(self, routine: GeneratedRoutine, user_id: str) -> StoredRoutine:
        """
        Store a routine preview for a user.

        The preview is not modified, so on failure the caller can retry
        with the same object.

        Args:
            routine: Generated routine preview
            user_id: Owning user

        Returns:
            The stored routine with its new id, status and timestamps

        Raises:
            StorageError: If any part of the write fails; the store file is
                left exactly as it was
        """
        if not user_id:
            raise StorageError("user_id is required to persist a routine")

        with self._lock:
            tables = self._read_tables()
            try:
                rows = build_rows(routine, user_id)
                for table in TABLES:
                    tables[table].extend(rows[table])
                self._write_tables(tables)
            except (OSError, TypeError, ValueError) as e:
                raise StorageError(f"Failed to persist routine {routine.name!r}: {e}") from e

        row = rows["routines"][0]
        return StoredRoutine(
            id=row["id"],
            user_id=user_id,
            status=row["status"],
            current_week=row["current_week"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            routine=routine,
        )

    def load_routine(self, routine_id: str, catalog: ExerciseCatalog | None = None) -> StoredRoutine:
        """
        Load one routine and rebuild its week → day → exercise tree.

        Args:
            routine_id: Id returned by persist_routine
            catalog: Optional catalog used to fill exercise names and details

        Raises:
            RoutineNotFoundError: If the id is unknown
        """
        tables = self._read_tables()
        return self._assemble(tables, routine_id, catalog)

    def list_routines(self, user_id: str | None = None) -> list[StoredRoutine]:
        """Return routines (optionally for one user), newest first."""
        tables = self._read_tables()
        # Rows are appended in creation order; the index breaks timestamp ties.
        rows = [
            (r.get("created_at", ""), idx, r["id"])
            for idx, r in enumerate(tables["routines"])
            if user_id is None or r.get("user_id") == user_id
        ]
        rows.sort(reverse=True)
        return [self._assemble(tables, routine_id, None) for _, _, routine_id in rows]

    def delete_routine(self, routine_id: str, user_id: str | None = None) -> bool:
        """
        Delete a routine and all its weeks, days and exercises.

        Args:
            routine_id: Routine to delete
            user_id: When given, only delete if the routine belongs to this user

        Returns:
            True if a routine was deleted
        """
        with self._lock:
            tables = self._read_tables()
            match = [
                r for r in tables["routines"]
                if r["id"] == routine_id and (user_id is None or r.get("user_id") == user_id)
            ]
            if not match:
                return False

            week_ids = {w["id"] for w in tables["routine_weeks"] if w["routine_id"] == routine_id}
            day_ids = {d["id"] for d in tables["routine_days"] if d["week_id"] in week_ids}
            tables["routines"] = [r for r in tables["routines"] if r["id"] != routine_id]
            tables["routine_weeks"] = [w for w in tables["routine_weeks"] if w["id"] not in week_ids]
            tables["routine_days"] = [d for d in tables["routine_days"] if d["id"] not in day_ids]
            tables["routine_exercises"] = [
                e for e in tables["routine_exercises"] if e["day_id"] not in day_ids
            ]
            try:
                self._write_tables(tables)
            except OSError as e:
                raise StorageError(f"Failed to delete routine {routine_id}: {e}") from e
        return True

    def _assemble(
        self,
        tables: dict[str, list[dict[str, Any]]],
        routine_id: str,
        catalog: ExerciseCatalog | None,
    ) -> StoredRoutine:
        row = next((r for r in tables["routines"] if r["id"] == routine_id), None)
        if row is None:
            raise RoutineNotFoundError(f"Routine {routine_id} not found")

        details = index_by_id(catalog) if catalog is not None else {}

        week_rows = sorted(
            (w for w in tables["routine_weeks"] if w["routine_id"] == routine_id),
            key=lambda w: w["week_number"],
        )
        weeks: list[GeneratedWeek] = []
        for w in week_rows:
            day_rows = sorted(
                (d for d in tables["routine_days"] if d["week_id"] == w["id"]),
                key=lambda d: d["day_number"],
            )
            days: list[GeneratedDay] = []
            for d in day_rows:
                ex_rows = sorted(
                    (e for e in tables["routine_exercises"] if e["day_id"] == d["id"]),
                    key=lambda e: e["order"],
                )
                exercises = []
                for e in ex_rows:
                    info = details.get(e["exercise_id"])
                    exercises.append(GeneratedExercise(
                        exercise_id=e["exercise_id"],
                        exercise_name=info.name if info else e["exercise_id"],
                        muscle_group=info.muscle_group if info else "",
                        equipment=info.equipment if info else "",
                        sets=e["sets"],
                        reps=e["reps"],
                        rest_seconds=e["rest_seconds"],
                        target_weight=e["target_weight"],
                        order=e["order"],
                        alternate_ids=list(e.get("alternate_ids", [])),
                        image_urls=list(info.image_urls) if info else [],
                        instructions=list(info.instructions) if info else [],
                        tips=list(info.tips) if info else [],
                    ))
                days.append(GeneratedDay(
                    day_number=d["day_number"],
                    focus=d["focus"],
                    is_rest_day=d.get("is_rest_day", False),
                    exercises=exercises,
                ))
            weeks.append(GeneratedWeek(week_number=w["week_number"], is_deload=w["is_deload"], days=days))

        routine = GeneratedRoutine(
            name=row["name"],
            goal=row["goal"],
            days_per_week=row["days_per_week"],
            session_duration_min=row["session_duration_min"],
            fitness_level=row["fitness_level"],
            available_equipment=list(row.get("available_equipment", [])),
            total_weeks=row["total_weeks"],
            weeks=weeks,
        )
        return StoredRoutine(
            id=row["id"],
            user_id=row["user_id"],
            status=row.get("status", "active"),
            current_week=row.get("current_week", 1),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            routine=routine,
        )


def get_default_store_path() -> Path:
    """Return the default store location (~/.routine-forge/routines.json)."""
    return get_app_home() / "routines.json"


def get_default_store() -> RoutineStore:
    """
    Get a RoutineStore with the default path.

    Returns:
        RoutineStore instance
    """
    return RoutineStore(get_default_store_path())
