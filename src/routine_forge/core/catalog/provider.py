"""
Exercise catalog providers.

The generator only needs ``all_exercises()``, called once per generation
run.  StaticCatalog wraps an in-memory list (tests, embedding callers);
YamlCatalog loads the bundled + user YAML files on first use and caches
the result.
"""

from pathlib import Path
from typing import Iterable, Protocol, Sequence

from ..models import CatalogExercise
from .loader import load_catalog_from_yaml


class ExerciseCatalog(Protocol):
    """Read-only source of candidate exercises."""

    def all_exercises(self) -> Sequence[CatalogExercise]:
        ...


class StaticCatalog:
    """Catalog backed by a fixed list of exercises."""

    def __init__(self, exercises: Iterable[CatalogExercise]):
        self._exercises = tuple(exercises)

    def all_exercises(self) -> Sequence[CatalogExercise]:
        return self._exercises


class YamlCatalog:
    """Catalog loaded lazily from YAML (bundled file plus user overrides)."""

    def __init__(
        self,
        bundled_path: Path | None = None,
        user_path: Path | None = None,
        include_user: bool = True,
    ):
        self.bundled_path = bundled_path
        self.user_path = user_path
        self.include_user = include_user
        self._by_id: dict[str, CatalogExercise] | None = None

    def _load(self) -> dict[str, CatalogExercise]:
        if self._by_id is None:
            loaded = load_catalog_from_yaml(self.bundled_path, self.user_path, self.include_user)
            if not loaded:
                raise RuntimeError(
                    "routine-forge: no exercises could be loaded from the catalog. "
                    "Check that catalog.yaml is present and valid."
                )
            self._by_id = loaded
        return self._by_id

    def all_exercises(self) -> Sequence[CatalogExercise]:
        return tuple(self._load().values())

    def get(self, exercise_id: str) -> CatalogExercise | None:
        return self._load().get(exercise_id)


def index_by_id(catalog: ExerciseCatalog) -> dict[str, CatalogExercise]:
    """Return {id: exercise} for a catalog snapshot."""
    return {e.id: e for e in catalog.all_exercises()}


def get_exercise(catalog: ExerciseCatalog, exercise_id: str) -> CatalogExercise:
    """
    Look up one exercise by id.

    Raises:
        ValueError: If exercise_id is not in the catalog
    """
    for ex in catalog.all_exercises():
        if ex.id == exercise_id:
            return ex
    raise ValueError(f"Unknown exercise '{exercise_id}'")
