"""
Shared fixtures.

ROUTINE_FORGE_HOME is pointed at an empty temp directory before any
routine_forge import so a developer's ~/.routine-forge config or catalog
never leaks into the tests.
"""

import os
import random
import tempfile

_HOME = tempfile.mkdtemp(prefix="routine-forge-test-home-")
os.environ["ROUTINE_FORGE_HOME"] = _HOME

import pytest  # noqa: E402

from routine_forge.core.catalog.provider import StaticCatalog, YamlCatalog  # noqa: E402
from routine_forge.core.models import CatalogExercise, GenerationRequest  # noqa: E402


def make_exercise(
    ex_id: str,
    muscle_group: str,
    equipment: str = "bodyweight",
    difficulty: str = "beginner",
    secondary: tuple[str, ...] = (),
    tags: tuple[str, ...] = (),
) -> CatalogExercise:
    """Build a minimal CatalogExercise for testing."""
    return CatalogExercise(
        id=ex_id,
        name=ex_id.replace("-", " ").title(),
        muscle_group=muscle_group,
        equipment=equipment,
        difficulty=difficulty,
        secondary_muscles=secondary,
        tags=tags,
        alternate_exercise_ids=(f"{ex_id}-alt",),
    )


def make_request(**overrides) -> GenerationRequest:
    """Build a GenerationRequest with sensible defaults."""
    fields = dict(
        goal="general-fitness",
        days_per_week=3,
        session_duration_min=60,
        fitness_level="intermediate",
        available_equipment=[],
        total_weeks=4,
    )
    fields.update(overrides)
    return GenerationRequest(**fields)


@pytest.fixture(scope="session")
def bundled_catalog() -> YamlCatalog:
    """The catalog shipped with the package (no user overrides)."""
    return YamlCatalog(include_user=False)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def small_catalog() -> StaticCatalog:
    """A hand-made catalog covering every muscle group."""
    return StaticCatalog([
        make_exercise("bench", "chest", "barbell", "intermediate", ("shoulders", "arms"), ("compound",)),
        make_exercise("push-up", "chest", "bodyweight", "beginner", ("arms",), ("compound",)),
        make_exercise("fly", "chest", "cable", "beginner", (), ("isolation",)),
        make_exercise("row", "back", "barbell", "intermediate", ("arms",), ("compound",)),
        make_exercise("pull-up", "back", "bodyweight", "advanced", ("arms",), ("compound",)),
        make_exercise("ohp", "shoulders", "barbell", "intermediate", ("arms",), ("compound",)),
        make_exercise("raise", "shoulders", "dumbbell", "beginner", (), ("isolation",)),
        make_exercise("curl", "arms", "dumbbell", "beginner"),
        make_exercise("pushdown", "arms", "cable", "beginner"),
        make_exercise("squat", "legs", "barbell", "intermediate", ("glutes",), ("compound",)),
        make_exercise("lunge", "legs", "bodyweight", "beginner", ("glutes",), ("compound",)),
        make_exercise("leg-curl", "legs", "machine", "beginner"),
        make_exercise("bridge", "glutes", "bodyweight", "beginner", ("legs",)),
        make_exercise("plank", "core", "none", "beginner"),
        make_exercise("burpee", "full-body", "bodyweight", "beginner", ("chest", "legs"), ("compound",)),
        make_exercise("snatch", "full-body", "barbell", "advanced", ("legs", "back"), ("compound",)),
    ])
