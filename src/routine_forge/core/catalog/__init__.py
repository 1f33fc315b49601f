"""
Exercise catalog for routine-forge.

The catalog is read-only input to the generator: a list of
CatalogExercise records loaded from YAML or supplied in memory.
"""

from .loader import exercise_from_dict, exercise_to_dict, load_catalog_from_yaml
from .provider import ExerciseCatalog, StaticCatalog, YamlCatalog, get_exercise, index_by_id

__all__ = [
    "ExerciseCatalog",
    "StaticCatalog",
    "YamlCatalog",
    "exercise_from_dict",
    "exercise_to_dict",
    "get_exercise",
    "index_by_id",
    "load_catalog_from_yaml",
]
