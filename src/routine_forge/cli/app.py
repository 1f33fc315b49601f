"""Shared Typer app object, shared option types, and store/catalog utilities."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.catalog.provider import YamlCatalog
from ..io.routine_store import RoutineStore, get_default_store

DEFAULT_USER_ID = "local"

# Shared --store-path option type used by commands touching saved routines
StorePathOption = Annotated[
    Optional[Path],
    typer.Option("--store-path", "-p", help="Path to the routines JSON store"),
]

# Shared --user option type
UserOption = Annotated[
    str,
    typer.Option("--user", "-u", help="Owner id for saved routines"),
]

app = typer.Typer(
    name="routine-forge",
    help="Procedural multi-week routine generator with progressive overload.",
    no_args_is_help=True,
)


def get_store(store_path: Path | None) -> RoutineStore:
    """Get routine store from path or the default location."""
    if store_path is None:
        return get_default_store()
    return RoutineStore(store_path)


def get_catalog() -> YamlCatalog:
    """Catalog from the bundled YAML plus ~/.routine-forge/catalog.yaml."""
    return YamlCatalog()
