"""Library commands: saved routines (routines, show, delete), exercises, goals."""

import json
from typing import Annotated, Optional

import typer

from ...core.catalog.loader import exercise_to_dict
from ...core.config import GOAL_CONFIGS
from ...core.templates import resolve_muscle_groups
from ...io.routine_store import StorageError
from ...io.serializers import goal_config_to_dict, stored_routine_to_dict
from .. import views
from ..app import DEFAULT_USER_ID, StorePathOption, UserOption, app, get_catalog, get_store

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]


@app.command("routines")
def list_routines(
    user_id: UserOption = DEFAULT_USER_ID,
    all_users: Annotated[
        bool,
        typer.Option("--all", help="List routines of every user"),
    ] = False,
    store_path: StorePathOption = None,
    json_out: JsonOption = False,
) -> None:
    """List saved routines, newest first."""
    store = get_store(store_path)
    try:
        routines = store.list_routines(None if all_users else user_id)
    except StorageError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps([stored_routine_to_dict(r) for r in routines], indent=2, ensure_ascii=False))
        return

    if not routines:
        views.print_info("No saved routines. Use 'generate --save' to create one.")
        return
    views.console.print(views.format_routines_table(routines))


@app.command()
def show(
    routine_id: Annotated[str, typer.Argument(help="Routine id (see 'routines')")],
    store_path: StorePathOption = None,
    show_weeks: Annotated[
        Optional[int],
        typer.Option("--weeks", "-w", help="Only print the first N weeks"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """Show a saved routine."""
    store = get_store(store_path)
    try:
        stored = store.load_routine(routine_id, catalog=get_catalog())
    except (StorageError, RuntimeError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(stored_routine_to_dict(stored), indent=2, ensure_ascii=False))
        return

    views.print_routine(stored.routine, weeks=show_weeks)
    views.print_stored_header(stored)


@app.command()
def delete(
    routine_id: Annotated[str, typer.Argument(help="Routine id (see 'routines')")],
    user_id: UserOption = DEFAULT_USER_ID,
    store_path: StorePathOption = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the confirmation prompt"),
    ] = False,
) -> None:
    """Delete a saved routine with all its weeks, days and exercises."""
    if not yes and not views.confirm_action(f"Delete routine {routine_id}?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    store = get_store(store_path)
    try:
        deleted = store.delete_routine(routine_id, user_id)
    except StorageError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not deleted:
        views.print_error(f"Routine {routine_id} not found for user '{user_id}'")
        raise typer.Exit(1)
    views.print_success(f"Deleted routine {routine_id}.")


@app.command()
def exercises(
    muscle: Annotated[
        Optional[str],
        typer.Option("--muscle", help="Muscle group or focus label, e.g. 'legs' or 'Push Day'"),
    ] = None,
    equipment: Annotated[
        Optional[str],
        typer.Option("--equipment", "-e", help="Only this equipment type"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """List the exercise catalog."""
    try:
        items = list(get_catalog().all_exercises())
    except RuntimeError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if muscle:
        groups = set(resolve_muscle_groups(muscle))
        items = [
            e for e in items
            if e.muscle_group in groups or any(m in groups for m in e.secondary_muscles)
        ]
    if equipment:
        items = [e for e in items if e.equipment == equipment]

    if json_out:
        print(json.dumps([exercise_to_dict(e) for e in items], indent=2, ensure_ascii=False))
        return
    views.console.print(views.format_catalog_table(items))


@app.command()
def goals(json_out: JsonOption = False) -> None:
    """Show the goal policy table (sets, reps and rest per goal)."""
    if json_out:
        print(json.dumps([goal_config_to_dict(g) for g in GOAL_CONFIGS.values()], indent=2))
        return
    views.console.print(views.format_goals_table(list(GOAL_CONFIGS.values())))
