"""Generation commands: generate (preview and optional save)."""

import json
import random
from pathlib import Path
from typing import Annotated, List, Optional

import typer

from ...core.config import DEFAULT_TOTAL_WEEKS, FITNESS_LEVELS, ROUTINE_WEEK_OPTIONS
from ...core.generator import generate_routine
from ...core.goals import is_known_goal
from ...io.routine_store import StorageError
from ...io.serializers import (
    ValidationError,
    request_from_dict,
    routine_to_json,
    stored_routine_to_dict,
)
from .. import views
from ..app import DEFAULT_USER_ID, StorePathOption, UserOption, app, get_catalog, get_store

_WEEK_CHOICES = ", ".join(str(w) for w in ROUTINE_WEEK_OPTIONS)


def _load_request_file(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"Cannot read request file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError(f"Request file {path} must contain a JSON object")
    return data


@app.command()
def generate(
    goal: Annotated[
        Optional[str],
        typer.Option("--goal", "-g", help="Goal id, e.g. strength, muscle-building, weight-loss"),
    ] = None,
    days: Annotated[
        Optional[int],
        typer.Option("--days", "-d", help="Training days per week (clamped to 2–6)"),
    ] = None,
    duration: Annotated[
        Optional[int],
        typer.Option("--duration", "-m", help="Session duration in minutes (15–120)"),
    ] = None,
    level: Annotated[
        Optional[str],
        typer.Option("--level", "-l", help="Fitness level: beginner, intermediate, advanced"),
    ] = None,
    equipment: Annotated[
        Optional[List[str]],
        typer.Option("--equipment", "-e", help="Available equipment (repeat or comma-separate)"),
    ] = None,
    weeks: Annotated[
        Optional[int],
        typer.Option("--weeks", "-w", help=f"Plan length in weeks (default: {DEFAULT_TOTAL_WEEKS}; typical: {_WEEK_CHOICES})"),
    ] = None,
    request_file: Annotated[
        Optional[Path],
        typer.Option("--request", "-r", help="JSON request file; command-line options override it"),
    ] = None,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for a reproducible plan"),
    ] = None,
    show_weeks: Annotated[
        Optional[int],
        typer.Option("--show-weeks", help="Only print the first N weeks"),
    ] = None,
    save: Annotated[
        bool,
        typer.Option("--save", "-s", help="Persist the generated routine"),
    ] = False,
    user_id: UserOption = DEFAULT_USER_ID,
    store_path: StorePathOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Generate a multi-week routine and show the preview.

    Exercises are picked once per training day and kept for every week;
    sets, reps and rest vary week to week, weight climbs each non-deload
    week and every 4th week is a deload.
    """
    try:
        data = _load_request_file(request_file) if request_file is not None else {}
        overrides = {
            "goal": goal,
            "days_per_week": days,
            "session_duration_min": duration,
            "fitness_level": level,
            "available_equipment": equipment,
            "total_weeks": weeks,
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        request = request_from_dict(data)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not is_known_goal(request.goal) and not json_out:
        views.print_warning(f"Unknown goal '{request.goal}', using general-fitness settings.")
    if request.fitness_level not in FITNESS_LEVELS and not json_out:
        views.print_warning(f"Unknown fitness level '{request.fitness_level}', using beginner progression.")

    rng = random.Random(seed)
    try:
        routine = generate_routine(request, get_catalog(), rng)
    except RuntimeError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    stored = None
    if save:
        store = get_store(store_path)
        try:
            stored = store.persist_routine(routine, user_id)
        except StorageError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    if json_out:
        if stored is not None:
            print(json.dumps(stored_routine_to_dict(stored), indent=2, ensure_ascii=False))
        else:
            print(routine_to_json(routine))
        return

    views.print_routine(routine, weeks=show_weeks)
    if stored is not None:
        views.print_success(f"Saved routine {stored.id} for user '{stored.user_id}'.")
    else:
        views.print_info("Preview only. Re-run with --save to keep it.")
