"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of routines, catalog and goals.
"""

from typing import Sequence

from rich.console import Console
from rich.table import Table

from ..core.models import CatalogExercise, GeneratedRoutine, GeneratedWeek, GoalConfig, StoredRoutine

console = Console()


def _fmt_weight(weight: float | None) -> str:
    if weight is None:
        return "-"
    return f"+{weight:g} lb"


def _fmt_rest(seconds: int) -> str:
    if seconds >= 60 and seconds % 60 == 0:
        return f"{seconds // 60}m"
    if seconds >= 60:
        return f"{seconds // 60}m{seconds % 60:02d}s"
    return f"{seconds}s"


def format_week_table(week: GeneratedWeek) -> Table:
    """
    Create a Rich table for one week.

    Args:
        week: Week to format

    Returns:
        Rich Table with one row per exercise, grouped by day
    """
    title = f"Week {week.week_number}"
    if week.is_deload:
        title += " [yellow](deload)[/yellow]"

    table = Table(title=title, title_justify="left")
    table.add_column("Day", justify="right", style="cyan")
    table.add_column("Focus", style="magenta")
    table.add_column("#", justify="right")
    table.add_column("Exercise")
    table.add_column("Sets×Reps", justify="center")
    table.add_column("Rest", justify="right")
    table.add_column("Weight", justify="right", style="green")

    for day in week.days:
        for i, ex in enumerate(day.exercises):
            table.add_row(
                str(day.day_number) if i == 0 else "",
                day.focus if i == 0 else "",
                str(ex.order),
                ex.exercise_name,
                f"{ex.sets}×{ex.reps}",
                _fmt_rest(ex.rest_seconds),
                _fmt_weight(ex.target_weight),
            )
        table.add_section()

    return table


def print_routine(routine: GeneratedRoutine, weeks: int | None = None) -> None:
    """
    Print a routine header and its week tables.

    Args:
        routine: Routine to show
        weeks: Only show the first N weeks (all when None)
    """
    equipment = ", ".join(routine.available_equipment) or "any"
    console.print()
    console.print(f"[bold cyan]{routine.name}[/bold cyan]")
    console.print(
        f"Goal: {routine.goal} | Level: {routine.fitness_level} | "
        f"{routine.days_per_week} days/week | {routine.session_duration_min} min | "
        f"{routine.total_weeks} weeks"
    )
    console.print(f"Equipment: {equipment}")
    console.print()

    for week in routine.weeks[: weeks or None]:
        console.print(format_week_table(week))
        console.print()


def print_stored_header(stored: StoredRoutine) -> None:
    console.print(
        f"[dim]id {stored.id} · {stored.status} · week {stored.current_week} · "
        f"created {stored.created_at}[/dim]"
    )


def format_routines_table(routines: Sequence[StoredRoutine]) -> Table:
    """Create a Rich table listing stored routines."""
    table = Table(title="Saved Routines")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    table.add_column("Weeks", justify="right")
    table.add_column("Created")

    for stored in routines:
        table.add_row(
            stored.id,
            stored.routine.name,
            stored.status,
            str(stored.routine.total_weeks),
            stored.created_at,
        )
    return table


def format_catalog_table(exercises: Sequence[CatalogExercise]) -> Table:
    """Create a Rich table listing catalog exercises."""
    table = Table(title=f"Exercise Catalog ({len(exercises)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Muscle")
    table.add_column("Equipment")
    table.add_column("Difficulty")
    table.add_column("Tags")

    for ex in exercises:
        table.add_row(ex.id, ex.name, ex.muscle_group, ex.equipment, ex.difficulty, ", ".join(ex.tags))
    return table


def format_goals_table(goals: Sequence[GoalConfig]) -> Table:
    """Create a Rich table of the goal policy table."""
    table = Table(title="Goal Policies")
    table.add_column("Goal", style="cyan")
    table.add_column("Strength", justify="right")
    table.add_column("Sets", justify="center")
    table.add_column("Reps", justify="center")
    table.add_column("Rest (s)", justify="center")
    table.add_column("Compounds first", justify="center")

    for g in goals:
        table.add_row(
            g.goal_id,
            f"{g.strength_ratio:.0%}",
            f"{g.sets_range[0]}–{g.sets_range[1]}",
            f"{g.reps_range[0]}–{g.reps_range[1]}",
            f"{g.rest_range[0]}–{g.rest_range[1]}",
            "yes" if g.compound_priority else "no",
        )
    return table


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """Ask for y/N confirmation."""
    response = console.input(f"{message} [y/N]: ")
    return response.strip().lower() in ("y", "yes")
