"""
CLI entry point using Typer.

Provides commands for routine generation and management:
- generate: Generate a routine preview (optionally --save it)
- routines: List saved routines
- show: Display a saved routine
- delete: Delete a saved routine
- exercises: Browse the exercise catalog
- goals: Show the goal policy table
"""

from .app import app
from .commands import generation, library  # noqa: F401  (registers commands)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
