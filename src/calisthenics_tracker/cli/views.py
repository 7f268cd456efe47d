"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of exercise data.
"""

import logging
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..core.models import Exercise

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """
    Send the package's log records to the shared console.

    Args:
        verbose: Show INFO records (scheduling activity); otherwise WARNING and up
    """
    package_logger = logging.getLogger("calisthenics_tracker")
    package_logger.setLevel(logging.INFO if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=console, show_path=False))


def _fmt_last_done(ts: datetime | None) -> str:
    if ts is None:
        return "-"
    return ts.strftime("%b %d %H:%M")


def format_exercise_table(exercises: list[Exercise]) -> Table:
    """
    Create a Rich table displaying today's exercises.

    Args:
        exercises: Exercises in display order

    Returns:
        Rich Table object
    """
    table = Table(title="Today's Exercises")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Done", justify="center")
    table.add_column("Exercise", style="cyan")
    table.add_column("Target", justify="right", style="bold")
    table.add_column("Units", style="magenta")
    table.add_column("Progression", justify="right")
    table.add_column("Last done", style="dim")

    for i, exercise in enumerate(exercises, 1):
        if exercise.increment > 0:
            progression = f"+{exercise.increment} (max {exercise.max_target})"
        else:
            progression = "fixed"

        table.add_row(
            str(i),
            "[green]✓[/green]" if exercise.is_completed else "·",
            exercise.name,
            exercise.target_display,
            exercise.units,
            progression,
            _fmt_last_done(exercise.last_completed_date),
        )

    return table


def print_exercises(exercises: list[Exercise]) -> None:
    """Print the exercise table with a completion summary."""
    console.print(format_exercise_table(exercises))
    done = sum(1 for e in exercises if e.is_completed)
    console.print(f"Completed {done}/{len(exercises)} today.")


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
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
