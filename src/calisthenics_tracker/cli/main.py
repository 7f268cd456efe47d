"""
CLI entry point using Typer.

Provides commands for daily tracking:
- list: Show today's exercises
- complete / uncomplete: Mark an exercise done or not done
- check: Reset exercises completed on an earlier day
- reset-all: Mark every exercise as not done
- reset-progression: Restore default targets
- next-reset: Show when the next daily reset is due
- wake: Deliver due background wake-ups
- watch: Run the reset scheduler in the foreground
"""

from typing import Annotated

import typer

from . import views
from .app import app
from .commands import exercises, reset  # noqa: F401  (registers commands)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log scheduling activity"),
    ] = False,
) -> None:
    """
    Daily calisthenics tracker. Run without a command to list exercises.
    """
    views.configure_logging(verbose)
    if ctx.invoked_subcommand is not None:
        return

    views.console.print()
    views.console.print("[bold cyan]calisthenics-tracker[/bold cyan]")
    views.console.print()
    ctx.invoke(exercises.list_exercises)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
