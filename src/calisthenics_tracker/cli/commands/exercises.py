"""Exercise commands: list, complete, uncomplete."""

from typing import Annotated

import typer

from ...core.store import ExerciseStore
from .. import views
from ..app import DataDirOption, app, get_store

ExerciseNumber = Annotated[
    int,
    typer.Argument(help="Exercise number (see # column in 'list')"),
]


def _resolve_index(store: ExerciseStore, number: int) -> int:
    """Convert a 1-based exercise number to an index, exiting on bad input."""
    if number < 1 or number > len(store):
        views.print_error(f"Exercise number must be between 1 and {len(store)}")
        raise typer.Exit(1)
    return number - 1


def _warn_if_unsaved(store: ExerciseStore) -> None:
    if store.save_failed:
        views.print_warning("Changes could not be saved; they will be retried on the next change.")


@app.command("list")
def list_exercises(data_dir: DataDirOption = None) -> None:
    """Show today's exercises and their targets."""
    store, _ = get_store(data_dir)
    _warn_if_unsaved(store)
    views.print_exercises(store.exercises)


@app.command("complete")
def complete(number: ExerciseNumber, data_dir: DataDirOption = None) -> None:
    """Mark an exercise done for today and raise its target."""
    store, _ = get_store(data_dir)
    index = _resolve_index(store, number)

    before = store[index]
    if before.is_completed:
        views.print_info(f"{before.name} is already done today.")
        return

    store.complete_exercise(index)
    after = store[index]
    _warn_if_unsaved(store)

    views.print_success(f"Completed {after.name}: {before.target_display} {before.units}.")
    if after.current_target != before.current_target:
        views.print_info(f"Next target: {after.target_display} {after.units}")


@app.command("uncomplete")
def uncomplete(number: ExerciseNumber, data_dir: DataDirOption = None) -> None:
    """
    Mark an exercise as not done (correction).

    Its target is not lowered.
    """
    store, _ = get_store(data_dir)
    index = _resolve_index(store, number)

    store.uncomplete_exercise(index)
    _warn_if_unsaved(store)
    views.print_success(f"{store[index].name} marked as not done.")
