"""Shared Typer app object, shared option types, and service wiring."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.config import DATA_DIR_ENVVAR, WAKEUPS_FILENAME
from ..core.config_loader import Settings, load_settings
from ..core.store import ExerciseStore
from ..io.persistence import FileBlobStore, PersistenceGateway
from ..scheduling import ConsoleNotifier, FileDeferredFacility, ResetScheduler
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option(
        "--data-dir",
        "-d",
        envvar=DATA_DIR_ENVVAR,
        help="Directory holding saved exercises and wake-ups",
    ),
]

app = typer.Typer(
    name="calisthenics-tracker",
    help="Daily calisthenics tracker with progressive targets and a 4 AM reset.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_gateway(settings: Settings) -> PersistenceGateway:
    """Persistence gateway over the settings' data directory."""
    return PersistenceGateway(FileBlobStore(settings.data_dir))


def get_store(data_dir: Path | None) -> tuple[ExerciseStore, Settings]:
    """
    Open the exercise store for the data directory (default location if None).

    Like an app coming to the foreground, opening the store first clears
    exercises completed on an earlier day.
    """
    settings = load_settings(data_dir)
    store = ExerciseStore(get_gateway(settings), trigger_hour=settings.trigger_hour)
    store.reset_exercises_if_needed()
    return store, settings


def build_scheduler(settings: Settings) -> tuple[ResetScheduler, FileDeferredFacility]:
    """Construct the process's single ResetScheduler and its wake-up facility."""
    facility = FileDeferredFacility(settings.data_dir / WAKEUPS_FILENAME)
    scheduler = ResetScheduler(
        gateway=get_gateway(settings),
        facility=facility,
        notifier=ConsoleNotifier(views.console),
        trigger_hour=settings.trigger_hour,
        check_interval=settings.check_interval_seconds,
    )
    return scheduler, facility
