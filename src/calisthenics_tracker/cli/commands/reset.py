"""Reset commands: check, reset-all, reset-progression, next-reset, wake, watch."""

import time
from datetime import datetime
from typing import Annotated

import typer

from ...core.config_loader import load_settings
from .. import views
from ..app import DataDirOption, app, build_scheduler, get_store


@app.command("check")
def check(data_dir: DataDirOption = None) -> None:
    """Reset exercises completed on an earlier day."""
    store, _ = get_store(data_dir)
    # get_store has already run the check; report what is left
    done = sum(1 for e in store.exercises if e.is_completed)
    views.print_success(f"Reset check done. {done} exercise(s) still completed today.")


@app.command("reset-all")
def reset_all(data_dir: DataDirOption = None) -> None:
    """Mark every exercise as not done, regardless of when it was completed."""
    store, _ = get_store(data_dir)
    store.reset_all_exercises()
    if store.save_failed:
        views.print_warning("Reset could not be saved.")
    views.print_success("Today's progress has been reset.")


@app.command("reset-progression")
def reset_progression(
    data_dir: DataDirOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
) -> None:
    """
    Restore all exercises to their starting targets.

    All progression and completion history is discarded.
    """
    store, _ = get_store(data_dir)

    if not force and not views.confirm_action("Discard all progression and start over?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    store.reset_progression()
    if store.save_failed:
        views.print_warning("Reset could not be saved.")
    views.print_success("Progression reset to default targets.")


@app.command("next-reset")
def next_reset(data_dir: DataDirOption = None) -> None:
    """Show when the next daily reset is due."""
    scheduler, _ = build_scheduler(load_settings(data_dir))
    instant = scheduler.next_trigger_instant()
    views.print_info(f"Next daily reset: {instant.strftime('%Y-%m-%d %H:%M')}")


@app.command("wake")
def wake(data_dir: DataDirOption = None) -> None:
    """
    Deliver due background wake-ups.

    Meant to be run periodically by the host (cron, launchd, a login hook).
    Makes sure a wake-up for the next reset is always pending.
    """
    scheduler, facility = build_scheduler(load_settings(data_dir))
    scheduler.register_wakeup_handler()

    try:
        delivered = facility.deliver_due(datetime.now())
    except OSError as e:
        views.print_error(f"Could not read wake-ups: {e}")
        raise typer.Exit(1)

    if scheduler.task_identifier not in facility.pending():
        scheduler.schedule_background_reset()

    if delivered:
        views.print_success(f"Delivered {len(delivered)} wake-up(s).")
    else:
        views.print_info("No wake-ups due.")


@app.command("watch")
def watch(
    data_dir: DataDirOption = None,
    poll_seconds: Annotated[
        float,
        typer.Option("--poll-seconds", help="How often to deliver due wake-ups"),
    ] = 1.0,
) -> None:
    """
    Run the reset scheduler in the foreground until interrupted.
    """
    settings = load_settings(data_dir)
    scheduler, facility = build_scheduler(settings)
    scheduler.start()
    views.print_info(
        f"Watching for the daily reset at {settings.trigger_hour:02d}:00. "
        "Press Ctrl-C to stop."
    )
    try:
        while True:
            try:
                facility.deliver_due(datetime.now())
            except OSError as e:
                views.print_warning(f"Could not deliver wake-ups: {e}")
            time.sleep(poll_seconds)
    except KeyboardInterrupt:
        views.console.print()
    finally:
        scheduler.shutdown()
