"""
Daily reset scheduling.

Two independent triggers feed the same reset pass:

- a recurring foreground check (every check_interval seconds while the
  process runs) that runs the pass when the local hour equals the trigger
  hour;
- a deferred wake-up registered with the host facility for the next
  trigger instant, re-registered first thing on every delivery.

Either may be late, missed, or fire redundantly; the reset policy compares
calendar days, so a redundant pass changes nothing and a missed one is
made up by the next.

The pass works on a fresh snapshot loaded from storage, never on the live
ExerciseStore, and holds the gateway transaction for its whole
load-modify-save sequence.
"""

import logging
import threading
from datetime import datetime
from typing import Callable

from ..core.config import (
    CHECK_INTERVAL_SECONDS,
    RESET_NOTIFICATION_BODY,
    RESET_NOTIFICATION_TITLE,
    RESET_TASK_IDENTIFIER,
    TRIGGER_HOUR,
)
from ..core.reset_policy import apply_reset_policy, next_trigger_instant
from ..io.persistence import PersistenceGateway
from .deferred import DeferredExecutionFacility, SchedulingError
from .notify import Notifier

logger = logging.getLogger(__name__)


class ResetScheduler:
    """
    Triggers the daily reset while the process is running and while it is not.

    Build exactly one per process and hand it to whatever needs it.  The
    deferred wake-up identifier and the stored collection are shared,
    process-external resources; a second scheduler in the same process would
    register a competing handler and run duplicate passes.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        facility: DeferredExecutionFacility,
        notifier: Notifier,
        trigger_hour: int = TRIGGER_HOUR,
        check_interval: float = CHECK_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
        task_identifier: str = RESET_TASK_IDENTIFIER,
    ):
        if not 0 <= trigger_hour <= 23:
            raise ValueError(f"trigger_hour must be in 0..23, got {trigger_hour}")
        if check_interval <= 0:
            raise ValueError("check_interval must be positive")
        self.gateway = gateway
        self.facility = facility
        self.notifier = notifier
        self.trigger_hour = trigger_hour
        self.check_interval = check_interval
        self.clock = clock
        self.task_identifier = task_identifier

        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    # ── lifecycle ───────────────────────────────────────────────────────────

    def start(self) -> None:
        """Register the wake-up handler, schedule the next wake-up, start the foreground check."""
        self.register_wakeup_handler()
        self.schedule_background_reset()

        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="reset-scheduler", daemon=True
        )
        self._thread.start()

    def shutdown(self, timeout: float | None = None) -> None:
        """
        Stop the recurring check.

        Pending deferred wake-ups belong to the host and are left in place.
        """
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        # Check immediately, then once per interval until shutdown.
        while True:
            try:
                self.check_for_reset()
            except Exception:
                logger.exception("Foreground reset check failed")
            if self._stop.wait(self.check_interval):
                break

    # ── triggers ────────────────────────────────────────────────────────────

    def register_wakeup_handler(self) -> None:
        """Route deferred deliveries for this scheduler's identifier to handle_wakeup."""
        self.facility.register_handler(self.task_identifier, self.handle_wakeup)

    def check_for_reset(self, now: datetime | None = None) -> bool:
        """
        Foreground check: run the reset pass if the local hour is the trigger hour.

        Returns:
            True if the pass ran
        """
        if now is None:
            now = self.clock()
        if now.hour != self.trigger_hour:
            return False
        self.perform_daily_reset(now)
        return True

    def handle_wakeup(self) -> None:
        """Deferred wake-up delivery: schedule the next one, then run the pass."""
        self.schedule_background_reset()
        try:
            self.perform_daily_reset()
        except Exception:
            logger.exception("Background reset pass failed")

    def schedule_background_reset(self, now: datetime | None = None) -> datetime | None:
        """
        Register a wake-up for the next trigger instant.

        Returns:
            The requested instant, or None if registration failed
        """
        instant = self.next_trigger_instant(now)
        try:
            self.facility.submit(self.task_identifier, instant)
        except (SchedulingError, OSError) as e:
            logger.warning("Could not schedule background reset: %s", e)
            return None
        logger.info("Background reset scheduled for %s", instant.isoformat())
        return instant

    def next_trigger_instant(self, now: datetime | None = None) -> datetime:
        if now is None:
            now = self.clock()
        return next_trigger_instant(now, self.trigger_hour)

    # ── reset passes ────────────────────────────────────────────────────────

    def perform_daily_reset(self, now: datetime | None = None) -> int:
        """
        Load the stored collection, clear exercises completed on an earlier
        day, and save if anything changed.

        A notification is sent only when at least one exercise was cleared.

        Returns:
            Number of exercises cleared (0 if nothing is stored)
        """
        if now is None:
            now = self.clock()

        with self.gateway.transaction():
            exercises = self.gateway.load()
            if exercises is None:
                return 0
            updated, cleared = apply_reset_policy(exercises, now, self.trigger_hour)
            if not cleared:
                return 0
            self.gateway.save(updated)

        logger.info("Daily reset cleared %d exercise(s)", cleared)
        self.notifier.notify(RESET_NOTIFICATION_TITLE, RESET_NOTIFICATION_BODY)
        return cleared

    def manual_reset(self) -> int:
        """
        Clear every stored exercise's completion flag, ignoring dates.

        Returns:
            Number of exercises in the stored collection (0 if nothing is stored)
        """
        with self.gateway.transaction():
            exercises = self.gateway.load()
            if exercises is None:
                return 0
            self.gateway.save([e.reset_completion_status() for e in exercises])
        logger.info("Manual reset applied to %d exercise(s)", len(exercises))
        return len(exercises)
