"""
Deferred wake-ups that outlive the process.

A DeferredExecutionFacility accepts "wake me at or after this instant"
requests and later delivers each one at most once.  Delivery timing is
best effort.  FileDeferredFacility keeps pending requests in a JSON file in
the data directory, so a request submitted by one process is delivered by
whichever process next calls deliver_due() (typically ``calisthenics-tracker
wake`` run from cron or a login hook).
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Protocol

from filelock import FileLock

from ..core.reset_policy import to_local_naive
from ..io.persistence import write_atomic

logger = logging.getLogger(__name__)

WakeupHandler = Callable[[], None]


class SchedulingError(Exception):
    """Raised when a wake-up request cannot be registered."""

    pass


class DeferredExecutionFacility(Protocol):
    """Host-provided deferred execution."""

    def register_handler(self, identifier: str, handler: WakeupHandler) -> None: ...

    def submit(self, identifier: str, earliest: datetime) -> None: ...


class FileDeferredFacility:
    """
    Deferred wake-ups persisted as ``{identifier: iso_instant}`` JSON.

    Submitting again for an identifier replaces its pending request, so there
    is never more than one pending wake-up per identifier.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the facility.

        Args:
            path: JSON file holding pending requests
        """
        self.path = Path(path)
        self._handlers: dict[str, WakeupHandler] = {}
        self._lock = FileLock(str(self.path.with_name(self.path.name + ".lock")))

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Discarding unreadable wake-up file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, pending: dict[str, str]) -> None:
        write_atomic(self.path, json.dumps(pending, indent=2).encode("utf-8"))

    def _locked(self) -> FileLock:
        # Held for every read-modify-write; excludes other processes too
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return self._lock

    def register_handler(self, identifier: str, handler: WakeupHandler) -> None:
        """Route deliveries for *identifier* to *handler* in this process."""
        self._handlers[identifier] = handler

    def submit(self, identifier: str, earliest: datetime) -> None:
        """
        Request a wake-up at or after *earliest*.

        Raises:
            SchedulingError: If the request cannot be stored
        """
        try:
            with self._locked():
                pending = self._read()
                pending[identifier] = earliest.isoformat()
                self._write(pending)
        except OSError as e:
            raise SchedulingError(f"Could not store wake-up request: {e}") from e

    def pending(self) -> dict[str, datetime]:
        """Return pending requests by identifier."""
        result: dict[str, datetime] = {}
        for identifier, raw in self._read().items():
            try:
                result[identifier] = datetime.fromisoformat(raw)
            except ValueError:
                logger.warning("Ignoring malformed wake-up %s=%r", identifier, raw)
        return result

    def deliver_due(self, now: datetime) -> list[str]:
        """
        Fire every due request that has a handler in this process.

        Each request is removed before its handler runs, so it is delivered
        at most once even if the handler fails.  Requests without a handler
        stay pending.

        Returns:
            Identifiers that were delivered
        """
        local_now = to_local_naive(now)
        with self._locked():
            due = [
                identifier
                for identifier, earliest in self.pending().items()
                if to_local_naive(earliest) <= local_now and identifier in self._handlers
            ]
            if due:
                remaining = self._read()
                for identifier in due:
                    remaining.pop(identifier, None)
                self._write(remaining)

        for identifier in due:
            self._handlers[identifier]()
        return due
