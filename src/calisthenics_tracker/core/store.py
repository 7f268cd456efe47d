"""
In-memory exercise collection used by the interactive surface.

ExerciseStore is the live source of truth while the process is active.
Every mutating call writes the whole collection back through the
PersistenceGateway.  Out-of-range indices are ignored, and storage
failures never escape: save_failed reports whether the latest write was
rejected, and the next successful save persists the current state.
"""

from datetime import datetime
from typing import Callable

from ..io.persistence import PersistenceGateway
from .config import TRIGGER_HOUR
from .defaults import create_default_exercises
from .models import Exercise
from .progression import advance
from .reset_policy import apply_reset_policy


class ExerciseStore:
    """Ordered collection of exercises, mirrored to storage after every change."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        clock: Callable[[], datetime] = datetime.now,
        trigger_hour: int = TRIGGER_HOUR,
    ):
        """
        Load the saved collection, falling back to the default definitions.

        Args:
            gateway: Persistence gateway for the collection
            clock: Source of "now" for completions and reset checks
            trigger_hour: Configured daily reset hour
        """
        self.gateway = gateway
        self.clock = clock
        self.trigger_hour = trigger_hour
        self.save_failed = False

        loaded = gateway.load()
        self._exercises: list[Exercise] = (
            loaded if loaded is not None else create_default_exercises()
        )

    @property
    def exercises(self) -> list[Exercise]:
        return list(self._exercises)

    def __len__(self) -> int:
        return len(self._exercises)

    def __getitem__(self, index: int) -> Exercise:
        return self._exercises[index]

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._exercises)

    def _save(self) -> None:
        self.save_failed = not self.gateway.save(self._exercises)

    def complete_exercise(self, index: int) -> None:
        """Mark the exercise completed now and advance its target."""
        if not self._in_range(index):
            return
        self._exercises[index] = advance(self._exercises[index].mark_completed(self.clock()))
        self._save()

    def uncomplete_exercise(self, index: int) -> None:
        """
        Clear the completion flag (manual correction).

        Target and last completion timestamp are left as they are.
        """
        if not self._in_range(index):
            return
        self._exercises[index] = self._exercises[index].reset_completion_status()
        self._save()

    def reset_exercises_if_needed(self, now: datetime | None = None) -> int:
        """
        Clear exercises completed on an earlier calendar day.

        Saves only when something changed.

        Returns:
            Number of exercises cleared
        """
        if now is None:
            now = self.clock()
        updated, cleared = apply_reset_policy(self._exercises, now, self.trigger_hour)
        if cleared:
            self._exercises = updated
            self._save()
        return cleared

    def reset_all_exercises(self) -> None:
        """Clear the completion flag on every exercise regardless of date."""
        self._exercises = [e.reset_completion_status() for e in self._exercises]
        self._save()

    def reset_progression(self) -> None:
        """Replace the collection with fresh default definitions."""
        self._exercises = create_default_exercises()
        self._save()
