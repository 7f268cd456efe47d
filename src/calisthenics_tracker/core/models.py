"""
Data models for calisthenics-tracker.

Exercise is handled as a value: policies and store operations return
updated copies (dataclasses.replace) rather than mutating in place.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime

# A completion timestamp is either present (datetime) or absent (None).
# Callers must handle both arms; nothing ever substitutes a sentinel date.
CompletionTimestamp = datetime | None


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Exercise:
    """
    One tracked exercise.

    current_target is a repetition count, or a duration in seconds when
    is_time_based is set.  increment == 0 means the exercise never
    progresses.  last_completed_date is kept after a reset as history of
    the most recent completion.
    """

    name: str
    current_target: int
    increment: int
    max_target: int
    is_time_based: bool
    is_completed: bool = False
    last_completed_date: CompletionTimestamp = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        """Validate exercise data."""
        if self.increment < 0:
            raise ValueError("increment must be non-negative")
        if self.current_target < 0:
            raise ValueError("current_target must be non-negative")
        if self.current_target > self.max_target:
            raise ValueError("current_target must not exceed max_target")
        if self.is_completed and self.last_completed_date is None:
            raise ValueError("a completed exercise must have a last_completed_date")

    @property
    def target_display(self) -> str:
        """Target as shown to the user: M:SS for timed exercises, else the count."""
        if self.is_time_based:
            minutes, seconds = divmod(self.current_target, 60)
            return f"{minutes}:{seconds:02d}"
        return str(self.current_target)

    @property
    def units(self) -> str:
        return "minutes" if self.is_time_based else "reps"

    def mark_completed(self, now: datetime) -> "Exercise":
        """Return a copy marked completed at *now*."""
        return replace(self, is_completed=True, last_completed_date=now)

    def reset_completion_status(self) -> "Exercise":
        """Return a copy with the completion flag cleared; target and timestamp kept."""
        return replace(self, is_completed=False)
