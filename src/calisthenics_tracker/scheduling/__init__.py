"""
Daily reset scheduling.

ResetScheduler combines a foreground recurring check with host-level
deferred wake-ups; both feed the same reset pass.
"""

from .deferred import DeferredExecutionFacility, FileDeferredFacility, SchedulingError
from .notify import ConsoleNotifier, Notifier, RecordingNotifier
from .scheduler import ResetScheduler

__all__ = [
    "ConsoleNotifier",
    "DeferredExecutionFacility",
    "FileDeferredFacility",
    "Notifier",
    "RecordingNotifier",
    "ResetScheduler",
    "SchedulingError",
]
