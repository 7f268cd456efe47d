"""
Daily reset policy.

A completed exercise becomes "not done" again once the local calendar day
has moved on since its last completion.  The decision compares calendar
days only; the trigger hour decides when the scheduler bothers to check,
never whether a boundary was crossed.  Because of that, checking late,
twice, or after sleeping through several midnights all give the same
result, and a cleared exercise is never cleared again.
"""

from datetime import date, datetime, timedelta

from .config import TRIGGER_HOUR
from .models import CompletionTimestamp, Exercise


def _validate_hour(trigger_hour: int) -> int:
    if not 0 <= trigger_hour <= 23:
        raise ValueError(f"trigger_hour must be in 0..23, got {trigger_hour}")
    return trigger_hour


def to_local_naive(ts: datetime) -> datetime:
    """Aware datetimes converted to naive local time; naive ones returned as is."""
    if ts.tzinfo is not None:
        return ts.astimezone().replace(tzinfo=None)
    return ts


def calendar_day(ts: datetime) -> date:
    """
    Local calendar date of *ts*.

    Aware datetimes are converted to the local timezone first; naive ones
    are taken to already be local time.
    """
    return to_local_naive(ts).date()


def should_reset(
    is_completed: bool,
    last_completed_date: CompletionTimestamp,
    now: datetime,
    trigger_hour: int = TRIGGER_HOUR,
) -> bool:
    """
    Decide whether an exercise's completion flag must be cleared.

    Args:
        is_completed: Current completion flag
        last_completed_date: Timestamp of the last completion, or None
        now: Current time
        trigger_hour: Configured check hour (validated, not used in the decision)

    Returns:
        True iff the exercise is completed, has a completion timestamp, and
        that timestamp's calendar day is strictly before now's.
    """
    _validate_hour(trigger_hour)
    if not is_completed:
        return False
    if last_completed_date is None:
        return False
    return calendar_day(last_completed_date) < calendar_day(now)


def apply_reset_policy(
    exercises: list[Exercise],
    now: datetime,
    trigger_hour: int = TRIGGER_HOUR,
) -> tuple[list[Exercise], int]:
    """
    Run one reset pass over a collection.

    Returns:
        (new list in the same order, number of exercises cleared)
    """
    result: list[Exercise] = []
    cleared = 0
    for exercise in exercises:
        if should_reset(exercise.is_completed, exercise.last_completed_date, now, trigger_hour):
            result.append(exercise.reset_completion_status())
            cleared += 1
        else:
            result.append(exercise)
    return result, cleared


def next_trigger_instant(now: datetime, trigger_hour: int = TRIGGER_HOUR) -> datetime:
    """
    Next instant the daily reset should run.

    Today at trigger_hour:00:00, or tomorrow's if that is not strictly
    after *now*.
    """
    candidate = now.replace(
        hour=_validate_hour(trigger_hour), minute=0, second=0, microsecond=0
    )
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate
