"""Target progression applied after each completion."""

from dataclasses import replace

from .models import Exercise


def advance(exercise: Exercise) -> Exercise:
    """
    Return *exercise* with its target raised by one increment.

    The new target is clamped to max_target.  Exercises with increment 0
    are returned unchanged.
    """
    if exercise.increment == 0:
        return exercise
    return replace(
        exercise,
        current_target=min(exercise.current_target + exercise.increment, exercise.max_target),
    )
