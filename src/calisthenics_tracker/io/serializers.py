"""
JSON serialization for the exercise collection.

Handles conversion between Exercise dataclasses and JSON-compatible dicts.
Timestamps are stored as ISO-8601 strings (microseconds and UTC offset
preserved) or null when absent.
"""

import json
from datetime import datetime
from typing import Any

from ..core.models import Exercise


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def _require(data: dict[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    if key not in data:
        raise ValidationError(f"Missing field: {key}")
    value = data[key]
    # bool is an int subclass; never accept it where a number is expected
    if kind is int and isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer, got {value!r}")
    if not isinstance(value, kind):
        raise ValidationError(f"{key} has wrong type: {type(value).__name__}")
    return value


def validate_timestamp(value: Any) -> datetime | None:
    """
    Parse an optional ISO-8601 timestamp.

    Args:
        value: ISO string or None

    Returns:
        datetime or None

    Raises:
        ValidationError: If the value is neither None nor a valid ISO string
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Invalid timestamp: {value!r}")
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid timestamp: {value}") from e


def exercise_to_dict(exercise: Exercise) -> dict[str, Any]:
    """
    Convert Exercise to JSON-compatible dict.

    Args:
        exercise: Exercise to convert

    Returns:
        Dict representation
    """
    return {
        "id": exercise.id,
        "name": exercise.name,
        "current_target": exercise.current_target,
        "increment": exercise.increment,
        "max_target": exercise.max_target,
        "is_time_based": exercise.is_time_based,
        "is_completed": exercise.is_completed,
        "last_completed_date": (
            exercise.last_completed_date.isoformat()
            if exercise.last_completed_date is not None
            else None
        ),
    }


def dict_to_exercise(data: dict[str, Any]) -> Exercise:
    """
    Convert dict to Exercise.

    Args:
        data: Dict representation

    Returns:
        Exercise instance

    Raises:
        ValidationError: If a field is missing, has the wrong type, or the
            record violates an Exercise invariant
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Exercise record must be an object, got {type(data).__name__}")
    if "last_completed_date" not in data:
        raise ValidationError("Missing field: last_completed_date")

    try:
        return Exercise(
            id=_require(data, "id", str),
            name=_require(data, "name", str),
            current_target=_require(data, "current_target", int),
            increment=_require(data, "increment", int),
            max_target=_require(data, "max_target", int),
            is_time_based=_require(data, "is_time_based", bool),
            is_completed=_require(data, "is_completed", bool),
            last_completed_date=validate_timestamp(data["last_completed_date"]),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def exercises_to_json(exercises: list[Exercise]) -> str:
    """Serialize a collection, preserving order."""
    return json.dumps([exercise_to_dict(e) for e in exercises], indent=2)


def json_to_exercises(text: str | bytes) -> list[Exercise]:
    """
    Parse a serialized collection.

    Raises:
        ValidationError: If the blob is not valid JSON or any record is invalid
    """
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError, UnicodeDecodeError and the
        # integer digit limit; RecursionError comes from deep nesting.
        raise ValidationError(f"Invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise ValidationError("Exercise collection must be a JSON array")

    exercises: list[Exercise] = []
    for position, record in enumerate(data):
        try:
            exercises.append(dict_to_exercise(record))
        except ValidationError as e:
            raise ValidationError(f"Error parsing exercise {position}: {e}") from e
    return exercises
