"""
Built-in exercise definitions.

The six default exercises are described in the bundled
``src/calisthenics_tracker/defaults.yaml``.  Every call to
create_default_exercises() returns fresh Exercise objects with new ids, so a
progression reset really starts over.

If the bundled file is missing or malformed a RuntimeError is raised; the
application cannot start without its default definitions.
"""

from __future__ import annotations

import importlib.resources
from typing import Any

import yaml

from .models import Exercise

_REQUIRED_FIELDS: frozenset[str] = frozenset(
    {"name", "current_target", "increment", "max_target", "is_time_based"}
)


def definition_from_dict(d: dict[str, Any]) -> Exercise:
    """Convert a raw dict (from YAML) to a fresh, not-completed Exercise.

    Raises ValueError if any required field is absent or invalid.
    """
    missing = _REQUIRED_FIELDS - set(d)
    if missing:
        raise ValueError(f"exercise definition missing fields: {sorted(missing)}")
    return Exercise(
        name=str(d["name"]),
        current_target=int(d["current_target"]),
        increment=int(d["increment"]),
        max_target=int(d["max_target"]),
        is_time_based=bool(d["is_time_based"]),
    )


def _load_bundled_definitions() -> list[dict[str, Any]]:
    ref = importlib.resources.files("calisthenics_tracker").joinpath("defaults.yaml")
    try:
        data = yaml.safe_load(ref.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise RuntimeError(
            f"calisthenics-tracker: cannot read bundled defaults.yaml ({exc})"
        ) from exc

    entries = data.get("exercises") if isinstance(data, dict) else None
    if not isinstance(entries, list) or not entries:
        raise RuntimeError(
            "calisthenics-tracker: defaults.yaml must contain a non-empty 'exercises' list"
        )
    return entries


def create_default_exercises() -> list[Exercise]:
    """
    Build the default exercise collection.

    Returns:
        Fresh list of Exercise in display order

    Raises:
        RuntimeError: If the bundled definitions cannot be loaded
    """
    try:
        return [definition_from_dict(entry) for entry in _load_bundled_definitions()]
    except (TypeError, ValueError) as exc:
        raise RuntimeError(
            f"calisthenics-tracker: invalid exercise definition in defaults.yaml ({exc})"
        ) from exc
