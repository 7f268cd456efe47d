"""
YAML → typed settings loader.

Reads optional user overrides from ``<data_dir>/config.yaml``:

    trigger_hour: 5
    check_interval_seconds: 30

Usage:
    from calisthenics_tracker.core.config_loader import load_settings
    settings = load_settings()
    settings.trigger_hour

If the override file is missing every value comes from config.py.  If it
exists but cannot be parsed, or holds an invalid value, a warning is emitted
and the offending file or key is ignored (no crash).
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .config import (
    CHECK_INTERVAL_SECONDS,
    CONFIG_FILENAME,
    DATA_DIR_ENVVAR,
    DEFAULT_DATA_DIR,
    TRIGGER_HOUR,
)


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    data_dir: Path
    trigger_hour: int = TRIGGER_HOUR
    check_interval_seconds: float = CHECK_INTERVAL_SECONDS


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} on any error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(
            f"calisthenics-tracker: ignoring unreadable config {path} ({exc})",
            stacklevel=3,
        )
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(
            f"calisthenics-tracker: ignoring config {path}: expected a mapping",
            stacklevel=3,
        )
        return {}
    return data


def _valid_trigger_hour(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 23:
        return value
    return None


def _valid_interval(value: Any) -> float | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return float(value)
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_data_dir(data_dir: str | Path | None = None) -> Path:
    """
    Resolve the data directory.

    Precedence: explicit argument, then $CALISTHENICS_TRACKER_HOME, then
    ~/.calisthenics-tracker.
    """
    if data_dir is not None:
        return Path(data_dir).expanduser()
    env = os.environ.get(DATA_DIR_ENVVAR)
    if env:
        return Path(env).expanduser()
    return DEFAULT_DATA_DIR


def load_settings(data_dir: str | Path | None = None) -> Settings:
    """
    Load settings, merging user overrides over the defaults in config.py.

    Args:
        data_dir: Data directory; resolved with get_data_dir()

    Returns:
        Settings instance
    """
    resolved = get_data_dir(data_dir)
    path = resolved / CONFIG_FILENAME
    if not path.exists():
        return Settings(data_dir=resolved)

    raw = _load_yaml_file(path)

    trigger_hour = TRIGGER_HOUR
    if "trigger_hour" in raw:
        parsed_hour = _valid_trigger_hour(raw["trigger_hour"])
        if parsed_hour is None:
            warnings.warn(
                f"calisthenics-tracker: trigger_hour must be an integer 0-23, "
                f"got {raw['trigger_hour']!r}; using {TRIGGER_HOUR}",
                stacklevel=2,
            )
        else:
            trigger_hour = parsed_hour

    interval = CHECK_INTERVAL_SECONDS
    if "check_interval_seconds" in raw:
        parsed_interval = _valid_interval(raw["check_interval_seconds"])
        if parsed_interval is None:
            warnings.warn(
                f"calisthenics-tracker: check_interval_seconds must be positive, "
                f"got {raw['check_interval_seconds']!r}; using {CHECK_INTERVAL_SECONDS:g}",
                stacklevel=2,
            )
        else:
            interval = parsed_interval

    return Settings(
        data_dir=resolved,
        trigger_hour=trigger_hour,
        check_interval_seconds=interval,
    )
