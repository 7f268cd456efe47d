"""
Configuration constants for the exercise tracker.

All adjustable parameters are centralized here. User overrides for the
scheduling values are read by config_loader.load_settings().
"""

from pathlib import Path
from typing import Final

# =============================================================================
# DAILY RESET
# =============================================================================

TRIGGER_HOUR: Final[int] = 4  # Local hour at which the foreground check evaluates resets
CHECK_INTERVAL_SECONDS: Final[float] = 60.0  # Foreground recurring check period

# =============================================================================
# STORAGE
# =============================================================================

STORE_KEY: Final[str] = "com.calisthenicsTracker.exercises"
DEFAULT_DATA_DIR: Final[Path] = Path.home() / ".calisthenics-tracker"
DATA_DIR_ENVVAR: Final[str] = "CALISTHENICS_TRACKER_HOME"
CONFIG_FILENAME: Final[str] = "config.yaml"
WAKEUPS_FILENAME: Final[str] = "wakeups.json"

# =============================================================================
# BACKGROUND WAKE-UP & NOTIFICATION
# =============================================================================

RESET_TASK_IDENTIFIER: Final[str] = "com.calisthenicsTracker.dailyReset"
RESET_NOTIFICATION_TITLE: Final[str] = "Exercises Reset"
RESET_NOTIFICATION_BODY: Final[str] = (
    "Your daily exercises have been reset. Ready for a new day!"
)
