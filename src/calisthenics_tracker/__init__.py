"""calisthenics-tracker: daily progressive exercise tracker with a 4 AM reset."""

__version__ = "0.1.0"
