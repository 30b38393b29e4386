"""FocusFlow CLI - recurring tasks, completion streaks and an activity calendar."""

__version__ = "0.4.0"
