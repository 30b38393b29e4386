"""FocusFlow CLI domain models.

This package contains Pydantic models that represent the core domain entities
of the FocusFlow application: tasks and their recurrence, daily progress, the
streak singleton, bookmarks and user profiles.
"""

from .config_models import AppConfig, Context
from .core import (
    Bookmark,
    DailyProgress,
    RecurrenceRule,
    StreakData,
    Task,
    TaskStatus,
    TaskTag,
    UserData,
    UserProfile,
    default_tags,
)

__all__ = [
    # Task models
    "Task",
    "TaskTag",
    "TaskStatus",
    "RecurrenceRule",
    # Progress models
    "DailyProgress",
    "StreakData",
    # Document models
    "Bookmark",
    "UserData",
    "UserProfile",
    "default_tags",
    # Config models
    "AppConfig",
    "Context",
]
