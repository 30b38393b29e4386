"""Core domain models.

Persisted documents keep camelCase keys (``dueDate``, ``currentStreak``...),
so every model uses a camelCase alias generator and accepts both spellings.
"""

from __future__ import annotations

import datetime as dt
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

TaskStatus = Literal["pending", "in-progress", "completed"]


class DocumentModel(BaseModel):
    """Base model for records stored in the per-user document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        """Serialize to the JSON-compatible, camelCase document shape."""
        return self.model_dump(mode="json", by_alias=True)


class TaskTag(DocumentModel):
    """Tag attached to a task.

    Attributes:
        id: Unique identifier for the tag
        name: Display name (e.g., "Work")
        color: Hex color code used when rendering the tag
    """

    id: str
    name: str
    color: str = "#718096"


class RecurrenceRule(DocumentModel):
    """Recurrence descriptor of a task.

    Stored values are kept as plain strings. A pattern or weekday the engine
    does not know loads fine and simply never matches.

    Attributes:
        pattern: once, daily, weekly or monthly
        week_days: Weekdays the task repeats on (weekly only, treated as a set)
        end_date: Inclusive cutoff, no occurrence falls after this date
    """

    pattern: str = "once"
    week_days: list[str] = Field(default_factory=list)
    end_date: date | None = None


class Task(DocumentModel):
    """Task model representing one occurrence of a task.

    Attributes:
        id: Unique identifier for the task
        title: Short task title
        description: Optional detailed description
        due_date: Calendar day the task is due (anchor date when recurring)
        estimated_minutes: Optional time estimate
        status: pending, in-progress or completed
        tags: Tags attached to the task
        recurrence: Optional recurrence descriptor
    """

    id: str
    title: str
    description: str | None = None
    due_date: date
    estimated_minutes: int | None = Field(default=None, ge=0)
    status: TaskStatus = "pending"
    tags: list[TaskTag] = Field(default_factory=list)
    recurrence: RecurrenceRule | None = None

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None and self.recurrence.pattern != "once"


class DailyProgress(DocumentModel):
    """Completion record for a single calendar day."""

    date: dt.date
    tasks_completed: int = Field(default=0, ge=0)
    tasks_planned: int = Field(default=0, ge=0)
    completion: float = Field(default=0.0, ge=0.0, le=1.0)
    tasks: list[Task] = Field(default_factory=list)


class StreakData(DocumentModel):
    """Day-over-day completion streak."""

    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_completion_date: date | None = None


class Bookmark(DocumentModel):
    """Saved link shown next to the task list."""

    id: str
    title: str
    url: str
    color: str | None = None
    icon_url: str | None = None
    created_at: datetime | None = None


class UserProfile(DocumentModel):
    """User profile as exposed by an auth provider."""

    id: str
    name: str
    email: EmailStr


DEFAULT_TAGS: tuple[tuple[str, str, str], ...] = (
    ("1", "Work", "#4C51BF"),
    ("2", "Personal", "#38A169"),
    ("3", "Urgent", "#E53E3E"),
    ("4", "Learning", "#D69E2E"),
)


def default_tags() -> list[TaskTag]:
    """Return the tag set every new user document starts with."""
    return [
        TaskTag(id=tag_id, name=name, color=color)
        for tag_id, name, color in DEFAULT_TAGS
    ]


class UserData(DocumentModel):
    """Flat per-user document holding all persisted state.

    Attributes:
        tasks: Every task record, including completed occurrences
        progress: One DailyProgress entry per calendar day
        streak: Streak singleton
        tags: Tags available for new tasks
        bookmarks: Saved links
        updated_at: Last save timestamp, maintained by the repository
    """

    tasks: list[Task] = Field(default_factory=list)
    progress: list[DailyProgress] = Field(default_factory=list)
    streak: StreakData = Field(default_factory=StreakData)
    tags: list[TaskTag] = Field(default_factory=list)
    bookmarks: list[Bookmark] = Field(default_factory=list)
    updated_at: datetime | None = None

    @classmethod
    def empty(cls) -> UserData:
        """Document created the first time a user is loaded."""
        return cls(tags=default_tags())
