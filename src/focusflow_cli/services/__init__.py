"""Services module for FocusFlow CLI - Business logic layer."""

from .bookmark_service import BookmarkService
from .events import EventEmitter
from .progress_service import ProgressService
from .tag_service import TagService
from .task_service import TaskService

__all__ = [
    "TaskService",
    "ProgressService",
    "BookmarkService",
    "TagService",
    "EventEmitter",
]
