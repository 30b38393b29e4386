"""Composition root for FocusFlow CLI.

Key Functions:
- get_strategy_context(): repository and auth provider of the active context
- get_event_emitter(): the process-wide event emitter
- get_current_date(): "today" according to the configured timezone
- get_task_service() and friends: services wired to the above

Usage Pattern:
    from focusflow_cli.services.context_manager import get_strategy_context

    strategy = get_strategy_context()
    data = await strategy.user_data_repository.load(user_id)
"""

from __future__ import annotations

from datetime import date
from functools import lru_cache

from focusflow_cli.models.storage_strategy import StorageStrategyContext
from focusflow_cli.services.bookmark_service import BookmarkService
from focusflow_cli.services.config_service import get_config_service
from focusflow_cli.services.events import EventEmitter
from focusflow_cli.services.progress_service import ProgressService
from focusflow_cli.services.tag_service import TagService
from focusflow_cli.services.task_service import TaskService
from focusflow_cli.utils.dates import get_today


@lru_cache(maxsize=1)
def get_event_emitter() -> EventEmitter:
    """Get the cached EventEmitter shared by every service."""
    return EventEmitter()


def get_strategy_context() -> StorageStrategyContext:
    """Get the StorageStrategyContext built from the active context.

    The auth provider of the strategy publishes on the shared emitter.
    """
    strategy_context = get_config_service().storage_strategy_context
    strategy_context.auth_provider.bind_events(get_event_emitter())
    return strategy_context


def get_current_date() -> date:
    """Get today's date in the configured ``ui.timezone``."""
    return get_today(get_config_service().config.ui.timezone)


def get_task_service(user_id: str) -> TaskService:
    """Get a TaskService for ``user_id`` on the active storage backend."""
    return TaskService(
        get_strategy_context().user_data_repository,
        user_id,
        events=get_event_emitter(),
        clock=get_current_date,
    )


def get_progress_service(user_id: str) -> ProgressService:
    return ProgressService(
        get_strategy_context().user_data_repository,
        user_id,
        events=get_event_emitter(),
        clock=get_current_date,
    )


def get_bookmark_service(user_id: str) -> BookmarkService:
    return BookmarkService(
        get_strategy_context().user_data_repository,
        user_id,
        events=get_event_emitter(),
    )


def get_tag_service(user_id: str) -> TagService:
    return TagService(get_strategy_context().user_data_repository, user_id)
