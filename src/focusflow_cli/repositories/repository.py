"""Repository abstraction layer for FocusFlow CLI.

This module defines the abstract base classes (interfaces) for persistence,
following the hexagonal architecture (Ports & Adapters) pattern.

All user state lives in one flat document per user, so a single repository
with load/save semantics covers tasks, progress, streak, tags and bookmarks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from focusflow_cli.models import UserData

DOCUMENT_KEYS: frozenset[str] = frozenset(
    {"tasks", "progress", "streak", "tags", "bookmarks"}
)


class UserDataRepository(ABC):
    """Abstract base class for per-user document persistence.

    Implementations must treat a missing document as a new user: create it
    with default contents and return it.
    """

    @abstractmethod
    async def load(self, user_id: str) -> UserData:
        """Load the full document of a user.

        Args:
            user_id: Opaque user identifier

        Returns:
            UserData document (empty document with default tags for new users)

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "UserDataRepository.load() must be implemented by adapter"
        )

    @abstractmethod
    async def save(self, user_id: str, partial: dict[str, Any]) -> bool:
        """Merge top-level document keys into the stored document.

        Args:
            user_id: Opaque user identifier
            partial: Mapping of document keys (tasks, progress, streak, tags,
                bookmarks) to JSON-compatible values

        Returns:
            True on success, False if the backend rejected the write

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "UserDataRepository.save() must be implemented by adapter"
        )


def validate_partial(partial: dict[str, Any]) -> dict[str, Any]:
    """Reject keys that are not part of the user document.

    Raises:
        ValueError: If an unknown key is present
    """
    unknown = set(partial) - DOCUMENT_KEYS
    if unknown:
        raise ValueError(f"Unknown document keys: {', '.join(sorted(unknown))}")
    return partial
