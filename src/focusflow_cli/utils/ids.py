"""Identifier helpers: generation, short display prefixes and prefix resolution."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Protocol, TypeVar

from focusflow_cli.exceptions import AmbiguousIdError, NotFoundError


class _Identified(Protocol):
    id: str


T = TypeVar("T", bound=_Identified)


def generate_id() -> str:
    """Generate a new opaque record identifier."""
    return uuid.uuid4().hex


def shortest_unique_prefix(ids: list[str], target_id: str, min_length: int = 4) -> str:
    """
    Find the shortest prefix of target_id that no other ID starts with.

    Args:
        ids: List of all IDs
        target_id: The ID to find a unique prefix for
        min_length: Never return fewer characters than this

    Returns:
        The shortest unique prefix (full ID as fallback)
    """
    for length in range(min_length, len(target_id) + 1):
        prefix = target_id[:length]
        if not any(other != target_id and other.startswith(prefix) for other in ids):
            return prefix
    return target_id


def resolve_id(records: Iterable[T], id_or_prefix: str, kind: str = "task") -> T:
    """
    Resolve a full ID or unique prefix to a record.

    Args:
        records: Records to search (anything with an ``id`` attribute)
        id_or_prefix: Full ID or prefix typed by the user
        kind: Record kind used in error messages

    Returns:
        The matching record

    Raises:
        NotFoundError: If nothing matches
        AmbiguousIdError: If the prefix matches several records
    """
    records = list(records)
    for record in records:
        if record.id == id_or_prefix:
            return record

    matches = [record for record in records if record.id.startswith(id_or_prefix)]
    if not matches:
        raise NotFoundError(f"No {kind} found with ID '{id_or_prefix}'")
    if len(matches) > 1:
        all_ids = [record.id for record in records]
        raise AmbiguousIdError(
            id_or_prefix,
            [shortest_unique_prefix(all_ids, match.id) for match in matches],
        )
    return matches[0]
