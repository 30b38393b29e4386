"""Tag service - Business logic for the user's tag list."""

from __future__ import annotations

import re
from collections.abc import Callable

from focusflow_cli.exceptions import PersistenceError
from focusflow_cli.models import TaskTag
from focusflow_cli.repositories import UserDataRepository
from focusflow_cli.utils.ids import generate_id

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class TagService:
    """Service for tag business logic."""

    def __init__(
        self,
        repository: UserDataRepository,
        user_id: str,
        id_factory: Callable[[], str] = generate_id,
    ):
        self.repository = repository
        self.user_id = user_id
        self.id_factory = id_factory

    async def list_tags(self) -> list[TaskTag]:
        data = await self.repository.load(self.user_id)
        return data.tags

    async def add_tag(self, name: str, color: str = "#718096") -> TaskTag:
        """Create a tag.

        Raises:
            ValueError: If the name is empty or taken, or the color is not #RRGGBB
        """
        name = name.strip()
        if not name:
            raise ValueError("Tag name cannot be empty")
        if not _HEX_COLOR.match(color):
            raise ValueError(f"Invalid color '{color}', expected #RRGGBB")

        data = await self.repository.load(self.user_id)
        if any(tag.name.lower() == name.lower() for tag in data.tags):
            raise ValueError(f"Tag '{name}' already exists")

        tag = TaskTag(id=self.id_factory(), name=name, color=color.upper())
        tags = [*data.tags, tag]
        if not await self.repository.save(
            self.user_id, {"tags": [t.to_document() for t in tags]}
        ):
            raise PersistenceError("Could not save tags")
        return tag
