"""Bookmark service - saved links kept in the user document."""

from __future__ import annotations

import colorsys
from collections.abc import Callable
from datetime import UTC, datetime
from urllib.parse import urlparse

from rich.color_triplet import ColorTriplet

from focusflow_cli.exceptions import InvalidBookmarkUrlError, PersistenceError
from focusflow_cli.models import Bookmark
from focusflow_cli.repositories import UserDataRepository
from focusflow_cli.services.events import BOOKMARKS_CHANGED, EventEmitter
from focusflow_cli.utils.ids import generate_id, resolve_id
from focusflow_cli.utils.logger import get_logger


def normalize_url(url: str) -> str:
    """Add ``https://`` when no scheme is given and validate the result.

    Raises:
        InvalidBookmarkUrlError: If the URL has no host
    """
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    parsed = urlparse(url)
    if not parsed.hostname or " " in parsed.netloc:
        raise InvalidBookmarkUrlError(f"Invalid URL: {url}")
    return url


def extract_domain(url: str) -> str:
    """Return the host of a URL without a leading ``www.``."""
    host = urlparse(url).hostname or url
    return host.removeprefix("www.")


def color_from_string(value: str) -> str:
    """Derive a stable, readable hex color from a string."""
    hash_value = 0
    for char in value:
        hash_value = (ord(char) + ((hash_value << 5) - hash_value)) & 0xFFFFFFFF
    hue = (hash_value % 360) / 360
    red, green, blue = colorsys.hls_to_rgb(hue, 0.45, 0.65)
    return ColorTriplet(round(red * 255), round(green * 255), round(blue * 255)).hex


def favicon_url(domain: str) -> str:
    return f"https://{domain}/favicon.ico"


class BookmarkService:
    """Service for bookmark business logic."""

    def __init__(
        self,
        repository: UserDataRepository,
        user_id: str,
        events: EventEmitter | None = None,
        id_factory: Callable[[], str] = generate_id,
    ):
        self.repository = repository
        self.user_id = user_id
        self.events = events
        self.id_factory = id_factory

    async def _save(self, bookmarks: list[Bookmark]) -> None:
        saved = await self.repository.save(
            self.user_id,
            {"bookmarks": [bookmark.to_document() for bookmark in bookmarks]},
        )
        if not saved:
            raise PersistenceError("Could not save bookmarks")
        if self.events is not None:
            self.events.emit(BOOKMARKS_CHANGED, bookmarks)

    async def list_bookmarks(self) -> list[Bookmark]:
        data = await self.repository.load(self.user_id)
        return data.bookmarks

    async def add_bookmark(self, url: str, title: str | None = None) -> Bookmark:
        """Add a bookmark; the title defaults to the URL's domain."""
        url = normalize_url(url)
        domain = extract_domain(url)
        bookmark = Bookmark(
            id=self.id_factory(),
            title=(title or "").strip() or domain,
            url=url,
            color=color_from_string(domain),
            icon_url=favicon_url(domain),
            created_at=datetime.now(UTC),
        )
        data = await self.repository.load(self.user_id)
        await self._save([*data.bookmarks, bookmark])
        get_logger().info("added bookmark %s (%s)", bookmark.id, domain)
        return bookmark

    async def delete_bookmark(self, bookmark_id: str) -> Bookmark:
        data = await self.repository.load(self.user_id)
        bookmark = resolve_id(data.bookmarks, bookmark_id, kind="bookmark")
        await self._save([b for b in data.bookmarks if b.id != bookmark.id])
        get_logger().info("deleted bookmark %s", bookmark.id)
        return bookmark
