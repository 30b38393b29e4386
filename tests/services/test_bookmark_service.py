"""Unit tests for BookmarkService and its URL helpers."""

from __future__ import annotations

import pytest

from focusflow_cli.exceptions import InvalidBookmarkUrlError, NotFoundError
from focusflow_cli.services.bookmark_service import (
    BookmarkService,
    color_from_string,
    extract_domain,
    normalize_url,
)
from focusflow_cli.services.events import BOOKMARKS_CHANGED, EventEmitter

USER = "user-1"


class TestUrlHelpers:
    def test_adds_https(self):
        assert normalize_url("example.com/docs") == "https://example.com/docs"

    def test_keeps_http(self):
        assert normalize_url(" http://example.com ") == "http://example.com"

    @pytest.mark.parametrize("url", ["", "https://", "not a url"])
    def test_invalid(self, url):
        with pytest.raises(InvalidBookmarkUrlError):
            normalize_url(url)

    def test_extract_domain_strips_www(self):
        assert extract_domain("https://www.python.org/about") == "python.org"

    def test_color_is_stable_hex(self):
        color = color_from_string("python.org")
        assert color == color_from_string("python.org")
        assert color.startswith("#") and len(color) == 7
        assert color != color_from_string("github.com")


class TestBookmarkService:
    @pytest.mark.asyncio
    async def test_add_defaults_title_to_domain(self, repo):
        bookmark = await BookmarkService(repo, USER).add_bookmark("www.github.com")
        assert bookmark.title == "github.com"
        assert bookmark.url == "https://www.github.com"
        assert bookmark.icon_url == "https://github.com/favicon.ico"
        assert bookmark.created_at is not None

    @pytest.mark.asyncio
    async def test_add_and_list(self, repo):
        service = BookmarkService(repo, USER)
        await service.add_bookmark("https://docs.python.org", title="Python docs")
        bookmarks = await service.list_bookmarks()
        assert [b.title for b in bookmarks] == ["Python docs"]

    @pytest.mark.asyncio
    async def test_delete_by_prefix(self, repo):
        events = EventEmitter()
        received = []
        events.subscribe(BOOKMARKS_CHANGED, received.append)
        service = BookmarkService(repo, USER, events, id_factory=lambda: "bm123456")
        await service.add_bookmark("example.com")

        deleted = await service.delete_bookmark("bm12")

        assert deleted.id == "bm123456"
        assert await service.list_bookmarks() == []
        assert received[-1] == []

    @pytest.mark.asyncio
    async def test_delete_unknown(self, repo):
        with pytest.raises(NotFoundError, match="bookmark"):
            await BookmarkService(repo, USER).delete_bookmark("missing")
