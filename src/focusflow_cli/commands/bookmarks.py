"""Bookmark commands."""

from typing import Annotated

import typer

from focusflow_cli.services.context_manager import get_bookmark_service
from focusflow_cli.utils.typer_helpers import SuggestingGroup
from focusflow_cli.utils.ui.formatters import (
    format_bookmarks,
    format_output,
    format_success,
)

from .decorators import command_wrapper, require_user

app = typer.Typer(cls=SuggestingGroup, help="Bookmark commands")


@app.command("add")
@command_wrapper
async def add_bookmark(
    url: Annotated[str, typer.Argument(help="Website URL (https:// is optional)")],
    title: Annotated[
        str | None, typer.Option("--title", help="Title, defaults to the domain")
    ] = None,
) -> None:
    """Add a bookmark."""
    user = require_user()
    bookmark = await get_bookmark_service(user.id).add_bookmark(url, title)
    format_success(f"Bookmarked {bookmark.title} ({bookmark.url})")


@app.command("list")
@command_wrapper
async def list_bookmarks(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/table/json/yaml)")
    ] = "pretty",
) -> None:
    """List bookmarks."""
    user = require_user()
    bookmarks = await get_bookmark_service(user.id).list_bookmarks()
    if output == "pretty":
        format_bookmarks(bookmarks)
    else:
        format_output(
            [bookmark.model_dump(mode="json") for bookmark in bookmarks], output
        )


@app.command("delete")
@command_wrapper
async def delete_bookmark(
    bookmark_id: Annotated[str, typer.Argument(help="Bookmark ID or unique prefix")],
) -> None:
    """Delete a bookmark."""
    user = require_user()
    bookmark = await get_bookmark_service(user.id).delete_bookmark(bookmark_id)
    format_success(f"Deleted bookmark {bookmark.title}")
