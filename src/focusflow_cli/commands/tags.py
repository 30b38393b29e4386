"""Tag commands."""

from typing import Annotated

import typer

from focusflow_cli.services.context_manager import get_tag_service
from focusflow_cli.utils.typer_helpers import SuggestingGroup
from focusflow_cli.utils.ui.formatters import format_output, format_success, format_tags

from .decorators import command_wrapper, require_user

app = typer.Typer(cls=SuggestingGroup, help="Tag commands")


@app.command("list")
@command_wrapper
async def list_tags(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/table/json/yaml)")
    ] = "pretty",
) -> None:
    """List the tags available for tasks."""
    user = require_user()
    tags = await get_tag_service(user.id).list_tags()
    if output == "pretty":
        format_tags(tags)
    else:
        format_output([tag.model_dump(mode="json") for tag in tags], output)


@app.command("add")
@command_wrapper
async def add_tag(
    name: Annotated[str, typer.Argument(help="Tag name")],
    color: Annotated[str, typer.Option("--color", help="Hex color (#RRGGBB)")] = "#718096",
) -> None:
    """Create a tag."""
    user = require_user()
    tag = await get_tag_service(user.id).add_tag(name, color)
    format_success(f"Created tag #{tag.name}")
