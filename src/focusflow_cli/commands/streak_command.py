"""Command 'streak' of focusflow-cli"""

from typing import Annotated

import typer

from focusflow_cli.services.context_manager import get_progress_service
from focusflow_cli.utils.ui.formatters import format_output, format_streak

from .decorators import command_wrapper, require_user

app = typer.Typer()


@app.command("streak")
@command_wrapper
async def streak_command(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/json/yaml)")
    ] = "pretty",
) -> None:
    """Show the current and longest completion streak."""
    user = require_user()
    streak = await get_progress_service(user.id).refresh()

    if output == "pretty":
        format_streak(streak)
    else:
        format_output(streak.model_dump(mode="json"), output)
