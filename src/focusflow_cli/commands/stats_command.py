"""Command 'stats' of focusflow-cli"""

from typing import Annotated

import typer

from focusflow_cli.services.context_manager import get_progress_service
from focusflow_cli.utils.ui.formatters import format_output, format_statistics

from .decorators import command_wrapper, require_user

app = typer.Typer()


@app.command("stats")
@command_wrapper
async def stats_command(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/json/yaml)")
    ] = "pretty",
) -> None:
    """Show task counts, weekly activity and the completion trend."""
    user = require_user()
    progress_service = get_progress_service(user.id)
    await progress_service.refresh()
    stats = await progress_service.statistics()

    if output == "pretty":
        format_statistics(stats)
    else:
        format_output(stats.to_dict(), output)
