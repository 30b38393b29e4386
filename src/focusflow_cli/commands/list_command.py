"""Command 'list' of focusflow-cli"""

from typing import Annotated

import typer

from focusflow_cli.services.context_manager import get_current_date, get_task_service
from focusflow_cli.utils.dates import parse_date
from focusflow_cli.utils.ui.formatters import (
    format_output,
    format_tasks_pretty,
    task_rows,
)

from .decorators import command_wrapper, require_user

app = typer.Typer()


@app.command("list")
@command_wrapper
async def list_command(
    status: Annotated[
        str | None,
        typer.Option("--status", "-s", help="pending, in-progress or completed"),
    ] = None,
    day: Annotated[
        str | None,
        typer.Option("--date", help="Only tasks planned for this day (YYYY-MM-DD)"),
    ] = None,
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Output format (pretty/table/json/yaml/quiet)"),
    ] = "pretty",
) -> None:
    """List tasks."""
    user = require_user()
    task_service = get_task_service(user.id)

    tasks = await task_service.list_tasks(
        status=status, day=parse_date(day) if day else None
    )
    all_ids = [task.id for task in await task_service.list_tasks()]

    if output == "pretty":
        format_tasks_pretty(tasks, today=get_current_date(), all_ids=all_ids)
    else:
        format_output(task_rows(tasks, all_ids), output)
