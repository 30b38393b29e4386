"""Command 'start' of focusflow-cli"""

from typing import Annotated

import typer

from focusflow_cli.services.context_manager import get_task_service
from focusflow_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper, require_user

app = typer.Typer()


@app.command("start")
@command_wrapper
async def start_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
) -> None:
    """Mark a task as in progress."""
    user = require_user()
    change = await get_task_service(user.id).start_task(task_id)
    if change.previous_status == "in-progress":
        format_info(f"Already in progress: {change.task.title}")
    else:
        format_success(f"⏳ Started: {change.task.title}")
