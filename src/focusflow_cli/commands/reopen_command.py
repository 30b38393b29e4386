"""Command 'reopen' of focusflow-cli"""

from typing import Annotated

import typer

from focusflow_cli.services.context_manager import get_task_service
from focusflow_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper, require_user

app = typer.Typer()


@app.command("reopen")
@command_wrapper
async def reopen_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
) -> None:
    """Set a task back to pending."""
    user = require_user()
    change = await get_task_service(user.id).reopen_task(task_id)
    if change.previous_status == "pending":
        format_info(f"Already pending: {change.task.title}")
    else:
        format_success(f"Reopened: {change.task.title}")
