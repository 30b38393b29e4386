"""Command 'delete' of focusflow-cli"""

from typing import Annotated

import typer

from focusflow_cli.services.context_manager import get_task_service
from focusflow_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper, require_user

app = typer.Typer()


@app.command("delete")
@command_wrapper
async def delete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip confirmation")
    ] = False,
) -> None:
    """Delete a task."""
    user = require_user()
    task_service = get_task_service(user.id)

    task = await task_service.get_task(task_id)
    if not yes and not typer.confirm(f"Delete '{task.title}'?"):
        raise typer.Exit(0)

    await task_service.delete_task(task.id)
    format_success(f"Deleted: {task.title}")
