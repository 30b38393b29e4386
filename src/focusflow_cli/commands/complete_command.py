"""Command 'complete' of focusflow-cli"""

from typing import Annotated

import typer

from focusflow_cli.models import StreakData
from focusflow_cli.services.context_manager import get_event_emitter, get_task_service
from focusflow_cli.services.events import STREAK_CHANGED
from focusflow_cli.utils.ui.console import get_console
from focusflow_cli.utils.ui.formatters import format_output, format_success, task_rows

from .decorators import command_wrapper, require_user

app = typer.Typer()
console = get_console()


def _announce_streak(streak: StreakData) -> None:
    if streak.current_streak:
        console.print(f"🔥 Streak: [bold]{streak.current_streak}[/bold] days")
    else:
        console.print("[dim]Streak reset[/dim]")


@app.command("complete")
@command_wrapper
async def complete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/json/yaml)")
    ] = "pretty",
) -> None:
    """Toggle a task between completed and pending.

    Completing a repeating task schedules its next occurrence.
    """
    user = require_user()
    task_service = get_task_service(user.id)

    if output != "pretty":
        change = await task_service.toggle_complete(task_id)
    else:
        unsubscribe = get_event_emitter().subscribe(STREAK_CHANGED, _announce_streak)
        try:
            change = await task_service.toggle_complete(task_id)
        finally:
            unsubscribe()

    task = change.task
    if output != "pretty":
        data = task_rows([task])[0] | {"id": task.id}
        if change.next_task is not None:
            data["next_id"] = change.next_task.id
            data["next_due_date"] = change.next_task.due_date.isoformat()
        format_output(data, output)
        return

    if task.status == "completed":
        format_success(f"✓ Completed: {task.title}")
        console.print(f"[dim]To undo: focusflow complete {task_id}[/dim]")
    else:
        format_success(f"Reopened: {task.title}")
    if change.next_task is not None:
        console.print(
            f"🔄 Next occurrence: [cyan]{change.next_task.due_date.isoformat()}[/cyan]"
        )
