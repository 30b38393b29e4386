"""Command 'today' of focusflow-cli"""

from typing import Annotated

import typer

from focusflow_cli.services.context_manager import (
    get_current_date,
    get_progress_service,
    get_task_service,
)
from focusflow_cli.utils.ui.console import get_console
from focusflow_cli.utils.ui.formatters import (
    format_output,
    format_progress_summary,
    format_tasks_pretty,
    task_rows,
)

from .decorators import command_wrapper, require_user

app = typer.Typer()
console = get_console()


@app.command("today")
@command_wrapper
async def today_command(
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Output format (pretty/table/json/yaml)"),
    ] = "pretty",
) -> None:
    """Show the tasks due today and today's progress."""
    user = require_user()
    task_service = get_task_service(user.id)
    progress_service = get_progress_service(user.id)

    streak = await progress_service.refresh()
    tasks = await task_service.today_tasks()
    completed = sum(1 for task in tasks if task.status == "completed")

    if output != "pretty":
        format_output(
            {
                "date": get_current_date().isoformat(),
                "tasks_planned": len(tasks),
                "tasks_completed": completed,
                "current_streak": streak.current_streak,
                "tasks": task_rows(tasks),
            },
            output,
        )
        return

    today = get_current_date()
    format_tasks_pretty(tasks, title=f"Today, {today:%A %d %B}", today=today)
    format_progress_summary(completed, len(tasks))
    if streak.current_streak:
        console.print(f"🔥 [bold]{streak.current_streak}[/bold] day streak")
