"""Command 'add' of focusflow-cli"""

from typing import Annotated

import typer

from focusflow_cli.services.context_manager import get_task_service
from focusflow_cli.utils.dates import parse_date
from focusflow_cli.utils.ui.console import get_console
from focusflow_cli.utils.ui.formatters import (
    describe_recurrence,
    format_output,
    format_success,
    task_rows,
)

from .decorators import command_wrapper, require_user

app = typer.Typer()
console = get_console()


@app.command("add")
@command_wrapper
async def add_command(
    title: Annotated[str, typer.Argument(help="Task title")],
    due: Annotated[
        str | None, typer.Option("--due", "-d", help="Due date (YYYY-MM-DD), default today")
    ] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="Longer description")
    ] = None,
    estimate: Annotated[
        int | None, typer.Option("--estimate", "-e", min=0, help="Estimated minutes")
    ] = None,
    tags: Annotated[
        list[str] | None, typer.Option("--tag", "-t", help="Tag name (repeatable)")
    ] = None,
    repeat: Annotated[
        str, typer.Option("--repeat", "-r", help="once, daily, weekly or monthly")
    ] = "once",
    week_days: Annotated[
        list[str] | None,
        typer.Option("--on", help="Weekday for weekly tasks (repeatable)"),
    ] = None,
    until: Annotated[
        str | None, typer.Option("--until", help="Last day to repeat (YYYY-MM-DD)")
    ] = None,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/json/yaml)")
    ] = "pretty",
) -> None:
    """Add a task, optionally repeating.

    Examples:
      focusflow add "Write report" --due 2024-06-03 --tag Work
      focusflow add "Gym" --repeat weekly --on mon --on thu
      focusflow add "Pay rent" --repeat monthly --due 2024-01-31 --until 2024-12-31
    """
    user = require_user()
    task_service = get_task_service(user.id)

    task = await task_service.add_task(
        title,
        due_date=parse_date(due) if due else None,
        description=description,
        estimated_minutes=estimate,
        tags=tags,
        pattern=repeat.lower(),
        week_days=week_days,
        end_date=parse_date(until) if until else None,
    )

    if output == "pretty":
        format_success(f"Added: {task.title}")
        console.print(
            f"[dim]Due {task.due_date.isoformat()} • "
            f"{describe_recurrence(task.recurrence)} • {task.id[:8]}[/dim]"
        )
    else:
        format_output(task_rows([task])[0] | {"id": task.id}, output)
