"""Command 'calendar' of focusflow-cli"""

from typing import Annotated

import typer

from focusflow_cli.services.config_service import get_config_service
from focusflow_cli.services.context_manager import get_current_date, get_progress_service
from focusflow_cli.utils.dates import parse_date
from focusflow_cli.utils.ui.formatters import (
    format_calendar,
    format_output,
    format_tasks_pretty,
    task_rows,
)

from .decorators import command_wrapper, require_user

app = typer.Typer()


def _parse_month(value: str) -> tuple[int, int]:
    try:
        year_str, month_str = value.split("-")
        year, month = int(year_str), int(month_str)
    except ValueError as e:
        raise ValueError(f"Invalid month '{value}', expected YYYY-MM") from e
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month '{value}', expected YYYY-MM")
    return year, month


@app.command("calendar")
@command_wrapper
async def calendar_command(
    month: Annotated[
        str | None, typer.Option("--month", "-m", help="Month to show (YYYY-MM)")
    ] = None,
    day: Annotated[
        str | None,
        typer.Option("--day", help="Show the tasks of one day (YYYY-MM-DD)"),
    ] = None,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/json/yaml)")
    ] = "pretty",
) -> None:
    """Show the monthly activity calendar."""
    user = require_user()
    progress_service = get_progress_service(user.id)
    today = get_current_date()

    if day:
        selected = parse_date(day)
        tasks = await progress_service.tasks_on(selected)
        if output != "pretty":
            format_output(task_rows(tasks), output)
            return
        format_tasks_pretty(tasks, title=f"{selected:%A %d %B %Y}", today=today)
        return

    year, month_number = _parse_month(month) if month else (today.year, today.month)
    days = await progress_service.calendar_month(year, month_number)

    if output != "pretty":
        format_output(
            [
                {
                    "date": entry.day.isoformat(),
                    "completion": round(entry.completion, 3),
                    "level": entry.level,
                    "tasks_completed": entry.tasks_completed,
                    "tasks_planned": entry.tasks_planned,
                }
                for entry in days
            ],
            output,
        )
        return

    format_calendar(days, week_starts_on=get_config_service().config.ui.week_starts_on)
