"""Output formatters for different formats."""

import json
from datetime import date
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from focusflow_cli.models import Bookmark, RecurrenceRule, StreakData, Task, TaskTag
from focusflow_cli.utils.ids import shortest_unique_prefix
from focusflow_cli.utils.ui.console import get_console

console = get_console()

# Status Icons
STATUS_ICONS = {
    "pending": "⬜",
    "in-progress": "⏳",
    "completed": "☑️",
    "recurring": "🔄",
}

STATUS_STYLES = {
    "pending": "",
    "in-progress": "yellow",
    "completed": "dim",
}

# Activity calendar cell styles, keyed by completion level
LEVEL_STYLES = {
    "empty": "dim",
    "low": "black on red",
    "medium": "black on yellow",
    "high": "black on green",
}

WEEKDAY_HEADERS = ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su")


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display plain data (dicts and lists) based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    elif output_format == "quiet":
        format_quiet(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No items found[/yellow]")
        return

    if isinstance(data, dict):
        format_single_item(data)
        return

    columns = list(data[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in data:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(
            str(v.get("name", v)) if isinstance(v, dict) else str(v) for v in value
        )
    if value is None:
        return "-"
    return str(value)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_quiet(data: Any) -> None:
    """Format output in quiet mode (IDs only)."""
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict) and "id" in item:
                print(item["id"])
    elif isinstance(data, dict) and "id" in data:
        print(data["id"])


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Tasks
# ============================================================================


def describe_recurrence(rule: RecurrenceRule | None) -> str:
    """Human-readable recurrence, e.g. "weekly on mon, wed until 2024-06-30"."""
    if rule is None or rule.pattern == "once":
        return "once"
    text = rule.pattern
    if rule.pattern == "weekly" and rule.week_days:
        text += " on " + ", ".join(day[:3] for day in rule.week_days)
    if rule.end_date is not None:
        text += f" until {rule.end_date.isoformat()}"
    return text


def format_due_date(value: date, today: date | None = None) -> str:
    """Format a due date as "Mon 15/01", adding the year when it differs."""
    today = today or date.today()
    if value == today:
        return "today"
    if value.year != today.year:
        return value.strftime("%a %d/%m/%Y")
    return value.strftime("%a %d/%m")


def format_tag(tag: TaskTag) -> Text:
    return Text(f"#{tag.name}", style=tag.color)


def task_rows(tasks: list[Task], all_ids: list[str] | None = None) -> list[dict]:
    """Flatten tasks for table/json/yaml output."""
    ids = all_ids if all_ids is not None else [task.id for task in tasks]
    return [
        {
            "id": shortest_unique_prefix(ids, task.id),
            "title": task.title,
            "due_date": task.due_date.isoformat(),
            "status": task.status,
            "tags": [tag.name for tag in task.tags],
            "repeat": describe_recurrence(task.recurrence),
            "estimate": task.estimated_minutes,
        }
        for task in tasks
    ]


def format_task_item(
    task: Task,
    short_id: str,
    today: date | None = None,
    indent: str = "  ",
) -> None:
    """Format a single task: title line plus a dim metadata line."""
    icon = STATUS_ICONS[task.status]
    if task.is_recurring and task.status != "completed":
        icon = STATUS_ICONS["recurring"]

    line = Text(f"{indent}{icon} ")
    line.append(task.title, style=STATUS_STYLES[task.status])
    for tag in task.tags:
        line.append("  ")
        line.append(format_tag(tag))
    console.print(line)

    today = today or date.today()
    overdue = (
        task.status != "completed" and task.due_date < today and not task.is_recurring
    )
    meta = [(format_due_date(task.due_date, today), "bold red" if overdue else "cyan")]
    if task.is_recurring:
        meta.append((describe_recurrence(task.recurrence), "magenta"))
    if task.estimated_minutes:
        meta.append((f"{task.estimated_minutes} min", "yellow"))
    meta.append((short_id, "dim"))

    meta_line = Text()
    meta_line.append(f"{indent}   └─ ", style="dim")
    for i, (text, style) in enumerate(meta):
        if i > 0:
            meta_line.append(" • ", style="dim")
        meta_line.append(text, style=style)
    console.print(meta_line)

    if task.description:
        console.print(Text(f"{indent}      {task.description}", style="dim italic"))


def format_tasks_pretty(
    tasks: list[Task],
    title: str = "Tasks",
    today: date | None = None,
    all_ids: list[str] | None = None,
) -> None:
    """Format tasks grouped by status."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    ids = all_ids if all_ids is not None else [task.id for task in tasks]
    done = [task for task in tasks if task.status == "completed"]

    header = Text()
    header.append(f"📋 {title} ", style="bold cyan")
    header.append(f"({len(tasks) - len(done)} open", style="dim")
    if done:
        header.append(f", {len(done)} completed", style="dim green")
    header.append(")", style="dim")
    console.print(header)
    console.print()

    for status, label, style in (
        ("in-progress", "IN PROGRESS", "bold yellow"),
        ("pending", "PENDING", "bold blue"),
        ("completed", "COMPLETED", "bold green"),
    ):
        group = [task for task in tasks if task.status == status]
        if not group:
            continue
        console.print(f"{label} ({len(group)})", style=style)
        for task in group:
            format_task_item(task, shortest_unique_prefix(ids, task.id), today)
        console.print()


# ============================================================================
# Progress, streak and calendar
# ============================================================================


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"


def format_progress_summary(completed: int, planned: int) -> None:
    """Print "▓▓▓▓▓░░░░░ 50% (2/4 tasks)"."""
    if planned == 0:
        console.print("[dim]Nothing planned for today[/dim]")
        return
    pct = completed / planned * 100
    color = get_completion_color(pct)
    console.print(
        f"[{color}]{get_progress_bar(pct)} {pct:.0f}%[/{color}] "
        f"[dim]({completed}/{planned} tasks)[/dim]"
    )


def format_streak(streak: StreakData) -> None:
    """Format the streak singleton."""
    flame = "🔥" if streak.current_streak else "💤"
    console.print(
        f"{flame} [bold]Current streak:[/bold] "
        f"{streak.current_streak} day{'s' if streak.current_streak != 1 else ''}"
    )
    console.print(
        f"🏆 [bold]Longest streak:[/bold] "
        f"{streak.longest_streak} day{'s' if streak.longest_streak != 1 else ''}"
    )
    last = streak.last_completion_date
    console.print(
        f"📅 [bold]Last perfect day:[/bold] {last.isoformat() if last else '-'}"
    )


def format_calendar(days: list, week_starts_on: str = "sunday") -> None:
    """Render a month of CalendarDay cells as a heat-map table."""
    if not days:
        return
    first = days[0].day
    headers = list(WEEKDAY_HEADERS)
    offset = first.weekday()
    if week_starts_on == "sunday":
        headers = headers[-1:] + headers[:-1]
        offset = (offset + 1) % 7

    table = Table(
        title=first.strftime("%B %Y"),
        show_header=True,
        header_style="bold",
        show_lines=False,
    )
    for header in headers:
        table.add_column(header, justify="center")

    cells: list[Text] = [Text("") for _ in range(offset)]
    for entry in days:
        label = f"{entry.day.day:>2}"
        style = LEVEL_STYLES[entry.level]
        if entry.is_today:
            style = f"{style} underline bold"
        cells.append(Text(label, style=style))
    while len(cells) % 7:
        cells.append(Text(""))

    for start in range(0, len(cells), 7):
        table.add_row(*cells[start : start + 7])

    console.print(table)
    legend = Text("  ")
    for level in ("empty", "low", "medium", "high"):
        legend.append(f" {level} ", style=LEVEL_STYLES[level])
        legend.append(" ")
    console.print(legend)


def format_duration(minutes: int) -> str:
    """Format minutes as "2h 30m"."""
    hours, mins = divmod(minutes, 60)
    if hours:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_statistics(stats) -> None:
    """Render ProgressStatistics as a short report."""
    console.print("\n[bold cyan]📊 Statistics[/bold cyan]\n")
    console.print(
        f"Tasks: [bold]{stats.total_tasks}[/bold] total, "
        f"[green]{stats.completed_tasks}[/green] completed, "
        f"{stats.pending_tasks} pending, "
        f"[yellow]{stats.in_progress_tasks}[/yellow] in progress"
    )
    color = get_completion_color(stats.completion_rate)
    console.print(
        f"Completion rate: [{color}]{get_progress_bar(stats.completion_rate)} "
        f"{stats.completion_rate:.0f}%[/{color}]"
    )
    console.print(f"Time invested: {format_duration(stats.time_invested_minutes)}")

    sign = "+" if stats.improvement_rate >= 0 else ""
    trend_color = "green" if stats.trend == "improving" else "red"
    console.print(
        f"Trend: [{trend_color}]{stats.trend} "
        f"({sign}{stats.improvement_rate:.0f}%)[/{trend_color}] "
        "[dim]last 7 days vs the 7 before[/dim]"
    )
    console.print(
        f"Most productive day: {(stats.most_productive_day or 'no data yet').title()}"
    )
    console.print(f"Most active day: {(stats.most_active_day or 'no data yet').title()}")

    console.print("\n[bold]Last 7 days:[/bold]")
    for entry in stats.last_days:
        pct = entry.completion * 100
        day_color = get_completion_color(pct) if entry.tasks_planned else "dim"
        console.print(
            f"  {entry.day:%a %d %b}  [{day_color}]{get_progress_bar(pct)} "
            f"{pct:3.0f}%[/{day_color}] "
            f"[dim]({entry.tasks_completed}/{entry.tasks_planned})[/dim]"
        )

    if stats.tasks_by_tag:
        console.print("\n[bold]Tasks by tag:[/bold]")
        for name, count in sorted(
            stats.tasks_by_tag.items(), key=lambda item: (-item[1], item[0])
        ):
            console.print(f"  #{name:<16} {count}")

    console.print("\n[bold]Active days by weekday:[/bold]")
    busiest = max(stats.weekday_activity.values(), default=0)
    for name, count in stats.weekday_activity.items():
        pct = count / busiest * 100 if busiest else 0
        console.print(f"  {name[:3].title()}  {get_progress_bar(pct)} {count}")
    console.print()


# ============================================================================
# Bookmarks and tags
# ============================================================================


def format_bookmarks(bookmarks: list[Bookmark]) -> None:
    if not bookmarks:
        console.print("[yellow]No bookmarks yet[/yellow]")
        return
    ids = [bookmark.id for bookmark in bookmarks]
    for bookmark in bookmarks:
        line = Text("🔖 ")
        line.append(bookmark.title, style=f"bold {bookmark.color or ''}".strip())
        line.append("  ")
        line.append(bookmark.url, style=f"link {bookmark.url}")
        line.append(f"  {shortest_unique_prefix(ids, bookmark.id)}", style="dim")
        console.print(line)


def format_tags(tags: list[TaskTag]) -> None:
    if not tags:
        console.print("[yellow]No tags[/yellow]")
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name")
    table.add_column("Color")
    for tag in tags:
        table.add_row(format_tag(tag), tag.color)
    console.print(table)
