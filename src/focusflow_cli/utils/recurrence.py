"""Recurrence rules: due-today matching, next occurrence and completion forking.

All functions are pure. They never mutate the tasks they receive and take
"today" as an argument so callers (and tests) control the clock.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from focusflow_cli.models import Task
from focusflow_cli.utils.dates import (
    add_days,
    add_months,
    days_in_month,
    get_today,
    weekday_name,
)
from focusflow_cli.utils.ids import generate_id
from focusflow_cli.utils.logger import get_logger

RECURRENCE_PATTERNS: tuple[str, ...] = ("once", "daily", "weekly", "monthly")


def _matches_month_day(anchor: date, day: date) -> bool:
    """Monthly match, clamped to month end when the anchor day does not exist."""
    if day.day == anchor.day:
        return True
    last_day = days_in_month(day.year, day.month)
    return anchor.day > last_day and day.day == last_day


def is_due_today(task: Task, today: date) -> bool:
    """Return True if the task should be worked on ``today``.

    A task is always due on its own due date. Beyond that, only recurring
    tasks are due, and never before their anchor date or after the rule's
    end date.
    """
    if task.due_date == today:
        return True

    rule = task.recurrence
    if rule is None:
        return False
    if today < task.due_date:
        return False
    if rule.end_date is not None and today > rule.end_date:
        return False

    if rule.pattern == "daily":
        return True
    if rule.pattern == "weekly":
        return weekday_name(today) in rule.week_days
    if rule.pattern == "monthly":
        return _matches_month_day(task.due_date, today)
    return False


def next_occurrence(task: Task) -> date:
    """Return the due date of the occurrence that follows ``task``.

    Weekly tasks advance by a fixed 7-day stride from the current due date.
    Monthly tasks advance one calendar month, clamped to month end.
    """
    rule = task.recurrence
    if rule is None:
        return task.due_date

    if rule.pattern == "daily":
        return add_days(task.due_date, 1)
    if rule.pattern == "weekly":
        return add_days(task.due_date, 7)
    if rule.pattern == "monthly":
        return add_months(task.due_date, 1)
    return task.due_date


def on_recurring_task_completed(
    task: Task,
    all_tasks: list[Task],
    today: date | None = None,
    id_factory: Callable[[], str] = generate_id,
) -> list[Task]:
    """Append the next occurrence of a completed recurring task.

    The completed record stays in place; the next cycle becomes its own
    pending record with a fresh ID.

    Args:
        task: The task that was just completed
        all_tasks: Every task record of the user
        today: Current date (defaults to the local calendar day)
        id_factory: Generator for the new record's ID

    Returns:
        A new list: ``all_tasks`` plus the forked occurrence, if any
    """
    if today is None:
        today = get_today()

    tasks = list(all_tasks)
    if not task.is_recurring:
        return tasks

    rule = task.recurrence
    if rule.end_date is not None and today > rule.end_date:
        get_logger().debug("recurrence of %s ended on %s", task.id, rule.end_date)
        return tasks

    next_date = next_occurrence(task)
    if next_date == task.due_date:
        return tasks
    if rule.end_date is not None and next_date > rule.end_date:
        get_logger().debug(
            "next occurrence of %s (%s) is past end date %s",
            task.id,
            next_date,
            rule.end_date,
        )
        return tasks

    forked = task.model_copy(
        update={
            "id": id_factory(),
            "due_date": next_date,
            "status": "pending",
            "tags": [tag.model_copy() for tag in task.tags],
            "recurrence": rule.model_copy(deep=True),
        }
    )
    tasks.append(forked)
    get_logger().info("forked task %s -> %s due %s", task.id, forked.id, next_date)
    return tasks
