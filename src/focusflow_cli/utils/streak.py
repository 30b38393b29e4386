"""Daily progress recording and the completion streak state machine."""

from __future__ import annotations

from datetime import date

from focusflow_cli.models import DailyProgress, StreakData, Task
from focusflow_cli.utils.dates import add_days, get_today
from focusflow_cli.utils.logger import get_logger
from focusflow_cli.utils.recurrence import is_due_today


def tasks_for_date(tasks: list[Task], day: date) -> list[Task]:
    """Return the tasks planned for ``day``.

    Completed recurring records only count on their own due date; on later
    days their forked occurrence carries the cycle.
    """
    planned = []
    for task in tasks:
        if not is_due_today(task, day):
            continue
        if task.status == "completed" and task.due_date != day:
            continue
        planned.append(task)
    return planned


def completion_ratio(completed: int, planned: int) -> float:
    if planned <= 0:
        return 0.0
    return completed / planned


def record_daily_progress(
    tasks: list[Task],
    progress: list[DailyProgress],
    today: date | None = None,
) -> list[DailyProgress]:
    """Create or refresh today's DailyProgress entry.

    Days with nothing planned get no entry. Existing entries for other days
    are carried over untouched.

    Returns:
        A new progress list
    """
    if today is None:
        today = get_today()

    planned = tasks_for_date(tasks, today)
    if not planned:
        return list(progress)

    completed = [task for task in planned if task.status == "completed"]
    entry = DailyProgress(
        date=today,
        tasks_completed=len(completed),
        tasks_planned=len(planned),
        completion=completion_ratio(len(completed), len(planned)),
        tasks=[task.model_copy(deep=True) for task in planned],
    )

    updated = []
    replaced = False
    for existing in progress:
        if existing.date == today:
            if not replaced:
                updated.append(entry)
                replaced = True
            continue
        updated.append(existing)
    if not replaced:
        updated.append(entry)
    return updated


def find_progress(progress: list[DailyProgress], day: date) -> DailyProgress | None:
    for entry in progress:
        if entry.date == day:
            return entry
    return None


def update_streak(
    progress: list[DailyProgress],
    prev_streak: StreakData,
    today: date | None = None,
) -> StreakData:
    """Advance, keep or break the streak based on today's progress.

    A day qualifies only when every planned task was completed. A missed day
    breaks the streak once the last qualifying day is older than yesterday.
    Calling this again on a day already counted returns the previous state.
    """
    if today is None:
        today = get_today()

    if prev_streak.last_completion_date == today:
        return prev_streak

    today_progress = find_progress(progress, today)
    qualifies = today_progress is not None and today_progress.completion == 1

    if not qualifies:
        last = prev_streak.last_completion_date
        if last is not None and last < add_days(today, -1):
            get_logger().info(
                "streak broken: last qualifying day %s, streak was %d",
                last,
                prev_streak.current_streak,
            )
            return StreakData(
                current_streak=0,
                longest_streak=prev_streak.longest_streak,
                last_completion_date=None,
            )
        return prev_streak

    if prev_streak.last_completion_date is not None:
        current = prev_streak.current_streak + 1
    else:
        current = 1

    return StreakData(
        current_streak=current,
        longest_streak=max(current, prev_streak.longest_streak),
        last_completion_date=today,
    )


def completion_level(completion: float) -> str:
    """Bucket a completion ratio for the activity calendar."""
    if completion == 0:
        return "empty"
    if completion < 0.5:
        return "low"
    if completion < 1:
        return "medium"
    return "high"
