"""Progress service - daily progress history, streak, calendar and statistics."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import date

from focusflow_cli.exceptions import PersistenceError
from focusflow_cli.models import DailyProgress, StreakData, Task, UserData
from focusflow_cli.repositories import UserDataRepository
from focusflow_cli.services.events import STREAK_CHANGED, EventEmitter
from focusflow_cli.utils.dates import (
    WEEKDAY_NAMES,
    add_days,
    get_today,
    month_days,
    weekday_name,
)
from focusflow_cli.utils.logger import get_logger
from focusflow_cli.utils.streak import (
    completion_level,
    find_progress,
    record_daily_progress,
    tasks_for_date,
    update_streak,
)

# Length of the recent-activity window and of each half of the trend comparison
STATS_WINDOW_DAYS = 7
# Time credited to a completed task that has no estimate
DEFAULT_TASK_MINUTES = 30


@dataclass
class CalendarDay:
    """One cell of the activity calendar."""

    day: date
    completion: float
    level: str
    tasks_completed: int = 0
    tasks_planned: int = 0
    is_today: bool = False


@dataclass
class ProgressStatistics:
    """Aggregate figures over every task and progress record of a user.

    Attributes:
        total_tasks: Number of task records, completed occurrences included
        completed_tasks: Records with status completed
        pending_tasks: Records with status pending
        in_progress_tasks: Records with status in-progress
        completion_rate: completed / total as a percentage (0 with no tasks)
        last_days: Calendar cells of the last seven days, oldest first
        tasks_by_tag: Number of tasks carrying each tag name
        weekday_activity: Days with any completion, per weekday (Monday first)
        most_productive_day: Weekday with the most completed tasks, if any
        most_active_day: Weekday with the most active days, if any
        recent_average: Mean completion over the last seven days
        previous_average: Mean completion over the seven days before those
        improvement_rate: Relative change between the two, as a percentage
        trend: "improving" when improvement_rate >= 0, else "declining"
        time_invested_minutes: Estimated minutes spent on completed tasks
    """

    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    in_progress_tasks: int
    completion_rate: float
    last_days: list[CalendarDay]
    tasks_by_tag: dict[str, int]
    weekday_activity: dict[str, int]
    most_productive_day: str | None
    most_active_day: str | None
    recent_average: float
    previous_average: float
    improvement_rate: float
    trend: str
    time_invested_minutes: int

    def to_dict(self) -> dict:
        """Plain data for json/yaml output."""
        data = asdict(self)
        data["completion_rate"] = round(self.completion_rate, 1)
        data["recent_average"] = round(self.recent_average, 3)
        data["previous_average"] = round(self.previous_average, 3)
        data["improvement_rate"] = round(self.improvement_rate, 1)
        data["last_days"] = [
            {
                "date": entry.day.isoformat(),
                "completion": round(entry.completion, 3),
                "tasks_completed": entry.tasks_completed,
                "tasks_planned": entry.tasks_planned,
            }
            for entry in self.last_days
        ]
        return data


def _calendar_day(entry: DailyProgress | None, day: date, today: date) -> CalendarDay:
    completion = entry.completion if entry else 0.0
    return CalendarDay(
        day=day,
        completion=completion,
        level=completion_level(completion),
        tasks_completed=entry.tasks_completed if entry else 0,
        tasks_planned=entry.tasks_planned if entry else 0,
        is_today=day == today,
    )


def _average_completion(
    by_day: dict[date, DailyProgress], last_day: date, days: int
) -> float:
    """Mean completion of ``days`` days ending on ``last_day``; gaps count as 0."""
    total = 0.0
    for offset in range(days):
        entry = by_day.get(add_days(last_day, -offset))
        total += entry.completion if entry else 0.0
    return total / days


def compute_statistics(data: UserData, today: date) -> ProgressStatistics:
    """Summarize task counts, weekly activity and the completion trend."""
    statuses = Counter(task.status for task in data.tasks)
    total = len(data.tasks)
    completed = statuses["completed"]

    by_day = {entry.date: entry for entry in data.progress}
    last_days = []
    for offset in range(STATS_WINDOW_DAYS - 1, -1, -1):
        day = add_days(today, -offset)
        last_days.append(_calendar_day(by_day.get(day), day, today))

    tasks_by_tag = Counter(tag.name for task in data.tasks for tag in task.tags)

    completed_by_weekday: Counter[str] = Counter()
    weekday_activity = dict.fromkeys(WEEKDAY_NAMES, 0)
    for entry in data.progress:
        if entry.tasks_completed > 0:
            completed_by_weekday[weekday_name(entry.date)] += entry.tasks_completed
        if entry.completion > 0:
            weekday_activity[weekday_name(entry.date)] += 1

    most_productive_day = None
    if completed_by_weekday:
        most_productive_day = completed_by_weekday.most_common(1)[0][0]
    most_active_day = None
    if any(weekday_activity.values()):
        most_active_day = max(weekday_activity, key=weekday_activity.__getitem__)

    recent = _average_completion(by_day, today, STATS_WINDOW_DAYS)
    previous = _average_completion(
        by_day, add_days(today, -STATS_WINDOW_DAYS), STATS_WINDOW_DAYS
    )
    improvement = (recent - previous) / previous * 100 if previous > 0 else 0.0

    return ProgressStatistics(
        total_tasks=total,
        completed_tasks=completed,
        pending_tasks=statuses["pending"],
        in_progress_tasks=statuses["in-progress"],
        completion_rate=completed / total * 100 if total else 0.0,
        last_days=last_days,
        tasks_by_tag=dict(tasks_by_tag),
        weekday_activity=weekday_activity,
        most_productive_day=most_productive_day,
        most_active_day=most_active_day,
        recent_average=recent,
        previous_average=previous,
        improvement_rate=improvement,
        trend="improving" if improvement >= 0 else "declining",
        time_invested_minutes=sum(
            task.estimated_minutes
            if task.estimated_minutes is not None
            else DEFAULT_TASK_MINUTES
            for task in data.tasks
            if task.status == "completed"
        ),
    )


def recompute(
    data: UserData, tasks: list[Task], today: date
) -> tuple[list[DailyProgress], StreakData]:
    """Derive today's progress entry and the streak from ``tasks``."""
    progress = record_daily_progress(tasks, data.progress, today)
    streak = update_streak(progress, data.streak, today)
    return progress, streak


class ProgressService:
    """Service for progress and streak business logic."""

    def __init__(
        self,
        repository: UserDataRepository,
        user_id: str,
        events: EventEmitter | None = None,
        clock: Callable[[], date] = get_today,
    ):
        """Initialize the progress service.

        Args:
            repository: UserDataRepository implementation for data access
            user_id: Owner of the document
            events: Emitter notified when the streak changes
            clock: Returns the current calendar day
        """
        self.repository = repository
        self.user_id = user_id
        self.events = events
        self.clock = clock

    async def refresh(self) -> StreakData:
        """Record today's progress and advance or break the streak."""
        today = self.clock()
        data = await self.repository.load(self.user_id)
        progress, streak = recompute(data, data.tasks, today)
        if progress == data.progress and streak == data.streak:
            return streak

        saved = await self.repository.save(
            self.user_id,
            {
                "progress": [entry.to_document() for entry in progress],
                "streak": streak.to_document(),
            },
        )
        if not saved:
            raise PersistenceError("Could not save progress")
        if streak != data.streak and self.events is not None:
            self.events.emit(STREAK_CHANGED, streak)
        get_logger().debug("progress refreshed for %s", today)
        return streak

    async def get_streak(self) -> StreakData:
        data = await self.repository.load(self.user_id)
        return data.streak

    async def get_progress(self, day: date) -> DailyProgress | None:
        data = await self.repository.load(self.user_id)
        return find_progress(data.progress, day)

    async def tasks_on(self, day: date) -> list[Task]:
        """Tasks of a past day from its snapshot, otherwise from the task list."""
        data = await self.repository.load(self.user_id)
        entry = find_progress(data.progress, day)
        if entry is not None and day < self.clock():
            return entry.tasks
        return tasks_for_date(data.tasks, day)

    async def calendar_month(self, year: int, month: int) -> list[CalendarDay]:
        """Completion of every day of a month, for the activity heat-map."""
        data = await self.repository.load(self.user_id)
        today = self.clock()
        by_day = {entry.date: entry for entry in data.progress}
        return [
            _calendar_day(by_day.get(day), day, today)
            for day in month_days(year, month)
        ]

    async def statistics(self) -> ProgressStatistics:
        """Task counts, recent activity and the completion trend."""
        data = await self.repository.load(self.user_id)
        return compute_statistics(data, self.clock())
