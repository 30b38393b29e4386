"""Task service - Business logic for task operations.

This service layer sits between commands and the user document repository.
Every change to the task list also refreshes today's progress entry and the
streak, and the three are saved together.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from focusflow_cli.exceptions import NotFoundError, PersistenceError
from focusflow_cli.models import RecurrenceRule, Task, TaskStatus, TaskTag, UserData
from focusflow_cli.repositories import UserDataRepository
from focusflow_cli.services.events import STREAK_CHANGED, TASKS_CHANGED, EventEmitter
from focusflow_cli.services.progress_service import recompute
from focusflow_cli.utils.dates import get_today, normalize_weekday, weekday_name
from focusflow_cli.utils.ids import generate_id, resolve_id
from focusflow_cli.utils.logger import get_logger
from focusflow_cli.utils.recurrence import (
    RECURRENCE_PATTERNS,
    on_recurring_task_completed,
)
from focusflow_cli.utils.streak import tasks_for_date


@dataclass
class StatusChange:
    """Outcome of a status change."""

    task: Task
    previous_status: TaskStatus
    next_task: Task | None = None


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using the user document repository.
    """

    def __init__(
        self,
        repository: UserDataRepository,
        user_id: str,
        events: EventEmitter | None = None,
        clock: Callable[[], date] = get_today,
        id_factory: Callable[[], str] = generate_id,
    ):
        """Initialize the task service.

        Args:
            repository: UserDataRepository implementation for data access
            user_id: Owner of the document
            events: Emitter notified of task and streak changes
            clock: Returns the current calendar day
            id_factory: Generator for new task IDs
        """
        self.repository = repository
        self.user_id = user_id
        self.events = events
        self.clock = clock
        self.id_factory = id_factory

    async def _load(self) -> UserData:
        return await self.repository.load(self.user_id)

    async def _commit(self, data: UserData, tasks: list[Task]) -> None:
        """Save ``tasks`` with the progress and streak derived from them."""
        today = self.clock()
        progress, streak = recompute(data, tasks, today)
        saved = await self.repository.save(
            self.user_id,
            {
                "tasks": [task.to_document() for task in tasks],
                "progress": [entry.to_document() for entry in progress],
                "streak": streak.to_document(),
            },
        )
        if not saved:
            raise PersistenceError("Could not save tasks")

        if self.events is not None:
            self.events.emit(TASKS_CHANGED, tasks)
            if streak != data.streak:
                self.events.emit(STREAK_CHANGED, streak)

    async def list_tasks(
        self,
        *,
        status: str | None = None,
        day: date | None = None,
    ) -> list[Task]:
        """List tasks, optionally only those planned for ``day``.

        Args:
            status: Filter by status ("pending", "in-progress", "completed")
            day: Only tasks due on this day (recurrences included)

        Returns:
            List of Task objects sorted by due date
        """
        data = await self._load()
        tasks = data.tasks if day is None else tasks_for_date(data.tasks, day)
        if status:
            tasks = [task for task in tasks if task.status == status]
        return sorted(tasks, key=lambda task: (task.due_date, task.title.lower()))

    async def today_tasks(self) -> list[Task]:
        return await self.list_tasks(day=self.clock())

    async def get_task(self, task_id: str) -> Task:
        """Get a task by full ID or unique prefix."""
        data = await self._load()
        return resolve_id(data.tasks, task_id)

    def _resolve_tags(self, data: UserData, names: list[str]) -> list[TaskTag]:
        tags = []
        for name in names:
            match = next(
                (tag for tag in data.tags if tag.name.lower() == name.strip().lower()),
                None,
            )
            if match is None:
                available = ", ".join(tag.name for tag in data.tags) or "none"
                raise NotFoundError(f"Unknown tag '{name}' (available: {available})")
            if match not in tags:
                tags.append(match)
        return tags

    @staticmethod
    def build_recurrence(
        pattern: str,
        week_days: list[str] | None,
        end_date: date | None,
        due_date: date,
    ) -> RecurrenceRule | None:
        """Build the recurrence descriptor of a new task.

        Weekly rules without explicit days repeat on the due date's weekday.

        Raises:
            ValueError: For unknown patterns or weekday names, or an end date
                before the due date
        """
        if pattern not in RECURRENCE_PATTERNS:
            raise ValueError(
                f"Unknown recurrence '{pattern}'. Use one of: "
                + ", ".join(RECURRENCE_PATTERNS)
            )
        if pattern == "once":
            return None
        if end_date is not None and end_date < due_date:
            raise ValueError("End date must not be before the due date")

        days: list[str] = []
        if pattern == "weekly":
            for value in week_days or [weekday_name(due_date)]:
                day = normalize_weekday(value)
                if day not in days:
                    days.append(day)
        return RecurrenceRule(pattern=pattern, week_days=days, end_date=end_date)

    async def add_task(
        self,
        title: str,
        *,
        due_date: date | None = None,
        description: str | None = None,
        estimated_minutes: int | None = None,
        tags: list[str] | None = None,
        pattern: str = "once",
        week_days: list[str] | None = None,
        end_date: date | None = None,
    ) -> Task:
        """Create a new task.

        Args:
            title: Task title (required)
            due_date: Due date, defaults to today
            description: Detailed description
            estimated_minutes: Time estimate
            tags: Tag names from the user's tag list
            pattern: once, daily, weekly or monthly
            week_days: Weekday names for weekly tasks
            end_date: Last day the task may recur on

        Returns:
            Created Task object
        """
        title = title.strip()
        if not title:
            raise ValueError("Task title cannot be empty")
        if due_date is None:
            due_date = self.clock()

        data = await self._load()
        task = Task(
            id=self.id_factory(),
            title=title,
            description=description or None,
            due_date=due_date,
            estimated_minutes=estimated_minutes,
            tags=self._resolve_tags(data, tags or []),
            recurrence=self.build_recurrence(pattern, week_days, end_date, due_date),
        )
        await self._commit(data, [*data.tasks, task])
        get_logger().info("added task %s due %s", task.id, task.due_date)
        return task

    async def set_status(self, task_id: str, status: TaskStatus) -> StatusChange:
        """Set a task's status.

        Completing a recurring task keeps the completed record and appends its
        next occurrence as a new pending task.
        """
        data = await self._load()
        task = resolve_id(data.tasks, task_id)
        previous = task.status
        if previous == status:
            return StatusChange(task=task, previous_status=previous)

        updated = task.model_copy(update={"status": status})
        tasks = [updated if t.id == task.id else t for t in data.tasks]

        next_task = None
        if status == "completed" and updated.is_recurring:
            tasks = on_recurring_task_completed(
                updated, tasks, today=self.clock(), id_factory=self.id_factory
            )
            if len(tasks) > len(data.tasks):
                next_task = tasks[-1]

        await self._commit(data, tasks)
        get_logger().info("task %s: %s -> %s", task.id, previous, status)
        return StatusChange(task=updated, previous_status=previous, next_task=next_task)

    async def toggle_complete(self, task_id: str) -> StatusChange:
        """Mark a task completed, or back to pending if it already is."""
        task = await self.get_task(task_id)
        status: TaskStatus = "pending" if task.status == "completed" else "completed"
        return await self.set_status(task.id, status)

    async def start_task(self, task_id: str) -> StatusChange:
        return await self.set_status(task_id, "in-progress")

    async def reopen_task(self, task_id: str) -> StatusChange:
        return await self.set_status(task_id, "pending")

    async def delete_task(self, task_id: str) -> Task:
        """Delete a single task record (other occurrences are kept)."""
        data = await self._load()
        task = resolve_id(data.tasks, task_id)
        await self._commit(data, [t for t in data.tasks if t.id != task.id])
        get_logger().info("deleted task %s", task.id)
        return task
