"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest

from focusflow_cli.adapters.local_json import LocalJsonUserDataRepository
from focusflow_cli.models import RecurrenceRule, Task


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def isolated_log_dir(tmp_path_factory):
    """Send the rotating log file to a temporary directory."""
    log_dir = str(tmp_path_factory.mktemp("logs"))
    with patch("focusflow_cli.utils.logger.user_log_dir", return_value=log_dir):
        yield log_dir


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from focusflow_cli.services.config_service import ConfigService, get_config_service

    get_config_service.cache_clear()
    with patch(
        "focusflow_cli.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        with patch(
            "focusflow_cli.services.config_service.user_data_dir",
            return_value=str(tmp_path / "data"),
        ):
            svc = ConfigService()
            svc.load_config()
            yield svc
    get_config_service.cache_clear()


@pytest.fixture()
def patch_config_service(tmp_config):
    """Make get_config_service() return the temporary ConfigService."""
    with patch(
        "focusflow_cli.services.config_service.get_config_service",
        return_value=tmp_config,
    ):
        with patch(
            "focusflow_cli.services.context_manager.get_config_service",
            return_value=tmp_config,
        ):
            yield tmp_config


# ---------------------------------------------------------------------------
# Domain helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def repo(tmp_path) -> LocalJsonUserDataRepository:
    """Local JSON repository in a temporary directory."""
    return LocalJsonUserDataRepository(tmp_path / "documents")


def make_task(
    task_id: str = "task-1",
    due: date = date(2024, 1, 15),
    pattern: str | None = None,
    week_days: list[str] | None = None,
    end_date: date | None = None,
    status: str = "pending",
    title: str = "Task",
) -> Task:
    """Build a Task with an optional recurrence rule."""
    recurrence = None
    if pattern is not None:
        recurrence = RecurrenceRule(
            pattern=pattern, week_days=week_days or [], end_date=end_date
        )
    return Task(
        id=task_id,
        title=title,
        due_date=due,
        status=status,
        recurrence=recurrence,
    )


@pytest.fixture()
def task_factory():
    """Factory fixture for Task objects (see ``make_task``)."""
    return make_task
