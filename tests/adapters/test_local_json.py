"""Tests for the local JSON document repository."""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import patch

import pytest

from focusflow_cli.adapters.local_json import LocalJsonUserDataRepository
from focusflow_cli.exceptions import PersistenceError
from focusflow_cli.models import StreakData
from focusflow_cli.utils.recurrence import is_due_today, next_occurrence

USER = "user-1"


@pytest.mark.asyncio
async def test_load_creates_default_document(repo):
    data = await repo.load(USER)

    assert data.tasks == []
    assert [tag.name for tag in data.tags] == ["Work", "Personal", "Urgent", "Learning"]
    assert data.updated_at is not None
    path = repo.data_dir / f"{USER}.json"
    assert path.exists()
    assert path.stat().st_mode & 0o777 == 0o600


@pytest.mark.asyncio
async def test_save_merges_top_level_keys(repo, task_factory):
    await repo.load(USER)
    streak = StreakData(current_streak=2, longest_streak=5, last_completion_date=date(2024, 1, 14))

    assert await repo.save(USER, {"tasks": [task_factory().to_document()]})
    assert await repo.save(USER, {"streak": streak.to_document()})

    data = await repo.load(USER)
    assert [task.id for task in data.tasks] == ["task-1"]
    assert data.streak == streak
    assert len(data.tags) == 4


@pytest.mark.asyncio
async def test_document_uses_camel_case(repo, task_factory):
    await repo.save(USER, {"tasks": [task_factory(pattern="daily").to_document()]})

    raw = json.loads((repo.data_dir / f"{USER}.json").read_text(encoding="utf-8"))

    assert raw["tasks"][0]["dueDate"] == "2024-01-15"
    assert raw["tasks"][0]["recurrence"]["weekDays"] == []
    assert "currentStreak" in raw["streak"]
    assert "updatedAt" in raw


@pytest.mark.asyncio
async def test_save_rejects_unknown_keys(repo):
    with pytest.raises(ValueError, match="Unknown document keys"):
        await repo.save(USER, {"settings": {}})


@pytest.mark.asyncio
async def test_save_failure_returns_false(tmp_path):
    blocker = tmp_path / "documents"
    blocker.write_text("not a directory", encoding="utf-8")
    repo = LocalJsonUserDataRepository(blocker)

    assert await repo.save(USER, {"tasks": []}) is False


@pytest.mark.asyncio
async def test_corrupt_document(repo):
    repo.data_dir.mkdir(parents=True)
    (repo.data_dir / f"{USER}.json").write_text("{oops", encoding="utf-8")

    with pytest.raises(PersistenceError):
        await repo.load(USER)


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", ["", "..", "a/b"])
async def test_invalid_user_id(repo, user_id):
    with pytest.raises(ValueError, match="Invalid user ID"):
        await repo.load(user_id)


@pytest.mark.asyncio
async def test_unserializable_save_leaves_no_temp_file(repo, task_factory):
    assert await repo.save(USER, {"tasks": [task_factory().to_document()]})

    assert await repo.save(USER, {"tasks": [object()]}) is False

    assert not (repo.data_dir / f"{USER}.json.tmp").exists()
    assert [task.id for task in (await repo.load(USER)).tasks] == ["task-1"]


@pytest.mark.asyncio
async def test_failed_creation_is_not_logged_as_created(tmp_path):
    blocker = tmp_path / "documents"
    blocker.write_text("not a directory", encoding="utf-8")
    repo = LocalJsonUserDataRepository(blocker)

    with patch("focusflow_cli.adapters.local_json.get_logger") as get_logger:
        data = await repo.load(USER)

    assert data.tasks == []
    get_logger.return_value.warning.assert_called_once()
    get_logger.return_value.info.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_recurrence_pattern_loads_as_never_due(repo):
    repo.data_dir.mkdir(parents=True)
    document = {
        "tasks": [
            {
                "id": "t1",
                "title": "Renew passport",
                "dueDate": "2024-01-01",
                "status": "pending",
                "tags": [],
                "recurrence": {
                    "pattern": "yearly",
                    "weekDays": ["someday"],
                    "endDate": None,
                },
            }
        ]
    }
    (repo.data_dir / f"{USER}.json").write_text(json.dumps(document), encoding="utf-8")

    task = (await repo.load(USER)).tasks[0]

    assert task.recurrence.pattern == "yearly"
    assert not is_due_today(task, date(2025, 1, 1))
    assert next_occurrence(task) == date(2024, 1, 1)
