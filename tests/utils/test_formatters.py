"""Tests for output formatters."""

from __future__ import annotations

import json
from datetime import date

import yaml

from focusflow_cli.models import RecurrenceRule, StreakData
from focusflow_cli.services.progress_service import CalendarDay
from focusflow_cli.utils.ui import formatters
from focusflow_cli.utils.ui.formatters import (
    describe_recurrence,
    format_due_date,
    format_output,
    get_completion_color,
    get_progress_bar,
    task_rows,
)


class TestDescribeRecurrence:
    def test_none(self):
        assert describe_recurrence(None) == "once"

    def test_weekly_with_end(self):
        rule = RecurrenceRule(
            pattern="weekly",
            week_days=["monday", "wednesday"],
            end_date=date(2024, 6, 30),
        )
        assert describe_recurrence(rule) == "weekly on mon, wed until 2024-06-30"

    def test_monthly(self):
        assert describe_recurrence(RecurrenceRule(pattern="monthly")) == "monthly"


class TestFormatDueDate:
    def test_today(self):
        assert format_due_date(date(2024, 1, 15), date(2024, 1, 15)) == "today"

    def test_same_year(self):
        assert format_due_date(date(2024, 1, 16), date(2024, 1, 15)) == "Tue 16/01"

    def test_other_year(self):
        assert format_due_date(date(2025, 1, 1), date(2024, 1, 15)) == "Wed 01/01/2025"


def test_task_rows_use_short_ids(task_factory):
    tasks = [task_factory("abcdef01"), task_factory("abcxyz02", pattern="daily")]

    rows = task_rows(tasks)

    assert [row["id"] for row in rows] == ["abcd", "abcx"]
    assert rows[1]["repeat"] == "daily"
    assert rows[0]["due_date"] == "2024-01-15"


def test_progress_bar_and_color():
    assert get_progress_bar(50) == "▓▓▓▓▓░░░░░"
    assert get_progress_bar(100) == "▓" * 10
    assert get_completion_color(85) == "green"
    assert get_completion_color(50) == "yellow"
    assert get_completion_color(10) == "red"


def test_format_output_json(capsys):
    format_output([{"id": "a", "title": "Read"}], "json")
    assert json.loads(capsys.readouterr().out) == [{"id": "a", "title": "Read"}]


def test_format_output_yaml(capsys):
    format_output({"id": "a", "tags": ["Work"]}, "yaml")
    assert yaml.safe_load(capsys.readouterr().out) == {"id": "a", "tags": ["Work"]}


def test_format_output_quiet(capsys):
    format_output([{"id": "a"}, {"id": "b"}], "quiet")
    assert capsys.readouterr().out.split() == ["a", "b"]


def test_format_streak(capsys):
    formatters.format_streak(
        StreakData(current_streak=1, longest_streak=4, last_completion_date=date(2024, 1, 15))
    )
    out = capsys.readouterr().out
    assert "Current streak: 1 day" in out
    assert "Current streak: 1 days" not in out
    assert "Longest streak: 4 days" in out


def test_format_calendar_starts_on_sunday(capsys):
    days = [
        CalendarDay(day=date(2024, 9, d), completion=0.0, level="empty")
        for d in range(1, 31)
    ]
    formatters.format_calendar(days, week_starts_on="sunday")
    out = capsys.readouterr().out
    assert "September 2024" in out
    # 2024-09-01 is a Sunday, so the first row starts with day 1
    header_index = out.index("Su")
    assert out.index(" 1") > header_index
