"""Unit tests for ID generation and prefix resolution."""

from __future__ import annotations

import pytest

from focusflow_cli.exceptions import AmbiguousIdError, NotFoundError
from focusflow_cli.utils.ids import generate_id, resolve_id, shortest_unique_prefix


class TestGenerateId:
    def test_unique_hex(self):
        ids = {generate_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(len(i) == 32 and int(i, 16) >= 0 for i in ids)


class TestShortestUniquePrefix:
    def test_min_length(self):
        assert shortest_unique_prefix(["abcdef", "zzzzzz"], "abcdef") == "abcd"

    def test_grows_until_unique(self):
        ids = ["abcdef12", "abcdef34"]
        assert shortest_unique_prefix(ids, "abcdef12") == "abcdef1"

    def test_full_id_fallback(self):
        ids = ["abcd", "abcde"]
        assert shortest_unique_prefix(ids, "abcd") == "abcd"


class TestResolveId:
    def test_exact_match(self, task_factory):
        tasks = [task_factory("abc"), task_factory("abcd")]
        assert resolve_id(tasks, "abc").id == "abc"

    def test_unique_prefix(self, task_factory):
        tasks = [task_factory("abc123"), task_factory("def456")]
        assert resolve_id(tasks, "de").id == "def456"

    def test_not_found(self, task_factory):
        with pytest.raises(NotFoundError, match="No task found"):
            resolve_id([task_factory("abc")], "zzz")

    def test_ambiguous(self, task_factory):
        tasks = [task_factory("abc123"), task_factory("abc456")]
        with pytest.raises(AmbiguousIdError) as exc_info:
            resolve_id(tasks, "abc")
        assert exc_info.value.candidates == ["abc1", "abc4"]

    def test_kind_in_message(self, task_factory):
        with pytest.raises(NotFoundError, match="No bookmark found"):
            resolve_id([], "x", kind="bookmark")
