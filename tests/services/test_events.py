"""Unit tests for the in-process EventEmitter."""

from __future__ import annotations

from focusflow_cli.services.events import AUTH_CHANGED, TASKS_CHANGED, EventEmitter


class TestEventEmitter:
    def test_emit_calls_subscribers_in_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.subscribe(TASKS_CHANGED, lambda p: calls.append(("a", p)))
        emitter.subscribe(TASKS_CHANGED, lambda p: calls.append(("b", p)))

        emitter.emit(TASKS_CHANGED, [1])

        assert calls == [("a", [1]), ("b", [1])]

    def test_events_are_isolated(self):
        emitter = EventEmitter()
        calls = []
        emitter.subscribe(AUTH_CHANGED, calls.append)
        emitter.emit(TASKS_CHANGED, "x")
        assert calls == []

    def test_unsubscribe(self):
        emitter = EventEmitter()
        calls = []
        unsubscribe = emitter.subscribe(TASKS_CHANGED, calls.append)

        unsubscribe()
        unsubscribe()
        emitter.emit(TASKS_CHANGED, "x")

        assert calls == []
        assert emitter.listener_count(TASKS_CHANGED) == 0

    def test_failing_listener_does_not_stop_others(self):
        emitter = EventEmitter()
        calls = []

        def boom(_payload):
            raise RuntimeError("listener failed")

        emitter.subscribe(TASKS_CHANGED, boom)
        emitter.subscribe(TASKS_CHANGED, calls.append)
        emitter.emit(TASKS_CHANGED, "x")

        assert calls == ["x"]

    def test_unsubscribe_during_emit(self):
        emitter = EventEmitter()
        calls = []
        holder = {}

        def once(payload):
            calls.append(payload)
            holder["unsubscribe"]()

        holder["unsubscribe"] = emitter.subscribe(TASKS_CHANGED, once)
        emitter.emit(TASKS_CHANGED, 1)
        emitter.emit(TASKS_CHANGED, 2)

        assert calls == [1]
