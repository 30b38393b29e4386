"""In-process event emitter.

The composition root owns a single emitter (see ``context_manager``) and
hands it to services; subscribers receive the payload of every event they
registered for.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

from focusflow_cli.utils.logger import get_logger

TASKS_CHANGED = "tasks_changed"
BOOKMARKS_CHANGED = "bookmarks_changed"
STREAK_CHANGED = "streak_changed"
AUTH_CHANGED = "auth_changed"

Listener = Callable[[Any], None]


class EventEmitter:
    """Named-event subscription registry."""

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, event: str, callback: Listener) -> Callable[[], None]:
        """Register ``callback`` for ``event``.

        Returns:
            A function that removes this subscription (safe to call twice)
        """
        self._listeners[event].append(callback)

        def unsubscribe() -> None:
            listeners = self._listeners.get(event, [])
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def emit(self, event: str, payload: Any = None) -> None:
        """Call every listener of ``event`` in subscription order.

        A failing listener is logged and does not stop the others.
        """
        for callback in list(self._listeners.get(event, [])):
            try:
                callback(payload)
            except Exception:  # pylint: disable=broad-exception-caught
                get_logger().exception("listener for %s failed", event)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))
