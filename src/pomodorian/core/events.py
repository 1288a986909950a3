"""Instance-scoped event subscription for the timer engine."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

Handler = Callable[["TimerEvent", Any], None]


class TimerEvent(Enum):
    """Events a :class:`~pomodorian.core.timer.Timer` emits."""

    STATE_CHANGED = "state_changed"
    COMPLETED = "completed"


class EventEmitter:
    """Synchronous observer registry.

    Handlers are called immediately by :meth:`emit`, in the order they were
    subscribed, with ``(event, payload)``.
    """

    def __init__(self) -> None:
        self._subscribers: dict[TimerEvent, list[Handler]] = {}

    def subscribe(self, event: TimerEvent, handler: Handler) -> None:
        self._subscribers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: TimerEvent, handler: Handler) -> None:
        handlers = self._subscribers.get(event)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def emit(self, event: TimerEvent, payload: Any = None) -> None:
        # Copy so a handler may unsubscribe itself mid-dispatch.
        for handler in list(self._subscribers.get(event, [])):
            handler(event, payload)
