"""EventBus core.

Lightweight synchronous publish/subscribe used to tell the window (and any
other listener) that the chart state changed, so redraws follow state changes
instead of being triggered ad hoc.

 - No Qt dependency, so view models stay testable headless
 - One failing handler does not break the publish cycle (errors are kept)
 - One-shot subscriptions and unsubscribe handles
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = ["GUIEvent", "Event", "EventBus", "EventHandler", "Subscription"]


class GUIEvent(str, Enum):
    STARTUP_COMPLETE = "startup_complete"
    POINTS_REPLACED = "points_replaced"
    CONFIG_CHANGED = "config_changed"
    DATA_IMPORTED = "data_imported"
    EXPORT_COMPLETED = "export_completed"
    EXPORT_FAILED = "export_failed"
    LOG_RECORD_ADDED = "log_record_added"
    ERROR_OCCURRED = "error_occurred"


@dataclass
class Event:
    name: str  # GUIEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | GUIEvent) -> str:
    return name.value if isinstance(name, GUIEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers run outside the lock (subscriber list is copied first) so a
    handler may subscribe or unsubscribe while being dispatched.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    def subscribe(
        self, name: str | GUIEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event, [])
            self._subs[sub.event] = [s for s in bucket if s is not sub]
            if not self._subs[sub.event]:
                self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    def publish(self, name: str | GUIEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | GUIEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
