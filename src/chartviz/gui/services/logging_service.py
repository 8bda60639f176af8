"""Logging service.

Attaches a ring-buffer handler to the root logger so recent records (parse
diagnostics, export failures, uncaught slot errors) can be inspected from the
UI, and publishes ``GUIEvent.LOG_RECORD_ADDED`` so the status bar can show
warnings as they happen.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, List, Optional

from .event_bus import EventBus, GUIEvent
from .service_locator import services

__all__ = ["LogEntry", "LoggingService"]


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = 200, *, event_bus: EventBus | None = None) -> None:
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._event_bus = event_bus
        self._attached = False

    def attach_root(self, level: str | int = logging.INFO) -> None:
        """Install the buffer handler on the root logger and set its level."""
        root = logging.getLogger()
        root.setLevel(level)
        if self._attached:
            return
        root.addHandler(self._handler)
        self._attached = True

    def detach_root(self) -> None:
        if not self._attached:
            return
        logging.getLogger().removeHandler(self._handler)
        self._attached = False

    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)
        bus = self._event_bus or services.try_get("event_bus")
        if isinstance(bus, EventBus):
            bus.publish(GUIEvent.LOG_RECORD_ADDED, entry)

    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
