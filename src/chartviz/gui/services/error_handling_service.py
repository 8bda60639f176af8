"""Global error handling service.

PyQt6 aborts the process when a slot raises and ``sys.excepthook`` is still
the interpreter default. Installing this service replaces the hook so such
exceptions are logged, recorded in a small ring buffer and published as
``GUIEvent.ERROR_OCCURRED``; the editor keeps running.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import sys
import threading
import traceback
from typing import Any, Deque, List, Optional

from .event_bus import EventBus, GUIEvent

__all__ = ["ErrorRecord", "ErrorHandlingService"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorRecord:
    """Structured capture of an uncaught exception."""

    exc_type: type
    exc_value: BaseException
    traceback_str: str
    iso_time: str
    thread_name: str

    def summary(self, max_len: int = 120) -> str:
        msg = f"{self.exc_type.__name__}: {self.exc_value}"
        return msg if len(msg) <= max_len else msg[: max_len - 3] + "..."


class ErrorHandlingService:
    """Installable ``sys.excepthook`` / ``threading.excepthook`` manager.

    Usage::

        svc = ErrorHandlingService(event_bus=bus)
        svc.install()
        ...
        svc.uninstall()
    """

    def __init__(
        self, *, capacity: int = 20, event_bus: EventBus | None = None, chain: bool = True
    ) -> None:
        self._errors: Deque[ErrorRecord] = deque(maxlen=max(1, capacity))
        self._event_bus = event_bus
        self._chain = chain
        self._installed = False
        self._prev_sys_hook: Any = None
        self._prev_threading_hook: Any = None

    def install(self) -> None:
        if self._installed:
            return
        self._prev_sys_hook = sys.excepthook
        sys.excepthook = self._sys_hook
        self._prev_threading_hook = threading.excepthook
        threading.excepthook = self._thread_hook
        self._installed = True

    def uninstall(self) -> None:
        if not self._installed:
            return
        sys.excepthook = self._prev_sys_hook
        threading.excepthook = self._prev_threading_hook
        self._installed = False

    def _sys_hook(self, exc_type, exc_value, tb) -> None:  # pragma: no cover - delegate
        self.handle_exception(exc_type, exc_value, tb)
        if self._chain and self._prev_sys_hook is not None:
            self._prev_sys_hook(exc_type, exc_value, tb)

    def _thread_hook(self, args) -> None:  # pragma: no cover - delegate
        self.handle_exception(args.exc_type, args.exc_value, args.exc_traceback, thread=args.thread)

    def handle_exception(
        self, exc_type, exc_value, tb, *, thread: Optional[threading.Thread] = None
    ) -> ErrorRecord:
        """Record, log and publish one uncaught exception."""
        record = ErrorRecord(
            exc_type=exc_type,
            exc_value=exc_value,
            traceback_str="".join(traceback.format_exception(exc_type, exc_value, tb)),
            iso_time=datetime.now(timezone.utc).isoformat(),
            thread_name=(thread or threading.current_thread()).name,
        )
        self._errors.append(record)
        log.error("Uncaught exception (%s) %s", record.thread_name, record.summary())
        if self._event_bus is not None:
            self._event_bus.publish(
                GUIEvent.ERROR_OCCURRED,
                {"type": exc_type.__name__, "message": str(exc_value), "time": record.iso_time},
            )
        return record

    def recent_errors(self) -> List[ErrorRecord]:
        return list(self._errors)

    @property
    def installed(self) -> bool:
        return self._installed

    def clear(self) -> None:
        self._errors.clear()
