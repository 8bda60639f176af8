"""Error kinds and result objects for operations that never raise to the UI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ConfigurationError(ValueError):
    """Raised when a configuration field or value is not acceptable."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ErrorKind(str, Enum):
    CANCELLED = "cancelled"
    UNREADABLE = "unreadable"
    UNWRITABLE = "unwritable"
    ENCODE_FAILED = "encode_failed"
    UNSUPPORTED_FORMAT = "unsupported_format"


@dataclass(frozen=True)
class ImportResult:
    """Outcome of importing a data file.

    ``text`` is set on success; ``error`` is set otherwise. Callers are free
    to discard a failed result, in which case nothing visibly happens.
    """

    text: str | None = None
    point_count: int = 0
    error: ErrorKind | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = ["ConfigurationError", "ErrorKind", "ImportResult"]
