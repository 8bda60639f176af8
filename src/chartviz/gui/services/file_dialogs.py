"""File dialog capability.

The view model only talks to the ``FileDialogs`` protocol; the window supplies
``QtFileDialogs``. Tests pass simple fakes. A cancelled dialog yields ``None``;
reading the chosen file is left to the caller so an unreadable file can be
reported separately from a cancellation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from .export_service import ExportFormat

__all__ = ["FileDialogs", "QtFileDialogs", "read_text_file"]

log = logging.getLogger(__name__)

IMPORT_FILTER = "CSV files (*.csv *.txt);;All files (*)"


@runtime_checkable
class FileDialogs(Protocol):
    def open_path(self) -> Optional[str]: ...

    def choose_export_path(self, fmt: ExportFormat) -> Optional[str]: ...


def read_text_file(path: str | Path) -> Optional[str]:
    """Read a data file as UTF-8 text (BOM tolerated); None if unreadable."""
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        log.warning("Could not read %s: %s", path, exc)
        return None


class QtFileDialogs:
    """``FileDialogs`` backed by ``QFileDialog``.

    Remembers the last directories used so consecutive imports/exports start
    where the user left off; ``last_import_dir``/``last_export_dir`` are
    persisted by the window through ``AppConfig``.
    """

    def __init__(
        self,
        parent=None,
        *,
        last_import_dir: str | None = None,
        last_export_dir: str | None = None,
    ) -> None:
        self._parent = parent
        self.last_import_dir = last_import_dir
        self.last_export_dir = last_export_dir
        self.last_import_path: str | None = None

    def open_path(self) -> Optional[str]:  # pragma: no cover - modal dialog
        from PyQt6.QtWidgets import QFileDialog

        path, _ = QFileDialog.getOpenFileName(
            self._parent, "Import CSV", self.last_import_dir or "", IMPORT_FILTER
        )
        if not path:
            return None
        self.last_import_dir = str(Path(path).parent)
        self.last_import_path = path
        return path

    def choose_export_path(self, fmt: ExportFormat) -> Optional[str]:  # pragma: no cover - modal
        from PyQt6.QtWidgets import QFileDialog

        start = Path(self.last_export_dir or "") / f"chart{fmt.suggested_extension}"
        path, _ = QFileDialog.getSaveFileName(
            self._parent, f"Export {fmt.value.upper()}", str(start), fmt.dialog_filter
        )
        if not path:
            return None
        self.last_export_dir = str(Path(path).parent)
        return path
