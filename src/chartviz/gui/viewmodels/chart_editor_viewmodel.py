"""ViewModel for the chart editor window.

Holds the raw data text, the parse mode and the ``ChartState``. Every state
change is published on the EventBus (``POINTS_REPLACED`` / ``CONFIG_CHANGED``)
and the window redraws from a fresh snapshot in response, so no widget ever
mutates the chart directly.

No PyQt imports here; tests drive it headless with fake dialogs.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from chartviz.config import settings
from chartviz.domain.errors import ErrorKind, ImportResult
from chartviz.domain.models import ChartConfiguration, ChartPoint
from chartviz.domain.state import ChartSnapshot, ChartState
from chartviz.gui.charting import ChartView, describe
from chartviz.gui.charting.palette import ChartPalette
from chartviz.gui.services.event_bus import EventBus, GUIEvent
from chartviz.gui.services.export_service import ExportFormat, ExportResult, ExportService
from chartviz.gui.services.file_dialogs import FileDialogs, read_text_file
from chartviz.parsing import ParseMode, ParseStats, parse_with_stats

log = logging.getLogger(__name__)


class ChartEditorViewModel:
    def __init__(
        self,
        *,
        event_bus: EventBus | None = None,
        text: str | None = None,
        parse_mode: ParseMode | str = ParseMode.MULTI,
        configuration: ChartConfiguration | None = None,
        palette: ChartPalette | None = None,
    ) -> None:
        self._bus = event_bus or EventBus()
        self._mode = ParseMode(parse_mode)
        self._text = settings.DEFAULT_CSV_TEXT if text is None else text
        self._palette = palette
        self._stats = ParseStats()
        self.state = ChartState(configuration)
        self._reparse(publish=False)

    # ------------------------------------------------------------------
    @property
    def event_bus(self) -> EventBus:
        return self._bus

    @property
    def text(self) -> str:
        return self._text

    @property
    def parse_mode(self) -> ParseMode:
        return self._mode

    @property
    def last_parse_stats(self) -> ParseStats:
        return self._stats

    def points(self) -> Tuple[ChartPoint, ...]:
        return self.state.points

    @property
    def configuration(self) -> ChartConfiguration:
        return self.state.configuration

    @property
    def multiple_series(self) -> bool:
        return self.state.multiple_series

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------
    def set_text(self, text: str, *, apply: bool = True) -> None:
        """Store edited text; re-parses immediately unless ``apply`` is False."""
        self._text = text or ""
        if apply:
            self._reparse()

    def apply(self) -> int:
        """Re-parse the current text; returns the number of points."""
        self._reparse()
        return len(self.state.points)

    def set_parse_mode(self, mode: ParseMode | str) -> None:
        mode = ParseMode(mode)
        if mode is self._mode:
            return
        self._mode = mode
        self._reparse()

    def _reparse(self, *, publish: bool = True) -> None:
        points, self._stats = parse_with_stats(self._text, self._mode)
        self.state.replace_points(points)
        if publish:
            self._bus.publish(
                GUIEvent.POINTS_REPLACED,
                {
                    "count": len(points),
                    "series": len(self.state.series_names),
                    "multiple_series": self.state.multiple_series,
                },
            )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set(self, name: str, value: Any) -> Any:
        """Set one configuration field (clamped); publishes CONFIG_CHANGED."""
        stored = self.state.set(name, value)
        self._bus.publish(GUIEvent.CONFIG_CHANGED, {name: stored})
        return stored

    def update(self, **values: Any) -> Dict[str, Any]:
        stored = self.state.update(**values)
        if stored:
            self._bus.publish(GUIEvent.CONFIG_CHANGED, stored)
        return stored

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def snapshot(self) -> ChartSnapshot:
        return self.state.snapshot()

    def view(self) -> ChartView:
        return describe(self.snapshot(), self._palette)

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------
    def import_csv(self, dialogs: FileDialogs) -> ImportResult:
        """Ask ``dialogs`` for a file; on success its text replaces the data.

        A file that cannot be read as UTF-8 text yields ``UNREADABLE`` and, like
        a cancelled dialog, leaves the current data untouched.
        """
        path = dialogs.open_path()
        if path is None:
            return ImportResult(error=ErrorKind.CANCELLED)
        text = read_text_file(path)
        if text is None:
            return ImportResult(error=ErrorKind.UNREADABLE, detail=str(path))
        self._text = text
        self._reparse()
        result = ImportResult(text=text, point_count=len(self.state.points))
        self._bus.publish(GUIEvent.DATA_IMPORTED, {"count": result.point_count})
        log.info("Imported %d points", result.point_count)
        return result

    def export(
        self,
        fmt: ExportFormat | str,
        figure: Any,
        dialogs: FileDialogs,
        exporter: Optional[ExportService] = None,
    ) -> ExportResult:
        fmt = ExportFormat(fmt)
        path = dialogs.choose_export_path(fmt)
        result = (exporter or ExportService()).export(figure, path, fmt)
        if result.ok:
            self._bus.publish(GUIEvent.EXPORT_COMPLETED, {"path": result.path, "format": fmt.value})
        elif result.error is not ErrorKind.CANCELLED:
            self._bus.publish(
                GUIEvent.EXPORT_FAILED,
                {"path": result.path, "format": fmt.value, "error": result.error.value},
            )
        return result


__all__ = ["ChartEditorViewModel"]
