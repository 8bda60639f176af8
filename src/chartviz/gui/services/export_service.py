"""Export Service

Writes the rendered chart figure as PNG, JPEG or PDF using matplotlib's
encoders with fixed defaults (no JPEG quality knob).

Failures never raise: every call returns an ``ExportResult`` whose ``error``
names what went wrong. The window logs and displays failed results; other
callers may simply drop them, in which case nothing visibly happens.

PDF size: by default the PDF has the same size as the figure being shown.
Passing ``pdf_canvas_in`` (or setting ``CHARTVIZ_PDF_CANVAS``, e.g. ``4x3``)
forces a fixed page size instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from pathlib import Path
from typing import Any, Optional, Tuple

from chartviz.config import settings
from chartviz.domain.errors import ErrorKind

__all__ = ["ExportFormat", "ExportResult", "ExportService"]

log = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"
    PDF = "pdf"

    @property
    def suggested_extension(self) -> str:
        return ".jpg" if self is ExportFormat.JPEG else f".{self.value}"

    @property
    def is_raster(self) -> bool:
        return self is not ExportFormat.PDF

    @property
    def dialog_filter(self) -> str:
        if self is ExportFormat.JPEG:
            return "JPEG image (*.jpg *.jpeg)"
        if self is ExportFormat.PNG:
            return "PNG image (*.png)"
        return "PDF document (*.pdf)"


@dataclass(frozen=True)
class ExportResult:
    format: Optional[str]
    path: Optional[str] = None
    error: Optional[ErrorKind] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


class ExportService:
    """Facade turning a matplotlib figure into a file on disk.

    Usage:
        result = ExportService().export(figure, "chart.png", ExportFormat.PNG)
        if not result.ok: ...
    """

    def __init__(
        self,
        *,
        dpi: int = settings.EXPORT_DPI,
        pdf_canvas_in: Tuple[float, float] | None = settings.PDF_CANVAS_IN,
    ) -> None:
        self._dpi = dpi
        self._pdf_canvas_in = pdf_canvas_in

    @staticmethod
    def normalize_path(path: str, fmt: ExportFormat) -> str:
        """Append the format's extension when the chosen path has none."""
        p = Path(path)
        if not p.suffix:
            p = p.with_suffix(fmt.suggested_extension)
        return str(p)

    def export(self, figure: Any, path: str | None, fmt: ExportFormat | str) -> ExportResult:
        try:
            fmt = ExportFormat(fmt)
        except ValueError:
            log.warning("Unsupported export format: %s", fmt)
            return ExportResult(
                format=str(fmt), path=path, error=ErrorKind.UNSUPPORTED_FORMAT, detail=str(fmt)
            )
        if not path:
            return ExportResult(format=fmt.value, error=ErrorKind.CANCELLED)
        target = self.normalize_path(path, fmt)
        try:
            self._save(figure, target, fmt)
        except OSError as exc:
            log.warning("Export to %s failed (unwritable): %s", target, exc)
            return ExportResult(
                format=fmt.value, path=target, error=ErrorKind.UNWRITABLE, detail=str(exc)
            )
        except Exception as exc:  # noqa: BLE001 - any encoder failure is reported, not raised
            log.warning("Export to %s failed (encoding): %s", target, exc)
            return ExportResult(
                format=fmt.value, path=target, error=ErrorKind.ENCODE_FAILED, detail=str(exc)
            )
        log.info("Exported %s chart to %s", fmt.value.upper(), target)
        return ExportResult(format=fmt.value, path=target)

    def _save(self, figure: Any, target: str, fmt: ExportFormat) -> None:
        if fmt is ExportFormat.PDF and self._pdf_canvas_in is not None:
            original = tuple(figure.get_size_inches())
            figure.set_size_inches(*self._pdf_canvas_in, forward=False)
            try:
                figure.savefig(target, format="pdf")
            finally:
                figure.set_size_inches(*original, forward=False)
            return
        figure.savefig(
            target,
            format=fmt.value,
            dpi=self._dpi if fmt.is_raster else None,
            facecolor="white",
        )
