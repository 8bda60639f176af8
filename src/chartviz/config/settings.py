"""Global configuration and constants for the chart editor."""

from __future__ import annotations

import os
from typing import Final

DATA_DIR: Final = os.environ.get("CHARTVIZ_DATA_DIR", "data")
LOG_LEVEL: Final = os.environ.get("CHARTVIZ_LOG_LEVEL", "INFO").upper()

# Sample text shown on first launch (header + three categories, two series)
DEFAULT_CSV_TEXT: Final = "Label,Series 1,Series 2\nA,1,2\nB,2,3\nC,3,1"

DEFAULT_TITLE: Final = "Sample Chart"
DEFAULT_X_AXIS_LABEL: Final = "X"
DEFAULT_Y_AXIS_LABEL: Final = "Y"
DEFAULT_PRIMARY_COLOR: Final = "#1f77b4"

# Slider domains (inclusive)
CORNER_RADIUS_RANGE: Final = (0.0, 10.0)
BAR_WIDTH_RANGE: Final = (2.0, 30.0)
OPACITY_RANGE: Final = (0.2, 1.0)

# On-screen preview size in inches at PREVIEW_DPI (400x300 px)
PREVIEW_SIZE_IN: Final = (4.0, 3.0)
PREVIEW_DPI: Final = 100
EXPORT_DPI: Final = 150


def _parse_canvas(raw: str | None) -> tuple[float, float] | None:
    """Parse a ``WIDTHxHEIGHT`` (inches) override such as ``"4x3"``."""
    if not raw:
        return None
    try:
        w, h = raw.lower().split("x", 1)
        size = (float(w), float(h))
    except ValueError:
        return None
    if size[0] <= 0 or size[1] <= 0:
        return None
    return size


# Optional fixed PDF canvas; None means "same size as the preview figure"
PDF_CANVAS_IN: Final = _parse_canvas(os.environ.get("CHARTVIZ_PDF_CANVAS"))
