"""Backend-neutral chart description types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from chartviz.domain.models import ChartKind, LineStyle, Orientation, StyleMode


@dataclass(frozen=True)
class ChartMark:
    """One drawable value with its resolved style.

    Attributes:
        series: Series name (None for the implicit single series).
        label: Category label.
        value: Magnitude.
        color: Resolved fill / stroke color (hex).
        alpha: Resolved opacity.
        corner_radius: Bar corner rounding in screen points.
    """

    series: Optional[str]
    label: str
    value: float
    color: str
    alpha: float
    corner_radius: float


@dataclass(frozen=True)
class ChartView:
    """Everything the backend needs to draw one chart."""

    kind: ChartKind
    title: str
    x_axis_label: str
    y_axis_label: str
    show_legend: bool
    show_x_axis: bool
    show_y_axis: bool
    orientation: Orientation
    line_style: LineStyle
    bar_width: float
    style_mode: StyleMode
    labels: Tuple[str, ...]
    series: Tuple[Optional[str], ...]
    series_colors: Tuple[Tuple[Optional[str], str], ...]
    marks: Tuple[ChartMark, ...]

    @property
    def is_empty(self) -> bool:
        return not self.marks

    def color_of(self, series: Optional[str]) -> Optional[str]:
        for name, color in self.series_colors:
            if name == series:
                return color
        return None


@dataclass
class ChartResult:
    """Outcome of drawing a chart; ``figure`` is the matplotlib Figure."""

    figure: Any
    meta: Dict[str, Any]
