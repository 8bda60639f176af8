"""Domain models for chart points and chart configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from itertools import count
from typing import Any, Dict, Optional

from chartviz.config import settings

_ids = count(1)


def _next_id() -> int:
    return next(_ids)


class ChartKind(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"


class Orientation(str, Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class LineStyle(str, Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"
    DASHDOT = "dashdot"


class StyleMode(str, Enum):
    """How marks are colored: by series identity or by the primary color."""

    SERIES = "series"
    PRIMARY = "primary"


@dataclass(frozen=True, slots=True)
class ChartPoint:
    """One labeled value, optionally tagged with a series name.

    ``id`` is process-local and only used for diffing in the UI; it takes no
    part in equality.
    """

    series: Optional[str]
    label: str
    value: float
    id: int = field(default_factory=_next_id, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class ChartConfiguration:
    """Presentation settings consumed by the renderer.

    Instances are immutable values; ``ChartState`` holds the current one and
    swaps it on every change. Use ``ChartState.set`` to get range clamping.
    """

    title: str = settings.DEFAULT_TITLE
    x_axis_label: str = settings.DEFAULT_X_AXIS_LABEL
    y_axis_label: str = settings.DEFAULT_Y_AXIS_LABEL
    primary_color: str = settings.DEFAULT_PRIMARY_COLOR
    corner_radius: float = 0.0
    bar_width: float = 10.0
    opacity: float = 1.0
    show_legend: bool = True
    show_x_axis: bool = True
    show_y_axis: bool = True
    orientation: Orientation = Orientation.VERTICAL
    line_style: LineStyle = LineStyle.SOLID
    chart_kind: ChartKind = ChartKind.BAR

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Enum):
                data[key] = value.value
        return data


__all__ = [
    "ChartKind",
    "Orientation",
    "LineStyle",
    "StyleMode",
    "ChartPoint",
    "ChartConfiguration",
]
