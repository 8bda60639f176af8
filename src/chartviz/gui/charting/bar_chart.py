"""Bar chart builder.

Bars sharing a category are stacked (positive values upward from zero,
negative values downward). ``bar_width`` and ``corner_radius`` are given in
screen points and converted to data units from the laid-out axes size.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Tuple

import numpy as np
from matplotlib.patches import BoxStyle, FancyBboxPatch, Rectangle

from chartviz.domain.models import ChartKind, Orientation
from .registry import register_chart_type
from .types import ChartMark, ChartView

log = logging.getLogger(__name__)

MIN_SLOT_FRACTION = 0.05
MAX_SLOT_FRACTION = 0.95


def _points_to_px(ax, points: float) -> float:
    return points * ax.figure.dpi / 72.0


def slot_fraction(ax, bar_width: float, categories: int, vertical: bool) -> float:
    """Fraction of a category slot covered by a bar ``bar_width`` points wide."""
    bbox = ax.get_window_extent()
    axis_px = bbox.width if vertical else bbox.height
    if axis_px <= 0 or categories <= 0:
        return 0.8
    px_per_category = axis_px / categories
    fraction = _points_to_px(ax, bar_width) / px_per_category
    return float(min(MAX_SLOT_FRACTION, max(MIN_SLOT_FRACTION, fraction)))


def round_bar_corners(ax, bars: List[Tuple[Rectangle, ChartMark]]) -> int:
    """Replace rectangles with rounded ``FancyBboxPatch`` twins.

    Returns the number of rounded bars. The rounding radius is clamped to half
    of the bar's shorter side so tiny bars degrade to pills, not artifacts.
    """
    ax.autoscale_view()
    bbox = ax.get_window_extent()
    x0, x1 = ax.get_xlim()
    y0, y1 = ax.get_ylim()
    if bbox.width <= 0 or bbox.height <= 0 or x1 == x0 or y1 == y0:
        return 0
    px_per_x = bbox.width / abs(x1 - x0)
    px_per_y = bbox.height / abs(y1 - y0)
    aspect = px_per_x / px_per_y
    rounded = 0
    for rect, mark in bars:
        if mark.corner_radius <= 0:
            continue
        x, y = rect.get_xy()
        w, h = rect.get_width(), rect.get_height()
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h
        if w == 0 or h == 0:
            continue
        radius = _points_to_px(ax, mark.corner_radius) / px_per_x
        radius = min(radius, w / 2.0, h / (2.0 * aspect))
        patch = FancyBboxPatch(
            (x, y),
            w,
            h,
            boxstyle=BoxStyle.Round(pad=0.0, rounding_size=radius),
            mutation_aspect=aspect,
            facecolor=mark.color,
            edgecolor="none",
            alpha=mark.alpha,
        )
        ax.add_patch(patch)
        rect.set_visible(False)
        rounded += 1
    return rounded


def _bar_builder(view: ChartView, ax: Any) -> Dict[str, Any]:
    labels = list(view.labels)
    index = {label: i for i, label in enumerate(labels)}
    vertical = view.orientation is Orientation.VERTICAL
    positions = np.arange(len(labels))

    # Category axis first so the layout (and thus px per category) is known
    if vertical:
        ax.set_xticks(positions)
        ax.set_xticklabels(labels)
        ax.set_xlim(-0.5, len(labels) - 0.5)
    else:
        ax.set_yticks(positions)
        ax.set_yticklabels(labels)
        ax.set_ylim(-0.5, len(labels) - 0.5)
        # first category on top, as in a vertical reading order
        ax.invert_yaxis()
    ax.figure.tight_layout()

    width = slot_fraction(ax, view.bar_width, len(labels), vertical)
    pos_stack = np.zeros(len(labels))
    neg_stack = np.zeros(len(labels))
    bars: List[Tuple[Rectangle, ChartMark]] = []
    overflowed = 0
    for mark in view.marks:
        i = index[mark.label]
        stack = pos_stack if mark.value >= 0 else neg_stack
        base = float(stack[i])
        top = base + mark.value
        # a stack that overflows float range cannot be drawn
        if not math.isfinite(top):
            overflowed += 1
            continue
        if vertical:
            container = ax.bar(
                i, mark.value, width=width, bottom=base, color=mark.color, alpha=mark.alpha
            )
        else:
            container = ax.barh(
                i, mark.value, height=width, left=base, color=mark.color, alpha=mark.alpha
            )
        stack[i] = top
        bars.append((container.patches[0], mark))

    rounded = round_bar_corners(ax, bars) if any(m.corner_radius > 0 for m in view.marks) else 0
    stacked = len(view.series) > 1 or len(view.marks) > len(labels)
    if overflowed:
        log.debug("Skipped %d bars whose stacked total is not finite", overflowed)
    log.debug("Drew %d bars (%d rounded, stacked=%s)", len(bars), rounded, stacked)
    return {
        "bars": len(bars),
        "rounded": rounded,
        "stacked": stacked,
        "slot_fraction": width,
        "overflowed": overflowed,
    }


register_chart_type(ChartKind.BAR, _bar_builder, "Category bars, stacked per series")

__all__ = ["slot_fraction", "round_bar_corners"]
