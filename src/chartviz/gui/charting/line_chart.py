"""Line chart builder: one line per series across the ordered categories."""

from __future__ import annotations

from typing import Any, Dict

import numpy as np

from chartviz.domain.models import ChartKind, LineStyle
from .registry import register_chart_type
from .types import ChartView

LINESTYLES = {
    LineStyle.SOLID: "-",
    LineStyle.DASHED: "--",
    LineStyle.DOTTED: ":",
    LineStyle.DASHDOT: "-.",
}


def _line_builder(view: ChartView, ax: Any) -> Dict[str, Any]:
    labels = list(view.labels)
    index = {label: i for i, label in enumerate(labels)}
    x_values = np.arange(len(labels))
    lines = 0
    for series in view.series:
        ys = np.full(len(labels), np.nan)
        alpha = 1.0
        for mark in view.marks:
            if mark.series == series:
                # missing categories stay NaN and leave a gap
                ys[index[mark.label]] = mark.value
                alpha = mark.alpha
        ax.plot(
            x_values,
            ys,
            linestyle=LINESTYLES[view.line_style],
            marker="o",
            linewidth=2,
            color=view.color_of(series),
            alpha=alpha,
            label=series if series is not None else view.y_axis_label,
        )
        lines += 1
    ax.set_xticks(x_values)
    ax.set_xticklabels(labels)
    return {"lines": lines}


register_chart_type(ChartKind.LINE, _line_builder, "One line per series over categories")
