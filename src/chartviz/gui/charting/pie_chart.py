"""Pie chart builder: one wedge per category label.

Values were already summed per label by ``describe``; labels whose total is
not positive, or overflowed to infinity, cannot be drawn as a wedge and are
left out.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict

from chartviz.domain.models import ChartKind
from .registry import register_chart_type
from .types import ChartView

log = logging.getLogger(__name__)


def _pie_builder(view: ChartView, ax: Any) -> Dict[str, Any]:
    wedges = [m for m in view.marks if m.value > 0 and math.isfinite(m.value)]
    dropped = len(view.marks) - len(wedges)
    if dropped:
        log.debug("Pie chart skipped %d non-positive or non-finite categories", dropped)
    if not wedges:
        ax.set_axis_off()
        return {"wedges": 0, "dropped": dropped}
    ax.pie(
        [m.value for m in wedges],
        labels=None if view.show_legend else [m.label for m in wedges],
        colors=[m.color for m in wedges],
        wedgeprops={"alpha": wedges[0].alpha},
        startangle=90,
        counterclock=False,
    )
    ax.set_aspect("equal")
    return {"wedges": len(wedges), "dropped": dropped}


register_chart_type(ChartKind.PIE, _pie_builder, "Share of each category")
