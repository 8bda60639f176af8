"""Matplotlib chart backend.

Draws a ``ChartView`` onto a matplotlib ``Figure``. The figure is created
without pyplot so the same code serves the Qt canvas, the exporters and the
headless CLI.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List

from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Patch

from chartviz.config import settings
from chartviz.domain.models import ChartKind, Orientation, StyleMode
from .registry import ChartRegistry, chart_registry
from .types import ChartResult, ChartView

log = logging.getLogger(__name__)


class MatplotlibChartBackend:
    def __init__(self, registry: ChartRegistry | None = None) -> None:
        self._registry = registry or chart_registry

    @staticmethod
    def create_figure(
        size_in: tuple[float, float] = settings.PREVIEW_SIZE_IN, dpi: int = settings.PREVIEW_DPI
    ) -> Figure:
        return Figure(figsize=size_in, dpi=dpi)

    def draw(self, view: ChartView, figure: Figure | None = None) -> ChartResult:
        """Clear ``figure`` (or a new one) and draw ``view`` on it."""
        fig = figure if figure is not None else self.create_figure()
        fig.clear()
        ax = fig.add_subplot(111)
        if view.title:
            ax.set_title(view.title)

        if view.is_empty:
            ax.text(
                0.5, 0.5, "No data", ha="center", va="center", transform=ax.transAxes, alpha=0.6
            )
            ax.set_xticks([])
            ax.set_yticks([])
            fig.tight_layout()
            return ChartResult(figure=fig, meta={"status": "empty", "kind": view.kind.value})

        if view.kind is not ChartKind.PIE:
            self._apply_axes(view, ax)
        meta = self._registry.build(view, ax)
        legend = self._apply_legend(view, ax)
        meta["legend"] = legend
        meta["status"] = "ok"
        fig.tight_layout()
        return ChartResult(figure=fig, meta=meta)

    # ------------------------------------------------------------------
    def _apply_axes(self, view: ChartView, ax: Any) -> None:
        # Horizontal bars put values on the x axis
        if view.kind is ChartKind.BAR and view.orientation is Orientation.HORIZONTAL:
            ax.set_xlabel(view.y_axis_label)
            ax.set_ylabel(view.x_axis_label)
        else:
            ax.set_xlabel(view.x_axis_label)
            ax.set_ylabel(view.y_axis_label)
        ax.xaxis.set_visible(view.show_x_axis)
        ax.spines["bottom"].set_visible(view.show_x_axis)
        ax.yaxis.set_visible(view.show_y_axis)
        ax.spines["left"].set_visible(view.show_y_axis)
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)

    def _legend_handles(self, view: ChartView) -> List[Any]:
        if view.kind is ChartKind.PIE:
            return [
                Patch(facecolor=m.color, alpha=m.alpha, label=m.label)
                for m in view.marks
                if m.value > 0 and math.isfinite(m.value)
            ]
        # A single implicit series has nothing to key
        if view.style_mode is not StyleMode.SERIES:
            return []
        alpha = view.marks[0].alpha if view.marks else 1.0
        if view.kind is ChartKind.LINE:
            return [
                Line2D([], [], color=color, alpha=alpha, marker="o", label=str(name))
                for name, color in view.series_colors
            ]
        return [
            Patch(facecolor=color, alpha=alpha, label=str(name))
            for name, color in view.series_colors
        ]

    def _apply_legend(self, view: ChartView, ax: Any) -> int:
        if not view.show_legend:
            return 0
        handles = self._legend_handles(view)
        if not handles:
            return 0
        ax.legend(handles=handles, loc="best", fontsize=8)
        return len(handles)


__all__ = ["MatplotlibChartBackend"]
