"""Pure translation of a chart snapshot into a ``ChartView``.

No matplotlib or Qt here: the view is a plain value that the backend draws
and that tests can inspect directly.

Style rule: with more than one distinct series in the points, each mark takes
its series' palette color; otherwise every mark uses the configured primary
color. Opacity and corner radius apply in both cases.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from chartviz.domain.models import ChartKind, StyleMode
from chartviz.domain.state import ChartSnapshot
from .palette import ChartPalette, default_palette
from .types import ChartMark, ChartView


def _ordered_labels(snapshot: ChartSnapshot) -> Tuple[str, ...]:
    seen: Dict[str, None] = {}
    for p in snapshot.points:
        seen.setdefault(p.label, None)
    return tuple(seen)


def _series_colors(
    snapshot: ChartSnapshot, palette: ChartPalette
) -> Dict[Optional[str], str]:
    cfg = snapshot.configuration
    if snapshot.style_mode is StyleMode.SERIES:
        return palette.assign(snapshot.series_names)
    return {name: cfg.primary_color for name in snapshot.series_names}


def _pie_marks(
    snapshot: ChartSnapshot, labels: Tuple[str, ...], palette: ChartPalette
) -> List[ChartMark]:
    cfg = snapshot.configuration
    totals: Dict[str, float] = {label: 0.0 for label in labels}
    for p in snapshot.points:
        totals[p.label] += p.value
    colors = palette.assign(labels)
    return [
        ChartMark(
            series=None,
            label=label,
            value=totals[label],
            color=colors[label],
            alpha=cfg.opacity,
            corner_radius=0.0,
        )
        for label in labels
    ]


def describe(snapshot: ChartSnapshot, palette: ChartPalette | None = None) -> ChartView:
    """Build the chart view for ``snapshot``."""
    palette = palette or default_palette
    cfg = snapshot.configuration
    labels = _ordered_labels(snapshot)
    colors = _series_colors(snapshot, palette)

    if cfg.chart_kind is ChartKind.PIE:
        marks = _pie_marks(snapshot, labels, palette)
    else:
        marks = [
            ChartMark(
                series=p.series,
                label=p.label,
                value=p.value,
                color=colors[p.series],
                alpha=cfg.opacity,
                corner_radius=cfg.corner_radius,
            )
            for p in snapshot.points
        ]

    return ChartView(
        kind=cfg.chart_kind,
        title=cfg.title,
        x_axis_label=cfg.x_axis_label,
        y_axis_label=cfg.y_axis_label,
        show_legend=cfg.show_legend,
        show_x_axis=cfg.show_x_axis,
        show_y_axis=cfg.show_y_axis,
        orientation=cfg.orientation,
        line_style=cfg.line_style,
        bar_width=cfg.bar_width,
        style_mode=snapshot.style_mode,
        labels=labels,
        series=snapshot.series_names,
        series_colors=tuple(colors.items()),
        marks=tuple(marks),
    )


__all__ = ["describe"]
