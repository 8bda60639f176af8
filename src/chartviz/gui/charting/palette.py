"""Series palette used when marks are colored by series identity.

Colors are assigned by first-seen series order so the same CSV always gets the
same colors, and a series keeps its color while other fields change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

SERIES_FALLBACK = [
    "#4e79a7",
    "#f28e2b",
    "#e15759",
    "#76b7b2",
    "#59a14f",
    "#edc948",
    "#b07aa1",
    "#ff9da7",
    "#9c755f",
    "#bab0ac",
]


@dataclass
class ChartPalette:
    series_colors: List[str] = field(default_factory=lambda: list(SERIES_FALLBACK))

    def color_for_series(self, index: int) -> str:
        if index < 0:
            index = 0
        if not self.series_colors:
            self.series_colors = list(SERIES_FALLBACK)
        return self.series_colors[index % len(self.series_colors)]

    def assign(self, names: Iterable[Optional[str]]) -> Dict[Optional[str], str]:
        """Map each distinct name (in order) to a palette color."""
        mapping: Dict[Optional[str], str] = {}
        for name in names:
            if name not in mapping:
                mapping[name] = self.color_for_series(len(mapping))
        return mapping


default_palette = ChartPalette()

__all__ = ["ChartPalette", "SERIES_FALLBACK", "default_palette"]
