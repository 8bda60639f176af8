"""Chart preview widget embedding a matplotlib canvas.

The widget owns one Figure for its lifetime; every ``show_view`` clears and
redraws it, so exports always see what the preview shows.
"""

from __future__ import annotations

from typing import Any, Dict

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from PyQt6.QtWidgets import QSizePolicy, QVBoxLayout, QWidget

from chartviz.gui.charting import ChartView, MatplotlibChartBackend


class ChartPreview(QWidget):
    def __init__(self, backend: MatplotlibChartBackend | None = None, parent: QWidget | None = None):
        super().__init__(parent)
        self._backend = backend or MatplotlibChartBackend()
        self.figure = self._backend.create_figure()
        self.canvas = FigureCanvasQTAgg(self.figure)
        self.canvas.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.canvas.setMinimumSize(400, 300)
        self.last_meta: Dict[str, Any] = {}
        lay = QVBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(self.canvas)

    def show_view(self, view: ChartView) -> Dict[str, Any]:
        result = self._backend.draw(view, self.figure)
        self.last_meta = result.meta
        self.canvas.draw_idle()
        return result.meta
