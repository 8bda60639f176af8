"""Charting layer.

``describe`` turns a state snapshot into a backend-neutral ``ChartView``;
``MatplotlibChartBackend`` draws that view onto a matplotlib Figure. Each
chart kind registers its builder with ``chart_registry`` on import.
"""

from .backends import MatplotlibChartBackend  # noqa: F401
from .describe import describe  # noqa: F401
from .palette import ChartPalette, default_palette  # noqa: F401
from .registry import chart_registry, register_chart_type  # noqa: F401
from .types import ChartMark, ChartResult, ChartView  # noqa: F401
from . import bar_chart  # noqa: F401  # registers bar
from . import line_chart  # noqa: F401  # registers line
from . import pie_chart  # noqa: F401  # registers pie
