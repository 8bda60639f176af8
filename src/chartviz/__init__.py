"""ChartViz - interactive CSV chart editor (PyQt6 + matplotlib)."""

__version__ = "0.3.0"
