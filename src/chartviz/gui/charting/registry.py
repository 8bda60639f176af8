"""Chart registry

Maps each chart kind to the builder that draws it onto a matplotlib Axes, so
the backend stays independent of the individual chart implementations.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Any, Callable, Dict

from chartviz.domain.models import ChartKind
from .types import ChartView

Builder = Callable[[ChartView, Any], Dict[str, Any]]


@dataclass
class ChartType:
    """Metadata for a registered chart type."""

    kind: str
    builder: Builder
    description: str


class ChartRegistry:
    def __init__(self) -> None:
        self._types: Dict[str, ChartType] = {}

    def register(self, kind: ChartKind | str, builder: Builder, description: str) -> None:
        key = kind.value if isinstance(kind, ChartKind) else kind
        if key in self._types:
            raise ValueError(f"Chart type already registered: {key}")
        self._types[key] = ChartType(key, builder, description)

    def unregister(self, kind: ChartKind | str) -> None:
        key = kind.value if isinstance(kind, ChartKind) else kind
        self._types.pop(key, None)

    def build(self, view: ChartView, ax: Any) -> Dict[str, Any]:
        """Draw ``view`` onto ``ax`` and record build duration (ms)."""
        ct = self._types.get(view.kind.value)
        if ct is None:
            raise KeyError(f"Unknown chart type: {view.kind.value}")
        start = perf_counter()
        meta = ct.builder(view, ax) or {}
        meta.setdefault("build_ms", (perf_counter() - start) * 1000.0)
        meta.setdefault("kind", ct.kind)
        return meta

    def list_types(self) -> Dict[str, str]:
        return {k: v.description for k, v in self._types.items()}

    def __contains__(self, kind: object) -> bool:
        key = kind.value if isinstance(kind, ChartKind) else kind
        return key in self._types


chart_registry = ChartRegistry()


def register_chart_type(kind: ChartKind | str, builder: Builder, description: str) -> None:
    chart_registry.register(kind, builder, description)


__all__ = ["ChartRegistry", "ChartType", "chart_registry", "register_chart_type"]
