"""Tests for the chart registry."""

from __future__ import annotations

import pytest
from matplotlib.figure import Figure

from chartviz.domain import ChartKind, ChartState
from chartviz.gui.charting import chart_registry, describe
from chartviz.gui.charting.registry import ChartRegistry, register_chart_type
from chartviz.parsing import parse_multi_series


def _view(kind="bar"):
    state = ChartState(points=parse_multi_series("L,S1\nA,1\nB,2"))
    state.set("chart_kind", kind)
    return describe(state.snapshot())


def test_builtin_kinds_registered():
    types = chart_registry.list_types()
    for kind in ChartKind:
        assert kind.value in types
        assert kind in chart_registry


def test_register_duplicate_chart_type():
    def _dummy(view, ax):  # pragma: no cover - simple stub
        return {}

    register_chart_type("custom.unique", _dummy, "Unique")
    try:
        with pytest.raises(ValueError):
            register_chart_type("custom.unique", _dummy, "Duplicate")
    finally:
        chart_registry.unregister("custom.unique")
    assert "custom.unique" not in chart_registry


def test_unknown_chart_type():
    registry = ChartRegistry()
    ax = Figure().add_subplot(111)
    with pytest.raises(KeyError):
        registry.build(_view(), ax)


def test_build_records_kind_and_duration():
    registry = ChartRegistry()
    seen = []

    def _builder(view, ax):
        seen.append(view.kind)
        return {"custom": True}

    registry.register(ChartKind.LINE, _builder, "stub")
    meta = registry.build(_view("line"), Figure().add_subplot(111))
    assert seen == [ChartKind.LINE]
    assert meta["custom"] is True
    assert meta["kind"] == "line"
    assert meta["build_ms"] >= 0
