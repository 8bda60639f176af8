"""Drawing chart views onto matplotlib figures (Agg, no Qt)."""

from matplotlib.figure import Figure
from matplotlib.patches import FancyBboxPatch

from chartviz.domain import ChartState
from chartviz.gui.charting import MatplotlibChartBackend, describe
from chartviz.gui.charting.bar_chart import slot_fraction
from chartviz.parsing import parse_multi_series, parse_single_series


def _draw(points, **config):
    state = ChartState(points=points)
    if config:
        state.update(**config)
    return MatplotlibChartBackend().draw(describe(state.snapshot()))


def test_create_figure_preview_size():
    fig = MatplotlibChartBackend.create_figure()
    assert tuple(fig.get_size_inches()) == (4.0, 3.0)
    assert fig.dpi == 100


def test_bar_chart_stacks_series(sample_csv):
    result = _draw(parse_multi_series(sample_csv))
    assert result.meta["status"] == "ok"
    assert result.meta["bars"] == 6
    assert result.meta["stacked"] is True
    assert result.meta["legend"] == 2
    ax = result.figure.axes[0]
    assert ax.get_title() == "Sample Chart"
    assert [t.get_text() for t in ax.get_xticklabels()] == ["A", "B", "C"]


def test_single_series_bar_has_no_legend(single_csv):
    result = _draw(parse_single_series(single_csv))
    assert result.meta["bars"] == 3
    assert result.meta["stacked"] is False
    assert result.meta["legend"] == 0


def test_legend_toggle(sample_csv):
    result = _draw(parse_multi_series(sample_csv), show_legend=False)
    assert result.meta["legend"] == 0
    assert result.figure.axes[0].get_legend() is None


def test_rounded_corners_replace_rectangles(single_csv):
    result = _draw(parse_single_series(single_csv), corner_radius=6)
    assert result.meta["rounded"] == 3
    ax = result.figure.axes[0]
    assert sum(isinstance(p, FancyBboxPatch) for p in ax.patches) == 3


def test_zero_radius_keeps_plain_bars(single_csv):
    result = _draw(parse_single_series(single_csv))
    assert result.meta["rounded"] == 0


def test_horizontal_bars_swap_axis_titles(single_csv):
    result = _draw(
        parse_single_series(single_csv),
        orientation="horizontal",
        x_axis_label="Category",
        y_axis_label="Amount",
    )
    ax = result.figure.axes[0]
    assert ax.get_xlabel() == "Amount"
    assert ax.get_ylabel() == "Category"
    assert [t.get_text() for t in ax.get_yticklabels()] == ["A", "B", "C"]


def test_wider_bar_width_covers_more_of_slot(single_csv):
    narrow = _draw(parse_single_series(single_csv), bar_width=2).meta["slot_fraction"]
    wide = _draw(parse_single_series(single_csv), bar_width=30).meta["slot_fraction"]
    assert wide > narrow


def test_slot_fraction_is_bounded():
    ax = Figure(figsize=(4, 3), dpi=100).add_subplot(111)
    assert slot_fraction(ax, 1000, 3, True) == 0.95
    assert slot_fraction(ax, 0.01, 3, True) == 0.05


def test_hidden_axes(single_csv):
    result = _draw(parse_single_series(single_csv), show_x_axis=False, show_y_axis=False)
    ax = result.figure.axes[0]
    assert not ax.xaxis.get_visible()
    assert not ax.yaxis.get_visible()


def test_line_chart_one_line_per_series(sample_csv):
    result = _draw(parse_multi_series(sample_csv), chart_kind="line", line_style="dashed")
    assert result.meta["lines"] == 2
    lines = result.figure.axes[0].get_lines()
    assert {ln.get_linestyle() for ln in lines} == {"--"}


def test_line_chart_gap_for_missing_category():
    points = parse_multi_series("L,S1,S2\nA,1,2\nB,,3\nC,2,1")
    result = _draw(points, chart_kind="line")
    assert result.meta["lines"] == 2


def test_pie_chart_drops_non_positive():
    points = parse_single_series("L,V\nA,3\nB,0\nC,-1\nD,2")
    result = _draw(points, chart_kind="pie")
    assert result.meta["wedges"] == 2
    assert result.meta["dropped"] == 2
    assert result.meta["legend"] == 2


def test_pie_all_non_positive_draws_nothing():
    result = _draw(parse_single_series("L,V\nA,0\nB,-2"), chart_kind="pie")
    assert result.meta["wedges"] == 0


def test_pie_skips_category_total_that_overflows():
    points = parse_single_series("L,V\nA,1e308\nA,1e308\nB,2")
    result = _draw(points, chart_kind="pie")
    assert result.meta["wedges"] == 1
    assert result.meta["dropped"] == 1
    assert result.meta["legend"] == 1


def test_pie_with_only_overflowing_total_draws_nothing():
    result = _draw(parse_single_series("L,V\nA,1e308\nA,1e308"), chart_kind="pie")
    assert result.meta["wedges"] == 0
    assert result.meta["dropped"] == 1


def test_bar_stack_that_overflows_is_skipped():
    result = _draw(parse_single_series("L,V\nA,1e308\nA,1e308\nB,2"))
    assert result.meta["status"] == "ok"
    assert result.meta["bars"] == 2
    assert result.meta["overflowed"] == 1


def test_empty_view_shows_placeholder():
    result = _draw([])
    assert result.meta["status"] == "empty"
    texts = [t.get_text() for t in result.figure.axes[0].texts]
    assert "No data" in texts


def test_draw_reuses_given_figure(single_csv):
    fig = Figure()
    backend = MatplotlibChartBackend()
    state = ChartState(points=parse_single_series(single_csv))
    backend.draw(describe(state.snapshot()), fig)
    result = backend.draw(describe(state.snapshot()), fig)
    assert result.figure is fig
    assert len(fig.axes) == 1
