"""Widget-level tests for the chart editor window (offscreen Qt)."""

import pytest

from chartviz.domain import ChartKind, Orientation
from chartviz.gui.app.preferences import EditorPreferences
from chartviz.gui.services.event_bus import EventBus
from chartviz.gui.services.export_service import ExportFormat
from chartviz.gui.viewmodels.chart_editor_viewmodel import ChartEditorViewModel
from chartviz.gui.views.chart_editor_window import ChartEditorWindow


class FakeDialogs:
    def __init__(self, path=None, export_path=None):
        self.path = path
        self.export_path = export_path

    def open_path(self):
        return self.path

    def choose_export_path(self, fmt):
        return self.export_path


@pytest.fixture
def make_window(qtbot):
    def _make(dialogs=None, **kwargs):
        vm = ChartEditorViewModel(event_bus=EventBus())
        win = ChartEditorWindow(vm, dialogs=dialogs or FakeDialogs(), **kwargs)
        qtbot.addWidget(win)
        return win

    return _make


def _axes_title(win):
    return win.preview.figure.axes[0].get_title()


def test_initial_state_reflected_in_controls(make_window):
    win = make_window()
    assert win.title_edit.text() == "Sample Chart"
    assert win.opacity_slider.value() == 100
    assert win.width_slider.value() == 10
    assert win.legend_check.isChecked()
    assert win.vertical_check.isChecked()
    assert win.kind_combo.currentData() == "bar"
    assert win.status_bar.lbl_data.text() == "6 points | 2 series"
    assert win.preview.last_meta["status"] == "ok"
    assert _axes_title(win) == "Sample Chart"


def test_title_edit_redraws_preview(make_window):
    win = make_window()
    win.title_edit.setText("Quarterly")
    assert win.vm.configuration.title == "Quarterly"
    assert _axes_title(win) == "Quarterly"


def test_slider_values_stay_in_range(make_window):
    win = make_window()
    win.corner_slider.setValue(15)
    assert win.vm.configuration.corner_radius == 10.0
    win.opacity_slider.setValue(50)
    assert win.vm.configuration.opacity == 0.5
    win.width_slider.setValue(1)
    assert win.vm.configuration.bar_width == 2.0


def test_text_edit_reparses_live(make_window):
    win = make_window()
    win.text_edit.setPlainText("Label,Value\nA,1\nB,2\nC,3")
    assert len(win.vm.points()) == 3
    assert not win.vm.multiple_series
    assert win.status_bar.lbl_data.text() == "3 points | 1 series"


def test_apply_button_reports_count(make_window):
    win = make_window()
    win.apply_btn.click()
    assert win.status_bar.lbl_message.text() == "Applied data: 6 points"


def test_parse_mode_combo(make_window):
    win = make_window()
    win.parse_mode_combo.setCurrentIndex(win.parse_mode_combo.findData("single"))
    assert win.vm.parse_mode.value == "single"
    assert len(win.vm.points()) == 3


def test_chart_kind_toggles_dependent_controls(make_window):
    win = make_window()
    assert not win.line_style_combo.isEnabled()
    win.kind_combo.setCurrentIndex(win.kind_combo.findData("line"))
    assert win.vm.configuration.chart_kind is ChartKind.LINE
    assert win.line_style_combo.isEnabled()
    assert not win.width_slider.isEnabled()
    assert win.preview.last_meta["lines"] == 2


def test_checkboxes_update_configuration(make_window):
    win = make_window()
    win.vertical_check.setChecked(False)
    win.legend_check.setChecked(False)
    win.y_axis_check.setChecked(False)
    cfg = win.vm.configuration
    assert cfg.orientation is Orientation.HORIZONTAL
    assert cfg.show_legend is False
    assert cfg.show_y_axis is False
    assert win.preview.last_meta["legend"] == 0


def test_import_updates_text_without_double_parse(make_window, tmp_path):
    src = tmp_path / "data.csv"
    src.write_text("L,S1\nX,5\nY,6", encoding="utf-8")
    win = make_window(dialogs=FakeDialogs(path=str(src)))
    win.import_btn.click()
    assert win.text_edit.toPlainText() == "L,S1\nX,5\nY,6"
    assert len(win.vm.points()) == 2
    assert win.status_bar.lbl_message.text() == "Imported 2 points"


def test_cancelled_import_keeps_data(make_window):
    win = make_window(dialogs=FakeDialogs(path=None))
    win.import_btn.click()
    assert len(win.vm.points()) == 6


def test_unreadable_import_shown_in_status_bar(make_window, tmp_path):
    missing = tmp_path / "gone.csv"
    win = make_window(dialogs=FakeDialogs(path=str(missing)))
    text_before = win.text_edit.toPlainText()
    win.import_btn.click()
    assert len(win.vm.points()) == 6
    assert win.text_edit.toPlainText() == text_before
    assert win.status_bar.lbl_message.text() == f"Could not read {missing}"


def test_export_button_writes_file(make_window, tmp_path):
    target = tmp_path / "chart.pdf"
    win = make_window(dialogs=FakeDialogs(export_path=str(target)))
    win.export_buttons[ExportFormat.PDF].click()
    assert win.last_export is not None and win.last_export.ok
    assert target.read_bytes().startswith(b"%PDF")
    assert win.status_bar.lbl_export.text() == f"Saved {target}"


def test_failed_export_shown_in_status_bar(make_window, tmp_path):
    target = tmp_path / "missing" / "chart.png"
    win = make_window(dialogs=FakeDialogs(export_path=str(target)))
    win.export(ExportFormat.PNG)
    assert not win.last_export.ok
    assert "PNG export failed" in win.status_bar.lbl_export.text()


def test_persist_state_writes_files(make_window, tmp_path):
    prefs = EditorPreferences()
    win = make_window(preferences=prefs, data_dir=str(tmp_path))
    win.title_edit.setText("Persisted")
    win.persist_state()
    assert (tmp_path / "app_state.json").exists()
    assert (tmp_path / "editor_prefs.json").exists()
    assert prefs.chart.title == "Persisted"
    assert prefs.last_text == win.vm.text
