"""Chart editor main window.

Single screen: a form on the left (data text, labels, appearance, axes and
legend toggles, export buttons) and the live chart preview on the right.

Widgets never touch the chart: they forward edits to the view model, which
publishes state events; ``refresh`` then redraws from a new snapshot.
"""

from __future__ import annotations

import logging
from typing import Any, List

from PyQt6.QtCore import QSignalBlocker, Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QCheckBox,
    QColorDialog,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QSlider,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from chartviz.config import settings
from chartviz.domain.errors import ErrorKind
from chartviz.domain.models import ChartKind, LineStyle, Orientation
from chartviz.gui.app.config_store import AppConfig, save_config
from chartviz.gui.app.preferences import EditorPreferences, save_preferences
from chartviz.gui.components.status_bar import StatusBarWidget
from chartviz.gui.services.event_bus import Event, GUIEvent, Subscription
from chartviz.gui.services.export_service import ExportFormat, ExportResult, ExportService
from chartviz.gui.services.file_dialogs import FileDialogs, QtFileDialogs
from chartviz.gui.viewmodels.chart_editor_viewmodel import ChartEditorViewModel
from chartviz.gui.widgets.chart_preview import ChartPreview
from chartviz.parsing import ParseMode

log = logging.getLogger(__name__)

# Opacity slider works in percent
_OPACITY_SCALE = 100


class ChartEditorWindow(QMainWindow):
    def __init__(
        self,
        viewmodel: ChartEditorViewModel | None = None,
        *,
        dialogs: FileDialogs | None = None,
        exporter: ExportService | None = None,
        app_config: AppConfig | None = None,
        preferences: EditorPreferences | None = None,
        data_dir: str | None = None,
    ):
        super().__init__()
        self.setWindowTitle("ChartViz")
        self.app_config = app_config or AppConfig()
        self.preferences = preferences
        self.data_dir = data_dir
        self.vm = viewmodel or ChartEditorViewModel()
        self.dialogs = dialogs or QtFileDialogs(
            self,
            last_import_dir=self.app_config.last_import_dir,
            last_export_dir=self.app_config.last_export_dir,
        )
        self.exporter = exporter or ExportService()
        self.last_export: ExportResult | None = None
        self._subs: List[Subscription] = []

        self._build_ui()
        self._sync_controls()
        self._restore_geometry()
        self._subscribe()
        self.refresh()

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)

        top_bar = QHBoxLayout()
        self.import_btn = QPushButton("Import CSV")
        self.import_btn.clicked.connect(self._import_csv)
        top_bar.addWidget(self.import_btn)
        top_bar.addStretch(1)
        root.addLayout(top_bar)

        splitter = QSplitter()
        form_panel = QWidget()
        form_panel.setMinimumWidth(250)
        form_layout = QVBoxLayout(form_panel)
        form_layout.addWidget(self._build_data_group())
        form_layout.addWidget(self._build_appearance_group())
        form_layout.addWidget(self._build_axes_group())
        form_layout.addWidget(self._build_export_group())
        form_layout.addStretch(1)
        splitter.addWidget(form_panel)

        self.preview = ChartPreview()
        splitter.addWidget(self.preview)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)
        root.addWidget(splitter, 1)

        self.status_bar = StatusBarWidget()
        root.addWidget(self.status_bar)
        self.resize(900, 640)

    def _build_data_group(self) -> QGroupBox:
        box = QGroupBox("Data && Labels")
        lay = QFormLayout(box)
        self.text_edit = QPlainTextEdit()
        self.text_edit.setFixedHeight(100)
        self.text_edit.textChanged.connect(self._on_text_changed)
        lay.addRow(self.text_edit)
        self.apply_btn = QPushButton("Apply Data")
        self.apply_btn.clicked.connect(self._on_apply)
        lay.addRow(self.apply_btn)
        self.parse_mode_combo = QComboBox()
        self.parse_mode_combo.addItem("Multiple series", ParseMode.MULTI.value)
        self.parse_mode_combo.addItem("Single series (label,value)", ParseMode.SINGLE.value)
        self.parse_mode_combo.currentIndexChanged.connect(self._on_parse_mode_changed)
        lay.addRow("Columns", self.parse_mode_combo)
        self.title_edit = QLineEdit()
        self.title_edit.textChanged.connect(lambda t: self.vm.set("title", t))
        lay.addRow("Title", self.title_edit)
        self.x_label_edit = QLineEdit()
        self.x_label_edit.textChanged.connect(lambda t: self.vm.set("x_axis_label", t))
        lay.addRow("X axis", self.x_label_edit)
        self.y_label_edit = QLineEdit()
        self.y_label_edit.textChanged.connect(lambda t: self.vm.set("y_axis_label", t))
        lay.addRow("Y axis", self.y_label_edit)
        return box

    def _slider(self, lo: float, hi: float, scale: int = 1) -> QSlider:
        s = QSlider(Qt.Orientation.Horizontal)
        s.setRange(int(round(lo * scale)), int(round(hi * scale)))
        return s

    def _build_appearance_group(self) -> QGroupBox:
        box = QGroupBox("Appearance")
        lay = QFormLayout(box)
        self.color_btn = QPushButton()
        self.color_btn.clicked.connect(self._pick_color)
        lay.addRow("Primary color", self.color_btn)
        self.corner_slider = self._slider(*settings.CORNER_RADIUS_RANGE)
        self.corner_slider.valueChanged.connect(lambda v: self.vm.set("corner_radius", v))
        lay.addRow("Corner radius", self.corner_slider)
        self.width_slider = self._slider(*settings.BAR_WIDTH_RANGE)
        self.width_slider.valueChanged.connect(lambda v: self.vm.set("bar_width", v))
        lay.addRow("Bar width", self.width_slider)
        self.opacity_slider = self._slider(*settings.OPACITY_RANGE, scale=_OPACITY_SCALE)
        self.opacity_slider.valueChanged.connect(
            lambda v: self.vm.set("opacity", v / _OPACITY_SCALE)
        )
        lay.addRow("Opacity", self.opacity_slider)
        self.kind_combo = QComboBox()
        for kind in ChartKind:
            self.kind_combo.addItem(kind.value.capitalize(), kind.value)
        self.kind_combo.currentIndexChanged.connect(
            lambda _i: self.vm.set("chart_kind", self.kind_combo.currentData())
        )
        lay.addRow("Chart", self.kind_combo)
        self.line_style_combo = QComboBox()
        for style in LineStyle:
            self.line_style_combo.addItem(style.value.capitalize(), style.value)
        self.line_style_combo.currentIndexChanged.connect(
            lambda _i: self.vm.set("line_style", self.line_style_combo.currentData())
        )
        lay.addRow("Line style", self.line_style_combo)
        return box

    def _build_axes_group(self) -> QGroupBox:
        box = QGroupBox("Axes && Legend")
        lay = QVBoxLayout(box)
        self.legend_check = QCheckBox("Show legend")
        self.legend_check.toggled.connect(lambda on: self.vm.set("show_legend", on))
        self.vertical_check = QCheckBox("Vertical bars")
        self.vertical_check.toggled.connect(
            lambda on: self.vm.set(
                "orientation", Orientation.VERTICAL if on else Orientation.HORIZONTAL
            )
        )
        self.x_axis_check = QCheckBox("Show X axis")
        self.x_axis_check.toggled.connect(lambda on: self.vm.set("show_x_axis", on))
        self.y_axis_check = QCheckBox("Show Y axis")
        self.y_axis_check.toggled.connect(lambda on: self.vm.set("show_y_axis", on))
        for w in (self.legend_check, self.vertical_check, self.x_axis_check, self.y_axis_check):
            lay.addWidget(w)
        return box

    def _build_export_group(self) -> QGroupBox:
        box = QGroupBox("Export")
        lay = QHBoxLayout(box)
        self.export_buttons = {}
        for fmt in ExportFormat:
            btn = QPushButton(fmt.value.upper())
            btn.clicked.connect(lambda _checked=False, f=fmt: self.export(f))
            lay.addWidget(btn)
            self.export_buttons[fmt] = btn
        return box

    # ------------------------------------------------------------------
    # State -> widgets
    # ------------------------------------------------------------------
    def _sync_controls(self) -> None:
        """Copy view-model state into the widgets without echoing signals back."""
        cfg = self.vm.configuration
        widgets = [
            self.text_edit,
            self.parse_mode_combo,
            self.title_edit,
            self.x_label_edit,
            self.y_label_edit,
            self.corner_slider,
            self.width_slider,
            self.opacity_slider,
            self.kind_combo,
            self.line_style_combo,
            self.legend_check,
            self.vertical_check,
            self.x_axis_check,
            self.y_axis_check,
        ]
        blockers = [QSignalBlocker(w) for w in widgets]
        try:
            self.text_edit.setPlainText(self.vm.text)
            self.parse_mode_combo.setCurrentIndex(
                self.parse_mode_combo.findData(self.vm.parse_mode.value)
            )
            self.title_edit.setText(cfg.title)
            self.x_label_edit.setText(cfg.x_axis_label)
            self.y_label_edit.setText(cfg.y_axis_label)
            self.corner_slider.setValue(int(round(cfg.corner_radius)))
            self.width_slider.setValue(int(round(cfg.bar_width)))
            self.opacity_slider.setValue(int(round(cfg.opacity * _OPACITY_SCALE)))
            self.kind_combo.setCurrentIndex(self.kind_combo.findData(cfg.chart_kind.value))
            self.line_style_combo.setCurrentIndex(
                self.line_style_combo.findData(cfg.line_style.value)
            )
            self.legend_check.setChecked(cfg.show_legend)
            self.vertical_check.setChecked(cfg.orientation is Orientation.VERTICAL)
            self.x_axis_check.setChecked(cfg.show_x_axis)
            self.y_axis_check.setChecked(cfg.show_y_axis)
        finally:
            for b in blockers:
                b.unblock()
        self._update_color_button(cfg.primary_color)

    def _update_color_button(self, color: str) -> None:
        self.color_btn.setText(color)
        self.color_btn.setStyleSheet(f"background-color: {color};")

    def refresh(self, _evt: Event | None = None) -> None:
        """Redraw the preview from a fresh snapshot."""
        view = self.vm.view()
        meta = self.preview.show_view(view)
        self.status_bar.update_data_summary(len(self.vm.points()), len(view.series))
        self.line_style_combo.setEnabled(view.kind is ChartKind.LINE)
        self.width_slider.setEnabled(view.kind is ChartKind.BAR)
        self.vertical_check.setEnabled(view.kind is ChartKind.BAR)
        log.debug("Preview redrawn: %s", meta)

    # ------------------------------------------------------------------
    # Event bus wiring
    # ------------------------------------------------------------------
    def _subscribe(self) -> None:
        bus = self.vm.event_bus
        self._subs = [
            bus.subscribe(GUIEvent.POINTS_REPLACED, self.refresh),
            bus.subscribe(GUIEvent.CONFIG_CHANGED, self._on_config_changed),
            bus.subscribe(GUIEvent.EXPORT_COMPLETED, self._on_export_event),
            bus.subscribe(GUIEvent.EXPORT_FAILED, self._on_export_event),
            bus.subscribe(GUIEvent.LOG_RECORD_ADDED, self._on_log_record),
            bus.subscribe(GUIEvent.ERROR_OCCURRED, self._on_error),
        ]

    def _unsubscribe(self) -> None:
        for sub in self._subs:
            self.vm.event_bus.unsubscribe(sub)
        self._subs = []

    def _on_config_changed(self, evt: Event) -> None:
        if isinstance(evt.payload, dict) and "primary_color" in evt.payload:
            self._update_color_button(evt.payload["primary_color"])
        self.refresh()

    def _on_export_event(self, evt: Event) -> None:
        payload = evt.payload or {}
        if evt.name == GUIEvent.EXPORT_COMPLETED.value:
            self.status_bar.update_export(f"Saved {payload.get('path')}")
        else:
            self.status_bar.update_export(
                f"{str(payload.get('format', '')).upper()} export failed ({payload.get('error')})"
            )

    def _on_log_record(self, evt: Event) -> None:
        entry: Any = evt.payload
        if getattr(entry, "level", "") in ("WARNING", "ERROR", "CRITICAL"):
            self.status_bar.update_message(entry.message)

    def _on_error(self, evt: Event) -> None:
        payload = evt.payload or {}
        self.status_bar.update_message(f"Error: {payload.get('message', '')}")

    # ------------------------------------------------------------------
    # Widget -> view model
    # ------------------------------------------------------------------
    def _on_text_changed(self) -> None:
        self.vm.set_text(self.text_edit.toPlainText())

    def _on_apply(self) -> None:
        count = self.vm.apply()
        self.status_bar.update_message(f"Applied data: {count} points")

    def _on_parse_mode_changed(self, _index: int) -> None:
        self.vm.set_parse_mode(self.parse_mode_combo.currentData())

    def _pick_color(self) -> None:  # pragma: no cover - modal dialog
        color = QColorDialog.getColor(QColor(self.vm.configuration.primary_color), self)
        if color.isValid():
            self.vm.set("primary_color", color.name())

    def _import_csv(self) -> None:
        result = self.vm.import_csv(self.dialogs)
        if result.error is ErrorKind.UNREADABLE:
            self.status_bar.update_message(f"Could not read {result.detail}")
        if not result.ok:
            return
        blocker = QSignalBlocker(self.text_edit)
        self.text_edit.setPlainText(self.vm.text)
        blocker.unblock()
        self.status_bar.update_message(f"Imported {result.point_count} points")

    def export(self, fmt: ExportFormat) -> ExportResult:
        result = self.vm.export(fmt, self.preview.figure, self.dialogs, self.exporter)
        self.last_export = result
        if result.error is ErrorKind.CANCELLED:
            log.debug("Export cancelled")
        return result

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _restore_geometry(self) -> None:
        cfg = self.app_config
        if cfg.is_geometry_complete():
            self.setGeometry(cfg.window_x, cfg.window_y, cfg.window_w, cfg.window_h)
        if cfg.maximized:
            self.showMaximized()

    def persist_state(self) -> None:
        geo = self.geometry()
        self.app_config.window_x = geo.x()
        self.app_config.window_y = geo.y()
        self.app_config.window_w = geo.width()
        self.app_config.window_h = geo.height()
        self.app_config.maximized = self.isMaximized()
        if isinstance(self.dialogs, QtFileDialogs):
            self.app_config.last_import_dir = self.dialogs.last_import_dir
            self.app_config.last_export_dir = self.dialogs.last_export_dir
        if self.preferences is not None:
            self.preferences.parse_mode = self.vm.parse_mode
            self.preferences.chart = self.vm.configuration
            self.preferences.last_text = self.vm.text
        if self.data_dir is None:
            return
        try:
            save_config(self.app_config, self.data_dir)
            if self.preferences is not None:
                save_preferences(self.preferences, self.data_dir)
        except OSError as exc:
            log.warning("Could not persist editor state: %s", exc)

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        self.persist_state()
        self._unsubscribe()
        super().closeEvent(event)


__all__ = ["ChartEditorWindow"]
