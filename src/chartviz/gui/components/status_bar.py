"""Segmented status bar: message, data summary and last export outcome."""

from __future__ import annotations

from PyQt6.QtWidgets import QHBoxLayout, QLabel, QWidget

__all__ = ["StatusBarWidget"]


class StatusBarWidget(QWidget):
    """Composite status bar.

    Methods:
        update_message(text)
        update_data_summary(points, series)
        update_export(text)
    """

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setObjectName("StatusBarRoot")
        lay = QHBoxLayout(self)
        lay.setContentsMargins(8, 2, 8, 2)
        lay.setSpacing(16)
        self.lbl_message = QLabel("Ready")
        self.lbl_data = QLabel("")
        self.lbl_export = QLabel("")
        lay.addWidget(self.lbl_message, 1)
        lay.addWidget(self.lbl_data)
        lay.addWidget(self.lbl_export)

    def update_message(self, text: str) -> None:
        self.lbl_message.setText(text)

    def update_data_summary(self, points: int, series: int) -> None:
        self.lbl_data.setText(f"{points} points | {series} series")

    def update_export(self, text: str) -> None:
        self.lbl_export.setText(text)
