"""Toolbar under the gem list: match summary and export buttons."""
from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

Translator = Callable[[str], str]


class CatalogToolbar(QWidget):
    export_csv_requested = Signal()
    export_json_requested = Signal()

    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self._t = translator
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._summary_label = QLabel("")
        layout.addWidget(self._summary_label)
        layout.addStretch()
        self._csv_button = QPushButton(self._t("export_csv"))
        self._json_button = QPushButton(self._t("export_json"))
        self._csv_button.clicked.connect(self.export_csv_requested)
        self._json_button.clicked.connect(self.export_json_requested)
        layout.addWidget(self._csv_button)
        layout.addWidget(self._json_button)

    def update_summary(self, *, visible: int, total: int) -> None:
        self._summary_label.setText(
            self._t("summary_template").format(visible=visible, total=total)
        )
        self._csv_button.setEnabled(visible > 0)
        self._json_button.setEnabled(visible > 0)

    def summary_text(self) -> str:
        return self._summary_label.text()
