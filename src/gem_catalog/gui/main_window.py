"""PySide6 main window for browsing the gem catalog."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QLineEdit,
    QListView,
    QMainWindow,
    QMessageBox,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from ..config import AppSettings, get_settings
from ..error_codes import ERROR_EXPORT_FAILED, build_error
from ..exporters import export_csv, export_json
from ..i18n import detect_language, format_error_record, translate
from ..models import GemInfo
from ..storage_warnings import StorageWarning, consume_storage_warnings, record_storage_warning
from .catalog_toolbar import CatalogToolbar
from .file_dialog import get_save_file_name
from .filter_panel import GemFilterWidget
from .gem_model import GemCatalogModel, GemSortFilterProxyModel

LOGGER = logging.getLogger(__name__)

Exporter = Callable[[str | Path, Iterable[GemInfo]], Path]


class GemCatalogWindow(QMainWindow):
    """Filter panel on the left, matching gems on the right."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        gems: Iterable[GemInfo] = (),
        language: str | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings or get_settings()
        self._language = language or detect_language()
        self.setWindowTitle(self._t("window_title"))

        self._model = GemCatalogModel(gems, self)
        self._proxy = GemSortFilterProxyModel(self._model, self)

        self._search_input = QLineEdit()
        self._search_input.setPlaceholderText(self._t("search_placeholder"))
        self._search_input.setClearButtonEnabled(True)
        self._search_input.textChanged.connect(self._proxy.set_search_text)

        self._filter_panel = GemFilterWidget(
            self._proxy,
            self._t,
            feature_default_visible_count=self._settings.filters.feature_default_visible_count,
            start_collapsed=self._settings.filters.start_collapsed,
        )
        self._filter_panel.filtersCleared.connect(self._on_filters_cleared)

        self._list_view = QListView()
        self._list_view.setModel(self._proxy)
        self._list_view.setUniformItemSizes(True)

        self._toolbar = CatalogToolbar(self._t)
        self._toolbar.export_csv_requested.connect(self._export_csv)
        self._toolbar.export_json_requested.connect(self._export_json)

        right = QWidget()
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)
        right_layout.addWidget(self._search_input)
        right_layout.addWidget(self._list_view)
        right_layout.addWidget(self._toolbar)

        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(self._filter_panel)
        splitter.addWidget(right)
        splitter.setStretchFactor(1, 1)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addWidget(splitter)
        self.setCentralWidget(central)

        self._proxy.gemFilterChanged.connect(self._update_summary)
        self._model.modelReset.connect(self._update_summary)
        self._update_summary()
        self.statusBar().showMessage(self._t("ready"))
        self.report_storage_warnings()
        self.resize(960, 640)

    def _t(self, key: str) -> str:
        return translate(key, self._language)

    def proxy_model(self) -> GemSortFilterProxyModel:
        return self._proxy

    def filter_panel(self) -> GemFilterWidget:
        return self._filter_panel

    def toolbar(self) -> CatalogToolbar:
        return self._toolbar

    def set_gems(self, gems: Iterable[GemInfo]) -> None:
        self._model.set_gems(gems)

    def visible_gems(self) -> List[GemInfo]:
        return self._proxy.visible_gems()

    def _update_summary(self, *_args) -> None:
        self._toolbar.update_summary(
            visible=self._proxy.rowCount(),
            total=self._model.rowCount(),
        )

    def _on_filters_cleared(self) -> None:
        self._search_input.blockSignals(True)
        self._search_input.clear()
        self._search_input.blockSignals(False)

    def _export_csv(self) -> None:
        self._export(export_csv, "export_csv", "gems.csv")

    def _export_json(self) -> None:
        self._export(export_json, "export_json", "gems.json")

    def _export(self, exporter: Exporter, key_prefix: str, suggested_name: str) -> None:
        gems = self.visible_gems()
        if not gems:
            QMessageBox.information(
                self,
                self._t("no_results_title"),
                self._t("no_results_body"),
            )
            return
        dialogs = self._settings.dialogs
        path, _ = get_save_file_name(
            self,
            self._t(f"{key_prefix}_dialog"),
            suggested_name,
            self._t(f"{key_prefix}_filter"),
            disallowed=dialogs.disallowed_filename_characters,
            reprompt=dialogs.reprompt_on_invalid,
            language=self._language,
        )
        if not path:
            return
        try:
            exporter(path, gems)
        except OSError as exc:
            LOGGER.warning("Failed to export gems to %s: %s", path, exc)
            record_storage_warning(scope="export", action="write", path=Path(path), detail=str(exc))
            record = build_error(ERROR_EXPORT_FAILED, path=path, detail=exc)
            QMessageBox.warning(
                self,
                self._t("export_error_title"),
                format_error_record(record, self._language),
            )
            self.report_storage_warnings()
            return
        LOGGER.info("Exported %d gems to %s", len(gems), path)
        self.statusBar().showMessage(self._t(f"{key_prefix}_done").format(path=path))

    def report_storage_warnings(self) -> List[StorageWarning]:
        """Show pending config or export write failures in the status bar."""

        warnings = consume_storage_warnings()
        if not warnings:
            return warnings
        for warning in warnings:
            LOGGER.warning("Storage %s failed for %s: %s", warning.action, warning.path, warning.detail)
        self.statusBar().showMessage(
            "; ".join(self._format_storage_warning(warning) for warning in warnings)
        )
        return warnings

    def _format_storage_warning(self, warning: StorageWarning) -> str:
        return self._t("storage_warning_line").format(
            scope=self._t(f"storage_scope_{warning.scope}"),
            path=warning.path,
            detail=warning.detail,
        )
