"""GUI package exposing the main window, filter panel and save dialog helper."""
from __future__ import annotations

from .file_dialog import SaveFileResult, SaveOutcome, get_save_file_name, prompt_save_file
from .filter_panel import FilterCategoryWidget, GemFilterWidget
from .gem_model import GemCatalogModel, GemSortFilterProxyModel
from .main_window import GemCatalogWindow

__all__ = [
    "FilterCategoryWidget",
    "GemCatalogModel",
    "GemCatalogWindow",
    "GemFilterWidget",
    "GemSortFilterProxyModel",
    "SaveFileResult",
    "SaveOutcome",
    "get_save_file_name",
    "prompt_save_file",
]
