"""Qt item models for the gem catalog list."""
from __future__ import annotations

from typing import Iterable, List, Set

from PySide6.QtCore import (
    QAbstractListModel,
    QModelIndex,
    QPersistentModelIndex,
    QSortFilterProxyModel,
    Qt,
    Signal,
)

from ..filters import FilterChanged, GemFilter
from ..models import GemInfo

NAME_ROLE = Qt.UserRole + 1
ORIGIN_ROLE = Qt.UserRole + 2
TYPES_ROLE = Qt.UserRole + 3
PLATFORMS_ROLE = Qt.UserRole + 4
FEATURES_ROLE = Qt.UserRole + 5
GEM_ROLE = Qt.UserRole + 6


class GemCatalogModel(QAbstractListModel):
    """Read-only, row-indexed view over a list of gems."""

    def __init__(self, gems: Iterable[GemInfo] = (), parent=None) -> None:
        super().__init__(parent)
        self._gems: List[GemInfo] = list(gems)

    def rowCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._gems)

    def data(self, index: QModelIndex | QPersistentModelIndex, role: int = Qt.DisplayRole):
        if not index.isValid() or not 0 <= index.row() < len(self._gems):
            return None
        gem = self._gems[index.row()]
        if role == Qt.DisplayRole:
            return gem.label
        if role == Qt.ToolTipRole:
            return gem.summary or None
        if role == NAME_ROLE:
            return gem.name
        if role == ORIGIN_ROLE:
            return int(gem.origin)
        if role == TYPES_ROLE:
            return int(gem.types)
        if role == PLATFORMS_ROLE:
            return int(gem.platforms)
        if role == FEATURES_ROLE:
            return list(gem.features)
        if role == GEM_ROLE:
            return gem
        return None

    def gem_at(self, row: int) -> GemInfo:
        return self._gems[row]

    def gems(self) -> List[GemInfo]:
        return list(self._gems)

    def set_gems(self, gems: Iterable[GemInfo]) -> None:
        self.beginResetModel()
        self._gems = list(gems)
        self.endResetModel()


class GemSortFilterProxyModel(QSortFilterProxyModel):
    """Applies a :class:`GemFilter` to a :class:`GemCatalogModel`.

    Every setter replaces one field of the filter, re-runs filtering and
    emits ``gemFilterChanged``.
    """

    gemFilterChanged = Signal()

    def __init__(self, source: GemCatalogModel, parent=None) -> None:
        super().__init__(parent)
        self._filter = GemFilter()
        self.setSourceModel(source)
        self.setSortCaseSensitivity(Qt.CaseInsensitive)
        self.sort(0)

    def source_model(self) -> GemCatalogModel:
        return self.sourceModel()  # type: ignore[return-value]

    def gem_filter(self) -> GemFilter:
        return self._filter

    def gem_origins(self) -> int:
        return self._filter.origins

    def set_gem_origins(self, origins: int) -> None:
        self._filter.origins = int(origins)
        self._refilter()

    def types(self) -> int:
        return self._filter.types

    def set_types(self, types: int) -> None:
        self._filter.types = int(types)
        self._refilter()

    def platforms(self) -> int:
        return self._filter.platforms

    def set_platforms(self, platforms: int) -> None:
        self._filter.platforms = int(platforms)
        self._refilter()

    def features(self) -> Set[str]:
        return set(self._filter.features)

    def set_features(self, features: Iterable[str]) -> None:
        self._filter.features = set(features)
        self._refilter()

    def search_text(self) -> str:
        return self._filter.search_text

    def set_search_text(self, text: str) -> None:
        self._filter.search_text = text
        self._refilter()

    def apply_change(self, event: FilterChanged) -> None:
        self._filter.apply(event)
        self._refilter()

    def clear_filters(self) -> None:
        self._filter.reset()
        self._refilter()

    def visible_gems(self) -> List[GemInfo]:
        return [self.data(self.index(row, 0), GEM_ROLE) for row in range(self.rowCount())]

    def filterAcceptsRow(self, source_row: int, source_parent) -> bool:
        source = self.source_model()
        if source_row >= source.rowCount():
            return False
        return self._filter.matches(source.gem_at(source_row))

    def _refilter(self) -> None:
        self.beginFilterChange()
        self.endFilterChange()
        self.gemFilterChanged.emit()
