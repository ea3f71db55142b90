"""Faceted filter panel shown beside the gem list."""
from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Dict, Iterable, List

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from ..filters import (
    FEATURE_DEFAULT_VISIBLE_COUNT,
    Facet,
    FilterCategory,
    FilterChanged,
    build_categories,
)
from .gem_model import GemSortFilterProxyModel

LOGGER = logging.getLogger(__name__)

Translator = Callable[[str], str]


class FilterCategoryWidget(QWidget):
    """One collapsible facet: a header, a checkbox per element and a see all/less link."""

    elementToggled = Signal(str, bool)

    def __init__(self, category: FilterCategory, translator: Translator, parent=None):
        super().__init__(parent)
        self._category = category
        self._t = translator
        self._element_rows: List[QWidget] = []
        self._checkboxes: Dict[str, QCheckBox] = {}
        self._see_all_less_button: QPushButton | None = None
        self._build_ui()
        self._update_collapse_state()
        self._update_see_all_less()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)

        header = QHBoxLayout()
        self._collapse_button = QToolButton()
        self._collapse_button.setCheckable(True)
        self._collapse_button.setAutoRaise(True)
        self._collapse_button.setFocusPolicy(Qt.NoFocus)
        self._collapse_button.setChecked(self._category.collapsed)
        self._collapse_button.clicked.connect(self._on_collapse_clicked)
        header.addWidget(self._collapse_button)
        self._header_label = QLabel(self._t(f"category_{self._category.label}"))
        header.addWidget(self._header_label)
        header.addStretch()
        layout.addLayout(header)

        # Collapsing hides this widget only; element rows keep their state.
        self._body = QWidget()
        body_layout = QVBoxLayout(self._body)
        body_layout.setContentsMargins(0, 0, 0, 0)
        body_layout.setAlignment(Qt.AlignTop)
        layout.addWidget(self._body)

        self._button_group = QButtonGroup(self)
        self._button_group.setExclusive(False)
        for element in self._category.elements:
            row = QWidget()
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(0, 0, 0, 0)
            checkbox = QCheckBox(element.name)
            checkbox.setChecked(element.name in self._category.selected)
            checkbox.toggled.connect(partial(self._on_element_toggled, element.name))
            self._button_group.addButton(checkbox)
            row_layout.addWidget(checkbox)
            row_layout.addStretch()
            row_layout.addWidget(QLabel(str(element.count)))
            body_layout.addWidget(row)
            self._element_rows.append(row)
            self._checkboxes[element.name] = checkbox

        if self._category.show_all_less:
            self._see_all_less_button = QPushButton()
            self._see_all_less_button.setFlat(True)
            self._see_all_less_button.setCursor(Qt.PointingHandCursor)
            self._see_all_less_button.clicked.connect(self._on_see_all_less_clicked)
            body_layout.addWidget(self._see_all_less_button, 0, Qt.AlignLeft)

        line = QFrame()
        line.setFrameShape(QFrame.HLine)
        line.setFrameShadow(QFrame.Sunken)
        layout.addWidget(line)

    def category(self) -> FilterCategory:
        return self._category

    def button_group(self) -> QButtonGroup:
        return self._button_group

    def checkbox(self, name: str) -> QCheckBox:
        return self._checkboxes[name]

    def element_rows(self) -> List[QWidget]:
        return list(self._element_rows)

    def body(self) -> QWidget:
        return self._body

    def see_all_less_button(self) -> QPushButton | None:
        return self._see_all_less_button

    def collapse_button(self) -> QToolButton:
        return self._collapse_button

    def shown_element_names(self) -> List[str]:
        """Names whose rows are not explicitly hidden."""

        return [
            element.name
            for element, row in zip(self._category.elements, self._element_rows)
            if not row.isHidden()
        ]

    def set_collapsed(self, collapsed: bool) -> None:
        self._collapse_button.setChecked(collapsed)
        self._on_collapse_clicked()

    def is_collapsed(self) -> bool:
        return self._category.collapsed

    def _on_collapse_clicked(self, *_args) -> None:
        self._category.collapsed = self._collapse_button.isChecked()
        self._update_collapse_state()

    def _on_see_all_less_clicked(self) -> None:
        self._category.toggle_see_all()
        self._update_see_all_less()

    def _on_element_toggled(self, name: str, checked: bool) -> None:
        self._category.set_selected(name, checked)
        self.elementToggled.emit(name, checked)

    def _update_collapse_state(self) -> None:
        collapsed = self._category.collapsed
        self._collapse_button.setArrowType(Qt.RightArrow if collapsed else Qt.DownArrow)
        self._body.setHidden(collapsed)

    def _update_see_all_less(self) -> None:
        shown = self._category.expanded_count()
        for index, row in enumerate(self._element_rows):
            row.setHidden(index >= shown)
        button = self._see_all_less_button
        if button is None:
            return
        button.setHidden(not self._category.see_all_less_visible())
        button.setText(self._t(self._category.see_all_less_text()))


class GemFilterWidget(QScrollArea):
    """Scrollable panel holding one :class:`FilterCategoryWidget` per facet.

    Counts come from the proxy's source model and are rebuilt wholesale when
    the catalog changes. Each checkbox toggle is forwarded to the proxy as a
    single :class:`FilterChanged` event.
    """

    filtersCleared = Signal()

    def __init__(
        self,
        proxy_model: GemSortFilterProxyModel,
        translator: Translator,
        *,
        feature_default_visible_count: int = FEATURE_DEFAULT_VISIBLE_COUNT,
        start_collapsed: Iterable[str] = (),
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._proxy = proxy_model
        self._t = translator
        self._feature_default_visible_count = feature_default_visible_count
        self._start_collapsed = set(start_collapsed)
        self._category_widgets: List[FilterCategoryWidget] = []

        self.setWidgetResizable(True)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAsNeeded)

        container = QWidget()
        self.setWidget(container)
        self._layout = QVBoxLayout(container)
        self._layout.setAlignment(Qt.AlignTop)

        header = QHBoxLayout()
        title = QLabel(self._t("filter_by"))
        font = title.font()
        font.setBold(True)
        title.setFont(font)
        header.addWidget(title)
        header.addStretch()
        self._clear_button = QPushButton(self._t("filter_clear"))
        self._clear_button.setFlat(True)
        self._clear_button.clicked.connect(self.clear_filters)
        header.addWidget(self._clear_button)
        self._layout.addLayout(header)

        source = self._proxy.source_model()
        source.modelReset.connect(self.rebuild)
        source.rowsInserted.connect(self.rebuild)
        source.rowsRemoved.connect(self.rebuild)
        self.rebuild()

    def categories(self) -> List[FilterCategory]:
        return [widget.category() for widget in self._category_widgets]

    def category_widgets(self) -> List[FilterCategoryWidget]:
        return list(self._category_widgets)

    def category_widget(self, facet: Facet) -> FilterCategoryWidget:
        for widget in self._category_widgets:
            if widget.category().facet is facet:
                return widget
        raise KeyError(facet)

    def rebuild(self, *_args) -> None:
        """Recount every facet from the current catalog snapshot."""

        view_state = {
            widget.category().label: (widget.category().collapsed, widget.category().see_all)
            for widget in self._category_widgets
        }
        for widget in self._category_widgets:
            self._layout.removeWidget(widget)
            widget.deleteLater()
        self._category_widgets.clear()

        gems = self._proxy.source_model().gems()
        categories = build_categories(
            gems,
            self._proxy.gem_filter(),
            feature_default_visible_count=self._feature_default_visible_count,
        )
        # A selected feature with no checkbox left could never be unticked.
        feature_names = set(categories[-1].names())
        active = self._proxy.features()
        if not active <= feature_names:
            LOGGER.debug("Dropping stale feature filters: %s", sorted(active - feature_names))
            self._proxy.set_features(active & feature_names)
        for category in categories:
            collapsed, see_all = view_state.get(
                category.label, (category.label in self._start_collapsed, False)
            )
            category.collapsed = collapsed
            category.see_all = see_all
            widget = FilterCategoryWidget(category, self._t)
            widget.elementToggled.connect(partial(self._on_element_toggled, category.facet))
            self._layout.addWidget(widget)
            self._category_widgets.append(widget)
        LOGGER.debug("Filter panel rebuilt for %d gems", len(gems))

    def clear_filters(self) -> None:
        self._proxy.clear_filters()
        self.rebuild()
        self.filtersCleared.emit()

    def _on_element_toggled(self, facet: Facet, name: str, checked: bool) -> None:
        self._proxy.apply_change(FilterChanged(facet=facet, element=name, selected=checked))
