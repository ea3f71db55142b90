"""Facet counting and filter state for the gem catalog panel.

Nothing in here touches Qt. The widgets in :mod:`gem_catalog.gui` render a
:class:`FilterCategory` and forward every checkbox toggle as a
:class:`FilterChanged` event to :meth:`GemFilter.apply`.
"""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from .models import (
    ORIGIN_OPTIONS,
    PLATFORM_OPTIONS,
    TYPE_OPTIONS,
    FlagOption,
    GemInfo,
)

LOGGER = logging.getLogger(__name__)

FEATURE_DEFAULT_VISIBLE_COUNT = 5

ORIGIN_CATEGORY_LABEL = "Provider"
TYPE_CATEGORY_LABEL = "Type"
PLATFORM_CATEGORY_LABEL = "Supported Platforms"
FEATURE_CATEGORY_LABEL = "Features"

SEE_ALL_KEY = "filter_see_all"
SEE_LESS_KEY = "filter_see_less"


class Facet(Enum):
    ORIGIN = "origin"
    TYPE = "type"
    PLATFORM = "platform"
    FEATURE = "feature"


@dataclass(frozen=True)
class FilterElement:
    name: str
    count: int


@dataclass
class FilterCategory:
    """One facet as shown in the panel, plus its view state."""

    label: str
    elements: tuple[FilterElement, ...]
    facet: Facet | None = None
    show_all_less: bool = False
    default_visible_count: int = 0
    selected: set[str] = field(default_factory=set)
    collapsed: bool = False
    see_all: bool = False

    def names(self) -> list[str]:
        return [element.name for element in self.elements]

    def counts(self) -> list[int]:
        return [element.count for element in self.elements]

    def expanded_count(self) -> int:
        """Number of element rows shown while the body is expanded."""

        total = len(self.elements)
        if not self.show_all_less or self.see_all:
            return total
        return min(self.default_visible_count, total)

    def visible_count(self) -> int:
        if self.collapsed:
            return 0
        return self.expanded_count()

    def visible_elements(self) -> tuple[FilterElement, ...]:
        return self.elements[: self.visible_count()]

    def see_all_less_visible(self) -> bool:
        return self.show_all_less and bool(self.elements)

    def see_all_less_text(self) -> str:
        return SEE_LESS_KEY if self.see_all else SEE_ALL_KEY

    def toggle_see_all(self) -> bool:
        self.see_all = not self.see_all
        return self.see_all

    def toggle_collapsed(self) -> bool:
        self.collapsed = not self.collapsed
        return self.collapsed

    def set_selected(self, name: str, selected: bool) -> None:
        if name not in self.names():
            raise KeyError(name)
        if selected:
            self.selected.add(name)
        else:
            self.selected.discard(name)


def build_category(
    label: str,
    element_names: Sequence[str],
    element_counts: Sequence[int],
    *,
    facet: Facet | None = None,
    show_all_less: bool = False,
    default_visible_count: int = FEATURE_DEFAULT_VISIBLE_COUNT,
    selected: Iterable[str] = (),
) -> FilterCategory:
    """Pair names with counts in the order given.

    A length mismatch is a programming error and trips an assertion; the
    lists are never silently truncated.
    """

    assert len(element_names) == len(element_counts), (
        "Number of element names needs to match the counts."
    )
    elements = tuple(
        FilterElement(name=str(name), count=int(count))
        for name, count in zip(element_names, element_counts)
    )
    names = {element.name for element in elements}
    return FilterCategory(
        label=label,
        elements=elements,
        facet=facet,
        show_all_less=show_all_less,
        default_visible_count=default_visible_count,
        selected={name for name in selected if name in names},
    )


def count_flags(values: Iterable[int], options: Sequence[FlagOption]) -> list[int]:
    """Count, per option, how many values have that bit set."""

    materialized = [int(value) for value in values]
    return [
        sum(1 for value in materialized if value & int(option.value))
        for option in options
    ]


def count_origins(gems: Iterable[GemInfo], options: Sequence[FlagOption] = ORIGIN_OPTIONS) -> list[int]:
    # Origin is single-valued, so compare for equality instead of masking.
    origins = [int(gem.origin) for gem in gems]
    return [sum(1 for origin in origins if origin == int(option.value)) for option in options]


def count_features(gems: Iterable[GemInfo]) -> list[tuple[str, int]]:
    """Return ``(feature, occurrences)`` pairs sorted by feature name."""

    counter: Counter[str] = Counter()
    for gem in gems:
        counter.update(gem.features)
    return sorted(counter.items())


def _selected_names(mask: int, options: Sequence[FlagOption]) -> set[str]:
    return {option.name for option in options if mask & int(option.value)}


def build_origin_category(gems: Sequence[GemInfo], current: int = 0) -> FilterCategory:
    return build_category(
        ORIGIN_CATEGORY_LABEL,
        [option.name for option in ORIGIN_OPTIONS],
        count_origins(gems),
        facet=Facet.ORIGIN,
        selected=_selected_names(current, ORIGIN_OPTIONS),
    )


def build_type_category(gems: Sequence[GemInfo], current: int = 0) -> FilterCategory:
    return build_category(
        TYPE_CATEGORY_LABEL,
        [option.name for option in TYPE_OPTIONS],
        count_flags((gem.types for gem in gems), TYPE_OPTIONS),
        facet=Facet.TYPE,
        selected=_selected_names(current, TYPE_OPTIONS),
    )


def build_platform_category(gems: Sequence[GemInfo], current: int = 0) -> FilterCategory:
    return build_category(
        PLATFORM_CATEGORY_LABEL,
        [option.name for option in PLATFORM_OPTIONS],
        count_flags((gem.platforms for gem in gems), PLATFORM_OPTIONS),
        facet=Facet.PLATFORM,
        selected=_selected_names(current, PLATFORM_OPTIONS),
    )


def build_feature_category(
    gems: Sequence[GemInfo],
    current: Iterable[str] = (),
    default_visible_count: int = FEATURE_DEFAULT_VISIBLE_COUNT,
) -> FilterCategory:
    pairs = count_features(gems)
    return build_category(
        FEATURE_CATEGORY_LABEL,
        [name for name, _ in pairs],
        [count for _, count in pairs],
        facet=Facet.FEATURE,
        show_all_less=True,
        default_visible_count=default_visible_count,
        selected=current,
    )


@dataclass(frozen=True)
class FilterChanged:
    """A single checkbox toggle in one facet."""

    facet: Facet
    element: str
    selected: bool


@dataclass
class GemFilter:
    """Combined predicate built from every facet selection.

    An empty mask or feature set lets everything through. Bitmask facets
    pass a gem sharing any bit with the mask; the feature facet passes a gem
    carrying any of the selected features.
    """

    origins: int = 0
    types: int = 0
    platforms: int = 0
    features: set[str] = field(default_factory=set)
    search_text: str = ""

    def is_empty(self) -> bool:
        return not (
            self.origins or self.types or self.platforms or self.features or self.search_text.strip()
        )

    def reset(self) -> None:
        self.origins = 0
        self.types = 0
        self.platforms = 0
        self.features = set()
        self.search_text = ""

    def matches(self, gem: GemInfo) -> bool:
        if self.origins and not int(gem.origin) & self.origins:
            return False
        if self.types and not int(gem.types) & self.types:
            return False
        if self.platforms and not int(gem.platforms) & self.platforms:
            return False
        if self.features and not self.features.intersection(gem.features):
            return False
        return gem.matches_text(self.search_text)

    def toggle_origin(self, flag: int, checked: bool) -> int:
        self.origins = _toggle_bit(self.origins, flag, checked)
        return self.origins

    def toggle_type(self, flag: int, checked: bool) -> int:
        self.types = _toggle_bit(self.types, flag, checked)
        return self.types

    def toggle_platform(self, flag: int, checked: bool) -> int:
        self.platforms = _toggle_bit(self.platforms, flag, checked)
        return self.platforms

    def toggle_feature(self, feature: str, checked: bool) -> set[str]:
        if checked:
            self.features.add(feature)
        else:
            self.features.discard(feature)
        return self.features

    def apply(self, event: FilterChanged) -> None:
        """Route one toggle event to the facet it belongs to."""

        LOGGER.debug(
            "Filter %s %s -> %s", event.facet.value, event.element, event.selected
        )
        if event.facet is Facet.FEATURE:
            self.toggle_feature(event.element, event.selected)
            return
        options, toggle = {
            Facet.ORIGIN: (ORIGIN_OPTIONS, self.toggle_origin),
            Facet.TYPE: (TYPE_OPTIONS, self.toggle_type),
            Facet.PLATFORM: (PLATFORM_OPTIONS, self.toggle_platform),
        }[event.facet]
        toggle(_option_value(event.element, options), event.selected)


def _toggle_bit(mask: int, flag: int, checked: bool) -> int:
    if checked:
        return mask | int(flag)
    return mask & ~int(flag)


def _option_value(name: str, options: Sequence[FlagOption]) -> int:
    for option in options:
        if option.name == name:
            return int(option.value)
    raise KeyError(name)


def build_categories(
    gems: Sequence[GemInfo],
    gem_filter: GemFilter | None = None,
    *,
    feature_default_visible_count: int = FEATURE_DEFAULT_VISIBLE_COUNT,
) -> list[FilterCategory]:
    """Build every category in panel order, seeded from ``gem_filter``."""

    current = gem_filter or GemFilter()
    categories = [
        build_origin_category(gems, current.origins),
        build_type_category(gems, current.types),
        build_platform_category(gems, current.platforms),
        build_feature_category(
            gems,
            current.features,
            default_visible_count=feature_default_visible_count,
        ),
    ]
    LOGGER.debug("Rebuilt %d filter categories from %d gems", len(categories), len(gems))
    return categories


def filter_gems(gems: Iterable[GemInfo], gem_filter: GemFilter) -> list[GemInfo]:
    return [gem for gem in gems if gem_filter.matches(gem)]


__all__ = [
    "FEATURE_DEFAULT_VISIBLE_COUNT",
    "Facet",
    "FilterCategory",
    "FilterChanged",
    "FilterElement",
    "GemFilter",
    "build_categories",
    "build_category",
    "build_feature_category",
    "build_origin_category",
    "build_platform_category",
    "build_type_category",
    "count_features",
    "count_flags",
    "count_origins",
    "filter_gems",
]
