"""Tests for the catalog list model and its filtering proxy."""
from __future__ import annotations

import warnings

from PySide6.QtCore import Qt

from gem_catalog.filters import Facet, FilterChanged
from gem_catalog.gui.gem_model import (
    FEATURES_ROLE,
    GEM_ROLE,
    ORIGIN_ROLE,
    PLATFORMS_ROLE,
    TYPES_ROLE,
    GemCatalogModel,
    GemSortFilterProxyModel,
)
from gem_catalog.models import GemOrigin, GemPlatform, GemType


def test_catalog_model_exposes_roles(qapp, sample_gems):
    model = GemCatalogModel(sample_gems)
    index = model.index(2, 0)

    assert model.rowCount() == 4
    assert model.data(index, Qt.DisplayRole) == "Foliage Pack"
    assert model.data(index, ORIGIN_ROLE) == int(GemOrigin.REMOTE)
    assert model.data(index, TYPES_ROLE) == int(GemType.ASSET)
    assert model.data(index, PLATFORMS_ROLE) == int(GemPlatform.ANDROID | GemPlatform.IOS)
    assert model.data(index, FEATURES_ROLE) == ["Environment", "Rendering"]
    assert model.data(index, GEM_ROLE) is sample_gems[2]
    assert model.data(model.index(9, 0), Qt.DisplayRole) is None


def test_set_gems_resets_model(qapp, sample_gems):
    model = GemCatalogModel()
    resets = []
    model.modelReset.connect(lambda: resets.append(True))

    model.set_gems(sample_gems[:2])

    assert model.rowCount() == 2
    assert resets == [True]


def test_proxy_setters_filter_rows(qapp, sample_gems):
    proxy = GemSortFilterProxyModel(GemCatalogModel(sample_gems))
    changes = []
    proxy.gemFilterChanged.connect(lambda: changes.append(True))

    proxy.set_platforms(int(GemPlatform.WINDOWS))
    assert [gem.name for gem in proxy.visible_gems()] == ["Atom", "PhysX", "ScriptCanvas"]

    proxy.set_gem_origins(int(GemOrigin.LOCAL))
    assert [gem.name for gem in proxy.visible_gems()] == ["ScriptCanvas"]

    proxy.set_gem_origins(0)
    proxy.set_platforms(0)
    proxy.set_features({"Environment"})
    assert [gem.name for gem in proxy.visible_gems()] == ["Foliage"]
    assert proxy.features() == {"Environment"}
    assert len(changes) == 5


def test_proxy_sorts_by_display_name(qapp, sample_gems):
    proxy = GemSortFilterProxyModel(GemCatalogModel(reversed(sample_gems)))
    assert [gem.name for gem in proxy.visible_gems()] == ["Atom", "Foliage", "PhysX", "ScriptCanvas"]


def test_apply_change_and_clear(qapp, sample_gems):
    proxy = GemSortFilterProxyModel(GemCatalogModel(sample_gems))

    proxy.apply_change(FilterChanged(Facet.TYPE, "Asset", True))
    assert proxy.types() == int(GemType.ASSET)
    assert proxy.rowCount() == 1

    proxy.set_search_text("zzz")
    proxy.clear_filters()
    assert proxy.gem_filter().is_empty()
    assert proxy.rowCount() == 4


def test_refilter_raises_no_deprecation_warning(qapp, sample_gems):
    proxy = GemSortFilterProxyModel(GemCatalogModel(sample_gems))

    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        proxy.set_platforms(int(GemPlatform.WINDOWS))

    assert proxy.rowCount() == 3
