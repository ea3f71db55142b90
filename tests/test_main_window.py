"""Tests for the catalog window wiring."""
from __future__ import annotations

import json

import pytest

from gem_catalog import config
from gem_catalog.filters import Facet
from gem_catalog.gui import file_dialog
from gem_catalog.gui import main_window as main_window_module
from gem_catalog.gui.main_window import GemCatalogWindow
from gem_catalog.storage_warnings import consume_storage_warnings, record_storage_warning


class FakeMessageBox:
    def __init__(self):
        self.messages = []

    def information(self, parent, title, text):
        self.messages.append(("information", title, text))

    def warning(self, parent, title, text):
        self.messages.append(("warning", title, text))


@pytest.fixture
def settings(tmp_path):
    return config.load_settings(tmp_path / "gem-catalog.config.yaml")


@pytest.fixture
def window(qapp, settings, sample_gems):
    return GemCatalogWindow(settings, sample_gems, language="en")


def test_summary_tracks_filters(window):
    assert window.toolbar().summary_text() == "Showing 4 of 4 gems"

    window.filter_panel().category_widget(Facet.ORIGIN).checkbox("Standard").setChecked(True)

    assert window.toolbar().summary_text() == "Showing 2 of 4 gems"


def test_search_box_filters_and_clear_resets_it(window):
    window._search_input.setText("pack")
    assert [gem.name for gem in window.visible_gems()] == ["Foliage"]

    window.filter_panel().clear_filters()

    assert window._search_input.text() == ""
    assert len(window.visible_gems()) == 4


def test_set_gems_updates_summary(window, sample_gems):
    window.set_gems(sample_gems[:1])
    assert window.toolbar().summary_text() == "Showing 1 of 1 gems"


def test_export_json_writes_visible_gems(window, monkeypatch, tmp_path):
    target = tmp_path / "gems.json"
    captured = {}

    def fake_dialog(parent, caption, directory, filter, **kwargs):
        captured.update(kwargs)
        return str(target), filter

    monkeypatch.setattr(main_window_module, "get_save_file_name", fake_dialog)
    window.filter_panel().category_widget(Facet.TYPE).checkbox("Tool").setChecked(True)

    window._export_json()

    data = json.loads(target.read_text(encoding="utf-8"))
    assert [item["name"] for item in data] == ["Atom", "ScriptCanvas"]
    assert captured["disallowed"] == "@"
    assert captured["reprompt"] is True


def test_export_refuses_reserved_filename(window, monkeypatch, tmp_path):
    rejected = tmp_path / "my@gems.csv"
    answers = [(str(rejected), ""), ("", "")]

    class FakeFileDialog:
        @staticmethod
        def getSaveFileName(*args, **kwargs):
            return answers.pop(0)

    box = FakeMessageBox()
    monkeypatch.setattr(file_dialog, "QFileDialog", FakeFileDialog)
    monkeypatch.setattr(file_dialog, "QMessageBox", box)

    window._export_csv()

    assert not rejected.exists()
    assert box.messages[0][:2] == ("warning", "Invalid filename")


def test_export_with_no_matches_informs_user(window, monkeypatch):
    box = FakeMessageBox()
    monkeypatch.setattr(main_window_module, "QMessageBox", box)
    monkeypatch.setattr(
        main_window_module,
        "get_save_file_name",
        lambda *args, **kwargs: pytest.fail("dialog should not open"),
    )
    window._search_input.setText("nothing matches this")

    window._export_csv()

    assert box.messages == [("information", "No gems", "No gems match the current filters")]


def test_export_failure_is_reported(window, monkeypatch, tmp_path):
    box = FakeMessageBox()
    target = tmp_path / "gems.csv"
    monkeypatch.setattr(main_window_module, "QMessageBox", box)
    monkeypatch.setattr(main_window_module, "get_save_file_name", lambda *a, **k: (str(target), ""))

    def failing_export(path, gems):
        raise OSError("disk full")

    monkeypatch.setattr(main_window_module, "export_csv", failing_export)
    consume_storage_warnings()

    window._export_csv()

    kind, title, text = box.messages[0]
    assert (kind, title) == ("warning", "Export failed")
    assert "GC003" in text and "disk full" in text
    status = window.statusBar().currentMessage()
    assert status.startswith("Could not write export file")
    assert str(target) in status
    assert consume_storage_warnings() == []


def test_pending_config_warning_shown_on_startup(qapp, settings, sample_gems, tmp_path):
    consume_storage_warnings()
    target = tmp_path / "locked" / "gem-catalog.config.yaml"
    record_storage_warning(scope="config", action="write", path=target, detail="permission denied")

    window = GemCatalogWindow(settings, sample_gems, language="en")

    assert window.statusBar().currentMessage() == (
        f"Could not write settings file {target}: permission denied"
    )
    assert consume_storage_warnings() == []
    assert window.report_storage_warnings() == []
