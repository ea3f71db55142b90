"""Tests for the reserved-character save dialog wrapper."""
from __future__ import annotations

import pytest

from gem_catalog.gui import file_dialog
from gem_catalog.gui.file_dialog import SaveOutcome, get_save_file_name, prompt_save_file


class FakeFileDialog:
    """Returns queued answers and records each call's arguments."""

    def __init__(self, answers):
        self._answers = list(answers)
        self.calls = []

    def getSaveFileName(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return self._answers.pop(0)


class FakeMessageBox:
    def __init__(self):
        self.warnings = []

    def warning(self, parent, title, text):
        self.warnings.append((title, text))


@pytest.fixture
def message_box(monkeypatch):
    box = FakeMessageBox()
    monkeypatch.setattr(file_dialog, "QMessageBox", box)
    return box


def _install_dialog(monkeypatch, answers) -> FakeFileDialog:
    dialog = FakeFileDialog(answers)
    monkeypatch.setattr(file_dialog, "QFileDialog", dialog)
    return dialog


def test_valid_name_is_returned(monkeypatch, message_box):
    dialog = _install_dialog(monkeypatch, [("/tmp/myfile.txt", "Text (*.txt)")])

    path, selected = get_save_file_name(None, "Save", "/tmp", "Text (*.txt)")

    assert (path, selected) == ("/tmp/myfile.txt", "Text (*.txt)")
    assert message_box.warnings == []
    assert dialog.calls[0][0] == (None, "Save", "/tmp", "Text (*.txt)", "")


def test_invalid_name_reprompts_from_rejected_path(monkeypatch, message_box):
    dialog = _install_dialog(
        monkeypatch,
        [("/tmp/my@file.txt", "Text (*.txt)"), ("/tmp/myfile.txt", "Text (*.txt)")],
    )

    result = prompt_save_file(None, "Save", "/tmp", "Text (*.txt)", language="en")

    assert result.outcome is SaveOutcome.ACCEPTED
    assert result.path == "/tmp/myfile.txt"
    assert len(dialog.calls) == 2
    assert dialog.calls[1][0][2] == "/tmp/my@file.txt"
    assert dialog.calls[1][0][4] == "Text (*.txt)"
    title, text = message_box.warnings[0]
    assert title == "Invalid filename"
    assert "my@file.txt" in text and "GC001" in text


def test_cancel_after_rejection_returns_empty(monkeypatch, message_box):
    _install_dialog(monkeypatch, [("/tmp/a@b.txt", ""), ("", "")])

    assert get_save_file_name(None, "Save") == ("", "")
    assert len(message_box.warnings) == 1


def test_cancel_is_reported_as_cancelled(monkeypatch, message_box):
    _install_dialog(monkeypatch, [("", "")])

    result = prompt_save_file()

    assert result.outcome is SaveOutcome.CANCELLED
    assert not result.accepted
    assert result.path == ""


def test_rejection_without_reprompt_is_distinguishable(monkeypatch, message_box):
    dialog = _install_dialog(monkeypatch, [("/tmp/my@file.txt", "")])

    result = prompt_save_file(None, "Save", reprompt=False)

    assert result.outcome is SaveOutcome.REJECTED
    assert result.path == "/tmp/my@file.txt"
    assert len(dialog.calls) == 1


def test_plain_api_returns_empty_on_rejection(monkeypatch, message_box):
    _install_dialog(monkeypatch, [("/tmp/my@file.txt", "")])

    assert get_save_file_name(None, "Save", reprompt=False) == ("", "")


def test_reserved_characters_in_directories_are_allowed(monkeypatch, message_box):
    _install_dialog(monkeypatch, [("/projects/@root@/file.txt", "")])

    assert get_save_file_name()[0] == "/projects/@root@/file.txt"
    assert message_box.warnings == []


def test_custom_disallowed_set(monkeypatch, message_box):
    _install_dialog(monkeypatch, [("/tmp/my@file.txt", "")])

    result = prompt_save_file(disallowed="#")

    assert result.outcome is SaveOutcome.ACCEPTED
    assert result.path == "/tmp/my@file.txt"
    assert message_box.warnings == []


def test_options_are_forwarded_only_when_given(monkeypatch, message_box):
    dialog = _install_dialog(monkeypatch, [("/tmp/a.txt", ""), ("/tmp/b.txt", "")])
    sentinel = object()

    get_save_file_name()
    get_save_file_name(options=sentinel)

    assert dialog.calls[0][1] == {}
    assert dialog.calls[1][1] == {"options": sentinel}
