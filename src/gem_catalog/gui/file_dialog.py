"""Save dialog wrapper that refuses filenames with reserved characters."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto

from PySide6.QtWidgets import QFileDialog, QMessageBox, QWidget

from ..error_codes import ERROR_INVALID_FILENAME, build_error
from ..i18n import format_error_record, translate
from ..utils import DISALLOWED_FILENAME_CHARACTERS, filename_component, invalid_filename_characters

LOGGER = logging.getLogger(__name__)


class SaveOutcome(Enum):
    ACCEPTED = auto()
    CANCELLED = auto()
    REJECTED = auto()


@dataclass(frozen=True)
class SaveFileResult:
    """What the user ended up doing with the save dialog.

    ``path`` holds the chosen path for ACCEPTED and the refused path for
    REJECTED; it is empty for CANCELLED.
    """

    outcome: SaveOutcome
    path: str = ""
    selected_filter: str = ""

    @property
    def accepted(self) -> bool:
        return self.outcome is SaveOutcome.ACCEPTED


def prompt_save_file(
    parent: QWidget | None = None,
    caption: str = "",
    directory: str = "",
    filter: str = "",
    selected_filter: str = "",
    options: QFileDialog.Option | None = None,
    *,
    disallowed: Iterable[str] | None = None,
    reprompt: bool = True,
    language: str | None = None,
) -> SaveFileResult:
    """Ask for a save path, warning about reserved characters in the filename.

    With ``reprompt`` the dialog reopens at the refused path until the user
    picks a valid name or cancels. Without it a refused name ends the prompt
    with ``SaveOutcome.REJECTED``. Names are never rewritten.
    """

    characters = DISALLOWED_FILENAME_CHARACTERS if disallowed is None else "".join(disallowed)
    extra = {} if options is None else {"options": options}
    start = directory
    chosen_filter = selected_filter
    while True:
        path, chosen_filter = QFileDialog.getSaveFileName(
            parent, caption, start, filter, chosen_filter, **extra
        )
        if not path:
            return SaveFileResult(SaveOutcome.CANCELLED)
        invalid = invalid_filename_characters(path, characters)
        if not invalid:
            return SaveFileResult(SaveOutcome.ACCEPTED, path, chosen_filter)
        LOGGER.info("Refusing save path %s (reserved characters: %s)", path, "".join(invalid))
        _warn_invalid_filename(parent, path, invalid, language)
        if not reprompt:
            return SaveFileResult(SaveOutcome.REJECTED, path, chosen_filter)
        start = path


def get_save_file_name(
    parent: QWidget | None = None,
    caption: str = "",
    directory: str = "",
    filter: str = "",
    selected_filter: str = "",
    options: QFileDialog.Option | None = None,
    *,
    disallowed: Iterable[str] | None = None,
    reprompt: bool = True,
    language: str | None = None,
) -> tuple[str, str]:
    """Drop-in for ``QFileDialog.getSaveFileName``.

    Returns ``("", "")`` when the user cancels or a refused name ends the
    prompt; use :func:`prompt_save_file` to tell those apart.
    """

    result = prompt_save_file(
        parent,
        caption,
        directory,
        filter,
        selected_filter,
        options,
        disallowed=disallowed,
        reprompt=reprompt,
        language=language,
    )
    if not result.accepted:
        return "", ""
    return result.path, result.selected_filter


def _warn_invalid_filename(
    parent: QWidget | None,
    path: str,
    invalid: list[str],
    language: str | None,
) -> None:
    record = build_error(
        ERROR_INVALID_FILENAME,
        filename=filename_component(path),
        characters=" ".join(invalid),
    )
    QMessageBox.warning(
        parent,
        translate("invalid_filename_title", language),
        format_error_record(record, language),
    )
