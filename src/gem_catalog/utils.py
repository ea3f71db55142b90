"""Utility helpers used across the GUI application."""
from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePath

# '@' is reserved for asset path aliases such as @projectroot@.
DISALLOWED_FILENAME_CHARACTERS = "@"


def filename_component(path: str) -> str:
    """Return the last path component, accepting either separator style."""

    return PurePath(path.replace("\\", "/")).name


def invalid_filename_characters(
    path: str,
    disallowed: Iterable[str] = DISALLOWED_FILENAME_CHARACTERS,
) -> list[str]:
    """Return the disallowed characters present in the filename of ``path``.

    Only the final component is inspected; directories may legitimately
    contain characters that are reserved for asset names.
    """

    name = filename_component(path)
    return sorted({char for char in disallowed if char in name})


def is_valid_filename(
    path: str,
    disallowed: Iterable[str] = DISALLOWED_FILENAME_CHARACTERS,
) -> bool:
    return not invalid_filename_characters(path, disallowed)
