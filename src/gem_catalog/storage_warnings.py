"""Recoverable write failures that the GUI reports after the fact."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StorageWarning:
    """A failed config or export write."""

    scope: str
    action: str
    path: Path
    detail: str


_WARNINGS: list[StorageWarning] = []


def record_storage_warning(scope: str, action: str, path: Path, detail: str) -> None:
    _WARNINGS.append(StorageWarning(scope=scope, action=action, path=Path(path), detail=detail))


def consume_storage_warnings() -> list[StorageWarning]:
    """Return and clear any pending storage warnings."""

    warnings = list(_WARNINGS)
    _WARNINGS.clear()
    return warnings
