"""Shared fixtures."""
from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from gem_catalog.models import GemInfo, GemOrigin, GemPlatform, GemType  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def sample_gems() -> list[GemInfo]:
    return [
        GemInfo(
            name="Atom",
            origin=GemOrigin.STANDARD,
            types=GemType.CODE | GemType.TOOL,
            platforms=GemPlatform.WINDOWS | GemPlatform.LINUX,
            features=("Rendering", "Physics"),
            summary="Core renderer",
        ),
        GemInfo(
            name="PhysX",
            origin=GemOrigin.STANDARD,
            types=GemType.CODE,
            platforms=GemPlatform.WINDOWS | GemPlatform.LINUX | GemPlatform.MACOS,
            features=("Physics",),
        ),
        GemInfo(
            name="Foliage",
            origin=GemOrigin.REMOTE,
            types=GemType.ASSET,
            platforms=GemPlatform.ANDROID | GemPlatform.IOS,
            features=("Environment", "Rendering"),
            display_name="Foliage Pack",
        ),
        GemInfo(
            name="ScriptCanvas",
            origin=GemOrigin.LOCAL,
            types=GemType.TOOL,
            platforms=GemPlatform.WINDOWS,
            features=(),
        ),
    ]
