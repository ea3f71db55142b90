"""Load the gem catalog from a YAML document."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .models import (
    ORIGIN_OPTIONS,
    PLATFORM_OPTIONS,
    TYPE_OPTIONS,
    GemInfo,
    GemOrigin,
    GemPlatform,
    GemType,
    parse_flag,
)

LOGGER = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """Raised when the catalog file is unreadable or an entry is malformed."""


def load_catalog(path: Path | str | None) -> list[GemInfo]:
    """Read every gem listed under ``gems:`` in ``path``.

    An empty or missing path yields an empty catalog.
    """

    if not path:
        return []
    catalog_path = Path(path)
    if not catalog_path.exists():
        LOGGER.info("Gem catalog %s not found; starting empty", catalog_path)
        return []
    try:
        with catalog_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise CatalogError(f"Failed to read gem catalog {catalog_path}: {exc}") from exc
    gems = parse_catalog(data)
    LOGGER.info("Loaded %d gems from %s", len(gems), catalog_path)
    return gems


def parse_catalog(data: Any) -> list[GemInfo]:
    if not isinstance(data, dict):
        raise CatalogError("Gem catalog must be a mapping with a 'gems' list")
    entries = data.get("gems") or []
    if not isinstance(entries, list):
        raise CatalogError("'gems' must be a list")
    gems = []
    for index, entry in enumerate(entries):
        try:
            gems.append(parse_gem(entry))
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"Invalid gem entry #{index}: {exc}") from exc
    return gems


def parse_gem(entry: Any) -> GemInfo:
    if not isinstance(entry, dict):
        raise TypeError("entry must be a mapping")
    name = str(entry.get("name") or "").strip()
    if not name:
        raise ValueError("missing 'name'")
    origin_name = entry.get("origin")
    if not origin_name:
        raise ValueError(f"gem {name!r} has no 'origin'")
    origin = GemOrigin(parse_flag(str(origin_name), ORIGIN_OPTIONS))
    types = GemType(_parse_flag_list(entry.get("types"), TYPE_OPTIONS))
    platforms = GemPlatform(_parse_flag_list(entry.get("platforms"), PLATFORM_OPTIONS))
    features = tuple(str(feature) for feature in _as_list(entry.get("features")))
    return GemInfo(
        name=name,
        origin=origin,
        types=types,
        platforms=platforms,
        features=features,
        display_name=str(entry.get("display_name") or ""),
        summary=str(entry.get("summary") or ""),
        version=str(entry.get("version") or ""),
    )


def _parse_flag_list(value: Any, options) -> int:
    mask = 0
    for item in _as_list(value):
        mask |= parse_flag(str(item), options)
    return mask


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return value
    raise TypeError(f"expected a list, got {type(value).__name__}")
