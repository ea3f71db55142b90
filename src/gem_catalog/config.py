"""Runtime configuration loader for the gem catalog browser."""
from __future__ import annotations

import argparse
import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .filters import FEATURE_DEFAULT_VISIBLE_COUNT
from .storage_warnings import record_storage_warning
from .utils import DISALLOWED_FILENAME_CHARACTERS

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME = "gem-catalog.config.yaml"


def config_file_path(config_path: Path | str | None = None) -> Path:
    """Return the resolved configuration file path."""

    if config_path is None:
        return Path.cwd() / CONFIG_FILENAME
    if isinstance(config_path, Path):
        return config_path
    return Path(config_path)


DEFAULT_SETTINGS: dict[str, Any] = {
    "version": 1,
    "catalog": {
        "path": "",
    },
    "filters": {
        "feature_default_visible_count": FEATURE_DEFAULT_VISIBLE_COUNT,
        "start_collapsed": [],
    },
    "dialogs": {
        "disallowed_filename_characters": DISALLOWED_FILENAME_CHARACTERS,
        "reprompt_on_invalid": True,
    },
}


class ConfigurationError(RuntimeError):
    """Raised when the YAML configuration cannot be loaded."""


@dataclass(frozen=True)
class CatalogSettings:
    path: str


@dataclass(frozen=True)
class FilterSettings:
    feature_default_visible_count: int
    start_collapsed: tuple[str, ...]


@dataclass(frozen=True)
class DialogSettings:
    disallowed_filename_characters: str
    reprompt_on_invalid: bool


@dataclass(frozen=True)
class AppSettings:
    catalog: CatalogSettings
    filters: FilterSettings
    dialogs: DialogSettings
    raw: dict[str, Any]


_SETTINGS_CACHE: AppSettings | None = None


def get_settings() -> AppSettings:
    """Return cached settings, loading from disk when necessary."""

    global _SETTINGS_CACHE
    if _SETTINGS_CACHE is None:
        _SETTINGS_CACHE = load_settings()
    return _SETTINGS_CACHE


def reset_settings_cache() -> None:
    """Reset the cached settings (useful for tests)."""

    global _SETTINGS_CACHE
    _SETTINGS_CACHE = None


def load_settings(config_path: Path | str | None = None) -> AppSettings:
    """Load settings from YAML, creating or merging defaults as needed."""

    path = config_file_path(config_path)
    try:
        data = _read_or_create_config(path)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {path}\n{exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {path}")
    merged = _merge_with_defaults(copy.deepcopy(DEFAULT_SETTINGS), data)
    if merged != data:
        _write_yaml(path, merged)
    return _build_settings(merged)


def write_default_config(destination: Path | str) -> Path:
    """Write the default configuration template to ``destination``."""

    target = Path(destination)
    _write_yaml(target, copy.deepcopy(DEFAULT_SETTINGS))
    return target


def merge_with_defaults(user_values: dict[str, Any] | None) -> dict[str, Any]:
    """Merge ``user_values`` with the default template without touching disk."""

    if user_values is None:
        user_values = {}
    return _merge_with_defaults(copy.deepcopy(DEFAULT_SETTINGS), user_values)


def _read_or_create_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        _write_yaml(path, copy.deepcopy(DEFAULT_SETTINGS))
        return copy.deepcopy(DEFAULT_SETTINGS)
    with path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    return loaded


def _write_yaml(path: Path, data: dict[str, Any]) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=False)
    except OSError as exc:  # pragma: no cover - depends on system perms
        LOGGER.warning("Failed to write configuration %s: %s", path, exc)
        record_storage_warning(scope="config", action="write", path=path, detail=str(exc))
        return False
    return True


def _merge_with_defaults(defaults: dict[str, Any], user_values: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for key in user_values:
        merged[key] = user_values[key]
    for key, value in defaults.items():
        if key not in user_values or user_values[key] is None:
            merged[key] = copy.deepcopy(value)
            continue
        if isinstance(value, dict) and isinstance(user_values.get(key), dict):
            merged[key] = _merge_with_defaults(value, user_values[key])
        else:
            merged[key] = user_values[key]
    return merged


def _build_settings(data: dict[str, Any]) -> AppSettings:
    catalog = _build_catalog_settings(data.get("catalog", {}))
    filters = _build_filter_settings(data.get("filters", {}))
    dialogs = _build_dialog_settings(data.get("dialogs", {}))
    return AppSettings(catalog=catalog, filters=filters, dialogs=dialogs, raw=data)


def _build_catalog_settings(data: dict[str, Any]) -> CatalogSettings:
    return CatalogSettings(path=str(data.get("path") or ""))


def _build_filter_settings(data: dict[str, Any]) -> FilterSettings:
    defaults = DEFAULT_SETTINGS["filters"]
    visible = int(
        data.get("feature_default_visible_count", defaults["feature_default_visible_count"])
    )
    if visible <= 0:
        visible = defaults["feature_default_visible_count"]
    collapsed = tuple(str(label) for label in data.get("start_collapsed") or ())
    return FilterSettings(feature_default_visible_count=visible, start_collapsed=collapsed)


def _build_dialog_settings(data: dict[str, Any]) -> DialogSettings:
    defaults = DEFAULT_SETTINGS["dialogs"]
    disallowed = data.get("disallowed_filename_characters")
    if disallowed is None:
        disallowed = defaults["disallowed_filename_characters"]
    return DialogSettings(
        disallowed_filename_characters=str(disallowed),
        reprompt_on_invalid=bool(
            data.get("reprompt_on_invalid", defaults["reprompt_on_invalid"])
        ),
    )


def main() -> None:  # pragma: no cover - CLI helper
    parser = argparse.ArgumentParser(description="Gem catalog configuration utilities")
    parser.add_argument(
        "--write-default",
        dest="write_default",
        type=Path,
        help="Write the default configuration YAML to the provided path",
    )
    args = parser.parse_args()
    if args.write_default:
        target = write_default_config(args.write_default)
        print(f"Wrote default configuration to {target}")
        return
    settings = load_settings()
    config_path = Path.cwd() / CONFIG_FILENAME
    version = settings.raw.get("version", "n/a")
    print(f"Loaded configuration from {config_path}\nVersion: {version}")


if __name__ == "__main__":  # pragma: no cover - CLI
    main()
