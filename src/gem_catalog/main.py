"""Application entry point."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox

# PyInstaller executes main.py as a top-level script. When that happens
# ``__package__`` is empty and the src root is not on ``sys.path``.
if __package__ in (None, ""):
    package_dir = Path(__file__).resolve().parent
    sys.path.insert(0, str(package_dir.parent))

from gem_catalog.catalog import CatalogError, load_catalog
from gem_catalog.config import ConfigurationError, get_settings
from gem_catalog.error_codes import ERROR_CATALOG_LOAD_FAILED, build_error
from gem_catalog.gui import GemCatalogWindow
from gem_catalog.i18n import format_error_record, translate


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse and filter the gem catalog")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Gem catalog YAML file (overrides catalog.path from the config)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        logging.exception("Failed to load configuration")
        QMessageBox.critical(
            None,
            "Configuration Error",
            f"Failed to load configuration file.\n{exc}\n"
            "Delete or fix gem-catalog.config.yaml and retry.",
        )
        return 1
    catalog_path = args.catalog or settings.catalog.path
    try:
        gems = load_catalog(catalog_path)
    except CatalogError as exc:
        logging.exception("Failed to load gem catalog")
        record = build_error(ERROR_CATALOG_LOAD_FAILED, path=catalog_path, detail=exc)
        QMessageBox.critical(
            None,
            translate("catalog_error_title"),
            format_error_record(record),
        )
        return 1
    window = GemCatalogWindow(settings, gems)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
