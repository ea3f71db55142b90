"""Utilities for exporting the filtered gem list."""
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable

from .models import GemInfo

EXPORT_FIELDS = [
    "name",
    "display_name",
    "origin",
    "types",
    "platforms",
    "features",
    "version",
    "summary",
]


def export_csv(path: str | Path, gems: Iterable[GemInfo]) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", newline="", encoding="utf-8") as file:
        writer = csv.DictWriter(file, fieldnames=EXPORT_FIELDS)
        writer.writeheader()
        for gem in gems:
            row = gem.to_dict()
            row["types"] = ",".join(row["types"])
            row["platforms"] = ",".join(row["platforms"])
            row["features"] = ",".join(row["features"])
            writer.writerow(row)
    return output


def export_json(path: str | Path, gems: Iterable[GemInfo]) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    serialized = [gem.to_dict() for gem in gems]
    output.write_text(json.dumps(serialized, indent=2, ensure_ascii=False), encoding="utf-8")
    return output
