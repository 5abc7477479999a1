"""CatalogStore: on-disk plot catalog plus manually entered land.

The catalog file is written by whatever fetches plots from the GIS layer or
a spreadsheet; this store only reads it, and owns the ``manual`` section
where user-entered land is kept.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from hyperplot.catalog.normalize import load_plots, plot_from_manual_entry
from hyperplot.config import CATALOG_PATH
from hyperplot.matching.models import CatalogPlot

logger = logging.getLogger(__name__)

MANUAL_DEFAULTS = {
    "plot_number": "",
    "area_name": "",
    "status": "Available",
    "latitude": 25.2048,
    "longitude": 55.2708,
    "plot_area_sqm": 0,
    "gfa_sqm": 0,
    "floors": "",
    "zoning": "",
    "land_use_main": "",
    "land_use_sub": "",
    "notes": "",
    "is_draft": True,
}


class CatalogLoadError(Exception):
    """Raised when the catalog file cannot be read or has the wrong shape."""


class CatalogStore:
    """Manage the catalog.json file.

    Structure (any one of the plot sources):
    {
        "plots": [{"id": "6457821", "area": 4838, "gfa": 21771, ...}],
        "features": [{"attributes": {"PLOT_NUMBER": ..., "AREA_SQM": ...}}],
        "manual": [{"id": "ML_...", "plot_number": "...", "area_name": "...", ...}]
    }
    A bare JSON list is read as "plots".
    """

    def __init__(self, path: Path | None = None):
        self._path = path or CATALOG_PATH
        self._data: Optional[dict] = None

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def _load(self) -> dict:
        if self._data is not None:
            return self._data

        if not self._path.exists():
            logger.info("No catalog file at %s. Starting empty.", self._path)
            self._data = {"plots": [], "manual": []}
            return self._data

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(f"Cannot read catalog {self._path}: {e}") from e

        if isinstance(raw, list):
            raw = {"plots": raw}
        if not isinstance(raw, dict):
            raise CatalogLoadError(f"Catalog {self._path} must be a JSON object or list.")

        raw.setdefault("manual", [])
        self._data = raw
        return self._data

    def _save(self) -> None:
        data = self._load()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp.replace(self._path)
        logger.info("Saved catalog to %s", self._path)

    @property
    def manual_entries(self) -> list[dict]:
        return self._load()["manual"]

    @property
    def source_plots(self) -> list[CatalogPlot]:
        """Plots from the GIS / spreadsheet section only."""
        data = self._load()
        if "features" in data:
            return load_plots({"features": data["features"]})
        return load_plots(data.get("plots") or [])

    @property
    def plots(self) -> list[CatalogPlot]:
        """All plots, manual entries last."""
        manual = [plot_from_manual_entry(e) for e in self.manual_entries]
        return self.source_plots + manual

    def save_manual_entry(self, entry: dict) -> dict:
        """Insert or update a manual land entry (matched on ``id``)."""
        now = datetime.now().isoformat(timespec="seconds")
        entries = self.manual_entries

        entry_id = entry.get("id")
        for i, existing in enumerate(entries):
            if entry_id and existing.get("id") == entry_id:
                saved = {**existing, **entry, "updated": now}
                entries[i] = saved
                break
        else:
            saved = {**MANUAL_DEFAULTS, **entry, "created": now, "updated": now}
            if not entry_id:
                saved["id"] = f"ML_{uuid.uuid4().hex[:10]}"
            entries.append(saved)

        self._save()
        return saved

    def delete_manual_entry(self, entry_id: str) -> bool:
        entries = self.manual_entries
        kept = [e for e in entries if e.get("id") != entry_id]
        if len(kept) == len(entries):
            return False
        self._load()["manual"] = kept
        self._save()
        return True

    def stats(self) -> dict:
        source = self.source_plots
        return {
            "path": str(self._path),
            "plots": len(source),
            "manual": len(self.manual_entries),
            "total": len(source) + len(self.manual_entries),
        }
