"""Per-plot metadata kept outside the matching core.

``PlotMetaStore`` is a plain key-value mapping from plot id to a metadata
dict (``listed``, ``exported``, owner/contact/price overrides, notes).
``LastSeenLog`` keeps the most recently viewed plots, newest first.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from hyperplot.config import LAST_SEEN_MAX, LAST_SEEN_PATH, PLOT_META_PATH

logger = logging.getLogger(__name__)


def _write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    tmp.replace(path)


class PlotMetaStore:
    """Manages plot_meta.json.

    File format:
    {
        "6457821": {"listed": true, "owner": "...", "updated": "2026-02-08T09:00:00"},
        ...
    }
    """

    def __init__(self, path: Path = PLOT_META_PATH):
        self.path = path
        self.meta: Dict[str, dict] = self._load()

    def _load(self) -> Dict[str, dict]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Loaded metadata for %d plot(s).", len(data))
        return data

    def get(self, plot_id: str) -> Optional[dict]:
        return self.meta.get(plot_id)

    def set(self, plot_id: str, metadata: dict) -> dict:
        """Merge ``metadata`` into the plot's entry and save."""
        entry = {**self.meta.get(plot_id, {}), **metadata}
        entry["updated"] = datetime.now().isoformat(timespec="seconds")
        self.meta[plot_id] = entry
        _write_json(self.path, self.meta)
        return entry

    def delete(self, plot_id: str) -> bool:
        if plot_id not in self.meta:
            return False
        del self.meta[plot_id]
        _write_json(self.path, self.meta)
        return True

    def ids(self, flag: Optional[str] = None) -> List[str]:
        """All plot ids, or only those whose ``flag`` is truthy (e.g. ``listed``)."""
        if flag is None:
            return sorted(self.meta)
        return sorted(pid for pid, m in self.meta.items() if m.get(flag))

    @property
    def count(self) -> int:
        return len(self.meta)


class LastSeenLog:
    """Manages last_seen.json: newest first, one entry per plot, capped."""

    def __init__(self, path: Path = LAST_SEEN_PATH, max_entries: int = LAST_SEEN_MAX):
        self.path = path
        self.max_entries = max_entries

    def entries(self) -> List[dict]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def add(self, entry: dict) -> bool:
        """Record a viewed plot. Entries without an id or real coordinates are ignored."""
        plot_id = entry.get("plot_id")
        coords = entry.get("coordinates") or {}
        if not plot_id:
            return False
        if not coords or (coords.get("x", 0) == 0 and coords.get("y", 0) == 0):
            return False

        kept = [e for e in self.entries() if e.get("plot_id") != plot_id]
        kept.insert(0, {**entry, "timestamp": datetime.now().isoformat(timespec="seconds")})
        _write_json(self.path, kept[: self.max_entries])
        return True

    def remove(self, plot_id: str) -> None:
        _write_json(self.path, [e for e in self.entries() if e.get("plot_id") != plot_id])

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
