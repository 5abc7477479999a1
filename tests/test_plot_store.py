"""Tests for plot metadata and the last seen log."""

from __future__ import annotations

import json

import pytest

from hyperplot.plots.store import LastSeenLog, PlotMetaStore


class TestPlotMetaStore:
    def test_missing_file_is_empty(self, tmp_path):
        store = PlotMetaStore(tmp_path / "meta.json")
        assert store.count == 0
        assert store.get("P1") is None

    def test_set_merges_and_persists(self, tmp_path):
        path = tmp_path / "data" / "meta.json"
        store = PlotMetaStore(path)
        store.set("P1", {"listed": True})
        entry = store.set("P1", {"notes": "corner"})
        assert entry["listed"] is True
        assert entry["notes"] == "corner"
        assert "updated" in entry

        reloaded = PlotMetaStore(path)
        assert reloaded.get("P1")["notes"] == "corner"
        assert not path.with_suffix(".tmp").exists()

    def test_ids_by_flag(self, tmp_path):
        store = PlotMetaStore(tmp_path / "meta.json")
        store.set("P2", {"listed": True})
        store.set("P1", {"listed": True, "exported": True})
        store.set("P3", {"listed": False})
        assert store.ids() == ["P1", "P2", "P3"]
        assert store.ids("listed") == ["P1", "P2"]
        assert store.ids("exported") == ["P1"]

    def test_delete(self, tmp_path):
        store = PlotMetaStore(tmp_path / "meta.json")
        store.set("P1", {"listed": True})
        assert store.delete("P1")
        assert not store.delete("P1")
        assert PlotMetaStore(tmp_path / "meta.json").count == 0

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "meta.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            PlotMetaStore(path)


def _seen(plot_id, x=55.2, y=25.1):
    return {"plot_id": plot_id, "location": "Arjan", "coordinates": {"x": x, "y": y}}


class TestLastSeenLog:
    def test_newest_first(self, tmp_path):
        log = LastSeenLog(tmp_path / "seen.json")
        assert log.add(_seen("P1"))
        assert log.add(_seen("P2"))
        assert [e["plot_id"] for e in log.entries()] == ["P2", "P1"]
        assert "timestamp" in log.entries()[0]

    def test_revisit_moves_to_top(self, tmp_path):
        log = LastSeenLog(tmp_path / "seen.json")
        for plot_id in ("P1", "P2", "P1"):
            log.add(_seen(plot_id))
        assert [e["plot_id"] for e in log.entries()] == ["P1", "P2"]

    def test_capped(self, tmp_path):
        log = LastSeenLog(tmp_path / "seen.json", max_entries=3)
        for i in range(5):
            log.add(_seen(f"P{i}"))
        assert [e["plot_id"] for e in log.entries()] == ["P4", "P3", "P2"]

    @pytest.mark.parametrize(
        "entry",
        [
            {"coordinates": {"x": 1, "y": 1}},
            {"plot_id": "P1"},
            {"plot_id": "P1", "coordinates": {}},
            {"plot_id": "P1", "coordinates": {"x": 0, "y": 0}},
        ],
    )
    def test_invalid_entries_ignored(self, tmp_path, entry):
        log = LastSeenLog(tmp_path / "seen.json")
        assert not log.add(entry)
        assert log.entries() == []

    def test_remove_and_clear(self, tmp_path):
        log = LastSeenLog(tmp_path / "seen.json")
        log.add(_seen("P1"))
        log.add(_seen("P2"))
        log.remove("P1")
        assert [e["plot_id"] for e in log.entries()] == ["P2"]
        log.clear()
        assert log.entries() == []
        log.clear()
