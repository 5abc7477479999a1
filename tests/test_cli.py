"""Tests for the click command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from hyperplot.cli import main
from hyperplot.plots.store import LastSeenLog
from tests.conftest import SPORTS_CITY_BLOCK


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "parcels.txt"
    path.write_text(SPORTS_CITY_BLOCK, encoding="utf-8")
    return path


class TestMatch:
    def test_table(self, runner, input_file, catalog_path):
        result = runner.invoke(main, ["match", str(input_file), "--catalog", str(catalog_path)])
        assert result.exit_code == 0, result.output
        assert "PA1" in result.output
        assert "BB7" not in result.output
        assert "Parsed 1 parcel(s)" in result.output

    def test_json(self, runner, input_file, catalog_path):
        result = runner.invoke(main, ["match", str(input_file), "--catalog", str(catalog_path), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [r["matched_plot_id"] for r in data] == ["PA1"]
        assert data[0]["confidence_score"] == 100

    def test_missing_catalog(self, runner, input_file, tmp_path):
        result = runner.invoke(main, ["match", str(input_file), "--catalog", str(tmp_path / "none.json")])
        assert result.exit_code == 1
        assert "no catalog" in result.output

    def test_no_parcels(self, runner, tmp_path, catalog_path):
        empty = tmp_path / "empty.txt"
        empty.write_text("\n", encoding="utf-8")
        result = runner.invoke(main, ["match", str(empty), "--catalog", str(catalog_path)])
        assert result.exit_code == 1
        assert "No valid parcels" in result.output

    def test_assume_sqm(self, runner, tmp_path, catalog_path):
        path = tmp_path / "unitless.txt"
        path.write_text("Area: Arjan\nPlotArea: 1200", encoding="utf-8")
        result = runner.invoke(
            main, ["match", str(path), "--catalog", str(catalog_path), "--assume-sqm", "--json"]
        )
        assert result.exit_code == 0
        assert [r["matched_plot_id"] for r in json.loads(result.stdout)] == ["AR3"]


class TestQuick:
    def test_quick_search(self, runner, catalog_path):
        result = runner.invoke(
            main,
            ["quick", "--area", "Arjan", "--gfa", "3500", "--catalog", str(catalog_path), "--json"],
        )
        assert result.exit_code == 0
        [match] = json.loads(result.stdout)
        assert match["matched_plot_id"] == "AR3"
        assert match["confidence_score"] == 70
        assert match["owner_reference"] == "Al Noor Holdings"

    def test_requires_dimension(self, runner, catalog_path):
        result = runner.invoke(main, ["quick", "--area", "Arjan", "--catalog", str(catalog_path)])
        assert result.exit_code == 1
        assert "give an area name" in result.output

    def test_no_results(self, runner, catalog_path):
        result = runner.invoke(
            main, ["quick", "--area", "Arjan", "--plot-area", "99", "--catalog", str(catalog_path)]
        )
        assert result.exit_code == 0
        assert "No matching plots." in result.output


def test_catalog_stats(runner, catalog_path):
    result = runner.invoke(main, ["catalog", "--catalog", str(catalog_path)])
    assert result.exit_code == 0
    assert "Source plots:   3" in result.output
    assert "Manual entries: 0" in result.output


def test_catalog_bad_json(runner, tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text("[", encoding="utf-8")
    result = runner.invoke(main, ["catalog", "--catalog", str(path)])
    assert result.exit_code == 1


def test_seen(runner, tmp_path, monkeypatch):
    path = tmp_path / "seen.json"
    monkeypatch.setattr("hyperplot.cli.LAST_SEEN_PATH", path)

    result = runner.invoke(main, ["seen"])
    assert "No recently viewed plots." in result.output

    LastSeenLog(path).add({"plot_id": "PA1", "location": "Dubai Sports City", "coordinates": {"x": 1, "y": 2}})
    result = runner.invoke(main, ["seen"])
    assert "PA1" in result.output

    result = runner.invoke(main, ["seen", "--clear"])
    assert result.exit_code == 0
    assert not path.exists()
