"""Shared test fixtures and helpers."""

from __future__ import annotations

import json

import pytest

from hyperplot.matching.models import CatalogPlot, ParcelInput


def make_plot(plot_id: str, area: float = 1000, gfa: float = 3000, **kwargs) -> CatalogPlot:
    fields = {"zoning": "Residential", "floors": "G+5", "status": "Available", "location": "Arjan"}
    fields.update(kwargs)
    return CatalogPlot(id=plot_id, area=area, gfa=gfa, **fields)


def make_parcel(area: str = "Arjan", plot_area: float = 0, gfa: float = 0, **kwargs) -> ParcelInput:
    return ParcelInput(
        area=area,
        plot_area=plot_area,
        plot_area_unit="sqm" if plot_area else "unknown",
        plot_area_sqm=plot_area,
        gfa=gfa,
        gfa_unit="sqm" if gfa else "unknown",
        gfa_sqm=gfa,
        **kwargs,
    )


SPORTS_CITY_BLOCK = "Area: Dubai Sports City\nPlotArea: 4,838 sqm\nGFA: 21,771 sqm\nFloors: 9"

SPORTS_CITY_PLOT = {
    "id": "PA1",
    "area": 4838,
    "gfa": 21771,
    "location": "Dubai Sports City",
    "floors": "G+9",
    "zoning": "Residential",
    "status": "Available",
}


@pytest.fixture
def catalog_path(tmp_path):
    """A catalog.json with three plots."""
    path = tmp_path / "catalog.json"
    data = {
        "plots": [
            SPORTS_CITY_PLOT,
            {"id": "BB7", "area": 4838, "gfa": 21771, "location": "Business Bay", "floors": "G+20"},
            {"id": "AR3", "area": 1200, "gfa": 3500, "location": "Arjan", "floors": "G+5",
             "_sheetMetadata": {"owner name": "Al Noor Holdings", "mobile": "+971500000000"}},
        ],
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
