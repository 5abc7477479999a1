"""Tests for quick-search form input and the parse driver."""

from __future__ import annotations

import pytest

from hyperplot.parse.engine import parse_parcels
from hyperplot.parse.parsers.parse_form import build_parcel_from_form, can_quick_search
from tests.conftest import SPORTS_CITY_BLOCK


class TestBuildParcelFromForm:
    def test_sqm_values(self):
        parcel = build_parcel_from_form("Arjan", plot_area=1200, gfa=3500, zoning=" Residential ", floors=5)
        assert parcel.area == "Arjan"
        assert parcel.plot_area_sqm == 1200
        assert parcel.gfa_sqm == 3500
        assert parcel.zoning == "Residential"
        assert parcel.height_floors == 5

    def test_sqft_converted(self):
        parcel = build_parcel_from_form("Arjan", plot_area=10000, plot_area_unit="SQFT")
        assert parcel.plot_area_unit == "sqft"
        assert parcel.plot_area_sqm == pytest.approx(929.03)

    def test_absent_values(self):
        parcel = build_parcel_from_form("  JVC ", plot_area=None, gfa=None)
        assert parcel.area == "JVC"
        assert parcel.plot_area == 0
        assert parcel.plot_area_unit == "unknown"
        assert parcel.gfa_unit == "unknown"
        assert parcel.height_floors == 0
        assert parcel.zoning == ""

    def test_non_positive_and_garbage_dropped(self):
        parcel = build_parcel_from_form("JVC", plot_area=-5, gfa="abc")
        assert parcel.plot_area == 0
        assert parcel.gfa == 0

    def test_unrecognised_unit_needs_assume_sqm(self):
        parcel = build_parcel_from_form("JVC", plot_area=900, plot_area_unit="acres")
        assert parcel.plot_area_unit == "unknown"
        assert parcel.plot_area_sqm == 0

        parcel = build_parcel_from_form("JVC", plot_area=900, plot_area_unit="acres", assume_sqm=True)
        assert parcel.plot_area_sqm == 900


class TestCanQuickSearch:
    def test_needs_area_and_dimension(self):
        assert can_quick_search(build_parcel_from_form("Arjan", gfa=3000))
        assert not can_quick_search(build_parcel_from_form("", gfa=3000))
        assert not can_quick_search(build_parcel_from_form("Arjan"))


class TestParseParcels:
    def test_structured_text(self):
        parcels, incomplete = parse_parcels(SPORTS_CITY_BLOCK)
        assert incomplete == 0
        assert len(parcels) == 1
        assert parcels[0].area == "Dubai Sports City"

    def test_free_form_fallback(self):
        parcels, incomplete = parse_parcels("dubai sport city plot area 4838 sqm gfa 21771 sqm")
        assert incomplete == 0
        assert len(parcels) == 1
        assert parcels[0].plot_area_sqm == 4838
        assert parcels[0].gfa_sqm == 21771

    def test_incomplete_count(self):
        text = "Area: Arjan\nZoning: Residential\n---\nArea: JVC\nPlotArea: 500 sqm"
        parcels, incomplete = parse_parcels(text)
        assert len(parcels) == 2
        assert incomplete == 1

    def test_assume_sqm_passed_through(self):
        parcels, incomplete = parse_parcels("Area: Arjan\nPlotArea: 1500", assume_sqm=True)
        assert incomplete == 0
        assert parcels[0].plot_area_sqm == 1500

    def test_blank_text(self):
        assert parse_parcels("   \n ") == ([], 0)

    @pytest.mark.parametrize("text", ["Area: Arjan\nPlotArea: 1200", "Area: Arjan\nPlot Area: 1200"])
    def test_unitless_structured_value_not_usable(self, text):
        [parcel], incomplete = parse_parcels(text)
        assert incomplete == 1
        assert parcel.area == "Arjan"
        assert parcel.plot_area == 1200
        assert parcel.plot_area_unit == "unknown"
        assert parcel.plot_area_sqm == 0

    def test_unrecognised_keys_read_as_free_form(self):
        parcels, incomplete = parse_parcels("Note: Arjan plot area 900 sqm")
        assert incomplete == 0
        assert parcels[0].plot_area_sqm == 900


def test_numeric_form_values_coerced_to_text():
    parcel = build_parcel_from_form(123, gfa=100, gfa_unit=7, zoning=5)
    assert parcel.area == "123"
    assert parcel.zoning == "5"
    assert parcel.gfa_unit == "unknown"
