"""Build a ParcelInput from discrete quick-search form fields."""

from typing import Optional

from hyperplot.matching.models import ParcelInput
from hyperplot.parse.units import UNIT_SQFT, UNIT_SQM, UNIT_UNKNOWN, usable_sqm


def _unit(unit: Optional[str]) -> str:
    unit = str(unit or "").strip().lower()
    return unit if unit in (UNIT_SQM, UNIT_SQFT) else UNIT_UNKNOWN


def _positive(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    return value if value > 0 else 0.0


def build_parcel_from_form(
    area_name: str,
    plot_area: Optional[float] = None,
    plot_area_unit: str = UNIT_SQM,
    gfa: Optional[float] = None,
    gfa_unit: str = UNIT_SQM,
    zoning: Optional[str] = None,
    floors: Optional[int] = None,
    assume_sqm: bool = False,
) -> ParcelInput:
    """Same normalisation as the text parsers; absent values become 0 / ""."""
    plot_area = _positive(plot_area)
    gfa = _positive(gfa)
    plot_area_unit = _unit(plot_area_unit) if plot_area else UNIT_UNKNOWN
    gfa_unit = _unit(gfa_unit) if gfa else UNIT_UNKNOWN

    return ParcelInput(
        area=str(area_name or "").strip(),
        plot_area=plot_area,
        plot_area_unit=plot_area_unit,
        plot_area_sqm=usable_sqm(plot_area, plot_area_unit, assume_sqm),
        gfa=gfa,
        gfa_unit=gfa_unit,
        gfa_sqm=usable_sqm(gfa, gfa_unit, assume_sqm),
        zoning=str(zoning or "").strip(),
        height_floors=int(_positive(floors)),
    )


def can_quick_search(parcel: ParcelInput) -> bool:
    """Quick search needs an area name and at least one usable dimension."""
    return bool(parcel.area) and (parcel.has_plot_area or parcel.has_gfa)
