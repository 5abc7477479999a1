"""Normalise raw catalog records into CatalogPlot at the collaborator boundary.

Plot records reach us from several places: the GIS land-base layer,
spreadsheet exports, and manually entered land. Each carries owner and
contact details under different key names and nested bags; all of that
is resolved here so the matching core only ever sees explicit fields.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from hyperplot.matching.models import CatalogPlot

logger = logging.getLogger(__name__)

SQFT_PER_SQM = 10.764

# Area aliases: marketing / legacy names -> GIS community names.
AREA_ALIASES: dict[str, str] = {
    "majan": "Wadi Al Safa 3",
    "dubai industrial city": "Saih Shuaib 2",
    "dic": "Saih Shuaib 2",
    "dubai industrial": "Saih Shuaib 2",
    "dlrc": "Dubai Land Residential Complex",
    "al satwa": "Jumeirah Garden City",
}

# Top-level keys on the record itself.
OWNER_KEYS = ("owner_name", "ownerName", "owner", "owner_reference")
CONTACT_KEYS = ("contact", "mobile", "phone")

# Keys seen inside the nested bags some sources attach
# (affection plan, spreadsheet row metadata).
_NESTED_BAGS = ("_affectionPlan", "_sheetMetadata")
NESTED_OWNER_KEYS = ("ownerName", "owner_name", "name", "owner", "owner name", "owner_reference", "owner ref")
NESTED_CONTACT_KEYS = ("mobile", "phone", "contact", "phone number", "contact number")


def normalize_area_name(name: Optional[str]) -> str:
    """Apply the area alias table. Empty names become ``"Unknown"``."""
    if not name or not name.strip():
        return "Unknown"
    return AREA_ALIASES.get(name.strip().lower(), name.strip())


def _to_float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", "").strip())
    except ValueError:
        return 0.0


def _to_str(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _lookup(record: dict, keys: tuple, nested_keys: tuple) -> str:
    """First non-empty value: top-level ``keys``, then ``nested_keys`` in each bag."""
    for key in keys:
        value = _to_str(record.get(key))
        if value:
            return value
    for bag in _NESTED_BAGS:
        source = record.get(bag)
        if not isinstance(source, dict):
            continue
        for key in nested_keys:
            value = _to_str(source.get(key))
            if value:
                return value
    return ""


def plot_from_record(record: dict, index: int = 0) -> CatalogPlot:
    """Build a CatalogPlot from a generic plot dict."""
    plot_id = _to_str(record.get("id")) or f"PLOT_{index}"
    coverage = record.get("plot_coverage", record.get("plotCoverage"))

    return CatalogPlot(
        id=plot_id,
        area=_to_float(record.get("area")),
        gfa=_to_float(record.get("gfa")),
        zoning=_to_str(record.get("zoning")),
        floors=_to_str(record.get("floors")),
        status=_to_str(record.get("status")),
        location=_to_str(record.get("location")),
        entity=_to_str(record.get("entity")),
        project=_to_str(record.get("project")),
        developer=_to_str(record.get("developer")),
        owner_name=_lookup(record, OWNER_KEYS, NESTED_OWNER_KEYS),
        contact=_lookup(record, CONTACT_KEYS, NESTED_CONTACT_KEYS),
        plot_coverage=_to_float(coverage) if coverage not in (None, "") else None,
        is_frozen=bool(record.get("is_frozen", record.get("isFrozen", False))),
        construction_status=_to_str(record.get("construction_status", record.get("constructionStatus"))),
        site_status=_to_str(record.get("site_status", record.get("siteStatus"))),
    )


def zoning_category(main_landuse: Optional[str], sub_landuse: Optional[str]) -> str:
    if not main_landuse:
        return "Mixed Use"
    landuse = main_landuse.lower()
    if "residential" in landuse:
        return "Residential Villa" if "villa" in (sub_landuse or "").lower() else "Residential Apartments"
    if "commercial" in landuse:
        return "Commercial"
    if "industrial" in landuse:
        return "Industrial"
    if "mixed" in landuse:
        return "Mixed Use"
    return main_landuse


def plot_status(construction_status: Optional[str], is_frozen: Any, site_status: Optional[str]) -> str:
    if is_frozen:
        return "Frozen"
    if "available" in (site_status or "").lower():
        return "Available"
    construction = (construction_status or "").lower()
    if "complete" in construction:
        return "Completed"
    if "progress" in construction:
        return "Under Construction"
    return "Unknown"


def _sqm(attrs: dict, sqm_key: str, sqft_key: str) -> float:
    sqm = _to_float(attrs.get(sqm_key))
    if sqm:
        return sqm
    sqft = _to_float(attrs.get(sqft_key))
    return sqft / SQFT_PER_SQM if sqft else 0.0


def plot_from_gis_attributes(attrs: dict, index: int = 0) -> CatalogPlot:
    """Build a CatalogPlot from a GIS land-base feature's attributes.

    Missing areas stay 0 so the plot never matches on that dimension.
    """
    is_frozen = attrs.get("IS_FROZEN") == 1
    coverage = attrs.get("MAX_PLOT_COVERAGE", attrs.get("PLOT_COVERAGE"))
    project = _to_str(attrs.get("PROJECT_NAME"))
    entity = _to_str(attrs.get("ENTITY_NAME"))

    return CatalogPlot(
        id=_to_str(attrs.get("PLOT_NUMBER")) or f"PLOT_{index}",
        area=_sqm(attrs, "AREA_SQM", "AREA_SQFT"),
        gfa=_sqm(attrs, "GFA_SQM", "GFA_SQFT"),
        zoning=zoning_category(attrs.get("MAIN_LANDUSE"), attrs.get("SUB_LANDUSE")),
        floors=_to_str(attrs.get("MAX_HEIGHT_FLOORS")),
        status=plot_status(attrs.get("CONSTRUCTION_STATUS"), is_frozen, attrs.get("SITE_STATUS")),
        location=normalize_area_name(project or entity),
        entity=entity,
        project=project,
        developer=_to_str(attrs.get("DEVELOPER_NAME")),
        plot_coverage=_to_float(coverage) if coverage not in (None, "") else None,
        is_frozen=is_frozen,
        construction_status=_to_str(attrs.get("CONSTRUCTION_STATUS")),
        site_status=_to_str(attrs.get("SITE_STATUS")),
    )


def plot_from_manual_entry(entry: dict) -> CatalogPlot:
    """Build a CatalogPlot from a manually entered land record."""
    area_name = _to_str(entry.get("area_name"))
    plot_id = _to_str(entry.get("plot_number")) or _to_str(entry.get("id"))
    coverage = entry.get("plot_coverage")

    return CatalogPlot(
        id=plot_id,
        area=_to_float(entry.get("plot_area_sqm")),
        gfa=_to_float(entry.get("gfa_sqm")),
        zoning=_to_str(entry.get("zoning")) or "Mixed Use",
        floors=_to_str(entry.get("floors")) or "N/A",
        status=_to_str(entry.get("status")) or "Available",
        location=area_name,
        entity=area_name,
        project=area_name,
        owner_name=_lookup(entry, OWNER_KEYS, NESTED_OWNER_KEYS),
        contact=_lookup(entry, CONTACT_KEYS, NESTED_CONTACT_KEYS),
        plot_coverage=_to_float(coverage) if coverage not in (None, "") else None,
    )


def load_plots(data: Any) -> list[CatalogPlot]:
    """Normalise a plot list, ``{"plots": [...]}``, or a GIS ``{"features": [...]}`` response."""
    if isinstance(data, dict) and "features" in data:
        features = data.get("features") or []
        plots = [
            plot_from_gis_attributes(f.get("attributes") or {}, i)
            for i, f in enumerate(features)
            if isinstance(f, dict)
        ]
        logger.info("Loaded %d plot(s) from GIS features.", len(plots))
        return plots

    if isinstance(data, dict):
        data = data.get("plots") or []

    plots = [plot_from_record(r, i) for i, r in enumerate(data) if isinstance(r, dict)]
    logger.info("Loaded %d plot(s) from records.", len(plots))
    return plots
