"""Parcel -> catalog plot matching engine.

For every parcel input the whole catalog is scanned:

1. Inputs without a usable plot area or GFA are skipped.
2. When the input names an area, one of the plot's labels (location,
   entity, project) must match it.
3. Each supplied dimension is checked against the relaxed tolerance band.
   With both supplied at least one must pass; with one supplied it must.
4. Passing pairs are scored and collected.

Results are then deduplicated per plot id (highest confidence wins, first
seen on ties) and sorted by confidence, stable on ties.

Neither argument is mutated.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Mapping, Optional

from hyperplot.matching.location import any_label_matches
from hyperplot.matching.models import CatalogPlot, MatchResult, ParcelInput
from hyperplot.matching.scoring import confidence_score, floors_match, zoning_matches
from hyperplot.matching.tolerance import RELAXED_TOLERANCE, is_within_tolerance

logger = logging.getLogger(__name__)

OWNER_REFERENCE_KEYS = ("owner_reference", "owner ref")


def _percent(deviation: float) -> float:
    return round(deviation * 100, 2)


def match_parcel(parcel: ParcelInput, plot: CatalogPlot) -> Optional[MatchResult]:
    """Compare one input with one plot; None if the plot is filtered out."""
    area_name = parcel.area.strip()
    location_matched = False
    if area_name:
        if not any_label_matches(area_name, plot.labels):
            return None
        location_matched = True

    checks = []
    area_dev = gfa_dev = 0.0
    if parcel.has_plot_area:
        ok, area_dev = is_within_tolerance(plot.area, parcel.plot_area_sqm, RELAXED_TOLERANCE)
        checks.append((ok, area_dev))
    if parcel.has_gfa:
        ok, gfa_dev = is_within_tolerance(plot.gfa, parcel.gfa_sqm, RELAXED_TOLERANCE)
        checks.append((ok, gfa_dev))

    # With both supplied one passing dimension is enough.
    if not any(ok for ok, _ in checks):
        return None

    score = confidence_score(
        [dev for _, dev in checks],
        zoning_matched=bool(parcel.zoning) and zoning_matches(parcel.zoning, plot.zoning),
        floors_matched=floors_match(parcel.height_floors, plot.floors),
        location_matched=location_matched,
    )

    return MatchResult(
        input=parcel,
        matched_plot_id=plot.id,
        matched_plot_area=plot.area,
        matched_gfa=plot.gfa,
        matched_zoning=plot.zoning,
        matched_status=plot.status,
        matched_location=plot.location,
        area_deviation=_percent(area_dev) if parcel.has_plot_area else 0.0,
        gfa_deviation=_percent(gfa_dev) if parcel.has_gfa else 0.0,
        confidence_score=score,
        owner_reference=plot.owner_name,
    )


def dedupe_results(results: Iterable[MatchResult]) -> list[MatchResult]:
    """Keep the highest-confidence result per plot id; the first one wins ties."""
    best: dict[str, MatchResult] = {}
    for result in results:
        current = best.get(result.matched_plot_id)
        if current is None or result.confidence_score > current.confidence_score:
            best[result.matched_plot_id] = result
    return list(best.values())


def match_parcels(inputs: Iterable[ParcelInput], plots: Iterable[CatalogPlot]) -> list[MatchResult]:
    """Match every input against every plot and return a ranked result list."""
    plots = list(plots)
    results: list[MatchResult] = []
    skipped = 0

    for parcel in inputs:
        if not parcel.has_plot_area and not parcel.has_gfa:
            logger.debug("Skipping parcel %r: no plot area or GFA.", parcel.area)
            skipped += 1
            continue

        for plot in plots:
            result = match_parcel(parcel, plot)
            if result is not None:
                results.append(result)

    ranked = dedupe_results(results)
    ranked.sort(key=lambda r: -r.confidence_score)

    logger.info(
        "Matched %d plot(s) from %d candidate pair(s) across %d plot(s); %d input(s) skipped.",
        len(ranked),
        len(results),
        len(plots),
        skipped,
    )
    return ranked


def annotate_owner_references(
    results: Iterable[MatchResult],
    sheet_rows: Mapping[str, Mapping[str, str]],
) -> list[MatchResult]:
    """Attach owner references from a spreadsheet lookup keyed by plot id.

    Returns new results; those without a row or without a reference value
    are passed through unchanged.
    """
    annotated = []
    for result in results:
        row = sheet_rows.get(result.matched_plot_id)
        reference = ""
        if row:
            for key in OWNER_REFERENCE_KEYS:
                if row.get(key):
                    reference = str(row[key]).strip()
                    break
        if reference:
            result = replace(result, owner_reference=reference)
        annotated.append(result)
    return annotated
