"""Turn raw text into parcel inputs: structured blocks first, free-form fallback."""

import logging
from typing import List, Tuple

from hyperplot.matching.models import ParcelInput
from hyperplot.parse.parsers.parse_freeform import parse_free_form_text
from hyperplot.parse.parsers.parse_structured import has_recognized_fields, parse_text_file

logger = logging.getLogger(__name__)


def _unusable(parcel: ParcelInput) -> bool:
    return not parcel.has_plot_area and not parcel.has_gfa


def parse_parcels(content: str, assume_sqm: bool = False) -> Tuple[List[ParcelInput], int]:
    """Parse ``content`` and return ``(parcels, incomplete_count)``.

    Text with at least one recognised ``Key: value`` line is read by the
    structured parser only, so a unitless value there stays unusable unless
    ``assume_sqm`` is set. Anything else goes to the free-form extractor.

    ``incomplete_count`` is the number of parcels that supply neither plot
    area nor GFA; the matching engine will skip them.
    """
    if not (content or "").strip():
        return [], 0

    if has_recognized_fields(content):
        parcels = parse_text_file(content, assume_sqm=assume_sqm)
    else:
        logger.debug("No structured keys found, parsing as free-form text.")
        parcels = parse_free_form_text(content)

    incomplete = sum(1 for p in parcels if _unusable(p))
    if incomplete:
        logger.warning("%d parcel(s) missing both plot area and GFA will be excluded.", incomplete)

    logger.info("Parsed %d parcel(s).", len(parcels))
    return parcels, incomplete
