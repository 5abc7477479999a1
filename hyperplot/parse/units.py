"""Parse a number with an attached area unit and convert it to square metres."""

import re
from typing import Tuple

SQFT_TO_SQM = 0.092903

UNIT_SQM = "sqm"
UNIT_SQFT = "sqft"
UNIT_UNKNOWN = "unknown"

_NUMBER_PATTERN = re.compile(r"\d[\d,.]*")

_SQM_PATTERN = re.compile(
    r"sq\.?\s*m(?:eters?|etres?|trs?)?\b|m²|\bm2\b|square\s+met(?:er|re)s?",
    re.IGNORECASE,
)
_SQFT_PATTERN = re.compile(
    r"sq\.?\s*f(?:ee)?t\b|ft²|\bft2\b|square\s+f(?:oo|ee)t",
    re.IGNORECASE,
)


def detect_unit(text: str) -> str:
    """Return ``sqm``, ``sqft`` or ``unknown`` for a unit fragment."""
    if _SQM_PATTERN.search(text):
        return UNIT_SQM
    if _SQFT_PATTERN.search(text):
        return UNIT_SQFT
    return UNIT_UNKNOWN


def parse_number(text: str) -> float:
    """Return the first numeric run in ``text`` (thousands commas stripped), or 0."""
    m = _NUMBER_PATTERN.search(text or "")
    if not m:
        return 0.0
    try:
        return float(m.group(0).replace(",", "").rstrip("."))
    except ValueError:
        return 0.0


def parse_unit(text: str) -> Tuple[float, str]:
    """Split ``"4,838 sqm"`` into ``(4838.0, "sqm")``.

    The unit is looked up in the text following the number. Anything
    unparseable yields ``(0.0, "unknown")``.
    """
    cleaned = (text or "").strip()
    m = _NUMBER_PATTERN.search(cleaned)
    if not m:
        return 0.0, UNIT_UNKNOWN

    try:
        value = float(m.group(0).replace(",", "").rstrip("."))
    except ValueError:
        return 0.0, UNIT_UNKNOWN

    return value, detect_unit(cleaned[m.end():])


def to_sqm(value: float, unit: str) -> float:
    """Convert to square metres. ``sqm`` and ``unknown`` pass through unchanged."""
    if unit == UNIT_SQFT:
        return value * SQFT_TO_SQM
    return value


def usable_sqm(value: float, unit: str, assume_sqm: bool = False) -> float:
    """Canonical sqm value for matching.

    A value whose unit was not recognised is not usable (0) unless the caller
    explicitly opts into treating it as square metres.
    """
    if value <= 0:
        return 0.0
    if unit == UNIT_UNKNOWN and not assume_sqm:
        return 0.0
    return to_sqm(value, unit)
