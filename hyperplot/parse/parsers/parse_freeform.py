"""Extract parcel descriptions from loosely written text.

Handles notes like ``"Dubai Sport City plot area 4,838 sqm gfa 21,771 sqm
G+9"``. Blocks are separated by ``---`` or blank lines. A numeric clause
without a unit is read as square metres.
"""

import re
from typing import List, Optional, Tuple

from hyperplot.matching.models import ParcelInput
from hyperplot.parse.parsers.parser_utils import collapse_whitespace
from hyperplot.parse.units import UNIT_SQM, detect_unit, to_sqm

_NUM = r"(\d+(?:\.\d+)?)"
_UNIT = (
    r"(sq\s*m(?:eters?|etres?|trs?)?|m²|m2|square\s+met(?:er|re)s?"
    r"|sq\s*f(?:ee)?t|ft²|ft2|square\s+f(?:oo|ee)t)"
)
# Words that end a zoning label; a label may not start with one either.
_LABEL_STOP = r"(?:plot|land|area|gfa|height|floors|stories|storeys|far)"

PLOT_AREA_PATTERN = re.compile(
    rf"\b(?:plot|land)\s+area\s*[:=]?\s*(?:of\s+)?{_NUM}\s*{_UNIT}?(?!\w)",
    re.IGNORECASE,
)
GFA_PATTERN = re.compile(
    rf"\bgfa\s*[:=]?\s*(?:of\s+)?{_NUM}\s*{_UNIT}?(?!\w)",
    re.IGNORECASE,
)
FLOORS_PATTERNS = [
    re.compile(r"\b(?:height\s+floors|floors|stories|storeys)\s*[:=]?\s*(?:g\s*\+\s*)?(\d+)\b", re.IGNORECASE),
    re.compile(r"\b(\d+)\s*(?:floors|stories|storeys)\b", re.IGNORECASE),
    re.compile(r"\bg\s*\+\s*(\d+)\b", re.IGNORECASE),
]
ZONING_PATTERN = re.compile(
    rf"\b(?:zoning|zone|use)\b\s*[:=]?\s*(?!{_LABEL_STOP}\b)([a-z][a-z0-9&/\- ]*?)(?=\s+{_LABEL_STOP}\b|\s+\d|\s*$)",
    re.IGNORECASE | re.MULTILINE,
)
FAR_PATTERN = re.compile(r"\bfar\s*[:=]?\s*(\d+(?:\.\d+)?)", re.IGNORECASE)
PLOT_NUMBER_PATTERN = re.compile(
    r"\bplot\s*(?:(?:no|number)\b|#)\s*[:=]?\s*([a-z0-9][a-z0-9\-/]*)",
    re.IGNORECASE,
)

_BLANK_LINE_PATTERN = re.compile(r"\n\s*\n")
_FIRST_NUMBER_PATTERN = re.compile(r"\d")
_EDGE_JUNK = " \t\n:;-|/"
_CLAUSE_WORDS = frozenset(
    ("plot", "land", "area", "gfa", "height", "floors", "stories", "storeys", "zoning", "zone", "use", "far", "of")
)


def strip_punctuation(text: str) -> str:
    """Drop ``,`` and ``.`` except decimal points; thousands commas vanish."""
    text = re.sub(r"(?<=\d),(?=\d)", "", text)
    text = text.replace(",", " ")
    return re.sub(r"(?<!\d)\.|\.(?!\d)", " ", text)


def split_blocks(content: str) -> List[str]:
    blocks: List[str] = []
    for chunk in (content or "").split("---"):
        for block in _BLANK_LINE_PATTERN.split(chunk):
            block = block.strip()
            if block:
                blocks.append(block)
    return blocks


def _measure(pattern: re.Pattern, text: str) -> Tuple[float, str, Optional[Tuple[int, int]]]:
    m = pattern.search(text)
    if not m:
        return 0.0, "unknown", None
    value = float(m.group(1))
    unit = detect_unit(m.group(2)) if m.group(2) else UNIT_SQM
    return value, unit, m.span()


def _remove_spans(text: str, spans: List[Tuple[int, int]]) -> str:
    pieces = []
    last = 0
    for start, end in sorted(spans):
        if start < last:
            start = last
        pieces.append(text[last:start])
        last = max(last, end)
    pieces.append(text[last:])
    return " ".join(pieces)


def _fallback_area_name(text: str, zoning: str = "") -> str:
    """First three words before the first number, skipping clause keywords and the zoning label."""
    m = _FIRST_NUMBER_PATTERN.search(text)
    lead = text[:m.start()] if m else text
    skip = _CLAUSE_WORDS | set(zoning.lower().split())
    words = [w for w in lead.split() if w.lower().strip(_EDGE_JUNK) not in skip]
    return " ".join(words[:3]).strip(_EDGE_JUNK)


def parse_free_form_block(block: str) -> Optional[ParcelInput]:
    """Extract one parcel from a block, or None if it carries nothing usable."""
    text = strip_punctuation(block)
    spans: List[Tuple[int, int]] = []

    plot_area, plot_area_unit, span = _measure(PLOT_AREA_PATTERN, text)
    if span:
        spans.append(span)

    gfa, gfa_unit, span = _measure(GFA_PATTERN, text)
    if span:
        spans.append(span)

    floors = 0
    for pattern in FLOORS_PATTERNS:
        m = pattern.search(text)
        if m:
            floors = int(m.group(1))
            spans.append(m.span())
            break

    zoning = ""
    m = ZONING_PATTERN.search(text)
    if m:
        zoning = m.group(1).strip()
        spans.append(m.span())

    far = 0.0
    m = FAR_PATTERN.search(text)
    if m:
        far = float(m.group(1))
        spans.append(m.span())

    plot_number = None
    m = PLOT_NUMBER_PATTERN.search(text)
    if m:
        plot_number = m.group(1)
        spans.append(m.span())

    area = collapse_whitespace(_remove_spans(text, spans)).strip(_EDGE_JUNK)
    if not area:
        area = _fallback_area_name(text, zoning)

    if not area and not (plot_area or gfa or floors or far):
        return None

    return ParcelInput(
        area=area,
        plot_area=plot_area,
        plot_area_unit=plot_area_unit,
        plot_area_sqm=to_sqm(plot_area, plot_area_unit),
        gfa=gfa,
        gfa_unit=gfa_unit,
        gfa_sqm=to_sqm(gfa, gfa_unit),
        zoning=zoning,
        height_floors=floors,
        far=far,
        plot_number=plot_number,
    )


def parse_free_form_text(content: str) -> List[ParcelInput]:
    """Parse every block of ``content``; empty blocks are dropped."""
    parcels = []
    for block in split_blocks(content):
        parcel = parse_free_form_block(block)
        if parcel is not None:
            parcels.append(parcel)
    return parcels
