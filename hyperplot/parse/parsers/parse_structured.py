"""Parse ``Key: value`` parcel blocks separated by ``---``."""

from typing import Dict, List

from hyperplot.matching.models import ParcelInput
from hyperplot.parse.parsers.parser_utils import normalize_key, parse_int
from hyperplot.parse.units import parse_number, parse_unit, usable_sqm

PLOT_AREA_KEYS = ("plotarea", "area_sqm", "landarea")
GFA_KEYS = ("gfa", "gfa_sqm")
FLOORS_KEYS = ("heightfloors", "floors")
PLOT_NUMBER_KEYS = ("plotnumber", "plot_number")

RECOGNIZED_KEYS = frozenset(
    ("area", "zoning", "use", "far") + PLOT_AREA_KEYS + GFA_KEYS + FLOORS_KEYS + PLOT_NUMBER_KEYS
)


def _first(fields: Dict[str, str], keys: tuple) -> str:
    for key in keys:
        if fields.get(key):
            return fields[key]
    return ""


def _block_fields(block: str) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for line in block.splitlines():
        line = line.strip()
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        fields[normalize_key(key)] = value.strip()
    return fields


def parse_block(block: str, assume_sqm: bool = False) -> ParcelInput:
    """Build one ``ParcelInput`` from a block of ``Key: value`` lines.

    Unrecognised keys are ignored; a block with nothing usable still
    produces a zeroed record.
    """
    fields = _block_fields(block)

    plot_area, plot_area_unit = parse_unit(_first(fields, PLOT_AREA_KEYS))
    gfa, gfa_unit = parse_unit(_first(fields, GFA_KEYS))

    return ParcelInput(
        area=fields.get("area", ""),
        plot_area=plot_area,
        plot_area_unit=plot_area_unit,
        plot_area_sqm=usable_sqm(plot_area, plot_area_unit, assume_sqm),
        gfa=gfa,
        gfa_unit=gfa_unit,
        gfa_sqm=usable_sqm(gfa, gfa_unit, assume_sqm),
        zoning=fields.get("zoning", ""),
        use=fields.get("use", ""),
        height_floors=parse_int(_first(fields, FLOORS_KEYS)),
        far=parse_number(fields.get("far", "")),
        plot_number=_first(fields, PLOT_NUMBER_KEYS) or None,
    )


def parse_text_file(content: str, assume_sqm: bool = False) -> List[ParcelInput]:
    """Parse every ``---`` separated block of ``content``."""
    blocks = [b.strip() for b in (content or "").split("---")]
    return [parse_block(b, assume_sqm) for b in blocks if b]


def has_recognized_fields(content: str) -> bool:
    """True if any line of ``content`` is a ``Key: value`` pair read by this parser."""
    for line in (content or "").splitlines():
        if ":" in line and normalize_key(line.split(":", 1)[0]) in RECOGNIZED_KEYS:
            return True
    return False
