"""Confidence scoring for one (parcel input, catalog plot) pairing.

The score is a fixed heuristic. Every weight lives here so the policy can be
tuned without touching the matching loop; changing any of them changes
results.

    both dimensions exact            -> 80 base
    otherwise, per supplied dimension (35 each when both given, 60 alone):
        deviation <= 6%              -> max(0.5, 1 - dev/0.06) * weight
        deviation <= 10%             -> max(0.2, 1 - dev/0.10) * 0.5 * weight
    zoning matches                   -> +20
    floors within +/-1               -> +10
    area name supplied and matched   -> +10
    final                            -> min(100, round(total))
"""

import math
import re
from typing import Sequence

from hyperplot.matching.tolerance import RELAXED_TOLERANCE, STRICT_TOLERANCE

EXACT_BOTH_BASE = 80
BOTH_DIMENSIONS_WEIGHT = 35
SINGLE_DIMENSION_WEIGHT = 60
STRICT_FLOOR = 0.5
RELAXED_FLOOR = 0.2
RELAXED_FACTOR = 0.5

ZONING_BONUS = 20
FLOORS_BONUS = 10
LOCATION_BONUS = 10
FLOOR_TOLERANCE = 1

MAX_SCORE = 100

_ZONING_SEPARATORS = re.compile(r"[\s_-]+")
_ZONING_NOISE = re.compile(r"apartments?|villa?s?", re.IGNORECASE)
_NON_DIGIT = re.compile(r"[^0-9]")


def normalize_zoning(zoning: str) -> str:
    """``"Residential Apartments"`` and ``"residential-villa"`` both become ``"residential"``."""
    z = _ZONING_SEPARATORS.sub("", (zoning or "").lower())
    return _ZONING_NOISE.sub("", z)


def zoning_matches(input_zoning: str, plot_zoning: str) -> bool:
    a = normalize_zoning(input_zoning)
    b = normalize_zoning(plot_zoning)
    if not a or not b:
        return False
    return a in b or b in a


def parse_floor_count(floors: str) -> int:
    """``"G+9"`` -> 9. Non-numeric strings give 0."""
    digits = _NON_DIGIT.sub("", str(floors or ""))
    return int(digits) if digits else 0


def floors_match(input_floors: int, plot_floors: str) -> bool:
    if input_floors <= 0:
        return False
    return abs(parse_floor_count(plot_floors) - input_floors) <= FLOOR_TOLERANCE


def dimension_points(deviation: float, weight: float) -> float:
    """Graded credit for one numeric dimension; 0 outside the relaxed band."""
    if deviation <= STRICT_TOLERANCE:
        return max(STRICT_FLOOR, 1 - deviation / STRICT_TOLERANCE) * weight
    if deviation <= RELAXED_TOLERANCE:
        return max(RELAXED_FLOOR, 1 - deviation / RELAXED_TOLERANCE) * RELAXED_FACTOR * weight
    return 0.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def confidence_score(
    deviations: Sequence[float],
    zoning_matched: bool = False,
    floors_matched: bool = False,
    location_matched: bool = False,
) -> int:
    """Combine the deviations of the supplied dimensions with enhancer bonuses.

    ``deviations`` holds one relative deviation per dimension the input
    actually supplied (plot area, GFA).
    """
    if len(deviations) == 2 and all(d == 0 for d in deviations):
        total = float(EXACT_BOTH_BASE)
    else:
        weight = BOTH_DIMENSIONS_WEIGHT if len(deviations) == 2 else SINGLE_DIMENSION_WEIGHT
        total = sum(dimension_points(d, weight) for d in deviations)

    if zoning_matched:
        total += ZONING_BONUS
    if floors_matched:
        total += FLOORS_BONUS
    if location_matched:
        total += LOCATION_BONUS

    return min(MAX_SCORE, _round_half_up(total))
