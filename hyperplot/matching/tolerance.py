"""Relative-deviation checks for numeric plot attributes."""

from typing import Tuple

STRICT_TOLERANCE = 0.06   # full confidence credit
RELAXED_TOLERANCE = 0.10  # admission threshold


def is_within_tolerance(actual: float, target: float, tolerance: float) -> Tuple[bool, float]:
    """Return ``(match, deviation)`` where deviation is ``|actual - target| / target``.

    A zero target cannot reject a candidate: it always matches with
    deviation 0.
    """
    if target == 0:
        return True, 0.0
    deviation = abs(actual - target) / target
    return deviation <= tolerance, deviation
