"""Piecewise-linear mapping between the 0-10 difficulty scale and physical units."""

from __future__ import annotations

from ppbridge.difficulty.constants import DIFFICULTY_MID


def map_difficulty_range(scaled_diff: float, min: float, mid: float, max: float) -> float:
    """
    Map a 0-10 difficulty value onto the physical range (min, mid, max).

    Difficulty 0 maps to ``min``, 5 to ``mid`` and 10 to ``max``, linearly on
    each half. Ranges may be ascending or descending but must not have a
    zero-width half.

    Args:
        scaled_diff: Difficulty on the 0-10 scale
        min: Physical value at difficulty 0
        mid: Physical value at difficulty 5
        max: Physical value at difficulty 10

    Returns:
        Physical value
    """
    if scaled_diff > DIFFICULTY_MID:
        return mid + (max - mid) * (scaled_diff - DIFFICULTY_MID) / DIFFICULTY_MID

    if scaled_diff < DIFFICULTY_MID:
        return mid - (mid - min) * (DIFFICULTY_MID - scaled_diff) / DIFFICULTY_MID

    return mid


def map_difficulty_range_inv(val: float, min: float, mid: float, max: float) -> float:
    """
    Inverse of :func:`map_difficulty_range`.

    A value lying between ``mid`` and ``max`` maps to the upper half of the
    scale, anything on the ``min`` side to the lower half. For the descending
    ranges used by approach time and hit windows this reduces to the
    ``val < mid`` / ``val > mid`` split.

    Args:
        val: Physical value
        min: Physical value at difficulty 0
        mid: Physical value at difficulty 5
        max: Physical value at difficulty 10

    Returns:
        Difficulty on the 0-10 scale
    """
    if val == mid:
        return DIFFICULTY_MID

    towards_max = (val - mid) * (max - mid) > 0
    if towards_max:
        return ((val * DIFFICULTY_MID - mid * DIFFICULTY_MID) / (max - mid)) + DIFFICULTY_MID

    return DIFFICULTY_MID - ((mid * DIFFICULTY_MID - val * DIFFICULTY_MID) / (mid - min))
