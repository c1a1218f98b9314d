"""Rescale approach rate and overall difficulty for a clock-rate multiplier."""

from __future__ import annotations

import numpy as np

from ppbridge.difficulty.constants import APPROACH_TIME_RANGE, HIT_WINDOW_300_RANGE
from ppbridge.difficulty.ranges import map_difficulty_range, map_difficulty_range_inv


def approach_time_from_ar(ar: float) -> float:
    """Approach time in ms for a nominal approach rate."""
    return map_difficulty_range(ar, *APPROACH_TIME_RANGE)


def approach_rate_for_speed(approach_time: float, speed_multiplier: float) -> float:
    """Approach rate equivalent to ``approach_time`` once the clock runs at ``speed_multiplier``."""
    _check_speed(speed_multiplier)
    return map_difficulty_range_inv(
        approach_time / (1.0 / speed_multiplier),
        *APPROACH_TIME_RANGE,
    )


def hit_window_from_od(od: float) -> float:
    """300 hit window in ms for a nominal overall difficulty."""
    return map_difficulty_range(od, *HIT_WINDOW_300_RANGE)


def od_for_speed(hit_window300: float, speed_multiplier: float) -> float:
    """Overall difficulty equivalent to ``hit_window300`` at ``speed_multiplier``."""
    _check_speed(speed_multiplier)
    return map_difficulty_range_inv(
        hit_window300 / (1.0 / speed_multiplier),
        *HIT_WINDOW_300_RANGE,
    )


def effective_ar(ar: float, speed_multiplier: float) -> float:
    return approach_rate_for_speed(approach_time_from_ar(ar), speed_multiplier)


def effective_od(od: float, speed_multiplier: float) -> float:
    return od_for_speed(hit_window_from_od(od), speed_multiplier)


def _check_speed(speed_multiplier: float) -> None:
    if not np.isfinite(speed_multiplier) or speed_multiplier <= 0:
        raise ValueError(f"speed multiplier must be finite and > 0, got {speed_multiplier!r}")
