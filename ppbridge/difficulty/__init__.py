"""
ppbridge - Difficulty Package

Conversions between the 0-10 difficulty scale and timing units, and their
rescaling for clock-rate modifiers.
"""

from .ranges import map_difficulty_range, map_difficulty_range_inv
from .speed import (
    approach_time_from_ar,
    approach_rate_for_speed,
    hit_window_from_od,
    od_for_speed,
    effective_ar,
    effective_od,
)
from .constants import APPROACH_TIME_RANGE, HIT_WINDOW_300_RANGE

__all__ = [
    # Ranges
    'map_difficulty_range',
    'map_difficulty_range_inv',

    # Speed
    'approach_time_from_ar',
    'approach_rate_for_speed',
    'hit_window_from_od',
    'od_for_speed',
    'effective_ar',
    'effective_od',

    'APPROACH_TIME_RANGE',
    'HIT_WINDOW_300_RANGE',
]
