"""
ppbridge - Difficulty Constants

Physical ranges used to translate osu!standard difficulty settings into
timing units. Each range is (min, mid, max) as reached at difficulty 0, 5
and 10 respectively.
"""

from typing import Tuple

# =============================================================================
# APPROACH RATE
# =============================================================================

# Time in ms between an object appearing and its hit time
AR_MS_MIN = 1800.0                  # AR 0
AR_MS_MID = 1200.0                  # AR 5
AR_MS_MAX = 450.0                   # AR 10

APPROACH_TIME_RANGE: Tuple[float, float, float] = (AR_MS_MIN, AR_MS_MID, AR_MS_MAX)

# =============================================================================
# OVERALL DIFFICULTY
# =============================================================================

# Half-width in ms of the 300 hit window
OD_MS_MIN = 80.0                    # OD 0
OD_MS_MID = 50.0                    # OD 5
OD_MS_MAX = 20.0                    # OD 10

HIT_WINDOW_300_RANGE: Tuple[float, float, float] = (OD_MS_MIN, OD_MS_MID, OD_MS_MAX)

# =============================================================================
# DOMAIN LIMITS
# =============================================================================

DIFFICULTY_MID = 5.0                # Centre of the 0-10 scale
MAX_DIFFICULTY_VALUE = 11.0         # Upper bound accepted by the calculator
