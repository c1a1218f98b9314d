import numpy as np
import pytest

from ppbridge.difficulty import (
    APPROACH_TIME_RANGE,
    HIT_WINDOW_300_RANGE,
    map_difficulty_range,
    map_difficulty_range_inv,
)

RANGES = [
    APPROACH_TIME_RANGE,
    HIT_WINDOW_300_RANGE,
    (0.0, 10.0, 50.0),      # ascending, asymmetric halves
    (-3.0, 2.0, 4.5),
]


@pytest.mark.parametrize("rng", RANGES)
def test_fixed_points_are_exact(rng):
    low, mid, high = rng
    assert map_difficulty_range(5.0, low, mid, high) == mid
    assert map_difficulty_range_inv(mid, low, mid, high) == 5.0


@pytest.mark.parametrize("rng", RANGES)
def test_endpoints(rng):
    low, mid, high = rng
    assert map_difficulty_range(0.0, low, mid, high) == pytest.approx(low)
    assert map_difficulty_range(10.0, low, mid, high) == pytest.approx(high)


@pytest.mark.parametrize("rng", RANGES)
def test_inverse_undoes_forward(rng):
    for x in np.linspace(0.0, 10.0, 101):
        raw = map_difficulty_range(x, *rng)
        assert map_difficulty_range_inv(raw, *rng) == pytest.approx(x, abs=1e-4)


def test_approach_time_branches():
    # AR above 5 shortens the approach, below 5 lengthens it
    assert map_difficulty_range(9.0, *APPROACH_TIME_RANGE) == 600.0
    assert map_difficulty_range(2.5, *APPROACH_TIME_RANGE) == pytest.approx(1500.0)


def test_inverse_matches_descending_formulas():
    low, mid, high = APPROACH_TIME_RANGE
    raw_fast = 900.0
    expected_fast = ((raw_fast * 5 - mid * 5) / (high - mid)) + 5
    assert map_difficulty_range_inv(raw_fast, low, mid, high) == pytest.approx(expected_fast)

    raw_slow = 1500.0
    expected_slow = 5 - ((mid * 5 - raw_slow * 5) / (mid - low))
    assert map_difficulty_range_inv(raw_slow, low, mid, high) == pytest.approx(expected_slow)
