import math

import numpy as np
import pytest

from ppbridge.difficulty import (
    approach_rate_for_speed,
    approach_time_from_ar,
    effective_ar,
    effective_od,
    hit_window_from_od,
    od_for_speed,
)


def test_worked_example_ar9_at_1_5x():
    approach_time = approach_time_from_ar(9.0)
    assert approach_time == 600.0
    assert approach_rate_for_speed(approach_time, 1.5) == pytest.approx(7.0, abs=1e-9)


def test_identity_at_unity_speed():
    for value in np.linspace(0.0, 10.0, 41):
        assert effective_ar(value, 1.0) == pytest.approx(value, abs=1e-3)
        assert effective_od(value, 1.0) == pytest.approx(value, abs=1e-3)


def test_hit_window_endpoints():
    assert hit_window_from_od(0.0) == 80.0
    assert hit_window_from_od(5.0) == 50.0
    assert hit_window_from_od(10.0) == 20.0


def test_od_rescaled_for_speed():
    # OD 9 -> 26ms window; 26 * 1.5 = 39ms -> OD 41/6
    assert hit_window_from_od(9.0) == pytest.approx(26.0)
    assert od_for_speed(26.0, 1.5) == pytest.approx(41.0 / 6.0)


def test_slower_clock():
    # 600ms * 0.75 = 450ms, the AR 10 approach time
    assert effective_ar(9.0, 0.75) == pytest.approx(10.0)


def test_sample_score_values():
    assert effective_ar(10.875, 1.6) == pytest.approx(9.6)
    assert effective_od(10.8125, 1.6) == pytest.approx(9.3)


@pytest.mark.parametrize("speed", [0.0, -1.0, math.nan, math.inf])
def test_invalid_speed_rejected(speed):
    with pytest.raises(ValueError):
        approach_rate_for_speed(600.0, speed)
    with pytest.raises(ValueError):
        od_for_speed(26.0, speed)
