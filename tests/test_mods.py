import pickle

import pytest

from ppbridge.types import InvalidModsError, Mods, decode_mods


def test_decode_hidden_doubletime():
    mods = decode_mods(72)
    assert mods == Mods.HIDDEN | Mods.DOUBLETIME
    assert Mods.HARDROCK not in mods
    assert mods.acronym == "HDDT"


def test_decode_nomod():
    mods = decode_mods(0)
    assert mods == Mods.NOMOD
    assert mods.acronym == "NM"


def test_nightcore_with_doubletime_is_valid():
    mods = decode_mods(int(Mods.DOUBLETIME | Mods.NIGHTCORE))
    assert Mods.NIGHTCORE in mods


@pytest.mark.parametrize("value", [-1, 1 << 31, (1 << 31) | 8])
def test_unrecognised_bits_rejected(value):
    with pytest.raises(InvalidModsError):
        decode_mods(value)


@pytest.mark.parametrize(
    "combo",
    [
        Mods.EASY | Mods.HARDROCK,
        Mods.HALFTIME | Mods.DOUBLETIME,
        Mods.HALFTIME | Mods.NIGHTCORE,
        Mods.RELAX | Mods.AUTOPILOT,
    ],
)
def test_exclusive_mods_rejected(combo):
    with pytest.raises(InvalidModsError) as exc_info:
        decode_mods(int(combo))
    assert "mutually exclusive" in exc_info.value.reason


def test_non_integer_rejected():
    with pytest.raises(InvalidModsError):
        decode_mods("72")
    with pytest.raises(InvalidModsError):
        decode_mods(True)


def test_error_survives_pickling():
    # errors raised in process workers are pickled back to the caller
    err = InvalidModsError(1 << 31, "unknown bits 0x80000000")
    restored = pickle.loads(pickle.dumps(err))
    assert restored.value == err.value
    assert restored.reason == err.reason
    assert str(restored) == str(err)
