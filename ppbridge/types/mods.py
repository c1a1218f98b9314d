"""osu! legacy modifier bitflags and validated decoding."""

from __future__ import annotations

from enum import IntFlag
from typing import Tuple


class InvalidModsError(ValueError):
    """Raised when a modifier value cannot be decoded into a valid mod combination."""

    def __init__(self, value: int, reason: str) -> None:
        super().__init__(f"invalid mods {value!r}: {reason}")
        self.value = value
        self.reason = reason

    def __reduce__(self):
        return type(self), (self.value, self.reason)


class Mods(IntFlag):
    NOMOD = 0
    NOFAIL = 1 << 0
    EASY = 1 << 1
    TOUCHSCREEN = 1 << 2
    HIDDEN = 1 << 3
    HARDROCK = 1 << 4
    SUDDENDEATH = 1 << 5
    DOUBLETIME = 1 << 6
    RELAX = 1 << 7
    HALFTIME = 1 << 8
    NIGHTCORE = 1 << 9
    FLASHLIGHT = 1 << 10
    AUTOPLAY = 1 << 11
    SPUNOUT = 1 << 12
    AUTOPILOT = 1 << 13
    PERFECT = 1 << 14
    KEY4 = 1 << 15
    KEY5 = 1 << 16
    KEY6 = 1 << 17
    KEY7 = 1 << 18
    KEY8 = 1 << 19
    FADEIN = 1 << 20
    RANDOM = 1 << 21
    CINEMA = 1 << 22
    TARGET = 1 << 23
    KEY9 = 1 << 24
    KEYCOOP = 1 << 25
    KEY1 = 1 << 26
    KEY3 = 1 << 27
    KEY2 = 1 << 28
    SCOREV2 = 1 << 29
    MIRROR = 1 << 30

    @property
    def acronym(self) -> str:
        if not self:
            return "NM"
        return "".join(
            _ACRONYMS[flag] for flag in Mods if flag and flag in self and flag in _ACRONYMS
        )


_ACRONYMS = {
    Mods.NOFAIL: "NF",
    Mods.EASY: "EZ",
    Mods.TOUCHSCREEN: "TD",
    Mods.HIDDEN: "HD",
    Mods.HARDROCK: "HR",
    Mods.SUDDENDEATH: "SD",
    Mods.DOUBLETIME: "DT",
    Mods.RELAX: "RX",
    Mods.HALFTIME: "HT",
    Mods.NIGHTCORE: "NC",
    Mods.FLASHLIGHT: "FL",
    Mods.AUTOPLAY: "AT",
    Mods.SPUNOUT: "SO",
    Mods.AUTOPILOT: "AP",
    Mods.PERFECT: "PF",
    Mods.FADEIN: "FI",
    Mods.RANDOM: "RD",
    Mods.CINEMA: "CN",
    Mods.TARGET: "TP",
    Mods.SCOREV2: "V2",
    Mods.MIRROR: "MR",
}

ALL_MODS = sum(int(flag) for flag in Mods)

EXCLUSIVE_MODS: Tuple[Tuple[Mods, Mods], ...] = (
    (Mods.EASY, Mods.HARDROCK),
    (Mods.HALFTIME, Mods.DOUBLETIME),
    (Mods.HALFTIME, Mods.NIGHTCORE),
    (Mods.RELAX, Mods.AUTOPILOT),
)


def decode_mods(value: int) -> Mods:
    """
    Decode a raw modifier integer into :class:`Mods`.

    Args:
        value: Bitflag value as stored on the score record

    Returns:
        Decoded mods

    Raises:
        InvalidModsError: Value is negative, carries unknown bits, or combines
            mutually exclusive mods
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidModsError(value, "not an integer")
    if value < 0:
        raise InvalidModsError(value, "negative bitflags")

    unknown = value & ~ALL_MODS
    if unknown:
        raise InvalidModsError(value, f"unknown bits 0x{unknown:x}")

    mods = Mods(value)
    for left, right in EXCLUSIVE_MODS:
        if left in mods and right in mods:
            raise InvalidModsError(value, f"{left.name} and {right.name} are mutually exclusive")

    return mods
