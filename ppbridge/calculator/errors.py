"""Failure taxonomy for a single performance calculation request."""

from ppbridge.types.mods import InvalidModsError


class CalculationError(Exception):
    """Base class for failures that abort a calculation request."""


class BeatmapLoadError(CalculationError):
    """The beatmap file is missing or unreadable."""

    def __init__(self, path, reason: str) -> None:
        super().__init__(f"cannot read beatmap {path}: {reason}")
        self.path = path
        self.reason = reason

    def __reduce__(self):
        return type(self), (self.path, self.reason)


class BeatmapParseError(CalculationError):
    """The beatmap bytes could not be parsed."""


class UnsupportedModeError(BeatmapParseError):
    """The beatmap is not an osu!standard map."""

    def __init__(self, mode) -> None:
        super().__init__(f"beatmap mode {mode} is not osu!standard")
        self.mode = mode

    def __reduce__(self):
        return type(self), (self.mode,)


class PerformanceAttributesError(CalculationError):
    """The calculator returned missing or non-finite attributes."""


class JudgementRangeError(CalculationError, OverflowError):
    """A count does not fit the calculator's integer representation."""

    def __init__(self, field: str, value: int, bits: int) -> None:
        super().__init__(
            f"{field}={value!r} does not fit an unsigned {bits}-bit integer"
        )
        self.field = field
        self.value = value
        self.bits = bits

    def __reduce__(self):
        return type(self), (self.field, self.value, self.bits)


class ModsDecodeError(CalculationError, InvalidModsError):
    """Modifier bitflags on a score record are not a valid combination."""


__all__ = [
    "CalculationError",
    "BeatmapLoadError",
    "BeatmapParseError",
    "UnsupportedModeError",
    "PerformanceAttributesError",
    "JudgementRangeError",
    "ModsDecodeError",
]
