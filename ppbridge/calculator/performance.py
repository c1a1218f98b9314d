"""Adapter around the external star rating / pp calculator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np
import rosu_pp_py as rosu

from ppbridge.calculator.errors import (
    BeatmapParseError,
    PerformanceAttributesError,
    UnsupportedModeError,
)
from ppbridge.types.mods import Mods


@dataclass(frozen=True)
class BeatmapParameters:
    """Difficulty values written over the loaded beatmap before calculating."""

    cs: float
    ar: float
    od: float
    hp: float


@dataclass(frozen=True)
class PerformanceRequest:
    parameters: BeatmapParameters
    clock_rate: float
    mods: Mods
    combo: int
    n300: int
    n100: int
    n50: int
    misses: int
    accuracy: float


@dataclass(frozen=True)
class PerformanceResult:
    stars_total: float
    stars_aim: float
    stars_speed: float
    pp: float


class PerformanceCalculator(Protocol):
    def parse(self, data: bytes) -> Any:
        ...

    def calculate(self, beatmap: Any, request: PerformanceRequest) -> PerformanceResult:
        ...


class RosuCalculator:
    """
    osu!standard calculator backed by rosu-pp-py.

    rosu-pp-py beatmaps are immutable, so the difficulty overrides travel as
    ``cs``/``ar``/``od``/``hp`` arguments of the performance builder. They are
    applied before mods and clock rate, the same as writing them into the
    beatmap itself.

    rosu-pp-py parses leniently: junk input yields an empty map rather than an
    error, so a map without hit objects is rejected here.
    """

    def parse(self, data: bytes) -> Any:
        try:
            beatmap = rosu.Beatmap(bytes=data)
        except Exception as exc:  # noqa: BLE001
            raise BeatmapParseError(f"failed to parse beatmap: {exc}") from exc

        if beatmap.n_objects == 0:
            raise BeatmapParseError("beatmap has no hit objects")
        if beatmap.mode != rosu.GameMode.Osu:
            raise UnsupportedModeError(str(beatmap.mode))
        return beatmap

    def calculate(self, beatmap: Any, request: PerformanceRequest) -> PerformanceResult:
        params = request.parameters
        perf = rosu.Performance(
            mods=int(request.mods),
            clock_rate=request.clock_rate,
            cs=params.cs,
            ar=params.ar,
            od=params.od,
            hp=params.hp,
            combo=request.combo,
            n300=request.n300,
            n100=request.n100,
            n50=request.n50,
            misses=request.misses,
            accuracy=request.accuracy,
        )
        attrs = perf.calculate(beatmap)
        difficulty = attrs.difficulty
        values = {
            "stars_total": getattr(difficulty, "stars", None),
            "stars_aim": getattr(difficulty, "aim", None),
            "stars_speed": getattr(difficulty, "speed", None),
            "pp": getattr(attrs, "pp", None),
        }

        missing = [name for name, value in values.items() if value is None]
        if missing:
            raise PerformanceAttributesError(f"calculator returned no {', '.join(missing)}")

        result = PerformanceResult(**{name: float(value) for name, value in values.items()})
        if not np.all(np.isfinite([result.stars_total, result.stars_aim, result.stars_speed, result.pp])):
            raise PerformanceAttributesError(f"calculator returned non-finite attributes: {result}")
        return result
