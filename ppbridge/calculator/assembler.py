"""
ppbridge - Score Assembler

Recomputes star rating and pp for a score record:

1. Load the beatmap named by the score
2. Override its CS/AR/OD/HP with the score's values, AR and OD rescaled for
   the score's speed multiplier
3. Run the performance calculator with the score's mods, combo and judgements
4. Return a copy of the score with only the derived fields replaced
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from ppbridge.calculator.beatmap import PathLike, load_beatmap, resolve_beatmap_path
from ppbridge.calculator.errors import (
    BeatmapParseError,
    CalculationError,
    JudgementRangeError,
    ModsDecodeError,
)
from ppbridge.calculator.performance import (
    BeatmapParameters,
    PerformanceCalculator,
    PerformanceRequest,
    PerformanceResult,
    RosuCalculator,
)
from ppbridge.difficulty.speed import (
    approach_rate_for_speed,
    approach_time_from_ar,
    hit_window_from_od,
    od_for_speed,
)
from ppbridge.offload.bridge import OffloadBridge, OffloadError
from ppbridge.types.mods import InvalidModsError, decode_mods
from ppbridge.types.score_record import ScoreRecord

# Hit counts and combo are unsigned 32-bit in the calculator
COUNT_BITS = 32


def effective_parameters(score: ScoreRecord) -> BeatmapParameters:
    """Beatmap difficulty overrides for ``score``, with AR/OD rescaled for its speed."""
    speed = score.speed_multiplier
    return BeatmapParameters(
        cs=score.cs,
        ar=approach_rate_for_speed(approach_time_from_ar(score.ar), speed),
        od=od_for_speed(hit_window_from_od(score.od), speed),
        hp=score.hp,
    )


def narrow_count(field: str, value: int, bits: int = COUNT_BITS) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise JudgementRangeError(field, value, bits)
    if not 0 <= value < (1 << bits):
        raise JudgementRangeError(field, value, bits)
    return value


def build_request(score: ScoreRecord) -> PerformanceRequest:
    """
    Translate a score record into calculator inputs.

    Raises:
        ModsDecodeError: Mods are not a valid combination
        JudgementRangeError: Combo or a hit count does not fit the calculator
    """
    try:
        mods = decode_mods(score.mods)
    except InvalidModsError as exc:
        raise ModsDecodeError(exc.value, exc.reason) from exc

    return PerformanceRequest(
        parameters=effective_parameters(score),
        clock_rate=float(score.speed_multiplier),
        mods=mods,
        combo=narrow_count("combo", score.combo),
        n300=narrow_count("count_300", score.count_300),
        n100=narrow_count("count_100", score.count_100),
        n50=narrow_count("count_50", score.count_50),
        misses=narrow_count("count_miss", score.count_miss),
        accuracy=float(score.accuracy),
    )


def apply_performance(score: ScoreRecord, result: PerformanceResult) -> ScoreRecord:
    """Copy of ``score`` with only the derived fields replaced; ``score`` is untouched."""
    return score.model_copy(
        update={
            "stars_total": result.stars_total,
            "stars_aim": result.stars_aim,
            "stars_speed": result.stars_speed,
            "pp": result.pp,
        },
        deep=True,
    )


def assemble_score(
    score: ScoreRecord,
    beatmap_data: bytes,
    calculator: PerformanceCalculator,
) -> ScoreRecord:
    """
    Synchronous calculation for one score; this is the unit of work that runs
    on the worker pool.

    Args:
        score: Score to recompute
        beatmap_data: Raw ``.osu`` file contents
        calculator: Performance calculator adapter

    Returns:
        New score record with recomputed stars and pp
    """
    if not beatmap_data:
        raise BeatmapParseError("beatmap file is empty")

    beatmap = calculator.parse(beatmap_data)
    request = build_request(score)
    result = calculator.calculate(beatmap, request)
    return apply_performance(score, result)


class ScoreAssembler:
    """Async entry point that recomputes scores on the worker pool."""

    def __init__(
        self,
        bridge: OffloadBridge,
        calculator: Optional[PerformanceCalculator] = None,
        beatmap_dir: Optional[PathLike] = None,
    ) -> None:
        self.bridge = bridge
        self.calculator = calculator if calculator is not None else RosuCalculator()
        self.beatmap_dir = Path(beatmap_dir) if beatmap_dir is not None else None
        self.calculated: int = 0
        self.failed: int = 0
        self.last_error: Optional[str] = None

    async def calc_full(
        self,
        score: ScoreRecord,
        beatmap_path: Optional[PathLike] = None,
    ) -> ScoreRecord:
        """
        Recompute ``score`` against its beatmap.

        Raises:
            CalculationError: Beatmap missing/unparseable, invalid mods, or a
                count out of range
            OffloadError: The worker pool dropped the request
        """
        started = time.time()
        try:
            path = resolve_beatmap_path(score.map_md5, self.beatmap_dir, beatmap_path)
            beatmap_data = await load_beatmap(path)
            updated = await self.bridge.run(assemble_score, score, beatmap_data, self.calculator)
        except (CalculationError, OffloadError) as exc:
            self.failed += 1
            self.last_error = str(exc)
            logger.warning(f"[Assembler] Score {score.id} failed: {exc}")
            raise

        self.calculated += 1
        logger.debug(
            f"[Assembler] Score {score.id}: stars={updated.stars_total:.3f} "
            f"pp={updated.pp:.2f} ({time.time() - started:.3f}s)"
        )
        return updated

    def get_status(self) -> Dict[str, Any]:
        return {
            "calculated": self.calculated,
            "failed": self.failed,
            "last_error": self.last_error,
            "beatmap_dir": str(self.beatmap_dir) if self.beatmap_dir else None,
            "calculator": type(self.calculator).__name__,
            "bridge": self.bridge.get_status(),
        }
