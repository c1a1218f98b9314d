from __future__ import annotations

import asyncio
import time
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
from loguru import logger

from ppbridge.calculator.assembler import ScoreAssembler
from ppbridge.calculator.errors import CalculationError
from ppbridge.offload.bridge import OffloadError
from ppbridge.types.score_record import ScoreRecord


class ScoreBatchRunner:
    """Recomputes batches of scores concurrently through a ScoreAssembler."""

    def __init__(self, assembler: ScoreAssembler, concurrency: Optional[int] = None) -> None:
        self.assembler = assembler
        self.concurrency = concurrency
        self._cycle_count = 0
        self.last_results: Dict[int, ScoreRecord] = {}

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    async def run_batch(self, scores: Iterable[ScoreRecord]) -> Dict[str, Any]:
        """
        Recompute every score in ``scores``.

        A failing score is counted and logged; the rest of the batch still
        runs. Cancelling the batch cancels all pending requests.

        Returns:
            Cycle statistics, with the recomputed records under ``results``
            keyed by score id

        Raises:
            ValueError: Two scores in the batch share an id
        """
        cycle_start = time.time()
        batch: List[ScoreRecord] = list(scores)

        id_counts = Counter(score.id for score in batch)
        duplicates = sorted(score_id for score_id, count in id_counts.items() if count > 1)
        if duplicates:
            raise ValueError(f"duplicate score ids in batch: {duplicates}")

        limiter = asyncio.Semaphore(self.concurrency) if self.concurrency else None

        async def _one(score: ScoreRecord) -> ScoreRecord:
            if limiter is None:
                return await self.assembler.calc_full(score)
            async with limiter:
                return await self.assembler.calc_full(score)

        outcomes = await asyncio.gather(*(_one(score) for score in batch), return_exceptions=True)

        results: Dict[int, ScoreRecord] = {}
        failures: Dict[int, str] = {}
        for score, outcome in zip(batch, outcomes):
            if isinstance(outcome, (CalculationError, OffloadError)):
                failures[score.id] = f"{type(outcome).__name__}: {outcome}"
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            results[score.id] = outcome

        self._cycle_count += 1
        self.last_results = results
        total_time = time.time() - cycle_start

        pp_values = np.array([record.pp for record in results.values()], dtype=float)
        stats: Dict[str, Any] = {
            "cycle_id": self._cycle_count,
            "timestamp": cycle_start,
            "total_time": total_time,
            "scores_processed": len(batch),
            "scores_updated": len(results),
            "errors": len(failures),
            "failures": failures,
            "pp_mean": float(np.mean(pp_values)) if pp_values.size else 0.0,
            "pp_max": float(np.max(pp_values)) if pp_values.size else 0.0,
            "results": results,
        }

        logger.info(
            (
                "[Runner] Batch {cycle} complete | {updated}/{processed} scores updated | "
                "errors={errors} | mean pp={pp_mean:.2f} | {duration:.2f}s"
            ).format(
                cycle=stats["cycle_id"],
                updated=stats["scores_updated"],
                processed=stats["scores_processed"],
                errors=stats["errors"],
                pp_mean=stats["pp_mean"],
                duration=total_time,
            )
        )
        for score_id, reason in failures.items():
            logger.warning(f"[Runner] Score {score_id} failed: {reason}")

        return stats

    def get_status(self) -> Dict[str, Any]:
        return {
            "cycle_count": self._cycle_count,
            "cached_results": len(self.last_results),
            "concurrency": self.concurrency,
            "assembler": self.assembler.get_status(),
        }
