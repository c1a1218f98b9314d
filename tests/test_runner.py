import asyncio

import pytest

from ppbridge.calculator import ScoreAssembler
from ppbridge.runner import ScoreBatchRunner


def _variant(score, score_id, map_md5=None, combo=None):
    update = {"id": score_id}
    if map_md5 is not None:
        update["map_md5"] = map_md5
    if combo is not None:
        update["combo"] = combo
    return score.model_copy(update=update)


def test_batch_updates_all_scores(bridge, fake_calculator, beatmap_dir, sample_score):
    assembler = ScoreAssembler(bridge, calculator=fake_calculator, beatmap_dir=beatmap_dir)
    runner = ScoreBatchRunner(assembler)
    scores = [_variant(sample_score, 1000 + i, combo=100 * i) for i in range(5)]

    stats = asyncio.run(runner.run_batch(scores))

    assert stats["scores_processed"] == 5
    assert stats["scores_updated"] == 5
    assert stats["errors"] == 0
    for i in range(5):
        record = stats["results"][1000 + i]
        assert record.combo == 100 * i
        assert record.pp == pytest.approx(400.0 + (100 * i) / 1000.0)
    assert stats["pp_mean"] == pytest.approx(400.2)
    assert stats["pp_max"] == pytest.approx(400.4)
    assert runner.cycle_count == 1


def test_failed_scores_do_not_stop_the_batch(bridge, fake_calculator, beatmap_dir, sample_score):
    assembler = ScoreAssembler(bridge, calculator=fake_calculator, beatmap_dir=beatmap_dir)
    runner = ScoreBatchRunner(assembler, concurrency=1)
    scores = [
        _variant(sample_score, 1),
        _variant(sample_score, 2, map_md5="0" * 32),
        _variant(sample_score, 3),
    ]

    stats = asyncio.run(runner.run_batch(scores))

    assert stats["scores_updated"] == 2
    assert stats["errors"] == 1
    assert set(stats["results"]) == {1, 3}
    assert stats["failures"][2].startswith("BeatmapLoadError")

    status = runner.get_status()
    assert status["cached_results"] == 2
    assert status["assembler"]["failed"] == 1


def test_empty_batch(bridge, fake_calculator, beatmap_dir):
    runner = ScoreBatchRunner(ScoreAssembler(bridge, calculator=fake_calculator, beatmap_dir=beatmap_dir))
    stats = asyncio.run(runner.run_batch([]))
    assert stats["scores_processed"] == 0
    assert stats["pp_mean"] == 0.0


def test_duplicate_score_ids_rejected(bridge, fake_calculator, beatmap_dir, sample_score):
    assembler = ScoreAssembler(bridge, calculator=fake_calculator, beatmap_dir=beatmap_dir)
    runner = ScoreBatchRunner(assembler)
    scores = [_variant(sample_score, 7), _variant(sample_score, 8), _variant(sample_score, 7, combo=5)]

    with pytest.raises(ValueError, match="duplicate"):
        asyncio.run(runner.run_batch(scores))
    assert runner.cycle_count == 0
    assert bridge.submitted == 0
