import json

import pytest

from ppbridge import cli
from ppbridge.calculator import ScoreAssembler


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)


@pytest.fixture
def fake_assembler(monkeypatch, fake_calculator):
    def _factory(bridge, beatmap_dir=None):
        return ScoreAssembler(bridge, calculator=fake_calculator, beatmap_dir=beatmap_dir)

    monkeypatch.setattr(cli, "ScoreAssembler", _factory)


def test_score_preview(tmp_path, capsys, sample_score_data, beatmap_dir, fake_assembler):
    score_file = tmp_path / "score.json"
    score_file.write_text(json.dumps({"items": [sample_score_data]}))

    code = cli.main([
        "--pool.kind", "thread",
        "--beatmaps.dir", str(beatmap_dir),
        "score", "--score", str(score_file),
    ])

    out = capsys.readouterr().out
    assert code == 0
    assert "Score 247" in out
    assert "HDDT" in out
    assert "stars_total" in out


def test_score_preview_missing_beatmap(tmp_path, capsys, sample_score_data, fake_assembler):
    score_file = tmp_path / "score.json"
    score_file.write_text(json.dumps(sample_score_data))

    code = cli.main([
        "--pool.kind", "thread",
        "score", "--score", str(score_file), "--beatmap", str(tmp_path / "missing.osu"),
    ])

    assert code == 1
    assert "BeatmapLoadError" in capsys.readouterr().out


def test_score_preview_invalid_record(tmp_path, capsys, sample_score_data, fake_assembler):
    sample_score_data["speed_multiplier"] = 0
    score_file = tmp_path / "score.json"
    score_file.write_text(json.dumps(sample_score_data))

    code = cli.main(["--pool.kind", "thread", "score", "--score", str(score_file)])
    assert code == 1
    assert "Invalid score record" in capsys.readouterr().out


def test_password_check(capsys):
    code = cli.main([
        "--pool.kind", "thread",
        "--credentials.profile", "min",
        "password", "--password", "hunter2",
    ])
    out = capsys.readouterr().out
    assert code == 0
    assert "$argon2id$" in out
