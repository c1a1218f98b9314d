import json

import pytest

from ppbridge.calculator import BeatmapParseError, PerformanceResult
from ppbridge.offload import OffloadBridge, WorkerPool
from ppbridge.types import ScoreRecord

BEATMAP_HEADER = b"osu file format v14\n"

SAMPLE_SCORE_JSON = """
{
    "id": 247,
    "uuid": "1398e5f7-d506-488c-8140-9c46bea77fb1",
    "map_md5": "ea6f8e724a87cc12c8f72b7cf79bbfed",
    "score": 41217150,
    "pp": 902.6521,
    "stars_total": 9.095799,
    "stars_aim": 4.8980803,
    "stars_speed": 3.6561027,
    "flags": 1,
    "grade": "A",
    "accuracy": 98.52941,
    "ur": 77.14786,
    "combo": 1210,
    "mods": 72,
    "exp_mods": 72,
    "count_300": 1131,
    "count_100": 24,
    "count_50": 0,
    "count_sb": 0,
    "count_miss": 1,
    "count_geki": 253,
    "count_katu": 19,
    "speed_multiplier": 1.6,
    "cs": 4.0,
    "ar": 10.875,
    "od": 10.8125,
    "hp": 5.0,
    "max_combo": 1646,
    "status": 2,
    "perfect": false,
    "updated_at": "2022-09-18T15:26:20.386307Z"
}
"""


class FakeCalculator:
    """Stands in for rosu-pp: records requests and returns fixed attributes."""

    def __init__(self):
        self.requests = []

    def parse(self, data):
        if not data.startswith(b"osu file format"):
            raise BeatmapParseError("not an osu beatmap")
        return {"raw": data}

    def calculate(self, beatmap, request):
        self.requests.append(request)
        return PerformanceResult(
            stars_total=6.25,
            stars_aim=3.125,
            stars_speed=2.5,
            pp=400.0 + request.combo / 1000.0,
        )


@pytest.fixture
def sample_score_data():
    return json.loads(SAMPLE_SCORE_JSON)


@pytest.fixture
def sample_score(sample_score_data):
    return ScoreRecord.from_dict(sample_score_data)


@pytest.fixture
def fake_calculator():
    return FakeCalculator()


@pytest.fixture
def beatmap_bytes():
    return BEATMAP_HEADER + b"[Difficulty]\nCircleSize:4\n"


@pytest.fixture
def beatmap_dir(tmp_path, sample_score, beatmap_bytes):
    """Directory holding <map_md5>.osu for the sample score."""
    directory = tmp_path / "beatmaps"
    directory.mkdir()
    (directory / f"{sample_score.map_md5}.osu").write_bytes(beatmap_bytes)
    return directory


@pytest.fixture
def thread_pool():
    pool = WorkerPool(max_workers=4, kind="thread", name="test")
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def bridge(thread_pool):
    return OffloadBridge(thread_pool, name="test")
