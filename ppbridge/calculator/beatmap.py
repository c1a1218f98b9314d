"""Beatmap file lookup and loading."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Union

from ppbridge.calculator.errors import BeatmapLoadError

PathLike = Union[str, Path]


def resolve_beatmap_path(
    map_md5: str,
    beatmap_dir: Optional[PathLike] = None,
    beatmap_path: Optional[PathLike] = None,
) -> Path:
    """
    Pick the beatmap file for a score.

    An explicit ``beatmap_path`` wins; otherwise the file is expected at
    ``<beatmap_dir>/<map_md5>.osu``.
    """
    if beatmap_path is not None:
        return Path(beatmap_path)
    if beatmap_dir is None:
        raise BeatmapLoadError(f"{map_md5}.osu", "no beatmap directory configured")
    if not map_md5:
        raise BeatmapLoadError(Path(beatmap_dir), "score has no map checksum")
    return Path(beatmap_dir) / f"{map_md5}.osu"


def read_beatmap(path: PathLike) -> bytes:
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError as exc:
        raise BeatmapLoadError(path, "file not found") from exc
    except OSError as exc:
        raise BeatmapLoadError(path, exc.strerror or str(exc)) from exc

    return data


async def load_beatmap(path: PathLike) -> bytes:
    """Read beatmap bytes without blocking the event loop."""
    return await asyncio.to_thread(read_beatmap, path)
