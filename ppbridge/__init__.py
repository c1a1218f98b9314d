"""
ppbridge

Star rating and pp recomputation for osu! scores under clock-rate mods, and
an async bridge for running CPU-bound work on a worker pool.
"""

__version__ = "0.1.0"

from .types import ScoreRecord, Mods, decode_mods
from .calculator import ScoreAssembler, assemble_score
from .offload import OffloadBridge, OffloadResult, OffloadStatus, WorkerPool, CredentialHasher
from .runner import ScoreBatchRunner

__all__ = [
    "ScoreRecord",
    "Mods",
    "decode_mods",
    "ScoreAssembler",
    "assemble_score",
    "OffloadBridge",
    "OffloadResult",
    "OffloadStatus",
    "WorkerPool",
    "CredentialHasher",
    "ScoreBatchRunner",
]
