from .score_record import ScoreRecord, DERIVED_FIELDS
from .mods import Mods, InvalidModsError, decode_mods

__all__ = [
    "ScoreRecord",
    "DERIVED_FIELDS",
    "Mods",
    "InvalidModsError",
    "decode_mods",
]
