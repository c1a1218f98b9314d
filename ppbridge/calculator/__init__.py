"""
ppbridge - Calculator Package

Star rating and pp recomputation for score records under clock-rate mods.
"""

from .errors import (
    CalculationError,
    BeatmapLoadError,
    BeatmapParseError,
    UnsupportedModeError,
    PerformanceAttributesError,
    JudgementRangeError,
    ModsDecodeError,
)
from .performance import (
    BeatmapParameters,
    PerformanceRequest,
    PerformanceResult,
    PerformanceCalculator,
    RosuCalculator,
)
from .beatmap import load_beatmap, read_beatmap, resolve_beatmap_path
from .assembler import (
    ScoreAssembler,
    assemble_score,
    apply_performance,
    build_request,
    effective_parameters,
)

__all__ = [
    # Errors
    'CalculationError',
    'BeatmapLoadError',
    'BeatmapParseError',
    'UnsupportedModeError',
    'PerformanceAttributesError',
    'JudgementRangeError',
    'ModsDecodeError',

    # Calculator adapter
    'BeatmapParameters',
    'PerformanceRequest',
    'PerformanceResult',
    'PerformanceCalculator',
    'RosuCalculator',

    # Beatmaps
    'load_beatmap',
    'read_beatmap',
    'resolve_beatmap_path',

    # Assembly
    'ScoreAssembler',
    'assemble_score',
    'apply_performance',
    'build_request',
    'effective_parameters',
]
