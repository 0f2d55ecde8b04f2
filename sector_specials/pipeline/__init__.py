"""
Map specials pipeline.

Provides the MapSpecials orchestrator, the per-run state and the decoded
special / thing payloads the passes work on.
"""

from .decoded import (
    LineSpecial,
    SlopeThingType,
    Alignment,
    PlaneAlign,
    PlaneCopy,
    Set3dFloor,
    TranslucentLine,
    decode_line_special,
    decode_thing,
)
from .specials_state import SpecialsState, TranslucentLineRecord, VertexHeightMap
from .map_specials import (
    MapSpecials,
    zdoom_slope_passes,
    eternity_slope_passes,
    srb2_slope_passes,
    edge_classic_slope_passes,
)

__all__ = [
    # Orchestrator
    'MapSpecials',
    'zdoom_slope_passes',
    'eternity_slope_passes',
    'srb2_slope_passes',
    'edge_classic_slope_passes',
    # State
    'SpecialsState',
    'TranslucentLineRecord',
    'VertexHeightMap',
    # Decoded specials
    'LineSpecial',
    'SlopeThingType',
    'Alignment',
    'PlaneAlign',
    'PlaneCopy',
    'Set3dFloor',
    'TranslucentLine',
    'decode_line_special',
    'decode_thing',
]
