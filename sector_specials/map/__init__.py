"""
Sector map model.

Flat, index-referenced collections of vertices, sides, lines, sectors and
things, plus the tag and spatial queries the specials pipeline consumes.
"""

from .map_objects import (
    SurfaceType,
    SectorSurface,
    MapVertex,
    MapSide,
    MapLine,
    MapSector,
    MapThing,
    ExtraFloor,
    Set3dFloorType,
    Set3dFloorFlags,
)
from .map_data import MapData

__all__ = [
    'SurfaceType',
    'SectorSurface',
    'MapVertex',
    'MapSide',
    'MapLine',
    'MapSector',
    'MapThing',
    'ExtraFloor',
    'Set3dFloorType',
    'Set3dFloorFlags',
    'MapData',
]
