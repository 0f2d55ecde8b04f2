"""
Decoded line specials and slope things.

Each recognized special or thing type is decoded once into a small frozen
payload with its arguments already interpreted. Passes dispatch on the
payload class instead of comparing raw integer codes.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

from sector_specials.map.map_objects import (
    MapLine,
    MapThing,
    Set3dFloorFlags,
    Set3dFloorType,
    SurfaceType,
)


class LineSpecial(IntEnum):
    """Line special codes handled by this package."""
    PLANE_COPY = 118
    SECTOR_SET_3D_FLOOR = 160
    PLANE_ALIGN = 181
    TRANSLUCENT_LINE = 208


class SlopeThingType(IntEnum):
    """Thing type codes that drive slopes."""
    VAVOOM_FLOOR = 1500
    VAVOOM_CEILING = 1501
    VERTEX_HEIGHT_FLOOR = 1504
    VERTEX_HEIGHT_CEILING = 1505
    LINE_SLOPE_FLOOR = 9500
    LINE_SLOPE_CEILING = 9501
    SECTOR_TILT_FLOOR = 9502
    SECTOR_TILT_CEILING = 9503
    SLOPE_COPY_FLOOR = 9510
    SLOPE_COPY_CEILING = 9511


class Alignment(IntEnum):
    """Plane_Align argument values."""
    NONE = 0
    FRONT = 1
    BACK = 2


# Set3dFloor type bits above the two-bit floor type
SET3DFLOOR_RENDER_INSIDE = 0x4
SET3DFLOOR_USE_LINE_ID = 0x8


# ---------------------------------------------------------------------------
# Line special payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlaneAlign:
    line: int
    floor: Alignment
    ceiling: Alignment


@dataclass(frozen=True)
class PlaneCopy:
    line: int
    front_floor_tag: int
    front_ceiling_tag: int
    back_floor_tag: int
    back_ceiling_tag: int
    share: int


@dataclass(frozen=True)
class Set3dFloor:
    line: int
    target_tag: int
    floor_type: Set3dFloorType
    draw_inside: bool
    flags: Set3dFloorFlags
    alpha: float


@dataclass(frozen=True)
class TranslucentLine:
    line: int
    target_id: int
    alpha: float
    additive: bool

    @property
    def render_style(self) -> str:
        return "add" if self.additive else "translucent"


DecodedLineSpecial = Union[PlaneAlign, PlaneCopy, Set3dFloor, TranslucentLine]


def _alignment(value: int) -> Alignment:
    try:
        return Alignment(value)
    except ValueError:
        return Alignment.NONE


def decode_line_special(line: MapLine) -> Optional[DecodedLineSpecial]:
    """Decode [line]'s special, or None if this package does not handle it."""
    special = line.special
    if special == LineSpecial.PLANE_ALIGN:
        return PlaneAlign(line.index, _alignment(line.arg(0)), _alignment(line.arg(1)))

    if special == LineSpecial.PLANE_COPY:
        return PlaneCopy(
            line=line.index,
            front_floor_tag=line.arg(0),
            front_ceiling_tag=line.arg(1),
            back_floor_tag=line.arg(2),
            back_ceiling_tag=line.arg(3),
            share=line.arg(4),
        )

    if special == LineSpecial.SECTOR_SET_3D_FLOOR:
        type_arg = line.arg(1)
        floor_type = Set3dFloorType(type_arg & 0x3)
        tag = line.arg(0)
        # arg 4 is the tag's high byte unless it holds a line id
        if not type_arg & SET3DFLOOR_USE_LINE_ID:
            tag += line.arg(4) << 8
        return Set3dFloor(
            line=line.index,
            target_tag=tag,
            floor_type=floor_type,
            draw_inside=bool(type_arg & SET3DFLOOR_RENDER_INSIDE) or floor_type == Set3dFloorType.SWIMMABLE,
            flags=Set3dFloorFlags(line.arg(2) & 0xFFFF),
            alpha=line.arg(3) / 255.0,
        )

    if special == LineSpecial.TRANSLUCENT_LINE:
        return TranslucentLine(
            line=line.index,
            target_id=line.arg(0),
            alpha=line.arg(1) / 255.0,
            additive=line.arg(2) != 0,
        )

    return None


# ---------------------------------------------------------------------------
# Thing payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LineSlopeThing:
    thing: int
    surface: SurfaceType
    line_id: int


@dataclass(frozen=True)
class SectorTiltThing:
    thing: int
    surface: SurfaceType
    tilt: int


@dataclass(frozen=True)
class VavoomThing:
    thing: int
    surface: SurfaceType
    thing_id: int


@dataclass(frozen=True)
class SlopeCopyThing:
    thing: int
    surface: SurfaceType
    tag: int


@dataclass(frozen=True)
class VertexHeightThing:
    thing: int
    surface: SurfaceType
    height: float


DecodedThing = Union[LineSlopeThing, SectorTiltThing, VavoomThing, SlopeCopyThing, VertexHeightThing]


def decode_thing(thing: MapThing) -> Optional[DecodedThing]:
    """Decode a slope thing, or None for any other thing type."""
    try:
        kind = SlopeThingType(thing.type)
    except ValueError:
        return None

    if kind in (SlopeThingType.LINE_SLOPE_FLOOR, SlopeThingType.LINE_SLOPE_CEILING):
        surface = SurfaceType.FLOOR if kind == SlopeThingType.LINE_SLOPE_FLOOR else SurfaceType.CEILING
        return LineSlopeThing(thing.index, surface, thing.arg(0))

    if kind in (SlopeThingType.SECTOR_TILT_FLOOR, SlopeThingType.SECTOR_TILT_CEILING):
        surface = SurfaceType.FLOOR if kind == SlopeThingType.SECTOR_TILT_FLOOR else SurfaceType.CEILING
        return SectorTiltThing(thing.index, surface, thing.arg(0))

    if kind in (SlopeThingType.VAVOOM_FLOOR, SlopeThingType.VAVOOM_CEILING):
        surface = SurfaceType.FLOOR if kind == SlopeThingType.VAVOOM_FLOOR else SurfaceType.CEILING
        return VavoomThing(thing.index, surface, thing.thing_id)

    if kind in (SlopeThingType.SLOPE_COPY_FLOOR, SlopeThingType.SLOPE_COPY_CEILING):
        surface = SurfaceType.FLOOR if kind == SlopeThingType.SLOPE_COPY_FLOOR else SurfaceType.CEILING
        return SlopeCopyThing(thing.index, surface, thing.arg(0))

    surface = SurfaceType.FLOOR if kind == SlopeThingType.VERTEX_HEIGHT_FLOOR else SurfaceType.CEILING
    return VertexHeightThing(thing.index, surface, thing.height)
