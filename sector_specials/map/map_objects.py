"""
Map object data structures.

This module defines the entities the specials pipeline reads and writes:
- Vertices, sides, lines, sectors and things of a 2D sector map
- Sector surfaces (stored height plus the derived slope plane)
- ExtraFloor entries (3D floors stacked inside a sector)

All cross references are integer indices into the owning MapData lists.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag
from typing import Any, Dict, List, Optional, Tuple

from sector_specials.conversion.plane_math import Plane


class SurfaceType(Enum):
    """Which sector surface a special applies to."""
    FLOOR = "floor"
    CEILING = "ceiling"

    @property
    def vertex_height_property(self) -> str:
        """UDMF vertex property overriding this surface's height."""
        return "zfloor" if self is SurfaceType.FLOOR else "zceiling"


@dataclass
class SectorSurface:
    """
    Floor or ceiling of a sector.

    Attributes:
        height: Stored integer height
        texture: Flat texture name
        plane: Derived plane, rebuilt by every specials run
    """
    height: int = 0
    texture: str = "-"
    plane: Plane = None

    def __post_init__(self):
        if self.plane is None:
            self.plane = Plane.flat(self.height)


@dataclass
class MapVertex:
    x: float
    y: float
    properties: Dict[str, Any] = field(default_factory=dict)
    index: int = -1

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class MapSide:
    sector: int
    offset_x: int = 0
    offset_y: int = 0
    properties: Dict[str, Any] = field(default_factory=dict)
    index: int = -1


@dataclass
class MapLine:
    """
    Map line with up to two sides.

    Attributes:
        v1, v2: Start and end vertex indices
        side1: Front side index (None for a missing front)
        side2: Back side index (None for one-sided lines)
        special: Action special code (0 = none)
        args: Five integer special arguments
        line_id: Line id used by tagged lookups
        flags: Line flag bitmask
        properties: Extra properties (render overrides are written here)
    """
    v1: int
    v2: int
    side1: Optional[int] = None
    side2: Optional[int] = None
    special: int = 0
    args: List[int] = field(default_factory=lambda: [0] * 5)
    line_id: int = 0
    flags: int = 0
    properties: Dict[str, Any] = field(default_factory=dict)
    index: int = -1

    def arg(self, n: int) -> int:
        return self.args[n] if n < len(self.args) else 0


@dataclass
class MapThing:
    """
    Point entity.

    Attributes:
        type: Thing type code (selects the slope mechanism)
        x, y: Map position
        angle: Facing angle in degrees
        height: Height property; sector-relative or absolute depending on type
        args: Five integer arguments
        thing_id: Thing id (TID)
    """
    type: int
    x: float
    y: float
    angle: int = 0
    height: float = 0.0
    args: List[int] = field(default_factory=lambda: [0] * 5)
    thing_id: int = 0
    properties: Dict[str, Any] = field(default_factory=dict)
    index: int = -1

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def arg(self, n: int) -> int:
        return self.args[n] if n < len(self.args) else 0


class Set3dFloorType(IntEnum):
    """Low two bits of the Sector_Set3dFloor type argument."""
    VAVOOM = 0
    SOLID = 1
    SWIMMABLE = 2
    NON_SOLID = 3


class Set3dFloorFlags(IntFlag):
    """Render flags (third argument) of Sector_Set3dFloor."""
    NONE = 0
    DISABLE_LIGHTING = 1
    LIGHTING_INSIDE_ONLY = 2
    FOG = 4
    FLOOR_AT_CEILING = 8
    USE_UPPER_TEXTURE = 16
    USE_LOWER_TEXTURE = 32
    TRANS_ADD = 64
    FADE = 512
    RESET_LIGHTING = 1024


@dataclass
class ExtraFloor:
    """
    3D floor stacked inside a target sector.

    Plane snapshots are taken from the control sector when the entry is
    built, so later edits to the control sector need another specials run.

    Attributes:
        control_sector: Index of the sector providing the geometry
        control_line: Index of the line carrying the special
        floor_type: Two-bit floor type
        alpha: Opacity, 0..1
        draw_inside: Render the inside faces
        flags: Render flags bitmask
        floor_plane: Control sector floor plane at creation
        ceiling_plane: Control sector ceiling plane at creation
        height: Top surface height at the target sector's midpoint
    """
    control_sector: int
    control_line: int
    floor_type: Set3dFloorType
    alpha: float
    draw_inside: bool
    flags: Set3dFloorFlags
    floor_plane: Plane
    ceiling_plane: Plane
    height: float = 0.0

    @property
    def is_flipped(self) -> bool:
        return self.floor_type == Set3dFloorType.VAVOOM

    @property
    def is_solid(self) -> bool:
        return self.floor_type in (Set3dFloorType.SOLID, Set3dFloorType.VAVOOM)

    @property
    def plane_top(self) -> Plane:
        return self.floor_plane if self.is_flipped else self.ceiling_plane

    @property
    def plane_bottom(self) -> Plane:
        return self.ceiling_plane if self.is_flipped else self.floor_plane

    def has_flag(self, flag: Set3dFloorFlags) -> bool:
        return bool(self.flags & flag)


@dataclass
class MapSector:
    floor: SectorSurface = field(default_factory=SectorSurface)
    ceiling: SectorSurface = field(default_factory=lambda: SectorSurface(height=128))
    tag: int = 0
    light: int = 160
    properties: Dict[str, Any] = field(default_factory=dict)
    extra_floors: List[ExtraFloor] = field(default_factory=list)
    modified: bool = False
    index: int = -1

    def surface(self, surface_type: SurfaceType) -> SectorSurface:
        return self.floor if surface_type is SurfaceType.FLOOR else self.ceiling

    def plane(self, surface_type: SurfaceType) -> Plane:
        return self.surface(surface_type).plane

    def set_plane(self, surface_type: SurfaceType, plane: Plane) -> None:
        self.surface(surface_type).plane = plane

    def plane_height(self, surface_type: SurfaceType) -> int:
        """Stored (flat) height of a surface."""
        return self.surface(surface_type).height

    def set_surface_height(self, surface_type: SurfaceType, height: int) -> None:
        """Edit the stored height; the plane goes back to flat."""
        surface = self.surface(surface_type)
        surface.height = height
        surface.plane = Plane.flat(height)

    def reset_planes(self) -> None:
        self.floor.plane = Plane.flat(self.floor.height)
        self.ceiling.plane = Plane.flat(self.ceiling.height)
