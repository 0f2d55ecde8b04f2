"""
Per-run state for the specials pipeline.

SpecialsState wraps the borrowed MapData together with the transient data
one run builds up and throws away:
- Vertex height overrides recorded by vertex height things
- Decoded line specials / slope things (decoded once per run)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from sector_specials.map.map_data import MapData
from sector_specials.map.map_objects import MapLine, MapThing, SurfaceType
from .decoded import DecodedLineSpecial, DecodedThing, decode_line_special, decode_thing

# vertex index -> overriding surface height
VertexHeightMap = Dict[int, float]


@dataclass(frozen=True)
class TranslucentLineRecord:
    """Render override applied to a line by a TranslucentLine special."""
    source_line: int
    alpha: float
    additive: bool


@dataclass
class SpecialsState:
    """
    State shared by the passes of one specials run.

    Attributes:
        map_data: The map being processed (borrowed, topology read-only)
        vertex_floor_heights: Floor height overrides keyed by vertex index
        vertex_ceiling_heights: Ceiling height overrides keyed by vertex index
        translucent_lines: Translucency records keyed by target line index;
            owned by MapSpecials and kept between runs
    """
    map_data: MapData
    vertex_floor_heights: VertexHeightMap = field(default_factory=dict)
    vertex_ceiling_heights: VertexHeightMap = field(default_factory=dict)
    translucent_lines: Dict[int, TranslucentLineRecord] = field(default_factory=dict)

    _line_specials: Optional[List[Tuple[MapLine, DecodedLineSpecial]]] = field(default=None, repr=False)
    _slope_things: Optional[List[Tuple[MapThing, DecodedThing]]] = field(default=None, repr=False)

    def vertex_heights(self, surface: SurfaceType) -> VertexHeightMap:
        if surface is SurfaceType.FLOOR:
            return self.vertex_floor_heights
        return self.vertex_ceiling_heights

    def line_specials(self) -> List[Tuple[MapLine, DecodedLineSpecial]]:
        """Recognized line specials in line order."""
        if self._line_specials is None:
            self._line_specials = []
            for line in self.map_data.lines:
                decoded = decode_line_special(line)
                if decoded is not None:
                    self._line_specials.append((line, decoded))
        return self._line_specials

    def slope_things(self) -> List[Tuple[MapThing, DecodedThing]]:
        """Recognized slope things in thing order."""
        if self._slope_things is None:
            self._slope_things = []
            for thing in self.map_data.things:
                decoded = decode_thing(thing)
                if decoded is not None:
                    self._slope_things.append((thing, decoded))
        return self._slope_things
