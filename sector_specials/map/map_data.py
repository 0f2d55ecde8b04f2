"""
Index-based map container.

MapData owns flat lists of vertices, sides, lines, sectors and things.
Relations (front/back sector, sector boundary lines, sector vertices) are
resolved by index lookups, so there are no ownership cycles. Iteration order
of every list is creation order; the slope solvers rely on it to break ties.
"""

import logging
from typing import Dict, List, Optional, Tuple

from sector_specials.conversion.plane_math import Seg2, EPSILON
from .map_objects import MapLine, MapSector, MapSide, MapThing, MapVertex

logger = logging.getLogger(__name__)


class MapData:
    """
    Container for one map's geometry and entities.

    Mutation of the collections (add_*) is only expected while building the
    map; the specials pipeline treats the topology as read-only.
    """

    def __init__(self):
        self.vertices: List[MapVertex] = []
        self.sides: List[MapSide] = []
        self.lines: List[MapLine] = []
        self.sectors: List[MapSector] = []
        self.things: List[MapThing] = []

        # Lazily built sector -> boundary line indices
        self._sector_lines: Optional[Dict[int, List[int]]] = None

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def add_vertex(self, vertex: MapVertex) -> MapVertex:
        vertex.index = len(self.vertices)
        self.vertices.append(vertex)
        return vertex

    def add_side(self, side: MapSide) -> MapSide:
        side.index = len(self.sides)
        self.sides.append(side)
        self._sector_lines = None
        return side

    def add_line(self, line: MapLine) -> MapLine:
        line.index = len(self.lines)
        self.lines.append(line)
        self._sector_lines = None
        return line

    def add_sector(self, sector: MapSector) -> MapSector:
        sector.index = len(self.sectors)
        self.sectors.append(sector)
        return sector

    def add_thing(self, thing: MapThing) -> MapThing:
        thing.index = len(self.things)
        self.things.append(thing)
        return thing

    # ------------------------------------------------------------------
    # Line relations
    # ------------------------------------------------------------------

    def line_start(self, line: MapLine) -> Tuple[float, float]:
        return self.vertices[line.v1].position

    def line_end(self, line: MapLine) -> Tuple[float, float]:
        return self.vertices[line.v2].position

    def line_seg(self, line: MapLine) -> Seg2:
        return (self.line_start(line), self.line_end(line))

    def _side_sector(self, side_index: Optional[int]) -> Optional[MapSector]:
        if side_index is None or side_index < 0 or side_index >= len(self.sides):
            return None
        sector_index = self.sides[side_index].sector
        if sector_index is None or sector_index < 0 or sector_index >= len(self.sectors):
            return None
        return self.sectors[sector_index]

    def front_sector(self, line: MapLine) -> Optional[MapSector]:
        return self._side_sector(line.side1)

    def back_sector(self, line: MapLine) -> Optional[MapSector]:
        return self._side_sector(line.side2)

    def front_side(self, line: MapLine) -> Optional[MapSide]:
        return self.sides[line.side1] if line.side1 is not None else None

    def back_side(self, line: MapLine) -> Optional[MapSide]:
        return self.sides[line.side2] if line.side2 is not None else None

    # ------------------------------------------------------------------
    # Sector relations
    # ------------------------------------------------------------------

    def _build_sector_lines(self) -> Dict[int, List[int]]:
        mapping: Dict[int, List[int]] = {}
        for line in self.lines:
            for side_index in (line.side1, line.side2):
                sector = self._side_sector(side_index)
                if sector is None:
                    continue
                indices = mapping.setdefault(sector.index, [])
                if not indices or indices[-1] != line.index:
                    indices.append(line.index)
        return mapping

    def sector_lines(self, sector: MapSector) -> List[MapLine]:
        """Lines with a side in [sector], in line order."""
        if self._sector_lines is None:
            self._sector_lines = self._build_sector_lines()
        return [self.lines[i] for i in self._sector_lines.get(sector.index, [])]

    def sector_vertices(self, sector: MapSector) -> List[MapVertex]:
        """Distinct boundary vertices of [sector], in first-seen order."""
        seen = []
        for line in self.sector_lines(sector):
            for vertex_index in (line.v1, line.v2):
                if vertex_index not in seen:
                    seen.append(vertex_index)
        return [self.vertices[i] for i in seen]

    def sector_bbox(self, sector: MapSector) -> Optional[Tuple[float, float, float, float]]:
        vertices = self.sector_vertices(sector)
        if not vertices:
            return None
        xs = [v.x for v in vertices]
        ys = [v.y for v in vertices]
        return (min(xs), min(ys), max(xs), max(ys))

    def sector_midpoint(self, sector: MapSector) -> Tuple[float, float]:
        bbox = self.sector_bbox(sector)
        if bbox is None:
            return (0.0, 0.0)
        return ((bbox[0] + bbox[2]) / 2.0, (bbox[1] + bbox[3]) / 2.0)

    def sector_contains(self, sector: MapSector, x: float, y: float) -> bool:
        """Even-odd containment test against the sector's boundary lines."""
        bbox = self.sector_bbox(sector)
        if bbox is None:
            return False
        if x < bbox[0] or x > bbox[2] or y < bbox[1] or y > bbox[3]:
            return False

        inside = False
        for line in self.sector_lines(sector):
            # Lines with this sector on both sides do not bound it
            if self.front_sector(line) is self.back_sector(line):
                continue
            (x1, y1), (x2, y2) = self.line_seg(line)
            if (y1 > y) != (y2 > y):
                cross_x = x1 + (y - y1) * (x2 - x1) / (y2 - y1)
                if x < cross_x:
                    inside = not inside
        return inside

    # ------------------------------------------------------------------
    # Tagged / spatial lookups
    # ------------------------------------------------------------------

    def sectors_with_tag(self, tag: int) -> List[MapSector]:
        if tag == 0:
            return []
        return [s for s in self.sectors if s.tag == tag]

    def first_sector_with_tag(self, tag: int) -> Optional[MapSector]:
        if tag == 0:
            return None
        for sector in self.sectors:
            if sector.tag == tag:
                return sector
        return None

    def lines_with_id(self, line_id: int) -> List[MapLine]:
        if line_id == 0:
            return []
        return [l for l in self.lines if l.line_id == line_id]

    def sector_at(self, x: float, y: float) -> Optional[MapSector]:
        """First sector (in sector order) containing the point, or None."""
        for sector in self.sectors:
            if self.sector_contains(sector, x, y):
                return sector
        return None

    def vertex_at(self, x: float, y: float) -> Optional[MapVertex]:
        """First vertex at exactly (x, y), or None."""
        for vertex in self.vertices:
            if abs(vertex.x - x) < EPSILON and abs(vertex.y - y) < EPSILON:
                return vertex
        return None

    def reset_planes(self) -> None:
        for sector in self.sectors:
            sector.reset_planes()
