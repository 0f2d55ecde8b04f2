"""
Vertex height slopes.

- VertexTriangleSlopePass: sectors with exactly three vertices, sloped
  through per-vertex heights (vertex height things, then zfloor/zceiling
  vertex properties)
- EdgeRectangularSlopePass: EDGE-Classic, which also accepts four vertex
  sectors with one raised or lowered edge
"""

import logging
from typing import List, Optional

from sector_specials.conversion.plane_math import colinear, distance_to_line
from sector_specials.map.map_objects import MapSector, MapVertex, SurfaceType
from .align_passes import MIN_ALIGN_DISTANCE
from .base import SpecialsPass, PassConfig, PassResult
from ..specials_state import SpecialsState, VertexHeightMap

logger = logging.getLogger(__name__)

# Two edge vertex heights closer than this count as equal
EDGE_HEIGHT_TOLERANCE = 0.001


def explicit_vertex_height(
    vertex: MapVertex,
    surface: SurfaceType,
    overrides: VertexHeightMap,
) -> Optional[float]:
    """Override height for [vertex], else its UDMF height property, else None."""
    if vertex.index in overrides:
        return overrides[vertex.index]
    prop = surface.vertex_height_property
    if prop in vertex.properties:
        return float(vertex.properties[prop])
    return None


class VertexTriangleSlopePass(SpecialsPass):
    """
    Slope triangular sectors through their vertex heights.

    Vertices without an explicit height use the sector's current plane
    height at that vertex. A surface with no explicit vertex height is left
    as it is.

    Options:
        use_overrides: Consult vertex height thing overrides (default True)
    """

    @property
    def name(self) -> str:
        return "Vertex Triangle Slopes"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        use_overrides = config.options.get("use_overrides", True)

        for sector in state.map_data.sectors:
            vertices = state.map_data.sector_vertices(sector)
            if len(vertices) != 3:
                continue
            for surface in (SurfaceType.FLOOR, SurfaceType.CEILING):
                overrides = state.vertex_heights(surface) if use_overrides else {}
                self.apply_vertex_heights(result, sector, surface, vertices, overrides)

        return result

    def apply_vertex_heights(
        self,
        result: PassResult,
        sector: MapSector,
        surface: SurfaceType,
        vertices: List[MapVertex],
        overrides: VertexHeightMap,
    ) -> None:
        heights = [explicit_vertex_height(v, surface, overrides) for v in vertices]
        if all(h is None for h in heights):
            return

        plane = sector.plane(surface)
        points = []
        for vertex, height in zip(vertices, heights):
            if height is None:
                height = plane.height_at(vertex.x, vertex.y)
            points.append((vertex.x, vertex.y, height))

        self.fit_plane(result, sector, surface, points, source=f"vertex heights of sector {sector.index}")


class EdgeRectangularSlopePass(SpecialsPass):
    """
    EDGE-Classic vertex slopes.

    Triangles behave as in VertexTriangleSlopePass using vertex properties
    only. A four vertex sector is sloped when exactly two of its vertices
    have an equal height and share a line: the slope runs from that edge to
    the furthest other vertex, which stays at the sector's stored height.
    """

    @property
    def name(self) -> str:
        return "EDGE-Classic Vertex Slopes"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        triangles = VertexTriangleSlopePass()

        for sector in state.map_data.sectors:
            vertices = state.map_data.sector_vertices(sector)
            for surface in (SurfaceType.FLOOR, SurfaceType.CEILING):
                if len(vertices) == 3:
                    triangles.apply_vertex_heights(result, sector, surface, vertices, {})
                elif len(vertices) == 4:
                    self._apply_rectangular(result, sector, surface, vertices)

        return result

    def _apply_rectangular(
        self,
        result: PassResult,
        sector: MapSector,
        surface: SurfaceType,
        vertices: List[MapVertex],
    ) -> None:
        with_height = [(v, explicit_vertex_height(v, surface, {})) for v in vertices]
        with_height = [(v, h) for v, h in with_height if h is not None]
        if len(with_height) != 2:
            return

        (v1, z1), (v2, z2) = with_height
        if not self._share_line(result.state, v1, v2):
            return
        if abs(z1 - z2) >= EDGE_HEIGHT_TOLERANCE:
            return

        seg = (v1.position, v2.position)
        furthest = None
        furthest_dist = 0.0
        for vertex in vertices:
            if colinear(vertex.position, seg):
                continue
            dist = distance_to_line(vertex.position, seg)
            if dist > furthest_dist:
                furthest = vertex
                furthest_dist = dist
        if furthest is None or furthest_dist < MIN_ALIGN_DISTANCE:
            return

        target_z = sector.plane_height(surface)
        self.fit_plane(
            result,
            sector,
            surface,
            [(v1.x, v1.y, z1), (v2.x, v2.y, z1), (furthest.x, furthest.y, target_z)],
            source=f"vertex heights of sector {sector.index}",
        )

    @staticmethod
    def _share_line(state: SpecialsState, v1: MapVertex, v2: MapVertex) -> bool:
        for line in state.map_data.lines:
            if {line.v1, line.v2} == {v1.index, v2.index}:
                return True
        return False
