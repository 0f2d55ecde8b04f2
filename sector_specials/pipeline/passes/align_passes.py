"""
Plane_Align (line special 181).

The slope runs between the special's line (at the model sector's height)
and the target sector vertex furthest from that line (at the target's own
height). The same routine drives the SRB2 alignment specials.
"""

import logging
from typing import Optional

from sector_specials.conversion.plane_math import colinear, distance_to_line
from sector_specials.map.map_objects import MapLine, MapSector, MapVertex, SurfaceType
from sector_specials.validation.rules import ALIGN_001, ALIGN_002, ALIGN_003
from .base import SpecialsPass, PassConfig, PassResult
from ..decoded import Alignment, PlaneAlign
from ..specials_state import SpecialsState

logger = logging.getLogger(__name__)

# Reference vertices closer to the line than this are rejected
MIN_ALIGN_DISTANCE = 0.01


def furthest_vertex(map_data, sector: MapSector, line: MapLine) -> Optional[MapVertex]:
    """
    Vertex of [sector] furthest from the infinite line through [line].

    Vertices colinear with the line are skipped; on ties the first vertex in
    sector vertex order wins. Returns None when no vertex is at least
    MIN_ALIGN_DISTANCE away.
    """
    seg = map_data.line_seg(line)
    best = None
    best_dist = 0.0
    for vertex in map_data.sector_vertices(sector):
        if colinear(vertex.position, seg):
            continue
        dist = distance_to_line(vertex.position, seg)
        if dist > best_dist:
            best = vertex
            best_dist = dist

    if best is None or best_dist < MIN_ALIGN_DISTANCE:
        return None
    return best


def apply_plane_align(
    result: PassResult,
    line: MapLine,
    surface: SurfaceType,
    target: Optional[MapSector],
    model: Optional[MapSector],
) -> None:
    """Slope [target]'s [surface] from [line] at [model]'s height."""
    map_data = result.state.map_data
    if target is None or model is None:
        result.add_issue(ALIGN_001, location=f"line {line.index}", line=line.index)
        return

    vertex = furthest_vertex(map_data, target, line)
    if vertex is None:
        result.add_issue(
            ALIGN_003,
            location=f"line {line.index}",
            line=line.index,
            sector=target.index,
        )
        return

    model_z = model.plane_height(surface)
    target_z = target.plane_height(surface)
    (x1, y1), (x2, y2) = map_data.line_seg(line)
    SpecialsPass.fit_plane(
        result,
        target,
        surface,
        [(x1, y1, model_z), (x2, y2, model_z), (vertex.x, vertex.y, target_z)],
        source=f"Plane_Align on line {line.index}",
    )


class PlaneAlignPass(SpecialsPass):
    """Process every Plane_Align line, in line order."""

    @property
    def name(self) -> str:
        return "Plane_Align"

    @property
    def description(self) -> str:
        return "Slope sectors from Plane_Align lines"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        map_data = state.map_data

        for line, special in state.line_specials():
            if not isinstance(special, PlaneAlign):
                continue

            front = map_data.front_sector(line)
            back = map_data.back_sector(line)
            if front is None or back is None:
                result.add_issue(ALIGN_001, location=f"line {line.index}", line=line.index)
                continue
            if front is back:
                result.add_issue(ALIGN_002, location=f"line {line.index}", line=line.index)
                continue

            for surface, alignment in ((SurfaceType.FLOOR, special.floor), (SurfaceType.CEILING, special.ceiling)):
                if alignment == Alignment.FRONT:
                    apply_plane_align(result, line, surface, target=back, model=front)
                elif alignment == Alignment.BACK:
                    apply_plane_align(result, line, surface, target=front, model=back)
            result.count("lines_processed")

        return result
