"""
SRB2 slope line specials.

- 700-703 / 710-713: sector alignment slopes (Plane_Align algorithm)
- 704/705/714/715: vertex slopes through three type-750 things
- 720-722: copied slopes, processed in a second line pass so they see
  every slope set by the first
"""

import logging
from enum import IntEnum
from typing import List, Optional, Tuple

from sector_specials.map.map_objects import MapLine, MapSector, MapSide, SurfaceType
from sector_specials.validation.rules import SRB2_001, SRB2_002, SRB2_003, SRB2_004
from .align_passes import apply_plane_align
from .base import SpecialsPass, PassConfig, PassResult
from ..specials_state import SpecialsState

logger = logging.getLogger(__name__)

FLOOR = SurfaceType.FLOOR
CEILING = SurfaceType.CEILING

# Thing marking one point of a vertex slope
VERTEX_SLOPE_THING = 750
# Line flag: vertex slope things may also match the side's texture offsets
LINE_FLAG_USE_OFFSETS = 8192


class Srb2Special(IntEnum):
    FRONT_FLOOR = 700
    FRONT_CEILING = 701
    FRONT_BOTH = 702
    FRONT_FLOOR_BACK_CEILING = 703
    VERTEX_FRONT_FLOOR = 704
    VERTEX_FRONT_CEILING = 705
    BACK_FLOOR = 710
    BACK_CEILING = 711
    BACK_BOTH = 712
    BACK_FLOOR_FRONT_CEILING = 713
    VERTEX_BACK_FLOOR = 714
    VERTEX_BACK_CEILING = 715
    COPY_FLOOR = 720
    COPY_CEILING = 721
    COPY_BOTH = 722


# special -> (surface, target is front) for each alignment it applies
ALIGNMENTS = {
    Srb2Special.FRONT_FLOOR: [(FLOOR, True)],
    Srb2Special.FRONT_CEILING: [(CEILING, True)],
    Srb2Special.FRONT_BOTH: [(FLOOR, True), (CEILING, True)],
    Srb2Special.FRONT_FLOOR_BACK_CEILING: [(FLOOR, True), (CEILING, False)],
    Srb2Special.BACK_FLOOR: [(FLOOR, False)],
    Srb2Special.BACK_CEILING: [(CEILING, False)],
    Srb2Special.BACK_BOTH: [(FLOOR, False), (CEILING, False)],
    Srb2Special.BACK_FLOOR_FRONT_CEILING: [(FLOOR, False), (CEILING, True)],
}

# special -> (surface, target is front)
VERTEX_SLOPES = {
    Srb2Special.VERTEX_FRONT_FLOOR: (FLOOR, True),
    Srb2Special.VERTEX_FRONT_CEILING: (CEILING, True),
    Srb2Special.VERTEX_BACK_FLOOR: (FLOOR, False),
    Srb2Special.VERTEX_BACK_CEILING: (CEILING, False),
}

COPIES = {
    Srb2Special.COPY_FLOOR: (FLOOR,),
    Srb2Special.COPY_CEILING: (CEILING,),
    Srb2Special.COPY_BOTH: (FLOOR, CEILING),
}


class Srb2SlopePass(SpecialsPass):
    """Alignment and vertex slope specials, in line order."""

    @property
    def name(self) -> str:
        return "SRB2 Slopes"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        map_data = state.map_data

        for line in map_data.lines:
            front = map_data.front_sector(line)
            back = map_data.back_sector(line)

            if line.special in ALIGNMENTS:
                for surface, target_front in ALIGNMENTS[line.special]:
                    if target_front:
                        apply_plane_align(result, line, surface, target=front, model=back)
                    else:
                        apply_plane_align(result, line, surface, target=back, model=front)

            elif line.special in VERTEX_SLOPES:
                surface, target_front = VERTEX_SLOPES[line.special]
                self._vertex_slope(result, line, surface, front if target_front else back)

        return result

    def _vertex_slope(
        self,
        result: PassResult,
        line: MapLine,
        surface: SurfaceType,
        target: Optional[MapSector],
    ) -> None:
        if target is None:
            result.add_issue(SRB2_001, location=f"line {line.index}", line=line.index)
            return

        points = self._vertex_slope_points(result.state, line, target)
        if len(points) < 3:
            result.add_issue(SRB2_002, location=f"line {line.index}", line=line.index)
            return

        self.fit_plane(result, target, surface, points, source=f"vertex slope line {line.index}")

    @staticmethod
    def _target_side(state: SpecialsState, line: MapLine, target: MapSector) -> Optional[MapSide]:
        front_side = state.map_data.front_side(line)
        if front_side is not None and front_side.sector == target.index:
            return front_side
        return state.map_data.back_side(line)

    def _vertex_slope_points(
        self,
        state: SpecialsState,
        line: MapLine,
        target: MapSector,
    ) -> List[Tuple[float, float, float]]:
        """Positions of the first three vertex slope things matching [line]."""
        wanted = {line.line_id}
        if line.flags & LINE_FLAG_USE_OFFSETS:
            side = self._target_side(state, line, target)
            if side is not None:
                wanted.update((side.offset_x, side.offset_y))

        points = []
        for thing in state.map_data.things:
            if thing.type != VERTEX_SLOPE_THING or thing.angle not in wanted:
                continue
            points.append((thing.x, thing.y, thing.height))
            if len(points) == 3:
                break
        return points


class Srb2CopySlopePass(SpecialsPass):
    """Copied slopes: front sector takes the planes of the sector tagged with the line id."""

    @property
    def name(self) -> str:
        return "SRB2 Copied Slopes"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        map_data = state.map_data

        for line in map_data.lines:
            if line.special not in COPIES:
                continue

            front = map_data.front_sector(line)
            if front is None:
                result.add_issue(SRB2_003, location=f"line {line.index}", line=line.index)
                continue

            source = map_data.first_sector_with_tag(line.line_id)
            if source is None:
                result.add_issue(
                    SRB2_004,
                    location=f"line {line.index}",
                    line=line.index,
                    tag=line.line_id,
                )
                continue

            for surface in COPIES[line.special]:
                self.copy_plane(result, front, surface, source.plane(surface))

        return result
