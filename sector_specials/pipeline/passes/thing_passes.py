"""
Slope thing passes.

ZDoom evaluates slope things in three separate passes over the thing list:
1. Line slope (9500/9501), sector tilt (9502/9503) and vavoom (1500/1501)
2. Slope copy (9510/9511)
3. Vertex height (1504/1505), which only records overrides for the
   vertex triangle pass
"""

import logging
import math
from typing import Optional

from sector_specials.conversion.plane_math import add3, distance_to_segment, line_side, EPSILON
from sector_specials.map.map_objects import MapSector, MapThing
from sector_specials.validation.rules import (
    THING_001,
    THING_002,
    THING_003,
    THING_004,
    THING_005,
    THING_006,
    THING_007,
    THING_008,
)
from .base import SpecialsPass, PassConfig, PassResult
from ..decoded import (
    LineSlopeThing,
    SectorTiltThing,
    SlopeCopyThing,
    VavoomThing,
    VertexHeightThing,
)
from ..specials_state import SpecialsState

logger = logging.getLogger(__name__)


def _containing_sector(result: PassResult, thing: MapThing) -> Optional[MapSector]:
    sector = result.state.map_data.sector_at(thing.x, thing.y)
    if sector is None:
        result.add_issue(THING_006, location=f"thing {thing.index}", thing=thing.index)
    return sector


class ThingSlopePass(SpecialsPass):
    """Line slope, sector tilt and vavoom things, in thing order."""

    @property
    def name(self) -> str:
        return "Slope Things"

    @property
    def description(self) -> str:
        return "Apply line slope, sector tilt and vavoom things"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)

        for thing, decoded in state.slope_things():
            if isinstance(decoded, LineSlopeThing):
                self._line_slope(result, thing, decoded)
            elif isinstance(decoded, SectorTiltThing):
                self._sector_tilt(result, thing, decoded)
            elif isinstance(decoded, VavoomThing):
                self._vavoom(result, thing, decoded)

        return result

    # ------------------------------------------------------------------
    # Line slope things
    # ------------------------------------------------------------------

    def _line_slope(self, result: PassResult, thing: MapThing, decoded: LineSlopeThing) -> None:
        """
        Slope the sector on the thing's side of every line with the given id.

        The plane passes through the line endpoints (at the target plane's
        current height there) and through the thing at its absolute height.
        """
        if not decoded.line_id:
            result.add_issue(THING_001, location=f"thing {thing.index}", thing=thing.index)
            return

        map_data = result.state.map_data
        surface = decoded.surface

        # Computed on first use
        containing = None
        thing_z = 0.0

        for line in map_data.lines_with_id(decoded.line_id):
            seg = map_data.line_seg(line)
            side = line_side(thing.position, seg)
            if side > 0:
                target = map_data.front_sector(line)
            elif side < 0:
                target = map_data.back_sector(line)
            else:
                target = None
            if target is None:
                continue

            if containing is None:
                containing = _containing_sector(result, thing)
                if containing is None:
                    return
                thing_z = containing.plane(surface).height_at(thing.x, thing.y) + thing.height

            plane = target.plane(surface)
            (x1, y1), (x2, y2) = seg
            self.fit_plane(
                result,
                target,
                surface,
                [
                    (x1, y1, plane.height_at(x1, y1)),
                    (x2, y2, plane.height_at(x2, y2)),
                    (thing.x, thing.y, thing_z),
                ],
                source=f"line slope thing {thing.index}",
            )

    # ------------------------------------------------------------------
    # Sector tilt things
    # ------------------------------------------------------------------

    def _sector_tilt(self, result: PassResult, thing: MapThing, decoded: SectorTiltThing) -> None:
        target = _containing_sector(result, thing)
        if target is None:
            return

        # 90 is level; 0 and 180 would make the plane vertical
        if decoded.tilt in (0, 180):
            result.add_issue(
                THING_007,
                location=f"thing {thing.index}",
                thing=thing.index,
                tilt=decoded.tilt,
            )
            return

        angle = math.radians(thing.angle)
        tilt = math.radians(decoded.tilt - 90)
        point = (thing.x, thing.y, target.plane_height(decoded.surface) + thing.height)

        # vec1 is the level axis the plane rotates around, vec2 points up the slope
        vec1 = (-math.sin(angle), math.cos(angle), 0.0)
        vec2 = (math.cos(tilt) * math.cos(angle), math.cos(tilt) * math.sin(angle), math.sin(tilt))

        self.fit_plane(
            result,
            target,
            decoded.surface,
            [point, add3(point, vec1), add3(point, vec2)],
            source=f"sector tilt thing {thing.index}",
        )

    # ------------------------------------------------------------------
    # Vavoom things
    # ------------------------------------------------------------------

    def _vavoom(self, result: PassResult, thing: MapThing, decoded: VavoomThing) -> None:
        target = _containing_sector(result, thing)
        if target is None:
            return

        map_data = result.state.map_data
        for line in map_data.sector_lines(target):
            if line.arg(0) != decoded.thing_id:
                continue

            seg = map_data.line_seg(line)
            if distance_to_segment(thing.position, seg) < EPSILON:
                result.add_issue(
                    THING_002,
                    location=f"thing {thing.index}",
                    thing=thing.index,
                    line=line.index,
                )
                return

            # Thing height is absolute; the line sits at the stored height
            height = target.plane_height(decoded.surface)
            (x1, y1), (x2, y2) = seg
            self.fit_plane(
                result,
                target,
                decoded.surface,
                [(thing.x, thing.y, thing.height), (x1, y1, height), (x2, y2, height)],
                source=f"vavoom thing {thing.index}",
            )
            return

        result.add_issue(
            THING_003,
            location=f"thing {thing.index}",
            thing=thing.index,
            tid=decoded.thing_id,
        )


class SlopeCopyThingPass(SpecialsPass):
    """Copy a tagged sector's plane into the sector containing the thing."""

    @property
    def name(self) -> str:
        return "Slope Copy Things"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        map_data = state.map_data

        for thing, decoded in state.slope_things():
            if not isinstance(decoded, SlopeCopyThing):
                continue

            target = _containing_sector(result, thing)
            if target is None:
                continue

            if not decoded.tag:
                result.add_issue(THING_004, location=f"thing {thing.index}", sector=target.index)
                continue

            source = map_data.first_sector_with_tag(decoded.tag)
            if source is None:
                result.add_issue(
                    THING_005,
                    location=f"thing {thing.index}",
                    sector=target.index,
                    tag=decoded.tag,
                )
                continue

            self.copy_plane(result, target, decoded.surface, source.plane(decoded.surface))

        return result


class VertexHeightThingPass(SpecialsPass):
    """
    Record vertex height overrides from vertex height things.

    Overrides live in the run's SpecialsState rather than on the vertices,
    so the map's own vertex properties are never touched.
    """

    @property
    def name(self) -> str:
        return "Vertex Height Things"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        map_data = state.map_data

        for thing, decoded in state.slope_things():
            if not isinstance(decoded, VertexHeightThing):
                continue

            vertex = map_data.vertex_at(thing.x, thing.y)
            if vertex is None:
                result.add_issue(
                    THING_008,
                    location=f"thing {thing.index}",
                    thing=thing.index,
                    x=thing.x,
                    y=thing.y,
                )
                continue
            state.vertex_heights(decoded.surface)[vertex.index] = decoded.height
            result.count("vertex_heights")

        return result
