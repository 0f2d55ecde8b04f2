"""
Plane_Copy (line special 118).

Runs last in the slope sequences so it can copy slopes produced by any
earlier mechanism.
"""

import logging

from sector_specials.map.map_objects import SurfaceType
from sector_specials.validation.rules import COPY_001
from .base import SpecialsPass, PassConfig, PassResult
from ..decoded import PlaneCopy
from ..specials_state import SpecialsState

logger = logging.getLogger(__name__)

# Share argument masks
SHARE_FLOOR_MASK = 0x3
SHARE_CEILING_MASK = 0xC
SHARE_FLOOR_FRONT_TO_BACK = 0x1
SHARE_FLOOR_BACK_TO_FRONT = 0x2
SHARE_CEILING_FRONT_TO_BACK = 0x4
SHARE_CEILING_BACK_TO_FRONT = 0x8


class PlaneCopyPass(SpecialsPass):
    """
    Copy planes from tagged sectors, then share them across the line.

    Arguments 0-3 are the source tags for the front floor, front ceiling,
    back floor and back ceiling. Argument 4 is the share mask, applied after
    the tagged copies.
    """

    @property
    def name(self) -> str:
        return "Plane_Copy"

    @property
    def description(self) -> str:
        return "Copy planes from tagged sectors and share them across lines"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        map_data = state.map_data

        for line, special in state.line_specials():
            if not isinstance(special, PlaneCopy):
                continue

            front = map_data.front_sector(line)
            back = map_data.back_sector(line)

            slots = (
                ("front floor", special.front_floor_tag, front, SurfaceType.FLOOR),
                ("front ceiling", special.front_ceiling_tag, front, SurfaceType.CEILING),
                ("back floor", special.back_floor_tag, back, SurfaceType.FLOOR),
                ("back ceiling", special.back_ceiling_tag, back, SurfaceType.CEILING),
            )
            for slot, tag, target, surface in slots:
                if not tag or target is None:
                    continue
                source = map_data.first_sector_with_tag(tag)
                if source is None:
                    result.add_issue(
                        COPY_001,
                        location=f"line {line.index}",
                        slot=slot,
                        line=line.index,
                        tag=tag,
                    )
                    continue
                self.copy_plane(result, target, surface, source.plane(surface))

            if front is None or back is None:
                continue

            share = special.share
            if share & SHARE_FLOOR_MASK == SHARE_FLOOR_FRONT_TO_BACK:
                self.copy_plane(result, back, SurfaceType.FLOOR, front.floor.plane)
            elif share & SHARE_FLOOR_MASK == SHARE_FLOOR_BACK_TO_FRONT:
                self.copy_plane(result, front, SurfaceType.FLOOR, back.floor.plane)

            if share & SHARE_CEILING_MASK == SHARE_CEILING_FRONT_TO_BACK:
                self.copy_plane(result, back, SurfaceType.CEILING, front.ceiling.plane)
            elif share & SHARE_CEILING_MASK == SHARE_CEILING_BACK_TO_FRONT:
                self.copy_plane(result, front, SurfaceType.CEILING, back.ceiling.plane)

        return result
