"""
Plane baseline passes.

- ResetPlanesPass: every sector surface back to a flat plane at its
  stored height. First step of every slope sequence.
- UdmfPlanePropertiesPass: explicit floorplane_* / ceilingplane_* sector
  properties.
"""

import logging
from typing import Any, Dict

from sector_specials.conversion.plane_math import Plane
from sector_specials.map.map_objects import MapSector, SurfaceType
from sector_specials.validation.rules import PLANE_001
from .base import SpecialsPass, PassConfig, PassResult
from ..specials_state import SpecialsState

logger = logging.getLogger(__name__)

# A plane equal to this (after sign correction) is treated as unset
UNSET_PLANE = Plane(0.0, 0.0, -1.0, 0.0)


class ResetPlanesPass(SpecialsPass):
    """Reset every sector's floor and ceiling plane to flat."""

    @property
    def name(self) -> str:
        return "Reset Planes"

    @property
    def description(self) -> str:
        return "Reset every sector surface to a flat plane at its stored height"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        state.map_data.reset_planes()
        result.metrics["sectors_reset"] = len(state.map_data.sectors)
        return result


class UdmfPlanePropertiesPass(SpecialsPass):
    """
    Apply plane coefficients stored as UDMF sector properties.

    The a, b and c components are negated to convert from the port's plane
    convention. A surface is only set when all four components are present.
    """

    @property
    def name(self) -> str:
        return "UDMF Plane Properties"

    @property
    def description(self) -> str:
        return "Apply floorplane_* / ceilingplane_* sector properties"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        for sector in state.map_data.sectors:
            for surface in (SurfaceType.FLOOR, SurfaceType.CEILING):
                self._apply(result, sector, surface)
        return result

    def _apply(self, result: PassResult, sector: MapSector, surface: SurfaceType) -> None:
        prefix = f"{surface.value}plane_"
        props: Dict[str, Any] = sector.properties
        if not all(prefix + k in props for k in "abcd"):
            return

        plane = Plane(
            a=-float(props[prefix + "a"]),
            b=-float(props[prefix + "b"]),
            c=-float(props[prefix + "c"]),
            d=float(props[prefix + "d"]),
        )
        if plane == UNSET_PLANE:
            return
        if plane.is_vertical:
            result.add_issue(
                PLANE_001,
                location=f"sector {sector.index}",
                surface=surface.value,
                sector=sector.index,
                source=f"{prefix}* properties",
            )
            return

        sector.set_plane(surface, plane)
        result.count("planes_written")
