"""
MapSpecials - derived map state from line specials, things and scripts.

Selects the slope sequence for the configured port profile and runs its
passes in order, followed (for ZDoom) by the per-line effect processor.
Also holds the sector colours read from ACS scripts and the translucent
line records, which outlive a single run.

Usage:
    specials = MapSpecials(PROFILE_CATALOG.get_profile("ZDoom"))
    specials.process_map_specials(map_data)
    specials.process_acs_scripts(script_text)
"""

import logging
from typing import Dict, List, Optional, Union

from sector_specials.map.map_data import MapData
from sector_specials.map.map_objects import ExtraFloor, MapLine, MapSector
from sector_specials.profiles.port_profile import PortProfile
from sector_specials.scripting.acs_colours import (
    Colour,
    SectorColour,
    find_colour,
    scan_open_script_colours,
)
from sector_specials.validation.core import SpecialsReport
from .passes import (
    EdgeRectangularSlopePass,
    LineEffectsPass,
    PassConfig,
    PlaneAlignPass,
    PlaneCopyPass,
    ResetPlanesPass,
    SlopeCopyThingPass,
    SpecialsPass,
    Srb2CopySlopePass,
    Srb2SlopePass,
    ThingSlopePass,
    UdmfPlanePropertiesPass,
    VertexHeightThingPass,
    VertexTriangleSlopePass,
)
from .specials_state import SpecialsState, TranslucentLineRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Slope sequences
# ---------------------------------------------------------------------------

def zdoom_slope_passes() -> List[SpecialsPass]:
    return [
        ResetPlanesPass(),
        UdmfPlanePropertiesPass(),
        PlaneAlignPass(),
        ThingSlopePass(),
        SlopeCopyThingPass(),
        VertexHeightThingPass(),
        VertexTriangleSlopePass(),
        PlaneCopyPass(),
    ]


def eternity_slope_passes() -> List[SpecialsPass]:
    return [
        ResetPlanesPass(),
        PlaneAlignPass(),
        PlaneCopyPass(),
    ]


def srb2_slope_passes() -> List[SpecialsPass]:
    return [
        ResetPlanesPass(),
        Srb2SlopePass(),
        Srb2CopySlopePass(),
    ]


def edge_classic_slope_passes() -> List[SpecialsPass]:
    return [
        ResetPlanesPass(),
        EdgeRectangularSlopePass(),
    ]


class MapSpecials:
    """
    Processes map specials for one port profile.

    Public calls return None; diagnostics of the most recent call are kept
    on ``last_report``.
    """

    def __init__(self, profile: PortProfile):
        self.profile = profile
        self.last_report = SpecialsReport(profile=profile.name)

        self._tag_colours: List[SectorColour] = []
        self._tag_fade_colours: List[SectorColour] = []
        self._translucent_lines: Dict[int, TranslucentLineRecord] = {}
        self._translucent_map: Optional[MapData] = None

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Clear script colours and translucent line records."""
        self._tag_colours = []
        self._tag_fade_colours = []
        self._translucent_lines = {}
        self._translucent_map = None

    def slope_passes(self) -> List[SpecialsPass]:
        """Slope sequence for the profile; empty when the port has none."""
        if self.profile.port == "zdoom":
            return zdoom_slope_passes()
        if self.profile.port == "eternity":
            return eternity_slope_passes()
        if self.profile.game == "srb2":
            return srb2_slope_passes()
        if self.profile.port == "edge_classic":
            return edge_classic_slope_passes()
        return []

    @property
    def processes_line_specials(self) -> bool:
        return self.profile.port == "zdoom"

    def process_map_specials(self, map_data: MapData) -> None:
        """Recompute every slope plane and (ZDoom) line effect of [map_data]."""
        passes = self.slope_passes()
        if self.processes_line_specials:
            passes.append(LineEffectsPass())
        if not passes:
            logger.debug("No map specials for port '%s'", self.profile.port)

        state = self._new_state(map_data)
        self.last_report = self._run(state, passes, PassConfig())

    def process_line_special(self, map_data: MapData, line: Union[MapLine, int]) -> None:
        """Rebuild the 3D floors and translucency produced by a single line."""
        if not self.processes_line_specials:
            return
        if isinstance(line, int):
            line = map_data.lines[line]

        state = self._new_state(map_data)
        config = PassConfig(options={"lines": [line]})
        self.last_report = self._run(state, [LineEffectsPass()], config)

    def process_acs_scripts(self, script_text: Optional[str]) -> None:
        """Replace the tag colour tables with the colours set by OPEN scripts."""
        colours = scan_open_script_colours(script_text)
        self._tag_colours = colours.tints
        self._tag_fade_colours = colours.fades
        self.last_report = SpecialsReport(issues=list(colours.issues), profile=self.profile.name)

    def _new_state(self, map_data: MapData) -> SpecialsState:
        # Records from another map refer to line indices that mean nothing here
        if self._translucent_map is not map_data:
            self._translucent_lines = {}
            self._translucent_map = map_data
        return SpecialsState(map_data=map_data, translucent_lines=self._translucent_lines)

    def _run(self, state: SpecialsState, passes: List[SpecialsPass], config: PassConfig) -> SpecialsReport:
        report = SpecialsReport(profile=self.profile.name)
        for specials_pass in passes:
            result = specials_pass.run(state, config)
            report.issues.extend(result.issues)
        logger.debug("Processed specials (%s): %d issue(s)", self.profile.name, len(report.issues))
        return report

    # ------------------------------------------------------------------
    # Sector colours
    # ------------------------------------------------------------------

    def tag_colour(self, tag: int) -> Optional[Colour]:
        return find_colour(self._tag_colours, tag)

    def tag_fade_colour(self, tag: int) -> Optional[Colour]:
        return find_colour(self._tag_fade_colours, tag)

    def has_any_tag_colours(self) -> bool:
        return bool(self._tag_colours)

    def has_any_tag_fade_colours(self) -> bool:
        return bool(self._tag_fade_colours)

    @property
    def tag_colours(self) -> List[SectorColour]:
        return list(self._tag_colours)

    @property
    def tag_fade_colours(self) -> List[SectorColour]:
        return list(self._tag_fade_colours)

    def update_tagged_sectors(self, map_data: MapData) -> None:
        """Mark every sector coloured by a script as modified."""
        for entry in self._tag_colours + self._tag_fade_colours:
            for sector in map_data.sectors_with_tag(entry.tag):
                sector.modified = True

    # ------------------------------------------------------------------
    # Translucent lines
    # ------------------------------------------------------------------

    def _translucent_record(self, line: Union[MapLine, int]) -> Optional[TranslucentLineRecord]:
        index = line.index if isinstance(line, MapLine) else line
        return self._translucent_lines.get(index)

    def line_is_translucent(self, line: Union[MapLine, int]) -> bool:
        return self._translucent_record(line) is not None

    def translucent_line_alpha(self, line: Union[MapLine, int]) -> float:
        record = self._translucent_record(line)
        return record.alpha if record is not None else 1.0

    def translucent_line_additive(self, line: Union[MapLine, int]) -> bool:
        record = self._translucent_record(line)
        return record.additive if record is not None else False

    @property
    def translucent_lines(self) -> Dict[int, TranslucentLineRecord]:
        return dict(self._translucent_lines)

    # ------------------------------------------------------------------
    # Extra floors
    # ------------------------------------------------------------------

    @staticmethod
    def sector_has_extra_floors(sector: MapSector) -> bool:
        return bool(sector.extra_floors)

    @staticmethod
    def sector_extra_floors(sector: MapSector) -> List[ExtraFloor]:
        return list(sector.extra_floors)
