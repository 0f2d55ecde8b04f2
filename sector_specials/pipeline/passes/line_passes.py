"""
Per-line effect processor.

Turns line specials into derived render state:
- Sector_Set3dFloor (160): ExtraFloor entries on the tagged sectors
- TranslucentLine (208): renderstyle / alpha overrides on target lines

The full pass rebuilds everything from scratch. Passing a line list in
the "lines" option reprocesses only those lines, first dropping whatever
they produced before. The outcome is the same as a full pass would give.
"""

import logging
from typing import Iterable, List, Optional, Set

from sector_specials.map.map_objects import ExtraFloor, MapLine
from sector_specials.validation.rules import FLOOR_001
from .base import SpecialsPass, PassConfig, PassResult
from ..decoded import Set3dFloor, TranslucentLine, decode_line_special
from ..specials_state import SpecialsState, TranslucentLineRecord

logger = logging.getLogger(__name__)

RENDER_STYLE_PROPERTY = "renderstyle"
ALPHA_PROPERTY = "alpha"


class LineEffectsPass(SpecialsPass):
    """
    Build 3D floors and translucent line overrides from line specials.

    Options:
        lines: Only reprocess these lines (default: every line)
    """

    @property
    def name(self) -> str:
        return "Line Effects"

    @property
    def description(self) -> str:
        return "Build 3D floor stacks and translucent line overrides"

    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        result = PassResult(state=state)
        lines: Optional[List[MapLine]] = config.options.get("lines")

        if lines is None:
            self._clear_all(state)
            for line, special in state.line_specials():
                self._apply(result, line, special)
        else:
            for line in lines:
                self._clear_extra_floors(state, line)
                special = decode_line_special(line)
                if isinstance(special, Set3dFloor):
                    self._set_3d_floor(result, line, special)
            # Entries stay in control line order, as a full run builds them
            for sector in state.map_data.sectors:
                sector.extra_floors.sort(key=lambda ef: ef.control_line)
            self._refresh_translucent(result, lines)

        return result

    def _apply(self, result: PassResult, line: MapLine, special) -> None:
        if isinstance(special, Set3dFloor):
            self._set_3d_floor(result, line, special)
        elif isinstance(special, TranslucentLine):
            self._translucent_line(result, line, special)

    # ------------------------------------------------------------------
    # Clearing previous output
    # ------------------------------------------------------------------

    def _clear_all(self, state: SpecialsState) -> None:
        for sector in state.map_data.sectors:
            sector.extra_floors.clear()
        self._drop_translucent(state, list(state.translucent_lines))

    @staticmethod
    def _clear_extra_floors(state: SpecialsState, line: MapLine) -> None:
        for sector in state.map_data.sectors:
            sector.extra_floors[:] = [ef for ef in sector.extra_floors if ef.control_line != line.index]

    @staticmethod
    def _drop_translucent(state: SpecialsState, target_indices: Iterable[int]) -> None:
        lines = state.map_data.lines
        for index in target_indices:
            state.translucent_lines.pop(index, None)
            if index < len(lines):
                lines[index].properties.pop(RENDER_STYLE_PROPERTY, None)
                lines[index].properties.pop(ALPHA_PROPERTY, None)

    def _refresh_translucent(self, result: PassResult, lines: List[MapLine]) -> None:
        """
        Rebuild the overrides of every target [lines] produced before or produce now.

        All TranslucentLine specials are re-applied to those targets in line
        order, so a later line targeting the same line still wins.
        """
        state = result.state
        indices = {line.index for line in lines}
        affected = {
            index for index, record in state.translucent_lines.items()
            if record.source_line in indices
        }
        for line in lines:
            special = decode_line_special(line)
            if isinstance(special, TranslucentLine):
                affected.update(target.index for target in self._translucent_targets(state, line, special))
        if not affected:
            return

        self._drop_translucent(state, affected)
        for line, special in state.line_specials():
            if isinstance(special, TranslucentLine):
                self._translucent_line(result, line, special, only=affected)

    # ------------------------------------------------------------------
    # Sector_Set3dFloor
    # ------------------------------------------------------------------

    def _set_3d_floor(self, result: PassResult, line: MapLine, special: Set3dFloor) -> None:
        """Append one ExtraFloor, built from the control sector, to every tagged sector."""
        map_data = result.state.map_data
        control = map_data.front_sector(line)
        if control is None:
            result.add_issue(FLOOR_001, location=f"line {line.index}", line=line.index)
            return

        for target in map_data.sectors_with_tag(special.target_tag):
            extra_floor = ExtraFloor(
                control_sector=control.index,
                control_line=line.index,
                floor_type=special.floor_type,
                alpha=special.alpha,
                draw_inside=special.draw_inside,
                flags=special.flags,
                floor_plane=control.floor.plane,
                ceiling_plane=control.ceiling.plane,
            )
            extra_floor.height = extra_floor.plane_top.height_at_point(map_data.sector_midpoint(target))
            target.extra_floors.append(extra_floor)
            result.count("extra_floors")

    # ------------------------------------------------------------------
    # TranslucentLine
    # ------------------------------------------------------------------

    @staticmethod
    def _translucent_targets(state: SpecialsState, line: MapLine, special: TranslucentLine) -> List[MapLine]:
        if special.target_id > 0:
            return state.map_data.lines_with_id(special.target_id)
        return [line]

    def _translucent_line(
        self,
        result: PassResult,
        line: MapLine,
        special: TranslucentLine,
        only: Optional[Set[int]] = None,
    ) -> None:
        """Apply [special] to its targets; [only] restricts it to those line indices."""
        state = result.state
        for target in self._translucent_targets(state, line, special):
            if only is not None and target.index not in only:
                continue
            target.properties[RENDER_STYLE_PROPERTY] = special.render_style
            target.properties[ALPHA_PROPERTY] = special.alpha
            state.translucent_lines[target.index] = TranslucentLineRecord(
                source_line=line.index,
                alpha=special.alpha,
                additive=special.additive,
            )
            result.count("translucent_lines")
