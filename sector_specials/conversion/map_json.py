"""
JSON map dumps.

Reads and writes MapData as plain JSON, and exports the derived specials
state (planes, extra floors, translucent lines, sector colours) for
external tools.

Map dump layout:
    {
        "vertices": [{"x": 0, "y": 0, "properties": {...}}, ...],
        "sides":    [{"sector": 0, "offset_x": 0, "offset_y": 0}, ...],
        "lines":    [{"v1": 0, "v2": 1, "side1": 0, "side2": null,
                      "special": 181, "args": [1, 0, 0, 0, 0], "id": 0}, ...],
        "sectors":  [{"floor_height": 0, "ceiling_height": 128, "tag": 0}, ...],
        "things":   [{"type": 9502, "x": 32, "y": 32, "angle": 0,
                      "height": 0, "args": [45], "id": 0}, ...]
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from sector_specials.conversion.plane_math import Plane
from sector_specials.map.map_data import MapData
from sector_specials.map.map_objects import (
    ExtraFloor,
    MapLine,
    MapSector,
    MapSide,
    MapThing,
    MapVertex,
    SectorSurface,
)
from sector_specials.validation.core import SpecialsReport

logger = logging.getLogger(__name__)


class MapFormatError(ValueError):
    """Raised when a map dump is missing required data."""
    pass


def _args(raw: Any) -> List[int]:
    values = [int(a) for a in (raw or [])][:5]
    return values + [0] * (5 - len(values))


def _side_index(raw: Any) -> Optional[int]:
    """Side reference; None or a negative index (Doom's -1) means no side."""
    if raw is None:
        return None
    index = int(raw)
    return index if index >= 0 else None


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def map_from_dict(data: Dict[str, Any]) -> MapData:
    """
    Build a MapData from a decoded map dump.

    Raises:
        MapFormatError: If a required field is missing or has the wrong type
    """
    map_data = MapData()
    try:
        for v in data.get("vertices", []):
            map_data.add_vertex(MapVertex(
                x=float(v["x"]),
                y=float(v["y"]),
                properties=dict(v.get("properties", {})),
            ))

        for s in data.get("sectors", []):
            map_data.add_sector(MapSector(
                floor=SectorSurface(height=int(s.get("floor_height", 0)), texture=s.get("floor_texture", "-")),
                ceiling=SectorSurface(height=int(s.get("ceiling_height", 128)), texture=s.get("ceiling_texture", "-")),
                tag=int(s.get("tag", 0)),
                light=int(s.get("light", 160)),
                properties=dict(s.get("properties", {})),
            ))

        for s in data.get("sides", []):
            map_data.add_side(MapSide(
                sector=int(s["sector"]),
                offset_x=int(s.get("offset_x", 0)),
                offset_y=int(s.get("offset_y", 0)),
                properties=dict(s.get("properties", {})),
            ))

        for l in data.get("lines", []):
            map_data.add_line(MapLine(
                v1=int(l["v1"]),
                v2=int(l["v2"]),
                side1=_side_index(l.get("side1")),
                side2=_side_index(l.get("side2")),
                special=int(l.get("special", 0)),
                args=_args(l.get("args")),
                line_id=int(l.get("id", 0)),
                flags=int(l.get("flags", 0)),
                properties=dict(l.get("properties", {})),
            ))

        for t in data.get("things", []):
            map_data.add_thing(MapThing(
                type=int(t["type"]),
                x=float(t["x"]),
                y=float(t["y"]),
                angle=int(t.get("angle", 0)),
                height=float(t.get("height", 0.0)),
                args=_args(t.get("args")),
                thing_id=int(t.get("id", 0)),
                properties=dict(t.get("properties", {})),
            ))
    except (KeyError, TypeError, ValueError) as e:
        raise MapFormatError(f"Invalid map data: {e}") from e

    _check_references(map_data)
    logger.debug(
        "Loaded map: %d vertices, %d lines, %d sectors, %d things",
        len(map_data.vertices), len(map_data.lines), len(map_data.sectors), len(map_data.things),
    )
    return map_data


def _check_references(map_data: MapData) -> None:
    for line in map_data.lines:
        for vertex_index in (line.v1, line.v2):
            if not 0 <= vertex_index < len(map_data.vertices):
                raise MapFormatError(f"Line {line.index} references missing vertex {vertex_index}")
        for side_index in (line.side1, line.side2):
            if side_index is not None and not 0 <= side_index < len(map_data.sides):
                raise MapFormatError(f"Line {line.index} references missing side {side_index}")


def load_map(file_path: Path) -> MapData:
    """
    Load a JSON map dump from [file_path].

    Raises:
        OSError: If the file cannot be read
        MapFormatError: If the content is not a valid map dump
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise MapFormatError(f"Invalid JSON in {file_path}: {e}") from e
    if not isinstance(data, dict):
        raise MapFormatError(f"{file_path} does not contain a map object")
    return map_from_dict(data)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def map_to_dict(map_data: MapData) -> Dict[str, Any]:
    """Convert a MapData back to the map dump layout."""
    return {
        'vertices': [
            {'x': v.x, 'y': v.y, 'properties': dict(v.properties)}
            for v in map_data.vertices
        ],
        'sides': [
            {'sector': s.sector, 'offset_x': s.offset_x, 'offset_y': s.offset_y, 'properties': dict(s.properties)}
            for s in map_data.sides
        ],
        'lines': [
            {
                'v1': l.v1,
                'v2': l.v2,
                'side1': l.side1,
                'side2': l.side2,
                'special': l.special,
                'args': list(l.args),
                'id': l.line_id,
                'flags': l.flags,
                'properties': dict(l.properties),
            }
            for l in map_data.lines
        ],
        'sectors': [
            {
                'floor_height': s.floor.height,
                'ceiling_height': s.ceiling.height,
                'floor_texture': s.floor.texture,
                'ceiling_texture': s.ceiling.texture,
                'tag': s.tag,
                'light': s.light,
                'properties': dict(s.properties),
            }
            for s in map_data.sectors
        ],
        'things': [
            {
                'type': t.type,
                'x': t.x,
                'y': t.y,
                'angle': t.angle,
                'height': t.height,
                'args': list(t.args),
                'id': t.thing_id,
                'properties': dict(t.properties),
            }
            for t in map_data.things
        ],
    }


def save_map(map_data: MapData, file_path: Path) -> Path:
    file_path = Path(file_path)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(map_to_dict(map_data), f, indent=2)
    return file_path


# ---------------------------------------------------------------------------
# Specials results
# ---------------------------------------------------------------------------

def _plane_to_dict(plane: Plane) -> Dict[str, float]:
    return {'a': plane.a, 'b': plane.b, 'c': plane.c, 'd': plane.d}


def _extra_floor_to_dict(extra_floor: ExtraFloor) -> Dict[str, Any]:
    return {
        'control_sector': extra_floor.control_sector,
        'control_line': extra_floor.control_line,
        'floor_type': extra_floor.floor_type.name,
        'alpha': extra_floor.alpha,
        'draw_inside': extra_floor.draw_inside,
        'flags': int(extra_floor.flags),
        'height': extra_floor.height,
        'plane_top': _plane_to_dict(extra_floor.plane_top),
        'plane_bottom': _plane_to_dict(extra_floor.plane_bottom),
    }


def specials_to_dict(map_data: MapData, specials, report: Optional[SpecialsReport] = None) -> Dict[str, Any]:
    """
    Collect the derived specials state of [map_data].

    Args:
        map_data: A map that [specials] has processed
        specials: The MapSpecials instance that processed it
        report: Diagnostics to include (default: specials.last_report)

    Returns:
        Dictionary with sector planes, extra floors, translucent lines,
        tag colours and the diagnostics of the last run
    """
    sectors = []
    for sector in map_data.sectors:
        sectors.append({
            'index': sector.index,
            'floor_plane': _plane_to_dict(sector.floor.plane),
            'ceiling_plane': _plane_to_dict(sector.ceiling.plane),
            'extra_floors': [_extra_floor_to_dict(ef) for ef in sector.extra_floors],
            'modified': sector.modified,
        })

    return {
        'profile': specials.profile.name,
        'sectors': sectors,
        'translucent_lines': [
            {'line': index, 'source_line': record.source_line, 'alpha': record.alpha, 'additive': record.additive}
            for index, record in sorted(specials.translucent_lines.items())
        ],
        'tag_colours': [
            {'tag': entry.tag, 'colour': list(entry.colour)} for entry in specials.tag_colours
        ],
        'tag_fade_colours': [
            {'tag': entry.tag, 'colour': list(entry.colour)} for entry in specials.tag_fade_colours
        ],
        'report': (report or specials.last_report).to_dict(),
    }


def export_specials_to_json(map_data: MapData, specials, report: Optional[SpecialsReport] = None) -> str:
    return json.dumps(specials_to_dict(map_data, specials, report), indent=2)
