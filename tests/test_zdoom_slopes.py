"""Tests for the ZDoom slope sequence run by MapSpecials.process_map_specials."""

import pytest

from sector_specials.conversion.plane_math import Plane
from sector_specials.map.map_objects import SurfaceType
from sector_specials.pipeline.map_specials import MapSpecials
from sector_specials.pipeline.passes.align_passes import furthest_vertex
from sector_specials.profiles import PortProfile

from builders import MapBuilder, triangle_room, two_rooms


def plane_snapshot(map_data):
    return [(s.floor.plane.coefficients(), s.ceiling.plane.coefficients()) for s in map_data.sectors]


# ---------------------------------------------------------------------------
# Baseline
# ---------------------------------------------------------------------------

def test_map_without_specials_stays_flat(zdoom: MapSpecials) -> None:
    """Every plane equals the flat plane at the stored height."""
    builder, left, right, _ = two_rooms(left_floor=16, right_floor=-8, right_ceiling=200)

    zdoom.process_map_specials(builder.map)

    for sector in builder.map.sectors:
        assert sector.floor.plane == Plane.flat(sector.floor.height)
        assert sector.ceiling.plane == Plane.flat(sector.ceiling.height)
    assert zdoom.last_report.issues == []


def test_processing_is_idempotent(zdoom: MapSpecials) -> None:
    """Running twice on unchanged input produces identical planes."""
    builder, left, right, _ = two_rooms(left_floor=64, shared_special=181, shared_args=[1, 1])
    builder.thing(9502, 128, 32, angle=90, args=[120])

    zdoom.process_map_specials(builder.map)
    first = plane_snapshot(builder.map)
    zdoom.process_map_specials(builder.map)

    assert plane_snapshot(builder.map) == first


def test_stale_planes_are_reset(zdoom: MapSpecials) -> None:
    """A plane left over from an earlier edit is replaced by the flat baseline."""
    builder, left, _, _ = two_rooms()
    left.floor.plane = Plane(0.5, 0.0, 1.0, 10.0)

    zdoom.process_map_specials(builder.map)

    assert left.floor.plane == Plane.flat(0)


def test_unknown_port_does_nothing() -> None:
    """Ports without a slope sequence leave planes untouched."""
    builder, left, _, _ = two_rooms(shared_special=181, shared_args=[1])
    sloped = Plane(0.5, 0.0, 1.0, 10.0)
    left.floor.plane = sloped

    specials = MapSpecials(PortProfile.for_port("vanilla"))
    specials.process_map_specials(builder.map)

    assert left.floor.plane == sloped


# ---------------------------------------------------------------------------
# UDMF plane properties
# ---------------------------------------------------------------------------

def test_udmf_floorplane_properties(zdoom: MapSpecials) -> None:
    """floorplane_* properties set the plane with a, b and c negated."""
    builder, left, _, _ = two_rooms()
    left.properties.update({"floorplane_a": 0.0, "floorplane_b": 0.0, "floorplane_c": 1.0, "floorplane_d": -32.0})

    zdoom.process_map_specials(builder.map)

    assert left.floor.plane.height_at(10, 10) == pytest.approx(32)


def test_udmf_unset_plane_is_ignored(zdoom: MapSpecials) -> None:
    """The all-default plane (0, 0, -1, 0) after conversion means 'not set'."""
    builder, left, _, _ = two_rooms(left_floor=8)
    left.properties.update({"floorplane_a": 0.0, "floorplane_b": 0.0, "floorplane_c": 1.0, "floorplane_d": 0.0})

    zdoom.process_map_specials(builder.map)

    assert left.floor.plane == Plane.flat(8)


@pytest.mark.parametrize("prefix", ["floorplane_", "ceilingplane_"])
def test_udmf_partial_plane_is_ignored(zdoom: MapSpecials, prefix: str) -> None:
    """A surface needs all four of a, b, c and d."""
    builder, left, _, _ = two_rooms(left_floor=8, left_ceiling=96)
    left.properties.update({prefix + "a": 1.0, prefix + "c": -1.0, prefix + "d": 4.0})

    zdoom.process_map_specials(builder.map)

    assert left.floor.plane == Plane.flat(8)
    assert left.ceiling.plane == Plane.flat(96)


# ---------------------------------------------------------------------------
# Plane_Align
# ---------------------------------------------------------------------------

def test_plane_align_front_model(zdoom: MapSpecials) -> None:
    """arg 1 slopes the back sector from the line (front height) to its far vertex."""
    builder, left, right, shared = two_rooms(left_floor=64, right_floor=0, shared_special=181, shared_args=[1, 0])

    zdoom.process_map_specials(builder.map)

    plane = left.floor.plane
    assert plane.height_at(64, 0) == pytest.approx(0)
    assert plane.height_at(64, 64) == pytest.approx(0)
    assert plane.height_at(0, 0) == pytest.approx(64)
    assert right.floor.plane == Plane.flat(0)
    # Ceiling argument was 0
    assert left.ceiling.plane == Plane.flat(128)


def test_plane_align_back_model(zdoom: MapSpecials) -> None:
    """arg 2 slopes the front sector from the back sector's height."""
    builder, left, right, _ = two_rooms(left_floor=0, right_floor=32, shared_special=181, shared_args=[2, 0])

    zdoom.process_map_specials(builder.map)

    plane = right.floor.plane
    assert plane.height_at(64, 32) == pytest.approx(0)
    assert plane.height_at(192, 64) == pytest.approx(32)
    assert plane.height_at(192, 0) == pytest.approx(32)
    assert plane.height_at(128, 10) == pytest.approx(16)


def test_plane_align_ceiling(zdoom: MapSpecials) -> None:
    builder, left, right, _ = two_rooms(left_ceiling=64, right_ceiling=128, shared_special=181, shared_args=[0, 1])

    zdoom.process_map_specials(builder.map)

    assert left.ceiling.plane.height_at(64, 10) == pytest.approx(128)
    assert left.ceiling.plane.height_at(0, 10) == pytest.approx(64)
    assert left.floor.plane == Plane.flat(0)


def test_plane_align_one_sided_line_is_skipped(zdoom: MapSpecials) -> None:
    builder = MapBuilder()
    room = builder.sector(floor=0)
    lines = builder.square(0, 0, 64, room)
    lines[0].special = 181
    lines[0].args = [1, 0, 0, 0, 0]

    zdoom.process_map_specials(builder.map)

    assert "ALIGN-001" in zdoom.last_report.codes()
    assert room.floor.plane == Plane.flat(0)


def test_plane_align_same_sector_both_sides_is_skipped(zdoom: MapSpecials) -> None:
    builder = MapBuilder()
    room = builder.sector(floor=0)
    builder.square(0, 0, 64, room)
    builder.line((16, 16), (16, 48), front=room, back=room, special=181, args=[1])

    zdoom.process_map_specials(builder.map)

    assert "ALIGN-002" in zdoom.last_report.codes()
    assert room.floor.plane == Plane.flat(0)


def test_plane_align_without_reference_vertex(zdoom: MapSpecials) -> None:
    """A target whose only vertices lie on the line has nothing to slope towards."""
    builder = MapBuilder()
    room = builder.sector(floor=0)
    sliver = builder.sector(floor=32)
    builder.square(0, 0, 64, room)
    builder.line((16, 16), (16, 48), front=room, back=sliver, special=181, args=[1])

    zdoom.process_map_specials(builder.map)

    assert "ALIGN-003" in zdoom.last_report.codes()
    assert sliver.floor.plane == Plane.flat(32)


def test_furthest_vertex_ties_go_to_first_vertex() -> None:
    builder, left, _, shared = two_rooms()

    vertex = furthest_vertex(builder.map, left, shared)

    # (0, 0) and (0, 64) are both 64 units away; (0, 0) comes first
    assert vertex is builder.map.vertex_at(0, 0)


# ---------------------------------------------------------------------------
# Slope things
# ---------------------------------------------------------------------------

def test_line_slope_thing_slopes_the_facing_side(zdoom: MapSpecials) -> None:
    """Only the sector on the thing's side of the line is sloped."""
    builder, left, right, _ = two_rooms(shared_id=5)
    builder.thing(9500, 32, 32, height=16, args=[5])

    zdoom.process_map_specials(builder.map)

    plane = left.floor.plane
    assert plane.height_at(64, 0) == pytest.approx(0)
    assert plane.height_at(64, 64) == pytest.approx(0)
    assert plane.height_at(32, 32) == pytest.approx(16)
    assert plane.height_at(0, 10) == pytest.approx(32)
    assert right.floor.plane == Plane.flat(0)


def test_line_slope_thing_on_front_side(zdoom: MapSpecials) -> None:
    builder, left, right, _ = two_rooms(shared_id=5)
    builder.thing(9501, 128, 32, height=-64, args=[5])

    zdoom.process_map_specials(builder.map)

    plane = right.ceiling.plane
    assert plane.height_at(64, 10) == pytest.approx(128)
    assert plane.height_at(128, 32) == pytest.approx(64)
    assert left.ceiling.plane == Plane.flat(128)


def test_line_slope_thing_slopes_every_line_with_its_id(zdoom: MapSpecials) -> None:
    """Each tagged line slopes the sector on the thing's side of it."""
    builder, left, right, _ = two_rooms(shared_id=5)
    builder.map.lines[5].line_id = 5
    builder.thing(9500, 32, 32, height=16, args=[5])

    zdoom.process_map_specials(builder.map)

    assert left.floor.plane.height_at(64, 10) == pytest.approx(0)
    assert left.floor.plane.height_at(0, 10) == pytest.approx(32)
    # The east wall's front is the right room, which faces the thing
    assert right.floor.plane.height_at(192, 10) == pytest.approx(0)
    assert right.floor.plane.height_at(112, 32) == pytest.approx(8)


def test_line_slope_thing_without_line_id(zdoom: MapSpecials) -> None:
    builder, left, _, _ = two_rooms(shared_id=5)
    builder.thing(9500, 32, 32, height=16)

    zdoom.process_map_specials(builder.map)

    assert "THING-001" in zdoom.last_report.codes()
    assert left.floor.plane == Plane.flat(0)


def test_sector_tilt_thing(zdoom: MapSpecials) -> None:
    """A 45 degree tilt facing east rises one unit per unit of x."""
    builder, _, right, _ = two_rooms(right_floor=8)
    builder.thing(9502, 128, 32, angle=0, height=0, args=[135])

    zdoom.process_map_specials(builder.map)

    plane = right.floor.plane
    assert plane.height_at(128, 32) == pytest.approx(8)
    assert plane.height_at(160, 0) == pytest.approx(40)
    assert plane.height_at(96, 64) == pytest.approx(-24)


@pytest.mark.parametrize("tilt", [0, 180])
def test_vertical_tilt_is_rejected(zdoom: MapSpecials, tilt: int) -> None:
    """Tilt arguments of 0 and 180 would be vertical and are skipped."""
    builder, _, right, _ = two_rooms(right_floor=8)
    builder.thing(9502, 128, 32, args=[tilt])

    zdoom.process_map_specials(builder.map)

    assert right.floor.plane == Plane.flat(8)
    assert "THING-007" in zdoom.last_report.codes()


def test_slope_thing_outside_every_sector(zdoom: MapSpecials) -> None:
    builder, left, right, _ = two_rooms()
    builder.thing(9502, 1000, 1000, args=[120])

    zdoom.process_map_specials(builder.map)

    assert "THING-006" in zdoom.last_report.codes()
    assert all(s.floor.plane.is_flat for s in builder.map.sectors)


def test_vavoom_thing(zdoom: MapSpecials) -> None:
    """The plane runs from the matched line at sector height to the thing's absolute height."""
    builder = MapBuilder()
    room = builder.sector(floor=0)
    lines = builder.square(0, 0, 64, room)
    lines[0].args = [7, 0, 0, 0, 0]
    builder.thing(1500, 48, 32, height=32, thing_id=7)

    zdoom.process_map_specials(builder.map)

    plane = room.floor.plane
    assert plane.height_at(0, 10) == pytest.approx(0)
    assert plane.height_at(48, 32) == pytest.approx(32)
    assert plane.height_at(24, 10) == pytest.approx(16)


def test_vavoom_thing_on_its_line(zdoom: MapSpecials) -> None:
    builder = MapBuilder()
    room = builder.sector(floor=0)
    lines = builder.square(0, 0, 64, room)
    lines[1].args = [7, 0, 0, 0, 0]
    builder.thing(1500, 32, 63.99999999, height=32, thing_id=7)

    zdoom.process_map_specials(builder.map)

    assert "THING-002" in zdoom.last_report.codes()
    assert room.floor.plane == Plane.flat(0)


def test_vavoom_thing_without_matching_line(zdoom: MapSpecials) -> None:
    builder = MapBuilder()
    room = builder.sector(floor=0)
    builder.square(0, 0, 64, room)
    builder.thing(1501, 32, 32, height=32, thing_id=9)

    zdoom.process_map_specials(builder.map)

    assert "THING-003" in zdoom.last_report.codes()


def test_vavoom_thing_in_line_with_its_line(zdoom: MapSpecials) -> None:
    """A thing on the line's extension gives a vertical plane, which is rejected."""
    builder = MapBuilder()
    room = builder.sector(floor=0)
    builder.square(0, 0, 64, room)
    builder.line((32, 16), (32, 32), front=room, back=room, args=[7])
    builder.thing(1500, 32, 48, height=32, thing_id=7)

    zdoom.process_map_specials(builder.map)

    codes = zdoom.last_report.codes()
    assert "PLANE-001" in codes
    assert "THING-002" not in codes
    assert room.floor.plane == Plane.flat(0)


def test_slope_copy_thing(zdoom: MapSpecials) -> None:
    """Slope copy runs after the tilt pass and copies its result."""
    builder, left, right, _ = two_rooms(right_tag=3)
    builder.thing(9502, 128, 32, args=[135])
    builder.thing(9510, 32, 32, args=[3])

    zdoom.process_map_specials(builder.map)

    assert not right.floor.plane.is_flat
    assert left.floor.plane == right.floor.plane


def test_slope_copy_thing_diagnostics(zdoom: MapSpecials) -> None:
    builder, left, _, _ = two_rooms()
    builder.thing(9510, 32, 32, args=[0])
    builder.thing(9511, 32, 32, args=[42])

    zdoom.process_map_specials(builder.map)

    codes = zdoom.last_report.codes()
    assert "THING-004" in codes
    assert "THING-005" in codes
    assert left.floor.plane == Plane.flat(0)


def test_slope_copy_thing_outside_every_sector(zdoom: MapSpecials) -> None:
    builder, _, _, _ = two_rooms(right_tag=3)
    builder.thing(9510, 1000, 1000, args=[3])

    zdoom.process_map_specials(builder.map)

    assert "THING-006" in zdoom.last_report.codes()
    assert all(s.floor.plane.is_flat for s in builder.map.sectors)


# ---------------------------------------------------------------------------
# Vertex heights
# ---------------------------------------------------------------------------

def test_vertex_height_thing_slopes_triangle(zdoom: MapSpecials) -> None:
    builder = MapBuilder()
    sector = triangle_room(builder, [(0, 0), (0, 64), (64, 0)], floor=0)
    builder.thing(1504, 64, 0, height=64)

    zdoom.process_map_specials(builder.map)

    plane = sector.floor.plane
    assert plane.height_at(0, 32) == pytest.approx(0)
    assert plane.height_at(32, 10) == pytest.approx(32)
    assert sector.ceiling.plane == Plane.flat(128)


def test_vertex_height_thing_beats_vertex_property(zdoom: MapSpecials) -> None:
    builder = MapBuilder()
    sector = triangle_room(builder, [(0, 0), (0, 64), (64, 0)], floor=0)
    builder.vertex(64, 0, zfloor=10)
    builder.vertex(0, 64, zfloor=32)
    builder.thing(1504, 64, 0, height=64)

    zdoom.process_map_specials(builder.map)

    plane = sector.floor.plane
    assert plane.height_at(64, 0) == pytest.approx(64)
    assert plane.height_at(0, 64) == pytest.approx(32)
    assert plane.height_at(0, 0) == pytest.approx(0)


def test_vertex_height_thing_off_every_vertex(zdoom: MapSpecials) -> None:
    builder = MapBuilder()
    sector = triangle_room(builder, [(0, 0), (0, 64), (64, 0)], floor=0)
    builder.thing(1504, 10, 10, height=64)

    zdoom.process_map_specials(builder.map)

    assert "THING-008" in zdoom.last_report.codes()
    assert sector.floor.plane == Plane.flat(0)


def test_vertex_heights_build_on_sloped_plane(zdoom: MapSpecials) -> None:
    """Vertices without a height keep the height of the plane a tilt thing set."""
    builder = MapBuilder()
    sector = triangle_room(builder, [(0, 0), (0, 64), (64, 0)], floor=0)
    builder.thing(9502, 16, 16, angle=0, args=[135])
    builder.vertex(0, 64, zfloor=100)

    zdoom.process_map_specials(builder.map)

    plane = sector.floor.plane
    assert plane.height_at(0, 0) == pytest.approx(-16)
    assert plane.height_at(64, 0) == pytest.approx(48)
    assert plane.height_at(0, 64) == pytest.approx(100)


def test_vertex_ceiling_property(zdoom: MapSpecials) -> None:
    builder = MapBuilder()
    sector = triangle_room(builder, [(0, 0), (0, 64), (64, 0)], ceiling=128)
    builder.vertex(0, 0, zceiling=64)

    zdoom.process_map_specials(builder.map)

    assert sector.ceiling.plane.height_at(0, 0) == pytest.approx(64)
    assert sector.ceiling.plane.height_at(64, 0) == pytest.approx(128)
    assert sector.floor.plane == Plane.flat(0)


def test_vertex_heights_ignore_non_triangles(zdoom: MapSpecials) -> None:
    builder = MapBuilder()
    room = builder.sector(floor=0)
    builder.square(0, 0, 64, room)
    builder.vertex(0, 0, zfloor=64)
    builder.thing(1504, 64, 64, height=32)

    zdoom.process_map_specials(builder.map)

    assert room.floor.plane == Plane.flat(0)


def test_vertex_height_overrides_do_not_touch_vertices(zdoom: MapSpecials) -> None:
    builder = MapBuilder()
    triangle_room(builder, [(0, 0), (0, 64), (64, 0)])
    builder.thing(1504, 64, 0, height=64)

    zdoom.process_map_specials(builder.map)

    assert all("zfloor" not in v.properties for v in builder.map.vertices)


# ---------------------------------------------------------------------------
# Plane_Copy
# ---------------------------------------------------------------------------

def _tilted_room(builder: MapBuilder, tag: int):
    room = builder.sector(floor=0, tag=tag)
    builder.square(256, 0, 64, room)
    builder.thing(9502, 288, 32, args=[120])
    builder.thing(9503, 288, 32, height=128, args=[60])
    return room


def test_plane_copy_share_front_to_back(zdoom: MapSpecials) -> None:
    """share & 3 == 1 copies the front floor onto the back."""
    builder, left, right, _ = two_rooms(shared_special=118, shared_args=[0, 0, 0, 0, 1])
    builder.thing(9502, 128, 32, args=[135])

    zdoom.process_map_specials(builder.map)

    assert not right.floor.plane.is_flat
    assert left.floor.plane == right.floor.plane
    assert left.ceiling.plane == Plane.flat(128)


def test_plane_copy_share_back_to_front(zdoom: MapSpecials) -> None:
    builder, left, right, _ = two_rooms(shared_special=118, shared_args=[0, 0, 0, 0, 2 | 8])
    builder.thing(9502, 32, 32, args=[135])
    builder.thing(9503, 32, 32, height=128, args=[45])

    zdoom.process_map_specials(builder.map)

    assert right.floor.plane == left.floor.plane
    assert right.ceiling.plane == left.ceiling.plane


def test_plane_copy_share_ceiling_front_to_back(zdoom: MapSpecials) -> None:
    builder, left, right, _ = two_rooms(shared_special=118, shared_args=[0, 0, 0, 0, 4])
    builder.thing(9503, 128, 32, height=128, args=[45])

    zdoom.process_map_specials(builder.map)

    assert left.ceiling.plane == right.ceiling.plane
    assert left.floor.plane == Plane.flat(0)


def test_plane_copy_share_propagates_tagged_copy(zdoom: MapSpecials) -> None:
    """Sharing runs after the tagged copies, so it can pass a copied plane along."""
    builder, left, right, _ = two_rooms(shared_special=118, shared_args=[4, 0, 0, 0, 1])
    source = _tilted_room(builder, tag=4)

    zdoom.process_map_specials(builder.map)

    assert right.floor.plane == source.floor.plane
    assert left.floor.plane == source.floor.plane


def test_plane_copy_back_slots_write_back_sector(zdoom: MapSpecials) -> None:
    builder, left, right, _ = two_rooms(shared_special=118, shared_args=[0, 0, 4, 4])
    source = _tilted_room(builder, tag=4)

    zdoom.process_map_specials(builder.map)

    assert left.floor.plane == source.floor.plane
    assert left.ceiling.plane == source.ceiling.plane
    assert right.floor.plane == Plane.flat(0)
    assert right.ceiling.plane == Plane.flat(128)


def test_plane_copy_missing_tag_is_skipped(zdoom: MapSpecials) -> None:
    builder, left, right, _ = two_rooms(shared_special=118, shared_args=[77])

    zdoom.process_map_specials(builder.map)

    assert right.floor.plane == Plane.flat(0)
    assert "COPY-001" in zdoom.last_report.codes()


# ---------------------------------------------------------------------------
# Eternity
# ---------------------------------------------------------------------------

def test_eternity_runs_align_but_not_things(eternity: MapSpecials) -> None:
    builder, left, right, _ = two_rooms(left_floor=64, shared_special=181, shared_args=[1])
    builder.thing(9502, 128, 32, args=[135])

    eternity.process_map_specials(builder.map)

    assert left.floor.plane.height_at(0, 0) == pytest.approx(64)
    assert right.floor.plane == Plane.flat(0)


def test_surface_helpers() -> None:
    """set_surface_height resets the plane to flat at the new height."""
    builder, left, _, _ = two_rooms()
    left.floor.plane = Plane(0.5, 0.0, 1.0, 10.0)

    left.set_surface_height(SurfaceType.FLOOR, 24)

    assert left.plane_height(SurfaceType.FLOOR) == 24
    assert left.floor.plane == Plane.flat(24)
