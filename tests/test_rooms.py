import pytest

from delver.dungeon.grid import Grid
from delver.dungeon.rooms import Room, place_rooms, renumber_rooms
from delver.dungeon.tiles import ROOM

from dungeon_test_utils import blank_session


def test_touching_rooms_do_not_overlap():
    a = Room(1, 1, 1, 3, 3)
    b = Room(2, 4, 1, 3, 3)
    assert not a.overlaps(b)
    assert not b.overlaps(a)


def test_margin_pads_overlap_test():
    a = Room(1, 1, 1, 3, 3)
    b = Room(2, 4, 1, 3, 3)
    assert a.overlaps(b, margin=1)
    assert b.overlaps(a, margin=1)


def test_shared_cell_overlaps():
    assert Room(1, 1, 1, 3, 3).overlaps(Room(2, 3, 3, 5, 5))


def test_walls_and_perimeter_order():
    r = Room(1, 5, 5, 3, 3)
    north, south, west, east = r.walls()
    assert north == [(5, 4), (6, 4), (7, 4)]
    assert south == [(5, 8), (6, 8), (7, 8)]
    assert west == [(4, 5), (4, 6), (4, 7)]
    assert east == [(8, 5), (8, 6), (8, 7)]
    perim = r.perimeter()
    assert len(perim) == 12
    assert perim[:4] == [(5, 4), (5, 8), (6, 4), (6, 8)]
    assert perim[6:8] == [(4, 5), (8, 5)]
    assert r.center == (6, 6)


@pytest.mark.parametrize("seed", [1, 2, 3, 42, 777])
def test_place_rooms_on_odd_lattice_without_overlap(seed):
    s = blank_session(41, 21, seed=seed)
    placed = place_rooms(s, 60)
    rooms = s.grid.rooms
    assert placed == len(rooms)
    assert [r.number for r in rooms] == list(range(1, placed + 1))
    for idx, room in enumerate(rooms):
        assert room.x % 2 == 1 and room.y % 2 == 1
        assert room.width % 2 == 1 and room.height % 2 == 1
        assert room.x + room.width <= 40 and room.y + room.height <= 20
        # one region per room, allocated in placement order
        assert {s.grid.cells[x][y].region for x, y in room.cells()} == {idx}
        assert all(s.grid.cells[x][y].cell_type == ROOM for x, y in room.cells())
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            assert not a.overlaps(b)
    assert s.region_count == placed


@pytest.mark.parametrize("seed", range(10))
def test_rooms_too_big_for_grid_are_skipped(seed):
    s = blank_session(13, 13, seed=seed)
    place_rooms(s, 30)
    for room in s.grid.rooms:
        assert room.x + room.width <= 12
        assert room.y + room.height <= 12


@pytest.mark.parametrize("seed", [4, 8, 15])
def test_margin_keeps_rooms_apart(seed):
    s = blank_session(41, 41, seed=seed)
    place_rooms(s, 80, margin=2)
    rooms = s.grid.rooms
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            assert not a.overlaps(b, margin=2)


def test_place_rooms_is_seeded():
    a = blank_session(41, 21, seed=9)
    b = blank_session(41, 21, seed=9)
    place_rooms(a, 40)
    place_rooms(b, 40)
    assert a.grid.rooms == b.grid.rooms


def test_renumber_snakes_through_columns():
    grid = Grid(21, 21)
    grid.rooms = [
        Room(1, 1, 1, 3, 3),
        Room(2, 1, 11, 3, 3),
        Room(3, 7, 3, 3, 3),
        Room(4, 7, 13, 3, 3),
        Room(5, 3, 5, 3, 3),
    ]
    result = renumber_rooms(grid, column_width=5)
    assert [(r.x, r.y) for r in result] == [(1, 1), (3, 5), (1, 11), (7, 13), (7, 3)]
    assert [r.number for r in result] == [1, 2, 3, 4, 5]
    assert grid.rooms == result


def test_renumber_keeps_geometry():
    grid = Grid(21, 21)
    grid.rooms = [Room(1, 11, 1, 3, 5), Room(2, 1, 1, 5, 3)]
    result = renumber_rooms(grid)
    assert {(r.x, r.y, r.width, r.height) for r in result} == {(11, 1, 3, 5), (1, 1, 5, 3)}
    assert result[0].x == 1 and result[0].number == 1
