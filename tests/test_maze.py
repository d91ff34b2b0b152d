from delver.dungeon.maze import fill_with_mazes, grow_maze
from delver.dungeon.tiles import CORRIDOR, ROCK, ROOM

from dungeon_test_utils import blank_session, stamp_room


def test_maze_fills_every_odd_cell_as_a_tree():
    s = blank_session(15, 15, seed=3)
    assert fill_with_mazes(s) == 1
    grid = s.grid
    for y in range(1, 15, 2):
        for x in range(1, 15, 2):
            assert grid.cells[x][y].cell_type == CORRIDOR
    # 49 lattice cells joined by 48 single-cell links: a spanning tree
    assert grid.count(CORRIDOR) == 49 + 48
    assert {c.region for c in grid.iter_cells() if c.is_corridor} == {0}


def test_maze_never_touches_border():
    s = blank_session(21, 15, seed=11)
    fill_with_mazes(s)
    grid = s.grid
    for c in grid.iter_cells():
        if grid.is_border(c.x, c.y):
            assert c.cell_type == ROCK


def test_even_cells_stay_rock():
    s = blank_session(15, 15, seed=5)
    fill_with_mazes(s)
    for c in s.grid.iter_cells():
        if c.x % 2 == 0 and c.y % 2 == 0:
            assert c.cell_type == ROCK


def test_maze_flows_around_rooms():
    s = blank_session(15, 15, seed=2)
    stamp_room(s, 5, 5, 3, 3)
    assert fill_with_mazes(s) == 1
    grid = s.grid
    assert grid.count(ROOM) == 9
    assert all(grid.cells[x][y].region == 0 for x in range(5, 8) for y in range(5, 8))
    maze_regions = {c.region for c in grid.iter_cells() if c.is_corridor}
    assert maze_regions == {1}


def test_low_winding_still_covers_the_lattice():
    # Winding changes the shape, never the coverage
    s = blank_session(15, 15, seed=8, winding_percent=0)
    s.start_region()
    grow_maze(s, 1, 1)
    assert s.grid.count(CORRIDOR) == 97
    assert s.current_region == 1


def test_same_seed_same_maze():
    a = blank_session(21, 21, seed=17)
    b = blank_session(21, 21, seed=17)
    fill_with_mazes(a)
    fill_with_mazes(b)
    assert [c.cell_type for c in a.grid.iter_cells()] == [c.cell_type for c in b.grid.iter_cells()]
