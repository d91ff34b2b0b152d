"""Maze growth over the rock left between rooms ("growing tree" backtracker)."""
from __future__ import annotations
from typing import List, Optional, Tuple

from .tiles import DIRECTIONS, ROCK

Step = Tuple[int, int]


def fill_with_mazes(session) -> int:
    """Start a maze at every odd lattice cell still made of rock.

    Returns the number of maze regions grown.
    """
    grid = session.grid
    grown = 0
    for y in range(1, grid.height, 2):
        for x in range(1, grid.width, 2):
            if grid.cells[x][y].cell_type == ROCK:
                grow_maze(session, x, y)
                grown += 1
    return grown


def _can_carve(grid, x: int, y: int, dx: int, dy: int) -> bool:
    nx, ny = x + dx * 2, y + dy * 2
    if not grid.in_bounds(nx, ny):
        return False
    return grid.cells[nx][ny].cell_type == ROCK


def grow_maze(session, start_x: int, start_y: int) -> None:
    """Randomized backtracking from (start_x, start_y) in a fresh region.

    Corridors advance two cells at a time so walls stay one cell thick. The
    previous heading is kept unless the winding roll says otherwise.
    """
    grid = session.grid
    rng = session.rng
    winding = session.config.winding_percent

    session.start_region()
    session.carve(start_x, start_y)
    stack: List[Step] = [(start_x, start_y)]
    last_dir: Optional[Step] = None

    while stack:
        x, y = stack[-1]
        carvable = [(dx, dy) for _name, dx, dy in DIRECTIONS if _can_carve(grid, x, y, dx, dy)]
        if not carvable:
            stack.pop()
            last_dir = None
            continue

        if last_dir is not None and last_dir in carvable and rng.randrange(100) > winding:
            dx, dy = last_dir
        else:
            dx, dy = carvable[rng.randrange(len(carvable))]

        session.carve(x + dx, y + dy)
        session.carve(x + dx * 2, y + dy * 2)
        stack.append((x + dx * 2, y + dy * 2))
        last_dir = (dx, dy)
