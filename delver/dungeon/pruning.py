"""Pruning passes for dungeon cleanup.

Dead-end removal runs to a fixed point. The two entrance passes trim
redundant openings around each room: first per wall, then per adjacent
corridor region. Every removal is tentative and rolled back if the room can
no longer reach a corridor or the dungeon would split.
"""
from __future__ import annotations
from typing import Dict, List, Tuple

from .connectivity import neighbors_joined, room_reaches_corridor
from .tiles import CORRIDOR, NO_REGION, ROCK

Coord2D = Tuple[int, int]


def remove_dead_ends(session) -> int:
    """Fill corridor cells with a single open neighbour until none remain.

    Border cells are never considered. Returns the number of cells removed.
    """
    grid = session.grid
    removed = 0
    changed = True
    while changed:
        changed = False
        for y in range(1, grid.height - 1):
            for x in range(1, grid.width - 1):
                cell = grid.cells[x][y]
                if cell.cell_type != CORRIDOR:
                    continue
                if grid.open_neighbor_count(x, y) == 1:
                    cell.cell_type = ROCK
                    cell.region = NO_REGION
                    removed += 1
                    changed = True
    session.bump('dead_ends_removed', removed)
    return removed


def _try_close_entrance(session, room, x: int, y: int) -> bool:
    """Turn an entrance to rock; restore it if that cuts anything off.

    The room must still touch a corridor and the cells on either side of the
    closed entrance must still reach each other.
    """
    grid = session.grid
    cell = grid.cells[x][y]
    saved = (cell.cell_type, cell.region)
    cell.cell_type = ROCK
    cell.region = NO_REGION
    if room_reaches_corridor(grid, room) and neighbors_joined(grid, x, y):
        session.bump('entrances_removed')
        return True
    cell.cell_type, cell.region = saved
    session.bump('entrances_restored')
    return False


def _thin_entrances(session, room, entrances: List[Coord2D]) -> int:
    keep = session.rng.randrange(len(entrances))
    closed = 0
    for i, (x, y) in enumerate(entrances):
        if i == keep:
            continue
        if _try_close_entrance(session, room, x, y):
            closed += 1
    return closed


def eliminate_redundant_entrances(session) -> int:
    """Leave at most one opening per room wall where connectivity allows."""
    grid = session.grid
    closed = 0
    for room in grid.rooms:
        for wall in room.walls():
            entrances = [(x, y) for x, y in wall if grid.in_bounds(x, y) and grid.cells[x][y].is_open]
            if len(entrances) > 1:
                closed += _thin_entrances(session, room, entrances)
    return closed


def eliminate_same_corridor_entrances(session) -> int:
    """Leave at most one opening per room into each corridor region.

    Entrances are grouped by the canonical region of their first corridor
    neighbour, so openings on different walls leading into the same merged
    corridor network compete with each other.
    """
    grid = session.grid
    closed = 0
    for room in grid.rooms:
        groups: Dict[int, List[Coord2D]] = {}
        for x, y in room.perimeter():
            cell = grid.cell(x, y)
            if cell is None or not cell.is_open:
                continue
            for _d, neighbor in grid.neighbors(x, y):
                if neighbor.cell_type == CORRIDOR:
                    region = session.canonical_region(neighbor.region)
                    groups.setdefault(region, []).append((x, y))
                    break
        for entrances in groups.values():
            if len(entrances) > 1:
                closed += _thin_entrances(session, room, entrances)
    return closed
