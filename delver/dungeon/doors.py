"""Door assignment on room/corridor boundaries.

Each room cell gets at most one door per call: the first corridor neighbour
(N, E, S, W) it faces. The state is mirrored onto the corridor cell so both
sides of the boundary agree.
"""
from __future__ import annotations
from typing import Dict

from .tiles import CORRIDOR, DIRECTIONS, DOOR_CLOSED, DOOR_NONE, DOOR_OPEN, OPPOSITE, ROOM


def roll_door_state(rng) -> str:
    # 0-49 no door, 50-74 open, 75-99 closed
    roll = rng.randrange(100)
    if roll < 50:
        return DOOR_NONE
    if roll < 75:
        return DOOR_OPEN
    return DOOR_CLOSED


def assign_doors(session) -> Dict[str, int]:
    grid = session.grid
    counts = {DOOR_NONE: 0, DOOR_OPEN: 0, DOOR_CLOSED: 0}
    for cell in grid.iter_cells():
        if cell.cell_type != ROOM or cell.has_exit:
            continue
        for direction, dx, dy in DIRECTIONS:
            neighbor = grid.cell(cell.x + dx, cell.y + dy)
            if neighbor is None or neighbor.cell_type != CORRIDOR:
                continue
            if cell.door(direction) != DOOR_NONE:
                continue
            state = roll_door_state(session.rng)
            cell.set_door(direction, state)
            neighbor.set_door(OPPOSITE[direction], state)
            counts[state] += 1
            break
    session.bump('doors_none', counts[DOOR_NONE])
    session.bump('doors_open', counts[DOOR_OPEN])
    session.bump('doors_closed', counts[DOOR_CLOSED])
    return counts
