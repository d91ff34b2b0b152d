"""Plain-text debug view of a dungeon: one character per cell, one row per y."""
from __future__ import annotations

from ..dungeon.tiles import CORRIDOR, DOOR_CLOSED, DOOR_OPEN, ROOM

ROCK_CHAR = "#"
ROOM_CHAR = "."
CORRIDOR_CHAR = ","
OPEN_DOOR_CHAR = "'"
CLOSED_DOOR_CHAR = "+"


def cell_char(cell) -> str:
    if cell.cell_type == ROOM:
        return ROOM_CHAR
    if cell.cell_type == CORRIDOR:
        states = cell.doors().values()
        if DOOR_CLOSED in states:
            return CLOSED_DOOR_CHAR
        if DOOR_OPEN in states:
            return OPEN_DOOR_CHAR
        return CORRIDOR_CHAR
    return ROCK_CHAR


def render_ascii(dungeon, show_numbers: bool = False) -> str:
    grid = dungeon.grid
    rows = [[cell_char(grid.cells[x][y]) for x in range(grid.width)] for y in range(grid.height)]
    if show_numbers:
        for room in dungeon.rooms:
            label = str(room.number)[: room.width]
            for i, ch in enumerate(label):
                rows[room.y][room.x + i] = ch
    return "\n".join("".join(row) for row in rows) + "\n"
