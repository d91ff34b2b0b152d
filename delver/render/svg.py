"""Vector drawing of a finished dungeon."""
from __future__ import annotations
from typing import List

from ..dungeon.config import ConfigError, MIN_CELL_SIZE
from ..dungeon.tiles import DOOR_CLOSED, DOOR_NONE, EAST, NORTH, SOUTH, WEST

STYLE = """  <style>
    rect.cell {{ stroke: #666; stroke-width: 1; width: {size}px; height: {size}px; }}
    rect.rock {{ fill: #444; }}
    rect.room {{ fill: #eee; }}
    rect.corridor {{ fill: #999; }}
    rect.door {{ stroke: none; }}
    rect.door.open {{ fill: #c8a060; }}
    rect.door.closed {{ fill: #7a3314; }}
    text {{ paint-order: stroke fill markers; fill: #000; stroke: #eee; stroke-width: {sw}px; font-size: {font}px; font-family: Verdana, Tahoma, Sans-Serif; text-anchor: start; dominant-baseline: middle; }}
  </style>"""


def _door_rect(x: int, y: int, direction: str, state: str, size: int, thick: int) -> str:
    # bar hugging the side of the corridor cell that faces the room
    if direction == NORTH:
        bx, by, bw, bh = x, y, size, thick
    elif direction == SOUTH:
        bx, by, bw, bh = x, y + size - thick, size, thick
    elif direction == WEST:
        bx, by, bw, bh = x, y, thick, size
    else:
        bx, by, bw, bh = x + size - thick, y, thick, size
    return f'  <rect class="door {state}" x="{bx}" y="{by}" width="{bw}" height="{bh}" />'


def render_svg(dungeon, cell_size: int = 32) -> str:
    if cell_size < MIN_CELL_SIZE:
        raise ConfigError(f"Cell size must be at least {MIN_CELL_SIZE} pixels")
    grid = dungeon.grid
    total_w = grid.width * cell_size
    total_h = grid.height * cell_size
    pad = cell_size * 2 // 10
    sw = pad // 2
    font = pad * 3

    lines: List[str] = [
        '<?xml version="1.0" encoding="UTF-8" standalone="no"?>',
        f'<svg width="{total_w}" height="{total_h}" viewBox="0 0 {total_w} {total_h}" '
        'xmlns="http://www.w3.org/2000/svg">',
        STYLE.format(size=cell_size, sw=sw, font=font),
    ]
    for cell in grid.iter_cells():
        lines.append(f'  <rect class="cell {cell.cell_type}" x="{cell.x * cell_size}" y="{cell.y * cell_size}" />')

    for cell in grid.iter_cells():
        if not cell.is_corridor or not cell.has_exit:
            continue
        for direction in (NORTH, EAST, SOUTH, WEST):
            state = cell.door(direction)
            if state == DOOR_NONE:
                continue
            thick = max(2, pad // 2) if state == DOOR_CLOSED else max(1, pad // 4)
            lines.append(_door_rect(cell.x * cell_size, cell.y * cell_size, direction, state, cell_size, thick))

    for room in dungeon.rooms:
        text_x = room.x * cell_size + pad
        text_y = room.y * cell_size + pad * 2.75
        lines.append(f'  <text x="{text_x}" y="{text_y}">{room.number}</text>')

    lines.append("</svg>")
    return "\n".join(lines) + "\n"
