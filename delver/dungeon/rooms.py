from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Tuple

from .tiles import ROOM


@dataclass(frozen=True)
class Room:
    number: int
    x: int
    y: int
    width: int
    height: int

    def cells(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.x, self.x + self.width):
            for iy in range(self.y, self.y + self.height):
                yield ix, iy

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.width // 2, self.y + self.height // 2)

    def overlaps(self, other: "Room", margin: int = 0) -> bool:
        """Strict interval overlap on both axes, optionally padded by ``margin`` cells."""
        return (
            self.x - margin < other.x + other.width
            and self.x + self.width + margin > other.x
            and self.y - margin < other.y + other.height
            and self.y + self.height + margin > other.y
        )

    def walls(self) -> List[List[Tuple[int, int]]]:
        """The four strips just outside each edge, ordered north, south, west, east."""
        return [
            [(ix, self.y - 1) for ix in range(self.x, self.x + self.width)],
            [(ix, self.y + self.height) for ix in range(self.x, self.x + self.width)],
            [(self.x - 1, iy) for iy in range(self.y, self.y + self.height)],
            [(self.x + self.width, iy) for iy in range(self.y, self.y + self.height)],
        ]

    def perimeter(self) -> List[Tuple[int, int]]:
        # north/south interleaved by x, then west/east interleaved by y
        tiles = []
        for ix in range(self.x, self.x + self.width):
            tiles.append((ix, self.y - 1))
            tiles.append((ix, self.y + self.height))
        for iy in range(self.y, self.y + self.height):
            tiles.append((self.x - 1, iy))
            tiles.append((self.x + self.width, iy))
        return tiles

    def to_dict(self):
        return {"number": self.number, "x": self.x, "y": self.y, "width": self.width, "height": self.height}


ROOM_EXTRA_SIZE = 1


def place_rooms(session, tries: int, margin: int = 0) -> int:
    """Scatter non-overlapping rooms over the grid by rejection sampling.

    Each attempt draws an odd square size, stretches one axis by an even
    "rectangularity" bonus and drops the room on the odd lattice. Overlapping
    candidates are discarded without retry. Returns the number of rooms placed.
    """
    grid = session.grid
    rng = session.rng
    placed = 0
    for _ in range(tries):
        size = (rng.randrange(2 + ROOM_EXTRA_SIZE) + 1) * 2 + 1
        rectangularity = rng.randrange(1 + size // 2) * 2
        width = height = size
        if rng.randrange(2) == 0:
            width += rectangularity
        else:
            height += rectangularity

        span_x = (grid.width - width) // 2
        span_y = (grid.height - height) // 2
        if span_x <= 0 or span_y <= 0:
            # would not fit inside the rock border
            continue
        x = rng.randrange(span_x) * 2 + 1
        y = rng.randrange(span_y) * 2 + 1

        room = Room(placed + 1, x, y, width, height)
        if any(room.overlaps(existing, margin) for existing in grid.rooms):
            continue

        grid.add_room(room)
        region = session.start_region()
        for ix, iy in room.cells():
            cell = grid.cells[ix][iy]
            cell.cell_type = ROOM
            cell.region = region
        placed += 1
    return placed


def renumber_rooms(grid, column_width: int = 5) -> List[Room]:
    """Renumber rooms in a column snake so printed maps read naturally.

    Rooms are bucketed by ``x // column_width``; buckets are walked left to
    right, top-down in the first, bottom-up in the next and so on. The grid's
    room list is replaced by the renumbered copies in their new order.
    """
    columns: Dict[int, List[Room]] = {}
    for room in grid.rooms:
        columns.setdefault(room.x // column_width, []).append(room)

    renumbered: List[Room] = []
    ascending = True
    for key in sorted(columns):
        ordered = sorted(columns[key], key=lambda r: r.y if ascending else -r.y)
        for room in ordered:
            renumbered.append(replace(room, number=len(renumbered) + 1))
        ascending = not ascending

    grid.replace_rooms(renumbered)
    return renumbered


__all__ = ["Room", "place_rooms", "renumber_rooms"]
