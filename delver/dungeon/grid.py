from typing import Iterator, List, Optional, Tuple

from .cells import Cell
from .config import ConfigError, MIN_DIMENSION
from .rooms import Room
from .tiles import DIRECTIONS


class Grid:
    """Fixed cell lattice plus the ordered room registry.

    Cells are indexed ``cells[x][y]`` and never reallocated after
    construction; only their type, doors and region mutate.
    """

    def __init__(self, width: int, height: int):
        if width < MIN_DIMENSION or height < MIN_DIMENSION:
            raise ConfigError(f"Dungeon dimensions must be at least {MIN_DIMENSION}, got {width}x{height}")
        if width % 2 == 0 or height % 2 == 0:
            raise ConfigError(f"Dungeon dimensions must be odd, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[List[Cell]] = [[Cell(x, y) for y in range(height)] for x in range(width)]
        self.rooms: List[Room] = []

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    def cell(self, x: int, y: int) -> Optional[Cell]:
        if not self.in_bounds(x, y):
            return None
        return self.cells[x][y]

    def iter_cells(self) -> Iterator[Cell]:
        """Every cell, x outer and y inner."""
        for column in self.cells:
            yield from column

    def neighbors(self, x: int, y: int) -> Iterator[Tuple[str, Cell]]:
        """In-bounds orthogonal neighbours as (direction, cell), N, E, S, W."""
        for direction, dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield direction, self.cells[nx][ny]

    def open_neighbor_count(self, x: int, y: int) -> int:
        return sum(1 for _d, n in self.neighbors(x, y) if n.is_open)

    def add_room(self, room: Room) -> None:
        self.rooms.append(room)

    def replace_rooms(self, rooms: List[Room]) -> None:
        self.rooms = list(rooms)

    def count(self, cell_type: str) -> int:
        return sum(1 for c in self.iter_cells() if c.cell_type == cell_type)
