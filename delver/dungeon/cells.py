from typing import Dict

from .tiles import CORRIDOR, DOOR_NONE, NO_REGION, ROCK, ROOM


class Cell:
    """Single grid unit: position, type, per-direction door state and region id."""
    __slots__ = ("x", "y", "cell_type", "north", "south", "east", "west", "region")

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.cell_type = ROCK
        self.north = DOOR_NONE
        self.south = DOOR_NONE
        self.east = DOOR_NONE
        self.west = DOOR_NONE
        self.region = NO_REGION

    @property
    def in_room(self) -> bool:
        return self.cell_type == ROOM

    @property
    def is_corridor(self) -> bool:
        return self.cell_type == CORRIDOR

    @property
    def is_open(self) -> bool:
        return self.cell_type != ROCK

    @property
    def has_exit(self) -> bool:
        return any(state != DOOR_NONE for state in (self.north, self.south, self.east, self.west))

    def door(self, direction: str) -> str:
        return getattr(self, direction)

    def set_door(self, direction: str, state: str) -> None:
        setattr(self, direction, state)

    def doors(self) -> Dict[str, str]:
        return {"north": self.north, "south": self.south, "east": self.east, "west": self.west}

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "type": self.cell_type,
            "doors": self.doors(),
            "region": self.region,
        }

    def __repr__(self):
        return f"Cell({self.x}, {self.y}, {self.cell_type}, region={self.region})"
