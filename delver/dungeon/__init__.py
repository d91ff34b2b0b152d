"""Public dungeon package interface."""

from .cells import Cell
from .config import ConfigError, DungeonConfig, ROOM_DENSITIES
from .grid import Grid
from .pipeline import Dungeon, generate
from .rooms import Room
from .tiles import (
    CORRIDOR,
    DOOR_CLOSED,
    DOOR_NONE,
    DOOR_OPEN,
    ROCK,
    ROOM,
)  # noqa: F401

__all__ = [
    "Cell",
    "ConfigError",
    "Dungeon",
    "DungeonConfig",
    "Grid",
    "ROOM_DENSITIES",
    "Room",
    "generate",
    "ROCK",
    "ROOM",
    "CORRIDOR",
    "DOOR_NONE",
    "DOOR_OPEN",
    "DOOR_CLOSED",
]
