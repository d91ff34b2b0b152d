# Cell type, door state and direction constants centralized for modular imports
ROCK = "rock"
ROOM = "room"
CORRIDOR = "corridor"

DOOR_NONE = "none"
DOOR_OPEN = "open"
DOOR_CLOSED = "closed"

NORTH = "north"
EAST = "east"
SOUTH = "south"
WEST = "west"

# Scan order matters for determinism: every stage walks neighbours N, E, S, W.
DIRECTIONS = [
    (NORTH, 0, -1),
    (EAST, 1, 0),
    (SOUTH, 0, 1),
    (WEST, -1, 0),
]
OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

NO_REGION = -1

__all__ = [
    "ROCK",
    "ROOM",
    "CORRIDOR",
    "DOOR_NONE",
    "DOOR_OPEN",
    "DOOR_CLOSED",
    "NORTH",
    "EAST",
    "SOUTH",
    "WEST",
    "DIRECTIONS",
    "OPPOSITE",
    "NO_REGION",
]
