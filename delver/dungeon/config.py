import random
from dataclasses import dataclass
from typing import Optional

from ..logging_utils import get_logger

MIN_DIMENSION = 13
MIN_CELL_SIZE = 24
MAX_RANDOM_SEED = 99999

# Rough room frequency -> multiplier applied to (width + height)
ROOM_DENSITIES = {
    "sparse": 0.25,
    "default": 1.0,
    "dense": 2.0,
}


class ConfigError(ValueError):
    """Raised when a generation configuration is rejected before generation starts."""


def resolve_seed(seed: Optional[int], rng=None) -> int:
    """Return ``seed`` unchanged, or a fresh random seed when it is None.

    0 is a valid deterministic seed.
    """
    if seed is not None:
        return int(seed)
    if rng is None:
        rng = random
    return rng.randrange(MAX_RANDOM_SEED)


def room_tries_for(width: int, height: int, rooms: str = "default") -> int:
    density = rooms.lower()
    if density not in ROOM_DENSITIES:
        raise ConfigError(
            f"Rooms must be one of {', '.join(sorted(ROOM_DENSITIES))}, but got `{rooms}`"
        )
    return int((width + height) * ROOM_DENSITIES[density])


@dataclass
class DungeonConfig:
    seed: Optional[int] = None
    width: int = 41
    height: int = 21
    rooms: str = "default"
    room_tries: Optional[int] = None
    room_margin: int = 0
    winding_percent: int = 30
    extra_connector_chance: int = 20
    column_width: int = 5
    cell_size: int = 32

    def __post_init__(self):
        if self.room_tries is None and self.rooms.lower() in ROOM_DENSITIES:
            self.room_tries = room_tries_for(self.width, self.height, self.rooms)

    @classmethod
    def from_options(
        cls,
        seed: Optional[int] = None,
        width: int = 41,
        height: int = 21,
        rooms: str = "default",
        cell_size: int = 32,
        **extra,
    ) -> "DungeonConfig":
        """Build a config the way an interactive caller would.

        Even dimensions are forced odd (the generator itself never corrects,
        it only rejects), the seed is resolved and room tries are derived from
        the density selector. The result is validated before being returned.
        """
        if width < MIN_DIMENSION or height < MIN_DIMENSION:
            raise ConfigError(f"Width and height must be at least {MIN_DIMENSION}")
        if width % 2 == 0 or height % 2 == 0:
            if width % 2 == 0:
                width += 1
            if height % 2 == 0:
                height += 1
            get_logger("delver.config").info(event="dimensions_forced_odd", width=width, height=height)
        cfg = cls(
            seed=resolve_seed(seed),
            width=width,
            height=height,
            rooms=rooms.lower(),
            room_tries=room_tries_for(width, height, rooms),
            cell_size=cell_size,
            **extra,
        )
        cfg.validate()
        return cfg

    def validate(self) -> "DungeonConfig":
        errors = []
        if self.width < MIN_DIMENSION:
            errors.append(f"Width must be at least {MIN_DIMENSION}")
        if self.height < MIN_DIMENSION:
            errors.append(f"Height must be at least {MIN_DIMENSION}")
        if self.width % 2 == 0 or self.height % 2 == 0:
            errors.append("Dungeon dimensions must be odd")
        if self.rooms.lower() not in ROOM_DENSITIES:
            errors.append(f"Rooms must be one of {', '.join(sorted(ROOM_DENSITIES))}, but got `{self.rooms}`")
        if self.room_tries is None or self.room_tries < 1:
            errors.append("Room tries must be a positive integer")
        if self.room_margin < 0:
            errors.append("Room margin cannot be negative")
        if not 0 <= self.winding_percent <= 100:
            errors.append("Winding percent must be between 0 and 100")
        if self.extra_connector_chance < 1:
            errors.append("Extra connector chance must be at least 1")
        if self.column_width < 1:
            errors.append("Column width must be at least 1")
        if self.cell_size < MIN_CELL_SIZE:
            errors.append(f"Cell size must be at least {MIN_CELL_SIZE} pixels")
        if errors:
            raise ConfigError("; ".join(errors))
        return self

    def to_dict(self):
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "rooms": self.rooms,
            "room_tries": self.room_tries,
            "room_margin": self.room_margin,
            "winding_percent": self.winding_percent,
            "extra_connector_chance": self.extra_connector_chance,
            "column_width": self.column_width,
            "cell_size": self.cell_size,
        }


__all__ = [
    "ConfigError",
    "DungeonConfig",
    "MIN_CELL_SIZE",
    "MIN_DIMENSION",
    "ROOM_DENSITIES",
    "resolve_seed",
    "room_tries_for",
]
