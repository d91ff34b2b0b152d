"""Generation session: the single owner of mutable generation state.

One ``Generator`` is created per dungeon. It holds the grid being built, the
seeded random stream every phase draws from and the monotonically increasing
region counter. Nothing here is module-global, so independent generations in
the same process never disturb each other's random sequence.
"""
from __future__ import annotations
import random
from typing import Any, Dict, Optional

from .config import DungeonConfig
from .grid import Grid
from .metrics import init_metrics
from .tiles import CORRIDOR, NO_REGION


class Generator:
    def __init__(self, config: DungeonConfig, metrics: Optional[Dict[str, Any]] = None):
        self.config = config
        self.seed = config.seed
        self.rng = random.Random(config.seed)
        self.grid = Grid(config.width, config.height)
        self.current_region = NO_REGION
        # Set by the region connector; None means no merges happened yet.
        self.regions = None
        self.metrics = metrics if metrics is not None else init_metrics()

    @property
    def region_count(self) -> int:
        return self.current_region + 1

    def start_region(self) -> int:
        self.current_region += 1
        return self.current_region

    def carve(self, x: int, y: int, region: Optional[int] = None) -> None:
        cell = self.grid.cells[x][y]
        cell.cell_type = CORRIDOR
        cell.region = self.current_region if region is None else region

    def canonical_region(self, region: int) -> int:
        """Region id as merged by the connector (identity before connection)."""
        if self.regions is None or region == NO_REGION:
            return region
        return self.regions.find(region)

    def bump(self, key: str, amount: int = 1) -> None:
        if key in self.metrics:
            self.metrics[key] += amount
