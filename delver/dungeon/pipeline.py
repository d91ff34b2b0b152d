"""Pipeline orchestration for dungeon generation.

Provides the public Dungeon class used by renderers, the HTTP API and the CLI.
Each phase fully completes before the next one reads the grid; the generation
session (`Generator`) is the only holder of random and region state.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional
import os
import time

from ..logging_utils import get_logger
from .cells import Cell
from .config import DungeonConfig, resolve_seed
from .connectivity import connect_regions, ensure_room_connectivity, open_components
from .doors import assign_doors
from .generator import Generator
from .grid import Grid
from .maze import fill_with_mazes
from .metrics import init_metrics
from .pruning import eliminate_redundant_entrances, eliminate_same_corridor_entrances, remove_dead_ends
from .rooms import Room, place_rooms, renumber_rooms

log = get_logger("delver.pipeline")


@dataclass
class Dungeon:
    config: DungeonConfig = field(default_factory=DungeonConfig)
    enable_metrics: bool = True

    def __post_init__(self):
        # 0 is a valid deterministic seed; None => random, resolved on a private copy
        if self.config.seed is None:
            self.config = replace(self.config, seed=resolve_seed(None))
        if 'DELVER_ENABLE_GENERATION_METRICS' in os.environ:
            val = os.environ.get('DELVER_ENABLE_GENERATION_METRICS', '').lower()
            self.enable_metrics = val not in {'0', 'false', 'no', ''}
        self.config.validate()
        self.metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        self._run_pipeline()

    @property
    def seed(self) -> int:
        return self.config.seed

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def rooms(self) -> List[Room]:
        return self.grid.rooms

    def cell(self, x: int, y: int) -> Optional[Cell]:
        return self.grid.cell(x, y)

    def _run_pipeline(self):
        """Execute ordered generation phases with lightweight per-phase timing.

        Phase durations land in `metrics['phase_ms']` when metrics are enabled.
        """
        if self.enable_metrics:
            start = time.perf_counter()
            phase_times = {}

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = round((time.perf_counter() - ps) * 1000, 3)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        cfg = self.config
        session = Generator(cfg, self.metrics)
        self.grid: Grid = session.grid

        placed = _phase('place_rooms', place_rooms, session, cfg.room_tries, cfg.room_margin)
        _phase('fill_with_mazes', fill_with_mazes, session)
        # Connectivity repair: sealed rooms first, then region merging
        _phase('ensure_room_connectivity', ensure_room_connectivity, session)
        _phase('connect_regions', connect_regions, session)
        _phase('remove_dead_ends', remove_dead_ends, session)
        _phase('entrances_per_wall', eliminate_redundant_entrances, session)
        _phase('remove_dead_ends_after_walls', remove_dead_ends, session)
        _phase('entrances_per_corridor', eliminate_same_corridor_entrances, session)
        _phase('remove_dead_ends_after_corridors', remove_dead_ends, session)
        _phase('assign_doors', assign_doors, session)
        _phase('renumber_rooms', renumber_rooms, self.grid, cfg.column_width)
        self.regions = session.regions

        if self.enable_metrics:
            self.metrics['rooms_placed'] = placed
            self.metrics['regions'] = session.region_count
            self.metrics['runtime_ms'] = round((time.perf_counter() - start) * 1000, 3)
            self.metrics['phase_ms'] = phase_times
        log.info(
            event="dungeon_generated",
            seed=cfg.seed,
            width=cfg.width,
            height=cfg.height,
            rooms=len(self.rooms),
            runtime_ms=self.metrics.get('runtime_ms'),
        )

    def components(self) -> int:
        """Separate walkable components (1 for a fully connected dungeon)."""
        return open_components(self.grid)

    def to_dict(self):
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "rooms": [r.to_dict() for r in self.rooms],
            "cells": [c.to_dict() for c in self.grid.iter_cells()],
        }


def generate(config: Optional[DungeonConfig] = None, **kwargs) -> Dungeon:
    """Convenience wrapper: ``generate(DungeonConfig(seed=42, width=15, height=15))``."""
    if config is None:
        config = DungeonConfig(**kwargs)
    return Dungeon(config)
