"""Structured dump of a finished dungeon."""
from __future__ import annotations
import json


def dungeon_to_dict(dungeon, include_metrics: bool = False):
    data = dungeon.to_dict()
    data["config"] = dungeon.config.to_dict()
    if include_metrics and dungeon.metrics:
        data["metrics"] = dungeon.metrics
    return data


def render_json(dungeon, include_metrics: bool = False, indent: int = 2) -> str:
    return json.dumps(dungeon_to_dict(dungeon, include_metrics), indent=indent)
