"""
project: Delver
module: dungeon_api.py
License: MIT

Dungeon rendering API routes.

Every endpoint accepts the same query parameters (all optional):
  seed    int, or any string (hashed to a stable int)
  width   odd int >= 13
  height  odd int >= 13
  rooms   sparse | default | dense

and returns the same generated layout in a different representation.
"""

import hashlib
import random
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from delver.dungeon import ConfigError, Dungeon, DungeonConfig
from delver.render import render_ascii, render_svg
from delver.render.json_dump import dungeon_to_dict

bp_dungeon = Blueprint("dungeon", __name__)

SEED_MAX = 2**63 - 1

# Simple in-process cache config-key -> Dungeon. Thread-safe with a lock because the dev server may use threads.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()


def _coerce_seed(raw):
    """Convert provided seed (int-like or str) into a bounded non-negative int."""
    if raw is None:
        return random.randint(1, 99999)
    s = str(raw).strip()
    if not s:
        return random.randint(1, 99999)
    if s.lstrip("-").isdigit():
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got `{raw}`")


def config_from_request() -> DungeonConfig:
    width = _int_arg("width", 41)
    height = _int_arg("height", 21)
    limit = current_app.config["DELVER_MAX_DIMENSION"]
    if width > limit or height > limit:
        raise ConfigError(f"Dungeon dimensions must not exceed {limit}")
    cfg = DungeonConfig(
        seed=_coerce_seed(request.args.get("seed")),
        width=width,
        height=height,
        rooms=(request.args.get("rooms") or "default").lower(),
    )
    return cfg.validate()


def get_cached_dungeon(cfg: DungeonConfig) -> Dungeon:
    key = (cfg.seed, cfg.width, cfg.height, cfg.rooms)
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
    if dungeon is not None:
        return dungeon
    dungeon = Dungeon(cfg)
    cap = current_app.config["DELVER_CACHE_SIZE"]
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        while len(_dungeon_cache) > cap:
            first_key = next(iter(_dungeon_cache.keys()))
            _dungeon_cache.pop(first_key, None)
    return dungeon


def clear_cache() -> None:
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


@bp_dungeon.errorhandler(ConfigError)
def _bad_config(err):
    return jsonify({"error": str(err)}), 400


@bp_dungeon.route("/api/dungeon")
def dungeon_json():
    """Structured dump: seed, size, rooms and every cell with doors and region."""
    dungeon = get_cached_dungeon(config_from_request())
    include_metrics = request.args.get("metrics") in ("1", "true", "yes")
    return jsonify(dungeon_to_dict(dungeon, include_metrics=include_metrics))


@bp_dungeon.route("/api/dungeon/svg")
def dungeon_svg():
    cell_size = _int_arg("cellsize", 32)
    dungeon = get_cached_dungeon(config_from_request())
    return Response(render_svg(dungeon, cell_size), mimetype="image/svg+xml")


@bp_dungeon.route("/api/dungeon/ascii")
def dungeon_ascii():
    dungeon = get_cached_dungeon(config_from_request())
    numbers = request.args.get("numbers", "1") not in ("0", "false", "no")
    return Response(render_ascii(dungeon, show_numbers=numbers), mimetype="text/plain")
