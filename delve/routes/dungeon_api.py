"""
project: Delve
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

Exposes layout generation over HTTP: a caller submits grid dimensions, room
settings and an optional seed and receives the occupancy grid plus the rooms
and passages that produced it.
"""

import os
import threading

from flask import Blueprint, current_app, jsonify, request

from delve.dungeon import ConfigurationError, DungeonConfig, DungeonGenerator, coerce_seed
from delve.dungeon.config import SETTINGS
from delve.dungeon.tiles import to_rows
from delve.logging_utils import get_logger

log = get_logger("delve.api")

# Small in-process cache config->Layout. Keyed by the full config (seed included)
# so repeated requests for the same dungeon skip regeneration.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()
_DUNGEON_CACHE_MAX = 8  # small LRU-ish manual cap


def _generator_for(config: DungeonConfig) -> DungeonGenerator:
    enable_metrics = bool(current_app.config.get("DUNGEON_ENABLE_GENERATION_METRICS", True))
    return DungeonGenerator(config, enable_metrics=enable_metrics)


def get_cached_dungeon(config: DungeonConfig):
    if current_app.config.get("DUNGEON_DISABLE_CACHE") or os.environ.get("DUNGEON_DISABLE_CACHE") == "1":
        return _generator_for(config).run()
    with _dungeon_cache_lock:
        layout = _dungeon_cache.get(config)
        if layout is not None:
            return layout
    layout = _generator_for(config).run()
    with _dungeon_cache_lock:
        _dungeon_cache[config] = layout
        if len(_dungeon_cache) > _DUNGEON_CACHE_MAX:
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != config:
                _dungeon_cache.pop(first_key, None)
    return layout


bp_dungeon = Blueprint("dungeon", __name__)


@bp_dungeon.route("/api/dungeon/generate", methods=["GET", "POST"])
def generate_dungeon():
    """Generate (or fetch from cache) a dungeon layout.

    Settings come from the query string (GET) or a JSON body (POST); any key
    left out falls back to the configured defaults:
      width, height, min_width, min_height, big_room_rate,
      max_wall_thickness_in_area, seed (int or string)

    Response: { seed, config, width, height, grid: grid[y][x] of 0/1,
                rooms: [{x,y,width,height}], passages: [[a,b]], metrics }
    Invalid settings or a non-object JSON body: 400 { field, error, code }
    """
    if request.method == "POST":
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "expected JSON object", "field": None, "code": "type"}), 400
    else:
        data = request.args.to_dict()
    defaults = current_app.config.get("DUNGEON_DEFAULT_CONFIG") or DungeonConfig()
    try:
        params = dict(data)
        params["seed"] = coerce_seed(data.get("seed"))
        config = DungeonConfig.from_mapping(params, defaults).validate()
    except ConfigurationError as e:
        log.info(event="dungeon_config_rejected", field=e.field, code=e.code)
        return jsonify(e.to_dict()), 400

    layout = get_cached_dungeon(config)
    # Row-major (y first) so clients can index grid[y][x]
    return jsonify(
        {
            "seed": layout.seed,
            "config": config.to_dict(),
            "width": config.width,
            "height": config.height,
            "grid": to_rows(layout.grid),
            "rooms": [area.room.to_dict() for area in layout.areas],
            "passages": [[p.a, p.b] for p in layout.passages],
            "metrics": layout.metrics,
        }
    )


@bp_dungeon.route("/api/dungeon/config")
def dungeon_config():
    """Return default settings and the accepted range of each one."""
    defaults = current_app.config.get("DUNGEON_DEFAULT_CONFIG") or DungeonConfig()
    return jsonify(
        {
            "defaults": defaults.flat(),
            "bounds": {name: list(bounds) for name, (bounds, _env) in SETTINGS.items()},
        }
    )
