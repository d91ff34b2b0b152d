"""
project: Delver
module: __init__.py
License: MIT

Flask application factory.

The dungeon generator itself lives in `delver.dungeon` and has no web
dependencies; this module only wires the HTTP rendering surface together.
Configuration is sourced from environment variables (optionally via a local
.env file) with reasonable defaults for development.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "0.4.0"


def create_app(overrides: dict | None = None) -> Flask:
    # Load .env if present so DELVER_* settings can be supplied without exporting shell variables.
    load_dotenv()
    app = Flask(__name__)
    # keep payload keys in the order the renderers build them
    app.json.sort_keys = False
    app.config.update(
        DELVER_CACHE_SIZE=int(os.getenv("DELVER_CACHE_SIZE", "8")),
        DELVER_MAX_DIMENSION=int(os.getenv("DELVER_MAX_DIMENSION", "201")),
    )
    if overrides:
        app.config.update(overrides)

    from delver.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    @app.route("/api/health")
    def health():
        return jsonify({"status": "ok", "version": __version__})

    # In non-debug mode, answer unexpected errors with a short id and log details
    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app
