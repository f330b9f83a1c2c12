"""
project: Delve
module: __init__.py
License: MIT

Flask application setup.

Wires the Flask app and the dungeon blueprint together. Configuration is
sourced from environment variables (optionally via a local .env file) with
defaults suitable for development.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from delve.dungeon import ConfigurationError, DungeonConfig, default_config_from_env, metrics_enabled_from_env
from delve.logging_utils import log

# Load .env if present so DUNGEON_* defaults can be supplied without exporting
# shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)


def _default_dungeon_config(environ=None) -> DungeonConfig:
    """Env-supplied generation defaults, or the built-in ones when the env is invalid."""
    try:
        return default_config_from_env(environ).validate()
    except ConfigurationError as e:
        log.error(event="dungeon_env_config_invalid", field=e.field, error=e.message, code=e.code)
        return DungeonConfig()


app.config.update(
    # Dungeon generation defaults / feature flags
    DUNGEON_DEFAULT_CONFIG=_default_dungeon_config(),
    DUNGEON_ENABLE_GENERATION_METRICS=metrics_enabled_from_env(),
    DUNGEON_DISABLE_CACHE=bool(os.getenv("DUNGEON_DISABLE_CACHE", "0") == "1"),
)

# Register HTTP blueprints (import after app created)
from delve.routes.dungeon_api import bp_dungeon  # noqa: E402

app.register_blueprint(bp_dungeon)


def create_app():
    """Return the Flask app instance."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal server error", "error_id": error_id}), 500
