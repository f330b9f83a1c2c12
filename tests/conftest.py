import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delve import create_app  # noqa: E402
from delve.dungeon import DungeonConfig, RandomSource, RoomSettings  # noqa: E402
from delve.routes import dungeon_api  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_dungeon_cache():
    """Cached layouts must not leak between tests asserting on regeneration."""
    with dungeon_api._dungeon_cache_lock:
        dungeon_api._dungeon_cache.clear()
    yield


@pytest.fixture()
def rng():
    return RandomSource(12345)


@pytest.fixture()
def room_settings():
    return RoomSettings(min_width=2, min_height=2, big_room_rate=20, max_wall_thickness_in_area=2)


@pytest.fixture()
def small_config(room_settings):
    """20x20 map with the default room settings, fixed seed."""
    return DungeonConfig(width=20, height=20, room=room_settings, seed=777)
