"""Public dungeon package interface."""

from .areas import Area
from .config import DungeonConfig, RoomSettings, coerce_seed, default_config_from_env
from .errors import ConfigurationError, DungeonError, InvariantViolation
from .generator import DungeonGenerator, Layout, generate, metrics_enabled_from_env
from .passages import Passage, build_passages, is_adjacent, is_all_connected
from .random_source import RandomSource
from .rooms import Room
from .tiles import FLOOR, WALL

__all__ = [
    "Area",
    "ConfigurationError",
    "DungeonConfig",
    "DungeonError",
    "DungeonGenerator",
    "FLOOR",
    "InvariantViolation",
    "Layout",
    "Passage",
    "RandomSource",
    "Room",
    "RoomSettings",
    "WALL",
    "build_passages",
    "coerce_seed",
    "default_config_from_env",
    "generate",
    "is_adjacent",
    "is_all_connected",
    "metrics_enabled_from_env",
]
