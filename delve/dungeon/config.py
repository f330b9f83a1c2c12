from __future__ import annotations

import hashlib
import os
import random
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ConfigurationError

DIMENSION_BOUNDS: Tuple[int, int] = (4, 100)
ROOM_DIMENSION_BOUNDS: Tuple[int, int] = (2, 10)
BIG_ROOM_RATE_BOUNDS: Tuple[int, int] = (0, 100)
WALL_THICKNESS_BOUNDS: Tuple[int, int] = (1, 10)

# Flat setting name -> (bounds, env var)
SETTINGS: Dict[str, Tuple[Tuple[int, int], str]] = {
    "width": (DIMENSION_BOUNDS, "DUNGEON_WIDTH"),
    "height": (DIMENSION_BOUNDS, "DUNGEON_HEIGHT"),
    "min_width": (ROOM_DIMENSION_BOUNDS, "DUNGEON_MIN_ROOM_WIDTH"),
    "min_height": (ROOM_DIMENSION_BOUNDS, "DUNGEON_MIN_ROOM_HEIGHT"),
    "big_room_rate": (BIG_ROOM_RATE_BOUNDS, "DUNGEON_BIG_ROOM_RATE"),
    "max_wall_thickness_in_area": (WALL_THICKNESS_BOUNDS, "DUNGEON_MAX_WALL_THICKNESS"),
}


@dataclass(frozen=True)
class RoomSettings:
    min_width: int = 2
    min_height: int = 2
    big_room_rate: int = 20
    max_wall_thickness_in_area: int = 2


@dataclass(frozen=True)
class DungeonConfig:
    width: int = 40
    height: int = 30
    room: RoomSettings = field(default_factory=RoomSettings)
    seed: Optional[int] = None

    def validate(self) -> "DungeonConfig":
        """Raise ConfigurationError for the first invalid setting; return self otherwise."""
        values = self.flat()
        for name, ((lo, hi), _env) in SETTINGS.items():
            _check_int(name, values[name])
            if not lo <= values[name] <= hi:
                raise ConfigurationError(name, f"must be between {lo} and {hi}", "range")
        # The root area has to hold at least one room plus a wall margin each side
        if self.width < self.room.min_width + 2:
            raise ConfigurationError("width", "too narrow for min_width plus margins", "too_small")
        if self.height < self.room.min_height + 2:
            raise ConfigurationError("height", "too short for min_height plus margins", "too_small")
        if self.seed is not None:
            _check_int("seed", self.seed)
        return self

    def flat(self) -> Dict[str, Any]:
        out = {"width": self.width, "height": self.height}
        out.update(asdict(self.room))
        return out

    def to_dict(self) -> Dict[str, Any]:
        out = self.flat()
        out["seed"] = self.seed
        return out

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], defaults: "DungeonConfig | None" = None) -> "DungeonConfig":
        """Build a config from flat settings (query args, JSON bodies, CLI flags).

        Missing or ``None`` keys fall back to ``defaults``. Numeric strings are
        accepted; the result is not validated.
        """
        base = (defaults or cls()).to_dict()
        for name in list(SETTINGS) + ["seed"]:
            raw = data.get(name)
            if raw is None or raw == "":
                continue
            base[name] = _coerce_int(name, raw)
        room = RoomSettings(
            min_width=base["min_width"],
            min_height=base["min_height"],
            big_room_rate=base["big_room_rate"],
            max_wall_thickness_in_area=base["max_wall_thickness_in_area"],
        )
        return cls(width=base["width"], height=base["height"], room=room, seed=base["seed"])


def default_config_from_env(environ: Mapping[str, str] | None = None) -> DungeonConfig:
    env = os.environ if environ is None else environ
    data = {name: env.get(var) for name, (_bounds, var) in SETTINGS.items()}
    return DungeonConfig.from_mapping(data)


MAX_SEED = 9223372036854775807


def coerce_seed(payload_seed: Any) -> int:
    """Convert a provided seed (int or str) into a bounded non-negative int.

    Digit strings are taken literally, other strings are hashed so the same
    text always names the same dungeon, and a missing or blank seed draws a
    random one.
    """
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, bool):
        raise ConfigurationError("seed", "expected int or string", "type")
    if isinstance(payload_seed, int):
        return payload_seed % MAX_SEED
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % MAX_SEED
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % MAX_SEED
    raise ConfigurationError("seed", "expected int or string", "type")


def _check_int(name: str, value: Any) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(name, "expected int", "type")


def _coerce_int(name: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise ConfigurationError(name, "expected int", "type")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    raise ConfigurationError(name, "expected int", "type")


__all__ = [
    "RoomSettings",
    "DungeonConfig",
    "default_config_from_env",
    "coerce_seed",
    "SETTINGS",
    "DIMENSION_BOUNDS",
    "ROOM_DIMENSION_BOUNDS",
    "BIG_ROOM_RATE_BOUNDS",
    "WALL_THICKNESS_BOUNDS",
]
