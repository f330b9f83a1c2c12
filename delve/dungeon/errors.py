"""Generation error taxonomy.

``ConfigurationError`` is raised at the configuration boundary, before any
grid is allocated. ``InvariantViolation`` marks states that validated
configuration can never produce; nothing inside the generator catches it.
"""
from __future__ import annotations

from typing import Any, Dict


class DungeonError(Exception):
    """Base class for dungeon generation failures."""


class ConfigurationError(DungeonError):
    def __init__(self, field: str, message: str, code: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "error": self.message, "code": self.code}


class InvariantViolation(DungeonError):
    pass


__all__ = ["DungeonError", "ConfigurationError", "InvariantViolation"]
