"""Binary space partitioning of the map into areas, one room per area.

Partitioning is round based. Every round, areas too small to split on either
axis become fixed leaves. Each remaining area first rolls against
``big_room_rate``: on a hit it stays whole as a leaf, otherwise it is split
exactly once and both halves enter the next round. The roll is repeated every
round for every area that could still split, so a high rate keeps areas whole
longer but does not exempt them from later rounds.
"""
from __future__ import annotations

from typing import List

from .config import RoomSettings
from .errors import InvariantViolation
from .random_source import RandomSource
from .rooms import Room
from .tiles import Grid


class Area:
    __slots__ = ("x", "y", "width", "height", "settings", "rng", "room")

    def __init__(self, x: int, y: int, width: int, height: int, settings: RoomSettings, rng: RandomSource):
        if width <= 0 or height <= 0:
            raise InvariantViolation(f"degenerate area {width}x{height} at ({x},{y})")
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.settings = settings
        self.rng = rng
        self.room: Room = self.generate_room()

    def __repr__(self) -> str:
        return f"Area(x={self.x}, y={self.y}, width={self.width}, height={self.height})"

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def top(self) -> int:
        return self.y + self.height

    # Smallest area that still fits a minimum room plus one wall on each side
    @property
    def min_width(self) -> int:
        return self.settings.min_width + 2

    @property
    def min_height(self) -> int:
        return self.settings.min_height + 2

    @property
    def is_dividable_horizontal(self) -> bool:
        return self.width >= self.min_width * 2

    @property
    def is_dividable_vertical(self) -> bool:
        return self.height >= self.min_height * 2

    @property
    def is_dividable(self) -> bool:
        return self.is_dividable_horizontal or self.is_dividable_vertical

    def divide(self) -> List["Area"]:
        """Partition this area recursively and return the leaf areas."""
        dividable: List[Area] = [self]
        fixed: List[Area] = []
        while dividable:
            divided: List[Area] = []
            for area in dividable:
                if not area.is_dividable:
                    fixed.append(area)
                elif self.rng.next(0, 100) < self.settings.big_room_rate:
                    fixed.append(area)
                else:
                    divided.extend(area.divide_once())
            dividable = divided
        return fixed

    def divide_once(self) -> List["Area"]:
        horizontal = self.is_dividable_horizontal
        vertical = self.is_dividable_vertical
        if horizontal and vertical:
            horizontal = self.rng.coin()
        if horizontal:
            cut = self.rng.next(self.x + self.min_width, self.x + self.width - self.min_width + 1)
            return [
                self._child(self.x, self.y, cut - self.x, self.height),
                self._child(cut, self.y, self.width - (cut - self.x), self.height),
            ]
        if vertical:
            cut = self.rng.next(self.y + self.min_height, self.y + self.height - self.min_height + 1)
            return [
                self._child(self.x, self.y, self.width, cut - self.y),
                self._child(self.x, cut, self.width, self.height - (cut - self.y)),
            ]
        return [self]

    def _child(self, x: int, y: int, width: int, height: int) -> "Area":
        return Area(x, y, width, height, self.settings, self.rng)

    def generate_room(self) -> Room:
        """Carve a room leaving a wall margin in ``[1, max_wall_thickness_in_area]`` on every side."""
        s = self.settings
        thickness = s.max_wall_thickness_in_area
        left = self.rng.next(1, min(1 + thickness, self.width - s.min_width))
        right = self.rng.next(max(self.width - thickness, left + s.min_width), self.width)
        bottom = self.rng.next(1, min(1 + thickness, self.height - s.min_height))
        top = self.rng.next(max(self.height - thickness, bottom + s.min_height), self.height)
        return Room(self.x + left, self.y + bottom, right - left, top - bottom)

    def write_to_map(self, grid: Grid) -> Grid:
        return self.room.write_to_map(grid)


__all__ = ["Area"]
