from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from .tiles import FLOOR, Grid


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    width: int
    height: int

    def cells(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.x, self.x + self.width):
            for iy in range(self.y, self.y + self.height):
                yield ix, iy

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def write_to_map(self, grid: Grid) -> Grid:
        """Paint the room interior as floor. Idempotent."""
        for ix, iy in self.cells():
            grid[ix][iy] = FLOOR
        return grid

    def to_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


__all__ = ["Room"]
