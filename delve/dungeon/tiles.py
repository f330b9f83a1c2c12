"""Cell states and grid helpers.

Grids are column-major (``grid[x][y]``) like the generator's own indexing;
``to_rows`` produces the row-major copy JSON clients expect.
"""
from __future__ import annotations

from typing import Iterator, List, Tuple

WALL = 0
FLOOR = 1

WALL_CHAR = "#"
FLOOR_CHAR = "."

Grid = List[List[int]]
Coord2D = Tuple[int, int]


def new_grid(width: int, height: int) -> Grid:
    return [[WALL for _ in range(height)] for _ in range(width)]


def floor_cells(grid: Grid) -> Iterator[Coord2D]:
    for x, column in enumerate(grid):
        for y, cell in enumerate(column):
            if cell == FLOOR:
                yield x, y


def count_floor(grid: Grid) -> int:
    return sum(column.count(FLOOR) for column in grid)


def to_rows(grid: Grid) -> Grid:
    if not grid:
        return []
    return [[grid[x][y] for x in range(len(grid))] for y in range(len(grid[0]))]


def render_ascii(grid: Grid) -> str:
    """Plain text map, highest ``y`` on the first line."""
    rows = to_rows(grid)
    return "\n".join(
        "".join(FLOOR_CHAR if cell == FLOOR else WALL_CHAR for cell in row) for row in reversed(rows)
    )


__all__ = ["WALL", "FLOOR", "Grid", "Coord2D", "new_grid", "floor_cells", "count_floor", "to_rows", "render_ascii"]
