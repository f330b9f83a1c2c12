from collections import deque

from delve.dungeon.tiles import FLOOR, floor_cells


def bfs_reachable(grid, start):
    """Return set of (x,y) floor tiles reachable from start with 4-neighbour moves."""
    if start is None:
        return set()
    w = len(grid)
    h = len(grid[0])
    sx, sy = start
    if not (0 <= sx < w and 0 <= sy < h):
        return set()
    if grid[sx][sy] != FLOOR:
        return set()
    q = deque([start])
    vis = {start}
    while q:
        x, y = q.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if 0 <= nx < w and 0 <= ny < h and (nx, ny) not in vis:
                if grid[nx][ny] == FLOOR:
                    vis.add((nx, ny))
                    q.append((nx, ny))
    return vis


def floor_regions(grid):
    """Return the list of 4-connected floor regions as sets of (x,y)."""
    remaining = set(floor_cells(grid))
    regions = []
    while remaining:
        start = next(iter(remaining))
        region = bfs_reachable(grid, start)
        regions.append(region)
        remaining -= region
    return regions


def area_components(area_count, passages):
    """Number of connected components of the area graph induced by passages."""
    links = {i: set() for i in range(area_count)}
    for p in passages:
        links[p.a].add(p.b)
        links[p.b].add(p.a)
    seen = set()
    components = 0
    for start in range(area_count):
        if start in seen:
            continue
        components += 1
        q = deque([start])
        seen.add(start)
        while q:
            cur = q.popleft()
            for nxt in links[cur]:
                if nxt not in seen:
                    seen.add(nxt)
                    q.append(nxt)
    return components


class ScriptedSource:
    """Random source replaying fixed values, clamped into each requested range."""

    def __init__(self, values, seed=None):
        self.values = list(values)
        self.seed = seed
        self.calls = []

    def next(self, lo, hi):
        self.calls.append((lo, hi))
        v = self.values.pop(0) if self.values else lo
        return min(max(v, lo), hi - 1)

    def coin(self):
        return self.next(0, 2) == 0
