"""Corridor graph between leaf areas.

Candidates are every pair of touching areas. Pruning then removes candidates
in random order, keeping an edge only when dropping it would split the area
graph. What survives is a minimal connected subgraph of the adjacency graph:
removing any kept passage disconnects some area.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Set

from .areas import Area
from .errors import InvariantViolation
from .random_source import RandomSource
from .tiles import FLOOR, Coord2D, Grid


@dataclass(frozen=True)
class Passage:
    """Unordered pair of area ids (indices into the leaf list), stored as ``a < b``."""

    a: int
    b: int

    def __post_init__(self):
        if self.a == self.b:
            raise InvariantViolation(f"passage from area {self.a} to itself")
        if self.a > self.b:
            lo, hi = self.b, self.a
            object.__setattr__(self, "a", lo)
            object.__setattr__(self, "b", hi)

    def touches(self, area_id: int) -> bool:
        return area_id in (self.a, self.b)

    def other(self, area_id: int) -> int:
        if area_id == self.a:
            return self.b
        if area_id == self.b:
            return self.a
        raise InvariantViolation(f"area {area_id} is not an endpoint of {self}")


def is_adjacent(area1: Area, area2: Area) -> bool:
    """True when the two areas share an edge segment of at least one cell."""
    if area1 is area2:
        return False
    left, right = (area1, area2) if area1.x < area2.x else (area2, area1)
    bottom, top = (area1, area2) if area1.y < area2.y else (area2, area1)

    if left.right == right.x and (
        left.y <= right.y < left.top or right.y <= left.y < right.top
    ):
        return True
    if bottom.top == top.y and (
        bottom.x <= top.x < bottom.right or top.x <= bottom.x < top.right
    ):
        return True
    return False


def candidate_passages(areas: Sequence[Area]) -> List[Passage]:
    candidates = []
    for i in range(len(areas)):
        for j in range(i + 1, len(areas)):
            if is_adjacent(areas[i], areas[j]):
                candidates.append(Passage(i, j))
    return candidates


def is_all_connected(area_count: int, passages: Iterable[Passage]) -> bool:
    """Breadth-first reachability from area 0 over ``passages``."""
    if area_count <= 1:
        return True
    links: Dict[int, List[int]] = {}
    for p in passages:
        links.setdefault(p.a, []).append(p.b)
        links.setdefault(p.b, []).append(p.a)
    q = deque([0])
    seen: Set[int] = {0}
    while q:
        current = q.popleft()
        for nxt in links.get(current, ()):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return len(seen) == area_count


def build_passages(areas: Sequence[Area], rng: RandomSource) -> List[Passage]:
    pool = candidate_passages(areas)
    kept: List[Passage] = []
    while pool:
        target = pool.pop(rng.next(0, len(pool)))
        if not is_all_connected(len(areas), kept + pool):
            kept.append(target)
    return kept


def write_passage(passage: Passage, areas: Sequence[Area], grid: Grid, rng: RandomSource) -> List[Coord2D]:
    """Carve an orthogonal random walk between random points of both rooms.

    Every step moves one cell closer to the target, so the walk always ends.
    Returns the visited cells, both endpoints included.
    """
    src = areas[passage.a].room
    dst = areas[passage.b].room
    fx = rng.next(src.x, src.x + src.width)
    fy = rng.next(src.y, src.y + src.height)
    tx = rng.next(dst.x, dst.x + dst.width)
    ty = rng.next(dst.y, dst.y + dst.height)
    path = []
    while fx != tx or fy != ty:
        grid[fx][fy] = FLOOR
        path.append((fx, fy))
        if (fx != tx and fy != ty and rng.coin()) or fy == ty:
            fx += 1 if tx > fx else -1
        else:
            fy += 1 if ty > fy else -1
    # The target lies inside a room that is already floor; mark it anyway
    grid[tx][ty] = FLOOR
    path.append((tx, ty))
    return path


__all__ = ["Passage", "is_adjacent", "candidate_passages", "is_all_connected", "build_passages", "write_passage"]
