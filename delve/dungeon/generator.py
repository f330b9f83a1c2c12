"""Generation pipeline: grid init, partitioning, room carving, passage graph & carving."""
from __future__ import annotations

import os
import time
from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from ..logging_utils import get_logger
from .areas import Area
from .config import DungeonConfig
from .metrics import init_metrics
from .passages import Passage, build_passages, candidate_passages, write_passage
from .random_source import RandomSource
from .tiles import Grid, count_floor, new_grid

log = get_logger("delve.dungeon")


class Layout(NamedTuple):
    grid: Grid
    areas: List[Area]
    passages: List[Passage]
    seed: Optional[int]
    metrics: Dict[str, Any]


def metrics_enabled_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Read DUNGEON_ENABLE_GENERATION_METRICS; on unless set to 0/false/no/off or blank."""
    env = os.environ if environ is None else environ
    val = env.get("DUNGEON_ENABLE_GENERATION_METRICS", "1").strip().lower()
    return val not in {"0", "false", "no", "off", ""}


class DungeonGenerator:
    """Drive one generation run from a validated config.

    The result depends only on the config and the random sequence: the same
    seed always yields the same grid.
    """

    def __init__(
        self,
        config: DungeonConfig,
        rng: Optional[RandomSource] = None,
        enable_metrics: Optional[bool] = None,
    ):
        self.config = config.validate()
        self.rng = rng if rng is not None else RandomSource(config.seed)
        self.enable_metrics = metrics_enabled_from_env() if enable_metrics is None else enable_metrics

    @property
    def seed(self) -> Optional[int]:
        return getattr(self.rng, "seed", None)

    def run(self) -> Layout:
        if self.enable_metrics:
            metrics = init_metrics()
            phase_times: Dict[str, int] = {}
            start = time.perf_counter()

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            metrics = {}

            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        cfg = self.config
        grid = new_grid(cfg.width, cfg.height)
        root = Area(0, 0, cfg.width, cfg.height, cfg.room, self.rng)
        areas = _phase("partition", root.divide)
        _phase("rooms", self._write_rooms, areas, grid)
        passages = _phase("passages", build_passages, areas, self.rng)
        carved = _phase("rasterize", self._write_passages, passages, areas, grid)

        if self.enable_metrics:
            candidates = len(candidate_passages(areas))
            floor = count_floor(grid)
            metrics.update(
                areas=len(areas),
                candidate_passages=candidates,
                passages=len(passages),
                passages_pruned=candidates - len(passages),
                passage_cells=carved,
                tiles_floor=floor,
                tiles_wall=cfg.width * cfg.height - floor,
                runtime_ms=int((time.perf_counter() - start) * 1000),
                phase_ms=phase_times,
            )
        log.debug(
            event="dungeon_generated",
            seed=self.seed,
            width=cfg.width,
            height=cfg.height,
            areas=len(areas),
            passages=len(passages),
        )
        return Layout(grid, areas, passages, self.seed, metrics)

    def generate(self) -> Grid:
        return self.run().grid

    @staticmethod
    def _write_rooms(areas: List[Area], grid: Grid) -> None:
        for area in areas:
            area.write_to_map(grid)

    def _write_passages(self, passages: List[Passage], areas: List[Area], grid: Grid) -> int:
        carved = 0
        for passage in passages:
            carved += len(write_passage(passage, areas, grid, self.rng))
        return carved


def generate(config: DungeonConfig, rng: Optional[RandomSource] = None) -> Grid:
    """Convenience wrapper returning only the grid."""
    return DungeonGenerator(config, rng).generate()


__all__ = ["DungeonGenerator", "Layout", "generate", "metrics_enabled_from_env"]
