"""Seedable uniform integer source used by every generation phase."""
from __future__ import annotations

import random
from typing import Optional

from .errors import InvariantViolation


class RandomSource:
    """Uniform integers in ``[lo, hi)`` from a private ``random.Random``.

    A ``None`` seed draws one from the process RNG and keeps it on ``seed`` so
    the run can be replayed. Instances are not thread-safe and belong to a
    single generation run.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.randint(1, 2**31 - 1)
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self, lo: int, hi: int) -> int:
        if hi <= lo:
            raise InvariantViolation(f"empty random range [{lo}, {hi})")
        return self._rng.randrange(lo, hi)

    def coin(self) -> bool:
        """Binary choice, ``next(0, 2) == 0``."""
        return self.next(0, 2) == 0


__all__ = ["RandomSource"]
