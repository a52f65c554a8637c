from __future__ import annotations

import logging
from typing import Protocol

from ..errors import InsufficientSpace
from .grid import Grid

logger = logging.getLogger(__name__)

# Probability that a spawned tile is a 2 (otherwise 4)
SPAWN_PROB_2 = 0.9


class RandomSource(Protocol):
    """Uniform random choices. `numpy.random.Generator` satisfies this."""

    def integers(self, low: int, high: int) -> int: ...

    def random(self) -> float: ...


def random_tile(rng: RandomSource, prob_2: float = SPAWN_PROB_2) -> int:
    return 2 if rng.random() < prob_2 else 4


def spawn(grid: Grid, count: int, rng: RandomSource, prob_2: float = SPAWN_PROB_2) -> list[tuple[int, int]]:
    """Place `count` new tiles on distinct empty cells of `grid`, in place.

    Returns the filled positions in spawn order.
    """
    available = len(grid.empty_cells())
    if count > available:
        raise InsufficientSpace(count, available)

    placed = []
    for _ in range(count):
        empty_positions = grid.empty_cells()
        idx = int(rng.integers(0, len(empty_positions)))
        y, x = empty_positions[idx]
        value = random_tile(rng, prob_2)
        grid.set(y, x, value)
        placed.append((y, x))
        logger.debug("Spawned %d at (%d, %d)", value, y, x)
    return placed
