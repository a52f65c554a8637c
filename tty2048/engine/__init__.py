"""Board model, move resolution and tile spawning."""

from .grid import Grid
from .moves import Direction, MoveResult, apply, can_move, merge_line, valid_directions
from .spawner import SPAWN_PROB_2, RandomSource, spawn

__all__ = [
    "Grid",
    "Direction",
    "MoveResult",
    "apply",
    "can_move",
    "merge_line",
    "valid_directions",
    "SPAWN_PROB_2",
    "RandomSource",
    "spawn",
]
