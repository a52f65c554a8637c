from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .grid import EMPTY, Grid


class Direction(enum.IntEnum):
    """Move directions. Values double as environment action ids."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def rotations(self) -> int:
        # Quarter turns (np.rot90) that make this direction slide toward column 0
        return _ROTATIONS[self]


_ROTATIONS = {
    Direction.UP: 1,
    Direction.DOWN: 3,
    Direction.LEFT: 0,
    Direction.RIGHT: 2,
}


@dataclass(frozen=True)
class MoveResult:
    grid: Grid
    score: int
    changed: bool


def merge_line(values: Sequence[int]) -> tuple[list[int], int]:
    """Slide one line toward index 0 and merge equal neighbours.

    Returns the new line (same length, zero padded) and the score gained.
    A tile produced by a merge is skipped over and cannot merge again.
    """
    compressed = [int(v) for v in values if v != EMPTY]
    merged: list[int] = []
    score = 0
    j = 0
    L = len(compressed)
    while j < L:
        if j + 1 < L and compressed[j] == compressed[j + 1]:
            val = compressed[j] * 2
            merged.append(val)
            score += val
            j += 2
        else:
            merged.append(compressed[j])
            j += 1
    merged.extend([EMPTY] * (len(values) - len(merged)))
    return merged, score


def apply(grid: Grid, direction: Direction) -> MoveResult:
    """Resolve a move without touching `grid`."""
    k = Direction(direction).rotations
    rotated = np.rot90(grid.board, k)

    score = 0
    new_rotated = np.empty_like(rotated)
    for i in range(rotated.shape[0]):
        new_row, gained = merge_line(rotated[i, :])
        new_rotated[i, :] = new_row
        score += gained

    # rotate back
    result = Grid.from_array(np.rot90(new_rotated, (4 - k) % 4))
    return MoveResult(grid=result, score=score, changed=not result.equals(grid))


def valid_directions(grid: Grid) -> list[Direction]:
    """Directions that would change `grid`."""
    return [d for d in Direction if apply(grid, d).changed]


def can_move(grid: Grid) -> bool:
    if not grid.is_full():
        return True
    return any(apply(grid, d).changed for d in Direction)
