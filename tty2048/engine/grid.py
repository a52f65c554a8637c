from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from ..errors import OutOfBounds

EMPTY = 0


def is_tile_value(value: int) -> bool:
    """True for powers of two >= 2."""
    return value >= 2 and (value & (value - 1)) == 0


class Grid:
    """
    Rectangular 2048 board backed by an int32 numpy array.

    - Empty cells are stored as 0 and reported as None by `get`
    - Every non-empty cell holds a power of two >= 2
    - Dimensions are fixed at construction
    """

    def __init__(self, rows: int = 4, columns: int = 4):
        if int(rows) <= 0 or int(columns) <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{columns}")
        self.board = np.zeros((int(rows), int(columns)), dtype=np.int32)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int | None]]) -> "Grid":
        values = [[EMPTY if v is None else int(v) for v in row] for row in rows]
        if not values or not values[0] or any(len(row) != len(values[0]) for row in values):
            raise ValueError("Grid rows must be non-empty and of equal length")
        grid = cls(len(values), len(values[0]))
        for r, row in enumerate(values):
            for c, v in enumerate(row):
                grid.set(r, c, v)
        return grid

    @classmethod
    def from_array(cls, board: np.ndarray) -> "Grid":
        """Wrap a copy of `board`; values are trusted to satisfy the tile invariant."""
        grid = cls.__new__(cls)
        grid.board = np.array(board, dtype=np.int32, copy=True)
        return grid

    @property
    def rows(self) -> int:
        return int(self.board.shape[0])

    @property
    def columns(self) -> int:
        return int(self.board.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.columns

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.columns):
            raise OutOfBounds(row, col, self.shape)

    def get(self, row: int, col: int) -> int | None:
        self._check(row, col)
        value = int(self.board[row, col])
        return None if value == EMPTY else value

    def set(self, row: int, col: int, value: int | None) -> None:
        self._check(row, col)
        if value is None:
            value = EMPTY
        value = int(value)
        if value != EMPTY and not is_tile_value(value):
            raise ValueError(f"Tile values must be powers of two >= 2, got {value}")
        self.board[row, col] = value

    def clear(self) -> None:
        self.board.fill(EMPTY)

    def is_full(self) -> bool:
        return not (self.board == EMPTY).any()

    def empty_cells(self) -> list[tuple[int, int]]:
        # argwhere scans in row-major order
        return [(int(r), int(c)) for r, c in np.argwhere(self.board == EMPTY)]

    def max_tile(self) -> int:
        return int(self.board.max())

    def equals(self, other: "Grid") -> bool:
        return self.shape == other.shape and bool(np.array_equal(self.board, other.board))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # mutable

    def copy(self) -> "Grid":
        return Grid.from_array(self.board)

    def snapshot(self) -> np.ndarray:
        return self.board.copy()

    def to_lists(self) -> list[list[int]]:
        return [[int(v) for v in row] for row in self.board]

    def values(self) -> Iterable[int]:
        """Non-empty tile values in row-major order."""
        return (int(v) for v in self.board.flat if v != EMPTY)

    def __repr__(self) -> str:
        return f"Grid({self.to_lists()!r})"
