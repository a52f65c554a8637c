import numpy as np
import pytest

from tty2048.engine.grid import Grid
from tty2048.engine.spawner import SPAWN_PROB_2, random_tile, spawn
from tty2048.errors import InsufficientSpace


def test_spawn_requeries_empty_cells(scripted_rng):
    grid = Grid(2, 2)
    rng = scripted_rng(indices=[0, 0], rolls=[0.5, 0.95])
    placed = spawn(grid, 2, rng)
    assert placed == [(0, 0), (0, 1)]
    assert grid.to_lists() == [[2, 4], [0, 0]]


def test_spawn_picks_among_empty_cells_only(scripted_rng):
    grid = Grid.from_rows([[2, 0], [0, 4]])
    spawn(grid, 1, scripted_rng(indices=[1], rolls=[0.0]))
    assert grid.to_lists() == [[2, 0], [2, 4]]


def test_spawn_raises_when_too_few_empty_cells(scripted_rng):
    grid = Grid.from_rows([[2, 0], [4, 8]])
    with pytest.raises(InsufficientSpace) as exc:
        spawn(grid, 2, scripted_rng())
    assert exc.value.available == 1
    assert grid.to_lists() == [[2, 0], [4, 8]]


def test_spawn_zero_on_full_grid(scripted_rng):
    grid = Grid.from_rows([[2, 4]])
    assert spawn(grid, 0, scripted_rng()) == []


def test_spawn_fills_grid_with_twos_and_fours():
    grid = Grid(4, 4)
    placed = spawn(grid, 16, np.random.default_rng(123))
    assert grid.is_full()
    assert len(set(placed)) == 16
    assert set(grid.values()) <= {2, 4}


def test_spawn_probability_is_configurable():
    grid = Grid(3, 3)
    spawn(grid, 9, np.random.default_rng(5), prob_2=0.0)
    assert set(grid.values()) == {4}


def test_random_tile_threshold(scripted_rng):
    assert SPAWN_PROB_2 == 0.9
    assert random_tile(scripted_rng(rolls=[0.89])) == 2
    assert random_tile(scripted_rng(rolls=[0.9])) == 4
