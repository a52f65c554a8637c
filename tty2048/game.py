from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from .config import GameConfig
from .engine import moves
from .engine.grid import Grid
from .engine.moves import Direction
from .engine.spawner import RandomSource, spawn

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


class Command(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    RESET = "reset"
    QUIT = "quit"

    @property
    def direction(self) -> Direction | None:
        return _DIRECTIONS.get(self)


_DIRECTIONS = {
    Command.UP: Direction.UP,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}


@dataclass(frozen=True)
class GameState:
    """Observable state after a command, for rendering."""

    board: np.ndarray
    score: int
    outcome: Outcome
    moved: bool = False
    quit: bool = False

    @property
    def max_tile(self) -> int:
        return int(self.board.max())


class Game:
    """
    Turn-based 2048 session.

    - Directions: move, then spawn one tile if the grid changed
    - Won: a tile reached `config.target`
    - Lost: grid full and no direction changes it
    - Won/Lost ignore directions; reset and quit are always accepted
    """

    def __init__(self, config: GameConfig | None = None, rng: RandomSource | None = None):
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self._grid = Grid(self.config.rows, self.config.columns)
        self.score: int = 0
        self.outcome = Outcome.IN_PROGRESS
        self.finished = False
        self.reset()

    @property
    def grid(self) -> Grid:
        return self._grid.copy()

    def reset(self) -> GameState:
        self._grid.clear()
        self.score = 0
        self.finished = False
        spawn(self._grid, self.config.initial_tiles, self.rng, self.config.spawn_prob_2)
        self.outcome = self._evaluate()
        logger.debug("New %dx%d game, outcome=%s", self.config.rows, self.config.columns, self.outcome.value)
        return self.state()

    def state(self, moved: bool = False) -> GameState:
        return GameState(
            board=self._grid.snapshot(),
            score=self.score,
            outcome=self.outcome,
            moved=moved,
            quit=self.finished,
        )

    def handle(self, command: Command) -> GameState:
        command = Command(command)
        if command is Command.QUIT:
            self.finished = True
            logger.info("Quit with score %d", self.score)
            return self.state()
        if command is Command.RESET:
            return self.reset()
        return self.move(command.direction)

    def move(self, direction: Direction) -> GameState:
        if self.outcome is not Outcome.IN_PROGRESS:
            return self.state()

        result = moves.apply(self._grid, direction)
        if not result.changed:
            logger.debug("Move %s changed nothing", direction.name)
            return self.state()

        self._grid = result.grid
        self.score += result.score
        spawn(self._grid, 1, self.rng, self.config.spawn_prob_2)
        self.outcome = self._evaluate()
        logger.debug("Move %s scored %d, total %d", direction.name, result.score, self.score)
        if self.outcome is not Outcome.IN_PROGRESS:
            logger.info("Game %s with score %d", self.outcome.value, self.score)
        return self.state(moved=True)

    def _evaluate(self) -> Outcome:
        if self._grid.max_tile() >= self.config.target:
            return Outcome.WON
        if not moves.can_move(self._grid):
            return Outcome.LOST
        return Outcome.IN_PROGRESS
