import numpy as np
import gymnasium as gym
from gymnasium import spaces

from ..config import GameConfig
from ..engine import moves
from ..engine.moves import Direction
from ..game import Game, Outcome


class Game2048Env(gym.Env):
    """
    Gymnasium-compatible view of a `Game` session.

    - Actions: 0=up, 1=down, 2=left, 3=right
    - Observation: (rows, columns) int32 grid of tile values
    - Reward: sum of merged tile values produced by the move
    - Terminated: when a tile reaches the target
    - Truncated: when no further moves are possible
    """

    metadata = {"render_modes": ["human"]}

    def __init__(
        self,
        rows: int = 4,
        columns: int = 4,
        initial_tiles: int = 2,
        target: int = 2048,
        spawn_prob_2: float = 0.9,
        render_mode: str | None = None,
    ):
        super().__init__()
        self.config = GameConfig(
            rows=int(rows),
            columns=int(columns),
            initial_tiles=int(initial_tiles),
            target=int(target),
            spawn_prob_2=float(spawn_prob_2),
        )
        self.render_mode = render_mode

        # 4 directions
        self.action_space = spaces.Discrete(len(Direction))
        # Conservative upper bound for tile values
        self.observation_space = spaces.Box(
            low=0, high=2 ** 16, shape=(self.config.rows, self.config.columns), dtype=np.int32
        )

        self.game: Game | None = None

    @classmethod
    def from_config(cls, config: GameConfig, render_mode: str | None = None) -> "Game2048Env":
        return cls(
            rows=config.rows,
            columns=config.columns,
            initial_tiles=config.initial_tiles,
            target=config.target,
            spawn_prob_2=config.spawn_prob_2,
            render_mode=render_mode,
        )

    def reset(self, *, seed: int | None = None, options: dict | None = None):
        super().reset(seed=seed)
        self.game = Game(self.config, rng=self.np_random)
        state = self.game.state()
        info = {
            "score": state.score,
            "max_tile": state.max_tile,
            "valid_actions": self._valid_actions(),
        }
        return state.board, info

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise gym.error.InvalidAction(f"Invalid action: {action}")
        assert self.game is not None

        # valid actions mask before applying the action
        valid_before = self._valid_actions()
        score_before = self.game.score

        state = self.game.move(Direction(int(action)))
        reward = state.score - score_before

        terminated = state.outcome is Outcome.WON
        truncated = state.outcome is Outcome.LOST

        info = {
            "score": state.score,
            "moved": bool(state.moved),
            "max_tile": state.max_tile,
            "valid_actions": valid_before,
            "valid_actions_next": self._valid_actions(),
        }
        return state.board, float(reward), bool(terminated), bool(truncated), info

    def render(self):
        if self.render_mode == "human" or self.render_mode is None:
            assert self.game is not None
            state = self.game.state()
            print("+" + "------+" * self.config.columns)
            for row in state.board:
                line = "|".join(f"{int(v):^6}" if v > 0 else "      " for v in row)
                print("|" + line + "|")
                print("+" + "------+" * self.config.columns)
            print(f"Score: {state.score}\n")

    def _valid_actions(self) -> np.ndarray:
        """Return boolean mask of valid actions for current board."""
        assert self.game is not None
        mask = np.zeros(len(Direction), dtype=bool)
        for d in moves.valid_directions(self.game.grid):
            mask[int(d)] = True
        return mask
