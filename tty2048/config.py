from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from hydra import compose, initialize_config_module
from hydra.errors import HydraException
from omegaconf import DictConfig, OmegaConf

from .engine.grid import is_tile_value
from .engine.spawner import SPAWN_PROB_2
from .errors import InvalidConfiguration

CONFIG_MODULE = "tty2048.conf"
CONFIG_NAME = "game"

# Conventional 2048 win tile
DEFAULT_TARGET = 2048


@dataclass(frozen=True)
class GameConfig:
    """Validated startup parameters. Immutable for the session; reset reuses it."""

    rows: int = 4
    columns: int = 4
    initial_tiles: int = 2
    target: int = DEFAULT_TARGET
    spawn_prob_2: float = SPAWN_PROB_2
    seed: Optional[int] = None

    def __post_init__(self):
        self.validate()

    @property
    def cells(self) -> int:
        return self.rows * self.columns

    def validate(self) -> None:
        if self.rows <= 0 or self.columns <= 0:
            raise InvalidConfiguration(f"Grid dimensions must be positive, got {self.rows}x{self.columns}")
        if not 0 <= self.initial_tiles <= self.cells:
            raise InvalidConfiguration(
                f"initial_tiles must be between 0 and {self.cells} for a {self.rows}x{self.columns} grid, "
                f"got {self.initial_tiles}"
            )
        if not is_tile_value(self.target):
            raise InvalidConfiguration(f"target must be a power of two >= 2, got {self.target}")
        if not 0.0 <= self.spawn_prob_2 <= 1.0:
            raise InvalidConfiguration(f"spawn_prob_2 must be within [0, 1], got {self.spawn_prob_2}")

    @classmethod
    def from_cfg(cls, cfg: DictConfig) -> "GameConfig":
        game_cfg = cfg.game
        seed = cfg.get("seed")
        try:
            params = dict(
                rows=int(game_cfg.rows),
                columns=int(game_cfg.columns),
                initial_tiles=int(game_cfg.initial_tiles),
                target=int(game_cfg.get("target", DEFAULT_TARGET)),
                spawn_prob_2=float(game_cfg.get("spawn_prob_2", SPAWN_PROB_2)),
                seed=None if seed is None else int(seed),
            )
        except (TypeError, ValueError) as e:
            raise InvalidConfiguration(f"Malformed configuration: {e}") from e
        return cls(**params)


def compose_config(overrides: Sequence[str] = ()) -> DictConfig:
    """Compose `conf/game.yaml` with Hydra overrides such as `game.rows=5`."""
    try:
        with initialize_config_module(config_module=CONFIG_MODULE, version_base=None):
            return compose(config_name=CONFIG_NAME, overrides=list(overrides))
    except HydraException as e:
        raise InvalidConfiguration(str(e)) from e


def load_config(overrides: Sequence[str] = ()) -> GameConfig:
    return GameConfig.from_cfg(compose_config(overrides))


def to_yaml(config: GameConfig) -> str:
    data = {
        "game": {
            "rows": config.rows,
            "columns": config.columns,
            "initial_tiles": config.initial_tiles,
            "target": config.target,
            "spawn_prob_2": config.spawn_prob_2,
        },
        "seed": config.seed,
    }
    return OmegaConf.to_yaml(OmegaConf.create(data))
