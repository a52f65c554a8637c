"""tty2048: terminal 2048 game.

Expose the game session as `Game` and its configuration as `GameConfig`.
"""

from .config import GameConfig, load_config
from .game import Command, Game, GameState, Outcome

__all__ = ["Command", "Game", "GameConfig", "GameState", "Outcome", "load_config"]

__version__ = "0.1.0"
