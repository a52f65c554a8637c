"""Gymnasium environment backed by the 2048 game session."""

from .game2048 import Game2048Env

__all__ = ["Game2048Env"]
