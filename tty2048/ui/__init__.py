"""curses front end."""

from .terminal import command_for_key, draw_board, play_loop

__all__ = ["command_for_key", "draw_board", "play_loop"]
