import curses
import logging
from typing import Mapping, Optional

from ..game import Command, Game, GameState, Outcome

logger = logging.getLogger(__name__)

ESCAPE = 27

KEY_TO_COMMAND = {
    curses.KEY_UP: Command.UP,
    curses.KEY_DOWN: Command.DOWN,
    curses.KEY_LEFT: Command.LEFT,
    curses.KEY_RIGHT: Command.RIGHT,
    ESCAPE: Command.QUIT,
}
for _keys, _command in (
    ("wW", Command.UP),
    ("sS", Command.DOWN),
    ("aA", Command.LEFT),
    ("dD", Command.RIGHT),
    ("rR", Command.RESET),
    ("qQ", Command.QUIT),
):
    for _key in _keys:
        KEY_TO_COMMAND[ord(_key)] = _command

# (foreground, background) per tile value
TILE_COLORS = {
    2: (curses.COLOR_WHITE, curses.COLOR_BLACK),
    4: (curses.COLOR_RED, curses.COLOR_BLACK),
    8: (curses.COLOR_GREEN, curses.COLOR_BLACK),
    16: (curses.COLOR_YELLOW, curses.COLOR_BLACK),
    32: (curses.COLOR_BLUE, curses.COLOR_BLACK),
    64: (curses.COLOR_MAGENTA, curses.COLOR_BLACK),
    128: (curses.COLOR_BLACK, curses.COLOR_WHITE),
    256: (curses.COLOR_RED, curses.COLOR_WHITE),
    512: (curses.COLOR_GREEN, curses.COLOR_WHITE),
    1024: (curses.COLOR_YELLOW, curses.COLOR_WHITE),
    2048: (curses.COLOR_BLUE, curses.COLOR_WHITE),
    4096: (curses.COLOR_MAGENTA, curses.COLOR_WHITE),
}

HELP_LINES = (
    "WASD or Arrow Keys - Up/Left/Down/Right",
    "R - Reset/New Game",
    "Q/Esc - Quit",
)


def command_for_key(ch: int) -> Optional[Command]:
    return KEY_TO_COMMAND.get(ch)


def init_palette() -> dict[int, int]:
    """Register one colour pair per tile value. Requires an initialised screen."""
    if not curses.has_colors():
        return {}
    curses.start_color()
    palette = {}
    for pair, (value, (fg, bg)) in enumerate(sorted(TILE_COLORS.items()), start=1):
        curses.init_pair(pair, fg, bg)
        palette[value] = curses.color_pair(pair) | curses.A_BOLD
    return palette


def status_message(state: GameState, command: Optional[Command]) -> str:
    if state.outcome is Outcome.WON:
        return "You win! Press R for a new game or Q to quit."
    if state.outcome is Outcome.LOST:
        return "Game over. Press R for a new game or Q to quit."
    if command is None:
        return "Invalid key"
    if command is Command.RESET:
        return "New game"
    if state.moved:
        return "Nice move"
    return "Unnecessary move"


def draw_board(stdscr, state: GameState, message: str = "", palette: Optional[Mapping[int, int]] = None):
    palette = palette or {}
    stdscr.clear()
    board = state.board
    rows, cols = board.shape

    # Terminal size
    h, w = stdscr.getmaxyx()

    # Choose cell width based on largest value for better fit
    max_val = int(board.max())
    cell_w = max(4, len(str(max(2, max_val))) + 2)

    # Compute required dimensions
    board_width = 1 + cols * (cell_w + 1)  # e.g. +------+-...+
    header = len(HELP_LINES) + 1
    total_height = header + rows * 2 + 3  # help + rows + borders + score/message
    width = max(board_width, max(len(line) for line in HELP_LINES))

    # If too small, prompt user to resize
    if width > w or total_height > h:
        msg1 = "Window too small for board"
        msg2 = f"Need at least {width}x{total_height}, have {w}x{h}"
        if h > 0:
            stdscr.addstr(0, 0, msg1[: max(0, w - 1)])
        if h > 1:
            stdscr.addstr(1, 0, msg2[: max(0, w - 1)])
        stdscr.refresh()
        return

    # Center the board
    top = max(0, (h - total_height) // 2)
    left = max(0, (w - width) // 2)

    for i, line in enumerate(HELP_LINES):
        stdscr.addstr(top + i, left, line)
    top += header

    horiz = "+" + ("-" * cell_w + "+") * cols
    for r in range(rows):
        # horizontal border
        stdscr.addstr(top + r * 2, left, horiz)
        # values row, one cell at a time so each tile gets its colour
        y = top + r * 2 + 1
        x = left
        stdscr.addstr(y, x, "|")
        for v in board[r]:
            v = int(v)
            text = f"{v:^{cell_w}}" if v > 0 else " " * cell_w
            stdscr.addstr(y, x + 1, text, palette.get(v, curses.A_NORMAL))
            stdscr.addstr(y, x + 1 + cell_w, "|")
            x += cell_w + 1

    stdscr.addstr(top + rows * 2, left, horiz)
    stdscr.addstr(top + rows * 2 + 1, left, f"Score: {state.score}")
    if message:
        # curses cannot write the bottom-right cell, stop one column short
        stdscr.addstr(top + rows * 2 + 2, left, message[: max(0, w - left - 1)])
    stdscr.refresh()


def play_loop(stdscr, game: Game) -> GameState:
    """Read keys and drive `game` until the player quits."""
    curses.curs_set(0)
    stdscr.nodelay(False)
    stdscr.keypad(True)
    palette = init_palette()

    state = game.state()
    message = ""
    draw_board(stdscr, state, message, palette)

    while not state.quit:
        ch = stdscr.getch()
        # Redraw on resize to adapt layout
        if ch == curses.KEY_RESIZE:
            draw_board(stdscr, state, message, palette)
            continue

        command = command_for_key(ch)
        if command is not None:
            state = game.handle(command)
        else:
            logger.debug("Ignored key %r", ch)
        message = status_message(state, command)
        draw_board(stdscr, state, message, palette)

    return state
