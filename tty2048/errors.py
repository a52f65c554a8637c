"""Exceptions raised by tty2048."""


class Tty2048Error(Exception):
    """Base class for all tty2048 errors."""


class InvalidConfiguration(Tty2048Error, ValueError):
    """Startup parameters are out of range or malformed."""


class OutOfBounds(Tty2048Error, IndexError):
    """A grid coordinate lies outside the configured dimensions."""

    def __init__(self, row: int, col: int, shape: tuple[int, int]):
        super().__init__(f"Cell ({row}, {col}) is outside a {shape[0]}x{shape[1]} grid")
        self.row = row
        self.col = col
        self.shape = shape


class InsufficientSpace(Tty2048Error):
    """The spawner was asked for more tiles than there are empty cells."""

    def __init__(self, requested: int, available: int):
        super().__init__(f"Cannot spawn {requested} tile(s), only {available} empty cell(s)")
        self.requested = requested
        self.available = available
