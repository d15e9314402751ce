"""
Exceptions raised by the game core and the session store.
"""


class GameError(ValueError):
    """Base class for every rule violation reported by the game."""


class OutOfBoundsError(GameError):
    """Coordinate outside the 3x3 grid."""

    def __init__(self, row: int, col: int):
        super().__init__(f"Invalid board position ({row}, {col}).")
        self.row = row
        self.col = col


class CellOccupiedError(GameError):
    """Target cell already holds a mark."""

    def __init__(self, row: int, col: int):
        super().__init__(f"Cell ({row}, {col}) already occupied.")
        self.row = row
        self.col = col


class InvalidMoveError(GameError):
    pass


class GameOverError(GameError):
    pass


class NoLegalMoveError(GameError):
    """Search was asked for a move on a full or finished board."""


class SessionNotFoundError(GameError):
    pass
