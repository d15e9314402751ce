"""
Outcome detection for Tic Tac Toe (winning lines, win/draw classification).
"""

from typing import Optional, Tuple

from .board import BoardState
from .models import Outcome

Coord = Tuple[int, int]
Line = Tuple[Coord, Coord, Coord]

LINES: Tuple[Line, ...] = (
    # rows
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # columns
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # diagonals
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)

_IN_PROGRESS = Outcome.in_progress()
_DRAW = Outcome.draw()


# PUBLIC_INTERFACE
def winning_line(board: BoardState) -> Optional[Line]:
    """
    Returns the first line holding three identical marks, or None.
    """
    grid = board.rows()
    for line in LINES:
        (r0, c0), (r1, c1), (r2, c2) = line
        first = grid[r0][c0]
        if first is not None and first == grid[r1][c1] == grid[r2][c2]:
            return line
    return None


# PUBLIC_INTERFACE
def classify(board: BoardState) -> Outcome:
    """
    Examines board. A complete line wins even when the board is also full.
    """
    line = winning_line(board)
    if line is not None:
        row, col = line[0]
        return Outcome.win(board.get(row, col))

    if board.is_full():
        return _DRAW

    return _IN_PROGRESS
