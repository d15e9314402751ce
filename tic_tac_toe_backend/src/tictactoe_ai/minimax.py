"""
Exhaustive minimax search for the automated player.

No pruning and no caching: the whole game tree below the given board is
explored, which is affordable on a 3x3 grid (depth <= 9, branching <= 9).
Scores are depth-discounted so faster wins and slower losses are preferred.
"""

import logging
from typing import List, Tuple

from .board import BoardState
from .errors import NoLegalMoveError
from .game_logic import classify
from .models import OutcomeKind, Side

logger = logging.getLogger(__name__)

WIN_SCORE = 10


def _score(
    board: BoardState,
    depth: int,
    maximizing: bool,
    searching_side: Side,
    opponent_side: Side,
    positions: List[int],
) -> int:
    positions[0] += 1

    outcome = classify(board)
    if outcome.is_terminal:
        if outcome.kind == OutcomeKind.DRAW:
            return 0
        if outcome.winner == searching_side:
            return WIN_SCORE - depth
        return depth - WIN_SCORE

    mover = searching_side if maximizing else opponent_side
    best = None
    # Materialise the empty cells first: the loop mutates the board.
    for row, col in list(board.empty_cells()):
        board.place(row, col, mover)
        try:
            child = _score(board, depth + 1, not maximizing, searching_side, opponent_side, positions)
        finally:
            board.clear(row, col)
        if best is None or (child > best if maximizing else child < best):
            best = child
    return best


# PUBLIC_INTERFACE
def score(board: BoardState, depth: int, maximizing: bool, searching_side: Side, opponent_side: Side) -> int:
    """
    Minimax value of `board` from `searching_side`'s point of view.

    Returns 10 - depth for a searching-side win, depth - 10 for an opponent win
    and 0 for a draw. `maximizing` says whether the searching side is to move.
    The board is restored before returning.
    """
    return _score(board, depth, maximizing, searching_side, opponent_side, [0])


# PUBLIC_INTERFACE
def best_move(board: BoardState, searching_side: Side, opponent_side: Side) -> Tuple[int, int]:
    """
    Optimal move for `searching_side` on `board`.

    Candidates are tried in row-major order and only a strictly greater score
    replaces the current best, so ties go to the earliest cell. The board is
    left exactly as it was given.
    Raises NoLegalMoveError if the board is already finished or full.
    """
    if classify(board).is_terminal:
        raise NoLegalMoveError("No legal move: the game is already over.")

    positions = [0]
    best_score = None
    move = None
    for row, col in list(board.empty_cells()):
        board.place(row, col, searching_side)
        try:
            value = _score(board, 0, False, searching_side, opponent_side, positions)
        finally:
            board.clear(row, col)
        if best_score is None or value > best_score:
            best_score = value
            move = (row, col)

    logger.debug(
        "%s best move %s (score %d) after %d positions",
        searching_side.value, move, best_score, positions[0],
    )
    return move
