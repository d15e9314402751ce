"""
Tic Tac Toe against an unbeatable minimax opponent.

The game core (board, outcome detection, search, turn coordination) has no
web dependencies; `tictactoe_ai.main` exposes it over REST and WebSocket.
"""

from .board import BoardState
from .config import GameConfig
from .coordinator import TurnCoordinator
from .errors import (
    GameError,
    OutOfBoundsError,
    CellOccupiedError,
    InvalidMoveError,
    GameOverError,
    NoLegalMoveError,
    SessionNotFoundError,
)
from .game_logic import LINES, classify, winning_line
from .minimax import best_move, score
from .models import Side, Role, Outcome, OutcomeKind, GamePhase, PhaseStatus, GameSnapshot

__version__ = "0.1.0"
__all__ = [
    "BoardState",
    "GameConfig",
    "TurnCoordinator",
    "GameError",
    "OutOfBoundsError",
    "CellOccupiedError",
    "InvalidMoveError",
    "GameOverError",
    "NoLegalMoveError",
    "SessionNotFoundError",
    "LINES",
    "classify",
    "winning_line",
    "best_move",
    "score",
    "Side",
    "Role",
    "Outcome",
    "OutcomeKind",
    "GamePhase",
    "PhaseStatus",
    "GameSnapshot",
]
