"""
Models for the Tic Tac Toe backend (game core and FastAPI payloads).
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Side(str, Enum):
    X = "X"
    O = "O"

    def opposite(self) -> "Side":
        return Side.O if self is Side.X else Side.X


class Role(str, Enum):
    HUMAN = "human"
    AI = "ai"


class OutcomeKind(str, Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


class PhaseStatus(str, Enum):
    AWAITING_MOVE = "awaiting_move"
    FINISHED = "finished"


# PUBLIC_INTERFACE
class Outcome(BaseModel):
    """Classification of a board: still running, won by a side, or drawn."""
    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind = Field(..., description="in_progress, win or draw.")
    winner: Optional[Side] = Field(None, description="Winning side, only set for a win.")

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(kind=OutcomeKind.IN_PROGRESS)

    @classmethod
    def win(cls, side: Side) -> "Outcome":
        return cls(kind=OutcomeKind.WIN, winner=side)

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(kind=OutcomeKind.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.IN_PROGRESS


# PUBLIC_INTERFACE
class GamePhase(BaseModel):
    """
    Where the turn state machine currently is.

    `turn` is set while awaiting a move, `outcome` once the game is finished.
    """
    model_config = ConfigDict(frozen=True)

    status: PhaseStatus
    turn: Optional[Role] = None
    outcome: Optional[Outcome] = None

    @classmethod
    def awaiting(cls, role: Role) -> "GamePhase":
        return cls(status=PhaseStatus.AWAITING_MOVE, turn=role)

    @classmethod
    def finished(cls, outcome: Outcome) -> "GamePhase":
        return cls(status=PhaseStatus.FINISHED, outcome=outcome)

    @property
    def is_finished(self) -> bool:
        return self.status == PhaseStatus.FINISHED


# PUBLIC_INTERFACE
class GameSnapshot(BaseModel):
    """Representation of the current board and phase."""
    board: List[List[str]] = Field(..., description="3x3 tic tac toe board, values are 'X', 'O', or ''.")
    phase: GamePhase = Field(..., description="Whose move it is, or how the game ended.")
    human_side: Side = Field(..., description="Mark played by the human.")
    ai_side: Side = Field(..., description="Mark played by the automated opponent.")


# PUBLIC_INTERFACE
class MoveRequest(BaseModel):
    """Human move in a game session."""
    row: int = Field(..., ge=0, le=2, description="Row index (0-2)")
    col: int = Field(..., ge=0, le=2, description="Column index (0-2)")


# PUBLIC_INTERFACE
class SessionCreateRequest(BaseModel):
    """To start a new session against the AI."""
    human_side: Optional[Side] = Field(None, description="Mark for the human player; server default if omitted.")


# PUBLIC_INTERFACE
class SessionInfo(BaseModel):
    """Identifier of a freshly created session and its initial state."""
    session_id: str
    state: GameSnapshot
