"""
Turn coordination between the human player and the minimax opponent.
"""

import logging
import threading
from typing import Callable, List, Optional

from .board import BoardState
from .config import GameConfig
from .errors import CellOccupiedError, GameOverError, InvalidMoveError, OutOfBoundsError
from .game_logic import classify
from .minimax import best_move
from .models import GamePhase, GameSnapshot, Outcome, OutcomeKind, Role

logger = logging.getLogger(__name__)

Listener = Callable[[GameSnapshot], None]


class TurnCoordinator:
    """
    State machine for one game: AwaitingMove(human) -> AwaitingMove(ai) -> ...
    until Finished(outcome). Only reset() leaves Finished.

    The coordinator owns its board; callers only ever see snapshots. Every
    transition is pushed to subscribed listeners after the lock is released.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.human_side = self.config.human_side
        self.ai_side = self.config.ai_side
        self._board = BoardState()
        self._phase = GamePhase.awaiting(Role.HUMAN)
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    # PUBLIC_INTERFACE
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state changes. Returns a function that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # PUBLIC_INTERFACE
    def current_state(self) -> GameSnapshot:
        with self._lock:
            return self._snapshot()

    # PUBLIC_INTERFACE
    def submit_human_move(self, row: int, col: int) -> GameSnapshot:
        """
        Apply the human's move at (row, col) and, unless that ends the game,
        the AI's reply. Returns the resulting snapshot.
        Raises GameOverError if the game is finished, InvalidMoveError if it is
        not the human's turn or the cell is unavailable. The board is unchanged on error.
        """
        with self._lock:
            if self._phase.is_finished:
                raise GameOverError("Game already finished.")
            if self._phase.turn != Role.HUMAN:
                raise InvalidMoveError("Not your turn.")
            try:
                self._board.place(row, col, self.human_side)
            except (OutOfBoundsError, CellOccupiedError) as err:
                raise InvalidMoveError(str(err)) from err
            logger.info("Human (%s) played (%d, %d)", self.human_side.value, row, col)

            events = [self._advance(Role.AI)]
            if not self._phase.is_finished:
                ai_row, ai_col = best_move(self._board, self.ai_side, self.human_side)
                self._board.place(ai_row, ai_col, self.ai_side)
                logger.info("AI (%s) played (%d, %d)", self.ai_side.value, ai_row, ai_col)
                events.append(self._advance(Role.HUMAN))
            result = events[-1]

        self._notify(events)
        return result

    # PUBLIC_INTERFACE
    def reset(self) -> GameSnapshot:
        """Clear the board and wait for the human's first move. Always succeeds."""
        with self._lock:
            self._board.reset()
            self._phase = GamePhase.awaiting(Role.HUMAN)
            snapshot = self._snapshot()
        logger.info("Game reset")
        self._notify([snapshot])
        return snapshot

    def _advance(self, next_role: Role) -> GameSnapshot:
        outcome = classify(self._board)
        if outcome.is_terminal:
            self._phase = GamePhase.finished(outcome)
            logger.info("Game finished: %s", self._describe(outcome))
        else:
            self._phase = GamePhase.awaiting(next_role)
        return self._snapshot()

    def _describe(self, outcome: Outcome) -> str:
        if outcome.kind == OutcomeKind.DRAW:
            return "draw"
        role = Role.HUMAN if outcome.winner == self.human_side else Role.AI
        return f"{outcome.winner.value} ({role.value}) wins"

    def _snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board=self._board.snapshot(),
            phase=self._phase,
            human_side=self.human_side,
            ai_side=self.ai_side,
        )

    def _notify(self, events: List[GameSnapshot]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for snapshot in events:
            for listener in listeners:
                try:
                    listener(snapshot.model_copy(deep=True))
                except Exception:
                    logger.exception("State listener %r failed", listener)
