"""
In-memory registry of game sessions. Nothing outlives the process.
"""

import logging
import secrets
import threading
from typing import Dict, List, Optional, Tuple

from .config import GameConfig
from .coordinator import TurnCoordinator
from .errors import SessionNotFoundError

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Singleton-like session storage, one TurnCoordinator per session."""

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.sessions: Dict[str, TurnCoordinator] = {}  # session_id : coordinator
        self._lock = threading.Lock()

    # PUBLIC_INTERFACE
    def create_session(self, config: Optional[GameConfig] = None) -> Tuple[str, TurnCoordinator]:
        """Start a fresh game waiting for the human's first move."""
        coordinator = TurnCoordinator(config or self.config)
        with self._lock:
            session_id = secrets.token_hex(4)
            while session_id in self.sessions:
                session_id = secrets.token_hex(4)
            self.sessions[session_id] = coordinator
        logger.info(
            "Session %s created (human=%s, ai=%s)",
            session_id, coordinator.human_side.value, coordinator.ai_side.value,
        )
        return session_id, coordinator

    # PUBLIC_INTERFACE
    def get_session(self, session_id: str) -> TurnCoordinator:
        with self._lock:
            coordinator = self.sessions.get(session_id)
        if coordinator is None:
            raise SessionNotFoundError(f"Session {session_id} not found.")
        return coordinator

    # PUBLIC_INTERFACE
    def delete_session(self, session_id: str) -> None:
        with self._lock:
            if session_id not in self.sessions:
                raise SessionNotFoundError(f"Session {session_id} not found.")
            del self.sessions[session_id]
        logger.info("Session %s closed", session_id)

    # PUBLIC_INTERFACE
    def list_sessions(self) -> List[str]:
        with self._lock:
            return list(self.sessions)


STORE = InMemoryStore(GameConfig.from_env())
