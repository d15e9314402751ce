"""
Game configuration: which mark the human and the AI play, and log level.
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .models import Side


# PUBLIC_INTERFACE
class GameConfig(BaseModel):
    """Side assignment for a session. The human always moves first."""
    human_side: Side = Field(Side.O, description="Mark played by the human.")
    ai_side: Optional[Side] = Field(None, description="Mark played by the AI; opposite of human_side if omitted.")
    log_level: str = Field("INFO", description="Logging level name for the service.")

    @model_validator(mode="after")
    def _check_values(self) -> "GameConfig":
        if self.ai_side is None:
            self.ai_side = self.human_side.opposite()
        if self.ai_side == self.human_side:
            raise ValueError("Human and AI must play different sides.")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level {self.log_level!r}.")
        return self

    # PUBLIC_INTERFACE
    @classmethod
    def from_env(cls) -> "GameConfig":
        """Read TTT_HUMAN_SIDE and TTT_LOG_LEVEL, falling back to defaults."""
        values = {}
        human_side = os.environ.get("TTT_HUMAN_SIDE")
        if human_side:
            values["human_side"] = human_side.strip().upper()
        log_level = os.environ.get("TTT_LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level.strip()
        return cls(**values)

    def with_human_side(self, human_side: Optional[Side]) -> "GameConfig":
        """Copy of this config with the human playing `human_side` (None keeps it)."""
        if human_side is None:
            return self
        return GameConfig(human_side=human_side, log_level=self.log_level)
