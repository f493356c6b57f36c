"""User-configurable settings for the chess mini-game."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from callchess.engine.random_policy import CAPTURE_BIAS

_LOGGER = logging.getLogger(__name__)


@dataclass
class GameSettings:
    """All user-configurable settings."""

    # General
    partner_name: str = "Partner"
    show_legal_moves: bool = True

    # Opponent
    thinking_delay_min_ms: int = 500
    thinking_delay_jitter_ms: int = 1000
    capture_bias: float = CAPTURE_BIAS

    def validate(self) -> None:
        """Raise ``ValueError`` if any value is out of range."""
        if self.thinking_delay_min_ms < 0:
            raise ValueError(
                f"thinking_delay_min_ms must be >= 0, got {self.thinking_delay_min_ms}"
            )
        if self.thinking_delay_jitter_ms < 0:
            raise ValueError(
                "thinking_delay_jitter_ms must be >= 0, "
                f"got {self.thinking_delay_jitter_ms}"
            )
        if not 0.0 <= self.capture_bias <= 1.0:
            raise ValueError(f"capture_bias must be within [0, 1], got {self.capture_bias}")

    def thinking_delay_ms(self, rng: random.Random) -> int:
        """Draw one "thinking" pause for the automated opponent."""
        delay = self.thinking_delay_min_ms + int(
            rng.random() * self.thinking_delay_jitter_ms
        )
        _LOGGER.debug("Opponent thinking delay: %d ms", delay)
        return delay
