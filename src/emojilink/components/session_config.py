from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from emojilink.constants import (
    EMOJI_PALETTE,
    GAME_DURATION_SECONDS,
    GRID_SIZE,
    MATCH_CLEAR_DELAY,
    MATCH_REWARD,
    SOLVABILITY_CHECK_DELAY,
    TICK_INTERVAL,
)


@dataclass(slots=True)
class SessionConfig:
    """Tunable session parameters, stored on the game state entity."""
    grid_size: int = GRID_SIZE
    palette: Tuple[str, ...] = field(default_factory=lambda: tuple(EMOJI_PALETTE))
    duration_seconds: int = GAME_DURATION_SECONDS
    match_reward: int = MATCH_REWARD
    match_clear_delay: float = MATCH_CLEAR_DELAY
    solvability_check_delay: float = SOLVABILITY_CHECK_DELAY
    tick_interval: float = TICK_INTERVAL

    def __post_init__(self) -> None:
        self.palette = tuple(self.palette)
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if not self.palette:
            raise ValueError("palette must contain at least one symbol")
        if self.duration_seconds <= 0:
            raise ValueError(f"duration_seconds must be positive, got {self.duration_seconds}")
        if self.match_reward < 0:
            raise ValueError(f"match_reward must not be negative, got {self.match_reward}")
        if self.match_clear_delay < 0 or self.solvability_check_delay < 0:
            raise ValueError("delays must not be negative")
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {self.tick_interval}")
