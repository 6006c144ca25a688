"""Session state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """Session lifecycle: IDLE -> PLAYING <-> PAUSED -> OVER -> PLAYING."""
    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()
    OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the live session.

    ``generation`` is bumped by every transition that supersedes scheduled work;
    deferred actions carrying an older value are dropped.
    """
    mode: GameMode = GameMode.IDLE
    score: int = 0
    time_remaining: int = 0
    generation: int = 0
