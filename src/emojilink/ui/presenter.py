from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from emojilink.components.grid import Coord
from emojilink.constants import GAME_DURATION_SECONDS
from emojilink.systems.callback_bridge import SessionCallbacks
from emojilink.utils.scoring import score_rating


@dataclass(slots=True)
class PresentationState:
    """What the window needs to draw, kept current by session callbacks.

    Holds copies only; the board itself is read from the session snapshot.
    """
    score: int = 0
    time_remaining: int = GAME_DURATION_SECONDS
    game_over: bool = False
    selected: Coord | None = None
    connection: Tuple[Coord, ...] | None = None
    flash: Tuple[Coord, Coord] | None = None
    flash_time: float = 0.0
    match_count: int = 0

    def callbacks(self) -> SessionCallbacks:
        return SessionCallbacks(
            on_score_update=self.on_score_update,
            on_time_update=self.on_time_update,
            on_game_over=self.on_game_over,
            on_cell_select=self.on_cell_select,
            on_cell_deselect=self.on_cell_deselect,
            on_show_connection=self.on_show_connection,
            on_hide_connection=self.on_hide_connection,
            on_cells_match=self.on_cells_match,
            on_invalid_match=self.on_invalid_match,
        )

    def reset(self) -> None:
        self.game_over = False
        self.selected = None
        self.connection = None
        self.flash = None
        self.flash_time = 0.0
        self.match_count = 0

    @property
    def rating(self) -> str:
        return score_rating(self.score)

    def on_score_update(self, score: int) -> None:
        self.score = score

    def on_time_update(self, seconds_remaining: int) -> None:
        self.time_remaining = seconds_remaining

    def on_game_over(self) -> None:
        self.game_over = True
        self.selected = None
        self.connection = None

    def on_cell_select(self, coord: Coord) -> None:
        self.selected = coord

    def on_cell_deselect(self) -> None:
        self.selected = None

    def on_show_connection(self, a: Coord, b: Coord, path: Tuple[Coord, ...]) -> None:
        self.connection = tuple(path)

    def on_hide_connection(self) -> None:
        self.connection = None

    def on_cells_match(self, a: Coord, b: Coord) -> None:
        self.match_count += 1

    def on_invalid_match(self, a: Coord, b: Coord) -> None:
        self.flash = (a, b)
        self.flash_time = 0.2

    def advance(self, dt: float) -> None:
        if self.flash is None:
            return
        self.flash_time -= dt
        if self.flash_time <= 0.0:
            self.flash = None
            self.flash_time = 0.0
