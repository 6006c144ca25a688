"""Session controller: game mode, selection, countdown, score and deferred matches."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Tuple

from esper import World

from emojilink.components.game_state import GameMode, GameState
from emojilink.components.grid import Coord, Grid
from emojilink.events.bus import (
    EVENT_CELL_CLICK,
    EVENT_CELL_DESELECTED,
    EVENT_CELL_SELECTED,
    EVENT_CELLS_MATCHED,
    EVENT_GAME_OVER,
    EVENT_HIDE_CONNECTION,
    EVENT_INVALID_MATCH,
    EVENT_SCORE_UPDATE,
    EVENT_SHOW_CONNECTION,
    EVENT_TIME_UPDATE,
    EventBus,
)
from emojilink.systems.board import BoardSystem, Matched
from emojilink.systems.callback_bridge import CallbackBridge, SessionCallbacks
from emojilink.systems.scheduler import SchedulerSystem
from emojilink.utils.connectivity import Connected
from emojilink.utils.game_state import advance_generation, get_game_state, get_session_config, set_game_mode
from emojilink.utils.scoring import score_rating

logger = logging.getLogger(__name__)

COUNTDOWN = "countdown"
MATCH_CLEAR = "match_clear"
SOLVABILITY_CHECK = "solvability_check"


class SessionController:
    """Drives one play session at a time.

    Modes: IDLE -> PLAYING <-> PAUSED, PLAYING/PAUSED -> OVER, any -> PLAYING
    via :meth:`start`. Every transition that supersedes scheduled work bumps the
    session generation so a countdown tick or a delayed match clear from an
    earlier phase can never act on the current board.

    When the countdown runs out while a match is still waiting for its clear,
    the session ends at once and the pending match is discarded.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        callbacks: SessionCallbacks | Mapping[str, Any],
        *,
        scheduler: SchedulerSystem | None = None,
    ) -> None:
        # Validate callbacks before touching the world so a bad set fails fast.
        self.callback_bridge = CallbackBridge(event_bus, callbacks)
        self.world = world
        self.event_bus = event_bus
        self.scheduler = scheduler or SchedulerSystem(world, event_bus)
        self.board: BoardSystem | None = None
        self.selected: Coord | None = None
        self._countdown_remainder: float | None = None
        self._check_remainder: float | None = None
        self.event_bus.subscribe(EVENT_CELL_CLICK, self.on_cell_click)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return get_game_state(self.world)

    @property
    def mode(self) -> GameMode:
        return self.state.mode

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def time_remaining(self) -> int:
        return self.state.time_remaining

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, grid: Grid | None = None) -> None:
        """Begin a fresh session from any mode, discarding the previous board."""
        config = get_session_config(self.world)
        self._invalidate_pending()
        self.selected = None
        self._countdown_remainder = None
        self._check_remainder = None
        state = self.state
        state.score = 0
        state.time_remaining = config.duration_seconds
        if self.board is None:
            self.board = BoardSystem(self.world, self.event_bus, grid=grid)
        elif grid is not None:
            self.board.replace_grid(grid)
        else:
            self.board.new_board()
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        logger.info("session started (generation %d)", state.generation)
        self.event_bus.emit(EVENT_HIDE_CONNECTION)
        self.event_bus.emit(EVENT_SCORE_UPDATE, score=0, delta=0)
        self.event_bus.emit(EVENT_TIME_UPDATE, seconds_remaining=state.time_remaining)
        self._schedule_countdown(config.tick_interval)

    def pause(self) -> bool:
        if self.mode != GameMode.PLAYING:
            return False
        self._countdown_remainder = self.scheduler.time_until(COUNTDOWN)
        # A pending match clear is dropped, but a cleared board still owes its move check.
        self._check_remainder = self.scheduler.time_until(SOLVABILITY_CHECK)
        self._invalidate_pending()
        set_game_mode(self.world, self.event_bus, GameMode.PAUSED)
        self.event_bus.emit(EVENT_HIDE_CONNECTION)
        return True

    def resume(self) -> bool:
        if self.mode != GameMode.PAUSED:
            return False
        config = get_session_config(self.world)
        remainder = self._countdown_remainder
        check_remainder = self._check_remainder
        self._countdown_remainder = None
        self._check_remainder = None
        self._invalidate_pending()
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self._schedule_countdown(config.tick_interval if remainder is None else remainder)
        if check_remainder is not None:
            self.scheduler.schedule(check_remainder, self._check_remaining_moves, label=SOLVABILITY_CHECK)
        return True

    def end_game(self, reason: str = "ended") -> bool:
        if self.mode not in (GameMode.PLAYING, GameMode.PAUSED):
            return False
        self._invalidate_pending()
        self.selected = None
        self._countdown_remainder = None
        self._check_remainder = None
        set_game_mode(self.world, self.event_bus, GameMode.OVER)
        score = self.score
        logger.info("session over (%s), score %d", reason, score)
        self.event_bus.emit(EVENT_HIDE_CONNECTION)
        self.event_bus.emit(EVENT_GAME_OVER, score=score, rating=score_rating(score), reason=reason)
        return True

    def shutdown(self) -> None:
        """Cancel all pending work and return to IDLE without a game-over event."""
        self._invalidate_pending()
        self.selected = None
        self._countdown_remainder = None
        self._check_remainder = None
        set_game_mode(self.world, self.event_bus, GameMode.IDLE)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_cell_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.select_cell((row, col))

    def select_cell(self, coord: Tuple[int, int]) -> None:
        if self.mode != GameMode.PLAYING or self.board is None:
            return
        coord = Coord(*coord)
        # Raises OutOfBounds before any state changes.
        empty = self.board.grid.is_empty(coord)
        self.event_bus.emit(EVENT_HIDE_CONNECTION)
        if empty:
            self._drop_selection(reason="empty_cell")
            return
        if self.selected is None:
            self.selected = coord
            self.event_bus.emit(EVENT_CELL_SELECTED, coord=coord)
            return
        first = self.selected
        if first == coord:
            self._drop_selection(reason="same_cell")
            return

        self.selected = None
        result = self.board.find_path(first, coord)
        if isinstance(result, Connected):
            self.event_bus.emit(EVENT_SHOW_CONNECTION, a=first, b=coord, path=result.path)
            self.event_bus.emit(EVENT_CELL_DESELECTED, coord=first, reason="matched")
            config = get_session_config(self.world)
            self.scheduler.schedule(
                config.match_clear_delay,
                lambda: self._apply_match(first, coord),
                label=MATCH_CLEAR,
            )
        else:
            self.event_bus.emit(EVENT_INVALID_MATCH, a=first, b=coord)
            self.event_bus.emit(EVENT_CELL_DESELECTED, coord=first, reason="invalid_match")

    # ------------------------------------------------------------------
    # Deferred steps
    # ------------------------------------------------------------------

    def _apply_match(self, a: Coord, b: Coord) -> None:
        outcome = self.board.attempt_match(a, b)
        self.event_bus.emit(EVENT_HIDE_CONNECTION)
        if not isinstance(outcome, Matched):
            logger.debug("discarding match %s-%s: cells no longer connect", a, b)
            return
        if self.selected in (a, b):
            self._drop_selection(reason="cleared")
        self.event_bus.emit(EVENT_CELLS_MATCHED, a=a, b=b, path=outcome.path)
        reward = get_session_config(self.world).match_reward
        state = self.state
        state.score += reward
        self.event_bus.emit(EVENT_SCORE_UPDATE, score=state.score, delta=reward)
        self.scheduler.schedule(
            get_session_config(self.world).solvability_check_delay,
            self._check_remaining_moves,
            label=SOLVABILITY_CHECK,
        )

    def _check_remaining_moves(self) -> None:
        if not self.board.has_any_move():
            self.end_game(reason="no_moves")

    def _on_countdown(self) -> None:
        state = self.state
        state.time_remaining = max(0, state.time_remaining - 1)
        self.event_bus.emit(EVENT_TIME_UPDATE, seconds_remaining=state.time_remaining)
        if state.time_remaining <= 0:
            self.end_game(reason="time_up")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _schedule_countdown(self, delay: float) -> None:
        interval = get_session_config(self.world).tick_interval
        self.scheduler.schedule(delay, self._on_countdown, label=COUNTDOWN, interval=interval)

    def _drop_selection(self, reason: str) -> None:
        previous = self.selected
        self.selected = None
        if previous is not None:
            self.event_bus.emit(EVENT_CELL_DESELECTED, coord=previous, reason=reason)

    def _invalidate_pending(self) -> None:
        generation = advance_generation(self.world)
        dropped = self.scheduler.cancel_all()
        if dropped:
            logger.debug("generation %d: cancelled %d pending action(s)", generation, dropped)
