from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so handlers registered from lambdas or unnamed systems stay alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)


# ============================================================================
# INPUT
# ============================================================================
EVENT_CELL_CLICK = "cell_click"                    # payload: row, col


# ============================================================================
# BOARD
# ============================================================================
EVENT_BOARD_RESET = "board_reset"                  # payload: size=int, cells=tuple[tuple[str|None,...],...]
EVENT_CELLS_CLEARED = "cells_cleared"              # payload: positions=[(r,c),(r,c)], symbol=str


# ============================================================================
# SELECTION & MATCHING
# ============================================================================
EVENT_CELL_SELECTED = "cell_selected"              # payload: coord=Coord
EVENT_CELL_DESELECTED = "cell_deselected"          # payload: coord=Coord|None, reason=str
EVENT_SHOW_CONNECTION = "show_connection"          # payload: a=Coord, b=Coord, path=tuple[Coord,...]
EVENT_HIDE_CONNECTION = "hide_connection"          # payload: None
EVENT_CELLS_MATCHED = "cells_matched"              # payload: a=Coord, b=Coord, path=tuple[Coord,...]
EVENT_INVALID_MATCH = "invalid_match"              # payload: a=Coord, b=Coord


# ============================================================================
# SESSION
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode, new_mode=GameMode
EVENT_SCORE_UPDATE = "score_update"                # payload: score=int, delta=int
EVENT_TIME_UPDATE = "time_update"                  # payload: seconds_remaining=int
EVENT_GAME_OVER = "game_over"                      # payload: score=int, rating=str, reason=str
