"""Forwards session events from the bus to a presentation callback set."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Mapping, Optional

from emojilink.errors import InvalidCallbackSet
from emojilink.events.bus import (
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

REQUIRED_CALLBACKS = ("on_score_update", "on_time_update", "on_game_over")


@dataclass(slots=True)
class SessionCallbacks:
    on_score_update: Callable[[int], Any]
    on_time_update: Callable[[int], Any]
    on_game_over: Callable[[], Any]
    on_cell_select: Optional[Callable[..., Any]] = None
    on_cell_deselect: Optional[Callable[[], Any]] = None
    on_show_connection: Optional[Callable[..., Any]] = None
    on_hide_connection: Optional[Callable[[], Any]] = None
    on_cells_match: Optional[Callable[..., Any]] = None
    on_invalid_match: Optional[Callable[..., Any]] = None

    def __post_init__(self) -> None:
        missing = [name for name in REQUIRED_CALLBACKS if getattr(self, name) is None]
        not_callable = [
            f.name for f in fields(self)
            if getattr(self, f.name) is not None and not callable(getattr(self, f.name))
        ]
        if missing or not_callable:
            raise InvalidCallbackSet(missing=missing, not_callable=not_callable)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "SessionCallbacks":
        """Build from a dict of callback names, rejecting unknown keys."""
        if not isinstance(mapping, Mapping):
            raise InvalidCallbackSet(missing=REQUIRED_CALLBACKS)
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise InvalidCallbackSet(unknown=unknown)
        missing = [name for name in REQUIRED_CALLBACKS if mapping.get(name) is None]
        if missing:
            raise InvalidCallbackSet(missing=missing)
        return cls(**mapping)


def coerce_callbacks(callbacks: SessionCallbacks | Mapping[str, Any] | None) -> SessionCallbacks:
    if isinstance(callbacks, SessionCallbacks):
        return callbacks
    return SessionCallbacks.from_mapping(callbacks)


class CallbackBridge:
    """Subscribes to the bus and calls the matching presentation callback."""

    def __init__(self, event_bus: EventBus, callbacks: SessionCallbacks | Mapping[str, Any]):
        self.event_bus = event_bus
        self.callbacks = coerce_callbacks(callbacks)
        event_bus.subscribe(EVENT_SCORE_UPDATE, self._on_score_update)
        event_bus.subscribe(EVENT_TIME_UPDATE, self._on_time_update)
        event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)
        event_bus.subscribe(EVENT_CELL_SELECTED, self._on_cell_selected)
        event_bus.subscribe(EVENT_CELL_DESELECTED, self._on_cell_deselected)
        event_bus.subscribe(EVENT_SHOW_CONNECTION, self._on_show_connection)
        event_bus.subscribe(EVENT_HIDE_CONNECTION, self._on_hide_connection)
        event_bus.subscribe(EVENT_CELLS_MATCHED, self._on_cells_matched)
        event_bus.subscribe(EVENT_INVALID_MATCH, self._on_invalid_match)

    def _on_score_update(self, sender, **payload):
        self.callbacks.on_score_update(payload["score"])

    def _on_time_update(self, sender, **payload):
        self.callbacks.on_time_update(payload["seconds_remaining"])

    def _on_game_over(self, sender, **payload):
        self.callbacks.on_game_over()

    def _on_cell_selected(self, sender, **payload):
        if self.callbacks.on_cell_select:
            self.callbacks.on_cell_select(payload["coord"])

    def _on_cell_deselected(self, sender, **payload):
        if self.callbacks.on_cell_deselect:
            self.callbacks.on_cell_deselect()

    def _on_show_connection(self, sender, **payload):
        if self.callbacks.on_show_connection:
            self.callbacks.on_show_connection(payload["a"], payload["b"], payload["path"])

    def _on_hide_connection(self, sender, **payload):
        if self.callbacks.on_hide_connection:
            self.callbacks.on_hide_connection()

    def _on_cells_matched(self, sender, **payload):
        if self.callbacks.on_cells_match:
            self.callbacks.on_cells_match(payload["a"], payload["b"])

    def _on_invalid_match(self, sender, **payload):
        if self.callbacks.on_invalid_match:
            self.callbacks.on_invalid_match(payload["a"], payload["b"])
