from __future__ import annotations

from typing import Any

from emojilink.components.grid import Grid
from emojilink.events.bus import EVENT_TICK, EventBus


def make_grid(*rows: str) -> Grid:
    """Build a grid from strings, one character per cell, '.' for empty."""

    return Grid.from_rows([list(row) for row in rows])


def drive_ticks(bus: EventBus, count: int = 1, dt: float = 0.05) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


class EventRecorder:
    """Captures (name, payload) pairs for the given events in emission order."""

    def __init__(self, bus: EventBus, *names: str) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        for name in names:
            bus.subscribe(name, self._handler(name))

    def _handler(self, name: str):
        def handler(sender, **payload):
            self.events.append((name, payload))
        return handler

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def of(self, name: str) -> list[dict[str, Any]]:
        return [payload for event, payload in self.events if event == name]

    def clear(self) -> None:
        self.events.clear()


class CallbackRecorder:
    """Full presentation callback set that logs every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def as_mapping(self) -> dict[str, Any]:
        names = (
            "on_score_update",
            "on_time_update",
            "on_game_over",
            "on_cell_select",
            "on_cell_deselect",
            "on_show_connection",
            "on_hide_connection",
            "on_cells_match",
            "on_invalid_match",
        )
        return {name: self._recorder(name) for name in names}

    def _recorder(self, name: str):
        def record(*args):
            self.calls.append((name, *args))
        return record

    def named(self, name: str) -> list[tuple[Any, ...]]:
        return [call[1:] for call in self.calls if call[0] == name]
