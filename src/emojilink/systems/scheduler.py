from __future__ import annotations

import logging
from typing import Callable, List, Tuple

from esper import World

from emojilink.components.deferred_action import DeferredAction
from emojilink.events.bus import EVENT_TICK, EventBus
from emojilink.utils.game_state import get_game_state

logger = logging.getLogger(__name__)

# Tolerance for accumulated float error in tick deltas (e.g. four 0.05 s ticks vs a 0.2 s delay).
_EPSILON = 1e-9


class SchedulerSystem:
    """Runs deferred callbacks against a clock advanced by tick events.

    Each action is an entity with a DeferredAction component. Actions fire in
    (due, sequence) order, several per tick when ``dt`` spans them. An action
    whose generation no longer matches the session generation is dropped
    without running.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.now = 0.0
        self._sequence = 0
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        *,
        label: str = "deferred",
        interval: float | None = None,
    ) -> int:
        self._sequence += 1
        action = DeferredAction(
            label=label,
            due=self.now + max(0.0, float(delay)),
            callback=callback,
            generation=get_game_state(self.world).generation,
            interval=interval,
            sequence=self._sequence,
        )
        return self.world.create_entity(action)

    def cancel(self, entity: int) -> bool:
        if not self.world.entity_exists(entity):
            return False
        self.world.delete_entity(entity, immediate=True)
        return True

    def cancel_all(self, label: str | None = None) -> int:
        doomed = [
            ent for ent, action in self.world.get_component(DeferredAction)
            if label is None or action.label == label
        ]
        for ent in doomed:
            self.world.delete_entity(ent, immediate=True)
        return len(doomed)

    def pending(self, label: str | None = None) -> List[DeferredAction]:
        actions = [
            action for _, action in self.world.get_component(DeferredAction)
            if label is None or action.label == label
        ]
        return sorted(actions, key=lambda action: (action.due, action.sequence))

    def time_until(self, label: str) -> float | None:
        """Seconds left before the next action with ``label`` fires."""
        upcoming = self.pending(label)
        if not upcoming:
            return None
        return max(0.0, upcoming[0].due - self.now)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1 / 60)
        try:
            self.now += max(0.0, float(dt))
        except (TypeError, ValueError):
            self.now += 1 / 60
        while True:
            entry = self._next_due()
            if entry is None:
                return
            ent, action = entry
            generation = get_game_state(self.world).generation
            if action.generation != generation:
                logger.debug("dropping stale %s (generation %d, current %d)", action.label, action.generation, generation)
                self.world.delete_entity(ent, immediate=True)
                continue
            if action.interval:
                action.due += action.interval
            else:
                self.world.delete_entity(ent, immediate=True)
            action.callback()

    def _next_due(self) -> Tuple[int, DeferredAction] | None:
        due = [
            (ent, action) for ent, action in self.world.get_component(DeferredAction)
            if action.due <= self.now + _EPSILON
        ]
        if not due:
            return None
        return min(due, key=lambda entry: (entry[1].due, entry[1].sequence))
