from __future__ import annotations

from esper import World

from emojilink.components.game_state import GameMode, GameState
from emojilink.components.session_config import SessionConfig
from emojilink.events.bus import EVENT_GAME_MODE_CHANGED, EventBus


def get_game_state(world: World) -> GameState:
    """Return the singleton session state, creating it when absent."""
    for _, state in world.get_component(GameState):
        return state
    state = GameState()
    world.create_entity(state)
    return state


def get_session_config(world: World) -> SessionConfig:
    for _, config in world.get_component(SessionConfig):
        return config
    config = SessionConfig()
    world.create_entity(config)
    return config


def set_game_mode(world: World, event_bus: EventBus, mode: GameMode) -> GameMode:
    """Update the session mode and emit a change event when it differs.

    Returns the previous mode.
    """

    state = get_game_state(world)
    previous_mode = state.mode
    if previous_mode != mode:
        state.mode = mode
        event_bus.emit(
            EVENT_GAME_MODE_CHANGED,
            previous_mode=previous_mode,
            new_mode=mode,
        )
    return previous_mode


def advance_generation(world: World) -> int:
    """Invalidate every deferred action scheduled under the current generation."""

    state = get_game_state(world)
    state.generation += 1
    return state.generation
