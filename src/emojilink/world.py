import random

from esper import World
from .events.bus import EventBus
from emojilink.components.game_state import GameMode, GameState
from emojilink.components.session_config import SessionConfig


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.IDLE,
    *,
    config: SessionConfig | None = None,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Single state entity carries the live session and its configuration.
    state_entity = world.create_entity()
    world.add_component(state_entity, GameState(mode=initial_mode))
    world.add_component(state_entity, config or SessionConfig())
    return world
