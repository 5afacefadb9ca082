import random

from esper import World
from .events.bus import EventBus
from gemfall.components.game_state import GameState, GameMode
from gemfall.config import GameConfig


def create_world(
    event_bus: EventBus,
    config: GameConfig | None = None,
    initial_mode: GameMode = GameMode.PLAYING,
    *,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())
    config = config or GameConfig()

    # Register the global game state resource; the config rides on the same entity.
    state_entity = world.create_entity()
    world.add_component(state_entity, GameState(mode=initial_mode, time_left=config.game_duration))
    world.add_component(state_entity, config)
    return world


def get_config(world: World) -> GameConfig:
    for _, config in world.get_component(GameConfig):
        return config
    raise RuntimeError("GameConfig not found")


def get_game_state(world: World) -> GameState | None:
    for _, state in world.get_component(GameState):
        return state
    return None
