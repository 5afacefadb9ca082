import random

from gemfall.components.block import BlockState
from gemfall.components.game_state import GameMode
from gemfall.config import GameConfig
from gemfall.events.bus import (
    EventBus,
    EVENT_GAME_MODE_CHANGED,
    EVENT_MENU_BACK_SELECTED,
    EVENT_MENU_INSTRUCTIONS_SELECTED,
    EVENT_MENU_PLAY_SELECTED,
    EVENT_TICK,
    EVENT_TIMER_EXPIRED,
)
from gemfall.systems.board import BoardSystem
from gemfall.systems.game_flow_system import GameFlowSystem
from gemfall.world import create_world, get_game_state


def _setup(duration=1.0):
    bus = EventBus()
    config = GameConfig(rows=5, cols=5, game_duration=duration)
    world = create_world(bus, config, initial_mode=GameMode.TITLE, rng=random.Random(5))
    board_system = BoardSystem(world, bus)
    flow = GameFlowSystem(world, bus, board_system)
    return bus, world, board_system, flow


def test_menu_navigation():
    bus, world, board_system, flow = _setup()
    modes = []
    bus.subscribe(EVENT_GAME_MODE_CHANGED, lambda sender, **kw: modes.append(kw['new_mode']))
    bus.emit(EVENT_MENU_INSTRUCTIONS_SELECTED)
    bus.emit(EVENT_MENU_BACK_SELECTED)
    assert modes == [GameMode.INSTRUCTIONS, GameMode.TITLE]
    assert get_game_state(world).mode == GameMode.TITLE


def test_board_frozen_outside_play():
    bus, world, board_system, flow = _setup()
    board_system.swap_controller.attempt_swap((0, 0), (0, 1))
    block = board_system.board.block_at((0, 0))
    assert block.state == BlockState.SWAPPING
    for _ in range(10):
        bus.emit(EVENT_TICK, dt=0.02)
    assert block.progress == 0.0
    assert get_game_state(world).time_left == 1.0


def test_play_deals_board_and_countdown_ends_round():
    bus, world, board_system, flow = _setup(duration=1.0)
    expired = []
    bus.subscribe(EVENT_TIMER_EXPIRED, lambda sender, **kw: expired.append(kw))
    board_system.board.score = 120

    bus.emit(EVENT_MENU_PLAY_SELECTED)
    state = get_game_state(world)
    assert state.mode == GameMode.PLAYING
    assert board_system.board.score == 0

    for _ in range(49):
        bus.emit(EVENT_TICK, dt=0.02)
    assert state.mode == GameMode.PLAYING
    for _ in range(2):
        bus.emit(EVENT_TICK, dt=0.02)
    assert state.mode == GameMode.GAME_OVER
    assert state.time_left == 0.0
    assert expired == [{'score': board_system.board.score}]

    # Further ticks neither count down nor fire again.
    bus.emit(EVENT_TICK, dt=0.5)
    assert len(expired) == 1


def test_retry_resets_timer():
    bus, world, board_system, flow = _setup(duration=0.1)
    bus.emit(EVENT_MENU_PLAY_SELECTED)
    for _ in range(10):
        bus.emit(EVENT_TICK, dt=0.02)
    state = get_game_state(world)
    assert state.mode == GameMode.GAME_OVER
    bus.emit(EVENT_MENU_PLAY_SELECTED)
    assert state.mode == GameMode.PLAYING
    assert state.time_left == 0.1
