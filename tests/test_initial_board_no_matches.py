import random

from gemfall.components.block import BlockState
from gemfall.config import GameConfig
from gemfall.events.bus import EventBus, EVENT_TICK, EVENT_MATCH_FOUND
from gemfall.systems.board import BoardSystem
from gemfall.systems.board_ops import find_matches, find_valid_swaps
from gemfall.world import create_world


def test_initial_board_has_no_matches():
    for seed in range(10):
        bus = EventBus()
        world = create_world(bus, GameConfig(), rng=random.Random(seed))
        board_system = BoardSystem(world, bus)
        board = board_system.board
        assert find_matches(board) == set(), f"seed {seed} produced a match"
        assert not board.has_empty()
        assert not board.is_animating()
        assert find_valid_swaps(board), f"seed {seed} produced a dead board"


def test_drop_in_board_lands_without_matches():
    bus = EventBus()
    world = create_world(bus, GameConfig(rows=6, cols=5), rng=random.Random(2))
    board_system = BoardSystem(world, bus, drop_in=True)
    board = board_system.board
    found = []
    bus.subscribe(EVENT_MATCH_FOUND, lambda sender, **kw: found.append(kw))
    assert all(block.state == BlockState.FALLING for block in board.blocks())
    assert all(block.render_row < 0 for block in board.blocks())
    types = board.types()
    for _ in range(200):
        bus.emit(EVENT_TICK, dt=0.02)
    assert board.is_settled()
    assert board.types() == types
    assert found == []
