import logging

from gemfall.events.bus import EVENT_BOARD_RESHUFFLED, EVENT_CASCADE_COMPLETE
from gemfall.systems.board_ops import find_matches, find_valid_swaps

from board_helpers import capture, make_board_system, tick_until_settled

# Every row and column holds three different types, so no single swap can
# line up three of a kind.
DEAD_PATTERN = [
    [0, 1, 2],
    [1, 2, 0],
    [2, 0, 1],
]


def test_dead_board_detected_and_reshuffled():
    bus, world, board_system = make_board_system(DEAD_PATTERN, reshuffle_on_stalemate=True)
    reshuffled = capture(bus, EVENT_BOARD_RESHUFFLED)
    board = board_system.board
    assert not find_matches(board), "Setup should not contain initial matches"
    assert not find_valid_swaps(board), "Pattern should eliminate all valid moves"

    assert board_system.check_stalemate()

    assert len(reshuffled) == 1
    assert not find_matches(board)
    assert find_valid_swaps(board)
    assert not board.is_animating()


def test_stalemate_after_cascade_triggers_reshuffle():
    layout = [
        [3, 3, 3],
        [1, 2, 0],
        [2, 0, 1],
    ]
    bus, world, board_system = make_board_system(layout, reshuffle_on_stalemate=True)
    complete = capture(bus, EVENT_CASCADE_COMPLETE)
    reshuffled = capture(bus, EVENT_BOARD_RESHUFFLED)
    # The refill of the cleared top row completes the dead pattern.
    spawner = board_system.spawner
    real_next_type = spawner.next_type
    refill = [0, 1, 2]
    spawner.next_type = lambda: refill.pop(0) if refill else real_next_type()

    tick_until_settled(board_system)

    assert complete == [{'depth': 1}]
    assert len(reshuffled) == 1
    board = board_system.board
    assert board.score == 30
    assert not find_matches(board)
    assert find_valid_swaps(board)


def test_playable_board_left_alone():
    layout = [
        [0, 1, 0],
        [1, 0, 1],
        [2, 2, 0],
    ]
    bus, world, board_system = make_board_system(layout, reshuffle_on_stalemate=True)
    reshuffled = capture(bus, EVENT_BOARD_RESHUFFLED)
    assert not board_system.check_stalemate()
    assert reshuffled == []
    assert board_system.board.types() == layout


def test_stalemate_check_disabled():
    bus, world, board_system = make_board_system(DEAD_PATTERN)
    assert not board_system.check_stalemate()
    assert board_system.board.types() == DEAD_PATTERN


def test_unplayable_board_kept_when_no_layout_found(caplog):
    # A 2x2 board can never hold a run of three.
    bus, world, board_system = make_board_system([[0, 1], [3, 2]], reshuffle_on_stalemate=True)
    reshuffled = capture(bus, EVENT_BOARD_RESHUFFLED)
    board = board_system.board
    with caplog.at_level(logging.WARNING, logger="gemfall.systems.board"):
        assert not board_system.reshuffle(max_attempts=5)
    assert reshuffled == []
    assert board.types() == [[0, 1], [3, 2]]
    for r, row in enumerate(board.grid):
        for c, block in enumerate(row):
            assert block.position == (r, c)
    assert "No playable 2x2 layout found" in caplog.text
