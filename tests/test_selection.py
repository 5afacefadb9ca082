from gemfall.components.game_state import GameMode
from gemfall.constants import MOUSE_BUTTON_RIGHT
from gemfall.events.bus import (
    EVENT_MOUSE_PRESS,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from gemfall.systems.selection import SelectionSystem
from gemfall.utils.game_state import set_game_mode

from board_helpers import capture, make_board_system

LAYOUT = [
    [0, 1, 0, 0, 1],
    [1, 0, 1, 1, 0],
]


def test_click_neighbour_requests_swap():
    bus, world, board_system = make_board_system(LAYOUT)
    selection = SelectionSystem(board_system, bus)
    selected = capture(bus, EVENT_TILE_SELECTED)
    deselected = capture(bus, EVENT_TILE_DESELECTED)
    requests = capture(bus, EVENT_TILE_SWAP_REQUEST)

    bus.emit(EVENT_TILE_CLICK, row=0, col=1)
    assert selection.selected == (0, 1)
    assert selected == [{'row': 0, 'col': 1}]
    bus.emit(EVENT_TILE_CLICK, row=0, col=2)
    assert selection.selected is None
    assert deselected[-1]['reason'] == 'swap'
    assert requests == [{'src': (0, 1), 'dst': (0, 2)}]


def test_clicks_ignored_while_board_animates():
    bus, world, board_system = make_board_system(LAYOUT)
    selection = SelectionSystem(board_system, bus)
    board_system.swap_controller.attempt_swap((0, 1), (0, 2))
    bus.emit(EVENT_TILE_CLICK, row=1, col=1)
    assert selection.selected is None


def test_same_tile_toggles_and_far_tile_reselects():
    bus, world, board_system = make_board_system(LAYOUT)
    selection = SelectionSystem(board_system, bus)
    deselected = capture(bus, EVENT_TILE_DESELECTED)

    bus.emit(EVENT_TILE_CLICK, row=0, col=0)
    bus.emit(EVENT_TILE_CLICK, row=0, col=0)
    assert selection.selected is None
    assert deselected == [{'reason': 'same_tile', 'prev_row': 0, 'prev_col': 0}]

    bus.emit(EVENT_TILE_CLICK, row=0, col=0)
    bus.emit(EVENT_TILE_CLICK, row=1, col=4)
    assert selection.selected == (1, 4)
    assert not board_system.swap_controller.in_flight


def test_right_click_and_mode_change_clear_selection():
    bus, world, board_system = make_board_system(LAYOUT)
    selection = SelectionSystem(board_system, bus)
    deselected = capture(bus, EVENT_TILE_DESELECTED)

    bus.emit(EVENT_TILE_CLICK, row=1, col=1)
    bus.emit(EVENT_MOUSE_PRESS, x=10, y=10, button=MOUSE_BUTTON_RIGHT)
    assert selection.selected is None
    assert deselected[-1]['reason'] == 'right_click'

    bus.emit(EVENT_TILE_CLICK, row=1, col=1)
    set_game_mode(world, bus, GameMode.GAME_OVER)
    assert selection.selected is None
    assert deselected[-1]['reason'] == 'mode_changed'
