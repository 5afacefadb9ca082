from gemfall.components.game_state import GameMode
from gemfall.constants import MOUSE_BUTTON_LEFT, MOUSE_BUTTON_RIGHT
from gemfall.events.bus import EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from gemfall.systems.input import InputSystem
from gemfall.ui.layout import cell_center, compute_board_geometry, point_to_cell
from gemfall.utils.game_state import set_game_mode

from board_helpers import DummyWindow, capture, make_board_system

LAYOUT = [
    [0, 1, 2, 3],
    [1, 2, 3, 0],
    [2, 3, 0, 1],
]


def test_cell_center_round_trips_through_point_to_cell():
    geometry = compute_board_geometry(800, 600, 3, 4)
    for row in range(3):
        for col in range(4):
            x, y = cell_center(row, col, 3, geometry)
            assert point_to_cell(x, y, 3, 4, geometry) == (row, col)


def test_row_zero_is_drawn_on_top():
    geometry = compute_board_geometry(800, 600, 3, 4)
    _, top_y = cell_center(0, 0, 3, geometry)
    _, bottom_y = cell_center(2, 0, 3, geometry)
    assert top_y > bottom_y


def test_left_click_maps_to_tile():
    bus, world, board_system = make_board_system(LAYOUT)
    window = DummyWindow(800, 600)
    InputSystem(bus, window, world)
    clicks = capture(bus, EVENT_TILE_CLICK)
    geometry = compute_board_geometry(window.width, window.height, 3, 4)

    x, y = cell_center(2, 3, 3, geometry)
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=MOUSE_BUTTON_LEFT)
    assert clicks == [{'row': 2, 'col': 3}]

    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=MOUSE_BUTTON_RIGHT)
    bus.emit(EVENT_MOUSE_PRESS, x=1, y=599, button=MOUSE_BUTTON_LEFT)
    assert len(clicks) == 1


def test_clicks_ignored_outside_play():
    bus, world, board_system = make_board_system(LAYOUT)
    window = DummyWindow(800, 600)
    InputSystem(bus, window, world)
    clicks = capture(bus, EVENT_TILE_CLICK)
    set_game_mode(world, bus, GameMode.TITLE)
    x, y = cell_center(0, 0, 3, compute_board_geometry(800, 600, 3, 4))
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=MOUSE_BUTTON_LEFT)
    assert clicks == []
