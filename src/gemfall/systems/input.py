from gemfall.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_TILE_CLICK,
)
from gemfall.components.board import Board
from gemfall.components.game_state import GameMode
from gemfall.constants import MOUSE_BUTTON_LEFT
from gemfall.ui.layout import compute_board_geometry, point_to_cell
from gemfall.world import get_game_state

class InputSystem:
    """Translates left mouse presses over the board into tile clicks."""
    def __init__(self, event_bus: EventBus, window, world=None):
        self.event_bus = event_bus
        self.window = window
        self.world = world  # optional world ref for mode and board lookup
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        # Non-left buttons fall through; SelectionSystem listens to EVENT_MOUSE_PRESS for right-click deselect.
        if button != MOUSE_BUTTON_LEFT:
            return
        if not self._playing_mode_active():
            return
        dims = self._board_dimensions()
        if dims is None:
            return
        rows, cols = dims
        geometry = compute_board_geometry(self.window.width, self.window.height, rows, cols)
        cell = point_to_cell(x, y, rows, cols, geometry)
        if cell is not None:
            self.event_bus.emit(EVENT_TILE_CLICK, row=cell[0], col=cell[1])

    def _playing_mode_active(self) -> bool:
        if self.world is None:
            return True
        state = get_game_state(self.world)
        if state is None:
            return True
        return state.mode == GameMode.PLAYING

    def _board_dimensions(self):
        if self.world is not None:
            for _, board in self.world.get_component(Board):
                return board.rows, board.cols
        return None
