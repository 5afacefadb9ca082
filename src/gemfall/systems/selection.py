from typing import Optional, Tuple

from gemfall.components.game_state import GameMode
from gemfall.constants import MOUSE_BUTTON_RIGHT
from gemfall.events.bus import (
    EventBus,
    EVENT_GAME_MODE_CHANGED,
    EVENT_MOUSE_PRESS,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
)
from gemfall.systems.board import BoardSystem
from gemfall.systems.board_ops import is_adjacent


class SelectionSystem:
    """Click-to-select, click-a-neighbour-to-swap interaction."""

    def __init__(self, board_system: BoardSystem, event_bus: EventBus):
        self.board_system = board_system
        self.event_bus = event_bus
        self.selected: Optional[Tuple[int, int]] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self.on_mode_changed)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        # No clicks accepted while any block animates or a cascade is pending.
        if not self.board_system.is_settled():
            return
        if self.selected is None:
            self._select((row, col))
            return
        if self.selected == (row, col):
            self._deselect('same_tile')
            return
        if is_adjacent(self.selected, (row, col)):
            src = self.selected
            self._deselect('swap')
            self.board_system.swap_controller.attempt_swap(src, (row, col))
        else:
            # Change selection to new tile
            self._select((row, col))

    def on_mouse_press(self, sender, **kwargs):
        # Right-click always clears current selection
        if kwargs.get('button') != MOUSE_BUTTON_RIGHT:
            return
        if self.selected is not None:
            self._deselect('right_click')

    def on_mode_changed(self, sender, **kwargs):
        if kwargs.get('new_mode') != GameMode.PLAYING and self.selected is not None:
            self._deselect('mode_changed')

    def _select(self, pos: Tuple[int, int]) -> None:
        self.selected = pos
        self.event_bus.emit(EVENT_TILE_SELECTED, row=pos[0], col=pos[1])

    def _deselect(self, reason: str) -> None:
        prev = self.selected
        self.selected = None
        if prev is not None:
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])
