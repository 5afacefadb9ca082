"""High-level coordinator for game mode transitions."""
from __future__ import annotations

import math

from esper import World

from gemfall.components.game_state import GameMode
from gemfall.events.bus import (
    EVENT_MENU_BACK_SELECTED,
    EVENT_MENU_INSTRUCTIONS_SELECTED,
    EVENT_MENU_PLAY_SELECTED,
    EVENT_TICK,
    EVENT_TIMER_EXPIRED,
    EventBus,
)
from gemfall.systems.board import BoardSystem
from gemfall.utils.game_state import set_game_mode
from gemfall.world import get_config, get_game_state


class GameFlowSystem:
    """Moves between title, instructions, play and game over screens.

    Starting (or retrying) a round deals a new board and restarts the
    countdown; the countdown only runs while playing.
    """

    def __init__(self, world: World, event_bus: EventBus, board_system: BoardSystem) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self.event_bus.subscribe(EVENT_MENU_PLAY_SELECTED, self._on_play)
        self.event_bus.subscribe(EVENT_MENU_INSTRUCTIONS_SELECTED, self._on_instructions)
        self.event_bus.subscribe(EVENT_MENU_BACK_SELECTED, self._on_back)
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)

    def start_round(self) -> None:
        state = get_game_state(self.world)
        if state is None:
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
            state = get_game_state(self.world)
        state.time_left = get_config(self.world).game_duration
        self.board_system.new_game(drop_in=True)
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)

    def _on_play(self, sender, **payload) -> None:
        self.start_round()

    def _on_instructions(self, sender, **payload) -> None:
        set_game_mode(self.world, self.event_bus, GameMode.INSTRUCTIONS)

    def _on_back(self, sender, **payload) -> None:
        set_game_mode(self.world, self.event_bus, GameMode.TITLE)

    def _on_tick(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if state is None or state.mode != GameMode.PLAYING:
            return
        try:
            dt = float(payload.get('dt', 1/60))
        except (TypeError, ValueError):
            return
        if not math.isfinite(dt) or dt < 0:
            return
        state.time_left = max(0.0, state.time_left - dt)
        if state.time_left <= 0.0:
            set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
            self.event_bus.emit(EVENT_TIMER_EXPIRED, score=self.board_system.board.score)
