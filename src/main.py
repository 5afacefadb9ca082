"""Entry point for the Gemfall match-three game.

Builds the ECS world and event bus, wires the systems and opens the Arcade window.
"""
import argparse
import logging

from arcade import Window, run, set_background_color, color
from gemfall.world import create_world
from gemfall.config import load_config
from gemfall.components.game_state import GameMode
from gemfall.events.bus import EventBus, EVENT_TICK, EVENT_MOUSE_PRESS, EVENT_KEY_PRESS
from gemfall.systems.board import BoardSystem
from gemfall.systems.game_flow_system import GameFlowSystem
from gemfall.systems.input import InputSystem
from gemfall.systems.render import RenderSystem
from gemfall.systems.selection import SelectionSystem
from gemfall.menu.input_system import MenuInputSystem
from gemfall.menu.render_system import MenuRenderSystem

class GemfallWindow(Window):
    def __init__(self, config_path=None):
        config = load_config(config_path)
        super().__init__(config.window_width, config.window_height, config.texts.title)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, config, initial_mode=GameMode.TITLE)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus, self.board_system)
        self.selection_system = SelectionSystem(self.board_system, self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.menu_render_system = MenuRenderSystem(self.world, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.menu_input_system = MenuInputSystem(self.world, self.event_bus, self)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()
        self.menu_render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def main():
    parser = argparse.ArgumentParser(description="Gemfall match-three game")
    parser.add_argument("--config", help="path to a JSON game config (defaults to the bundled one)")
    parser.add_argument("--log-level", default="info", help="logging level (debug, info, warning, ...)")
    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s %(message)s",
    )
    GemfallWindow(args.config)
    run()

if __name__ == "__main__":
    main()
