"""Input handling for the title, instructions and game over screens."""
from esper import World

from gemfall.components.game_state import GameMode
from gemfall.constants import MOUSE_BUTTON_LEFT
from gemfall.events.bus import (
    EVENT_GAME_MODE_CHANGED,
    EVENT_KEY_PRESS,
    EVENT_MENU_BACK_SELECTED,
    EVENT_MENU_INSTRUCTIONS_SELECTED,
    EVENT_MENU_PLAY_SELECTED,
    EVENT_MOUSE_PRESS,
    EventBus,
)
from gemfall.menu.components import MenuAction, MenuButton
from gemfall.menu.factory import spawn_menu_for_mode
from gemfall.world import get_config, get_game_state

# arcade.key.ENTER / RETURN, ESCAPE; kept numeric to avoid importing arcade here.
KEY_ENTER = (65293, 13)
KEY_ESCAPE = 65307

_ACTION_EVENTS = {
    MenuAction.PLAY: EVENT_MENU_PLAY_SELECTED,
    MenuAction.INSTRUCTIONS: EVENT_MENU_INSTRUCTIONS_SELECTED,
    MenuAction.BACK: EVENT_MENU_BACK_SELECTED,
}

_MENU_MODES = (GameMode.TITLE, GameMode.INSTRUCTIONS, GameMode.GAME_OVER)


class MenuInputSystem:
    """Keeps each screen's buttons in the world and turns clicks into menu events."""

    def __init__(self, world: World, event_bus: EventBus, window) -> None:
        self.world = world
        self.event_bus = event_bus
        self.window = window
        event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self.on_mode_changed)
        state = get_game_state(world)
        if state is not None:
            self._spawn_buttons(state.mode)

    def on_mode_changed(self, sender, **payload) -> None:
        mode = payload.get("new_mode")
        if isinstance(mode, GameMode):
            self._spawn_buttons(mode)

    def on_mouse_press(self, sender, **payload) -> None:
        x = payload.get("x")
        y = payload.get("y")
        button = payload.get("button")
        if x is None or y is None or button != MOUSE_BUTTON_LEFT:
            return
        if not self._menu_active():
            return
        for _, menu_button in list(self.world.get_component(MenuButton)):
            if not menu_button.enabled:
                continue
            if self._point_inside_button(float(x), float(y), menu_button):
                self.event_bus.emit(_ACTION_EVENTS[menu_button.action])
                return

    def on_key_press(self, sender, **payload) -> None:
        """Enter starts a round from the title or game over screen; Escape goes back."""
        symbol = payload.get("symbol")
        state = get_game_state(self.world)
        if state is None:
            return
        if symbol in KEY_ENTER and state.mode in (GameMode.TITLE, GameMode.GAME_OVER):
            self.event_bus.emit(EVENT_MENU_PLAY_SELECTED)
        elif symbol == KEY_ESCAPE and state.mode in (GameMode.INSTRUCTIONS, GameMode.GAME_OVER):
            self.event_bus.emit(EVENT_MENU_BACK_SELECTED)

    def _spawn_buttons(self, mode: GameMode) -> None:
        texts = get_config(self.world).texts
        spawn_menu_for_mode(self.world, mode, self.window.width, self.window.height, texts)

    def _menu_active(self) -> bool:
        state = get_game_state(self.world)
        return state is not None and state.mode in _MENU_MODES

    @staticmethod
    def _point_inside_button(x: float, y: float, button: MenuButton) -> bool:
        half_w = button.width / 2
        half_h = button.height / 2
        return (
            button.x - half_w <= x <= button.x + half_w
            and button.y - half_h <= y <= button.y + half_h
        )
