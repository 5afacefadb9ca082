"""Rendering system responsible for drawing the menu screens."""
import arcade
from esper import World
from gemfall.components.board import Board
from gemfall.components.game_state import GameMode
from gemfall.menu.components import MenuButton
from gemfall.world import get_config, get_game_state

BACKGROUND_COLOR = (20, 30, 50)


class MenuRenderSystem:
    """Renders the title, instructions and game over screens."""

    def __init__(self, world: World, window) -> None:
        self.world = world
        self.window = window

    def process(self) -> None:
        """Draw the active screen unless a round is being played."""
        state = get_game_state(self.world)
        if not state or state.mode == GameMode.PLAYING:
            return
        texts = get_config(self.world).texts
        width, height = self.window.width, self.window.height

        arcade.draw_lrbt_rectangle_filled(0, width, 0, height, BACKGROUND_COLOR)

        if state.mode == GameMode.TITLE:
            self._draw_heading(texts.title, height * 2 / 3, 48)
        elif state.mode == GameMode.INSTRUCTIONS:
            self._draw_heading(texts.instructions_button, height * 0.8, 36)
            y = height * 0.65
            for line in texts.instructions:
                arcade.draw_text(line, width / 2, y, arcade.color.WHITE, 18, anchor_x="center", anchor_y="center")
                y -= 32
        elif state.mode == GameMode.GAME_OVER:
            self._draw_heading(texts.game_over, height * 2 / 3, 48)
            arcade.draw_text(
                f"Final Score: {self._score()}",
                width / 2,
                height / 2,
                arcade.color.WHITE,
                30,
                anchor_x="center",
                anchor_y="center",
            )

        # Draw buttons
        for _, button in self.world.get_component(MenuButton):
            left = button.x - button.width / 2
            bottom = button.y - button.height / 2
            fill_color = arcade.color.DARK_SLATE_BLUE if button.enabled else arcade.color.GRAY_BLUE
            outline_color = arcade.color.WHITE if button.enabled else arcade.color.SILVER
            text_color = arcade.color.WHITE if button.enabled else arcade.color.SILVER
            arcade.draw_lbwh_rectangle_filled(left, bottom, button.width, button.height, fill_color)
            arcade.draw_lbwh_rectangle_outline(left, bottom, button.width, button.height, outline_color, border_width=2)
            arcade.draw_text(
                button.label,
                button.x,
                button.y,
                text_color,
                24,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )

    def _draw_heading(self, text: str, y: float, size: int) -> None:
        arcade.draw_text(text, self.window.width / 2, y, arcade.color.WHITE, size, anchor_x="center", anchor_y="center", bold=True)

    def _score(self) -> int:
        for _, board in self.world.get_component(Board):
            return board.score
        return 0
