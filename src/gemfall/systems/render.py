from esper import World

from gemfall.components.block import BlockState
from gemfall.components.board import Board
from gemfall.components.game_state import GameMode
from gemfall.constants import BLOCK_COLORS, HUD_HEIGHT
from gemfall.events.bus import EventBus, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED
from gemfall.ui.layout import cell_center, compute_board_geometry
from gemfall.world import get_game_state

PADDING = 4
BOARD_BACKGROUND = (30, 34, 48)
GRID_LINE_COLOR = (255, 255, 255, 50)


class RenderSystem:
    """Draws the board snapshot and the score/time HUD while playing."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TILE_SELECTED, self.on_tile_selected)
        self.event_bus.subscribe(EVENT_TILE_DESELECTED, self.on_tile_deselected)
        self.selected = None

    def on_tile_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))

    def on_tile_deselected(self, sender, **kwargs):
        self.selected = None

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        state = get_game_state(self.world)
        if state is None or state.mode != GameMode.PLAYING:
            return
        board = self._board()
        if board is None:
            return
        geometry = compute_board_geometry(self.window.width, self.window.height, board.rows, board.cols)
        tile_size, start_x, start_y = geometry
        board_top = start_y + board.rows * tile_size
        arcade.draw_lbwh_rectangle_filled(start_x, start_y, board.cols * tile_size, board.rows * tile_size, BOARD_BACKGROUND)
        for col in range(board.cols + 1):
            x = start_x + col * tile_size
            arcade.draw_line(x, start_y, x, board_top, GRID_LINE_COLOR, 1)
        for row in range(board.rows + 1):
            y = start_y + row * tile_size
            arcade.draw_line(start_x, y, start_x + board.cols * tile_size, y, GRID_LINE_COLOR, 1)

        draw_size = max(tile_size - PADDING, 4)
        for row_views in board.snapshot():
            for view in row_views:
                if view.type < 0:
                    continue
                # Blocks still above the board while dropping in are not drawn.
                if view.render_row < -0.5:
                    continue
                size = draw_size
                if view.state == BlockState.CLEARING:
                    size = draw_size * max(0.0, 1.0 - view.progress)
                    if size <= 0:
                        continue
                x, y = cell_center(view.render_row, view.render_col, board.rows, geometry)
                color = BLOCK_COLORS[view.type % len(BLOCK_COLORS)]
                arcade.draw_lbwh_rectangle_filled(x - size / 2, y - size / 2, size, size, color)
                arcade.draw_lbwh_rectangle_outline(x - size / 2, y - size / 2, size, size, arcade.color.BLACK, border_width=1)

        if self.selected is not None:
            row, col = self.selected
            x, y = cell_center(row, col, board.rows, geometry)
            arcade.draw_lbwh_rectangle_outline(
                x - tile_size / 2, y - tile_size / 2, tile_size, tile_size, arcade.color.LIME, border_width=3
            )

        hud_y = board_top + HUD_HEIGHT / 2
        arcade.draw_text(f"Score: {board.score}", 20, hud_y, arcade.color.WHITE, 24, anchor_y="center")
        arcade.draw_text(
            f"Level: {board.level + 1}", self.window.width / 2, hud_y, arcade.color.WHITE, 20,
            anchor_x="center", anchor_y="center",
        )
        arcade.draw_text(
            f"Time: {max(0, int(state.time_left))}", self.window.width - 20, hud_y, arcade.color.WHITE, 24,
            anchor_x="right", anchor_y="center",
        )

    def _board(self) -> Board | None:
        for _, board in self.world.get_component(Board):
            return board
        return None
