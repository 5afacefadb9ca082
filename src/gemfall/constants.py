WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
TILE_SIZE = 56
BOTTOM_MARGIN = 20
# Space reserved above the board for the score/time HUD.
HUD_HEIGHT = 70

# Board maximum footprint relative to window (percentage of window width/height).
# The render/layout code will size the board so it does not exceed either percentage.
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.90

# Animation rates, in progress units per second (2.5 -> 0.4s per animation).
SWAP_RATE = 2.5
CLEAR_RATE = 2.5

# Upper bound on reshuffles while building a board without ready-made matches.
MAX_BOARD_ATTEMPTS = 1000

# Arcade mouse button ids.
MOUSE_BUTTON_LEFT = 1
MOUSE_BUTTON_RIGHT = 4

# Block colors, indexed by block type.
BLOCK_COLORS = [
    (214, 69, 65),    # red
    (65, 131, 215),   # blue
    (46, 204, 113),   # green
    (241, 196, 15),   # yellow
    (155, 89, 182),   # purple
    (230, 126, 34),   # orange
    (26, 188, 156),   # teal
    (236, 240, 241),  # white
]
