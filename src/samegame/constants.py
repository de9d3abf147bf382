# Level defaults (mirrors the classic 15x15 SameGame field).
GRID_COLS = 15
GRID_ROWS = 15
CELL_SIZE = 1.2
TILE_TYPE_COUNT = 4
RANDOM_SEED = 0

# Scoring defaults.
MIN_GROUP_SIZE = 2
CLEAR_BONUS = 1000

# Sentinel returned by hover/index lookups when no cell is under the pointer.
NO_CELL = -1

# Window layout (pixels). The window maps one world unit to PIXELS_PER_UNIT pixels.
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 720
PIXELS_PER_UNIT = 38
BOTTOM_MARGIN = 20
TOP_PANEL_HEIGHT = 56
# Inset of each tile rectangle inside its cell, in pixels.
TILE_PADDING = 2

# Arcade mouse button ids.
MOUSE_BUTTON_LEFT = 1

# Tile palette indexed by type id; extended cyclically when a level asks for more types.
TILE_PALETTE = [
    (214, 69, 65),    # red
    (63, 127, 59),    # green
    (70, 110, 200),   # blue
    (232, 190, 60),   # yellow
    (165, 139, 234),  # violet
    (70, 170, 170),   # cyan
    (226, 120, 50),   # orange
    (200, 200, 200),  # grey
]
BACKGROUND_COLOR = (3, 18, 41)
HOVER_OUTLINE_COLOR = (255, 255, 255)
