from emojilink.components.grid import Coord
from emojilink.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    HUD_HEIGHT,
    TILE_SIZE,
)


def compute_board_geometry(window_width: int, window_height: int, size: int):
    """Return (tile_size, start_x, start_y) for a ``size`` x ``size`` board.

    The board is centred horizontally above the bottom margin, leaving room for
    the HUD strip at the top. Input hit-testing and drawing both use this.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / size, max_board_h / size, TILE_SIZE))
    if tile_size < 20:
        tile_size = 20
    total_width = size * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_center(coord, window_width: int, window_height: int, size: int):
    """Screen centre of a cell; row 0 is drawn at the top of the board."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, size)
    row, col = coord
    x = start_x + col * tile_size + tile_size / 2
    y = start_y + (size - 1 - row) * tile_size + tile_size / 2
    return x, y


def cell_at_point(x: float, y: float, window_width: int, window_height: int, size: int):
    """Map a screen point to a cell, or None when it falls outside the board."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, size)
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    if not (0 <= col < size and 0 <= row_from_bottom < size):
        return None
    return Coord(size - 1 - row_from_bottom, col)
