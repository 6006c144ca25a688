GRID_SIZE = 8

# Sixteen symbols; with 64 cells every symbol appears about four times.
EMOJI_PALETTE = (
    '😀', '😎', '🥳', '😍', '🤪', '😇', '🤓', '🤠',
    '🐶', '🐱', '🐼', '🐨', '🦊', '🦁', '🐯', '🐸',
)

GAME_DURATION_SECONDS = 60
MATCH_REWARD = 10
TICK_INTERVAL = 1.0

# Delays (seconds) between showing a connection, clearing it, and re-checking the board.
MATCH_CLEAR_DELAY = 0.2
SOLVABILITY_CHECK_DELAY = 0.3

# Final score thresholds, highest first.
SCORE_RATINGS = (
    (200, '🏆'),
    (150, '🌟'),
    (100, '😎'),
    (50, '🙂'),
)
LOWEST_SCORE_RATING = '😢'

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
TILE_SIZE = 56
TILE_MARGIN = 2
BOTTOM_MARGIN = 20
HUD_HEIGHT = 48

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.85
