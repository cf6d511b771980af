"""Game constants shared across modules.

This module contains player, color, border and outcome constants along with
the configuration ranges used by both TwixtBoard and TwixtGame.
"""

# Player constants
#   player 0 == 'x', red, plays top/bottom (rows 0 and size-1)
#   player 1 == 'o', blue, plays left/right (columns 0 and size-1)
RED_PLAYER = 0
BLUE_PLAYER = 1
NUM_PLAYERS = 2
TERMINAL_PLAYER = -4

PLAYER_CHARS = ("x", "o")

# Cell colors (RED_COLOR/BLUE_COLOR equal the owning player index)
RED_COLOR = 0
BLUE_COLOR = 1
EMPTY = 2
OFF_BOARD = 3

# Border lines of a player
START = 0
END = 1

# Game outcome constants
OPEN = 0
RED_WIN = 1
BLUE_WIN = 2
DRAW = 3

RESULT_NAMES = {OPEN: "open", RED_WIN: "x has won", BLUE_WIN: "o has won", DRAW: "draw"}

# Board size configuration
MIN_BOARD_SIZE = 5
MAX_BOARD_SIZE = 24
DEFAULT_BOARD_SIZE = 8

DEFAULT_ANSI_COLOR_OUTPUT = True

# Discount applied to the terminal reward: reward = discount ** move_count
MIN_DISCOUNT = 0.0  # exclusive
MAX_DISCOUNT = 1.0
DEFAULT_DISCOUNT = MAX_DISCOUNT

# Observation tensor: 2 * 3 planes of size board_size * (board_size - 2)
NUM_PLANES = 6
CUR_PLAYER_PLANE_OFFSET = 0
OPPONENT_PLANE_OFFSET = 3
VALID_TURNS = (0, 90, 180)

# ANSI colors
ANSI_RED = "\x1b[91m"
ANSI_BLUE = "\x1b[94m"
ANSI_DEFAULT = "\x1b[0m"
