import copy
import logging

import numpy as np

from .twixt_board import TwixtBoard
from .action_result import ActionResult
from .formatters import NotationFormatter
from .constants import (
    BLUE_COLOR,
    BLUE_PLAYER,
    CUR_PLAYER_PLANE_OFFSET,
    DEFAULT_ANSI_COLOR_OUTPUT,
    DEFAULT_BOARD_SIZE,
    DEFAULT_DISCOUNT,
    DRAW,
    MAX_DISCOUNT,
    MIN_DISCOUNT,
    NUM_PLANES,
    NUM_PLAYERS,
    OPEN,
    OPPONENT_PLANE_OFFSET,
    RED_COLOR,
    RED_PLAYER,
    RED_WIN,
    TERMINAL_PLAYER,
)

logger = logging.getLogger(__name__)


# Class interface inspired by https://github.com/suragnair/alpha-zero-general


class TwixtGame:
    def __init__(
        self,
        board_size=DEFAULT_BOARD_SIZE,
        ansi_color_output=DEFAULT_ANSI_COLOR_OUTPUT,
        discount=DEFAULT_DISCOUNT,
        clone=None,
    ):
        if clone is not None:
            # Creates an instance of TwixtGame with settings and board state copied from clone
            self.board_size = clone.board_size
            self.ansi_color_output = clone.ansi_color_output
            self.discount = clone.discount
            self.board = TwixtBoard(clone=clone.board)
            self.current_player = clone.current_player
            self.move_history = list(clone.move_history)
            return

        if not MIN_DISCOUNT < discount <= MAX_DISCOUNT:
            raise ValueError(
                f"discount out of range [{MIN_DISCOUNT} < discount <= {MAX_DISCOUNT}]: {discount}"
            )

        self.board_size = board_size
        self.ansi_color_output = ansi_color_output
        self.discount = discount
        self.board = TwixtBoard(board_size, ansi_color_output)

        # red ('x') always moves first
        self.current_player = RED_PLAYER

        # (player, action) tuples in the order they were applied
        self.move_history = []

    def __deepcopy__(self, memo):
        return TwixtGame(clone=self)

    def clone(self):
        return copy.deepcopy(self)

    def reset_board(self):
        self.board = TwixtBoard(self.board_size, self.ansi_color_output)
        self.current_player = RED_PLAYER
        self.move_history = []

    def get_cur_player(self):
        return self.current_player

    def get_cur_player_value(self):
        # Returns 1 if current player is player 0 and -1 if current player is player 1
        if self.current_player == RED_PLAYER:
            return 1
        if self.current_player == BLUE_PLAYER:
            return -1
        return None

    def _check_player(self, player):
        if not 0 <= player < NUM_PLAYERS:
            raise ValueError(f"Invalid player: {player}; should be in range [0..{NUM_PLAYERS - 1}]")

    # =========================  TURNS  =========================

    def legal_actions(self, player=None):
        """Return the legal actions of player (default: current player)."""
        if self.is_terminal():
            return []
        if player is None:
            player = self.current_player
        self._check_player(player)
        return self.board.legal_actions(player)

    def take_action(self, action) -> ActionResult:
        """Apply action for the current player and advance the turn."""
        if self.is_terminal():
            raise ValueError(f"Cannot apply action {action}: game is over")

        player = self.current_player
        result = self.board.apply_action(player, action)
        self.move_history.append((player, action))

        if self.board.get_result() == OPEN:
            self.current_player = 1 - player
        else:
            self.current_player = TERMINAL_PLAYER
            logger.debug(f"Game over after {self.board.get_move_counter()} moves: {self.get_game_ended()}")
        return result

    def apply_notation(self, notation) -> ActionResult:
        """Apply a move string such as 'xc3' for the current player."""
        player, action = NotationFormatter.notation_to_action(notation, self.board)
        if player != self.current_player:
            raise ValueError(f"Move {notation} is not for the current player {self.current_player}")
        return self.take_action(action)

    def is_terminal(self):
        return self.board.get_result() != OPEN

    def get_game_ended(self):
        """Returns outcome of the game.

        Returns:
            RED_WIN / BLUE_WIN / DRAW constant, or None if the game is not over
        """
        result = self.board.get_result()
        return None if result == OPEN else result

    def returns(self):
        """Return the reward of each player; wins are discounted by move count."""
        result = self.board.get_result()
        if result == OPEN or result == DRAW:
            return [0.0, 0.0]
        reward = self.discount ** self.board.get_move_counter()
        if result == RED_WIN:
            return [reward, -reward]
        return [-reward, reward]

    # =========================  GAME PROPERTIES  =========================

    def num_distinct_actions(self):
        return self.board_size * (self.board_size - 2)

    def max_game_length(self):
        # square - 4 corners + swap move
        return self.board_size * self.board_size - 4 + 1

    def min_utility(self):
        return -1.0

    def max_utility(self):
        return 1.0

    def utility_sum(self):
        return 0.0

    def observation_tensor_shape(self):
        return NUM_PLANES, self.board_size, self.board_size - 2

    # =========================  STRINGS  =========================

    def action_to_string(self, player, action):
        self._check_player(player)
        return NotationFormatter.action_to_notation(player, action, self.board)

    def string_to_action(self, notation):
        """Return (player, action) for a move string such as 'xc3'."""
        return NotationFormatter.notation_to_action(notation, self.board)

    def observation_string(self, player):
        self._check_player(player)
        return self.board.to_string()

    def information_state_string(self, player):
        self._check_player(player)
        return self.board.to_string()

    def __str__(self):
        return self.board.to_string()

    # =========================  OBSERVATION TENSOR  =========================

    def observation_tensor(self, player, values=None):
        """Encode the board from player's perspective.

        6 planes of size board_size x (board_size - 2); the two border lines
        a player can never occupy are left out of that player's planes:
          - planes 0 (3): unlinked pegs of the current (opponent) player
          - planes 1 (4): linked pegs of the current (opponent) player
          - planes 2 (5): pegs on planes 1/0 (4/3) with a blocked neighbor

        Red sees its own pegs unturned and blue's turned by 90°; blue sees its
        own pegs turned by 90° and red's by 180°.

        Args:
            player: Player whose perspective is encoded
            values: Optional numpy buffer with 6 * size * (size - 2) elements,
                zeroed and filled in place

        Returns:
            The filled array (values itself when given)
        """
        self._check_player(player)
        shape = self.observation_tensor_shape()

        if values is None:
            values = np.zeros(shape, dtype=np.float32)
            view = values
        else:
            if values.size != int(np.prod(shape)):
                raise ValueError(
                    f"Observation buffer has {values.size} elements, expected {int(np.prod(shape))}"
                )
            view = values.reshape(shape)
            if not np.shares_memory(view, values):
                raise ValueError("Observation buffer must be contiguous")
            view.fill(0)

        size = self.board_size
        for col in range(size):
            for row in range(size):
                position = (col, row)
                color = self.board.get_cell(position).color
                if player == RED_PLAYER:
                    if color == RED_COLOR:
                        self._set_peg_on_tensor(view, position, CUR_PLAYER_PLANE_OFFSET, 0)
                    elif color == BLUE_COLOR:
                        # blue player sits left of red player
                        self._set_peg_on_tensor(view, position, OPPONENT_PLANE_OFFSET, 90)
                else:
                    if color == BLUE_COLOR:
                        self._set_peg_on_tensor(view, position, CUR_PLAYER_PLANE_OFFSET, 90)
                    elif color == RED_COLOR:
                        # red player sits left of blue player
                        self._set_peg_on_tensor(view, position, OPPONENT_PLANE_OFFSET, 180)
        return values

    def _set_peg_on_tensor(self, view, position, offset, turn):
        cell = self.board.get_cell(position)
        tensor_col, tensor_row = self.board.get_tensor_position(position, turn)

        if not cell.has_links():
            view[0 + offset, tensor_row, tensor_col] = 1.0
        else:
            view[1 + offset, tensor_row, tensor_col] = 1.0

        if cell.has_blocked_neighbors():
            view[2 + offset, tensor_row, tensor_col] = 1.0
