"""
Unit tests for the TwixtGame adapter: turn handling, game properties,
string conversions, cloning and the observation tensor.
"""

import copy
import pytest
import sys
import numpy as np
from pathlib import Path

# Add parent directory to path to import game modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from game.constants import BLUE_PLAYER, RED_PLAYER
from game.twixt_game import TwixtGame


@pytest.fixture
def game():
    return TwixtGame(board_size=8, ansi_color_output=False)


@pytest.fixture
def blocked_game():
    """Red link (2,2)-(3,4) blocks blue pegs (2,3) and (4,4)."""
    game = TwixtGame(board_size=8, ansi_color_output=False)
    for notation in ["xc6", "oc5", "xd4", "oe4"]:
        game.apply_notation(notation)
    return game


class TestGameProperties:
    @pytest.mark.parametrize("size", [5, 8, 24])
    def test_sizes(self, size):
        game = TwixtGame(board_size=size)
        assert game.num_distinct_actions() == size * (size - 2)
        assert game.max_game_length() == size * size - 4 + 1
        assert game.observation_tensor_shape() == (6, size, size - 2)

    def test_utilities(self, game):
        assert game.min_utility() == -1.0
        assert game.max_utility() == 1.0
        assert game.utility_sum() == 0.0

    def test_initial_state(self, game):
        assert game.get_cur_player() == RED_PLAYER
        assert game.get_cur_player_value() == 1
        assert not game.is_terminal()
        assert game.get_game_ended() is None
        assert game.returns() == [0.0, 0.0]
        assert game.legal_actions() == list(range(48))


class TestTurns:
    def test_players_alternate(self, game):
        game.take_action(10)
        assert game.get_cur_player() == BLUE_PLAYER
        assert game.get_cur_player_value() == -1
        game.take_action(13)
        assert game.get_cur_player() == RED_PLAYER
        assert game.move_history == [(RED_PLAYER, 10), (BLUE_PLAYER, 13)]

    def test_legal_actions_of_other_player(self, game):
        game.take_action(10)
        assert game.legal_actions(RED_PLAYER) == game.board.legal_actions(RED_PLAYER)

    def test_reset_board(self, game):
        game.take_action(10)
        game.reset_board()
        assert game.get_cur_player() == RED_PLAYER
        assert game.move_history == []
        assert game.board.get_move_counter() == 0


class TestStrings:
    @pytest.mark.parametrize("player, action, notation", [
        (RED_PLAYER, 18, "xd6"),
        (BLUE_PLAYER, 35, "od6"),
        (RED_PLAYER, 11, "xc5"),
        (RED_PLAYER, 13, "xc3"),
        (BLUE_PLAYER, 10, "oc3"),
    ])
    def test_action_strings(self, game, player, action, notation):
        assert game.action_to_string(player, action) == notation
        assert game.string_to_action(notation) == (player, action)

    def test_observation_string_is_the_board(self, blocked_game):
        text = blocked_game.observation_string(RED_PLAYER)
        assert text == str(blocked_game)
        assert text == blocked_game.information_state_string(BLUE_PLAYER)
        assert "x" in text and "o" in text

    def test_header_and_row_labels(self):
        game = TwixtGame(board_size=5, ansi_color_output=False)
        lines = str(game).split("\n")
        assert lines[0] == "     a  b  c  d  e  "
        assert "  3  .  .  .  .  . " in lines
        assert len(lines) == 1 + 3 * 5 + 2

    def test_ansi_colors(self):
        game = TwixtGame(board_size=5, ansi_color_output=True)
        game.apply_notation("xc3")
        text = str(game)
        assert "\x1b[91mx\x1b[0m" in text
        assert "\x1b[0m" in text

    def test_no_ansi_when_disabled(self, blocked_game):
        assert "\x1b[" not in str(blocked_game)


class TestClone:
    def test_clone_is_independent(self, blocked_game):
        clone = blocked_game.clone()
        clone.take_action(clone.legal_actions()[0])

        assert len(clone.move_history) == 5
        assert len(blocked_game.move_history) == 4
        assert blocked_game.board.get_move_counter() == 4
        assert clone.board.blockers is blocked_game.board.blockers

    def test_deepcopy_keeps_state(self, blocked_game):
        clone = copy.deepcopy(blocked_game)
        assert clone.board.cells == blocked_game.board.cells
        assert clone.get_cur_player() == blocked_game.get_cur_player()
        assert clone.discount == blocked_game.discount
        assert str(clone) == str(blocked_game)


class TestObservationTensor:
    def test_empty_board(self, game):
        tensor = game.observation_tensor(RED_PLAYER)
        assert tensor.shape == (6, 8, 6)
        assert tensor.dtype == np.float32
        assert tensor.sum() == 0

    def test_red_perspective(self, blocked_game):
        view = blocked_game.observation_tensor(RED_PLAYER)
        # own linked pegs
        assert view[1, 2, 1] == 1
        assert view[1, 4, 2] == 1
        # blue pegs turned by 90 degrees, unlinked and blocked
        assert view[3, 2, 3] == 1
        assert view[5, 2, 3] == 1
        assert view[3, 4, 2] == 1
        assert view[5, 4, 2] == 1
        assert view.sum() == 6

    def test_blue_perspective(self, blocked_game):
        view = blocked_game.observation_tensor(BLUE_PLAYER)
        assert view[0, 2, 3] == 1
        assert view[2, 2, 3] == 1
        assert view[0, 4, 2] == 1
        assert view[2, 4, 2] == 1
        # red pegs turned by 180 degrees
        assert view[4, 5, 4] == 1
        assert view[4, 3, 3] == 1
        assert view.sum() == 6

    def test_caller_buffer_is_zeroed_and_filled(self, blocked_game):
        values = np.ones(6 * 8 * 6, dtype=np.float32)
        result = blocked_game.observation_tensor(RED_PLAYER, values)
        assert result is values
        assert values.sum() == 6
        np.testing.assert_array_equal(
            values.reshape(6, 8, 6), blocked_game.observation_tensor(RED_PLAYER)
        )

    def test_wrong_buffer_size_raises(self, game):
        with pytest.raises(ValueError, match="expected 288"):
            game.observation_tensor(RED_PLAYER, np.zeros(100, dtype=np.float32))

    def test_unlinked_peg_plane(self, game):
        game.apply_notation("xd6")
        view = game.observation_tensor(RED_PLAYER)
        assert view[0, 2, 2] == 1
        assert view.sum() == 1
