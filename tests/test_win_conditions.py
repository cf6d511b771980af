"""
Unit tests for game results: wins by connecting both border lines, and
draws when the next player has no legal action left.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path to import game modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from game.constants import (
    BLUE_PLAYER,
    BLUE_WIN,
    DRAW,
    OPEN,
    RED_PLAYER,
    RED_WIN,
    TERMINAL_PLAYER,
)
from game.twixt_board import TwixtBoard
from game.twixt_game import TwixtGame


# 5x5 board, actions as (player, action)
RED_WINS_5X5 = [
    (RED_PLAYER, 0),     # (1, 0)
    (BLUE_PLAYER, 14),   # (4, 1)
    (RED_PLAYER, 7),     # (2, 2)
    (BLUE_PLAYER, 0),    # (0, 3)
    (RED_PLAYER, 4),     # (1, 4)
]

BLUE_WINS_5X5 = [
    (RED_PLAYER, 4),     # (1, 4)
    (BLUE_PLAYER, 10),   # (0, 1)
    (RED_PLAYER, 14),    # (3, 4)
    (BLUE_PLAYER, 7),    # (2, 2)
    (RED_PLAYER, 5),     # (2, 0)
    (BLUE_PLAYER, 4),    # (4, 3)
]


def play(board, moves):
    results = []
    for player, action in moves:
        results.append(board.apply_action(player, action))
    return results


class TestWin:
    def test_red_connects_top_and_bottom(self):
        board = TwixtBoard(size=5)
        results = play(board, RED_WINS_5X5)

        assert [r.result for r in results] == [OPEN] * 4 + [RED_WIN]
        assert board.get_result() == RED_WIN
        assert board.is_terminal()
        assert board.get_move_counter() == 5

    def test_blue_connects_left_and_right(self):
        board = TwixtBoard(size=5)
        results = play(board, BLUE_WINS_5X5)

        assert results[-1].result == BLUE_WIN
        assert board.get_cell((2, 2)).has_links()
        assert board.get_result() == BLUE_WIN

    def test_no_action_after_win(self):
        board = TwixtBoard(size=5)
        play(board, RED_WINS_5X5)
        with pytest.raises(ValueError, match="game is over"):
            board.apply_action(BLUE_PLAYER, board.legal_actions(BLUE_PLAYER)[0])

    def test_win_footer(self):
        board = TwixtBoard(size=5, ansi_color_output=False)
        play(board, RED_WINS_5X5)
        assert board.to_string().splitlines()[-1] == "[x has won]"

    @pytest.mark.parametrize("discount", [1.0, 0.9, 0.5])
    def test_discounted_returns(self, discount):
        game = TwixtGame(board_size=5, discount=discount)
        for _, action in RED_WINS_5X5:
            game.take_action(action)
        reward = discount ** 5
        assert game.returns() == pytest.approx([reward, -reward])
        assert game.get_game_ended() == RED_WIN
        assert game.get_cur_player() == TERMINAL_PLAYER
        assert game.legal_actions() == []

    def test_blue_returns(self):
        game = TwixtGame(board_size=5, discount=0.9)
        for _, action in BLUE_WINS_5X5:
            game.take_action(action)
        assert game.returns() == pytest.approx([-(0.9 ** 6), 0.9 ** 6])


class TestDraw:
    def _board_before_draw(self):
        board = TwixtBoard(size=5, ansi_color_output=False)
        play(board, [
            (RED_PLAYER, 1),     # (1, 1)
            (BLUE_PLAYER, 13),   # (3, 1)
            (RED_PLAYER, 13),    # (3, 3)
            (BLUE_PLAYER, 1),    # (1, 3)
        ])
        # leave blue a single position, the one red takes next
        board._legal_actions[BLUE_PLAYER] = [board.position_to_action(BLUE_PLAYER, (2, 2))]
        return board

    def test_draw_when_next_player_has_no_action(self):
        board = self._board_before_draw()
        result = board.apply_action(RED_PLAYER, board.position_to_action(RED_PLAYER, (2, 2)))

        assert result.result == DRAW
        assert board.get_result() == DRAW
        assert not board.has_legal_actions(BLUE_PLAYER)
        assert board.to_string().splitlines()[-1] == "[draw]"

    def test_no_draw_before_enough_moves(self):
        board = TwixtBoard(size=8)
        board.apply_action(RED_PLAYER, 10)     # (2, 2)
        board.apply_action(BLUE_PLAYER, 13)    # (5, 5)
        board._legal_actions[BLUE_PLAYER] = []
        board.apply_action(RED_PLAYER, 28)     # (4, 4)

        assert board.get_move_counter() == 3
        assert board.get_result() == OPEN

    def test_draw_returns_zero(self):
        game = TwixtGame(board_size=5)
        for action in [1, 13, 13, 1]:
            game.take_action(action)
        game.board._legal_actions[BLUE_PLAYER] = [game.board.position_to_action(BLUE_PLAYER, (2, 2))]
        game.take_action(game.board.position_to_action(RED_PLAYER, (2, 2)))

        assert game.is_terminal()
        assert game.get_game_ended() == DRAW
        assert game.returns() == [0.0, 0.0]
        assert game.get_cur_player() == TERMINAL_PLAYER


class TestRandomPlayouts:
    @pytest.mark.parametrize("size", [5, 6, 8, 12])
    @pytest.mark.parametrize("seed", range(5))
    def test_random_games_terminate(self, size, seed):
        import numpy as np

        rng = np.random.default_rng(seed)
        game = TwixtGame(board_size=size)
        while not game.is_terminal():
            actions = game.legal_actions()
            assert actions
            game.take_action(int(rng.choice(actions)))
            assert game.board.get_move_counter() <= game.max_game_length()

        assert game.get_game_ended() in (RED_WIN, BLUE_WIN, DRAW)
        returns = game.returns()
        assert sum(returns) == pytest.approx(game.utility_sum())
