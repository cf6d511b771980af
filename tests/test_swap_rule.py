"""
Unit tests for the swap rule: the second player may take over the first
move by choosing its position again; the peg is then turned by 90 degrees.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path to import game modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from game.constants import BLUE_COLOR, BLUE_PLAYER, EMPTY, RED_COLOR, RED_PLAYER
from game.twixt_board import TwixtBoard
from game.twixt_game import TwixtGame


# xc3 == (2, 5): red action 13, blue action 10
XC3_RED = 13
XC3_BLUE = 10


@pytest.fixture
def swapped_board():
    board = TwixtBoard(size=8, ansi_color_output=False)
    board.apply_action(RED_PLAYER, XC3_RED)
    result = board.apply_action(BLUE_PLAYER, XC3_BLUE)
    return board, result


class TestSwap:
    def test_peg_is_turned(self, swapped_board):
        board, result = swapped_board
        assert result.is_swap()
        assert result.position == (2, 2)
        assert result.action == XC3_BLUE
        assert board.swapped
        assert board.get_cell((2, 5)).color == EMPTY
        assert board.get_cell((2, 2)).color == BLUE_COLOR
        assert board.get_move_counter() == 2

    def test_only_one_peg_and_no_links(self, swapped_board):
        board, _ = swapped_board
        pegs = [
            (col, row)
            for col in range(8)
            for row in range(8)
            if board.get_cell((col, row)).color in (RED_COLOR, BLUE_COLOR)
        ]
        assert pegs == [(2, 2)]
        assert not board.get_cell((2, 2)).has_links()

    def test_legal_actions_restored_except_new_peg(self, swapped_board):
        board, _ = swapped_board
        assert len(board.legal_actions(RED_PLAYER)) == 47
        assert len(board.legal_actions(BLUE_PLAYER)) == 47
        assert board.position_to_action(RED_PLAYER, (2, 2)) not in board.legal_actions(RED_PLAYER)
        assert board.position_to_action(BLUE_PLAYER, (2, 2)) not in board.legal_actions(BLUE_PLAYER)
        # the first move's position is free again
        assert XC3_RED in board.legal_actions(RED_PLAYER)
        assert XC3_BLUE in board.legal_actions(BLUE_PLAYER)

    def test_first_move_cells_are_restored(self, swapped_board):
        board, _ = swapped_board
        fresh = TwixtBoard(size=8)
        restored = [(2, 5)] + list(board.get_cell((2, 5)).neighbors.values())
        for position in restored:
            assert board.get_cell(position) == fresh.get_cell(position)

    def test_footer_shows_swap(self, swapped_board):
        board, _ = swapped_board
        assert board.to_string().splitlines()[-1] == "[swapped]"

    def test_no_swap_for_other_positions(self):
        board = TwixtBoard(size=8)
        board.apply_action(RED_PLAYER, XC3_RED)
        result = board.apply_action(BLUE_PLAYER, board.position_to_action(BLUE_PLAYER, (5, 3)))
        assert not result.is_swap()
        assert not board.swapped
        assert XC3_RED not in board.legal_actions(RED_PLAYER)
        assert XC3_BLUE not in board.legal_actions(BLUE_PLAYER)

    def test_swap_only_on_second_move(self):
        game = TwixtGame(board_size=8)
        for notation in ["xc3", "oe4", "xe6"]:
            game.apply_notation(notation)
        with pytest.raises(ValueError, match="Illegal action"):
            game.apply_notation("oc3")

    def test_red_moves_after_swap(self):
        game = TwixtGame(board_size=8)
        game.apply_notation("xc3")
        game.apply_notation("oc3")
        assert game.get_cur_player() == RED_PLAYER
        assert game.board.get_cell((2, 2)).color == BLUE_COLOR
