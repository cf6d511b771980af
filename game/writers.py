"""Game action writers for TwixT.

Provides pluggable writer classes that combine formatters with output streams
to log game actions in various formats (notation, board diagrams).
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from game.constants import RESULT_NAMES
from game.formatters import NotationFormatter


class GameWriter(ABC):
    """Abstract base class for game action writers.

    A GameWriter combines a formatter with an output stream to write
    game actions in a specific format. Subclasses implement format-specific
    headers and action formatting.
    """

    def __init__(self, output: TextIO):
        """Initialize the writer.

        Args:
            output: Output stream to write to (file, stdout, etc.)
        """
        self.output = output

    @abstractmethod
    def write_header(self, seed: int, board_size: int, player1_name: str | None = None, player2_name: str | None = None) -> None:
        """Write file header with game metadata.

        Args:
            seed: Random seed for this game
            board_size: Length of a side of the board
            player1_name: Optional name for player 1 (x, red)
            player2_name: Optional name for player 2 (o, blue)
        """
        pass

    @abstractmethod
    def write_action(self, game, action_result) -> None:
        """Write a game action.

        Args:
            game: TwixtGame the action was applied to (state after the action)
            action_result: ActionResult returned by the game
        """
        pass

    def write_comment(self, message: str) -> None:
        """Write a status/comment message.

        Default implementation does nothing. Subclasses can override to write comments.

        Args:
            message: Status message to write
        """
        pass

    def write_footer(self, game=None) -> None:
        """Write file footer with final game state (optional).

        Args:
            game: Optional TwixtGame instance for final state
        """
        pass

    def flush(self) -> None:
        """Flush the output stream."""
        self.output.flush()

    def close(self) -> None:
        """Close the output stream (but never close stdout/stderr)."""
        # Never close stdout or stderr - they should persist for the entire program
        if self.output in (sys.stdout, sys.stderr):
            return
        if hasattr(self.output, 'close'):
            self.output.close()


class NotationWriter(GameWriter):
    """Writes game actions in TwixT move notation.

    File format:
        8                 # Header: board size
        # Player 1: Random 1
        # Player 2: Random 2
        xc3               # One move per line, as submitted by the player
        oc3               # A swap is written as the first move's position
        # Result: x has won
    """

    def write_header(self, seed: int, board_size: int, player1_name: str | None = None, player2_name: str | None = None) -> None:
        """Write notation file header.

        Format:
            {board_size}
            # Player 1: {name}  (if player1_name provided)
            # Player 2: {name}  (if player2_name provided)
        """
        self.output.write(f"{board_size}\n")

        if player1_name:
            self.output.write(f"# Player 1: {player1_name}\n")
        if player2_name:
            self.output.write(f"# Player 2: {player2_name}\n")

        self.flush()

    def write_action(self, game, action_result) -> None:
        """Write the submitted action in notation format.

        The decoded (not the swapped) position is written so that replaying
        the file reproduces the swap.
        """
        notation = NotationFormatter.action_to_notation(
            action_result.player, action_result.action, game.board
        )
        self.output.write(f"{notation}\n")
        self.flush()

    def write_comment(self, message: str) -> None:
        self.output.write(f"# {message}\n")
        self.flush()

    def write_footer(self, game=None) -> None:
        """Write the result of the game as a comment line."""
        if game is None:
            return
        result = game.get_game_ended()
        if result is None:
            self.output.write("# Result: unfinished\n")
        else:
            self.output.write(f"# Result: {RESULT_NAMES[result]}\n")
        self.flush()


class DiagramWriter(GameWriter):
    """Writes the rendered board after every action.

    Format:
        # Seed: 12345, board size 8
        Move 1: xc3
        <board diagram>
    """

    def write_header(self, seed: int, board_size: int, player1_name: str | None = None, player2_name: str | None = None) -> None:
        self.output.write(f"# Seed: {seed}, board size {board_size}\n")
        self.flush()

    def write_action(self, game, action_result) -> None:
        notation = NotationFormatter.action_to_notation(
            action_result.player, action_result.action, game.board
        )
        self.output.write(f"Move {game.board.get_move_counter()}: {notation}\n")
        self.output.write(f"{game}\n")
        self.flush()

    def write_comment(self, message: str) -> None:
        self.output.write(f"# {message}\n")
        self.flush()
