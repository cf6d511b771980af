"""TwixT move notation formatter.

A move is written as the player's peg letter followed by the position label:
"xc3" is a red peg in column c, label row 3. Label rows count from the top
(row 1 is the upper red border line), so label row == size - row.
"""

import re

from ..constants import PLAYER_CHARS

_NOTATION_PATTERN = re.compile(r"^([xo])([a-x])(\d{1,2})$")


class NotationFormatter:
    """Converts actions and positions to/from TwixT move notation."""

    @staticmethod
    def position_to_notation(player: int, position, size: int) -> str:
        """Convert a (col, row) position to notation.

        Args:
            player: Player placing the peg (0 or 1)
            position: (col, row) with rows counted from the bottom
            size: Board size

        Returns:
            str: Notation string (e.g., "xc3")
        """
        col, row = position
        return f"{PLAYER_CHARS[player]}{chr(ord('a') + col)}{size - row}"

    @staticmethod
    def notation_to_position(notation: str, size: int):
        """Parse notation into (player, (col, row)).

        Raises:
            ValueError: If the string is malformed or lies outside the board
        """
        match = _NOTATION_PATTERN.match(notation.strip().lower())
        if not match:
            raise ValueError(f"Invalid move notation: {notation!r}")

        player = PLAYER_CHARS.index(match.group(1))
        col = ord(match.group(2)) - ord("a")
        label_row = int(match.group(3))
        if col >= size or not 1 <= label_row <= size:
            raise ValueError(f"Move {notation!r} lies outside a {size}x{size} board")
        return player, (col, size - label_row)

    @staticmethod
    def action_to_notation(player: int, action: int, board) -> str:
        """Convert a player's action index to notation."""
        position = board.action_to_position(player, action)
        return NotationFormatter.position_to_notation(player, position, board.size)

    @staticmethod
    def notation_to_action(notation: str, board):
        """Parse notation into (player, action) for the given board.

        Raises:
            ValueError: If the notation is malformed or names a position the
                player can never occupy
        """
        player, position = NotationFormatter.notation_to_position(notation, board.size)
        return player, board.position_to_action(player, position)
