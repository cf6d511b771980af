from __future__ import annotations

from game.constants import PLAYER_CHARS
from game.twixt_game import TwixtGame


class TwixtPlayer:
    """Base player with shared state."""

    def __init__(self, game: TwixtGame, n):
        # n is the player index: 0 (x, red) or 1 (o, blue)
        self.game = game
        self.n = n
        self.name = f"Player {n + 1}"

    @property
    def symbol(self):
        return PLAYER_CHARS[self.n]

    def get_action(self):
        raise NotImplementedError
