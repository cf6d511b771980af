from __future__ import annotations

from game.twixt_game import TwixtGame
from game.players.twixt_player import TwixtPlayer


class ReplayTwixtPlayer(TwixtPlayer):
    """Player that replays moves from a list of move strings."""

    def __init__(self, game: TwixtGame, n, moves):
        super().__init__(game, n)
        self.moves = moves
        self.move_index = 0
        self.name = f"Replay {n + 1}"

    def has_moves(self):
        return self.move_index < len(self.moves)

    def get_action(self):
        """Return the next move of the replay list as an action index."""
        if not self.has_moves():
            raise ValueError(f"No more moves for player {self.n}")

        notation = self.moves[self.move_index]
        self.move_index += 1

        player, action = self.game.string_to_action(notation)
        if player != self.n:
            raise ValueError(f"Move {notation} does not belong to player {self.symbol}")
        return action
