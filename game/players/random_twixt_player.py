from __future__ import annotations

import numpy as np

from game.twixt_game import TwixtGame
from game.players.twixt_player import TwixtPlayer


class RandomTwixtPlayer(TwixtPlayer):

    def __init__(self, game: TwixtGame, n, rng_seed=None):
        super().__init__(game, n)
        self.rng = np.random.default_rng(rng_seed)
        self.name = f"Random {n + 1}"

    def get_action(self):
        """Select a legal action uniformly at random."""
        actions = self.game.legal_actions(self.n)
        if not actions:
            raise ValueError(f"No legal actions for player {self.n}")
        return int(actions[self.rng.integers(len(actions))])
