"""Game session management for TwixT.

Manages a single game's lifecycle including board state, players, and seed management.
"""

import hashlib
import time
from typing import Callable

import numpy as np

from game.constants import (
    BLUE_PLAYER,
    DEFAULT_ANSI_COLOR_OUTPUT,
    DEFAULT_BOARD_SIZE,
    DEFAULT_DISCOUNT,
    RED_PLAYER,
)
from game.twixt_game import TwixtGame
from game.players import RandomTwixtPlayer, ReplayTwixtPlayer


class GameSession:
    """Manages a single game's lifecycle (board state, players, current game)."""

    def __init__(
        self,
        board_size=DEFAULT_BOARD_SIZE,
        seed=None,
        replay_moves=None,
        partial_replay=False,
        discount=DEFAULT_DISCOUNT,
        ansi_color_output=DEFAULT_ANSI_COLOR_OUTPUT,
        status_reporter: Callable[[str], None] | None = None,
        player1_name: str | None = None,
        player2_name: str | None = None,
    ):
        """Initialize a game session.

        Args:
            board_size: Length of a side of the board (5..24)
            seed: Random seed for reproducibility (auto-generated if None)
            replay_moves: List of move strings for replay mode
            partial_replay: If True, continue with random play after replay ends
            discount: Discount applied to the winner's return per move
            ansi_color_output: Color board diagrams with ANSI codes
            status_reporter: Optional callback for status messages
            player1_name: Optional name for player 1 (x, red)
            player2_name: Optional name for player 2 (o, blue)
        """
        self.board_size = board_size
        self.discount = discount
        self.ansi_color_output = ansi_color_output
        self.player1_name = player1_name
        self.player2_name = player2_name
        self._status_reporter: Callable[[str], None] | None = status_reporter

        # Replay mode setup
        self.replay_mode = replay_moves is not None
        self.partial_replay = partial_replay
        self.replay_moves = replay_moves

        # Seed management (replays are seeded too, partial replays continue randomly)
        if seed is None:
            seed = int(time.time())
        self.current_seed = seed
        self._apply_seed(seed)

        # Game state
        self.game = None
        self.player1 = None
        self.player2 = None
        self.games_played = 0

        # Initialize first game
        self.reset_game()

    def _apply_seed(self, seed):
        """Derive the per-player random streams from a seed.

        Args:
            seed: Random seed value
        """
        self._report(f"-- Setting Seed: {seed}")
        self._player_seeds = np.random.SeedSequence(seed).spawn(2)

    def _generate_next_seed(self):
        """Generate the next seed deterministically from the current seed using hash.

        Returns:
            int: New seed value
        """
        hash_obj = hashlib.sha256(str(self.current_seed).encode())
        # Take first 8 bytes and convert to integer
        new_seed = int.from_bytes(hash_obj.digest()[:8], byteorder="big")
        # Keep it in a reasonable range (32-bit unsigned int)
        new_seed = new_seed % (2**32)
        return new_seed

    def _create_random_player(self, player_num: int):
        player = RandomTwixtPlayer(self.game, player_num, rng_seed=self._player_seeds[player_num])
        name = self.player1_name if player_num == RED_PLAYER else self.player2_name
        if name is not None:
            player.name = name
        return player

    def reset_game(self):
        """Reset the game state for a new game.

        This creates a new game instance and players.
        """
        self._report("** New game **")

        # Generate new seed (only after the first game)
        if not self.replay_mode and self.game is not None:
            self.current_seed = self._generate_next_seed()
            self._apply_seed(self.current_seed)

        self.game = TwixtGame(self.board_size, self.ansi_color_output, self.discount)

        if self.replay_mode:
            self._report("-- Replay Mode --")
            self.player1 = ReplayTwixtPlayer(self.game, RED_PLAYER, self.replay_moves[0::2])
            self.player2 = ReplayTwixtPlayer(self.game, BLUE_PLAYER, self.replay_moves[1::2])

            # Apply names loaded from the replay file
            if self.player1_name:
                self.player1.name = self.player1_name
            if self.player2_name:
                self.player2.name = self.player2_name
        else:
            self.player1 = self._create_random_player(RED_PLAYER)
            self.player2 = self._create_random_player(BLUE_PLAYER)

    def get_current_player(self):
        """Get the player whose turn it is.

        Returns:
            TwixtPlayer: Current player (player1 or player2), None once the game is over
        """
        p_ix = self.game.get_cur_player_value()
        if p_ix is None:
            return None
        return self.player1 if p_ix == 1 else self.player2

    def switch_to_random_play(self):
        """Switch from replay mode to random play (for partial replay).

        Returns:
            TwixtPlayer: The new current player
        """
        if not self.partial_replay:
            raise ValueError(
                "Cannot switch to random play when partial_replay is False"
            )

        self._report("Replay finished - continuing with random play")

        self.player1 = self._create_random_player(RED_PLAYER)
        self.player2 = self._create_random_player(BLUE_PLAYER)
        self.replay_mode = False

        return self.get_current_player()

    def increment_games_played(self):
        """Increment the games played counter."""
        self.games_played += 1

    def get_seed(self):
        """Get the current seed.

        Returns:
            int: Current seed value
        """
        return self.current_seed

    def is_replay_mode(self):
        """Check if session is in replay mode.

        Returns:
            bool: True if in replay mode
        """
        return self.replay_mode

    def is_partial_replay(self):
        """Check if session allows partial replay (continuing with random play after replay ends).

        Returns:
            bool: True if partial replay is enabled
        """
        return self.partial_replay

    def get_games_played(self):
        return self.games_played

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
