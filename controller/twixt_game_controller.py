"""Game controller for TwixT.

Manages the headless game loop, player actions, logging, and game results.
"""

from __future__ import annotations

import logging
from typing import Callable

from game.constants import (
    BLUE_WIN,
    DEFAULT_ANSI_COLOR_OUTPUT,
    DEFAULT_BOARD_SIZE,
    DEFAULT_DISCOUNT,
    DRAW,
    RED_WIN,
    RESULT_NAMES,
)
from game.loaders import NotationLoader
from game.players import ReplayTwixtPlayer
from controller.game_logger import GameLogger
from controller.game_loop import GameLoop
from controller.game_session import GameSession

logger = logging.getLogger(__name__)


class TwixtGameController:
    def __init__(
        self,
        board_size=DEFAULT_BOARD_SIZE,
        replay_file=None,
        seed=None,
        log_notation_to_file: str | None = None,
        log_notation_to_screen=False,
        log_board_to_screen=False,
        partial_replay=False,
        max_games=None,
        discount=DEFAULT_DISCOUNT,
        ansi_color_output=DEFAULT_ANSI_COLOR_OUTPUT,
        status_reporter: Callable[[str], None] | None = None,
    ):
        self.max_games = max_games  # None means play indefinitely
        self._status_reporter = status_reporter
        self._game_ending_processed = False
        self.win_loss_stats = {RED_WIN: 0, BLUE_WIN: 0, DRAW: 0}
        self.last_returns = None

        # Load replay first to detect board size and player names
        replay_moves = None
        player1_name = player2_name = None
        self.replay = replay_file is not None
        if self.replay:
            loader = NotationLoader(replay_file, status_reporter=self._status_reporter)
            replay_moves = loader.load()
            # Use loader's authoritative configuration
            board_size = loader.detected_board_size
            player1_name = loader.player1_name
            player2_name = loader.player2_name

        # Create game session (handles game instance, players, seed)
        self.session = GameSession(
            board_size=board_size,
            seed=seed,
            replay_moves=replay_moves,
            partial_replay=partial_replay,
            discount=discount,
            ansi_color_output=ansi_color_output,
            status_reporter=self._status_reporter,
            player1_name=player1_name,
            player2_name=player2_name,
        )

        # Create logger with all configuration - it manages all writers internally
        self.logger = GameLogger(
            session=self.session,
            notation_dir=log_notation_to_file,
            log_notation_to_screen=log_notation_to_screen,
            log_board_to_screen=log_board_to_screen,
        )
        self.session.set_status_reporter(self._report)

        self._game_loop = GameLoop(self)

        for filename in self.logger.get_log_filenames():
            self._report(f"Logging to: {filename}")

        self.logger.start_log(self.session.get_seed(), self.session.board_size)

    def run(self):
        self._game_loop.run()

    def _close_log_file(self):
        self.logger.end_log(self.session.game)

    def _reset_board(self):
        """Reset the board for a new game."""
        self._close_log_file()
        self._game_ending_processed = False
        self.session.reset_game()
        logged = len(self.logger.get_log_filenames())
        self.logger.start_log(self.session.get_seed(), self.session.board_size)
        for filename in self.logger.get_log_filenames()[logged:]:
            self._report(f"Logging to: {filename}")

    def update_game(self, task):
        status = self._check_game_status(task)
        if status is task.done:
            return task.done

        player = self.session.get_current_player()

        if isinstance(player, ReplayTwixtPlayer) and not player.has_moves():
            if self.session.is_partial_replay():
                player = self.session.switch_to_random_play()
            else:
                self._report("Replay finished")
                self._close_log_file()
                return task.done

        action = player.get_action()
        action_result = self.session.game.take_action(action)
        logger.debug(f"{player.name}: {action_result}")

        self.logger.log_action(self.session.game, action_result)
        return self._check_game_status(task)

    def _check_game_status(self, task):
        """Check if game is over and handle the ending if needed.

        Returns:
            task.done if game should stop, task.again if game should continue
        """
        game_over = self.session.game.get_game_ended()
        if game_over is None:
            return task.again

        return self._handle_game_ending(game_over, task)

    def _handle_game_ending(self, game_over, task):
        """Handle game ending with side effects (report result, increment counter, etc.).

        Idempotent: calling it again for the same game has no additional effect.

        Args:
            game_over: Game result (RED_WIN, BLUE_WIN or DRAW)
            task: Task object for returning status

        Returns:
            task.done if should exit, task.again if should continue with next game
        """
        if self._game_ending_processed:
            return task.done
        self._game_ending_processed = True

        game = self.session.game
        self.last_returns = game.returns()
        self.win_loss_stats[game_over] += 1

        self._report("")
        if game_over == DRAW:
            self._report(f"Game ended in a draw after {game.board.get_move_counter()} moves")
        else:
            winner = self.session.player1 if game_over == RED_WIN else self.session.player2
            self._report(
                f"Winner: {winner.name} ({RESULT_NAMES[game_over]} after "
                f"{game.board.get_move_counter()} moves)"
            )
        self._report(f"Returns: {self.last_returns}")

        self.session.increment_games_played()

        if self.replay:
            self._report("Replay complete")
            self._close_log_file()
            return task.done
        if (
            self.max_games is not None
            and self.session.get_games_played() >= self.max_games
        ):
            self._report(f"Completed {self.session.get_games_played()} game(s)")
            self._close_log_file()
            return task.done

        self._reset_board()
        return task.again

    def _report(self, message: str | None) -> None:
        """Forward status messages to the writers, or print them when nothing is on screen."""
        if message is None:
            return
        text = str(message)

        self.logger.log_comment(text)
        if not self.logger.has_screen_writers():
            if self._status_reporter is not None:
                self._status_reporter(text)
            else:
                print(text)

    def print_statistics(self) -> None:
        """Report the win/loss/draw breakdown of all games played."""
        total_games = sum(self.win_loss_stats.values())
        if total_games == 0:
            return

        self._report("=" * 40)
        self._report(f"Games played: {total_games}")
        for result in (RED_WIN, BLUE_WIN, DRAW):
            count = self.win_loss_stats[result]
            self._report(f"  {RESULT_NAMES[result]}: {count} ({count / total_games * 100:.1f}%)")
        self._report("=" * 40)
