"""Game logging for TwixT.

Handles logging game actions and board diagrams using pluggable writers.
"""

import os
import sys

from game.writers import DiagramWriter, GameWriter, NotationWriter


class GameLogger:
    """Manages multiple game action writers for flexible logging.

    Uses the Strategy pattern to support multiple output formats and destinations
    simultaneously (e.g., notation to file, board diagrams to screen).

    Owns all writer lifecycle management including file creation, error handling,
    and writer recreation for new games.
    """

    def __init__(
        self,
        session,
        notation_dir: str | None = None,
        log_notation_to_screen: bool = False,
        log_board_to_screen: bool = False,
    ):
        """Initialize the game logger.

        Args:
            session: GameSession instance (for seed, names and replay mode checks)
            notation_dir: Directory path for notation log files (None to disable)
            log_notation_to_screen: Whether to log notation to stdout
            log_board_to_screen: Whether to draw the board on stdout after every move
        """
        self.session = session
        self._notation_dir = notation_dir
        self._log_notation_to_screen = log_notation_to_screen
        self._log_board_to_screen = log_board_to_screen
        self._game_active = False
        self._file_writers_open = False

        # Track created log filenames
        self._log_filenames = []

        self.writers: list[GameWriter] = []
        self._screen_writers: list[GameWriter] = []  # Keep references to screen writers
        self._create_initial_writers()

    def _create_file_writer(self, directory, filename, writer_class, log_type):
        """Create a file writer with robust error handling.

        Errors are reported to stderr. Controller should query get_log_filenames()
        after creation to report successful file creation to the user.

        Returns:
            Writer instance on success, None on failure
        """
        try:
            os.makedirs(directory, exist_ok=True)
            filepath = os.path.join(directory, filename)
            writer = writer_class(open(filepath, "w"))
        except OSError as e:
            print(f"Error: Failed to create {log_type} log file: {e}", file=sys.stderr)
            print(f"Attempted path: {directory}", file=sys.stderr)
            print(f"{log_type.capitalize()} logging to file disabled for this session", file=sys.stderr)
            return None
        self._log_filenames.append(filepath)
        return writer

    def _create_initial_writers(self):
        """Create initial set of writers based on configuration."""
        # Screen writers (persist across games)
        if self._log_notation_to_screen:
            writer = NotationWriter(sys.stdout)
            self.writers.append(writer)
            self._screen_writers.append(writer)

        if self._log_board_to_screen:
            writer = DiagramWriter(sys.stdout)
            self.writers.append(writer)
            self._screen_writers.append(writer)

        # File writers (only for non-replay mode)
        if not self.session.is_replay_mode():
            self._create_game_file_writers()

    def _create_game_file_writers(self):
        """Create file writers for the current game."""
        if self._notation_dir:
            filename = f"twixtlog_{self.session.get_seed()}_notation.txt"
            writer = self._create_file_writer(
                self._notation_dir, filename, NotationWriter, "notation"
            )
            if writer:
                self.writers.append(writer)
        self._file_writers_open = True

    def _close_file_writers(self):
        """Close file writers, keeping only screen writers."""
        new_writers = []
        for writer in self.writers:
            if writer in self._screen_writers:
                new_writers.append(writer)
            else:
                writer.close()
        self.writers = new_writers
        self._file_writers_open = False

    def get_log_filenames(self):
        """Get list of log filenames created.

        Returns:
            List of paths to created log files
        """
        return self._log_filenames.copy()

    def has_screen_writers(self) -> bool:
        return len(self._screen_writers) > 0

    def add_writer(self, writer: GameWriter) -> None:
        self.writers.append(writer)

    def remove_writer(self, writer: GameWriter) -> None:
        if writer in self.writers:
            self.writers.remove(writer)

    def start_log(self, seed: int, board_size: int) -> None:
        """Start logging for a new game and write headers to all writers.

        File writers are opened per game (named after the game's seed); screen
        writers are kept across games.

        Args:
            seed: Random seed for this game
            board_size: Length of a side of the board
        """
        # Previous game was not ended: drop its file writers
        if self._game_active:
            self._close_file_writers()
        if not self._file_writers_open and not self.session.is_replay_mode():
            self._create_game_file_writers()

        for writer in self.writers:
            writer.write_header(
                seed, board_size, self.session.player1_name, self.session.player2_name
            )

        self._game_active = True

    def end_log(self, game=None) -> None:
        """End logging for the current game, write footers and close file writers.

        Screen writers are NOT closed (they persist across games).

        Args:
            game: Optional TwixtGame instance for final state
        """
        for writer in self.writers:
            writer.write_footer(game)

        self._close_file_writers()
        self._game_active = False

    def log_action(self, game, action_result) -> None:
        """Log an action to all writers.

        Args:
            game: TwixtGame after the action was applied
            action_result: ActionResult returned by the game
        """
        for writer in self.writers:
            writer.write_action(game, action_result)

    def log_comment(self, message: str) -> None:
        """Log a status/comment message to all writers."""
        for writer in self.writers:
            writer.write_comment(message)
