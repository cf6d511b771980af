"""Loader for TwixT notation files.

Parses notation files (e.g., twixtlog_1759986153_notation.txt) into move
strings that can be fed to ReplayTwixtPlayer or TwixtGame.apply_notation.
"""

from typing import Callable

from game.constants import DEFAULT_BOARD_SIZE, MAX_BOARD_SIZE, MIN_BOARD_SIZE
from game.formatters import NotationFormatter


class NotationLoader:
    """Loads and parses TwixT notation files."""

    def __init__(
        self,
        filename,
        status_reporter: Callable[[str], None] | None = None,
    ):
        """Initialize notation loader.

        Args:
            filename: Path to notation file
            status_reporter: Optional callback for status messages
        """
        self.filename = filename
        self._status_reporter = status_reporter

        # Detected values (set after load())
        self.detected_board_size = DEFAULT_BOARD_SIZE
        self.player1_name: str | None = None
        self.player2_name: str | None = None

    def load(self) -> list[str]:
        """Load and parse notation file.

        Returns:
            Move strings in the order they were played (e.g., ["xc3", "oe4"])
        """
        self._report(f"Loading notation from: {self.filename}")

        with open(self.filename, "r") as f:
            lines = f.readlines()

        if not lines:
            self._report("Empty notation file")
            return []

        # Parse header (first line: board size)
        self._parse_header(lines[0].strip())

        moves = []
        for line_num, line in enumerate(lines[1:], start=2):
            line = line.strip()
            if not line:
                continue

            # Parse player name comments
            if line.startswith("# Player 1:"):
                self.player1_name = line.split(":", 1)[1].strip()
                continue
            elif line.startswith("# Player 2:"):
                self.player2_name = line.split(":", 1)[1].strip()
                continue
            elif line.startswith("#"):
                # Other comments (result footer, ...) - skip
                continue

            try:
                NotationFormatter.notation_to_position(line, self.detected_board_size)
            except ValueError as e:
                self._report(f"Warning: Skipping invalid notation on line {line_num}: {line} ({e})")
                continue
            moves.append(line.lower())

        self._report(f"Loaded {len(moves)} moves")
        self._report(f"Detected board size: {self.detected_board_size}")

        return moves

    def _parse_header(self, header: str) -> None:
        """Parse header line to detect the board size.

        Header format: "8" or "24"

        Args:
            header: First line of notation file
        """
        parts = header.split()
        if not parts:
            self.detected_board_size = DEFAULT_BOARD_SIZE
            return

        try:
            size = int(parts[0])
        except ValueError:
            self._report(f"Warning: Invalid board size in header, defaulting to {DEFAULT_BOARD_SIZE}")
            self.detected_board_size = DEFAULT_BOARD_SIZE
            return

        if MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
            self.detected_board_size = size
        else:
            self._report(f"Warning: Unknown board size {size}, defaulting to {DEFAULT_BOARD_SIZE}")
            self.detected_board_size = DEFAULT_BOARD_SIZE

    def _report(self, message: str | None) -> None:
        """Report status message via callback or print."""
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
