"""Tests for the headless TwixtGameController."""

import pytest
import sys
from pathlib import Path

# Add parent directory to path to import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from controller import TwixtGameController
from game.constants import BLUE_WIN, DRAW, RED_WIN


@pytest.fixture
def messages():
    return []


class TestHeadlessGames:
    def test_plays_requested_number_of_games(self, messages):
        controller = TwixtGameController(
            board_size=5, seed=42, max_games=3, status_reporter=messages.append
        )
        controller.run()

        assert controller.session.get_games_played() == 3
        assert sum(controller.win_loss_stats.values()) == 3
        assert set(controller.win_loss_stats) == {RED_WIN, BLUE_WIN, DRAW}
        assert "Completed 3 game(s)" in messages

    def test_each_game_reports_result_and_returns(self, messages):
        controller = TwixtGameController(
            board_size=6, seed=7, max_games=1, discount=0.9, status_reporter=messages.append
        )
        controller.run()

        game = controller.session.game
        assert game.is_terminal()
        assert controller.last_returns == game.returns()
        assert any(m.startswith("Winner:") or m.startswith("Game ended in a draw") for m in messages)
        assert f"Returns: {game.returns()}" in messages

    def test_seeded_runs_are_reproducible(self):
        def history(seed):
            controller = TwixtGameController(
                board_size=6, seed=seed, max_games=1, status_reporter=lambda m: None
            )
            controller.run()
            return controller.session.game.move_history

        assert history(5) == history(5)

    def test_statistics(self, messages):
        controller = TwixtGameController(
            board_size=5, seed=1, max_games=2, status_reporter=messages.append
        )
        controller.run()
        controller.print_statistics()
        assert "Games played: 2" in messages

    def test_invalid_board_size(self):
        with pytest.raises(ValueError, match="board_size"):
            TwixtGameController(board_size=4, seed=1, status_reporter=lambda m: None)


class TestLoggingAndReplay:
    def test_notation_files_and_replay(self, tmp_path, messages):
        controller = TwixtGameController(
            board_size=7,
            seed=123,
            max_games=2,
            log_notation_to_file=str(tmp_path),
            status_reporter=messages.append,
        )
        controller.run()

        files = sorted(tmp_path.iterdir())
        assert len(files) == 2
        first_file = tmp_path / "twixtlog_123_notation.txt"
        assert first_file in files
        assert f"Logging to: {first_file}" in messages

        # the last game is logged under the chained seed
        last_file = tmp_path / f"twixtlog_{controller.session.get_seed()}_notation.txt"
        replay = TwixtGameController(replay_file=str(last_file), status_reporter=lambda m: None)
        replay.run()

        assert replay.session.board_size == 7
        assert replay.session.game.move_history == controller.session.game.move_history
        assert replay.session.game.get_game_ended() == controller.session.game.get_game_ended()

    def test_partial_replay_finishes_randomly(self, tmp_path):
        path = tmp_path / "opening.txt"
        path.write_text("8\nxc3\noe4\n")

        controller = TwixtGameController(
            replay_file=str(path), partial_replay=True, seed=9, status_reporter=lambda m: None
        )
        controller.run()

        game = controller.session.game
        assert game.is_terminal()
        assert game.move_history[:2] == [(0, 13), (1, 20)]

    def test_replay_without_partial_stops(self, tmp_path, messages):
        path = tmp_path / "opening.txt"
        path.write_text("8\nxc3\noe4\n")

        controller = TwixtGameController(
            replay_file=str(path), seed=9, status_reporter=messages.append
        )
        controller.run()

        game = controller.session.game
        assert not game.is_terminal()
        assert game.move_history == [(0, 13), (1, 20)]
        assert "Replay finished" in messages

    def test_screen_output(self, capsys):
        controller = TwixtGameController(
            board_size=5,
            seed=2,
            max_games=1,
            log_notation_to_screen=True,
            ansi_color_output=False,
        )
        controller.run()
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "-- Setting Seed: 2"
        assert "5" in out
        assert any(line.startswith("# Result:") for line in out)
