"""Tests for the command line entry point."""

from pathlib import Path

import pytest

from animal_memory.config import Config
from animal_memory.game.controller import RoundController, RoundOutcome
from animal_memory.leaderboard import JsonlLeaderboard
from animal_memory.main import build_parser, generate_log_filename, main, run_round
from animal_memory.utils.logger import BoardDisplay


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "leaderboard:\n"
        f"  path: {tmp_path / 'scores.jsonl'}\n"
    )
    return path


class TestParser:
    """Tests for argument parsing."""

    def test_play_arguments(self):
        args = build_parser().parse_args(["play", "-n", "Alice", "--pairs", "3", "--delay", "0.2"])
        assert args.command == "play"
        assert args.name == "Alice"
        assert args.pairs == 3
        assert args.delay == 0.2

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    @pytest.mark.parametrize(
        "argv",
        [
            ["play", "--delay", "-1"],
            ["play", "--delay", "0"],
            ["play", "--pairs", "0"],
            ["leaderboard", "--top", "0"],
        ],
    )
    def test_rejects_non_positive_overrides(self, argv):
        """Test that bad overrides fail before a round starts."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(argv)


class TestLeaderboardCommand:
    """Tests for the leaderboard command."""

    def test_empty(self, config_file, capsys):
        assert main(["leaderboard", "-c", str(config_file)]) == 0
        assert "No scores yet" in capsys.readouterr().out

    def test_ranked(self, config_file, tmp_path, capsys):
        board = JsonlLeaderboard(tmp_path / "scores.jsonl")
        board.submit("Alice", 40)
        board.submit("Bob", 25)

        assert main(["leaderboard", "-c", str(config_file), "--top", "1"]) == 0

        out = capsys.readouterr().out
        assert "#1: Bob - 25" in out
        assert "Alice" not in out


class TestRunRound:
    """Tests for the terminal round loop."""

    def test_play_to_completion(self, monkeypatch, timers, clock, leaderboard, capsys):
        """Test a scripted round where the timer fires immediately."""
        def instant_timer(delay, callback):
            timer = timers(delay, callback)
            timer.start = timer.fire
            return timer

        controller = RoundController(
            leaderboard=leaderboard,
            config=Config(),
            player_name="Alice",
            timer_factory=instant_timer,
            clock=clock,
        )
        monkeypatch.setattr(
            controller,
            "start_round",
            lambda: RoundController.start_round(controller, layout=["A", "B", "A", "B"]),
        )
        inputs = iter(["0", "1", "x", "0", "2", "1", "3"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))

        outcome = run_round(controller, BoardDisplay(), submit_timeout=1.0)

        assert outcome is not None
        assert outcome.moves == 3
        assert outcome.saved is True
        assert "Match! A" in capsys.readouterr().out

    def test_quit(self, monkeypatch, timers, clock):
        """Test quitting mid-round."""
        controller = RoundController(timer_factory=timers, clock=clock)
        monkeypatch.setattr("builtins.input", lambda prompt="": "q")

        assert run_round(controller, BoardDisplay(), submit_timeout=0.1) is None

    def test_timer_that_never_fires(self, monkeypatch, timers, clock, leaderboard):
        """Test that the loop resolves the pair itself when the timer is lost."""
        config = Config()
        config.timing.mismatch_delay = 0.01
        controller = RoundController(
            leaderboard=leaderboard, config=config, timer_factory=timers, clock=clock
        )
        monkeypatch.setattr("animal_memory.main.RESOLVE_GRACE", 0.0)
        monkeypatch.setattr(
            controller,
            "start_round",
            lambda: RoundController.start_round(controller, layout=["A", "B", "A", "B"]),
        )
        inputs = iter(["0", "2", "1", "3"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))

        outcome = run_round(controller, BoardDisplay(), submit_timeout=1.0)

        assert outcome is not None
        assert outcome.moves == 2
        assert len(timers.timers) == 2
        assert all(t.cancelled for t in timers.timers)


class TestLogFilename:
    """Tests for generate_log_filename function."""

    def test_sanitizes_name(self, tmp_path):
        path = generate_log_filename(str(tmp_path), "Al ice/..")
        assert path.startswith(str(tmp_path))
        assert path.endswith("_Al_ice___.jsonl")
        assert Path(path).parent == tmp_path


class TestBoardDisplay:
    """Tests for BoardDisplay outcome messages."""

    def make_outcome(self, saved):
        return RoundOutcome(
            round_number=1, player_name="Alice", score=42, moves=3, elapsed=12.7, saved=saved
        )

    def test_saved(self, capsys):
        BoardDisplay().print_outcome(self.make_outcome(True))
        out = capsys.readouterr().out
        assert "Score: 42" in out
        assert "not saved" not in out

    def test_not_saved(self, capsys):
        BoardDisplay().print_outcome(self.make_outcome(False))
        assert "Score not saved" in capsys.readouterr().out

    def test_still_saving(self, capsys):
        """Test the message when the leaderboard has not answered yet."""
        BoardDisplay().print_outcome(self.make_outcome(None))
        out = capsys.readouterr().out
        assert "Score still saving" in out
        assert "not saved" not in out
