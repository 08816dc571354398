"""
Unit tests for the terminal front end.
"""
import io
import logging

import pytest
from conftest import make_board
from sweeper import (
    BEGINNER,
    DEFAULT_CONFIG,
    EXPERT,
    Board,
    BoardConfig,
    GameState,
    HighScoreStore,
    ScoreKey,
)
from sweeper.cli import GameShell, config_from_values, main, parse_board_args


def make_shell(board: Board) -> GameShell:
    return GameShell(board, HighScoreStore(), io.StringIO())


# ============================================================================
# Argument Parsing Tests
# ============================================================================

class TestArguments:
    """Test board selection from the command line."""

    @pytest.mark.parametrize(
        "values",
        [
            [],
            ["9", "9"],
            ["9", "9", "10", "4"],
            ["a", "9", "10"],
            ["0", "9", "10"],
            ["9", "-3", "10"],
            ["9", "9", "0"],
        ],
    )
    def test_invalid_values_fall_back_to_default(self, values) -> None:
        assert config_from_values(values) == DEFAULT_CONFIG

    def test_valid_values(self) -> None:
        assert config_from_values(["30", "16", "99"]) == BoardConfig(30, 16, 99)

    def test_mine_count_clamped(self) -> None:
        assert config_from_values(["2", "2", "9"]).num_mines == 3

    def test_preset_overrides_positionals(self) -> None:
        args = parse_board_args(["5", "5", "3", "--preset", "expert"])
        assert args.config == EXPERT

    def test_seed_and_debug(self) -> None:
        args = parse_board_args(["5", "5", "3", "--seed", "4", "--debug"])
        assert args.config == BoardConfig(5, 5, 3)
        assert args.seed == 4
        assert args.debug is True

    def test_defaults(self) -> None:
        args = parse_board_args([])
        assert args.config == DEFAULT_CONFIG
        assert args.seed is None
        assert args.debug is False


# ============================================================================
# Command Handling Tests
# ============================================================================

class TestCommands:
    """Test parsing and dispatch of typed commands."""

    def test_quit(self, corner_board: Board) -> None:
        shell = make_shell(corner_board)
        assert shell.handle("q") is False
        assert shell.handle("  ") is True

    def test_unknown_command(self, corner_board: Board) -> None:
        shell = make_shell(corner_board)
        shell.handle("jump 1 1")
        assert "Unknown command 'jump'" in shell.out.getvalue()

    @pytest.mark.parametrize(
        "line, message",
        [
            ("r 1", "Expected two coordinates"),
            ("f 1 2 3", "Expected two coordinates"),
            ("r a b", "Coordinates must be integers"),
        ],
    )
    def test_bad_coordinates(self, corner_board: Board, line, message) -> None:
        shell = make_shell(corner_board)
        shell.handle(line)
        assert message in shell.out.getvalue()
        assert shell.clicks == 0
        assert corner_board.last_interacted is None

    def test_flag_command(self, corner_board: Board) -> None:
        shell = make_shell(corner_board)
        shell.handle("f 0 0")
        assert corner_board.flag_count == 1
        assert "Mines left: 1" in shell.out.getvalue()

    def test_preview_is_cleared(self, corner_board: Board) -> None:
        shell = make_shell(corner_board)
        shell.handle("t 1 1")
        assert "1 .   ." in shell.out.getvalue().splitlines()
        assert corner_board.telegraphed == frozenset()

    def test_help(self, corner_board: Board) -> None:
        shell = make_shell(corner_board)
        shell.handle("h")
        assert "Commands:" in shell.out.getvalue()


# ============================================================================
# Game Flow Tests
# ============================================================================

class TestGameFlow:
    """Test clicks, restarts and scores through the shell."""

    def test_loss_then_click_restarts(self, wall_board: Board) -> None:
        shell = make_shell(wall_board)
        shell.handle("r 0 0")
        assert wall_board.uncovered_count == 10
        shell.handle("r 2 0")
        assert wall_board.is_lost is True
        assert "Boom!" in shell.out.getvalue()

        shell.handle("r 4 4")
        assert wall_board.game_state == GameState.NOT_STARTED
        assert wall_board.uncovered_count == 0
        assert shell.clicks == 0

    def test_win_records_score(self, corner_board: Board) -> None:
        shell = make_shell(corner_board)
        for line in ("r 1 0", "r 2 0", "r 0 2"):
            shell.handle(line)

        assert corner_board.is_won is True
        best = shell.scores.best(ScoreKey(3, 3, 2))
        assert best is not None
        assert best.clicks == 3
        assert "New best!" in shell.out.getvalue()

    def test_scores_command(self, corner_board: Board) -> None:
        shell = make_shell(corner_board)
        shell.handle("s")
        assert "No wins yet on 3x3 with 2 mines." in shell.out.getvalue()
        for line in ("r 1 0", "r 2 0", "r 0 2", "s"):
            shell.handle(line)
        assert "Best on 3x3 with 2 mines" in shell.out.getvalue()

    def test_new_game_with_preset(self, corner_board: Board) -> None:
        shell = make_shell(corner_board)
        shell.handle("r 1 0")
        shell.handle("n beginner")
        assert corner_board.config == BEGINNER
        assert corner_board.game_state == GameState.NOT_STARTED

    def test_new_game_unknown_preset(self, corner_board: Board) -> None:
        shell = make_shell(corner_board)
        shell.handle("n impossible")
        assert "Unknown level 'impossible'" in shell.out.getvalue()
        assert corner_board.dimensions == (3, 3)


# ============================================================================
# Debug Probe Tests
# ============================================================================

class TestProbe:
    """Test the mine probe command."""

    def test_probe_with_debug(self, corner_board: Board) -> None:
        shell = make_shell(corner_board)
        shell.handle("p 0 0")
        shell.handle("p 1 1")
        assert shell.out.getvalue().splitlines() == ["Mine", "Clear"]

    def test_probe_without_debug(self) -> None:
        board = make_board(3, 3, [(0, 0)])
        board.debug = False
        shell = make_shell(board)
        shell.handle("p 0 0")
        assert "only available with --debug" in shell.out.getvalue()


# ============================================================================
# Entry Point Tests
# ============================================================================

class TestMain:
    """Test the full session loop on scripted input."""

    def test_main_reads_commands_until_quit(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("f 0 0\nq\nr 1 1\n"))
        assert main(["3", "3", "1", "--seed", "1"]) == 0

        out = capsys.readouterr().out
        assert "Commands:" in out
        assert "Mines left: 0" in out
        assert "Playing" not in out

    def test_debug_flag_enables_logging(self, monkeypatch) -> None:
        """--debug configures logging at DEBUG level."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))

        assert main(["3", "3", "1", "--debug"]) == 0
        assert len(calls) == 1
        assert calls[0]["level"] == logging.DEBUG

    def test_logging_untouched_without_debug(self, monkeypatch) -> None:
        """Without --debug the logging setup is left to the caller."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))

        assert main(["3", "3", "1"]) == 0
        assert calls == []
