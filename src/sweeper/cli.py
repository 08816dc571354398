"""
Terminal front end for the Minesweeper board.

Translates typed commands into board interactions, prints the board
after every move and keeps best scores for the session.
"""
import argparse
import logging
import sys
import time
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple

from .board import DEFAULT_CONFIG, PRESETS, Board, BoardConfig
from .render import render_ascii
from .scores import HighScoreStore, ScoreKey
from .tile import Button


HELP_TEXT = """Commands:
  r X Y      uncover a tile (or chord an uncovered number)
  c X Y      same as r
  f X Y      flag or unflag a tile
  t X Y      preview what r X Y would open
  n [LEVEL]  new game (beginner, intermediate, expert)
  p X Y      probe for a mine (needs --debug)
  s          best score for this board
  h          show this help
  q          quit"""

CLICK_COMMANDS = {
    "r": Button.PRIMARY,
    "c": Button.PRIMARY,
    "f": Button.SECONDARY,
}


# ============================================================================
# Argument Parsing
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal"
    )
    parser.add_argument(
        "board",
        nargs="*",
        metavar="N",
        help="Optional WIDTH HEIGHT MINES (default: 16 16 40)",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=None,
        help="Use a standard difficulty instead of WIDTH HEIGHT MINES",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable the mine probe and debug logging",
    )
    return parser


def config_from_values(values: Sequence[str]) -> BoardConfig:
    """
    Turn positional WIDTH HEIGHT MINES into a board configuration.

    Anything other than three positive integers falls back to the
    default 16x16 board with 40 mines.
    """
    if len(values) != 3:
        return DEFAULT_CONFIG
    try:
        width, height, num_mines = (int(value) for value in values)
    except ValueError:
        return DEFAULT_CONFIG
    if width <= 0 or height <= 0 or num_mines <= 0:
        return DEFAULT_CONFIG
    return BoardConfig(width, height, num_mines)


def parse_board_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse arguments and attach the resulting ``config``."""
    args = build_parser().parse_args(argv)
    if args.preset:
        args.config = PRESETS[args.preset]
    else:
        args.config = config_from_values(args.board)
    return args


# ============================================================================
# Game Shell
# ============================================================================

class GameShell:
    """
    Command loop around a board.

    Stands in for a graphical event loop: clicks go to the board in tile
    coordinates, the board is redrawn after each one, and a click on a
    finished game starts a new one.
    """

    def __init__(
        self,
        board: Board,
        scores: Optional[HighScoreStore] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        """Wrap a board, with optional score store and output stream."""
        self.board = board
        self.scores = scores if scores is not None else HighScoreStore()
        self.out = out if out is not None else sys.stdout
        self.clicks = 0
        self._started_at: Optional[float] = None

    def say(self, text: str) -> None:
        """Print a line to the shell output."""
        print(text, file=self.out)

    def render(self) -> None:
        """Print the current board."""
        self.say(render_ascii(self.board))

    def new_game(self, config: Optional[BoardConfig] = None) -> None:
        """Start over, optionally on a different board."""
        if config is None:
            self.board.reset()
        else:
            self.board.initialize(config.width, config.height, config.num_mines)
        self.clicks = 0
        self._started_at = None

    def run(self, lines: Iterable[str]) -> None:
        """Process commands until ``q`` or the input runs out."""
        self.render()
        for line in lines:
            if not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """
        Execute one command line.

        Returns:
            False when the player asked to quit, True otherwise.
        """
        parts = line.split()
        if not parts:
            return True
        command, params = parts[0].lower(), parts[1:]

        if command in ("q", "quit", "exit"):
            return False
        if command in ("h", "help", "?"):
            self.say(HELP_TEXT)
        elif command == "n":
            self._new_game_command(params)
        elif command == "s":
            self._show_scores()
        elif command in CLICK_COMMANDS:
            self._with_position(params, self._click, CLICK_COMMANDS[command])
        elif command == "t":
            self._with_position(params, self._preview)
        elif command == "p":
            self._with_position(params, self._probe)
        else:
            self.say(f"Unknown command '{command}'. Type h for help.")
        return True

    def _with_position(self, params: List[str], action, *extra) -> None:
        """Parse X Y from params and run the action, reporting bad input."""
        try:
            x, y = self._parse_position(params)
        except ValueError as exc:
            self.say(str(exc))
            return
        action(x, y, *extra)

    @staticmethod
    def _parse_position(params: List[str]) -> Tuple[int, int]:
        """Read two integer coordinates."""
        if len(params) != 2:
            raise ValueError("Expected two coordinates: X Y")
        try:
            return int(params[0]), int(params[1])
        except ValueError:
            raise ValueError("Coordinates must be integers") from None

    def _click(self, x: int, y: int, button: Button) -> None:
        """Forward a click, or start over if the game is finished."""
        if self.board.is_finished:
            self.new_game()
            self.render()
            return

        if self._started_at is None:
            self._started_at = time.monotonic()
        self.clicks += 1
        self.board.interact(x, y, button)
        self.render()

        if self.board.is_won:
            self._record_win()
        elif self.board.is_lost:
            self.say("Boom! Click anywhere to play again.")

    def _record_win(self) -> None:
        """Store the finished game in the score table."""
        elapsed = time.monotonic() - (self._started_at or time.monotonic())
        key = ScoreKey.from_config(self.board.config)
        improved = self.scores.record(key, elapsed, self.clicks)
        message = f"Cleared in {elapsed:.1f}s with {self.clicks} clicks."
        if improved:
            message += " New best!"
        self.say(message)

    def _preview(self, x: int, y: int) -> None:
        """Show what a primary click would open, then drop the preview."""
        self.board.telegraph(x, y)
        self.render()
        self.board.clear_telegraph()

    def _probe(self, x: int, y: int) -> None:
        """Report a hidden mine in debug mode."""
        if not self.board.debug:
            self.say("Mine probe is only available with --debug")
            return
        self.say("Mine" if self.board.has_mine(x, y) else "Clear")

    def _new_game_command(self, params: List[str]) -> None:
        """Restart, optionally on a named preset."""
        config = None
        if params:
            name = params[0].lower()
            if name not in PRESETS:
                self.say(f"Unknown level '{name}'. Choose from: {', '.join(sorted(PRESETS))}")
                return
            config = PRESETS[name]
        self.new_game(config)
        self.render()

    def _show_scores(self) -> None:
        """Print the best score for the current board."""
        key = ScoreKey.from_config(self.board.config)
        best = self.scores.best(key)
        if best is None:
            self.say(f"No wins yet on {key.width}x{key.height} with {key.num_mines} mines.")
            return
        self.say(
            f"Best on {key.width}x{key.height} with {key.num_mines} mines: "
            f"{best.seconds:.1f}s, {best.clicks} clicks"
        )


# ============================================================================
# Entry Point
# ============================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments and run an interactive session on stdin."""
    args = parse_board_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    board = Board(args.config, seed=args.seed, debug=args.debug)
    shell = GameShell(board)
    shell.say(HELP_TEXT)
    shell.run(sys.stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())
