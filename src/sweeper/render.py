"""
Text rendering for the Minesweeper board.

Chooses a visual for every tile from the board's public queries and
draws the board as plain text. No pixel or toolkit code lives here;
a graphical front end can map ``TileAppearance`` onto its own sprites.
"""
from enum import Enum
from typing import Dict, List

from .board import Board, GameState
from .tile import TileState


# ============================================================================
# Tile Appearance
# ============================================================================

class TileAppearance(Enum):
    """Visual representation selected for a tile."""

    COVERED = "covered"
    FLAGGED = "flagged"
    INCORRECT_FLAG = "incorrect_flag"
    INERT_MINE = "inert_mine"
    DETONATED_MINE = "detonated_mine"
    UNCOVERED_0 = 0
    UNCOVERED_1 = 1
    UNCOVERED_2 = 2
    UNCOVERED_3 = 3
    UNCOVERED_4 = 4
    UNCOVERED_5 = 5
    UNCOVERED_6 = 6
    UNCOVERED_7 = 7
    UNCOVERED_8 = 8


GLYPHS: Dict[TileAppearance, str] = {
    TileAppearance.COVERED: ".",
    TileAppearance.FLAGGED: "F",
    TileAppearance.INCORRECT_FLAG: "X",
    TileAppearance.INERT_MINE: "*",
    TileAppearance.DETONATED_MINE: "@",
    TileAppearance.UNCOVERED_0: " ",
    **{TileAppearance(count): str(count) for count in range(1, 9)},
}

STATUS_TEXT: Dict[GameState, str] = {
    GameState.NOT_STARTED: "Ready",
    GameState.ONGOING: "Playing",
    GameState.WON: "You win!",
    GameState.LOST: "Game over",
}


def appearance_of(board: Board, x: int, y: int) -> TileAppearance:
    """
    Select how the tile at (x, y) should look.

    Covered tiles show their preview while playing, turn into flags on a
    win and expose mines on a loss. Uncovered mines are drawn detonated
    when they were the last tile clicked. Wrong flags are marked once the
    game is lost.
    """
    tile = board.get_tile(x, y)
    if tile is None:
        raise ValueError(f"Tile ({x}, {y}) is outside the board")

    state = board.game_state
    if tile.state == TileState.COVERED:
        if state == GameState.WON:
            return TileAppearance.FLAGGED
        if state == GameState.LOST:
            return TileAppearance.INERT_MINE if tile.is_mine else TileAppearance.COVERED
        if (x, y) in board.telegraphed:
            return TileAppearance.UNCOVERED_0
        return TileAppearance.COVERED

    if tile.state == TileState.UNCOVERED:
        if tile.is_mine:
            if board.last_interacted == (x, y):
                return TileAppearance.DETONATED_MINE
            return TileAppearance.INERT_MINE
        return TileAppearance(tile.adjacent_mines)

    if state == GameState.LOST and not tile.is_mine:
        return TileAppearance.INCORRECT_FLAG
    return TileAppearance.FLAGGED


# ============================================================================
# ASCII Board
# ============================================================================

def render_ascii(board: Board) -> str:
    """Render board as ASCII string with column and row headers."""
    width, height = board.dimensions
    label_width = len(str(height - 1))
    lines: List[str] = []

    header = " " * (label_width + 1)
    header += " ".join(str(x % 10) for x in range(width))
    lines.append(header)

    for y in range(height):
        row = [GLYPHS[appearance_of(board, x, y)] for x in range(width)]
        lines.append(f"{y:>{label_width}} " + " ".join(row))

    lines.append(
        f"{STATUS_TEXT[board.game_state]} | "
        f"Mines left: {board.mines_remaining}"
    )
    return "\n".join(lines)
