"""
Tile module for the Minesweeper board engine.

Represents individual tiles on the board with their state
(covered/uncovered/flagged) and content (mine/number), plus the
pointer buttons the engine understands.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class TileState(Enum):
    """Possible states of a tile."""

    COVERED = auto()
    UNCOVERED = auto()
    FLAGGED = auto()


class Button(Enum):
    """Pointer buttons forwarded by the input layer."""

    PRIMARY = auto()
    SECONDARY = auto()
    MIDDLE = auto()


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass
class Tile:
    """
    A single tile in the Minesweeper grid.

    Attributes:
        is_mine: Whether this tile contains a mine.
        adjacent_mines: Count of mines in neighboring tiles (0-8).
        state: Current state (covered, uncovered, or flagged).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: TileState = TileState.COVERED

    def uncover(self) -> bool:
        """
        Uncover this tile.

        Returns:
            True if the tile was covered and is now uncovered, False if it
            was already uncovered or is flagged.
        """
        if self.state != TileState.COVERED:
            return False
        self.state = TileState.UNCOVERED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle the flag on this tile.

        Returns:
            True if the flag was toggled, False if the tile is uncovered.
        """
        if self.state == TileState.UNCOVERED:
            return False
        if self.state == TileState.COVERED:
            self.state = TileState.FLAGGED
        else:
            self.state = TileState.COVERED
        return True

    @property
    def is_covered(self) -> bool:
        """Check if tile is covered."""
        return self.state == TileState.COVERED

    @property
    def is_uncovered(self) -> bool:
        """Check if tile is uncovered."""
        return self.state == TileState.UNCOVERED

    @property
    def is_flagged(self) -> bool:
        """Check if tile is flagged."""
        return self.state == TileState.FLAGGED

    def to_observation(self) -> int:
        """
        Convert tile to an observation value for automated players.

        Returns:
            -1: Covered tile
            -2: Flagged tile
            0-8: Uncovered tile with adjacent mine count
            9: Uncovered mine (game over state)
        """
        if self.state == TileState.COVERED:
            return -1
        if self.state == TileState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines
