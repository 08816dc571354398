"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import Board, BoardConfig, Tile


# ============================================================================
# Deterministic Mine Layouts
# ============================================================================

class FixedOrder:
    """Mine sampler whose permutation starts with the given tile indices."""

    def __init__(self, first: Iterable[int]) -> None:
        self.first = list(first)

    def permutation(self, n: int) -> np.ndarray:
        rest = [index for index in range(n) if index not in self.first]
        return np.array(self.first + rest)


def make_board(
    width: int, height: int, mines: List[Tuple[int, int]]
) -> Board:
    """Build a debug board with mines at exactly the given (x, y) tiles."""
    order = FixedOrder(x + y * width for x, y in mines)
    return Board(BoardConfig(width, height, len(mines)), rng=order, debug=True)


def mine_positions(board: Board) -> List[Tuple[int, int]]:
    """List mines through the debug probe."""
    width, height = board.dimensions
    return [
        (x, y)
        for y in range(height)
        for x in range(width)
        if board.has_mine(x, y)
    ]


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 16x16 board with 40 mines."""
    return Board(seed=1234, debug=True)


@pytest.fixture
def beginner_board() -> Board:
    """Create a beginner difficulty board."""
    return Board(BoardConfig(9, 9, 10), seed=7, debug=True)


@pytest.fixture
def corner_board() -> Board:
    """3x3 board with mines in opposite corners."""
    return make_board(3, 3, [(0, 0), (2, 2)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def wall_board() -> Board:
    """
    5x5 board with a vertical wall of mines in column 2.

    Left side: columns 0-1, right side: columns 3-4.
    """
    return make_board(5, 5, [(2, y) for y in range(5)])


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def covered_tile() -> Tile:
    """Create a covered tile."""
    return Tile()


@pytest.fixture
def mine_tile() -> Tile:
    """Create a tile containing a mine."""
    return Tile(is_mine=True)


@pytest.fixture
def numbered_tile() -> Tile:
    """Create an uncovered tile with adjacent mines."""
    tile = Tile(adjacent_mines=3)
    tile.uncover()
    return tile
