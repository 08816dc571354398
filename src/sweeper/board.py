"""
Board module for the Minesweeper engine.

Implements the game board with mine placement, first-click safety,
flood-fill reveal, chording and game state management. The board owns
its data and exposes read-only queries; a presentation layer polls
them to decide what to draw.
"""
import dataclasses
import logging
from collections import deque
from dataclasses import InitVar, dataclass, field
from enum import Enum, auto
from typing import Any, Deque, Dict, FrozenSet, List, Optional, Set, Tuple

import numpy as np

from .tile import Button, Tile, TileState


logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    NOT_STARTED = auto()
    ONGOING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    A mine count that would fill the whole board is clamped so that at
    least one tile stays safe.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 16
    height: int = 16
    num_mines: int = 40

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Reject impossible boards and clamp the mine count."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            object.__setattr__(self, "num_mines", max_mines)

    @property
    def num_tiles(self) -> int:
        """Total number of tiles on the board."""
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

PRESETS: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}

DEFAULT_CONFIG = INTERMEDIATE


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the tiles, mine placement, reveal logic and win/lose
    conditions. Tiles live in a flat list indexed by ``x + y * width``.

    Attributes:
        config: Board dimensions and mine count.
        rng: Mine sampler. Anything with a numpy-style ``permutation(n)``
            works; defaults to ``numpy.random.default_rng(seed)``.
        debug: Enables the ``has_mine`` probe.
        seed: Seed for the default sampler (ignored when ``rng`` is given).
    """

    config: BoardConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    rng: Any = field(default=None, repr=False, compare=False)
    debug: bool = False
    seed: InitVar[Optional[int]] = None
    _tiles: List[Tile] = field(default_factory=list, init=False, repr=False)
    _game_state: GameState = field(default=GameState.NOT_STARTED, init=False)
    _last_interacted: Optional[Coordinate] = field(default=None, init=False)
    _telegraphed: Set[Coordinate] = field(
        default_factory=set, init=False, repr=False
    )

    def __post_init__(self, seed: Optional[int]) -> None:
        """Create the sampler and lay out the first game."""
        if self.rng is None:
            self.rng = np.random.default_rng(seed)
        self.reset()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def initialize(self, width: int, height: int, num_mines: int) -> None:
        """
        Start a new game on a board of the given size.

        Args:
            width: Number of columns (must be positive).
            height: Number of rows (must be positive).
            num_mines: Requested mine count, clamped to ``width*height - 1``.
        """
        self.config = BoardConfig(width, height, num_mines)
        self.reset()

    def reset(self) -> None:
        """Start a new game with the current configuration."""
        logger.debug(
            "Initializing %dx%d board with %d mines",
            self.config.width, self.config.height, self.config.num_mines,
        )
        self._game_state = GameState.NOT_STARTED
        self._last_interacted = None
        self._telegraphed = set()
        self._tiles = [Tile() for _ in range(self.config.num_tiles)]
        self._place_mines()
        self._calculate_adjacent_mines()

    def _place_mines(self) -> None:
        """Mine the first ``num_mines`` tiles of a random permutation."""
        logger.debug("Placing mines...")
        order = self.rng.permutation(self.config.num_tiles)
        for index in order[:self.config.num_mines]:
            self._tiles[int(index)].is_mine = True

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all tiles."""
        logger.debug("Calculating tile contents...")
        for index, tile in enumerate(self._tiles):
            x, y = self._deflatten(index)
            tile.adjacent_mines = self._count_adjacent_mines(x, y)

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific tile."""
        count = 0
        for neighbor_x, neighbor_y in self.neighbors(x, y):
            if self._tile_at(neighbor_x, neighbor_y).is_mine:
                count += 1
        return count

    def _relocate_mine(self, x: int, y: int) -> None:
        """Move the mine at (x, y) to the lowest free tile index."""
        logger.debug("Moving mine away from first click at (%d, %d)", x, y)
        origin = self._flatten(x, y)
        self._tiles[origin].is_mine = False
        for index, tile in enumerate(self._tiles):
            if index == origin or tile.is_mine:
                continue
            tile.is_mine = True
            break
        self._calculate_adjacent_mines()

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _flatten(self, x: int, y: int) -> int:
        """Convert (x, y) to a flat tile index."""
        return x + y * self.config.width

    def _deflatten(self, index: int) -> Coordinate:
        """Convert a flat tile index to (x, y)."""
        return index % self.config.width, index // self.config.width

    def _tile_at(self, x: int, y: int) -> Tile:
        """Get the stored tile at an in-bounds position."""
        return self._tiles[self._flatten(x, y)]

    def _to_tile(self, x: float, y: float) -> Optional[Coordinate]:
        """
        Convert tile-unit coordinates to integer tile indices.

        Bounds are checked on the raw values, so ``-0.5`` is out of bounds
        rather than truncated onto column 0.
        """
        if not self.in_bounds(x, y):
            return None
        return int(x), int(y)

    def in_bounds(self, x: float, y: float) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    def neighbors(self, x: int, y: int) -> List[Coordinate]:
        """
        Get valid neighboring tile positions.

        Args:
            x: Column index of center tile.
            y: Row index of center tile.

        Returns:
            List of (x, y) tuples for neighbors inside the board.
        """
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.in_bounds(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def count_flags(self, x: int, y: int) -> int:
        """Count flagged tiles adjacent to position."""
        count = 0
        for neighbor_x, neighbor_y in self.neighbors(x, y):
            if self._tile_at(neighbor_x, neighbor_y).is_flagged:
                count += 1
        return count

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def interact(self, x: float, y: float, button: Button) -> bool:
        """
        Apply a click at a tile.

        Primary uncovers a covered tile or chords an uncovered one;
        secondary toggles a flag. Out-of-bounds positions, other buttons
        and clicks on a finished game are ignored.

        Args:
            x: Column in tile units.
            y: Row in tile units.
            button: Pointer button that was released.

        Returns:
            True if the board changed, False otherwise.
        """
        if button not in (Button.PRIMARY, Button.SECONDARY):
            return False
        position = self._to_tile(x, y)
        if position is None or self.is_finished:
            return False

        self._last_interacted = position
        tile = self._tile_at(*position)
        if tile.state == TileState.COVERED:
            if button == Button.PRIMARY:
                changed = self._uncover(*position)
            else:
                changed = tile.toggle_flag()
        elif tile.state == TileState.UNCOVERED:
            changed = button == Button.PRIMARY and self._chord(*position)
        else:
            changed = button == Button.SECONDARY and tile.toggle_flag()

        if not changed:
            return False

        self.flood_fill(*position)
        self._evaluate_game_state()
        return True

    def _uncover(self, x: int, y: int) -> bool:
        """Uncover a covered tile, keeping the very first one safe."""
        tile = self._tile_at(x, y)
        if not tile.uncover():
            return False
        if self._game_state == GameState.NOT_STARTED:
            if tile.is_mine:
                self._relocate_mine(x, y)
            self._game_state = GameState.ONGOING
        return True

    def _chord(self, x: int, y: int) -> bool:
        """Uncover all covered neighbors once every adjacent mine is flagged."""
        tile = self._tile_at(x, y)
        if tile.adjacent_mines != self.count_flags(x, y):
            return False

        uncovered_any = False
        for neighbor_x, neighbor_y in self.neighbors(x, y):
            if self._tile_at(neighbor_x, neighbor_y).uncover():
                uncovered_any = True
                self.flood_fill(neighbor_x, neighbor_y)
        return uncovered_any

    def flood_fill(self, x: float, y: float) -> None:
        """
        Uncover the zero region around an uncovered zero tile.

        Breadth-first: every covered neighbor of a frontier tile is
        uncovered, and neighbors with no adjacent mines join the frontier.
        Flagged tiles are left alone.
        """
        position = self._to_tile(x, y)
        if position is None:
            return
        tile = self._tile_at(*position)
        if not tile.is_uncovered or tile.is_mine or tile.adjacent_mines != 0:
            return

        frontier: Deque[Coordinate] = deque([position])
        while frontier:
            tile_x, tile_y = frontier.popleft()
            for neighbor_x, neighbor_y in self.neighbors(tile_x, tile_y):
                neighbor = self._tile_at(neighbor_x, neighbor_y)
                if neighbor.uncover() and neighbor.adjacent_mines == 0:
                    frontier.append((neighbor_x, neighbor_y))

    def _evaluate_game_state(self) -> None:
        """Check lose, then win. Only an ongoing game can end."""
        if self._game_state != GameState.ONGOING:
            return
        if self._check_lose_condition():
            logger.debug("Mine uncovered at %s, game lost", self._last_interacted)
            self._game_state = GameState.LOST
        elif self._check_win_condition():
            logger.debug("All safe tiles uncovered, game won")
            self._game_state = GameState.WON

    def _check_lose_condition(self) -> bool:
        """Check if any mine has been uncovered."""
        return any(tile.is_mine and tile.is_uncovered for tile in self._tiles)

    def _check_win_condition(self) -> bool:
        """Check if only mines remain covered or flagged."""
        remaining = sum(1 for tile in self._tiles if not tile.is_uncovered)
        return remaining == self.config.num_mines

    # ========================================================================
    # Interaction Preview
    # ========================================================================

    def telegraph(self, x: float, y: float) -> None:
        """
        Preview which tiles a primary click at (x, y) would open.

        A covered tile previews itself, an uncovered tile previews its
        covered neighbors (a chord), a flagged tile previews nothing.
        """
        position = self._to_tile(x, y)
        if position is None or self.is_finished:
            return

        self._telegraphed = set()
        tile = self._tile_at(*position)
        if tile.is_covered:
            self._telegraphed.add(position)
        elif tile.is_uncovered:
            for neighbor in self.neighbors(*position):
                if self._tile_at(*neighbor).is_covered:
                    self._telegraphed.add(neighbor)

    def clear_telegraph(self) -> None:
        """Drop the current preview."""
        self._telegraphed = set()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if the game still accepts moves."""
        return self._game_state in (GameState.NOT_STARTED, GameState.ONGOING)

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def is_finished(self) -> bool:
        """Check if game reached a terminal state."""
        return self._game_state in (GameState.WON, GameState.LOST)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.config.width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.config.height

    @property
    def dimensions(self) -> Tuple[int, int]:
        """Board size as (width, height) in tiles."""
        return self.config.width, self.config.height

    @property
    def num_tiles(self) -> int:
        """Total number of tiles on the board."""
        return self.config.num_tiles

    @property
    def num_mines(self) -> int:
        """Number of mines after clamping."""
        return self.config.num_mines

    @property
    def last_interacted(self) -> Optional[Coordinate]:
        """Tile of the most recent interaction, if any."""
        return self._last_interacted

    @property
    def telegraphed(self) -> FrozenSet[Coordinate]:
        """Tiles currently previewed."""
        return frozenset(self._telegraphed)

    @property
    def flag_count(self) -> int:
        """Number of flagged tiles."""
        return sum(1 for tile in self._tiles if tile.is_flagged)

    @property
    def mines_remaining(self) -> int:
        """Mine count minus placed flags. Negative when over-flagged."""
        return self.config.num_mines - self.flag_count

    @property
    def uncovered_count(self) -> int:
        """Number of uncovered tiles."""
        return sum(1 for tile in self._tiles if tile.is_uncovered)

    def tile_state(self, x: float, y: float) -> Optional[TileState]:
        """Get tile state at position, or None if invalid."""
        position = self._to_tile(x, y)
        if position is None:
            return None
        return self._tile_at(*position).state

    def adjacent_mines(self, x: float, y: float) -> Optional[int]:
        """Get adjacent mine count at position, or None if invalid."""
        position = self._to_tile(x, y)
        if position is None:
            return None
        return self._tile_at(*position).adjacent_mines

    def get_tile(self, x: float, y: float) -> Optional[Tile]:
        """
        Get a copy of the tile at position, or None if invalid.

        Mine membership is only reported for uncovered tiles, for any
        tile once the game is over, or when the board runs in debug mode.
        """
        position = self._to_tile(x, y)
        if position is None:
            return None
        tile = self._tile_at(*position)
        visible = tile.is_uncovered or self.is_finished or self.debug
        return dataclasses.replace(tile, is_mine=tile.is_mine and visible)

    def has_mine(self, x: float, y: float) -> bool:
        """Debug probe: report a hidden mine. Always False outside debug."""
        if not self.debug:
            return False
        position = self._to_tile(x, y)
        if position is None:
            return False
        return self._tile_at(*position).is_mine

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array indexed ``[y, x]``.

        Returns:
            2D numpy array where:
                -1 = covered
                -2 = flagged
                0-8 = uncovered with adjacent count
                9 = uncovered mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for index, tile in enumerate(self._tiles):
            x, y = self._deflatten(index)
            obs[y, x] = tile.to_observation()
        return obs

    def get_valid_actions(self) -> List[Coordinate]:
        """
        Get list of tiles that can still be uncovered.

        Returns:
            List of (x, y) positions of covered tiles.
        """
        return [
            self._deflatten(index)
            for index, tile in enumerate(self._tiles)
            if tile.is_covered
        ]
