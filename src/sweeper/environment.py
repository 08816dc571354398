"""
Gymnasium environment wrapper for the Minesweeper board.

Lets programmatic players drive the board through the same
``interact`` calls a human front end makes.
"""
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .render import render_ascii
from .tile import Button


BUTTONS = (Button.PRIMARY, Button.SECONDARY)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array indexed [y, x] where:
        - -1 = covered tile
        - -2 = flagged tile
        - 0-8 = uncovered tile with adjacent mine count
        - 9 = uncovered mine

    Actions:
        MultiDiscrete (x, y, button) with button 0 = primary
        (uncover/chord) and 1 = secondary (flag/unflag).

    Rewards:
        - +1 for a primary click that opened tiles
        - 0 for a flag toggle
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 16x16 with 40 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.board = Board(config) if config else Board()
        self.config = self.board.config
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.MultiDiscrete(
            [self.config.width, self.config.height, len(BUTTONS)]
        )

        self._steps = 0
        self._total_safe_tiles = self.config.num_tiles - self.config.num_mines

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        The environment's seeded generator becomes the board's mine
        sampler, so equal seeds give equal layouts.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board.rng = self.np_random
        self.board.reset()
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: Any
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: (x, y, button) triple.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y, button = (int(value) for value in action)
        self._steps += 1

        reward = self._calculate_reward(x, y, BUTTONS[button])

        observation = self.board.get_observation()
        terminated = self.board.is_finished
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _calculate_reward(self, x: int, y: int, button: Button) -> float:
        """Apply the click and score its outcome."""
        if not self.board.interact(x, y, button):
            return -0.1

        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        if button == Button.SECONDARY:
            return 0.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "uncovered": self.board.uncovered_count,
            "total_safe": self._total_safe_tiles,
            "flags": self.board.flag_count,
            "game_state": self.board.game_state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_ascii(self.board)
        if self.render_mode == "human":
            print(render_ascii(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of tiles that can still be uncovered.

        Returns:
            Boolean array of size width * height, indexed x + y * width.
        """
        mask = np.zeros(self.config.num_tiles, dtype=bool)
        for x, y in self.board.get_valid_actions():
            mask[x + y * self.config.width] = True
        return mask
