"""
Minesweeper game module.

Provides the board engine (tiles, mine placement, reveal rules and game
state) plus the text renderer, score store, terminal shell and
Gymnasium environment that sit around it.
"""
from .tile import Button, Tile, TileState
from .board import (
    Board,
    BoardConfig,
    GameState,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
    DEFAULT_CONFIG,
)
from .render import TileAppearance, appearance_of, render_ascii
from .scores import BestScore, HighScoreStore, ScoreKey
from .environment import MinesweeperEnv

__all__ = [
    "Button",
    "Tile",
    "TileState",
    "Board",
    "BoardConfig",
    "GameState",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "DEFAULT_CONFIG",
    "TileAppearance",
    "appearance_of",
    "render_ascii",
    "BestScore",
    "HighScoreStore",
    "ScoreKey",
    "MinesweeperEnv",
]
