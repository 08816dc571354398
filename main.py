#!/usr/bin/env python3
"""
Minesweeper - terminal entry point.

Usage:
    python main.py [WIDTH HEIGHT MINES] [--preset {beginner,intermediate,expert}]
                   [--seed N] [--debug]
"""
import sys

from src.sweeper.cli import main


if __name__ == "__main__":
    sys.exit(main())
