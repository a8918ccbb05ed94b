#!/usr/bin/env python3
"""
Terminal Minesweeper - main entry point.

Usage:
    python main.py [-w WIDTH] [-H HEIGHT] [-m MINES]
    python main.py -d {beginner,intermediate,expert}
    python main.py --max-width --max-height -s expert
"""
import sys
from pathlib import Path

# Run from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from tui.cli import main


if __name__ == "__main__":
    sys.exit(main())
