"""
Minesweeper board engine.

Provides core game logic including board management, cell state and
game status.
"""
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    GameStatus,
    Position,
    RevealResult,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTIES,
    DENSITIES,
    mines_for_density,
)
from .errors import BoardError, GameOverError, InvalidConfigError, OutOfBoundsError

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "GameStatus",
    "Position",
    "RevealResult",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "DENSITIES",
    "mines_for_density",
    "BoardError",
    "GameOverError",
    "InvalidConfigError",
    "OutOfBoundsError",
]
