"""
Error types raised by the board engine.

All engine errors derive from BoardError so callers can catch the whole
family in one place. Errors are raised before any board state changes.
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .board import GameStatus


class BoardError(Exception):
    """Base class for board engine errors."""


class InvalidConfigError(BoardError, ValueError):
    """Board dimensions or mine count cannot form a playable board."""


class OutOfBoundsError(BoardError, IndexError):
    """A position outside the grid was passed to the board."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Position ({x}, {y}) is outside the {width}x{height} board"
        )
        self.x = x
        self.y = y


class GameOverError(BoardError):
    """A move was attempted after the game reached a terminal status."""

    def __init__(self, status: "GameStatus") -> None:
        super().__init__(f"Game is over ({status.name})")
        self.status = status
