"""
Cell module for the board engine.

Represents individual cells on the game board with their state
(hidden/revealed/flagged) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Display codes used by the board snapshot
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9
OBS_MINE_EXPOSED = 10
OBS_FLAG_WRONG = 11


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self, game_over: bool = False) -> int:
        """
        Convert cell to its display code.

        Mine positions are only encoded once revealed, or for every
        cell when ``game_over`` is set.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed (detonated) mine
            10: Hidden mine shown after the game ended
            11: Flag on a safe cell shown after the game ended
        """
        if self.state == CellState.HIDDEN:
            if game_over and self.is_mine:
                return OBS_MINE_EXPOSED
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            if game_over and not self.is_mine:
                return OBS_FLAG_WRONG
            return OBS_FLAGGED
        if self.is_mine:
            return OBS_MINE
        return self.adjacent_mines


# ============================================================================
# Cell View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Read-only snapshot of a cell for the presentation layer.

    ``adjacent_mines`` is only set for revealed cells and ``is_mine``
    only for revealed cells or once the game is over, so a view never
    leaks hidden mine positions during play.
    """

    state: CellState
    adjacent_mines: Optional[int] = None
    is_mine: Optional[bool] = None
    misflagged: bool = False

    @classmethod
    def of(cls, cell: Cell, game_over: bool) -> "CellView":
        """Build the view of ``cell`` for the current game phase."""
        exposed = cell.is_revealed or game_over
        return cls(
            state=cell.state,
            adjacent_mines=cell.adjacent_mines if cell.is_revealed else None,
            is_mine=cell.is_mine if exposed else None,
            misflagged=game_over and cell.is_flagged and not cell.is_mine,
        )
