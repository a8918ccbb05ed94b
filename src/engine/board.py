"""
Board module for the terminal Minesweeper engine.

Implements the game board with deferred mine placement, cell revealing,
flagging, chording and game status management.

Positions are ``(x, y)`` tuples where ``x`` is the column and ``y`` the
row. Mines are only laid on the first reveal so the first move is always
safe.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState, CellView
from .errors import GameOverError, InvalidConfigError, OutOfBoundsError

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
    """

    width: int = 22
    height: int = 12
    mine_count: int = 41

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfigError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise InvalidConfigError("Number of mines cannot be negative")
        if self.mine_count > self.max_mines:
            raise InvalidConfigError(
                f"Too many mines (max {self.max_mines}): "
                "at least one tile must be safe"
            )

    @property
    def max_mines(self) -> int:
        """Largest mine count that still leaves one safe cell."""
        return self.width * self.height - 1

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.width * self.height - self.mine_count


# Preset difficulty levels
BEGINNER = BoardConfig(22, 4, 11)
INTERMEDIATE = BoardConfig(22, 12, 41)
EXPERT = BoardConfig(22, 22, 100)

DIFFICULTIES: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}

# Mine density per difficulty, used to size the mine count to any board
DENSITIES: Dict[str, float] = {
    "beginner": 0.1235,
    "intermediate": 0.1563,
    "expert": 0.2062,
}


def mines_for_density(width: int, height: int, difficulty: str) -> int:
    """
    Mine count for a board of the given size at a difficulty's density.

    Args:
        width: Number of columns.
        height: Number of rows.
        difficulty: One of the DENSITIES keys (case-insensitive).

    Returns:
        Mine count, capped so at least one cell stays safe.
    """
    try:
        ratio = DENSITIES[difficulty.lower()]
    except KeyError:
        raise InvalidConfigError(f"Unknown difficulty: {difficulty}") from None
    total = width * height
    return max(0, min(int(total * ratio), total - 1))


@dataclass(frozen=True)
class RevealResult:
    """
    Outcome of a reveal or chord.

    Attributes:
        revealed: Positions revealed by the call, in traversal order.
        status: Game status after the call.
    """

    revealed: Tuple[Position, ...] = ()
    status: GameStatus = GameStatus.IN_PROGRESS

    def __bool__(self) -> bool:
        return bool(self.revealed)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions. Moves on a finished game raise
    GameOverError; positions off the grid raise OutOfBoundsError.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    seed: Optional[int] = None
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _status: GameStatus = GameStatus.IN_PROGRESS
    _mines_placed: bool = False
    _revealed_count: int = 0
    _flagged_count: int = 0
    _detonated: Optional[Position] = None
    _rng: np.random.Generator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._rng = np.random.default_rng(self.seed)
        self._init_grid()

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        mine_count: int,
        seed: Optional[int] = None,
    ) -> "Board":
        """Build a board from raw dimensions, validating them first."""
        return cls(BoardConfig(width, height, mine_count), seed=seed)

    @classmethod
    def from_layout(
        cls, width: int, height: int, mines: Iterable[Position]
    ) -> "Board":
        """
        Build a board with mines already laid at fixed positions.

        The first reveal is not protected on such a board, which makes
        it useful for scripted scenarios and tests.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: (x, y) positions of every mine.

        Returns:
            Board whose mine count equals the number of positions.
        """
        positions = list(mines)
        if len(set(positions)) != len(positions):
            raise InvalidConfigError("Duplicate mine positions in layout")
        board = cls(BoardConfig(width, height, len(positions)))
        for x, y in positions:
            if not board.in_bounds(x, y):
                raise InvalidConfigError(
                    f"Mine position ({x}, {y}) is outside the board"
                )
        board._lay_mines(positions)
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def place_mines(self, excluding: Position) -> None:
        """
        Place mines randomly, keeping one cell mine-free.

        Only the excluded cell itself is protected; its neighbours may
        hold mines. Calling this again once mines are laid does nothing.

        Args:
            excluding: (x, y) position to keep mine-free.
        """
        if self._mines_placed:
            return
        self._require_in_bounds(*excluding)

        positions = self._get_valid_mine_positions(excluding)
        picks: Iterable[int] = ()
        if self.config.mine_count:
            picks = self._rng.choice(
                len(positions), size=self.config.mine_count, replace=False
            )
        self._lay_mines(positions[int(index)] for index in picks)

    def _get_valid_mine_positions(self, exclude: Position) -> List[Position]:
        """Get all valid positions for mine placement."""
        positions = []
        for y in range(self.config.height):
            for x in range(self.config.width):
                if (x, y) != exclude:
                    positions.append((x, y))
        return positions

    def _lay_mines(self, positions: Iterable[Position]) -> None:
        """Mark mines, compute adjacency and close the placement guard."""
        for x, y in positions:
            self._grid[y][x].is_mine = True
        self._mines_placed = True
        self._calculate_adjacent_mines()
        logger.debug(
            "Placed %d mines on %dx%d board",
            self.config.mine_count, self.config.width, self.config.height,
        )

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for y in range(self.config.height):
            for x in range(self.config.width):
                self._grid[y][x].adjacent_mines = self._count_adjacent_mines(
                    x, y
                )

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_x, neighbor_y in self.neighbors(x, y):
            if self._grid[neighbor_y][neighbor_x].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            x: Column index of center cell.
            y: Row index of center cell.

        Returns:
            List of (x, y) tuples for the up to 8 neighbours.
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

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    def _require_in_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.config.width, self.config.height)

    def _check_move(self, x: int, y: int) -> None:
        """Reject moves off the grid or on a finished game."""
        self._require_in_bounds(x, y)
        if self._status != GameStatus.IN_PROGRESS:
            raise GameOverError(self._status)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> RevealResult:
        """
        Reveal a cell at the given position.

        On the first reveal, places mines avoiding this cell. If the cell
        is empty (0 adjacent mines), flood fills its connected region.
        If the cell is a mine, the game is lost. Flagged and already
        revealed cells are left alone.

        Args:
            x: Column index to reveal.
            y: Row index to reveal.

        Returns:
            RevealResult listing the newly revealed positions.

        Raises:
            OutOfBoundsError: Position is not on the board.
            GameOverError: The game has already been won or lost.
        """
        self._check_move(x, y)
        if not self._grid[y][x].is_hidden:
            return RevealResult((), self._status)

        if not self._mines_placed:
            self.place_mines((x, y))

        revealed = self._reveal_cell(x, y)
        self._update_status()
        return RevealResult(tuple(revealed), self._status)

    def _reveal_cell(self, x: int, y: int) -> List[Position]:
        """Reveal a single hidden cell and handle consequences."""
        cell = self._grid[y][x]
        cell.reveal()
        self._revealed_count += 1

        if cell.is_mine:
            self._detonated = (x, y)
            return [(x, y)]

        revealed = [(x, y)]
        if cell.adjacent_mines == 0:
            revealed.extend(self._flood_fill(x, y))
        return revealed

    def _flood_fill(self, x: int, y: int) -> List[Position]:
        """
        Reveal the zero region connected to (x, y) and its border.

        Breadth-first over the 8-neighbourhood. Only zero cells expand;
        flagged and revealed cells are skipped, so flags block the fill.
        """
        queue = deque([(x, y)])
        revealed = []
        while queue:
            current_x, current_y = queue.popleft()
            for neighbor_x, neighbor_y in self.neighbors(current_x, current_y):
                neighbor = self._grid[neighbor_y][neighbor_x]
                if not neighbor.reveal():
                    continue
                self._revealed_count += 1
                revealed.append((neighbor_x, neighbor_y))
                if neighbor.adjacent_mines == 0:
                    queue.append((neighbor_x, neighbor_y))

        logger.debug("Flood fill from (%d, %d) revealed %d cells", x, y,
                     len(revealed))
        return revealed

    def _update_status(self) -> None:
        """Recompute the game status from the board contents."""
        if self._detonated is not None:
            status = GameStatus.LOST
        elif self._revealed_count == self.config.safe_cells:
            status = GameStatus.WON
        else:
            status = GameStatus.IN_PROGRESS

        if status != self._status:
            logger.info("Game %s after %d reveals", status.name.lower(),
                        self._revealed_count)
        self._status = status

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        Flags are markers only; any number of cells may be flagged.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            True if flag was toggled, False if the cell is revealed.

        Raises:
            OutOfBoundsError: Position is not on the board.
            GameOverError: The game has already been won or lost.
        """
        self._check_move(x, y)
        cell = self._grid[y][x]
        if not cell.toggle_flag():
            return False
        self._flagged_count += 1 if cell.is_flagged else -1
        return True

    def chord(self, x: int, y: int) -> RevealResult:
        """
        Chord action: reveal all unflagged neighbors if flag count matches.

        Each neighbour is revealed as by reveal(), flood fill included.
        Hitting a mine ends the game and stops the chord.

        Args:
            x: Column index of a revealed number.
            y: Row index of a revealed number.

        Returns:
            RevealResult listing the newly revealed positions.
        """
        self._check_move(x, y)
        if not self._can_chord(x, y):
            return RevealResult((), self._status)

        revealed: List[Position] = []
        for neighbor_x, neighbor_y in self.neighbors(x, y):
            if self._detonated is not None:
                break
            if self._grid[neighbor_y][neighbor_x].is_hidden:
                revealed.extend(self._reveal_cell(neighbor_x, neighbor_y))

        self._update_status()
        return RevealResult(tuple(revealed), self._status)

    def _can_chord(self, x: int, y: int) -> bool:
        """Check if chord action is valid."""
        cell = self._grid[y][x]
        if not cell.is_revealed or cell.adjacent_mines == 0:
            return False
        return self._count_adjacent_flags(x, y) == cell.adjacent_mines

    def _count_adjacent_flags(self, x: int, y: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_x, neighbor_y in self.neighbors(x, y):
            if self._grid[neighbor_y][neighbor_x].is_flagged:
                count += 1
        return count

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mine_count(self) -> int:
        return self.config.mine_count

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._status == GameStatus.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.LOST

    @property
    def is_over(self) -> bool:
        """Check if game reached a terminal status."""
        return self._status != GameStatus.IN_PROGRESS

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def revealed_count(self) -> int:
        return self._revealed_count

    @property
    def flagged_count(self) -> int:
        return self._flagged_count

    @property
    def remaining_mines(self) -> int:
        """Mines minus flags; negative when over-flagged."""
        return self.config.mine_count - self._flagged_count

    @property
    def detonated(self) -> Optional[Position]:
        """Position of the revealed mine that lost the game, if any."""
        return self._detonated

    def _cell(self, x: int, y: int) -> Cell:
        self._require_in_bounds(x, y)
        return self._grid[y][x]

    def cell_view(self, x: int, y: int) -> CellView:
        """
        Get the display state of a cell.

        Raises:
            OutOfBoundsError: Position is not on the board.
        """
        return CellView.of(self._cell(x, y), self.is_over)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array of display codes.

        Returns:
            2D int8 array of shape (height, width) indexed [y, x] where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
                10 = unrevealed mine (game over only)
                11 = flag on a safe cell (game over only)
        """
        game_over = self.is_over
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for y in range(self.config.height):
            for x in range(self.config.width):
                obs[y, x] = self._grid[y][x].to_observation(game_over)
        return obs

    def reset(self) -> None:
        """Reset board to initial state for new game."""
        self._init_grid()
        self._status = GameStatus.IN_PROGRESS
        self._mines_placed = False
        self._revealed_count = 0
        self._flagged_count = 0
        self._detonated = None
