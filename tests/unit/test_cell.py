"""
Unit tests for Cell and CellView.

Tests cell state management, reveal/flag behavior and display codes.
"""
import pytest
from engine import Cell, CellState, CellView


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        cell = Cell()
        assert cell.is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        cell = Cell()
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True

    def test_default_cell_has_zero_adjacent_mines(self) -> None:
        """New cell should have 0 adjacent mines by default."""
        cell = Cell()
        assert cell.adjacent_mines == 0


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed and change its state."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealed is terminal for a cell."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_revealed is True

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_changes_state_to_flagged(self, hidden_cell: Cell) -> None:
        """Flagging a hidden cell should succeed."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.FLAGGED

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Unflagging a cell should return it to hidden."""
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.is_hidden is True

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot flag a revealed cell."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_revealed is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell display codes."""

    def test_hidden_cell_observation_is_negative_one(
        self, hidden_cell: Cell
    ) -> None:
        """Hidden cell should return -1."""
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(
        self, hidden_cell: Cell
    ) -> None:
        """Flagged cell should return -2."""
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_adjacent_count(
        self, count: int
    ) -> None:
        """Revealed cell returns its adjacent mine count."""
        cell = Cell(adjacent_mines=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """Revealed mine should return 9."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9

    def test_hidden_mine_stays_hidden_while_playing(
        self, mine_cell: Cell
    ) -> None:
        """A hidden mine is indistinguishable from a hidden safe cell."""
        assert mine_cell.to_observation() == -1

    def test_hidden_mine_exposed_after_game_over(self, mine_cell: Cell) -> None:
        """Hidden mines show as 10 once the game is over."""
        assert mine_cell.to_observation(game_over=True) == 10

    def test_wrong_flag_after_game_over(self, hidden_cell: Cell) -> None:
        """Flags on safe cells show as 11 once the game is over."""
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation(game_over=True) == 11

    def test_correct_flag_after_game_over(self, mine_cell: Cell) -> None:
        """Flags on mines keep the flag code."""
        mine_cell.toggle_flag()
        assert mine_cell.to_observation(game_over=True) == -2


# ============================================================================
# Cell View Tests
# ============================================================================

class TestCellView:
    """Test the read-only display view."""

    def test_view_hides_mine_while_playing(self, mine_cell: Cell) -> None:
        """Hidden mines are not leaked during play."""
        view = CellView.of(mine_cell, game_over=False)
        assert view.is_mine is None
        assert view.adjacent_mines is None

    def test_view_shows_mine_after_game_over(self, mine_cell: Cell) -> None:
        """Mines are exposed once the game is over."""
        view = CellView.of(mine_cell, game_over=True)
        assert view.is_mine is True
        assert view.state == CellState.HIDDEN

    def test_view_of_revealed_cell(self) -> None:
        """Revealed cells expose their count and mine flag."""
        cell = Cell(adjacent_mines=3)
        cell.reveal()
        view = CellView.of(cell, game_over=False)
        assert view.adjacent_mines == 3
        assert view.is_mine is False

    def test_view_marks_misflag_only_after_game_over(
        self, hidden_cell: Cell
    ) -> None:
        """Wrong flags are only reported when the game ended."""
        hidden_cell.toggle_flag()
        assert CellView.of(hidden_cell, game_over=False).misflagged is False
        assert CellView.of(hidden_cell, game_over=True).misflagged is True
