"""
Unit tests for Cell class.

Tests content facets, visibility transitions and observation values.
"""
import pytest
from game import Cell, CellState


# ============================================================================
# Cell Content Tests
# ============================================================================

class TestCellContent:
    """Test cell creation and content facets."""

    def test_default_cell_is_hidden_clear_zero(self) -> None:
        """New cell should be a hidden clear cell with no adjacent mines."""
        cell = Cell()
        assert cell.is_mine is False
        assert cell.adjacent_mines == 0
        assert cell.state == CellState.HIDDEN

    def test_clear_cell_with_no_neighbors_is_empty(self) -> None:
        """Clear(0) cells are the ones that flood open."""
        assert Cell().is_empty is True
        assert Cell().is_clear is True

    def test_numbered_cell_is_not_empty(self) -> None:
        """A clear cell touching a mine is not empty."""
        cell = Cell(adjacent_mines=2)
        assert cell.is_clear is True
        assert cell.is_empty is False

    def test_mine_is_neither_clear_nor_empty(self, mine_cell: Cell) -> None:
        """A mine has no clear content."""
        assert mine_cell.is_clear is False
        assert mine_cell.is_empty is False


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
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """A flagged cell must be unflagged before it can be revealed."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_hidden_cell(self, hidden_cell: Cell) -> None:
        """Flagging a hidden cell should succeed."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.FLAGGED

    def test_toggle_twice_restores_hidden(self, hidden_cell: Cell) -> None:
        """Toggling is its own inverse."""
        hidden_cell.toggle_flag()
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.is_hidden is True

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot flag a revealed cell."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_revealed is True

    def test_wrong_flag_cannot_be_toggled(self) -> None:
        """A wrong-flag marker is final."""
        cell = Cell(state=CellState.FLAGGED_INCORRECTLY)
        assert cell.toggle_flag() is False
        assert cell.is_flagged_incorrectly is True
        assert cell.is_flagged is False


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation values."""

    def test_hidden_cell_observation(self, hidden_cell: Cell) -> None:
        """Hidden cell should return -1, whatever it holds."""
        assert hidden_cell.to_observation() == -1
        assert Cell(is_mine=True).to_observation() == -1

    def test_flagged_cell_observation(self, hidden_cell: Cell) -> None:
        """Flagged cell should return -2."""
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    def test_wrong_flag_observation(self) -> None:
        """Wrongly flagged cell should return -3."""
        cell = Cell(adjacent_mines=4, state=CellState.FLAGGED_INCORRECTLY)
        assert cell.to_observation() == -3

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_adjacent_count(
        self, count: int
    ) -> None:
        """Revealed clear cell returns its adjacent mine count."""
        cell = Cell(adjacent_mines=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """Revealed mine should return 9."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9
