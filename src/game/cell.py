"""
Cell module for Minesweeper game.

A cell has two independent facets: its content (mine, or clear with an
adjacent mine count) which is fixed once the field is generated, and its
visibility state (hidden/revealed/flagged) which changes during play.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()
    # Only set after a loss, on flagged cells that were not mines.
    FLAGGED_INCORRECTLY = auto()


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
        state: Current visual state.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if it was not
            hidden.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is neither hidden
            nor flagged.
        """
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
            return True
        if self.state == CellState.FLAGGED:
            self.state = CellState.HIDDEN
            return True
        return False

    @property
    def is_clear(self) -> bool:
        """Check if cell holds no mine."""
        return not self.is_mine

    @property
    def is_empty(self) -> bool:
        """Check if cell is clear with no adjacent mines."""
        return not self.is_mine and self.adjacent_mines == 0

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

    @property
    def is_flagged_incorrectly(self) -> bool:
        """Check if cell was marked as a wrong flag after a loss."""
        return self.state == CellState.FLAGGED_INCORRECTLY

    def to_observation(self) -> int:
        """
        Convert cell to observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Wrongly flagged cell (after a loss)
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.state == CellState.FLAGGED_INCORRECTLY:
            return -3
        if self.is_mine:
            return 9
        return self.adjacent_mines
