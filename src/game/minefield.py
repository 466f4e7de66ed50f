"""
Minefield module for Minesweeper game.

Implements the square grid state machine: mine generation around a
safe first click, revealing, chord expansion with flood-fill, flag
bookkeeping and win/loss evaluation.
"""
import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellState

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

DEFAULT_SIZE = 16
DEFAULT_DENSITY = 0.25


class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class OutOfBoundsError(IndexError):
    """Raised when a coordinate lies outside the grid."""

    def __init__(self, x: int, y: int, size: int) -> None:
        super().__init__(f"Position ({x}, {y}) is outside the {size}x{size} grid")
        self.x = x
        self.y = y
        self.size = size


# ============================================================================
# Grid Helpers (Low-level)
# ============================================================================

def in_bounds(x: int, y: int, size: int) -> bool:
    """Check if position is within a size x size grid."""
    return 0 <= x < size and 0 <= y < size


def neighbor_positions(x: int, y: int, size: int) -> List[Position]:
    """
    Get the up-to-8 neighbors of a cell, clipped at the grid edges.

    Args:
        x: Column of center cell.
        y: Row of center cell.
        size: Side length of the grid.

    Returns:
        List of (x, y) tuples for valid neighbors.
    """
    neighbors = []
    for delta_y in (-1, 0, 1):
        for delta_x in (-1, 0, 1):
            if delta_x == 0 and delta_y == 0:
                continue
            new_x = x + delta_x
            new_y = y + delta_y
            if in_bounds(new_x, new_y, size):
                neighbors.append((new_x, new_y))
    return neighbors


def safe_zone_size(x: int, y: int, size: int) -> int:
    """Number of cells that must stay mine-free around a safe first click."""
    return 1 + len(neighbor_positions(x, y, size))


def max_mines_for_safe_click(size: int, x: int, y: int) -> int:
    """Largest mine count generation accepts for a safe click at (x, y)."""
    return max(size * size - safe_zone_size(x, y, size) - 1, 0)


def _empty_grid(size: int) -> List[List[Cell]]:
    return [[Cell() for _ in range(size)] for _ in range(size)]


def _lay_mine(grid: List[List[Cell]], x: int, y: int) -> None:
    """Place a mine and bump the counters of its clear neighbors."""
    size = len(grid)
    cell = grid[y][x]
    cell.is_mine = True
    cell.adjacent_mines = 0
    for neighbor_x, neighbor_y in neighbor_positions(x, y, size):
        neighbor = grid[neighbor_y][neighbor_x]
        if not neighbor.is_mine:
            neighbor.adjacent_mines += 1


def _sample_mine_positions(
    size: int, mine_count: int, rng: random.Random
) -> List[Position]:
    """Draw distinct uniformly random positions, redrawing duplicates."""
    seen: Set[Position] = set()
    positions = []
    while len(positions) < mine_count:
        position = (rng.randrange(size), rng.randrange(size))
        if position in seen:
            continue
        seen.add(position)
        positions.append(position)
    return positions


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a square Minesweeper board.

    Attributes:
        size: Number of rows and columns.
        num_mines: Total mines to place. Defaults to 25% of the cells.

    Validation only guarantees that a layout with a mine-free 3x3 around
    the first click exists. Mines are placed by rejection sampling, so
    very high densities close to the limit may never finish generating;
    keep num_mines well below it.
    """

    size: int = DEFAULT_SIZE
    num_mines: Optional[int] = None

    def __post_init__(self) -> None:
        """Fill in the default mine count and validate."""
        if self.num_mines is None:
            self.num_mines = int(self.size * self.size * DEFAULT_DENSITY)
        self._validate()

    def _validate(self) -> None:
        """Ensure a safe first click is possible wherever the player clicks."""
        if self.size < 1:
            raise ValueError("Board size must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        # The centre of the board has the largest safe zone.
        center = self.size // 2
        max_mines = max_mines_for_safe_click(self.size, center, center)
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @classmethod
    def from_density(
        cls, size: int = DEFAULT_SIZE, density: float = DEFAULT_DENSITY
    ) -> "BoardConfig":
        """Build a config whose mine count is a fraction of the cells."""
        if not 0.0 <= density < 1.0:
            raise ValueError("Density must be in [0, 1)")
        return cls(size, int(size * size * density))

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.size * self.size


# ============================================================================
# Minefield Class
# ============================================================================

@dataclass
class Minefield:
    """
    Minesweeper grid state machine.

    Owns the grid of cells, the flag budget and the game state. Cell
    content is fixed at construction; build instances through
    `new_empty`, `from_mines` or `generate_around_safe_cell`.
    """

    size: int
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    mine_count: int = field(init=False)
    _game_state: GameState = field(default=GameState.PLAYING, init=False)
    _remaining_flags: int = field(init=False)

    def __post_init__(self) -> None:
        """Validate the grid and derive the mine and flag counts."""
        if self.size < 1:
            raise ValueError("Board size must be positive")
        if not self._grid:
            self._grid = _empty_grid(self.size)
        elif len(self._grid) != self.size or any(
            len(row) != self.size for row in self._grid
        ):
            raise ValueError(f"Grid must be {self.size}x{self.size}")
        self.mine_count = sum(cell.is_mine for cell in self._iter_cells())
        self._remaining_flags = self.mine_count - self.count_flagged()

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def new_empty(cls, size: int) -> "Minefield":
        """Create a field with no mines and every cell hidden."""
        return cls(size)

    @classmethod
    def from_mines(cls, size: int, mines: Iterable[Position]) -> "Minefield":
        """
        Create a field with mines at fixed positions.

        Args:
            size: Side length of the grid.
            mines: (x, y) positions of the mines. Duplicates are ignored.

        Raises:
            ValueError: If size is not positive.
            OutOfBoundsError: If a mine position is outside the grid.
        """
        if size < 1:
            raise ValueError("Board size must be positive")
        grid = _empty_grid(size)
        for x, y in set(mines):
            if not in_bounds(x, y, size):
                raise OutOfBoundsError(x, y, size)
            _lay_mine(grid, x, y)
        return cls(size, grid)

    @classmethod
    def generate_around_safe_cell(
        cls,
        size: int,
        mine_count: int,
        safe_x: int,
        safe_y: int,
        rng: Optional[random.Random] = None,
    ) -> "Minefield":
        """
        Generate a random field where (safe_x, safe_y) has no mine around it.

        Mines are placed at random and the layout is thrown away until
        the safe cell and all its neighbors are mine-free.

        Args:
            size: Side length of the grid.
            mine_count: Exact number of mines to place.
            safe_x: Column of the first click.
            safe_y: Row of the first click.
            rng: Random source, a fresh one if omitted.

        Returns:
            New minefield with every cell hidden.

        Raises:
            ValueError: If size or mine_count cannot be satisfied.
            OutOfBoundsError: If the safe cell is outside the grid.
        """
        if size < 1:
            raise ValueError("Board size must be positive")
        if mine_count < 0:
            raise ValueError("Number of mines cannot be negative")
        if not in_bounds(safe_x, safe_y, size):
            raise OutOfBoundsError(safe_x, safe_y, size)
        max_mines = max_mines_for_safe_click(size, safe_x, safe_y)
        if mine_count > max_mines:
            raise ValueError(
                f"Too many mines for a safe click at ({safe_x}, {safe_y}) "
                f"(max {max_mines})"
            )
        if rng is None:
            rng = random.Random()

        attempts = 0
        while True:
            attempts += 1
            grid = _empty_grid(size)
            for x, y in _sample_mine_positions(size, mine_count, rng):
                _lay_mine(grid, x, y)
            if grid[safe_y][safe_x].is_empty:
                break
            logger.debug(
                "Attempt %d put a mine next to (%d, %d), regenerating",
                attempts, safe_x, safe_y,
            )

        logger.debug(
            "Generated %dx%d field with %d mines in %d attempt(s)",
            size, size, mine_count, attempts,
        )
        return cls(size, grid)

    # ========================================================================
    # Grid Utilities
    # ========================================================================

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within the grid."""
        return in_bounds(x, y, self.size)

    def neighbors(self, x: int, y: int) -> List[Position]:
        """Get valid neighbor positions of (x, y)."""
        self._check_position(x, y)
        return neighbor_positions(x, y, self.size)

    def _check_position(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.size)

    def _iter_cells(self) -> Iterator[Cell]:
        for row in self._grid:
            yield from row

    def _count_adjacent_flags(self, x: int, y: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_x, neighbor_y in neighbor_positions(x, y, self.size):
            if self._grid[neighbor_y][neighbor_x].is_flagged:
                count += 1
        return count

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal a single hidden cell.

        Revealing a mine loses the game and uncovers every mine. No
        neighbors are opened here; see `expand`.

        Returns:
            True if the cell was revealed, False if it was not hidden or
            the game is over.
        """
        self._check_position(x, y)
        if self._game_state != GameState.PLAYING:
            return False

        cell = self._grid[y][x]
        if not cell.reveal():
            return False

        if cell.is_mine:
            self._game_state = GameState.LOST
            logger.info("Mine hit at (%d, %d), game lost", x, y)
            self.reveal_all_mines()
        return True

    def expand(self, x: int, y: int) -> bool:
        """
        Chord action on a revealed clear cell.

        When at least as many neighbors are flagged as the cell's count,
        all hidden neighbors are revealed. Revealed neighbors with a
        count of zero are expanded in turn, which floods open connected
        empty regions. Flagged cells are never revealed.

        Returns:
            True if any cell was revealed.
        """
        self._check_position(x, y)
        if not self._can_expand(x, y):
            return False

        revealed = 0
        pending = [(x, y)]
        while pending and self._game_state == GameState.PLAYING:
            current_x, current_y = pending.pop()
            cell = self._grid[current_y][current_x]
            if self._count_adjacent_flags(current_x, current_y) < cell.adjacent_mines:
                continue
            for neighbor_x, neighbor_y in neighbor_positions(
                current_x, current_y, self.size
            ):
                neighbor = self._grid[neighbor_y][neighbor_x]
                # Hidden -> revealed is the visited guard.
                if not neighbor.is_hidden:
                    continue
                self.reveal(neighbor_x, neighbor_y)
                revealed += 1
                if self._game_state != GameState.PLAYING:
                    break
                if neighbor.is_empty:
                    pending.append((neighbor_x, neighbor_y))

        if revealed:
            logger.debug("Expanding (%d, %d) revealed %d cell(s)", x, y, revealed)
        return revealed > 0

    def _can_expand(self, x: int, y: int) -> bool:
        """Check if chord action is valid."""
        if self._game_state != GameState.PLAYING:
            return False
        cell = self._grid[y][x]
        return cell.is_revealed and cell.is_clear

    def handle_click(self, x: int, y: int) -> bool:
        """
        Primary click: reveal a hidden cell or chord a revealed one.

        A freshly revealed cell with no adjacent mines is expanded at
        once. Flagged cells ignore clicks. The win condition is checked
        afterwards.

        Returns:
            True if any cell changed.
        """
        self._check_position(x, y)
        if self._game_state != GameState.PLAYING:
            return False

        cell = self._grid[y][x]
        if cell.is_hidden:
            changed = self.reveal(x, y)
            if cell.is_empty:
                self.expand(x, y)
        elif cell.is_revealed:
            changed = self.expand(x, y)
        else:
            return False

        self.check_win()
        return changed

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        A hidden cell is flagged only while flags remain. Revealed
        cells cannot be flagged.

        Returns:
            True if flag was toggled, False otherwise.
        """
        self._check_position(x, y)
        if self._game_state != GameState.PLAYING:
            return False

        cell = self._grid[y][x]
        if cell.is_hidden and self._remaining_flags == 0:
            return False
        if not cell.toggle_flag():
            return False

        self._remaining_flags += -1 if cell.is_flagged else 1
        self.check_win()
        return True

    # ========================================================================
    # Win/Loss Evaluation
    # ========================================================================

    def check_win(self) -> bool:
        """
        Re-evaluate the win condition over the whole grid.

        The game is won when no flags remain, every flag sits on a mine
        and no cell is hidden. A lost game stays lost.

        Returns:
            True if the game is won.
        """
        if self._game_state == GameState.LOST:
            return False
        if self._game_state == GameState.WON:
            return True
        if self._remaining_flags != 0:
            return False

        for cell in self._iter_cells():
            if cell.is_hidden:
                return False
            if cell.is_flagged and not cell.is_mine:
                return False

        self._game_state = GameState.WON
        logger.info("All mines flagged, game won")
        return True

    def reveal_all_mines(self) -> None:
        """
        Uncover the board after a loss.

        Hidden mines are revealed, flags on clear cells are marked as
        wrong and flags on mines stay in place.

        Raises:
            RuntimeError: If the game has not been lost.
        """
        if self._game_state != GameState.LOST:
            raise RuntimeError("Mines can only be revealed after a loss")

        for cell in self._iter_cells():
            if cell.is_mine and cell.is_hidden:
                cell.reveal()
            elif cell.is_flagged and not cell.is_mine:
                cell.state = CellState.FLAGGED_INCORRECTLY

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def remaining_flag_count(self) -> int:
        """Flags the player may still place."""
        return self._remaining_flags

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_game_over(self) -> bool:
        """Check if game reached a terminal state."""
        return self._game_state != GameState.PLAYING

    @property
    def has_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    def get_cell(self, x: int, y: int) -> Cell:
        """Get a detached copy of the cell at (x, y)."""
        self._check_position(x, y)
        return replace(self._grid[y][x])

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Iterate over (x, y, cell copy) in row-major order."""
        for y, row in enumerate(self._grid):
            for x, cell in enumerate(row):
                yield x, y, replace(cell)

    def count_flagged(self) -> int:
        """Number of cells currently flagged."""
        return sum(cell.is_flagged for cell in self._iter_cells())

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array indexed [y, x].

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                -3 = wrongly flagged (after a loss)
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.size, self.size), dtype=np.int8)
        for y, row in enumerate(self._grid):
            for x, cell in enumerate(row):
                obs[y, x] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of hidden cells.

        Returns:
            List of (x, y) positions that can be revealed or flagged.
        """
        return [
            (x, y)
            for y, row in enumerate(self._grid)
            for x, cell in enumerate(row)
            if cell.is_hidden
        ]
