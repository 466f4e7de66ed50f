"""
Game session module.

Wraps a minefield with the lazy first-click generation: a new game
starts on an empty field and the real one is generated around the
first clicked cell.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from .minefield import BoardConfig, GameState, Minefield, OutOfBoundsError

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Whether mines have been placed yet."""

    UNINITIALIZED = auto()
    ACTIVE = auto()


@dataclass
class Game:
    """
    A single game of Minesweeper driven by player input.

    The session owns exactly one minefield at a time and replaces it
    wholesale on the first click and on restart. Input is ignored once
    the game is over.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _minefield: Minefield = field(init=False, repr=False)
    _phase: GamePhase = field(default=GamePhase.UNINITIALIZED, init=False)

    def __post_init__(self) -> None:
        self.restart()

    def restart(self) -> None:
        """Discard the current field and start over with no mines placed."""
        self._minefield = Minefield.new_empty(self.config.size)
        self._phase = GamePhase.UNINITIALIZED

    # ========================================================================
    # Player Input
    # ========================================================================

    def handle_click(self, x: int, y: int) -> bool:
        """
        Primary click at (x, y).

        The first click generates the minefield around (x, y) so the
        clicked cell opens an empty region.

        Returns:
            True if any cell changed.
        """
        if not self._minefield.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.config.size)
        if self.is_game_over:
            return False

        if self._phase == GamePhase.UNINITIALIZED:
            self._minefield = Minefield.generate_around_safe_cell(
                self.config.size, self.config.num_mines, x, y, rng=self.rng
            )
            self._phase = GamePhase.ACTIVE
            logger.debug("First click at (%d, %d), minefield generated", x, y)

        return self._minefield.handle_click(x, y)

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Secondary click at (x, y).

        Flags are refused until the first click has placed the mines.
        """
        if not self._minefield.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.config.size)
        if self._phase == GamePhase.UNINITIALIZED or self.is_game_over:
            return False
        return self._minefield.toggle_flag(x, y)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def phase(self) -> GamePhase:
        """Get current phase."""
        return self._phase

    @property
    def minefield(self) -> Minefield:
        """Current minefield, for read access only."""
        return self._minefield

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._minefield.game_state

    @property
    def remaining_flag_count(self) -> int:
        """Flags left to place; the full mine count before the first click."""
        if self._phase == GamePhase.UNINITIALIZED:
            return self.config.num_mines
        return self._minefield.remaining_flag_count

    @property
    def is_game_over(self) -> bool:
        """Check if game reached a terminal state."""
        return self._minefield.is_game_over

    @property
    def has_won(self) -> bool:
        """Check if game was won."""
        return self._minefield.has_won

    def get_observation(self) -> np.ndarray:
        """Get board state as a numpy array indexed [y, x]."""
        return self._minefield.get_observation()
