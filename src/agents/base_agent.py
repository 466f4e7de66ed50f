"""
Base agent interface for Minesweeper players.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minesweeper agents.

    Agents choose an action from the environment's action space: the
    first size * size actions click a cell, the next size * size
    toggle a flag on it.
    """

    def __init__(self, board_size: int, num_mines: int) -> None:
        """
        Initialize the agent.

        Args:
            board_size: Number of rows and columns in the board.
            num_mines: Mines hidden on the board.
        """
        self.board_size = board_size
        self.num_mines = num_mines
        self.total_cells = board_size * board_size

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell states indexed [y, x].
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index.
        """
        pass

    def click_action(self, x: int, y: int) -> int:
        """Action index that clicks (x, y)."""
        return y * self.board_size + x

    def flag_action(self, x: int, y: int) -> int:
        """Action index that toggles the flag on (x, y)."""
        return self.total_cells + self.click_action(x, y)

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to the (x, y) position it targets."""
        index = int(action) % self.total_cells
        return index % self.board_size, index // self.board_size

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Only clicks on hidden cells are considered; flag availability
        depends on state the observation does not carry.

        Args:
            observation: 2D array of cell states.

        Returns:
            Boolean mask where True = valid action.
        """
        mask = np.zeros(2 * self.total_cells, dtype=bool)
        mask[:self.total_cells] = observation.flatten() == -1
        return mask

    def reset(self) -> None:
        """Reset agent state for new episode."""
        pass
