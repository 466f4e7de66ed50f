"""
Random agent for Minesweeper.

Serves as a baseline by clicking random hidden cells.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent that clicks hidden cells uniformly at random.

    It never flags, so it can only win a board without mines; it is a
    floor for comparing other agents by cells revealed.
    """

    def __init__(
        self,
        board_size: int = 16,
        num_mines: int = 64,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the random agent.

        Args:
            board_size: Number of rows and columns in the board.
            num_mines: Mines hidden on the board.
            seed: Random seed for reproducibility.
        """
        super().__init__(board_size, num_mines)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a random valid click.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Random click action, or any valid action if no click is left.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        click_indices = np.where(valid_actions[:self.total_cells])[0]
        if len(click_indices) > 0:
            return int(self.rng.choice(click_indices))

        valid_indices = np.where(valid_actions)[0]
        if len(valid_indices) == 0:
            # No valid actions, return any action (will be a no-op)
            return 0
        return int(self.rng.choice(valid_indices))
