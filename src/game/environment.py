"""
Gymnasium environment wrapper for Minesweeper.

Exposes a game session through the standard RL interface so automated
players can drive it.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .minefield import BoardConfig
from .render import render_ansi, render_status
from .session import Game, GamePhase


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array indexed [y, x] where:
        - -1 = hidden cell
        - -2 = flagged cell
        - -3 = wrongly flagged cell (after a loss)
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * size * size.
        Action a < size * size clicks cell (a % size, a // size).
        Action a >= size * size toggles the flag on cell a - size * size.

    Rewards:
        - +1 for a click that opens cells
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for placing or removing a flag
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 16x16, 25% mines).
            render_mode: How to render the environment.
            max_steps: Steps before the episode is truncated
                (default: four per cell).
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.game = Game(self.config)
        self.render_mode = render_mode

        cells = self.config.total_cells
        self.max_steps = max_steps if max_steps is not None else 4 * cells

        self.observation_space = spaces.Box(
            low=-3,
            high=9,
            shape=(self.config.size, self.config.size),
            dtype=np.int8,
        )

        # One click and one flag action per cell
        self.action_space = spaces.Discrete(2 * cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        # Mine layouts follow the environment's seeded generator
        self.game.rng = random.Random(int(self.np_random.integers(2**31)))
        self.game.restart()
        self._steps = 0

        return self.game.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Click or flag action index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        is_flag, x, y = self.decode_action(action)
        self._steps += 1

        reward = self._apply_action(is_flag, x, y)

        observation = self.game.get_observation()
        terminated = self.game.is_game_over
        truncated = not terminated and self._steps >= self.max_steps

        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, x, y)."""
        cells = self.config.total_cells
        is_flag = action >= cells
        index = int(action) % cells
        return is_flag, index % self.config.size, index // self.config.size

    def _apply_action(self, is_flag: bool, x: int, y: int) -> float:
        """
        Apply an action and compute its reward.

        Args:
            is_flag: Toggle a flag instead of clicking.
            x: Column index.
            y: Row index.

        Returns:
            Reward value.
        """
        if is_flag:
            changed = self.game.toggle_flag(x, y)
        else:
            changed = self.game.handle_click(x, y)

        if self.game.has_won:
            return 10.0
        if self.game.minefield.is_lost:
            return -10.0
        if not changed:
            return -0.1
        return 0.0 if is_flag else 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        minefield = self.game.minefield
        revealed = sum(1 for _, _, cell in minefield.cells() if cell.is_revealed)

        return {
            "steps": self._steps,
            "revealed": revealed,
            "remaining_flags": self.game.remaining_flag_count,
            "total_safe": self.config.total_cells - self.config.num_mines,
            "game_state": self.game.game_state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board and status line as a string."""
        return "\n".join([
            render_ansi(self.game.minefield),
            render_status(self.game.remaining_flag_count, self.game.game_state),
        ])

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Hidden cells can be clicked. Once mines are placed, hidden cells
        can be flagged while flags remain and flagged cells unflagged.

        Returns:
            Boolean array where True = valid action.
        """
        cells = self.config.total_cells
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.game.is_game_over:
            return mask

        flat_obs = self.game.get_observation().flatten()
        hidden = flat_obs == -1
        mask[:cells] = hidden

        if self.game.phase == GamePhase.ACTIVE:
            flaggable = flat_obs == -2
            if self.game.remaining_flag_count > 0:
                flaggable = flaggable | hidden
            mask[cells:] = flaggable
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel rollouts.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
