"""
Logic-based agent for Minesweeper.

Uses constraint propagation over the revealed numbers to flag cells
that must be mines and click cells that must be safe, guessing only
when nothing can be deduced.
"""
from typing import Optional, Set, Tuple, Dict, List, FrozenSet
from dataclasses import dataclass
from collections import defaultdict

import numpy as np

from .base_agent import BaseAgent

Position = Tuple[int, int]


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    A constraint representing: sum of cells in 'cells' == mine_count.

    For example, if a revealed "2" has 3 hidden neighbors and 0 flagged,
    the constraint is: cells={A, B, C}, mine_count=2
    """
    cells: FrozenSet[Position]
    mine_count: int


@dataclass
class CellInfo:
    """Information about a revealed cell for constraint analysis."""

    x: int
    y: int
    adjacent_mines: int
    hidden_neighbors: Set[Position]
    flagged_neighbors: Set[Position]

    @property
    def remaining_mines(self) -> int:
        """Mines still to be found among hidden neighbors."""
        return self.adjacent_mines - len(self.flagged_neighbors)


# ============================================================================
# Logic Agent
# ============================================================================

class LogicAgent(BaseAgent):
    """
    Agent that deduces safe cells and mines from revealed numbers.

    Strategy:
        1. Open the centre of the board on the first move
        2. Use the global flag count when it settles every hidden cell
        3. Propagate per-number constraints with subset reduction
        4. Flag proven mines, click proven safe cells
        5. Otherwise click the cell with the lowest estimated mine
           probability
    """

    def __init__(
        self,
        board_size: int = 16,
        num_mines: int = 64,
        max_iterations: int = 100,
    ) -> None:
        """
        Initialize the logic agent.

        Args:
            board_size: Number of rows and columns in the board.
            num_mines: Mines hidden on the board.
            max_iterations: Propagation rounds before giving up.
        """
        super().__init__(board_size, num_mines)
        self.max_iterations = max_iterations

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select the best action from the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Best action index based on analysis.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        hidden = self._positions_with(observation, -1)
        if not hidden:
            valid_indices = np.where(valid_actions)[0]
            return int(valid_indices[0]) if len(valid_indices) else 0

        # Nothing opened yet: the first click always lands on an empty region
        if len(hidden) == self.total_cells:
            center = self.board_size // 2
            return self.click_action(center, center)

        flagged = self._positions_with(observation, -2)
        remaining = self.num_mines - len(flagged)
        if remaining == 0:
            candidates = [self.click_action(x, y) for x, y in hidden]
        elif remaining == len(hidden):
            candidates = [self.flag_action(x, y) for x, y in hidden]
        else:
            candidates = []
        action = self._first_valid(candidates, valid_actions)
        if action is not None:
            return action

        safe_cells, mine_cells = self._solve_constraints(observation)

        action = self._first_valid(
            [self.flag_action(x, y) for x, y in sorted(mine_cells)],
            valid_actions,
        )
        if action is not None:
            return action

        action = self._first_valid(
            [self.click_action(x, y) for x, y in sorted(safe_cells)],
            valid_actions,
        )
        if action is not None:
            return action

        return self._select_by_probability(observation, hidden, mine_cells)

    @staticmethod
    def _first_valid(
        actions: List[int], valid_actions: np.ndarray
    ) -> Optional[int]:
        for action in actions:
            if valid_actions[action]:
                return action
        return None

    @staticmethod
    def _positions_with(observation: np.ndarray, value: int) -> List[Position]:
        ys, xs = np.where(observation == value)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def _build_constraints(
        self, observation: np.ndarray
    ) -> List[Constraint]:
        """
        Build constraints from revealed numbered cells.

        Each revealed number N with hidden neighbors creates a constraint:
        "exactly (N - flagged_count) of these hidden cells are mines"
        """
        constraints = []

        for y in range(self.board_size):
            for x in range(self.board_size):
                value = observation[y, x]

                # Only process revealed numbered cells (1-8)
                if value < 1 or value > 8:
                    continue

                info = self._get_cell_info(observation, x, y)

                if not info.hidden_neighbors:
                    continue
                if info.remaining_mines < 0:
                    continue
                if info.remaining_mines > len(info.hidden_neighbors):
                    continue

                constraints.append(Constraint(
                    cells=frozenset(info.hidden_neighbors),
                    mine_count=info.remaining_mines,
                ))

        return constraints

    def _solve_constraints(
        self, observation: np.ndarray
    ) -> Tuple[Set[Position], Set[Position]]:
        """
        Propagate constraints to a fixpoint.

        Returns:
            Tuple of (safe_cells, mine_cells) sets.
        """
        safe_cells: Set[Position] = set()
        mine_cells: Set[Position] = set()

        constraints = self._build_constraints(observation)

        changed = True
        iterations = 0
        while changed and iterations < self.max_iterations:
            changed = False
            iterations += 1

            new_constraints = []
            for constraint in constraints:
                remaining_cells = constraint.cells - safe_cells - mine_cells
                remaining_mines = constraint.mine_count - len(
                    constraint.cells & mine_cells
                )

                if not remaining_cells:
                    continue

                # No mines left to find
                if remaining_mines == 0:
                    safe_cells.update(remaining_cells)
                    changed = True
                    continue

                # Every remaining cell is a mine
                if remaining_mines == len(remaining_cells):
                    mine_cells.update(remaining_cells)
                    changed = True
                    continue

                new_constraints.append(Constraint(
                    cells=frozenset(remaining_cells),
                    mine_count=remaining_mines,
                ))

            constraints = new_constraints

            subset_safe, subset_mines, constraints = self._subset_reduction(
                constraints
            )
            if (subset_safe - safe_cells) or (subset_mines - mine_cells):
                safe_cells.update(subset_safe)
                mine_cells.update(subset_mines)
                changed = True

        return safe_cells, mine_cells

    def _subset_reduction(
        self, constraints: List[Constraint]
    ) -> Tuple[Set[Position], Set[Position], List[Constraint]]:
        """
        Apply subset reduction to find additional deductions.

        If constraint A's cells are a subset of constraint B's cells,
        the difference (B - A) holds (B.mines - A.mines) mines.

        Example:
            A: {X, Y} has 1 mine
            B: {X, Y, Z} has 1 mine
            -> Z must be safe
        """
        safe_cells: Set[Position] = set()
        mine_cells: Set[Position] = set()
        new_constraints: List[Constraint] = []

        for i, first in enumerate(constraints):
            for second in constraints[i + 1:]:
                if first.cells < second.cells:
                    smaller, larger = first, second
                elif second.cells < first.cells:
                    smaller, larger = second, first
                else:
                    continue

                diff_cells = larger.cells - smaller.cells
                diff_mines = larger.mine_count - smaller.mine_count

                if diff_mines == 0:
                    safe_cells.update(diff_cells)
                elif diff_mines == len(diff_cells):
                    mine_cells.update(diff_cells)
                elif 0 < diff_mines < len(diff_cells):
                    new_constraints.append(Constraint(
                        cells=frozenset(diff_cells),
                        mine_count=diff_mines,
                    ))

        # Deduplicate constraints
        seen = set()
        result_constraints = []
        for constraint in constraints + new_constraints:
            if constraint not in seen:
                seen.add(constraint)
                result_constraints.append(constraint)

        return safe_cells, mine_cells, result_constraints

    def _get_cell_info(
        self, observation: np.ndarray, x: int, y: int
    ) -> CellInfo:
        """Get analysis info for a revealed cell."""
        hidden_neighbors: Set[Position] = set()
        flagged_neighbors: Set[Position] = set()

        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if 0 <= nx < self.board_size and 0 <= ny < self.board_size:
                    value = observation[ny, nx]
                    if value == -1:
                        hidden_neighbors.add((nx, ny))
                    elif value == -2:
                        flagged_neighbors.add((nx, ny))

        return CellInfo(
            x=x,
            y=y,
            adjacent_mines=int(observation[y, x]),
            hidden_neighbors=hidden_neighbors,
            flagged_neighbors=flagged_neighbors,
        )

    def _select_by_probability(
        self,
        observation: np.ndarray,
        hidden: List[Position],
        known_mines: Set[Position],
    ) -> int:
        """
        Click the hidden cell with the lowest estimated mine probability.

        Cells not touching any number get the global mine density.
        """
        probabilities = self._estimate_mine_probabilities(observation, known_mines)
        flagged = int(np.sum(observation == -2))
        unknown = max(len(hidden) - len(known_mines), 1)
        default = (self.num_mines - flagged - len(known_mines)) / unknown

        best = None
        best_prob = 2.0
        for position in hidden:
            if position in known_mines:
                continue
            prob = probabilities.get(position, default)
            if prob < best_prob:
                best_prob = prob
                best = position

        if best is None:
            best = hidden[0]
        return self.click_action(*best)

    def _estimate_mine_probabilities(
        self,
        observation: np.ndarray,
        known_mines: Set[Position],
    ) -> Dict[Position, float]:
        """
        Estimate mine probability for each hidden cell next to a number.

        Returns:
            Dict mapping (x, y) to probability of being a mine.
        """
        probabilities: Dict[Position, List[float]] = defaultdict(list)

        for y in range(self.board_size):
            for x in range(self.board_size):
                value = observation[y, x]
                if value < 1 or value > 8:
                    continue

                info = self._get_cell_info(observation, x, y)
                if not info.hidden_neighbors:
                    continue

                unknown_neighbors = info.hidden_neighbors - known_mines
                remaining = info.remaining_mines - len(
                    info.hidden_neighbors & known_mines
                )
                if not unknown_neighbors or remaining < 0:
                    continue

                prob = remaining / len(unknown_neighbors)
                for neighbor in unknown_neighbors:
                    probabilities[neighbor].append(prob)

        # Take maximum (most conservative estimate)
        return {cell: max(probs) for cell, probs in probabilities.items()}
