"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import BoardConfig, Cell, Game, Minefield


# ============================================================================
# Minefield Fixtures
# ============================================================================

@pytest.fixture
def empty_field() -> Minefield:
    """Create a 4x4 field with no mines for cascade testing."""
    return Minefield.new_empty(4)


@pytest.fixture
def center_mine_field() -> Minefield:
    """Create a 3x3 field with a single mine in the middle."""
    return Minefield.from_mines(3, [(1, 1)])


@pytest.fixture
def corner_mine_field() -> Minefield:
    """Create a 5x5 field with a single mine in the bottom-right corner."""
    return Minefield.from_mines(5, [(4, 4)])


@pytest.fixture
def three_mine_field() -> Minefield:
    """Create a 4x4 field with three scattered mines."""
    return Minefield.from_mines(4, [(0, 0), (3, 3), (1, 2)])


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible generation."""
    return random.Random(1234)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def small_config() -> BoardConfig:
    """A 9x9 board with 10 mines."""
    return BoardConfig(9, 10)


@pytest.fixture
def small_game(small_config: BoardConfig) -> Game:
    """A seeded 9x9 game with 10 mines."""
    return Game(small_config, rng=random.Random(42))


@pytest.fixture
def mine_free_game() -> Game:
    """A 4x4 game without mines; the first click wins it."""
    return Game(BoardConfig(4, 0), rng=random.Random(0))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)
