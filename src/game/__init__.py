"""
Minesweeper game module.

Provides the minefield state machine, the game session that places
mines on the first click, and the glue used to present and drive it.
"""
from .cell import Cell, CellState
from .minefield import (
    BoardConfig,
    GameState,
    Minefield,
    OutOfBoundsError,
    DEFAULT_SIZE,
    DEFAULT_DENSITY,
)
from .session import Game, GamePhase
from .render import render_ansi, render_status
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellState",
    "BoardConfig",
    "GameState",
    "Minefield",
    "OutOfBoundsError",
    "DEFAULT_SIZE",
    "DEFAULT_DENSITY",
    "Game",
    "GamePhase",
    "render_ansi",
    "render_status",
    "MinesweeperEnv",
    "make_vec_env",
]
