"""
Text rendering of a minefield.

Read-only projection of the grid for terminals and the ansi render
mode of the environment.
"""
from typing import List

from .minefield import GameState, Minefield

HIDDEN_SYMBOL = "."
FLAG_SYMBOL = "F"
WRONG_FLAG_SYMBOL = "X"
MINE_SYMBOL = "*"
EMPTY_SYMBOL = " "


def cell_symbol(value: int) -> str:
    """Map an observation value to a single character."""
    if value == -1:
        return HIDDEN_SYMBOL
    if value == -2:
        return FLAG_SYMBOL
    if value == -3:
        return WRONG_FLAG_SYMBOL
    if value == 9:
        return MINE_SYMBOL
    if value == 0:
        return EMPTY_SYMBOL
    return str(value)


def render_ansi(minefield: Minefield, show_coordinates: bool = False) -> str:
    """
    Render board as ASCII string.

    Args:
        minefield: Field to draw.
        show_coordinates: Prefix rows and columns with their indices.

    Returns:
        One line per row, cells separated by spaces.
    """
    obs = minefield.get_observation()
    width = len(str(minefield.size - 1))
    lines: List[str] = []

    if show_coordinates:
        header = " ".join(str(x).rjust(width) for x in range(minefield.size))
        lines.append(" " * (width + 1) + header)

    for y in range(minefield.size):
        row_str = " ".join(
            cell_symbol(int(value)).rjust(width) for value in obs[y]
        )
        if show_coordinates:
            row_str = str(y).rjust(width) + " " + row_str
        lines.append(row_str)

    return "\n".join(lines)


def render_status(remaining_flags: int, game_state: GameState) -> str:
    """One-line summary shown under the board."""
    if game_state == GameState.WON:
        outcome = "You won!"
    elif game_state == GameState.LOST:
        outcome = "Boom. Game over."
    else:
        outcome = "Playing"
    return f"Flags left: {remaining_flags} | {outcome}"
