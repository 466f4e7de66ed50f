"""
Interactive terminal loop for Minesweeper.

Reads one command per line, translates it into a call on the game and
redraws the board. Coordinates are validated here, before dispatch.
"""
from dataclasses import dataclass
from typing import Callable

from .render import render_ansi, render_status
from .session import Game


HELP_TEXT = """Commands:
  c X Y   click (reveal a hidden cell, chord a revealed one)
  f X Y   toggle flag
  r       restart
  h       show this help
  q       quit"""

CLICK = "click"
FLAG = "flag"
RESTART = "restart"
HELP = "help"
QUIT = "quit"

_KEYWORDS = {
    "c": CLICK, "click": CLICK,
    "f": FLAG, "flag": FLAG,
    "r": RESTART, "restart": RESTART,
    "h": HELP, "help": HELP, "?": HELP,
    "q": QUIT, "quit": QUIT, "exit": QUIT,
}


@dataclass(frozen=True)
class Command:
    """A parsed line of player input."""

    kind: str
    x: int = -1
    y: int = -1


def parse_command(line: str, size: int) -> Command:
    """
    Parse a line of input.

    Args:
        line: Raw text typed by the player.
        size: Board size, used to reject out-of-range coordinates.

    Raises:
        ValueError: With a message suitable for the player.
    """
    parts = line.strip().lower().split()
    if not parts:
        raise ValueError("Empty command, type 'h' for help")

    kind = _KEYWORDS.get(parts[0])
    if kind is None:
        raise ValueError(f"Unknown command '{parts[0]}', type 'h' for help")

    if kind not in (CLICK, FLAG):
        if len(parts) != 1:
            raise ValueError(f"'{parts[0]}' takes no arguments")
        return Command(kind)

    if len(parts) != 3:
        raise ValueError(f"Usage: {parts[0]} X Y")
    try:
        x, y = int(parts[1]), int(parts[2])
    except ValueError:
        raise ValueError("Coordinates must be integers") from None
    if not (0 <= x < size and 0 <= y < size):
        raise ValueError(f"Coordinates must be between 0 and {size - 1}")
    return Command(kind, x, y)


def run_console(
    game: Game,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> Game:
    """
    Run the read-dispatch-render loop until the player quits.

    Input ends on 'q' or end of file. Moves typed after the game is
    over are refused until the player restarts.

    Returns:
        The game in its final state.
    """
    write(HELP_TEXT)
    redraw = True

    while True:
        if redraw:
            write("")
            write(render_ansi(game.minefield, show_coordinates=True))
            write(render_status(game.remaining_flag_count, game.game_state))
            if game.is_game_over:
                write("Type 'r' to play again or 'q' to quit.")
        redraw = False

        try:
            line = read_line("> ")
        except EOFError:
            break

        try:
            command = parse_command(line, game.config.size)
        except ValueError as exc:
            write(str(exc))
            continue

        if command.kind == QUIT:
            break
        if command.kind == HELP:
            write(HELP_TEXT)
        elif command.kind == RESTART:
            game.restart()
            redraw = True
        elif game.is_game_over:
            write("The game is over, type 'r' to restart.")
        elif command.kind == CLICK:
            redraw = game.handle_click(command.x, command.y)
        else:
            redraw = game.toggle_flag(command.x, command.y)
            if not redraw:
                write("Cannot flag that cell.")

    return game
