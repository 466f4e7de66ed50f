#!/usr/bin/env python3
"""Watch the logic agent clear boards in the terminal."""
import argparse
import os
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from game import MinesweeperEnv, BoardConfig, DEFAULT_SIZE, DEFAULT_DENSITY
from agents import LogicAgent, play_episode


def clear_screen() -> None:
    os.system('cls' if os.name == 'nt' else 'clear')


def describe_move(env: MinesweeperEnv, action: int) -> str:
    is_flag, x, y = env.decode_action(action)
    return f"{'flag' if is_flag else 'click'} ({x}, {y})"


def watch_game(
    env: MinesweeperEnv, agent: LogicAgent, title: str, delay: float
) -> str:
    """Animate one game and return the name of its final state."""
    state = "PLAYING"
    for move, step in enumerate(play_episode(env, agent), start=1):
        clear_screen()
        print(f"{title} | move {move}: {describe_move(env, step.action)}")
        # The rendered status line already announces a win or a loss.
        print(env.render())
        state = step.info["game_state"]
        time.sleep(delay)

    if state == "PLAYING":
        print("Out of moves.")
    return state


def demo(delay: float, games: int, config: BoardConfig) -> None:
    """Play a series of games and tally the wins."""
    env = MinesweeperEnv(config=config, render_mode="ansi")
    agent = LogicAgent(config.size, config.num_mines)

    density = config.num_mines / config.total_cells
    print(
        f"Board: {config.size}x{config.size}, {config.num_mines} mines "
        f"({density:.0%})"
    )
    time.sleep(2)

    wins = 0
    for game in range(1, games + 1):
        title = f"Game {game}/{games}, {wins} won"
        if watch_game(env, agent, title, delay) == "WON":
            wins += 1
        time.sleep(1.0)

    print(f"\nWon {wins} of {games} games ({wins / games:.0%})")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Watch the logic agent play")
    parser.add_argument("--delay", type=float, default=0.3, help="Seconds between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="Board size (NxN)")
    parser.add_argument(
        "--mines",
        type=int,
        default=None,
        help=(
            "Number of mines (default: 25%% of cells). Very high densities "
            "may never finish generating a board"
        ),
    )
    args = parser.parse_args()

    if args.mines is None:
        board = BoardConfig.from_density(args.size, DEFAULT_DENSITY)
    else:
        board = BoardConfig(args.size, args.mines)

    demo(args.delay, args.games, board)
