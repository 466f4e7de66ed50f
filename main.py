#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--size N] [--mines M] [--seed S]
    python main.py evaluate [--agent {random,logic}] [--games N]
    python main.py compare [--games N]
"""
import argparse
import logging
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from game import BoardConfig, Game, DEFAULT_SIZE, DEFAULT_DENSITY
from game.console import run_console
from agents import RandomAgent, LogicAgent, Evaluator


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Board configuration from --size and --mines."""
    if args.mines is None:
        return BoardConfig.from_density(args.size, DEFAULT_DENSITY)
    return BoardConfig(args.size, args.mines)


def play(args: argparse.Namespace) -> None:
    """Play interactively in the terminal."""
    config = build_config(args)
    game = Game(config, rng=random.Random(args.seed))
    print(f"Board: {config.size}x{config.size} with {config.num_mines} mines")
    run_console(game)


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a single agent."""
    config = build_config(args)

    if args.agent == "random":
        agent = RandomAgent(config.size, config.num_mines, seed=args.seed)
        name = "Random"
    else:
        agent = LogicAgent(config.size, config.num_mines)
        name = "Logic"

    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)

    print(f"\nEvaluating {name} over {args.games} games...")
    results = evaluator.evaluate(agent)

    print(f"Results for {name}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


def compare(args: argparse.Namespace) -> None:
    """Compare all agents."""
    config = build_config(args)

    agents = {
        "Random": RandomAgent(config.size, config.num_mines, seed=args.seed),
        "Logic": LogicAgent(config.size, config.num_mines),
    }

    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)
    results = evaluator.compare(agents)

    print("\n" + "=" * 50)
    print("Agent Comparison Results")
    print("=" * 50)
    print(f"{'Agent':<20} {'Win Rate':<12} {'Avg Reward':<12} {'Avg Steps':<10}")
    print("-" * 50)

    for name, metrics in results.items():
        print(
            f"{name:<20} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_reward']:>10.2f} "
            f"{metrics['avg_steps']:>10.1f}"
        )


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every command."""
    parser.add_argument(
        "--size", type=int, default=DEFAULT_SIZE, help="Board size (NxN)"
    )
    parser.add_argument(
        "--mines",
        type=int,
        default=None,
        help=(
            "Number of mines (default: 25%% of cells). Very high densities "
            "may never finish generating a board"
        ),
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine layouts"
    )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - Play Minesweeper and evaluate agents"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate an agent")
    add_board_arguments(eval_parser)
    eval_parser.add_argument(
        "--agent",
        choices=["random", "logic"],
        default="logic",
        help="Agent to evaluate",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    compare_parser = subparsers.add_parser("compare", help="Compare all agents")
    add_board_arguments(compare_parser)
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per agent"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "evaluate":
            evaluate(args)
        elif args.command == "compare":
            compare(args)
        else:
            parser.print_help()
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
