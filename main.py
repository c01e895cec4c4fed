#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--rows N] [--columns N] [--mines N] [--seed S]
    python main.py evaluate [--games N] [--mark-probability P] [--seed S]
"""
import argparse
import random

from minesweeper.board import Board, BoardConfig
from minesweeper.console import ConsoleGame, ask_mine_count
from minesweeper.errors import InvalidConfigurationError
from agents import Evaluator, Outcome, RandomAgent


def make_config(
    parser: argparse.ArgumentParser, rows: int, columns: int, mines: int
) -> BoardConfig:
    """Build a board configuration, exiting with a usage error if invalid."""
    try:
        return BoardConfig(rows=rows, columns=columns, num_mines=mines)
    except InvalidConfigurationError as exc:
        parser.error(str(exc))


def play(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Play a game in the terminal."""
    mines = args.mines if args.mines is not None else ask_mine_count()
    config = make_config(parser, args.rows, args.columns, mines)
    rng = random.Random(args.seed) if args.seed is not None else None

    game = ConsoleGame(Board(config, rng))
    try:
        game.run()
    except (EOFError, KeyboardInterrupt):
        print("\nGame abandoned.")


def evaluate(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Evaluate the random baseline agent and print results."""
    mines = args.mines if args.mines is not None else 10
    config = make_config(parser, args.rows, args.columns, mines)
    try:
        agent = RandomAgent(
            config, mark_probability=args.mark_probability, seed=args.seed
        )
    except ValueError as exc:
        parser.error(str(exc))
    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)

    print(f"\nEvaluating Random over {args.games} games...")
    stats = evaluator.evaluate(agent)

    print("Results for Random:")
    print(f"  Win rate: {stats.win_rate:.1%}")
    print(f"    by reveals: {stats.count(Outcome.WON_BY_REVEALS)}")
    print(f"    by marks: {stats.count(Outcome.WON_BY_MARKS)}")
    print(f"  Lost: {stats.count(Outcome.LOST)}")
    print(f"  Unfinished: {stats.count(Outcome.UNFINISHED)}")
    print(f"  Avg reward: {stats.avg_reward:.2f}")
    print(f"  Avg steps: {stats.avg_steps:.1f}")
    print(f"  Avg revealed: {stats.avg_revealed:.1f} cells")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the board geometry and seed options shared by all commands."""
    parser.add_argument("--rows", type=int, default=9, help="Number of rows")
    parser.add_argument(
        "--columns", type=int, default=9, help="Number of columns"
    )
    parser.add_argument("--mines", type=int, default=None, help="Number of mines")
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - Play in the terminal or evaluate agents"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    add_board_arguments(play_parser)

    # Evaluate command
    eval_parser = subparsers.add_parser(
        "evaluate", help="Evaluate the random agent"
    )
    add_board_arguments(eval_parser)
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    eval_parser.add_argument(
        "--mark-probability",
        type=float,
        default=0.0,
        help="Chance that the agent marks a mine instead of revealing",
    )

    args = parser.parse_args()

    if args.command == "play":
        play(args, play_parser)
    elif args.command == "evaluate":
        evaluate(args, eval_parser)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
