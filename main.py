#!/usr/bin/env python3
"""
Board games - Console entry point.

Usage:
    python main.py minesweeper [--size N] [--mines M] [--seed S]
    python main.py tictactoe
    python main.py simulate [--games G] [--size N] [--mines M] [--seed S]
"""
import argparse
import logging
from typing import List, Optional

import numpy as np

from boardgames import (
    BoardConfig,
    MinesweeperEngine,
    MinesweeperEnv,
    TicTacToeGame,
)


def _print_minesweeper(engine: MinesweeperEngine) -> None:
    mode = "flag" if engine.is_flag_mode else "reveal"
    print(f"\n{engine.board.render()}")
    print(f"[{mode} mode, {engine.mine_count} mines]")


def play_minesweeper(args: argparse.Namespace) -> None:
    """Play Minesweeper in the terminal."""
    config = BoardConfig(size=args.size, num_mines=args.mines)
    engine = MinesweeperEngine(config, seed=args.seed)

    print("Commands: r ROW COL (click), f (toggle flag mode), n (new game), q (quit)")
    _print_minesweeper(engine)

    while True:
        try:
            line = input("> ").split()
        except EOFError:
            break
        if not line:
            continue

        command = line[0].lower()
        if command == "q":
            break
        if command == "f":
            engine.toggle_flag_mode()
        elif command == "n":
            engine.reset_game()
        elif command == "r" and len(line) == 3:
            try:
                row, col = int(line[1]), int(line[2])
            except ValueError:
                print("Row and column must be numbers")
                continue
            if not engine.board.is_valid_position(row, col):
                print(f"Row and column must be between 0 and {config.size - 1}")
                continue
            result = engine.on_cell_clicked(row, col)
            if result.message:
                print(result.message)
        else:
            print(f"Unknown command: {' '.join(line)}")
            continue

        _print_minesweeper(engine)
        if engine.is_game_over:
            print("Victory!" if engine.is_victory else "Game over!")
            print("Type n to play again or q to quit.")


def play_tictactoe(args: argparse.Namespace) -> None:
    """Play Tic-Tac-Toe in the terminal."""
    game = TicTacToeGame()
    print("Enter moves as ROW COL, n for a new game, q to quit")

    while True:
        print(f"\n{game.render()}")
        if game.is_game_over:
            print(f"{game.winner.name} wins!" if game.winner else "Draw!")
        else:
            print(f"{game.current_player.name} to move")

        try:
            line = input("> ").split()
        except EOFError:
            break
        if line == ["q"]:
            break
        if line == ["n"]:
            game.reset_game()
            continue
        try:
            row, col = (int(value) for value in line)
            game.on_cell_clicked(row, col)
        except (ValueError, IndexError):
            print("Enter two numbers between 0 and 2")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def simulate(args: argparse.Namespace) -> None:
    """Play random useful actions and report the win rate."""
    config = BoardConfig(size=args.size, num_mines=args.mines)
    env = MinesweeperEnv(config=config)
    rng = np.random.default_rng(args.seed)

    wins = 0
    total_steps = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        done = False
        info = {}

        while not done:
            valid_actions = np.flatnonzero(env.get_action_mask())
            action = int(rng.choice(valid_actions))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        total_steps += info["steps"]
        if info["game_state"] == "WON":
            wins += 1

    print(f"Results over {args.games} games on {config.size}x{config.size} with {config.num_mines} mines:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg steps: {total_steps / args.games:.1f}")


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Board games - Minesweeper and Tic-Tac-Toe"
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (e.g. DEBUG)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    mines_parser = subparsers.add_parser("minesweeper", help="Play Minesweeper")
    mines_parser.add_argument("--size", type=int, default=5, help="Board size (NxN)")
    mines_parser.add_argument("--mines", type=int, default=3, help="Number of mines")
    mines_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    subparsers.add_parser("tictactoe", help="Play Tic-Tac-Toe")

    sim_parser = subparsers.add_parser(
        "simulate", help="Play random games through the Gymnasium environment"
    )
    sim_parser.add_argument("--games", type=_positive_int, default=100, help="Number of games")
    sim_parser.add_argument("--size", type=int, default=5, help="Board size (NxN)")
    sim_parser.add_argument("--mines", type=int, default=3, help="Number of mines")
    sim_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "minesweeper":
        play_minesweeper(args)
    elif args.command == "tictactoe":
        play_tictactoe(args)
    elif args.command == "simulate":
        simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
