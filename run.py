"""CLI entrypoint: generate puzzle(s), export or print them, optionally play one."""

import argparse
import os
import random
from pathlib import Path
from typing import Callable

from engine import generate_puzzle
from src.sudoku.dataset import write_puzzles
from src.sudoku.model import Difficulty, Grid
from src.sudoku.session import GameSession, GameState
from src.utils.trace import Tracer, get_tracer, reset_tracer

HELP_TEXT = "Commands: 'r c d' enter digit d at row r, col c (1-9) | 'x r c' clear | 'n' new | 'd' difficulty | 'q' quit"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate Sudoku puzzles with a unique solution")
    parser.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in Difficulty],
        default="medium",
        help="Clue band to generate",
    )
    parser.add_argument("--count", type=int, default=1, help="Number of puzzles to generate")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    parser.add_argument("--output", type=Path, default=None, help="Optional .parquet/.csv/.jsonl/.json batch file")
    parser.add_argument(
        "--trace",
        type=Path,
        default=os.environ.get("SUDOKU_TRACE_PATH") or None,
        help="Optional path to write the generation trace CSV (env: SUDOKU_TRACE_PATH).",
    )
    parser.add_argument(
        "--verify-all",
        action="store_true",
        help="Verify uniqueness for every removal (slower at hard/expert).",
    )
    parser.add_argument("--play", action="store_true", help="Play one puzzle in the terminal")
    return parser.parse_args(argv)


def format_grid(grid: Grid) -> str:
    lines = []
    for r, row in enumerate(grid):
        cells = []
        for c, value in enumerate(row):
            text = "." if value == 0 else str(value)
            cells.append(text)
            if c in (2, 5):
                cells.append("|")
        lines.append(" ".join(cells))
        if r in (2, 5):
            lines.append("------+-------+------")
    return "\n".join(lines)


def format_status(session: GameSession) -> str:
    session.update_time()
    status = f"{session.difficulty} | {session.time_string()} | {session.lives_display()}"
    if session.state is GameState.SOLVED:
        status += " | Solved!"
    elif session.state is GameState.GAME_OVER:
        status += " | Game over"
    return status


def handle_command(session: GameSession, line: str) -> bool:
    """Apply one play-loop command. Returns False when the player quits."""
    parts = line.split()
    if not parts:
        return True
    command = parts[0].lower()

    if command == "q":
        return False
    if command == "n":
        session.reset()
        return True
    if command == "d":
        print(f"Difficulty for next game: {session.switch_difficulty()}")
        return True

    try:
        if command == "x" and len(parts) == 3:
            row, col = int(parts[1]) - 1, int(parts[2]) - 1
            if not session.clear(row, col):
                print("Cannot clear that cell")
        elif len(parts) == 3:
            row, col, digit = (int(p) for p in parts)
            if not session.enter_digit(row - 1, col - 1, digit):
                print("Cannot change that cell")
        else:
            print(HELP_TEXT)
    except ValueError as e:
        print(f"Invalid move: {e}")
    return True


def play(session: GameSession, read_line: Callable[[str], str] = input) -> GameSession:
    print(HELP_TEXT)
    while True:
        print(format_grid(session.puzzle.play_grid))
        print(format_status(session))
        try:
            line = read_line("> ")
        except EOFError:
            break
        if not handle_command(session, line):
            break
    return session


def main(argv=None):
    args = parse_args(argv)
    reset_tracer()
    tracer = get_tracer()

    if args.play:
        rng = random.Random(args.seed)
        session = GameSession(
            Difficulty.parse(args.difficulty),
            rng=rng,
            tracer=Tracer(enabled=False),
            verify_all=args.verify_all,
        )
        play(session)
        return

    puzzles = []
    for i in range(args.count):
        seed = None if args.seed is None else args.seed + i
        try:
            puzzles.append(generate_puzzle(args.difficulty, seed=seed, verify_all=args.verify_all))
        except Exception as e:
            print(f"ERROR: Failed to generate puzzle {i}: {e}")

    if args.output:
        path = write_puzzles(puzzles, str(args.output))
        print(f"Wrote {len(puzzles)} puzzles to {path}")
    else:
        for i, puzzle in enumerate(puzzles):
            print(f"# Puzzle {i + 1} ({puzzle.difficulty}, {puzzle.clues} clues)")
            print(format_grid(puzzle.play_grid))
            print()

    summary = tracer.summary()
    print(
        f"Counter runs: {summary['num_counts']}, "
        f"removals accepted: {summary['num_removals_accepted']}, "
        f"rejected: {summary['num_removals_rejected']}"
    )
    if args.trace:
        tracer.to_csv(args.trace)


if __name__ == "__main__":
    main()
