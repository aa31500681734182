"""Top-level puzzle generation interface.

Expose `generate_puzzle(difficulty, seed=None)` that accepts either a
`Difficulty` member or its name (case-insensitive).
"""

import random
from typing import Optional, Union

from src.sudoku import puzzle as puzzle_core
from src.sudoku.model import Difficulty
from src.sudoku.puzzle import Puzzle


def generate_puzzle(
    difficulty: Union[str, Difficulty], seed: Optional[int] = None, verify_all: bool = False
) -> Puzzle:
    """
    Generate a puzzle and its solution.
    Accepts:
      - Difficulty members (used directly)
      - Difficulty names such as "easy" or "Expert"
    The same seed always yields the same puzzle.
    """
    level = Difficulty.parse(difficulty)
    rng = random.Random(seed)
    return puzzle_core.generate_puzzle(level, rng, verify_all=verify_all)


__all__ = ["generate_puzzle"]
