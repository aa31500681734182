"""Puzzle assembly and the cell-level move guards used during play."""

import random
from dataclasses import dataclass
from typing import Optional

from .generator import generate_complete_grid
from .model import SIZE, Difficulty, Grid, Mask, copy_grid, filled_count
from .reducer import cells_to_remove, remove_cells
from src.utils.trace import Tracer, get_tracer


@dataclass
class Puzzle:
    play_grid: Grid
    solution: Grid
    initial_mask: Mask
    difficulty: Difficulty = Difficulty.MEDIUM
    removed: int = 0

    @property
    def clues(self) -> int:
        return sum(1 for row in self.initial_mask for given in row if given)

    def is_solved(self) -> bool:
        return is_solved(self.play_grid, self.solution)

    def set_cell(self, row: int, col: int, digit: int) -> bool:
        return set_cell(self.play_grid, self.initial_mask, row, col, digit)

    def clear_cell(self, row: int, col: int) -> bool:
        return clear_cell(self.play_grid, self.initial_mask, row, col)

    def is_correct(self, row: int, col: int) -> bool:
        return self.play_grid[row][col] == self.solution[row][col]


def generate_puzzle(
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
    verify_all: bool = False,
) -> Puzzle:
    """Generate a complete grid, blank cells for `difficulty`, and mark the givens."""
    rng = rng or random.Random()
    tracer = tracer or get_tracer()

    solution = generate_complete_grid(rng, tracer)
    play_grid = copy_grid(solution)
    target = cells_to_remove(difficulty, rng)
    removed = remove_cells(play_grid, target, rng, tracer, verify_all=verify_all)
    initial_mask = [[value != 0 for value in row] for row in play_grid]

    tracer.log_puzzle_generated(
        difficulty=str(difficulty),
        clues=filled_count(play_grid),
        removed=removed,
        target=target,
    )
    return Puzzle(
        play_grid=play_grid,
        solution=solution,
        initial_mask=initial_mask,
        difficulty=difficulty,
        removed=removed,
    )


def is_solved(play_grid: Grid, solution: Grid) -> bool:
    for r in range(SIZE):
        for c in range(SIZE):
            if play_grid[r][c] != solution[r][c]:
                return False
    return True


def check_cell(row: int, col: int) -> None:
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise ValueError(f"Cell ({row}, {col}) is outside the 9x9 board")


def set_cell(play_grid: Grid, initial_mask: Mask, row: int, col: int, digit: int) -> bool:
    """Write `digit` into a non-given cell. Returns False, leaving the grid untouched, for givens."""
    check_cell(row, col)
    if not 1 <= digit <= SIZE:
        raise ValueError(f"Digit must be between 1 and 9, got {digit}")
    if initial_mask[row][col]:
        return False
    play_grid[row][col] = digit
    return True


def clear_cell(play_grid: Grid, initial_mask: Mask, row: int, col: int) -> bool:
    check_cell(row, col)
    if initial_mask[row][col]:
        return False
    play_grid[row][col] = 0
    return True
