"""Clue-count policy and clue removal with uniqueness checks."""

import random
from typing import Dict, Optional, Tuple

from .generator import count_solutions
from .model import SIZE, ConstraintState, Difficulty, Grid, SolutionCount, filled_count
from src.utils.trace import Tracer, get_tracer

MIN_CLUES = 17
VERIFIED_FRACTION = 0.8
ATTEMPT_FACTOR = 2

# Inclusive bounds on the number of cells blanked out of 81.
REMOVAL_RANGES: Dict[Difficulty, Tuple[int, int]] = {
    Difficulty.EASY: (40, 45),
    Difficulty.MEDIUM: (46, 52),
    Difficulty.HARD: (53, 58),
    Difficulty.EXPERT: (59, 64),
}


def cells_to_remove(difficulty: Difficulty, rng: Optional[random.Random] = None) -> int:
    if not isinstance(difficulty, Difficulty):
        raise TypeError("cells_to_remove expects a Difficulty")
    rng = rng or random.Random()
    low, high = REMOVAL_RANGES[difficulty]
    return low + rng.randrange(high - low + 1)


def remove_cells(
    grid: Grid,
    target: int,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
    verify_all: bool = False,
) -> int:
    """
    Blank up to `target` cells of `grid` in place and return how many were removed.

    Cells are visited in one shuffled order, cyclically, for at most
    ATTEMPT_FACTOR * 81 attempts. The first VERIFIED_FRACTION of the target
    is removed only when the solution counter still reports a unique
    solution, each accepted cell pulling its point-symmetric partner along
    when that keeps uniqueness. The remaining removals skip the counter and
    only respect the clue floor, unless `verify_all` is set; without it the
    result usually admits more than one solution, even in the easy band.
    Falling short of `target` is not an error.
    """
    rng = rng or random.Random()
    tracer = tracer or get_tracer()
    state = ConstraintState.from_grid(grid)

    cells = [(r, c) for r in range(SIZE) for c in range(SIZE)]
    rng.shuffle(cells)

    verified_limit = target if verify_all else int(target * VERIFIED_FRACTION)
    filled = filled_count(grid)
    removed = 0

    for attempt in range(ATTEMPT_FACTOR * len(cells)):
        if removed >= target:
            break
        row, col = cells[attempt % len(cells)]
        if not state.grid[row][col] or filled - 1 <= MIN_CLUES:
            continue

        if removed < verified_limit:
            if not _try_verified_removal(state, row, col, tracer):
                continue
            removed += 1
            filled -= 1

            mirror_row, mirror_col = SIZE - 1 - row, SIZE - 1 - col
            if (
                removed < target
                and state.grid[mirror_row][mirror_col]
                and filled - 1 > MIN_CLUES
                and _try_verified_removal(state, mirror_row, mirror_col, tracer)
            ):
                removed += 1
                filled -= 1
        else:
            digit = state.remove(row, col)
            tracer.log_removal(row, col, digit, accepted=True, reason="heuristic")
            removed += 1
            filled -= 1

    for r in range(SIZE):
        grid[r][:] = state.grid[r]
    return removed


def _try_verified_removal(state: ConstraintState, row: int, col: int, tracer: Tracer) -> bool:
    digit = state.remove(row, col)
    if count_solutions(state, tracer) is SolutionCount.ONE:
        tracer.log_removal(row, col, digit, accepted=True, reason="unique")
        return True
    state.place(row, col, digit)
    tracer.log_removal(row, col, digit, accepted=False, reason="multiple solutions")
    return False
