"""Randomized backtracking for complete grids, plus a capped solution counter."""

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .model import (
    DIGITS,
    SIZE,
    BOX,
    ConstraintState,
    Grid,
    SolutionCount,
    mask_digits,
)
from src.utils.trace import Tracer, get_tracer

Cell = Tuple[int, int]


@dataclass
class _SearchStats:
    nodes: int = 0
    placements: int = 0
    backtracks: int = 0


def generate_complete_grid(
    rng: Optional[random.Random] = None, tracer: Optional[Tracer] = None
) -> Grid:
    """
    Build a fully solved grid.
    The three diagonal boxes are filled first with independent permutations
    (they share no row, column or box), then the rest is completed by
    depth-first search in row-major order with shuffled candidates.
    """
    rng = rng or random.Random()
    tracer = tracer or get_tracer()
    state = ConstraintState()
    stats = _SearchStats()

    for start in range(0, SIZE, BOX):
        _fill_box(state, start, start, rng)
        stats.placements += SIZE

    if not _fill_remaining(state, 0, 0, rng, stats):
        raise RuntimeError("Backtracking exhausted without completing the grid")

    tracer.log_grid_generated(placements=stats.placements, backtracks=stats.backtracks)
    return state.grid


def _fill_box(state: ConstraintState, start_row: int, start_col: int, rng: random.Random) -> None:
    digits = list(DIGITS)
    rng.shuffle(digits)
    for index, digit in enumerate(digits):
        state.place(start_row + index // BOX, start_col + index % BOX, digit)


def _next_cell(row: int, col: int) -> Cell:
    col += 1
    if col == SIZE:
        return row + 1, 0
    return row, col


def _fill_remaining(
    state: ConstraintState, row: int, col: int, rng: random.Random, stats: _SearchStats
) -> bool:
    if row == SIZE:
        return True

    next_row, next_col = _next_cell(row, col)
    if state.grid[row][col]:
        return _fill_remaining(state, next_row, next_col, rng, stats)

    digits = list(DIGITS)
    rng.shuffle(digits)
    for digit in digits:
        if not state.can_place(row, col, digit):
            continue
        state.place(row, col, digit)
        stats.placements += 1
        if _fill_remaining(state, next_row, next_col, rng, stats):
            return True
        state.remove(row, col)
        stats.backtracks += 1
    return False


def count_solutions(state: ConstraintState, tracer: Optional[Tracer] = None) -> SolutionCount:
    """
    Count completions of `state`, stopping at the second one.
    Every placement made during the search is undone, so the caller gets its
    grid and trackers back unchanged.
    """
    tracer = tracer or get_tracer()
    stats = _SearchStats()
    found = _count(state, state.empty_cells(), 0, stats)

    if found == 0:
        result = SolutionCount.ZERO
    elif found == 1:
        result = SolutionCount.ONE
    else:
        result = SolutionCount.MANY
    tracer.log_count(result=result.name, nodes=stats.nodes, backtracks=stats.backtracks)
    return result


def has_unique_solution(grid: Grid, tracer: Optional[Tracer] = None) -> bool:
    return count_solutions(ConstraintState.from_grid(grid), tracer) is SolutionCount.ONE


def _count(state: ConstraintState, empties: List[Cell], found: int, stats: _SearchStats) -> int:
    stats.nodes += 1
    choice = _select_empty_cell(state, empties)
    if choice is None:
        return found + 1

    row, col, mask = choice
    for digit in mask_digits(mask):
        state.place(row, col, digit)
        found = _count(state, empties, found, stats)
        state.remove(row, col)
        if found > 1:
            break
    else:
        stats.backtracks += 1
    return found


def _select_empty_cell(state: ConstraintState, empties: List[Cell]) -> Optional[Tuple[int, int, int]]:
    # Minimum Remaining Values: the empty cell with the fewest candidates.
    best: Optional[Tuple[int, int, int]] = None
    best_size = SIZE + 1
    for row, col in empties:
        if state.grid[row][col]:
            continue
        mask = state.candidates(row, col)
        size = bin(mask).count("1")
        if size < best_size:
            best, best_size = (row, col, mask), size
            if size <= 1:
                break
    return best
