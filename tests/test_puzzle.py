"""Tests for puzzle assembly, the solved check, and the move guards."""

import random

import pytest

from src.sudoku import puzzle as puzzle_core
from src.sudoku.generator import has_unique_solution
from src.sudoku.model import Difficulty, copy_grid, filled_count, is_complete_solution
from src.sudoku.reducer import MIN_CLUES, REMOVAL_RANGES
from src.utils.trace import get_tracer


def _make_puzzle(solved_grid, holes):
    play_grid = copy_grid(solved_grid)
    for r, c in holes:
        play_grid[r][c] = 0
    return puzzle_core.Puzzle(
        play_grid=play_grid,
        solution=copy_grid(solved_grid),
        initial_mask=[[v != 0 for v in row] for row in play_grid],
    )


def test_generate_puzzle_shapes():
    puzzle = puzzle_core.generate_puzzle(Difficulty.EASY, random.Random(12))
    assert is_complete_solution(puzzle.solution)
    assert puzzle.difficulty is Difficulty.EASY
    assert puzzle.clues == filled_count(puzzle.play_grid)
    assert puzzle.removed == 81 - puzzle.clues
    assert puzzle.removed <= REMOVAL_RANGES[Difficulty.EASY][1]
    assert puzzle.clues >= MIN_CLUES
    for r in range(9):
        for c in range(9):
            assert puzzle.initial_mask[r][c] == (puzzle.play_grid[r][c] != 0)
            if puzzle.play_grid[r][c]:
                assert puzzle.play_grid[r][c] == puzzle.solution[r][c]
    assert any(s.action_type == "puzzle_generated" for s in get_tracer().steps)


def test_generate_puzzle_verify_all_is_unique():
    puzzle = puzzle_core.generate_puzzle(Difficulty.MEDIUM, random.Random(6), verify_all=True)
    assert has_unique_solution(puzzle.play_grid)


def test_solution_is_not_aliased_with_play_grid():
    puzzle = puzzle_core.generate_puzzle(Difficulty.EASY, random.Random(2))
    r, c = next((r, c) for r in range(9) for c in range(9) if not puzzle.initial_mask[r][c])
    puzzle.set_cell(r, c, 1 if puzzle.solution[r][c] != 1 else 2)
    assert puzzle.solution[r][c] != puzzle.play_grid[r][c]


def test_is_solved_is_pure_and_idempotent(solved_grid):
    grid = copy_grid(solved_grid)
    assert puzzle_core.is_solved(grid, solved_grid)
    assert puzzle_core.is_solved(grid, solved_grid)
    grid[3][3] = 0
    assert not puzzle_core.is_solved(grid, solved_grid)
    assert not puzzle_core.is_solved(grid, solved_grid)
    grid[3][3] = 1 if solved_grid[3][3] != 1 else 2
    assert not puzzle_core.is_solved(grid, solved_grid)
    assert grid[3][3] != solved_grid[3][3]


def test_initial_cells_cannot_change(solved_grid):
    puzzle = _make_puzzle(solved_grid, [(0, 0), (8, 8)])
    before = copy_grid(puzzle.play_grid)
    for r in range(9):
        for c in range(9):
            if puzzle.initial_mask[r][c]:
                assert not puzzle.set_cell(r, c, 9)
                assert not puzzle.clear_cell(r, c)
    assert puzzle.play_grid == before


def test_set_and_clear_open_cell(solved_grid):
    puzzle = _make_puzzle(solved_grid, [(0, 0)])
    assert puzzle.set_cell(0, 0, 9)
    assert puzzle.play_grid[0][0] == 9
    assert not puzzle.is_correct(0, 0)
    assert puzzle.clear_cell(0, 0)
    assert puzzle.play_grid[0][0] == 0
    assert puzzle.set_cell(0, 0, 5)
    assert puzzle.is_solved()


@pytest.mark.parametrize("row, col, digit", [(9, 0, 1), (0, -1, 1), (0, 0, 0), (0, 0, 10)])
def test_set_cell_rejects_bad_input(solved_grid, row, col, digit):
    puzzle = _make_puzzle(solved_grid, [(0, 0)])
    with pytest.raises(ValueError):
        puzzle_core.set_cell(puzzle.play_grid, puzzle.initial_mask, row, col, digit)
