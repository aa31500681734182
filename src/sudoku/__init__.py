"""Sudoku grid generation, clue reduction, and play-session state."""

from .model import ConstraintState, Difficulty, SolutionCount
from .generator import generate_complete_grid, count_solutions, has_unique_solution
from .reducer import cells_to_remove, remove_cells
from .puzzle import Puzzle, generate_puzzle, is_solved, set_cell, clear_cell
from .session import GameSession, GameState

__all__ = [
    "ConstraintState",
    "Difficulty",
    "SolutionCount",
    "generate_complete_grid",
    "count_solutions",
    "has_unique_solution",
    "cells_to_remove",
    "remove_cells",
    "Puzzle",
    "generate_puzzle",
    "is_solved",
    "set_cell",
    "clear_cell",
    "GameSession",
    "GameState",
]
