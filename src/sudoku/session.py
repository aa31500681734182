"""Player session: lives, solved/game-over states, timer, and cursor."""

import random
import time
from enum import Enum
from typing import Callable, Optional

from .model import SIZE, Difficulty
from .puzzle import Puzzle, check_cell, generate_puzzle
from src.utils.trace import Tracer, get_tracer

DEFAULT_LIVES = 3


class GameState(Enum):
    IN_PROGRESS = "in_progress"
    SOLVED = "solved"
    GAME_OVER = "game_over"


class GameSession:
    """
    One player's game. Construct a new session, or call `reset`, to get a
    fresh puzzle; nothing carries over between puzzles except difficulty.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
        max_lives: int = DEFAULT_LIVES,
        clock: Callable[[], float] = time.monotonic,
        tracer: Optional[Tracer] = None,
        puzzle: Optional[Puzzle] = None,
        verify_all: bool = False,
    ):
        if max_lives < 1:
            raise ValueError("max_lives must be at least 1")
        self.difficulty = difficulty
        self.rng = rng or random.Random()
        self.max_lives = max_lives
        self.clock = clock
        self.verify_all = verify_all
        self.tracer = tracer or get_tracer()
        self._start(puzzle)

    def _start(self, puzzle: Optional[Puzzle] = None) -> None:
        self.puzzle = puzzle or generate_puzzle(
            self.difficulty, self.rng, self.tracer, verify_all=self.verify_all
        )
        self.lives = self.max_lives
        self.state = GameState.IN_PROGRESS
        self.start_time = self.clock()
        self.elapsed = 0.0
        self.cursor_row = 0
        self.cursor_col = 0

    def reset(self) -> None:
        self._start()

    def switch_difficulty(self) -> Difficulty:
        self.difficulty = self.difficulty.next()
        return self.difficulty

    @property
    def is_over(self) -> bool:
        return self.state is not GameState.IN_PROGRESS

    def enter_digit(self, row: int, col: int, digit: int) -> bool:
        if self.is_over:
            return False
        self.update_time()

        check_cell(row, col)
        previous = self.puzzle.play_grid[row][col]
        if not self.puzzle.set_cell(row, col, digit):
            self.tracer.log_move(row, col, digit, accepted=False, reason="given cell")
            return False

        correct = self.puzzle.is_correct(row, col)
        if not correct and previous != digit:
            self.lives -= 1
            if self.lives <= 0:
                self.lives = 0
                self.state = GameState.GAME_OVER
        self.tracer.log_move(
            row, col, digit, accepted=True, reason="correct" if correct else f"wrong, {self.lives} lives"
        )

        if self.state is GameState.IN_PROGRESS and self.puzzle.is_solved():
            self.state = GameState.SOLVED
        return True

    def clear(self, row: int, col: int) -> bool:
        if self.is_over:
            return False
        return self.puzzle.clear_cell(row, col)

    # Cursor helpers used by the terminal loop.

    def move_cursor(self, d_row: int, d_col: int) -> None:
        if self.state is GameState.GAME_OVER:
            return
        row, col = self.cursor_row + d_row, self.cursor_col + d_col
        if 0 <= row < SIZE:
            self.cursor_row = row
        if 0 <= col < SIZE:
            self.cursor_col = col

    def current_value(self) -> int:
        return self.puzzle.play_grid[self.cursor_row][self.cursor_col]

    def enter_at_cursor(self, digit: int) -> bool:
        return self.enter_digit(self.cursor_row, self.cursor_col, digit)

    def clear_at_cursor(self) -> bool:
        return self.clear(self.cursor_row, self.cursor_col)

    def update_time(self) -> None:
        if not self.is_over:
            self.elapsed = self.clock() - self.start_time

    def time_string(self) -> str:
        total = int(self.elapsed)
        return f"{total // 60:02d}:{total % 60:02d}"

    def lives_display(self) -> str:
        return " ".join("♥" if i < self.lives else "♡" for i in range(self.max_lives))
