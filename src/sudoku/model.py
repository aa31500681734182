"""Sudoku core data structures: grids, difficulty levels, and constraint trackers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Union

Grid = List[List[int]]
Mask = List[List[bool]]

SIZE = 9
BOX = 3
DIGITS = tuple(range(1, SIZE + 1))
FULL_MASK = 0b1111111110  # bits 1..9


class Difficulty(Enum):
    EASY = 0
    MEDIUM = 1
    HARD = 2
    EXPERT = 3

    def next(self) -> "Difficulty":
        members = list(Difficulty)
        return members[(members.index(self) + 1) % len(members)]

    @classmethod
    def parse(cls, value: Union[str, "Difficulty"]) -> "Difficulty":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise TypeError(f"Difficulty name must be a string, got {type(value).__name__}")
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {value!r}") from None

    def __str__(self) -> str:
        return self.name.capitalize()


class SolutionCount(Enum):
    ZERO = 0
    ONE = 1
    MANY = 2


def empty_grid() -> Grid:
    return [[0] * SIZE for _ in range(SIZE)]


def copy_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def box_index(row: int, col: int) -> int:
    return (row // BOX) * BOX + col // BOX


def filled_count(grid: Grid) -> int:
    return sum(1 for row in grid for value in row if value != 0)


def grid_to_string(grid: Grid) -> str:
    return "".join(str(value) for row in grid for value in row)


def grid_from_string(text: str) -> Grid:
    """Parse an 81-character string; '0' or '.' mark empty cells."""
    cleaned = text.strip().replace(".", "0")
    if len(cleaned) != SIZE * SIZE or not cleaned.isdigit():
        raise ValueError(f"Expected 81 digits, got {text!r}")
    values = [int(ch) for ch in cleaned]
    return [values[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]


def mask_digits(mask: int) -> List[int]:
    return [d for d in DIGITS if mask & (1 << d)]


@dataclass
class ConstraintState:
    """
    A grid together with its row/column/box trackers.
    Each tracker holds one bitmask per unit; bit `d` is set while digit `d`
    occupies a filled cell of that unit. `place` and `remove` keep all four
    structures in sync.
    """

    grid: Grid = field(default_factory=empty_grid)
    row_used: List[int] = field(default_factory=lambda: [0] * SIZE)
    col_used: List[int] = field(default_factory=lambda: [0] * SIZE)
    box_used: List[int] = field(default_factory=lambda: [0] * SIZE)

    @classmethod
    def from_grid(cls, grid: Grid) -> "ConstraintState":
        state = cls(grid=empty_grid())
        for r in range(SIZE):
            for c in range(SIZE):
                digit = grid[r][c]
                if digit:
                    if not state.can_place(r, c, digit):
                        raise ValueError(f"Grid repeats digit {digit} around cell ({r}, {c})")
                    state.place(r, c, digit)
        return state

    def can_place(self, row: int, col: int, digit: int) -> bool:
        bit = 1 << digit
        return not (
            self.row_used[row] & bit
            or self.col_used[col] & bit
            or self.box_used[box_index(row, col)] & bit
        )

    def candidates(self, row: int, col: int) -> int:
        used = self.row_used[row] | self.col_used[col] | self.box_used[box_index(row, col)]
        return FULL_MASK & ~used

    def place(self, row: int, col: int, digit: int) -> None:
        bit = 1 << digit
        self.grid[row][col] = digit
        self.row_used[row] |= bit
        self.col_used[col] |= bit
        self.box_used[box_index(row, col)] |= bit

    def remove(self, row: int, col: int) -> int:
        """Clear a filled cell and return the digit it held."""
        digit = self.grid[row][col]
        if digit:
            bit = ~(1 << digit)
            self.grid[row][col] = 0
            self.row_used[row] &= bit
            self.col_used[col] &= bit
            self.box_used[box_index(row, col)] &= bit
        return digit

    def empty_cells(self) -> List[Tuple[int, int]]:
        return [(r, c) for r in range(SIZE) for c in range(SIZE) if self.grid[r][c] == 0]


def is_valid_placement(grid: Grid, row: int, col: int, digit: int) -> bool:
    """Scan row, column and box for `digit`; the O(9) counterpart of `ConstraintState.can_place`."""
    if any(grid[row][x] == digit for x in range(SIZE)):
        return False
    if any(grid[y][col] == digit for y in range(SIZE)):
        return False
    br, bc = (row // BOX) * BOX, (col // BOX) * BOX
    for r in range(br, br + BOX):
        for c in range(bc, bc + BOX):
            if grid[r][c] == digit:
                return False
    return True


def is_complete_solution(grid: Grid) -> bool:
    """Check every row, column, and box holds 1-9 exactly once."""
    if len(grid) != SIZE or any(len(row) != SIZE for row in grid):
        return False
    target = set(DIGITS)
    for i in range(SIZE):
        if set(grid[i]) != target:
            return False
        if {grid[r][i] for r in range(SIZE)} != target:
            return False
    for br in range(0, SIZE, BOX):
        for bc in range(0, SIZE, BOX):
            box = {grid[r][c] for r in range(br, br + BOX) for c in range(bc, bc + BOX)}
            if box != target:
                return False
    return True
