import os
import sys

# Bootstrap sys.path so absolute imports like 'src.sudoku.dataset' work when running by file path
# This adds the repository root (two levels up from this file) to PYTHONPATH at runtime.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

from src.sudoku.dataset import load_puzzles, puzzle_from_record
from src.sudoku.generator import has_unique_solution
from src.sudoku.model import is_complete_solution


def main():
    # Point this to a generated batch; supports .parquet (requires pandas+pyarrow), .csv, .json or .jsonl
    # Examples:
    # file_path = "data/expert.parquet"
    # file_path = "data/easy.jsonl"
    file_path = os.environ.get("SUDOKU_DATA_PATH", "data/puzzles.parquet")

    if not os.path.exists(file_path):
        print(f"Error: File '{file_path}' not found. Set SUDOKU_DATA_PATH or update file_path.")
        return

    try:
        records = load_puzzles(file_path)
    except Exception as e:
        print(f"Loader error: {e}")
        return

    if not records:
        print("No puzzles loaded. Check the file path and format.")
        return

    # Check the first puzzle as a smoke test
    puzzle = puzzle_from_record(records[0])

    print("Loaded puzzle OK")
    print(f"- Puzzles:    {len(records)}")
    print(f"- Difficulty: {puzzle.difficulty}")
    print(f"- Clues:      {puzzle.clues}")
    print(f"- Solution valid: {is_complete_solution(puzzle.solution)}")
    print(f"- Unique:     {has_unique_solution(puzzle.play_grid)}")


if __name__ == "__main__":
    main()
