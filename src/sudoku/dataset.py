import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .model import Difficulty, filled_count, grid_from_string, grid_to_string
from .puzzle import Puzzle
from src.utils.io import load_json, save_json

COLUMNS = ["id", "difficulty", "puzzle", "solution", "clues", "removed"]


def puzzle_to_record(puzzle: Puzzle, puzzle_id: str) -> Dict[str, Any]:
    return {
        "id": puzzle_id,
        "difficulty": puzzle.difficulty.name.lower(),
        "puzzle": grid_to_string(puzzle.play_grid),
        "solution": grid_to_string(puzzle.solution),
        "clues": filled_count(puzzle.play_grid),
        "removed": puzzle.removed,
    }


def puzzle_from_record(record: Dict[str, Any]) -> Puzzle:
    """Rebuild a Puzzle from a stored record; every non-zero cell becomes a given."""
    for key in ("puzzle", "solution"):
        if key not in record:
            raise ValueError(f"Record is missing '{key}'")
    play_grid = grid_from_string(str(record["puzzle"]))
    solution = grid_from_string(str(record["solution"]))
    difficulty = Difficulty.parse(str(record.get("difficulty") or "medium"))
    return Puzzle(
        play_grid=play_grid,
        solution=solution,
        initial_mask=[[value != 0 for value in row] for row in play_grid],
        difficulty=difficulty,
        removed=int(record.get("removed") or 81 - filled_count(play_grid)),
    )


def _records(puzzles: Iterable[Puzzle], prefix: str) -> List[Dict[str, Any]]:
    return [puzzle_to_record(p, f"{prefix}-{i}") for i, p in enumerate(puzzles)]


def puzzles_to_frame(puzzles: Iterable[Puzzle], prefix: str = "puzzle") -> pd.DataFrame:
    return pd.DataFrame.from_records(_records(puzzles, prefix), columns=COLUMNS)


def write_puzzles(puzzles: Iterable[Puzzle], file_path: str, prefix: Optional[str] = None) -> Path:
    """
    Write a batch of puzzles. The format follows the suffix:
    .parquet (pandas + pyarrow), .csv, .jsonl, or .json (a list of records).
    """
    path = Path(file_path)
    records = _records(puzzles, prefix or path.stem)
    frame = pd.DataFrame.from_records(records, columns=COLUMNS)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix == ".parquet":
        frame.to_parquet(path, index=False)
    elif path.suffix == ".csv":
        frame.to_csv(path, index=False)
    elif path.suffix == ".jsonl":
        frame.to_json(path, orient="records", lines=True, force_ascii=False)
    elif path.suffix == ".json":
        save_json(path, records)
    else:
        raise ValueError(f"Unsupported output format: {path.suffix or path.name}")
    return path


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzle records from a file. Handles .parquet, .csv, .json and .jsonl.
    Returns a list of raw record dictionaries.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    def _normalize_record(record: Dict[str, Any]) -> Dict[str, Any]:
        # CSV and parquet readers may hand back numeric-looking grids.
        for key in ("puzzle", "solution"):
            if key in record and not isinstance(record[key], str):
                record[key] = str(record[key]).zfill(81)
        return record

    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        return [_normalize_record(r) for r in df.to_dict(orient="records")]

    if file_path.endswith(".csv"):
        df = pd.read_csv(file_path, dtype={"puzzle": str, "solution": str})
        return [_normalize_record(r) for r in df.to_dict(orient="records")]

    if file_path.endswith(".json"):
        try:
            payload = load_json(Path(file_path))
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL.
            return _load_jsonl(file_path, _normalize_record)
        if isinstance(payload, list):
            return [_normalize_record(p) for p in payload if isinstance(p, dict)]
        if isinstance(payload, dict):
            return [_normalize_record(payload)]
        return []

    return _load_jsonl(file_path, _normalize_record)


def _load_jsonl(file_path: str, normalize) -> List[Dict[str, Any]]:
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                data.append(normalize(obj))
    return data
