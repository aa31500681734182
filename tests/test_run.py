"""CLI tests: batch generation, export, tracing and the play loop."""

import random

import pandas as pd

import run
from src.sudoku.generator import has_unique_solution
from src.sudoku import rundataset
from src.sudoku.model import Difficulty, copy_grid
from src.sudoku.puzzle import Puzzle
from src.sudoku.session import GameSession, GameState
from src.utils.trace import get_tracer


def _session(solved_grid):
    grid = copy_grid(solved_grid)
    grid[0][0] = 0
    grid[0][1] = 0
    puzzle = Puzzle(
        play_grid=grid,
        solution=copy_grid(solved_grid),
        initial_mask=[[v != 0 for v in row] for row in grid],
        difficulty=Difficulty.EASY,
    )
    return GameSession(Difficulty.EASY, rng=random.Random(0), puzzle=puzzle)


def test_format_grid(solved_grid):
    solved_grid[0][0] = 0
    text = run.format_grid(solved_grid)
    lines = text.splitlines()
    assert len(lines) == 11
    assert lines[0] == ". 3 4 | 6 7 8 | 9 1 2"
    assert lines[3] == "------+-------+------"


def test_main_prints_puzzles(capsys):
    run.main(["--difficulty", "easy", "--count", "2", "--seed", "4"])
    out = capsys.readouterr().out
    assert "# Puzzle 1 (Easy" in out
    assert "# Puzzle 2 (Easy" in out
    assert "Counter runs:" in out


def test_main_writes_csv_and_trace(tmp_path, capsys):
    output = tmp_path / "batch.csv"
    trace = tmp_path / "trace.csv"
    run.main(["--count", "2", "--seed", "1", "--output", str(output), "--trace", str(trace)])

    frame = pd.read_csv(output, dtype={"puzzle": str, "solution": str})
    assert len(frame) == 2
    assert set(frame["difficulty"]) == {"medium"}
    assert trace.exists()
    assert "Wrote 2 puzzles" in capsys.readouterr().out


def test_trace_path_from_environment(tmp_path, monkeypatch):
    trace = tmp_path / "env_trace.csv"
    monkeypatch.setenv("SUDOKU_TRACE_PATH", str(trace))
    run.main(["--difficulty", "easy", "--seed", "2"])
    assert trace.exists()


def test_main_reports_generation_errors(monkeypatch, capsys):
    def _boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("run.generate_puzzle", _boom)
    run.main(["--count", "1"])
    assert "ERROR: Failed to generate puzzle 0: boom" in capsys.readouterr().out


def test_play_loop_solves(solved_grid, capsys):
    session = _session(solved_grid)
    commands = iter(["", "1 1 5", "5 5 1", "x 1 1", "1 1 5", "1 2 3", "q"])
    run.play(session, read_line=lambda prompt: next(commands))

    assert session.state is GameState.SOLVED
    out = capsys.readouterr().out
    assert "Cannot change that cell" in out
    assert "Solved!" in out


def test_play_loop_handles_bad_input_and_eof(solved_grid, capsys):
    session = _session(solved_grid)
    commands = iter(["1 1 0", "a b c", "help", "d"])

    def _read(prompt):
        try:
            return next(commands)
        except StopIteration:
            raise EOFError

    run.play(session, read_line=_read)
    out = capsys.readouterr().out
    assert out.count("Invalid move") == 2
    assert "Difficulty for next game: Medium" in out
    assert session.lives == 3


def test_new_game_command(solved_grid):
    session = _session(solved_grid)
    old = session.puzzle
    assert run.handle_command(session, "n")
    assert session.puzzle is not old
    assert not run.handle_command(session, "q")


def test_dataset_smoke_script(tmp_path, monkeypatch, capsys):
    output = tmp_path / "batch.jsonl"
    run.main(["--difficulty", "easy", "--seed", "5", "--output", str(output)])
    monkeypatch.setenv("SUDOKU_DATA_PATH", str(output))
    rundataset.main()
    out = capsys.readouterr().out
    assert "Loaded puzzle OK" in out
    assert "Solution valid: True" in out


def test_dataset_smoke_script_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("SUDOKU_DATA_PATH", str(tmp_path / "nope.parquet"))
    rundataset.main()
    assert "not found" in capsys.readouterr().out


def test_play_verify_all_gives_unique_puzzle(monkeypatch):
    sessions = []
    monkeypatch.setattr("run.play", lambda session: sessions.append(session))
    run.main(["--play", "--verify-all", "--difficulty", "hard", "--seed", "0"])

    session = sessions[0]
    assert session.verify_all
    assert has_unique_solution(session.puzzle.play_grid)
    session.reset()
    assert has_unique_solution(session.puzzle.play_grid)


def test_play_session_is_not_traced(monkeypatch):
    sessions = []

    def _play(session):
        for r in range(9):
            for c in range(9):
                if not session.puzzle.initial_mask[r][c]:
                    session.enter_digit(r, c, session.puzzle.solution[r][c])
        session.reset()
        sessions.append(session)

    monkeypatch.setattr("run.play", _play)
    run.main(["--play", "--difficulty", "easy", "--seed", "3"])

    session = sessions[0]
    assert not session.tracer.enabled
    assert session.tracer.steps == []
    assert get_tracer().steps == []
