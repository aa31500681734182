"""Example: How to trace a puzzle generation run.

Shows how the Tracer records grid construction, counter runs and clue removals.
"""

from pathlib import Path
from src.utils.trace import get_tracer, reset_tracer
from engine import generate_puzzle


def generate_and_trace(difficulty: str, seed: int = None, output_trace_csv: Path = None):
    """
    Generate a puzzle and log all steps to a trace file.

    Args:
        difficulty: Difficulty name, e.g. "hard"
        seed: Optional seed for a reproducible run
        output_trace_csv: Path to write trace CSV (optional)

    Returns:
        The generated Puzzle
    """
    # Reset tracer for this puzzle
    reset_tracer()
    tracer = get_tracer()

    puzzle = generate_puzzle(difficulty, seed=seed)

    summary = tracer.summary()
    print(f"\n{'='*50}")
    print(f"Generator Summary:")
    print(f"  Total steps: {summary['total_steps']}")
    print(f"  Counter runs: {summary['num_counts']}")
    print(f"  Removals accepted: {summary['num_removals_accepted']}")
    print(f"  Removals rejected: {summary['num_removals_rejected']}")
    print(f"  Backtracks: {summary['num_backtracks']}")
    print(f"  Time: {summary['elapsed_time_seconds']:.3f}s")
    print(f"  Clues: {puzzle.clues}")
    print(f"{'='*50}\n")

    if output_trace_csv:
        tracer.to_csv(output_trace_csv)

    return puzzle


if __name__ == "__main__":
    trace_output = Path("traces/expert_trace.csv")
    puzzle = generate_and_trace("expert", seed=7, output_trace_csv=trace_output)
    print(f"Removed {puzzle.removed} cells")
