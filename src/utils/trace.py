"""Tracing module: logs puzzle engine steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step recorded while generating or playing a puzzle."""

    timestamp: float
    step_number: int
    action_type: str  # 'grid_generated', 'count', 'remove', 'puzzle_generated', 'move'
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[Any] = None
    placements: Optional[int] = None
    backtracks: Optional[int] = None
    nodes: Optional[int] = None
    result: Optional[str] = None
    accepted: Optional[bool] = None
    reason: Optional[str] = None


class Tracer:
    """Records engine steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_grid_generated(self, placements: int, backtracks: int):
        """Log a completed grid fill."""
        self._record('grid_generated', placements=placements, backtracks=backtracks)

    def log_count(self, result: str, nodes: int, backtracks: int):
        """Log one solution-counter run."""
        self._record('count', result=result, nodes=nodes, backtracks=backtracks)

    def log_removal(self, row: int, col: int, value: int, accepted: bool, reason: str):
        """Log a clue-removal attempt."""
        self._record(
            'remove',
            row=row,
            col=col,
            value=value,
            accepted=accepted,
            reason=reason,
        )

    def log_puzzle_generated(self, difficulty: str, clues: int, removed: int, target: int):
        """Log a finished puzzle."""
        self._record(
            'puzzle_generated',
            value=difficulty,
            result=f"{clues} clues",
            reason=f"Removed {removed} of {target} requested",
        )

    def log_move(self, row: int, col: int, value: int, accepted: bool, reason: str = ""):
        """Log a player move."""
        self._record('move', row=row, col=col, value=value, accepted=accepted, reason=reason)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'row', 'col', 'value',
            'placements', 'backtracks', 'nodes', 'result', 'accepted', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        removals = [s for s in self.steps if s.action_type == 'remove']
        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_counts': action_counts.get('count', 0),
            'num_removals_accepted': sum(1 for s in removals if s.accepted),
            'num_removals_rejected': sum(1 for s in removals if not s.accepted),
            'num_backtracks': sum(s.backtracks or 0 for s in self.steps),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
