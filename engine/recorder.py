"""
recorder.py — Run Recorder & Analytics
========================================
Runs one search on a snapshot of a grid, then computes the metrics the
UI needs for the analytics card and the comparison view.

Usage:
    rec = Recorder()
    result, metrics = rec.run("astar", grid)   # grid is left untouched

Comparison:
    The visualizer records both algorithms on the SAME grid, then calls
    compare(left, right) → ComparisonResult.
"""

import logging
import time
from dataclasses import dataclass, field, asdict
from typing import Optional, Tuple, Dict, Any

from grid import Grid
from algorithms import get_algorithm, SearchResult


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the analytics card renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    nodes_visited:   int   = 0
    path_length:     int   = 0          # cells on the path, start and end included
    path_cost:       int   = 0          # steps on the path (path_length - 1)
    wall_time_ms:    float = 0.0
    path_found:      bool  = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    winner_nodes:  str = ""   # which algo finalised fewer cells
    winner_path:   str = ""   # which algo found the shorter path

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        result  : SearchResult of the last run.
        metrics : RunMetrics of the last run.
    """

    def __init__(self):
        self.result:  Optional[SearchResult] = None
        self.metrics: Optional[RunMetrics]   = None

    def run(self, algo_key: str, grid: Grid) -> Tuple[SearchResult, RunMetrics]:
        """Snapshot `grid`, run `algo_key` to completion, compute metrics."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        snapshot = grid.snapshot()
        started = time.monotonic()
        result = info.fn(snapshot)
        wall_ms = (time.monotonic() - started) * 1000

        path_len = len(result.path)
        self.result = result
        self.metrics = RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            nodes_visited=len(result.visited),
            path_length=path_len,
            path_cost=path_len - 1 if path_len > 1 else 0,
            wall_time_ms=round(wall_ms, 2),
            path_found=result.path_found,
        )
        logger.info(
            "%s finalised %d cells, path %s",
            info.label, self.metrics.nodes_visited,
            f"{path_len} cells" if result.path_found else "not found",
        )
        return self.result, self.metrics


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: RunMetrics, right: RunMetrics) -> ComparisonResult:
    """Given two RunMetrics on the same grid, produce a ComparisonResult."""

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    def path_rank(m: RunMetrics) -> float:
        return m.path_length if m.path_found else float("inf")

    return ComparisonResult(
        left=left,
        right=right,
        winner_nodes=winner(left.nodes_visited, right.nodes_visited, left.algo_label, right.algo_label),
        winner_path=winner(path_rank(left), path_rank(right), left.algo_label, right.algo_label),
    )
