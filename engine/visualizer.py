"""
visualizer.py — Visualizer Facade
==================================
The ONLY object the outer layer (HTTP API, desktop shell, tests) talks
to.  It owns the live grid and the single `is_running` gate that keeps
its two writers apart:

    • InteractionController — edits the grid while NOT running
    • AnimationScheduler    — reveals a trace while running

A run:
    run_search()  →  grid.reset()  →  Recorder.run() on a snapshot
                  →  is_running = True  →  scheduler.start()
                  →  … tick() …  →  last reveal  →  is_running = False

Every mutating entry point returns False (and changes nothing) while a
run is animating.
"""

import logging
from typing import Optional, Union, Dict, Any

from grid import Grid, Coord
from algorithms import get_algorithm, list_algorithms
from engine.config import VisualizerConfig, resolve_speed
from engine.controller import InteractionController
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare
from engine.scheduler import AnimationScheduler


logger = logging.getLogger(__name__)


class Visualizer:
    """
    Attributes:
        config      : Active VisualizerConfig (delays and algorithm track user changes).
        grid        : The live Grid.
        controller  : InteractionController bound to `grid`.
        scheduler   : AnimationScheduler replaying the last run.
        recorder    : Recorder holding the last run's result and metrics.
        is_running  : True from run_search() until the last reveal fires.
    """

    def __init__(self, config: Optional[VisualizerConfig] = None, clock=None):
        self.config:     VisualizerConfig      = config or VisualizerConfig()
        self.grid:       Grid                  = Grid.create(
            self.config.rows, self.config.cols, self.config.start, self.config.end,
        )
        self.is_running: bool                  = False
        self.controller: InteractionController = InteractionController(
            self.grid, is_running=lambda: self.is_running,
        )
        self.scheduler:  AnimationScheduler    = AnimationScheduler(clock=clock)
        self.recorder:   Recorder              = Recorder()

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------
    def press(self, row: int, col: int) -> bool:
        return self.controller.press(row, col)

    def enter(self, row: int, col: int) -> bool:
        return self.controller.enter(row, col)

    def release(self) -> bool:
        return self.controller.release()

    # ------------------------------------------------------------------
    # Run trigger
    # ------------------------------------------------------------------
    def run_search(self, algo_key: Optional[str] = None, now: Optional[float] = None) -> bool:
        """Search a snapshot and start replaying it.  False if already running."""
        if self.is_running:
            logger.debug("Run rejected: previous run still animating")
            return False

        algo_key = algo_key or self.config.algorithm
        if get_algorithm(algo_key) is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        self.grid.reset()
        result, metrics = self.recorder.run(algo_key, self.grid)

        self.is_running = True
        logger.info("Replaying %s: %d visited, %d path cells", algo_key, len(result.visited), len(result.path))
        self.scheduler.start(
            result.visited,
            result.path,
            visit_delay=self.config.visit_delay_ms,
            path_delay=self.config.path_delay_ms,
            on_visit=self._reveal_visited,
            on_path=self._reveal_path,
            on_finished=self._finished,
            now=now,
        )
        return True

    def tick(self, now: Optional[float] = None) -> int:
        return self.scheduler.tick(now)

    def finish(self) -> int:
        """Skip the animation: apply every pending reveal now."""
        return self.scheduler.drain()

    # ------------------------------------------------------------------
    # Board commands
    # ------------------------------------------------------------------
    def reset(self) -> bool:
        if self.is_running:
            logger.debug("Reset rejected while running")
            return False
        self.scheduler.cancel()
        self.grid.reset()
        logger.info("Grid reset")
        return True

    def clear(self) -> bool:
        if self.is_running:
            logger.debug("Clear rejected while running")
            return False
        self.scheduler.cancel()
        self.grid.clear()
        logger.info("Grid cleared")
        return True

    # ------------------------------------------------------------------
    # Settings (locked while running, like the rest of the controls)
    # ------------------------------------------------------------------
    def select_algorithm(self, algo_key: str) -> bool:
        if get_algorithm(algo_key) is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")
        if self.is_running:
            return False
        self.config = self.config.with_changes(algorithm=algo_key)
        return True

    def set_speed(self, value: Union[str, float]) -> bool:
        delay = resolve_speed(value)
        if self.is_running:
            return False
        self.config = self.config.with_changes(visit_delay_ms=delay)
        return True

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    def compare(self) -> ComparisonResult:
        """Run every registered algorithm on the live layout (no replay)."""
        left_info, right_info = list_algorithms()[:2]
        _, left = Recorder().run(left_info.key, self.grid)
        _, right = Recorder().run(right_info.key, self.grid)
        return compare(left, right)

    @property
    def last_metrics(self) -> Optional[RunMetrics]:
        return self.recorder.metrics

    def state(self) -> Dict[str, Any]:
        return {
            "is_running":       self.is_running,
            "controller_state": self.controller.state.value,
            "algorithm":        self.config.algorithm,
            "visit_delay_ms":   self.config.visit_delay_ms,
            "path_delay_ms":    self.config.path_delay_ms,
            "rows":             self.grid.rows,
            "cols":             self.grid.cols,
            "start":            list(self.grid.start),
            "end":              list(self.grid.end),
            "pending_reveals":  self.scheduler.pending,
            "metrics":          self.last_metrics.to_dict() if self.last_metrics else None,
        }

    # ------------------------------------------------------------------
    # Scheduler callbacks
    # ------------------------------------------------------------------
    def _reveal_visited(self, coord: Coord) -> None:
        self.grid.cell(*coord).visited = True

    def _reveal_path(self, coord: Coord) -> None:
        self.grid.cell(*coord).on_path = True

    def _finished(self) -> None:
        self.is_running = False
        logger.info("Replay finished")
