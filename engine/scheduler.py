"""
scheduler.py — Replay Scheduler
================================
Turns a finished SearchResult into a time-ordered reveal on the live
grid: first every visited cell, one per `visit_delay`, then every path
cell, one per `path_delay`.

Timeline for a run started at t0 with n visited cells:
    visited[i]  due at  t0 + i * visit_delay
    path[j]     due at  t0 + n * visit_delay + j * path_delay

State machine:
    IDLE     →  start()  →  PLAYING
    PLAYING  →  (last task fired) → FINISHED
    any      →  cancel() →  IDLE

Generations:
    Every start() and cancel() opens a new generation.  Tasks are never
    removed from the queue eagerly; a task whose generation is no longer
    current is dropped when it surfaces.  That keeps a reset or a new run
    from being overwritten by reveals of an older one.

Thread safety:
    Not thread-safe.  Drive tick() from one event loop (a UI timer, an
    HTTP poll, or play() under asyncio).
"""

import asyncio
import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from grid import Coord


logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class SchedulerState(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    FINISHED = "finished"


class RevealKind(Enum):
    VISITED = "visited"
    PATH    = "path"


@dataclass(frozen=True, order=True)
class RevealTask:
    due:        float
    sequence:   int
    generation: int        = field(compare=False)
    kind:       RevealKind = field(compare=False)
    coord:      Coord      = field(compare=False)


RevealCallback = Callable[[Coord], None]


class AnimationScheduler:
    """
    Attributes:
        state      : Current SchedulerState.
        generation : Id of the current run; older tasks are stale.
        clock      : Zero-arg callable returning the time in milliseconds.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self.clock:      Callable[[], float] = clock or monotonic_ms
        self.state:      SchedulerState      = SchedulerState.IDLE
        self.generation: int                 = 0

        self._queue:     List[RevealTask]    = []
        self._seq                            = itertools.count()
        self._pending:   int                 = 0
        self._on_visit:    Optional[RevealCallback]   = None
        self._on_path:     Optional[RevealCallback]   = None
        self._on_finished: Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        visited: Sequence[Coord],
        path: Sequence[Coord],
        visit_delay: float,
        path_delay: float,
        on_visit: RevealCallback,
        on_path: RevealCallback,
        on_finished: Optional[Callable[[], None]] = None,
        now: Optional[float] = None,
    ) -> int:
        """Queue a full replay and return its generation id."""
        self.generation += 1
        self._on_visit, self._on_path, self._on_finished = on_visit, on_path, on_finished

        t0 = self.clock() if now is None else now
        for i, coord in enumerate(visited):
            self._push(t0 + i * visit_delay, RevealKind.VISITED, coord)
        path_t0 = t0 + len(visited) * visit_delay
        for j, coord in enumerate(path):
            self._push(path_t0 + j * path_delay, RevealKind.PATH, coord)

        self._pending = len(visited) + len(path)
        self.state = SchedulerState.PLAYING
        logger.debug(
            "Generation %d: %d visited + %d path reveals queued",
            self.generation, len(visited), len(path),
        )
        if self._pending == 0:
            self._finish()
        return self.generation

    def cancel(self) -> None:
        """Invalidate every queued task; they are dropped as they surface."""
        self.generation += 1
        self._pending = 0
        self._on_visit = self._on_path = self._on_finished = None
        self.state = SchedulerState.IDLE

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> int:
        """Fire every task due at `now`, in order.  Returns how many fired."""
        if now is None:
            now = self.clock()
        fired = 0
        while self._queue and self._queue[0].due <= now:
            task = heapq.heappop(self._queue)
            if task.generation != self.generation:
                logger.debug("Dropping stale %s reveal of generation %d", task.kind.value, task.generation)
                continue
            self._fire(task)
            fired += 1
        return fired

    def drain(self) -> int:
        """Fire everything left, ignoring the clock."""
        return self.tick(now=float("inf"))

    async def play(self) -> None:
        """Drive the current generation to completion on an asyncio loop."""
        generation = self.generation
        while self.state == SchedulerState.PLAYING and self.generation == generation:
            self.tick()
            due = self.next_due
            if due is None:
                break
            await asyncio.sleep(max(0.0, due - self.clock()) / 1000)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def pending(self) -> int:
        return self._pending

    @property
    def next_due(self) -> Optional[float]:
        """Due time of the next live task, or None.  Prunes stale tasks off the top."""
        while self._queue and self._queue[0].generation != self.generation:
            heapq.heappop(self._queue)
        return self._queue[0].due if self._queue else None

    @property
    def is_playing(self) -> bool:
        return self.state == SchedulerState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _push(self, due: float, kind: RevealKind, coord: Coord) -> None:
        heapq.heappush(self._queue, RevealTask(due, next(self._seq), self.generation, kind, coord))

    def _fire(self, task: RevealTask) -> None:
        callback = self._on_visit if task.kind is RevealKind.VISITED else self._on_path
        if callback is not None:
            callback(task.coord)
        self._pending -= 1
        if self._pending == 0:
            self._finish()

    def _finish(self) -> None:
        self.state = SchedulerState.FINISHED
        on_finished, self._on_finished = self._on_finished, None
        if on_finished is not None:
            on_finished()
