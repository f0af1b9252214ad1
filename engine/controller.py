"""
controller.py — Pointer Interaction State Machine
===================================================
Turns press / enter / release events from the input layer into grid
edits.

State machine:
    IDLE  →  press(start cell)  →  DRAGGING_START
    IDLE  →  press(end cell)    →  DRAGGING_END
    IDLE  →  press(other cell)  →  DRAWING_WALLS   (toggles that cell)
    DRAWING_WALLS  →  enter  →  toggle wall
    DRAGGING_START →  enter  →  move start
    DRAGGING_END   →  enter  →  move end
    any non-IDLE   →  release → IDLE   (even while running)

Press and enter are ignored while `is_running()` is true.  Release is
not: it edits nothing, and the pointer may come up mid-run.  Nothing
here raises: illegal targets are absorbed by the Grid as no-ops.
"""

import logging
from enum import Enum
from typing import Callable

from grid import Grid


logger = logging.getLogger(__name__)


class ControllerState(Enum):
    IDLE            = "idle"
    DRAWING_WALLS   = "drawing_walls"
    DRAGGING_START  = "dragging_start"
    DRAGGING_END    = "dragging_end"


class InteractionController:
    """
    Attributes:
        grid       : The live Grid being edited.
        state      : Current ControllerState.
        is_running : Zero-arg predicate; True blocks press and enter.
    """

    def __init__(self, grid: Grid, is_running: Callable[[], bool] = lambda: False):
        self.grid:       Grid                 = grid
        self.state:      ControllerState      = ControllerState.IDLE
        self.is_running: Callable[[], bool]   = is_running

    # ------------------------------------------------------------------
    # Events: each returns True if it changed the grid or the state
    # ------------------------------------------------------------------
    def press(self, row: int, col: int) -> bool:
        if self._blocked("press"):
            return False
        if self.state != ControllerState.IDLE:
            return False

        cell = self.grid.get_cell(row, col)
        if cell is None:
            return False

        if cell.is_start:
            self.state = ControllerState.DRAGGING_START
        elif cell.is_end:
            self.state = ControllerState.DRAGGING_END
        else:
            self.state = ControllerState.DRAWING_WALLS
            self.grid.toggle_wall(row, col)
        return True

    def enter(self, row: int, col: int) -> bool:
        if self._blocked("enter"):
            return False

        if self.state == ControllerState.DRAWING_WALLS:
            return self.grid.toggle_wall(row, col)
        if self.state == ControllerState.DRAGGING_START:
            return self.grid.move_start(row, col)
        if self.state == ControllerState.DRAGGING_END:
            return self.grid.move_end(row, col)
        return False

    def release(self) -> bool:
        if self.state == ControllerState.IDLE:
            return False
        self.state = ControllerState.IDLE
        return True

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _blocked(self, event: str) -> bool:
        if self.is_running():
            logger.debug("Ignoring %s while a run is animating", event)
            return True
        return False
