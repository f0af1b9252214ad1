"""
result.py — Search Result
==========================
Every algorithm runs to completion on a grid snapshot and returns one
SearchResult.  It is the only thing that leaves the snapshot, so it
carries plain Coords rather than Cell objects: the replay scheduler
looks the coordinates up again on the live grid.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any

from grid import Grid, Cell, Coord


@dataclass(frozen=True)
class SearchResult:
    """
    Attributes:
        algo_key : Registry key of the algorithm that produced this result.
        visited  : Coords in the order they were finalised (the trace).
        path     : Coords from start to end inclusive, or [] if unreachable.
    """

    algo_key:  str          = ""
    visited:   List[Coord]  = field(default_factory=list)
    path:      List[Coord]  = field(default_factory=list)

    @property
    def path_found(self) -> bool:
        return bool(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algo_key": self.algo_key,
            "visited":  [list(c) for c in self.visited],
            "path":     [list(c) for c in self.path],
        }


def reconstruct_path(grid: Grid, end: Cell) -> List[Coord]:
    """Walk predecessor indices back from `end` and reverse."""
    path, cur = [], grid.index(end.row, end.col)
    while cur is not None:
        path.append(grid.coord_of(cur))
        cur = grid.cells[cur].predecessor
    path.reverse()
    return path
