from enum import Enum
from typing import NamedTuple, Optional, Dict, Any


INF = float("inf")


class Coord(NamedTuple):
    row: int
    col: int


# ---------------------------------------------------------------------------
# Display state, one per colour in the palette
# ---------------------------------------------------------------------------
class CellState(Enum):
    EMPTY   = "empty"     # plain open cell
    VISITED = "visited"   # revealed by the visited phase of a replay
    PATH    = "path"      # revealed by the path phase of a replay
    WALL    = "wall"      # user-painted obstacle
    START   = "start"
    END     = "end"


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
class Cell:
    """
    Immutable position, mutable role flags and search scratch.

    Attributes:
        row, col       : Position in the grid (never change).
        is_start       : Start marker.  Exclusive with is_end / is_wall.
        is_end         : End marker.
        is_wall        : User-placed obstacle.
        distance       : Best known hop count from start (search scratch).
        priority_score : distance + heuristic (A* scratch only).
        visited        : Finalised by a search / revealed by a replay.
        predecessor    : Flat index of the cell this one was reached from.
        on_path        : Revealed as part of the final path.
    """

    __slots__ = (
        "row", "col", "is_start", "is_end", "is_wall",
        "distance", "priority_score", "visited", "predecessor", "on_path",
    )

    def __init__(self, row: int, col: int):
        self.row: int                    = row
        self.col: int                    = col
        self.is_start: bool              = False
        self.is_end: bool                = False
        self.is_wall: bool               = False
        self.reset_search_state()

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    def reset_search_state(self) -> None:
        """Wipe scratch + display flags; keep walls and markers."""
        self.distance: float             = INF
        self.priority_score: float       = INF
        self.visited: bool               = False
        self.predecessor: Optional[int]  = None
        self.on_path: bool               = False

    @property
    def coord(self) -> Coord:
        return Coord(self.row, self.col)

    @property
    def is_special(self) -> bool:
        return self.is_start or self.is_end

    @property
    def state(self) -> CellState:
        # precedence matches the palette: markers > wall > path > visited
        if self.is_start:
            return CellState.START
        if self.is_end:
            return CellState.END
        if self.is_wall:
            return CellState.WALL
        if self.on_path:
            return CellState.PATH
        if self.visited:
            return CellState.VISITED
        return CellState.EMPTY

    # ------------------------------------------------------------------
    # Display projection
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "row":      self.row,
            "col":      self.col,
            "is_start": self.is_start,
            "is_end":   self.is_end,
            "is_wall":  self.is_wall,
            "visited":  self.visited,
            "on_path":  self.on_path,
            "state":    self.state.value,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Cell(row={self.row}, col={self.col}, state={self.state.value}, dist={self.distance})"
