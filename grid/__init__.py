"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, Cell, Coord, CellState
    from grid import neighbors
"""

from grid.cell      import Cell, Coord, CellState, INF
from grid.grid      import Grid
from grid.neighbors import neighbors, DIRECTIONS

__all__ = [
    "Cell",      "Coord",     "CellState",  "INF",
    "Grid",
    "neighbors", "DIRECTIONS",
]
