from typing import List

from grid.cell import Cell
from grid.grid import Grid


# up, down, left, right; both searches break ties on this order
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def neighbors(cell: Cell, grid: Grid) -> List[Cell]:
    """Traversable orthogonal neighbours of `cell`, in DIRECTIONS order."""
    result = []
    for dr, dc in DIRECTIONS:
        nbr = grid.get_cell(cell.row + dr, cell.col + dc)
        if nbr is not None and not nbr.is_wall:
            result.append(nbr)
    return result
