"""
astar.py — A* Search
=====================
Heap-based A* guided by the Manhattan distance, which is admissible and
consistent on a 4-connected unit-cost grid, so the path length always
matches Dijkstra's.

The open set tolerates duplicates: a cell is pushed again every time
its g improves, and the older entry is skipped when it surfaces after
the cell has been finalised.

Tie-break rule:
    (priority_score, sequence) — equal f-scores pop in push order.
    A re-relaxed cell gets a fresh sequence number, so among equal
    f-scores it queues behind cells pushed since, rather than keeping
    the slot of its first insertion.
"""

import heapq
import itertools
from typing import List, Union

from grid import Grid, Cell, Coord, neighbors
from algorithms.result import SearchResult, reconstruct_path


def manhattan(a: Union[Cell, Coord], b: Union[Cell, Coord]) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(grid, start, end, h):",             # 0
    "    g[start] ← 0",                            # 1
    "    f[start] ← h(start, end)",                # 2
    "    open_set ← [(f[start], start)]",          # 3
    "    while open_set:",                         # 4
    "        (_, cell) ← open_set.pop_min()",      # 5
    "        if cell in closed: continue",         # 6
    "        closed.add(cell)",                    # 7
    "        if cell == end: return path",         # 8
    "        for nbr in neighbours(cell):",        # 9
    "            if nbr in closed: continue",      # 10
    "            tentative_g ← g[cell] + 1",       # 11
    "            if tentative_g < g[nbr]:",        # 12
    "                parent[nbr] ← cell",          # 13
    "                g[nbr] ← tentative_g",        # 14
    "                f[nbr] ← g[nbr] + h(nbr)",    # 15
    "                open_set.push((f[nbr], nbr))",# 16
    "    return NOT FOUND",                        # 17
]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
def astar(grid: Grid) -> SearchResult:
    """Run to completion on `grid` (a snapshot — scratch is mutated)."""
    start, end = grid.start_cell, grid.end_cell
    visited_order = []

    seq = itertools.count()
    start.distance       = 0
    start.priority_score = manhattan(start, end)
    open_set = [(start.priority_score, next(seq), grid.index(start.row, start.col))]

    while open_set:
        _, _, idx = heapq.heappop(open_set)
        cell = grid.cells[idx]

        if cell.visited:
            continue

        cell.visited = True
        visited_order.append(cell.coord)

        if cell is end:
            return SearchResult("astar", visited_order, reconstruct_path(grid, end))

        for nbr in neighbors(cell, grid):
            if nbr.visited:
                continue

            tentative_g = cell.distance + 1
            if tentative_g < nbr.distance:
                nbr.predecessor    = idx
                nbr.distance       = tentative_g
                nbr.priority_score = tentative_g + manhattan(nbr, end)
                heapq.heappush(open_set, (nbr.priority_score, next(seq), grid.index(nbr.row, nbr.col)))

    return SearchResult("astar", visited_order, [])
