"""
dijkstra.py — Uniform-Cost Search (Dijkstra on an unweighted grid)
===================================================================
Min-heap (heapq) Dijkstra.  Every step costs 1, so this is shortest
path by hop count.

Tie-break rule:
    Heap entries are (distance, sequence, index) where `sequence` is a
    push counter.  Among equal distances the cell pushed first pops
    first (FIFO), and cells are pushed in neighbour order (up, down,
    left, right).  The trace is therefore fully determined by the grid.

Termination:
  1. End popped       →  path reconstructed from predecessors
  2. Heap exhausted   →  every remaining cell is at distance ∞, path = []
"""

import heapq
import itertools
from typing import List

from grid import Grid, neighbors
from algorithms.result import SearchResult, reconstruct_path


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(grid, start, end):",             # 0
    "    dist ← {v: ∞ for v in grid}",             # 1
    "    dist[start] ← 0",                         # 2
    "    pq ← [(0, start)]",                       # 3
    "    while pq is not empty:",                  # 4
    "        (d, cell) ← pq.pop_min()",            # 5
    "        if cell finalised: continue",         # 6
    "        finalise(cell)",                      # 7
    "        if cell == end: return path",         # 8
    "        for nbr in neighbours(cell):",        # 9
    "            if dist[cell] + 1 < dist[nbr]:",  # 10
    "                dist[nbr] ← dist[cell] + 1",  # 11
    "                parent[nbr] ← cell",          # 12
    "                pq.push((dist[nbr], nbr))",   # 13
    "    return NOT FOUND",                        # 14
]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
def dijkstra(grid: Grid) -> SearchResult:
    """Run to completion on `grid` (a snapshot — scratch is mutated)."""
    start, end = grid.start_cell, grid.end_cell
    visited_order = []

    seq = itertools.count()
    start.distance = 0
    pq = [(0, next(seq), grid.index(start.row, start.col))]

    while pq:
        d, _, idx = heapq.heappop(pq)
        cell = grid.cells[idx]

        # stale entry
        if cell.visited or d > cell.distance:
            continue

        cell.visited = True
        visited_order.append(cell.coord)

        if cell is end:
            return SearchResult("dijkstra", visited_order, reconstruct_path(grid, end))

        for nbr in neighbors(cell, grid):
            new_dist = cell.distance + 1
            if new_dist < nbr.distance:
                nbr.distance    = new_dist
                nbr.predecessor = idx
                heapq.heappush(pq, (new_dist, next(seq), grid.index(nbr.row, nbr.col)))

    return SearchResult("dijkstra", visited_order, [])
