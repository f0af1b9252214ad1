"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every search the visualizer can run.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "dijkstra": AlgoInfo(key, label, fn, pseudocode, …),
        "astar":    AlgoInfo(…),
    }

Every `fn` has the same signature, fn(grid) -> SearchResult, and runs
to completion on the grid it is given (always a snapshot).
"""

from dataclasses import dataclass, field
from typing import Callable, List, Dict, Optional

from algorithms.dijkstra import dijkstra as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.astar    import astar    as _astar,    PSEUDOCODE as _ast_pc, manhattan
from algorithms.result   import SearchResult, reconstruct_path


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "astar"
    label:             str                    # human label, e.g. "A* Search"
    fn:                Callable               # fn(grid) -> SearchResult
    pseudocode:        List[str]              # lines for the side-panel
    tags:              List[str] = field(default_factory=list)
    has_heuristic:     bool     = False
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "pseudocode":       list(self.pseudocode),
            "tags":             list(self.tags),
            "has_heuristic":    self.has_heuristic,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        tags=["uniform-cost", "shortest-path"],
        complexity_time="O(V log V)", complexity_space="O(V)",
        description="Expands the closest cell first. Explores evenly in every direction.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar, pseudocode=_ast_pc,
        tags=["heuristic", "shortest-path"],
        has_heuristic=True,
        complexity_time="O(V log V)", complexity_space="O(V)",
        description="Dijkstra + Manhattan-distance guidance. Same path length, fewer cells explored.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "SearchResult",
    "reconstruct_path",
    "manhattan",
]
