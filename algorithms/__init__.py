"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the engine knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, pseudocode, family, tags, …),
        "recursive-backtracking": AlgoInfo(…, family="maze", …),
        …
    }

Two families share the registry:
  • "search" – fn(grid, start, end, allow_diagonal[, heuristic]) → events
  • "maze"   – fn(grid, rng) → events

Adding an algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms.bfs                    import bfs                    as _bfs,      PSEUDOCODE as _bfs_pc
from algorithms.dfs                    import dfs                    as _dfs,      PSEUDOCODE as _dfs_pc
from algorithms.dijkstra               import dijkstra               as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.astar                  import astar                  as _astar,    PSEUDOCODE as _ast_pc
from algorithms.recursive_backtracking import recursive_backtracking as _rb,       PSEUDOCODE as _rb_pc
from algorithms.randomized_prim        import randomized_prim        as _prim,     PSEUDOCODE as _prim_pc


SEARCH = "search"
MAZE   = "maze"


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bfs"
    label:            str                    # human label, e.g. "Breadth-First Search"
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    family:           str       = SEARCH     # "search" or "maze"
    tags:             List[str] = field(default_factory=list)
    has_heuristic:    bool      = False      # expose heuristic selector?
    optimal:          bool      = False      # guarantees a shortest path?
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "family":           self.family,
            "tags":             list(self.tags),
            "has_heuristic":    self.has_heuristic,
            "optimal":          self.optimal,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
            "pseudocode":       list(self.pseudocode),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        tags=["unweighted", "shortest-path", "traversal"], optimal=True,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer. Finds shortest path by move count.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, pseudocode=_dfs_pc,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        tags=["weighted", "shortest-path"], optimal=True,
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Greedily expands the closest cell. Optimal for non-negative weights.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar, pseudocode=_ast_pc,
        tags=["weighted", "shortest-path", "heuristic"], optimal=True,
        has_heuristic=True,
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Dijkstra + heuristic guidance. Optimal when h is admissible.",
    ),

    "recursive-backtracking": AlgoInfo(
        key="recursive-backtracking", label="Recursive Backtracking", fn=_rb, pseudocode=_rb_pc,
        family=MAZE, tags=["spanning-tree", "dfs-shaped"],
        complexity_time="O(V)", complexity_space="O(V)",
        description="Carves with a stack. Long winding passages, few branches.",
    ),

    "randomized-prim": AlgoInfo(
        key="randomized-prim", label="Randomized Prim's", fn=_prim, pseudocode=_prim_pc,
        family=MAZE, tags=["spanning-tree", "prim-shaped"],
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Grows from random frontier rooms. Short dead ends, lots of branching.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms(family: Optional[str] = None) -> List[AlgoInfo]:
    """Return registered algorithms in insertion order, optionally one family."""
    return [a for a in REGISTRY.values() if family is None or a.family == family]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "SEARCH",
    "MAZE",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
]
