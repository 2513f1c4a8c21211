"""
astar.py — A* Search
=====================
Generator-based A* over a Grid with a pluggable heuristic.

Ships four built-in heuristics (all take two Cells, return float):
  • manhattan   – |Δr| + |Δc|                      (admissible on 4-connected grids)
  • euclidean   – √(Δr² + Δc²)                     (admissible everywhere)
  • octile      – max(|Δr|,|Δc|) + (√2-1)·min(…)   (exact on an open 8-connected grid)
  • zero        – h = 0, A* degrades to Dijkstra

When no heuristic is named, Manhattan is used for 4-connected searches
and Euclidean once diagonal moves are enabled.

The open set is a list scanned in insertion order; the first cell with
the strictly smallest f-score wins, the same tie-break Dijkstra uses.
"""

import logging
import math
from typing import Callable, Dict, Generator, List, Optional

from grid import Grid, Cell, Coord
from algorithms.step import StepEvent, visit, mark_path


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Built-in heuristics
# ---------------------------------------------------------------------------
def manhattan(a: Cell, b: Cell) -> float:
    return float(abs(a.row - b.row) + abs(a.col - b.col))

def euclidean(a: Cell, b: Cell) -> float:
    return math.sqrt((a.row - b.row) ** 2 + (a.col - b.col) ** 2)

def octile(a: Cell, b: Cell) -> float:
    dr = abs(a.row - b.row)
    dc = abs(a.col - b.col)
    return max(dr, dc) + (math.sqrt(2) - 1) * min(dr, dc)

def zero(a: Cell, b: Cell) -> float:
    """h=0 → A* degrades to Dijkstra.  Useful for teaching."""
    return 0.0

HEURISTICS: Dict[str, Callable[[Cell, Cell], float]] = {
    "manhattan": manhattan,
    "euclidean": euclidean,
    "octile":    octile,
    "zero":      zero,
}


def default_heuristic(allow_diagonal: bool) -> str:
    return "euclidean" if allow_diagonal else "manhattan"


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(grid, start, end, h):",             # 0
    "    g[start] ← 0",                            # 1
    "    f[start] ← h(start, end)",                # 2
    "    open ← [start];  closed ← {}",            # 3
    "    while open:",                              # 4
    "        cell ← first min-f in open",          # 5
    "        if cell == end: return path",         # 6
    "        move cell from open to closed",       # 7
    "        for nbr in neighbours(cell):",        # 8
    "            if nbr in closed: continue",      # 9
    "            tentative_g ← g[cell] + w",       # 10
    "            if nbr not in open: open.add(nbr)",       # 11
    "            elif tentative_g ≥ g[nbr]: continue",     # 12
    "            previous[nbr] = cell",            # 13
    "            f[nbr] ← tentative_g + h(nbr)",   # 14
    "    return NOT FOUND",                        # 15
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def astar(
    grid: Grid,
    start: Coord,
    end: Coord,
    allow_diagonal: bool = False,
    heuristic: Optional[str] = None,
) -> Generator[StepEvent, None, None]:
    """
    Args:
        grid           : The grid.
        start, end     : Endpoints as (row, col).
        allow_diagonal : 8-connected movement with Euclidean step cost.
        heuristic      : Key into HEURISTICS, or None for the default rule.
    """

    h_name = heuristic or default_heuristic(allow_diagonal)
    if h_name not in HEURISTICS:
        raise ValueError(f"Unknown heuristic: {h_name}")
    h_fn = HEURISTICS[h_name]

    src = grid.at(start)
    dst = grid.at(end)

    src.distance  = 0.0
    src.heuristic = h_fn(src, dst)
    src.f_score   = src.heuristic
    src.frontier  = True
    open_set: List[Cell] = [src]

    while open_set:
        cell = _pop_first_min_f(open_set)
        cell.frontier = False
        cell.visited  = True
        yield visit(
            cell.coord, 7,
            f"Pop {cell.coord}: g={cell.distance:.2f}, h={cell.heuristic:.2f} "
            f"({h_name}), f={cell.f_score:.2f}. Move it to the closed set.",
        )

        if cell is dst:
            path = grid.path_to(dst)
            for coord in path:
                grid.at(coord).on_path = True
                yield mark_path(
                    coord, 6,
                    f"🎯 End {end} reached! Optimal cost = {dst.distance:.2f}.",
                )
            return

        for nbr in grid.neighbors(cell, allow_diagonal):
            if nbr.visited:
                continue
            tentative_g = cell.distance + Grid.step_cost(cell, nbr, allow_diagonal)
            if not nbr.frontier:
                nbr.frontier = True
                open_set.append(nbr)
            elif tentative_g >= nbr.distance:
                continue
            nbr.previous  = cell.coord
            nbr.distance  = tentative_g
            nbr.heuristic = h_fn(nbr, dst)
            nbr.f_score   = nbr.distance + nbr.heuristic

    logger.debug("astar: open set exhausted before reaching %s", end)


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def _pop_first_min_f(open_set: List[Cell]) -> Cell:
    best = 0
    for i in range(1, len(open_set)):
        if open_set[i].f_score < open_set[best].f_score:
            best = i
    return open_set.pop(best)
