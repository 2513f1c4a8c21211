"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra over a Grid.

Edge weight is 1 on a 4-connected grid and the Euclidean step length
(1 or √2) when diagonal moves are enabled.

Selection is a linear scan of the working set in discovery order; the
first cell with the strictly smallest distance wins.  That makes the
tie-break deterministic ("first found") and identical to A*'s, which
a heap would not give us.

Yields a StepEvent at:
  1. Pop minimum-distance cell  →  VISIT
  2. End popped  →  MARK_PATH for every cell, start to end
"""

import logging
from typing import Generator, List

from grid import Grid, Cell, Coord
from algorithms.step import StepEvent, visit, mark_path


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(grid, start, end):",            # 0
    "    dist ← {v: ∞ for v in V}",               # 1
    "    dist[start] ← 0",                        # 2
    "    working ← [start]",                      # 3
    "    while working is not empty:",             # 4
    "        cell ← first min-dist in working",   # 5
    "        visited.add(cell)",                  # 6
    "        if cell == end: return path",        # 7
    "        for nbr in neighbours(cell):",       # 8
    "            if nbr in visited: continue",    # 9
    "            new_dist ← dist[cell] + w",      # 10
    "            if new_dist < dist[nbr]:",       # 11
    "                dist[nbr] ← new_dist",       # 12
    "                previous[nbr] = cell",       # 13
    "    return NOT FOUND",                       # 14
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(
    grid: Grid,
    start: Coord,
    end: Coord,
    allow_diagonal: bool = False,
) -> Generator[StepEvent, None, None]:

    src = grid.at(start)
    dst = grid.at(end)

    src.distance = 0.0
    src.frontier = True
    working: List[Cell] = [src]

    while working:
        cell = _pop_first_min(working)
        cell.frontier = False
        cell.visited  = True
        yield visit(
            cell.coord, 6,
            f"Pop {cell.coord} with distance {cell.distance:.2f}, the smallest in "
            f"the working set. This distance is now FINAL.",
        )

        if cell is dst:
            path = grid.path_to(dst)
            for coord in path:
                grid.at(coord).on_path = True
                yield mark_path(
                    coord, 7,
                    f"🎯 End {end} popped! Shortest distance = {dst.distance:.2f}.",
                )
            return

        for nbr in grid.neighbors(cell, allow_diagonal):
            if nbr.visited:
                continue
            new_dist = cell.distance + Grid.step_cost(cell, nbr, allow_diagonal)
            if new_dist < nbr.distance:
                nbr.distance = new_dist
                nbr.previous = cell.coord
                if not nbr.frontier:
                    nbr.frontier = True
                    working.append(nbr)

    logger.debug("dijkstra: working set exhausted before reaching %s", end)


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def _pop_first_min(working: List[Cell]) -> Cell:
    best = 0
    for i in range(1, len(working)):
        if working[i].distance < working[best].distance:
            best = i
    return working.pop(best)
