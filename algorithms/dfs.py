"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Yields a StepEvent at:
  1. Pop an unvisited cell  →  VISIT
  2. End popped  →  MARK_PATH for every cell, start to end

Finds *a* path, not the shortest one.  Useful for contrast with BFS.
"""

from typing import Generator, List

from grid import Grid, Coord
from algorithms.step import StepEvent, visit, mark_path


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(grid, start, end):",               # 0
    "    stack ← [start]",                      # 1
    "    visited ← {}",                         # 2
    "    while stack is not empty:",             # 3
    "        cell ← stack.pop()",               # 4
    "        if cell in visited: continue",     # 5
    "        visited.add(cell)",                # 6
    "        if cell == end: return path",      # 7
    "        for nbr in neighbours(cell):",     # 8
    "            if nbr not visited:",           # 9
    "                previous[nbr] = cell",     # 10
    "                stack.push(nbr)",          # 11
    "    return NOT FOUND",                     # 12
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(
    grid: Grid,
    start: Coord,
    end: Coord,
    allow_diagonal: bool = False,
) -> Generator[StepEvent, None, None]:
    """
    Iterative DFS with back-pointer tracking for path reconstruction.

    Note: a cell may sit on the stack several times before it is popped.
    Each push overwrites `previous`, and the latest push is the one
    popped first, so `previous` always names the cell that actually led
    here.  Once visited, a cell's `previous` is never written again.
    """

    src = grid.at(start)
    dst = grid.at(end)

    src.distance = 0.0
    src.frontier = True
    stack = [src]

    while stack:
        cell = stack.pop()
        if cell.visited:
            continue

        cell.visited  = True
        cell.frontier = False
        if cell.previous is not None:
            cell.distance = grid.at(cell.previous).distance + 1
        yield visit(
            cell.coord, 6,
            f"Pop {cell.coord}. DFS always continues from the most "
            f"recently discovered cell (LIFO). Stack depth {len(stack)}.",
        )

        if cell is dst:
            path = grid.path_to(dst)
            for coord in path:
                grid.at(coord).on_path = True
                yield mark_path(
                    coord, 7,
                    f"🎯 End {end} reached via a {len(path) - 1}-move path. "
                    f"DFS does not promise it is the shortest.",
                )
            return

        for nbr in grid.neighbors(cell, allow_diagonal):
            if not nbr.visited:
                nbr.previous = cell.coord
                nbr.frontier = True
                stack.append(nbr)
