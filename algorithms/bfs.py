"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over a Grid.  Yields a StepEvent at every mutation:
  1. Source / each newly discovered cell  →  VISIT  (marked on enqueue,
     so a cell can never be queued twice)
  2. Target dequeued  →  MARK_PATH for every cell, start to end

Shortest path by edge count on an unweighted grid (diagonal steps count
as one edge when enabled).

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the UI can highlight them live.
"""

from collections import deque
from typing import Generator, List

from grid import Grid, Coord
from algorithms.step import StepEvent, visit, mark_path


# ---------------------------------------------------------------------------
# Pseudocode: one displayed line per string, index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(grid, start, end):",                # 0
    "    queue ← [start]",                       # 1
    "    visited ← {start}",                     # 2
    "    while queue is not empty:",              # 3
    "        cell ← queue.dequeue()",            # 4
    "        if cell == end: return path",       # 5
    "        for nbr in neighbours(cell):",      # 6
    "            if nbr not visited:",            # 7
    "                visited.add(nbr)",          # 8
    "                previous[nbr] = cell",      # 9
    "                queue.enqueue(nbr)",        # 10
    "    return NOT FOUND",                      # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(
    grid: Grid,
    start: Coord,
    end: Coord,
    allow_diagonal: bool = False,
) -> Generator[StepEvent, None, None]:
    """
    Yields StepEvents for every cell BFS discovers, then the path.

    Args:
        grid           : The grid to search (reset, endpoints validated).
        start          : Starting (row, col).
        end            : Goal (row, col).
        allow_diagonal : Also expand the four diagonal neighbours.
    """

    src = grid.at(start)
    dst = grid.at(end)

    src.visited  = True
    src.distance = 0.0
    queue = deque([src])
    yield visit(
        src.coord, 2,
        f"Initialise: start {src.coord} is queued and marked visited. "
        f"BFS explores layer by layer from here.",
    )

    while queue:
        cell = queue.popleft()

        if cell is dst:
            path = grid.path_to(dst)
            for coord in path:
                grid.at(coord).on_path = True
                yield mark_path(
                    coord, 5,
                    f"🎯 End {end} dequeued. Shortest path (by hop count) "
                    f"has {len(path) - 1} move(s); {coord} is on it.",
                )
            return

        for nbr in grid.neighbors(cell, allow_diagonal):
            if nbr.visited:
                continue
            nbr.visited  = True
            nbr.previous = cell.coord
            nbr.distance = cell.distance + 1
            queue.append(nbr)
            yield visit(
                nbr.coord, 10,
                f"Enqueue {nbr.coord} (previous = {cell.coord}), depth "
                f"{int(nbr.distance)}. It will be expanded after every "
                f"cell at the current depth.",
            )

    # queue exhausted, end unreachable
