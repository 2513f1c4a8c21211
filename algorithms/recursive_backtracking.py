"""
recursive_backtracking.py — Recursive-Backtracker Maze Carving
================================================================
Generator-based maze carving with an explicit stack instead of Python
recursion, so large grids never hit the recursion limit.

Rooms sit on odd coordinates; the cell halfway between two rooms is the
wall that separates them.  Starting from room (1, 1):

  1. Look at the rooms two cells away that are still uncarved.
  2. If there are any, pick one uniformly at random, open the wall
     between and then the room itself, and push the room.
  3. Otherwise pop (backtrack).

Yields one OPEN_WALL event per carved cell.  The carving forms a
depth-first spanning tree: long, winding corridors.
"""

import random
from typing import Generator, List, Set

from grid import Grid, Cell, Coord
from algorithms.step import StepEvent, open_wall


START_ROOM: Coord = (1, 1)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def RecursiveBacktracker(grid, rng):",           # 0
    "    carve(start); stack ← [start]",              # 1
    "    while stack:",                               # 2
    "        cell ← stack.top()",                     # 3
    "        options ← uncarved rooms 2 away",        # 4
    "        if options:",                            # 5
    "            nxt ← rng.choice(options)",          # 6
    "            carve(wall between cell and nxt)",   # 7
    "            carve(nxt); stack.push(nxt)",        # 8
    "        else:",                                  # 9
    "            stack.pop()",                        # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def recursive_backtracking(
    grid: Grid,
    rng: random.Random,
) -> Generator[StepEvent, None, None]:
    """
    Args:
        grid : A grid whose cells are all walls (odd width and height).
        rng  : The only randomness source; a fixed seed fixes the maze.
    """

    first = grid.at(START_ROOM)
    carved: Set[Coord] = {first.coord}
    first.is_wall = False
    yield open_wall(first.coord, 1, f"Carve the start room {first.coord} and push it.")

    stack: List[Cell] = [first]
    while stack:
        cell = stack[-1]
        options = [n for n in grid.lattice_neighbors(cell) if n.coord not in carved]

        if not options:
            stack.pop()
            continue

        nxt = options[rng.randrange(len(options))]
        between = grid.at(((cell.row + nxt.row) // 2, (cell.col + nxt.col) // 2))

        between.is_wall = False
        yield open_wall(
            between.coord, 7,
            f"Knock down the wall {between.coord} between {cell.coord} and {nxt.coord}.",
        )

        nxt.is_wall = False
        carved.add(nxt.coord)
        stack.append(nxt)
        yield open_wall(
            nxt.coord, 8,
            f"Carve room {nxt.coord} (picked from {len(options)} option(s)); "
            f"stack depth is now {len(stack)}.",
        )
