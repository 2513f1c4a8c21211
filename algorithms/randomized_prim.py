"""
randomized_prim.py — Randomized Prim's Maze Carving
=====================================================
Grows the maze outward from room (1, 1) by keeping a frontier of
uncarved rooms that touch the carved region:

  1. Pop a uniformly random frontier room.
  2. Connect it to a uniformly random carved room two cells away
     (open the room, then the wall between).
  3. Add its own uncarved rooms to the frontier.

Every frontier room was added by a carved neighbour, so step 2 always
has a candidate and every room is joined exactly once: a spanning tree
with short dead ends and lots of branching.
"""

import random
from typing import Generator, List, Set

from grid import Grid, Cell, Coord
from algorithms.step import StepEvent, open_wall
from algorithms.recursive_backtracking import START_ROOM


PSEUDOCODE: List[str] = [
    "def RandomizedPrim(grid, rng):",                  # 0
    "    carve(start)",                                # 1
    "    frontier ← uncarved rooms 2 away from start", # 2
    "    while frontier:",                             # 3
    "        cell ← frontier.pop(random)",             # 4
    "        link ← rng.choice(carved rooms 2 away)",  # 5
    "        carve(cell)",                             # 6
    "        carve(wall between cell and link)",       # 7
    "        frontier += uncarved rooms 2 away",       # 8
]


def randomized_prim(
    grid: Grid,
    rng: random.Random,
) -> Generator[StepEvent, None, None]:

    first = grid.at(START_ROOM)
    carved: Set[Coord] = {first.coord}
    first.is_wall = False
    yield open_wall(first.coord, 1, f"Carve the start room {first.coord}.")

    frontier: List[Cell] = []
    queued: Set[Coord] = set()

    def extend(around: Cell) -> None:
        for n in grid.lattice_neighbors(around):
            if n.coord not in carved and n.coord not in queued:
                queued.add(n.coord)
                frontier.append(n)

    extend(first)

    while frontier:
        cell = frontier.pop(rng.randrange(len(frontier)))
        queued.discard(cell.coord)

        links = [n for n in grid.lattice_neighbors(cell) if n.coord in carved]
        link = links[rng.randrange(len(links))]
        between = grid.at(((cell.row + link.row) // 2, (cell.col + link.col) // 2))

        cell.is_wall = False
        carved.add(cell.coord)
        yield open_wall(
            cell.coord, 6,
            f"Pick frontier room {cell.coord} ({len(frontier)} left) and carve it.",
        )

        between.is_wall = False
        yield open_wall(
            between.coord, 7,
            f"Join {cell.coord} to carved room {link.coord} through {between.coord}.",
        )

        extend(cell)
