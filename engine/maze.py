"""
maze.py — Maze Generation Dispatch
====================================
Carves a perfect maze into a Grid with one of the registered maze
generators and packages the outcome.

    result = generate_maze(31, 51, "randomized-prim", seed=42)
    result.grid     # walls carved in place
    result.trace    # one OPEN_WALL per carved cell

Lattice convention: rooms live on odd coordinates, the cells between
them are walls, and the border stays solid.  That only works when both
dimensions are odd, so anything else is rejected with
InvalidDimensionsError rather than guessed at.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from grid import Grid, Coord, InvalidDimensionsError
from algorithms import MAZE, get_algorithm
from algorithms.step import StepTrace, TraceBuilder


logger = logging.getLogger(__name__)

MIN_MAZE_SIZE = 3


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------
@dataclass
class MazeResult:
    """
    Attributes:
        algorithm : Registry key that carved the maze.
        grid      : The same Grid instance passed in, walls updated.
        trace     : The replayable StepTrace.
        start     : Conventional entrance room (1, 1).
        end       : Conventional exit room (height-2, width-2).
        seed      : Seed used, when generate_maze() built the RNG.
    """

    algorithm: str
    grid:      Grid
    trace:     StepTrace
    start:     Coord
    end:       Coord
    seed:      Optional[int] = None

    @property
    def rooms(self) -> int:
        return ((self.grid.width - 1) // 2) * ((self.grid.height - 1) // 2)

    def to_dict(self) -> dict:
        return {
            "algorithm": self.algorithm,
            "seed":      self.seed,
            "start":     list(self.start),
            "end":       list(self.end),
            "grid":      self.grid.to_dict(),
        }


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def check_maze_dimensions(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise InvalidDimensionsError(width, height)
    if width < MIN_MAZE_SIZE or height < MIN_MAZE_SIZE:
        raise InvalidDimensionsError(width, height, f"mazes need at least {MIN_MAZE_SIZE}x{MIN_MAZE_SIZE}")
    if width % 2 == 0 or height % 2 == 0:
        raise InvalidDimensionsError(width, height, "maze dimensions must be odd")


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
def generate(
    grid: Grid,
    algorithm: str,
    rng: random.Random,
    seed: Optional[int] = None,
) -> MazeResult:
    """
    Fill `grid` with walls and carve a maze into it using `rng` only.

    Args:
        grid      : Odd-by-odd grid; its previous contents are discarded.
        algorithm : "recursive-backtracking" or "randomized-prim".
        rng       : Injected random source.  Never the module-level one.
        seed      : Recorded on the result for reference only.
    """
    info = get_algorithm(algorithm)
    if info is None or info.family != MAZE:
        raise ValueError(f"Unknown maze algorithm: {algorithm}")
    check_maze_dimensions(grid.width, grid.height)

    grid.fill_walls()
    tb = TraceBuilder(info.key, grid)
    for event in info.fn(grid, rng):
        tb.record(event)
    trace = tb.build()

    start: Coord = (1, 1)
    end:   Coord = (grid.height - 2, grid.width - 2)
    grid.start, grid.end = start, end

    logger.debug(
        "%s carved %d cells into %dx%d (seed=%s)",
        info.key, len(trace), grid.width, grid.height, seed,
    )
    return MazeResult(algorithm=info.key, grid=grid, trace=trace, start=start, end=end, seed=seed)


def generate_maze(
    width: int,
    height: int,
    algorithm: str = "recursive-backtracking",
    seed: Optional[int] = None,
) -> MazeResult:
    """Build a fresh grid and a `random.Random(seed)`, then generate()."""
    check_maze_dimensions(width, height)
    if seed is not None and (
        isinstance(seed, bool) or not isinstance(seed, int) or not 0 <= seed < 2 ** 64
    ):
        raise ValueError(f"seed must be an unsigned 64-bit integer, got {seed}")
    return generate(Grid(width, height), algorithm, random.Random(seed), seed=seed)


def maze_and_trace(
    width: int,
    height: int,
    algorithm: str = "recursive-backtracking",
    seed: Optional[int] = None,
) -> Tuple[MazeResult, StepTrace]:
    result = generate_maze(width, height, algorithm, seed)
    return result, result.trace
