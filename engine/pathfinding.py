"""
pathfinding.py — Search Dispatch
==================================
Runs one registered search algorithm to completion against a Grid and
packages the outcome.

    result = search(grid, (0, 0), (4, 4), "astar")
    result.path            # [(0, 0), …, (4, 4)] or [] when unreachable
    result.visited_order   # every VISIT, in order
    result.trace           # the StepTrace for replay

The run is synchronous and eager: the algorithm generator is exhausted
before search() returns, and pacing is entirely the replay layer's job.
Never run two searches on the same Grid concurrently; clone it first.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from grid import Grid, Coord, InvalidEndpointError
from algorithms import SEARCH, get_algorithm
from algorithms.step import StepTrace, TraceBuilder


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------
@dataclass
class SearchResult:
    """
    Attributes:
        algorithm      : Registry key that produced this result.
        visited_order  : Cells in the order they were visited.
        path           : start … end, or [] when no route exists.
        cost           : Total step cost of `path` (0.0 when empty).
        allow_diagonal : Whether 8-connected movement was used.
        trace          : The replayable StepTrace.
    """

    algorithm:      str
    visited_order:  List[Coord]         = field(default_factory=list)
    path:           List[Coord]         = field(default_factory=list)
    cost:           float               = 0.0
    allow_diagonal: bool                = False
    trace:          Optional[StepTrace] = None

    @property
    def found(self) -> bool:
        return bool(self.path)

    def to_dict(self) -> dict:
        return {
            "algorithm":      self.algorithm,
            "allow_diagonal": self.allow_diagonal,
            "found":          self.found,
            "cost":           self.cost,
            "visited_order":  [list(c) for c in self.visited_order],
            "path":           [list(c) for c in self.path],
        }


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def check_endpoint(grid: Grid, coord, role: str) -> Coord:
    try:
        row, col = coord
    except (TypeError, ValueError):
        raise InvalidEndpointError(role, coord, "expected a (row, col) pair")
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (row, col)):
        raise InvalidEndpointError(role, coord, "row and col must be integers")
    if not grid.in_bounds(row, col):
        raise InvalidEndpointError(role, (row, col), "out of bounds")
    if grid.cell(row, col).is_wall:
        raise InvalidEndpointError(role, (row, col), "is a wall")
    return (row, col)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
def run_search(
    grid: Grid,
    start: Coord,
    end: Coord,
    algorithm: str = "astar",
    allow_diagonal: bool = False,
    heuristic: Optional[str] = None,
) -> Tuple[SearchResult, StepTrace]:
    """Run `algorithm` and return (SearchResult, StepTrace)."""
    info = get_algorithm(algorithm)
    if info is None or info.family != SEARCH:
        raise ValueError(f"Unknown search algorithm: {algorithm}")

    start = check_endpoint(grid, start, "start")
    end   = check_endpoint(grid, end, "end")

    grid.reset()
    tb = TraceBuilder(info.key, grid)

    kwargs = {"allow_diagonal": allow_diagonal}
    if info.has_heuristic and heuristic is not None:
        kwargs["heuristic"] = heuristic

    for event in info.fn(grid, start, end, **kwargs):
        tb.record(event)
    trace = tb.build()

    path = trace.path
    cost = sum((
        Grid.step_cost(grid.at(a), grid.at(b), allow_diagonal)
        for a, b in zip(path, path[1:])
    ), 0.0)
    result = SearchResult(
        algorithm=info.key,
        visited_order=trace.visited_order,
        path=path,
        cost=cost,
        allow_diagonal=allow_diagonal,
        trace=trace,
    )
    logger.debug(
        "%s %s→%s on %dx%d: visited=%d path=%d cost=%.2f",
        info.key, start, end, grid.width, grid.height,
        len(result.visited_order), len(path), cost,
    )
    return result, trace


def search(
    grid: Grid,
    start: Coord,
    end: Coord,
    algorithm: str = "astar",
    allow_diagonal: bool = False,
    heuristic: Optional[str] = None,
) -> SearchResult:
    """Run `algorithm`; the StepTrace rides along as `result.trace`."""
    result, _ = run_search(grid, start, end, algorithm, allow_diagonal, heuristic)
    return result
