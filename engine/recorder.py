"""
recorder.py — Run Recorder & Analytics
========================================
Runs one search to completion, keeps its trace, and computes the
numbers the stats panel shows (cells visited, path length, time).

Usage:
    rec = Recorder()
    rec.start("dijkstra", grid, (0, 0), (4, 4))
    metrics = rec.run_to_completion()
    rec.export()                     # serialisable snapshot for replay

Comparison Mode:
    Run two Recorders on clones of the SAME grid, then
    compare(rec1, rec2) → ComparisonResult.
"""

import time
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any

from grid import Grid, Coord
from algorithms import SEARCH, get_algorithm
from algorithms.step import StepTrace
from engine.pathfinding import SearchResult, check_endpoint, run_search


# ---------------------------------------------------------------------------
# Metrics dataclass: what the stats panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:       str   = ""
    algo_label:     str   = ""
    start:          Optional[Coord] = None
    end:            Optional[Coord] = None
    allow_diagonal: bool  = False
    cells_visited:  int   = 0
    path_length:    int   = 0          # number of moves on the final path
    path_cost:      float = 0.0        # total step cost of the final path
    total_steps:    int   = 0          # number of events in the trace
    wall_time_ms:   float = 0.0        # wall-clock time to run to completion
    path_found:     bool  = False


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_cells: str = ""   # which algo visited fewer cells
    winner_path:  str = ""   # which algo found the cheaper path


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        result  : SearchResult of the completed run.
        trace   : StepTrace of the completed run.
        metrics : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.result:  Optional[SearchResult] = None
        self.trace:   Optional[StepTrace]    = None
        self.metrics: Optional[RunMetrics]   = None

        self._algo_key:       str             = ""
        self._grid:           Optional[Grid]  = None
        self._start:          Optional[Coord] = None
        self._end:            Optional[Coord] = None
        self._allow_diagonal: bool            = False
        self._heuristic:      Optional[str]   = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(
        self,
        algo_key: str,
        grid: Grid,
        start: Coord,
        end: Coord,
        allow_diagonal: bool = False,
        heuristic: Optional[str] = None,
    ) -> None:
        """Remember what to run; nothing executes until run_to_completion()."""
        info = get_algorithm(algo_key)
        if info is None or info.family != SEARCH:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        self._algo_key       = algo_key
        self._grid           = grid
        self._start          = check_endpoint(grid, start, "start")
        self._end            = check_endpoint(grid, end, "end")
        self._allow_diagonal = allow_diagonal
        self._heuristic      = heuristic
        self.result          = None
        self.trace           = None
        self.metrics         = None

    def run_to_completion(self) -> RunMetrics:
        """Run the search, keep the trace, compute metrics."""
        if self._grid is None:
            raise RuntimeError("Call start() first.")

        t0 = time.monotonic()
        self.result, self.trace = run_search(
            self._grid, self._start, self._end,
            self._algo_key, self._allow_diagonal, self._heuristic,
        )
        wall_ms = (time.monotonic() - t0) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key":       self._algo_key,
            "start":          list(self._start) if self._start else None,
            "end":            list(self._end) if self._end else None,
            "allow_diagonal": self._allow_diagonal,
            "heuristic":      self._heuristic,
            "grid":           self._grid.to_dict() if self._grid else {},
            "metrics":        asdict(self.metrics) if self.metrics else {},
            "trace":          self.trace.to_dict() if self.trace else {},
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info   = get_algorithm(self._algo_key)
        result = self.result
        path   = result.path if result else []

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            start=self._start,
            end=self._end,
            allow_diagonal=self._allow_diagonal,
            cells_visited=len(result.visited_order) if result else 0,
            path_length=len(path) - 1 if len(path) > 1 else 0,
            path_cost=result.cost if result else 0.0,
            total_steps=len(self.trace) if self.trace else 0,
            wall_time_ms=round(wall_ms, 2),
            path_found=bool(path),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    # an unfound path can never win on cost
    l_cost = l.path_cost if l.path_found else float("inf")
    r_cost = r.path_cost if r.path_found else float("inf")

    return ComparisonResult(
        left=l,
        right=r,
        winner_cells=winner(l.cells_visited, r.cells_visited, l.algo_label, r.algo_label),
        winner_path=winner(l_cost, r_cost, l.algo_label, r.algo_label),
    )
