from enum import Enum
from typing import Optional, Tuple, Dict, Any


Coord = Tuple[int, int]      # (row, col)

INF = float("inf")


# ---------------------------------------------------------------------------
# Cell State Enum: derived view used by renderers and the state machine
# ---------------------------------------------------------------------------
class CellState(Enum):
    UNVISITED = "unvisited"   # default
    FRONTIER  = "frontier"    # "seen but not yet processed"
    VISITED   = "visited"     # processed by the search
    PATH      = "path"        # on the final reconstructed path
    WALL      = "wall"        # obstacle


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
class Cell:
    """
    Immutable identity (row, col), mutable wall flag and algorithm state.

    Attributes:
        row, col  : Position in the grid.
        is_wall   : Obstacle flag.  Survives Grid.reset().
        distance  : Best-known cost from the search origin (g-score).
        heuristic : Estimated cost to the target (A* only).
        f_score   : distance + heuristic (A* only).
        visited   : Processed by the current run.
        frontier  : Discovered but not yet processed.
        on_path   : Part of the final reconstructed path.
        previous  : (row, col) of the predecessor, or None.  Always a
                    coordinate, never a Cell, so the back-pointers stay
                    a forest that can be copied and serialised freely.
    """

    __slots__ = (
        "row", "col", "is_wall", "distance", "heuristic", "f_score",
        "visited", "frontier", "on_path", "previous",
    )

    def __init__(self, row: int, col: int, is_wall: bool = False):
        self.row: int                  = row
        self.col: int                  = col
        self.is_wall: bool             = is_wall
        self.distance: float           = INF
        self.heuristic: float          = 0.0
        self.f_score: float            = INF
        self.visited: bool             = False
        self.frontier: bool            = False
        self.on_path: bool             = False
        self.previous: Optional[Coord] = None

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    @property
    def state(self) -> CellState:
        if self.is_wall:
            return CellState.WALL
        if self.on_path:
            return CellState.PATH
        if self.visited:
            return CellState.VISITED
        if self.frontier:
            return CellState.FRONTIER
        return CellState.UNVISITED

    def reset_algo_state(self) -> None:
        """Keep the wall flag, clear everything a search wrote."""
        self.distance  = INF
        self.heuristic = 0.0
        self.f_score   = INF
        self.visited   = False
        self.frontier  = False
        self.on_path   = False
        self.previous  = None

    def copy(self) -> "Cell":
        other = Cell(self.row, self.col, self.is_wall)
        other.distance  = self.distance
        other.heuristic = self.heuristic
        other.f_score   = self.f_score
        other.visited   = self.visited
        other.frontier  = self.frontier
        other.on_path   = self.on_path
        other.previous  = self.previous
        return other

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def distance_to(self, other: "Cell") -> float:
        """Euclidean distance between cell centres."""
        return ((self.row - other.row) ** 2 + (self.col - other.col) ** 2) ** 0.5

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "row":      self.row,
            "col":      self.col,
            "is_wall":  self.is_wall,
            "visited":  self.visited,
            "on_path":  self.on_path,
            "state":    self.state.value,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Cell(({self.row}, {self.col}), state={self.state.value})"
