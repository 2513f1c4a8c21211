"""
grid.py — Grid Container
=========================
Single source of truth for the cell lattice.  Algorithms and the
replay layer both talk to this object.

Responsibilities:
  1. Construction with validated dimensions        (create)
  2. Bounds-checked cell access                    (cell, in_bounds)
  3. Neighbour enumeration, 4- or 8-connected      (neighbors)
  4. Wall mutation                                 (set_wall, toggle_wall, …)
  5. Reset helpers                                 (reset, clear_all)
  6. Copy / snapshot / dict round-trip             (clone, snapshot, to_dict)

Design decisions:
  - Cells are stored row-major in a list of lists; every coordinate owns
    its own Cell object (no aliasing).
  - `width` is the number of columns, `height` the number of rows, and
    both are fixed after construction.
  - Diagonal moves are allowed between two orthogonal walls (no
    corner-cutting check).  Callers depend on this, keep it.
"""

import logging
import random
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union, Any

from grid.cell import Cell, Coord
from grid.errors import InvalidDimensionsError, OutOfBoundsError


logger = logging.getLogger(__name__)

CellRef = Union[Cell, Coord]

# neighbour offsets, in expansion order
CARDINAL: List[Tuple[int, int]] = [(-1, 0), (1, 0), (0, -1), (0, 1)]        # up, down, left, right
DIAGONAL: List[Tuple[int, int]] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]


class Grid:
    """
    Attributes:
        width   : Number of columns.
        height  : Number of rows.
        start   : Optional (row, col) start marker, kept across reset().
        end     : Optional (row, col) end marker, kept across reset().
        _cells  : [[Cell, …], …] indexed [row][col].
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise InvalidDimensionsError(width, height)
        self.width:  int             = width
        self.height: int             = height
        self.start:  Optional[Coord] = None
        self.end:    Optional[Coord] = None
        self._cells: List[List[Cell]] = [
            [Cell(r, c) for c in range(width)] for r in range(height)
        ]

    @classmethod
    def create(cls, width: int, height: int) -> "Grid":
        return cls(width, height)

    # ==================================================================
    # ACCESS
    # ==================================================================
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self.width, self.height)
        return self._cells[row][col]

    def at(self, ref: CellRef) -> Cell:
        """Resolve a Cell or a (row, col) pair to the Cell stored here."""
        row, col = ref.coord if isinstance(ref, Cell) else ref
        return self.cell(row, col)

    def cells(self) -> Iterator[Cell]:
        """Every cell in row-major order."""
        for row in self._cells:
            yield from row

    def __iter__(self) -> Iterator[Cell]:
        return self.cells()

    def __len__(self) -> int:
        return self.width * self.height

    # ==================================================================
    # ADJACENCY
    # ==================================================================
    def neighbors(self, ref: CellRef, allow_diagonal: bool = False) -> List[Cell]:
        """
        In-bounds, non-wall neighbours of `ref`: up, down, left, right,
        then (when allowed) up-left, up-right, down-left, down-right.
        Out-of-range coordinates are filtered, never raised.
        """
        row, col = ref.coord if isinstance(ref, Cell) else ref
        offsets = CARDINAL + DIAGONAL if allow_diagonal else CARDINAL
        result = []
        for dr, dc in offsets:
            r, c = row + dr, col + dc
            if self.in_bounds(r, c):
                nbr = self._cells[r][c]
                if not nbr.is_wall:
                    result.append(nbr)
        return result

    def lattice_neighbors(self, ref: CellRef, distance: int = 2) -> List[Cell]:
        """
        Cells `distance` steps away in the four cardinal directions,
        walls included.  Maze carving uses distance 2 to hop room to room.
        """
        row, col = ref.coord if isinstance(ref, Cell) else ref
        result = []
        for dr, dc in CARDINAL:
            r, c = row + dr * distance, col + dc * distance
            if self.in_bounds(r, c):
                result.append(self._cells[r][c])
        return result

    @staticmethod
    def step_cost(a: Cell, b: Cell, allow_diagonal: bool = False) -> float:
        """Uniform 1 on a 4-connected grid, Euclidean (1 or √2) otherwise."""
        return a.distance_to(b) if allow_diagonal else 1.0

    def path_to(self, ref: CellRef) -> List[Coord]:
        """Follow `previous` back-pointers from `ref` to the search origin."""
        path: List[Coord] = []
        cur: Optional[Coord] = ref.coord if isinstance(ref, Cell) else tuple(ref)
        while cur is not None:
            path.append(cur)
            if len(path) > len(self):
                raise RuntimeError(f"previous-chain from {path[0]} contains a cycle")
            cur = self.cell(*cur).previous
        path.reverse()
        return path

    # ==================================================================
    # WALLS
    # ==================================================================
    def set_wall(self, row: int, col: int, is_wall: bool = True) -> None:
        self.cell(row, col).is_wall = bool(is_wall)

    def toggle_wall(self, row: int, col: int) -> bool:
        cell = self.cell(row, col)
        cell.is_wall = not cell.is_wall
        return cell.is_wall

    def walls(self) -> List[Coord]:
        return [c.coord for c in self.cells() if c.is_wall]

    def fill_walls(self) -> None:
        """Turn every cell into a wall and wipe search state (maze carving start)."""
        for c in self.cells():
            c.reset_algo_state()
            c.is_wall = True

    def clear_walls(self) -> None:
        for c in self.cells():
            c.is_wall = False

    def scatter_walls(
        self,
        density: float,
        rng: random.Random,
        keep: Iterable[Coord] = (),
    ) -> int:
        """
        Random obstacle field: every cell independently becomes a wall
        with probability `density`.  Coordinates in `keep` (usually the
        start/end markers) are never walled.  Returns the wall count.
        """
        protected = set(keep)
        for m in (self.start, self.end):
            if m is not None:
                protected.add(m)
        placed = 0
        for c in self.cells():
            if rng.random() < density and c.coord not in protected:
                c.is_wall = True
                placed += 1
        logger.debug("scattered %d walls at density %.2f", placed, density)
        return placed

    # ==================================================================
    # RESET (keep structure, wipe algo state)
    # ==================================================================
    def reset(self) -> None:
        """Clear visited/distance/path state; walls and markers survive."""
        for c in self.cells():
            c.reset_algo_state()

    def clear_all(self) -> None:
        self.reset()
        self.clear_walls()

    # ==================================================================
    # COPY / COMPARE / SERIALISATION
    # ==================================================================
    def clone(self) -> "Grid":
        """Independent deep copy for what-if searches."""
        g = Grid(self.width, self.height)
        g.start = self.start
        g.end   = self.end
        g._cells = [[c.copy() for c in row] for row in self._cells]
        return g

    def snapshot(self) -> Tuple[Tuple[Tuple[bool, bool, bool], ...], ...]:
        """The replayable layer: (is_wall, visited, on_path) per cell."""
        return tuple(
            tuple((c.is_wall, c.visited, c.on_path) for c in row)
            for row in self._cells
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width":  self.width,
            "height": self.height,
            "start":  list(self.start) if self.start else None,
            "end":    list(self.end) if self.end else None,
            "walls":  [list(w) for w in self.walls()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Grid":
        g = cls(data["width"], data["height"])
        if data.get("start"):
            g.start = tuple(data["start"])
        if data.get("end"):
            g.end = tuple(data["end"])
        for r, c in data.get("walls", []):
            g.set_wall(r, c, True)
        return g

    def to_text(self) -> str:
        """ASCII picture: '#' wall, '*' path, '.' visited, ' ' open."""
        glyphs = {"wall": "#", "path": "*", "visited": ".", "frontier": " ", "unvisited": " "}
        return "\n".join(
            "".join(glyphs[c.state.value] for c in row) for row in self._cells
        )

    # ==================================================================
    # UTILITY
    # ==================================================================
    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, walls={len(self.walls())})"


# ---------------------------------------------------------------------------
# Functional API
# ---------------------------------------------------------------------------
def create_grid(width: int, height: int) -> Grid:
    return Grid.create(width, height)


def set_wall(grid: Grid, row: int, col: int, is_wall: bool) -> None:
    grid.set_wall(row, col, is_wall)
