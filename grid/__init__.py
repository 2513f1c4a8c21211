"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, Cell, CellState, Coord
    from grid import create_grid, set_wall
    from grid import GridError, InvalidDimensionsError, OutOfBoundsError, InvalidEndpointError
"""

from grid.cell   import Cell, CellState, Coord, INF
from grid.grid   import Grid, create_grid, set_wall
from grid.errors import (
    GridError,
    InvalidDimensionsError,
    OutOfBoundsError,
    InvalidEndpointError,
)

__all__ = [
    "Cell",      "CellState",   "Coord",   "INF",
    "Grid",      "create_grid", "set_wall",
    "GridError",
    "InvalidDimensionsError",
    "OutOfBoundsError",
    "InvalidEndpointError",
]
