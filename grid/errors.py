"""
errors.py — Grid Error Taxonomy
================================
Every failure the engine raises is a synchronous caller-contract
violation.  "No path exists" is NOT here: that is a normal, empty
SearchResult.

    GridError
      ├── InvalidDimensionsError   (also a ValueError)
      ├── OutOfBoundsError         (also an IndexError)
      └── InvalidEndpointError     (also a ValueError)
"""


class GridError(Exception):
    """Base class for all grid-engine failures."""


class InvalidDimensionsError(GridError, ValueError):
    def __init__(self, width: int, height: int, reason: str = "must both be >= 1"):
        self.width  = width
        self.height = height
        super().__init__(f"Invalid grid dimensions {width}x{height}: {reason}")


class OutOfBoundsError(GridError, IndexError):
    def __init__(self, row: int, col: int, width: int, height: int):
        self.row = row
        self.col = col
        super().__init__(
            f"Coordinate ({row}, {col}) is outside the {width}x{height} grid"
        )


class InvalidEndpointError(GridError, ValueError):
    def __init__(self, role: str, coord, reason: str):
        self.role  = role
        self.coord = coord
        super().__init__(f"Invalid {role} {coord}: {reason}")
