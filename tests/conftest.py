import pytest

from grid import Grid


@pytest.fixture
def open_grid() -> Grid:
    return Grid(5, 5)


@pytest.fixture
def walled_row_grid() -> Grid:
    """5x5 with row 2 walled end to end, cutting top from bottom."""
    g = Grid(5, 5)
    for c in range(5):
        g.set_wall(2, c, True)
    return g


@pytest.fixture
def detour_grid() -> Grid:
    """7x7 with a wall down column 3 leaving only row 6 open."""
    g = Grid(7, 7)
    for r in range(6):
        g.set_wall(r, 3, True)
    return g


def is_contiguous(grid: Grid, path, allow_diagonal: bool = False) -> bool:
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        dr, dc = abs(r1 - r2), abs(c1 - c2)
        if allow_diagonal:
            if max(dr, dc) != 1:
                return False
        elif dr + dc != 1:
            return False
    return all(not grid.cell(r, c).is_wall for r, c in path)


@pytest.fixture
def contiguous():
    return is_contiguous
