"""Tests for the Grid container."""

import random

import pytest

from grid import (
    Cell,
    CellState,
    Grid,
    InvalidDimensionsError,
    OutOfBoundsError,
    create_grid,
    set_wall,
)


class TestCreate:
    def test_dimensions(self):
        g = create_grid(7, 3)
        assert (g.width, g.height) == (7, 3)
        assert len(g) == 21
        assert g.cell(2, 6).coord == (2, 6)

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3), (0, 0)])
    def test_non_positive_dimensions_raise(self, width, height):
        with pytest.raises(InvalidDimensionsError):
            Grid.create(width, height)

    def test_one_by_one_is_valid(self):
        g = Grid(1, 1)
        assert g.neighbors((0, 0), allow_diagonal=True) == []

    def test_cells_do_not_alias(self):
        g = Grid(3, 3)
        ids = {id(c) for c in g.cells()}
        assert len(ids) == 9
        g.cell(0, 0).visited = True
        assert not g.cell(0, 1).visited

    def test_fresh_cell_defaults(self):
        c = Grid(2, 2).cell(1, 1)
        assert c.distance == float("inf")
        assert c.f_score == float("inf")
        assert c.previous is None
        assert c.state is CellState.UNVISITED


class TestNeighbors:
    def test_corner_cardinal(self, open_grid):
        coords = [c.coord for c in open_grid.neighbors((0, 0))]
        assert coords == [(1, 0), (0, 1)]

    def test_center_cardinal_order(self, open_grid):
        coords = [c.coord for c in open_grid.neighbors((2, 2))]
        assert coords == [(1, 2), (3, 2), (2, 1), (2, 3)]

    def test_center_diagonal_order(self, open_grid):
        coords = [c.coord for c in open_grid.neighbors(open_grid.cell(2, 2), allow_diagonal=True)]
        assert coords == [
            (1, 2), (3, 2), (2, 1), (2, 3),
            (1, 1), (1, 3), (3, 1), (3, 3),
        ]

    def test_walls_filtered(self, open_grid):
        open_grid.set_wall(1, 2, True)
        coords = [c.coord for c in open_grid.neighbors((2, 2))]
        assert (1, 2) not in coords
        assert len(coords) == 3

    def test_diagonal_squeezes_between_walls(self, open_grid):
        open_grid.set_wall(0, 1, True)
        open_grid.set_wall(1, 0, True)
        coords = [c.coord for c in open_grid.neighbors((0, 0), allow_diagonal=True)]
        assert coords == [(1, 1)]

    def test_bottom_right_corner_never_raises(self, open_grid):
        coords = [c.coord for c in open_grid.neighbors((4, 4), allow_diagonal=True)]
        assert sorted(coords) == [(3, 3), (3, 4), (4, 3)]

    def test_lattice_neighbors_include_walls(self):
        g = Grid(5, 5)
        g.fill_walls()
        coords = [c.coord for c in g.lattice_neighbors((1, 1))]
        assert coords == [(3, 1), (1, 3)]


class TestWalls:
    def test_set_wall_functional(self, open_grid):
        set_wall(open_grid, 3, 4, True)
        assert open_grid.cell(3, 4).is_wall
        set_wall(open_grid, 3, 4, False)
        assert not open_grid.cell(3, 4).is_wall

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (5, 0), (0, 5)])
    def test_set_wall_out_of_bounds(self, open_grid, row, col):
        with pytest.raises(OutOfBoundsError):
            open_grid.set_wall(row, col, True)

    def test_out_of_bounds_is_index_error(self, open_grid):
        with pytest.raises(IndexError):
            open_grid.cell(9, 9)

    def test_toggle(self, open_grid):
        assert open_grid.toggle_wall(1, 1) is True
        assert open_grid.toggle_wall(1, 1) is False

    def test_fill_and_clear(self, open_grid):
        open_grid.fill_walls()
        assert len(open_grid.walls()) == 25
        open_grid.clear_walls()
        assert open_grid.walls() == []

    def test_scatter_is_seeded_and_spares_markers(self):
        a, b = Grid(20, 10), Grid(20, 10)
        for g in (a, b):
            g.start, g.end = (0, 0), (9, 19)
            g.scatter_walls(0.5, random.Random(7))
        assert a.walls() == b.walls()
        assert 0 < len(a.walls()) < 200
        assert not a.cell(0, 0).is_wall
        assert not a.cell(9, 19).is_wall

    def test_scatter_keep(self):
        g = Grid(4, 4)
        placed = g.scatter_walls(1.0, random.Random(1), keep=[(2, 2)])
        assert placed == 15
        assert not g.cell(2, 2).is_wall


class TestReset:
    def test_reset_keeps_walls_and_markers(self, open_grid):
        open_grid.start, open_grid.end = (0, 0), (4, 4)
        open_grid.set_wall(2, 2, True)
        c = open_grid.cell(1, 1)
        c.visited, c.on_path, c.distance, c.previous = True, True, 3.0, (0, 1)

        open_grid.reset()

        assert open_grid.cell(2, 2).is_wall
        assert (open_grid.start, open_grid.end) == ((0, 0), (4, 4))
        assert not c.visited and not c.on_path
        assert c.distance == float("inf")
        assert c.previous is None

    def test_clear_all_drops_walls(self, open_grid):
        open_grid.set_wall(2, 2, True)
        open_grid.cell(0, 0).visited = True
        open_grid.clear_all()
        assert open_grid.walls() == []
        assert not open_grid.cell(0, 0).visited


class TestCopyAndSerialise:
    def test_clone_is_independent(self, open_grid):
        open_grid.set_wall(1, 1, True)
        twin = open_grid.clone()
        twin.set_wall(3, 3, True)
        twin.cell(0, 0).visited = True
        assert not open_grid.cell(3, 3).is_wall
        assert not open_grid.cell(0, 0).visited
        assert twin.cell(1, 1).is_wall

    def test_snapshot_tracks_replayable_flags(self, open_grid):
        before = open_grid.snapshot()
        open_grid.cell(0, 0).distance = 4.0
        assert open_grid.snapshot() == before
        open_grid.cell(0, 0).visited = True
        assert open_grid.snapshot() != before

    def test_dict_round_trip(self, open_grid):
        open_grid.set_wall(1, 3, True)
        open_grid.start, open_grid.end = (0, 0), (4, 4)
        again = Grid.from_dict(open_grid.to_dict())
        assert again.walls() == [(1, 3)]
        assert (again.start, again.end) == ((0, 0), (4, 4))

    def test_to_text(self):
        g = Grid(3, 2)
        g.set_wall(0, 1, True)
        g.cell(1, 0).visited = True
        g.cell(1, 2).on_path = True
        assert g.to_text() == " # \n. *"


class TestPathTo:
    def test_follows_previous(self, open_grid):
        open_grid.cell(0, 1).previous = (0, 0)
        open_grid.cell(0, 2).previous = (0, 1)
        assert open_grid.path_to((0, 2)) == [(0, 0), (0, 1), (0, 2)]

    def test_cycle_detected(self, open_grid):
        open_grid.cell(0, 0).previous = (0, 1)
        open_grid.cell(0, 1).previous = (0, 0)
        with pytest.raises(RuntimeError, match="cycle"):
            open_grid.path_to((0, 0))

    def test_cell_distance(self):
        assert Cell(0, 0).distance_to(Cell(1, 1)) == pytest.approx(2 ** 0.5)
