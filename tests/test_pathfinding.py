"""Tests for the four search algorithms and the search() dispatcher."""

import math

import pytest

from grid import Grid, InvalidEndpointError
from algorithms.step import EventKind, StepTrace
from engine import run_search, search


ALL = ["bfs", "dfs", "dijkstra", "astar"]
OPTIMAL = ["bfs", "dijkstra", "astar"]


class TestOpenGrid:
    def test_scenario_a_shortest_paths_agree(self, open_grid):
        lengths = {
            algo: len(search(open_grid, (0, 0), (4, 4), algo).path)
            for algo in OPTIMAL
        }
        assert lengths == {"bfs": 9, "dijkstra": 9, "astar": 9}

    @pytest.mark.parametrize("algo", ALL)
    def test_path_endpoints_and_contiguity(self, open_grid, contiguous, algo):
        result = search(open_grid, (0, 0), (4, 4), algo)
        assert result.found
        assert result.path[0] == (0, 0)
        assert result.path[-1] == (4, 4)
        assert contiguous(open_grid, result.path)

    @pytest.mark.parametrize("algo", ALL)
    def test_start_equals_end(self, open_grid, algo):
        result = search(open_grid, (2, 2), (2, 2), algo)
        assert result.path == [(2, 2)]
        assert result.visited_order[0] == (2, 2)
        assert result.cost == 0.0

    def test_path_cells_marked_on_grid(self, open_grid):
        result = search(open_grid, (0, 0), (4, 4), "astar")
        on_path = [c.coord for c in open_grid.cells() if c.on_path]
        assert sorted(on_path) == sorted(result.path)
        assert open_grid.cell(0, 0).previous is None


class TestWalledOff:
    @pytest.mark.parametrize("algo", ALL)
    def test_scenario_b_no_path(self, walled_row_grid, algo):
        result = search(walled_row_grid, (0, 0), (4, 4), algo)
        assert result.path == []
        assert not result.found
        top_half = {(r, c) for r in range(2) for c in range(5)}
        assert len(result.visited_order) == 10
        assert set(result.visited_order) == top_half

    @pytest.mark.parametrize("algo", ALL)
    def test_no_path_with_diagonals(self, walled_row_grid, algo):
        result = search(walled_row_grid, (0, 0), (4, 4), algo, allow_diagonal=True)
        assert result.path == []
        assert len(result.visited_order) == 10


class TestDetour:
    def test_optimality_parity(self, detour_grid, contiguous):
        results = {a: search(detour_grid, (0, 0), (0, 6), a) for a in OPTIMAL}
        assert {a: len(r.path) for a, r in results.items()} == {a: 19 for a in OPTIMAL}
        for r in results.values():
            assert contiguous(detour_grid, r.path)
            assert (6, 3) in r.path

    def test_parity_with_diagonals(self, detour_grid, contiguous):
        dij = search(detour_grid, (0, 0), (0, 6), "dijkstra", allow_diagonal=True)
        ast = search(detour_grid, (0, 0), (0, 6), "astar", allow_diagonal=True)
        assert len(dij.path) == len(ast.path)
        assert dij.cost == pytest.approx(ast.cost)
        assert contiguous(detour_grid, ast.path, allow_diagonal=True)

    def test_astar_explores_no_more_than_dijkstra(self, detour_grid, open_grid):
        for g, end in ((detour_grid, (0, 6)), (open_grid, (4, 4))):
            dij = search(g, (0, 0), end, "dijkstra")
            ast = search(g, (0, 0), end, "astar")
            assert len(ast.visited_order) <= len(dij.visited_order)

    def test_zero_heuristic_matches_dijkstra(self, detour_grid):
        dij = search(detour_grid, (0, 0), (0, 6), "dijkstra")
        ast = search(detour_grid, (0, 0), (0, 6), "astar", heuristic="zero")
        assert ast.visited_order == dij.visited_order
        assert ast.path == dij.path


class TestDfs:
    def test_dfs_can_be_longer_than_bfs(self, open_grid, contiguous):
        dfs = search(open_grid, (0, 0), (4, 0), "dfs")
        bfs = search(open_grid, (0, 0), (4, 0), "bfs")
        assert len(bfs.path) == 5
        assert len(dfs.path) > len(bfs.path)
        assert contiguous(open_grid, dfs.path)

    def test_dfs_goes_right_first(self, open_grid):
        # right is the last neighbour pushed, so it is popped first
        result = search(open_grid, (0, 0), (4, 4), "dfs")
        assert result.visited_order[:5] == [(0, c) for c in range(5)]


class TestDiagonal:
    @pytest.mark.parametrize("algo", OPTIMAL)
    def test_straight_diagonal(self, open_grid, algo):
        result = search(open_grid, (0, 0), (4, 4), algo, allow_diagonal=True)
        assert result.path == [(i, i) for i in range(5)]
        assert result.cost == pytest.approx(4 * math.sqrt(2))


class TestValidation:
    @pytest.mark.parametrize("start,end", [((-1, 0), (4, 4)), ((0, 0), (5, 5)), ((0, 0), (4, 9))])
    def test_out_of_bounds_endpoint(self, open_grid, start, end):
        with pytest.raises(InvalidEndpointError, match="out of bounds"):
            search(open_grid, start, end, "bfs")

    def test_wall_endpoint(self, open_grid):
        open_grid.set_wall(4, 4, True)
        with pytest.raises(InvalidEndpointError, match="wall"):
            search(open_grid, (0, 0), (4, 4), "astar")

    def test_malformed_endpoint(self, open_grid):
        with pytest.raises(InvalidEndpointError):
            search(open_grid, 3, (4, 4), "astar")

    @pytest.mark.parametrize("start", [("a", "b"), (1.0, 2), (True, 0), (None, 1)])
    def test_non_integer_endpoint(self, open_grid, start):
        with pytest.raises(InvalidEndpointError, match="integers"):
            search(open_grid, start, (4, 4), "bfs")

    def test_unknown_algorithm(self, open_grid):
        with pytest.raises(ValueError, match="Unknown search algorithm"):
            search(open_grid, (0, 0), (4, 4), "greedy")

    def test_maze_key_is_not_a_search(self, open_grid):
        with pytest.raises(ValueError):
            search(open_grid, (0, 0), (4, 4), "randomized-prim")

    def test_unknown_heuristic(self, open_grid):
        with pytest.raises(ValueError, match="Unknown heuristic"):
            search(open_grid, (0, 0), (4, 4), "astar", heuristic="chebyshev")


class TestTraceInvariants:
    @pytest.mark.parametrize("algo", ALL)
    @pytest.mark.parametrize("diagonal", [False, True])
    def test_visits_unique_and_path_after_visit(self, detour_grid, algo, diagonal):
        result, trace = run_search(detour_grid, (0, 0), (0, 6), algo, diagonal)
        assert isinstance(trace, StepTrace)
        assert result.trace is trace

        seen = set()
        for event in trace:
            if event.kind is EventKind.VISIT:
                assert event.cell not in seen
                seen.add(event.cell)
            else:
                assert event.kind is EventKind.MARK_PATH
                assert event.cell in seen
        assert [e.step_number for e in trace] == list(range(len(trace)))

    def test_rerun_resets_previous_state(self, open_grid):
        first = search(open_grid, (0, 0), (4, 4), "bfs")
        search(open_grid, (0, 0), (0, 4), "dfs")
        again = search(open_grid, (0, 0), (4, 4), "bfs")
        assert again.visited_order == first.visited_order
        assert again.path == first.path

    def test_search_on_clone_leaves_original(self, open_grid):
        twin = open_grid.clone()
        search(twin, (0, 0), (4, 4), "dijkstra")
        assert not any(c.visited for c in open_grid.cells())

    def test_result_to_dict(self, open_grid):
        data = search(open_grid, (0, 0), (0, 2), "bfs").to_dict()
        assert data["found"] is True
        assert data["path"] == [[0, 0], [0, 1], [0, 2]]
