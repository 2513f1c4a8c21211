"""Tests for the Flask JSON service."""

import threading

import pytest

import main
from main import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def post(client, url, **body):
    return client.post(url, json=body)


class TestCatalogue:
    def test_algorithms(self, client):
        data = client.get("/api/algorithms").get_json()
        assert [a["key"] for a in data["search"]] == ["bfs", "dfs", "dijkstra", "astar"]
        assert [a["key"] for a in data["maze"]] == ["recursive-backtracking", "randomized-prim"]
        assert data["speeds"]["medium"] == 0.05

    def test_default_state(self, client):
        data = client.get("/api/state").get_json()
        assert data["mode"] == "idle"
        assert data["grid"]["width"] == app.config["GRID_WIDTH"]
        assert data["playback"]["state"] == "idle"
        assert data["metrics"] is None


class TestGridEditing:
    def test_create_grid(self, client):
        data = post(client, "/api/grid", width=5, height=4).get_json()
        assert data["grid"]["start"] == [0, 0]
        assert data["grid"]["end"] == [3, 4]
        assert len(data["grid"]["rows"]) == 4

    def test_bad_dimensions_rejected(self, client):
        resp = post(client, "/api/grid", width=0, height=4)
        assert resp.status_code == 400
        assert resp.get_json()["type"] == "InvalidDimensionsError"

    def test_wall_and_clear(self, client):
        post(client, "/api/grid", width=5, height=5)
        data = post(client, "/api/grid/wall", row=2, col=3).get_json()
        assert data["grid"]["walls"] == [[2, 3]]
        data = post(client, "/api/grid/clear", what="walls").get_json()
        assert data["grid"]["walls"] == []

    def test_wall_out_of_bounds(self, client):
        post(client, "/api/grid", width=5, height=5)
        resp = post(client, "/api/grid/wall", row=9, col=0)
        assert resp.status_code == 400
        assert resp.get_json()["type"] == "OutOfBoundsError"

    def test_clear_unknown_target(self, client):
        assert post(client, "/api/grid/clear", what="everything").status_code == 400

    def test_scatter_is_seeded(self, client):
        post(client, "/api/grid", width=10, height=10)
        a = post(client, "/api/grid/scatter", density=0.4, seed=3).get_json()
        b = post(client, "/api/grid/scatter", density=0.4, seed=3).get_json()
        assert a["placed"] == b["placed"] > 0
        assert a["grid"]["walls"] == b["grid"]["walls"]


class TestRun:
    def test_run_scenario_a(self, client):
        post(client, "/api/grid", width=5, height=5)
        data = post(client, "/api/run", algorithm="bfs").get_json()
        assert data["result"]["found"]
        assert len(data["result"]["path"]) == 9
        assert data["metrics"]["path_length"] == 8
        assert data["playback"]["state"] == "paused"
        assert data["playback"]["total_steps"] == 34

        state = client.get("/api/state").get_json()
        assert state["mode"] == "search"
        assert state["metrics"]["algo_key"] == "bfs"

    def test_run_wall_endpoint(self, client):
        post(client, "/api/grid", width=5, height=5)
        post(client, "/api/grid/wall", row=4, col=4)
        resp = post(client, "/api/run", algorithm="astar")
        assert resp.status_code == 400
        assert resp.get_json()["type"] == "InvalidEndpointError"

    def test_run_unknown_algorithm(self, client):
        post(client, "/api/grid", width=5, height=5)
        resp = post(client, "/api/run", algorithm="greedy")
        assert resp.status_code == 400

    def test_maze(self, client):
        data = post(client, "/api/maze", width=7, height=7, seed=42).get_json()
        assert data["maze"]["seed"] == 42
        assert data["events"] == 2 * 9 - 1
        again = post(client, "/api/maze", width=7, height=7, seed=42).get_json()
        assert again["maze"]["grid"]["walls"] == data["maze"]["grid"]["walls"]

    def test_even_maze_rejected(self, client):
        resp = post(client, "/api/maze", width=8, height=7)
        assert resp.status_code == 400


class TestStepping:
    def test_next_prev_goto(self, client):
        post(client, "/api/grid", width=5, height=5)
        post(client, "/api/run", algorithm="dfs", end=[0, 2])
        assert post(client, "/api/step/prev").status_code == 400

        data = post(client, "/api/step/next").get_json()
        assert data["current_step"] == 0
        assert data["event"]["kind"] == "visit"
        assert data["event"]["cell"] == [0, 0]

        data = post(client, "/api/step/goto", index=5).get_json()
        assert data["state"] == "finished"
        assert post(client, "/api/step/next").status_code == 400
        assert post(client, "/api/step/goto", index=99).status_code == 400

        data = post(client, "/api/step/prev").get_json()
        assert data["current_step"] == 4

    def test_play_tick_cancel(self, client):
        post(client, "/api/grid", width=5, height=5)
        post(client, "/api/run", algorithm="astar")
        data = post(client, "/api/step/play", speed="turbo").get_json()
        assert data == {"is_playing": True, "speed": 0.01}

        tick = post(client, "/api/step/tick").get_json()
        assert "advanced" in tick

        data = post(client, "/api/step/cancel").get_json()
        assert data["state"] == "cancelled"
        assert post(client, "/api/step/next").status_code == 400

    def test_sessions_are_isolated(self, client):
        post(client, "/api/grid", width=5, height=5)
        with app.test_client() as other:
            assert other.get("/api/state").get_json()["grid"]["width"] == app.config["GRID_WIDTH"]


class TestBadInput:
    @pytest.mark.parametrize("start", [["a", "b"], [1.5, 0], "0,0", [0]])
    def test_malformed_run_endpoint(self, client, start):
        post(client, "/api/grid", width=5, height=5)
        resp = post(client, "/api/run", algorithm="bfs", start=start)
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_wall_missing_row(self, client):
        post(client, "/api/grid", width=5, height=5)
        resp = post(client, "/api/grid/wall", col=1)
        assert resp.status_code == 400
        assert "row" in resp.get_json()["error"]

    @pytest.mark.parametrize("body", [{"width": "wide"}, {"width": None}, {"width": 2.5}])
    def test_bad_grid_width(self, client, body):
        assert client.post("/api/grid", json=body).status_code == 400

    def test_bad_seed_and_density(self, client):
        assert post(client, "/api/maze", width=7, height=7, seed="abc").status_code == 400
        assert post(client, "/api/grid/scatter", density="dense").status_code == 400

    def test_non_object_body(self, client):
        assert client.post("/api/grid", json=[5, 5]).status_code == 400


class TestWorkspaces:
    def test_oldest_workspace_evicted(self, monkeypatch):
        monkeypatch.setitem(app.config, "MAX_WORKSPACES", 3)
        first = app.test_client()
        post(first, "/api/grid", width=5, height=5)
        for _ in range(5):
            app.test_client().get("/api/state")
        assert len(main._WORKSPACES) <= 3

        state = first.get("/api/state").get_json()
        assert state["grid"]["width"] == app.config["GRID_WIDTH"]

    def test_recent_use_protects_from_eviction(self, monkeypatch):
        monkeypatch.setitem(app.config, "MAX_WORKSPACES", 2)
        keep = app.test_client()
        post(keep, "/api/grid", width=5, height=5)
        for _ in range(4):
            app.test_client().get("/api/state")
            keep.get("/api/state")
        assert keep.get("/api/state").get_json()["grid"]["width"] == 5

    def test_requests_wait_for_the_workspace_lock(self):
        client = app.test_client()
        post(client, "/api/grid", width=5, height=5)
        with client.session_transaction() as sess:
            ws = main._WORKSPACES[sess["sid"]]

        responses = []
        worker = threading.Thread(
            target=lambda: responses.append(post(client, "/api/run", algorithm="bfs"))
        )
        with ws.lock:
            worker.start()
            worker.join(timeout=0.2)
            assert worker.is_alive()
            assert ws.mode == "idle"
        worker.join(timeout=5)
        assert not worker.is_alive()
        assert responses[0].status_code == 200
        assert ws.mode == "search"
