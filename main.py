"""
main.py — Grid Algorithm Visualizer Flask App
===============================================
JSON service that drives the grid engine for a browser front-end.

Routes:
  GET  /api/algorithms          – registry cards (search + maze)
  GET  /api/state               – current workspace state
  POST /api/grid                – create a new empty grid
  POST /api/grid/wall           – set / clear one wall
  POST /api/grid/scatter        – random obstacle field
  POST /api/grid/clear          – clear path, walls, or everything
  POST /api/run                 – run a search, load its trace
  POST /api/maze                – generate a maze, load its trace
  POST /api/step/next           – apply one more event
  POST /api/step/prev           – un-apply one event
  POST /api/step/goto           – jump to event N
  POST /api/step/play           – toggle play/pause
  POST /api/step/tick           – advance if the cadence allows
  POST /api/step/cancel         – cancel playback

State management:
  Each browser session gets a Workspace kept in process memory (the
  grid is too large for a cookie).  At most MAX_WORKSPACES are kept;
  the least recently used one is evicted first.  Every request holds
  its workspace's lock, so one grid never sees two runs at once.
  A workspace holds:
    • grid            – the editable Grid
    • recorder        – last search Recorder (metrics + trace)
    • stepper         – playback over the last trace
    • mode            – "idle", "search" or "maze"

Configuration:
  Defaults live in app.config and can be overridden with GRIDVIZ_*
  environment variables, e.g. GRIDVIZ_GRID_WIDTH=80.
"""

import logging
import random
import secrets
import threading
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from typing import Iterator, Optional

from flask import Flask, jsonify, request, session

from grid import Grid, GridError
from algorithms import MAZE, SEARCH, list_algorithms
from engine import Recorder, Stepper, generate_maze
from engine.stepper import SPEED_PRESETS


logger = logging.getLogger(__name__)


app = Flask(__name__)
app.secret_key = secrets.token_hex(32)
app.config.from_mapping(
    GRID_WIDTH=50,
    GRID_HEIGHT=25,
    MAZE_WIDTH=51,
    MAZE_HEIGHT=31,
    DEFAULT_ALGORITHM="astar",
    DEFAULT_MAZE_ALGORITHM="recursive-backtracking",
    DEFAULT_SPEED="medium",
    WALL_DENSITY=0.3,
    MAX_WORKSPACES=256,
)
app.config.from_prefixed_env("GRIDVIZ")


# ---------------------------------------------------------------------------
# Workspace State
# ---------------------------------------------------------------------------
@dataclass
class Workspace:
    grid:     Grid
    stepper:  Stepper            = field(default_factory=Stepper)
    recorder: Optional[Recorder] = None
    mode:     str                = "idle"       # "search" | "maze" | "idle"
    lock:     threading.Lock     = field(default_factory=threading.Lock, repr=False)


_WORKSPACES: "OrderedDict[str, Workspace]" = OrderedDict()
_WORKSPACES_LOCK = threading.Lock()


def _default_grid() -> Grid:
    g = Grid(app.config["GRID_WIDTH"], app.config["GRID_HEIGHT"])
    mid = g.height // 2
    g.start = (mid, g.width // 5)
    g.end   = (mid, g.width - 1 - g.width // 5)
    return g


def get_workspace() -> Workspace:
    """Look up (or create) the caller's workspace, marking it most recent."""
    sid = session.get("sid")
    with _WORKSPACES_LOCK:
        if sid is not None and sid in _WORKSPACES:
            _WORKSPACES.move_to_end(sid)
            return _WORKSPACES[sid]

        sid = secrets.token_hex(8)
        session["sid"] = sid
        ws = Workspace(grid=_default_grid())
        ws.stepper.set_speed(app.config["DEFAULT_SPEED"])
        _WORKSPACES[sid] = ws
        while len(_WORKSPACES) > app.config["MAX_WORKSPACES"]:
            evicted, _ = _WORKSPACES.popitem(last=False)
            logger.info("evicted idle workspace %s", evicted)
        return ws


@contextmanager
def locked_workspace() -> Iterator[Workspace]:
    ws = get_workspace()
    with ws.lock:
        yield ws


def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    return data


def _coord(value, fallback):
    if value is None:
        return fallback
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"expected a [row, col] pair, got {value!r}")
    return tuple(value)


def _int(data: dict, key: str, default=None) -> int:
    value = data.get(key, default)
    if value is None:
        raise ValueError(f"Missing required field: {key}")
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}")


def _optional_int(data: dict, key: str) -> Optional[int]:
    return None if data.get(key) is None else _int(data, key)


def _float(data: dict, key: str, default: float) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number, got {value!r}")
    return float(value)


def grid_payload(grid: Grid) -> dict:
    data = grid.to_dict()
    data["rows"] = grid.to_text().split("\n")
    return data


def playback_payload(ws: Workspace) -> dict:
    st = ws.stepper
    event = st.current_event
    return {
        "state":        st.state.value,
        "current_step": st.current_idx,
        "total_steps":  st.total_steps,
        "event":        event.to_dict() if event else None,
        "rows":         st.grid.to_text().split("\n") if st.grid else [],
    }


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------
@app.errorhandler(GridError)
@app.errorhandler(ValueError)
def handle_bad_request(exc):
    logger.warning("rejected %s %s: %s", request.method, request.path, exc)
    return jsonify({"error": str(exc), "type": type(exc).__name__}), 400


# ---------------------------------------------------------------------------
# API: Catalogue & State
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({
        "search": [a.to_dict() for a in list_algorithms(SEARCH)],
        "maze":   [a.to_dict() for a in list_algorithms(MAZE)],
        "speeds": SPEED_PRESETS,
    })


@app.route("/api/state")
def api_state():
    with locked_workspace() as ws:
        metrics = ws.recorder.metrics if ws.recorder else None
        return jsonify({
            "mode":     ws.mode,
            "grid":     grid_payload(ws.grid),
            "playback": playback_payload(ws),
            "metrics":  asdict(metrics) if metrics else None,
        })


# ---------------------------------------------------------------------------
# API: Grid Editing
# ---------------------------------------------------------------------------
@app.route("/api/grid", methods=["POST"])
def api_grid_create():
    data = _body()
    g = Grid(
        _int(data, "width", app.config["GRID_WIDTH"]),
        _int(data, "height", app.config["GRID_HEIGHT"]),
    )
    g.start = _coord(data.get("start"), (0, 0))
    g.end   = _coord(data.get("end"), (g.height - 1, g.width - 1))
    with locked_workspace() as ws:
        ws.grid = g
        ws.stepper.reset()
        ws.recorder = None
        ws.mode = "idle"
        return jsonify({"grid": grid_payload(g)})


@app.route("/api/grid/wall", methods=["POST"])
def api_grid_wall():
    data = _body()
    row, col = _int(data, "row"), _int(data, "col")
    with locked_workspace() as ws:
        ws.grid.set_wall(row, col, bool(data.get("wall", True)))
        return jsonify({"grid": grid_payload(ws.grid)})


@app.route("/api/grid/scatter", methods=["POST"])
def api_grid_scatter():
    data = _body()
    density = _float(data, "density", app.config["WALL_DENSITY"])
    rng = random.Random(_optional_int(data, "seed"))
    with locked_workspace() as ws:
        ws.grid.clear_all()
        placed = ws.grid.scatter_walls(density, rng)
        return jsonify({"placed": placed, "grid": grid_payload(ws.grid)})


@app.route("/api/grid/clear", methods=["POST"])
def api_grid_clear():
    what = _body().get("what", "path")
    with locked_workspace() as ws:
        if what == "path":
            ws.grid.reset()
        elif what == "walls":
            ws.grid.clear_walls()
        elif what == "all":
            ws.grid.clear_all()
        else:
            return jsonify({"error": f"Unknown clear target: {what}"}), 400
        ws.stepper.reset()
        return jsonify({"grid": grid_payload(ws.grid)})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = _body()
    with locked_workspace() as ws:
        start = _coord(data.get("start"), ws.grid.start)
        end   = _coord(data.get("end"), ws.grid.end)
        if start is None or end is None:
            return jsonify({"error": "Set start and end first"}), 400

        rec = Recorder()
        rec.start(
            data.get("algorithm", app.config["DEFAULT_ALGORITHM"]),
            ws.grid, start, end,
            allow_diagonal=bool(data.get("allow_diagonal", False)),
            heuristic=data.get("heuristic"),
        )
        metrics = rec.run_to_completion()
        ws.grid.start, ws.grid.end = start, end
        ws.recorder = rec
        ws.mode = "search"
        ws.stepper.start(rec.trace)

        return jsonify({
            "result":   rec.result.to_dict(),
            "metrics":  asdict(metrics),
            "playback": playback_payload(ws),
        })


@app.route("/api/maze", methods=["POST"])
def api_maze():
    data = _body()
    result = generate_maze(
        _int(data, "width", app.config["MAZE_WIDTH"]),
        _int(data, "height", app.config["MAZE_HEIGHT"]),
        data.get("algorithm", app.config["DEFAULT_MAZE_ALGORITHM"]),
        _optional_int(data, "seed"),
    )
    with locked_workspace() as ws:
        ws.grid = result.grid
        ws.recorder = None
        ws.mode = "maze"
        ws.stepper.start(result.trace)

        return jsonify({
            "maze":     result.to_dict(),
            "events":   len(result.trace),
            "playback": playback_payload(ws),
        })


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    with locked_workspace() as ws:
        if not ws.stepper.next_step():
            return jsonify({"error": "Already at last step"}), 400
        return jsonify(playback_payload(ws))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    with locked_workspace() as ws:
        if not ws.stepper.prev_step():
            return jsonify({"error": "Already at first step"}), 400
        return jsonify(playback_payload(ws))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    idx = _int(_body(), "index", -1)
    with locked_workspace() as ws:
        if not ws.stepper.goto_step(idx):
            return jsonify({"error": "Invalid step index"}), 400
        return jsonify(playback_payload(ws))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    speed = _body().get("speed")
    with locked_workspace() as ws:
        if speed:
            ws.stepper.set_speed(speed)
        ws.stepper.toggle_play()
        return jsonify({"is_playing": ws.stepper.is_playing, "speed": ws.stepper.speed})


@app.route("/api/step/tick", methods=["POST"])
def api_step_tick():
    with locked_workspace() as ws:
        advanced = ws.stepper.tick()
        payload = playback_payload(ws)
        payload["advanced"] = advanced
        return jsonify(payload)


@app.route("/api/step/cancel", methods=["POST"])
def api_step_cancel():
    with locked_workspace() as ws:
        ws.stepper.cancel()
        return jsonify(playback_payload(ws))


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if app.debug else logging.INFO)
    print("=" * 60)
    print("  Grid Algorithm Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=True, port=5000)
