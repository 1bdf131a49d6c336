# app.py — Flask JSON API around the minimax path solver

from __future__ import annotations
from typing import Any, Dict, Optional, Tuple
from flask import Flask, request, jsonify, make_response

from safe_path import config
from safe_path.models import GridError, InvalidDimensions
from safe_path.grid import as_dim, as_grid, zeros_grid, random_grid, sample_grid
from safe_path.minimax_core import solve_safest_path
from safe_path.export import result_payload
from safe_path.viz import render_png

app = Flask(__name__)
app.config.from_mapping(
    MAX_GRID_DIM=config.MAX_GRID_DIM,
    HOST=config.DEFAULT_HOST,
    PORT=config.DEFAULT_PORT,
)
app.config.from_prefixed_env("SAFE_PATH")

# ======= CORS =======
@app.after_request
def _cors(resp):
    resp.headers["Access-Control-Allow-Origin"]  = "*"
    resp.headers["Access-Control-Allow-Headers"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
    return resp

# ======= errors =======
@app.errorhandler(GridError)
def _grid_error(e: GridError):
    app.logger.warning("rejected grid: %s", e)
    return jsonify({"error": str(e), "kind": e.kind}), 400

# ======= helpers =======
def _opt_int(data: Dict[str, Any], key: str) -> Optional[int]:
    return as_dim(data.get(key, None), key)


def _dims_from_args(default: int = 3) -> Tuple[int, int]:
    rows = _opt_int(request.args, "rows")
    cols = _opt_int(request.args, "cols")
    rows = default if rows is None else rows
    cols = default if cols is None else cols
    _check_limit(rows, cols)
    return rows, cols


def _check_limit(rows: int, cols: int) -> None:
    limit = int(app.config["MAX_GRID_DIM"])
    if rows < 1 or cols < 1:
        raise InvalidDimensions(f"grid must have at least 1 row and 1 column, got {rows}x{cols}")
    if rows > limit or cols > limit:
        raise InvalidDimensions(f"grid is limited to {limit}x{limit}, got {rows}x{cols}")


def _grid_from_body():
    data = request.get_json(force=True, silent=True) or {}
    if not isinstance(data, dict) or "grid" not in data:
        raise InvalidDimensions("body must contain a 'grid' matrix")
    grid = as_grid(
        data["grid"],
        rows=_opt_int(data, "N"),
        cols=_opt_int(data, "M"),
        blocked=data.get("blocked"),
    )
    _check_limit(grid.N, grid.M)
    return grid

# ======= public endpoints =======
@app.route("/", methods=["GET"])
def root():
    return {
        "ok": True,
        "max_grid_dim": int(app.config["MAX_GRID_DIM"]),
        "solve": "/solve (POST JSON)",
        "solve_png": "/solve/png (POST JSON)",
        "samples": "/samples",
        "grids": ["/grid/zeros", "/grid/random"],
    }

@app.route("/samples", methods=["GET"])
def samples():
    return jsonify({"samples": sorted(config.SAMPLES)})

@app.route("/samples/<int:n>", methods=["GET"])
def sample(n: int):
    try:
        g = sample_grid(n)
    except KeyError:
        return jsonify({"error": f"unknown sample {n}"}), 404
    return jsonify({"N": g.N, "M": g.M, "grid": g.tolist()})

@app.route("/grid/zeros", methods=["GET"])
def grid_zeros():
    rows, cols = _dims_from_args()
    g = zeros_grid(rows, cols)
    return jsonify({"N": g.N, "M": g.M, "grid": g.tolist()})

@app.route("/grid/random", methods=["GET"])
def grid_random():
    rows, cols = _dims_from_args()
    seed = _opt_int(request.args, "seed")
    g = random_grid(rows, cols, seed=seed)
    return jsonify({"N": g.N, "M": g.M, "grid": g.tolist()})

# ======= solver API =======
@app.route("/solve", methods=["POST"])
def solve():
    """
    JSON body:
    {
      "grid": [[1,3,5],[2,8,2],[4,2,1]],
      "N": 3,                  // optional, checked against grid
      "M": 3,                  // optional, checked against grid
      "blocked": [[false,...]] // optional impassable mask
    }
    """
    grid = _grid_from_body()
    result = solve_safest_path(grid)
    payload = result_payload(grid, result)
    app.logger.info(
        "solve %dx%d: reachable=%s bottleneck=%s",
        grid.N, grid.M, payload["reachable"], payload["bottleneck"],
    )
    return jsonify(payload)

@app.route("/solve/png", methods=["POST"])
def solve_png():
    grid = _grid_from_body()
    result = solve_safest_path(grid)
    resp = make_response(render_png(grid, result))
    resp.headers["Content-Type"] = "image/png"
    return resp


if __name__ == "__main__":
    app.run(host=app.config["HOST"], port=int(app.config["PORT"]), threaded=True)
