"""
main.py — Pathfinding Visualizer Flask App
============================================
JSON API in front of the Visualizer.  The page that draws the grid is a
separate client; it polls /api/grid while a run is animating.

Routes:
  GET  /api/grid              – display projection of every cell (ticks the replay)
  GET  /api/state             – run / controller / settings state (ticks the replay)
  GET  /api/algorithms        – registry cards
  POST /api/press             – pointer pressed on {row, col}
  POST /api/enter             – pointer entered {row, col}
  POST /api/release           – pointer released
  POST /api/run               – search + start replay  {algo_key?}
  POST /api/finish            – apply every pending reveal now
  POST /api/reset             – clear search results, keep layout
  POST /api/clear             – default layout, no walls
  POST /api/config/algo       – {algo_key}
  POST /api/config/speed      – {speed: preset name | milliseconds}
  POST /api/compare           – run both algorithms on the current layout

State management:
  One Visualizer per app, kept in app.extensions.  The replay is only
  advanced from request handlers, so the server runs single-threaded.

Configuration (defaults < create_app mapping < PATHFINDER_* env vars):
  GRID_ROWS, GRID_COLS, START, END, VISIT_DELAY_MS, PATH_DELAY_MS, ALGORITHM
"""

import logging
from typing import Optional, Tuple, Mapping, Any

from flask import Blueprint, Flask, current_app, request, jsonify

from algorithms import list_algorithms
from engine import Visualizer, VisualizerConfig


_DEFAULTS = VisualizerConfig()

DEFAULT_CONFIG = {
    "GRID_ROWS":      _DEFAULTS.rows,
    "GRID_COLS":      _DEFAULTS.cols,
    "START":          list(_DEFAULTS.start),
    "END":            list(_DEFAULTS.end),
    "VISIT_DELAY_MS": _DEFAULTS.visit_delay_ms,
    "PATH_DELAY_MS":  _DEFAULTS.path_delay_ms,
    "ALGORITHM":      _DEFAULTS.algorithm,
}


def create_app(config: Optional[Mapping[str, Any]] = None, clock=None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    if config:
        app.config.from_mapping(config)
    app.config.from_prefixed_env("PATHFINDER")

    app.extensions["visualizer"] = Visualizer(VisualizerConfig.from_mapping(app.config), clock=clock)
    app.register_blueprint(_api_routes())
    app.logger.info("Visualizer ready: %sx%s grid", app.config["GRID_ROWS"], app.config["GRID_COLS"])
    return app


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def get_visualizer() -> Visualizer:
    return current_app.extensions["visualizer"]


def _json() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _algo_key(data: dict, default=None):
    """algo_key from the body; a non-string key is rejected like an unknown one."""
    key = data.get("algo_key", default)
    if key is not None and not isinstance(key, str):
        raise ValueError(f"algo_key must be a string, got {type(key).__name__}")
    return key


def _coords(data: dict) -> Optional[Tuple[int, int]]:
    """(row, col) from the request body, or None if missing / not ints / off-grid."""
    row, col = data.get("row"), data.get("col")
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (row, col)):
        return None
    if not get_visualizer().grid.in_bounds(row, col):
        return None
    return row, col


def _accepted(accepted: bool):
    return jsonify({"accepted": accepted, "state": get_visualizer().state()})


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def _api_routes() -> Blueprint:
    api = Blueprint("api", __name__, url_prefix="/api")

    # -- read side ------------------------------------------------------
    @api.route("/grid")
    def api_grid():
        viz = get_visualizer()
        viz.tick()
        return jsonify({"cells": viz.grid.display(), "is_running": viz.is_running})

    @api.route("/state")
    def api_state():
        viz = get_visualizer()
        viz.tick()
        return jsonify(viz.state())

    @api.route("/algorithms")
    def api_algorithms():
        return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})

    # -- pointer events -------------------------------------------------
    @api.route("/press", methods=["POST"])
    def api_press():
        rc = _coords(_json())
        if rc is None:
            return jsonify({"error": "row and col must be integers inside the grid"}), 400
        return _accepted(get_visualizer().press(*rc))

    @api.route("/enter", methods=["POST"])
    def api_enter():
        rc = _coords(_json())
        if rc is None:
            return jsonify({"error": "row and col must be integers inside the grid"}), 400
        return _accepted(get_visualizer().enter(*rc))

    @api.route("/release", methods=["POST"])
    def api_release():
        return _accepted(get_visualizer().release())

    # -- run ------------------------------------------------------------
    @api.route("/run", methods=["POST"])
    def api_run():
        viz = get_visualizer()
        try:
            accepted = viz.run_search(_algo_key(_json()))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        if accepted:
            # visited reveals due at t0 fire straight away
            viz.tick()
        return _accepted(accepted)

    @api.route("/finish", methods=["POST"])
    def api_finish():
        fired = get_visualizer().finish()
        return jsonify({"fired": fired, "state": get_visualizer().state()})

    @api.route("/reset", methods=["POST"])
    def api_reset():
        return _accepted(get_visualizer().reset())

    @api.route("/clear", methods=["POST"])
    def api_clear():
        return _accepted(get_visualizer().clear())

    # -- config ---------------------------------------------------------
    @api.route("/config/algo", methods=["POST"])
    def api_config_algo():
        try:
            accepted = get_visualizer().select_algorithm(_algo_key(_json(), default=""))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        return _accepted(accepted)

    @api.route("/config/speed", methods=["POST"])
    def api_config_speed():
        speed = _json().get("speed", "medium")
        if isinstance(speed, bool) or not isinstance(speed, (str, int, float)):
            return jsonify({"error": "speed must be a preset name or milliseconds"}), 400
        try:
            accepted = get_visualizer().set_speed(speed)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        return _accepted(accepted)

    # -- analytics ------------------------------------------------------
    @api.route("/compare", methods=["POST"])
    def api_compare():
        return jsonify(get_visualizer().compare().to_dict())

    return api


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("=" * 60)
    print("  Pathfinding Visualizer")
    print("  Starting Flask server...")
    print("  API at http://localhost:5000/api/state")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000, threaded=False)
