"""
main.py — Graph Traversal Visualizer Flask App
================================================
The web server that powers the editor + traversal animation.

Routes:
  GET    /                          – main UI
  GET    /api/state                 – current workspace state (for polling)
  POST   /api/nodes                 – add a node
  DELETE /api/nodes/<id>            – delete a node (cascades to its edges)
  POST   /api/nodes/<id>/move       – reposition a node
  POST   /api/edges                 – add an edge (409 when rejected)
  DELETE /api/edges/<id>            – delete an edge
  POST   /api/config/start          – choose the start node
  POST   /api/config/algo           – choose bfs / dfs / custom
  POST   /api/config/speed          – choose a playback speed preset
  POST   /api/run                   – compute a sequence and start playback
  POST   /api/playback/tick         – timer-driven advance (honours cadence + token)
  POST   /api/playback/advance      – reveal one step now
  POST   /api/playback/reset        – stop and clear

State management:
  One Workspace per app, created by create_app() and stored in
  app.extensions["workspace"].  Routes reach it through get_workspace();
  there is no module-level graph.  Single user, in memory only.

Configuration (app.config, overridable via GRAPH_VIZ_* env vars):
  PLAYBACK_INTERVAL    – seconds per revealed event
  SANDBOX_STEP_BUDGET  – executed-line budget for custom algorithms
  SANDBOX_TIME_BUDGET  – wall-clock budget (seconds) for custom algorithms
  SAMPLE_GRAPH         – start with the three-node sample graph
"""

import logging
from typing import Any, Mapping, Optional

from flask import Blueprint, Flask, current_app, jsonify, render_template_string, request

from graph import EdgeKind
from algorithms import CUSTOM_KEY, list_algorithms
from engine import DEFAULT_INTERVAL, SPEED_PRESETS, PlaybackEngine, Workspace
from sandbox import DEFAULT_STEP_BUDGET, DEFAULT_TIME_BUDGET
from ui import (
    render_canvas,
    playback_controls,
    algorithm_selector,
    start_node_picker,
    node_editor,
    edge_editor,
    custom_code_editor,
    run_status_panel,
)

logger = logging.getLogger(__name__)

bp = Blueprint("visualizer", __name__)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[Mapping[str, Any]] = None, workspace: Optional[Workspace] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        PLAYBACK_INTERVAL=DEFAULT_INTERVAL,
        SANDBOX_STEP_BUDGET=DEFAULT_STEP_BUDGET,
        SANDBOX_TIME_BUDGET=DEFAULT_TIME_BUDGET,
        SAMPLE_GRAPH=True,
    )
    app.config.from_prefixed_env("GRAPH_VIZ")
    if config:
        app.config.update(config)

    if workspace is None:
        kwargs = dict(
            playback=PlaybackEngine(interval=app.config["PLAYBACK_INTERVAL"]),
            max_steps=app.config["SANDBOX_STEP_BUDGET"],
            max_seconds=app.config["SANDBOX_TIME_BUDGET"],
        )
        if app.config["SAMPLE_GRAPH"]:
            workspace = Workspace.with_sample_graph(**kwargs)
        else:
            workspace = Workspace(**kwargs)
    app.extensions["workspace"] = workspace

    app.register_blueprint(bp)
    return app


def get_workspace() -> Workspace:
    return current_app.extensions["workspace"]


# ---------------------------------------------------------------------------
# State Helpers
# ---------------------------------------------------------------------------
def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _error(message: str, status: int, **extra):
    return jsonify({"error": message, **extra}), status


def _non_string(data: dict, *keys: str) -> Optional[str]:
    """First of `keys` the body carries with a non-string value, else None."""
    for key in keys:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            return key
    return None


def _speed_name(interval: float) -> str:
    for name, seconds in SPEED_PRESETS.items():
        if seconds == interval:
            return name
    return "custom"


def _canvas(ws: Workspace) -> str:
    return render_canvas(
        ws.graph,
        visited_nodes=ws.playback.visited_node_ids,
        visited_edges=ws.playback.visited_edge_ids,
        start_node_id=ws.start_node_id,
    )


def _panels(ws: Workspace) -> dict:
    return {
        "playback": playback_controls(
            is_running=ws.playback.is_running,
            cursor=ws.playback.cursor,
            total=ws.playback.total,
            speed=_speed_name(ws.playback.interval),
        ),
        "algo":   algorithm_selector(list_algorithms(), ws.algorithm),
        "start":  start_node_picker(ws.graph, ws.start_node_id),
        "nodes":  node_editor(ws.graph),
        "edges":  edge_editor(ws.graph),
        "status": run_status_panel(ws.last_result),
    }


def state_payload(ws: Workspace, with_panels: bool = True, **extra) -> dict:
    payload = {
        "graph":         ws.graph.to_dict(),
        "start_node_id": ws.start_node_id,
        "algorithm":     ws.algorithm,
        "playback":      ws.playback.to_dict(),
        "last_result":   ws.last_result.to_dict() if ws.last_result else None,
        "svg":           _canvas(ws),
    }
    if with_panels:
        payload["panels"] = _panels(ws)
    payload.update(extra)
    return payload


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@bp.route("/")
def index():
    ws = get_workspace()
    panels = _panels(ws)
    return render_template_string(
        INDEX_TEMPLATE,
        svg=_canvas(ws),
        playback=panels["playback"],
        algo_selector=panels["algo"],
        start_picker=panels["start"],
        nodes=panels["nodes"],
        edges=panels["edges"],
        status=panels["status"],
        custom_editor=custom_code_editor(ws.custom_source, show=ws.algorithm == CUSTOM_KEY),
    )


@bp.route("/api/state")
def api_state():
    return jsonify(state_payload(get_workspace()))


# ---------------------------------------------------------------------------
# API: Graph Editing
# ---------------------------------------------------------------------------
@bp.route("/api/nodes", methods=["POST"])
def api_add_node():
    ws = get_workspace()
    data = _json_body()
    if _non_string(data, "label"):
        return _error("label must be a string", 400)
    try:
        x = float(data["x"]) if data.get("x") is not None else None
        y = float(data["y"]) if data.get("y") is not None else None
    except (TypeError, ValueError):
        return _error("x and y must be numbers", 400)

    node = ws.add_node(data.get("label") or None, x, y)
    return jsonify(state_payload(ws, node=node.to_dict())), 201


@bp.route("/api/nodes/<node_id>", methods=["DELETE"])
def api_delete_node(node_id):
    ws = get_workspace()
    if ws.graph.get_node(node_id) is None:
        return _error(f"Unknown node: {node_id}", 404)
    ws.delete_node(node_id)
    return jsonify(state_payload(ws))


@bp.route("/api/nodes/<node_id>/move", methods=["POST"])
def api_move_node(node_id):
    ws = get_workspace()
    data = _json_body()
    try:
        x, y = float(data["x"]), float(data["y"])
    except (KeyError, TypeError, ValueError):
        return _error("x and y are required numbers", 400)

    node = ws.move_node(node_id, x, y)
    if node is None:
        return _error(f"Unknown node: {node_id}", 404)
    return jsonify(state_payload(ws, with_panels=False, node=node.to_dict()))


@bp.route("/api/edges", methods=["POST"])
def api_add_edge():
    ws = get_workspace()
    data = _json_body()
    bad = _non_string(data, "source", "target", "kind")
    if bad:
        return _error(f"{bad} must be a string", 400)
    try:
        kind = EdgeKind(data.get("kind", EdgeKind.DIRECTED.value))
    except ValueError:
        return _error(f"Unknown edge kind: {data.get('kind')}", 400)

    weight = data.get("weight")
    if weight in ("", None):
        weight = None
    else:
        try:
            weight = float(weight)
        except (TypeError, ValueError):
            return _error("weight must be a number", 400)

    edge = ws.add_edge(data.get("source", ""), data.get("target", ""), kind, weight)
    if edge is None:
        return _error("Edge rejected (unknown endpoint, self-loop or duplicate)", 409, rejected=True)
    return jsonify(state_payload(ws, edge=edge.to_dict())), 201


@bp.route("/api/edges/<edge_id>", methods=["DELETE"])
def api_delete_edge(edge_id):
    ws = get_workspace()
    if ws.graph.get_edge(edge_id) is None:
        return _error(f"Unknown edge: {edge_id}", 404)
    ws.delete_edge(edge_id)
    return jsonify(state_payload(ws))


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@bp.route("/api/config/start", methods=["POST"])
def api_config_start():
    ws = get_workspace()
    data = _json_body()
    if _non_string(data, "start_node_id"):
        return _error("start_node_id must be a string", 400)
    node_id = data.get("start_node_id") or None
    if node_id is not None and node_id not in ws.graph:
        return _error(f"Unknown node: {node_id}", 404)
    ws.select_start(node_id)
    return jsonify(state_payload(ws, with_panels=False))


@bp.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    ws = get_workspace()
    data = _json_body()
    if _non_string(data, "algorithm"):
        return _error("algorithm must be a string", 400)
    key = data.get("algorithm", "bfs")
    if not ws.select_algorithm(key):
        return _error(f"Unknown algorithm: {key}", 400)
    return jsonify({"algorithm": ws.algorithm, "show_custom": key == CUSTOM_KEY})


@bp.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    ws = get_workspace()
    data = _json_body()
    if _non_string(data, "speed"):
        return _error("speed must be a string", 400)
    speed = data.get("speed", "medium")
    if speed not in SPEED_PRESETS:
        return _error(f"Unknown speed: {speed}", 400)
    ws.playback.set_speed(speed)
    return jsonify({"speed": speed, "interval": ws.playback.interval})


# ---------------------------------------------------------------------------
# API: Run + Playback
# ---------------------------------------------------------------------------
@bp.route("/api/run", methods=["POST"])
def api_run():
    ws = get_workspace()
    data = _json_body()
    bad = _non_string(data, "algorithm", "start_node_id", "source")
    if bad:
        return _error(f"{bad} must be a string", 400)
    algorithm = data.get("algorithm")
    if algorithm is not None and not ws.select_algorithm(algorithm):
        return _error(f"Unknown algorithm: {algorithm}", 400)

    result = ws.run(start_node_id=data.get("start_node_id"), source=data.get("source"))
    return jsonify(state_payload(ws, token=ws.playback.token, ok=result.ok))


@bp.route("/api/playback/tick", methods=["POST"])
def api_playback_tick():
    ws = get_workspace()
    token = _json_body().get("token")
    applied = ws.playback.tick(token)
    return jsonify(state_payload(ws, with_panels=False, applied=applied))


@bp.route("/api/playback/advance", methods=["POST"])
def api_playback_advance():
    ws = get_workspace()
    applied = ws.playback.advance()
    return jsonify(state_payload(ws, with_panels=False, applied=applied))


@bp.route("/api/playback/reset", methods=["POST"])
def api_playback_reset():
    ws = get_workspace()
    ws.playback.reset()
    return jsonify(state_payload(ws))


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Graph Traversal Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg: #f8fafc;
      --bg-panel: #ffffff;
      --border: #e2e8f0;
      --text-primary: #1e293b;
      --text-secondary: #64748b;
      --accent: #4f46e5;
      --accent-hover: #4338ca;
      --ok: #10b981;
      --warn: #f43f5e;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 340px;
      background: var(--bg-panel);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      overflow: hidden;
    }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 16px;
      padding: 16px;
      border-top: 1px solid var(--border);
      background: var(--bg-panel);
      max-height: 360px;
    }

    .panel { margin-bottom: 18px; }
    .panel h3 {
      font-size: 12px;
      text-transform: uppercase;
      letter-spacing: 0.05em;
      color: var(--text-secondary);
      margin-bottom: 8px;
    }
    .panel label { display: block; font-size: 13px; margin: 4px 0; }
    .panel select, .panel input { width: 100%; padding: 6px 8px; border: 1px solid var(--border); border-radius: 6px; }
    .input-row { display: flex; gap: 6px; }
    .item-list { list-style: none; max-height: 140px; overflow-y: auto; font-size: 13px; margin-top: 8px; }
    .item-list li { display: flex; justify-content: space-between; padding: 4px 6px; border-bottom: 1px solid var(--border); }
    .placeholder, .hint { font-size: 12px; color: var(--text-secondary); font-style: italic; }
    .button-row { display: flex; gap: 6px; margin-bottom: 8px; }
    button { cursor: pointer; border: 1px solid var(--border); background: var(--bg-panel); border-radius: 6px; padding: 6px 10px; }
    .btn-primary, .btn-secondary { background: var(--accent); color: white; border: none; }
    .btn-primary:hover, .btn-secondary:hover { background: var(--accent-hover); }
    .running-badge { color: var(--ok); font-weight: 700; font-size: 11px; }
    textarea { width: 100%; font-family: monospace; font-size: 12px; border: 1px solid var(--border); border-radius: 6px; padding: 8px; }
    .log-lines { font-family: monospace; font-size: 12px; color: var(--text-secondary); margin-top: 8px; }
    .status-ok p { color: var(--ok); }
    .run-status p { font-size: 13px; margin-bottom: 6px; }
    .run-status:not(.status-ok) p { color: var(--warn); }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="algo">{{ algo_selector|safe }}</div>
    <div id="start">{{ start_picker|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="nodes">{{ nodes|safe }}</div>
    <div id="edges">{{ edges|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>
    <div id="bottom-panel">
      <div id="custom">{{ custom_editor|safe }}</div>
      <div id="status">{{ status|safe }}</div>
    </div>
  </div>

  <script>
    let playToken = null;
    let timer = null;

    async function call(method, url, data) {
      const res = await fetch(url, {
        method,
        headers: {'Content-Type': 'application/json'},
        body: data === undefined ? undefined : JSON.stringify(data),
      });
      return await res.json();
    }
    const post = (url, data) => call('POST', url, data || {});

    function apply(data) {
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.panels) {
        for (const [id, html] of Object.entries(data.panels)) {
          const el = document.getElementById(id);
          if (el) el.innerHTML = html;
        }
      }
      if (data.playback) {
        const cur = document.getElementById('current-step');
        const tot = document.getElementById('total-steps');
        if (cur) cur.textContent = data.playback.cursor;
        if (tot) tot.textContent = data.playback.total;
      }
      if (data.error) alert(data.error);
    }

    function stopTimer() {
      if (timer) clearInterval(timer);
      timer = null;
    }

    function startTimer(token) {
      stopTimer();
      playToken = token;
      timer = setInterval(async () => {
        const data = await post('/api/playback/tick', {token: playToken});
        apply(data);
        if (!data.playback.running || data.playback.token !== playToken) stopTimer();
      }, 50);
    }

    document.addEventListener('click', async (e) => {
      const t = e.target;
      if (t.id === 'btn-run') {
        const source = document.getElementById('custom-source')?.value;
        const data = await post('/api/run', {source});
        apply(data);
        if (data.playback && data.playback.running) startTimer(data.token); else stopTimer();
      } else if (t.id === 'btn-advance') {
        stopTimer();
        apply(await post('/api/playback/advance'));
      } else if (t.id === 'btn-reset') {
        stopTimer();
        apply(await post('/api/playback/reset'));
      } else if (t.id === 'btn-add-node') {
        const label = document.getElementById('new-node-label').value;
        apply(await post('/api/nodes', {label}));
      } else if (t.id === 'btn-add-edge') {
        const data = await post('/api/edges', {
          source: document.getElementById('edge-source').value,
          target: document.getElementById('edge-target').value,
          kind: document.getElementById('edge-kind').value,
          weight: document.getElementById('edge-weight').value,
        });
        apply(data);
      } else if (t.classList.contains('btn-delete-node')) {
        apply(await call('DELETE', '/api/nodes/' + encodeURIComponent(t.dataset.id)));
      } else if (t.classList.contains('btn-delete-edge')) {
        apply(await call('DELETE', '/api/edges/' + encodeURIComponent(t.dataset.id)));
      }
    });

    document.addEventListener('change', async (e) => {
      const t = e.target;
      if (t.id === 'algo-selector') {
        const data = await post('/api/config/algo', {algorithm: t.value});
        document.querySelector('.custom-editor').style.display = data.show_custom ? 'block' : 'none';
      } else if (t.id === 'start-selector') {
        apply(await post('/api/config/start', {start_node_id: t.value}));
      } else if (t.id === 'speed-selector') {
        await post('/api/config/speed', {speed: t.value});
      }
    });

    // drag-to-reposition
    let dragId = null;
    const svgBox = document.getElementById('canvas-svg');
    svgBox.addEventListener('mousedown', (e) => {
      const g = e.target.closest('g.node');
      if (g) dragId = g.dataset.id;
    });
    window.addEventListener('mouseup', async (e) => {
      if (!dragId) return;
      const svg = svgBox.querySelector('svg');
      const pt = svg.createSVGPoint();
      pt.x = e.clientX; pt.y = e.clientY;
      const p = pt.matrixTransform(svg.getScreenCTM().inverse());
      const id = dragId;
      dragId = null;
      apply(await post('/api/nodes/' + encodeURIComponent(id) + '/move', {x: p.x, y: p.y}));
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("=" * 60)
    print("  Graph Traversal Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    create_app().run(debug=False, threaded=False, port=5000)
