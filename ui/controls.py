"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – run / step / reset / speed + progress
  • algorithm_selector  – BFS / DFS / Custom dropdown
  • start_node_picker   – choose the traversal start node
  • node_editor         – add node + list with delete buttons
  • edge_editor         – add edge (kind, weight) + list with delete buttons
  • custom_code_editor  – textarea for the custom algorithm body
  • run_status_panel    – outcome of the last run + user log lines

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - Every user-provided string is escaped.
  - The main app stitches them together.
"""

from html import escape
from typing import List, Optional

from graph import Graph
from algorithms import AlgoInfo, CUSTOM_KEY
from engine import RunResult, SPEED_PRESETS


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_running: bool = False,
    cursor: int = 0,
    total: int = 0,
    speed: str = "medium",
) -> str:
    speed_options = []
    for name in SPEED_PRESETS:
        sel = 'selected' if name == speed else ''
        speed_options.append(f'<option value="{name}" {sel}>{name.capitalize()}</option>')

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-run" class="btn-primary">▶ Run</button>
        <button id="btn-advance" title="Reveal next step">⏭</button>
        <button id="btn-reset" title="Reset">⏹</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{cursor}</span> / <span id="total-steps">{total}</span>
        {' <span class="running-badge">RUNNING</span>' if is_running else ''}
      </div>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">
          {''.join(speed_options)}
        </select>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: str = "bfs") -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" title="{escape(algo.description)}" {sel}>'
            f'{algo.label} — {algo.complexity_time}</option>'
        )
    sel = 'selected' if selected_key == CUSTOM_KEY else ''
    options.append(f'<option value="{CUSTOM_KEY}" {sel}>Custom (write your own)</option>')

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Start Node Picker
# ---------------------------------------------------------------------------
def start_node_picker(graph: Graph, start_node_id: Optional[str] = None) -> str:
    options = ['<option value="">-- Select start node --</option>']
    for node in graph.nodes.values():
        sel = 'selected' if node.id == start_node_id else ''
        options.append(f'<option value="{escape(node.id)}" {sel}>{escape(node.label)}</option>')

    return f"""
    <div class="panel start-node-picker">
      <h3>🎯 Start Node</h3>
      <select id="start-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Graph Editing
# ---------------------------------------------------------------------------
def node_editor(graph: Graph) -> str:
    rows = []
    for node in graph.nodes.values():
        rows.append(
            f'<li data-id="{escape(node.id)}">{escape(node.label)} '
            f'<button class="btn-delete-node" data-id="{escape(node.id)}" title="Delete node">🗑</button></li>'
        )

    return f"""
    <div class="panel node-editor">
      <h3>⚪ Nodes</h3>
      <div class="input-row">
        <input type="text" id="new-node-label" placeholder="Node name">
        <button id="btn-add-node" class="btn-secondary">＋</button>
      </div>
      <ul class="item-list">{''.join(rows)}</ul>
    </div>
    """


def edge_editor(graph: Graph) -> str:
    node_options = ['<option value="">--</option>']
    for node in graph.nodes.values():
        node_options.append(f'<option value="{escape(node.id)}">{escape(node.label)}</option>')
    options_html = ''.join(node_options)

    rows = []
    for edge in graph.edges.values():
        src = graph.get_node(edge.source)
        tgt = graph.get_node(edge.target)
        arrow = "→" if edge.directed else "—"
        weight = f" ({edge.weight:g})" if edge.weight is not None else ""
        rows.append(
            f'<li data-id="{escape(edge.id)}">'
            f'{escape(src.label if src else "?")} {arrow} {escape(tgt.label if tgt else "?")}{weight} '
            f'<button class="btn-delete-edge" data-id="{escape(edge.id)}" title="Delete edge">🗑</button></li>'
        )
    if not rows:
        rows.append('<li class="placeholder">No edges yet.</li>')

    return f"""
    <div class="panel edge-editor">
      <h3>🔗 Edges</h3>
      <select id="edge-kind">
        <option value="directed">Directed →</option>
        <option value="undirected">Undirected —</option>
      </select>
      <label>From: <select id="edge-source">{options_html}</select></label>
      <label>To: <select id="edge-target">{options_html}</select></label>
      <label>Weight: <input type="number" id="edge-weight" placeholder="optional"></label>
      <button id="btn-add-edge" class="btn-secondary">Add Edge</button>
      <ul class="item-list">{''.join(rows)}</ul>
    </div>
    """


# ---------------------------------------------------------------------------
# Custom Algorithm Editor
# ---------------------------------------------------------------------------
def custom_code_editor(source: str, show: bool = False) -> str:
    return f"""
    <div class="panel custom-editor" style="display: {'block' if show else 'none'};">
      <h3>✍ Custom Algorithm</h3>
      <p class="hint">
        Body of <code>traverse(nodes, edges, start_node_id, visit, get_neighbors, log)</code>.
        Call <code>visit(id, "node")</code> / <code>visit(id, "edge")</code> in the order to animate.
      </p>
      <textarea id="custom-source" rows="14" spellcheck="false">{escape(source)}</textarea>
    </div>
    """


# ---------------------------------------------------------------------------
# Run Status
# ---------------------------------------------------------------------------
def run_status_panel(result: Optional[RunResult] = None) -> str:
    if result is None:
        return """
        <div class="panel run-status">
          <h3>📊 Run</h3>
          <p class="placeholder">Pick a start node and run an algorithm.</p>
        </div>
        """

    badge = "✅" if result.ok else "⚠️"
    log_lines = ''.join(f'<li>{escape(line)}</li>' for line in result.logs)
    logs_html = f'<ul class="log-lines">{log_lines}</ul>' if log_lines else ''

    return f"""
    <div class="panel run-status status-{result.status.value}">
      <h3>📊 Run — {escape(result.algorithm)}</h3>
      <p>{badge} {escape(result.message)}</p>
      <table>
        <tr><td>Nodes Visited:</td><td><strong>{result.nodes_visited}</strong></td></tr>
        <tr><td>Edges Visited:</td><td><strong>{result.edges_visited}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{len(result.events)}</strong></td></tr>
      </table>
      {logs_html}
    </div>
    """
