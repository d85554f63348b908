"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: Graph + visited sets → SVG string.

The renderer consumes:
  • graph          – the Graph object (node positions, edges)
  • visited_nodes  – node ids the playback engine has revealed so far
  • visited_edges  – edge ids the playback engine has revealed so far
  • config         – visual config (canvas size, colors, fonts, …)

Design decisions:
  - NO mutation.  This function is stateless — the caller passes in
    everything it needs and gets back a string.
  - Visited styling is a set-membership check; ids the graph does not
    know (e.g. from a sloppy custom algorithm) simply never draw.
  - Edge rendering respects kind (arrow for directed) and draws weights
    as labels when present.
"""

from html import escape
from typing import AbstractSet, Dict, Optional
import math

from graph import Graph, Node, Edge


# ---------------------------------------------------------------------------
# Visual Config: color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 600
    bg:     str = "#f1f5f9"

    node_colors: Dict[str, str] = {
        "default":  "#ffffff",
        "visited":  "#10b981",   # emerald: revealed by playback
        "start":    "#e0e7ff",   # indigo tint: selected start node
    }

    edge_colors: Dict[str, str] = {
        "directed":   "#6366f1",
        "undirected": "#94a3b8",
        "visited":    "#10b981",
    }

    # node
    node_radius:        int = 22
    node_stroke:        str = "#e2e8f0"
    node_stroke_start:  str = "#4f46e5"
    node_stroke_width:  int = 3
    node_label_color:   str = "#334155"
    node_label_visited: str = "#ffffff"
    node_label_size:    int = 10
    node_label_weight:  str = "700"

    # edge
    edge_width:         int = 2
    edge_width_visited: int = 4
    edge_arrow_size:    int = 10
    edge_weight_color:  str = "#475569"
    edge_weight_size:   int = 11
    edge_weight_bg:     str = "#ffffff"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: Graph,
    visited_nodes: AbstractSet[str] = frozenset(),
    visited_edges: AbstractSet[str] = frozenset(),
    start_node_id: Optional[str] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        graph         : The graph to render.
        visited_nodes : Node ids styled as visited.
        visited_edges : Edge ids styled as visited.
        start_node_id : Highlighted start node (or None).
        config        : Visual config.
    """

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    # -- edges (draw first so nodes sit on top) --
    for edge in graph.edges.values():
        svg_parts.append(_render_edge(graph, edge, edge.id in visited_edges, config))

    # -- nodes --
    for node in graph.nodes.values():
        svg_parts.append(_render_node(node, node.id in visited_nodes, node.id == start_node_id, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Node Rendering
# ---------------------------------------------------------------------------
def _render_node(node: Node, visited: bool, is_start: bool, config: CanvasConfig) -> str:
    if visited:
        fill = config.node_colors["visited"]
    elif is_start:
        fill = config.node_colors["start"]
    else:
        fill = config.node_colors["default"]

    stroke = config.node_stroke_start if is_start else config.node_stroke
    label_color = config.node_label_visited if visited else config.node_label_color

    cx, cy = node.x, node.y
    parts = [
        f'<g class="node{" visited" if visited else ""}" data-id="{escape(node.id)}">',
        f'  <circle cx="{cx}" cy="{cy}" r="{config.node_radius}" '
        f'fill="{fill}" stroke="{stroke}" stroke-width="{config.node_stroke_width}"/>',
        f'  <text x="{cx}" y="{cy + 4}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" font-family="sans-serif" '
        f'fill="{label_color}" font-weight="{config.node_label_weight}">{escape(node.label)}</text>',
        '</g>',
    ]
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(graph: Graph, edge: Edge, visited: bool, config: CanvasConfig) -> str:
    src_node = graph.get_node(edge.source)
    tgt_node = graph.get_node(edge.target)
    if not src_node or not tgt_node:
        return ""

    if visited:
        stroke = config.edge_colors["visited"]
        stroke_width = config.edge_width_visited
    else:
        stroke = config.edge_colors[edge.kind.value]
        stroke_width = config.edge_width

    # compute line endpoints (adjusted for node radius so line doesn't overlap circle)
    x1, y1 = src_node.x, src_node.y
    x2, y2 = tgt_node.x, tgt_node.y

    dx, dy = x2 - x1, y2 - y1
    dist = math.sqrt(dx * dx + dy * dy)
    if dist < 0.001:
        return ""  # degenerate edge

    ux, uy = dx / dist, dy / dist
    r = config.node_radius

    x1_adj = x1 + ux * r
    y1_adj = y1 + uy * r
    x2_adj = x2 - ux * r
    y2_adj = y2 - uy * r

    parts = [f'<g class="edge{" visited" if visited else ""}" data-id="{escape(edge.id)}">']

    parts.append(
        f'  <line x1="{x1_adj}" y1="{y1_adj}" x2="{x2_adj}" y2="{y2_adj}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>'
    )

    if edge.directed:
        parts.append(_render_arrow(x2_adj, y2_adj, ux, uy, stroke, config))

    # weight label (at midpoint)
    if edge.weight is not None:
        mx = (x1 + x2) / 2
        my = (y1 + y2) / 2
        # offset label perpendicular to edge
        perp_x = -uy * 12
        perp_y = ux * 12
        parts.append(
            f'  <circle cx="{mx + perp_x}" cy="{my + perp_y}" r="11" '
            f'fill="{config.edge_weight_bg}" opacity="0.9"/>'
        )
        parts.append(
            f'  <text x="{mx + perp_x}" y="{my + perp_y + 4}" text-anchor="middle" '
            f'font-size="{config.edge_weight_size}" font-family="sans-serif" '
            f'fill="{config.edge_weight_color}" font-weight="600">{edge.weight:g}</text>'
        )

    parts.append('</g>')
    return "\n".join(parts)


def _render_arrow(x: float, y: float, ux: float, uy: float, color: str, config: CanvasConfig) -> str:
    """Draw an arrowhead at (x, y) pointing in direction (ux, uy)."""
    size = config.edge_arrow_size
    # perpendicular
    px, py = -uy, ux
    p1_x = x - ux * size + px * (size * 0.5)
    p1_y = y - uy * size + py * (size * 0.5)
    p2_x = x - ux * size - px * (size * 0.5)
    p2_y = y - uy * size - py * (size * 0.5)
    return f'<polygon points="{x},{y} {p1_x},{p1_y} {p2_x},{p2_y}" fill="{color}"/>'
