"""
canvas.py — SVG Renderers
==========================
Pure rendering functions: PlaybackState (+ Graph) → SVG string.

    render_bars(state)          – one bar per element of the collection
    render_graph(graph, state)  – nodes on their layout, weighted edges

Design decisions:
  - NO mutation.  Both functions read one snapshot of the state and
    return a string; neither graph nor state is touched.
  - Coloring is a dict lookup on the flags the state carries: the kind
    of the last step decides how highlighted bars are drawn.
  - Lines are shortened by the node radius so they never overlap a
    circle; weights sit on a small disc at the edge midpoint.
"""

from html import escape
from typing import Any, Dict, Optional

from algoviz.graph import Edge, Graph, Node
from algoviz.engine.state import PlaybackState


# ---------------------------------------------------------------------------
# Visual Config: color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 400
    bg:     str = "#0d1117"

    # bar colors (flag → fill)
    bar_colors: Dict[str, str] = {
        "default":   "#4ade80",   # green
        "compare":   "#ef4444",   # red: pair under comparison
        "highlight": "#facc15",   # yellow: swapped, written or probed
        "sorted":    "#60a5fa",   # blue: final position
        "found":     "#a855f7",   # purple: search hit
    }
    bar_gap:             int   = 2
    bar_min_width:       int   = 5
    bar_label_color:     str   = "#e6edf3"
    bar_label_size:      int   = 11
    bar_out_of_bounds:   float = 0.3    # opacity outside [low, high]
    bar_top_margin:      int   = 24

    # node colors (flag → fill)
    node_colors: Dict[str, str] = {
        "unvisited": "#1c2128",   # dark grey
        "visited":   "#10b981",   # emerald green
        "current":   "#06b6d4",   # bright teal
        "start":     "#0ea5e9",   # cyan ring
    }

    # edge colors
    edge_colors: Dict[str, str] = {
        "default": "#30363d",
        "active":  "#06b6d4",
    }

    # node
    node_radius:        int = 20
    node_stroke:        str = "#30363d"
    node_stroke_width:  int = 2
    node_label_color:   str = "#e6edf3"
    node_label_size:    int = 13
    node_label_weight:  str = "600"
    node_distance_color: str = "#facc15"

    # edge
    edge_width:         int = 2
    edge_width_active:  int = 4
    edge_weight_color:  str = "#7d8590"
    edge_weight_size:   int = 12
    edge_weight_bg:     str = "#161b22"


CONFIG = CanvasConfig()

FONT = "font-family=\"'DM Sans', sans-serif\""


def _svg_open(config: CanvasConfig) -> str:
    return (
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>'
    )


# ---------------------------------------------------------------------------
# Bars
# ---------------------------------------------------------------------------
def render_bars(state: PlaybackState, config: CanvasConfig = CONFIG) -> str:
    """
    Returns an SVG string with one bar per element.  Bar height is
    proportional to the value; the tallest value fills the canvas.
    """
    snap = state.snapshot()
    values = snap["values"]

    parts = [_svg_open(config)]
    if values:
        n = len(values)
        slot = config.width / n
        bar_w = max(config.bar_min_width, slot - config.bar_gap)
        top = max(max(values), 1)
        usable = config.height - config.bar_top_margin - 4
        show_labels = slot >= 16

        for i, value in enumerate(values):
            fill = config.bar_colors[_bar_flag(i, snap)]
            h = max(2.0, usable * max(value, 0) / top)
            x = i * slot + (slot - bar_w) / 2
            y = config.height - h
            opacity = 1.0
            if snap["low"] is not None and snap["high"] is not None and not snap["finished"]:
                if not snap["low"] <= i <= snap["high"]:
                    opacity = config.bar_out_of_bounds

            parts.append(
                f'<g class="bar" data-index="{i}" opacity="{opacity}">'
                f'<rect x="{x:.2f}" y="{y:.2f}" width="{bar_w:.2f}" height="{h:.2f}" rx="2" fill="{fill}"/>'
            )
            if show_labels:
                parts.append(
                    f'<text x="{i * slot + slot / 2:.2f}" y="{y - 6:.2f}" text-anchor="middle" '
                    f'font-size="{config.bar_label_size}" {FONT} fill="{config.bar_label_color}">{value}</text>'
                )
            parts.append("</g>")

    parts.append("</svg>")
    return "\n".join(parts)


def _bar_flag(i: int, snap: Dict[str, Any]) -> str:
    if snap["found_index"] == i:
        return "found"
    if i in snap["highlighted"]:
        return "compare" if snap["last_kind"] == "compare" else "highlight"
    if i in snap["sorted_indices"]:
        return "sorted"
    return "default"


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
def render_graph(
    graph: Optional[Graph],
    state: PlaybackState,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string of the graph colored by the state's flags.

    Args:
        graph  : The graph to render (None renders an empty canvas).
        state  : Source of visited / current / start / active-edge flags.
        config : Visual config.
    """
    snap = state.snapshot()
    parts = [_svg_open(config)]

    if graph is not None:
        active = set(snap["active_edges"])
        # edges first so nodes sit on top
        for edge in graph.edges.values():
            parts.append(_render_edge(graph, edge, edge.id in active, config))
        for node in graph.nodes.values():
            parts.append(_render_node(node, snap, config))

    parts.append("</svg>")
    return "\n".join(parts)


def _render_node(node: Node, snap: Dict[str, Any], config: CanvasConfig) -> str:
    fill = config.node_colors["unvisited"]
    if node.id in snap["visited"]:
        fill = config.node_colors["visited"]

    stroke = config.node_stroke
    stroke_width = config.node_stroke_width
    if node.id == snap["start_node"]:
        stroke = config.node_colors["start"]
        stroke_width = 3

    cx, cy = node.x, node.y
    r = config.node_radius
    parts = [f'<g class="node" data-id="{escape(node.id)}">']

    if node.id == snap["current_node"]:
        fill = config.node_colors["current"]
        parts.append(
            f'  <circle cx="{cx}" cy="{cy}" r="{r + 8}" fill="none" '
            f'stroke="{config.node_colors["current"]}" stroke-width="2" opacity="0.3"/>'
        )

    parts.append(
        f'  <circle cx="{cx}" cy="{cy}" r="{r}" fill="{fill}" stroke="{stroke}" stroke-width="{stroke_width}"/>'
    )
    parts.append(
        f'  <text x="{cx}" y="{cy + 5}" text-anchor="middle" font-size="{config.node_label_size}" '
        f'{FONT} fill="{config.node_label_color}" font-weight="{config.node_label_weight}">{escape(node.label)}</text>'
    )

    # known distance (None in the snapshot means ∞)
    dist = snap["distances"].get(node.id)
    if dist is not None:
        parts.append(
            f'  <text class="distance" x="{cx}" y="{cy + r + 16}" text-anchor="middle" font-size="12" '
            f'{FONT} fill="{config.node_distance_color}">{_fmt_distance(dist)}</text>'
        )
    parts.append("</g>")
    return "\n".join(parts)


def _render_edge(graph: Graph, edge: Edge, active: bool, config: CanvasConfig) -> str:
    src_node = graph.get_node(edge.source)
    tgt_node = graph.get_node(edge.target)
    if not src_node or not tgt_node:
        return ""

    stroke = config.edge_colors["active"] if active else config.edge_colors["default"]
    stroke_width = config.edge_width_active if active else config.edge_width

    x1, y1 = src_node.x, src_node.y
    x2, y2 = tgt_node.x, tgt_node.y
    dx, dy = x2 - x1, y2 - y1
    dist = src_node.distance_to(tgt_node)
    if dist < 0.001:
        return ""  # degenerate edge

    # shorten the line by node_radius on both ends
    ux, uy = dx / dist, dy / dist
    r = config.node_radius
    x1_adj, y1_adj = x1 + ux * r, y1 + uy * r
    x2_adj, y2_adj = x2 - ux * r, y2 - uy * r

    mx, my = (x1 + x2) / 2, (y1 + y2) / 2
    cls = "edge active" if active else "edge"
    return "\n".join([
        f'<g class="{cls}" data-id="{escape(edge.id)}">',
        f'  <line x1="{x1_adj:.2f}" y1="{y1_adj:.2f}" x2="{x2_adj:.2f}" y2="{y2_adj:.2f}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>',
        f'  <circle cx="{mx:.2f}" cy="{my:.2f}" r="11" fill="{config.edge_weight_bg}" opacity="0.9"/>',
        f'  <text x="{mx:.2f}" y="{my + 4:.2f}" text-anchor="middle" font-size="{config.edge_weight_size}" '
        f'{FONT} fill="{config.edge_weight_color}" font-weight="600">{_fmt_distance(edge.weight)}</text>',
        "</g>",
    ])


def _fmt_distance(value) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
