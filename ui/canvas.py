"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: Graph + Snapshot → SVG string.

The renderer consumes:
  • graph      – the Graph (vertices, edges, weights)
  • snapshot   – the current frame (vertex/edge states, distances, …)
  • positions  – {vertex: (x, y)}; circle_layout() when not given
  • config     – visual config (canvas size, colors, fonts, …)

Design decisions:
  - NO mutation.  This function is stateless — the caller passes in
    everything it needs and gets back a string.
  - State-based coloring is a simple dict lookup: state → hex color.
  - Overlay panels (frontier, distances) are separate <g> groups
    positioned in fixed spots on the canvas.
"""

import html
import math
from typing import Dict, Hashable, List, Optional, Tuple

from graph import Edge, Graph
from engine.snapshot import Snapshot, distance_table, edge_label


Positions = Dict[Hashable, Tuple[float, float]]


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 1080
    height: int = 420
    bg:     str = "#0d1117"

    # vertex colors (state → fill)
    vertex_colors: Dict[str, str] = {
        "unvisited":   "#1c2128",   # dark grey
        "frontier":    "#eab308",   # yellow — distance just updated
        "current":     "#f97316",   # orange — being processed
        "visited":     "#10b981",   # green — settled
        "path":        "#ef4444",   # red — final path
        "unreachable": "#4b5563",   # slate
        "source":      "#10b981",
    }

    # edge colors
    edge_colors: Dict[str, str] = {
        "default":  "#30363d",
        "examined": "#475569",
        "relaxed":  "#3b82f6",   # blue — relaxation
        "chosen":   "#ef4444",   # red — on the path
        "active":   "#06b6d4",   # the edge being examined RIGHT NOW
    }

    # vertex
    vertex_radius:        int = 20
    vertex_stroke:        str = "#30363d"
    vertex_stroke_width:  int = 2
    vertex_label_color:   str = "#e6edf3"
    vertex_label_size:    int = 14

    # edge
    edge_width:         int = 2
    edge_width_chosen:  int = 4
    edge_weight_color:  str = "#7d8590"
    edge_weight_size:   int = 12
    edge_weight_bg:     str = "#161b22"

    # overlay panels (right-hand column)
    overlay_x:          int = 820
    overlay_bg:         str = "#161b22"
    overlay_border:     str = "#30363d"
    overlay_text:       str = "#7d8590"
    overlay_accent:     str = "#0ea5e9"
    overlay_font_size:  int = 13
    overlay_rows:       int = 10


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
def circle_layout(graph: Graph, config: CanvasConfig = CONFIG) -> Positions:
    """Place vertices evenly on a circle in the drawing area."""
    ids = graph.vertex_ids()
    n = len(ids)
    if n == 0:
        return {}
    area_w = config.overlay_x - 20
    cx, cy = area_w / 2, config.height / 2
    radius = min(area_w, config.height) * 0.38
    positions: Positions = {}
    for i, v in enumerate(ids):
        angle = 2 * math.pi * i / n - math.pi / 2
        positions[v] = (
            round(cx + radius * math.cos(angle), 1),
            round(cy + radius * math.sin(angle), 1),
        )
    return positions


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: Graph,
    snapshot: Optional[Snapshot] = None,
    positions: Optional[Positions] = None,
    config: CanvasConfig = CONFIG,
    show_overlays: bool = True,
) -> str:
    """
    Returns an SVG string.

    Args:
        graph         : The graph to render.
        snapshot      : Current frame (or None for the static graph).
        positions     : Vertex coordinates; vertices missing from it are
                        laid out on a circle.
        config        : Visual config.
        show_overlays : If True, render the frontier / distance panels.
    """
    layout = circle_layout(graph, config)
    if positions:
        layout.update({v: p for v, p in positions.items() if v in graph})

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    # -- edges (draw first so vertices sit on top) --
    for edge in graph.edges:
        svg_parts.append(_render_edge(edge, layout, snapshot, config))

    # -- vertices --
    for v in graph.vertex_ids():
        svg_parts.append(_render_vertex(v, layout[v], snapshot, config))

    # -- overlays --
    if show_overlays and snapshot is not None:
        svg_parts.append(_render_overlays(snapshot, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Vertex Rendering
# ---------------------------------------------------------------------------
def _render_vertex(
    vertex: Hashable,
    pos: Tuple[float, float],
    snapshot: Optional[Snapshot],
    config: CanvasConfig,
) -> str:
    state_key = "unvisited"
    if snapshot is not None:
        state_key = snapshot.vertex_states.get(vertex, "unvisited")
    fill = config.vertex_colors.get(state_key, config.vertex_colors["unvisited"])

    stroke = config.vertex_stroke
    stroke_width = config.vertex_stroke_width
    glow = ""
    cx, cy = pos
    r = config.vertex_radius

    if snapshot is not None and snapshot.current_vertex == vertex:
        stroke = config.vertex_colors["current"]
        stroke_width = 3
        glow = (
            f'<circle cx="{cx}" cy="{cy}" r="{r + 8}" fill="none" '
            f'stroke="{stroke}" stroke-width="2" opacity="0.3"/>'
        )

    label = html.escape(str(vertex))
    parts = [
        f'<g class="vertex {state_key}" data-id="{label}">',
        glow,
        f'  <circle cx="{cx}" cy="{cy}" r="{r}" '
        f'fill="{fill}" stroke="{stroke}" stroke-width="{stroke_width}"/>',
        f'  <text x="{cx}" y="{cy + 5}" text-anchor="middle" '
        f'font-size="{config.vertex_label_size}" font-family="sans-serif" '
        f'fill="{config.vertex_label_color}" font-weight="600">{label}</text>',
    ]

    # distance label above the vertex
    if snapshot is not None and vertex in snapshot.distances:
        d = snapshot.distances[vertex]
        d_str = "∞" if d == math.inf else f"{d:g}"
        parts.append(
            f'  <text x="{cx}" y="{cy - r - 8}" text-anchor="middle" font-size="11" '
            f'font-family="monospace" fill="{config.overlay_text}">{d_str}</text>'
        )

    parts.append("</g>")
    return "\n".join(p for p in parts if p)


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(
    edge: Edge,
    layout: Positions,
    snapshot: Optional[Snapshot],
    config: CanvasConfig,
) -> str:
    state_key = "default"
    if snapshot is not None:
        state_key = snapshot.edge_states.get(edge.key, "default")

    stroke = config.edge_colors.get(state_key, config.edge_colors["default"])
    stroke_width = config.edge_width_chosen if state_key == "chosen" else config.edge_width

    if snapshot is not None and snapshot.current_edge == edge.key:
        stroke = config.edge_colors["active"]
        stroke_width = 4

    x1, y1 = layout[edge.source]
    x2, y2 = layout[edge.target]

    # shorten the line by the vertex radius on both ends
    dx, dy = x2 - x1, y2 - y1
    dist = math.hypot(dx, dy)
    if dist < 0.001:
        return ""  # degenerate edge
    ux, uy = dx / dist, dy / dist
    r = config.vertex_radius

    parts = [
        f'<g class="edge {state_key}" data-id="{html.escape(edge_label(edge.key))}">',
        f'  <line x1="{x1 + ux * r:.1f}" y1="{y1 + uy * r:.1f}" '
        f'x2="{x2 - ux * r:.1f}" y2="{y2 - uy * r:.1f}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>',
    ]

    # weight label at the midpoint, offset perpendicular to the edge
    mx = (x1 + x2) / 2 - uy * 12
    my = (y1 + y2) / 2 + ux * 12
    parts.append(
        f'  <circle cx="{mx:.1f}" cy="{my:.1f}" r="12" '
        f'fill="{config.edge_weight_bg}" opacity="0.9"/>'
    )
    parts.append(
        f'  <text x="{mx:.1f}" y="{my + 4:.1f}" text-anchor="middle" '
        f'font-size="{config.edge_weight_size}" font-family="sans-serif" '
        f'fill="{config.edge_weight_color}" font-weight="600">{edge.weight:g}</text>'
    )
    parts.append("</g>")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Overlay Panels
# ---------------------------------------------------------------------------
def _render_overlays(snapshot: Snapshot, config: CanvasConfig) -> str:
    parts = ['<g class="overlays">']
    parts.append(_render_list_panel(
        "Frontier", [str(v) for v in snapshot.frontier], config, x=config.overlay_x, y=20,
    ))
    parts.append(_render_list_panel(
        "Distances", [f"{v}: {d}" for v, d in distance_table(snapshot)], config,
        x=config.overlay_x, y=210,
    ))
    parts.append("</g>")
    return "\n".join(parts)


def _render_list_panel(title: str, rows: List[str], config: CanvasConfig, x: int, y: int) -> str:
    shown = rows[:config.overlay_rows]
    height = 40 + 16 * max(len(shown), 1) + (16 if len(rows) > len(shown) else 0)
    parts = [
        f'<g class="panel-{title.lower()}" transform="translate({x},{y})">',
        f'  <rect width="240" height="{height}" fill="{config.overlay_bg}" '
        f'stroke="{config.overlay_border}" stroke-width="1" rx="8" opacity="0.95"/>',
        f'  <text x="12" y="22" font-size="13" font-weight="700" '
        f'fill="{config.overlay_accent}" font-family="sans-serif">{title}</text>',
    ]
    for i, row in enumerate(shown):
        parts.append(
            f'  <text x="16" y="{44 + i * 16}" font-size="{config.overlay_font_size}" '
            f'font-family="monospace" fill="{config.overlay_text}">{html.escape(row)}</text>'
        )
    if len(rows) > len(shown):
        parts.append(
            f'  <text x="16" y="{44 + len(shown) * 16}" font-size="11" '
            f'fill="#484f58">… +{len(rows) - len(shown)} more</text>'
        )
    parts.append("</g>")
    return "\n".join(parts)
