"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls       – play/pause/next/prev/rewind/speed
  • source_target_picker    – start / end dropdowns + run button
  • graph_importer          – adjacency-list textarea
  • analytics_panel         – vertices settled, edges relaxed, path cost, …
  • pseudocode_viewer       – with live line highlighting
  • explanation_panel       – "why this step happened"
  • event_log_panel         – running narration of every event so far

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import Hashable, Iterable, List, Optional

from engine import RunMetrics, SPEED_PRESETS


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    current_step: int = 0,
    total_steps: int = 0,
    speed: str = "medium",
    is_finished: bool = False,
) -> str:
    play_icon = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"

    options = "".join(
        f'<option value="{name}" {"selected" if name == speed else ""}>'
        f'{name.capitalize()} ({secs:g}s)</option>'
        for name, secs in SPEED_PRESETS.items()
    )

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-rewind" title="Rewind to start">⏮</button>
        <button id="btn-prev" title="Previous step">◀</button>
        <button id="btn-play" title="{play_label}">{play_icon}</button>
        <button id="btn-next" title="Next step">▶</button>
        <button id="btn-end" title="Jump to end">⏭</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{current_step}</span> / <span id="total-steps">{total_steps}</span>
        {' <span class="finished-badge">FINISHED</span>' if is_finished else ''}
      </div>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">{options}</select>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Source / Target Picker
# ---------------------------------------------------------------------------
def source_target_picker(
    vertex_ids: Iterable[Hashable],
    source: Optional[Hashable] = None,
    target: Optional[Hashable] = None,
) -> str:
    src_options = []
    tgt_options = []
    for v in vertex_ids:
        label = escape(str(v))
        src_sel = 'selected' if v == source else ''
        tgt_sel = 'selected' if v == target else ''
        src_options.append(f'<option value="{label}" {src_sel}>{label}</option>')
        tgt_options.append(f'<option value="{label}" {tgt_sel}>{label}</option>')

    return f"""
    <div class="panel source-target-picker">
      <h3>🎯 Start &amp; End</h3>
      <label>Start:
        <select id="source-selector">{''.join(src_options)}</select>
      </label>
      <label>End:
        <select id="target-selector">{''.join(tgt_options)}</select>
      </label>
      <button id="btn-run" class="btn-primary">▶ Start</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Graph Importer
# ---------------------------------------------------------------------------
def graph_importer() -> str:
    return """
    <div class="panel graph-importer">
      <h3>🌐 Graph</h3>
      <textarea id="import-text" rows="6" placeholder="A: B(7) C(8)
B: F(2)
C: F(6) G(4)"></textarea>
      <button id="btn-import" class="btn-secondary">Import</button>
      <button id="btn-demo" class="btn-secondary">Demo graph</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Start a run to see metrics.</p>
        </div>
        """

    path_status = "✅ Found" if metrics.path_found else "❌ Not Found"

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {escape(str(metrics.source))} → {escape(str(metrics.target))}</h3>
      <table>
        <tr><td>Vertices Settled:</td><td><strong>{metrics.vertices_settled}</strong></td></tr>
        <tr><td>Edges Examined:</td><td><strong>{metrics.edges_examined}</strong></td></tr>
        <tr><td>Edges Relaxed:</td><td><strong>{metrics.edges_relaxed}</strong></td></tr>
        <tr><td>Path Length:</td><td><strong>{metrics.path_length} edges</strong></td></tr>
        <tr><td>Path Cost:</td><td><strong>{metrics.path_cost:g}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Path:</td><td><strong>{path_status}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "") -> str:
    if not explanation:
        return (
            '<div class="explanation-text">▶ Pick a start and an end vertex, '
            'then press <strong>Start</strong>.</div>'
        )
    return f'<div class="explanation-text">{escape(explanation)}</div>'


# ---------------------------------------------------------------------------
# Event Log
# ---------------------------------------------------------------------------
def event_log_panel(lines: List[str]) -> str:
    rows = "\n".join(f"<div>{escape(line)}</div>" for line in lines)
    return f'<div class="event-log">{rows}</div>'
