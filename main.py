"""
main.py — Dijkstra Step Visualizer Flask App
=============================================
The web server that plays a shortest-path run back one event at a time.

Routes:
  GET  /                          – main UI
  GET  /api/graph                 – current graph (dict + svg)
  POST /api/graph/demo            – reset to the demonstration graph
  POST /api/graph/import          – import from adjacency-list text
  POST /api/config/source_target  – pick start / end
  POST /api/config/speed          – playback speed preset
  POST /api/run                   – start a run
  POST /api/step/next             – advance one step
  POST /api/step/prev             – rewind one step
  POST /api/step/goto             – jump to step N
  POST /api/step/end              – jump to the final step
  POST /api/step/play             – toggle play/pause
  GET  /api/state                 – current app state (for polling)

State management:
  The graph, start / end and playback position live in the Flask
  session.  Recorded runs are kept server side in memory, keyed by a
  per-session token (the cookie would not hold them).

Pacing:
  The browser owns it.  While playing, the page calls /api/step/next
  every `speed` seconds; the search itself never waits.
"""

import secrets
from collections import OrderedDict
from typing import Optional

from flask import Flask, render_template_string, request, jsonify, session

from config import get_config
from graph import Graph, GraphError, UnknownVertex, demo_graph, DEMO_POSITIONS
from algorithms import PSEUDOCODE
from engine import Recorder, SPEED_PRESETS, Snapshot
from log import get_logger, set_global_log_level
from ui import (
    render_canvas,
    playback_controls,
    source_target_picker,
    graph_importer,
    analytics_panel,
    pseudocode_viewer,
    explanation_panel,
    event_log_panel,
)


CONFIG = get_config()
set_global_log_level(CONFIG.log_level)
logger = get_logger(__name__)

app = Flask(__name__)
app.secret_key = CONFIG.secret_key

# session token → recorded run, least recently used first
_RUNS: "OrderedDict[str, Recorder]" = OrderedDict()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_graph() -> Graph:
    """Deserialise graph from session, or start with the demo graph."""
    if "graph" not in session:
        save_graph(demo_graph(), is_demo=True)
    return Graph.from_dict(session["graph"])


def save_graph(graph: Graph, is_demo: bool = False) -> None:
    session["graph"] = graph.to_dict()
    session["is_demo"] = is_demo
    ids = graph.vertex_ids()
    # first vertex is the default start, the last the default end
    set_state(
        source=ids[0] if ids else None,
        target=ids[-1] if ids else None,
        current_step=0,
        total_steps=0,
        is_playing=False,
    )
    _RUNS.pop(session.get("sid", ""), None)


def get_positions():
    return DEMO_POSITIONS if session.get("is_demo", False) else None


def get_state() -> dict:
    return {
        "source":       session.get("source"),
        "target":       session.get("target"),
        "current_step": session.get("current_step", 0),
        "total_steps":  session.get("total_steps", 0),
        "is_playing":   session.get("is_playing", False),
        "speed":        session.get("speed", CONFIG.default_speed),
    }


def set_state(**kwargs) -> None:
    for k, v in kwargs.items():
        session[k] = v


def _session_token() -> str:
    if "sid" not in session:
        session["sid"] = secrets.token_hex(8)
    return session["sid"]


def _current_run() -> Optional[Recorder]:
    sid = session.get("sid", "")
    rec = _RUNS.get(sid)
    if rec is not None:
        _RUNS.move_to_end(sid)
    return rec


def _store_run(rec: Recorder) -> None:
    """Keep `rec` as this session's run; evict the stalest beyond CONFIG.max_runs."""
    sid = _session_token()
    _RUNS[sid] = rec
    _RUNS.move_to_end(sid)
    while len(_RUNS) > CONFIG.max_runs:
        evicted, _ = _RUNS.popitem(last=False)
        logger.debug("Evicted recorded run of session %s", evicted)


def _error(message: str, status: int = 400):
    logger.warning("Rejected request to %s: %s", request.path, message)
    return jsonify({"error": message}), status


def _frame(graph: Graph, rec: Recorder, idx: int) -> dict:
    """Everything the page needs to redraw after moving to step `idx`."""
    snap: Snapshot = rec.snapshots[idx]
    log_lines = [s.explanation for s in rec.snapshots[: idx + 1]]
    return {
        "svg":          render_canvas(graph, snap, get_positions()),
        "pseudocode":   pseudocode_viewer(PSEUDOCODE, snap.pseudocode_line),
        "explanation":  explanation_panel(snap.explanation),
        "event_log":    event_log_panel(log_lines),
        "snapshot":     snap.to_dict(),
        "current_step": idx,
        "total_steps":  len(rec.snapshots),
        "is_final":     snap.is_final,
    }


@app.errorhandler(GraphError)
def handle_graph_error(exc: GraphError):
    return _error(str(exc))


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    graph = get_graph()
    state = get_state()

    html = render_template_string(
        INDEX_TEMPLATE,
        svg=render_canvas(graph, None, get_positions(), show_overlays=False),
        picker=source_target_picker(graph.vertex_ids(), state["source"], state["target"]),
        playback=playback_controls(
            is_playing=state["is_playing"],
            current_step=state["current_step"],
            total_steps=state["total_steps"],
            speed=state["speed"],
        ),
        importer=graph_importer(),
        analytics=analytics_panel(),
        pseudocode=pseudocode_viewer(PSEUDOCODE),
        explanation=explanation_panel(),
    )
    return html


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
def _graph_payload(graph: Graph) -> dict:
    state = get_state()
    return {
        "graph":  graph.to_dict(),
        "svg":    render_canvas(graph, None, get_positions(), show_overlays=False),
        "picker": source_target_picker(graph.vertex_ids(), state["source"], state["target"]),
        "vertex_ids": list(graph.vertex_ids()),
    }


@app.route("/api/graph", methods=["GET"])
def api_graph():
    return jsonify(_graph_payload(get_graph()))


@app.route("/api/graph/demo", methods=["POST"])
def api_graph_demo():
    g = demo_graph()
    save_graph(g, is_demo=True)
    return jsonify(_graph_payload(g))


@app.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    data = request.get_json(silent=True) or {}
    text = data.get("text", "")
    if not text.strip():
        return _error("Nothing to import")

    g = Graph.from_adjacency_list(text)      # GraphError → 400
    if g.vertex_count() < 2:
        return _error("A graph needs at least two vertices")

    save_graph(g)
    return jsonify(_graph_payload(g))


# ---------------------------------------------------------------------------
# API: Config
# ---------------------------------------------------------------------------
@app.route("/api/config/source_target", methods=["POST"])
def api_config_source_target():
    graph = get_graph()
    data = request.get_json(silent=True) or {}
    src = data.get("source")
    tgt = data.get("target")
    for v in (src, tgt):
        if v and not graph.has_vertex(v):
            raise UnknownVertex(v)
    if src:
        set_state(source=src)
    if tgt:
        set_state(target=tgt)
    state = get_state()
    return jsonify({"source": state["source"], "target": state["target"]})


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    speed = (request.get_json(silent=True) or {}).get("speed", CONFIG.default_speed)
    if speed not in SPEED_PRESETS:
        return _error(f"Unknown speed {speed!r}")
    set_state(speed=speed)
    return jsonify({"speed": speed, "seconds": SPEED_PRESETS[speed]})


# ---------------------------------------------------------------------------
# API: Run
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    graph = get_graph()
    data = request.get_json(silent=True) or {}
    if data.get("source") or data.get("target"):
        set_state(
            source=data.get("source", session.get("source")),
            target=data.get("target", session.get("target")),
        )
    state = get_state()

    source = state["source"]
    target = state["target"]
    if not source or not target:
        return _error("Set start and end first")
    if source == target:
        return _error("Start and end vertices must be different.")

    rec = Recorder()
    rec.start(graph, source, target)          # UnknownVertex → 400
    rec.run_to_completion()
    rec.stepper.rewind()
    _store_run(rec)

    set_state(current_step=0, total_steps=len(rec.snapshots), is_playing=False)

    payload = _frame(graph, rec, 0)
    payload["analytics"] = analytics_panel(rec.metrics)
    payload["metrics"] = rec.metrics.to_dict()
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
def _move(to_index):
    rec = _current_run()
    if rec is None:
        return _error("Start a run first")

    state = get_state()
    idx = to_index(state["current_step"], len(rec.snapshots))
    if idx is None or not rec.stepper.goto_step(idx):
        return _error("Invalid step index")

    set_state(current_step=idx)
    if idx == len(rec.snapshots) - 1:
        set_state(is_playing=False)
    return jsonify(_frame(get_graph(), rec, idx))


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    return _move(lambda cur, total: cur + 1 if cur + 1 < total else None)


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    return _move(lambda cur, total: cur - 1 if cur > 0 else None)


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    idx = (request.get_json(silent=True) or {}).get("index", 0)
    if isinstance(idx, bool) or not isinstance(idx, int):
        return _error("Step index must be an integer")
    return _move(lambda cur, total: idx if 0 <= idx < total else None)


@app.route("/api/step/end", methods=["POST"])
def api_step_end():
    return _move(lambda cur, total: total - 1 if total else None)


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    playing = not get_state()["is_playing"]
    set_state(is_playing=playing)
    return jsonify({"is_playing": playing, "seconds": SPEED_PRESETS[get_state()["speed"]]})


@app.route("/api/state", methods=["GET"])
def api_state():
    state = get_state()
    rec = _current_run()
    state["metrics"] = rec.metrics.to_dict() if rec and rec.metrics else None
    return jsonify(state)


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Dijkstra's Algorithm Visualization</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 14px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr 1fr;
      gap: 16px;
      padding: 16px;
      background: var(--bg-dark);
      height: 300px;
    }

    #bottom-panel > div {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 12px;
      overflow-y: auto;
    }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 14px;
      margin-bottom: 14px;
    }

    h3 { font-size: 14px; margin-bottom: 10px; }
    label { display: block; font-size: 13px; margin: 6px 0; color: var(--text-secondary); }
    select, textarea { width: 100%; background: var(--bg-darker); color: var(--text-primary);
                       border: 1px solid var(--border); border-radius: 6px; padding: 6px; }
    button { background: var(--bg-darker); color: var(--text-primary); border: 1px solid var(--border);
             border-radius: 6px; padding: 6px 10px; cursor: pointer; margin-top: 6px; }
    .btn-primary { background: var(--accent-cyan); border: none; width: 100%; }

    .code-line { font-family: monospace; font-size: 12px; white-space: pre; padding: 1px 6px; }
    .code-line.highlight { background: rgba(14, 165, 233, 0.25); border-left: 3px solid var(--accent-cyan); }
    .event-log { font-family: monospace; font-size: 12px; color: var(--text-secondary); }
    .step-info { font-family: monospace; font-size: 13px; margin: 10px 0; }
    .finished-badge { background: #10b981; color: #fff; padding: 2px 8px; border-radius: 6px; font-size: 11px; }
    .error { color: #f43f5e; font-size: 13px; margin-top: 8px; }
    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="picker">{{ picker|safe }}</div>
    <div id="error" class="error"></div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="importer">{{ importer|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div>
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div>
        <h3>Step Explanation</h3>
        <div id="explanation">{{ explanation|safe }}</div>
      </div>
      <div>
        <h3>Output</h3>
        <div id="event-log"></div>
      </div>
    </div>
  </div>

  <script>
    let timer = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      const body = await res.json();
      document.getElementById('error').textContent = body.error || '';
      return body;
    }

    function show(data) {
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.explanation) document.getElementById('explanation').innerHTML = data.explanation;
      if (data.event_log) {
        const log = document.getElementById('event-log');
        log.innerHTML = data.event_log;
        log.parentElement.scrollTop = log.parentElement.scrollHeight;
      }
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
      if (data.current_step !== undefined) document.getElementById('current-step').textContent = data.current_step;
      if (data.total_steps !== undefined) document.getElementById('total-steps').textContent = data.total_steps;
      if (data.is_final || data.error) stop();
    }

    function stop() {
      if (timer) { clearInterval(timer); timer = null; }
    }

    function bindPicker() {
      document.getElementById('btn-run')?.addEventListener('click', async () => {
        stop();
        show(await post('/api/run', {
          source: document.getElementById('source-selector').value,
          target: document.getElementById('target-selector').value,
        }));
      });
    }
    bindPicker();

    function showGraph(data) {
      if (data.error) return;
      stop();
      document.getElementById('canvas-svg').innerHTML = data.svg;
      document.getElementById('picker').innerHTML = data.picker;
      document.getElementById('event-log').innerHTML = '';
      bindPicker();
    }

    document.getElementById('btn-next').addEventListener('click', async () => show(await post('/api/step/next')));
    document.getElementById('btn-prev').addEventListener('click', async () => show(await post('/api/step/prev')));
    document.getElementById('btn-rewind').addEventListener('click', async () => show(await post('/api/step/goto', {index: 0})));
    document.getElementById('btn-end').addEventListener('click', async () => show(await post('/api/step/end')));

    document.getElementById('btn-play').addEventListener('click', async () => {
      const data = await post('/api/step/play');
      stop();
      if (data.is_playing) {
        timer = setInterval(async () => show(await post('/api/step/next')), data.seconds * 1000);
      }
    });

    document.getElementById('speed-selector').addEventListener('change', async (e) => {
      await post('/api/config/speed', {speed: e.target.value});
    });

    document.getElementById('btn-import').addEventListener('click', async () => {
      showGraph(await post('/api/graph/import', {text: document.getElementById('import-text').value}));
    });
    document.getElementById('btn-demo').addEventListener('click', async () => showGraph(await post('/api/graph/demo')));
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logger.info("Dijkstra step visualizer on http://%s:%d", CONFIG.host, CONFIG.port)
    app.run(host=CONFIG.host, port=CONFIG.port, debug=CONFIG.debug)
