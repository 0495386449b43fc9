"""
app.py — Algorithm Visualizer Flask App
=========================================
The web server that powers the visualizer.

Routes:
  GET  /                         – home page with the three views
  GET  /sorting                  – sorting view
  GET  /searching  (/search)     – searching view
  GET  /graph                    – graph traversal view
  POST /api/array/generate       – new random array {size?}
  POST /api/array/custom         – comma-separated custom array {text}
  POST /api/search/generate      – new sorted array for searching
  POST /api/search/target        – set search target {target}
  POST /api/graph/generate       – new random graph {nodes?, seed?}
  POST /api/config/algo          – select algorithm {view, algo_key}
  POST /api/config/delay         – step delay {delay_ms, view?}
  POST /api/config/start         – traversal start node {start}
  POST /api/run                  – start playback {view}  (409 when busy)
  POST /api/pause                – toggle pause / resume
  POST /api/cancel               – cancel playback
  POST /api/reset                – stop and restore the un-played look {view?}
  GET  /api/state?view=…         – snapshot + SVG + rendered panels (polled)

State management:
  One VisualizerSession per app, stored in app.extensions.  The playback
  runs on the driver's background thread; request threads only read the
  PlaybackState through its locked snapshot().
"""

import logging
from typing import Any, Dict, Optional

from flask import Blueprint, Flask, current_app, jsonify, render_template_string, request

from algoviz import collection
from algoviz.algorithms import GRAPH, SEARCHING, algorithms_by_family
from algoviz.config import Config
from algoviz.session import VisualizerSession
from algoviz.ui import (
    render_bars,
    render_graph,
    view_nav,
    algorithm_selector,
    array_controls,
    search_controls,
    graph_controls,
    playback_controls,
    narration_panel,
    info_panel,
    analytics_panel,
)

logger = logging.getLogger(__name__)

bp = Blueprint("algoviz", __name__)

VIEW_TITLES = {
    "sorting":   "📊 Sorting Visualizer",
    "searching": "🔍 Searching Visualizer",
    "graph":     "🌐 Graph Algorithm Visualizer",
}


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[Config] = None, session: Optional[VisualizerSession] = None) -> Flask:
    app = Flask(__name__)
    app.extensions["algoviz"] = session or VisualizerSession(config or Config())
    app.register_blueprint(bp)
    app.register_error_handler(ValueError, _bad_request)
    return app


def get_session() -> VisualizerSession:
    return current_app.extensions["algoviz"]


def _bad_request(exc: ValueError):
    logger.warning("Bad request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


def _json() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def _opt_int(value) -> Optional[int]:
    """Leading integer of a JSON value, None when absent or not numeric."""
    return collection.parse_target(value)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------
def _controls_html(session: VisualizerSession, view_name: str) -> str:
    view = session.view(view_name)
    busy = session.busy
    parts = [algorithm_selector(algorithms_by_family(view.family), selected_key=view.algo_key, disabled=busy)]

    if view.family == GRAPH:
        cfg = session.config.graph
        parts.append(graph_controls(
            node_ids=session.graph.node_ids(),
            start=session.start_node,
            node_count=session.graph.node_count(),
            min_nodes=cfg.min_nodes,
            max_nodes=cfg.max_nodes,
            disabled=busy,
        ))
    elif view.family == SEARCHING:
        parts.append(search_controls(target=session.target, disabled=busy))
    else:
        cfg = session.config.sorting
        parts.append(array_controls(
            size=len(session.array), min_size=cfg.min_size, max_size=cfg.max_size, disabled=busy,
        ))
    return "".join(parts)


def view_payload(session: VisualizerSession, view_name: str) -> Dict[str, Any]:
    """Snapshot of a view plus everything the page re-renders from it."""
    data = session.snapshot(view_name)
    view = session.view(view_name)
    state = data["state"]
    pb = session.config.playback

    if view.family == GRAPH:
        data["svg"] = render_graph(session.graph, view.state)
    else:
        data["svg"] = render_bars(view.state)

    data["panels"] = {
        "controls":  _controls_html(session, view_name),
        "playback":  playback_controls(
            status=data["status"],
            delay_ms=view.delay_ms,
            min_delay_ms=pb.min_delay_ms,
            max_delay_ms=pb.max_delay_ms,
            step_index=state["step_index"],
        ),
        "narration": narration_panel(state["narration"], state["result"]),
        "info":      info_panel(view.algo, visited=state["visited"], distances=state["distances"]),
        "analytics": analytics_panel(state["counters"]),
    }
    return data


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------
@bp.route("/")
def index():
    return render_template_string(HOME_TEMPLATE, nav=view_nav())


def _view_page(view_name: str):
    payload = view_payload(get_session(), view_name)
    return render_template_string(
        VIEW_TEMPLATE,
        view=view_name,
        title=VIEW_TITLES[view_name],
        nav=view_nav(view_name),
        svg=payload["svg"],
        panels=payload["panels"],
    )


@bp.route("/sorting")
def sorting_page():
    return _view_page("sorting")


@bp.route("/searching")
@bp.route("/search")
def searching_page():
    return _view_page("searching")


@bp.route("/graph")
def graph_page():
    return _view_page("graph")


# ---------------------------------------------------------------------------
# API: Inputs
# ---------------------------------------------------------------------------
@bp.route("/api/array/generate", methods=["POST"])
def api_array_generate():
    session = get_session()
    session.generate_array(_opt_int(_json().get("size")))
    return jsonify(view_payload(session, "sorting"))


@bp.route("/api/array/custom", methods=["POST"])
def api_array_custom():
    session = get_session()
    accepted = session.set_custom_array(str(_json().get("text", "")))
    return jsonify({"accepted": accepted, **view_payload(session, "sorting")})


@bp.route("/api/search/generate", methods=["POST"])
def api_search_generate():
    session = get_session()
    session.generate_search_array()
    return jsonify(view_payload(session, "searching"))


@bp.route("/api/search/target", methods=["POST"])
def api_search_target():
    session = get_session()
    accepted = session.set_target(_json().get("target"))
    return jsonify({"accepted": accepted, **view_payload(session, "searching")})


@bp.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    session = get_session()
    data = _json()
    accepted = session.generate_graph(nodes=_opt_int(data.get("nodes")), seed=_opt_int(data.get("seed")))
    return jsonify({"accepted": accepted, **view_payload(session, "graph")})


# ---------------------------------------------------------------------------
# API: Configuration
# ---------------------------------------------------------------------------
@bp.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    session = get_session()
    data = _json()
    view_name = data.get("view", "sorting")
    accepted = session.set_algorithm(view_name, str(data.get("algo_key", "")))
    return jsonify({"accepted": accepted, **view_payload(session, view_name)})


@bp.route("/api/config/delay", methods=["POST"])
def api_config_delay():
    session = get_session()
    data = _json()
    delay = _opt_int(data.get("delay_ms"))
    if delay is None:
        raise ValueError("delay_ms must be an integer")
    return jsonify({"delay_ms": session.set_delay(delay, data.get("view"))})


@bp.route("/api/config/start", methods=["POST"])
def api_config_start():
    session = get_session()
    accepted = session.set_start(str(_json().get("start", "")))
    return jsonify({"accepted": accepted, **view_payload(session, "graph")})


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
@bp.route("/api/run", methods=["POST"])
def api_run():
    session = get_session()
    view_name = _json().get("view", "sorting")
    if not session.run(view_name):
        return jsonify({"error": "A playback is already active"}), 409
    return jsonify(view_payload(session, view_name))


@bp.route("/api/pause", methods=["POST"])
def api_pause():
    return jsonify({"status": get_session().toggle_pause()})


@bp.route("/api/cancel", methods=["POST"])
def api_cancel():
    session = get_session()
    session.cancel()
    return jsonify({"status": session.driver.status.value})


@bp.route("/api/reset", methods=["POST"])
def api_reset():
    session = get_session()
    view_name = _json().get("view")
    session.reset(view_name)
    return jsonify(view_payload(session, view_name or "sorting"))


@bp.route("/api/state")
def api_state():
    return jsonify(view_payload(get_session(), request.args.get("view", "sorting")))


# ---------------------------------------------------------------------------
# HTML Templates
# ---------------------------------------------------------------------------
BASE_STYLE = """
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --border-bright: #484f58;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-teal: #06b6d4;
      --accent-emerald: #10b981;
      --accent-amber: #f59e0b;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
    }

    .view-nav { display: flex; gap: 12px; padding: 16px 24px; border-bottom: 1px solid var(--border); }
    .nav-link { color: var(--text-secondary); text-decoration: none; padding: 6px 12px; border-radius: 6px; }
    .nav-link.active, .nav-link:hover { color: var(--text-primary); background: var(--bg-panel); }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 16px;
      margin-bottom: 16px;
    }
    .panel h3 {
      font-size: 13px; font-weight: 700; text-transform: uppercase;
      letter-spacing: 0.5px; color: var(--accent-cyan); margin-bottom: 12px;
    }
    .panel label { display: block; margin: 8px 0; color: var(--text-secondary); font-size: 13px; }
    .panel input, .panel select {
      width: 100%; padding: 6px 8px; margin-top: 4px;
      background: var(--bg-darker); color: var(--text-primary);
      border: 1px solid var(--border); border-radius: 6px;
    }
    .panel input[type=range] { padding: 0; }
    .button-row { display: flex; flex-wrap: wrap; gap: 6px; margin: 8px 0; }
    button {
      padding: 6px 12px; border-radius: 6px; cursor: pointer;
      background: var(--bg-darker); color: var(--text-primary); border: 1px solid var(--border-bright);
    }
    button:disabled { opacity: 0.4; cursor: not-allowed; }
    .btn-primary { background: var(--accent-cyan); border-color: var(--accent-cyan); color: #fff; }
    .btn-secondary { width: 100%; margin-top: 8px; }
    .placeholder { color: var(--text-secondary); font-size: 13px; }
    .status-badge { font-size: 11px; padding: 2px 6px; border-radius: 4px; background: var(--border); margin-left: 8px; }
    .status-running { background: var(--accent-emerald); }
    .status-paused { background: var(--accent-amber); }
    .status-cancelled { background: var(--accent-rose); }
    table td { padding: 2px 8px 2px 0; font-size: 13px; }
  </style>
"""

HOME_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Algo Visualizer</title>
""" + BASE_STYLE + """
</head>
<body>
  {{ nav|safe }}
  <div style="text-align: center; margin-top: 50px;">
    <h1>Welcome to Algo Visualizer</h1>
    <p style="color: var(--text-secondary); margin: 16px 0;">Select a section:</p>
    <div class="button-row" style="justify-content: center;">
      <a href="/sorting"><button>Sorting</button></a>
      <a href="/searching"><button>Searching</button></a>
      <a href="/graph"><button>Graph Algorithms</button></a>
    </div>
  </div>
</body>
</html>
"""

VIEW_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
""" + BASE_STYLE + """
  <style>
    #layout { display: flex; height: calc(100vh - 60px); }
    #sidebar { width: 340px; overflow-y: auto; padding: 24px 16px; border-right: 1px solid var(--border); }
    #main { flex: 1; display: flex; flex-direction: column; }
    #canvas-container { flex: 1; display: flex; align-items: center; justify-content: center; }
    #canvas-svg svg { max-width: 100%; height: auto; }
    #bottom-panel {
      display: grid; grid-template-columns: 1fr 1fr; gap: 20px; padding: 20px;
      background: var(--bg-dark); border-top: 1px solid var(--border);
    }
    .narration .description { font-size: 15px; }
    .narration .result { margin-top: 12px; font-size: 18px; font-weight: 700; color: var(--accent-emerald); }
  </style>
</head>
<body>
  {{ nav|safe }}
  <div id="layout">
    <div id="sidebar">
      <h2 style="margin-bottom: 16px;">{{ title }}</h2>
      <div id="controls">{{ panels.controls|safe }}</div>
      <div id="playback">{{ panels.playback|safe }}</div>
      <div id="analytics">{{ panels.analytics|safe }}</div>
    </div>
    <div id="main">
      <div id="canvas-container">
        <div id="canvas-svg">{{ svg|safe }}</div>
      </div>
      <div id="bottom-panel">
        <div class="panel"><h3>Step Explanation</h3><div id="narration">{{ panels.narration|safe }}</div></div>
        <div id="info">{{ panels.info|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    const VIEW = "{{ view }}";
    let pollTimer = null;
    let lastBusy = null;

    // API helpers
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(Object.assign({view: VIEW}, data || {})),
      });
      const body = await res.json();
      if (!res.ok && body.error) {
        document.getElementById('narration').textContent = body.error;
      }
      return body;
    }

    function apply(data) {
      if (!data || !data.panels) return;
      document.getElementById('canvas-svg').innerHTML = data.svg;
      document.getElementById('playback').innerHTML = data.panels.playback;
      document.getElementById('narration').innerHTML = data.panels.narration;
      document.getElementById('info').innerHTML = data.panels.info;
      document.getElementById('analytics').innerHTML = data.panels.analytics;
      // re-render inputs only when their enabled state flips
      if (data.busy !== lastBusy) {
        document.getElementById('controls').innerHTML = data.panels.controls;
        lastBusy = data.busy;
      }
      if (data.busy && !pollTimer) {
        pollTimer = setInterval(poll, 100);
      } else if (!data.busy && pollTimer) {
        clearInterval(pollTimer);
        pollTimer = null;
      }
    }

    async function poll() {
      const res = await fetch(`/api/state?view=${VIEW}`);
      apply(await res.json());
    }

    const value = (id) => (document.getElementById(id) || {}).value;

    const clicks = {
      'btn-run':              () => post('/api/run'),
      'btn-pause':            () => post('/api/pause').then(poll),
      'btn-cancel':           () => post('/api/cancel').then(poll),
      'btn-reset':            () => post('/api/reset'),
      'btn-gen-array':        () => post('/api/array/generate', {size: +value('array-size')}),
      'btn-custom-array':     () => post('/api/array/custom', {text: value('custom-array')}),
      'btn-gen-search-array': () => post('/api/search/generate'),
      'btn-set-target':       () => post('/api/search/target', {target: value('target-input')}),
      'btn-gen-graph':        () => post('/api/graph/generate', {nodes: +value('graph-nodes')}),
    };

    document.addEventListener('click', async (e) => {
      const btn = e.target.closest('button');
      if (!btn) return;
      if (btn.dataset.delay) {
        await post('/api/config/delay', {delay_ms: +btn.dataset.delay});
        return poll();
      }
      const handler = clicks[btn.id];
      if (handler) apply(await handler());
    });

    document.addEventListener('change', async (e) => {
      if (e.target.id === 'algo-selector') {
        apply(await post('/api/config/algo', {algo_key: e.target.value}));
      } else if (e.target.id === 'start-selector') {
        apply(await post('/api/config/start', {start: e.target.value}));
      } else if (e.target.id === 'delay-slider') {
        await post('/api/config/delay', {delay_ms: +e.target.value});
      }
    });

    document.addEventListener('input', (e) => {
      if (e.target.id === 'array-size') document.getElementById('array-size-val').textContent = e.target.value;
      if (e.target.id === 'delay-slider') document.getElementById('delay-val').textContent = e.target.value;
    });

    poll();
  </script>
</body>
</html>
"""
