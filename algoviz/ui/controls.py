"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • view_nav             – links between the sorting / searching / graph views
  • algorithm_selector   – dropdown of one family's algorithms
  • array_controls       – size slider, random array, custom comma list
  • search_controls      – target input, new sorted array
  • graph_controls       – node count, new graph, start-node picker
  • playback_controls    – start / pause-resume / cancel / reset / delay
  • narration_panel      – current step narration and the result line
  • info_panel           – description, complexity, visited order, distances
  • analytics_panel      – running counters of the current run

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - Inputs are rendered disabled while a playback is active; the server
    ignores such changes anyway.
"""

from html import escape
from typing import Dict, List, Optional

from algoviz.algorithms import AlgoInfo
from algoviz.engine.stepper import SPEED_PRESETS

VIEWS = (
    ("sorting",   "/sorting",   "📊 Sorting"),
    ("searching", "/searching", "🔍 Searching"),
    ("graph",     "/graph",     "🌐 Graph"),
)


def _disabled(flag: bool) -> str:
    return "disabled" if flag else ""


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------
def view_nav(active: str = "") -> str:
    links = []
    for key, href, label in VIEWS:
        cls = "nav-link active" if key == active else "nav-link"
        links.append(f'<a class="{cls}" href="{href}">{label}</a>')
    return f'<nav class="view-nav">{"".join(links)}</nav>'


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "",
    disabled: bool = False,
) -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" {sel}>{algo.label} — {algo.complexity_time}</option>'
        )

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector" {_disabled(disabled)}>
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Array Controls (sorting)
# ---------------------------------------------------------------------------
def array_controls(
    size: int = 20,
    min_size: int = 5,
    max_size: int = 100,
    disabled: bool = False,
) -> str:
    return f"""
    <div class="panel array-controls">
      <h3>🔢 Array</h3>
      <label>Array Size: <span id="array-size-val">{size}</span>
        <input type="range" id="array-size" min="{min_size}" max="{max_size}" value="{size}" {_disabled(disabled)}>
      </label>
      <button id="btn-gen-array" class="btn-secondary" {_disabled(disabled)}>Generate Random Array</button>
      <input type="text" id="custom-array" placeholder="Enter numbers separated by commas" {_disabled(disabled)}>
      <button id="btn-custom-array" class="btn-secondary" {_disabled(disabled)}>Use Custom Array</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Search Controls
# ---------------------------------------------------------------------------
def search_controls(target: Optional[int] = None, disabled: bool = False) -> str:
    value = "" if target is None else str(target)
    return f"""
    <div class="panel search-controls">
      <h3>🎯 Target</h3>
      <input type="number" id="target-input" placeholder="Target" value="{value}" {_disabled(disabled)}>
      <button id="btn-set-target" class="btn-secondary" {_disabled(disabled)}>Set Target</button>
      <button id="btn-gen-search-array" class="btn-secondary">Generate New Array</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Graph Controls
# ---------------------------------------------------------------------------
def graph_controls(
    node_ids: List[str],
    start: Optional[str] = None,
    node_count: int = 7,
    min_nodes: int = 4,
    max_nodes: int = 12,
    disabled: bool = False,
) -> str:
    options = []
    for nid in node_ids:
        sel = 'selected' if nid == start else ''
        options.append(f'<option value="{escape(nid)}" {sel}>{escape(nid)}</option>')

    return f"""
    <div class="panel graph-controls">
      <h3>🌐 Graph</h3>
      <label>Nodes:
        <input type="number" id="graph-nodes" value="{node_count}" min="{min_nodes}" max="{max_nodes}" {_disabled(disabled)}>
      </label>
      <button id="btn-gen-graph" class="btn-secondary" {_disabled(disabled)}>Generate New Graph</button>
      <label>Start Node:
        <select id="start-selector" {_disabled(disabled)}>
          {''.join(options)}
        </select>
      </label>
    </div>
    """


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    status: str = "idle",
    delay_ms: int = 500,
    min_delay_ms: int = 10,
    max_delay_ms: int = 2000,
    step_index: int = -1,
) -> str:
    active = status in ("running", "paused")
    pause_label = "▶ Resume" if status == "paused" else "⏸ Pause"

    presets = []
    for name, ms in SPEED_PRESETS.items():
        presets.append(f'<button class="btn-preset" data-delay="{ms}">{name.capitalize()}</button>')

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-run" class="btn-primary" {_disabled(active)}>▶ Start</button>
        <button id="btn-pause" {_disabled(not active)}>{pause_label}</button>
        <button id="btn-cancel" {_disabled(not active)}>⏹ Cancel</button>
        <button id="btn-reset">↺ Reset</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{step_index + 1}</span>
        <span class="status-badge status-{status}">{status.upper()}</span>
      </div>
      <div class="speed-control">
        <label>Speed: <span id="delay-val">{delay_ms}</span> ms
          <input type="range" id="delay-slider" min="{min_delay_ms}" max="{max_delay_ms}" step="10" value="{delay_ms}">
        </label>
        <div class="button-row">{''.join(presets)}</div>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Narration
# ---------------------------------------------------------------------------
def narration_panel(narration: str = "", result: str = "") -> str:
    if not narration:
        narration = "▶ Choose an algorithm and press <strong>Start</strong>."
    else:
        narration = escape(narration)
    result_html = f'<div class="result">{escape(result)}</div>' if result else ""
    return f"""<div class="narration"><div class="description">{narration}</div>{result_html}</div>"""


# ---------------------------------------------------------------------------
# Info Panel
# ---------------------------------------------------------------------------
def info_panel(
    info: Optional[AlgoInfo] = None,
    visited: Optional[List[str]] = None,
    distances: Optional[Dict[str, Optional[float]]] = None,
) -> str:
    if info is None:
        return """
        <div class="panel info-panel">
          <h3>Algorithm Details</h3>
          <p class="placeholder">Select an algorithm to see its description.</p>
        </div>
        """

    blocks = [
        f"<h3>{escape(info.label)}</h3>",
        f"<p>{escape(info.description)}</p>",
        f'<p class="complexity">Time {info.complexity_time} · Space {info.complexity_space}</p>',
    ]
    if visited:
        blocks.append(f'<div class="visited-order"><h4>Visited Order:</h4><p>{" → ".join(visited)}</p></div>')
    if distances:
        rows = []
        for nid, d in distances.items():
            d_str = "∞" if d is None else (str(int(d)) if float(d).is_integer() else f"{d:g}")
            rows.append(f"<li>{escape(nid)}: {d_str}</li>")
        blocks.append(f'<div class="distances"><h4>Shortest Distances:</h4><ul>{"".join(rows)}</ul></div>')

    return f"""
    <div class="panel info-panel">
      {''.join(blocks)}
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
COUNTER_LABELS = {
    "comparisons":    "Comparisons",
    "swaps":          "Swaps",
    "writes":         "Writes",
    "probes":         "Probes",
    "visits":         "Nodes Visited",
    "edges_explored": "Edges Explored",
    "relaxations":    "Relaxations",
    "stale_entries":  "Stale Entries",
}


def analytics_panel(counters: Optional[Dict[str, int]] = None) -> str:
    nonzero = {k: v for k, v in (counters or {}).items() if v}
    if not nonzero:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    rows = [
        f"<tr><td>{COUNTER_LABELS.get(k, k)}:</td><td><strong>{v}</strong></td></tr>"
        for k, v in nonzero.items()
    ]
    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics</h3>
      <table>
        {''.join(rows)}
      </table>
    </div>
    """
