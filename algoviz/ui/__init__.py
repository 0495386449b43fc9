"""
ui/
---
Presentation layer.

    from algoviz.ui import render_bars, render_graph
    from algoviz.ui import playback_controls, algorithm_selector, …
"""

from algoviz.ui.canvas import render_bars, render_graph, CanvasConfig

from algoviz.ui.controls import (
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

__all__ = [
    "render_bars",
    "render_graph",
    "CanvasConfig",
    "view_nav",
    "algorithm_selector",
    "array_controls",
    "search_controls",
    "graph_controls",
    "playback_controls",
    "narration_panel",
    "info_panel",
    "analytics_panel",
]
