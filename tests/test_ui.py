"""Tests for the SVG renderers and the HTML control panels."""

import re

import pytest

from algoviz.algorithms import REGISTRY, SORTING, StepBuilder, algorithms_by_family
from algoviz.algorithms.bfs import bfs
from algoviz.algorithms.dijkstra import dijkstra
from algoviz.engine import PlaybackState
from algoviz.graph import Graph
from algoviz.ui import (
    CanvasConfig,
    algorithm_selector,
    analytics_panel,
    graph_controls,
    info_panel,
    narration_panel,
    playback_controls,
    render_bars,
    render_graph,
    search_controls,
    view_nav,
)

COLORS = CanvasConfig.bar_colors
NODE_COLORS = CanvasConfig.node_colors


def bar_fills(svg):
    return re.findall(r'<rect x="[^"]+" y="[^"]+" width="[^"]+" height="[^"]+" rx="2" fill="([^"]+)"', svg)


@pytest.fixture()
def laid_out_graph():
    """A-B-C path on a circle, so every edge has a drawable length."""
    g = Graph.circular_layout(4)
    g.create_edge("A", "B", 2)
    g.create_edge("B", "C", 5)
    return g


class TestRenderBars:
    def test_one_bar_per_value(self):
        svg = render_bars(PlaybackState(values=[10, 20, 30]))
        assert svg.startswith("<svg")
        assert svg.count('class="bar"') == 3
        assert bar_fills(svg) == [COLORS["default"]] * 3

    def test_empty_array(self):
        svg = render_bars(PlaybackState(values=[]))
        assert 'class="bar"' not in svg
        assert svg.endswith("</svg>")

    def test_compared_pair_is_red(self):
        state = PlaybackState(values=[3, 1, 2])
        state.apply(StepBuilder().compare(0, 1))
        assert bar_fills(render_bars(state)) == [COLORS["compare"], COLORS["compare"], COLORS["default"]]

    def test_swapped_pair_is_highlighted(self):
        state = PlaybackState(values=[3, 1, 2])
        state.apply(StepBuilder().swap(0, 1))
        assert bar_fills(render_bars(state))[:2] == [COLORS["highlight"]] * 2

    def test_done_paints_everything_sorted(self):
        state = PlaybackState(values=[1, 2, 3])
        state.apply(StepBuilder().done())
        assert bar_fills(render_bars(state)) == [COLORS["sorted"]] * 3

    def test_found_bar(self):
        state = PlaybackState(values=[1, 2, 3])
        state.apply(StepBuilder().found(2))
        assert bar_fills(render_bars(state))[2] == COLORS["found"]

    def test_bars_outside_bounds_are_dimmed(self):
        state = PlaybackState(values=[1, 2, 3, 4, 5])
        state.apply(StepBuilder().probe(3, low=2, high=4))
        svg = render_bars(state)
        assert 'data-index="0" opacity="0.3"' in svg
        assert 'data-index="2" opacity="1.0"' in svg

    def test_taller_values_draw_taller_bars(self):
        svg = render_bars(PlaybackState(values=[10, 40]))
        heights = [float(h) for h in re.findall(r'height="([\d.]+)" rx', svg)]
        assert heights[1] == pytest.approx(4 * heights[0])

    def test_labels_only_when_bars_are_wide(self):
        assert "<text" in render_bars(PlaybackState(values=[5, 6, 7]))
        assert "<text" not in render_bars(PlaybackState(values=list(range(1, 101))))

    def test_does_not_mutate_state(self):
        state = PlaybackState(values=[3, 1, 2])
        before = state.snapshot()
        render_bars(state)
        assert state.snapshot() == before


class TestRenderGraph:
    def test_nodes_and_edges(self, laid_out_graph):
        svg = render_graph(laid_out_graph, PlaybackState(graph=laid_out_graph))
        assert svg.count('class="node"') == 4
        assert svg.count('class="edge"') == 2
        assert ">5</text>" in svg

    def test_no_graph_renders_empty_canvas(self):
        svg = render_graph(None, PlaybackState())
        assert 'class="node"' not in svg
        assert svg.endswith("</svg>")

    def test_current_node_gets_glow(self, laid_out_graph):
        state = PlaybackState(graph=laid_out_graph, start_node="A")
        steps = bfs(laid_out_graph, "A")
        state.apply(next(steps))
        state.apply(next(steps))
        svg = render_graph(laid_out_graph, state)
        assert f'fill="{NODE_COLORS["current"]}"' in svg
        assert 'r="28"' in svg

    def test_visited_and_active_after_traversal(self, laid_out_graph):
        state = PlaybackState(graph=laid_out_graph, start_node="A")
        state.apply_all(bfs(laid_out_graph, "A"))
        svg = render_graph(laid_out_graph, state)
        assert svg.count(f'fill="{NODE_COLORS["visited"]}"') == 3
        assert svg.count(f'fill="{NODE_COLORS["unvisited"]}"') == 1
        assert svg.count('class="edge active"') == 2

    def test_start_node_stroke(self, laid_out_graph):
        state = PlaybackState(graph=laid_out_graph, start_node="B")
        svg = render_graph(laid_out_graph, state)
        assert f'stroke="{NODE_COLORS["start"]}" stroke-width="3"' in svg

    def test_only_known_distances_are_drawn(self, laid_out_graph):
        state = PlaybackState(graph=laid_out_graph, start_node="A")
        state.apply(next(dijkstra(laid_out_graph, "A")))
        assert render_graph(laid_out_graph, state).count('class="distance"') == 1
        state.apply_all(dijkstra(laid_out_graph, "A"))
        assert render_graph(laid_out_graph, state).count('class="distance"') == 3

    def test_labels_are_escaped(self):
        g = Graph.circular_layout(2)
        g.get_node("A").label = "<A>"
        svg = render_graph(g, PlaybackState(graph=g))
        assert "&lt;A&gt;" in svg


class TestPanels:
    def test_view_nav_marks_active(self):
        html = view_nav("graph")
        assert '<a class="nav-link active" href="/graph">' in html
        assert html.count("nav-link active") == 1

    def test_algorithm_selector(self):
        html = algorithm_selector(algorithms_by_family(SORTING), "merge")
        assert html.count("<option") == 4
        assert '<option value="merge" selected>' in html

    def test_algorithm_selector_disabled(self):
        html = algorithm_selector(algorithms_by_family(SORTING), "merge", disabled=True)
        assert '<select id="algo-selector" disabled>' in html

    def test_playback_controls_while_running(self):
        html = playback_controls("running", delay_ms=150)
        assert 'id="btn-run" class="btn-primary" disabled' in html
        assert "⏸ Pause" in html
        assert 'value="150"' in html

    def test_playback_controls_while_paused(self):
        assert "▶ Resume" in playback_controls("paused")

    def test_playback_controls_idle(self):
        html = playback_controls("idle")
        assert '<button id="btn-pause" disabled>' in html
        assert 'data-delay="1000"' in html

    def test_search_controls_show_target(self):
        assert 'value="42"' in search_controls(42)
        assert 'value=""' in search_controls(None)

    def test_graph_controls_select_start(self):
        html = graph_controls(["A", "B", "C"], start="B")
        assert '<option value="B" selected>' in html

    def test_narration_placeholder_and_escape(self):
        assert "Start" in narration_panel()
        html = narration_panel("1 < 2", "Not Found")
        assert "1 &lt; 2" in html
        assert '<div class="result">Not Found</div>' in html

    def test_info_panel(self):
        html = info_panel(REGISTRY["dijkstra"], visited=["A", "C"], distances={"A": 0, "C": 1.5, "E": None})
        assert "Dijkstra&#x27;s Algorithm" in html
        assert "A → C" in html
        assert "<li>C: 1.5</li>" in html
        assert "<li>E: ∞</li>" in html

    def test_info_panel_without_algorithm(self):
        assert "placeholder" in info_panel(None)

    def test_analytics_panel(self):
        assert "placeholder" in analytics_panel({"comparisons": 0})
        html = analytics_panel({"comparisons": 6, "swaps": 0})
        assert "Comparisons" in html
        assert "Swaps" not in html
