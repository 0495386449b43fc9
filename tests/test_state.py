"""Tests for PlaybackState: applying steps and snapshots."""

from algoviz.algorithms import StepBuilder
from algoviz.algorithms.bfs import bfs
from algoviz.algorithms.dijkstra import dijkstra
from algoviz.algorithms.searching import binary_search
from algoviz.engine import PlaybackState


class TestSortingSteps:
    def test_compare_highlights_without_touching_values(self):
        state = PlaybackState(values=[5, 3])
        state.apply(StepBuilder().compare(0, 1, "Compare 5 and 3"))
        assert state.values == [5, 3]
        assert state.highlighted == [0, 1]
        assert state.narration == "Compare 5 and 3"
        assert state.counters["comparisons"] == 1

    def test_swap_exchanges_values(self):
        state = PlaybackState(values=[5, 3])
        state.apply(StepBuilder().swap(0, 1))
        assert state.values == [3, 5]
        assert state.counters["swaps"] == 1

    def test_overwrite_sets_one_slot(self):
        state = PlaybackState(values=[5, 3, 1])
        state.apply(StepBuilder().overwrite(2, 9))
        assert state.values == [5, 3, 9]
        assert state.highlighted == [2]

    def test_mark_sorted_accumulates(self):
        state = PlaybackState(values=[1, 2, 3])
        sb = StepBuilder()
        state.apply(sb.mark_sorted(2))
        state.apply(sb.mark_sorted(1))
        assert state.sorted_indices == {1, 2}

    def test_done_marks_everything_sorted(self):
        state = PlaybackState(values=[1, 2, 3])
        state.apply(StepBuilder().done("Array sorted."))
        assert state.finished
        assert state.sorted_indices == {0, 1, 2}
        assert state.result == "Array sorted."

    def test_empty_explanation_keeps_previous_narration(self):
        state = PlaybackState(values=[2, 1])
        sb = StepBuilder()
        state.apply(sb.compare(0, 1, "Compare 2 and 1"))
        state.apply(sb.swap(0, 1))
        assert state.narration == "Compare 2 and 1"


class TestSearchingSteps:
    def test_probe_tracks_bounds(self):
        state = PlaybackState(values=[1, 2, 3, 4, 5])
        state.apply(StepBuilder().probe(2, low=0, high=4))
        assert (state.highlighted, state.low, state.high) == ([2], 0, 4)
        assert state.counters["probes"] == 1

    def test_found_result(self):
        values = [1, 3, 5, 7]
        state = PlaybackState(values=values)
        state.apply_all(binary_search(values, 7))
        assert state.found_index == 3
        assert state.result == "Found at index 3"
        assert state.finished

    def test_not_found_result(self):
        values = [1, 3, 5, 7]
        state = PlaybackState(values=values)
        state.apply_all(binary_search(values, 4))
        assert state.found_index is None
        assert state.result == "Not Found"
        assert state.highlighted == []

    def test_searching_does_not_mutate_values(self):
        values = [1, 3, 5, 7]
        state = PlaybackState(values=values)
        state.apply_all(binary_search(values, 5))
        assert state.values == values


class TestGraphSteps:
    def test_bfs_replay(self, cycle_graph):
        state = PlaybackState(graph=cycle_graph, start_node="A")
        state.apply_all(bfs(cycle_graph, "A"))
        assert state.visited == ["A", "B", "D", "C"]
        assert state.current_node is None
        assert state.counters["visits"] == 4
        assert state.counters["edges_explored"] == 3
        assert len(state.active_edges) == 3

    def test_current_node_follows_visits(self, cycle_graph):
        state = PlaybackState(graph=cycle_graph, start_node="A")
        steps = bfs(cycle_graph, "A")
        state.apply(next(steps))
        state.apply(next(steps))
        assert state.current_node == "A"

    def test_done_does_not_mark_indices_sorted(self, cycle_graph):
        state = PlaybackState(values=[1, 2], graph=cycle_graph)
        state.apply_all(bfs(cycle_graph, "A"))
        assert state.sorted_indices == set()

    def test_dijkstra_distances(self, weighted_graph):
        state = PlaybackState(graph=weighted_graph, start_node="A")
        state.apply_all(dijkstra(weighted_graph, "A"))
        assert state.distances["B"] == 3
        assert state.counters["relaxations"] == 4
        assert state.counters["stale_entries"] == 1

    def test_snapshot_replaces_infinity(self, weighted_graph):
        state = PlaybackState(graph=weighted_graph, start_node="A")
        state.apply(next(dijkstra(weighted_graph, "A")))
        snap = state.snapshot()
        assert snap["distances"]["A"] == 0
        assert snap["distances"]["E"] is None


class TestLifecycle:
    def test_fresh_state(self):
        state = PlaybackState(values=[3, 1])
        assert state.step_index == -1
        assert not state.finished
        assert set(state.counters.values()) == {0}

    def test_load_clears_flags(self):
        state = PlaybackState(values=[2, 1])
        state.apply_all([StepBuilder().done("Array sorted.")])
        state.load(values=[9, 8, 7])
        assert state.values == [9, 8, 7]
        assert not state.finished
        assert state.result == ""
        assert state.sorted_indices == set()

    def test_values_are_copied(self):
        values = [2, 1]
        state = PlaybackState(values=values)
        state.apply(StepBuilder().swap(0, 1))
        assert values == [2, 1]

    def test_snapshot_is_detached(self):
        state = PlaybackState(values=[2, 1])
        snap = state.snapshot()
        snap["values"].append(99)
        assert state.values == [2, 1]

    def test_step_index_follows_step_number(self):
        state = PlaybackState(values=[2, 1])
        sb = StepBuilder()
        state.apply(sb.compare(0, 1))
        state.apply(sb.swap(0, 1))
        assert state.step_index == 1
        assert state.snapshot()["last_kind"] == "swap"
