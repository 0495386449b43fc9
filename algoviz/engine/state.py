"""
state.py — Playback State
==========================
The shared, presented state of one visualizer view.  Steps are applied to
it one at a time; the renderer only ever reads it.

    state = PlaybackState(values=[5, 3, 8, 1])
    for step in bubble_sort(state.values):
        state.apply(step)
    state.values          # [1, 3, 5, 8]

What lives here:
  • values           – working copy of the collection (mutated by swap / overwrite)
  • graph / start    – the graph being traversed (never mutated)
  • per-element flags: highlighted, sorted, found index, search bounds,
                       visited order, current node, active edges
  • distances        – tentative / final distance per node (Dijkstra)
  • narration        – explanation of the last applied step
  • result           – terminal summary ("Found at index 3", "Not Found", …)
  • counters         – running tally of comparisons, swaps, probes, …

Thread safety:
  The playback thread is the only writer, but Flask request threads read
  while it writes.  apply() and snapshot() share one lock so a reader
  always sees a step applied completely or not at all.
"""

import threading
from typing import Any, Dict, List, Optional, Sequence

from algoviz.algorithms.step import Step, StepKind
from algoviz.graph import Graph

INF = float("inf")

COUNTER_FOR_KIND = {
    StepKind.COMPARE:      "comparisons",
    StepKind.SWAP:         "swaps",
    StepKind.OVERWRITE:    "writes",
    StepKind.PROBE:        "probes",
    StepKind.JUMP:         "probes",
    StepKind.VISIT:        "visits",
    StepKind.EXPLORE_EDGE: "edges_explored",
    StepKind.RELAX:        "relaxations",
    StepKind.SKIP:         "stale_entries",
}


def _empty_counters() -> Dict[str, int]:
    return {name: 0 for name in sorted(set(COUNTER_FOR_KIND.values()))}


class PlaybackState:
    """
    Attributes:
        values        : Working copy of the collection.
        graph         : Graph being traversed, or None.
        start_node    : Traversal start, or None.
        step_index    : Index of the last applied step (-1 before the first).
        last_kind     : StepKind value of the last applied step.
        highlighted   : Indices currently compared / probed / written.
        sorted_indices: Indices holding their final sorted value.
        found_index   : Index reported by a found step.
        low, high     : Current search bounds.
        visited       : Node ids in visiting order.
        current_node  : Node being expanded.
        active_edges  : Edge ids explored so far.
        distances     : {node_id: distance}
        narration     : Explanation of the last step.
        result        : Terminal summary, empty until a final step.
        finished      : True once a final step was applied.
        counters      : {"comparisons": n, "swaps": n, …}
    """

    def __init__(
        self,
        values: Optional[Sequence[int]] = None,
        graph: Optional[Graph] = None,
        start_node: Optional[str] = None,
    ):
        self._lock = threading.RLock()
        self.load(values=values, graph=graph, start_node=start_node)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(
        self,
        values: Optional[Sequence[int]] = None,
        graph: Optional[Graph] = None,
        start_node: Optional[str] = None,
    ) -> None:
        """Replace the data model wholesale and clear every flag."""
        with self._lock:
            self.values:     List[int]       = list(values or [])
            self.graph:      Optional[Graph] = graph
            self.start_node: Optional[str]   = start_node
            self.clear_flags()

    def clear_flags(self) -> None:
        """Back to the un-played look; the data model is kept."""
        with self._lock:
            self.step_index:     int               = -1
            self.last_kind:      Optional[str]     = None
            self.highlighted:    List[int]         = []
            self.sorted_indices: set               = set()
            self.found_index:    Optional[int]     = None
            self.low:            Optional[int]     = None
            self.high:           Optional[int]     = None
            self.visited:        List[str]         = []
            self.current_node:   Optional[str]     = None
            self.active_edges:   List[str]         = []
            self.distances:      Dict[str, float]  = {}
            self.narration:      str               = ""
            self.result:         str               = ""
            self.finished:       bool              = False
            self.counters:       Dict[str, int]    = _empty_counters()

    # ------------------------------------------------------------------
    # Apply
    # ------------------------------------------------------------------
    def apply(self, step: Step) -> None:
        with self._lock:
            handler = _HANDLERS.get(step.kind)
            if handler is not None:
                handler(self, step)

            counter = COUNTER_FOR_KIND.get(step.kind)
            if counter:
                self.counters[counter] += 1

            self.step_index = step.step_number
            self.last_kind = step.kind.value
            if step.explanation:
                self.narration = step.explanation
            if step.is_final:
                self.finished = True
                self.current_node = None
                if not self.result:
                    self.result = step.explanation

    def apply_all(self, steps) -> None:
        for step in steps:
            self.apply(step)

    # -- sorting --
    def _on_compare(self, step: Step) -> None:
        self.highlighted = list(step.indices)

    def _on_swap(self, step: Step) -> None:
        i, j = step.indices
        self.values[i], self.values[j] = self.values[j], self.values[i]
        self.highlighted = [i, j]

    def _on_overwrite(self, step: Step) -> None:
        self.values[step.index] = step.value
        self.highlighted = [step.index]

    def _on_mark_sorted(self, step: Step) -> None:
        self.sorted_indices.update(step.indices)
        self.highlighted = []

    # -- searching --
    def _on_probe(self, step: Step) -> None:
        self.highlighted = [step.index]
        self.low, self.high = step.low, step.high

    def _on_found(self, step: Step) -> None:
        self.found_index = step.index
        self.highlighted = [step.index]
        self.result = f"Found at index {step.index}"

    def _on_not_found(self, step: Step) -> None:
        self.highlighted = []
        self.result = "Not Found"

    # -- graph --
    def _on_start(self, step: Step) -> None:
        self.start_node = step.node
        self.distances = dict(step.data.get("distances", {}))

    def _on_visit(self, step: Step) -> None:
        self.current_node = step.node
        if step.node not in self.visited:
            self.visited.append(step.node)
        if step.value is not None:
            self.distances[step.node] = step.value

    def _on_explore_edge(self, step: Step) -> None:
        if step.edge not in self.active_edges:
            self.active_edges.append(step.edge)

    def _on_relax(self, step: Step) -> None:
        self.distances[step.node] = step.value

    # -- terminal --
    def _on_done(self, step: Step) -> None:
        self.highlighted = []
        if self.graph is None:
            self.sorted_indices = set(range(len(self.values)))
        if "distances" in step.data:
            self.distances = dict(step.data["distances"])

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        """JSON-safe copy of everything the UI needs (∞ becomes None)."""
        with self._lock:
            return {
                "values":         list(self.values),
                "start_node":     self.start_node,
                "step_index":     self.step_index,
                "last_kind":      self.last_kind,
                "highlighted":    list(self.highlighted),
                "sorted_indices": sorted(self.sorted_indices),
                "found_index":    self.found_index,
                "low":            self.low,
                "high":           self.high,
                "visited":        list(self.visited),
                "current_node":   self.current_node,
                "active_edges":   list(self.active_edges),
                "distances":      {n: (None if d == INF else d) for n, d in self.distances.items()},
                "narration":      self.narration,
                "result":         self.result,
                "finished":       self.finished,
                "counters":       dict(self.counters),
            }

    def __repr__(self) -> str:
        return f"PlaybackState(step={self.step_index}, finished={self.finished}, result={self.result!r})"


_HANDLERS = {
    StepKind.COMPARE:      PlaybackState._on_compare,
    StepKind.SWAP:         PlaybackState._on_swap,
    StepKind.OVERWRITE:    PlaybackState._on_overwrite,
    StepKind.MARK_SORTED:  PlaybackState._on_mark_sorted,
    StepKind.PROBE:        PlaybackState._on_probe,
    StepKind.JUMP:         PlaybackState._on_probe,
    StepKind.FOUND:        PlaybackState._on_found,
    StepKind.NOT_FOUND:    PlaybackState._on_not_found,
    StepKind.START:        PlaybackState._on_start,
    StepKind.VISIT:        PlaybackState._on_visit,
    StepKind.EXPLORE_EDGE: PlaybackState._on_explore_edge,
    StepKind.RELAX:        PlaybackState._on_relax,
    StepKind.DONE:         PlaybackState._on_done,
}
