"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algoviz.algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, family, fn, …),
        …
    }

Each family has its own generator signature:
    sorting   : fn(values)
    searching : fn(values, target)
    graph     : fn(graph, start)

Adding a new algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from algoviz.graph import Graph
from algoviz.algorithms.sorting   import bubble_sort, selection_sort, insertion_sort, merge_sort
from algoviz.algorithms.searching import (
    linear_search,
    binary_search,
    jump_search,
    exponential_search,
    interpolation_search,
    fibonacci_search,
)
from algoviz.algorithms.bfs      import bfs
from algoviz.algorithms.dfs      import dfs
from algoviz.algorithms.dijkstra import dijkstra
from algoviz.algorithms.step     import Step, StepBuilder, StepKind

SORTING   = "sorting"
SEARCHING = "searching"
GRAPH     = "graph"
FAMILIES  = (SORTING, SEARCHING, GRAPH)


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                  # registry key, e.g. "bubble"
    label:            str                  # human label, e.g. "Bubble Sort"
    family:           str                  # SORTING / SEARCHING / GRAPH
    fn:               Callable             # the generator function
    description:      str = ""             # one-liner for the info panel
    complexity_time:  str = ""             # e.g. "O(n²)"
    complexity_space: str = ""             # e.g. "O(1)"
    default_delay_ms: int = 500            # pause between steps during playback
    needs_sorted:     bool = False         # searching: input must be ascending

    def steps(
        self,
        values: Optional[Sequence[int]] = None,
        target: Optional[int] = None,
        graph: Optional[Graph] = None,
        start: Optional[str] = None,
    ) -> Iterator[Step]:
        """
        Build a fresh step producer from whichever inputs this family takes.
        Raises ValueError when a required input is missing.
        """
        if self.family == SORTING:
            return self.fn(list(values or []))
        if self.family == SEARCHING:
            if target is None:
                raise ValueError(f"{self.label} needs a target value")
            return self.fn(list(values or []), target)
        if graph is None or start is None:
            raise ValueError(f"{self.label} needs a graph and a start node")
        if not graph.has_node(start):
            raise ValueError(f"Unknown start node: {start}")
        return self.fn(graph, start)


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # -- sorting --
    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", family=SORTING, fn=bubble_sort,
        complexity_time="O(n²)", complexity_space="O(1)", default_delay_ms=200,
        description="Repeatedly swaps adjacent out-of-order pairs; the largest value bubbles to the end each pass.",
    ),
    "selection": AlgoInfo(
        key="selection", label="Selection Sort", family=SORTING, fn=selection_sort,
        complexity_time="O(n²)", complexity_space="O(1)", default_delay_ms=200,
        description="Selects the minimum of the unsorted part and swaps it to the front.",
    ),
    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", family=SORTING, fn=insertion_sort,
        complexity_time="O(n²)", complexity_space="O(1)", default_delay_ms=200,
        description="Grows a sorted prefix by shifting larger values right and inserting each key.",
    ),
    "merge": AlgoInfo(
        key="merge", label="Merge Sort", family=SORTING, fn=merge_sort,
        complexity_time="O(n log n)", complexity_space="O(n)", default_delay_ms=200,
        description="Recursively sorts both halves, then merges them in order.",
    ),

    # -- searching --
    "linear": AlgoInfo(
        key="linear", label="Linear Search", family=SEARCHING, fn=linear_search,
        complexity_time="O(n)", complexity_space="O(1)", default_delay_ms=300,
        description="Checks every element from left to right.",
    ),
    "binary": AlgoInfo(
        key="binary", label="Binary Search", family=SEARCHING, fn=binary_search,
        complexity_time="O(log n)", complexity_space="O(1)", default_delay_ms=500, needs_sorted=True,
        description="Halves the search range around the middle element each step.",
    ),
    "jump": AlgoInfo(
        key="jump", label="Jump Search", family=SEARCHING, fn=jump_search,
        complexity_time="O(√n)", complexity_space="O(1)", default_delay_ms=500, needs_sorted=True,
        description="Jumps ahead √n elements at a time, then scans the block that may hold the target.",
    ),
    "exponential": AlgoInfo(
        key="exponential", label="Exponential Search", family=SEARCHING, fn=exponential_search,
        complexity_time="O(log n)", complexity_space="O(1)", default_delay_ms=500, needs_sorted=True,
        description="Doubles a bound until it passes the target, then binary-searches the last range.",
    ),
    "interpolation": AlgoInfo(
        key="interpolation", label="Interpolation Search", family=SEARCHING, fn=interpolation_search,
        complexity_time="O(log log n) avg", complexity_space="O(1)", default_delay_ms=500, needs_sorted=True,
        description="Estimates the target's position from its value relative to the range ends.",
    ),
    "fibonacci": AlgoInfo(
        key="fibonacci", label="Fibonacci Search", family=SEARCHING, fn=fibonacci_search,
        complexity_time="O(log n)", complexity_space="O(1)", default_delay_ms=500, needs_sorted=True,
        description="Splits the range at Fibonacci offsets instead of the midpoint.",
    ),

    # -- graph --
    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", family=GRAPH, fn=bfs,
        complexity_time="O(V + E)", complexity_space="O(V)", default_delay_ms=800,
        description=(
            "Breadth-First Search traverses the graph level by level, visiting all neighbors of a node "
            "before moving to the next level. It finds the shortest path in terms of the number of edges."
        ),
    ),
    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", family=GRAPH, fn=dfs,
        complexity_time="O(V + E)", complexity_space="O(V)", default_delay_ms=800,
        description=(
            "Depth-First Search explores as far as possible along each branch before backtracking. "
            "It's useful for traversing all nodes and finding paths."
        ),
    ),
    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", family=GRAPH, fn=dijkstra,
        complexity_time="O((V + E) log V)", complexity_space="O(V)", default_delay_ms=800,
        description=(
            "Dijkstra's Algorithm finds the shortest path between nodes in a graph with non-negative edge "
            "weights by maintaining a priority queue of nodes sorted by their distance from the start node."
        ),
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def require_algorithm(key: str, family: Optional[str] = None) -> AlgoInfo:
    """Like get_algorithm, but raises ValueError for an unknown key or wrong family."""
    info = REGISTRY.get(key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {key}")
    if family is not None and info.family != family:
        raise ValueError(f"{info.label} is not a {family} algorithm")
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family == family]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "SORTING",
    "SEARCHING",
    "GRAPH",
    "FAMILIES",
    "Step",
    "StepBuilder",
    "StepKind",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "algorithms_by_family",
]
