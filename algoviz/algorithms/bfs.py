"""
bfs.py — Breadth-First Traversal
=================================
Generator-based BFS over the whole component of the start node.
Yields a Step at every meaningful event:
  1. Start            →  START
  2. Dequeue a node   →  VISIT (it is now CURRENT)
  3. Discover a new neighbour → EXPLORE_EDGE, neighbour enqueued
  4. Queue empty      →  DONE with the visited count

Neighbours are explored in edge-insertion order.  A node is marked as
discovered when it is ENQUEUED, so it enters the queue exactly once.
"""

from collections import deque
from typing import Generator, List

from algoviz.graph import Graph
from algoviz.algorithms.step import Step, StepBuilder


def bfs(graph: Graph, start: str) -> Generator[Step, None, None]:
    """
    Yields Step events for a breadth-first traversal from `start`.

    Args:
        graph : The graph to traverse.
        start : Starting node id.
    """
    if not graph.has_node(start):
        raise ValueError(f"Unknown start node: {start}")

    sb = StepBuilder()
    queue = deque([start])
    discovered = {start}
    order: List[str] = []

    yield sb.start(start, f"Starting BFS from node {start}")

    while queue:
        node = queue.popleft()
        order.append(node)
        yield sb.visit(node)

        for nbr, edge in graph.neighbours(node):
            if nbr in discovered:
                continue
            discovered.add(nbr)
            queue.append(nbr)
            yield sb.explore_edge(node, nbr, edge.id, edge.weight)

    yield sb.done(
        f"BFS traversal complete! Visited {len(order)} nodes.",
        visited=order,
    )
