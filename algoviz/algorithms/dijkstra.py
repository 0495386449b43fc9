"""
dijkstra.py — Dijkstra's Shortest Distances
============================================
Generator-based single-source Dijkstra using a min-heap (heapq).

Yields a Step at:
  1. Initialise distances                    →  START (distance table in data)
  2. Pop an entry for a finalized node       →  SKIP (stale entry)
  3. Pop the minimum-distance live entry     →  VISIT (distance now FINAL)
  4. Every edge of the finalized node        →  EXPLORE_EDGE
  5. Shorter path found                      →  RELAX
  6. Heap empty                              →  DONE (final distance table)

The heap never removes outdated (distance, node) pairs when a node is
relaxed again.  Correctness comes from the `finalized` set: an entry for
an already finalized node is popped and skipped.

Correctness note: Dijkstra requires non-negative weights; generated
graphs only use weights 1–9.
"""

import heapq
from typing import Dict, Generator, List, Set, Tuple

from algoviz.graph import Graph
from algoviz.algorithms.step import Step, StepBuilder

INF = float("inf")


def dijkstra(graph: Graph, start: str) -> Generator[Step, None, None]:
    if not graph.has_node(start):
        raise ValueError(f"Unknown start node: {start}")

    sb = StepBuilder()
    dist: Dict[str, float] = {nid: INF for nid in graph.nodes}
    dist[start] = 0
    pq: List[Tuple[float, str]] = [(0, start)]      # min-heap: (distance, node_id)
    finalized: Set[str] = set()
    order: List[str] = []

    yield sb.start(start, f"Starting Dijkstra's algorithm from node {start}", distances=dict(dist))

    while pq:
        d, node = heapq.heappop(pq)

        if node in finalized:
            yield sb.skip(node, d, f"Entry ({node}, {d}) is stale: {node} is already finalized. Skip.")
            continue

        finalized.add(node)
        order.append(node)
        yield sb.visit(node, d)

        for nbr, edge in graph.neighbours(node):
            yield sb.explore_edge(node, nbr, edge.id, edge.weight)
            new_dist = d + edge.weight
            if new_dist < dist[nbr]:
                dist[nbr] = new_dist
                heapq.heappush(pq, (new_dist, nbr))
                yield sb.relax(nbr, node, new_dist)

    yield sb.done(
        f"Dijkstra's algorithm complete! Found shortest paths from {start} to all reachable nodes.",
        visited=order,
        distances=dict(dist),
    )
