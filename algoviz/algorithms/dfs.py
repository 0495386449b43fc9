"""
dfs.py — Depth-First Traversal
===============================
Generator-based DFS that reproduces RECURSIVE visiting order with an
explicit stack (no Python recursion limit issues).

Each stack frame is (node, iterator over its neighbours).  Advancing the
top frame's iterator is exactly what the recursive version does when it
returns from a child and moves on to the next neighbour.

Yields:
  1. START
  2. VISIT on entering a node
  3. EXPLORE_EDGE before descending into an unvisited neighbour
  4. DONE with the visited count
"""

from typing import Generator, Iterator, List, Tuple

from algoviz.graph import Graph, Edge
from algoviz.algorithms.step import Step, StepBuilder


def dfs(graph: Graph, start: str) -> Generator[Step, None, None]:
    if not graph.has_node(start):
        raise ValueError(f"Unknown start node: {start}")

    sb = StepBuilder()
    visited = {start}
    order: List[str] = [start]

    yield sb.start(start, f"Starting DFS from node {start}")
    yield sb.visit(start)

    stack: List[Tuple[str, Iterator[Tuple[str, Edge]]]] = [(start, iter(graph.neighbours(start)))]
    while stack:
        node, pending = stack[-1]
        for nbr, edge in pending:
            if nbr in visited:
                continue
            yield sb.explore_edge(node, nbr, edge.id, edge.weight)
            visited.add(nbr)
            order.append(nbr)
            yield sb.visit(nbr)
            stack.append((nbr, iter(graph.neighbours(nbr))))
            break
        else:
            # every neighbour handled: backtrack
            stack.pop()

    yield sb.done(
        f"DFS traversal complete! Visited {len(order)} nodes.",
        visited=order,
    )
