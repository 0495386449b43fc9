"""
graph.py — Graph Container & Generator
=======================================
Single source of truth for the graph.  Traversal generators and the
renderer both talk to this object.

Responsibilities:
  1. Building nodes & edges                 (add / create / get)
  2. Adjacency queries                      (neighbours, edge lookup)
  3. Circular layout + random generation    (letter ids, skip-ring links)
  4. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
  - A separate adjacency dict `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally.  Every edge is entered on BOTH endpoints,
    in creation order, so neighbour iteration follows edge-insertion order.
  - Parallel edges are allowed (small graphs can produce A–C twice via the
    "+2" link); traversals simply see the neighbour twice.
"""

import math
import random
import string
from typing import Dict, List, Tuple, Optional

from algoviz.graph.node import Node
from algoviz.graph.edge import Edge


class Graph:
    """
    Attributes:
        nodes : {node_id: Node}
        edges : {edge_id: Edge}
        _adj  : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.edges: Dict[str, Edge] = {}
        self._adj:  Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, node_id: str, x: float = 0.0, y: float = 0.0) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id=node_id, x=x, y=y))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        if edge.source not in self.nodes or edge.target not in self.nodes:
            raise ValueError(f"Edge {edge.id} references an unknown node")
        self.edges[edge.id] = edge
        self._adj[edge.source].append((edge.target, edge.id))
        if edge.target != edge.source:
            self._adj[edge.target].append((edge.source, edge.id))
        return edge

    def create_edge(self, source: str, target: str, weight: float = 1, edge_id: Optional[str] = None) -> Edge:
        return self.add_edge(Edge(edge_id or f"e{len(self.edges)}", source, target, weight))

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] in edge-insertion order."""
        return [(nbr, self.edges[eid]) for nbr, eid in self._adj.get(node_id, [])]

    def reachable_from(self, start: str) -> List[str]:
        """Node ids reachable from `start` (including itself), unordered traversal."""
        if start not in self.nodes:
            return []
        seen = {start}
        todo = [start]
        while todo:
            node = todo.pop()
            for nbr, _ in self._adj[node]:
                if nbr not in seen:
                    seen.add(nbr)
                    todo.append(nbr)
        return [nid for nid in self.nodes if nid in seen]

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            g.add_edge(Edge.from_dict(ed))
        return g

    # ==================================================================
    # GENERATORS
    # ==================================================================
    @staticmethod
    def letter_ids(count: int) -> List[str]:
        """A, B, C, … — at most 26 nodes."""
        if not 0 <= count <= len(string.ascii_uppercase):
            raise ValueError(f"Cannot label {count} nodes with single letters")
        return list(string.ascii_uppercase[:count])

    @classmethod
    def circular_layout(
        cls,
        count: int,
        center: Tuple[float, float] = (300.0, 200.0),
        radius: float = 150.0,
    ) -> "Graph":
        """Edgeless graph with `count` lettered nodes evenly spaced on a circle."""
        g = cls()
        cx, cy = center
        for i, nid in enumerate(cls.letter_ids(count)):
            angle = 2 * math.pi * i / count
            g.create_node(nid, cx + radius * math.cos(angle), cy + radius * math.sin(angle))
        return g

    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 7,
        weight_range: Tuple[int, int] = (1, 9),
        extra_link_probability: float = 0.5,
        seed: Optional[int] = None,
        center: Tuple[float, float] = (300.0, 200.0),
        radius: float = 150.0,
    ) -> "Graph":
        """
        Skip-ring random graph.

        Node i links to its successor (i+1) % n and to (i+2) % n, and with
        `extra_link_probability` to one more random node other than i,
        i+1 and i+2.  The ring alone keeps the graph connected; the extra
        links make it irregular.
        """
        rng = random.Random(seed)
        g = cls.circular_layout(num_nodes, center=center, radius=radius)
        ids = g.node_ids()
        n = len(ids)

        def weight() -> int:
            return rng.randint(*weight_range)

        for i in range(n):
            g.create_edge(ids[i], ids[(i + 1) % n], weight=weight())
            g.create_edge(ids[i], ids[(i + 2) % n], weight=weight())
            if rng.random() < extra_link_probability:
                excluded = {i, (i + 1) % n, (i + 2) % n}
                candidates = [j for j in range(n) if j not in excluded]
                if candidates:
                    g.create_edge(ids[i], ids[rng.choice(candidates)], weight=weight())

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
