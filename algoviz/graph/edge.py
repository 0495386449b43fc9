"""
edge.py — Weighted Undirected Edge
==================================
Connects two nodes with an integer weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references, so
    edges stay serialisable and free of circular references.
  - Edges are traversed in both directions.  `source`/`target` only
    record the order in which the generator created them.
  - Ids are assigned by the owning Graph ("e0", "e1", …) so two runs on
    the same graph name the same edges.
"""


class Edge:
    """
    Attributes:
        id     : Identifier, unique within its graph.
        source : Node id the edge was created from.
        target : Node id the edge was created to.
        weight : Positive traversal cost.
    """

    __slots__ = ("id", "source", "target", "weight")

    def __init__(self, edge_id: str, source: str, target: str, weight: float = 1):
        self.id:     str   = edge_id
        self.source: str   = source
        self.target: str   = target
        self.weight: float = weight

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            edge_id=data["id"],
            source=data["source"],
            target=data["target"],
            weight=data.get("weight", 1),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.id}: {self.source} ↔ {self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
