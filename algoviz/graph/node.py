"""
node.py — Graph Node
====================
A lettered vertex with a canvas position.

Design decisions:
  - Identity is the letter id ("A", "B", …); the label defaults to it.
  - Nodes carry NO algorithm state.  Visited / current / distance flags
    live in PlaybackState so a graph can be replayed any number of times
    without a reset pass.
"""

from typing import Optional


class Node:
    """
    Attributes:
        id    : Unique identifier (a capital letter for generated graphs).
        label : Human-readable name shown on the canvas.
        x, y  : Canvas coordinates in pixels.
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        node_id: str,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
    ):
        self.id:    str   = node_id
        self.label: str   = label or node_id
        self.x:     float = x
        self.y:     float = y

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def distance_to(self, other: "Node") -> float:
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(node_id=data["id"], x=data["x"], y=data["y"], label=data.get("label"))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, pos=({self.x:.1f},{self.y:.1f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
