"""
graph/
-----
Graph data layer.  Public API:

    from algoviz.graph import Graph, Node, Edge
"""

from algoviz.graph.node  import Node
from algoviz.graph.edge  import Edge
from algoviz.graph.graph import Graph

__all__ = [
    "Node",
    "Edge",
    "Graph",
]
