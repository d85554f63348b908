"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, EdgeKind
    from graph import Neighbor, AdjacencyView, build_adjacency
"""

from graph.node      import Node
from graph.edge      import Edge, EdgeKind
from graph.adjacency import Neighbor, AdjacencyView, build_adjacency
from graph.graph     import Graph

__all__ = [
    "Node",
    "Edge",      "EdgeKind",
    "Neighbor",  "AdjacencyView", "build_adjacency",
    "Graph",
]
