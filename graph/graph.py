"""
graph.py — Graph Container
===========================
Single source of truth for the graph.  The editing surface mutates it;
traversals only ever read a snapshot of it.

Responsibilities:
  1. CRUD on nodes & edges                  (add / delete / move / get)
  2. Edge-creation policy                   (self-loops, duplicates)
  3. Adjacency derivation                   (build_adjacency)
  4. Snapshot / dict round-trip             (to_dict / from_dict / snapshot)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
    Insertion order is preserved, so the canvas draws in creation order.
  - No adjacency is cached.  The view is rebuilt on demand, which keeps
    it a pure function of the current node / edge sets.
  - Rejected mutations return None instead of raising.  The UI is
    expected to grey out invalid affordances.
"""

import logging
import random
from typing import Dict, List, Optional

from graph.node import Node
from graph.edge import Edge, EdgeKind
from graph.adjacency import AdjacencyView, build_adjacency

logger = logging.getLogger(__name__)


class Graph:
    """
    Attributes:
        nodes : {node_id: Node}
        edges : {edge_id: Edge}
    """

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.edges: Dict[str, Edge] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(
        self,
        label: Optional[str] = None,
        x: Optional[float] = None,
        y: Optional[float] = None,
        node_id: Optional[str] = None,
    ) -> Node:
        """Create + add a node.  Unplaced nodes land somewhere in the top-left area."""
        if x is None:
            x = 100 + random.random() * 200
        if y is None:
            y = 100 + random.random() * 200
        node = Node(x=x, y=y, label=label or f"Node {len(self.nodes) + 1}", node_id=node_id)
        self.nodes[node.id] = node
        logger.debug("Added node %s (%s)", node.id, node.label)
        return node

    def delete_node(self, node_id: str) -> None:
        if node_id not in self.nodes:
            return
        # remove every edge touching this node
        for eid in [eid for eid, e in self.edges.items() if e.touches(node_id)]:
            self.delete_edge(eid)
        del self.nodes[node_id]
        logger.debug("Deleted node %s", node_id)

    def move_node(self, node_id: str, x: float, y: float) -> Optional[Node]:
        node = self.nodes.get(node_id)
        if node is not None:
            node.move_to(x, y)
        return node

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(
        self,
        source: str,
        target: str,
        kind: EdgeKind = EdgeKind.DIRECTED,
        weight: Optional[float] = None,
        edge_id: Optional[str] = None,
    ) -> Optional[Edge]:
        """
        Returns the new Edge, or None when the request is rejected:
          • either endpoint unknown
          • source == target
          • an edge already runs source→target (any kind), or an
            undirected edge already runs target→source

        A directed edge and an undirected edge between the same pair only
        collide when the undirected one repeats the ordered pair.
        """
        if source not in self.nodes or target not in self.nodes:
            logger.debug("Rejected edge %s → %s: unknown endpoint", source, target)
            return None
        if source == target:
            logger.debug("Rejected self-loop on %s", source)
            return None
        if any(e.duplicates(source, target) for e in self.edges.values()):
            logger.debug("Rejected duplicate edge %s → %s", source, target)
            return None

        edge = Edge(source=source, target=target, kind=kind, weight=weight, edge_id=edge_id)
        self.edges[edge.id] = edge
        logger.debug("Added edge %r", edge)
        return edge

    def delete_edge(self, edge_id: str) -> None:
        if self.edges.pop(edge_id, None) is not None:
            logger.debug("Deleted edge %s", edge_id)

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    # ==================================================================
    # ADJACENCY
    # ==================================================================
    def build_adjacency(self) -> AdjacencyView:
        return build_adjacency(self.nodes.values(), self.edges.values())

    # ==================================================================
    # SERIALISATION / SNAPSHOT
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
            node = Node.from_dict(nd)
            g.nodes[node.id] = node
        for ed in data.get("edges", []):
            edge = Edge.from_dict(ed)
            g.edges[edge.id] = edge
        return g

    def snapshot(self) -> "Graph":
        """Deep, disposable copy.  Mutating it never touches this graph."""
        return Graph.from_dict(self.to_dict())

    @classmethod
    def sample(cls) -> "Graph":
        """The starter graph shown when the editor first opens."""
        g = cls()
        g.add_node("Node 1", x=400, y=100, node_id="1")
        g.add_node("Node 2", x=300, y=300, node_id="2")
        g.add_node("Node 3", x=500, y=300, node_id="3")
        g.add_edge("1", "2", EdgeKind.DIRECTED, edge_id="e1-2")
        g.add_edge("1", "3", EdgeKind.UNDIRECTED, edge_id="e1-3")
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

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
