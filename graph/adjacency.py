"""
adjacency.py — Adjacency View
==============================
Derived neighbour lists.  Never stored on the Graph; every traversal run
builds a fresh view from the node / edge sets it was handed.

    view = build_adjacency(graph.nodes.values(), graph.edges.values())
    view["A"]  →  [Neighbor(neighbor="B", via_edge="e1"), …]

Ordering: each list is sorted by (neighbor id, edge id) so BFS / DFS /
custom algorithms see the same order on every run.
"""

import logging
from typing import Dict, Iterable, List, NamedTuple

from graph.node import Node
from graph.edge import Edge

logger = logging.getLogger(__name__)


class Neighbor(NamedTuple):
    neighbor: str     # node id reachable in one hop
    via_edge: str     # id of the edge that reaches it

    def to_dict(self) -> dict:
        return {"neighbor": self.neighbor, "via_edge": self.via_edge}


AdjacencyView = Dict[str, List[Neighbor]]


def build_adjacency(nodes: Iterable[Node], edges: Iterable[Edge]) -> AdjacencyView:
    """
    Directed edges record source → target only; undirected edges record
    both directions under the same edge id.  Edges pointing at unknown
    nodes are skipped.
    """
    adj: AdjacencyView = {node.id: [] for node in nodes}

    for edge in edges:
        if edge.source not in adj or edge.target not in adj:
            logger.debug("Skipping dangling edge %s (%s → %s)", edge.id, edge.source, edge.target)
            continue
        adj[edge.source].append(Neighbor(edge.target, edge.id))
        if not edge.directed:
            adj[edge.target].append(Neighbor(edge.source, edge.id))

    for neighbours in adj.values():
        neighbours.sort(key=lambda n: (n.neighbor, n.via_edge))
    return adj
