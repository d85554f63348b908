"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over an AdjacencyView.  Yields a VisitEvent at every
discovery:
  1. Seed        →  Node event for the start node
  2. Discovery   →  Edge event for the discovering edge, then Node event
                    for the newly reached neighbour

Edges that lead to an already-visited node are never emitted.

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the UI can show them.
"""

from typing import Iterator, List
from collections import deque

from graph import AdjacencyView
from algorithms.event import VisitEvent


# ---------------------------------------------------------------------------
# Pseudocode: each string is one displayed line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, start):",                      # 0
    "    queue ← [start]",                         # 1
    "    visited ← {start};  visit(start)",        # 2
    "    while queue is not empty:",                # 3
    "        node ← queue.dequeue()",              # 4
    "        for (nbr, edge) in adj(node):",       # 5
    "            if nbr not visited:",              # 6
    "                visited.add(nbr)",            # 7
    "                visit(edge);  visit(nbr)",    # 8
    "                queue.enqueue(nbr)",          # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(adjacency: AdjacencyView, start: str) -> Iterator[VisitEvent]:
    """
    Level-order exploration from `start`.  Same-level ties follow the
    adjacency order (sorted by neighbour id).

    Args:
        adjacency : Neighbour lists keyed by node id.
        start     : Starting node id.  Unknown / empty → nothing yielded.
    """
    if not start or start not in adjacency:
        return

    queue   = deque([start])
    visited = {start}
    yield VisitEvent.node(start)

    while queue:
        node = queue.popleft()
        for nbr, edge_id in adjacency[node]:
            if nbr in visited:
                continue
            visited.add(nbr)
            yield VisitEvent.edge(edge_id)
            yield VisitEvent.node(nbr)
            queue.append(nbr)
