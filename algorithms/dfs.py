"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack of neighbour iterators, so
deep graphs never hit the Python recursion limit.

Yields exactly what a recursive pre-order DFS would:
  1. Node event for the node being entered
  2. For each unvisited neighbour in adjacency order: Edge event, then
     descend (which yields the neighbour's Node event first)
"""

from typing import Iterator, List, Tuple

from graph import AdjacencyView, Neighbor
from algorithms.event import VisitEvent


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, node, visited):",               # 0
    "    visited.add(node);  visit(node)",          # 1
    "    for (nbr, edge) in adj(node):",            # 2
    "        if nbr not visited:",                   # 3
    "            visit(edge)",                       # 4
    "            DFS(graph, nbr, visited)",          # 5
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(adjacency: AdjacencyView, start: str) -> Iterator[VisitEvent]:
    """Pre-order depth-first exploration from `start`."""
    if not start or start not in adjacency:
        return

    visited = {start}
    yield VisitEvent.node(start)

    # each frame: (node, iterator over its remaining neighbours)
    stack: List[Tuple[str, Iterator[Neighbor]]] = [(start, iter(adjacency[start]))]
    while stack:
        _, remaining = stack[-1]
        for nbr, edge_id in remaining:
            if nbr not in visited:
                visited.add(nbr)
                yield VisitEvent.edge(edge_id)
                yield VisitEvent.node(nbr)
                stack.append((nbr, iter(adjacency[nbr])))
                break
        else:
            # neighbours exhausted → backtrack
            stack.pop()
