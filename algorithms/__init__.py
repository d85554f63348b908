"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every built-in traversal the visualizer knows
about.

    from algorithms import REGISTRY, get_algorithm, traverse

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, pseudocode, …),
        "dfs": AlgoInfo(…),
    }

Custom (user-supplied) algorithms are not registry entries; they run
through the sandbox package and produce the same VisitEvent sequence.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional

from graph import AdjacencyView
from algorithms.event import VisitEvent, VisitKind, VisitSequence
from algorithms.bfs import bfs as _bfs, PSEUDOCODE as _bfs_pc
from algorithms.dfs import dfs as _dfs, PSEUDOCODE as _dfs_pc


CUSTOM_KEY = "custom"


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                                          # registry key, e.g. "bfs"
    label:            str                                          # human label
    fn:               Callable[[AdjacencyView, str], Iterator[VisitEvent]]
    pseudocode:       List[str]
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        tags=["traversal", "level-order"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer from the start node.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, pseudocode=_dfs_pc,
        tags=["traversal", "pre-order"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep along each branch before backtracking.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def traverse(key: str, adjacency: AdjacencyView, start: str) -> VisitSequence:
    """Run a built-in to completion and return its immutable event sequence."""
    info = get_algorithm(key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {key}")
    return tuple(info.fn(adjacency, start))


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "CUSTOM_KEY",
    "VisitEvent",
    "VisitKind",
    "VisitSequence",
    "get_algorithm",
    "list_algorithms",
    "traverse",
]
