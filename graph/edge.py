"""
edge.py — Graph Edge
====================
Connects two nodes.  Carries its own kind (directed / undirected) and an
optional weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - `weight` is None for unweighted edges.  No built-in traversal reads
    it; it is carried for the renderer and for custom algorithms.
  - `kind` is stored per-edge so a single Graph freely mixes directed
    and undirected edges.
"""

from enum import Enum
from typing import Optional
import uuid


class EdgeKind(str, Enum):
    DIRECTED   = "directed"     # source → target only
    UNDIRECTED = "undirected"   # traversable both ways


class Edge:
    """
    Attributes:
        id      : Unique identifier.
        source  : ID of the tail node.
        target  : ID of the head node.
        kind    : EdgeKind.
        weight  : Numeric cost, or None when unweighted.
    """

    __slots__ = ("id", "source", "target", "kind", "weight")

    def __init__(
        self,
        source: str,
        target: str,
        kind: EdgeKind = EdgeKind.DIRECTED,
        weight: Optional[float] = None,
        edge_id: Optional[str] = None,
    ):
        self.id:     str             = edge_id or "e" + str(uuid.uuid4())[:8]
        self.source: str             = source
        self.target: str             = target
        self.kind:   EdgeKind        = EdgeKind(kind)
        self.weight: Optional[float] = None if weight is None else float(weight)

    @property
    def directed(self) -> bool:
        return self.kind is EdgeKind.DIRECTED

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def duplicates(self, source: str, target: str) -> bool:
        """True if adding source→target would repeat this edge.

        Same ordered pair always collides; the reversed pair collides only
        with an undirected edge.
        """
        if self.source == source and self.target == target:
            return True
        return not self.directed and self.source == target and self.target == source

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "kind":   self.kind.value,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=data["source"],
            target=data["target"],
            kind=data.get("kind", EdgeKind.DIRECTED),
            weight=data.get("weight"),
            edge_id=data.get("id"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
