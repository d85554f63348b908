"""
event.py — Visit Events
========================
Every traversal source (BFS, DFS, a custom sandboxed algorithm) produces
an ordered, finite sequence of VisitEvents.  That sequence is the ONLY
thing the playback engine consumes.

    VisitEvent(target="A", kind=VisitKind.NODE)
    VisitEvent(target="e1", kind=VisitKind.EDGE)

Design decisions:
  - Frozen dataclass: once a run has produced its sequence nobody can
    edit it.
  - `kind` is typed as str.  Built-ins always use VisitKind; custom
    algorithms may emit anything and playback simply ignores kinds it
    does not know.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


_JSON_SCALARS = (str, int, float, bool, type(None))


def json_safe(value):
    """Scalars pass through; anything else a custom algorithm emitted becomes its repr."""
    return value if isinstance(value, _JSON_SCALARS) else repr(value)


class VisitKind(str, Enum):
    NODE = "node"
    EDGE = "edge"


@dataclass(frozen=True)
class VisitEvent:
    """
    Attributes:
        target : Node id or edge id that became visited.
        kind   : "node" or "edge" (VisitKind for built-ins).
    """

    target: str
    kind:   str = VisitKind.NODE

    @classmethod
    def node(cls, node_id: str) -> "VisitEvent":
        return cls(target=node_id, kind=VisitKind.NODE)

    @classmethod
    def edge(cls, edge_id: str) -> "VisitEvent":
        return cls(target=edge_id, kind=VisitKind.EDGE)

    @property
    def is_node(self) -> bool:
        return self.kind == VisitKind.NODE

    @property
    def is_edge(self) -> bool:
        return self.kind == VisitKind.EDGE

    def to_dict(self) -> dict:
        kind = self.kind.value if isinstance(self.kind, VisitKind) else json_safe(self.kind)
        return {"target": json_safe(self.target), "kind": kind}


VisitSequence = Tuple[VisitEvent, ...]
