"""
node.py — Graph Node
====================
A user-placed vertex.  Identity (id) is fixed at creation; label and
position belong to the editing surface.

Design decisions:
  - Position is plain canvas pixels.  Nothing in the traversal or
    playback layers ever writes x / y.
  - No algorithm state lives on the node.  "Visited" is a playback
    concern and is tracked by id in the PlaybackEngine.
"""

from typing import Optional
import uuid


class Node:
    """
    Attributes:
        id     : Unique identifier (short uuid string by default, or caller-supplied).
        label  : Human-readable name shown on the canvas.
        x, y   : Canvas coordinates in pixels.
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        node_id: Optional[str] = None,
    ):
        self.id: str    = node_id or str(uuid.uuid4())[:8]
        self.label: str = label or self.id
        self.x: float   = float(x)
        self.y: float   = float(y)

    def move_to(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    # ------------------------------------------------------------------
    # Serialisation  (snapshots handed to the sandbox / JSON API)
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
        return cls(x=data.get("x", 0.0), y=data.get("y", 0.0), label=data.get("label"), node_id=data["id"])

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
