"""
workspace.py — The editor's mutable store
==========================================
One Workspace holds everything a single editing session mutates: the
graph, the playback engine, and the current selection.  It is created
once and passed by reference to whoever needs it (the Flask app keeps
it in `app.extensions`); nothing reads ambient module state.

Graph edits go straight to `workspace.graph`; they never touch an
in-flight playback.  Runs go through `run()`, which is the only path
from a traversal to the playback engine.
"""

import logging
from typing import Callable, Optional

from graph import Edge, EdgeKind, Graph, Node
from algorithms import CUSTOM_KEY, get_algorithm
from sandbox import DEFAULT_STEP_BUDGET, DEFAULT_TIME_BUDGET
from engine.playback import PlaybackEngine, DEFAULT_INTERVAL
from engine.runner import RunResult, run_traversal

logger = logging.getLogger(__name__)


DEFAULT_CUSTOM_SOURCE = """\
# BFS written against the sandbox capabilities.
queue = [start_node_id]
seen = {start_node_id}
visit(start_node_id, "node")
while queue:
    current = queue.pop(0)
    for nbr in get_neighbors(current):
        if nbr.neighbor not in seen:
            seen.add(nbr.neighbor)
            visit(nbr.via_edge, "edge")
            visit(nbr.neighbor, "node")
            queue.append(nbr.neighbor)
log("visited %d nodes" % len(seen))
"""


class Workspace:
    """
    Attributes:
        graph          : The live Graph (single writer: the editing surface).
        playback       : PlaybackEngine the renderer reads from.
        start_node_id  : Selected start node, or None.
        algorithm      : "bfs", "dfs" or "custom".
        custom_source  : Body text for custom runs.
        last_result    : RunResult of the most recent run, if any.
    """

    def __init__(
        self,
        graph: Optional[Graph] = None,
        playback: Optional[PlaybackEngine] = None,
        max_steps: int = DEFAULT_STEP_BUDGET,
        max_seconds: float = DEFAULT_TIME_BUDGET,
        log_sink: Optional[Callable[[str], None]] = None,
    ):
        self.graph:         Graph                = graph if graph is not None else Graph()
        self.playback:      PlaybackEngine       = playback or PlaybackEngine(DEFAULT_INTERVAL)
        self.start_node_id: Optional[str]        = None
        self.algorithm:     str                  = "bfs"
        self.custom_source: str                  = DEFAULT_CUSTOM_SOURCE
        self.last_result:   Optional[RunResult]  = None

        self.max_steps   = max_steps
        self.max_seconds = max_seconds
        self.log_sink    = log_sink

    @classmethod
    def with_sample_graph(cls, **kwargs) -> "Workspace":
        ws = cls(graph=Graph.sample(), **kwargs)
        ws.start_node_id = "1"
        return ws

    # ------------------------------------------------------------------
    # Editing intents
    # ------------------------------------------------------------------
    def add_node(self, label: Optional[str] = None, x: Optional[float] = None, y: Optional[float] = None) -> Node:
        return self.graph.add_node(label, x, y)

    def delete_node(self, node_id: str) -> None:
        self.graph.delete_node(node_id)
        if self.start_node_id == node_id:
            self.start_node_id = None

    def move_node(self, node_id: str, x: float, y: float) -> Optional[Node]:
        return self.graph.move_node(node_id, x, y)

    def add_edge(
        self,
        source: str,
        target: str,
        kind: EdgeKind = EdgeKind.DIRECTED,
        weight: Optional[float] = None,
    ) -> Optional[Edge]:
        return self.graph.add_edge(source, target, kind, weight)

    def delete_edge(self, edge_id: str) -> None:
        self.graph.delete_edge(edge_id)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_start(self, node_id: Optional[str]) -> None:
        self.start_node_id = node_id or None

    def select_algorithm(self, key: str) -> bool:
        if key != CUSTOM_KEY and get_algorithm(key) is None:
            return False
        self.algorithm = key
        return True

    # ------------------------------------------------------------------
    # Run → playback
    # ------------------------------------------------------------------
    def run(
        self,
        algorithm: Optional[str] = None,
        start_node_id: Optional[str] = None,
        source: Optional[str] = None,
    ) -> RunResult:
        """
        Compute a sequence from the current selection (arguments override
        it) and start playback.  A failed or empty run leaves playback
        idle with nothing visited.
        """
        if algorithm is not None:
            self.algorithm = algorithm
        if start_node_id is not None:
            self.start_node_id = start_node_id or None
        if source is not None:
            self.custom_source = source

        result = run_traversal(
            self.graph,
            self.algorithm,
            self.start_node_id,
            source=self.custom_source,
            max_steps=self.max_steps,
            max_seconds=self.max_seconds,
            log_sink=self.log_sink,
        )
        self.last_result = result
        if result.ok:
            self.playback.start(result.events)
        else:
            self.playback.reset()
        return result

    def to_dict(self) -> dict:
        return {
            "graph":         self.graph.to_dict(),
            "start_node_id": self.start_node_id,
            "algorithm":     self.algorithm,
            "custom_source": self.custom_source,
            "playback":      self.playback.to_dict(),
            "last_result":   self.last_result.to_dict() if self.last_result else None,
        }
