"""
runner.py — Run Coordinator
============================
Turns a user's selection (algorithm + start node, plus source text for
custom runs) into one RunResult with a single, uniform shape, whatever
produced the events.

Usage:
    result = run_traversal(graph, "bfs", start_node_id="A")
    if result.ok:
        playback.start(result.events)
    else:
        show(result.message)

Every run reads a snapshot of the graph, never the live store.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Tuple

from graph import Graph
from algorithms import CUSTOM_KEY, VisitSequence, get_algorithm, traverse
from sandbox import (
    DEFAULT_STEP_BUDGET,
    DEFAULT_TIME_BUDGET,
    SandboxStatus,
    run_custom_algorithm,
)

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    OK                = "ok"
    NO_START_NODE     = "no_start_node"
    UNKNOWN_ALGORITHM = "unknown_algorithm"
    COMPILE_ERROR     = "compile_error"
    FAILED            = "failed"
    BUDGET_EXCEEDED   = "budget_exceeded"
    EMPTY             = "empty"


# ---------------------------------------------------------------------------
# RunResult: what the controls panel renders
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RunResult:
    algorithm: str
    status:    RunStatus
    events:    VisitSequence   = ()
    message:   str             = ""
    logs:      Tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.OK

    @property
    def nodes_visited(self) -> int:
        return sum(1 for e in self.events if e.is_node)

    @property
    def edges_visited(self) -> int:
        return sum(1 for e in self.events if e.is_edge)

    def to_dict(self) -> dict:
        return {
            "algorithm":     self.algorithm,
            "status":        self.status.value,
            "ok":            self.ok,
            "message":       self.message,
            "logs":          list(self.logs),
            "total_events":  len(self.events),
            "nodes_visited": self.nodes_visited,
            "edges_visited": self.edges_visited,
            "events":        [e.to_dict() for e in self.events],
        }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def run_traversal(
    graph: Graph,
    algorithm: str,
    start_node_id: Optional[str],
    source: Optional[str] = None,
    max_steps: int = DEFAULT_STEP_BUDGET,
    max_seconds: float = DEFAULT_TIME_BUDGET,
    log_sink: Optional[Callable[[str], None]] = None,
) -> RunResult:
    if algorithm == CUSTOM_KEY:
        result = _run_custom(graph, start_node_id, source or "", max_steps, max_seconds, log_sink)
    else:
        result = _run_builtin(graph, algorithm, start_node_id)
    logger.info("Run %s from %s → %s (%d events)", algorithm, start_node_id, result.status.value, len(result.events))
    return result


def _run_builtin(graph: Graph, algorithm: str, start_node_id: Optional[str]) -> RunResult:
    info = get_algorithm(algorithm)
    if info is None:
        return RunResult(algorithm, RunStatus.UNKNOWN_ALGORITHM, message=f"Unknown algorithm: {algorithm}")
    if not start_node_id:
        return RunResult(algorithm, RunStatus.NO_START_NODE, message="Select a start node first.")

    events = traverse(algorithm, graph.snapshot().build_adjacency(), start_node_id)
    if not events:
        return RunResult(
            algorithm, RunStatus.EMPTY,
            message=f"Start node '{start_node_id}' is not in the graph; nothing to traverse.",
        )
    return RunResult(
        algorithm, RunStatus.OK, events=events,
        message=f"{info.label} visited {sum(1 for e in events if e.is_node)} node(s).",
    )


def _run_custom(
    graph: Graph,
    start_node_id: Optional[str],
    source: str,
    max_steps: int,
    max_seconds: float,
    log_sink: Optional[Callable[[str], None]],
) -> RunResult:
    outcome = run_custom_algorithm(
        graph, source, start_node_id,
        max_steps=max_steps, max_seconds=max_seconds, log_sink=log_sink,
    )
    return RunResult(
        CUSTOM_KEY,
        RunStatus(outcome.status.value),
        events=outcome.events if outcome.status is SandboxStatus.OK else (),
        message=outcome.message,
        logs=outcome.logs,
    )
