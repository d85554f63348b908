"""
runner.py — Custom Algorithm Sandbox
=====================================
Runs a user-supplied traversal body against a disposable snapshot of the
graph and normalises the outcome into the same VisitEvent sequence the
built-ins produce.

Capability surface (passed as arguments, never ambient):
    nodes          : list of node dicts   {id, label, x, y}
    edges          : list of edge dicts   {id, source, target, kind, weight}
    start_node_id  : chosen start node id
    visit(id, kind="node")  : append one VisitEvent
    get_neighbors(id)       : [Neighbor(neighbor, via_edge), …] sorted by neighbour id
    log(message)            : forward to the diagnostics sink

All-or-nothing: only a clean run with at least one visit() hands events
back.  Every failure is reported through SandboxResult; nothing raises.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from graph import Graph
from algorithms.event import VisitEvent, VisitKind, VisitSequence
from sandbox.budget import BudgetExceeded, ExecutionBudget, DEFAULT_STEP_BUDGET, DEFAULT_TIME_BUDGET
from sandbox.policy import ENTRY_POINT, FILENAME, HEADER_LINES, compile_user_source, restricted_globals

logger = logging.getLogger(__name__)
user_logger = logging.getLogger("sandbox.user")


class SandboxStatus(str, Enum):
    OK              = "ok"
    NO_START_NODE   = "no_start_node"
    COMPILE_ERROR   = "compile_error"
    FAILED          = "failed"
    BUDGET_EXCEEDED = "budget_exceeded"
    EMPTY           = "empty"


@dataclass(frozen=True)
class SandboxResult:
    """
    Attributes:
        status  : SandboxStatus.
        events  : The run's VisitEvents.  Empty unless status is OK.
        message : User-facing description of the outcome.
        logs    : Messages the user code passed to log(), in order.
    """

    status:  SandboxStatus
    events:  VisitSequence   = ()
    message: str             = ""
    logs:    Tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.status is SandboxStatus.OK


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def run_custom_algorithm(
    graph: Graph,
    source: str,
    start_node_id: Optional[str],
    max_steps: int = DEFAULT_STEP_BUDGET,
    max_seconds: float = DEFAULT_TIME_BUDGET,
    log_sink: Optional[Callable[[str], None]] = None,
) -> SandboxResult:
    if not start_node_id:
        return SandboxResult(
            SandboxStatus.NO_START_NODE,
            message="Select a start node before running a custom algorithm.",
        )

    try:
        code = compile_user_source(source)
    except SyntaxError as exc:
        logger.warning("Custom algorithm rejected at compile time: %s", exc)
        return SandboxResult(
            SandboxStatus.COMPILE_ERROR,
            message=f"Custom algorithm could not be compiled: {_describe_syntax_error(exc)}",
        )

    snapshot  = graph.snapshot()
    adjacency = snapshot.build_adjacency()
    events: List[VisitEvent] = []
    logs:   List[str]        = []
    sink = log_sink or user_logger.info

    def visit(target, kind=VisitKind.NODE):
        events.append(VisitEvent(target=target, kind=kind))

    def get_neighbors(node_id):
        return list(adjacency.get(node_id, []))

    def log(message):
        text = str(message)
        logs.append(text)
        sink(text)

    namespace = restricted_globals()
    budget = ExecutionBudget(max_steps=max_steps, max_seconds=max_seconds)
    try:
        exec(code, namespace)
        with budget:
            namespace[ENTRY_POINT](
                [n.to_dict() for n in snapshot.nodes.values()],
                [e.to_dict() for e in snapshot.edges.values()],
                start_node_id,
                visit,
                get_neighbors,
                log,
            )
    except BudgetExceeded as exc:
        logger.warning("Custom algorithm stopped: %s", exc)
        return SandboxResult(
            SandboxStatus.BUDGET_EXCEEDED,
            message=f"Custom algorithm stopped: it {exc}.",
            logs=tuple(logs),
        )
    except Exception as exc:
        detail = _describe_runtime_error(exc)
        logger.warning("Custom algorithm failed: %s", detail)
        return SandboxResult(
            SandboxStatus.FAILED,
            message=f"Custom algorithm failed: {detail}",
            logs=tuple(logs),
        )

    # user code may have discarded the exception (e.g. return inside finally)
    if budget.exhausted:
        return SandboxResult(
            SandboxStatus.BUDGET_EXCEEDED,
            message=f"Custom algorithm stopped: it {budget.exhausted}.",
            logs=tuple(logs),
        )

    if not events:
        return SandboxResult(
            SandboxStatus.EMPTY,
            message="Custom algorithm ran but produced no traversal (visit() was never called).",
            logs=tuple(logs),
        )

    logger.info("Custom algorithm produced %d events in %d steps", len(events), budget.steps)
    return SandboxResult(
        SandboxStatus.OK,
        events=tuple(events),
        message=f"Custom algorithm produced {len(events)} visit events.",
        logs=tuple(logs),
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _describe_syntax_error(exc: SyntaxError) -> str:
    # RestrictedPython raises SyntaxError(errors) with a tuple of messages
    if exc.args and isinstance(exc.args[0], (tuple, list)):
        return "; ".join(str(e) for e in exc.args[0])
    if exc.lineno is not None and exc.filename == FILENAME:
        return f"line {exc.lineno - HEADER_LINES}: {exc.msg}"
    return str(exc)


def _describe_runtime_error(exc: Exception) -> str:
    """`TypeError: boom (line 3)` with the line counted in the user's source."""
    text = f"{type(exc).__name__}: {exc}"
    line = None
    tb = exc.__traceback__
    while tb is not None:
        if tb.tb_frame.f_code.co_filename == FILENAME:
            line = tb.tb_lineno - HEADER_LINES
        tb = tb.tb_next
    if line is not None:
        text += f" (line {line})"
    return text
