"""Shared test fixtures for the traversal visualizer."""

import pytest

from graph import EdgeKind, Graph
from engine import PlaybackEngine, Workspace
from main import create_app


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def abc_graph():
    """Nodes A, B, C with directed edges A→B (eAB) and A→C (eAC)."""
    g = Graph()
    for node_id in ("A", "B", "C"):
        g.add_node(node_id, x=0, y=0, node_id=node_id)
    g.add_edge("A", "B", EdgeKind.DIRECTED, edge_id="eAB")
    g.add_edge("A", "C", EdgeKind.DIRECTED, edge_id="eAC")
    return g


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def playback(clock):
    return PlaybackEngine(interval=0.5, clock=clock)


@pytest.fixture()
def workspace(abc_graph, playback):
    ws = Workspace(graph=abc_graph, playback=playback, max_steps=20_000, max_seconds=5.0)
    ws.select_start("A")
    return ws


@pytest.fixture()
def client(workspace):
    app = create_app({"TESTING": True}, workspace=workspace)
    return app.test_client()
