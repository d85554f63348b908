"""Tests for BFS / DFS visit sequences and the algorithm registry."""

import pytest

from graph import EdgeKind, Graph
from algorithms import REGISTRY, VisitEvent, VisitKind, get_algorithm, list_algorithms, traverse


def _node_ids(events):
    return [e.target for e in events if e.is_node]


@pytest.fixture()
def diamond():
    """A→B, A→C, B→D, C→D, plus D→A (back edge) and isolated E."""
    g = Graph()
    for nid in "ABCDE":
        g.add_node(nid, node_id=nid)
    g.add_edge("A", "B", edge_id="eAB")
    g.add_edge("A", "C", edge_id="eAC")
    g.add_edge("B", "D", edge_id="eBD")
    g.add_edge("C", "D", edge_id="eCD")
    g.add_edge("D", "A", edge_id="eDA")
    return g


def _check_discovery_edges(graph, events):
    """Every node after the first is preceded by the edge that discovered it."""
    seen = set()
    for i, event in enumerate(events):
        if not event.is_node:
            continue
        assert event.target not in seen
        if i > 0:
            prev = events[i - 1]
            assert prev.is_edge
            edge = graph.get_edge(prev.target)
            assert event.target in (edge.target, edge.source)
            assert edge.source in seen or edge.target in seen
        seen.add(event.target)


class TestBFS:
    def test_abc_scenario(self, abc_graph):
        events = traverse("bfs", abc_graph.build_adjacency(), "A")
        assert events == (
            VisitEvent.node("A"),
            VisitEvent.edge("eAB"),
            VisitEvent.node("B"),
            VisitEvent.edge("eAC"),
            VisitEvent.node("C"),
        )

    def test_level_order(self, diamond):
        events = traverse("bfs", diamond.build_adjacency(), "A")
        assert _node_ids(events) == ["A", "B", "C", "D"]

    def test_back_edges_never_emitted(self, diamond):
        events = traverse("bfs", diamond.build_adjacency(), "A")
        edge_ids = [e.target for e in events if e.is_edge]
        assert edge_ids == ["eAB", "eAC", "eBD"]

    def test_discovery_edge_precedes_node(self, diamond):
        _check_discovery_edges(diamond, traverse("bfs", diamond.build_adjacency(), "A"))

    def test_unreachable_nodes_absent(self, diamond):
        assert "E" not in _node_ids(traverse("bfs", diamond.build_adjacency(), "A"))

    def test_isolated_start_yields_single_event(self, diamond):
        assert traverse("bfs", diamond.build_adjacency(), "E") == (VisitEvent.node("E"),)

    def test_absent_start_yields_nothing(self, diamond):
        assert traverse("bfs", diamond.build_adjacency(), "Z") == ()
        assert traverse("bfs", diamond.build_adjacency(), "") == ()

    def test_undirected_edges_walk_both_ways(self):
        g = Graph()
        for nid in "ABC":
            g.add_node(nid, node_id=nid)
        g.add_edge("B", "A", EdgeKind.UNDIRECTED, edge_id="e1")
        g.add_edge("C", "B", EdgeKind.UNDIRECTED, edge_id="e2")
        assert _node_ids(traverse("bfs", g.build_adjacency(), "A")) == ["A", "B", "C"]


class TestDFS:
    def test_pre_order(self, diamond):
        events = traverse("dfs", diamond.build_adjacency(), "A")
        assert events == (
            VisitEvent.node("A"),
            VisitEvent.edge("eAB"),
            VisitEvent.node("B"),
            VisitEvent.edge("eBD"),
            VisitEvent.node("D"),
            VisitEvent.edge("eAC"),
            VisitEvent.node("C"),
        )

    def test_discovery_edge_precedes_node(self, diamond):
        _check_discovery_edges(diamond, traverse("dfs", diamond.build_adjacency(), "A"))

    def test_same_reachable_set_as_bfs(self, diamond):
        adj = diamond.build_adjacency()
        for start in "ABCDE":
            assert sorted(_node_ids(traverse("dfs", adj, start))) == sorted(_node_ids(traverse("bfs", adj, start)))

    def test_deep_chain_does_not_recurse(self):
        g = Graph()
        n = 1500
        for i in range(n):
            g.add_node(str(i), node_id=f"n{i:05d}")
        for i in range(n - 1):
            g.add_edge(f"n{i:05d}", f"n{i + 1:05d}", edge_id=f"e{i}")
        events = traverse("dfs", g.build_adjacency(), "n00000")
        assert len(_node_ids(events)) == n

    def test_isolated_and_absent_start(self, diamond):
        adj = diamond.build_adjacency()
        assert traverse("dfs", adj, "E") == (VisitEvent.node("E"),)
        assert traverse("dfs", adj, "Z") == ()


class TestDeterminismAndRegistry:
    @pytest.mark.parametrize("key", ["bfs", "dfs"])
    def test_repeat_runs_identical(self, diamond, key):
        first = traverse(key, diamond.build_adjacency(), "A")
        second = traverse(key, diamond.build_adjacency(), "A")
        assert first == second

    def test_delete_node_then_bfs(self):
        g = Graph()
        for nid in "ABC":
            g.add_node(nid, node_id=nid)
        g.add_edge("A", "B", edge_id="eAB")
        g.add_edge("B", "C", edge_id="eBC")
        g.delete_node("B")
        assert traverse("bfs", g.build_adjacency(), "A") == (VisitEvent.node("A"),)

    def test_unknown_key_raises(self, abc_graph):
        with pytest.raises(ValueError):
            traverse("dijkstra", abc_graph.build_adjacency(), "A")

    def test_registry_contents(self):
        assert list(REGISTRY) == ["bfs", "dfs"]
        assert [a.key for a in list_algorithms()] == ["bfs", "dfs"]
        assert get_algorithm("custom") is None
        assert get_algorithm("bfs").pseudocode

    def test_event_to_dict(self):
        assert VisitEvent.edge("e1").to_dict() == {"target": "e1", "kind": "edge"}
        assert VisitEvent("x", "weird").to_dict() == {"target": "x", "kind": "weird"}
        assert VisitEvent(frozenset([1]), ["k"]).to_dict() == {"target": "frozenset({1})", "kind": "['k']"}
        assert VisitEvent(3, "node").to_dict() == {"target": 3, "kind": "node"}
        assert VisitEvent("A", "node").is_node
        assert VisitEvent.node("A").kind is VisitKind.NODE
