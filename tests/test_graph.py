"""Tests for the graph model — node/edge CRUD, edge policy, adjacency."""

from graph import Edge, EdgeKind, Graph, Neighbor, Node, build_adjacency


class TestNodes:
    def test_add_node_defaults_label_from_count(self):
        g = Graph()
        first = g.add_node()
        second = g.add_node()
        assert first.label == "Node 1"
        assert second.label == "Node 2"
        assert first.id != second.id

    def test_add_node_random_placement_in_range(self):
        g = Graph()
        for _ in range(20):
            node = g.add_node()
            assert 100 <= node.x < 300
            assert 100 <= node.y < 300

    def test_add_node_explicit_position_and_id(self):
        g = Graph()
        node = g.add_node("Hub", x=12, y=34, node_id="hub")
        assert g.get_node("hub") is node
        assert (node.x, node.y) == (12.0, 34.0)

    def test_move_node(self):
        g = Graph()
        g.add_node("A", node_id="A")
        moved = g.move_node("A", 5, 6)
        assert (moved.x, moved.y) == (5.0, 6.0)

    def test_move_unknown_node_is_noop(self):
        assert Graph().move_node("ghost", 1, 2) is None

    def test_delete_node_cascades_edges(self):
        g = Graph()
        for nid in "ABC":
            g.add_node(nid, node_id=nid)
        g.add_edge("A", "B", edge_id="eAB")
        g.add_edge("B", "C", edge_id="eBC")
        g.add_edge("A", "C", edge_id="eAC")

        g.delete_node("B")

        assert "B" not in g
        assert set(g.edges) == {"eAC"}

    def test_delete_unknown_node_is_noop(self, abc_graph):
        abc_graph.delete_node("ghost")
        assert abc_graph.node_count() == 3
        assert abc_graph.edge_count() == 2


class TestEdgePolicy:
    def _pair(self):
        g = Graph()
        g.add_node("A", node_id="A")
        g.add_node("B", node_id="B")
        return g

    def test_self_loop_rejected(self):
        g = self._pair()
        assert g.add_edge("A", "A") is None
        assert g.edge_count() == 0

    def test_unknown_endpoint_rejected(self):
        g = self._pair()
        assert g.add_edge("A", "Z") is None

    def test_same_ordered_pair_rejected(self):
        g = self._pair()
        assert g.add_edge("A", "B") is not None
        assert g.add_edge("A", "B") is None
        assert g.add_edge("A", "B", EdgeKind.UNDIRECTED) is None

    def test_reverse_directed_allowed(self):
        g = self._pair()
        g.add_edge("A", "B")
        assert g.add_edge("B", "A") is not None
        assert g.edge_count() == 2

    def test_reverse_of_undirected_rejected(self):
        g = self._pair()
        g.add_edge("A", "B", EdgeKind.UNDIRECTED)
        assert g.add_edge("B", "A", EdgeKind.UNDIRECTED) is None
        assert g.add_edge("B", "A", EdgeKind.DIRECTED) is None

    def test_undirected_after_reverse_directed_allowed(self):
        g = self._pair()
        g.add_edge("A", "B", EdgeKind.DIRECTED)
        assert g.add_edge("B", "A", EdgeKind.UNDIRECTED) is not None

    def test_weight_coerced_to_float(self):
        g = self._pair()
        edge = g.add_edge("A", "B", weight="2.5")
        assert edge.weight == 2.5
        assert g.add_edge("B", "A").weight is None

    def test_delete_unknown_edge_is_noop(self, abc_graph):
        abc_graph.delete_edge("nope")
        assert abc_graph.edge_count() == 2


class TestAdjacency:
    def test_directed_records_one_direction(self, abc_graph):
        adj = abc_graph.build_adjacency()
        assert adj["A"] == [Neighbor("B", "eAB"), Neighbor("C", "eAC")]
        assert adj["B"] == []
        assert adj["C"] == []

    def test_undirected_records_both_directions(self):
        g = Graph()
        g.add_node("A", node_id="A")
        g.add_node("B", node_id="B")
        g.add_edge("A", "B", EdgeKind.UNDIRECTED, edge_id="e1")
        adj = g.build_adjacency()
        assert adj["A"] == [Neighbor("B", "e1")]
        assert adj["B"] == [Neighbor("A", "e1")]

    def test_sorted_by_neighbor_then_edge(self):
        g = Graph()
        for nid in ("A", "D", "B", "C"):
            g.add_node(nid, node_id=nid)
        g.add_edge("A", "D", edge_id="e1")
        g.add_edge("A", "C", edge_id="e2")
        g.add_edge("A", "B", edge_id="e3")
        g.add_edge("B", "A", edge_id="e0")
        adj = g.build_adjacency()
        assert [n.neighbor for n in adj["A"]] == ["B", "C", "D"]

    def test_dangling_edges_skipped(self):
        nodes = [Node(label="A", node_id="A")]
        edges = [Edge("A", "ghost", edge_id="e1")]
        assert build_adjacency(nodes, edges) == {"A": []}

    def test_every_edge_represented(self):
        g = Graph.sample()
        adj = g.build_adjacency()
        for edge in g.edges.values():
            assert Neighbor(edge.target, edge.id) in adj[edge.source]
            if not edge.directed:
                assert Neighbor(edge.source, edge.id) in adj[edge.target]

    def test_neighbor_to_dict(self):
        assert Neighbor("B", "e1").to_dict() == {"neighbor": "B", "via_edge": "e1"}


class TestSnapshot:
    def test_snapshot_is_independent(self, abc_graph):
        snap = abc_graph.snapshot()
        snap.delete_node("B")
        snap.move_node("A", 999, 999)
        assert "B" in abc_graph
        assert abc_graph.get_node("A").x == 0.0
        assert abc_graph.edge_count() == 2

    def test_round_trip_preserves_edges(self, abc_graph):
        abc_graph.add_edge("B", "C", EdgeKind.UNDIRECTED, weight=3, edge_id="eBC")
        copy = Graph.from_dict(abc_graph.to_dict())
        assert copy.to_dict() == abc_graph.to_dict()
        assert copy.get_edge("eBC").kind is EdgeKind.UNDIRECTED

    def test_sample_graph(self):
        g = Graph.sample()
        assert g.node_ids() == ["1", "2", "3"]
        assert g.get_node("1").label == "Node 1"
        assert g.get_edge("e1-2").directed
        assert not g.get_edge("e1-3").directed
