"""Tests for the SVG renderer and HTML control panels."""

from graph import EdgeKind, Graph
from algorithms import list_algorithms
from engine import run_traversal
from ui import (
    algorithm_selector,
    custom_code_editor,
    edge_editor,
    node_editor,
    playback_controls,
    render_canvas,
    run_status_panel,
    start_node_picker,
)


def _laid_out():
    g = Graph()
    g.add_node("A", x=0, y=0, node_id="A")
    g.add_node("B", x=100, y=0, node_id="B")
    g.add_node("C", x=0, y=100, node_id="C")
    g.add_edge("A", "B", edge_id="eAB")
    g.add_edge("A", "C", edge_id="eAC")
    return g


class TestCanvas:
    def test_draws_every_node_and_edge(self):
        svg = render_canvas(_laid_out())
        assert svg.count('<g class="node"') == 3
        assert svg.count('<g class="edge"') == 2
        assert svg.count("<polygon") == 2

    def test_visited_styling(self):
        svg = render_canvas(_laid_out(), visited_nodes={"A"}, visited_edges={"eAB"})
        assert '<g class="node visited" data-id="A">' in svg
        assert '<g class="edge visited" data-id="eAB">' in svg
        assert '<g class="edge" data-id="eAC">' in svg

    def test_unknown_visited_ids_never_draw(self):
        svg = render_canvas(_laid_out(), visited_nodes={"ghost"}, visited_edges={"nope"})
        assert "visited" not in svg

    def test_undirected_has_no_arrow_and_weight_label(self):
        g = Graph()
        g.add_node("A", x=0, y=0, node_id="A")
        g.add_node("B", x=100, y=0, node_id="B")
        g.add_edge("A", "B", EdgeKind.UNDIRECTED, weight=7, edge_id="e1")
        svg = render_canvas(g)
        assert "<polygon" not in svg
        assert ">7</text>" in svg

    def test_labels_escaped(self):
        g = Graph()
        g.add_node("<b>x</b>", node_id="n1")
        svg = render_canvas(g)
        assert "&lt;b&gt;x&lt;/b&gt;" in svg
        assert "<b>" not in svg


class TestPanels:
    def test_playback_controls(self):
        html = playback_controls(is_running=True, cursor=2, total=5, speed="slow")
        assert 'id="current-step">2<' in html
        assert 'id="total-steps">5<' in html
        assert "RUNNING" in html
        assert '<option value="slow" selected>' in html

    def test_algorithm_selector_includes_custom(self):
        html = algorithm_selector(list_algorithms(), "custom")
        assert 'value="bfs"' in html
        assert 'value="dfs"' in html
        assert '<option value="custom" selected>' in html

    def test_start_picker_marks_selection(self, abc_graph):
        html = start_node_picker(abc_graph, "B")
        assert '<option value="B" selected>' in html

    def test_editors_list_items(self, abc_graph):
        assert node_editor(abc_graph).count("btn-delete-node") == 3
        assert edge_editor(abc_graph).count("btn-delete-edge") == 2
        assert "No edges yet." in edge_editor(Graph())

    def test_custom_editor_visibility(self):
        assert "display: none" in custom_code_editor("visit(start_node_id)")
        html = custom_code_editor("x = '<tag>'", show=True)
        assert "display: block" in html
        assert "&lt;tag&gt;" in html

    def test_run_status_panel(self, abc_graph):
        assert "Pick a start node" in run_status_panel(None)
        html = run_status_panel(run_traversal(abc_graph, "bfs", "A"))
        assert "status-ok" in html
        assert "<strong>3</strong>" in html
        failed = run_status_panel(
            run_traversal(abc_graph, "custom", "A", source="log('hi')\nraise ValueError('x')")
        )
        assert "status-failed" in failed
        assert "<li>hi</li>" in failed
