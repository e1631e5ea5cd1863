import pytest

from flowgraph.dag.errors import UnknownNodeError
from flowgraph.dag.graph import DataFlowGraph
from flowgraph.dag.traversal import descendant_closure, terminal_ancestors, upstream_closure


def test_upstream_closure_includes_start_node(diamond_graph):
    assert upstream_closure(diamond_graph, "bottom") == {"top", "left", "right", "bottom"}
    assert upstream_closure(diamond_graph, "left") == {"top", "left"}
    assert upstream_closure(diamond_graph, "island") == {"island"}


def test_terminal_ancestors_keeps_sources_in_input_order(diamond_graph):
    keys = ["bottom", "island", "left", "top"]

    assert terminal_ancestors(diamond_graph, keys) == ["island", "top"]


def test_descendant_closure_excludes_inputs(diamond_graph):
    assert descendant_closure(diamond_graph, ["top"]) == {"left", "right", "bottom"}
    assert descendant_closure(diamond_graph, ["top", "left"]) == {"right", "bottom"}
    assert descendant_closure(diamond_graph, ["bottom"]) == set()


def test_closures_on_unknown_node_raise(diamond_graph):
    with pytest.raises(UnknownNodeError):
        upstream_closure(diamond_graph, "ghost")
    with pytest.raises(UnknownNodeError):
        descendant_closure(diamond_graph, ["ghost"])


def test_traversal_handles_deep_chains_without_recursion():
    graph = DataFlowGraph()
    depth = 5000
    graph.add_node("n0", "negate")
    for i in range(1, depth):
        graph.add_node(f"n{i}", "negate")
        graph.add_edge(f"n{i - 1}", f"n{i}", target_port=0)

    assert len(upstream_closure(graph, f"n{depth - 1}")) == depth
    assert len(descendant_closure(graph, ["n0"])) == depth - 1


def test_traversal_terminates_on_cycles():
    graph = DataFlowGraph()
    graph.add_node("p", "negate")
    graph.add_node("q", "negate")
    graph.add_edge("p", "q", target_port=0)
    graph.add_edge("q", "p", target_port=0)

    assert upstream_closure(graph, "p") == {"p", "q"}
    assert descendant_closure(graph, ["p"]) == {"q"}
