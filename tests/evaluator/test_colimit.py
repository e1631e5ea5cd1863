import pytest

from flowgraph.dag.errors import CycleError, PortArityError, UnknownNodeError, UnknownOperatorError
from flowgraph.dag.graph import DataFlowGraph
from flowgraph.dag.traversal import upstream_closure
from flowgraph.evaluator.colimit import ColimitEvaluator


def test_chain_evaluates_from_defaults(chain_graph, registry):
    op_map = ColimitEvaluator(chain_graph, registry).colimit("b")

    # multiply(add(1, 1), 3)
    assert op_map["b"]() == 6
    assert op_map["a"]() == 2


def test_free_ports_accept_values_in_flattened_order(chain_graph, registry):
    evaluator = ColimitEvaluator(chain_graph, registry)
    composed = evaluator.colimit("b")["b"]

    assert composed.arity == 3
    assert evaluator.free_ports("b") == [("a", 0), ("a", 1), ("b", 1)]
    assert composed(5, 5, 4) == 40


def test_partial_arguments_fall_back_to_defaults(chain_graph, registry):
    composed = ColimitEvaluator(chain_graph, registry).colimit("b")["b"]

    # multiply(add(10, 1), 3)
    assert composed(10) == 33


def test_source_node_equals_operator_on_its_defaults(diamond_graph, registry):
    evaluator = ColimitEvaluator(diamond_graph, registry)

    for key in ("top", "island"):
        op = registry.get(diamond_graph.operation(key))
        assert evaluator.colimit(key)[key]() == op.operation(*op.defaults())


def test_colimit_keys_equal_upstream_closure(diamond_graph, registry):
    evaluator = ColimitEvaluator(diamond_graph, registry)

    for key in diamond_graph.nodes():
        assert set(evaluator.colimit(key)) == upstream_closure(diamond_graph, key)


def test_diamond_reuses_shared_ancestor(diamond_graph, registry):
    evaluator = ColimitEvaluator(diamond_graph, registry)
    composed = evaluator.colimit("bottom")["bottom"]

    # subtract(negate(add(1, 1)), multiply(2, add(1, 1)))
    assert composed() == -2 - 4
    assert evaluator.free_ports("bottom") == [
        ("top", 0), ("top", 1),
        ("right", 0), ("top", 0), ("top", 1),
    ]


def test_zero_arity_operator_composes(diamond_graph, registry):
    composed = ColimitEvaluator(diamond_graph, registry).colimit("island")["island"]

    assert composed.arity == 0
    assert composed() == 7


def test_evaluate_builds_and_calls(chain_graph, registry):
    evaluator = ColimitEvaluator(chain_graph, registry)

    assert evaluator.evaluate("b") == 6
    assert evaluator.evaluate("b", 0, 0, 9) == 0


def test_repeated_colimits_are_behaviorally_equal(diamond_graph, registry):
    evaluator = ColimitEvaluator(diamond_graph, registry)
    first = evaluator.colimit("bottom")["bottom"]
    second = evaluator.colimit("bottom")["bottom"]

    assert first is not second
    assert first() == second()
    assert first(3, 4, 5, 6, 7) == second(3, 4, 5, 6, 7)


def test_composed_callable_ignores_later_graph_edits(chain_graph, registry):
    composed = ColimitEvaluator(chain_graph, registry).colimit("b")["b"]

    chain_graph.drop_edge("a", "b")

    # multiply(add(5, 5), 3) versus multiply(5, 5)
    assert composed(5, 5) == 30
    assert ColimitEvaluator(chain_graph, registry).evaluate("b", 5, 5) == 25


def test_unknown_operation_names_node(registry):
    graph = DataFlowGraph()
    graph.add_node("mystery", "hydraNoise")

    with pytest.raises(UnknownOperatorError, match="Node 'mystery'"):
        ColimitEvaluator(graph, registry).colimit("mystery")


def test_edge_beyond_arity_is_reported(registry):
    graph = DataFlowGraph()
    graph.add_node("a", "add")
    graph.add_node("n", "negate")
    graph.add_edge("a", "n", target_port=1)

    with pytest.raises(PortArityError) as excinfo:
        ColimitEvaluator(graph, registry).colimit("n")

    assert (excinfo.value.node_id, excinfo.value.port, excinfo.value.arity) == ("n", 1, 1)


def test_cycle_in_upstream_closure_is_reported(registry):
    graph = DataFlowGraph()
    graph.add_node("p", "negate")
    graph.add_node("q", "negate")
    graph.add_edge("p", "q", target_port=0)
    graph.add_edge("q", "p", target_port=0)

    with pytest.raises(CycleError):
        ColimitEvaluator(graph, registry).colimit("q")


def test_cycle_outside_upstream_closure_is_ignored(chain_graph, registry):
    chain_graph.add_node("p", "negate")
    chain_graph.add_node("q", "negate")
    chain_graph.add_edge("p", "q", target_port=0)
    chain_graph.add_edge("q", "p", target_port=0)

    assert ColimitEvaluator(chain_graph, registry).evaluate("b") == 6


def test_unknown_node_is_reported(chain_graph, registry):
    with pytest.raises(UnknownNodeError):
        ColimitEvaluator(chain_graph, registry).colimit("ghost")


def test_builtin_vector_pipeline(builtins):
    graph = DataFlowGraph()
    graph.add_node("direction", "vec2")
    graph.add_node("unit", "normalize")
    graph.add_node("size", "length")
    graph.add_edge("direction", "unit", target_port=0)
    graph.add_edge("unit", "size", target_port=0)

    evaluator = ColimitEvaluator(graph, builtins)

    assert evaluator.evaluate("size") == pytest.approx(1.0)
    assert evaluator.evaluate("unit", 0, 5) == (0.0, 1.0)
