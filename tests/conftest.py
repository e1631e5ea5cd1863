import pytest

from flowgraph.dag.graph import DataFlowGraph
from flowgraph.dag.registry import OperatorRegistry
from flowgraph.operators import create_default_registry


@pytest.fixture
def registry():
    registry = OperatorRegistry()
    registry.define("add", lambda a, b: a + b, [lambda: 1, lambda: 1])
    registry.define("multiply", lambda a, b: a * b, [lambda: 2, lambda: 3])
    registry.define("subtract", lambda a, b: a - b, [lambda: 2, lambda: 1])
    registry.define("negate", lambda x: -x, [lambda: 4])
    registry.define("constant", lambda: 7, [])
    return registry


@pytest.fixture
def builtins():
    return create_default_registry()


@pytest.fixture
def chain_graph():
    """a(add) -> b(multiply)[0]"""
    graph = DataFlowGraph()
    graph.add_node("a", "add")
    graph.add_node("b", "multiply")
    graph.add_edge("a", "b", target_port=0)
    return graph


@pytest.fixture
def diamond_graph():
    """
    top(add) feeds left(negate)[0] and right(multiply)[1];
    left and right feed bottom(subtract)[0] and [1].
    """
    graph = DataFlowGraph()
    for key, operation in [
        ("top", "add"),
        ("left", "negate"),
        ("right", "multiply"),
        ("bottom", "subtract"),
        ("island", "constant"),
    ]:
        graph.add_node(key, operation)
    graph.add_edge("top", "left", target_port=0)
    graph.add_edge("top", "right", target_port=1)
    graph.add_edge("left", "bottom", target_port=0)
    graph.add_edge("right", "bottom", target_port=1)
    return graph
