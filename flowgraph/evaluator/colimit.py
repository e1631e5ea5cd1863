"""
Colimit Evaluator

Builds, for every node upstream of a chosen node, one composed callable that
evaluates the node's operator on the outputs of its ancestors. Nothing is
evaluated at construction time; values are only computed when the composed
callable is invoked.
"""

from typing import Any, Callable, Dict, List, Tuple
import logging

from ..dag.errors import PortArityError
from ..dag.fanin import FanIn, FreePort, fan_in
from ..dag.graph import DataFlowGraph
from ..dag.registry import OperatorRegistry
from ..dag.traversal import upstream_closure

logger = logging.getLogger(__name__)


class ColimitEvaluator:
    """
    Composes operators along the upstream closure of a node.

    The evaluator:
    1. Collects the upstream closure of the requested node
    2. Orders it topologically (ancestors first)
    3. Resolves every input port to either the composed callable of the
       node feeding it or a free port backed by the operator's default
    4. Fans the port providers into the node's operation

    Example usage:
        graph = DataFlowGraph()
        graph.add_node("a", "add")
        graph.add_node("b", "multiply")
        graph.add_edge("a", "b", target_port=0)

        evaluator = ColimitEvaluator(graph, registry)
        op_map = evaluator.colimit("b")

        op_map["b"]()         # multiply(add(1, 1), 3) == 6
        op_map["b"](5, 5, 4)  # multiply(add(5, 5), 4) == 40

    The evaluator only reads the graph. Callables it returns capture the
    structure at construction time and do not follow later edits.
    """

    def __init__(self, graph: DataFlowGraph, registry: OperatorRegistry):
        """
        Initialize evaluator over a graph and operator registry.

        Args:
            graph: Graph to read (not mutated)
            registry: Operator definitions referenced by node operations
        """
        self.graph = graph
        self.registry = registry

    def colimit(self, node_id: str) -> Dict[str, FanIn]:
        """
        Compose a callable for every node in the upstream closure of node_id.

        Args:
            node_id: Node whose ancestor diagram is composed

        Returns:
            Dictionary mapping node key to its composed callable; the keys
            are exactly the upstream closure of node_id

        Raises:
            UnknownNodeError: If node_id is not in the graph
            UnknownOperatorError: If a node names an unregistered operation
            PortArityError: If an edge targets a port beyond the operator's arity
            CycleError: If the upstream closure contains a cycle
        """
        upstream_ids = upstream_closure(self.graph, node_id)
        order = self.graph.topological_sort(upstream_ids)

        op_map: Dict[str, FanIn] = {}
        for key in order:
            op_map[key] = self._compose_node(key, op_map)

        logger.debug(
            f"Built colimit at '{node_id}': {len(op_map)} nodes, "
            f"order: {order}, arity: {op_map[node_id].arity}"
        )
        return op_map

    def _compose_node(self, key: str, op_map: Dict[str, FanIn]) -> FanIn:
        """
        Compose a single node from already composed ancestors.

        Args:
            key: Node to compose
            op_map: Composed callables of every node ordered before key
        """
        operator = self.registry.resolve(key, self.graph.operation(key))
        port_sources = self.graph.port_sources(key)

        for port in port_sources:
            if port >= operator.arity:
                raise PortArityError(key, port, operator.arity)

        providers: List[Callable[..., Any]] = []
        for port in range(operator.arity):
            if port in port_sources:
                providers.append(op_map[port_sources[port]])
            else:
                providers.append(FreePort(key, port, operator.dummy_inputs[port]))

        return fan_in(providers, operator.operation)

    def free_ports(self, node_id: str) -> List[Tuple[str, int]]:
        """
        Unconnected ports upstream of node_id, in the argument order the
        composed callable expects.
        """
        return self.colimit(node_id)[node_id].free_ports

    def evaluate(self, node_id: str, *values: Any) -> Any:
        """
        Compose the colimit at node_id and invoke it.

        Args:
            node_id: Node to evaluate
            *values: Optional overrides for free ports, in free_ports() order;
                     ports without a value use their default provider

        Returns:
            Output of node_id's operator
        """
        return self.colimit(node_id)[node_id](*values)
