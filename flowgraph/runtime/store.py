"""
Graph Store

Owns the live dataflow graph and its layout. Mutation methods are the only
write path; after each mutation a fresh snapshot is delivered synchronously
to subscribers, still under the store lock, so deliveries follow mutation
order.
"""

from threading import RLock
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
import logging

from ..dag.errors import PortArityError
from ..dag.graph import DataFlowGraph
from ..dag.node import Edge, Node
from ..dag.registry import OperatorRegistry
from ..evaluator.colimit import ColimitEvaluator
from .layout import NodeWidget, Point

logger = logging.getLogger(__name__)

GraphListener = Callable[[DataFlowGraph], None]
LayoutListener = Callable[[Dict[str, NodeWidget]], None]


class GraphStore:
    """
    Single owner of a mutable DataFlowGraph.

    The store:
    1. Applies node/edge mutations to its graph under a lock
    2. Validates operations and ports against the registry before mutating
    3. Publishes a copied snapshot to structure subscribers after each change
    4. Tracks editor layout and publishes it to layout subscribers
    5. Builds colimits on a snapshot, so readers never observe a graph that
       changes mid-traversal

    Example usage:
        store = GraphStore(registry)
        unsubscribe = store.subscribe(lambda graph: print(graph.nodes()))

        store.add_node("a", "add")
        store.add_node("b", "multiply")
        store.add_edge("a", "b", target_port=0)

        store.evaluate("b")  # 6

    Removing a node simply invalidates colimits that touched it; no snapshot
    of the orphaned subgraph is preserved.
    """

    def __init__(self, registry: Optional[OperatorRegistry] = None):
        """
        Initialize an empty store.

        Args:
            registry: Operator registry used to validate mutations and build
                      colimits. Without one, mutations are not validated
                      against operators and colimit() is unavailable.
        """
        self.registry = registry
        self._graph = DataFlowGraph()
        self._layout: Dict[str, NodeWidget] = {}
        self._lock = RLock()
        self._listeners: List[GraphListener] = []
        self._layout_listeners: List[LayoutListener] = []

    @classmethod
    def from_config(cls, config, registry: Optional[OperatorRegistry] = None) -> "GraphStore":
        """
        Create a store seeded from a GraphConfig.

        Nodes and edges are added through the public mutation methods, so
        the same validation applies.
        """
        store = cls(registry)
        for node in config.nodes:
            position = (node.position.x, node.position.y) if node.position else (0.0, 0.0)
            store.add_node(node.key, node.operation, position=position, attributes=node.attributes)
        for edge in config.edges:
            store.add_edge(edge.source, edge.target, edge.target_port)

        logger.info(
            f"Created store for graph '{config.name}': "
            f"{len(config.nodes)} nodes, {len(config.edges)} edges"
        )
        return store

    # --- Subscriptions ---

    def subscribe(self, listener: GraphListener) -> Callable[[], None]:
        """
        Receive a graph snapshot now and after every structural change.

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._listeners.append(listener)
            listener(self._graph.copy())

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def subscribe_layout(self, listener: LayoutListener) -> Callable[[], None]:
        """
        Receive the layout now and after every layout change.

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._layout_listeners.append(listener)
            listener(dict(self._layout))

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._layout_listeners:
                    self._layout_listeners.remove(listener)

        return unsubscribe

    def _publish(self, structure: bool = True, layout_changed: bool = False) -> None:
        # Delivery holds the lock so subscribers see mutations in the order
        # they were applied. The lock is reentrant, so a subscriber may mutate.
        with self._lock:
            if structure and self._listeners:
                snapshot = self._graph.copy()
                for listener in list(self._listeners):
                    listener(snapshot)
            if layout_changed and self._layout_listeners:
                layout = dict(self._layout)
                for listener in list(self._layout_listeners):
                    listener(layout)

    # --- Mutations ---

    def add_node(
        self,
        key: str,
        operation: str,
        position: Tuple[float, float] = (0.0, 0.0),
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Node:
        """
        Add a node and place it in the layout.

        Args:
            key: Unique node key
            operation: Registered operator name
            position: Initial editor position
            attributes: Free-form node attributes, stored as given

        Raises:
            DuplicateNodeError: If key already exists
            UnknownOperatorError: If a registry is set and operation is not in it
        """
        with self._lock:
            if self.registry is not None:
                self.registry.resolve(key, operation)
            node = self._graph.add_node(key, operation, attributes)
            self._layout[key] = NodeWidget(position=Point(*position))
            logger.debug(f"Store added node '{key}' (operation={operation})")
            self._publish(layout_changed=True)
        return node

    def remove_node(self, key: str) -> List[Edge]:
        """
        Remove a node and every edge incident to it.

        Returns:
            The edges removed with the node

        Raises:
            UnknownNodeError: If key is not in the graph
        """
        with self._lock:
            removed = self._graph.drop_node(key)
            self._layout.pop(key, None)
            logger.debug(f"Store removed node '{key}' and {len(removed)} edges")
            self._publish(layout_changed=True)
        return removed

    def add_edge(self, source: str, target: str, target_port: int = 0) -> Edge:
        """
        Connect source's output to target's input port.

        Raises:
            UnknownNodeError: If source or target is missing
            PortArityError: If the port is negative, or a registry is set and
                            the port exceeds the target operator's arity
            PortConflictError: If the port is already connected
        """
        with self._lock:
            arity = None
            if self.registry is not None and target in self._graph:
                arity = self.registry.resolve(target, self._graph.operation(target)).arity
            if isinstance(target_port, int) and (
                target_port < 0 or (arity is not None and target_port >= arity)
            ):
                raise PortArityError(target, target_port, arity)
            edge = self._graph.add_edge(source, target, target_port)
            self._publish()
        return edge

    def remove_edge(self, source: str, target: str, target_port: Optional[int] = None) -> List[Edge]:
        """
        Remove edges from source to target (only into target_port when given).

        Raises:
            UnknownEdgeError: If no matching edge exists
        """
        with self._lock:
            removed = self._graph.drop_edge(source, target, target_port)
            self._publish()
        return removed

    def displace_nodes(self, displacements: Mapping[str, Tuple[float, float]]) -> None:
        """
        Move several nodes at once.

        Args:
            displacements: node key -> (dx, dy); unknown keys are ignored
        """
        with self._lock:
            for key, (dx, dy) in displacements.items():
                widget = self._layout.get(key)
                if widget is not None:
                    self._layout[key] = widget.displaced(dx, dy)
            self._publish(structure=False, layout_changed=True)

    # --- Reads ---

    def snapshot(self) -> DataFlowGraph:
        """Independent copy of the current graph"""
        with self._lock:
            return self._graph.copy()

    def layout(self) -> Dict[str, NodeWidget]:
        with self._lock:
            return dict(self._layout)

    def nodes(self) -> List[str]:
        with self._lock:
            return self._graph.nodes()

    def edges(self) -> List[Edge]:
        with self._lock:
            return self._graph.edges()

    # --- Composition ---

    def colimit(self, node_id: str) -> Dict[str, Callable[..., Any]]:
        """
        Composed callables for the upstream closure of node_id, built on a
        snapshot of the current graph.

        Raises:
            RuntimeError: If the store has no registry
        """
        if self.registry is None:
            raise RuntimeError("GraphStore has no operator registry; cannot build colimit")
        evaluator = ColimitEvaluator(self.snapshot(), self.registry)
        return evaluator.colimit(node_id)

    def evaluate(self, node_id: str, *values: Any) -> Any:
        """Build the colimit at node_id and invoke it with optional free-port values"""
        return self.colimit(node_id)[node_id](*values)
