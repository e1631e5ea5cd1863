"""
Dataflow Graph

Directed graph of operator nodes whose edges feed numbered input ports.
Maintains incoming/outgoing edge indexes, enforces one edge per
(target, port), and computes topological evaluation order.
"""

from collections import deque
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from .errors import (
    CycleError,
    DuplicateNodeError,
    PortConflictError,
    UnknownEdgeError,
    UnknownNodeError,
)
from .node import Edge, Node

logger = logging.getLogger(__name__)


class DataFlowGraph:
    """
    Mutable dataflow graph.

    The graph:
    1. Stores nodes by key, each naming an operator
    2. Indexes edges by target (incoming) and by source (outgoing)
    3. Rejects a second edge into an already connected (target, port)
    4. Computes topological order over the whole graph or a subset (Kahn)

    Example usage:
        graph = DataFlowGraph()
        graph.add_node("a", "add")
        graph.add_node("b", "multiply")
        graph.add_edge("a", "b", target_port=0)

        graph.topological_sort()  # ["a", "b"]
        graph.in_edges("b")       # [Edge(source="a", target="b", target_port=0)]

    Self-loops may be inserted; they are reported as cycles when an
    evaluation order is requested.
    """

    def __init__(self):
        self._nodes: Dict[str, Node] = {}
        self._edges: List[Edge] = []
        self._in_edges: Dict[str, List[Edge]] = {}
        self._out_edges: Dict[str, List[Edge]] = {}

    @classmethod
    def from_records(
        cls,
        nodes: Iterable[Dict[str, Any]],
        edges: Iterable[Dict[str, Any]] = (),
    ) -> "DataFlowGraph":
        """
        Build a graph from plain node and edge records.

        Args:
            nodes: Records like {"key": "add1", "operation": "add"}
            edges: Records like {"source": "add1", "target": "mul", "target_port": 0}
        """
        graph = cls()
        for record in nodes:
            record = dict(record)
            graph.add_node(record.pop("key"), record.pop("operation"), record)
        for record in edges:
            graph.add_edge(record["source"], record["target"], record["target_port"])
        return graph

    # --- Nodes ---

    def add_node(
        self,
        key: str,
        operation: str,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Node:
        """
        Add a node carrying an optional mapping of free-form attributes.

        Raises:
            DuplicateNodeError: If key already exists
        """
        if key in self._nodes:
            raise DuplicateNodeError(key)

        node = Node(key=key, operation=operation, attributes=dict(attributes or {}))
        self._nodes[key] = node
        self._in_edges[key] = []
        self._out_edges[key] = []
        logger.debug(f"Added node '{key}' (operation={operation})")
        return node

    def drop_node(self, key: str) -> List[Edge]:
        """
        Remove a node and every edge where it is source or target.

        Returns:
            The edges removed along with the node

        Raises:
            UnknownNodeError: If key is not in the graph
        """
        self._require(key)

        incident = self._in_edges[key] + [e for e in self._out_edges[key] if e.target != key]
        for edge in incident:
            self._unlink(edge)

        del self._nodes[key]
        del self._in_edges[key]
        del self._out_edges[key]

        logger.debug(f"Dropped node '{key}' and {len(incident)} incident edges")
        return incident

    def has_node(self, key: str) -> bool:
        return key in self._nodes

    def node(self, key: str) -> Node:
        self._require(key)
        return self._nodes[key]

    def operation(self, key: str) -> str:
        """Operator name referenced by a node"""
        return self.node(key).operation

    def nodes(self) -> List[str]:
        """Node keys, in insertion order"""
        return list(self._nodes)

    # --- Edges ---

    def add_edge(self, source: str, target: str, target_port: int = 0) -> Edge:
        """
        Connect source's output to target's input port.

        Raises:
            UnknownNodeError: If source or target is missing
            PortConflictError: If target_port of target is already connected
        """
        self._require(source)
        self._require(target)
        edge = Edge(source=source, target=target, target_port=target_port)

        existing = self.edge_into(target, target_port)
        if existing is not None:
            raise PortConflictError(target, target_port, existing.source)

        self._edges.append(edge)
        self._in_edges[target].append(edge)
        self._out_edges[source].append(edge)
        logger.debug(f"Added edge {source} -> {target}[{target_port}]")
        return edge

    def drop_edge(self, source: str, target: str, target_port: Optional[int] = None) -> List[Edge]:
        """
        Remove edges from source to target.

        When target_port is None, every edge between the pair is removed.

        Returns:
            The removed edges

        Raises:
            UnknownEdgeError: If no matching edge exists
        """
        matches = [
            e for e in self._in_edges.get(target, [])
            if e.source == source and (target_port is None or e.target_port == target_port)
        ]
        if not matches:
            raise UnknownEdgeError(source, target, target_port)

        for edge in matches:
            self._unlink(edge)
        logger.debug(f"Dropped {len(matches)} edge(s) {source} -> {target}")
        return matches

    def edges(self) -> List[Edge]:
        return list(self._edges)

    def in_edges(self, key: str) -> List[Edge]:
        self._require(key)
        return list(self._in_edges[key])

    def out_edges(self, key: str) -> List[Edge]:
        self._require(key)
        return list(self._out_edges[key])

    def in_degree(self, key: str) -> int:
        self._require(key)
        return len(self._in_edges[key])

    def out_degree(self, key: str) -> int:
        self._require(key)
        return len(self._out_edges[key])

    def edge_into(self, target: str, port: int) -> Optional[Edge]:
        """Edge feeding the given port of target, if any"""
        for edge in self._in_edges.get(target, []):
            if edge.target_port == port:
                return edge
        return None

    def port_sources(self, key: str) -> Dict[int, str]:
        """
        Map each connected input port of a node to its source node.

        Args:
            key: Node identifier

        Returns:
            Dictionary of port index -> source node key
        """
        return {e.target_port: e.source for e in self.in_edges(key)}

    # --- Ordering ---

    def topological_sort(self, keys: Optional[Iterable[str]] = None) -> List[str]:
        """
        Compute topological order using Kahn's algorithm.

        Algorithm:
        1. Restrict to ``keys`` (all nodes when None), keeping insertion order
        2. Start with nodes that have no incoming edges inside the subset
        3. Process each node, reducing in-degree of its targets
        4. Repeat until all nodes processed

        Every node appears after all of its ancestors within the subset.

        Raises:
            CycleError: If the subset contains a cycle
        """
        if keys is None:
            members = list(self._nodes)
        else:
            wanted = set(keys)
            for key in wanted:
                self._require(key)
            members = [k for k in self._nodes if k in wanted]
        member_set = set(members)

        in_degree = {k: 0 for k in members}
        for key in members:
            for edge in self._in_edges[key]:
                if edge.source in member_set:
                    in_degree[key] += 1

        queue = deque(k for k in members if in_degree[k] == 0)
        order: List[str] = []

        while queue:
            key = queue.popleft()
            order.append(key)
            for edge in self._out_edges[key]:
                if edge.target in member_set:
                    in_degree[edge.target] -= 1
                    if in_degree[edge.target] == 0:
                        queue.append(edge.target)

        if len(order) != len(members):
            remaining = [k for k in members if in_degree[k] > 0]
            raise CycleError(self._find_cycle(remaining))

        logger.debug(f"Computed topological order: {order}")
        return order

    def _find_cycle(self, remaining: List[str]) -> List[str]:
        """
        Extract one cycle from nodes left over by Kahn's algorithm.

        Every leftover node has a leftover predecessor, so walking incoming
        edges from any of them must revisit a node.
        """
        pending = set(remaining)
        current = remaining[0]
        path = [current]
        seen = {current: 0}

        while True:
            current = next(
                e.source for e in self._in_edges[current] if e.source in pending
            )
            if current in seen:
                cycle = path[seen[current]:] + [current]
                return list(reversed(cycle))
            seen[current] = len(path)
            path.append(current)

    # --- Snapshots ---

    def copy(self) -> "DataFlowGraph":
        """Independent copy sharing no mutable state with this graph"""
        clone = DataFlowGraph()
        for node in self._nodes.values():
            clone.add_node(node.key, node.operation, node.attributes)
        for edge in self._edges:
            clone._edges.append(edge)
            clone._in_edges[edge.target].append(edge)
            clone._out_edges[edge.source].append(edge)
        return clone

    def _unlink(self, edge: Edge) -> None:
        self._edges.remove(edge)
        self._in_edges[edge.target].remove(edge)
        self._out_edges[edge.source].remove(edge)

    def _require(self, key: str) -> None:
        if key not in self._nodes:
            raise UnknownNodeError(key)

    def __contains__(self, key: str) -> bool:
        return key in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"DataFlowGraph(nodes={len(self._nodes)}, edges={len(self._edges)})"
