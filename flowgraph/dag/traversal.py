"""
Graph Traversal

Read-only queries over a DataFlowGraph. All walks use an explicit stack
rather than recursion so deep graphs do not hit the interpreter's recursion
limit.
"""

from typing import Iterable, List, Set

from .errors import UnknownNodeError
from .graph import DataFlowGraph


def upstream_closure(graph: DataFlowGraph, node_id: str) -> Set[str]:
    """
    All nodes reachable by following incoming edges backward from node_id.

    The result includes node_id itself.

    Raises:
        UnknownNodeError: If node_id is not in the graph
    """
    if node_id not in graph:
        raise UnknownNodeError(node_id)

    visited: Set[str] = set()
    stack = [node_id]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        for edge in graph.in_edges(current):
            stack.append(edge.source)
    return visited


def terminal_ancestors(graph: DataFlowGraph, keys: Iterable[str]) -> List[str]:
    """
    Filter keys to those with no incoming edges (source nodes).

    Order of the input is preserved.
    """
    return [key for key in keys if graph.in_degree(key) == 0]


def descendant_closure(graph: DataFlowGraph, keys: Iterable[str]) -> Set[str]:
    """
    All nodes reachable by following outgoing edges forward from keys.

    The input keys themselves are excluded, even when one is reachable
    from another.

    Raises:
        UnknownNodeError: If any key is not in the graph
    """
    starts = list(keys)
    for key in starts:
        if key not in graph:
            raise UnknownNodeError(key)

    visited: Set[str] = set(starts)
    stack = list(starts)
    while stack:
        current = stack.pop()
        for edge in graph.out_edges(current):
            if edge.target not in visited:
                visited.add(edge.target)
                stack.append(edge.target)
    return visited - set(starts)
