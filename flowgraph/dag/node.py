"""
DAG Node Model

Defines the structural records of a dataflow graph: nodes that name an
operator, and edges that feed one node's output into a numbered input port
of another.
"""

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class Node:
    """
    A node in the dataflow graph.

    Attributes:
        key: Unique identifier for this node (e.g., "add1", "blend")
        operation: Name of an entry in the operator registry (e.g., "add")
        attributes: Extra attributes carried alongside the operation
    """
    key: str
    operation: str
    attributes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Edge:
    """
    Directed edge feeding ``source``'s output into ``target``'s input port.

    Examples:
        - Edge(source="add1", target="multiply", target_port=0)
        - Edge(source="add2", target="multiply", target_port=1)
    """
    source: str
    target: str
    target_port: int

    def __post_init__(self) -> None:
        for name in ("source", "target"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string")
        if not isinstance(self.target_port, int) or isinstance(self.target_port, bool):
            raise ValueError(f"target_port must be an integer, got {self.target_port!r}")
        if self.target_port < 0:
            raise ValueError(f"target_port must be >= 0, got {self.target_port}")
