"""
DAG Errors

Exception hierarchy for graph construction and colimit composition.
All errors are deterministic configuration defects and are never retried.
"""

from typing import Optional


class DataflowError(Exception):
    """Base class for all flowgraph errors"""


class UnknownNodeError(DataflowError, KeyError):
    """Raised when a node key is not present in the graph"""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Unknown node: '{node_id}'")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateNodeError(DataflowError, ValueError):
    """Raised when adding a node whose key already exists"""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node already exists: '{node_id}'")


class UnknownOperatorError(DataflowError, LookupError):
    """Raised when a node references an operation with no registry entry"""

    def __init__(self, operation: str, node_id: Optional[str] = None, available=()):
        self.operation = operation
        self.node_id = node_id
        names = ", ".join(sorted(available))
        where = f"Node '{node_id}' references unknown operation" if node_id else "Unknown operation"
        super().__init__(
            f"{where}: '{operation}'. "
            f"Available operations: {names if names else 'none'}"
        )


class PortArityError(DataflowError, ValueError):
    """Raised when an edge targets a port outside the operator's arity"""

    def __init__(self, node_id: str, port: int, arity: Optional[int] = None):
        self.node_id = node_id
        self.port = port
        self.arity = arity
        if port < 0:
            reason = "ports are numbered from 0"
        else:
            reason = f"its operator declares arity {arity}"
        super().__init__(f"Edge into node '{node_id}' targets port {port}, but {reason}")


class PortConflictError(DataflowError, ValueError):
    """Raised when a second edge is added into an already connected port"""

    def __init__(self, node_id: str, port: int, existing_source: str):
        self.node_id = node_id
        self.port = port
        self.existing_source = existing_source
        super().__init__(
            f"Port {port} of node '{node_id}' is already fed by '{existing_source}'"
        )


class CycleError(DataflowError, ValueError):
    """Raised when no valid evaluation order exists for a set of nodes"""

    def __init__(self, cycle: list):
        self.cycle = list(cycle)
        super().__init__(f"Cycle detected in graph: {' -> '.join(self.cycle)}")


class ArityError(DataflowError, TypeError):
    """Raised when a callable's arity cannot be determined or is violated"""


class ConfigError(DataflowError, ValueError):
    """Raised when a graph definition cannot be loaded or validated"""


class UnknownEdgeError(DataflowError, KeyError):
    """Raised when removing an edge that does not exist"""

    def __init__(self, source: str, target: str, port: Optional[int] = None):
        self.source = source
        self.target = target
        self.port = port
        where = f" into port {port}" if port is not None else ""
        super().__init__(f"No edge from '{source}' to '{target}'{where}")

    def __str__(self) -> str:
        return self.args[0]
