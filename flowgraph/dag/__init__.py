"""
DAG Module

Operators, registry, dataflow graph structure, traversal and fan-in.
"""

from .errors import (
    ArityError,
    ConfigError,
    CycleError,
    DataflowError,
    DuplicateNodeError,
    PortArityError,
    PortConflictError,
    UnknownEdgeError,
    UnknownNodeError,
    UnknownOperatorError,
)
from .fanin import FanIn, FreePort, arity, fan_in
from .graph import DataFlowGraph
from .node import Edge, Node
from .operator import Operator
from .registry import OperatorRegistry
from .traversal import descendant_closure, terminal_ancestors, upstream_closure

__all__ = [
    "ArityError",
    "ConfigError",
    "CycleError",
    "DataflowError",
    "DuplicateNodeError",
    "PortArityError",
    "PortConflictError",
    "UnknownEdgeError",
    "UnknownNodeError",
    "UnknownOperatorError",
    "FanIn",
    "FreePort",
    "arity",
    "fan_in",
    "DataFlowGraph",
    "Edge",
    "Node",
    "Operator",
    "OperatorRegistry",
    "descendant_closure",
    "terminal_ancestors",
    "upstream_closure",
]
