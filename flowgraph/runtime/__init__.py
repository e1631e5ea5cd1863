"""
Runtime Module

Graph store, layout records and the command-line runner.
"""

from .layout import NodeWidget, Point
from .store import GraphStore

__all__ = [
    "GraphStore",
    "NodeWidget",
    "Point",
]
