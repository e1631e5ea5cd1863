"""
Evaluator Module

Colimit construction over a dataflow graph.
"""

from .colimit import ColimitEvaluator

__all__ = [
    "ColimitEvaluator",
]
