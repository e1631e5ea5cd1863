"""
Builtin Operators

Scalar, logic and vector operators available to every graph.
"""

import logging

from ..dag.registry import OperatorRegistry
from .logic import register_logic_operators
from .scalar import register_scalar_operators
from .vector import register_vector_operators

logger = logging.getLogger(__name__)


def create_default_registry() -> OperatorRegistry:
    """
    Set up an operator registry with every builtin operator registered.

    Returns:
        Configured OperatorRegistry
    """
    registry = OperatorRegistry()
    register_scalar_operators(registry)
    register_logic_operators(registry)
    register_vector_operators(registry)

    logger.info(f"Registered {len(registry)} builtin operators")
    return registry


__all__ = [
    "create_default_registry",
    "register_logic_operators",
    "register_scalar_operators",
    "register_vector_operators",
]
