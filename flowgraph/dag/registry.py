"""
Operator Registry

Registration table mapping operator names to Operator definitions.
Built once at startup and consumed read-only by the colimit evaluator.
"""

from typing import Any, Callable, Dict, Sequence
import logging

from .errors import UnknownOperatorError
from .operator import Operator

logger = logging.getLogger(__name__)


class OperatorRegistry:
    """
    Registry of available operators.

    The registry maintains a mapping from operator names (e.g., "add", "dot")
    to immutable Operator definitions. A name that is not registered is
    reported when a colimit is composed, never when it is invoked.

    Example usage:
        registry = OperatorRegistry()

        registry.register(Operator(
            name="add",
            operation=lambda a, b: a + b,
            dummy_inputs=(lambda: 1, lambda: 1),
        ))

        # or, equivalently
        registry.define("add", lambda a, b: a + b, [lambda: 1, lambda: 1])

        op = registry.get("add")
        op.operation(*op.defaults())  # 2
    """

    def __init__(self):
        """Initialize empty registry"""
        self._operators: Dict[str, Operator] = {}
        logger.debug("Initialized OperatorRegistry")

    def register(self, operator: Operator) -> Operator:
        """
        Register an operator under its name.

        Args:
            operator: Operator definition

        Returns:
            The registered operator
        """
        if operator.name in self._operators:
            logger.warning(f"Overwriting existing registration for operator: {operator.name}")

        self._operators[operator.name] = operator
        logger.debug(f"Registered operator: {operator.name} (arity={operator.arity})")
        return operator

    def define(
        self,
        name: str,
        operation: Callable[..., Any],
        dummy_inputs: Sequence[Callable[[], Any]],
    ) -> Operator:
        """
        Build and register an operator in one step.

        Args:
            name: Operator name
            operation: n-ary function
            dummy_inputs: One zero-argument default provider per port

        Returns:
            The registered operator

        Raises:
            ArityError: If the number of providers does not match the arity
        """
        return self.register(Operator(name=name, operation=operation, dummy_inputs=tuple(dummy_inputs)))

    def get(self, name: str) -> Operator:
        """
        Look up an operator by name.

        Args:
            name: Operator name

        Returns:
            Registered Operator

        Raises:
            UnknownOperatorError: If name is not registered
        """
        try:
            return self._operators[name]
        except KeyError:
            raise UnknownOperatorError(name, available=self._operators.keys()) from None

    def resolve(self, node_id: str, name: str) -> Operator:
        """
        Look up the operator referenced by a node.

        Same as get(), but the error names the offending node.

        Raises:
            UnknownOperatorError: If name is not registered
        """
        if name not in self._operators:
            raise UnknownOperatorError(name, node_id=node_id, available=self._operators.keys())
        return self._operators[name]

    def list_names(self) -> list[str]:
        """
        List all registered operator names.

        Returns:
            List of registered operator names
        """
        return list(self._operators.keys())

    def is_registered(self, name: str) -> bool:
        """
        Check if an operator name is registered.

        Args:
            name: Operator name to check

        Returns:
            True if name is registered, False otherwise
        """
        return name in self._operators

    def __contains__(self, name: str) -> bool:
        return name in self._operators

    def __len__(self) -> int:
        return len(self._operators)
