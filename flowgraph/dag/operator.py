"""
Operator Model

An operator is a named, fixed-arity pure function plus one zero-argument
default provider per input port. Providers are used for ports that have no
incoming edge.
"""

from dataclasses import dataclass
from typing import Any, Callable, Tuple

from .errors import ArityError
from .fanin import arity as arity_of


@dataclass(frozen=True)
class Operator:
    """
    Immutable operator definition.

    Example:
        add = Operator(
            name="add",
            operation=lambda a, b: a + b,
            dummy_inputs=(lambda: 1, lambda: 1),
        )

    Attributes:
        name: Registry name of the operator
        operation: n-ary function evaluated with one value per port
        dummy_inputs: One zero-argument provider per port, in port order
    """
    name: str
    operation: Callable[..., Any]
    dummy_inputs: Tuple[Callable[[], Any], ...]

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Operator name must be non-empty")

        # Accept any sequence of providers but store a tuple
        object.__setattr__(self, "dummy_inputs", tuple(self.dummy_inputs))

        for port, provider in enumerate(self.dummy_inputs):
            if arity_of(provider) != 0:
                raise ArityError(
                    f"Operator '{self.name}': default provider for port {port} "
                    f"must take no arguments"
                )

        declared = arity_of(self.operation)
        if declared != len(self.dummy_inputs):
            raise ArityError(
                f"Operator '{self.name}' takes {declared} arguments "
                f"but declares {len(self.dummy_inputs)} default inputs"
            )

    @property
    def arity(self) -> int:
        """Number of input ports"""
        return len(self.dummy_inputs)

    def defaults(self) -> Tuple[Any, ...]:
        """Evaluate every default provider, in port order"""
        return tuple(provider() for provider in self.dummy_inputs)
