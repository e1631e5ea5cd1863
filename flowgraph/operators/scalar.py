"""
Scalar Operators

Arithmetic on numbers.
"""

import math
import operator

from ..dag.registry import OperatorRegistry


def clamp(value: float, low: float, high: float) -> float:
    """Limit value to the closed range [low, high]"""
    return min(max(value, low), high)


def register_scalar_operators(registry: OperatorRegistry) -> None:
    registry.define("add", operator.add, [lambda: 1, lambda: 1])
    registry.define("subtract", operator.sub, [lambda: 2, lambda: 1])
    registry.define("multiply", operator.mul, [lambda: 2, lambda: 3])
    registry.define("divide", operator.truediv, [lambda: 6, lambda: 2])
    registry.define("abs", abs, [lambda: -5])
    registry.define("pow", lambda base, exponent: base ** exponent, [lambda: 2, lambda: 3])
    registry.define("sqrt", math.sqrt, [lambda: 16])
    # builtin min/max have no inspectable signature
    registry.define("min", lambda a, b: min(a, b), [lambda: 5, lambda: 3])
    registry.define("max", lambda a, b: max(a, b), [lambda: 5, lambda: 3])
    registry.define("clamp", clamp, [lambda: 5, lambda: 0, lambda: 10])
