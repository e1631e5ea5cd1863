"""
Logic Operators

Boolean connectives and numeric comparisons.
"""

import operator

from ..dag.registry import OperatorRegistry


def register_logic_operators(registry: OperatorRegistry) -> None:
    registry.define("and", lambda a, b: a and b, [lambda: True, lambda: True])
    registry.define("or", lambda a, b: a or b, [lambda: True, lambda: False])
    registry.define("not", operator.not_, [lambda: True])
    registry.define("xor", lambda a, b: a != b, [lambda: True, lambda: False])
    registry.define("greater", operator.gt, [lambda: 5, lambda: 3])
    registry.define("less", operator.lt, [lambda: 3, lambda: 5])
    registry.define("equal", operator.eq, [lambda: 5, lambda: 5])
