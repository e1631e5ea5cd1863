"""
Fan-In Combinator

Flattens the parameter lists of several functions into one callable and
feeds their results into a combining function.

    double = lambda x: 2 * x
    add = lambda x, y: x + y
    subtract = lambda a, b: a - b

    h = fan_in([double, add], subtract)
    h(3, 4, 5)  # subtract(double(3), add(4, 5)) == -3
"""

import inspect
from typing import Any, Callable, List, Sequence, Tuple

from .errors import ArityError

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def arity(fn: Callable[..., Any]) -> int:
    """
    Number of positional arguments a callable consumes.

    Callables that carry an integer ``arity`` attribute (FanIn, FreePort)
    report it directly. For anything else, required positional parameters
    are counted from the signature; defaulted and variadic parameters do
    not count.

    Raises:
        ArityError: If the callable has no inspectable signature
    """
    declared = getattr(fn, "arity", None)
    if isinstance(declared, int):
        return declared

    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError) as e:
        raise ArityError(f"Cannot determine arity of {fn!r}: {e}") from e

    return sum(
        1
        for param in signature.parameters.values()
        if param.kind in _POSITIONAL and param.default is inspect.Parameter.empty
    )


class FreePort:
    """
    Provider for an input port with no incoming edge.

    Consumes one caller-supplied argument when present, otherwise falls back
    to the operator's zero-argument default provider.
    """

    arity = 1

    def __init__(self, node_id: str, port: int, default: Callable[[], Any]):
        self.node_id = node_id
        self.port = port
        self.default = default

    @property
    def free_ports(self) -> List[Tuple[str, int]]:
        return [(self.node_id, self.port)]

    def __call__(self, *args: Any) -> Any:
        if args:
            return args[0]
        return self.default()

    def __repr__(self) -> str:
        return f"FreePort(node_id={self.node_id!r}, port={self.port})"


class FanIn:
    """
    Composition of n functions into a combining function.

    The flattened parameter list is the concatenation of each part's
    parameters, in order. Calling slices the arguments back into per-part
    groups, applies each part, and passes the results to ``combine``.

    Arities and offsets are computed once at construction; instances hold no
    mutable state and are safe to call from several threads.
    """

    def __init__(self, functions: Sequence[Callable[..., Any]], combine: Callable[..., Any]):
        self.functions = tuple(functions)
        self.combine = combine

        self.arities = tuple(arity(f) for f in self.functions)
        offsets = []
        start = 0
        for part_arity in self.arities:
            offsets.append(start)
            start += part_arity
        self.offsets = tuple(offsets)
        self.arity = start

    @property
    def free_ports(self) -> List[Tuple[str, int]]:
        """Free ports of the composition, in flattened argument order"""
        ports: List[Tuple[str, int]] = []
        for f in self.functions:
            ports.extend(getattr(f, "free_ports", ()))
        return ports

    def __call__(self, *args: Any) -> Any:
        if len(args) > self.arity:
            raise ArityError(
                f"Composed function takes {self.arity} arguments, got {len(args)}"
            )

        results = [
            f(*args[start:start + part_arity])
            for f, start, part_arity in zip(self.functions, self.offsets, self.arities)
        ]
        return self.combine(*results)

    def __repr__(self) -> str:
        return f"FanIn(parts={len(self.functions)}, arity={self.arity})"


def fan_in(functions: Sequence[Callable[..., Any]], combine: Callable[..., Any]) -> FanIn:
    """
    Build a FanIn over ``functions`` feeding ``combine``.

    An empty function list yields a zero-argument callable returning
    ``combine()``.
    """
    return FanIn(functions, combine)
