"""
Vector Operators

Vectors are tuples of floats. Constructors build them from scalars; the
remaining operators follow the usual Euclidean definitions.
"""

import math
from typing import Sequence, Tuple

from ..dag.registry import OperatorRegistry

Vector = Tuple[float, ...]


def vec2(x: float, y: float) -> Vector:
    return (x, y)


def vec3(x: float, y: float, z: float) -> Vector:
    return (x, y, z)


def vec4(x: float, y: float, z: float, w: float) -> Vector:
    return (x, y, z, w)


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    return sum(x * y for x, y in zip(a, b))


def cross(a: Sequence[float], b: Sequence[float]) -> Vector:
    """Cross product of two 3-vectors"""
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(vector: Sequence[float]) -> float:
    return math.sqrt(sum(x * x for x in vector))


def normalize(vector: Sequence[float]) -> Vector:
    """
    Unit vector in the direction of ``vector``.

    Raises:
        ZeroDivisionError: For the zero vector
    """
    norm = length(vector)
    return tuple(x / norm for x in vector)


def register_vector_operators(registry: OperatorRegistry) -> None:
    registry.define("vec2", vec2, [lambda: 1, lambda: 2])
    registry.define("vec3", vec3, [lambda: 1, lambda: 2, lambda: 3])
    registry.define("vec4", vec4, [lambda: 1, lambda: 2, lambda: 3, lambda: 4])
    registry.define("dot", dot, [lambda: (1, 2, 3), lambda: (4, 5, 6)])
    registry.define("cross", cross, [lambda: (1, 0, 0), lambda: (0, 1, 0)])
    registry.define("length", length, [lambda: (3, 4)])
    registry.define("normalize", normalize, [lambda: (3, 4)])
