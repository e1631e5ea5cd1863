"""
Layout Records

Per-node editor positions. Layout has no bearing on composition and is only
carried by the store so that editors can subscribe to it.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Point:
    """2D coordinate"""
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class NodeWidget:
    """Editor placement of a node"""
    position: Point = field(default_factory=Point)
    dimensions: Point = field(default_factory=Point)

    def displaced(self, dx: float, dy: float) -> "NodeWidget":
        """Copy of this widget moved by (dx, dy)"""
        return NodeWidget(
            position=Point(self.position.x + dx, self.position.y + dy),
            dimensions=self.dimensions,
        )
