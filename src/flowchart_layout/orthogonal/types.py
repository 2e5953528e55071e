"""
Type definitions for orthogonal edge routing.

Provides the discrete routing structures shared by the junction router,
the padding resolver and the articulation mapper.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple, Optional

from ..types import Edge


class Direction(Enum):
    """Relative direction from an edge's source cell to its target cell."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    STILL = "still"

    def opposite(self) -> Direction:
        """Get the opposite direction."""
        opposites = {
            Direction.LEFT: Direction.RIGHT,
            Direction.RIGHT: Direction.LEFT,
            Direction.UP: Direction.DOWN,
            Direction.DOWN: Direction.UP,
            Direction.STILL: Direction.STILL,
        }
        return opposites[self]


class RouteKind(Enum):
    """Shape of a routed edge."""

    DIRECT = "direct"  # one level down, no vertical jog
    RIGHT_JOG = "right_jog"  # multi-level descent right of the spanned band
    LEFT_JOG = "left_jog"  # multi-level descent along the target's left line (clash)
    BACK = "back"  # upward or same-row edge, always via the target's left line


class JunctionPoint(NamedTuple):
    """A turn point on the doubled grid (x = grid column, y = grid row)."""

    x: int
    y: int


@dataclass(frozen=True)
class EdgeRoute:
    """
    Junction sequence of one edge, source to target.

    The first point lies on the channel below the source cell and the last
    on the channel above the target cell.
    """

    edge: Edge
    points: tuple[JunctionPoint, ...]
    kind: RouteKind
    horizontal: Direction
    vertical: Direction
    emphasis: Optional[float] = None

    @property
    def is_back_edge(self) -> bool:
        return self.kind is RouteKind.BACK

    def span_on_x(self, x: int) -> tuple[int, int]:
        """(min y, max y) of this route's points on vertical line ``x``."""
        ys = [p.y for p in self.points if p.x == x]
        return min(ys), max(ys)

    def span_on_y(self, y: int) -> tuple[int, int]:
        """(min x, max x) of this route's points on horizontal line ``y``."""
        xs = [p.x for p in self.points if p.y == y]
        return min(xs), max(xs)

    def __iter__(self) -> Iterator[JunctionPoint]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class JunctionMap:
    """
    All routes of one layout plus the reverse point index.

    Attributes:
        edges: Edges in deterministic processing order
        routes: Edge -> route
        reverse: Junction point -> edges touching it, in processing order
    """

    edges: tuple[Edge, ...] = ()
    routes: dict[Edge, EdgeRoute] = field(default_factory=dict)
    reverse: dict[JunctionPoint, tuple[Edge, ...]] = field(default_factory=dict)

    def route(self, edge: Edge) -> EdgeRoute:
        return self.routes[edge]

    def edges_at(self, point: JunctionPoint) -> tuple[Edge, ...]:
        return self.reverse.get(point, ())

    def __len__(self) -> int:
        return len(self.routes)


__all__ = [
    "Direction",
    "RouteKind",
    "JunctionPoint",
    "EdgeRoute",
    "JunctionMap",
]
