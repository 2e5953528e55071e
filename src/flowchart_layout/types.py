"""
Common types for control-flow chart layout.

This module provides the host-facing data model shared by every phase:
- Vertex: Opaque graph vertex identified by its ordering key (address)
- Edge: Directed edge carrying a mutable emphasis rendering hint
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable, Iterable, Optional, TypedDict, Union


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout computation has begun
    - tick: Fired once per completed phase
    - end: Layout computation has finished
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    phase: str
    progress: float


class Vertex:
    """
    Graph vertex identified by a totally ordered key.

    Two vertices are the same vertex iff their keys are equal, regardless of
    object identity. Hosts typically use the basic-block start address.

    Attributes:
        key: Ordering key (address)
        width: Rendered width, used by GridGeometry.from_grid (optional)
        height: Rendered height, used by GridGeometry.from_grid (optional)
    """

    def __init__(self, key: Any, **kwargs: Any) -> None:
        if key is None:
            raise ValueError("Vertex key cannot be None")
        self.key = key
        self.width: Optional[float] = kwargs.get("width")
        self.height: Optional[float] = kwargs.get("height")

        # Copy any additional custom properties
        for name, value in kwargs.items():
            if not hasattr(self, name):
                setattr(self, name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return bool(self.key == other.key)

    def __hash__(self) -> int:
        return hash(self.key)

    def __lt__(self, other: Vertex) -> bool:
        return bool(self.key < other.key)

    def __repr__(self) -> str:
        key = hex(self.key) if isinstance(self.key, int) else repr(self.key)
        return f"Vertex({key})"


class Edge:
    """
    Directed edge between two vertices.

    Attributes:
        source: Source vertex (or its key, resolved by the layout)
        target: Target vertex (or its key, resolved by the layout)
        emphasis: Rendering weight hint; None until a layout sets it
    """

    def __init__(
        self,
        source: Union[Vertex, Any],
        target: Union[Vertex, Any],
        emphasis: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize edge between two vertices.

        Args:
            source: Source vertex or vertex key (required)
            target: Target vertex or vertex key (required)
            emphasis: Initial emphasis (optional)

        Raises:
            ValueError: If source or target is None
        """
        if source is None:
            raise ValueError("Edge source cannot be None")
        if target is None:
            raise ValueError("Edge target cannot be None")

        self.source = source
        self.target = target
        self.emphasis = emphasis

        for name, value in kwargs.items():
            if not hasattr(self, name):
                setattr(self, name, value)

    def __repr__(self) -> str:
        return f"Edge({self.source!r} -> {self.target!r})"


def vertex_key(obj: Any) -> Any:
    """Extract the ordering key from a Vertex, dict, host object or raw key."""
    if isinstance(obj, Vertex):
        return obj.key
    if isinstance(obj, dict):
        return obj.get("key", obj.get("address"))
    for attr in ("key", "address"):
        if hasattr(obj, attr):
            return getattr(obj, attr)
    return obj


# Type aliases for callbacks
SuccessorLookup = Callable[[Vertex], Iterable[Vertex]]

VertexLike = Union[Vertex, dict[str, Any], Any]
"""Input type for vertices: Vertex objects, dicts, or objects with a key/address."""

EdgeLike = Union[Edge, dict[str, Any], Any]
"""Input type for edges: Edge objects, dicts, or objects with source/target."""

Point = tuple[float, float]
"""Continuous layout-space coordinate (x, y)."""


__all__ = [
    "EventType",
    "Event",
    "Vertex",
    "Edge",
    "vertex_key",
    "SuccessorLookup",
    "VertexLike",
    "EdgeLike",
    "Point",
]
