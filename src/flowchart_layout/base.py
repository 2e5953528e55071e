"""
Base classes for control-flow layout algorithms.

This module provides abstract base classes that define the common interface
and shared functionality for layouts:

- BaseLayout: Abstract base with event system, vertex/edge management,
  successor lookup and cancellation monitor
- StaticLayout: For single-pass layouts computed in one run() call
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .monitor import TaskMonitor
from .types import (
    Edge,
    EdgeLike,
    Event,
    EventType,
    SuccessorLookup,
    Vertex,
    VertexLike,
    vertex_key,
)
from .validation import validate_edge_endpoints, validate_vertex_keys


class BaseLayout(ABC):
    """
    Abstract base class for layout algorithms.

    Provides shared infrastructure:
    - Event system (start/tick/end events)
    - Vertex/edge management via properties
    - Successor lookup, derived from edges unless the host supplies one
    - Cooperative cancellation through a TaskMonitor

    Example:
        layout = SomeLayout(
            vertices=[0x1000, 0x1010, 0x1020],
            edges=[(0x1000, 0x1010), (0x1010, 0x1020)],
        )
        layout.run()
    """

    def __init__(
        self,
        *,
        vertices: Optional[Sequence[VertexLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        successors: Optional[SuccessorLookup] = None,
        monitor: Optional[TaskMonitor] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            vertices: Vertices (Vertex objects, dicts, host objects or raw keys)
            edges: Edges (Edge objects, dicts, (source, target) pairs or host objects)
            successors: Optional outgoing-neighbour lookup overriding the edges
            monitor: Cancellation signal; a fresh TaskMonitor by default
            on_start: Callback for start event
            on_tick: Callback for tick event (one per phase)
            on_end: Callback for end event
        """
        self._vertices: list[Vertex] = []
        self._edges: list[Edge] = []
        self._successor_lookup: Optional[SuccessorLookup] = successors
        self._successor_cache: dict[Vertex, list[Vertex]] = {}
        self._monitor: TaskMonitor = monitor if monitor is not None else TaskMonitor()
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}

        if vertices is not None:
            self.vertices = vertices
        if edges is not None:
            self.edges = edges

        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def vertices(self) -> list[Vertex]:
        """Get the list of vertices."""
        return self._vertices

    @vertices.setter
    def vertices(self, value: Sequence[VertexLike]) -> None:
        """Set vertices from Vertex objects, dicts, host objects or raw keys."""
        self._vertices = []
        for data in value:
            if isinstance(data, Vertex):
                self._vertices.append(data)
            elif isinstance(data, dict):
                attrs = {k: v for k, v in data.items() if k not in ("key", "address")}
                self._vertices.append(Vertex(vertex_key(data), **attrs))
            elif hasattr(data, "key") or hasattr(data, "address"):
                # Host object - keep a reference so results can be mapped back
                self._vertices.append(
                    Vertex(
                        vertex_key(data),
                        width=getattr(data, "width", None),
                        height=getattr(data, "height", None),
                        host=data,
                    )
                )
            else:
                self._vertices.append(Vertex(data))

    @property
    def edges(self) -> list[Edge]:
        """Get the list of edges."""
        return self._edges

    @edges.setter
    def edges(self, value: Sequence[EdgeLike]) -> None:
        """Set edges from Edge objects, dicts, pairs or host objects."""
        self._edges = []
        for data in value:
            if isinstance(data, Edge):
                self._edges.append(data)
            elif isinstance(data, dict):
                self._edges.append(Edge(**data))
            elif isinstance(data, tuple) and len(data) == 2:
                self._edges.append(Edge(data[0], data[1]))
            else:
                self._edges.append(
                    Edge(
                        getattr(data, "source", None),
                        getattr(data, "target", None),
                        getattr(data, "emphasis", None),
                        host=data,
                    )
                )

    @property
    def monitor(self) -> TaskMonitor:
        """Get the cancellation monitor."""
        return self._monitor

    @monitor.setter
    def monitor(self, value: TaskMonitor) -> None:
        self._monitor = value

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Validate current configuration.

        Checks that vertex keys are unique and that every edge endpoint is
        one of the vertices. Called automatically by run() but can be called
        early for fail-fast behavior.

        Returns:
            self (for chaining)

        Raises:
            InvalidVertexError: If a key is missing or duplicated.
            InvalidEdgeError: If an edge references an unknown vertex.
        """
        validate_vertex_keys(self._vertices, strict=True)
        if self._edges:
            keys = {v.key for v in self._vertices}
            validate_edge_endpoints(self._edges, keys, strict=True)
        return self

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Returns:
            self (for chaining)
        """
        pass

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _resolve_edges(self) -> None:
        """Replace raw-key edge endpoints with the matching Vertex objects."""
        by_key = {v.key: v for v in self._vertices}
        for edge in self._edges:
            edge.source = by_key[vertex_key(edge.source)]
            edge.target = by_key[vertex_key(edge.target)]

    def _build_successors(self) -> None:
        """Index outgoing neighbours in edge order."""
        self._successor_cache = {v: [] for v in self._vertices}
        if self._successor_lookup is None:
            for edge in self._edges:
                self._successor_cache[edge.source].append(edge.target)
            return

        by_key = {v.key: v for v in self._vertices}
        for vertex in self._vertices:
            self._successor_cache[vertex] = [
                by_key[vertex_key(s)] for s in self._successor_lookup(vertex)
            ]

    def _successors(self, vertex: Vertex) -> list[Vertex]:
        """Outgoing neighbours of a vertex, as this layout's Vertex objects."""
        return self._successor_cache.get(vertex, [])


class StaticLayout(BaseLayout):
    """
    Base class for single-pass layout algorithms.

    These layouts compute their result in one pass without iteration.
    """

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Validates input, fires start event, computes layout, fires end event.

        Args:
            **kwargs: Additional arguments passed to _compute()

        Returns:
            self (for chaining)
        """
        self.validate()
        self._resolve_edges()
        self._build_successors()
        self.trigger({"type": EventType.start, "progress": 0.0})

        # Subclasses implement _compute()
        self._compute(**kwargs)

        self.trigger({"type": EventType.end, "progress": 1.0})
        return self

    @abstractmethod
    def _compute(self, **kwargs: Any) -> None:
        """
        Compute the layout.

        Subclasses must implement this to perform the actual layout computation.
        """
        pass


__all__ = [
    "BaseLayout",
    "StaticLayout",
]
