"""
Orthogonal layered layout for control-flow graphs.

The layout runs four phases on a snapshot of the graph:
1. Row assignment (maximum acyclic depth from the lowest-keyed vertex)
2. Column assignment (subtree score ordering, rows centered)
3. Junction routing (orthogonal turn points on the doubled grid)
4. Junction padding (separating edges that share a grid line)

The host then places vertices (or lets GridGeometry do it) and asks for
continuous edge articulations, the only phase that must honour cancellation.
"""

from __future__ import annotations

import warnings
from typing import Any, Callable, Mapping, Optional, Sequence

from .base import StaticLayout
from .hierarchical.columns import assign_columns
from .hierarchical.grid import Grid
from .hierarchical.rows import assign_rows
from .monitor import TaskMonitor
from .orthogonal.articulation import position_edge_articulations
from .orthogonal.geometry import GridGeometry, GridLines
from .orthogonal.junctions import BACK_EDGE_EMPHASIS, route_all_edges
from .orthogonal.padding import OFFSET_JUNCTIONS, PADDING_JUNCTIONS, PaddingMap, resolve_padding
from .orthogonal.types import JunctionMap, JunctionPoint
from .types import (
    Edge,
    EdgeLike,
    Event,
    EventType,
    Point,
    SuccessorLookup,
    Vertex,
    VertexLike,
)
from .validation import GraphStructureWarning, validate_spacing

_PHASES = ("rows", "columns", "junctions", "padding")


class ControlFlowLayout(StaticLayout):
    """
    Layered orthogonal layout for control-flow charts.

    Example:
        layout = ControlFlowLayout(
            vertices=[0x100, 0x110, 0x120, 0x130],
            edges=[(0x100, 0x110), (0x100, 0x120), (0x110, 0x130), (0x120, 0x130)],
        )
        layout.run()
        cells = layout.grid_locations()
        paths = layout.position_edge_articulations()
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
        # ControlFlowLayout-specific parameters
        padding_junctions: float = PADDING_JUNCTIONS,
        offset_junctions: float = OFFSET_JUNCTIONS,
        back_edge_emphasis: float = BACK_EDGE_EMPHASIS,
    ) -> None:
        """
        Initialize control-flow layout.

        Args:
            vertices: Graph vertices
            edges: Directed edges
            successors: Optional outgoing-neighbour lookup
            monitor: Cancellation signal
            on_start: Callback for start event
            on_tick: Callback fired after each phase
            on_end: Callback for end event
            padding_junctions: Base shift subtracted from every padding level
            offset_junctions: Distance between padding levels
            back_edge_emphasis: Emphasis given to upward and same-row edges
        """
        super().__init__(
            vertices=vertices,
            edges=edges,
            successors=successors,
            monitor=monitor,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )

        self._padding_junctions, self._offset_junctions = validate_spacing(
            padding_junctions, offset_junctions
        )
        self._back_edge_emphasis: float = float(back_edge_emphasis)

        # Per-run state, rebuilt by every run()
        self._root: Optional[Vertex] = None
        self._grid: Grid = Grid()
        self._junctions: JunctionMap = JunctionMap()
        self._padding: PaddingMap = PaddingMap()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def padding_junctions(self) -> float:
        """Get the base shift subtracted from every padding level."""
        return self._padding_junctions

    @padding_junctions.setter
    def padding_junctions(self, value: float) -> None:
        self._padding_junctions, _ = validate_spacing(value, self._offset_junctions)

    @property
    def offset_junctions(self) -> float:
        """Get the distance between padding levels."""
        return self._offset_junctions

    @offset_junctions.setter
    def offset_junctions(self, value: float) -> None:
        _, self._offset_junctions = validate_spacing(self._padding_junctions, value)

    @property
    def back_edge_emphasis(self) -> float:
        """Get the emphasis given to upward and same-row edges."""
        return self._back_edge_emphasis

    @back_edge_emphasis.setter
    def back_edge_emphasis(self, value: float) -> None:
        self._back_edge_emphasis = float(value)

    @property
    def root(self) -> Optional[Vertex]:
        """Vertex with the smallest key, or None before run()/for empty graphs."""
        return self._root

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def junctions(self) -> JunctionMap:
        return self._junctions

    @property
    def padding(self) -> PaddingMap:
        return self._padding

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _reset(self) -> None:
        self._root = None
        self._grid = Grid()
        self._junctions = JunctionMap()
        self._padding = PaddingMap()

    def _phase_done(self, index: int) -> None:
        self.trigger(
            {
                "type": EventType.tick,
                "phase": _PHASES[index],
                "progress": (index + 1) / len(_PHASES),
            }
        )

    def _compute(self, **kwargs: Any) -> None:
        """Compute grid, routes and padding."""
        self._reset()
        if not self._vertices:
            return

        monitor = self._monitor
        root = min(self._vertices)

        monitor.set_message("assigning rows")
        monitor.check_cancelled()
        rows = assign_rows(root, self._successors)
        self._phase_done(0)

        monitor.set_message("assigning columns")
        monitor.check_cancelled()
        grid = assign_columns(rows, self._successors)
        self._phase_done(1)

        unplaced = [v for v in self._vertices if v not in grid]
        if unplaced:
            warnings.warn(
                f"Found {len(unplaced)} vertex(es) unreachable from root {root!r}. "
                "These will not be placed.",
                GraphStructureWarning,
                stacklevel=3,
            )

        monitor.set_message("routing edges")
        junctions = route_all_edges(self._edges, grid, monitor, self._back_edge_emphasis)
        self._phase_done(2)

        monitor.set_message("padding junctions")
        padding = resolve_padding(
            junctions, self._padding_junctions, self._offset_junctions, monitor
        )
        self._phase_done(3)

        # Only publish once every phase has succeeded
        self._root, self._grid, self._junctions, self._padding = root, grid, junctions, padding
        for route in junctions.routes.values():
            if route.emphasis is not None:
                _apply_emphasis(route.edge, route.emphasis)

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def grid_locations(self) -> dict[Vertex, tuple[int, int]]:
        """Doubled-grid (row, column) of every placed vertex."""
        return {node.vertex: self._grid.grid_location(node.vertex) for node in self._grid}

    def articulations(self) -> dict[Edge, list[JunctionPoint]]:
        """Discrete junction points of every edge, in processing order."""
        return {edge: list(self._junctions.route(edge).points) for edge in self._junctions.edges}

    def vertex_locations(self, geometry: Optional[GridGeometry] = None) -> dict[Vertex, Point]:
        """Centered continuous locations of the placed vertices."""
        geometry = geometry if geometry is not None else GridGeometry.from_grid(self._grid)
        return geometry.vertex_locations(self._grid)

    def position_edge_articulations(
        self,
        vertex_locations: Optional[Mapping[Vertex, Point]] = None,
        geometry: Optional[GridLines] = None,
    ) -> dict[Edge, list[Point]]:
        """
        Continuous polylines for every edge.

        Args:
            vertex_locations: Host vertex centers; derived from geometry if omitted
            geometry: Host grid centerlines; GridGeometry.from_grid if omitted

        Returns:
            Edge -> articulation points

        Raises:
            LayoutCancelledError: If the monitor is cancelled mid-way
        """
        if geometry is None:
            geometry = GridGeometry.from_grid(self._grid)
        if vertex_locations is None:
            if not isinstance(geometry, GridGeometry):
                raise ValueError("vertex_locations are required with a custom geometry")
            vertex_locations = geometry.vertex_locations(self._grid)

        self._monitor.set_message("positioning edge articulations")
        self._monitor.initialize(len(self._junctions))
        return position_edge_articulations(
            self._junctions, self._padding, vertex_locations, geometry, self._monitor
        )


def _apply_emphasis(edge: Edge, emphasis: float) -> None:
    """Set emphasis on the edge and on the host object it wraps, if any."""
    edge.emphasis = emphasis
    host = getattr(edge, "host", None)
    if host is None:
        return
    if callable(getattr(host, "set_emphasis", None)):
        host.set_emphasis(emphasis)
    else:
        host.emphasis = emphasis


__all__ = ["ControlFlowLayout"]
