"""Mapping of routed junctions into continuous layout coordinates."""

from __future__ import annotations

from typing import Mapping, Optional

from ..monitor import TaskMonitor
from ..types import Edge, Point, Vertex
from ..validation import UnplacedVertexError
from .geometry import GridLines
from .padding import PaddingMap
from .types import JunctionMap


def _vertex_y(locations: Mapping[Vertex, Point], vertex: Vertex) -> float:
    try:
        return locations[vertex][1]
    except KeyError:
        raise UnplacedVertexError(f"no layout location supplied for {vertex!r}") from None


def position_edge_articulations(
    junctions: JunctionMap,
    padding: PaddingMap,
    vertex_locations: Mapping[Vertex, Point],
    lines: GridLines,
    monitor: Optional[TaskMonitor] = None,
) -> dict[Edge, list[Point]]:
    """
    Convert every route into a continuous polyline.

    Each junction is placed at the centerlines of its grid column and row,
    shifted by the edge's padding on that vertical and horizontal line. The
    polyline is then anchored to the vertices: it starts at the first
    junction's x on the source's y and ends at the last junction's x on the
    target's y.

    Args:
        junctions: Routed edges
        padding: Per-line shifts for those routes
        vertex_locations: Host-supplied vertex centers
        lines: Host-supplied grid centerlines
        monitor: Cancellation signal, checked before each edge

    Returns:
        Edge -> articulation points, in the edges' processing order

    Raises:
        LayoutCancelledError: If the monitor is cancelled
    """
    articulations: dict[Edge, list[Point]] = {}

    for edge in junctions.edges:
        if monitor is not None:
            monitor.check_cancelled()

        points: list[Point] = []
        for junction in junctions.route(edge):
            x = lines.column_center(junction.x) + padding.x_offset(junction.x, edge)
            y = lines.row_center(junction.y) + padding.y_offset(junction.y, edge)
            points.append((x, y))

        first_x = points[0][0]
        last_x = points[-1][0]
        points.insert(0, (first_x, _vertex_y(vertex_locations, edge.source)))
        points.append((last_x, _vertex_y(vertex_locations, edge.target)))

        articulations[edge] = points
        if monitor is not None:
            monitor.increment_progress()

    return articulations


__all__ = ["position_edge_articulations"]
