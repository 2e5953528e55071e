"""Junction routing for layered control-flow charts.

Every edge leaves its source cell through the channel below it and enters
its target cell through the channel above it. In between:

- One-level descents go straight across to the target column.
- Multi-level descents jog down a vertical channel right of every vertex in
  the spanned rows, or along the target's left channel when another edge
  already arrives just below-left of the source (a clash).
- Upward and same-row edges always loop round the target's left channel and
  are marked with a reduced emphasis.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..hierarchical.grid import (
    Grid,
    LayoutNode,
    bottom_line,
    cell_line,
    left_line,
    right_line,
    top_line,
)
from ..monitor import TaskMonitor
from ..types import Edge
from .types import Direction, EdgeRoute, JunctionMap, JunctionPoint, RouteKind

BACK_EDGE_EMPHASIS = 0.2


def _endpoints(grid: Grid, edge: Edge) -> tuple[LayoutNode, LayoutNode]:
    return grid.node(edge.source), grid.node(edge.target)


def edge_sort_key(grid: Grid, edge: Edge) -> tuple[int, int, int, int]:
    """Target row ascending, source row descending, target column, source column."""
    src, dst = _endpoints(grid, edge)
    return (dst.row, -src.row, dst.column, src.column)


def sort_edges(edges: Sequence[Edge], grid: Grid) -> list[Edge]:
    """Order edges deterministically; ties keep their input order."""
    return sorted(edges, key=lambda e: edge_sort_key(grid, e))


def classify_edge(src: LayoutNode, dst: LayoutNode) -> tuple[Direction, Direction]:
    """Return the (horizontal, vertical) direction from ``src`` to ``dst``."""
    if src.column == dst.column:
        horizontal = Direction.STILL
    elif src.column < dst.column:
        horizontal = Direction.RIGHT
    else:
        horizontal = Direction.LEFT

    if src.row == dst.row:
        vertical = Direction.STILL
    elif src.row > dst.row:
        vertical = Direction.UP
    else:
        vertical = Direction.DOWN

    return horizontal, vertical


def detect_edge_clash(edges: Sequence[Edge], edge: Edge, grid: Grid) -> bool:
    """Check whether another edge lands just below-left of ``edge``'s source.

    An edge F clashes with E when F starts in an earlier row than E (or in
    the same row further right) and ends one row below E's source at a
    column no greater than E's source column.
    """
    src = grid.node(edge.source)

    for other in edges:
        other_src, other_dst = _endpoints(grid, other)
        starts_before = other_src.row < src.row or (
            other_src.row == src.row and other_src.column > src.column
        )
        if starts_before and other_dst.row == src.row + 1 and other_dst.column <= src.column:
            return True
    return False


def route_edge(
    edge: Edge,
    edges: Sequence[Edge],
    grid: Grid,
    back_edge_emphasis: float = BACK_EDGE_EMPHASIS,
) -> EdgeRoute:
    """
    Compute the junction sequence of one edge.

    Args:
        edge: Edge to route
        edges: All edges of the graph, for clash detection
        grid: Vertex placement
        back_edge_emphasis: Emphasis carried by upward/same-row routes

    Returns:
        EdgeRoute for the edge
    """
    src, dst = _endpoints(grid, edge)
    horizontal, vertical = classify_edge(src, dst)

    start = JunctionPoint(cell_line(src.column), bottom_line(src.row))
    end = JunctionPoint(cell_line(dst.column), top_line(dst.row))

    if vertical is Direction.DOWN:
        if dst.row - src.row > 1:
            if detect_edge_clash(edges, edge, grid):
                kind = RouteKind.LEFT_JOG
                x = left_line(dst.column)
            else:
                kind = RouteKind.RIGHT_JOG
                x = right_line(grid.max_column_in_rows(src.row, dst.row))
            points = (
                start,
                JunctionPoint(x, bottom_line(src.row)),
                JunctionPoint(x, top_line(dst.row)),
                end,
            )
        else:
            kind = RouteKind.DIRECT
            points = (start, end)
        emphasis: Optional[float] = None
    else:
        kind = RouteKind.BACK
        x = left_line(dst.column)
        points = (
            start,
            JunctionPoint(x, bottom_line(src.row)),
            JunctionPoint(x, top_line(dst.row)),
            end,
        )
        emphasis = back_edge_emphasis

    return EdgeRoute(
        edge=edge,
        points=points,
        kind=kind,
        horizontal=horizontal,
        vertical=vertical,
        emphasis=emphasis,
    )


def route_all_edges(
    edges: Sequence[Edge],
    grid: Grid,
    monitor: Optional[TaskMonitor] = None,
    back_edge_emphasis: float = BACK_EDGE_EMPHASIS,
) -> JunctionMap:
    """Route every edge and index the resulting junction points.

    Edges are processed in edge_sort_key order, which also fixes the order
    of edges in the reverse point index.

    Raises:
        UnplacedVertexError: If an edge touches a vertex with no grid cell.
        LayoutCancelledError: If the monitor is cancelled between edges.
    """
    ordered = sort_edges(edges, grid)
    routes: dict[Edge, EdgeRoute] = {}
    reverse: dict[JunctionPoint, list[Edge]] = {}

    for edge in ordered:
        if monitor is not None:
            monitor.check_cancelled()
        route = route_edge(edge, ordered, grid, back_edge_emphasis)
        routes[edge] = route
        for point in route.points:
            touching = reverse.setdefault(point, [])
            # Straight descents start and end on the same point.
            if not touching or touching[-1] is not edge:
                touching.append(edge)

    return JunctionMap(
        edges=tuple(ordered),
        routes=routes,
        reverse={point: tuple(touching) for point, touching in reverse.items()},
    )


__all__ = [
    "BACK_EDGE_EMPHASIS",
    "edge_sort_key",
    "sort_edges",
    "classify_edge",
    "detect_edge_clash",
    "route_edge",
    "route_all_edges",
]
