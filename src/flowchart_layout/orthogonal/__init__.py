"""
Orthogonal edge routing on the doubled grid.

Edges are routed through junction points lying on the routing channels
between vertex cells:

- route_all_edges: Junction sequence per edge, with clash-aware descents
- resolve_padding: Per-line shifts separating edges that share a line
- position_edge_articulations: Continuous polylines anchored to vertices
- GridGeometry: Stand-alone centerlines for hosts without their own
"""

from .articulation import position_edge_articulations
from .geometry import GridGeometry, GridLines
from .junctions import (
    BACK_EDGE_EMPHASIS,
    classify_edge,
    detect_edge_clash,
    edge_sort_key,
    route_all_edges,
    route_edge,
    sort_edges,
)
from .padding import (
    OFFSET_JUNCTIONS,
    PADDING_JUNCTIONS,
    PaddingMap,
    resolve_padding,
    stack_levels,
)
from .types import Direction, EdgeRoute, JunctionMap, JunctionPoint, RouteKind

__all__ = [
    # Routing
    "BACK_EDGE_EMPHASIS",
    "classify_edge",
    "detect_edge_clash",
    "edge_sort_key",
    "sort_edges",
    "route_edge",
    "route_all_edges",
    # Padding
    "PADDING_JUNCTIONS",
    "OFFSET_JUNCTIONS",
    "PaddingMap",
    "stack_levels",
    "resolve_padding",
    # Coordinates
    "GridGeometry",
    "GridLines",
    "position_edge_articulations",
    # Types
    "Direction",
    "RouteKind",
    "JunctionPoint",
    "EdgeRoute",
    "JunctionMap",
]
