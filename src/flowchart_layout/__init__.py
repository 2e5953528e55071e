"""
flowchart-layout: Orthogonal layered layout for control-flow graphs.

This package assigns each basic block of a control-flow graph a grid cell,
routes every edge through orthogonal junction points, and separates edges
that share a routing channel.

Modules:
- hierarchical: Row and column assignment
- orthogonal: Junction routing, padding and coordinate mapping
- flowchart: ControlFlowLayout, tying the phases together
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    StaticLayout,
)

# Control-flow layout
from .flowchart import ControlFlowLayout

# Hierarchical placement
from .hierarchical import (
    Grid,
    LayoutNode,
    RowAssignment,
    assign_columns,
    assign_rows,
)

# Cancellation
from .monitor import TaskMonitor

# Orthogonal routing
from .orthogonal import (
    Direction,
    EdgeRoute,
    GridGeometry,
    JunctionMap,
    JunctionPoint,
    PaddingMap,
    RouteKind,
    position_edge_articulations,
    resolve_padding,
    route_all_edges,
)
from .types import (
    Edge,
    EdgeLike,
    Event,
    EventType,
    Point,
    Vertex,
    VertexLike,
)

# Validation utilities
from .validation import (
    GraphStructureWarning,
    InvalidEdgeError,
    InvalidSpacingError,
    InvalidVertexError,
    LayoutCancelledError,
    LayoutInvariantError,
    UnplacedVertexError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Vertex",
    "Edge",
    "EventType",
    "Event",
    "Point",
    "VertexLike",
    "EdgeLike",
    # Base classes
    "BaseLayout",
    "StaticLayout",
    # Layouts
    "ControlFlowLayout",
    # Hierarchical
    "RowAssignment",
    "assign_rows",
    "assign_columns",
    "Grid",
    "LayoutNode",
    # Orthogonal
    "route_all_edges",
    "resolve_padding",
    "position_edge_articulations",
    "GridGeometry",
    "Direction",
    "RouteKind",
    "JunctionPoint",
    "EdgeRoute",
    "JunctionMap",
    "PaddingMap",
    # Monitor
    "TaskMonitor",
    # Errors
    "ValidationError",
    "InvalidVertexError",
    "InvalidEdgeError",
    "InvalidSpacingError",
    "LayoutInvariantError",
    "UnplacedVertexError",
    "LayoutCancelledError",
    "GraphStructureWarning",
]
