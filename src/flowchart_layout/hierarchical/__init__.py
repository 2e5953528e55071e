"""
Discrete row/column placement for control-flow graphs.

- assign_rows: Maximum acyclic depth from the root
- assign_columns: Subtree-score ordering, rows centered against the widest
- Grid: Immutable placement with doubled-grid helpers
"""

from .columns import BACK_EDGE_SCORE, assign_columns, score_vertices
from .grid import (
    Grid,
    LayoutNode,
    bottom_line,
    cell_line,
    left_line,
    right_line,
    top_line,
)
from .rows import RowAssignment, assign_rows

__all__ = [
    "RowAssignment",
    "assign_rows",
    "BACK_EDGE_SCORE",
    "score_vertices",
    "assign_columns",
    "Grid",
    "LayoutNode",
    "cell_line",
    "top_line",
    "bottom_line",
    "left_line",
    "right_line",
]
