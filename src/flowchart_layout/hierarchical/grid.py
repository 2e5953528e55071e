"""
Discrete row/column grid produced by the hierarchical phases.

Vertices occupy cells on a doubled grid: a vertex at (row, column) sits on
grid row 2*row+1 and grid column 2*column+1, while the even lines between
them are routing channels used by edge junctions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np

from ..types import Vertex
from ..validation import LayoutInvariantError, UnplacedVertexError


@dataclass(frozen=True)
class LayoutNode:
    """Placement of one vertex on the grid."""

    vertex: Vertex
    row: int
    column: int


def cell_line(index: int) -> int:
    """Doubled-grid line through the center of row/column ``index``."""
    return 2 * index + 1


def top_line(row: int) -> int:
    """Channel line just above ``row``."""
    return 2 * row


def bottom_line(row: int) -> int:
    """Channel line just below ``row``."""
    return 2 * row + 2


def left_line(column: int) -> int:
    """Channel line just left of ``column``."""
    return 2 * column


def right_line(column: int) -> int:
    """Channel line just right of ``column``."""
    return 2 * column + 2


class Grid:
    """
    Immutable vertex-to-cell assignment.

    Built once after column assignment. Besides lookups, it answers
    "widest column used by any row in [lo, hi]" in O(1) through a sparse
    table of per-row maxima, which the junction router queries per edge.

    Raises:
        LayoutInvariantError: If two nodes share a cell or a vertex repeats.
    """

    def __init__(self, nodes: Iterable[LayoutNode] = ()) -> None:
        self._nodes: dict[Vertex, LayoutNode] = {}
        cells: dict[tuple[int, int], Vertex] = {}

        for node in nodes:
            if node.vertex in self._nodes:
                raise LayoutInvariantError(f"{node.vertex!r} placed twice")
            cell = (node.row, node.column)
            if cell in cells:
                raise LayoutInvariantError(
                    f"{node.vertex!r} and {cells[cell]!r} share cell {cell}"
                )
            cells[cell] = node.vertex
            self._nodes[node.vertex] = node

        rows: dict[int, list[LayoutNode]] = {}
        for node in self._nodes.values():
            rows.setdefault(node.row, []).append(node)
        self._rows: dict[int, tuple[LayoutNode, ...]] = {
            row: tuple(sorted(bucket, key=lambda n: n.column)) for row, bucket in sorted(rows.items())
        }

        self._num_rows = max(self._rows) + 1 if self._rows else 0
        self._max_column = max((n.column for n in self._nodes.values()), default=-1)
        self._sparse = self._build_sparse_table()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def num_rows(self) -> int:
        """Number of rows, including rows left empty by migration."""
        return self._num_rows

    @property
    def max_column(self) -> int:
        """Largest column index in use, or -1 for an empty grid."""
        return self._max_column

    @property
    def rows(self) -> dict[int, tuple[LayoutNode, ...]]:
        """Non-empty rows, each ordered by column."""
        return dict(self._rows)

    @property
    def nodes(self) -> list[LayoutNode]:
        return list(self._nodes.values())

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def node(self, vertex: Vertex) -> LayoutNode:
        """
        Get the placement of a vertex.

        Raises:
            UnplacedVertexError: If the vertex was not reachable from the root.
        """
        try:
            return self._nodes[vertex]
        except KeyError:
            raise UnplacedVertexError(f"{vertex!r} has no grid cell") from None

    def grid_location(self, vertex: Vertex) -> tuple[int, int]:
        """Doubled-grid (row, column) of the vertex cell."""
        node = self.node(vertex)
        return cell_line(node.row), cell_line(node.column)

    def max_column_in_rows(self, row_min: int, row_max: int) -> int:
        """
        Largest column used by any vertex in rows ``row_min..row_max``.

        Rows outside the grid and empty rows count as column 0.
        """
        lo = max(0, row_min)
        hi = min(self._num_rows - 1, row_max)
        if lo > hi:
            return 0
        level = (hi - lo + 1).bit_length() - 1
        table = self._sparse[level]
        return int(max(table[lo], table[hi - (1 << level) + 1]))

    def _build_sparse_table(self) -> list[np.ndarray]:
        row_max = np.zeros(self._num_rows, dtype=np.int64)
        for row, bucket in self._rows.items():
            row_max[row] = max(0, bucket[-1].column)

        table = [row_max]
        width = 1
        while 2 * width <= self._num_rows:
            prev = table[-1]
            table.append(np.maximum(prev[:-width], prev[width:]))
            width *= 2
        return table

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._nodes

    def __iter__(self) -> Iterator[LayoutNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"Grid(vertices={len(self)}, rows={self._num_rows}, columns={self._max_column + 1})"


__all__ = [
    "LayoutNode",
    "Grid",
    "cell_line",
    "top_line",
    "bottom_line",
    "left_line",
    "right_line",
]
