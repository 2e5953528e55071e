"""
Continuous geometry for doubled-grid lines.

Hosts that size rows and columns themselves pass their own centerline
lookups to the articulation mapper. GridGeometry is the stand-alone
equivalent: odd lines are vertex cells, even lines are routing channels,
and each line's center is the running sum of the sizes before it plus half
its own size.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

import numpy as np

from ..hierarchical.grid import Grid, cell_line
from ..types import Point, Vertex


class GridLines(Protocol):
    """Anything that can place doubled-grid lines in continuous space."""

    def row_center(self, line: int) -> float: ...

    def column_center(self, line: int) -> float: ...


class _Axis:
    """Line sizes along one axis, extrapolated past the explicit extent."""

    def __init__(self, sizes: Sequence[float], cell: float, channel: float) -> None:
        self.cell = float(cell)
        self.channel = float(channel)
        self.sizes = np.asarray(sizes, dtype=float)
        self.starts = np.concatenate(([0.0], np.cumsum(self.sizes)))

    def default_size(self, line: int) -> float:
        return self.cell if line % 2 else self.channel

    def size(self, line: int) -> float:
        if 0 <= line < len(self.sizes):
            return float(self.sizes[line])
        return self.default_size(line)

    def center(self, line: int) -> float:
        if line < 0:
            raise ValueError(f"grid line must be non-negative, got {line}")
        n = len(self.sizes)
        if line < n:
            start = float(self.starts[line])
        else:
            start = float(self.starts[n]) + sum(self.default_size(i) for i in range(n, line))
        return start + self.size(line) / 2


class GridGeometry:
    """
    Row and column centerlines for the doubled grid.

    Example:
        geometry = GridGeometry.from_grid(layout.grid, cell_width=180)
        locations = geometry.vertex_locations(layout.grid)
    """

    def __init__(
        self,
        column_sizes: Sequence[float] = (),
        row_sizes: Sequence[float] = (),
        *,
        cell_width: float = 200.0,
        cell_height: float = 100.0,
        channel_width: float = 60.0,
        channel_height: float = 60.0,
    ) -> None:
        for name, value in (
            ("cell_width", cell_width),
            ("cell_height", cell_height),
            ("channel_width", channel_width),
            ("channel_height", channel_height),
        ):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        self._columns = _Axis(column_sizes, cell_width, channel_width)
        self._rows = _Axis(row_sizes, cell_height, channel_height)

    @classmethod
    def uniform(
        cls,
        cell_width: float = 200.0,
        cell_height: float = 100.0,
        channel_width: float = 60.0,
        channel_height: float = 60.0,
    ) -> GridGeometry:
        """Geometry where every cell and every channel has the same size."""
        return cls(
            cell_width=cell_width,
            cell_height=cell_height,
            channel_width=channel_width,
            channel_height=channel_height,
        )

    @classmethod
    def from_grid(
        cls,
        grid: Grid,
        cell_width: float = 200.0,
        cell_height: float = 100.0,
        channel_width: float = 60.0,
        channel_height: float = 60.0,
    ) -> GridGeometry:
        """
        Size each cell line by the largest vertex placed on it.

        Vertices without width/height fall back to the cell defaults.
        """
        column_sizes = [
            cell_width if line % 2 else channel_width for line in range(2 * (grid.max_column + 1) + 1)
        ]
        row_sizes = [
            cell_height if line % 2 else channel_height for line in range(2 * grid.num_rows + 1)
        ]
        widest: dict[int, float] = {}
        tallest: dict[int, float] = {}
        for node in grid:
            if node.vertex.width is not None:
                widest[node.column] = max(widest.get(node.column, 0.0), float(node.vertex.width))
            if node.vertex.height is not None:
                tallest[node.row] = max(tallest.get(node.row, 0.0), float(node.vertex.height))
        for column, width in widest.items():
            column_sizes[cell_line(column)] = width
        for row, height in tallest.items():
            row_sizes[cell_line(row)] = height

        return cls(
            column_sizes,
            row_sizes,
            cell_width=cell_width,
            cell_height=cell_height,
            channel_width=channel_width,
            channel_height=channel_height,
        )

    def row_center(self, line: int) -> float:
        return self._rows.center(line)

    def column_center(self, line: int) -> float:
        return self._columns.center(line)

    def vertex_location(self, grid: Grid, vertex: Vertex) -> Point:
        """Centered location of a vertex cell."""
        row, column = grid.grid_location(vertex)
        return (self.column_center(column), self.row_center(row))

    def vertex_locations(self, grid: Grid, vertices: Optional[Sequence[Vertex]] = None) -> dict[Vertex, Point]:
        """Centered locations of all (or the given) placed vertices."""
        targets = [node.vertex for node in grid] if vertices is None else vertices
        return {vertex: self.vertex_location(grid, vertex) for vertex in targets}


__all__ = ["GridLines", "GridGeometry"]
