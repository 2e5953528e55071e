"""Tests for continuous grid geometry."""

from __future__ import annotations

import pytest

from flowchart_layout.hierarchical.grid import Grid, LayoutNode
from flowchart_layout.orthogonal.geometry import GridGeometry
from flowchart_layout.types import Vertex


class TestUniformGeometry:
    def test_column_centers(self) -> None:
        geometry = GridGeometry.uniform()
        centers = [geometry.column_center(i) for i in range(4)]
        assert centers == pytest.approx([30.0, 160.0, 290.0, 420.0])

    def test_row_centers(self) -> None:
        geometry = GridGeometry.uniform()
        centers = [geometry.row_center(i) for i in range(6)]
        assert centers == pytest.approx([30.0, 110.0, 190.0, 270.0, 350.0, 430.0])

    def test_custom_sizes(self) -> None:
        geometry = GridGeometry.uniform(cell_width=100, channel_width=20)
        assert geometry.column_center(1) == pytest.approx(70.0)
        assert geometry.column_center(2) == pytest.approx(130.0)

    def test_negative_line_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            GridGeometry.uniform().row_center(-1)

    def test_non_positive_size_raises(self) -> None:
        with pytest.raises(ValueError, match="cell_width must be positive"):
            GridGeometry.uniform(cell_width=0)


class TestGeometryFromGrid:
    @staticmethod
    def _grid() -> Grid:
        return Grid(
            [
                LayoutNode(Vertex(1, width=300), 0, 0),
                LayoutNode(Vertex(2), 0, 1),
                LayoutNode(Vertex(3, height=40), 1, 0),
            ]
        )

    def test_widest_vertex_sizes_column(self) -> None:
        geometry = GridGeometry.from_grid(self._grid())
        assert geometry.column_center(1) == pytest.approx(210.0)
        assert geometry.column_center(2) == pytest.approx(390.0)
        assert geometry.column_center(3) == pytest.approx(520.0)

    def test_tallest_vertex_sizes_row(self) -> None:
        geometry = GridGeometry.from_grid(self._grid())
        assert geometry.row_center(3) == pytest.approx(240.0)
        assert geometry.row_center(4) == pytest.approx(290.0)

    def test_extrapolates_past_extent(self) -> None:
        geometry = GridGeometry.from_grid(self._grid())
        assert geometry.column_center(5) == pytest.approx(780.0)

    def test_vertex_locations_are_cell_centers(self) -> None:
        grid = self._grid()
        locations = GridGeometry.from_grid(grid).vertex_locations(grid)
        assert locations[Vertex(1)] == pytest.approx((210.0, 110.0))
        assert locations[Vertex(3)] == pytest.approx((210.0, 240.0))
        assert len(locations) == 3

    def test_empty_grid(self) -> None:
        grid = Grid()
        geometry = GridGeometry.from_grid(grid)
        assert geometry.vertex_locations(grid) == {}
        assert geometry.column_center(1) == pytest.approx(160.0)
