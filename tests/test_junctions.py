"""Tests for junction routing."""

from __future__ import annotations

import pytest

from flowchart_layout.hierarchical.grid import Grid, LayoutNode
from flowchart_layout.monitor import TaskMonitor
from flowchart_layout.orthogonal.junctions import (
    BACK_EDGE_EMPHASIS,
    classify_edge,
    detect_edge_clash,
    route_all_edges,
    route_edge,
    sort_edges,
)
from flowchart_layout.orthogonal.types import Direction, JunctionPoint, RouteKind
from flowchart_layout.types import Edge, Vertex
from flowchart_layout.validation import LayoutCancelledError, UnplacedVertexError


def _setup(cells: dict[str, tuple[int, int]]):
    vertices = {name: Vertex(name) for name in cells}
    grid = Grid(LayoutNode(vertices[n], row, col) for n, (row, col) in cells.items())
    return vertices, grid


def _edge(vertices: dict[str, Vertex], pair: str) -> Edge:
    return Edge(vertices[pair[0]], vertices[pair[1]])


def _pts(*pairs: tuple[int, int]) -> tuple[JunctionPoint, ...]:
    return tuple(JunctionPoint(x, y) for x, y in pairs)


# ---------------------------------------------------------------------------
# classify_edge
# ---------------------------------------------------------------------------


class TestClassifyEdge:
    @pytest.mark.parametrize(
        "src,dst,expected",
        [
            ((0, 0), (1, 0), (Direction.STILL, Direction.DOWN)),
            ((0, 0), (2, 1), (Direction.RIGHT, Direction.DOWN)),
            ((2, 1), (0, 0), (Direction.LEFT, Direction.UP)),
            ((1, 0), (1, 1), (Direction.RIGHT, Direction.STILL)),
            ((1, 1), (1, 1), (Direction.STILL, Direction.STILL)),
        ],
    )
    def test_directions(self, src, dst, expected) -> None:
        a = LayoutNode(Vertex("a"), *src)
        b = LayoutNode(Vertex("b"), *dst)
        assert classify_edge(a, b) == expected

    def test_opposite(self) -> None:
        assert Direction.UP.opposite() is Direction.DOWN
        assert Direction.LEFT.opposite() is Direction.RIGHT
        assert Direction.STILL.opposite() is Direction.STILL


# ---------------------------------------------------------------------------
# sort_edges
# ---------------------------------------------------------------------------


class TestSortEdges:
    def test_diamond_order(self) -> None:
        v, grid = _setup({"A": (0, 0), "B": (1, 0), "C": (1, 1), "D": (2, 0)})
        cd, bd, ac, ab = (_edge(v, p) for p in ("CD", "BD", "AC", "AB"))
        assert sort_edges([cd, bd, ac, ab], grid) == [ab, ac, bd, cd]

    def test_deeper_source_first_for_same_target_row(self) -> None:
        v, grid = _setup({"A": (0, 0), "B": (1, 1), "C": (2, 0)})
        ac, bc = _edge(v, "AC"), _edge(v, "BC")
        assert sort_edges([ac, bc], grid) == [bc, ac]

    def test_ties_keep_input_order(self) -> None:
        v, grid = _setup({"A": (0, 0), "B": (1, 0)})
        first, second = _edge(v, "AB"), _edge(v, "AB")
        assert sort_edges([first, second], grid) == [first, second]
        assert sort_edges([second, first], grid) == [second, first]


# ---------------------------------------------------------------------------
# detect_edge_clash
# ---------------------------------------------------------------------------


class TestDetectEdgeClash:
    CELLS = {"P": (1, 1), "Q": (3, 0), "R": (0, 0), "T": (2, 0), "S": (1, 2), "U": (2, 1), "W": (2, 2)}

    def test_earlier_row_landing_below_left_clashes(self) -> None:
        v, grid = _setup(self.CELLS)
        pq, rt = _edge(v, "PQ"), _edge(v, "RT")
        assert detect_edge_clash([pq, rt], pq, grid)

    def test_same_row_later_column_clashes(self) -> None:
        v, grid = _setup(self.CELLS)
        pq, su = _edge(v, "PQ"), _edge(v, "SU")
        assert detect_edge_clash([pq, su], pq, grid)

    def test_landing_right_of_source_does_not_clash(self) -> None:
        v, grid = _setup(self.CELLS)
        pq, sw = _edge(v, "PQ"), _edge(v, "SW")
        assert not detect_edge_clash([pq, sw], pq, grid)

    def test_edge_never_clashes_with_itself(self) -> None:
        v, grid = _setup(self.CELLS)
        pq = _edge(v, "PQ")
        assert not detect_edge_clash([pq], pq, grid)

    def test_later_row_source_does_not_clash(self) -> None:
        v, grid = _setup({**self.CELLS, "X": (2, 3)})
        pq, xt = _edge(v, "PQ"), _edge(v, "XT")
        # X starts below P, so its edge is not considered
        assert not detect_edge_clash([pq, xt], pq, grid)


# ---------------------------------------------------------------------------
# route_edge
# ---------------------------------------------------------------------------


class TestRouteEdge:
    def test_single_level_descent(self) -> None:
        v, grid = _setup({"A": (0, 0), "C": (1, 1)})
        ac = _edge(v, "AC")
        route = route_edge(ac, [ac], grid)
        assert route.kind is RouteKind.DIRECT
        assert route.points == _pts((1, 2), (3, 2))
        assert route.emphasis is None

    def test_straight_descent_repeats_point(self) -> None:
        v, grid = _setup({"A": (0, 0), "B": (1, 0)})
        ab = _edge(v, "AB")
        assert route_edge(ab, [ab], grid).points == _pts((1, 2), (1, 2))

    def test_multi_level_descent_goes_right_of_band(self) -> None:
        v, grid = _setup(TestDetectEdgeClash.CELLS)
        pq = _edge(v, "PQ")
        route = route_edge(pq, [pq], grid)
        # widest column in rows 1..3 is 2 -> right channel 6
        assert route.kind is RouteKind.RIGHT_JOG
        assert route.points == _pts((3, 4), (6, 4), (6, 6), (1, 6))

    def test_multi_level_descent_with_clash_goes_left(self) -> None:
        v, grid = _setup(TestDetectEdgeClash.CELLS)
        pq, rt = _edge(v, "PQ"), _edge(v, "RT")
        route = route_edge(pq, [pq, rt], grid)
        assert route.kind is RouteKind.LEFT_JOG
        # mid-route x is the target's left channel
        assert route.points == _pts((3, 4), (0, 4), (0, 6), (1, 6))

    def test_upward_edge_loops_left(self) -> None:
        v, grid = _setup({"Y": (0, 0), "X": (2, 1)})
        xy = _edge(v, "XY")
        route = route_edge(xy, [xy], grid)
        assert route.kind is RouteKind.BACK
        assert route.is_back_edge
        assert (route.horizontal, route.vertical) == (Direction.LEFT, Direction.UP)
        assert route.points == _pts((3, 6), (0, 6), (0, 0), (1, 0))
        assert route.emphasis == BACK_EDGE_EMPHASIS

    def test_upward_edge_ignores_clash(self) -> None:
        cells = {"Y": (0, 0), "X": (2, 1), "R": (1, 2), "Z": (3, 0)}
        v, grid = _setup(cells)
        xy, rz = _edge(v, "XY"), _edge(v, "RZ")
        assert route_edge(xy, [xy, rz], grid).points == _pts((3, 6), (0, 6), (0, 0), (1, 0))

    def test_same_row_edge_is_back_edge(self) -> None:
        v, grid = _setup({"A": (1, 0), "B": (1, 1)})
        ab = _edge(v, "AB")
        route = route_edge(ab, [ab], grid)
        assert route.kind is RouteKind.BACK
        assert route.points == _pts((1, 4), (2, 4), (2, 2), (3, 2))
        assert route.emphasis == BACK_EDGE_EMPHASIS

    def test_self_loop(self) -> None:
        v, grid = _setup({"X": (1, 0)})
        xx = _edge(v, "XX")
        route = route_edge(xx, [xx], grid)
        assert route.kind is RouteKind.BACK
        assert route.points == _pts((1, 4), (0, 4), (0, 2), (1, 2))

    def test_custom_emphasis(self) -> None:
        v, grid = _setup({"Y": (0, 0), "X": (1, 0)})
        xy = _edge(v, "XY")
        assert route_edge(xy, [xy], grid, back_edge_emphasis=0.5).emphasis == 0.5

    def test_route_does_not_touch_edge(self) -> None:
        v, grid = _setup({"Y": (0, 0), "X": (1, 0)})
        xy = _edge(v, "XY")
        route_edge(xy, [xy], grid)
        assert xy.emphasis is None

    def test_endpoints_adjacent_to_cells(self) -> None:
        v, grid = _setup(TestDetectEdgeClash.CELLS)
        edges = [_edge(v, p) for p in ("PQ", "RT", "SU", "SW", "QR", "TP")]
        for edge in edges:
            route = route_edge(edge, edges, grid)
            src_row, src_col = grid.grid_location(edge.source)
            dst_row, dst_col = grid.grid_location(edge.target)
            assert route.points[0] == (src_col, src_row + 1)
            assert route.points[-1] == (dst_col, dst_row - 1)

    def test_unplaced_endpoint_raises(self) -> None:
        v, grid = _setup({"A": (0, 0)})
        edge = Edge(v["A"], Vertex("missing"))
        with pytest.raises(UnplacedVertexError):
            route_edge(edge, [edge], grid)


# ---------------------------------------------------------------------------
# route_all_edges
# ---------------------------------------------------------------------------


class TestRouteAllEdges:
    def test_empty(self) -> None:
        junctions = route_all_edges([], Grid())
        assert len(junctions) == 0
        assert junctions.reverse == {}

    def test_reverse_index(self) -> None:
        v, grid = _setup({"A": (0, 0), "B": (1, 0), "C": (1, 1), "D": (2, 0)})
        ab, ac, bd, cd = (_edge(v, p) for p in ("AB", "AC", "BD", "CD"))
        junctions = route_all_edges([cd, bd, ac, ab], grid)

        assert junctions.edges == (ab, ac, bd, cd)
        assert junctions.edges_at(JunctionPoint(1, 2)) == (ab, ac)
        assert junctions.edges_at(JunctionPoint(3, 2)) == (ac,)
        assert junctions.edges_at(JunctionPoint(1, 4)) == (bd, cd)
        assert junctions.edges_at(JunctionPoint(3, 4)) == (cd,)
        assert junctions.edges_at(JunctionPoint(9, 9)) == ()

    def test_every_point_indexed(self) -> None:
        v, grid = _setup(TestDetectEdgeClash.CELLS)
        edges = [_edge(v, p) for p in ("PQ", "RT", "SU", "QR", "TP")]
        junctions = route_all_edges(edges, grid)
        for edge in edges:
            for point in junctions.route(edge):
                assert edge in junctions.edges_at(point)

    def test_cancellation_between_edges(self) -> None:
        v, grid = _setup({"A": (0, 0), "B": (1, 0)})
        monitor = TaskMonitor()
        monitor.cancel()
        with pytest.raises(LayoutCancelledError):
            route_all_edges([_edge(v, "AB")], grid, monitor)
