"""
Junction padding for edges sharing a grid line.

Edges whose junctions lie on the same vertical line (same x) or horizontal
line (same y) would be drawn on top of each other. Each such line is
resolved independently: every edge occupies the span between its extreme
points on the line, and spans are stacked greedily so that overlapping
spans get distinct levels while disjoint spans may reuse a level. A level
becomes a continuous shift of ``-padding + level * offset``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from ..monitor import TaskMonitor
from ..types import Edge
from .types import JunctionMap

PADDING_JUNCTIONS = 30.0
OFFSET_JUNCTIONS = 10.0


@dataclass(frozen=True)
class PaddingMap:
    """
    Per-line, per-edge shifts.

    Attributes:
        x_offsets: (vertical line x, edge) -> shift applied to x
        y_offsets: (horizontal line y, edge) -> shift applied to y
    """

    x_offsets: dict[tuple[int, Edge], float] = field(default_factory=dict)
    y_offsets: dict[tuple[int, Edge], float] = field(default_factory=dict)

    def x_offset(self, x: int, edge: Edge) -> float:
        return self.x_offsets[(x, edge)]

    def y_offset(self, y: int, edge: Edge) -> float:
        return self.y_offsets[(y, edge)]


def stack_levels(spans: Sequence[tuple[int, int]]) -> list[int]:
    """
    Assign stacking levels to inclusive integer spans, in order.

    Each span takes one more than the highest level currently covering any
    of its positions, then raises all of its positions to that level.

    Example:
        >>> stack_levels([(0, 4), (2, 6), (8, 9)])
        [1, 2, 1]
    """
    if not spans:
        return []
    heights = np.zeros(max(hi for _, hi in spans) + 1, dtype=np.int64)
    levels: list[int] = []
    for lo, hi in spans:
        level = int(heights[lo : hi + 1].max()) + 1
        heights[lo : hi + 1] = level
        levels.append(level)
    return levels


def _resolve_lines(
    junctions: JunctionMap,
    vertical: bool,
    padding: float,
    offset: float,
    monitor: Optional[TaskMonitor],
) -> dict[tuple[int, Edge], float]:
    order = {edge: i for i, edge in enumerate(junctions.edges)}
    lines: dict[int, set[Edge]] = {}
    for point, edges in junctions.reverse.items():
        lines.setdefault(point.x if vertical else point.y, set()).update(edges)

    offsets: dict[tuple[int, Edge], float] = {}
    for line in sorted(lines):
        if monitor is not None:
            monitor.check_cancelled()
        edges = sorted(lines[line], key=order.__getitem__)
        spans = [
            junctions.route(e).span_on_x(line) if vertical else junctions.route(e).span_on_y(line)
            for e in edges
        ]
        for edge, level in zip(edges, stack_levels(spans)):
            offsets[(line, edge)] = -padding + level * offset
    return offsets


def resolve_padding(
    junctions: JunctionMap,
    padding: float = PADDING_JUNCTIONS,
    offset: float = OFFSET_JUNCTIONS,
    monitor: Optional[TaskMonitor] = None,
) -> PaddingMap:
    """
    Compute shifts for every (line, edge) pair touched by a junction.

    Args:
        junctions: Routed edges with reverse point index
        padding: Base shift subtracted from every level
        offset: Distance between consecutive levels
        monitor: Optional cancellation signal, checked per line

    Returns:
        PaddingMap covering every junction point of every edge
    """
    return PaddingMap(
        x_offsets=_resolve_lines(junctions, True, padding, offset, monitor),
        y_offsets=_resolve_lines(junctions, False, padding, offset, monitor),
    )


__all__ = [
    "PADDING_JUNCTIONS",
    "OFFSET_JUNCTIONS",
    "PaddingMap",
    "stack_levels",
    "resolve_padding",
]
