"""
Column assignment by subtree score.

Each vertex gets a score from a post-order walk: roughly its visit position
plus the size of the subtree discovered beneath it. Within a row, vertices
are ordered by ascending score and the row is centered against the widest
row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from ..types import SuccessorLookup, Vertex
from .grid import Grid, LayoutNode
from .rows import RowAssignment

# Contribution of an edge back into the active path.
BACK_EDGE_SCORE = -1000


@dataclass
class _ScoreFrame:
    vertex: Vertex
    path: frozenset[Vertex]
    score: int
    children: Iterator[Vertex]
    subnodes: int = field(default=0)


def score_vertices(root: Vertex, successors: SuccessorLookup) -> dict[Vertex, int]:
    """
    Compute the ordering score of every vertex reachable from ``root``.

    ``score(v) = s + subnodes(v) + 1`` where ``s`` is the score handed down
    when ``v`` is first visited and ``subnodes(v)`` sums the contributions
    returned by its successors. A successor already on the active path
    contributes BACK_EDGE_SCORE; one already scored elsewhere contributes 0.

    Returns:
        Mapping vertex -> score
    """
    visited: set[Vertex] = set()
    scores: dict[Vertex, int] = {}
    stack: list[_ScoreFrame] = []

    def descend(vertex: Vertex, path: frozenset[Vertex], score: int) -> int | None:
        if vertex in visited:
            return BACK_EDGE_SCORE if vertex in path else 0
        visited.add(vertex)
        stack.append(_ScoreFrame(vertex, path | {vertex}, score, iter(list(successors(vertex)))))
        return None

    descend(root, frozenset(), 0)

    while stack:
        frame = stack[-1]
        child = next(frame.children, None)
        if child is None:
            stack.pop()
            scores[frame.vertex] = frame.score + frame.subnodes + 1
            if stack:
                stack[-1].subnodes += frame.subnodes
            continue

        contribution = descend(child, frame.path, frame.score + frame.subnodes + 1)
        if contribution is not None:
            frame.subnodes += contribution

    return scores


def assign_columns(assignment: RowAssignment, successors: SuccessorLookup) -> Grid:
    """
    Order and center every row, producing the final grid.

    Args:
        assignment: Output of row assignment
        successors: Outgoing-neighbour lookup (same as used for rows)

    Returns:
        Grid with contiguous, centered columns per row
    """
    scores = score_vertices(assignment.root, successors)
    max_row_len = assignment.max_row_length

    nodes: list[LayoutNode] = []
    for row, bucket in assignment.rows.items():
        ordered = sorted(bucket, key=lambda v: scores[v])
        offset = (max_row_len - len(ordered)) // 2
        for i, vertex in enumerate(ordered):
            nodes.append(LayoutNode(vertex=vertex, row=row, column=offset + i))

    return Grid(nodes)


__all__ = ["BACK_EDGE_SCORE", "score_vertices", "assign_columns"]
