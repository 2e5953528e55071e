"""
Row assignment by maximum acyclic depth.

Every vertex reachable from the root is placed on the deepest row at which
some cycle-free path from the root reaches it. The traversal is a depth-first
walk carrying the set of vertices on the current path; re-entering that set
means the edge closes a cycle and the walk stops there.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..types import SuccessorLookup, Vertex
from ..validation import LayoutInvariantError


@dataclass(frozen=True)
class RowAssignment:
    """
    Result of row assignment.

    Attributes:
        root: Vertex the traversal started from
        rows: Row index -> vertices in insertion order. Rows emptied by
            migration are kept as empty tuples.
        row_of: Vertex -> row index
    """

    root: Vertex
    rows: dict[int, tuple[Vertex, ...]] = field(default_factory=dict)
    row_of: dict[Vertex, int] = field(default_factory=dict)

    @property
    def max_row_length(self) -> int:
        return max((len(bucket) for bucket in self.rows.values()), default=0)


def assign_rows(root: Vertex, successors: SuccessorLookup) -> RowAssignment:
    """
    Assign each vertex reachable from ``root`` its maximum acyclic depth.

    A vertex seen again at a strictly deeper row migrates to that row and
    its successors are revisited from there. Descendants reached earlier are
    not re-validated unless the new walk reaches them deeper still, so a
    migrated vertex can end up below some of its successors.

    Args:
        root: Traversal start (the vertex with the smallest key)
        successors: Outgoing-neighbour lookup

    Returns:
        RowAssignment with per-row buckets

    Raises:
        LayoutInvariantError: If a migrating vertex is missing from its bucket
    """
    buckets: dict[int, list[Vertex]] = {}
    row_of: dict[Vertex, int] = {}

    # Explicit stack in place of recursion; successors are pushed reversed so
    # they are visited in lookup order.
    stack: list[tuple[Vertex, frozenset[Vertex], int]] = [(root, frozenset(), 0)]

    while stack:
        vertex, path, row = stack.pop()
        if vertex in path:
            continue

        bucket = buckets.setdefault(row, [])
        current = row_of.get(vertex)

        if current is None:
            row_of[vertex] = row
            bucket.append(vertex)
        elif current < row:
            previous = buckets[current]
            if vertex not in previous:
                raise LayoutInvariantError(f"{vertex!r} missing from row {current} bucket")
            previous.remove(vertex)
            bucket.append(vertex)
            row_of[vertex] = row
        else:
            continue

        child_path = path | {vertex}
        children = list(successors(vertex))
        for child in reversed(children):
            stack.append((child, child_path, row + 1))

    return RowAssignment(
        root=root,
        rows={row: tuple(bucket) for row, bucket in sorted(buckets.items())},
        row_of=row_of,
    )


__all__ = ["RowAssignment", "assign_rows"]
