"""
Input validation and error types for control-flow chart layout.

Provides centralized validation functions for vertices, edges and spacing
parameters, plus the exception taxonomy used across the layout phases:

- ValidationError and subclasses: malformed input, raised before layout
- LayoutInvariantError: internal defect, never recovered from
- LayoutCancelledError: cooperative cancellation, safe to retry
"""

from __future__ import annotations

from typing import Any, Sequence

from .types import vertex_key


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidVertexError(ValidationError):
    """Raised when a vertex has no key or shares its key with another vertex."""

    pass


class InvalidEdgeError(ValidationError):
    """Raised when an edge references a vertex outside the graph."""

    pass


class InvalidSpacingError(ValidationError):
    """Raised when junction padding parameters are invalid."""

    pass


class LayoutInvariantError(AssertionError):
    """Raised when internal layout state is inconsistent."""

    pass


class UnplacedVertexError(LayoutInvariantError):
    """Raised when an edge references a vertex that received no grid cell."""

    pass


class LayoutCancelledError(Exception):
    """Raised when the task monitor reports cancellation."""

    pass


class GraphStructureWarning(UserWarning):
    """Warning issued when graph structure doesn't match algorithm assumptions."""

    pass


def validate_vertex_keys(
    vertices: Sequence[Any],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that every vertex has a key and that keys are unique.

    Args:
        vertices: Sequence of Vertex objects, dicts or host objects
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (vertex_index, issue_description) tuples

    Raises:
        InvalidVertexError: If strict=True and invalid vertices found
    """
    issues: list[tuple[int, str]] = []
    seen: dict[Any, int] = {}

    for i, vertex in enumerate(vertices):
        key = vertex_key(vertex)
        if key is None:
            issues.append((i, f"Vertex {i}: key is None"))
            continue
        if key in seen:
            issues.append((i, f"Vertex {i}: key {key!r} duplicates vertex {seen[key]}"))
        else:
            seen[key] = i

    if strict and issues:
        msg = "Invalid vertices:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidVertexError(msg)

    return issues


def validate_edge_endpoints(
    edges: Sequence[Any],
    keys: set[Any],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that all edge sources and targets are known vertex keys.

    Args:
        edges: Sequence of Edge objects or dicts with source/target
        keys: Keys of the graph's vertices
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (edge_index, issue_description) tuples

    Raises:
        InvalidEdgeError: If strict=True and invalid edges found
    """
    issues: list[tuple[int, str]] = []

    for i, edge in enumerate(edges):
        for attr in ("source", "target"):
            endpoint = edge.get(attr) if isinstance(edge, dict) else getattr(edge, attr, None)
            if endpoint is None:
                issues.append((i, f"Edge {i}: {attr} is None"))
                continue
            key = vertex_key(endpoint)
            if key not in keys:
                issues.append((i, f"Edge {i}: {attr} {key!r} is not a vertex of the graph"))

    if strict and issues:
        msg = "Invalid edge endpoints:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidEdgeError(msg)

    return issues


def validate_spacing(padding: float, offset: float) -> tuple[float, float]:
    """
    Validate junction padding parameters.

    Args:
        padding: Base shift applied before stacking levels (>= 0)
        offset: Distance between consecutive stacking levels (> 0)

    Returns:
        Validated (padding, offset) tuple

    Raises:
        InvalidSpacingError: If parameters are out of range
    """
    padding, offset = float(padding), float(offset)
    if padding < 0:
        raise InvalidSpacingError(f"padding_junctions must be non-negative, got {padding}")
    if offset <= 0:
        raise InvalidSpacingError(f"offset_junctions must be positive, got {offset}")
    return padding, offset


__all__ = [
    "ValidationError",
    "InvalidVertexError",
    "InvalidEdgeError",
    "InvalidSpacingError",
    "LayoutInvariantError",
    "UnplacedVertexError",
    "LayoutCancelledError",
    "GraphStructureWarning",
    "validate_vertex_keys",
    "validate_edge_endpoints",
    "validate_spacing",
]
