"""
Delta-stepping single-source shortest paths.

Vertices are grouped into buckets of width ``delta`` by tentative distance.
Bucket ``i`` holds the vertices with ``i*delta <= t < (i+1)*delta``. Light
edges (weight <= delta) can move a vertex within the bucket being
processed, so they are relaxed repeatedly until the bucket stops changing.
Heavy edges (weight > delta) can only land in later buckets and are relaxed
once per bucket, from every vertex the bucket settled.

References:
    - Meyer, U., Sanders, P. "Delta-stepping: a parallelizable shortest path
      algorithm". Journal of Algorithms 49 (2003).
    - Sridhar, U. et al. "Delta-Stepping SSSP: From Vertices and Edges to
      GraphBLAS Implementations". GrAPL 2019.
"""

from __future__ import annotations

import math
from typing import Any, Tuple

from ..algebra import (
    GREATER_EQUAL,
    GREATER_THAN,
    IDENTITY,
    LESS_EQUAL,
    LESS_THAN,
    LOGICAL_OR,
    MIN,
    MIN_PLUS,
    select_in_range,
)
from ..containers import Matrix, Vector, structure
from ..containers.base import check_index
from ..diagnostics import is_nonnegative
from ..errors import InvalidValueError
from ..logging import get_logger, trace_container
from ..ops import apply, ewise_add, vxm
from .shortest import check_graph

logger = get_logger("graphs.delta_stepping")

_IMPROVES = LESS_THAN.with_identity(math.inf)


def split_by_weight(graph: Matrix, delta: Any) -> Tuple[Matrix, Matrix]:
    """
    Split ``graph`` into its light (``w <= delta``) and heavy (``w > delta``) edges.

    Returns:
        ``(AL, AH)``, two matrices whose entries partition those of ``graph``.
    """
    n = graph.nrows()
    parts = []
    for predicate in (LESS_EQUAL.bind_second(delta), GREATER_THAN.bind_second(delta)):
        selected = Matrix(n, n, bool, graph.device)
        apply(selected, None, None, predicate, graph)
        part = Matrix(n, n, graph.dtype, graph.device)
        apply(part, selected, None, IDENTITY, graph, replace=True)
        parts.append(part)
    light, heavy = parts
    return light, heavy


def _select(out: Vector, op: Any, t: Vector) -> None:
    """``out`` = positions of ``t`` where ``op`` holds, true-valued entries only."""
    apply(out, None, None, op, t)
    apply(out, out, None, IDENTITY, out, replace=True)


def sssp_delta_step(graph: Matrix, delta: Any, src: int, paths: Vector) -> int:
    """
    Shortest path lengths from ``src`` by delta-stepping.

    Args:
        graph: Square adjacency matrix with non-negative edge weights.
        delta: Positive bucket width.
        src: Source vertex.
        paths: Output vector of size n. Cleared, then filled with the
            distance of every reachable vertex.

    Returns:
        Number of buckets processed.

    Raises:
        DimensionError: If ``graph`` is not square or ``paths`` has the
            wrong size.
        InvalidValueError: If ``delta <= 0`` or an edge weight is negative.
        IndexOutOfBoundsError: If ``src`` is not a vertex.

    All checks run before ``paths`` is cleared.

    Example:
        >>> A = Matrix.from_tuples(4, 4, [0, 1, 0, 2], [1, 2, 2, 3], [1.0, 2.0, 5.0, 1.0])
        >>> p = Vector(4)
        >>> sssp_delta_step(A, 2.0, 0, p)
        3
        >>> str(p)
        '[0.0, 1.0, 3.0, 4.0]'
    """
    n = check_graph(graph, paths.size(), "paths")
    if not delta > 0:
        raise InvalidValueError(f"delta must be positive, got {delta!r}", context={"delta": delta})
    src = check_index(src, n, "src")
    if not is_nonnegative(graph):
        raise InvalidValueError("Delta-stepping requires non-negative edge weights")

    paths.clear()
    logger.debug("sssp_delta_step: n=%d delta=%r src=%d", n, delta, src)

    light, heavy = split_by_weight(graph, delta)
    trace_container(logger, "AL = A(<=delta)", light)
    trace_container(logger, "AH = A(>delta)", heavy)

    t = Vector(n, graph.dtype, graph.device)
    t.set_element(src, 0)
    t_masked = Vector(n, graph.dtype, graph.device)
    t_req = Vector(n, graph.dtype, graph.device)
    t_bucket = Vector(n, bool, graph.device)
    t_less = Vector(n, bool, graph.device)
    t_comp = Vector(n, bool, graph.device)
    settled = Vector(n, bool, graph.device)

    i = 0
    _select(t_comp, GREATER_EQUAL.bind_second(i * delta), t)
    while t_comp.nvals() > 0:
        logger.debug("bucket %d: %d vertices at or beyond it", i, t_comp.nvals())
        settled.clear()
        in_bucket = select_in_range(i * delta, (i + 1) * delta)

        _select(t_bucket, in_bucket, t)
        apply(t_masked, t_bucket, None, IDENTITY, t, replace=True)

        # Light edges until no relaxation lands back in bucket i.
        while t_masked.nvals() > 0:
            vxm(t_req, None, None, MIN_PLUS, t_masked, light)
            ewise_add(settled, None, None, LOGICAL_OR, settled, t_bucket)
            ewise_add(t_less, structure(t_req), None, _IMPROVES, t_req, t, replace=True)
            apply(t_bucket, t_less, None, in_bucket, t_req, replace=True)
            ewise_add(t, None, None, MIN, t, t_req)
            apply(t_masked, t_bucket, None, IDENTITY, t, replace=True)
            trace_container(logger, "t = min(t, tReq)", t)

        # One heavy pass from everything settled in bucket i.
        apply(t_masked, settled, None, IDENTITY, t, replace=True)
        vxm(t_req, None, None, MIN_PLUS, t_masked, heavy)
        ewise_add(t_less, structure(t_req), None, _IMPROVES, t_req, t, replace=True)
        apply(t_bucket, t_less, None, in_bucket, t_req, replace=True)
        ewise_add(t, None, None, MIN, t, t_req)
        trace_container(logger, f"t after bucket {i}", t)

        if t_bucket.nvals() > 0:
            # i*delta + w rounded below (i+1)*delta; bucket i is not done yet.
            logger.debug("bucket %d: %d heavy relaxations landed back in it", i, t_bucket.nvals())
            continue

        i += 1
        _select(t_comp, GREATER_EQUAL.bind_second(i * delta), t)

    apply(paths, None, None, IDENTITY, t)
    logger.info("sssp_delta_step: %d buckets, %d vertices reached", i, paths.nvals())
    return i
