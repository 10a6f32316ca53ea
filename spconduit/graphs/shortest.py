"""
Single-source shortest paths by min-plus relaxation.

``sssp`` and ``batch_sssp`` run a fixed ``n`` rounds of Bellman-Ford style
relaxation, which converges for any graph with ``n`` vertices and no
negative cycle. ``filtered_sssp`` stops as soon as a round improves no
distance.

The adjacency matrix stores edge weights; an absent entry is an infinite
weight (no edge), and an absent distance is an unreachable vertex.

References:
    - Kepner, J., Gilbert, J. "Graph Algorithms in the Language of Linear
      Algebra" (SIAM, 2011), Chapter 5.
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapter 24.1 (Bellman-Ford).
"""

from __future__ import annotations

import math
from typing import Any

from ..algebra import IDENTITY, LESS_THAN, MIN, MIN_PLUS
from ..containers import Matrix, Vector, structure
from ..errors import DimensionError
from ..logging import get_logger, trace_container
from ..ops import apply, ewise_add, mxm, vxm

logger = get_logger("graphs.shortest")

# Missing operands compare as +inf: a new distance always beats "unreachable".
_IMPROVES = LESS_THAN.with_identity(math.inf)


def check_graph(graph: Any, size: int, what: str) -> int:
    """
    Validate a square adjacency matrix against a distance container.

    Returns:
        The vertex count ``n``.

    Raises:
        DimensionError: If ``graph`` is not square or ``size != n``.
    """
    n, m = graph.shape
    if n != m or size != n:
        raise DimensionError(
            f"graph {tuple(graph.shape)} must be square and match the {what} size {size}",
            context={"graph": tuple(graph.shape), what: size},
        )
    return n


def sssp(graph: Matrix, path: Vector) -> None:
    """
    Single-source shortest path lengths, in place.

    Args:
        graph: Square adjacency matrix of edge weights.
        path: On input, the source vertex holds 0 and every other position
            is absent. On output, the distance of every reachable vertex.

    Raises:
        DimensionError: If ``graph`` is not square or ``path.size()`` differs.

    Complexity: n rounds of vxm, O(n^3) with the reference products.

    Example:
        >>> A = Matrix.from_tuples(3, 3, [0, 1], [1, 2], [1.0, 2.0])
        >>> p = Vector(3)
        >>> p.set_element(0, 0.0)
        >>> sssp(A, p)
        >>> str(p)
        '[0.0, 1.0, 3.0]'
    """
    n = check_graph(graph, path.size(), "path")
    for _ in range(n):
        vxm(path, None, MIN, MIN_PLUS, path, graph)
    logger.info("sssp: %d rounds over %d vertices, %d reachable", n, n, path.nvals())


def batch_sssp(graph: Matrix, paths: Matrix) -> None:
    """
    Shortest path lengths from several sources at once, in place.

    Each row of ``paths`` is an independent source, seeded with a 0 at the
    source's column. ``n`` rounds of ``paths = min(paths, paths (min.+) graph)``
    are run.

    Raises:
        DimensionError: If ``graph`` is not square or ``paths.ncols()``
            differs from its size.
    """
    n = check_graph(graph, paths.ncols(), "paths")
    for _ in range(n):
        mxm(paths, None, MIN, MIN_PLUS, paths, graph)
    logger.info("batch_sssp: %d sources, %d rounds", paths.nrows(), n)


def filtered_sssp(graph: Matrix, distance: Vector) -> int:
    """
    Single-source shortest paths that stop once no distance improves.

    Each round forms the candidate distances ``distance (min.+) graph``,
    keeps only the entries that beat the current distance and folds them
    in with ``min``. A round that keeps nothing ends the loop.

    Args:
        graph: Square adjacency matrix with non-negative weights.
        distance: Seeded like ``sssp``; overwritten with the result.

    Returns:
        Number of rounds executed, including the final round that found no
        improvement. Never more than ``n``.

    Raises:
        DimensionError: On a shape mismatch, before ``distance`` is touched.
    """
    n = check_graph(graph, distance.size(), "distance")
    candidate = Vector(n, distance.dtype, distance.device)
    improved = Vector(n, bool, distance.device)

    rounds = 0
    while rounds < n:
        rounds += 1
        vxm(candidate, None, None, MIN_PLUS, distance, graph)
        ewise_add(improved, structure(candidate), None, _IMPROVES, candidate, distance, replace=True)
        apply(candidate, improved, None, IDENTITY, candidate, replace=True)
        trace_container(logger, f"round {rounds} improved", candidate)
        if candidate.nvals() == 0:
            break
        ewise_add(distance, None, None, MIN, candidate, distance)

    logger.info("filtered_sssp: converged after %d of at most %d rounds", rounds, n)
    return rounds
