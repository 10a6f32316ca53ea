"""
Utility functions for the shortest-path algorithms.

Provides helpers for node indexing, adjacency matrix construction, source
seeding and reading distances back out by node.
"""

from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from ..algebra import MIN, BinaryOp
from ..containers import Matrix, Vector
from ..containers.base import DeviceLike, DTypeLike
from ..errors import InvalidValueError


def node_index_map(nodes: Iterable[Hashable]) -> Tuple[Dict[Hashable, int], List[Hashable]]:
    """
    Create deterministic mapping from nodes to indices 0..n-1.

    Nodes are sorted by string representation for deterministic ordering.

    Args:
        nodes: Iterable of hashable nodes.

    Returns:
        Tuple of (node_to_index dict, index_to_node list).

    Example:
        >>> node_to_idx, idx_to_node = node_index_map(['c', 'a', 'b'])
        >>> node_to_idx
        {'a': 0, 'b': 1, 'c': 2}
    """
    sorted_nodes = sorted(set(nodes), key=lambda x: str(x))
    node_to_index = {node: idx for idx, node in enumerate(sorted_nodes)}
    return node_to_index, sorted_nodes


def adjacency_matrix(
    edges: Iterable[Tuple[Hashable, Hashable, Any]],
    n: Optional[int] = None,
    nodes: Optional[Iterable[Hashable]] = None,
    dup_op: Optional[BinaryOp] = MIN,
    dtype: DTypeLike = None,
    device: DeviceLike = None,
) -> Tuple[Matrix, List[Hashable]]:
    """
    Build a weighted adjacency matrix from ``(u, v, weight)`` edges.

    Without ``n`` the endpoints (plus any extra ``nodes``) are indexed with
    ``node_index_map``. With ``n`` the endpoints must already be integers in
    ``[0, n)``.

    Args:
        edges: Directed weighted edges.
        n: Vertex count when the endpoints are integer indices.
        nodes: Extra nodes to index, e.g. isolated vertices.
        dup_op: Folds parallel edges; the lightest edge wins by default.
        dtype: Weight dtype; inferred from the weights when None.
        device: Target device.

    Returns:
        Tuple of (adjacency Matrix, index_to_node list).

    Raises:
        InvalidValueError: If the graph would have no vertices, or ``n`` is
            given together with ``nodes``.
    """
    edge_list = list(edges)
    if n is not None:
        if nodes is not None:
            raise InvalidValueError("Pass either n or nodes, not both")
        index_to_node: List[Hashable] = list(range(n))
        rows = [u for u, _, _ in edge_list]
        cols = [v for _, v, _ in edge_list]
    else:
        endpoints = [u for u, _, _ in edge_list] + [v for _, v, _ in edge_list]
        node_to_index, index_to_node = node_index_map(endpoints + list(nodes or []))
        if not index_to_node:
            raise InvalidValueError("Cannot build an adjacency matrix without vertices")
        rows = [node_to_index[u] for u, _, _ in edge_list]
        cols = [node_to_index[v] for _, v, _ in edge_list]
        n = len(index_to_node)

    weights = [w for _, _, w in edge_list]
    if dtype is None and not weights:
        dtype = float
    graph = Matrix.from_tuples(n, n, rows, cols, weights, dup_op=dup_op, dtype=dtype, device=device)
    return graph, index_to_node


def source_vector(n: int, src: int, dtype: DTypeLike = None, device: DeviceLike = None) -> Vector:
    """Distance vector seeded for ``sssp``: 0 at ``src``, absent elsewhere."""
    path = Vector(n, dtype, device)
    path.set_element(src, 0)
    return path


def source_matrix(
    n: int,
    sources: Sequence[int],
    dtype: DTypeLike = None,
    device: DeviceLike = None,
) -> Matrix:
    """
    Distance matrix seeded for ``batch_sssp``.

    Row ``k`` holds a 0 at column ``sources[k]``.
    """
    paths = Matrix(len(sources), n, dtype, device)
    paths.build(list(range(len(sources))), list(sources), [0] * len(sources))
    return paths


def distances_to_dict(path: Vector, index_to_node: Sequence[Hashable]) -> Dict[Hashable, float]:
    """
    Map every node to its distance, ``inf`` for unreachable nodes.

    Example:
        >>> distances_to_dict(Vector.from_dense([0.0, 2.0]), ['a', 'b'])
        {'a': 0.0, 'b': 2.0}
    """
    dist = {node: float("inf") for node in index_to_node}
    for idx, value in path.extract_tuples():
        dist[index_to_node[idx]] = value
    return dist
