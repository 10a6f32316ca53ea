"""
Example: Shortest Paths with Sparse Conduit

This example builds a small road network as a sparse adjacency matrix and
computes shortest path lengths with each of the min-plus algorithms:
fixed-round relaxation, multi-source relaxation, convergence-checked
relaxation and delta-stepping. It also shows the bulk operations the
algorithms are built from.
"""

import logging

from spconduit import (
    MIN_PLUS,
    PLUS_MONOID,
    Vector,
    reduce,
    vxm,
)
from spconduit.graphs import (
    adjacency_matrix,
    batch_sssp,
    distances_to_dict,
    filtered_sssp,
    source_matrix,
    source_vector,
    sssp,
    sssp_delta_step,
)
from spconduit.logging import configure_logging

ROADS = [
    ("depot", "north", 4.0),
    ("depot", "east", 1.0),
    ("east", "north", 2.0),
    ("north", "harbor", 5.0),
    ("east", "mill", 8.0),
    ("mill", "harbor", 1.0),
    ("harbor", "depot", 3.0),
]


def example_bulk_operations():
    """Example: one relaxation step and per-vertex out-weight."""
    print("=" * 60)
    print("Example 1: Bulk operations")
    print("=" * 60)

    A, names = adjacency_matrix(ROADS)
    print(f"Vertices: {names}")
    print(f"Adjacency matrix ({A.nvals()} edges):\n{A}")

    start = source_vector(A.nrows(), names.index("depot"))
    one_hop = Vector(A.nrows())
    vxm(one_hop, None, None, MIN_PLUS, start, A)
    print(f"One hop from depot: {one_hop}")

    out_weight = Vector(A.nrows())
    reduce(out_weight, None, None, PLUS_MONOID, A)
    print(f"Total outgoing weight per vertex: {out_weight}")
    print()


def example_single_source():
    """Example: the three single-source variants agree."""
    print("=" * 60)
    print("Example 2: Single-source shortest paths")
    print("=" * 60)

    A, names = adjacency_matrix(ROADS)
    src = names.index("depot")

    path = source_vector(A.nrows(), src)
    sssp(A, path)
    print(f"sssp:            {distances_to_dict(path, names)}")

    distance = source_vector(A.nrows(), src)
    rounds = filtered_sssp(A, distance)
    print(f"filtered_sssp:   {distances_to_dict(distance, names)} ({rounds} rounds)")

    for delta in (1.0, 4.0):
        stepped = Vector(A.nrows())
        buckets = sssp_delta_step(A, delta, src, stepped)
        print(f"delta={delta}:       {distances_to_dict(stepped, names)} ({buckets} buckets)")

    assert path == distance == stepped
    print()


def example_all_sources():
    """Example: every vertex as a source at once."""
    print("=" * 60)
    print("Example 3: All sources with batch_sssp")
    print("=" * 60)

    A, names = adjacency_matrix(ROADS)
    paths = source_matrix(A.nrows(), list(range(A.nrows())))
    batch_sssp(A, paths)
    print(f"Rows and columns follow {names}:")
    print(paths)
    print()


if __name__ == "__main__":
    configure_logging(level=logging.WARNING)

    print("\n" + "=" * 60)
    print("Sparse Conduit - Shortest Path Examples")
    print("=" * 60 + "\n")

    example_bulk_operations()
    example_single_source()
    example_all_sources()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
