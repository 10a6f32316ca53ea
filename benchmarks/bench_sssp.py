"""Benchmark the shortest path algorithms on random sparse graphs."""

import time
from typing import Dict

import numpy as np

from spconduit import Matrix, Vector
from spconduit.graphs import filtered_sssp, source_vector, sssp, sssp_delta_step


def random_graph(n: int, density: float, seed: int = 0) -> Matrix:
    """Random digraph with uniform weights in [0, 10)."""
    rng = np.random.default_rng(seed)
    keep = rng.random((n, n)) < density
    rows, cols = np.nonzero(keep)
    weights = rng.uniform(0.0, 10.0, size=len(rows))
    return Matrix.from_tuples(n, n, rows.tolist(), cols.tolist(), weights.tolist())


def benchmark_sssp_variants(n: int, density: float = 0.1, delta: float = 2.0) -> Dict[str, float]:
    """Time one solve of each variant from vertex 0.

    Args:
        n: Number of vertices.
        density: Probability of each directed edge.
        delta: Bucket width for delta-stepping.

    Returns:
        Dictionary with timing results.
    """
    graph = random_graph(n, density)

    start = time.perf_counter()
    path = source_vector(n, 0)
    sssp(graph, path)
    sssp_time = time.perf_counter() - start

    start = time.perf_counter()
    distance = source_vector(n, 0)
    rounds = filtered_sssp(graph, distance)
    filtered_time = time.perf_counter() - start

    start = time.perf_counter()
    stepped = Vector(n)
    buckets = sssp_delta_step(graph, delta, 0, stepped)
    delta_time = time.perf_counter() - start

    return {
        "n": n,
        "nvals": graph.nvals(),
        "sssp_sec": sssp_time,
        "filtered_sec": filtered_time,
        "filtered_rounds": rounds,
        "delta_step_sec": delta_time,
        "delta_step_buckets": buckets,
    }


if __name__ == "__main__":
    print("Benchmarking shortest path variants...")

    for n in (32, 64, 128):
        results = benchmark_sssp_variants(n)
        print(f"\nn={n} ({results['nvals']} edges):")
        print(f"  sssp:          {results['sssp_sec']*1e3:.2f} ms")
        print(f"  filtered_sssp: {results['filtered_sec']*1e3:.2f} ms ({results['filtered_rounds']} rounds)")
        print(f"  delta-step:    {results['delta_step_sec']*1e3:.2f} ms ({results['delta_step_buckets']} buckets)")
