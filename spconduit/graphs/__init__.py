"""
Shortest-path algorithms expressed in sparse linear algebra.

This package provides:
- Fixed-round min-plus relaxation (sssp, batch_sssp)
- Convergence-checked relaxation (filtered_sssp)
- Delta-stepping (sssp_delta_step)
- Helpers to build adjacency matrices and read distances back by node

Graphs are square adjacency matrices of edge weights; an absent entry means
no edge.
"""

from .delta_stepping import split_by_weight, sssp_delta_step
from .shortest import batch_sssp, filtered_sssp, sssp
from .utils import (
    adjacency_matrix,
    distances_to_dict,
    node_index_map,
    source_matrix,
    source_vector,
)

__all__ = [
    "sssp",
    "batch_sssp",
    "filtered_sssp",
    "sssp_delta_step",
    "split_by_weight",
    "node_index_map",
    "adjacency_matrix",
    "source_vector",
    "source_matrix",
    "distances_to_dict",
]

# Example usage:
# from spconduit.graphs import adjacency_matrix, source_vector, sssp, distances_to_dict
#
# A, names = adjacency_matrix([('a', 'b', 1.0), ('b', 'c', 2.0)])
# path = source_vector(A.nrows(), 0)
# sssp(A, path)
# distances_to_dict(path, names)  # {'a': 0.0, 'b': 1.0, 'c': 3.0}
