"""Performance benchmarks for Sparse Conduit.

This package contains microbenchmarks for the shortest path algorithms on
random sparse graphs.
"""
