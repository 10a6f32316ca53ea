"""Pytest configuration and shared fixtures for Sparse Conduit tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Debug mode for every test, so each published container is checked
- The small weighted digraph most shortest-path tests are written against
"""

import os

import numpy as np
import pytest
import torch

from spconduit import Matrix
from spconduit.diagnostics import debug_context


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Seeded numpy generator; override the seed with TEST_RNG_SEED."""
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Seeded torch generator on the default device."""
    from spconduit.core.device import default_device

    generator = torch.Generator(device=default_device().as_torch_device())
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the global numpy and torch generators before every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture(autouse=True)
def consistency_checks():
    """Run every test with debug mode on; tests may still toggle it."""
    with debug_context(True):
        yield


@pytest.fixture
def graph() -> Matrix:
    """4-vertex digraph: 0->1 (1), 1->2 (2), 0->2 (5), 2->3 (1).

    Shortest distances from vertex 0 are [0, 1, 3, 4].
    """
    return Matrix.from_tuples(4, 4, [0, 1, 0, 2], [1, 2, 2, 3], [1.0, 2.0, 5.0, 1.0])
