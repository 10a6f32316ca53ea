"""Tests for the semiring products vxm, mxv and mxm."""

import numpy as np
import pytest
import torch

from spconduit import (
    ARITHMETIC,
    LOGICAL,
    MAX_PLUS,
    MIN,
    MIN_PLUS,
    MIN_SELECT2ND,
    PLUS,
    Matrix,
    Vector,
    mxm,
    mxv,
    structure,
    vxm,
)
from spconduit.errors import DimensionError
from spconduit.ops import products


class TestVxm:
    def test_min_plus_one_step(self, graph):
        u = Vector.from_tuples(4, [0], [0.0])
        w = Vector(4)
        vxm(w, None, None, MIN_PLUS, u, graph)
        assert str(w) == "[-, 1.0, 5.0, -]"

    def test_min_plus_with_accumulate(self, graph):
        u = Vector.from_tuples(4, [0], [0.0])
        vxm(u, None, MIN, MIN_PLUS, u, graph)
        vxm(u, None, MIN, MIN_PLUS, u, graph)
        assert str(u) == "[0.0, 1.0, 3.0, 6.0]"

    def test_arithmetic_matches_dense(self, rng):
        dense_u = rng.random(5)
        dense_A = rng.random((5, 3))
        dense_A[dense_A < 0.4] = 0.0
        u = Vector.from_dense(dense_u)
        A = Matrix.from_dense(dense_A, zero=0.0)
        w = Vector(3)
        vxm(w, None, None, ARITHMETIC, u, A)
        expected = dense_u @ dense_A
        for j in range(3):
            if (dense_A[:, j] != 0).any():
                assert w.extract_element(j) == pytest.approx(expected[j])
            else:
                assert not w.has_element(j)

    def test_no_contributing_pair_stays_absent(self, graph):
        u = Vector.from_tuples(4, [3], [0.0])
        w = Vector.from_tuples(4, [0], [7.0])
        vxm(w, None, None, MIN_PLUS, u, graph)
        assert w.nvals() == 0

    def test_masked(self, graph):
        u = Vector.from_tuples(4, [0, 1], [0.0, 1.0])
        w = Vector(4)
        mask = Vector.from_tuples(4, [2], [True], dtype=bool)
        vxm(w, mask, None, MIN_PLUS, u, graph, replace=True)
        assert str(w) == "[-, -, 3.0, -]"

    def test_zero_valued_operands_contribute(self):
        A = Matrix.from_tuples(2, 2, [0], [1], [0.0])
        u = Vector.from_tuples(2, [0], [0.0])
        w = Vector(2)
        vxm(w, None, None, MIN_PLUS, u, A)
        assert w.has_element(1)
        assert w.extract_element(1) == 0.0

    def test_select2nd_and_max_plus(self, graph):
        u = Vector.from_tuples(4, [0, 1], [10.0, 20.0])
        w = Vector(4)
        vxm(w, None, None, MIN_SELECT2ND, u, graph)
        assert str(w) == "[-, 1.0, 2.0, -]"
        vxm(w, None, None, MAX_PLUS, u, graph)
        assert str(w) == "[-, 11.0, 22.0, -]"

    def test_logical(self):
        A = Matrix.from_tuples(3, 3, [0, 1], [1, 2], [True, True], dtype=bool)
        u = Vector.from_tuples(3, [0], [True], dtype=bool)
        w = Vector(3, dtype=bool)
        vxm(w, None, None, LOGICAL, u, A)
        assert list(w.extract_tuples()) == [(1, True)]

    def test_dimension_errors(self, graph):
        with pytest.raises(DimensionError):
            vxm(Vector(4), None, None, MIN_PLUS, Vector(3), graph)
        with pytest.raises(DimensionError):
            vxm(Vector(3), None, None, MIN_PLUS, Vector(4), graph)
        with pytest.raises(DimensionError):
            vxm(Vector(4), None, None, MIN_PLUS, graph, graph)


class TestMxv:
    def test_equals_vxm_on_transpose(self, graph):
        u = Vector.from_tuples(4, [2, 3], [0.0, 1.0])
        w1 = Vector(4)
        w2 = Vector(4)
        mxv(w1, None, None, MIN_PLUS, graph, u)
        vxm(w2, None, None, MIN_PLUS, u, graph.T)
        assert w1 == w2
        assert str(w1) == "[5.0, 2.0, 2.0, -]"

    def test_dimension_error(self, graph):
        with pytest.raises(DimensionError):
            mxv(Vector(4), None, None, MIN_PLUS, graph, Vector(2))


class TestMxm:
    def test_arithmetic_matches_dense(self, rng):
        a = rng.integers(0, 3, size=(3, 4)).astype(np.float64)
        b = rng.integers(0, 3, size=(4, 2)).astype(np.float64)
        A = Matrix.from_dense(a, zero=0.0)
        B = Matrix.from_dense(b, zero=0.0)
        C = Matrix(3, 2)
        mxm(C, None, None, ARITHMETIC, A, B)
        expected = torch.from_numpy(a @ b)
        assert torch.allclose(C.to_dense(), expected)

    def test_min_plus_two_hops(self, graph):
        C = Matrix(4, 4)
        mxm(C, None, None, MIN_PLUS, graph, graph)
        assert list(C.extract_tuples()) == [(0, 2, 3.0), (0, 3, 6.0), (1, 3, 3.0)]

    def test_structural_mask_and_accumulate(self, graph):
        C = graph.dup()
        mxm(C, structure(graph), PLUS, MIN_PLUS, graph, graph)
        assert C.extract_element(0, 2) == 8.0
        assert C.extract_element(0, 1) == 1.0
        assert not C.has_element(0, 3)

    @pytest.mark.parametrize("block_elements", [1, 32, 64])
    def test_row_blocks_match_single_pass(self, graph, monkeypatch, block_elements):
        expected = Matrix(4, 4)
        mxm(expected, None, None, MIN_PLUS, graph, graph)

        monkeypatch.setattr(products, "_BLOCK_ELEMENTS", block_elements)
        C = Matrix(4, 4)
        mxm(C, None, None, MIN_PLUS, graph, graph)
        assert C == expected
        assert list(C.extract_tuples()) == [(0, 2, 3.0), (0, 3, 6.0), (1, 3, 3.0)]

    def test_output_aliases_input(self, graph):
        C = graph.dup()
        mxm(C, None, MIN, MIN_PLUS, C, graph)
        assert C.extract_element(0, 2) == 3.0

    def test_dimension_errors(self, graph):
        with pytest.raises(DimensionError):
            mxm(Matrix(4, 4), None, None, MIN_PLUS, graph, Matrix(3, 4))
        with pytest.raises(DimensionError):
            mxm(Matrix(3, 4), None, None, MIN_PLUS, graph, graph)
