"""Tests for the bitmap-backed sparse Matrix and its transpose view."""

import pytest
import torch

from spconduit import MIN, Matrix, TransposeView
from spconduit.errors import IndexOutOfBoundsError, InvalidValueError, NoValueError


def test_empty_matrix():
    A = Matrix(2, 3)
    assert A.nrows() == 2
    assert A.ncols() == 3
    assert A.shape == (2, 3)
    assert A.nvals() == 0


@pytest.mark.parametrize("shape", [(0, 3), (3, 0), (-1, 2)])
def test_invalid_dimensions(shape):
    with pytest.raises(InvalidValueError):
        Matrix(*shape)


def test_build_and_extract_row_major():
    A = Matrix(3, 3)
    A.build([2, 0, 1], [0, 2, 1], [4.0, 5.0, 6.0])
    assert A.nvals() == 3
    assert list(A.extract_tuples()) == [(0, 2, 5.0), (1, 1, 6.0), (2, 0, 4.0)]
    rows, cols, vals = A.extract_tuples().unzip()
    assert rows == [0, 1, 2]
    assert cols == [2, 1, 0]
    assert vals == [5.0, 6.0, 4.0]


def test_build_duplicates_folded():
    A = Matrix.from_tuples(2, 2, [0, 0, 1], [1, 1, 0], [3.0, 2.0, 1.0], dup_op=MIN)
    assert A.nvals() == 2
    assert A.extract_element(0, 1) == 2.0


def test_build_errors():
    A = Matrix(2, 2)
    with pytest.raises(IndexOutOfBoundsError):
        A.build([0, 2], [0, 0], [1.0, 1.0])
    with pytest.raises(IndexOutOfBoundsError):
        A.build([0], [5], [1.0])
    with pytest.raises(InvalidValueError):
        A.build([0, 1], [0], [1.0, 2.0])
    assert A.nvals() == 0


def test_element_access():
    A = Matrix(2, 2)
    A.set_element(0, 1, 7.0)
    assert A.has_element(0, 1)
    assert A.extract_element(0, 1) == 7.0
    with pytest.raises(NoValueError):
        A.extract_element(1, 1)
    with pytest.raises(IndexOutOfBoundsError):
        A.has_element(2, 0)
    A.remove_element(0, 1)
    assert A.nvals() == 0


def test_from_dense_with_zero():
    A = Matrix.from_dense([[0.0, 1.0], [2.0, 0.0]], zero=0.0)
    assert A.nvals() == 2
    assert A.has_element(1, 0)
    assert not A.has_element(0, 0)


def test_from_dense_requires_2d():
    with pytest.raises(InvalidValueError):
        Matrix.from_dense([1.0, 2.0])


def test_dup_clear_and_equality():
    A = Matrix.from_tuples(2, 2, [0, 1], [0, 1], [1.0, 2.0])
    B = A.dup()
    assert A == B
    B.clear()
    assert B.nvals() == 0
    assert A.nvals() == 2
    assert A != B


def test_str_and_repr():
    A = Matrix.from_tuples(2, 2, [0], [1], [3.0])
    assert str(A) == "[-, 3.0]\n[-, -]"
    assert repr(A) == "Matrix(nrows=2, ncols=2, nvals=1, dtype=torch.float64)"


def test_to_dense():
    A = Matrix.from_tuples(2, 2, [1], [0], [3.0])
    expected = torch.tensor([[float("inf"), float("inf")], [3.0, float("inf")]], dtype=torch.float64)
    assert torch.equal(A.to_dense(fill=float("inf")), expected)


class TestTransposeView:
    def test_shape_and_tuples(self):
        A = Matrix.from_tuples(2, 3, [0, 1], [2, 0], [1.0, 2.0])
        At = A.T
        assert isinstance(At, TransposeView)
        assert At.shape == (3, 2)
        assert At.nrows() == 3 and At.ncols() == 2
        assert At.nvals() == 2
        assert list(At.extract_tuples()) == [(0, 1, 2.0), (2, 0, 1.0)]

    def test_view_shares_storage(self):
        A = Matrix(2, 2)
        At = A.T
        A.set_element(0, 1, 5.0)
        assert bool(At.bitmap[1, 0])
        assert At.T is A
