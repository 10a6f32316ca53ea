"""Tests for the mask, accumulate and replace contract shared by all operations."""

import pytest

from spconduit import (
    IDENTITY,
    PLUS,
    Matrix,
    Vector,
    apply,
    complement,
    structure,
)
from spconduit.containers import MaskView
from spconduit.errors import DimensionError, InvalidValueError


@pytest.fixture
def prefilled() -> Vector:
    return Vector.from_dense([10.0, 20.0, 30.0, 40.0])


@pytest.fixture
def source() -> Vector:
    return Vector.from_dense([1.0, 2.0, 3.0, 4.0])


@pytest.fixture
def mask_13() -> Vector:
    return Vector.from_tuples(4, [1, 3], [True, True], dtype=bool)


def test_mask_with_replace_clears_unselected(prefilled, source, mask_13):
    apply(prefilled, mask_13, None, IDENTITY, source, replace=True)
    assert str(prefilled) == "[-, 2.0, -, 4.0]"
    assert prefilled.nvals() == 2


def test_mask_without_replace_keeps_unselected(prefilled, source, mask_13):
    apply(prefilled, mask_13, None, IDENTITY, source)
    assert str(prefilled) == "[10.0, 2.0, 30.0, 4.0]"


def test_no_mask_replaces_everything(prefilled):
    u = Vector.from_tuples(4, [2], [5.0])
    apply(prefilled, None, None, IDENTITY, u)
    assert str(prefilled) == "[-, -, 5.0, -]"


def test_value_mask_ignores_false_entries(prefilled, source):
    mask = Vector.from_tuples(4, [0, 1], [False, True], dtype=bool)
    apply(prefilled, mask, None, IDENTITY, source, replace=True)
    assert str(prefilled) == "[-, 2.0, -, -]"


def test_value_mask_treats_zero_as_false(prefilled, source):
    mask = Vector.from_tuples(4, [0, 1], [0.0, 7.0])
    apply(prefilled, mask, None, IDENTITY, source, replace=True)
    assert str(prefilled) == "[-, 2.0, -, -]"


def test_structural_mask_selects_present_entries(prefilled, source):
    mask = Vector.from_tuples(4, [0, 1], [0.0, 7.0])
    apply(prefilled, structure(mask), None, IDENTITY, source, replace=True)
    assert str(prefilled) == "[1.0, 2.0, -, -]"


def test_complemented_mask(prefilled, source, mask_13):
    apply(prefilled, complement(mask_13), None, IDENTITY, source)
    assert str(prefilled) == "[1.0, 20.0, 3.0, 40.0]"

    view = structure(mask_13)
    assert isinstance(~view, MaskView)
    assert (~view).complemented and (~view).structural
    assert complement(~view) == view


def test_selected_absent_result_deletes_output_entry(prefilled, mask_13):
    u = Vector.from_tuples(4, [3], [9.0])
    apply(prefilled, mask_13, None, IDENTITY, u)
    assert str(prefilled) == "[10.0, -, 30.0, 9.0]"


def test_accumulate_unions_with_existing():
    u = Vector.from_tuples(4, [0, 2], [1.0, 2.0])
    out = Vector.from_tuples(4, [0, 1], [10.0, 20.0])
    apply(out, None, PLUS, IDENTITY, u)
    assert str(out) == "[11.0, 20.0, 2.0, -]"


def test_accumulate_under_mask(mask_13):
    out = Vector.from_dense([10.0, 20.0, 30.0, 40.0])
    u = Vector.from_dense([1.0, 1.0, 1.0, 1.0])
    apply(out, mask_13, PLUS, IDENTITY, u, replace=True)
    assert str(out) == "[-, 21.0, -, 41.0]"


def test_output_may_alias_input(source):
    apply(source, None, PLUS, IDENTITY, source)
    assert str(source) == "[2.0, 4.0, 6.0, 8.0]"


def test_mask_shape_mismatch(prefilled, source):
    with pytest.raises(DimensionError):
        apply(prefilled, Vector(3, dtype=bool), None, IDENTITY, source)
    assert prefilled.nvals() == 4


def test_matrix_mask():
    out = Matrix.from_dense([[1.0, 1.0], [1.0, 1.0]])
    src = Matrix.from_dense([[5.0, 6.0], [7.0, 8.0]])
    mask = Matrix.from_tuples(2, 2, [0, 1], [0, 1], [True, True], dtype=bool)
    apply(out, mask, None, IDENTITY, src, replace=True)
    assert list(out.extract_tuples()) == [(0, 0, 5.0), (1, 1, 8.0)]


def test_output_must_be_container(source):
    with pytest.raises(InvalidValueError):
        apply(Matrix(4, 4).T, None, None, IDENTITY, source)
