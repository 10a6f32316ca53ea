"""Tests for the operator, monoid and semiring catalog."""

import math

import pytest
import torch

from spconduit.algebra import (
    ABS,
    ADDITIVE_INVERSE,
    ARITHMETIC,
    FIRST,
    GREATER_THAN,
    IDENTITY,
    LESS_EQUAL,
    LESS_THAN,
    LOGICAL,
    LOGICAL_NOT,
    MAX_MONOID,
    MIN,
    MIN_MONOID,
    MIN_PLUS,
    MINUS,
    MULTIPLICATIVE_INVERSE,
    PLUS,
    PLUS_MONOID,
    SECOND,
    TIMES_MONOID,
    select_in_range,
)
from spconduit.errors import InvalidValueError


def test_unary_operators():
    x = torch.tensor([-2.0, 0.5, 3.0], dtype=torch.float64)
    assert torch.equal(IDENTITY(x), x)
    assert torch.equal(ABS(x), torch.tensor([2.0, 0.5, 3.0], dtype=torch.float64))
    assert torch.equal(ADDITIVE_INVERSE(x), -x)
    assert torch.equal(LOGICAL_NOT(torch.tensor([True, False])), torch.tensor([False, True]))


def test_multiplicative_inverse():
    x = torch.tensor([2.0, 4.0], dtype=torch.float64)
    assert torch.allclose(MULTIPLICATIVE_INVERSE(x), torch.tensor([0.5, 0.25], dtype=torch.float64))


def test_multiplicative_inverse_of_integers_is_floating():
    result = MULTIPLICATIVE_INVERSE(torch.tensor([2, 4]))
    assert result.is_floating_point()


def test_multiplicative_inverse_rejects_zero():
    with pytest.raises(InvalidValueError, match="zero"):
        MULTIPLICATIVE_INVERSE(torch.tensor([1.0, 0.0]))


def test_binary_operators():
    a = torch.tensor([1.0, 5.0])
    b = torch.tensor([3.0, 2.0])
    assert torch.equal(PLUS(a, b), torch.tensor([4.0, 7.0]))
    assert torch.equal(MINUS(a, b), torch.tensor([-2.0, 3.0]))
    assert torch.equal(MIN(a, b), torch.tensor([1.0, 2.0]))
    assert torch.equal(FIRST(a, b), a)
    assert torch.equal(SECOND(a, b), b)
    assert torch.equal(LESS_THAN(a, b), torch.tensor([True, False]))


def test_first_second_broadcast():
    a = torch.tensor([[1.0], [2.0]])
    b = torch.tensor([[5.0, 6.0, 7.0]])
    assert FIRST(a, b).shape == (2, 3)
    assert torch.equal(SECOND(a, b)[1], torch.tensor([5.0, 6.0, 7.0]))


def test_bind_first_and_second():
    x = torch.tensor([1.0, 2.0, 3.0])
    assert torch.equal(LESS_EQUAL.bind_second(2.0)(x), torch.tensor([True, True, False]))
    assert torch.equal(GREATER_THAN.bind_first(2.0)(x), torch.tensor([True, False, False]))
    assert torch.equal(MINUS.bind_first(10.0)(x), torch.tensor([9.0, 8.0, 7.0]))
    assert "bind2nd" in LESS_EQUAL.bind_second(2.0).name


def test_bound_scalar_keeps_double_precision():
    x = torch.tensor([0.7, 0.30000000000000004, 0.69999999], dtype=torch.float64)
    assert torch.equal(LESS_EQUAL.bind_second(0.7)(x), torch.tensor([True, True, True]))
    assert torch.equal(GREATER_THAN.bind_second(0.7)(x), torch.tensor([False, False, False]))
    assert torch.equal(LESS_THAN.bind_first(0.3)(x), torch.tensor([True, True, True]))
    assert MINUS.bind_second(0.1)(x).dtype == torch.float64


def test_bound_float_scalar_on_integer_values():
    x = torch.tensor([0, 1, 2])
    assert torch.equal(LESS_EQUAL.bind_second(1.5)(x), torch.tensor([True, True, False]))
    assert torch.equal(MINUS.bind_second(0.5)(x), torch.tensor([-0.5, 0.5, 1.5], dtype=torch.float64))


def test_with_identity_returns_copy():
    op = LESS_THAN.with_identity(math.inf)
    assert op.identity == math.inf
    assert LESS_THAN.identity is None
    assert op.name == LESS_THAN.name


def test_select_in_range_half_open():
    op = select_in_range(2.0, 4.0)
    x = torch.tensor([1.9, 2.0, 3.5, 4.0])
    assert torch.equal(op(x), torch.tensor([False, True, True, False]))


class TestMonoids:
    def test_identities(self):
        assert PLUS_MONOID.identity == 0
        assert TIMES_MONOID.identity == 1
        assert MIN_MONOID.identity == math.inf
        assert MAX_MONOID.identity == -math.inf

    def test_identity_for_integer_dtype(self):
        assert MIN_MONOID.identity_for(torch.int32) == torch.iinfo(torch.int32).max
        assert MAX_MONOID.identity_for(torch.int64) == torch.iinfo(torch.int64).min
        assert MIN_MONOID.identity_for(torch.float64) == math.inf

    def test_reducers(self):
        t = torch.tensor([[1.0, 4.0], [3.0, 2.0]])
        assert torch.equal(PLUS_MONOID.reducer(t, 0), torch.tensor([4.0, 6.0]))
        assert torch.equal(MIN_MONOID.reducer(t, 1), torch.tensor([1.0, 2.0]))

    def test_monoid_is_callable(self):
        assert torch.equal(MIN_MONOID(torch.tensor([3.0]), torch.tensor([2.0])), torch.tensor([2.0]))
        assert MIN_MONOID.name == "min"


class TestSemirings:
    def test_zero_is_additive_identity(self):
        assert ARITHMETIC.zero == 0
        assert MIN_PLUS.zero == math.inf
        assert LOGICAL.zero is False

    def test_min_plus_structure(self):
        assert MIN_PLUS.add is MIN_MONOID
        assert MIN_PLUS.multiply is PLUS
