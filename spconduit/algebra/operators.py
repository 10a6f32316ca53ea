"""
Operator and semiring catalog.

Operators are small frozen value objects wrapping elementwise tensor
functions. A ``Semiring`` pairs an additive ``Monoid`` (the ``combine`` of
a generalised product, together with its identity) with a multiplicative
``BinaryOp`` (the ``extend``). The identity of the additive monoid is the
value an absent entry stands for: 0 under ``ARITHMETIC``, +inf under
``MIN_PLUS``.

References:
    - Kepner, J., Gilbert, J. "Graph Algorithms in the Language of Linear
      Algebra" (SIAM, 2011).
    - The GraphBLAS C API Specification, v1.3, Sections 2.4 and 3.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

import torch

from ..errors import InvalidValueError

TensorFn = Callable[..., torch.Tensor]


def _bound_scalar(value: Any, x: torch.Tensor) -> torch.Tensor:
    """Scalar tensor for a bound operand, kept at the precision of ``x``."""
    dtype = torch.result_type(x, value)
    if dtype.is_floating_point and not x.dtype.is_floating_point:
        dtype = torch.float64
    return torch.as_tensor(value, dtype=dtype, device=x.device)


@dataclass(frozen=True)
class UnaryOp:
    """
    Elementwise unary operator.

    Attributes:
        name: Human readable operator name.
        fn: Function mapping a value tensor to a tensor of the same shape.
    """

    name: str
    fn: TensorFn

    def __call__(self, x: torch.Tensor) -> torch.Tensor:
        return self.fn(x)


@dataclass(frozen=True)
class BinaryOp:
    """
    Elementwise binary operator.

    Attributes:
        name: Human readable operator name.
        fn: Function of two broadcastable tensors.
        identity: Value contributed by a missing operand in ``ewise_add``.
            When None the present operand passes through unchanged.
    """

    name: str
    fn: TensorFn
    identity: Optional[Any] = None

    def __call__(self, a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
        return self.fn(a, b)

    def bind_first(self, value: Any) -> UnaryOp:
        """Return the unary operator ``x -> fn(value, x)``."""
        fn = self.fn

        def bound(x: torch.Tensor) -> torch.Tensor:
            return fn(_bound_scalar(value, x), x)

        return UnaryOp(f"{self.name}_bind1st({value!r})", bound)

    def bind_second(self, value: Any) -> UnaryOp:
        """Return the unary operator ``x -> fn(x, value)``."""
        fn = self.fn

        def bound(x: torch.Tensor) -> torch.Tensor:
            return fn(x, _bound_scalar(value, x))

        return UnaryOp(f"{self.name}_bind2nd({value!r})", bound)

    def with_identity(self, identity: Any) -> "BinaryOp":
        """Return a copy whose missing ``ewise_add`` operand counts as ``identity``."""
        return replace(self, identity=identity)


def cast_identity(value: Any, dtype: torch.dtype) -> Any:
    if dtype == torch.bool:
        return bool(value)
    if dtype.is_floating_point or dtype.is_complex:
        return value
    if isinstance(value, float) and math.isinf(value):
        info = torch.iinfo(dtype)
        return info.max if value > 0 else info.min
    return int(value)


@dataclass(frozen=True)
class Monoid:
    """
    Associative binary operator with an identity element.

    Attributes:
        op: The associative operator.
        identity: Identity of ``op``.
        reducer: Optional vectorised fold ``reducer(tensor, dim)``. Without
            one, folds fall back to pairwise application of ``op`` in index
            order.
    """

    op: BinaryOp
    identity: Any
    reducer: Optional[Callable[[torch.Tensor, int], torch.Tensor]] = None

    @property
    def name(self) -> str:
        return self.op.name

    def __call__(self, a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
        return self.op(a, b)

    def identity_for(self, dtype: torch.dtype) -> Any:
        """Identity expressed in ``dtype``; ±inf maps to integer extremes."""
        return cast_identity(self.identity, dtype)


@dataclass(frozen=True)
class Semiring:
    """
    Semiring used by the generalised products ``vxm``, ``mxv`` and ``mxm``.

    Attributes:
        name: Human readable semiring name.
        add: The ``combine`` monoid folding partial products.
        multiply: The ``extend`` operator forming partial products.
    """

    name: str
    add: Monoid
    multiply: BinaryOp

    @property
    def zero(self) -> Any:
        """Identity of ``add``: the value an absent entry stands for."""
        return self.add.identity


# Unary operators ------------------------------------------------------------


def _multiplicative_inverse(x: torch.Tensor) -> torch.Tensor:
    if bool((x == 0).any().item()):
        raise InvalidValueError("Multiplicative inverse of zero is undefined")
    if not (x.dtype.is_floating_point or x.dtype.is_complex):
        x = x.to(torch.get_default_dtype())
    return torch.reciprocal(x)


IDENTITY = UnaryOp("identity", lambda x: x)
ABS = UnaryOp("abs", torch.abs)
ADDITIVE_INVERSE = UnaryOp("additive_inverse", torch.neg)
MULTIPLICATIVE_INVERSE = UnaryOp("multiplicative_inverse", _multiplicative_inverse)
LOGICAL_NOT = UnaryOp("logical_not", torch.logical_not)


def select_in_range(low: Any, high: Any) -> UnaryOp:
    """
    Predicate that is true where ``low <= x < high``.

    Used to pick the members of a delta-stepping bucket.

    Args:
        low: Inclusive lower bound.
        high: Exclusive upper bound.

    Returns:
        Boolean-valued UnaryOp.
    """

    def in_range(x: torch.Tensor) -> torch.Tensor:
        return (x >= low) & (x < high)

    return UnaryOp(f"select_in_range({low!r}, {high!r})", in_range)


# Binary operators -----------------------------------------------------------


def _first(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return torch.broadcast_tensors(a, b)[0]


def _second(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return torch.broadcast_tensors(a, b)[1]


PLUS = BinaryOp("plus", torch.add)
MINUS = BinaryOp("minus", torch.sub)
TIMES = BinaryOp("times", torch.mul)
DIV = BinaryOp("div", torch.div)
MIN = BinaryOp("min", torch.minimum)
MAX = BinaryOp("max", torch.maximum)
FIRST = BinaryOp("first", _first)
SECOND = BinaryOp("second", _second)

LOGICAL_OR = BinaryOp("logical_or", torch.logical_or)
LOGICAL_AND = BinaryOp("logical_and", torch.logical_and)
LOGICAL_XOR = BinaryOp("logical_xor", torch.logical_xor)

EQUAL = BinaryOp("equal", torch.eq)
NOT_EQUAL = BinaryOp("not_equal", torch.ne)
LESS_THAN = BinaryOp("less_than", torch.lt)
LESS_EQUAL = BinaryOp("less_equal", torch.le)
GREATER_THAN = BinaryOp("greater_than", torch.gt)
GREATER_EQUAL = BinaryOp("greater_equal", torch.ge)


# Monoids --------------------------------------------------------------------

PLUS_MONOID = Monoid(PLUS, 0, lambda t, dim: torch.sum(t, dim=dim))
TIMES_MONOID = Monoid(TIMES, 1, lambda t, dim: torch.prod(t, dim=dim))
MIN_MONOID = Monoid(MIN, math.inf, lambda t, dim: torch.amin(t, dim=dim))
MAX_MONOID = Monoid(MAX, -math.inf, lambda t, dim: torch.amax(t, dim=dim))
LOGICAL_OR_MONOID = Monoid(LOGICAL_OR, False, lambda t, dim: torch.any(t, dim=dim))
LOGICAL_AND_MONOID = Monoid(LOGICAL_AND, True, lambda t, dim: torch.all(t, dim=dim))


# Semirings ------------------------------------------------------------------

ARITHMETIC = Semiring("arithmetic", PLUS_MONOID, TIMES)
MIN_PLUS = Semiring("min_plus", MIN_MONOID, PLUS)
MAX_PLUS = Semiring("max_plus", MAX_MONOID, PLUS)
MIN_SELECT2ND = Semiring("min_select2nd", MIN_MONOID, SECOND)
MAX_SELECT2ND = Semiring("max_select2nd", MAX_MONOID, SECOND)
LOGICAL = Semiring("logical", LOGICAL_OR_MONOID, LOGICAL_AND)
