"""Elementwise bulk operations: apply, ewise_add and ewise_mult."""

from __future__ import annotations

from typing import Any, Union

import torch

from ..algebra import BinaryOp, Monoid, UnaryOp
from ..algebra.operators import cast_identity
from ..containers.base import BitmapContainer
from ..containers.mask import MaskLike
from .engine import Accumulator, check_output, check_shapes, write_back


def _binary(op: Union[BinaryOp, Monoid]) -> BinaryOp:
    return op.op if isinstance(op, Monoid) else op


def apply(
    out: BitmapContainer,
    mask: MaskLike,
    accum: Accumulator,
    op: UnaryOp,
    u: Any,
    replace: bool = False,
) -> None:
    """
    ``out<mask> (accum)= op(u)``.

    ``op`` is evaluated only on the present values of ``u``; positions
    absent in ``u`` are absent in the candidate result.

    Args:
        out: Output Vector or Matrix.
        mask: Optional mask (container or MaskView).
        accum: Optional accumulator.
        op: Unary operator (e.g. ``IDENTITY`` or ``LESS_EQUAL.bind_second(x)``).
        u: Input container of the same shape as ``out``.
        replace: Clear positions outside the mask.

    Raises:
        DimensionError: If shapes differ.
    """
    check_output(out)
    check_shapes("apply", out=out, u=u)

    present = u.bitmap.clone()
    result = op(u.values[present])
    t_values = torch.zeros(out.shape, dtype=result.dtype, device=out.device)
    t_values[present] = result
    write_back(out, mask, accum, present, t_values, replace)


def ewise_add(
    out: BitmapContainer,
    mask: MaskLike,
    accum: Accumulator,
    op: Union[BinaryOp, Monoid],
    a: Any,
    b: Any,
    replace: bool = False,
) -> None:
    """
    Elementwise combine over the union of the present positions of a and b.

    Where both are present the result is ``op(a, b)``. Where only one is
    present, the missing side contributes ``op.identity`` if the operator
    carries one; otherwise the present value passes through unchanged.

    Example:
        >>> ewise_add(w, None, None, MIN, u, v)   # w = min(u, v), union
    """
    check_output(out)
    check_shapes("ewise_add", out=out, a=a, b=b)
    binop = _binary(op)

    a_present, b_present = a.bitmap, b.bitmap
    both = a_present & b_present
    only_a = a_present & ~b_present
    only_b = b_present & ~a_present

    t_values = torch.zeros(out.shape, dtype=out.dtype, device=out.device)
    t_values[both] = binop(a.values[both], b.values[both]).to(out.dtype)

    a_only_values = a.values[only_a]
    b_only_values = b.values[only_b]
    if binop.identity is not None:
        a_only_values = binop(
            a_only_values, torch.full_like(a_only_values, cast_identity(binop.identity, b.dtype), dtype=b.dtype)
        )
        b_only_values = binop(
            torch.full_like(b_only_values, cast_identity(binop.identity, a.dtype), dtype=a.dtype), b_only_values
        )
    t_values[only_a] = a_only_values.to(out.dtype)
    t_values[only_b] = b_only_values.to(out.dtype)

    write_back(out, mask, accum, a_present | b_present, t_values, replace)


def ewise_mult(
    out: BitmapContainer,
    mask: MaskLike,
    accum: Accumulator,
    op: Union[BinaryOp, Monoid],
    a: Any,
    b: Any,
    replace: bool = False,
) -> None:
    """Elementwise combine over the intersection of the present positions."""
    check_output(out)
    check_shapes("ewise_mult", out=out, a=a, b=b)
    binop = _binary(op)

    both = a.bitmap & b.bitmap
    t_values = torch.zeros(out.shape, dtype=out.dtype, device=out.device)
    t_values[both] = binop(a.values[both], b.values[both]).to(out.dtype)
    write_back(out, mask, accum, both, t_values, replace)
