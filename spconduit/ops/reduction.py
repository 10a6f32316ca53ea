"""Reductions of a matrix to a vector and of any container to a scalar."""

from __future__ import annotations

import functools
from typing import Any, Optional, Union

import torch

from ..algebra import BinaryOp, Monoid
from ..containers.base import BitmapContainer
from ..containers.mask import MaskLike
from ..errors import DimensionError, NoValueError
from .engine import Accumulator, check_ndim, check_output, fold_present, write_back


def reduce(
    out: BitmapContainer,
    mask: MaskLike,
    accum: Accumulator,
    op: Union[Monoid, BinaryOp],
    A: Any,
    replace: bool = False,
) -> None:
    """
    Row-wise fold ``out[i] = op over j of A[i, j]``.

    Rows without entries are absent in the candidate result. Pass ``A.T``
    to fold columns instead.

    Raises:
        DimensionError: If ``out.size() != A.nrows()``.
    """
    check_output(out)
    check_ndim("reduce", "A", A, 2)
    check_ndim("reduce", "out", out, 1)
    if out.shape[0] != A.shape[0]:
        raise DimensionError(
            f"reduce: out{tuple(out.shape)} does not match the {A.shape[0]} rows of A"
        )

    t_present, t_values = fold_present(A.bitmap, A.values, op, dim=1)
    write_back(out, mask, accum, t_present, t_values, replace)


def reduce_to_scalar(
    op: Union[Monoid, BinaryOp],
    container: Any,
    accum: Optional[BinaryOp] = None,
    init: Any = None,
) -> Any:
    """
    Fold every present value of ``container`` to a python scalar.

    Args:
        op: Monoid or binary operator.
        container: Vector, Matrix or TransposeView.
        accum: If given, the result is ``accum(init, folded)``.
        init: Starting value for ``accum``, or the result for an empty
            container reduced with a plain binary operator.

    Raises:
        NoValueError: If the container is empty, ``op`` has no identity and
            no ``init`` is given.
    """
    values = container.values[container.bitmap]
    if values.numel() == 0:
        if isinstance(op, Monoid):
            result = op.identity_for(container.dtype)
        elif init is not None:
            return init
        else:
            raise NoValueError("Cannot reduce an empty container without an identity")
    elif isinstance(op, Monoid) and op.reducer is not None:
        result = op.reducer(values, 0).item()
    else:
        result = functools.reduce(op, values).item()

    if accum is not None and init is not None:
        result = accum(
            torch.as_tensor(init, dtype=container.dtype), torch.as_tensor(result, dtype=container.dtype)
        ).item()
    return result
