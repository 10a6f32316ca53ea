"""
Masked, accumulated write-back shared by every bulk operation.

Each operation first computes a candidate result ``T`` (a presence bitmap
and values) over the whole output domain from its inputs. ``write_back``
then applies the common contract:

1. ``Z = T`` without an accumulator; otherwise ``Z`` is the union of the
   output ``C`` and ``T`` with ``accum(C, T)`` where both are present.
2. At mask-selected positions ``C`` becomes exactly ``Z`` (an absent ``Z``
   entry deletes the output entry).
3. At unselected positions ``C`` is cleared when ``replace`` is True and
   left untouched otherwise.

The new contents are published in a single assignment, so an output may
alias any input.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple, Union

import torch

from ..algebra import BinaryOp, Monoid
from ..containers.base import BitmapContainer
from ..containers.mask import MaskLike, resolve_mask
from ..diagnostics import check_published
from ..errors import DimensionError, InvalidValueError

Accumulator = Optional[Union[BinaryOp, Monoid]]


def check_output(out: Any) -> BitmapContainer:
    """Ensure ``out`` is a writable container."""
    if not isinstance(out, BitmapContainer):
        raise InvalidValueError(
            f"Output must be a Vector or Matrix, got {type(out).__name__}"
        )
    return out


def check_shapes(op_name: str, **operands: Any) -> None:
    """Raise DimensionError unless every operand has the same shape."""
    shapes = {name: tuple(x.shape) for name, x in operands.items()}
    if len(set(shapes.values())) > 1:
        raise DimensionError(f"{op_name}: operand shapes differ {shapes}", context=shapes)


def check_ndim(op_name: str, name: str, operand: Any, ndim: int) -> None:
    if len(operand.shape) != ndim:
        kind = "vector" if ndim == 1 else "matrix"
        raise DimensionError(f"{op_name}: {name} must be a {kind}, got shape {tuple(operand.shape)}")


def fold_present(
    present: torch.Tensor,
    values: torch.Tensor,
    op: Union[BinaryOp, Monoid],
    dim: int,
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Fold the present values of ``values`` along ``dim`` with ``op``.

    Positions with no present value along ``dim`` come back absent. A monoid
    with a vectorised reducer folds in one call; anything else is folded
    pairwise in index order.

    Returns:
        ``(bitmap, values)`` with ``dim`` removed.
    """
    result_present = present.any(dim=dim)

    if isinstance(op, Monoid) and op.reducer is not None:
        identity = torch.full_like(values, op.identity_for(values.dtype))
        folded = op.reducer(torch.where(present, values, identity), dim)
        return result_present, folded

    stacked = values.movedim(dim, 0)
    stacked_present = present.movedim(dim, 0)
    acc = torch.zeros_like(stacked[0])
    acc_present = torch.zeros_like(stacked_present[0])
    for k in range(stacked.shape[0]):
        current = stacked[k]
        current_present = stacked_present[k]
        both = acc_present & current_present
        first = current_present & ~acc_present
        acc = acc.clone()
        if bool(both.any().item()):
            acc[both] = op(acc[both], current[both]).to(acc.dtype)
        acc[first] = current[first]
        acc_present = acc_present | current_present
    return result_present, acc


def write_back(
    out: BitmapContainer,
    mask: MaskLike,
    accum: Accumulator,
    t_present: torch.Tensor,
    t_values: torch.Tensor,
    replace: bool,
) -> None:
    """
    Publish a candidate result into ``out`` under mask/accumulate/replace.

    Args:
        out: Output container.
        mask: None, a container (value mask) or a MaskView.
        accum: None or the operator combining existing and new values.
        t_present: Candidate presence bitmap, same shape as ``out``.
        t_values: Candidate values, same shape as ``out``.
        replace: Clear unselected positions when True.
    """
    selection = resolve_mask(mask, out.shape)
    t_values = t_values.to(out.dtype)

    if accum is None:
        z_present, z_values = t_present, t_values
    else:
        both = out.bitmap & t_present
        z_values = torch.where(t_present, t_values, out.values)
        if bool(both.any().item()):
            z_values[both] = accum(out.values[both], t_values[both]).to(out.dtype)
        z_present = out.bitmap | t_present

    if selection is None:
        new_present, new_values = z_present, z_values
    else:
        kept = torch.zeros_like(out.bitmap) if replace else out.bitmap & ~selection
        new_present = (selection & z_present) | kept
        new_values = torch.where(selection, z_values, out.values)

    out._publish(new_present, new_values)
    check_published(out)
