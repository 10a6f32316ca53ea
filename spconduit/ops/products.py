"""
Semiring products: vxm, mxv and mxm.

``out[j] = combine_i extend(u[i], A[i, j])`` where the fold only ranges over
the ``i`` at which both operands hold an entry. Absent entries stand for the
semiring's ``combine`` identity and are skipped rather than materialised;
an output position with no contributing pair stays absent.

The partial products are formed densely with broadcasting and folded with
``fold_present``. ``mxm`` works through row blocks so no more than
``_BLOCK_ELEMENTS`` partial products are alive at once.
"""

from __future__ import annotations

from typing import Any

import torch

from ..algebra import Semiring
from ..containers.base import BitmapContainer
from ..containers.mask import MaskLike
from ..errors import DimensionError
from .engine import Accumulator, check_ndim, check_output, fold_present, write_back

_BLOCK_ELEMENTS = 1 << 22


def vxm(
    out: BitmapContainer,
    mask: MaskLike,
    accum: Accumulator,
    semiring: Semiring,
    u: Any,
    A: Any,
    replace: bool = False,
) -> None:
    """
    Vector-matrix product ``out<mask> (accum)= u (+.x) A``.

    Args:
        out: Output vector of size ``A.ncols()``.
        mask: Optional mask.
        accum: Optional accumulator.
        semiring: Supplies ``combine`` (``add``) and ``extend`` (``multiply``).
        u: Input vector of size ``A.nrows()``.
        A: Input matrix or TransposeView.
        replace: Clear positions outside the mask.

    Raises:
        DimensionError: On any shape mismatch, before ``out`` is touched.
    """
    check_output(out)
    check_ndim("vxm", "u", u, 1)
    check_ndim("vxm", "A", A, 2)
    check_ndim("vxm", "out", out, 1)
    n, m = A.shape
    if u.shape[0] != n or out.shape[0] != m:
        raise DimensionError(
            f"vxm: u{tuple(u.shape)} x A{tuple(A.shape)} -> out{tuple(out.shape)} is not conformant"
        )

    products = semiring.multiply(u.values[:, None], A.values)
    present = u.bitmap[:, None] & A.bitmap
    t_present, t_values = fold_present(present, products, semiring.add, dim=0)
    write_back(out, mask, accum, t_present, t_values, replace)


def mxv(
    out: BitmapContainer,
    mask: MaskLike,
    accum: Accumulator,
    semiring: Semiring,
    A: Any,
    u: Any,
    replace: bool = False,
) -> None:
    """Matrix-vector product ``out<mask> (accum)= A (+.x) u``."""
    check_output(out)
    check_ndim("mxv", "A", A, 2)
    check_ndim("mxv", "u", u, 1)
    check_ndim("mxv", "out", out, 1)
    n, k = A.shape
    if u.shape[0] != k or out.shape[0] != n:
        raise DimensionError(
            f"mxv: A{tuple(A.shape)} x u{tuple(u.shape)} -> out{tuple(out.shape)} is not conformant"
        )

    products = semiring.multiply(A.values, u.values[None, :])
    present = A.bitmap & u.bitmap[None, :]
    t_present, t_values = fold_present(present, products, semiring.add, dim=1)
    write_back(out, mask, accum, t_present, t_values, replace)


def mxm(
    out: BitmapContainer,
    mask: MaskLike,
    accum: Accumulator,
    semiring: Semiring,
    A: Any,
    B: Any,
    replace: bool = False,
) -> None:
    """
    Matrix-matrix product ``out<mask> (accum)= A (+.x) B``.

    Raises:
        DimensionError: Unless ``A`` is n x k, ``B`` is k x m and ``out``
            is n x m.
    """
    check_output(out)
    check_ndim("mxm", "A", A, 2)
    check_ndim("mxm", "B", B, 2)
    check_ndim("mxm", "out", out, 2)
    n, k = A.shape
    k2, m = B.shape
    if k != k2 or tuple(out.shape) != (n, m):
        raise DimensionError(
            f"mxm: A{tuple(A.shape)} x B{tuple(B.shape)} -> out{tuple(out.shape)} is not conformant"
        )

    # Result rows are independent.
    rows_per_block = max(1, _BLOCK_ELEMENTS // max(1, k * m))
    present_parts, value_parts = [], []
    for start in range(0, n, rows_per_block):
        a_values = A.values[start : start + rows_per_block]
        a_bitmap = A.bitmap[start : start + rows_per_block]
        products = semiring.multiply(a_values[:, :, None], B.values[None, :, :])
        present = a_bitmap[:, :, None] & B.bitmap[None, :, :]
        block_present, block_values = fold_present(present, products, semiring.add, dim=1)
        present_parts.append(block_present)
        value_parts.append(block_values)
    t_present = torch.cat(present_parts)
    t_values = torch.cat(value_parts)
    write_back(out, mask, accum, t_present, t_values, replace)
