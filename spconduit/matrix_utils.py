"""
Matrix construction and scaling helpers built on the bulk operations.

References:
    - The GraphBLAS C API Specification, v1.3 (reduce, apply, mxm).
"""

from __future__ import annotations

from typing import Any

import torch

from .algebra import ARITHMETIC, MULTIPLICATIVE_INVERSE, PLUS_MONOID
from .containers import Matrix, Vector
from .containers.base import DeviceLike, DTypeLike
from .errors import DimensionError, InvalidValueError
from .logging import get_logger
from .ops import apply, mxm, reduce

logger = get_logger("matrix_utils")


def diag(v: Vector) -> Matrix:
    """
    Square matrix whose diagonal holds the present entries of ``v``.

    Args:
        v: Vector of size n.

    Returns:
        n x n Matrix with ``M[i, i] = v[i]`` where ``v`` has an entry and
        every other position absent.
    """
    indices, values = v.extract_tuples().unzip()
    mat = Matrix(v.size(), v.size(), v.dtype, v.device)
    mat.build(indices, indices, values)
    return mat


def scaled_identity(
    n: int,
    val: Any = 1,
    dtype: DTypeLike = None,
    device: DeviceLike = None,
) -> Matrix:
    """n x n matrix with ``val`` on every diagonal position."""
    mat = Matrix(n, n, dtype, device)
    indices = list(range(n))
    mat.build(indices, indices, [val] * n)
    return mat


def split(A: Matrix, L: Matrix, U: Matrix) -> None:
    """
    Partition the entries of ``A`` around the diagonal.

    Entries with ``row >= col`` (the diagonal included) are written to
    ``L``, entries with ``row < col`` to ``U``. Both outputs are replaced
    entirely.

    Raises:
        DimensionError: If ``L`` or ``U`` differ in shape from ``A``.
    """
    if L.shape != A.shape or U.shape != A.shape:
        raise DimensionError(
            f"split: L{L.shape} and U{U.shape} must both match A{A.shape}",
            context={"A": A.shape, "L": L.shape, "U": U.shape},
        )

    positions = torch.nonzero(A.bitmap)
    values = A.values[A.bitmap]
    lower = positions[:, 0] >= positions[:, 1]
    upper = ~lower

    L.build(positions[lower, 0], positions[lower, 1], values[lower])
    U.build(positions[upper, 0], positions[upper, 1], values[upper])


def _inverse_sums(A: Any, what: str) -> Vector:
    """Reciprocal of every row sum of ``A`` (pass ``A.T`` for columns)."""
    dtype = A.dtype if A.dtype.is_floating_point else torch.get_default_dtype()
    w = Vector(A.shape[0], dtype, A.device)
    reduce(w, None, None, PLUS_MONOID, A)
    if w.nvals() != A.shape[0]:
        empty = [i for i in range(A.shape[0]) if not w.has_element(i)]
        raise InvalidValueError(
            f"Cannot normalize: {what} {empty} have no entries",
            context={what: empty},
        )
    # MULTIPLICATIVE_INVERSE raises on a zero sum
    apply(w, None, None, MULTIPLICATIVE_INVERSE, w)
    return w


def normalize_rows(A: Matrix) -> None:
    """
    Scale every row of ``A`` in place so that it sums to 1.

    Computes ``A = diag(1 / rowsum(A)) (+.x) A`` under the arithmetic
    semiring.

    Raises:
        InvalidValueError: If a row has no entries or sums to zero. ``A`` is
            left unchanged in that case.
    """
    w = _inverse_sums(A, "rows")
    logger.debug("normalize_rows: scaling %d rows", w.nvals())
    mxm(A, None, None, ARITHMETIC, diag(w), A)


def normalize_cols(A: Matrix) -> None:
    """
    Scale every column of ``A`` in place so that it sums to 1.

    Computes ``A = A (+.x) diag(1 / colsum(A))``.

    Raises:
        InvalidValueError: If a column has no entries or sums to zero.
    """
    w = _inverse_sums(A.T, "cols")
    logger.debug("normalize_cols: scaling %d columns", w.nvals())
    mxm(A, None, None, ARITHMETIC, A, diag(w))
