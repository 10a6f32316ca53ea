"""Bitmap-backed sparse matrix and its transpose view."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

import torch

from ..algebra import SECOND, BinaryOp
from ..errors import DimensionError, InvalidValueError
from .base import (
    BitmapContainer,
    DeviceLike,
    DTypeLike,
    TupleView,
    as_index_tensor,
    as_value_tensor,
    check_dimension,
    check_index,
    check_index_tensor,
    format_value,
    resolve_device,
)


class Matrix(BitmapContainer):
    """
    Sparse matrix stored as a 2-D presence bitmap plus a dense value tensor.

    Absent entries carry no value; what they stand for (0, +inf, ...) is
    decided by the semiring of the operation that reads the matrix.

    Example:
        >>> A = Matrix(3, 3)
        >>> A.build([0, 1], [1, 2], [4.0, 5.0])
        >>> A.nvals()
        2
        >>> list(A.extract_tuples())
        [(0, 1, 4.0), (1, 2, 5.0)]
    """

    def __init__(
        self,
        nrows: int,
        ncols: int,
        dtype: DTypeLike = None,
        device: DeviceLike = None,
    ) -> None:
        """
        Create an empty ``nrows x ncols`` matrix.

        Raises:
            InvalidValueError: If either dimension is not a positive integer.
        """
        self._nrows = check_dimension(nrows, "nrows")
        self._ncols = check_dimension(ncols, "ncols")
        super().__init__((self._nrows, self._ncols), dtype, device)

    @classmethod
    def from_dense(
        cls,
        values: Any,
        zero: Any = None,
        dtype: DTypeLike = None,
        device: DeviceLike = None,
    ) -> "Matrix":
        """
        Build a matrix from a dense 2-D array.

        Entries equal to ``zero`` (when given) are left absent.
        """
        tensor = as_value_tensor(values, dtype, resolve_device(device))
        if tensor.dim() != 2 or tensor.numel() == 0:
            raise InvalidValueError("from_dense requires a non-empty 2-D array")
        mat = cls(tensor.shape[0], tensor.shape[1], tensor.dtype, device)
        if zero is None:
            present = torch.ones_like(tensor, dtype=torch.bool)
        else:
            present = tensor != zero
        mat._publish(present, tensor)
        return mat

    @classmethod
    def from_tuples(
        cls,
        nrows: int,
        ncols: int,
        rows: Sequence[int],
        cols: Sequence[int],
        values: Sequence[Any],
        dup_op: Optional[BinaryOp] = SECOND,
        dtype: DTypeLike = None,
        device: DeviceLike = None,
    ) -> "Matrix":
        """Matrix built from parallel row/col/value arrays."""
        if dtype is None:
            dtype = as_value_tensor(values, None, torch.device("cpu")).dtype
        mat = cls(nrows, ncols, dtype, device)
        mat.build(rows, cols, values, dup_op=dup_op)
        return mat

    def dup(self) -> "Matrix":
        """Deep copy."""
        other = Matrix(self._nrows, self._ncols, self.dtype, self.device)
        self._copy_into(other)
        return other

    # Contract ---------------------------------------------------------------

    def nrows(self) -> int:
        return self._nrows

    def ncols(self) -> int:
        return self._ncols

    @property
    def T(self) -> "TransposeView":
        """Read-only transposed view, usable as an operation input."""
        return TransposeView(self)

    def _position(self, coords: Sequence[Any]) -> Tuple[int, ...]:
        row, col = coords
        return (check_index(row, self._nrows, "row"), check_index(col, self._ncols, "col"))

    def has_element(self, row: int, col: int) -> bool:
        return self._has(row, col)

    def extract_element(self, row: int, col: int) -> Any:
        """
        Return the value stored at ``(row, col)``.

        Raises:
            IndexOutOfBoundsError: If either index is out of range.
            NoValueError: If no entry is stored there.
        """
        return self._extract(row, col)

    def set_element(self, row: int, col: int, value: Any) -> None:
        self._set((row, col), value)

    def remove_element(self, row: int, col: int) -> None:
        self._remove((row, col))

    def build(
        self,
        rows: Sequence[int],
        cols: Sequence[int],
        values: Sequence[Any],
        nvals: Optional[int] = None,
        dup_op: Optional[BinaryOp] = SECOND,
    ) -> None:
        """
        Replace the whole contents from parallel row/col/value arrays.

        Values sharing a ``(row, col)`` pair are folded with ``dup_op`` in
        arrival order.

        Raises:
            IndexOutOfBoundsError: If a row or column index is out of range.
            InvalidValueError: If the arrays differ in length.
        """
        row_idx = as_index_tensor(rows, nvals, self.device)
        col_idx = as_index_tensor(cols, nvals, self.device)
        if row_idx.numel() != col_idx.numel():
            raise InvalidValueError(
                f"build received {row_idx.numel()} row indices but {col_idx.numel()} column indices"
            )
        check_index_tensor(row_idx, self._nrows, "row")
        check_index_tensor(col_idx, self._ncols, "col")
        self._build(row_idx * self._ncols + col_idx, values, dup_op, nvals)

    def extract_tuples(self) -> TupleView:
        """
        Return the present ``(row, col, value)`` triples in row-major order.

        ``view.unzip()`` gives ``(rows, cols, values)`` lists.
        """
        return super().extract_tuples()

    # Formatting -------------------------------------------------------------

    def __str__(self) -> str:
        lines = []
        for i in range(self._nrows):
            items = [
                format_value(self._values[i, j]) if present else "-"
                for j, present in enumerate(self._bitmap[i].tolist())
            ]
            lines.append("[" + ", ".join(items) + "]")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Matrix(nrows={self._nrows}, ncols={self._ncols}, "
            f"nvals={self._nvals}, dtype={self.dtype})"
        )


class TransposeView:
    """Read-only transpose of a Matrix; storage is shared, not copied."""

    def __init__(self, matrix: Matrix) -> None:
        if not isinstance(matrix, Matrix):
            raise DimensionError(f"Only a Matrix can be transposed, got {type(matrix).__name__}")
        self._matrix = matrix

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._matrix.ncols(), self._matrix.nrows())

    @property
    def dtype(self) -> torch.dtype:
        return self._matrix.dtype

    @property
    def device(self) -> torch.device:
        return self._matrix.device

    @property
    def bitmap(self) -> torch.Tensor:
        return self._matrix.bitmap.T

    @property
    def values(self) -> torch.Tensor:
        return self._matrix.values.T

    @property
    def T(self) -> Matrix:
        return self._matrix

    def nrows(self) -> int:
        return self._matrix.ncols()

    def ncols(self) -> int:
        return self._matrix.nrows()

    def nvals(self) -> int:
        return self._matrix.nvals()

    def extract_tuples(self) -> TupleView:
        return TupleView(self)

    def __repr__(self) -> str:
        return f"TransposeView({self._matrix!r})"
