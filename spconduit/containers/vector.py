"""Bitmap-backed sparse vector."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

import torch

from ..algebra import SECOND, BinaryOp
from ..errors import InvalidValueError
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
    infer_dtype,
    resolve_device,
)


class Vector(BitmapContainer):
    """
    Sparse vector stored as a presence bitmap plus a dense value tensor.

    Existence checks and lookups are O(1); full scans are O(size). The size
    is fixed at construction.

    Attributes:
        shape: ``(size,)``.
        dtype: Torch dtype of the stored values.
        bitmap: ``torch.bool`` tensor, True where an entry is present.
        values: Value tensor; only meaningful where ``bitmap`` is True.

    Example:
        >>> v = Vector(4)
        >>> v.set_element(1, 2.5)
        >>> v.nvals(), v.extract_element(1)
        (1, 2.5)
        >>> str(v)
        '[-, 2.5, -, -]'
    """

    def __init__(self, size: int, dtype: DTypeLike = None, device: DeviceLike = None) -> None:
        """
        Create an empty vector.

        Args:
            size: Number of positions; must be positive.
            dtype: Value dtype (torch dtype or bool/int/float). Defaults to
                the default device's dtype.
            device: Device, device name or torch device.

        Raises:
            InvalidValueError: If size is not a positive integer.
        """
        self._size = check_dimension(size, "size")
        super().__init__((self._size,), dtype, device)

    # Alternate constructors -------------------------------------------------

    @classmethod
    def full(cls, size: int, value: Any, dtype: DTypeLike = None, device: DeviceLike = None) -> "Vector":
        """Vector with ``value`` stored at every position."""
        vec = cls(size, dtype if dtype is not None else infer_dtype(value), device)
        vec._publish(
            torch.ones(vec._size, dtype=torch.bool, device=vec.device),
            torch.full((vec._size,), value, dtype=vec.dtype, device=vec.device),
        )
        return vec

    @classmethod
    def from_dense(
        cls,
        values: Any,
        zero: Any = None,
        dtype: DTypeLike = None,
        device: DeviceLike = None,
    ) -> "Vector":
        """
        Build a vector from a dense array.

        Args:
            values: 1-D array-like. Its length is the vector size.
            zero: If given, entries equal to it are left absent.
            dtype: Value dtype; inferred from ``values`` when None.
            device: Target device.

        Raises:
            InvalidValueError: If ``values`` is empty or not 1-D.
        """
        tensor = as_value_tensor(values, dtype, resolve_device(device))
        if tensor.dim() != 1 or tensor.numel() == 0:
            raise InvalidValueError("from_dense requires a non-empty 1-D array")
        vec = cls(tensor.numel(), tensor.dtype, device)
        if zero is None:
            present = torch.ones_like(tensor, dtype=torch.bool)
        else:
            present = tensor != zero
        vec._publish(present, tensor)
        return vec

    @classmethod
    def from_tuples(
        cls,
        size: int,
        indices: Sequence[int],
        values: Sequence[Any],
        dup_op: Optional[BinaryOp] = SECOND,
        dtype: DTypeLike = None,
        device: DeviceLike = None,
    ) -> "Vector":
        """Vector of ``size`` built from parallel index/value arrays."""
        if dtype is None:
            dtype = as_value_tensor(values, None, torch.device("cpu")).dtype
        vec = cls(size, dtype, device)
        vec.build(indices, values, dup_op=dup_op)
        return vec

    def dup(self) -> "Vector":
        """Deep copy."""
        other = Vector(self._size, self.dtype, self.device)
        self._copy_into(other)
        return other

    # Contract ---------------------------------------------------------------

    def size(self) -> int:
        return self._size

    def _position(self, coords: Sequence[Any]) -> Tuple[int, ...]:
        (index,) = coords
        return (check_index(index, self._size),)

    def has_element(self, index: int) -> bool:
        """
        Return True if an entry is stored at ``index``.

        Raises:
            IndexOutOfBoundsError: If ``index >= size``.
        """
        return self._has(index)

    def extract_element(self, index: int) -> Any:
        """
        Return the value stored at ``index`` as a python scalar.

        Raises:
            IndexOutOfBoundsError: If ``index >= size``.
            NoValueError: If no entry is stored at ``index``.
        """
        return self._extract(index)

    def set_element(self, index: int, value: Any) -> None:
        """Insert or overwrite the entry at ``index``."""
        self._set((index,), value)

    def remove_element(self, index: int) -> None:
        """Delete the entry at ``index``; a no-op when absent."""
        self._remove((index,))

    def build(
        self,
        indices: Sequence[int],
        values: Sequence[Any],
        nvals: Optional[int] = None,
        dup_op: Optional[BinaryOp] = SECOND,
    ) -> None:
        """
        Replace the whole contents from parallel index/value arrays.

        Args:
            indices: Positions, each ``< size``.
            values: Values, same length as ``indices``.
            nvals: Use only the first ``nvals`` pairs. Defaults to all.
            dup_op: Folds values that share an index, in arrival order.

        Raises:
            IndexOutOfBoundsError: If an index is out of range.
            InvalidValueError: If the arrays differ in length.
        """
        keys = as_index_tensor(indices, nvals, self.device)
        check_index_tensor(keys, self._size, "index")
        self._build(keys, values, dup_op, nvals)

    def extract_tuples(self) -> TupleView:
        """
        Return the present ``(index, value)`` pairs in ascending index order.

        The returned view is lazy and can be iterated repeatedly;
        ``view.unzip()`` gives ``(indices, values)`` lists.
        """
        return super().extract_tuples()

    # Formatting -------------------------------------------------------------

    def __len__(self) -> int:
        return self._size

    def __str__(self) -> str:
        items = [
            format_value(self._values[i]) if present else "-"
            for i, present in enumerate(self._bitmap.tolist())
        ]
        return "[" + ", ".join(items) + "]"

    def __repr__(self) -> str:
        return f"Vector(size={self._size}, nvals={self._nvals}, dtype={self.dtype})"
