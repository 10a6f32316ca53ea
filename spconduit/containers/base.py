"""
Bitmap-backed storage shared by the sparse containers.

Every container keeps two dense tensors of identical shape: a ``torch.bool``
presence bitmap and a value tensor. A value is only meaningful where its
presence bit is set. The ``SparseStorage`` protocol is the read interface the
operation engine is written against; any storage backend exposing it can be
used as an operand.
"""

from __future__ import annotations

import operator
from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple, Union

import numpy as np
import torch

from ..algebra import SECOND, BinaryOp
from ..core.device import Device, default_device
from ..errors import DimensionError, IndexOutOfBoundsError, InvalidValueError, NoValueError

DeviceLike = Union[None, str, torch.device, Device]
DTypeLike = Union[None, torch.dtype, type]

_PYTHON_DTYPES = {bool: torch.bool, int: torch.int64, float: torch.float64}


class SparseStorage(Protocol):
    """Read interface consumed by the bulk operations."""

    @property
    def shape(self) -> Tuple[int, ...]:
        ...

    @property
    def dtype(self) -> torch.dtype:
        ...

    @property
    def bitmap(self) -> torch.Tensor:
        ...

    @property
    def values(self) -> torch.Tensor:
        ...

    def nvals(self) -> int:
        ...


def resolve_device(device: DeviceLike) -> torch.device:
    """Map a Device, name or torch device to a ``torch.device``."""
    if device is None:
        return default_device().as_torch_device()
    if isinstance(device, Device):
        return device.as_torch_device()
    return torch.device(device)


def resolve_dtype(dtype: DTypeLike) -> torch.dtype:
    """Map a torch dtype or one of ``bool``/``int``/``float`` to a torch dtype."""
    if dtype is None:
        return default_device().dtype
    if isinstance(dtype, torch.dtype):
        return dtype
    if dtype in _PYTHON_DTYPES:
        return _PYTHON_DTYPES[dtype]
    raise InvalidValueError(f"Unsupported dtype: {dtype!r}")


def as_value_tensor(values: Any, dtype: DTypeLike, device: torch.device) -> torch.Tensor:
    """
    Convert array-like values to a 1-D or N-D tensor.

    Python floats become float64 rather than torch's float32 default.
    """
    if dtype is not None:
        return torch.as_tensor(values, dtype=resolve_dtype(dtype), device=device)
    if isinstance(values, (torch.Tensor, np.ndarray)):
        return torch.as_tensor(values, device=device)
    tensor = torch.as_tensor(values, device=device)
    if tensor.is_floating_point():
        tensor = tensor.to(default_device().dtype)
    return tensor


def infer_dtype(value: Any) -> torch.dtype:
    """Dtype used to store a single python/numpy/torch scalar."""
    if isinstance(value, torch.Tensor):
        return value.dtype
    if isinstance(value, np.generic):
        return torch.from_numpy(np.asarray(value)).dtype
    for py_type in (bool, int, float):
        if isinstance(value, py_type):
            return _PYTHON_DTYPES[py_type]
    raise InvalidValueError(f"Cannot infer dtype from value {value!r}")


def check_dimension(value: Any, name: str) -> int:
    """Validate a container dimension: a positive integer."""
    try:
        dim = operator.index(value)
    except TypeError:
        raise InvalidValueError(f"{name} must be an integer, got {value!r}")
    if dim <= 0:
        raise InvalidValueError(f"{name} must be positive, got {dim}")
    return dim


def check_index(value: Any, bound: int, name: str = "index") -> int:
    """Validate an index argument against ``[0, bound)``."""
    try:
        idx = operator.index(value)
    except TypeError:
        raise IndexOutOfBoundsError(f"{name} must be an integer, got {value!r}")
    if idx < 0 or idx >= bound:
        raise IndexOutOfBoundsError(
            f"{name} {idx} out of bounds for dimension {bound}",
            context={name: idx, "bound": bound},
        )
    return idx


def as_index_tensor(indices: Any, count: Optional[int], device: torch.device) -> torch.Tensor:
    idx = torch.as_tensor(indices, dtype=torch.int64, device=device).reshape(-1)
    if count is not None:
        if count < 0 or count > idx.numel():
            raise InvalidValueError(f"nvals {count} exceeds the {idx.numel()} indices supplied")
        idx = idx[:count]
    return idx


def check_index_tensor(idx: torch.Tensor, bound: int, name: str) -> None:
    if idx.numel() and bool(((idx < 0) | (idx >= bound)).any().item()):
        bad = idx[(idx < 0) | (idx >= bound)][0].item()
        raise IndexOutOfBoundsError(
            f"{name} {bad} out of bounds for dimension {bound}",
            context={name: bad, "bound": bound},
        )


def fold_duplicates(
    keys: torch.Tensor, values: torch.Tensor, dup_op: Optional[BinaryOp]
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Resolve duplicate keys in a batch of (key, value) pairs.

    Values sharing a key are folded pairwise with ``dup_op`` in arrival
    order. Returns the distinct keys (first-arrival order) and their values.
    """
    if keys.numel() == torch.unique(keys).numel():
        return keys, values

    op = dup_op if dup_op is not None else SECOND
    folded: Dict[int, torch.Tensor] = {}
    for key, value in zip(keys.tolist(), values):
        if key in folded:
            folded[key] = op(folded[key], value).to(values.dtype)
        else:
            folded[key] = value
    out_keys = torch.tensor(list(folded.keys()), dtype=torch.int64, device=keys.device)
    out_values = torch.stack(list(folded.values()))
    return out_keys, out_values


def format_value(value: torch.Tensor) -> str:
    return str(value.item())


class TupleView:
    """
    Lazy, restartable sequence of the present entries of a container.

    Iterating yields ``(index, value)`` for vectors and ``(row, col, value)``
    for matrices, in ascending (row-major) order. Each iteration reads the
    container's current contents.
    """

    def __init__(self, container: "BitmapContainer") -> None:
        self._container = container

    def __len__(self) -> int:
        return self._container.nvals()

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        bitmap = self._container.bitmap
        values = self._container.values
        for position in torch.nonzero(bitmap).tolist():
            yield (*position, values[tuple(position)].item())

    def unzip(self) -> Tuple[List[Any], ...]:
        """Return one list per coordinate followed by the list of values."""
        bitmap = self._container.bitmap
        positions = torch.nonzero(bitmap)
        coords = [positions[:, axis].tolist() for axis in range(bitmap.dim())]
        return (*coords, self._container.values[bitmap].tolist())

    def __repr__(self) -> str:
        return f"TupleView({list(self)!r})"


class BitmapContainer:
    """Common implementation of the bitmap-backed Vector and Matrix."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, shape: Tuple[int, ...], dtype: DTypeLike, device: DeviceLike) -> None:
        self._dtype = resolve_dtype(dtype)
        self._device = resolve_device(device)
        self._bitmap = torch.zeros(shape, dtype=torch.bool, device=self._device)
        self._values = torch.zeros(shape, dtype=self._dtype, device=self._device)
        self._nvals = 0

    # Storage interface ------------------------------------------------------

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(self._bitmap.shape)

    @property
    def dtype(self) -> torch.dtype:
        return self._dtype

    @property
    def device(self) -> torch.device:
        return self._device

    @property
    def bitmap(self) -> torch.Tensor:
        return self._bitmap

    @property
    def values(self) -> torch.Tensor:
        return self._values

    def nvals(self) -> int:
        return self._nvals

    def _publish(self, bitmap: torch.Tensor, values: torch.Tensor) -> None:
        """Replace the whole contents in one step."""
        if tuple(bitmap.shape) != self.shape or tuple(values.shape) != self.shape:
            raise DimensionError(
                f"Cannot publish shape {tuple(bitmap.shape)} into container of shape {self.shape}"
            )
        self._bitmap = bitmap.to(device=self._device, dtype=torch.bool, copy=True)
        self._values = values.to(device=self._device, dtype=self._dtype, copy=True)
        self._nvals = int(self._bitmap.sum().item())

    # Element access ---------------------------------------------------------

    def _position(self, coords: Sequence[Any]) -> Tuple[int, ...]:
        raise NotImplementedError

    def _has(self, *coords: Any) -> bool:
        pos = self._position(coords)
        return bool(self._bitmap[pos].item())

    def _extract(self, *coords: Any) -> Any:
        pos = self._position(coords)
        if not bool(self._bitmap[pos].item()):
            raise NoValueError(f"No value stored at {pos if len(pos) > 1 else pos[0]}")
        return self._values[pos].item()

    def _set(self, coords: Sequence[Any], value: Any) -> None:
        pos = self._position(coords)
        self._values[pos] = torch.as_tensor(value, dtype=self._dtype, device=self._device)
        if not bool(self._bitmap[pos].item()):
            self._bitmap[pos] = True
            self._nvals += 1

    def _remove(self, coords: Sequence[Any]) -> None:
        pos = self._position(coords)
        if bool(self._bitmap[pos].item()):
            self._bitmap[pos] = False
            self._nvals -= 1

    def _build(
        self,
        keys: torch.Tensor,
        values: Any,
        dup_op: Optional[BinaryOp],
        count: Optional[int] = None,
    ) -> None:
        vals = as_value_tensor(values, self._dtype, self._device).reshape(-1)
        if count is not None:
            vals = vals[:count]
        if vals.numel() != keys.numel():
            raise InvalidValueError(
                f"build received {keys.numel()} indices but {vals.numel()} values"
            )
        keys, vals = fold_duplicates(keys, vals, dup_op)

        numel = self._bitmap.numel()
        bitmap = torch.zeros(numel, dtype=torch.bool, device=self._device)
        flat = torch.zeros(numel, dtype=self._dtype, device=self._device)
        if keys.numel():
            bitmap[keys] = True
            flat[keys] = vals
        self._publish(bitmap.reshape(self.shape), flat.reshape(self.shape))

    # Whole-container operations ---------------------------------------------

    def clear(self) -> None:
        """Remove every entry; the shape is unchanged."""
        self._bitmap = torch.zeros(self.shape, dtype=torch.bool, device=self._device)
        self._nvals = 0

    def extract_tuples(self) -> TupleView:
        """Return a lazy, restartable view of the present entries."""
        return TupleView(self)

    def to_dense(self, fill: Any = 0) -> torch.Tensor:
        """Dense copy with absent positions set to ``fill``."""
        if self._dtype == torch.bool:
            fill = bool(fill)
        filler = torch.full_like(self._values, fill)
        return torch.where(self._bitmap, self._values, filler)

    def to_numpy(self, fill: Any = 0) -> np.ndarray:
        return self.to_dense(fill).detach().cpu().numpy()

    def _copy_into(self, other: "BitmapContainer") -> None:
        other._bitmap = self._bitmap.clone()
        other._values = self._values.clone()
        other._nvals = self._nvals

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitmapContainer) or type(self) is not type(other):
            return NotImplemented
        if self.shape != other.shape or self._nvals != other._nvals:
            return False
        if not torch.equal(self._bitmap, other._bitmap.to(self._device)):
            return False
        mine = self._values[self._bitmap]
        theirs = other._values.to(self._device)[other._bitmap.to(self._device)]
        return bool((mine == theirs).all().item())

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result
