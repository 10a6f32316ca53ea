"""
Mask descriptors.

A plain Vector or Matrix passed as a mask is a value mask: a position is
selected when an entry is present there and its value is truthy. The
helpers below derive structural and complemented masks from a container
without copying it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple, Union

import torch

from ..errors import DimensionError


@dataclass(frozen=True)
class MaskView:
    """
    Selection of output positions derived from a container.

    Attributes:
        container: Vector, Matrix or TransposeView providing the pattern.
        structural: Select every present position regardless of its value.
        complemented: Invert the selection.
    """

    container: Any
    structural: bool = False
    complemented: bool = False

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(self.container.shape)

    def selection(self) -> torch.Tensor:
        """Boolean tensor, True where the output may be written."""
        selected = self.container.bitmap
        if not self.structural:
            selected = selected & self.container.values.to(torch.bool)
        if self.complemented:
            selected = ~selected
        return selected

    def __invert__(self) -> "MaskView":
        return replace(self, complemented=not self.complemented)


MaskLike = Union[None, MaskView, Any]


def structure(container: Any) -> MaskView:
    """Structural mask: selects the positions where ``container`` has an entry."""
    if isinstance(container, MaskView):
        return replace(container, structural=True)
    return MaskView(container, structural=True)


def complement(mask: Any) -> MaskView:
    """Complement of a container (value mask) or of an existing MaskView."""
    if isinstance(mask, MaskView):
        return ~mask
    return MaskView(mask, complemented=True)


def resolve_mask(mask: MaskLike, shape: Tuple[int, ...]) -> Optional[torch.Tensor]:
    """
    Turn a mask argument into a boolean selection tensor.

    Returns None when no mask is given.

    Raises:
        DimensionError: If the mask shape differs from ``shape``.
    """
    if mask is None:
        return None
    view = mask if isinstance(mask, MaskView) else MaskView(mask)
    if view.shape != tuple(shape):
        raise DimensionError(
            f"Mask shape {view.shape} does not match output shape {tuple(shape)}",
            context={"mask_shape": view.shape, "output_shape": tuple(shape)},
        )
    return view.selection()
