"""Bitmap-backed sparse containers and mask descriptors."""

from .base import SparseStorage, TupleView
from .mask import MaskView, complement, structure
from .matrix import Matrix, TransposeView
from .vector import Vector

__all__ = [
    "SparseStorage",
    "TupleView",
    "Vector",
    "Matrix",
    "TransposeView",
    "MaskView",
    "structure",
    "complement",
]
