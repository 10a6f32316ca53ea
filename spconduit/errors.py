"""Error hierarchy for Sparse Conduit.

Every failure raised by the containers, the operation engine and the graph
algorithms is a ``GraphBLASError`` tagged with an ``ErrorKind``. Each
subclass also derives from the closest builtin exception so callers may
catch ``ValueError``/``IndexError``/``LookupError`` as usual.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional


class ErrorKind(str, Enum):
    """Tag identifying the category of a ``GraphBLASError``."""

    DIMENSION = "dimension"
    INDEX_OUT_OF_BOUNDS = "index_out_of_bounds"
    NO_VALUE = "no_value"
    INVALID_VALUE = "invalid_value"


class GraphBLASError(Exception):
    """Base exception for Sparse Conduit failures."""

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.context = dict(context) if context else {}

    def log_message(self) -> str:
        if not self.context:
            return str(self)
        return f"{self}: {self.context}"


class DimensionError(GraphBLASError, ValueError):
    """Shape mismatch between operands or containers."""

    kind = ErrorKind.DIMENSION


class IndexOutOfBoundsError(GraphBLASError, IndexError):
    """An index argument exceeds a container's declared size."""

    kind = ErrorKind.INDEX_OUT_OF_BOUNDS


class NoValueError(GraphBLASError, LookupError):
    """An absent position was read through a must-exist accessor."""

    kind = ErrorKind.NO_VALUE


class InvalidValueError(GraphBLASError, ValueError):
    """A construction-time or argument precondition was violated."""

    kind = ErrorKind.INVALID_VALUE


__all__ = [
    "ErrorKind",
    "GraphBLASError",
    "DimensionError",
    "IndexOutOfBoundsError",
    "NoValueError",
    "InvalidValueError",
]
