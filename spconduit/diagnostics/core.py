"""Consistency checks for sparse containers."""

from __future__ import annotations

from typing import Any

import torch


def count_present(container: Any) -> int:
    """
    Count the positions of a container whose presence bit is set.

    Parameters
    ----------
    container:
        A Vector, Matrix or TransposeView.

    Returns
    -------
    int
        Population count of the container's bitmap.
    """
    return int(container.bitmap.sum().item())


def assert_consistent(container: Any) -> None:
    """
    Assert that a container's bookkeeping matches its storage.

    Checks that ``nvals()`` equals the bitmap population and that the value
    tensor has the same shape as the bitmap.

    Raises
    ------
    ValueError
        If the container is inconsistent.
    """
    bitmap = container.bitmap
    values = container.values
    if bitmap.dtype != torch.bool:
        raise ValueError(f"Container bitmap must be torch.bool, got {bitmap.dtype}.")
    if bitmap.shape != values.shape:
        raise ValueError(
            f"Container bitmap shape {tuple(bitmap.shape)} does not match "
            f"value shape {tuple(values.shape)}."
        )
    present = count_present(container)
    if present != container.nvals():
        raise ValueError(
            f"Container is not consistent: nvals()={container.nvals()} but "
            f"{present} positions are present."
        )


def is_nonnegative(container: Any) -> bool:
    """
    Return True if every present value of a container is >= 0.

    Absent positions are ignored; an empty container is non-negative.
    """
    present = container.values[container.bitmap]
    if present.numel() == 0:
        return True
    return bool((present >= 0).all().item())
