"""Device abstraction for sparse containers."""

from __future__ import annotations

import os

import torch

_DEVICE_ENV_VAR = "SPCONDUIT_DEVICE"


class Device:
    """
    Represents a logical compute device with an underlying PyTorch device and dtype settings.

    Containers allocate their bitmap and value tensors on ``torch_device``.
    The attributes should not be modified after construction.
    """

    def __init__(
        self,
        name: str,
        torch_device: torch.device,
        dtype: torch.dtype = torch.float64,
        index_dtype: torch.dtype = torch.int64,
    ) -> None:
        """
        Initialize a Device.

        Args:
            name: Logical device name ("cpu" or "cuda").
            torch_device: Underlying PyTorch device.
            dtype: Default value dtype for new containers.
            index_dtype: Dtype used for index tensors.
        """
        self.name = name
        self.torch_device = torch_device
        self.dtype = dtype
        self.index_dtype = index_dtype

    def __repr__(self) -> str:
        """Return a string representation of the device."""
        return (
            f"Device(name={self.name!r}, torch_device={self.torch_device}, "
            f"dtype={self.dtype})"
        )

    def as_torch_device(self) -> torch.device:
        """
        Return the underlying PyTorch device.

        Returns:
            The PyTorch device object.
        """
        return self.torch_device


def device(name: str) -> Device:
    """
    Create a Device instance from a device name.

    Supported device names:
        - "cpu": CPU tensors
        - "cuda": CUDA tensors (only if CUDA is available)

    Args:
        name: Device name string.

    Returns:
        A Device instance.

    Raises:
        RuntimeError: If "cuda" is requested but CUDA is not available.
        ValueError: If the device name is not supported.
    """
    if name == "cpu":
        return Device(name="cpu", torch_device=torch.device("cpu"))
    elif name == "cuda":
        if not torch.cuda.is_available():
            raise RuntimeError(
                "CUDA device requested but torch.cuda.is_available() is False"
            )
        return Device(name="cuda", torch_device=torch.device("cuda"))
    else:
        supported = ["cpu", "cuda"]
        raise ValueError(
            f"Unsupported device name: {name!r}. Supported devices: {supported}"
        )


def default_device() -> Device:
    """
    Return the default device.

    The name is read from the SPCONDUIT_DEVICE environment variable and
    falls back to "cpu".

    Returns:
        A Device instance.
    """
    return device(os.getenv(_DEVICE_ENV_VAR, "cpu").strip().lower() or "cpu")
