"""
Odd-length 1-D convolution kernels.

Weights are indexed symmetrically from -radius to +radius; ``data[k]``
multiplies the source sample at offset ``k - radius``.
"""

import math

import numpy as np


class Kernel1D:
    """Immutable 1-D kernel with integer or floating-point weights."""

    def __init__(self, data):
        data = np.array(data)
        if data.ndim != 1 or data.size == 0 or data.size % 2 == 0:
            raise ValueError("kernel must be a non-empty, odd-length 1-D sequence")
        if np.issubdtype(data.dtype, np.integer):
            data = data.astype(np.int32)
        elif np.issubdtype(data.dtype, np.floating):
            data = data.astype(np.float32)
        else:
            raise TypeError(f"unsupported kernel weight type {data.dtype}")
        data.setflags(write=False)
        self.data = data

    @property
    def width(self) -> int:
        return self.data.size

    @property
    def radius(self) -> int:
        return (self.data.size - 1) // 2

    @property
    def is_integer(self) -> bool:
        return np.issubdtype(self.data.dtype, np.integer)

    def __repr__(self):
        return f"Kernel1D({self.data.tolist()})"


def gaussian_kernel(sigma: float, radius: int = None) -> Kernel1D:
    """Floating-point Gaussian kernel normalised to sum to one.

    Parameters
    ----------
    sigma : float
        Standard deviation in pixels.
    radius : int, optional
        Half-width of the kernel.  Defaults to ``ceil(3 * sigma)``.
    """
    if sigma <= 0:
        raise ValueError("sigma must be positive")
    if radius is None:
        radius = max(1, int(math.ceil(3 * sigma)))
    x = np.arange(-radius, radius + 1, dtype=np.float64)
    w = np.exp(-0.5 * (x / sigma) ** 2)
    return Kernel1D((w / w.sum()).astype(np.float32))


def gaussian_kernel_int(sigma: float, radius: int = None,
                        max_value: int = 100) -> Kernel1D:
    """Integer Gaussian approximation for ``uint8`` / ``int16`` images.

    The edge taps are scaled to 1 and the rest rounded, capped so the
    centre weight does not exceed *max_value*.
    """
    base = gaussian_kernel(sigma, radius).data.astype(np.float64)
    scale = min(1.0 / base[0], max_value / base.max())
    weights = np.maximum(np.rint(base * scale), 1).astype(np.int32)
    return Kernel1D(weights)
