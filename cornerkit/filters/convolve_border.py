"""
Normalised 1-D convolution restricted to an image's border band.

Near the edge a kernel of radius r hangs over the image.  Only the taps
whose source sample lies inside the image are used, and the weighted sum is
divided by the sum of exactly those taps, so a flat region stays flat right
up to the edge.  Interior samples are left for an ordinary convolution to
fill and are never written here.

Integer images accumulate in int64 and divide with truncation toward zero
before being narrowed back to the pixel type.
"""

import numpy as np

from cornerkit.errors import ImageTooSmallError
from cornerkit.structs.image import as_image_array
from cornerkit.structs.kernel import Kernel1D

_INTEGER_IMAGE_TYPES = (np.dtype(np.uint8), np.dtype(np.int16))
_FLOAT_IMAGE_TYPES = (np.dtype(np.float32),)


def horizontal(kernel: Kernel1D, input, output) -> None:
    """Convolve along rows, writing the leftmost and rightmost *r* columns.

    Parameters
    ----------
    kernel : Kernel1D
        Kernel being convolved.  Not modified.
    input : ImageView or np.ndarray
        Source image.  Not modified.
    output : ImageView or np.ndarray
        Destination image of the same size and type.  Only its vertical
        border bands are written.
    """
    src, dst, taps = _prepare(kernel, input, output)
    radius = kernel.radius
    width = src.shape[1]

    for x in range(radius):
        w = taps[radius - x:]
        dst[:, x] = _normalise(src[:, :x + radius + 1].astype(w.dtype) @ w,
                               w, dst.dtype)

    for x in range(width - radius, width):
        w = taps[:width - x + radius]
        dst[:, x] = _normalise(src[:, x - radius:].astype(w.dtype) @ w,
                               w, dst.dtype)


def vertical(kernel: Kernel1D, input, output) -> None:
    """Convolve along columns, writing the topmost and bottommost *r* rows.

    Parameters
    ----------
    kernel : Kernel1D
        Kernel being convolved.  Not modified.
    input : ImageView or np.ndarray
        Source image.  Not modified.
    output : ImageView or np.ndarray
        Destination image of the same size and type.  Only its horizontal
        border bands are written.
    """
    src, dst, taps = _prepare(kernel, input, output)
    radius = kernel.radius
    height = src.shape[0]

    for y in range(radius):
        w = taps[radius - y:]
        dst[y, :] = _normalise(w @ src[:y + radius + 1, :].astype(w.dtype),
                               w, dst.dtype)

    for y in range(height - radius, height):
        w = taps[:height - y + radius]
        dst[y, :] = _normalise(w @ src[y - radius:, :].astype(w.dtype),
                               w, dst.dtype)


def divide_truncate(total: np.ndarray, divisor) -> np.ndarray:
    """Integer division rounding toward zero, element-wise."""
    quotient = np.abs(total) // abs(divisor)
    return np.where((total < 0) != (divisor < 0), -quotient, quotient)


def _normalise(total: np.ndarray, weights: np.ndarray, dtype) -> np.ndarray:
    weight = weights.sum()
    if np.issubdtype(weights.dtype, np.integer):
        return divide_truncate(total, weight).astype(dtype)
    return (total / weight).astype(dtype)


def _prepare(kernel: Kernel1D, input, output):
    src = as_image_array(input)
    dst = as_image_array(output)
    radius = kernel.radius

    if src.shape != dst.shape:
        raise ValueError(
            f"input shape {src.shape} does not match output shape {dst.shape}")
    height, width = src.shape
    if width <= 2 * radius or height <= 2 * radius:
        raise ImageTooSmallError(
            f"{width}x{height} image is too small for kernel radius {radius}")
    if np.shares_memory(src, dst):
        raise ValueError("input and output images must not overlap")
    return src, dst, _kernel_taps(kernel, src.dtype, dst.dtype)


def _kernel_taps(kernel: Kernel1D, src_type, dst_type) -> np.ndarray:
    if src_type != dst_type:
        raise TypeError(f"input type {src_type} differs from output type {dst_type}")
    if src_type in _INTEGER_IMAGE_TYPES:
        if not kernel.is_integer:
            raise TypeError(f"{src_type} images require an integer kernel")
        return kernel.data.astype(np.int64)
    if src_type in _FLOAT_IMAGE_TYPES:
        if kernel.is_integer:
            raise TypeError(f"{src_type} images require a floating-point kernel")
        return kernel.data
    raise TypeError(f"unsupported image type {src_type}")
