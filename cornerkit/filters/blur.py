"""
Complete normalised 1-D passes: ordinary correlation for the interior plus
border-band renormalisation from ``convolve_border``.
"""

import numpy as np
from scipy.ndimage import correlate1d

from cornerkit.filters import convolve_border
from cornerkit.structs.image import as_image_array
from cornerkit.structs.kernel import Kernel1D


def convolve_normalized(kernel: Kernel1D, input, output, axis: int = 1) -> None:
    """Convolve *input* with *kernel* along *axis*, writing every sample of *output*.

    Parameters
    ----------
    kernel : Kernel1D
        Kernel being convolved.
    input, output : ImageView or np.ndarray
        Equally sized images of the same type; must not overlap.
    axis : int
        1 convolves along rows (horizontal), 0 along columns (vertical).
    """
    if axis == 1:
        convolve_border.horizontal(kernel, input, output)
    elif axis == 0:
        convolve_border.vertical(kernel, input, output)
    else:
        raise ValueError(f"axis must be 0 or 1, got {axis}")

    src = as_image_array(input)
    dst = as_image_array(output)
    radius = kernel.radius
    n = src.shape[axis]
    interior = [slice(None), slice(None)]
    interior[axis] = slice(radius, n - radius)
    interior = tuple(interior)

    weights = kernel.data.astype(np.float64)
    total = correlate1d(src.astype(np.float64), weights, axis=axis,
                        mode="nearest")[interior]
    if kernel.is_integer:
        # integer products are exact in float64 for 8/16-bit samples
        total = np.rint(total).astype(np.int64)
        divisor = int(kernel.data.astype(np.int64).sum())
        dst[interior] = convolve_border.divide_truncate(
            total, divisor).astype(dst.dtype)
    else:
        dst[interior] = (total / weights.sum()).astype(dst.dtype)


def blur_normalized(kernel: Kernel1D, image) -> np.ndarray:
    """Separable blur: horizontal then vertical pass, returning a new array."""
    src = as_image_array(image)
    tmp = np.empty_like(src)
    out = np.empty_like(src)
    convolve_normalized(kernel, src, tmp, axis=1)
    convolve_normalized(kernel, tmp, out, axis=0)
    return out
