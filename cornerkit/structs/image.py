"""
Strided image views over a shared 1-D sample buffer.

An ``ImageView`` addresses ``height`` rows of ``width`` samples, each row
``stride`` elements apart, starting at ``start_index`` in ``data``.  Several
views may alias regions of the same buffer; the view never reallocates it.
"""

import numpy as np
from numpy.lib.stride_tricks import as_strided

SUPPORTED_DTYPES = (np.dtype(np.uint8), np.dtype(np.int16), np.dtype(np.float32))


class ImageView:
    """Single-band image stored row-major in a contiguous buffer.

    Parameters
    ----------
    data : np.ndarray
        1-D contiguous buffer of ``uint8``, ``int16`` or ``float32`` samples.
    width, height : int
        Image size in pixels.
    stride : int, optional
        Elements between the starts of consecutive rows.  Defaults to *width*.
    start_index : int
        Index in *data* of pixel (0, 0).
    """

    def __init__(self, data: np.ndarray, width: int, height: int,
                 stride: int = None, start_index: int = 0):
        if stride is None:
            stride = width
        if data.ndim != 1 or not data.flags["C_CONTIGUOUS"]:
            raise ValueError("data must be a contiguous 1-D array")
        if data.dtype not in SUPPORTED_DTYPES:
            raise TypeError(f"unsupported sample type {data.dtype}")
        if width < 0 or height < 0:
            raise ValueError("width and height must be non-negative")
        if stride < width:
            raise ValueError(f"stride {stride} is smaller than width {width}")
        if start_index < 0:
            raise ValueError("start_index must be non-negative")
        if width > 0 and height > 0:
            last = start_index + (height - 1) * stride + width
            if last > data.size:
                raise ValueError(
                    f"view addresses element {last - 1} but buffer holds "
                    f"{data.size}")

        self.data = data
        self.width = width
        self.height = height
        self.stride = stride
        self.start_index = start_index

    @classmethod
    def zeros(cls, width: int, height: int, dtype=np.float32) -> "ImageView":
        return cls(np.zeros(width * height, dtype=dtype), width, height)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "ImageView":
        """Copy a 2-D array into a freshly allocated view."""
        arr = np.asarray(arr)
        if arr.ndim != 2:
            raise ValueError("expected a 2-D array")
        height, width = arr.shape
        return cls(np.ascontiguousarray(arr).ravel().copy(), width, height)

    @property
    def dtype(self) -> np.dtype:
        return self.data.dtype

    @property
    def shape(self) -> tuple:
        return (self.height, self.width)

    @property
    def array(self) -> np.ndarray:
        """Writable 2-D (rows x columns) numpy view of the addressed samples."""
        itemsize = self.data.itemsize
        return as_strided(self.data[self.start_index:],
                          shape=(self.height, self.width),
                          strides=(self.stride * itemsize, itemsize))

    def sub_image(self, x0: int, y0: int, x1: int, y1: int) -> "ImageView":
        """Return a view of the region [x0, x1) x [y0, y1) sharing this buffer."""
        if not (0 <= x0 <= x1 <= self.width and 0 <= y0 <= y1 <= self.height):
            raise ValueError(
                f"region ({x0},{y0})-({x1},{y1}) outside "
                f"{self.width}x{self.height} image")
        return ImageView(self.data, x1 - x0, y1 - y0, self.stride,
                         self.start_index + y0 * self.stride + x0)

    def index(self, x: int, y: int) -> int:
        return self.start_index + y * self.stride + x

    def get(self, x: int, y: int):
        return self.data[self.index(x, y)]

    def set(self, x: int, y: int, value) -> None:
        self.data[self.index(x, y)] = value

    def __repr__(self):
        return (f"ImageView({self.width}x{self.height}, dtype={self.dtype}, "
                f"stride={self.stride}, start_index={self.start_index})")


def as_image_array(image) -> np.ndarray:
    """Return the 2-D numpy view behind *image* (``ImageView`` or ndarray)."""
    if isinstance(image, ImageView):
        return image.array
    arr = np.asarray(image)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-D image, got shape {arr.shape}")
    return arr
