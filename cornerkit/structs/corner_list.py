"""
Bounded, reusable list of integer pixel coordinates.

Storage is allocated once; ``reset`` only zeroes the live count so the same
list can be refilled every frame without allocation.
"""

import numpy as np

from cornerkit.errors import CornerListOverflowError


class CornerList:
    """Fixed-capacity list of (x, y) candidates.

    Only coordinates are stored; consumers look intensities up in the map
    the candidates were extracted from.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._x = np.zeros(capacity, dtype=np.int32)
        self._y = np.zeros(capacity, dtype=np.int32)
        self.num = 0

    @property
    def capacity(self) -> int:
        return self._x.size

    @property
    def xs(self) -> np.ndarray:
        """x coordinates of the live entries (view)."""
        return self._x[:self.num]

    @property
    def ys(self) -> np.ndarray:
        """y coordinates of the live entries (view)."""
        return self._y[:self.num]

    def reset(self) -> None:
        self.num = 0

    def append(self, x: int, y: int) -> None:
        if self.num >= self._x.size:
            raise CornerListOverflowError(
                f"corner list is full (capacity {self._x.size})")
        self._x[self.num] = x
        self._y[self.num] = y
        self.num += 1

    def extend(self, xs, ys) -> None:
        """Append many coordinates at once, preserving their order."""
        xs = np.asarray(xs)
        ys = np.asarray(ys)
        if xs.shape != ys.shape or xs.ndim != 1:
            raise ValueError("xs and ys must be 1-D arrays of equal length")
        end = self.num + xs.size
        if end > self._x.size:
            raise CornerListOverflowError(
                f"cannot add {xs.size} corners to list holding {self.num} "
                f"of {self._x.size}")
        self._x[self.num:end] = xs
        self._y[self.num:end] = ys
        self.num = end

    def get(self, index: int) -> tuple:
        if not 0 <= index < self.num:
            raise IndexError(f"corner index {index} out of range [0, {self.num})")
        return int(self._x[index]), int(self._y[index])

    def to_array(self) -> np.ndarray:
        """Return a copy of the live entries as an N x 2 array of (x, y)."""
        return np.column_stack([self.xs, self.ys])

    def __len__(self):
        return self.num

    def __getitem__(self, index):
        if index < 0:
            index += self.num
        return self.get(index)

    def __iter__(self):
        for i in range(self.num):
            yield int(self._x[i]), int(self._y[i])

    def __repr__(self):
        return f"CornerList(num={self.num}, capacity={self.capacity})"
