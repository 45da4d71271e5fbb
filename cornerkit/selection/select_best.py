"""
Prune a candidate list to the N strongest corners.

Partial selection (``np.argpartition``) finds the N largest intensities in
expected linear time instead of sorting every candidate.  The N survivors
come back in no particular order, and when several candidates share the
N-th largest intensity which of them survive is arbitrary.  Callers must
not depend on either.
"""

import numpy as np

from cornerkit.logger import get_logger
from cornerkit.structs.corner_list import CornerList
from cornerkit.structs.image import as_image_array

log = get_logger(__name__)


class SelectNBestCorners:
    """Keeps the *max_corners* highest-intensity entries of a corner list.

    The output list and the scratch arrays belong to the instance and are
    reused across frames; the scratch arrays only ever grow.  Not safe to
    share between threads.
    """

    def __init__(self, max_corners: int):
        if max_corners < 0:
            raise ValueError("max_corners must be non-negative")
        self.max_corners = int(max_corners)
        self.best_corners = CornerList(self.max_corners)
        self._inten = np.zeros(self.max_corners, dtype=np.float64)
        self._indexes = np.zeros(self.max_corners, dtype=np.intp)

    def process(self, intensity, corners: CornerList) -> CornerList:
        """Select the best corners of *corners* scored by *intensity*.

        Returns
        -------
        CornerList
            ``min(max_corners, corners.num)`` entries; the instance's own list.
        """
        num = corners.num
        self.best_corners.reset()

        if num <= self.max_corners:
            # already small enough, copy through unchanged
            self.best_corners.extend(corners.xs, corners.ys)
            return self.best_corners

        if num > self._inten.size:
            log.debug("growing selection scratch %d -> %d",
                      self._inten.size, num)
            self._inten = np.zeros(num, dtype=np.float64)
            self._indexes = np.zeros(num, dtype=np.intp)

        if self.max_corners == 0:
            return self.best_corners

        xs, ys = corners.xs, corners.ys
        img = as_image_array(intensity)

        # selection finds the k smallest, so negate to get the k largest
        inten = self._inten[:num]
        inten[:] = img[ys, xs]
        np.negative(inten, out=inten)

        indexes = self._indexes[:num]
        indexes[:] = np.argpartition(inten, self.max_corners - 1)
        best = indexes[:self.max_corners]

        self.best_corners.extend(xs[best], ys[best])
        return self.best_corners

    def get_best_corners(self) -> CornerList:
        return self.best_corners


def select_n_best(intensity, corners: CornerList, n: int) -> CornerList:
    """One-shot form of ``SelectNBestCorners(n).process(intensity, corners)``."""
    return SelectNBestCorners(n).process(intensity, corners)
