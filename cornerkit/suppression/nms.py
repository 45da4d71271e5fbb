"""
Corner candidate extraction from an intensity map.

Three interchangeable extractors share one contract: reset the output list,
then append every accepted pixel in raster order.  Pixels closer than the
suppression radius to any edge are never candidates.

- ``ThresholdCornerExtractor`` keeps every pixel above the threshold.
- ``NaiveNonMaxCornerExtractor`` additionally requires the pixel to be the
  maximum of its (2r+1) x (2r+1) window; on ties the pixel seen first in
  raster order wins.
- ``FastNonMaxCornerExtractor`` accepts exactly the same pixels as the naive
  version using separable sliding maxima, so its per-pixel cost does not
  grow with the radius.
"""

import numpy as np
from scipy.ndimage import maximum_filter1d

from cornerkit.logger import get_logger
from cornerkit.structs.corner_list import CornerList
from cornerkit.structs.image import as_image_array

log = get_logger(__name__)


class CornerExtractor:
    """Base class: scans an intensity map and fills a ``CornerList``.

    Parameters
    ----------
    radius : int
        Suppression radius r.  Pixels within r of an edge are skipped.
    threshold : float
        Only pixels with intensity strictly greater than this qualify.
    """

    def __init__(self, radius: int, threshold: float):
        if radius < 0:
            raise ValueError("radius must be non-negative")
        self.radius = int(radius)
        self.threshold = threshold
        self._corners = None

    def process(self, intensity, corners: CornerList = None) -> CornerList:
        """Extract candidates from *intensity* into *corners*.

        Parameters
        ----------
        intensity : ImageView or np.ndarray
            2-D intensity / response map.  Not modified.
        corners : CornerList, optional
            Output list; reset before use.  When omitted a list owned by
            this extractor is reused across calls.

        Returns
        -------
        CornerList
            The filled list (the same object as *corners* when given).

        Raises
        ------
        CornerListOverflowError
            If *corners* cannot hold every accepted pixel.
        """
        img = as_image_array(intensity)
        if corners is None:
            corners = self._owned_list(img.size)
        corners.reset()

        height, width = img.shape
        r = self.radius
        if width > 2 * r and height > 2 * r:
            self._extract(img, corners)

        log.debug("%s: %d candidates in %dx%d map", type(self).__name__,
                  corners.num, width, height)
        return corners

    def _owned_list(self, size: int) -> CornerList:
        if self._corners is None or self._corners.capacity < size:
            self._corners = CornerList(size)
        return self._corners

    def _extract(self, img: np.ndarray, corners: CornerList) -> None:
        raise NotImplementedError


class ThresholdCornerExtractor(CornerExtractor):
    """Every interior pixel whose intensity exceeds the threshold."""

    def __init__(self, threshold: float, radius: int = 0):
        super().__init__(radius, threshold)

    def _extract(self, img, corners):
        r = self.radius
        height, width = img.shape
        core = img[r:height - r, r:width - r]
        ys, xs = np.nonzero(core > self.threshold)
        corners.extend(xs + r, ys + r)


class NaiveNonMaxCornerExtractor(CornerExtractor):
    """Brute-force non-maximum suppression over the full window."""

    def _extract(self, img, corners):
        r = self.radius
        height, width = img.shape

        for y in range(r, height - r):
            for x in range(r, width - r):
                val = img[y, x]
                if not val > self.threshold:
                    continue

                window = img[y - r:y + r + 1, x - r:x + r + 1]
                if val < np.max(window):
                    continue

                # an equal pixel earlier in raster order takes precedence
                if np.any(img[y - r:y, x - r:x + r + 1] == val):
                    continue
                if np.any(img[y, x - r:x] == val):
                    continue

                corners.append(x, y)


class FastNonMaxCornerExtractor(CornerExtractor):
    """Non-maximum suppression from separable running maxima.

    A pixel is kept when it equals the maximum of its full window and is
    strictly larger than everything before it in raster order inside that
    window (the r rows above, and the r pixels to its left).
    """

    def _extract(self, img, corners):
        r = self.radius
        height, width = img.shape
        core = img[r:height - r, r:width - r]
        accept = core > self.threshold

        if r > 0:
            size = 2 * r + 1
            row_max = maximum_filter1d(img, size, axis=1, mode="nearest")
            win_max = maximum_filter1d(row_max, size, axis=0, mode="nearest")
            accept &= core >= win_max[r:height - r, r:width - r]

            # a size-r window at i spans [i - r//2, i - r//2 + r); reading it
            # at i = y - shift gives the r rows above y (columns likewise)
            shift = r - r // 2
            above = maximum_filter1d(row_max, r, axis=0, mode="nearest")
            left = maximum_filter1d(img, r, axis=1, mode="nearest")
            accept &= core > above[r - shift:height - r - shift, r:width - r]
            accept &= core > left[r:height - r, r - shift:width - r - shift]

        ys, xs = np.nonzero(accept)
        corners.extend(xs + r, ys + r)


EXTRACTORS = {
    "threshold": ThresholdCornerExtractor,
    "naive": NaiveNonMaxCornerExtractor,
    "fast": FastNonMaxCornerExtractor,
}


def create_extractor(method: str, radius: int, threshold: float) -> CornerExtractor:
    """Build an extractor by name: ``"threshold"``, ``"naive"`` or ``"fast"``."""
    try:
        cls = EXTRACTORS[method]
    except KeyError:
        raise ValueError(
            f"unknown extractor {method!r}; expected one of {sorted(EXTRACTORS)}"
        ) from None
    if cls is ThresholdCornerExtractor:
        return cls(threshold, radius=radius)
    return cls(radius, threshold)


def extract_corners(intensity, threshold: float, radius: int,
                    method: str = "fast", corners: CornerList = None) -> CornerList:
    """Extract corner candidates in one call.

    Parameters
    ----------
    intensity : ImageView or np.ndarray
        2-D intensity map.
    threshold : float
        Minimum (exclusive) intensity of a candidate.
    radius : int
        Suppression radius; also the width of the excluded border.
    method : str
        ``"threshold"``, ``"naive"`` or ``"fast"``.
    corners : CornerList, optional
        Output list.  A new one sized to the map is allocated if omitted.

    Returns
    -------
    CornerList
    """
    return create_extractor(method, radius, threshold).process(intensity, corners)
