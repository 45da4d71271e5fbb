"""
Corner detector that chains extraction and optional top-N pruning.
"""

from cornerkit.selection.select_best import SelectNBestCorners
from cornerkit.structs.corner_list import CornerList
from cornerkit.suppression.nms import CornerExtractor


class GeneralCornerDetector:
    """Extracts candidates from an intensity map and bounds their number.

    Parameters
    ----------
    extractor : CornerExtractor
        Strategy that turns the intensity map into candidates.
    max_features : int, optional
        Keep at most this many of the strongest candidates.  ``None`` keeps
        them all.

    One instance per thread: the candidate lists are reused every frame.
    """

    def __init__(self, extractor: CornerExtractor, max_features: int = None):
        self.extractor = extractor
        self.selector = None
        if max_features is not None:
            self.selector = SelectNBestCorners(max_features)
        self._candidates = CornerList(0)
        self._features = self._candidates

    def process(self, intensity) -> CornerList:
        """Detect features in one frame and return them."""
        candidates = self.extractor.process(intensity)
        self._candidates = candidates
        if self.selector is None:
            self._features = candidates
        else:
            self._features = self.selector.process(intensity, candidates)
        return self._features

    def get_candidates(self) -> CornerList:
        """Unpruned candidates from the last frame."""
        return self._candidates

    def get_features(self) -> CornerList:
        return self._features
