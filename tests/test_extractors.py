"""
Unit tests for cornerkit.suppression.nms — threshold, naive and fast
corner extractors.

Run:
    python -m pytest tests/test_extractors.py -v
"""

import numpy as np
import pytest

from cornerkit.errors import CornerListOverflowError
from cornerkit.structs.corner_list import CornerList
from cornerkit.structs.image import ImageView
from cornerkit.suppression.nms import (
    FastNonMaxCornerExtractor,
    NaiveNonMaxCornerExtractor,
    ThresholdCornerExtractor,
    create_extractor,
    extract_corners,
)

METHODS = ["threshold", "naive", "fast"]


# ── helpers ──────────────────────────────────────────────────────────────

def _as_set(corners):
    return set(corners)


def _scenario_a():
    intensity = np.zeros((10, 10), dtype=np.float32)
    intensity[5, 5] = 5.0   # (x=5, y=5)
    intensity[6, 5] = 3.0   # (x=5, y=6)
    return intensity


def _random_map(seed, shape=(23, 31), levels=None):
    rng = np.random.default_rng(seed)
    if levels is not None:
        # few distinct values so that windows contain ties
        return rng.integers(0, levels, size=shape).astype(np.float32)
    return rng.uniform(0, 20, size=shape).astype(np.float32)


# ── fixed scenario ───────────────────────────────────────────────────────

def test_single_peak_scenario():
    intensity = _scenario_a()
    corners = CornerList(intensity.size)

    assert _as_set(extract_corners(intensity, 1.0, 1, "naive", corners)) == {(5, 5)}
    assert _as_set(extract_corners(intensity, 1.0, 1, "fast", corners)) == {(5, 5)}
    assert _as_set(extract_corners(intensity, 1.0, 1, "threshold", corners)) == {
        (5, 5), (5, 6)}


# ── naive / fast equivalence ─────────────────────────────────────────────

@pytest.mark.parametrize("radius", [0, 1, 2, 3, 5])
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_fast_matches_naive_continuous(radius, seed):
    intensity = _random_map(seed)
    naive = NaiveNonMaxCornerExtractor(radius, 5.0).process(intensity)
    fast = FastNonMaxCornerExtractor(radius, 5.0).process(intensity)
    assert naive.num > 0
    assert _as_set(naive) == _as_set(fast)


@pytest.mark.parametrize("radius", [1, 2, 3, 4])
@pytest.mark.parametrize("seed", [10, 11, 12])
def test_fast_matches_naive_with_ties(radius, seed):
    intensity = _random_map(seed, levels=4)
    naive = NaiveNonMaxCornerExtractor(radius, 0.5).process(intensity)
    fast = FastNonMaxCornerExtractor(radius, 0.5).process(intensity)
    assert _as_set(naive) == _as_set(fast)


def test_fast_matches_naive_on_plateau():
    intensity = np.zeros((12, 12), dtype=np.float32)
    intensity[4:8, 3:9] = 2.0
    naive = NaiveNonMaxCornerExtractor(2, 1.0).process(intensity)
    fast = FastNonMaxCornerExtractor(2, 1.0).process(intensity)
    assert naive.num >= 1
    assert _as_set(naive) == _as_set(fast)


def test_equal_neighbours_yield_one_candidate():
    intensity = np.zeros((9, 9), dtype=np.float32)
    intensity[4, 4] = 3.0
    intensity[4, 5] = 3.0
    for cls in (NaiveNonMaxCornerExtractor, FastNonMaxCornerExtractor):
        corners = cls(1, 1.0).process(intensity)
        assert corners.num == 1
        assert corners[0] in {(4, 4), (5, 4)}


# ── shared contract ──────────────────────────────────────────────────────

@pytest.mark.parametrize("method", METHODS)
@pytest.mark.parametrize("radius", [1, 3])
def test_border_pixels_never_candidates(method, radius):
    intensity = _random_map(21)
    height, width = intensity.shape
    corners = extract_corners(intensity, 1.0, radius, method)
    assert corners.num > 0
    assert np.all(corners.xs >= radius) and np.all(corners.xs < width - radius)
    assert np.all(corners.ys >= radius) and np.all(corners.ys < height - radius)


@pytest.mark.parametrize("method", METHODS)
def test_strong_edge_pixel_is_excluded(method):
    intensity = np.zeros((10, 10), dtype=np.float32)
    intensity[0, 4] = 9.0
    intensity[4, 9] = 9.0
    intensity[5, 5] = 1.5
    corners = extract_corners(intensity, 1.0, 1, method)
    assert _as_set(corners) == {(5, 5)}


@pytest.mark.parametrize("method", METHODS)
def test_raising_threshold_only_removes(method):
    intensity = _random_map(33)
    previous = None
    for threshold in (0.0, 4.0, 8.0, 12.0, 16.0, 19.9):
        current = _as_set(extract_corners(intensity, threshold, 2, method))
        if previous is not None:
            assert current <= previous
        previous = current


@pytest.mark.parametrize("method", METHODS)
def test_candidates_in_raster_order(method):
    intensity = _random_map(44)
    width = intensity.shape[1]
    corners = extract_corners(intensity, 2.0, 1, method)
    keys = corners.ys.astype(np.int64) * width + corners.xs
    assert np.all(np.diff(keys) > 0)


@pytest.mark.parametrize("method", METHODS)
def test_threshold_is_exclusive(method):
    intensity = np.zeros((7, 7), dtype=np.float32)
    intensity[3, 3] = 2.0
    assert extract_corners(intensity, 2.0, 1, method).num == 0
    assert extract_corners(intensity, 1.999, 1, method).num == 1


@pytest.mark.parametrize("method", METHODS)
def test_list_is_reset_before_use(method):
    intensity = _scenario_a()
    corners = CornerList(100)
    corners.extend(np.arange(50), np.arange(50))
    extract_corners(intensity, 4.0, 1, method, corners)
    assert list(corners) == [(5, 5)]


@pytest.mark.parametrize("method", METHODS)
def test_capacity_overflow_raises(method):
    intensity = np.zeros((10, 10), dtype=np.float32)
    intensity[2, 2] = 5.0
    intensity[6, 6] = 5.0
    with pytest.raises(CornerListOverflowError):
        extract_corners(intensity, 1.0, 1, method, CornerList(1))


@pytest.mark.parametrize("method", METHODS)
def test_map_without_interior_is_empty(method):
    intensity = np.full((4, 20), 10.0, dtype=np.float32)
    assert extract_corners(intensity, 1.0, 2, method).num == 0


@pytest.mark.parametrize("method", METHODS)
def test_accepts_image_view_and_integer_maps(method):
    base = np.zeros((12, 12), dtype=np.uint8)
    base[6, 7] = 200
    parent = ImageView.from_array(base)
    view = parent.sub_image(2, 2, 12, 12)
    corners = extract_corners(view, 100, 2, method)
    assert list(corners) == [(5, 4)]


def test_owned_list_is_reused_and_grows():
    extractor = FastNonMaxCornerExtractor(1, 1.0)
    first = extractor.process(np.zeros((5, 5), dtype=np.float32))
    assert first.capacity == 25
    again = extractor.process(_scenario_a())
    assert again.capacity == 100
    third = extractor.process(np.zeros((6, 6), dtype=np.float32))
    assert third is again
    assert third.num == 0


def test_threshold_extractor_defaults_to_no_border():
    intensity = np.zeros((4, 4), dtype=np.float32)
    intensity[0, 0] = 2.0
    corners = ThresholdCornerExtractor(1.0).process(intensity)
    assert list(corners) == [(0, 0)]


def test_factory():
    assert isinstance(create_extractor("fast", 2, 1.0), FastNonMaxCornerExtractor)
    assert isinstance(create_extractor("naive", 2, 1.0), NaiveNonMaxCornerExtractor)
    t = create_extractor("threshold", 2, 1.0)
    assert isinstance(t, ThresholdCornerExtractor)
    assert (t.radius, t.threshold) == (2, 1.0)
    with pytest.raises(ValueError):
        create_extractor("sobel", 2, 1.0)
    with pytest.raises(ValueError):
        FastNonMaxCornerExtractor(-1, 1.0)
