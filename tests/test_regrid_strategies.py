# -*- coding: utf-8 -*-
"""
Resampling Strategy Tests - Drizzle and nearest-neighbour cell resampling.

Author
------
skyregrid contributors

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-14

Modified
--------
2026-03-02
"""

import numpy as np
import pytest

from skyregrid.regrid.strategies import (
    ExactOverlapStrategy,
    NearestNeighborStrategy,
    bounding_box,
    make_strategy,
)
from skyregrid.vocabulary import RegridMethod


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def square_cell(cx, cy, size=1.0):
    """Counter-clockwise square cell centered on (cx, cy)."""
    h = size / 2.0
    xs = (cx - h, cx + h, cx + h, cx - h)
    ys = (cy - h, cy - h, cy + h, cy + h)
    return xs, ys


@pytest.fixture
def image():
    """5x5 image with value row * 10 + col."""
    return np.arange(25, dtype=np.float64).reshape(5, 5)


# ---------------------------------------------------------------------------
# Bounding box
# ---------------------------------------------------------------------------

class TestBoundingBox:

    def test_interior_cell(self):
        xs, ys = square_cell(2.0, 3.0)
        assert bounding_box(xs, ys, (5, 5)) == (1, 3, 2, 4)

    def test_clamped_to_image(self):
        xs, ys = square_cell(0.0, 4.0)
        assert bounding_box(xs, ys, (5, 5)) == (0, 1, 3, 4)

    def test_outside_image(self):
        xs, ys = square_cell(100.0, 2.0)
        assert bounding_box(xs, ys, (5, 5)) is None

    def test_above_image(self):
        xs, ys = square_cell(2.0, -10.0)
        assert bounding_box(xs, ys, (5, 5)) is None


# ---------------------------------------------------------------------------
# Drizzle
# ---------------------------------------------------------------------------

class TestExactOverlap:

    def test_aligned_cell_copies_pixel(self, image):
        strategy = ExactOverlapStrategy()
        covered, value = strategy.resample(image, *square_cell(2.0, 3.0))
        assert covered
        assert value == pytest.approx(image[3, 2])

    def test_half_shift_averages(self, image):
        strategy = ExactOverlapStrategy()
        covered, value = strategy.resample(image, *square_cell(1.5, 3.0))
        assert covered
        assert value == pytest.approx(0.5 * (image[3, 1] + image[3, 2]))

    def test_clockwise_cell(self, image):
        xs, ys = square_cell(1.5, 3.0)
        strategy = ExactOverlapStrategy()
        covered, value = strategy.resample(image, xs[::-1], ys[::-1])
        assert covered
        assert value == pytest.approx(0.5 * (image[3, 1] + image[3, 2]))

    def test_large_cell_sums_flux(self):
        ones = np.ones((6, 6))
        strategy = ExactOverlapStrategy()
        covered, value = strategy.resample(ones, *square_cell(2.5, 2.5, size=4.0))
        assert covered
        assert value == pytest.approx(16.0)

    def test_cell_partly_outside(self):
        ones = np.ones((5, 5))
        strategy = ExactOverlapStrategy()
        covered, value = strategy.resample(ones, *square_cell(-0.5, 2.0))
        assert covered
        assert value == pytest.approx(0.5)

    def test_cell_touching_image_edge_not_covered(self, image):
        strategy = ExactOverlapStrategy()
        covered, _ = strategy.resample(image, *square_cell(-1.0, 2.0))
        assert not covered

    def test_cell_outside_not_covered(self, image):
        strategy = ExactOverlapStrategy()
        covered, _ = strategy.resample(image, *square_cell(50.0, 50.0))
        assert not covered

    def test_zero_valued_pixel_is_covered(self):
        zeros = np.zeros((5, 5))
        strategy = ExactOverlapStrategy()
        covered, value = strategy.resample(zeros, *square_cell(2.0, 2.0))
        assert covered
        assert value == 0.0


# ---------------------------------------------------------------------------
# Nearest neighbour
# ---------------------------------------------------------------------------

class TestNearestNeighbor:

    def test_exact_source_value(self, image):
        strategy = NearestNeighborStrategy()
        covered, value = strategy.resample(image, *square_cell(2.3, 1.8))
        assert covered
        assert value == image[2, 2]

    def test_half_rounds_away_from_zero(self, image):
        strategy = NearestNeighborStrategy()
        covered, value = strategy.resample(image, *square_cell(2.5, 1.5))
        assert covered
        assert value == image[2, 3]

    def test_first_pixel_is_reachable(self, image):
        strategy = NearestNeighborStrategy()
        covered, value = strategy.resample(image, *square_cell(-0.4, 0.2))
        assert covered
        assert value == image[0, 0]

    def test_centroid_left_of_image(self, image):
        strategy = NearestNeighborStrategy()
        covered, _ = strategy.resample(image, *square_cell(-0.6, 2.0))
        assert not covered

    def test_centroid_below_image(self, image):
        strategy = NearestNeighborStrategy()
        covered, _ = strategy.resample(image, *square_cell(2.0, 4.6))
        assert not covered

    def test_conserve_flux_scales_by_area(self, image):
        strategy = NearestNeighborStrategy(conserve_flux=True)
        covered, value = strategy.resample(image, *square_cell(2.0, 2.0, size=2.0))
        assert covered
        assert value == pytest.approx(4.0 * image[2, 2])


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

class TestMakeStrategy:

    def test_drizzle_by_name(self):
        strategy = make_strategy('drizzle')
        assert isinstance(strategy, ExactOverlapStrategy)
        assert strategy.method is RegridMethod.DRIZZLE

    def test_nearest_by_enum(self):
        strategy = make_strategy(RegridMethod.NEAREST, conserve_flux=True)
        assert isinstance(strategy, NearestNeighborStrategy)
        assert strategy.conserve_flux is True

    def test_drizzle_ignores_conserve_flux(self):
        assert isinstance(make_strategy('drizzle', conserve_flux=True),
                          ExactOverlapStrategy)

    def test_tolerance_forwarded(self):
        strategy = make_strategy('drizzle', tolerance=1e-9)
        assert strategy.tolerance == 1e-9

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            make_strategy('bilinear')
