# -*- coding: utf-8 -*-
"""
Regridder Tests - End-to-end regridding between affine pixel grids.

Source astrometry is the identity (sky == 0-based source pixel), so each
destination transform states directly where its pixels land on the
source image.

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
2026-10-19
"""

import logging

import numpy as np
import pytest
from affine import Affine

from skyregrid import Regridder, regrid
from skyregrid.astrometry.affine import AffineMapping
from skyregrid.exceptions import InvalidAstrometry, ValidationError
from skyregrid.vocabulary import RegridMethod


class Abort(Exception):
    pass


@pytest.fixture
def uniform_source():
    """40x40 uniform image with identity astrometry."""
    return np.full((40, 40), 3.25), AffineMapping(Affine.identity(), (40, 40))


# ---------------------------------------------------------------------------
# Drizzle
# ---------------------------------------------------------------------------

class TestDrizzle:

    def test_integer_translation_reproduces_source(
        self, source_image, source_mapping
    ):
        dest = AffineMapping(Affine.translation(2.0, 3.0), (10, 12))
        out = Regridder(source_mapping, dest).apply(source_image)
        assert out.shape == (10, 12)
        np.testing.assert_allclose(out, source_image[3:13, 2:14],
                                   rtol=1e-12, atol=1e-9)

    def test_half_pixel_shift_averages_neighbours(
        self, source_image, source_mapping
    ):
        dest = AffineMapping(Affine.translation(0.5, 0.0), (10, 12))
        out = Regridder(source_mapping, dest).apply(source_image)
        expected = 0.5 * (source_image[:10, :12] + source_image[:10, 1:13])
        np.testing.assert_allclose(out, expected, rtol=1e-12, atol=1e-9)

    def test_half_pixel_weights_sum_to_one(self, source_mapping):
        ones = np.ones((20, 30))
        dest = AffineMapping(Affine.translation(0.5, 0.5), (10, 12))
        out = Regridder(source_mapping, dest).apply(ones)
        np.testing.assert_allclose(out, 1.0, atol=1e-9)

    def test_rotated_grid_conserves_flux(self, uniform_source):
        image, mapping = uniform_source
        dest = AffineMapping.from_scale_offset(
            (10, 10), 1.0, origin=(15.0, 15.0), rotation=30.0
        )
        out = Regridder(mapping, dest).apply(image)
        assert not np.isnan(out).any()
        assert out.sum() == pytest.approx(image[0, 0] * 100, rel=1e-9)
        np.testing.assert_allclose(out, image[0, 0], rtol=1e-9)

    def test_coarser_grid_sums_flux(self, uniform_source):
        image, mapping = uniform_source
        dest = AffineMapping.from_scale_offset((5, 5), 2.0, origin=(5.5, 5.5))
        out = Regridder(mapping, dest).apply(image)
        np.testing.assert_allclose(out, 4.0 * image[0, 0], rtol=1e-12)

    def test_mirrored_grid(self, source_image, source_mapping):
        dest = AffineMapping(Affine(-1.0, 0.0, 29.0, 0.0, 1.0, 0.0), (20, 30))
        out = Regridder(source_mapping, dest).apply(source_image)
        np.testing.assert_allclose(out, source_image[:, ::-1],
                                   rtol=1e-12, atol=1e-9)

    def test_nan_source_pixel_propagates(self, source_image, source_mapping):
        source_image[4, 6] = np.nan
        dest = AffineMapping(Affine.translation(0.5, 0.0), (10, 12))
        out = Regridder(source_mapping, dest).apply(source_image)
        assert np.isnan(out[4, 5]) and np.isnan(out[4, 6])
        assert np.isfinite(out[4, 4]) and np.isfinite(out[4, 7])


# ---------------------------------------------------------------------------
# Nearest neighbour
# ---------------------------------------------------------------------------

class TestNearest:

    def test_returns_exact_source_values(self, source_image, source_mapping):
        dest = AffineMapping(Affine.translation(0.3, -0.2), (10, 10))
        out = Regridder(source_mapping, dest, method='nearest').apply(source_image)
        np.testing.assert_array_equal(out, source_image[:10, :10])

    def test_conserve_flux_scales_by_cell_area(self, uniform_source):
        image, mapping = uniform_source
        dest = AffineMapping.from_scale_offset((5, 5), 2.0, origin=(5.5, 5.5))
        out = Regridder(
            mapping, dest, method=RegridMethod.NEAREST, conserve_flux=True,
        ).apply(image)
        np.testing.assert_allclose(out, 4.0 * image[0, 0], rtol=1e-12)

    def test_without_flux_conservation(self, uniform_source):
        image, mapping = uniform_source
        dest = AffineMapping.from_scale_offset((5, 5), 2.0, origin=(5.5, 5.5))
        out = Regridder(mapping, dest, method='nearest').apply(image)
        np.testing.assert_array_equal(out, image[0, 0])


# ---------------------------------------------------------------------------
# Coverage
# ---------------------------------------------------------------------------

class TestCoverage:

    @pytest.mark.parametrize('method', ['drizzle', 'nearest'])
    def test_disjoint_grid_is_all_nan(self, source_image, source_mapping, method):
        dest = AffineMapping(Affine.translation(1000.0, 1000.0), (6, 6))
        out = regrid(source_image, source_mapping, dest, method=method)
        assert out.shape == (6, 6)
        assert np.isnan(out).all()

    def test_partial_overlap(self, source_image, source_mapping):
        dest = AffineMapping(Affine.translation(25.0, 0.0), (5, 10))
        out = regrid(source_image, source_mapping, dest)
        np.testing.assert_allclose(out[:, :5], source_image[:5, 25:30],
                                   rtol=1e-12, atol=1e-9)
        assert np.isnan(out[:, 5:]).all()

    def test_output_is_float64(self, source_mapping):
        image = np.arange(600, dtype=np.int32).reshape(20, 30)
        dest = AffineMapping(Affine.identity(), (4, 4))
        out = regrid(image, source_mapping, dest)
        assert out.dtype == np.float64
        np.testing.assert_allclose(out, image[:4, :4], rtol=1e-12)

    def test_explicit_dest_shape(self, source_image, source_mapping):
        dest = AffineMapping(Affine.identity())
        out = regrid(source_image, source_mapping, dest, dest_shape=(3, 7))
        assert out.shape == (3, 7)


# ---------------------------------------------------------------------------
# Errors and options
# ---------------------------------------------------------------------------

class TestValidation:

    def test_invalid_dest_aborts_before_work(self, source_image, source_mapping):
        dest = AffineMapping(Affine(0, 0, 0, 0, 0, 0), (5, 5))
        calls = []
        with pytest.raises(InvalidAstrometry):
            Regridder(source_mapping, dest).apply(
                source_image, progress_callback=calls.append,
            )
        assert calls == []

    def test_invalid_source(self, source_image):
        bad = AffineMapping(Affine(0, 0, 0, 0, 0, 0), (20, 30))
        dest = AffineMapping(Affine.identity(), (5, 5))
        with pytest.raises(InvalidAstrometry):
            regrid(source_image, bad, dest)

    def test_rejects_3d_image(self, source_mapping):
        dest = AffineMapping(Affine.identity(), (5, 5))
        with pytest.raises(ValidationError):
            Regridder(source_mapping, dest).apply(np.zeros((2, 20, 30)))

    def test_rejects_shape_mismatch(self, source_mapping):
        dest = AffineMapping(Affine.identity(), (5, 5))
        with pytest.raises(ValidationError):
            Regridder(source_mapping, dest).apply(np.zeros((10, 10)))

    def test_rejects_complex_image(self, source_mapping):
        dest = AffineMapping(Affine.identity(), (5, 5))
        with pytest.raises(ValidationError):
            Regridder(source_mapping, dest).apply(np.zeros((20, 30), complex))

    def test_unknown_method(self, source_mapping):
        dest = AffineMapping(Affine.identity(), (5, 5))
        with pytest.raises(ValidationError):
            Regridder(source_mapping, dest, method='bilinear')

    def test_wrong_option_type(self, source_mapping):
        dest = AffineMapping(Affine.identity(), (5, 5))
        with pytest.raises(TypeError):
            Regridder(source_mapping, dest, conserve_flux='yes')

    def test_numpy_bool_option(self, uniform_source):
        image, mapping = uniform_source
        dest = AffineMapping.from_scale_offset((5, 5), 2.0, origin=(5.5, 5.5))
        out = Regridder(
            mapping, dest, method='nearest', conserve_flux=np.True_,
        ).apply(image)
        np.testing.assert_allclose(out, 4.0 * image[0, 0], rtol=1e-12)

    def test_method_override_per_call(self, uniform_source):
        image, mapping = uniform_source
        dest = AffineMapping.from_scale_offset((5, 5), 2.0, origin=(5.5, 5.5))
        regridder = Regridder(mapping, dest)
        out = regridder.apply(image, method=RegridMethod.NEAREST)
        np.testing.assert_array_equal(out, image[0, 0])
        assert regridder.method == 'drizzle'

    def test_param_specs(self):
        names = [spec.name for spec in Regridder.__param_specs__]
        assert names == ['method', 'conserve_flux', 'report_progress']

    def test_processor_version(self):
        assert Regridder.__processor_version__ == '1.0.0'


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

class TestProgress:

    def test_callback_after_each_row(self, source_image, source_mapping):
        dest = AffineMapping(Affine.identity(), (4, 6))
        fractions = []
        regrid(source_image, source_mapping, dest,
               progress_callback=fractions.append)
        assert fractions == pytest.approx([0.25, 0.5, 0.75, 1.0])

    def test_callback_exception_aborts(self, source_image, source_mapping):
        dest = AffineMapping(Affine.identity(), (4, 6))
        calls = []

        def callback(fraction):
            calls.append(fraction)
            raise Abort()

        with pytest.raises(Abort):
            regrid(source_image, source_mapping, dest,
                   progress_callback=callback)
        assert len(calls) == 1

    def test_report_progress_logs(self, source_image, source_mapping, caplog):
        dest = AffineMapping(Affine.identity(), (10, 4))
        with caplog.at_level(logging.INFO, logger='skyregrid.regrid.engine'):
            regrid(source_image, source_mapping, dest, report_progress=True)
        messages = [r.getMessage() for r in caplog.records
                    if r.levelno == logging.INFO]
        assert len(messages) == 10
        assert '100%' in messages[-1]

    def test_silent_by_default(self, source_image, source_mapping, caplog):
        dest = AffineMapping(Affine.identity(), (10, 4))
        with caplog.at_level(logging.INFO, logger='skyregrid.regrid.engine'):
            regrid(source_image, source_mapping, dest)
        assert not [r for r in caplog.records if r.levelno == logging.INFO]
