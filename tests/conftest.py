# -*- coding: utf-8 -*-
"""
Shared fixtures for skyregrid tests.

Synthetic astrometry built from plain affine transforms, where sky
coordinates equal 0-based pixel coordinates of the source image, so the
expected regrid output of every test can be worked out by hand.

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
from affine import Affine

from skyregrid.astrometry.affine import AffineMapping


@pytest.fixture
def source_shape():
    """Shape of the synthetic source image."""
    return (20, 30)


@pytest.fixture
def source_image(source_shape):
    """Source image whose value encodes position: row * 1000 + col."""
    rows, cols = source_shape
    row_idx, col_idx = np.meshgrid(
        np.arange(rows), np.arange(cols), indexing='ij'
    )
    return (row_idx * 1000 + col_idx).astype(np.float64)


@pytest.fixture
def source_mapping(source_shape):
    """Identity astrometry: sky (ra, dec) == 0-based source pixel (x, y)."""
    return AffineMapping(Affine.identity(), source_shape)
