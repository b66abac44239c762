# -*- coding: utf-8 -*-
"""
skyregrid - Flux-conserving regridding of images between astrometric grids.

Resamples a 2D image sampled on one celestial pixel grid onto a destination
pixel grid defined by a different astrometric solution, either by exact
polygon-overlap area weighting ("drizzle") or by nearest-neighbour
sampling with optional flux conservation.

Dependencies
------------
numpy
astropy
affine

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
2026-01-30

Modified
--------
2026-03-02
"""

__version__ = "0.1.0"

from skyregrid.exceptions import (
    SkyRegridError,
    ValidationError,
    InvalidAstrometry,
)
from skyregrid.vocabulary import RegridMethod
from skyregrid.astrometry import (
    AstrometricMapping,
    AffineMapping,
    WCSMapping,
    make_wcs_header,
)
from skyregrid.regrid import Regridder, regrid

__all__ = [
    'SkyRegridError',
    'ValidationError',
    'InvalidAstrometry',
    'RegridMethod',
    'AstrometricMapping',
    'AffineMapping',
    'WCSMapping',
    'make_wcs_header',
    'Regridder',
    'regrid',
]
