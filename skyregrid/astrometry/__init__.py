# -*- coding: utf-8 -*-
"""
Astrometry Module - Pixel/sky coordinate transformations.

Provides the interface and implementations for transforming between image
pixel coordinates (1-based, FITS convention) and celestial coordinates.
The regrid engine only ever talks to ``AstrometricMapping``; projection
math lives in the concrete mappings.

Key Classes
-----------
- AstrometricMapping: Abstract base class for pixel/sky transforms
- WCSMapping: FITS WCS solution through astropy
- AffineMapping: Planar six-parameter affine transform

Usage
-----
    >>> from skyregrid.astrometry import WCSMapping, make_wcs_header
    >>> hdr = make_wcs_header(0.2, sky_ref=(150.1, 2.2),
    ...                       pixel_ref=(50.5, 50.5), dims=(100, 100))
    >>> mapping = WCSMapping(hdr)
    >>> ra, dec = mapping.pixel_to_sky(1.0, 1.0)

Dependencies
------------
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

from skyregrid.astrometry.base import AstrometricMapping
from skyregrid.astrometry.affine import AffineMapping
from skyregrid.astrometry.wcs import (
    WCSMapping,
    make_wcs_header,
    parse_wcs_header_params,
    filter_wcs_header,
    cure_wcs_header,
)
from skyregrid.astrometry.utils import angular_distance

__all__ = [
    'AstrometricMapping',
    'AffineMapping',
    'WCSMapping',
    'make_wcs_header',
    'parse_wcs_header_params',
    'filter_wcs_header',
    'cure_wcs_header',
    'angular_distance',
]
