# -*- coding: utf-8 -*-
"""
Affine Astrometry - Planar pixel/sky transform from six affine parameters.

Provides ``AffineMapping``, a concrete ``AstrometricMapping`` whose sky
coordinates are a linear function of the pixel coordinates. It ignores
spherical geometry entirely, which makes it exact and cheap for small
fields and for synthetic test grids where the expected regrid output can
be worked out by hand.

Coordinate flow:

    pixel (x, y), 1-based  --(-1)-->  pixel (x0, y0), 0-based  --affine-->  (ra, dec)

Dependencies
------------
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
2026-02-11

Modified
--------
2026-10-19
"""

# Standard library
from typing import Optional, Tuple, Union

# Third-party
import numpy as np
from affine import Affine

# skyregrid internal
from skyregrid.astrometry.base import AstrometricMapping


class AffineMapping(AstrometricMapping):
    """Astrometric mapping defined by a six-parameter affine transform.

    The transform maps 0-based pixel ``(x0, y0)`` to sky ``(ra, dec)`` as::

        ra  = c + x0 * a + y0 * b
        dec = f + x0 * d + y0 * e

    where ``(a, b, c, d, e, f)`` are the parameters of
    ``affine.Affine(a, b, c, d, e, f)``. A degenerate (non-invertible)
    transform yields an invalid mapping.

    Parameters
    ----------
    transform : affine.Affine
        Six-parameter affine transform.
    shape : Tuple[int, int], optional
        Image shape ``(rows, cols)``.

    Raises
    ------
    TypeError
        If *transform* is not an ``affine.Affine`` instance.

    Examples
    --------
    >>> from affine import Affine
    >>> mapping = AffineMapping(Affine(1e-3, 0, 150.0, 0, 1e-3, 2.0), (100, 100))
    >>> ra, dec = mapping.pixel_to_sky(1.0, 1.0)
    """

    def __init__(
        self,
        transform: Affine,
        shape: Optional[Tuple[int, int]] = None,
    ) -> None:
        if not isinstance(transform, Affine):
            raise TypeError(
                f"transform must be an affine.Affine instance, "
                f"got {type(transform).__name__}"
            )
        super().__init__(shape)

        self._transform = transform
        self._a = float(transform.a)
        self._b = float(transform.b)
        self._c = float(transform.c)
        self._d = float(transform.d)
        self._e = float(transform.e)
        self._f = float(transform.f)

        self._inverse = None
        if not transform.is_degenerate:
            self._inverse = ~transform

    @classmethod
    def from_scale_offset(
        cls,
        shape: Optional[Tuple[int, int]],
        scale: Union[float, Tuple[float, float]],
        origin: Tuple[float, float] = (0.0, 0.0),
        rotation: float = 0.0,
    ) -> 'AffineMapping':
        """Build a mapping from a pixel scale, origin and rotation.

        Parameters
        ----------
        shape : Tuple[int, int] or None
            Image shape ``(rows, cols)``.
        scale : float or Tuple[float, float]
            Sky units per pixel along x and y. A scalar applies to both.
        origin : Tuple[float, float], default=(0.0, 0.0)
            Sky coordinate ``(ra, dec)`` of the first pixel center.
        rotation : float, default=0.0
            Counter-clockwise rotation of the pixel axes in degrees.

        Returns
        -------
        AffineMapping
        """
        if np.isscalar(scale):
            sx = sy = float(scale)
        else:
            sx, sy = (float(s) for s in scale)
        transform = (
            Affine.translation(*origin)
            @ Affine.rotation(rotation)
            @ Affine.scale(sx, sy)
        )
        return cls(transform, shape)

    @property
    def transform(self) -> Affine:
        """The 0-based pixel to sky affine transform."""
        return self._transform

    @property
    def is_valid(self) -> bool:
        return self._inverse is not None

    def _pixel_to_sky_array(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        x0 = xs - 1.0
        y0 = ys - 1.0
        ras = self._c + x0 * self._a + y0 * self._b
        decs = self._f + x0 * self._d + y0 * self._e
        return ras, decs

    def _sky_to_pixel_array(
        self,
        ras: np.ndarray,
        decs: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        inv = self._inverse
        x0 = float(inv.c) + ras * float(inv.a) + decs * float(inv.b)
        y0 = float(inv.f) + ras * float(inv.d) + decs * float(inv.e)
        return x0 + 1.0, y0 + 1.0

    def __repr__(self) -> str:
        return f"AffineMapping({tuple(self._transform)[:6]}, shape={self.shape})"
