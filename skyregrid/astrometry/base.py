# -*- coding: utf-8 -*-
"""
Astrometry Base Classes - Abstract interface for pixel/sky transformations.

Defines the abstract base class for transforming between image pixel
coordinates and celestial sky coordinates (right ascension/declination).
Concrete implementations wrap a FITS WCS solution or a plain affine
transform.

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

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, Union

import numpy as np

from skyregrid.exceptions import InvalidAstrometry, ValidationError


def _is_scalar(val: Any) -> bool:
    """Check if a value is a scalar (not array-like)."""
    if isinstance(val, np.ndarray):
        return val.ndim == 0
    return isinstance(val, (int, float, np.integer, np.floating))


def _to_array(val: Any) -> np.ndarray:
    """Convert scalar, list, or array to 1D numpy array of float64."""
    arr = np.asarray(val, dtype=np.float64)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    return arr.ravel()


class AstrometricMapping(ABC):
    """
    Abstract base class for astrometric (pixel <-> sky) transformations.

    ``pixel_to_sky`` and ``sky_to_pixel`` accept three input forms:

    - **Scalar:** ``mapping.pixel_to_sky(10.0, 20.0)``
    - **Separate arrays:** ``mapping.pixel_to_sky(xs, ys)``
    - **Stacked (2, N) array:** ``mapping.pixel_to_sky(points_2xN)``

    Coordinate Conventions
    ----------------------
    - **Pixel coordinates:** ``(x, y)``, 1-based (FITS convention). ``x``
      runs along columns, ``y`` along rows; the center of the first pixel
      is ``(1.0, 1.0)``.
    - **Sky coordinates:** ``(ra, dec)`` in degrees.

    A mapping that failed to initialize from its source data stays
    constructible but reports ``is_valid == False``; every transform on it
    raises ``InvalidAstrometry``.

    Notes
    -----
    Subclasses implement ``_pixel_to_sky_array`` and ``_sky_to_pixel_array``
    which operate on 1D float64 arrays. The public methods handle validity
    checks and scalar/list/array dispatch.
    """

    def __init__(self, shape: Optional[Tuple[int, int]] = None) -> None:
        """
        Parameters
        ----------
        shape : Tuple[int, int], optional
            Shape ``(rows, cols)`` of the image this mapping describes.
        """
        self.shape = tuple(shape) if shape is not None else None

    @property
    def is_valid(self) -> bool:
        """Whether the mapping was successfully established."""
        return True

    def require_valid(self) -> None:
        """Raise ``InvalidAstrometry`` unless the mapping is usable."""
        if not self.is_valid:
            raise InvalidAstrometry(
                f"{type(self).__name__} is not a valid astrometric solution"
            )

    @abstractmethod
    def _pixel_to_sky_array(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Transform 1-based pixel coordinate arrays to sky coordinates.

        Parameters
        ----------
        xs : np.ndarray
            Column coordinates (1D array, float64, 1-based).
        ys : np.ndarray
            Row coordinates (1D array, float64, 1-based).

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(ras, decs)`` arrays in degrees.
        """
        pass

    @abstractmethod
    def _sky_to_pixel_array(
        self,
        ras: np.ndarray,
        decs: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Transform sky coordinate arrays to 1-based pixel coordinates.

        Parameters
        ----------
        ras : np.ndarray
            Right ascensions in degrees (1D array, float64).
        decs : np.ndarray
            Declinations in degrees (1D array, float64).

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(xs, ys)`` pixel coordinate arrays, 1-based.
        """
        pass

    def _dispatch(self, func, first, second):
        self.require_valid()

        if second is None:
            # (2, N) ndarray input
            pts = np.asarray(first, dtype=np.float64)
            if pts.ndim != 2 or pts.shape[0] != 2:
                raise ValidationError(
                    f"Expected (2, N) array, got shape {pts.shape}"
                )
            a, b = func(pts[0], pts[1])
            return np.vstack([a, b])

        a_arr = _to_array(first)
        b_arr = _to_array(second)
        if a_arr.shape != b_arr.shape:
            raise ValidationError(
                f"Coordinate arrays do not match sizes "
                f"({a_arr.size} vs {b_arr.size})"
            )
        a, b = func(a_arr, b_arr)
        if _is_scalar(first) and _is_scalar(second):
            return (float(a[0]), float(b[0]))
        return a, b

    def pixel_to_sky(
        self,
        x_or_points: Union[float, list, np.ndarray],
        y: Optional[Union[float, list, np.ndarray]] = None,
    ) -> Union[Tuple[float, float], Tuple[np.ndarray, np.ndarray], np.ndarray]:
        """
        Transform 1-based pixel coordinates to sky coordinates.

        Parameters
        ----------
        x_or_points : float, list, np.ndarray
            Column coordinate(s) when ``y`` is provided, or a ``(2, N)``
            ndarray of stacked ``[xs; ys]`` when ``y`` is None.
        y : float, list, or np.ndarray, optional
            Row coordinate(s).

        Returns
        -------
        Tuple[float, float]
            ``(ra, dec)`` when scalar inputs are given.
        Tuple[np.ndarray, np.ndarray]
            ``(ras, decs)`` when array/list inputs are given.
        np.ndarray
            Shape ``(2, N)`` when a ``(2, N)`` stacked array is given.

        Raises
        ------
        InvalidAstrometry
            If the mapping is invalid or the transform fails.
        ValidationError
            If the input shapes are inconsistent.

        Examples
        --------
        >>> ra, dec = mapping.pixel_to_sky(1.0, 1.0)
        >>> ras, decs = mapping.pixel_to_sky([1, 2, 3], [1, 1, 1])
        """
        return self._dispatch(self._pixel_to_sky_array, x_or_points, y)

    def sky_to_pixel(
        self,
        ra_or_points: Union[float, list, np.ndarray],
        dec: Optional[Union[float, list, np.ndarray]] = None,
    ) -> Union[Tuple[float, float], Tuple[np.ndarray, np.ndarray], np.ndarray]:
        """
        Transform sky coordinates to 1-based pixel coordinates.

        Accepts the same three input forms as ``pixel_to_sky``, with
        ``(ra, dec)`` in degrees in place of ``(x, y)``.

        Raises
        ------
        InvalidAstrometry
            If the mapping is invalid or the transform fails.
        ValidationError
            If the input shapes are inconsistent.
        """
        return self._dispatch(self._sky_to_pixel_array, ra_or_points, dec)

    def pixel_scale(self) -> float:
        """
        Estimate the pixel size in arcseconds.

        Measured as the angular distance between the centers of the first
        two pixels along the x axis.

        Returns
        -------
        float
            Pixel size in arcsec.
        """
        from skyregrid.astrometry.utils import angular_distance

        ras, decs = self.pixel_to_sky([1.0, 2.0], [1.0, 1.0])
        return float(angular_distance(ras[0], decs[0], ras[1], decs[1]))
