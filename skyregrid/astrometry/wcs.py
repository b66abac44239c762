# -*- coding: utf-8 -*-
"""
WCS Astrometry - Celestial pixel/sky transforms from FITS WCS solutions.

Provides ``WCSMapping``, a concrete ``AstrometricMapping`` backed by
``astropy.wcs.WCS``, together with small helpers to build, filter and
sanitize the FITS header cards that describe a WCS solution.

All spherical projection math (TAN, SIN, distortion terms, ...) is
delegated to astropy/WCSLIB. A header that astropy cannot interpret, or
whose solution fails a trial conversion, produces an *invalid* mapping
instead of an exception so that the caller decides when to fail.

Dependencies
------------
astropy

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
2026-03-02
"""

# Standard library
import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

# Third-party
import numpy as np
from astropy.io import fits
from astropy.wcs import WCS, NoConvergence

# skyregrid internal
from skyregrid.astrometry.base import AstrometricMapping
from skyregrid.exceptions import InvalidAstrometry, ValidationError

logger = logging.getLogger(__name__)

# Card prefixes that make up a WCS solution (WCSTools ``cphead`` list).
WCS_KEYWORD_PREFIXES = (
    'RA', 'DEC', 'EPOCH', 'EQUINOX', 'RADECSYS', 'RADESYS', 'SECPIX',
    'IMWCS', 'CD1_', 'CD2_', 'PC1_', 'PC2_', 'PC00', 'LATPOLE',
    'LONPOLE', 'CTYPE', 'CRVAL', 'CDELT', 'CRPIX', 'CROTA', 'CUNIT',
    'CO1_', 'CO2_', 'PROJP', 'PV1_', 'PV2_', 'NAXIS',
)

# Non-standard CUNIT spellings and their FITS replacement.
_UNIT_FIXES = {
    'degree': 'deg',
    'degrees': 'deg',
    'micron': 'um',
    'microns': 'um',
}


def cure_wcs_header(header: fits.Header) -> fits.Header:
    """
    Return a copy of *header* with non-standard ``CUNITn`` values fixed.

    Replaces spellings WCSLIB rejects (``'degrees'``, ``'micron'``, ...)
    with their FITS equivalents.

    Parameters
    ----------
    header : astropy.io.fits.Header
        Input header. Not modified.

    Returns
    -------
    astropy.io.fits.Header
        Sanitized copy.
    """
    cured = header.copy()
    for key in list(cured.keys()):
        if not key.startswith('CUNIT'):
            continue
        value = str(cured[key]).strip()
        if value in _UNIT_FIXES:
            cured[key] = _UNIT_FIXES[value]
    return cured


def filter_wcs_header(header: fits.Header) -> fits.Header:
    """
    Keep only the cards of *header* that describe the WCS solution.

    Parameters
    ----------
    header : astropy.io.fits.Header
        Full image header.

    Returns
    -------
    astropy.io.fits.Header
        New header holding the WCS cards, in their original order.
    """
    filtered = fits.Header()
    for card in header.cards:
        if card.keyword.startswith(WCS_KEYWORD_PREFIXES):
            filtered.append(card)
    return filtered


def make_wcs_header(
    pixel_scale: Optional[float] = None,
    sky_ref: Optional[Tuple[float, float]] = None,
    pixel_ref: Optional[Tuple[float, float]] = None,
    dims: Optional[Tuple[int, int]] = None,
    header: Optional[fits.Header] = None,
) -> fits.Header:
    """
    Build a gnomonic (TAN) WCS header from a few simple parameters.

    Only the parameters that are provided (and finite) are written, so the
    function can also patch an existing *header*.

    Parameters
    ----------
    pixel_scale : float, optional
        Pixel size in arcsec. Written as ``CDELT1 = -scale/3600`` (RA
        increasing to the left) and ``CDELT2 = +scale/3600``, together with
        ``CTYPE1/2 = RA---TAN/DEC--TAN`` and ``EQUINOX = 2000``.
    sky_ref : Tuple[float, float], optional
        Reference sky position ``(ra, dec)`` in degrees (``CRVAL1/2``).
    pixel_ref : Tuple[float, float], optional
        1-based pixel ``(x, y)`` of the reference position (``CRPIX1/2``).
    dims : Tuple[int, int], optional
        Number of pixels along x and y (``NAXIS1/2``).
    header : astropy.io.fits.Header, optional
        Header to update. A new one is created when omitted.

    Returns
    -------
    astropy.io.fits.Header

    Examples
    --------
    >>> hdr = make_wcs_header(0.06, sky_ref=(53.16, -27.78),
    ...                       pixel_ref=(501, 501), dims=(1000, 1000))
    >>> mapping = WCSMapping(hdr)
    """
    hdr = header.copy() if header is not None else fits.Header()

    if pixel_scale is not None and np.isfinite(pixel_scale):
        hdr['CDELT1'] = -pixel_scale / 3600.0
        hdr['CDELT2'] = pixel_scale / 3600.0
        hdr['CTYPE1'] = 'RA---TAN'
        hdr['CTYPE2'] = 'DEC--TAN'
        hdr['EQUINOX'] = 2000.0

    if pixel_ref is not None and np.all(np.isfinite(pixel_ref)):
        hdr['CRPIX1'] = float(pixel_ref[0])
        hdr['CRPIX2'] = float(pixel_ref[1])

    if sky_ref is not None and np.all(np.isfinite(sky_ref)):
        hdr['CRVAL1'] = float(sky_ref[0])
        hdr['CRVAL2'] = float(sky_ref[1])

    if dims is not None:
        hdr['NAXIS'] = 2
        hdr['NAXIS1'] = int(dims[0])
        hdr['NAXIS2'] = int(dims[1])

    return hdr


def _parse_pair(name: str, text: str, cast=float) -> Tuple[Any, Any]:
    parts = [p.strip() for p in text.split(',')]
    if len(parts) != 2:
        raise ValidationError(
            f"ill formed '{name}' parameter: '{text}', "
            f"expecting two comma separated values"
        )
    try:
        return cast(parts[0]), cast(parts[1])
    except ValueError:
        raise ValidationError(
            f"could not read '{name}' values '{text}' as {cast.__name__}"
        ) from None


def parse_wcs_header_params(params: Sequence[str]) -> Dict[str, Any]:
    """
    Parse ``'key:value'`` strings into ``make_wcs_header`` keyword arguments.

    Recognized keys: ``pixel_scale:<float>``, ``sky_ref:<ra>,<dec>``,
    ``pixel_ref:<x>,<y>``, ``dims:<nx>,<ny>``.

    Parameters
    ----------
    params : Sequence[str]
        e.g. ``['pixel_scale:0.06', 'sky_ref:53.16,-27.78']``.

    Returns
    -------
    Dict[str, Any]

    Raises
    ------
    ValidationError
        On ill-formed entries or unknown keys.
    """
    kwargs: Dict[str, Any] = {}
    for entry in params:
        key, sep, value = entry.partition(':')
        if not sep or ':' in value:
            raise ValidationError(f"parameter '{entry}' is ill formed")
        key = key.strip().lower()
        if key == 'pixel_scale':
            try:
                kwargs[key] = float(value)
            except ValueError:
                raise ValidationError(
                    f"could not read pixel scale '{value}' as float"
                ) from None
        elif key in ('sky_ref', 'pixel_ref'):
            kwargs[key] = _parse_pair(key, value)
        elif key == 'dims':
            kwargs[key] = _parse_pair(key, value, cast=int)
        else:
            raise ValidationError(f"unknown parameter '{key}'")
    return kwargs


class WCSMapping(AstrometricMapping):
    """Astrometric mapping backed by an ``astropy.wcs.WCS`` solution.

    Parameters
    ----------
    source : astropy.wcs.WCS, astropy.io.fits.Header, or Mapping
        WCS object, FITS header, or dict of header cards.
    shape : Tuple[int, int], optional
        Image shape ``(rows, cols)``. Taken from ``NAXIS2``/``NAXIS1`` when
        omitted and the header provides them.

    Attributes
    ----------
    wcs : astropy.wcs.WCS or None
        The 2D celestial solution, ``None`` when initialization failed.
    error : str or None
        Why the mapping is invalid, if it is.

    Examples
    --------
    >>> from astropy.io import fits
    >>> with fits.open('image.fits') as hdul:
    ...     mapping = WCSMapping(hdul[0].header)
    >>> mapping.require_valid()
    >>> ra, dec = mapping.pixel_to_sky(1.0, 1.0)
    """

    def __init__(
        self,
        source: Union[WCS, fits.Header, Mapping[str, Any]],
        shape: Optional[Tuple[int, int]] = None,
    ) -> None:
        self.wcs: Optional[WCS] = None
        self.error: Optional[str] = None
        self._lng = 0
        self._lat = 1

        full = self._build_wcs(source)
        if shape is None and full is not None and full.pixel_shape is not None:
            nx, ny = full.pixel_shape[:2]
            shape = (int(ny), int(nx))
        super().__init__(shape)

        if full is not None:
            self._establish(full)

    def _build_wcs(self, source: Any) -> Optional[WCS]:
        if isinstance(source, WCS):
            return source
        if isinstance(source, fits.Header):
            header = source
        elif isinstance(source, Mapping):
            header = fits.Header()
            for key, value in source.items():
                header[key] = value
        else:
            raise TypeError(
                f"source must be an astropy WCS, a FITS Header or a mapping, "
                f"got {type(source).__name__}"
            )
        try:
            return WCS(cure_wcs_header(header))
        except (ValueError, KeyError, TypeError, MemoryError) as exc:
            self._invalidate(f"could not parse WCS header: {exc}")
            return None

    def _establish(self, full: WCS) -> None:
        try:
            if not full.has_celestial:
                self._invalidate("WCS has no celestial axes")
                return
            celestial = full.celestial if full.naxis > 2 else full
            if celestial.naxis != 2:
                self._invalidate(
                    f"expected 2 celestial axes, got {celestial.naxis}"
                )
                return

            self._lng = celestial.wcs.lng
            self._lat = celestial.wcs.lat

            # Trial conversion: a solution that cannot convert its first
            # pixel is unusable.
            probe = celestial.all_pix2world([[1.0, 1.0]], 1)
        except (ValueError, MemoryError) as exc:
            self._invalidate(f"trial conversion failed: {exc}")
            return
        if not np.all(np.isfinite(probe)):
            self._invalidate("trial conversion returned non-finite values")
            return

        self.wcs = celestial

    def _invalidate(self, reason: str) -> None:
        self.error = reason
        self.wcs = None
        logger.warning("Invalid WCS: %s", reason)

    @property
    def is_valid(self) -> bool:
        return self.wcs is not None

    def require_valid(self) -> None:
        if not self.is_valid:
            raise InvalidAstrometry(f"invalid WCS data: {self.error}")

    def _pixel_to_sky_array(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        if xs.size == 0:
            return xs.copy(), ys.copy()
        try:
            world = self.wcs.all_pix2world(xs, ys, 1)
        except ValueError as exc:
            raise InvalidAstrometry(f"error in WCS conversion: {exc}") from exc
        ras = np.asarray(world[self._lng], dtype=np.float64)
        decs = np.asarray(world[self._lat], dtype=np.float64)
        self._check_finite(xs, ys, ras, decs)
        return ras, decs

    def _sky_to_pixel_array(
        self,
        ras: np.ndarray,
        decs: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        if ras.size == 0:
            return ras.copy(), decs.copy()
        world = [None, None]
        world[self._lng] = ras
        world[self._lat] = decs
        try:
            xs, ys = self.wcs.all_world2pix(world[0], world[1], 1)
        except (ValueError, NoConvergence) as exc:
            raise InvalidAstrometry(f"error in WCS conversion: {exc}") from exc
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        self._check_finite(ras, decs, xs, ys)
        return xs, ys

    @staticmethod
    def _check_finite(
        in_a: np.ndarray,
        in_b: np.ndarray,
        out_a: np.ndarray,
        out_b: np.ndarray,
    ) -> None:
        # WCSLIB flags per-point failures by returning NaN.
        bad = (
            np.isfinite(in_a) & np.isfinite(in_b)
            & ~(np.isfinite(out_a) & np.isfinite(out_b))
        )
        if np.any(bad):
            raise InvalidAstrometry(
                f"error in WCS conversion: {int(np.count_nonzero(bad))} "
                f"point(s) could not be converted"
            )

    def __repr__(self) -> str:
        if not self.is_valid:
            return f"WCSMapping(invalid: {self.error})"
        return (
            f"WCSMapping(ctype={list(self.wcs.wcs.ctype)}, "
            f"shape={self.shape})"
        )
