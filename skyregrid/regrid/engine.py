# -*- coding: utf-8 -*-
"""
Regrid Engine - Resample a 2D image onto another astrometric pixel grid.

``Regridder`` scans the destination grid row by row. For each row it takes
the two projected grid lines from ``GridProjector``, forms the 4-vertex
cell of every destination pixel in source pixel space and hands it to the
configured ``ResamplingStrategy``. Covered pixels receive the resampled
value; uncovered pixels keep the ``NaN`` no-data sentinel.

Both astrometric mappings are validated once, before the output array is
allocated; an invalid mapping aborts the call with ``InvalidAstrometry``
and no partial output.

Each call owns its output array and row-edge buffers, so one
``Regridder`` (and its read-only mappings) can serve concurrent calls.

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

# Standard library
import logging
from typing import Annotated, Any, Callable, Optional, Tuple, Union

# Third-party
import numpy as np

# skyregrid internal
from skyregrid.astrometry.base import AstrometricMapping
from skyregrid.base import ImageTransform
from skyregrid.exceptions import ValidationError
from skyregrid.params import Desc, Options
from skyregrid.regrid.geometry import PARALLEL_TOLERANCE
from skyregrid.regrid.projector import GridProjector
from skyregrid.regrid.strategies import make_strategy
from skyregrid.versioning import processor_version
from skyregrid.vocabulary import RegridMethod

logger = logging.getLogger(__name__)

#: Value written to destination pixels no source pixel contributes to.
NODATA = np.nan


def _method_value(method: Any) -> Any:
    if isinstance(method, RegridMethod):
        return method.value
    return method


@processor_version('1.0.0')
class Regridder(ImageTransform):
    """
    Regrid an image from its own astrometry onto a destination grid.

    Attributes
    ----------
    source_mapping : AstrometricMapping
        Astrometry of the images passed to ``apply``.
    dest_mapping : AstrometricMapping
        Astrometry of the destination grid.
    dest_shape : Tuple[int, int] or None
        Destination shape ``(rows, cols)``; ``dest_mapping.shape`` when None.
    method : str
        ``'drizzle'`` (exact overlap) or ``'nearest'``.
    conserve_flux : bool
        Scale nearest-neighbour samples by the cell area.
    report_progress : bool
        Log progress at INFO level in ten-percent steps.
    tolerance : float
        Parallel-line tolerance of the polygon clipper.

    Examples
    --------
    >>> regridder = Regridder(src_mapping, dst_mapping, method='drizzle')
    >>> out = regridder.apply(image)
    >>> out = regridder.apply(image, method='nearest',
    ...                       progress_callback=lambda f: print(f"{f:.0%}"))
    """

    method: Annotated[
        str, Options('drizzle', 'nearest'),
        Desc('Resampling method'),
    ] = 'drizzle'
    conserve_flux: Annotated[
        bool, Desc('Scale nearest-neighbour samples by the cell area'),
    ] = False
    report_progress: Annotated[
        bool, Desc('Log regrid progress'),
    ] = False

    def __init__(
        self,
        source_mapping: AstrometricMapping,
        dest_mapping: AstrometricMapping,
        method: Union[RegridMethod, str] = 'drizzle',
        conserve_flux: bool = False,
        report_progress: bool = False,
        dest_shape: Optional[Tuple[int, int]] = None,
        tolerance: float = PARALLEL_TOLERANCE,
    ) -> None:
        self.source_mapping = source_mapping
        self.dest_mapping = dest_mapping
        self.dest_shape = dest_shape
        self.method = _method_value(method)
        self.conserve_flux = conserve_flux
        self.report_progress = report_progress
        self.tolerance = tolerance
        self._resolve_params({})

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Regrid *source* onto the destination grid.

        Parameters
        ----------
        source : np.ndarray
            Source image, shape ``(rows, cols)``, real valued.
        **kwargs
            ``method``, ``conserve_flux`` and ``report_progress`` override
            the instance options for this call. ``progress_callback`` is
            called with the completed fraction after each row; an exception
            it raises aborts the regrid and propagates.

        Returns
        -------
        np.ndarray
            ``float64`` array of the destination shape. Pixels without
            source coverage hold ``NaN``.

        Raises
        ------
        InvalidAstrometry
            If either mapping is invalid or a transform fails.
        ValidationError
            If *source* is not a real 2D array matching the source
            mapping's shape, or an option is invalid.
        """
        if 'method' in kwargs:
            kwargs['method'] = _method_value(kwargs['method'])
        params = self._resolve_params(kwargs)

        source = np.asarray(source)
        if source.ndim != 2:
            raise ValidationError(
                f"Regridding requires a 2D image, got {source.ndim}D "
                f"with shape {source.shape}"
            )
        if np.iscomplexobj(source):
            raise ValidationError("Regridding complex-valued images is not supported")
        src_shape = self.source_mapping.shape
        if src_shape is not None and tuple(src_shape) != source.shape:
            raise ValidationError(
                f"Image shape {source.shape} does not match source "
                f"astrometry shape {tuple(src_shape)}"
            )

        projector = GridProjector(
            self.source_mapping, self.dest_mapping, self.dest_shape
        )
        strategy = make_strategy(
            params['method'], params['conserve_flux'], self.tolerance
        )
        image = source.astype(np.float64, copy=False)

        rows, cols = projector.shape
        output = np.full((rows, cols), NODATA, dtype=np.float64)
        logger.debug(
            "Regridding %s image onto %s grid with %r",
            source.shape, projector.shape, strategy,
        )

        last_decile = 0
        for y, lower_edge, upper_edge in projector.iter_rows():
            for x in range(cols):
                cell_xs, cell_ys = projector.cell(lower_edge, upper_edge, x)
                covered, value = strategy.resample(image, cell_xs, cell_ys)
                if covered:
                    output[y, x] = value

            fraction = (y + 1) / rows
            self._report_progress(kwargs, fraction)
            decile = (y + 1) * 10 // rows
            if params['report_progress'] and decile > last_decile:
                logger.info("Regrid %3.0f%% (%d/%d rows)",
                            fraction * 100.0, y + 1, rows)
                last_decile = decile

        logger.debug(
            "Regrid done: %d/%d pixels covered",
            int(np.count_nonzero(~np.isnan(output))), output.size,
        )
        return output

    def __repr__(self) -> str:
        return (
            f"Regridder(method={self.method!r}, "
            f"conserve_flux={self.conserve_flux!r})"
        )


def regrid(
    source: np.ndarray,
    source_mapping: AstrometricMapping,
    dest_mapping: AstrometricMapping,
    method: Union[RegridMethod, str] = 'drizzle',
    conserve_flux: bool = False,
    report_progress: bool = False,
    progress_callback: Optional[Callable[[float], Any]] = None,
    dest_shape: Optional[Tuple[int, int]] = None,
) -> np.ndarray:
    """
    Regrid *source* from *source_mapping* onto *dest_mapping*.

    Convenience wrapper around ``Regridder``.

    Parameters
    ----------
    source : np.ndarray
        Source image, shape ``(rows, cols)``.
    source_mapping : AstrometricMapping
        Astrometry of *source*.
    dest_mapping : AstrometricMapping
        Astrometry of the destination grid.
    method : RegridMethod or str, default='drizzle'
        ``'drizzle'`` or ``'nearest'``.
    conserve_flux : bool, default=False
        Flux-conserving nearest neighbour.
    report_progress : bool, default=False
        Log progress at INFO level.
    progress_callback : Callable[[float], Any], optional
        Called with the completed fraction after each destination row.
    dest_shape : Tuple[int, int], optional
        Destination shape, when *dest_mapping* does not declare one.

    Returns
    -------
    np.ndarray
        Regridded ``float64`` image, ``NaN`` where not covered.

    Examples
    --------
    >>> out = regrid(image, WCSMapping(src_header), WCSMapping(dst_header))
    """
    regridder = Regridder(
        source_mapping, dest_mapping,
        method=method,
        conserve_flux=conserve_flux,
        report_progress=report_progress,
        dest_shape=dest_shape,
    )
    return regridder.apply(source, progress_callback=progress_callback)
