# -*- coding: utf-8 -*-
"""
Resampling Strategies - Combine source pixels under one projected destination cell.

Each strategy receives the source image and the quadrilateral cell of one
destination pixel (in 0-based source pixel coordinates) and returns
``(covered, value)``. ``covered == False`` means no source pixel
contributes and the destination pixel keeps the no-data sentinel; a
covered pixel may legitimately carry ``0.0``.

Key Classes
-----------
ExactOverlapStrategy
    Drizzle: sum of source values weighted by the exact overlap area of
    each source pixel footprint with the cell.
NearestNeighborStrategy
    Source value at the rounded cell centroid, optionally scaled by the
    cell area to conserve flux.

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
import math
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple, Union

# Third-party
import numpy as np

# skyregrid internal
from skyregrid.regrid.geometry import (
    PARALLEL_TOLERANCE,
    clip_polygon,
    pixel_footprint,
    polygon_area,
    polygon_orientation,
)
from skyregrid.vocabulary import RegridMethod

BoundingBox = Tuple[int, int, int, int]


def bounding_box(
    cell_xs: Sequence[float],
    cell_ys: Sequence[float],
    shape: Tuple[int, int],
) -> Optional[BoundingBox]:
    """
    Source pixel index range that can overlap a cell.

    The cell extent is widened by half a pixel, floored/ceiled to integer
    indices and clamped to the image.

    Parameters
    ----------
    cell_xs, cell_ys : Sequence[float]
        Cell vertices in 0-based source pixel coordinates.
    shape : Tuple[int, int]
        Source image shape ``(rows, cols)``.

    Returns
    -------
    Tuple[int, int, int, int] or None
        Inclusive ``(xmin, xmax, ymin, ymax)``, or ``None`` when the
        clamped box is empty.
    """
    rows, cols = shape
    xmin = max(0, math.floor(min(cell_xs) - 0.5))
    ymin = max(0, math.floor(min(cell_ys) - 0.5))
    xmax = min(cols - 1, math.ceil(max(cell_xs) + 0.5))
    ymax = min(rows - 1, math.ceil(max(cell_ys) + 0.5))
    if xmin > xmax or ymin > ymax:
        return None
    return xmin, xmax, ymin, ymax


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class ResamplingStrategy(ABC):
    """Abstract per-cell resampler."""

    #: Method this strategy implements.
    method: RegridMethod

    @abstractmethod
    def resample(
        self,
        image: np.ndarray,
        cell_xs: Sequence[float],
        cell_ys: Sequence[float],
    ) -> Tuple[bool, float]:
        """
        Resample the source pixels under one cell.

        Parameters
        ----------
        image : np.ndarray
            Source image, shape ``(rows, cols)``.
        cell_xs, cell_ys : Sequence[float]
            The 4 cell vertices in 0-based source pixel coordinates.

        Returns
        -------
        Tuple[bool, float]
            ``(covered, value)``. ``value`` is meaningless when not covered.
        """
        ...


class ExactOverlapStrategy(ResamplingStrategy):
    """
    Drizzle: exact polygon-overlap area weighting.

    Every source pixel in the cell's bounding box has its footprint
    clipped against the cell; the destination value is
    ``sum(source_value * overlap_area)``. The pixel is covered as soon as
    one footprint yields an overlap polygon of at least three vertices,
    even if its area is numerically zero.

    Parameters
    ----------
    tolerance : float, default=PARALLEL_TOLERANCE
        Parallel-line tolerance used by the clipper.

    Notes
    -----
    Work per destination pixel grows with the number of source pixels it
    covers, so shrinking an image by a large factor is expensive.
    """

    method = RegridMethod.DRIZZLE

    def __init__(self, tolerance: float = PARALLEL_TOLERANCE) -> None:
        self.tolerance = tolerance

    def resample(
        self,
        image: np.ndarray,
        cell_xs: Sequence[float],
        cell_ys: Sequence[float],
    ) -> Tuple[bool, float]:
        box = bounding_box(cell_xs, cell_ys, image.shape)
        if box is None:
            return False, 0.0
        xmin, xmax, ymin, ymax = box

        orientation = polygon_orientation(cell_xs, cell_ys)

        covered = False
        flux = 0.0
        for iy in range(ymin, ymax + 1):
            for ix in range(xmin, xmax + 1):
                fxs, fys = pixel_footprint(ix, iy)
                oxs, oys = clip_polygon(
                    fxs, fys, cell_xs, cell_ys,
                    orientation=orientation, tolerance=self.tolerance,
                )
                if len(oxs) < 3:
                    continue
                covered = True
                flux += float(image[iy, ix]) * polygon_area(oxs, oys)

        return covered, flux

    def __repr__(self) -> str:
        return f"ExactOverlapStrategy(tolerance={self.tolerance!r})"


class NearestNeighborStrategy(ResamplingStrategy):
    """
    Nearest neighbour sampling at the cell centroid.

    The centroid is the mean of the 4 cell vertices, rounded half away
    from zero to a source pixel index. The cell is covered when that pixel
    lies inside the source image.

    Parameters
    ----------
    conserve_flux : bool, default=False
        Multiply the sampled value by the area of the whole cell (in source
        pixels), approximating the flux the destination pixel collects
        rather than a point sample. Near the source image edge this
        overstates the flux, as the cell may extend past the image.
    """

    method = RegridMethod.NEAREST

    def __init__(self, conserve_flux: bool = False) -> None:
        self.conserve_flux = conserve_flux

    def resample(
        self,
        image: np.ndarray,
        cell_xs: Sequence[float],
        cell_ys: Sequence[float],
    ) -> Tuple[bool, float]:
        if bounding_box(cell_xs, cell_ys, image.shape) is None:
            return False, 0.0

        rows, cols = image.shape
        ix = _round_half_away(sum(cell_xs) / len(cell_xs))
        iy = _round_half_away(sum(cell_ys) / len(cell_ys))
        if not (0 <= ix < cols and 0 <= iy < rows):
            return False, 0.0

        value = float(image[iy, ix])
        if self.conserve_flux:
            value *= polygon_area(cell_xs, cell_ys)
        return True, value

    def __repr__(self) -> str:
        return f"NearestNeighborStrategy(conserve_flux={self.conserve_flux!r})"


def make_strategy(
    method: Union[RegridMethod, str],
    conserve_flux: bool = False,
    tolerance: float = PARALLEL_TOLERANCE,
) -> ResamplingStrategy:
    """
    Build the strategy for a regrid method.

    Parameters
    ----------
    method : RegridMethod or str
        ``'drizzle'`` or ``'nearest'``.
    conserve_flux : bool, default=False
        Flux-conserving nearest neighbour. Drizzle conserves flux by
        construction and ignores it.
    tolerance : float, default=PARALLEL_TOLERANCE
        Clipper parallel-line tolerance (drizzle only).

    Returns
    -------
    ResamplingStrategy

    Raises
    ------
    ValueError
        If *method* is not a known regrid method.
    """
    method = RegridMethod.coerce(method)
    if method is RegridMethod.DRIZZLE:
        return ExactOverlapStrategy(tolerance=tolerance)
    return NearestNeighborStrategy(conserve_flux=conserve_flux)
