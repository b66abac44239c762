# -*- coding: utf-8 -*-
"""
Grid Projector - Project destination pixel grid lines into source pixel space.

For every destination row ``y`` the projector produces the two boundary
polylines of that row, the grid line at ``y - 0.5`` (lower edge) and the
one at ``y + 0.5`` (upper edge), each with ``W + 1`` corner points
expressed in 0-based source pixel coordinates. Corners are carried
through ``destination pixel -> sky -> source pixel``.

Row edges are reused: the upper edge of row ``y`` becomes the lower edge
of row ``y + 1``, so every grid corner is transformed exactly once over a
full scan.

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
from typing import Iterator, NamedTuple, Optional, Tuple

# Third-party
import numpy as np

# skyregrid internal
from skyregrid.astrometry.base import AstrometricMapping
from skyregrid.exceptions import ValidationError

logger = logging.getLogger(__name__)


class RowEdge(NamedTuple):
    """One projected grid line: ``W + 1`` corners in 0-based source pixels."""

    xs: np.ndarray
    ys: np.ndarray


class GridProjector:
    """
    Project the destination pixel grid onto the source image.

    Parameters
    ----------
    source_mapping : AstrometricMapping
        Astrometry of the source image.
    dest_mapping : AstrometricMapping
        Astrometry of the destination grid.
    dest_shape : Tuple[int, int], optional
        Destination shape ``(rows, cols)``. Defaults to
        ``dest_mapping.shape``.

    Raises
    ------
    InvalidAstrometry
        If either mapping is invalid.
    ValidationError
        If the destination shape is unknown or not positive.

    Examples
    --------
    >>> projector = GridProjector(src_mapping, dst_mapping)
    >>> for y, lower, upper in projector.iter_rows():
    ...     xs, ys = projector.cell(lower, upper, 0)
    """

    def __init__(
        self,
        source_mapping: AstrometricMapping,
        dest_mapping: AstrometricMapping,
        dest_shape: Optional[Tuple[int, int]] = None,
    ) -> None:
        source_mapping.require_valid()
        dest_mapping.require_valid()

        if dest_shape is None:
            dest_shape = dest_mapping.shape
        if dest_shape is None:
            raise ValidationError(
                "Destination shape is unknown: pass dest_shape or use a "
                "destination mapping that declares its shape"
            )
        rows, cols = (int(n) for n in dest_shape)
        if rows <= 0 or cols <= 0:
            raise ValidationError(
                f"Destination shape must be positive, got {(rows, cols)}"
            )

        self.source_mapping = source_mapping
        self.dest_mapping = dest_mapping
        self.shape = (rows, cols)

        # Column corner positions, 0-based: -0.5, 0.5, ..., W - 0.5
        self._corner_cols = np.arange(cols + 1, dtype=np.float64) - 0.5

    def project_line(self, y_corner: float) -> RowEdge:
        """
        Project the destination grid line at 0-based row ``y_corner``.

        Parameters
        ----------
        y_corner : float
            0-based row coordinate of the grid line (``y - 0.5`` for the
            lower edge of row ``y``).

        Returns
        -------
        RowEdge
            ``W + 1`` corner positions in 0-based source pixel coordinates.
        """
        # 0-based corners -> 1-based for the mapping boundary
        dest_xs = self._corner_cols + 1.0
        dest_ys = np.full_like(dest_xs, y_corner + 1.0)

        ras, decs = self.dest_mapping.pixel_to_sky(dest_xs, dest_ys)
        src_xs, src_ys = self.source_mapping.sky_to_pixel(ras, decs)

        return RowEdge(src_xs - 1.0, src_ys - 1.0)

    def iter_rows(self) -> Iterator[Tuple[int, RowEdge, RowEdge]]:
        """
        Yield ``(y, lower_edge, upper_edge)`` for every destination row.

        The upper edge computed for row ``y`` is handed over as the lower
        edge of row ``y + 1``; it is never recomputed.
        """
        rows = self.shape[0]
        lower_edge = self.project_line(-0.5)
        for y in range(rows):
            upper_edge = self.project_line(y + 0.5)
            yield y, lower_edge, upper_edge
            lower_edge = upper_edge

    @staticmethod
    def cell(
        lower_edge: RowEdge,
        upper_edge: RowEdge,
        x: int,
    ) -> Tuple[Tuple[float, float, float, float],
               Tuple[float, float, float, float]]:
        """
        Projected cell of destination column ``x`` between two row edges.

        Returns
        -------
        Tuple[tuple, tuple]
            ``(xs, ys)`` of ``lower[x], lower[x+1], upper[x+1], upper[x]``.
        """
        lx, ly = lower_edge
        ux, uy = upper_edge
        return (
            (float(lx[x]), float(lx[x + 1]), float(ux[x + 1]), float(ux[x])),
            (float(ly[x]), float(ly[x + 1]), float(uy[x + 1]), float(uy[x])),
        )
