# -*- coding: utf-8 -*-
"""
Regrid Sub-module - Resampling between astrometric pixel grids.

Key Classes
-----------
Regridder
    Processor that scans the destination grid and fills it from the
    source image. ``regrid()`` is the one-call convenience wrapper.
GridProjector
    Projects destination grid lines into source pixel space, one row at
    a time, reusing each row's upper edge as the next row's lower edge.
ExactOverlapStrategy, NearestNeighborStrategy
    Per-cell resampling: exact polygon overlap ("drizzle") or nearest
    neighbour with optional flux conservation.

Dependencies
------------
numpy

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

from skyregrid.regrid.geometry import (
    PARALLEL_TOLERANCE,
    clip_polygon,
    polygon_area,
    polygon_orientation,
    segment_intersection,
    pixel_footprint,
)
from skyregrid.regrid.projector import GridProjector, RowEdge
from skyregrid.regrid.strategies import (
    ResamplingStrategy,
    ExactOverlapStrategy,
    NearestNeighborStrategy,
    bounding_box,
    make_strategy,
)
from skyregrid.regrid.engine import NODATA, Regridder, regrid

__all__ = [
    'PARALLEL_TOLERANCE',
    'clip_polygon',
    'polygon_area',
    'polygon_orientation',
    'segment_intersection',
    'pixel_footprint',
    'GridProjector',
    'RowEdge',
    'ResamplingStrategy',
    'ExactOverlapStrategy',
    'NearestNeighborStrategy',
    'bounding_box',
    'make_strategy',
    'NODATA',
    'Regridder',
    'regrid',
]
