# -*- coding: utf-8 -*-
"""
Regrid Geometry - Polygon clipping and area integration for exact-overlap resampling.

Small, allocation-light primitives operating on polygons given as two
parallel coordinate sequences ``(xs, ys)``. Every polygon is an ordered
vertex list; its winding is never assumed, it is measured with
``polygon_orientation`` and passed explicitly to the clipper.

Algorithm
---------
``clip_polygon`` is the Sutherland-Hodgman algorithm generalized to either
winding order of the clip polygon: the clip polygon's signed orientation
(+1 counter-clockwise, -1 clockwise) weights each half-plane test, so a
point is "inside" an edge when it lies on the interior side for that
winding.

``polygon_area`` fan-triangulates the polygon from its first vertex and
sums the absolute triangle areas. For the convex polygons produced by
the clipper this is the exact polygon area, whatever the winding.

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
2026-10-19
"""

# Standard library
import sys
from typing import List, Optional, Sequence, Tuple

#: Parallel-line tolerance on the intersection determinant. Edges whose
#: determinant magnitude falls below it are treated as parallel and yield
#: no intersection point.
PARALLEL_TOLERANCE = 5.0 * sys.float_info.epsilon

Polygon = Tuple[List[float], List[float]]


def polygon_orientation(xs: Sequence[float], ys: Sequence[float]) -> int:
    """
    Signed orientation of a polygon from its first three vertices.

    Parameters
    ----------
    xs, ys : Sequence[float]
        Vertex coordinates, at least three.

    Returns
    -------
    int
        ``+1`` if the first three vertices turn counter-clockwise,
        ``-1`` otherwise (clockwise or collinear).
    """
    cross = (
        (xs[1] - xs[0]) * (ys[2] - ys[1])
        - (ys[1] - ys[0]) * (xs[2] - xs[1])
    )
    return 1 if cross > 0 else -1


def is_inside_edge(
    orientation: int,
    ex1: float, ey1: float,
    ex2: float, ey2: float,
    x: float, y: float,
) -> bool:
    """
    Half-plane test of point ``(x, y)`` against the directed edge
    ``(ex2, ey2) -> (ex1, ey1)`` of a polygon with the given orientation.

    The clipper walks clip edges from the previous vertex to the current
    one and calls this with ``(current, previous)``, so for a
    counter-clockwise polygon a point strictly left of the walk direction
    is inside. Points exactly on the edge are outside.
    """
    cross = (ex2 - ex1) * (y - ey1) - (ey2 - ey1) * (x - ex1)
    return cross * orientation < 0


def segment_intersection(
    l1x1: float, l1y1: float, l1x2: float, l1y2: float,
    l2x1: float, l2y1: float, l2x2: float, l2y2: float,
    tolerance: float = PARALLEL_TOLERANCE,
) -> Optional[Tuple[float, float]]:
    """
    Intersection point of the infinite lines through two segments.

    Parameters
    ----------
    l1x1, l1y1, l1x2, l1y2 : float
        Two points on the first line.
    l2x1, l2y1, l2x2, l2y2 : float
        Two points on the second line.
    tolerance : float, default=PARALLEL_TOLERANCE
        Lines whose direction determinant has a smaller magnitude are
        considered parallel.

    Returns
    -------
    Tuple[float, float] or None
        ``(x, y)`` of the intersection, or ``None`` for parallel lines.
    """
    s1x = l1x2 - l1x1
    s1y = l1y2 - l1y1
    s2x = l2x2 - l2x1
    s2y = l2y2 - l2y1

    det = s1x * s2y - s1y * s2x
    if abs(det) < tolerance:
        return None

    s12x = l1x1 - l2x1
    s12y = l1y1 - l2y1
    t = (s2x * s12y - s2y * s12x) / det
    return l1x1 + t * s1x, l1y1 + t * s1y


def clip_polygon(
    subject_xs: Sequence[float],
    subject_ys: Sequence[float],
    clip_xs: Sequence[float],
    clip_ys: Sequence[float],
    orientation: Optional[int] = None,
    tolerance: float = PARALLEL_TOLERANCE,
) -> Polygon:
    """
    Clip a convex subject polygon against a convex clip polygon.

    Parameters
    ----------
    subject_xs, subject_ys : Sequence[float]
        Subject polygon vertices (e.g. a source pixel footprint).
    clip_xs, clip_ys : Sequence[float]
        Clip polygon vertices (e.g. a projected destination cell), at least
        three, in either winding order.
    orientation : int, optional
        Signed orientation of the clip polygon. Computed with
        ``polygon_orientation`` when omitted.
    tolerance : float, default=PARALLEL_TOLERANCE
        Parallel-line tolerance forwarded to ``segment_intersection``.

    Returns
    -------
    Tuple[List[float], List[float]]
        Vertices of the overlap polygon. Fewer than three vertices means
        the polygons do not overlap; an empty pair is returned as soon as
        the running vertex list empties.

    Notes
    -----
    When a subject edge crossing a clip edge is numerically parallel to
    it, the intersection point is dropped and clipping continues with one
    vertex fewer.
    """
    if orientation is None:
        orientation = polygon_orientation(clip_xs, clip_ys)

    out_xs = list(subject_xs)
    out_ys = list(subject_ys)

    n_clip = len(clip_xs)
    c2 = n_clip - 1
    for c1 in range(n_clip):
        if not out_xs:
            break

        cx1, cy1 = clip_xs[c1], clip_ys[c1]
        cx2, cy2 = clip_xs[c2], clip_ys[c2]

        in_xs, in_ys = out_xs, out_ys
        out_xs, out_ys = [], []

        inside = [
            is_inside_edge(orientation, cx1, cy1, cx2, cy2, x, y)
            for x, y in zip(in_xs, in_ys)
        ]

        i2 = len(in_xs) - 1
        for i1 in range(len(in_xs)):
            if inside[i1] != inside[i2]:
                point = segment_intersection(
                    cx1, cy1, cx2, cy2,
                    in_xs[i1], in_ys[i1], in_xs[i2], in_ys[i2],
                    tolerance,
                )
                if point is not None:
                    out_xs.append(point[0])
                    out_ys.append(point[1])
            if inside[i1]:
                out_xs.append(in_xs[i1])
                out_ys.append(in_ys[i1])
            i2 = i1

        c2 = c1

    if not out_xs:
        return [], []
    return out_xs, out_ys


def polygon_area(xs: Sequence[float], ys: Sequence[float]) -> float:
    """
    Area of a convex polygon by fan triangulation from its first vertex.

    Parameters
    ----------
    xs, ys : Sequence[float]
        Ordered vertex coordinates.

    Returns
    -------
    float
        Sum of the absolute areas of the fan triangles; ``0.0`` for fewer
        than three vertices.

    Examples
    --------
    >>> polygon_area([0, 1, 1, 0], [0, 0, 1, 1])
    1.0
    """
    n = len(xs)
    if n < 3:
        return 0.0

    # Triangles (0, i, i + 1) fanning out from the first vertex
    x0, y0 = xs[0], ys[0]
    area = 0.0
    for i in range(1, n - 1):
        area += 0.5 * abs(
            (xs[i] - x0) * (ys[i + 1] - y0)
            - (xs[i + 1] - x0) * (ys[i] - y0)
        )

    return area


def pixel_footprint(ix: int, iy: int) -> Polygon:
    """
    Corners of the unit-square footprint of source pixel ``(ix, iy)``.

    Returns
    -------
    Tuple[List[float], List[float]]
        ``[ix-0.5, ix+0.5, ix+0.5, ix-0.5]``, ``[iy-0.5, iy-0.5, iy+0.5, iy+0.5]``
        (counter-clockwise).
    """
    x0, x1 = ix - 0.5, ix + 0.5
    y0, y1 = iy - 0.5, iy + 0.5
    return [x0, x1, x1, x0], [y0, y0, y1, y1]
