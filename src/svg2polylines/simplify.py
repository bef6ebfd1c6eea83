"""
Polyline simplification.

Removes vertices that do not materially change the shape of a polyline,
using the Ramer-Douglas-Peucker algorithm: a vertex is kept only if it lies
farther than the tolerance from the chord between the vertices kept around
it.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from .geometry import Polyline, PointLike, as_pair, distance_to_segment, point_count

logger = logging.getLogger(__name__)


def douglas_peucker(points: Sequence[PointLike], tolerance: float) -> Polyline:
    """
    Ramer-Douglas-Peucker decimation of a point sequence.

    Iterative, so long polylines do not run into the recursion limit. The
    first and last points are always kept.
    """
    points = [as_pair(p) for p in points]
    n = len(points)
    if n < 3:
        return points

    keep = [False] * n
    keep[0] = keep[-1] = True
    stack = [(0, n - 1)]
    while stack:
        start, end = stack.pop()
        max_d, idx = 0.0, 0
        for i in range(start + 1, end):
            d = distance_to_segment(points[i], points[start], points[end])
            if d > max_d:
                idx, max_d = i, d
        if max_d > tolerance:
            keep[idx] = True
            stack.append((idx, end))
            stack.append((start, idx))

    return [p for p, kept in zip(points, keep) if kept]


def simplify_polyline(polyline: Sequence[PointLike], tolerance: float) -> Optional[Polyline]:
    """
    Simplify a single polyline.

    Args:
        polyline: List of (x, y) points
        tolerance: Maximum distance a removed vertex may lie from the result

    Returns:
        The simplified polyline, or None if the polyline is degenerate: fewer
        than two points, or two points not farther apart than the tolerance
        in both axes.
    """
    if len(polyline) <= 1:
        return None
    if len(polyline) == 2:
        (x1, y1), (x2, y2) = polyline
        if abs(x2 - x1) > tolerance and abs(y2 - y1) > tolerance:
            return [as_pair(p) for p in polyline]
        return None
    return douglas_peucker(polyline, tolerance)


def simplify(polylines: Iterable[Sequence[PointLike]], tolerance: float) -> List[Polyline]:
    """
    Simplify every polyline, dropping the degenerate ones.

    Args:
        polylines: List of polylines, where each polyline is a list of (x, y) points
        tolerance: Simplification tolerance

    Returns:
        List of simplified polylines in input order
    """
    if tolerance < 0:
        raise ValueError(f"Simplification tolerance must not be negative, got {tolerance!r}")

    result: List[Polyline] = []
    before = 0
    for polyline in polylines:
        before += len(polyline)
        simplified = simplify_polyline(polyline, tolerance)
        if simplified is not None:
            result.append(simplified)

    logger.debug("Simplified %d points to %d (tolerance %s)", before, point_count(result), tolerance)
    return result
