"""
Flattening of quadratic and cubic Bézier segments into line segments.
"""

import math
from typing import Iterator, List, Sequence, Tuple

from .config import DEFAULT_FLATTENING_TOLERANCE
from .geometry import CoordinatePair, PointLike, distance_to_segment

# Subdivision depth cap for ordinary curves, and for NaN or infinite control
# points where it bounds output at 2**MAX_DEPTH points.
MAX_DEPTH = 16
# Deepest cap allowed for very large curves. Past this size relative to the
# tolerance the cap wins over the tolerance.
MAX_DEPTH_LIMIT = 24


def _split(points: Sequence[PointLike]) -> Tuple[List[PointLike], List[PointLike]]:
    """de Casteljau subdivision of a control polygon at t=0.5."""
    left = [points[0]]
    right = [points[-1]]
    level = list(points)
    while len(level) > 1:
        level = [((a[0] + b[0]) / 2, (a[1] + b[1]) / 2) for a, b in zip(level, level[1:])]
        left.append(level[0])
        right.append(level[-1])
    right.reverse()
    return left, right


def depth_limit(control: Sequence[PointLike], tolerance: float) -> int:
    """
    Subdivision depth cap for a control polygon.

    Each split at t=0.5 shrinks the distance of inner control points from
    the chord about fourfold, so a polygon of extent E needs roughly
    log4(E / tolerance) levels. Four levels are added on top of that.
    """
    coords = [(float(p[0]), float(p[1])) for p in control]
    if not all(math.isfinite(x) and math.isfinite(y) for x, y in coords):
        return MAX_DEPTH
    extent = max(
        max(c[axis] for c in coords) - min(c[axis] for c in coords)
        for axis in (0, 1)
    )
    if extent <= tolerance:
        return MAX_DEPTH
    needed = math.ceil(math.log(extent / tolerance, 4)) + 4
    return min(max(MAX_DEPTH, needed), MAX_DEPTH_LIMIT)


def flatten_bezier(control: Sequence[PointLike], tolerance: float = DEFAULT_FLATTENING_TOLERANCE) -> Iterator[CoordinatePair]:
    """
    Adaptive flattening of a Bézier control polygon of any degree.

    A piece is emitted as a single chord once all of its inner control points
    lie within ``tolerance`` of that chord. The curve is contained in the
    convex hull of its control points, so the deviation of the chord from the
    curve is bounded by the same tolerance.

    Yields the end point of every chord: the start point is excluded and the
    last point yielded is exactly ``control[-1]``.
    """
    if not tolerance > 0:
        raise ValueError(f"Flattening tolerance must be positive, got {tolerance!r}")

    max_depth = depth_limit(control, tolerance)
    stack = [(list(control), 0)]
    while stack:
        points, depth = stack.pop()
        first, last = points[0], points[-1]
        flat = all(distance_to_segment(p, first, last) <= tolerance for p in points[1:-1])
        if flat or depth >= max_depth:
            yield CoordinatePair(float(last[0]), float(last[1]))
        else:
            left, right = _split(points)
            stack.append((right, depth + 1))
            stack.append((left, depth + 1))


def flatten_cubic(from_: PointLike, ctrl1: PointLike, ctrl2: PointLike, to: PointLike,
                  tolerance: float = DEFAULT_FLATTENING_TOLERANCE) -> Iterator[CoordinatePair]:
    """Flatten a cubic Bézier segment. Excludes ``from_``, ends at ``to``."""
    return flatten_bezier((from_, ctrl1, ctrl2, to), tolerance)


def flatten_quadratic(from_: PointLike, ctrl: PointLike, to: PointLike,
                      tolerance: float = DEFAULT_FLATTENING_TOLERANCE) -> Iterator[CoordinatePair]:
    """Flatten a quadratic Bézier segment. Excludes ``from_``, ends at ``to``."""
    return flatten_bezier((from_, ctrl, to), tolerance)
