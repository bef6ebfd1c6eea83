"""
Point and polyline types shared by the parser, flattener and simplifier.
"""

import math
from typing import List, NamedTuple, Sequence, Tuple


class CoordinatePair(NamedTuple):
    """An (x, y) coordinate. Compares equal to a plain ``(x, y)`` tuple."""

    x: float
    y: float


# Type aliases
Polyline = List[CoordinatePair]
PointLike = Tuple[float, float]


def as_pair(point: Sequence[float]) -> CoordinatePair:
    """Coerce any ``(x, y)`` sequence to a CoordinatePair."""
    return CoordinatePair(float(point[0]), float(point[1]))


def distance_to_segment(p: PointLike, a: PointLike, b: PointLike) -> float:
    """Distance from ``p`` to the closed segment ``a``-``b``."""
    x0, y0 = p
    x1, y1 = a
    x2, y2 = b
    dx, dy = x2 - x1, y2 - y1
    if dx == 0 and dy == 0:
        return math.hypot(x0 - x1, y0 - y1)
    t = ((x0 - x1) * dx + (y0 - y1) * dy) / (dx * dx + dy * dy)
    t = max(0.0, min(1.0, t))
    return math.hypot(x0 - (x1 + t * dx), y0 - (y1 + t * dy))


def point_count(polylines: Sequence[Sequence[PointLike]]) -> int:
    """Total number of vertices over all polylines."""
    return sum(len(polyline) for polyline in polylines)
