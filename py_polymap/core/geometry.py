"""Plane geometry helpers shared by the generation stages."""

import math
from typing import Sequence, Tuple

Point = Tuple[float, float]


def approximate_centroid(polygon: Sequence[Point]) -> Point:
    """
    Mean of the polygon's vertices.

    This is not the area-weighted centroid. Relaxation depends on exactly
    this value, so do not swap it for the true centroid. Every entry counts,
    so a closed ring weights its repeated first vertex twice.
    """
    n = len(polygon)
    if n == 0:
        return (0.0, 0.0)
    sx = 0.0
    sy = 0.0
    for x, y in polygon:
        sx += x
        sy += y
    return (sx / n, sy / n)


def polygon_area(polygon: Sequence[Point]) -> float:
    """Absolute polygon area via the shoelace formula."""
    n = len(polygon)
    if n < 3:
        return 0.0

    area = 0.0
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        area += (xj + xi) * (yj - yi)
        j = i
    return abs(area / 2)


def distance(x0: float, y0: float, x1: float, y1: float) -> float:
    """Euclidean distance between two points."""
    return math.sqrt((x0 - x1) ** 2 + (y0 - y1) ** 2)


def map_center(width: float, height: float) -> Point:
    return (width / 2, height / 2)


def distance_from_map_center(x: float, y: float, width: float, height: float) -> float:
    cx, cy = map_center(width, height)
    return distance(x, y, cx, cy)


def max_distance(width: float, height: float) -> float:
    """Length of the map diagonal, an upper bound on any in-map distance."""
    return distance(0, 0, width, height)


def is_on_map_edge(x: float, y: float, width: float, height: float) -> bool:
    """True if the point lies exactly on the map rectangle's boundary."""
    return x == 0 or x == width or y == 0 or y == height


def bearing(x0: float, y0: float, x1: float, y1: float) -> float:
    """
    Compass bearing from (x0, y0) to (x1, y1) in degrees.

    Map space has y growing downward, so 0 is up (north), 90 is east,
    180 is down (south) and 270 is west. Result is in [0, 360).
    """
    angle = math.degrees(math.atan2(x1 - x0, y0 - y1)) % 360.0
    # Tiny negative angles wrap to exactly 360.0 in floating point
    return 0.0 if angle >= 360.0 else angle


def angle_difference(a: float, b: float) -> float:
    """Smallest absolute difference between two bearings, in [0, 180]."""
    diff = abs(a - b) % 360.0
    return 360.0 - diff if diff > 180.0 else diff
