"""Small planar-geometry helpers shared by the recognition stages."""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np
from shapely.geometry import LineString, MultiPoint, Polygon

from sketchplan.exceptions import InvalidParameterError
from sketchplan.sketch.schema import BoundingBox, Point


def require_non_negative(name: str, value: float) -> float:
    """Fail fast on negative or non-finite tolerances."""
    value = float(value)
    if not math.isfinite(value) or value < 0.0:
        raise InvalidParameterError(
            f"{name} must be a finite non-negative number, got {value!r}",
            {"parameter": name, "value": repr(value)},
        )
    return value


def require_positive(name: str, value: float) -> float:
    """Like ``require_non_negative`` but zero is rejected too."""
    value = require_non_negative(name, value)
    if value == 0.0:
        raise InvalidParameterError(
            f"{name} must be positive, got {value!r}",
            {"parameter": name, "value": repr(value)},
        )
    return value


def distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def as_array(points: Sequence[Point]) -> np.ndarray:
    """(n, 2) float array of the given points."""
    if not points:
        return np.empty((0, 2), dtype=float)
    return np.array([(p.x, p.y) for p in points], dtype=float)


def bounding_box(points: Sequence[Point]) -> BoundingBox:
    if not points:
        return BoundingBox(x=0.0, y=0.0, width=0.0, height=0.0)
    arr = as_array(points)
    min_x, min_y = arr.min(axis=0)
    max_x, max_y = arr.max(axis=0)
    return BoundingBox(
        x=float(min_x),
        y=float(min_y),
        width=float(max_x - min_x),
        height=float(max_y - min_y),
    )


def polyline_length(points: Sequence[Point]) -> float:
    if len(points) < 2:
        return 0.0
    return float(LineString([p.as_tuple() for p in points]).length)


def signed_area(polygon: Sequence[Point]) -> float:
    """Shoelace area; positive when vertices run counter-clockwise (y up)."""
    if len(polygon) < 3:
        return 0.0
    arr = as_array(polygon)
    xs, ys = arr[:, 0], arr[:, 1]
    return 0.5 * float(np.dot(xs, np.roll(ys, -1)) - np.dot(np.roll(xs, -1), ys))


def convex_hull(points: Sequence[Point]) -> List[Point]:
    """Hull vertices without the closing repeat; fewer than 3 when degenerate."""
    if not points:
        return []
    hull = MultiPoint([p.as_tuple() for p in points]).convex_hull
    if isinstance(hull, Polygon):
        coords = list(hull.exterior.coords)[:-1]
    else:
        coords = list(hull.coords)
    return [Point(x=float(x), y=float(y)) for x, y in coords]


def points_in_polygon(xs: np.ndarray, ys: np.ndarray, polygon: Sequence[Point]) -> np.ndarray:
    """Even-odd ray casting for many query points at once.

    Self-intersecting rings are handled by parity, matching how the face
    tracer may produce them.
    """
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    inside = np.zeros(xs.shape, dtype=bool)
    n = len(polygon)
    if n < 3:
        return inside
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if yi != yj:
            crosses = (yi > ys) != (yj > ys)
            x_cross = (xj - xi) * (ys - yi) / (yj - yi) + xi
            inside ^= crosses & (xs < x_cross)
        j = i
    return inside
