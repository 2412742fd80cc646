"""Douglas-Peucker simplification of freehand point sequences."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
from shapely.geometry import LineString

from sketchplan.geometry.contract import SIMPLIFY_EPSILON
from sketchplan.geometry.primitives import as_array, require_non_negative
from sketchplan.sketch.schema import Point


def _kept_indices(coords: np.ndarray, kept: np.ndarray) -> List[int]:
    """Input positions of the simplified vertices; both ends map to the input ends."""
    last = len(coords) - 1
    indices = [0]
    k = 1
    for xy in kept[1:-1]:
        while k < last and not np.array_equal(coords[k], xy):
            k += 1
        indices.append(k)
        k += 1
    indices.append(last)
    return indices


def douglas_peucker(points: Sequence[Point], epsilon: float = SIMPLIFY_EPSILON) -> List[Point]:
    """Reduce ``points`` to the minimal polyline within ``epsilon``.

    First and last points are always kept; sequences of two points or fewer
    are returned unchanged. Distances are measured to the clamped chord, so
    a closed stroke (zero-length chord) keeps its farthest point. The
    returned items are the input ``Point`` objects, not copies.
    """
    epsilon = require_non_negative("epsilon", epsilon)
    if len(points) <= 2:
        return list(points)
    coords = as_array(points)
    simplified = LineString(coords).simplify(epsilon, preserve_topology=False)
    if simplified.is_empty:
        return [points[0], points[-1]]
    return [points[i] for i in _kept_indices(coords, np.asarray(simplified.coords))]
