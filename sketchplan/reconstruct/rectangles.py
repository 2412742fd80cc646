"""Decompose room polygons into axis-aligned rectangles for block placement."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from sketchplan.geometry.contract import (
    CLUSTER_ROUND_DIGITS,
    CLUSTER_THRESHOLD,
    SIMPLE_RECT_MAX_VERTICES,
)
from sketchplan.exceptions import DecompositionError
from sketchplan.geometry.primitives import bounding_box, points_in_polygon, require_non_negative
from sketchplan.sketch.schema import BoundingBox, DetectedRoom, Point


def cluster_values(values: Sequence[float], threshold: float = CLUSTER_THRESHOLD) -> List[float]:
    """
    Sort ``values`` and merge runs lying within ``threshold`` of the run's first
    value; each run is replaced by its mean rounded to one decimal.
    """
    threshold = require_non_negative("threshold", threshold)
    ordered = sorted(float(v) for v in values)
    clusters: List[float] = []
    i = 0
    while i < len(ordered):
        count = 1
        while i + count < len(ordered) and ordered[i + count] - ordered[i] < threshold:
            count += 1
        clusters.append(round(sum(ordered[i:i + count]) / count, CLUSTER_ROUND_DIGITS))
        i += count
    return clusters


def inside_cells(polygon: Sequence[Point], xs: Sequence[float], ys: Sequence[float]) -> np.ndarray:
    """Boolean grid ``[col, row]``: whether each cell center lies inside ``polygon``."""
    cx = (np.asarray(xs[:-1]) + np.asarray(xs[1:])) / 2.0
    cy = (np.asarray(ys[:-1]) + np.asarray(ys[1:])) / 2.0
    grid_x, grid_y = np.meshgrid(cx, cy, indexing="ij")
    return points_in_polygon(grid_x, grid_y, polygon)


def decompose_to_rects(
    polygon: Sequence[Point],
    cluster_threshold: float = CLUSTER_THRESHOLD,
) -> List[BoundingBox]:
    """
    Cover ``polygon`` with axis-aligned rectangles.

    Vertex coordinates are clustered into grid lines, cells whose center is
    inside the polygon are marked, and maximal rectangles are grown greedily:
    right along the row, then down while the whole column span stays free.
    Falls back to the bounding box when fewer than two grid lines exist on
    either axis or nothing is inside.
    """
    if len(polygon) < 3:
        raise DecompositionError(
            f"Cannot decompose a polygon with {len(polygon)} vertices",
            {"vertices": str(len(polygon))},
        )
    xs = cluster_values([p.x for p in polygon], cluster_threshold)
    ys = cluster_values([p.y for p in polygon], cluster_threshold)
    if len(xs) < 2 or len(ys) < 2:
        return [bounding_box(polygon)]

    grid = inside_cells(polygon, xs, ys)
    cols, rows = grid.shape
    used = np.zeros_like(grid)
    rects: List[BoundingBox] = []

    for j in range(rows):
        for i in range(cols):
            if not grid[i, j] or used[i, j]:
                continue

            max_i = i
            while max_i + 1 < cols and grid[max_i + 1, j] and not used[max_i + 1, j]:
                max_i += 1

            max_j = j
            while max_j + 1 < rows:
                span_free = grid[i:max_i + 1, max_j + 1] & ~used[i:max_i + 1, max_j + 1]
                if not span_free.all():
                    break
                max_j += 1

            used[i:max_i + 1, j:max_j + 1] = True
            rects.append(
                BoundingBox(
                    x=xs[i],
                    y=ys[j],
                    width=xs[max_i + 1] - xs[i],
                    height=ys[max_j + 1] - ys[j],
                )
            )

    return rects or [bounding_box(polygon)]


def room_rectangles(room: DetectedRoom, cluster_threshold: float = CLUSTER_THRESHOLD) -> List[BoundingBox]:
    """Simple rooms (at most four vertices) become their bounding box."""
    if len(room.polygon) <= SIMPLE_RECT_MAX_VERTICES:
        return [room.bounding_box]
    return decompose_to_rects(room.polygon, cluster_threshold)
