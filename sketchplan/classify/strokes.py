"""Partition freehand strokes into wall-like and furniture-like input."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from sketchplan.geometry.contract import (
    CLOSED_THRESHOLD,
    COMPACTNESS_FACTOR,
    MIN_OBJECT_POINTS,
    OBJECT_MAX_DIM,
)
from sketchplan.geometry.primitives import (
    bounding_box,
    distance,
    polyline_length,
    require_non_negative,
    require_positive,
)
from sketchplan.sketch.schema import DetectedObject, Stroke


def is_object_stroke(
    stroke: Stroke,
    *,
    object_max_dim: float = OBJECT_MAX_DIM,
    closed_threshold: float = CLOSED_THRESHOLD,
    compactness_factor: float = COMPACTNESS_FACTOR,
) -> bool:
    """A stroke is furniture-like iff it is small, roughly closed and compact."""
    object_max_dim = require_non_negative("object_max_dim", object_max_dim)
    closed_threshold = require_non_negative("closed_threshold", closed_threshold)
    compactness_factor = require_positive("compactness_factor", compactness_factor)
    points = stroke.points
    if len(points) < MIN_OBJECT_POINTS:
        return False

    bbox = bounding_box(points)
    if bbox.max_dim > object_max_dim:
        return False

    is_closed = distance(points[0], points[-1]) < closed_threshold

    perimeter = 2.0 * (bbox.width + bbox.height)
    is_compact = perimeter > 0.0 and polyline_length(points) < perimeter * compactness_factor

    return is_closed and is_compact


def partition_strokes(strokes: Sequence[Stroke], **thresholds: float) -> Tuple[List[Stroke], List[Stroke]]:
    """Split into ``(wall_strokes, object_strokes)`` preserving input order."""
    walls: List[Stroke] = []
    objects: List[Stroke] = []
    for stroke in strokes:
        if is_object_stroke(stroke, **thresholds):
            objects.append(stroke)
        else:
            walls.append(stroke)
    return walls, objects


def detect_objects(strokes: Sequence[Stroke]) -> List[DetectedObject]:
    objects: List[DetectedObject] = []
    for stroke in strokes:
        bbox = bounding_box(stroke.points)
        objects.append(
            DetectedObject(
                id=f"obj-{len(objects)}",
                bounding_box=bbox,
                aspect_ratio=bbox.aspect_ratio,
                area=bbox.area,
            )
        )
    return objects
