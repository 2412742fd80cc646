"""Turn a CleanedStructure into placeable editor shapes."""

from __future__ import annotations

import uuid
from typing import List, Sequence

from sketchplan.analyze import StrokeInput, analyze_sketch
from sketchplan.classify.objects import classify_table_type
from sketchplan.config import RecognitionConfig
from sketchplan.geometry.contract import LEFTOVER_MIN_BOX_SIDE, LEFTOVER_MIN_RECT_SIDE
from sketchplan.geometry.primitives import bounding_box, convex_hull
from sketchplan.logging_config import log_run_summary, space_logger
from sketchplan.metrics.pipeline_metrics import RecognitionMetrics
from sketchplan.reconstruct.rectangles import decompose_to_rects, room_rectangles
from sketchplan.sketch.blocks import BlockType, get_block
from sketchplan.sketch.schema import (
    BoundingBox,
    CleanedStructure,
    DetectedObject,
    Point,
    Shape,
    Wall,
)


def _make_id() -> str:
    return f"sketch-{uuid.uuid4().hex[:12]}"


def make_room_shape(rect: BoundingBox, space_id: str, z_index: int) -> Shape:
    block = get_block(BlockType.ROOM)
    return Shape(
        id=_make_id(),
        space_id=space_id,
        shape_type=block.type.value,
        x=rect.x,
        y=rect.y,
        width=rect.width,
        height=rect.height,
        fill_color=block.default_fill,
        stroke_color=block.default_stroke,
        z_index=z_index,
    )


def make_object_shape(
    obj: DetectedObject,
    space_id: str,
    z_index: int,
    min_size: float,
) -> Shape:
    """Furniture keeps its drawn position and size, but never below ``min_size``."""
    style = classify_table_type(obj)
    bbox = obj.bounding_box
    return Shape(
        id=_make_id(),
        space_id=space_id,
        shape_type=style.block_type.value,
        x=bbox.x,
        y=bbox.y,
        width=max(bbox.width, min_size),
        height=max(bbox.height, min_size),
        fill_color=style.fill_color,
        stroke_color=style.stroke_color,
        z_index=z_index,
    )


def _wall_endpoints(walls: Sequence[Wall]) -> List[Point]:
    points: List[Point] = []
    for wall in walls:
        points.extend((wall.start, wall.end))
    return points


def leftover_rectangles(walls: Sequence[Wall], cluster_threshold: float) -> List[BoundingBox]:
    """
    Best-effort room region for walls that border no detected room: the
    decomposed convex hull of their endpoints, or a widened box for a single wall.
    """
    endpoints = _wall_endpoints(walls)
    if len(endpoints) >= 3:
        hull = convex_hull(endpoints)
        if len(hull) < 3:
            return []
        return [
            rect
            for rect in decompose_to_rects(hull, cluster_threshold)
            if rect.width > LEFTOVER_MIN_RECT_SIDE and rect.height > LEFTOVER_MIN_RECT_SIDE
        ]
    if len(endpoints) == 2:
        bbox = bounding_box(endpoints)
        return [
            BoundingBox(
                x=bbox.x,
                y=bbox.y,
                width=max(bbox.width, LEFTOVER_MIN_BOX_SIDE),
                height=max(bbox.height, LEFTOVER_MIN_BOX_SIDE),
            )
        ]
    return []


def sketch_to_shapes(
    structure: CleanedStructure,
    space_id: str,
    config: RecognitionConfig | None = None,
    metrics: RecognitionMetrics | None = None,
) -> List[Shape]:
    """
    Materialize rooms, leftover walls and furniture, in that stacking order.
    z-index increases strictly from the first room rectangle to the last object.
    """
    if config is None:
        config = RecognitionConfig.default()
    shapes: List[Shape] = []

    for room in structure.rooms:
        for rect in room_rectangles(room, config.cluster_threshold):
            shapes.append(make_room_shape(rect, space_id, len(shapes)))
    room_count = len(shapes)

    room_wall_ids = {wid for room in structure.rooms for wid in room.wall_ids}
    leftover = [wall for wall in structure.walls if wall.id not in room_wall_ids]
    if leftover:
        for rect in leftover_rectangles(leftover, config.cluster_threshold):
            shapes.append(make_room_shape(rect, space_id, len(shapes)))
    leftover_count = len(shapes) - room_count

    for obj in structure.objects:
        shapes.append(make_object_shape(obj, space_id, len(shapes), config.min_furniture_size))

    if metrics is not None:
        metrics.room_shapes = room_count
        metrics.leftover_shapes = leftover_count
        metrics.object_shapes = len(structure.objects)
    space_logger(space_id).debug(
        "Materialized {} shapes ({} room, {} leftover, {} furniture)",
        len(shapes),
        room_count,
        leftover_count,
        len(structure.objects),
    )
    return shapes


def recognize_sketch(
    strokes: Sequence[StrokeInput],
    space_id: str,
    config: RecognitionConfig | None = None,
    metrics: RecognitionMetrics | None = None,
) -> List[Shape]:
    """Strokes straight to shapes."""
    if metrics is None:
        metrics = RecognitionMetrics()
    structure = analyze_sketch(strokes, config, metrics)
    shapes = sketch_to_shapes(structure, space_id, config, metrics)
    log_run_summary(space_id, metrics)
    return shapes
