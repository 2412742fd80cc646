"""
Sketch analysis pipeline: strokes -> CleanedStructure.

Wall strokes go through simplification, angle normalization, wall connection
and room detection; furniture strokes only need their bounding boxes.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Union

import pydantic
from loguru import logger

from sketchplan.classify.space import classify_space, empty_classification
from sketchplan.classify.strokes import detect_objects, partition_strokes
from sketchplan.config import RecognitionConfig
from sketchplan.exceptions import InvalidStrokeError
from sketchplan.merge.wall_graph import connect_walls
from sketchplan.metrics.pipeline_metrics import RecognitionMetrics
from sketchplan.reconstruct.rooms import detect_rooms
from sketchplan.sketch.schema import CleanedStructure, DetectedRoom, Segment, Stroke, Wall
from sketchplan.vector.simplify import douglas_peucker
from sketchplan.vector.snap import (
    align_parallel_segments,
    group_parallel,
    points_to_segments,
    snap_segment_angles,
)

StrokeInput = Union[Stroke, Mapping[str, Any]]


def coerce_strokes(strokes: Sequence[StrokeInput]) -> List[Stroke]:
    """Accept finalized Stroke models or their plain-dict form from the input boundary."""
    coerced: List[Stroke] = []
    for index, item in enumerate(strokes):
        if isinstance(item, Stroke):
            coerced.append(item)
            continue
        try:
            coerced.append(Stroke.model_validate(item))
        except pydantic.ValidationError as exc:
            raise InvalidStrokeError(
                f"Malformed stroke at index {index}",
                {"index": str(index), "errors": str(exc.error_count())},
            ) from exc
    return coerced


def vectorize_strokes(
    strokes: Sequence[Stroke],
    config: RecognitionConfig,
    metrics: RecognitionMetrics | None = None,
) -> List[Segment]:
    """Simplify each wall stroke and cut it into raw segments."""
    segments: List[Segment] = []
    for stroke in strokes:
        simplified = douglas_peucker(stroke.points, config.simplify_epsilon)
        segments.extend(points_to_segments(simplified))
        if metrics is not None:
            metrics.raw_points += len(stroke.points)
            metrics.simplified_points += len(simplified)
    return segments


def normalize_segments(
    segments: Sequence[Segment],
    config: RecognitionConfig,
    metrics: RecognitionMetrics | None = None,
) -> List[Segment]:
    """Cardinal snap followed by parallel-group alignment."""
    snapped = snap_segment_angles(segments, config.snap_threshold_deg)
    aligned = align_parallel_segments(snapped, config.parallel_threshold_deg)
    if metrics is not None:
        metrics.snapped_to_cardinal += sum(
            1 for before, after in zip(segments, snapped) if before.angle != after.angle
        )
        groups = group_parallel(snapped, config.parallel_threshold_deg)
        metrics.parallel_groups += len(groups)
        metrics.aligned_in_groups += sum(len(g) for g in groups if len(g) > 1)
    return aligned


def build_walls_and_rooms(
    segments: Sequence[Segment],
    config: RecognitionConfig,
    metrics: RecognitionMetrics | None = None,
) -> tuple[List[Wall], List[DetectedRoom]]:
    aligned = normalize_segments(segments, config, metrics)
    walls = connect_walls(
        aligned,
        merge_threshold=config.merge_threshold,
        min_wall_length=config.min_wall_length,
        thickness=config.wall_thickness,
        metrics=metrics,
    )
    rooms = detect_rooms(
        walls,
        min_room_area=config.min_room_area,
        wall_match_tolerance=config.wall_match_tolerance,
        drop_exterior_faces=config.drop_exterior_faces,
        metrics=metrics,
    )
    return walls, rooms


def analyze_sketch(
    strokes: Sequence[StrokeInput],
    config: RecognitionConfig | None = None,
    metrics: RecognitionMetrics | None = None,
) -> CleanedStructure:
    """
    Run the full recognition pipeline over ``strokes``.

    Args:
        strokes: Finalized pen strokes in canvas-percent coordinates, as
            Stroke models or dicts of the same shape.
        config: Recognition thresholds (defaults if None).
        metrics: Optional collector filled in place.

    Returns:
        CleanedStructure with walls, rooms, furniture objects and a layout guess.

    Raises:
        InvalidStrokeError: If a stroke dict fails validation.
    """
    strokes = coerce_strokes(strokes)
    if config is None:
        config = RecognitionConfig.default()
    if metrics is not None:
        metrics.total_strokes = len(strokes)

    if not strokes:
        return CleanedStructure(classification=empty_classification())

    wall_strokes, object_strokes = partition_strokes(
        strokes,
        object_max_dim=config.object_max_dim,
        closed_threshold=config.closed_threshold,
        compactness_factor=config.compactness_factor,
    )
    if metrics is None:
        metrics = RecognitionMetrics(total_strokes=len(strokes))
    metrics.wall_strokes = len(wall_strokes)
    metrics.object_strokes = len(object_strokes)

    with metrics.timed("vectorize"):
        segments = vectorize_strokes(wall_strokes, config, metrics)
    metrics.total_segments = len(segments)

    walls: List[Wall] = []
    rooms: List[DetectedRoom] = []
    if segments:
        with metrics.timed("walls_and_rooms"):
            walls, rooms = build_walls_and_rooms(segments, config, metrics)
    elif wall_strokes:
        metrics.add_warning("wall strokes produced no segments", category="vectorize")

    objects = detect_objects(object_strokes)
    metrics.total_objects = len(objects)

    classification = classify_space(
        rooms,
        canvas_area=config.canvas_area,
        large_room_ratio=config.large_room_ratio,
    )

    logger.info(
        "Analyzed sketch: {} strokes -> {} walls, {} rooms, {} objects ({})",
        len(strokes),
        len(walls),
        len(rooms),
        len(objects),
        classification.layout_type.value,
    )
    return CleanedStructure(walls=walls, rooms=rooms, objects=objects, classification=classification)
