"""Sketch-to-floor-plan recognition engine."""

from loguru import logger

from sketchplan.analyze import analyze_sketch
from sketchplan.config import RecognitionConfig
from sketchplan.materialize import recognize_sketch, sketch_to_shapes
from sketchplan.metrics.pipeline_metrics import RecognitionMetrics
from sketchplan.sketch.schema import (
    BoundingBox,
    CleanedStructure,
    DetectedObject,
    DetectedRoom,
    LayoutType,
    Point,
    Segment,
    Shape,
    SpaceClassification,
    Stroke,
    Wall,
)

# Library stays silent until the application calls setup_logging()
logger.disable("sketchplan")

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "CleanedStructure",
    "DetectedObject",
    "DetectedRoom",
    "LayoutType",
    "Point",
    "RecognitionConfig",
    "RecognitionMetrics",
    "Segment",
    "Shape",
    "SpaceClassification",
    "Stroke",
    "Wall",
    "analyze_sketch",
    "recognize_sketch",
    "sketch_to_shapes",
]
