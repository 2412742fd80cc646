"""Guess the overall layout type from the detected rooms."""

from __future__ import annotations

from typing import Sequence

from sketchplan.geometry.contract import (
    CANVAS_AREA,
    CORRIDOR_MAX_ASPECT,
    CORRIDOR_MIN_ASPECT,
    L_SHAPE_MIN_VERTICES,
    LARGE_ROOM_RATIO,
    RECTANGLE_MAX_ASPECT,
    RECTANGLE_MAX_VERTICES,
    RECTANGLE_MIN_ASPECT,
)
from sketchplan.geometry.primitives import require_non_negative, require_positive
from sketchplan.sketch.schema import DetectedRoom, LayoutType, SpaceClassification


def empty_classification() -> SpaceClassification:
    """Classification of a sketch with no strokes at all."""
    return SpaceClassification(layout_type=LayoutType.UNKNOWN, confidence=0.0, room_count=0)


def classify_space(
    rooms: Sequence[DetectedRoom],
    *,
    canvas_area: float = CANVAS_AREA,
    large_room_ratio: float = LARGE_ROOM_RATIO,
) -> SpaceClassification:
    """
    Score the room set against simple heuristics, first match wins.
    Suggestions are advisory text for the user and carry no geometry.
    """
    canvas_area = require_positive("canvas_area", canvas_area)
    large_room_ratio = require_non_negative("large_room_ratio", large_room_ratio)
    room_count = len(rooms)

    if room_count == 0:
        return SpaceClassification(layout_type=LayoutType.UNKNOWN, confidence=0.3, room_count=0)

    if room_count >= 2:
        return SpaceClassification(
            layout_type=LayoutType.MULTI_ROOM,
            confidence=0.8,
            room_count=room_count,
            suggestion="Several separate rooms were detected.",
        )

    room = rooms[0]
    vertex_count = len(room.polygon)
    ar = room.aspect_ratio
    area_ratio = room.area / canvas_area

    if ar > CORRIDOR_MAX_ASPECT or ar < CORRIDOR_MIN_ASPECT:
        return SpaceClassification(
            layout_type=LayoutType.CORRIDOR,
            confidence=0.75,
            room_count=1,
            suggestion="This looks like a corridor.",
        )

    if area_ratio > large_room_ratio:
        return SpaceClassification(
            layout_type=LayoutType.CAFE_OPEN,
            confidence=0.7,
            room_count=1,
            suggestion="This looks like an open cafe floor. Generate a default seating layout?",
        )

    if vertex_count >= L_SHAPE_MIN_VERTICES:
        return SpaceClassification(
            layout_type=LayoutType.L_SHAPE,
            confidence=0.65,
            room_count=1,
            suggestion="This looks like an L-shaped room.",
        )

    if vertex_count <= RECTANGLE_MAX_VERTICES and RECTANGLE_MIN_ASPECT <= ar <= RECTANGLE_MAX_ASPECT:
        return SpaceClassification(
            layout_type=LayoutType.RECTANGLE,
            confidence=0.85,
            room_count=1,
            suggestion="This looks like a rectangular room.",
        )

    return SpaceClassification(layout_type=LayoutType.UNKNOWN, confidence=0.4, room_count=1)
