"""Segment building, cardinal angle snapping and parallel-wall alignment."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np

from sketchplan.geometry.contract import (
    CARDINAL_ANGLES,
    PARALLEL_THRESHOLD_DEG,
    SNAP_THRESHOLD_DEG,
)
from sketchplan.geometry.primitives import require_non_negative
from sketchplan.sketch.schema import Point, Segment


def normalize_angle(angle_deg: float) -> float:
    """Map any angle onto [0, 360)."""
    a = angle_deg % 360.0
    if a < 0.0:
        a += 360.0
    # -1e-15 % 360 rounds up to 360.0
    return 0.0 if a >= 360.0 else a


def _angle_deg_of(start: Point, end: Point) -> float:
    return normalize_angle(math.degrees(math.atan2(end.y - start.y, end.x - start.x)))


def _unit_from_angle(angle_deg: float) -> Tuple[float, float]:
    a = math.radians(angle_deg)
    return math.cos(a), math.sin(a)


def _within(angle_deg: float, reference_deg: float, tolerance_deg: float) -> bool:
    """Circular closeness test, inclusive on both sides of the wrap."""
    diff = normalize_angle(angle_deg - reference_deg)
    return diff <= tolerance_deg or diff >= 360.0 - tolerance_deg


def _rebuild(segment: Segment, angle_deg: float) -> Segment:
    """Rotate ``segment`` about its start point, keeping its length."""
    ux, uy = _unit_from_angle(angle_deg)
    end = Point(x=segment.start.x + ux * segment.length, y=segment.start.y + uy * segment.length)
    return Segment(start=segment.start, end=end, angle=angle_deg, length=segment.length)


def points_to_segments(points: Sequence[Point]) -> List[Segment]:
    """One segment per consecutive point pair; fewer than two points yield none."""
    segments: List[Segment] = []
    for start, end in zip(points, points[1:]):
        segments.append(
            Segment(
                start=start,
                end=end,
                angle=_angle_deg_of(start, end),
                length=math.hypot(end.x - start.x, end.y - start.y),
            )
        )
    return segments


def snap_to_cardinal(angle_deg: float, tolerance_deg: float = SNAP_THRESHOLD_DEG) -> float:
    """Return the first cardinal angle within tolerance, else ``angle_deg``."""
    for cardinal in CARDINAL_ANGLES:
        if _within(angle_deg, cardinal, tolerance_deg):
            return cardinal
    return angle_deg


def snap_segment_angles(
    segments: Sequence[Segment],
    tolerance_deg: float = SNAP_THRESHOLD_DEG,
) -> List[Segment]:
    """
    If a segment is within tolerance of 0/90/180/270 degrees, move its end point
    so the angle becomes exactly cardinal while preserving start and length.
    """
    tolerance_deg = require_non_negative("tolerance_deg", tolerance_deg)
    snapped: List[Segment] = []
    for seg in segments:
        target = snap_to_cardinal(seg.angle, tolerance_deg)
        if target == seg.angle:
            snapped.append(seg)
            continue
        snapped.append(_rebuild(seg, target))
    return snapped


def group_parallel(
    segments: Sequence[Segment],
    tolerance_deg: float = PARALLEL_THRESHOLD_DEG,
) -> List[List[Segment]]:
    """First-fit grouping: a segment joins the first group whose first member is close."""
    groups: List[List[Segment]] = []
    for seg in segments:
        for group in groups:
            if _within(seg.angle, group[0].angle, tolerance_deg):
                group.append(seg)
                break
        else:
            groups.append([seg])
    return groups


def weighted_mean_angle(segments: Sequence[Segment]) -> float:
    """Length-weighted circular mean of the segment angles, in degrees."""
    rads = np.radians([seg.angle for seg in segments])
    weights = np.array([seg.length for seg in segments], dtype=float)
    total = float(weights.sum())
    if total <= 0.0:
        return segments[0].angle
    mean_sin = float(np.dot(np.sin(rads), weights)) / total
    mean_cos = float(np.dot(np.cos(rads), weights)) / total
    return normalize_angle(math.degrees(math.atan2(mean_sin, mean_cos)))


def align_parallel_segments(
    segments: Sequence[Segment],
    tolerance_deg: float = PARALLEL_THRESHOLD_DEG,
) -> List[Segment]:
    """
    Re-align near-parallel segments to their shared, length-weighted mean angle.
    Output is ordered group by group; singleton groups pass through unchanged.
    """
    tolerance_deg = require_non_negative("tolerance_deg", tolerance_deg)
    aligned: List[Segment] = []
    for group in group_parallel(segments, tolerance_deg):
        if len(group) <= 1:
            aligned.extend(group)
            continue
        mean = weighted_mean_angle(group)
        aligned.extend(_rebuild(seg, mean) for seg in group)
    return aligned
