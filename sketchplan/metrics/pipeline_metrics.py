"""
Pipeline Metrics Collection

Collects metrics during a sketch recognition run for monitoring and tuning.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass
class RecognitionMetrics:
    """
    Metrics collected during one recognition run.

    Tracks stage throughput, discarded candidates and timings.
    """

    # Input statistics
    total_strokes: int = 0
    wall_strokes: int = 0
    object_strokes: int = 0

    # Vectorization statistics
    raw_points: int = 0
    simplified_points: int = 0
    total_segments: int = 0
    snapped_to_cardinal: int = 0
    aligned_in_groups: int = 0
    parallel_groups: int = 0

    # Wall statistics
    total_walls: int = 0
    merged_vertices: int = 0
    degenerate_walls: int = 0

    # Room statistics
    room_candidates: int = 0
    rooms_unclosed: int = 0
    rooms_below_min_area: int = 0
    rooms_exterior: int = 0
    rooms_duplicate: int = 0
    total_rooms: int = 0

    # Output statistics
    total_objects: int = 0
    room_shapes: int = 0
    leftover_shapes: int = 0
    object_shapes: int = 0

    # Performance metrics (in seconds)
    timings: dict[str, float] = field(default_factory=dict)

    # Warnings
    warnings: list[str] = field(default_factory=list)
    warnings_by_category: dict[str, int] = field(default_factory=dict)

    @contextmanager
    def timed(self, stage: str) -> Iterator[None]:
        """Accumulate wall-clock time of the enclosed block under ``stage``."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timings[stage] = self.timings.get(stage, 0.0) + (time.perf_counter() - start)

    def add_warning(self, message: str, category: str = "general") -> None:
        """Add a warning message and update category count."""
        self.warnings.append(message)
        self.warnings_by_category[category] = self.warnings_by_category.get(category, 0) + 1

    @property
    def rooms_discarded(self) -> int:
        return (
            self.rooms_unclosed
            + self.rooms_below_min_area
            + self.rooms_exterior
            + self.rooms_duplicate
        )

    @property
    def total_shapes(self) -> int:
        return self.room_shapes + self.leftover_shapes + self.object_shapes

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary for serialization."""
        return {
            "input": {
                "strokes": self.total_strokes,
                "wall_strokes": self.wall_strokes,
                "object_strokes": self.object_strokes,
            },
            "vectorization": {
                "raw_points": self.raw_points,
                "simplified_points": self.simplified_points,
                "segments": self.total_segments,
                "snapped_to_cardinal": self.snapped_to_cardinal,
                "aligned_in_groups": self.aligned_in_groups,
                "parallel_groups": self.parallel_groups,
            },
            "walls": {
                "total": self.total_walls,
                "merged_vertices": self.merged_vertices,
                "degenerate": self.degenerate_walls,
            },
            "rooms": {
                "candidates": self.room_candidates,
                "kept": self.total_rooms,
                "discarded": {
                    "unclosed": self.rooms_unclosed,
                    "below_min_area": self.rooms_below_min_area,
                    "exterior": self.rooms_exterior,
                    "duplicate": self.rooms_duplicate,
                },
            },
            "output": {
                "objects": self.total_objects,
                "shapes": {
                    "rooms": self.room_shapes,
                    "leftover": self.leftover_shapes,
                    "objects": self.object_shapes,
                    "total": self.total_shapes,
                },
            },
            "performance": dict(self.timings),
            "warnings": {
                "total": len(self.warnings),
                "by_category": self.warnings_by_category,
                "list": self.warnings,
            },
        }

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of key metrics."""
        return {
            "strokes": self.total_strokes,
            "walls": self.total_walls,
            "rooms": self.total_rooms,
            "objects": self.total_objects,
            "shapes": self.total_shapes,
            "simplification_ratio": (
                self.simplified_points / self.raw_points if self.raw_points > 0 else 0.0
            ),
            "room_yield": (
                self.total_rooms / self.room_candidates if self.room_candidates > 0 else 0.0
            ),
            "total_time_seconds": sum(self.timings.values()),
            "total_warnings": len(self.warnings),
        }
