"""End-to-end tests for analyze_sketch."""

from __future__ import annotations

import pydantic
import pytest

from sketchplan import analyze_sketch
from sketchplan.config import RecognitionConfig
from sketchplan.exceptions import InvalidStrokeError
from sketchplan.metrics.pipeline_metrics import RecognitionMetrics
from sketchplan.sketch.schema import LayoutType
from tests.utils_sketch import closed_outline, make_stroke, rectangle_strokes


def _jittered_outline(x, y, w, h, stroke_id="outline"):
    """Closed stroke with exact corners and sides wobbling by 0.3 units."""
    corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
    coords = []
    for k in range(4):
        (ax, ay), (bx, by) = corners[k], corners[(k + 1) % 4]
        side = max(abs(bx - ax), abs(by - ay))
        steps = int(side // 4)
        # unit normal of the side
        nx, ny = (by - ay) / side, -(bx - ax) / side
        coords.append((ax, ay))
        for i in range(1, steps):
            t = i / steps
            wobble = 0.3 if i % 2 else -0.3
            coords.append((ax + t * (bx - ax) + wobble * nx, ay + t * (by - ay) + wobble * ny))
    coords.append(corners[0])
    return make_stroke(coords, stroke_id)


class TestAnalyzeSketch:
    """Recognition scenarios from clean and noisy input."""

    def test_empty_input(self):
        result = analyze_sketch([])
        assert result.walls == []
        assert result.rooms == []
        assert result.objects == []
        assert result.classification.layout_type is LayoutType.UNKNOWN
        assert result.classification.confidence == 0.0
        assert result.classification.room_count == 0

    def test_clean_rectangle(self):
        result = analyze_sketch(rectangle_strokes(10, 10, 40, 30))
        assert len(result.walls) == 4
        assert len(result.rooms) == 1
        room = result.rooms[0]
        assert room.area == pytest.approx(1200.0)
        assert room.aspect_ratio == pytest.approx(4 / 3)
        assert len(room.polygon) == 4
        assert result.classification.layout_type is LayoutType.RECTANGLE
        assert result.classification.confidence == 0.85

    def test_wobbly_outline_single_stroke(self):
        result = analyze_sketch([_jittered_outline(10, 10, 40, 30)])
        assert len(result.walls) == 4
        assert len(result.rooms) == 1
        assert result.rooms[0].area == pytest.approx(1200.0)
        assert result.objects == []

    def test_corners_that_miss_each_other(self):
        strokes = [
            make_stroke([(10, 10), (49, 11)], "top"),
            make_stroke([(50, 9), (51, 40)], "right"),
            make_stroke([(50, 41), (11, 40)], "bottom"),
            make_stroke([(10, 40), (9, 11)], "left"),
        ]
        result = analyze_sketch(strokes)
        assert len(result.walls) == 4
        assert len(result.rooms) == 1
        assert result.rooms[0].area == pytest.approx(1200.0, rel=0.05)
        assert result.classification.layout_type is LayoutType.RECTANGLE

    def test_two_separate_rooms(self):
        strokes = rectangle_strokes(5, 5, 30, 20, "a") + rectangle_strokes(50, 50, 30, 30, "b")
        result = analyze_sketch(strokes)
        assert len(result.rooms) == 2
        assert result.classification.layout_type is LayoutType.MULTI_ROOM
        assert result.classification.confidence == 0.8
        assert result.classification.room_count == 2

    def test_furniture_is_not_a_wall(self):
        table = closed_outline([(20, 20), (28, 20), (28, 28), (20, 28)], "table")
        result = analyze_sketch(rectangle_strokes(10, 10, 40, 30) + [table])
        assert len(result.walls) == 4
        assert len(result.objects) == 1
        assert result.objects[0].bounding_box.max_dim == pytest.approx(8.0)

    def test_only_furniture(self):
        table = closed_outline([(20, 20), (28, 20), (28, 28), (20, 28)], "table")
        result = analyze_sketch([table])
        assert result.walls == []
        assert len(result.objects) == 1
        assert result.classification.layout_type is LayoutType.UNKNOWN
        assert result.classification.confidence == 0.3

    def test_single_point_stroke_is_ignored(self):
        result = analyze_sketch([make_stroke([(50, 50)], "dot")])
        assert result.walls == []
        assert result.rooms == []

    def test_config_changes_room_threshold(self):
        strokes = rectangle_strokes(10, 10, 40, 30)
        config = RecognitionConfig.default().with_overrides(min_room_area=2000.0)
        result = analyze_sketch(strokes, config)
        assert result.rooms == []
        assert len(result.walls) == 4


class TestAnalyzeMetrics:
    def test_counters_filled(self):
        metrics = RecognitionMetrics()
        table = closed_outline([(20, 20), (28, 20), (28, 28), (20, 28)], "table")
        analyze_sketch(rectangle_strokes(10, 10, 40, 30) + [table], metrics=metrics)
        assert metrics.total_strokes == 5
        assert metrics.wall_strokes == 4
        assert metrics.object_strokes == 1
        assert metrics.total_segments == 4
        assert metrics.total_walls == 4
        assert metrics.merged_vertices == 4
        assert metrics.total_rooms == 1
        assert metrics.total_objects == 1
        assert set(metrics.timings) == {"vectorize", "walls_and_rooms"}

    def test_warning_when_no_segments(self):
        metrics = RecognitionMetrics()
        analyze_sketch([make_stroke([(50, 50)], "dot")], metrics=metrics)
        assert metrics.warnings_by_category == {"vectorize": 1}


class TestStrokeInput:
    """Strokes may arrive as plain dicts from the input boundary."""

    def test_dict_strokes_accepted(self):
        raw = [stroke.model_dump() for stroke in rectangle_strokes(10, 10, 40, 30)]
        result = analyze_sketch(raw)
        assert len(result.rooms) == 1

    def test_stroke_without_points_rejected(self):
        with pytest.raises(InvalidStrokeError) as exc_info:
            analyze_sketch([{"id": "s", "points": []}])
        assert exc_info.value.details["index"] == "0"
        assert isinstance(exc_info.value.__cause__, pydantic.ValidationError)

    def test_nan_coordinate_rejected(self):
        with pytest.raises(ValueError):
            analyze_sketch([{"id": "s", "points": [{"x": float("nan"), "y": 1.0}]}])
