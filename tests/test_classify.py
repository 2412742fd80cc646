"""Tests for stroke, furniture and layout classification."""

from __future__ import annotations

import pytest

from sketchplan.classify.objects import classify_table_type
from sketchplan.classify.space import classify_space, empty_classification
from sketchplan.classify.strokes import detect_objects, is_object_stroke, partition_strokes
from sketchplan.exceptions import InvalidParameterError
from sketchplan.sketch.blocks import BlockType
from sketchplan.sketch.schema import BoundingBox, DetectedObject, LayoutType
from tests.utils_sketch import closed_outline, make_room, make_stroke


def _square(x, y, side, stroke_id="sq"):
    return closed_outline([(x, y), (x + side, y), (x + side, y + side), (x, y + side)], stroke_id)


def _obj(width, height) -> DetectedObject:
    bbox = BoundingBox(x=10.0, y=10.0, width=width, height=height)
    return DetectedObject(id="obj-0", bounding_box=bbox, aspect_ratio=bbox.aspect_ratio, area=bbox.area)


class TestObjectStrokes:
    """Small, closed and compact strokes are furniture."""

    def test_small_closed_square(self):
        assert is_object_stroke(_square(0, 0, 10))

    def test_open_stroke_is_wall(self):
        assert not is_object_stroke(make_stroke([(0, 0), (10, 0), (10, 10)]))

    def test_large_closed_stroke_is_wall(self):
        assert not is_object_stroke(_square(0, 0, 30))

    def test_max_dim_is_inclusive(self):
        assert is_object_stroke(_square(0, 0, 20))

    def test_two_points_never_object(self):
        assert not is_object_stroke(make_stroke([(0, 0), (1, 1)]))

    def test_scribble_not_compact(self):
        scribble = make_stroke([(0, 0), (10, 10)] * 5 + [(0, 0)])
        assert not is_object_stroke(scribble)

    def test_single_location_not_compact(self):
        assert not is_object_stroke(make_stroke([(5, 5), (5, 5), (5, 5)]))

    def test_partition_preserves_order(self):
        strokes = [
            make_stroke([(0, 0), (80, 0)], "w1"),
            _square(10, 10, 8, "t1"),
            make_stroke([(80, 0), (80, 60)], "w2"),
            _square(30, 30, 6, "t2"),
        ]
        walls, objects = partition_strokes(strokes)
        assert [s.id for s in walls] == ["w1", "w2"]
        assert [s.id for s in objects] == ["t1", "t2"]

    def test_partition_thresholds_override(self):
        walls, objects = partition_strokes([_square(0, 0, 10)], object_max_dim=5.0)
        assert len(walls) == 1
        assert objects == []

    def test_detect_objects_bounding_boxes(self):
        objects = detect_objects([_square(10, 20, 8, "a"), _square(40, 40, 6, "b")])
        assert [o.id for o in objects] == ["obj-0", "obj-1"]
        assert objects[0].bounding_box == BoundingBox(x=10, y=20, width=8, height=8)
        assert objects[0].area == pytest.approx(64.0)
        assert objects[1].aspect_ratio == pytest.approx(1.0)


class TestTableType:
    @pytest.mark.parametrize(
        "width, height, expected",
        [
            (8, 7, BlockType.TABLE_ROUND),
            (10, 10, BlockType.TABLE_ROUND),
            (8, 4, BlockType.TABLE_2),
            (12, 4, BlockType.TABLE_4),
            (13, 12, BlockType.TABLE_4),
            (18, 6, BlockType.TABLE_6),
            (15, 15, BlockType.TABLE_6),
        ],
    )
    def test_rule_order(self, width, height, expected):
        assert classify_table_type(_obj(width, height)).block_type is expected

    def test_colors(self):
        round_style = classify_table_type(_obj(10, 10))
        assert (round_style.fill_color, round_style.stroke_color) == ("#F5E6D3", "#A78B71")
        rect_style = classify_table_type(_obj(18, 6))
        assert (rect_style.fill_color, rect_style.stroke_color) == ("#E8D5C0", "#A78B71")


class TestSpaceClassification:
    def test_empty_sketch(self):
        result = empty_classification()
        assert result.layout_type is LayoutType.UNKNOWN
        assert result.confidence == 0.0
        assert result.room_count == 0

    def test_no_rooms(self):
        result = classify_space([])
        assert (result.layout_type, result.confidence, result.room_count) == (LayoutType.UNKNOWN, 0.3, 0)

    def test_multi_room(self):
        rooms = [
            make_room([(0, 0), (20, 0), (20, 20), (0, 20)], "room-0"),
            make_room([(40, 0), (60, 0), (60, 20), (40, 20)], "room-1"),
        ]
        result = classify_space(rooms)
        assert result.layout_type is LayoutType.MULTI_ROOM
        assert result.confidence == 0.8
        assert result.room_count == 2

    def test_rectangle(self):
        result = classify_space([make_room([(10, 10), (50, 10), (50, 40), (10, 40)])])
        assert result.layout_type is LayoutType.RECTANGLE
        assert result.confidence == 0.85
        assert result.suggestion

    def test_corridor(self):
        result = classify_space([make_room([(0, 0), (80, 0), (80, 10), (0, 10)])])
        assert result.layout_type is LayoutType.CORRIDOR
        assert result.confidence == 0.75

    def test_corridor_wins_over_vertex_count(self):
        polygon = [(0, 0), (40, 0), (80, 0), (80, 20), (40, 20), (0, 20)]
        result = classify_space([make_room(polygon)])
        assert result.layout_type is LayoutType.CORRIDOR

    def test_large_room_is_cafe(self):
        result = classify_space([make_room([(0, 0), (80, 0), (80, 60), (0, 60)])])
        assert result.layout_type is LayoutType.CAFE_OPEN
        assert result.confidence == 0.7

    def test_canvas_area_configurable(self):
        room = make_room([(0, 0), (40, 0), (40, 30), (0, 30)])
        result = classify_space([room], canvas_area=2000.0)
        assert result.layout_type is LayoutType.CAFE_OPEN

    def test_l_shape(self):
        polygon = [(0, 0), (40, 0), (40, 15), (15, 15), (15, 30), (0, 30)]
        result = classify_space([make_room(polygon)])
        assert result.layout_type is LayoutType.L_SHAPE
        assert result.confidence == 0.65

    def test_five_vertex_squarish_room_is_rectangle(self):
        polygon = [(0, 0), (20, 0), (40, 0), (40, 30), (0, 30)]
        result = classify_space([make_room(polygon)])
        assert result.layout_type is LayoutType.RECTANGLE

    def test_unknown_single_room(self):
        # aspect 2.5 is neither a corridor nor a rectangle
        polygon = [(0, 0), (25, 0), (0, 10)]
        result = classify_space([make_room(polygon)])
        assert result.layout_type is LayoutType.UNKNOWN
        assert result.confidence == 0.4
        assert result.room_count == 1


class TestClassifierParameters:
    """Invalid thresholds raise instead of silently misclassifying."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"object_max_dim": -1.0},
            {"closed_threshold": -1.0},
            {"compactness_factor": 0.0},
            {"compactness_factor": float("inf")},
        ],
    )
    def test_object_stroke_thresholds(self, overrides):
        with pytest.raises(InvalidParameterError):
            is_object_stroke(_square(0, 0, 10), **overrides)

    def test_partition_forwards_thresholds(self):
        with pytest.raises(InvalidParameterError):
            partition_strokes([_square(0, 0, 10)], closed_threshold=-2.0)

    @pytest.mark.parametrize("canvas_area", [0.0, -100.0])
    def test_canvas_area_must_be_positive(self, canvas_area):
        room = make_room([(10, 10), (50, 10), (50, 40), (10, 40)])
        with pytest.raises(InvalidParameterError):
            classify_space([room], canvas_area=canvas_area)

    def test_canvas_area_checked_without_rooms(self):
        with pytest.raises(InvalidParameterError):
            classify_space([], canvas_area=0.0)

    def test_negative_large_room_ratio(self):
        with pytest.raises(InvalidParameterError):
            classify_space([], large_room_ratio=-0.1)
