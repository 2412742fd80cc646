"""Tests for recognition metrics collection."""

from __future__ import annotations

import json

import pytest

from sketchplan import recognize_sketch
from sketchplan.metrics.pipeline_metrics import RecognitionMetrics
from tests.utils_sketch import rectangle_strokes


def test_add_warning_counts_categories():
    metrics = RecognitionMetrics()
    metrics.add_warning("first")
    metrics.add_warning("second", category="rooms")
    metrics.add_warning("third", category="rooms")
    assert metrics.warnings == ["first", "second", "third"]
    assert metrics.warnings_by_category == {"general": 1, "rooms": 2}


def test_timed_accumulates():
    metrics = RecognitionMetrics()
    with metrics.timed("stage"):
        pass
    with metrics.timed("stage"):
        pass
    assert metrics.timings["stage"] >= 0.0
    assert list(metrics.timings) == ["stage"]


def test_timed_records_on_error():
    metrics = RecognitionMetrics()
    with pytest.raises(RuntimeError):
        with metrics.timed("broken"):
            raise RuntimeError("boom")
    assert "broken" in metrics.timings


def test_summary_of_empty_run():
    summary = RecognitionMetrics().get_summary()
    assert summary["simplification_ratio"] == 0.0
    assert summary["room_yield"] == 0.0
    assert summary["total_time_seconds"] == 0.0


def test_full_run_serializes():
    metrics = RecognitionMetrics()
    recognize_sketch(rectangle_strokes(10, 10, 40, 30), "space-1", metrics=metrics)

    data = metrics.to_dict()
    json.dumps(data)
    assert data["input"]["strokes"] == 4
    assert data["walls"]["total"] == 4
    assert data["rooms"]["kept"] == 1
    assert data["rooms"]["discarded"]["exterior"] == 1
    assert data["output"]["shapes"]["rooms"] == 1
    assert data["output"]["shapes"]["total"] == 1

    summary = metrics.get_summary()
    assert summary["rooms"] == 1
    assert summary["simplification_ratio"] == pytest.approx(1.0)
    assert summary["room_yield"] == pytest.approx(0.5)
