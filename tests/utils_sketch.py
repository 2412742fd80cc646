from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from sketchplan.geometry.primitives import bounding_box, signed_area
from sketchplan.sketch.schema import DetectedRoom, Point, Stroke, Wall

Coord = Tuple[float, float]


def pts(coords: Iterable[Coord]) -> List[Point]:
    return [Point(x=float(x), y=float(y)) for x, y in coords]


def make_stroke(coords: Sequence[Coord], stroke_id: str = "s") -> Stroke:
    return Stroke(id=stroke_id, points=pts(coords), timestamp=0.0)


def rectangle_strokes(x: float, y: float, w: float, h: float, prefix: str = "r") -> List[Stroke]:
    """Four single-segment strokes tracing a rectangle's sides."""
    corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
    return [
        make_stroke([corners[i], corners[(i + 1) % 4]], stroke_id=f"{prefix}-{i}")
        for i in range(4)
    ]


def closed_outline(coords: Sequence[Coord], stroke_id: str = "outline") -> Stroke:
    """One stroke around ``coords`` that ends where it started."""
    return make_stroke(list(coords) + [coords[0]], stroke_id=stroke_id)


def make_wall(wall_id: str, start: Coord, end: Coord) -> Wall:
    return Wall(
        id=wall_id,
        start=Point(x=start[0], y=start[1]),
        end=Point(x=end[0], y=end[1]),
        thickness=2.0,
    )


def polygon_walls(coords: Sequence[Coord], prefix: str = "w") -> List[Wall]:
    return [
        make_wall(f"{prefix}{i}", coords[i], coords[(i + 1) % len(coords)])
        for i in range(len(coords))
    ]


def make_room(coords: Sequence[Coord], room_id: str = "room-0") -> DetectedRoom:
    polygon = pts(coords)
    bbox = bounding_box(polygon)
    return DetectedRoom(
        id=room_id,
        wall_ids=[],
        polygon=polygon,
        bounding_box=bbox,
        area=abs(signed_area(polygon)),
        aspect_ratio=bbox.aspect_ratio,
    )
