"""Value models for sketch recognition, in canvas-percent units (0-100)."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Value(BaseModel):
    """Immutable value type; NaN/inf coordinates are rejected at construction."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class Point(_Value):
    """2D point in canvas units."""
    x: float
    y: float

    @classmethod
    def of(cls, x: float, y: float) -> "Point":
        return cls(x=x, y=y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class BoundingBox(_Value):
    """Axis-aligned box anchored at its minimum corner."""
    x: float
    y: float
    width: float = Field(..., ge=0.0)
    height: float = Field(..., ge=0.0)

    @property
    def max_dim(self) -> float:
        return max(self.width, self.height)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        """Long side over short side; 1 for degenerate boxes."""
        if self.width > 0 and self.height > 0:
            return max(self.width, self.height) / min(self.width, self.height)
        return 1.0


class Stroke(_Value):
    """One freehand pen gesture."""
    id: str
    points: List[Point] = Field(..., min_length=1, description="Ordered pen samples")
    timestamp: float = 0.0


class Segment(_Value):
    """Straight piece of a simplified stroke; exists only inside the pipeline."""
    start: Point
    end: Point
    angle: float = Field(..., description="Direction in degrees, [0, 360)")
    length: float = Field(..., ge=0.0)


class Wall(_Value):
    """Deduplicated, angle-normalized straight edge."""
    id: str
    start: Point
    end: Point
    thickness: float = Field(..., gt=0.0)


class DetectedRoom(_Value):
    """One enclosed face of the wall graph."""
    id: str
    wall_ids: List[str] = Field(default_factory=list, description="Walls bordering the face")
    polygon: List[Point] = Field(..., min_length=3, description="Face vertices, not repeated at the end")
    bounding_box: BoundingBox
    area: float = Field(..., ge=0.0)
    aspect_ratio: float = Field(..., ge=0.0)


class DetectedObject(_Value):
    """Furniture inferred from a closed, compact stroke."""
    id: str
    bounding_box: BoundingBox
    aspect_ratio: float
    area: float


class LayoutType(str, Enum):
    RECTANGLE = "rectangle"
    L_SHAPE = "l_shape"
    CORRIDOR = "corridor"
    CAFE_OPEN = "cafe_open"
    MULTI_ROOM = "multi_room"
    UNKNOWN = "unknown"


class SpaceClassification(_Value):
    layout_type: LayoutType
    confidence: float = Field(..., ge=0.0, le=1.0)
    room_count: int = Field(..., ge=0)
    suggestion: Optional[str] = None


class CleanedStructure(_Value):
    """Terminal output of the recognition pipeline."""
    walls: List[Wall] = Field(default_factory=list)
    rooms: List[DetectedRoom] = Field(default_factory=list)
    objects: List[DetectedObject] = Field(default_factory=list)
    classification: SpaceClassification


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Shape(BaseModel):
    """Placeable block handed to the editor/renderer.

    Geometry fields serialize under the persistence names (``x_percent`` ...)
    when dumped with ``by_alias=True``.
    """
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    id: str
    space_id: str
    shape_type: str
    x: float = Field(..., alias="x_percent")
    y: float = Field(..., alias="y_percent")
    width: float = Field(..., alias="width_percent", ge=0.0)
    height: float = Field(..., alias="height_percent", ge=0.0)
    rotation: float = 0.0
    fill_color: str
    stroke_color: str
    stroke_width: float = 1.0
    opacity: float = Field(1.0, ge=0.0, le=1.0)
    z_index: int
    label: Optional[str] = None
    created_at: str = Field(default_factory=_utc_now)
    is_new: bool = Field(True, alias="isNew")
