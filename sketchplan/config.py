"""
Sketch Recognition Configuration

Centralized configuration with Pydantic validation for the recognition pipeline.
Defaults mirror the constants in ``sketchplan.geometry.contract``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sketchplan.geometry import contract as c


class RecognitionConfig(BaseModel):
    """
    Thresholds for every recognition stage.

    All lengths are canvas units (percent of canvas size), angles are degrees.
    """
    model_config = ConfigDict(frozen=True)

    # Stroke classification
    object_max_dim: float = Field(
        default=c.OBJECT_MAX_DIM,
        gt=0.0,
        le=100.0,
        description="Largest bounding-box side a furniture stroke may have",
    )
    closed_threshold: float = Field(
        default=c.CLOSED_THRESHOLD,
        ge=0.0,
        le=100.0,
        description="Start/end gap below which a stroke counts as closed",
    )
    compactness_factor: float = Field(
        default=c.COMPACTNESS_FACTOR,
        gt=0.0,
        le=100.0,
        description="Polyline length must stay below factor x bounding-box perimeter",
    )

    # Simplification
    simplify_epsilon: float = Field(
        default=c.SIMPLIFY_EPSILON,
        ge=0.0,
        le=50.0,
        description="Douglas-Peucker tolerance",
    )

    # Angles
    snap_threshold_deg: float = Field(
        default=c.SNAP_THRESHOLD_DEG,
        ge=0.0,
        le=45.0,
        description="Max deviation from 0/90/180/270 that snaps to the cardinal angle",
    )
    parallel_threshold_deg: float = Field(
        default=c.PARALLEL_THRESHOLD_DEG,
        ge=0.0,
        le=45.0,
        description="Max circular angle difference for sharing a parallel group",
    )

    # Walls
    merge_threshold: float = Field(
        default=c.MERGE_THRESHOLD,
        ge=0.0,
        le=50.0,
        description="Endpoints this close (inclusive) collapse into one vertex",
    )
    min_wall_length: float = Field(
        default=c.MIN_WALL_LENGTH,
        ge=0.0,
        le=50.0,
        description="Walls shorter than this after merging are dropped",
    )
    wall_thickness: float = Field(
        default=c.WALL_THICKNESS,
        gt=0.0,
        le=20.0,
        description="Thickness stamped on every recognized wall",
    )

    # Rooms
    min_room_area: float = Field(
        default=c.MIN_ROOM_AREA,
        ge=0.0,
        le=10000.0,
        description="Faces with a smaller absolute area are discarded",
    )
    wall_match_tolerance: float = Field(
        default=c.WALL_MATCH_TOLERANCE,
        ge=0.0,
        le=10.0,
        description="Endpoint tolerance when mapping face edges back to walls",
    )
    drop_exterior_faces: bool = Field(
        default=True,
        description="Discard clockwise (exterior) faces found by the face tracer",
    )

    # Decomposition
    cluster_threshold: float = Field(
        default=c.CLUSTER_THRESHOLD,
        ge=0.0,
        le=50.0,
        description="Coordinates closer than this share a grid line",
    )

    # Furniture
    min_furniture_size: float = Field(
        default=c.MIN_FURNITURE_SIZE,
        ge=0.0,
        le=100.0,
        description="Minimum emitted width/height of a furniture block",
    )

    # Space classification
    canvas_area: float = Field(
        default=c.CANVAS_AREA,
        gt=0.0,
        description="Reference area for the large-room ratio",
    )
    large_room_ratio: float = Field(
        default=c.LARGE_ROOM_RATIO,
        ge=0.0,
        le=1.0,
        description="Single rooms above this share of the canvas are open-plan",
    )

    @classmethod
    def default(cls) -> "RecognitionConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> "RecognitionConfig":
        """Create configuration from dictionary."""
        return cls(**data)

    def with_overrides(self, **updates: object) -> "RecognitionConfig":
        """Return a validated copy with the given fields replaced."""
        config_dict = self.model_dump()
        config_dict.update(updates)
        return self.__class__(**config_dict)
