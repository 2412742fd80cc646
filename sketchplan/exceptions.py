"""Custom exception hierarchy for sketchplan."""

from __future__ import annotations


class SketchplanError(Exception):
    """Base exception for all sketchplan-specific errors."""
    
    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SketchplanError):
    """Raised when configuration is invalid or missing."""
    pass


class ValidationError(SketchplanError):
    """Base class for caller contract violations."""
    pass


class InvalidStrokeError(ValidationError, ValueError):
    """Raised when stroke data is malformed (not merely low quality)."""
    pass


class InvalidParameterError(ValidationError, ValueError):
    """Raised when a tolerance or threshold is out of its domain."""
    pass


class GeometryError(SketchplanError):
    """Raised when geometry operations fail."""
    pass


class DecompositionError(GeometryError):
    """Raised when a polygon cannot be decomposed into rectangles."""
    pass
