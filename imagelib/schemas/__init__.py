"""
Schemas Package

Immutable pydantic value types describing pixel geometry. They are shared by
the surface layer, the codec and the transform engine.
"""

from .geometry import (
    Color,
    Dimensions,
    Line,
    Point,
    Rectangle,
    floor_pixels,
    round_half_up,
)

__all__ = [
    "Color",
    "Dimensions",
    "Line",
    "Point",
    "Rectangle",
    "floor_pixels",
    "round_half_up",
]
