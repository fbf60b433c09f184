"""
Geometric value types.

Point, Dimensions, Color, Line and Rectangle are immutable pydantic models
describing pixel geometry. Rectangle also carries the constructors and derived
values (boundary lines, bounds checks) the transform engine builds on.

Coordinates follow image convention: (0, 0) is the top-left pixel and y grows
downwards.
"""

import math
import re
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from imagelib.constants import ErrorMessages, GeometryConstants
from imagelib.exceptions import InvalidArgument

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def round_half_up(value: float) -> int:
    """Round to the nearest integer pixel, halves rounding up."""
    return int(math.floor(value + 0.5))


def floor_pixels(value: float) -> int:
    """Floor a computed size, tolerating float error just below an integer."""
    return int(math.floor(value + GeometryConstants.FLOOR_EPSILON))


class Point(BaseModel):
    """Integer pixel coordinate."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., description="X coordinate in pixels")
    y: int = Field(..., description="Y coordinate in pixels")

    def to_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


class Dimensions(BaseModel):
    """Width and height of something. Combine with a Point to get a Rectangle."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., description="Width in pixels")
    height: int = Field(..., description="Height in pixels")

    @field_validator("width", "height")
    @classmethod
    def validate_positive(cls, v: int, info) -> int:
        if v <= 0:
            raise InvalidArgument(
                ErrorMessages.NON_POSITIVE_DIMENSION.format(field=info.field_name, value=v)
            )
        return v

    @property
    def num_pixels(self) -> int:
        return self.width * self.height


class Color(BaseModel):
    """
    RGB colour with each channel in [0, 255].

    Construction fails with InvalidArgument when a channel is out of range.
    """

    model_config = ConfigDict(frozen=True)

    red: int
    green: int
    blue: int

    @field_validator("red", "green", "blue")
    @classmethod
    def validate_channel(cls, v: int, info) -> int:
        if v < GeometryConstants.COLOR_CHANNEL_MIN or v > GeometryConstants.COLOR_CHANNEL_MAX:
            raise InvalidArgument(
                ErrorMessages.COLOR_CHANNEL_OUT_OF_RANGE.format(
                    channel=info.field_name.capitalize()
                )
            )
        return v

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """
        Create a colour from a hex string.

        Accepts "#RRGGBB", "RRGGBB" and the short "#RGB" form.

        Raises:
            InvalidArgument: If the string is not a hex colour
        """
        match = _HEX_COLOR.match(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise InvalidArgument(ErrorMessages.INVALID_HEX_COLOR.format(value=value))

        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)

        return cls(
            red=int(digits[0:2], 16),
            green=int(digits[2:4], 16),
            blue=int(digits[4:6], 16),
        )

    def to_bgr(self) -> tuple[int, int, int]:
        """Channel order used by OpenCV surfaces."""
        return (self.blue, self.green, self.red)

    def to_hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


class Line(BaseModel):
    """A segment we may wish to draw on an image. Direction is kept as given."""

    model_config = ConfigDict(frozen=True)

    start: Point
    end: Point


class Rectangle(BaseModel):
    """
    Axis-aligned box used for cropping and drawing.

    x/y may be any integer (a box can start off-image, operations against a
    real image will then fail). width/height must not be negative.
    """

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., description="Left edge")
    y: int = Field(..., description="Top edge")
    width: int = Field(..., description="Width")
    height: int = Field(..., description="Height")

    @field_validator("width", "height")
    @classmethod
    def validate_non_negative(cls, v: int, info) -> int:
        if v < 0:
            raise InvalidArgument(
                ErrorMessages.NEGATIVE_RECTANGLE_SIZE.format(field=info.field_name, value=v)
            )
        return v

    @classmethod
    def from_point_and_size(cls, point: Point, size: Dimensions) -> "Rectangle":
        """Create a rectangle from its top-left point and dimensions."""
        return cls(x=point.x, y=point.y, width=size.width, height=size.height)

    @classmethod
    def from_center_point_and_size(cls, point: Point, size: Dimensions) -> "Rectangle":
        """
        Create a rectangle of the given size centred on a point.

        Handy for drawing a box around something whose location is known.
        The top-left corner is rounded half-up to whole pixels.
        """
        x = round_half_up(point.x - size.width / 2.0)
        y = round_half_up(point.y - size.height / 2.0)
        return cls(x=x, y=y, width=size.width, height=size.height)

    @classmethod
    def from_points(cls, point1: Point, point2: Point) -> "Rectangle":
        """Create the rectangle spanned by two corners, in any order."""
        x1 = min(point1.x, point2.x)
        x2 = max(point1.x, point2.x)
        y1 = min(point1.y, point2.y)
        y2 = max(point1.y, point2.y)
        return cls(x=x1, y=y1, width=x2 - x1, height=y2 - y1)

    @property
    def x2(self) -> int:
        """Right edge coordinate."""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Bottom edge coordinate."""
        return self.y + self.height

    @property
    def top_left(self) -> Point:
        return Point(x=self.x, y=self.y)

    def dimensions(self) -> Dimensions:
        return Dimensions(width=self.width, height=self.height)

    def lines(self) -> List[Line]:
        """
        Boundary segments in drawing order: top, left, bottom, right.

        Returns:
            Four Lines between the corners (x1,y1), (x2,y1), (x1,y2), (x2,y2)
        """
        top_left = Point(x=self.x, y=self.y)
        top_right = Point(x=self.x2, y=self.y)
        bottom_left = Point(x=self.x, y=self.y2)
        bottom_right = Point(x=self.x2, y=self.y2)

        return [
            Line(start=top_left, end=top_right),
            Line(start=top_left, end=bottom_left),
            Line(start=bottom_left, end=bottom_right),
            Line(start=top_right, end=bottom_right),
        ]

    def is_within(self, width: int, height: int) -> bool:
        """Check the box lies entirely inside a width x height image."""
        if self.x < 0 or self.y < 0:
            return False
        return self.x2 <= width and self.y2 <= height
