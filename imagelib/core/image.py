"""
Image handle.

Wraps a decoded pixel surface (an 8-bit BGR NumPy array, as produced by the
codec) together with its format tag.

Crop and scale results are wrapped in new handles over new surfaces. Drawing
and blur write into the existing surface, so every handle sharing that
surface sees the change; use copy() first when the source must stay intact.
"""

from typing import Union

import numpy as np

from imagelib.enums import ImageFormat


class Image:
    """A decoded surface plus the format it was read as (or should be written as)."""

    __slots__ = ("_surface", "_format")

    def __init__(self, surface: np.ndarray, image_format: Union[ImageFormat, str]):
        """
        Initialize image handle.

        Args:
            surface: Pixel data, shape (height, width[, channels])
            image_format: Format tag, e.g. ImageFormat.PNG or "jpg"
        """
        self._surface = surface
        self._format = ImageFormat.parse(image_format)

    @classmethod
    def from_surface(cls, surface: np.ndarray, image_format: Union[ImageFormat, str]) -> "Image":
        """Wrap an existing surface."""
        return cls(surface, image_format)

    @property
    def surface(self) -> np.ndarray:
        return self._surface

    @property
    def format(self) -> ImageFormat:
        return self._format

    def copy(self) -> "Image":
        """Independent handle over a deep copy of the surface."""
        return Image(self._surface.copy(), self._format)

    def with_format(self, image_format: Union[ImageFormat, str]) -> "Image":
        """New handle over the same surface, tagged with another format."""
        return Image(self._surface, image_format)

    def __repr__(self) -> str:
        height, width = self._surface.shape[:2]
        return f"Image({width}x{height}, format={self._format.value})"
