"""
imagelib - geometry and transforms for raster images.

Crops, scales, grids, thumbnails, aspect-ratio fits and simple overlays
computed from pixel geometry, with the pixel work delegated to OpenCV.

Example:
    >>> from imagelib import Dimensions, codec, transforms
    >>> image = codec.load("photo.jpg")
    >>> thumb = transforms.thumbnail(image, Dimensions(width=200, height=200))
    >>> codec.save(thumb, "thumb.png")
"""

from .core import Image, SurfaceOps, codec, transforms
from .enums import ImageFormat
from .exceptions import ImageLibError, InvalidArgument, OperationFailed
from .schemas import Color, Dimensions, Line, Point, Rectangle

__version__ = "1.0.0"

__all__ = [
    "Color",
    "Dimensions",
    "Image",
    "ImageFormat",
    "ImageLibError",
    "InvalidArgument",
    "Line",
    "OperationFailed",
    "Point",
    "Rectangle",
    "SurfaceOps",
    "codec",
    "transforms",
]
