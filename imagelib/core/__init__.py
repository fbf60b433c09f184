"""
Core modules for imagelib.

- image: the Image handle
- surface: pixel primitives (NumPy + OpenCV)
- codec: bytes/files <-> Image (Pillow)
- transforms: the transform engine
"""

from . import codec, transforms
from .image import Image
from .surface import SurfaceOps

__all__ = [
    "Image",
    "SurfaceOps",
    "codec",
    "transforms",
]
