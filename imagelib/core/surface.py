"""
Pixel surface operations.

SurfaceOps is the narrow contract between the transform engine and the pixel
library (NumPy + OpenCV). Operations report failure the way the pixel library
does, returning None or False and logging a warning, and leave it to the
caller to decide whether that is an error.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, Tuple

import cv2
import numpy as np

from imagelib.config import get_settings
from imagelib.constants import GeometryConstants

logger = logging.getLogger(__name__)

_INTERPOLATIONS = {
    "nearest": cv2.INTER_NEAREST,
    "linear": cv2.INTER_LINEAR,
    "area": cv2.INTER_AREA,
    "cubic": cv2.INTER_CUBIC,
    "lanczos": cv2.INTER_LANCZOS4,
}


class SurfaceOps:
    """
    Pixel-level primitives over NumPy surfaces.

    Surfaces are arrays of shape (height, width) or (height, width, channels).
    Crop and scale return new arrays; draw, convolve, copy and merge write
    into their destination in place.
    """

    @staticmethod
    def query_size(surface: np.ndarray) -> Tuple[int, int]:
        """Return (width, height) of a surface."""
        height, width = surface.shape[:2]
        return int(width), int(height)

    @staticmethod
    def crop_pixels(
        surface: np.ndarray, x: int, y: int, width: int, height: int
    ) -> Optional[np.ndarray]:
        """
        Copy a rectangular region out of a surface.

        Args:
            surface: Source surface
            x: Left edge
            y: Top edge
            width: Region width
            height: Region height

        Returns:
            Independent copy of the region, or None if the region is empty or
            extends beyond the surface
        """
        img_width, img_height = SurfaceOps.query_size(surface)

        if width <= 0 or height <= 0:
            logger.warning(f"Empty crop region: {x},{y},{width},{height}")
            return None

        if x < 0 or y < 0 or x + width > img_width or y + height > img_height:
            logger.warning(
                f"Crop region out of bounds: {x},{y},{width},{height} "
                f"for surface {img_width}x{img_height}"
            )
            return None

        return surface[y : y + height, x : x + width].copy()

    @staticmethod
    def scale_pixels(
        surface: np.ndarray, new_width: int, new_height: Optional[int] = None
    ) -> Optional[np.ndarray]:
        """
        Resample a surface to a new size.

        Args:
            surface: Source surface
            new_width: Target width
            new_height: Target height; if omitted the aspect ratio is kept

        Returns:
            New surface, or None if the size is invalid or resampling failed
        """
        width, height = SurfaceOps.query_size(surface)
        new_width = int(new_width)

        if new_height is None:
            new_height = max(
                GeometryConstants.MIN_SCALED_DIMENSION, int(round(height * new_width / width))
            )
        new_height = int(new_height)

        if new_width <= 0 or new_height <= 0:
            logger.warning(f"Invalid scale target: {new_width}x{new_height}")
            return None

        settings = get_settings().transform
        if new_width * new_height < width * height:
            interpolation = _INTERPOLATIONS[settings.shrink_interpolation]
        else:
            interpolation = _INTERPOLATIONS[settings.enlarge_interpolation]

        try:
            return cv2.resize(surface, (new_width, new_height), interpolation=interpolation)
        except cv2.error as e:
            logger.warning(f"Failed to resize {width}x{height} to {new_width}x{new_height}: {e}")
            return None

    @staticmethod
    def draw_line(
        surface: np.ndarray,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        color_bgr: Tuple[int, int, int],
        thickness: int,
    ) -> bool:
        """
        Draw a line onto the surface in place.

        Returns:
            True if the line was drawn
        """
        color = tuple(int(c) for c in color_bgr)
        if surface.ndim == 3 and surface.shape[2] == 4:
            color = color + (255,)

        try:
            cv2.line(surface, (int(x1), int(y1)), (int(x2), int(y2)), color, int(thickness))
        except cv2.error as e:
            logger.warning(f"Failed to draw line ({x1}, {y1}) -> ({x2}, {y2}): {e}")
            return False

        return True

    @staticmethod
    def allocate_scratch(width: int, height: int, channels: int = 3) -> np.ndarray:
        """Allocate a zeroed 8-bit surface."""
        if channels == 1:
            return np.zeros((height, width), dtype=np.uint8)
        return np.zeros((height, width, channels), dtype=np.uint8)

    @staticmethod
    def copy_region(
        dst: np.ndarray,
        src: np.ndarray,
        dst_x: int,
        dst_y: int,
        src_x: int,
        src_y: int,
        width: int,
        height: int,
    ) -> bool:
        """
        Copy a width x height block from src into dst.

        Returns:
            True on success, False if either block falls outside its surface
        """
        src_width, src_height = SurfaceOps.query_size(src)
        dst_width, dst_height = SurfaceOps.query_size(dst)

        if (
            min(src_x, src_y, dst_x, dst_y) < 0
            or src_x + width > src_width
            or src_y + height > src_height
            or dst_x + width > dst_width
            or dst_y + height > dst_height
        ):
            logger.warning(
                f"Copy region out of bounds: src ({src_x}, {src_y}) dst ({dst_x}, {dst_y}) "
                f"size {width}x{height}"
            )
            return False

        dst[dst_y : dst_y + height, dst_x : dst_x + width] = src[
            src_y : src_y + height, src_x : src_x + width
        ]
        return True

    @staticmethod
    def convolve(
        surface: np.ndarray,
        kernel: Sequence[Sequence[float]],
        divisor: float,
        offset: float,
    ) -> bool:
        """
        Apply a convolution matrix to the surface in place.

        Each output pixel is sum(kernel * neighbourhood) / divisor + offset,
        with edge pixels replicated outward.

        Returns:
            True on success
        """
        if divisor == 0:
            logger.warning("Convolution divisor cannot be zero")
            return False

        matrix = np.asarray(kernel, dtype=np.float32) / float(divisor)

        try:
            result = cv2.filter2D(
                surface, -1, matrix, delta=float(offset), borderType=cv2.BORDER_REPLICATE
            )
        except cv2.error as e:
            logger.warning(f"Convolution failed: {e}")
            return False

        surface[...] = result
        return True

    @staticmethod
    def merge_region(dst: np.ndarray, src: np.ndarray, x: int, y: int, opacity: int) -> bool:
        """
        Blend src onto dst with its top-left at (x, y).

        Args:
            dst: Destination surface (modified in place)
            src: Source surface
            x: Destination left edge
            y: Destination top edge
            opacity: 0-100, where 100 overwrites the destination block

        Returns:
            True on success
        """
        src_width, src_height = SurfaceOps.query_size(src)
        dst_width, dst_height = SurfaceOps.query_size(dst)

        if x < 0 or y < 0 or x + src_width > dst_width or y + src_height > dst_height:
            logger.warning(
                f"Merge region out of bounds: ({x}, {y}) size {src_width}x{src_height} "
                f"for surface {dst_width}x{dst_height}"
            )
            return False

        opacity = max(0, min(100, opacity))
        region = dst[y : y + src_height, x : x + src_width]

        if opacity == 100:
            region[...] = src
        elif opacity > 0:
            alpha = opacity / 100.0
            region[...] = cv2.addWeighted(src, alpha, region, 1.0 - alpha, 0.0)

        return True

    @staticmethod
    def release_surface(surface: np.ndarray) -> None:
        """
        Free the pixel buffer of a surface this layer allocated.

        The buffer is only shrunk when nothing else references it. Views and
        surfaces still held elsewhere are left to the garbage collector.
        """
        if not (surface.flags.owndata and surface.flags.c_contiguous):
            return

        try:
            surface.resize((0,), refcheck=True)
        except ValueError as e:
            logger.debug(f"Surface still referenced, left to garbage collection: {e}")

    @staticmethod
    @contextmanager
    def scratch(width: int, height: int, channels: int = 3) -> Iterator[np.ndarray]:
        """Scratch surface that is released however the block exits."""
        surface = SurfaceOps.allocate_scratch(width, height, channels)
        try:
            yield surface
        finally:
            SurfaceOps.release_surface(surface)
