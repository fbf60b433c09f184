"""
Transform engine.

Stateless functions that take an Image handle plus geometry, compute the
region, scale or overlay to request, and delegate the pixel work to
SurfaceOps.

Handle semantics:
- crop, scale and tiling functions return handles over new surfaces
- draw_line, draw_rectangle and blur_area write into the input's surface;
  the handle they return shares it
"""

import logging
import math
from typing import List, Optional

from imagelib.constants import (
    BlurConstants,
    DrawingConstants,
    ErrorMessages,
    GeometryConstants,
)
from imagelib.core.image import Image
from imagelib.core.surface import SurfaceOps
from imagelib.exceptions import InvalidArgument, OperationFailed
from imagelib.schemas import (
    Color,
    Dimensions,
    Line,
    Point,
    Rectangle,
    floor_pixels,
    round_half_up,
)

logger = logging.getLogger(__name__)


# Measurements


def get_width(image: Image) -> int:
    """Number of pixels wide."""
    return SurfaceOps.query_size(image.surface)[0]


def get_height(image: Image) -> int:
    """Number of pixels tall."""
    return SurfaceOps.query_size(image.surface)[1]


def get_num_pixels(image: Image) -> int:
    """Total pixel count (width x height)."""
    width, height = SurfaceOps.query_size(image.surface)
    return width * height


# Crop


def crop(image: Image, box: Rectangle) -> Image:
    """
    Crop an image.

    Args:
        image: Source image
        box: Region to keep; must lie inside the image

    Returns:
        New image holding the region, same format tag

    Raises:
        OperationFailed: If the region could not be cropped (e.g. out of bounds)
    """
    surface = SurfaceOps.crop_pixels(image.surface, box.x, box.y, box.width, box.height)

    if surface is None:
        msg = ErrorMessages.CROP_FAILED.format(
            x=box.x, y=box.y, width=box.width, height=box.height
        )
        logger.error(msg)
        raise OperationFailed(msg)

    return Image.from_surface(surface, image.format)


def divide_image(image: Image, num_columns: int, num_rows: int) -> List[Image]:
    """
    Cut an image into a num_columns x num_rows grid of equal tiles.

    Tiles are floor(width / num_columns) by floor(height / num_rows); any
    remainder on the right or bottom is dropped.

    Args:
        image: Source image
        num_columns: Number of columns
        num_rows: Number of rows

    Returns:
        Tiles in column-major order (every row of column 0, then column 1, ...)

    Raises:
        InvalidArgument: If the grid is empty or finer than one pixel per tile
    """
    width, height = SurfaceOps.query_size(image.surface)

    if num_columns < 1 or num_rows < 1 or num_columns > width or num_rows > height:
        raise InvalidArgument(
            ErrorMessages.INVALID_GRID.format(
                width=width, height=height, columns=num_columns, rows=num_rows
            )
        )

    box_width = width // num_columns
    box_height = height // num_rows

    return _tile(image, Dimensions(width=box_width, height=box_height), num_columns, num_rows)


def grid_crop(image: Image, dimensions: Dimensions) -> List[Image]:
    """
    Cut as many tiles of a fixed size as fit into the image.

    Args:
        image: Source image
        dimensions: Size of each tile

    Returns:
        Tiles in column-major order; empty if a single tile does not fit
    """
    width, height = SurfaceOps.query_size(image.surface)
    num_columns = width // dimensions.width
    num_rows = height // dimensions.height

    return _tile(image, dimensions, num_columns, num_rows)


def _tile(image: Image, tile: Dimensions, num_columns: int, num_rows: int) -> List[Image]:
    logger.debug(
        f"Tiling {image!r} into {num_columns}x{num_rows} tiles of {tile.width}x{tile.height}"
    )

    images = []
    for column in range(num_columns):
        for row in range(num_rows):
            box = Rectangle.from_point_and_size(
                Point(x=column * tile.width, y=row * tile.height), tile
            )
            images.append(crop(image, box))

    return images


# Scaling


def _scaled_side(value: float) -> int:
    return max(GeometryConstants.MIN_SCALED_DIMENSION, floor_pixels(value))


def _scale(image: Image, new_width: int, new_height: Optional[int] = None) -> Image:
    surface = SurfaceOps.scale_pixels(image.surface, new_width, new_height)

    if surface is None:
        width, height = SurfaceOps.query_size(image.surface)
        msg = ErrorMessages.SCALE_FAILED.format(
            width=width,
            height=height,
            new_width=new_width,
            new_height=new_height if new_height is not None else "auto",
        )
        logger.error(msg)
        raise OperationFailed(msg)

    return Image.from_surface(surface, image.format)


def scale_to_percentage(image: Image, percentage: float) -> Image:
    """
    Scale an image by a percentage of its size, e.g. 50 to halve it or 200
    to double it. Aspect ratio is preserved.

    Both target dimensions are floored from the same factor so that
    composite operations (thumbnail, fit) land on exact pixel sizes.

    Raises:
        InvalidArgument: If percentage is not positive
        OperationFailed: If scaling fails
    """
    if percentage <= 0:
        raise InvalidArgument(ErrorMessages.NON_POSITIVE_PERCENTAGE.format(value=percentage))

    width, height = SurfaceOps.query_size(image.surface)
    factor = percentage / 100.0
    new_width = _scaled_side(width * factor)
    new_height = _scaled_side(height * factor)

    logger.debug(f"Scaling {width}x{height} by {percentage:.4f}% to {new_width}x{new_height}")
    return _scale(image, new_width, new_height)


def scale_to_width(image: Image, width: int) -> Image:
    """Scale to the given width, preserving aspect ratio."""
    if width <= 0:
        raise InvalidArgument(ErrorMessages.NON_POSITIVE_SIZE.format(field="width", value=width))

    return _scale(image, width)


def scale_to_height(image: Image, height: int) -> Image:
    """Scale to the given height, preserving aspect ratio."""
    if height <= 0:
        raise InvalidArgument(
            ErrorMessages.NON_POSITIVE_SIZE.format(field="height", value=height)
        )

    current_width, current_height = SurfaceOps.query_size(image.surface)
    new_width = _scaled_side(current_width * (height / current_height))
    return _scale(image, new_width, height)


def scale_to_dimensions(image: Image, dimensions: Dimensions) -> Image:
    """Resize to exactly the given dimensions; aspect ratio is not preserved."""
    return _scale(image, dimensions.width, dimensions.height)


def scale_to_fit(image: Image, box: Dimensions) -> Image:
    """
    Scale so the image fits inside box while preserving aspect ratio.

    One side will match the box exactly (both if the ratios agree); neither
    will exceed it.
    """
    width, height = SurfaceOps.query_size(image.surface)
    factor = min(box.width / width, box.height / height)
    return scale_to_percentage(image, factor * 100)


def shrink_to_min(image: Image, box: Dimensions) -> Image:
    """
    Scale so that one side matches box and the other is at least as large.

    Similar to scale_to_fit, but the result covers the box instead of
    fitting inside it. Aspect ratio is preserved.
    """
    width, height = SurfaceOps.query_size(image.surface)
    factor = max(box.width / width, box.height / height)
    return scale_to_percentage(image, factor * 100)


def scale_to_num_pixels(image: Image, desired_num_pixels: int) -> Image:
    """
    Scale an image so it has as close to the desired number of pixels as
    possible, e.g. 2,073,600 for 1920 x 1080.

    Area grows with the square of the linear factor, so the factor is the
    square root of the pixel ratio.
    """
    if desired_num_pixels <= 0:
        raise InvalidArgument(
            ErrorMessages.NON_POSITIVE_PIXEL_COUNT.format(value=desired_num_pixels)
        )

    current_num_pixels = get_num_pixels(image)
    factor = math.sqrt(desired_num_pixels / current_num_pixels)
    return scale_to_percentage(image, factor * 100)


# Aliases kept for callers used to the alternative names
set_dimensions = scale_to_dimensions
set_size = scale_to_dimensions
shrink_to_fit = scale_to_fit
shrink_to_num_pixels = scale_to_num_pixels


# Centered operations


def center_crop(image: Image, size: Dimensions) -> Image:
    """
    Extract a region of the given size from the centre of an image.

    Raises:
        OperationFailed: If size exceeds the image on either axis
    """
    width, height = SurfaceOps.query_size(image.surface)

    center_x = width / 2.0
    center_y = height / 2.0

    start_x = round_half_up(center_x - size.width / 2.0)
    start_y = round_half_up(center_y - size.height / 2.0)

    box = Rectangle.from_point_and_size(Point(x=start_x, y=start_y), size)
    return crop(image, box)


def thumbnail(image: Image, size: Dimensions) -> Image:
    """
    Create a thumbnail of exactly the given size.

    The image is first shrunk until it just covers size, so as much of it as
    possible survives, then centre-cropped.
    """
    shrunk = shrink_to_min(image, size)
    return center_crop(shrunk, size)


def crop_to_aspect_ratio(image: Image, ratio: Dimensions) -> Image:
    """
    Crop to the given aspect ratio, keeping as much of the image as possible.

    Args:
        image: Source image
        ratio: Aspect ratio expressed as dimensions, e.g. 16 x 9

    Returns:
        Largest centred crop with that ratio. An image already at the ratio
        (to within the floored pixel) comes back whole, so repeating the
        crop changes nothing.
    """
    width, height = SurfaceOps.query_size(image.surface)

    width_factor = width / ratio.width
    height_factor = height / ratio.height
    min_factor = min(width_factor, height_factor)

    if (
        _scaled_side(ratio.height * width_factor) == height
        or _scaled_side(ratio.width * height_factor) == width
    ):
        logger.debug(f"{image!r} already has aspect ratio {ratio.width}:{ratio.height}")
        return crop(image, Rectangle(x=0, y=0, width=width, height=height))

    target = Dimensions(
        width=_scaled_side(ratio.width * min_factor),
        height=_scaled_side(ratio.height * min_factor),
    )

    return center_crop(image, target)


# Drawing


def draw_line(
    image: Image,
    line: Line,
    color: Color,
    thickness: int = DrawingConstants.DEFAULT_LINE_THICKNESS,
) -> bool:
    """
    Draw a line over an image. Modifies the image's surface in place.

    Returns:
        Whether the line was drawn
    """
    if thickness < DrawingConstants.MIN_LINE_THICKNESS:
        raise InvalidArgument(ErrorMessages.INVALID_THICKNESS.format(value=thickness))

    return SurfaceOps.draw_line(
        image.surface,
        line.start.x,
        line.start.y,
        line.end.x,
        line.end.y,
        color.to_bgr(),
        thickness,
    )


def draw_rectangle(
    image: Image,
    box: Rectangle,
    color: Color,
    thickness: int = DrawingConstants.DEFAULT_LINE_THICKNESS,
) -> Image:
    """
    Draw the outline of a rectangle over an image.

    Lines are drawn in the order of box.lines() (top, left, bottom, right).
    Modifies the image's surface in place.

    Returns:
        The same image, for chaining

    Raises:
        OperationFailed: If any edge could not be drawn
    """
    for line in box.lines():
        if not draw_line(image, line, color, thickness):
            msg = ErrorMessages.DRAW_LINE_FAILED.format(
                x1=line.start.x, y1=line.start.y, x2=line.end.x, y2=line.end.y
            )
            logger.error(msg)
            raise OperationFailed(msg)

    return image


# Blur


def blur_area(
    image: Image, rectangle: Rectangle, strength: int = BlurConstants.DEFAULT_STRENGTH
) -> Image:
    """
    Blur a rectangular area of an image.

    The area is copied to a scratch surface, convolved with a 3x3 Gaussian
    kernel strength times and copied back over the original pixels.
    Modifies the image's surface in place.

    Args:
        image: Image to blur
        rectangle: Area to blur; must lie inside the image
        strength: Number of blur passes (values below 1 are treated as 1)

    Returns:
        New handle over the same, now blurred, surface

    Raises:
        OperationFailed: If the area is outside the image or a pixel step fails
    """
    strength = max(BlurConstants.MIN_STRENGTH, int(strength))

    width, height = SurfaceOps.query_size(image.surface)
    msg = ErrorMessages.BLUR_FAILED.format(
        x=rectangle.x, y=rectangle.y, width=rectangle.width, height=rectangle.height
    )

    if rectangle.width == 0 or rectangle.height == 0 or not rectangle.is_within(width, height):
        logger.error(msg)
        raise OperationFailed(msg)

    surface = image.surface
    channels = surface.shape[2] if surface.ndim == 3 else 1

    with SurfaceOps.scratch(rectangle.width, rectangle.height, channels) as scratch:
        if not SurfaceOps.copy_region(
            scratch, surface, 0, 0, rectangle.x, rectangle.y, rectangle.width, rectangle.height
        ):
            logger.error(msg)
            raise OperationFailed(msg)

        for _ in range(strength):
            if not SurfaceOps.convolve(
                scratch, BlurConstants.KERNEL, BlurConstants.DIVISOR, BlurConstants.OFFSET
            ):
                logger.error(msg)
                raise OperationFailed(msg)

        if not SurfaceOps.merge_region(
            surface, scratch, rectangle.x, rectangle.y, BlurConstants.MERGE_OPACITY
        ):
            logger.error(msg)
            raise OperationFailed(msg)

    return Image.from_surface(surface, image.format)
