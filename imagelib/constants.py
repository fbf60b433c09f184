"""
Constants and configuration values for imagelib.
Centralizes all magic numbers and message templates.
"""


# Geometry Constants
class GeometryConstants:
    """Constants for pixel arithmetic."""

    # Tolerance applied before flooring computed sizes so that values like
    # 99.99999999999999 land on 100
    FLOOR_EPSILON = 1e-9

    # Smallest surface a scale may produce
    MIN_SCALED_DIMENSION = 1

    COLOR_CHANNEL_MIN = 0
    COLOR_CHANNEL_MAX = 255


# Blur Constants
class BlurConstants:
    """Constants for area blur."""

    # Gaussian-like 3x3 kernel
    KERNEL = (
        (1.0, 2.0, 1.0),
        (2.0, 4.0, 2.0),
        (1.0, 2.0, 1.0),
    )
    DIVISOR = 16.0
    OFFSET = 0.0

    MIN_STRENGTH = 1
    DEFAULT_STRENGTH = 1

    # Opacity used when merging the blurred region back (percent)
    MERGE_OPACITY = 100


# Drawing Constants
class DrawingConstants:
    """Constants for drawing operations."""

    DEFAULT_LINE_THICKNESS = 1
    MIN_LINE_THICKNESS = 1


# Codec Constants
class CodecConstants:
    """Constants for encoding and decoding."""

    DEFAULT_JPEG_QUALITY = 100
    DEFAULT_WEBP_QUALITY = 100
    DEFAULT_PNG_COMPRESS_LEVEL = 0
    MIN_QUALITY = 1
    MAX_QUALITY = 100
    MIN_PNG_COMPRESS_LEVEL = 0
    MAX_PNG_COMPRESS_LEVEL = 9


# System Constants
class SystemConstants:
    """Constants for system operations."""

    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ENV_PREFIX = "IMAGELIB_"
    ENV_NESTED_DELIMITER = "__"


# Error Messages
class ErrorMessages:
    """Standard error messages."""

    # Argument errors
    COLOR_CHANNEL_OUT_OF_RANGE = "{channel} needs to be a value between 0 and 255."
    INVALID_HEX_COLOR = "Invalid hex colour: {value}"
    NON_POSITIVE_DIMENSION = "{field} must be a positive integer, got {value}"
    NEGATIVE_RECTANGLE_SIZE = "Rectangle {field} cannot be negative, got {value}"
    NON_POSITIVE_PERCENTAGE = "Percentage must be greater than 0, got {value}"
    NON_POSITIVE_PIXEL_COUNT = "Desired number of pixels must be greater than 0, got {value}"
    NON_POSITIVE_SIZE = "{field} must be greater than 0, got {value}"
    INVALID_GRID = "Cannot divide {width}x{height} image into {columns} columns and {rows} rows"
    INVALID_THICKNESS = "Line thickness must be at least 1, got {value}"
    UNSUPPORTED_FORMAT = "Unsupported image format: {format}"
    MISSING_EXTENSION = "Failed to find image format from extension of: {path}"

    # Operation errors
    CROP_FAILED = (
        "Failed to crop image using point: {x}, {y} width: {width} and height: {height}"
    )
    SCALE_FAILED = "Failed to scale image from {width}x{height} to {new_width}x{new_height}"
    DRAW_LINE_FAILED = "Failed to draw line from ({x1}, {y1}) to ({x2}, {y2})"
    BLUR_FAILED = "Failed to blur area at {x}, {y} width: {width} and height: {height}"
    DECODE_FAILED = "Failed to decode {format} image: {error}"
    ENCODE_FAILED = "Failed to encode image as {format}: {error}"
    FILE_NOT_FOUND = "Could not find provided file: {path}"
