"""
Image codec.

Handles conversions between encoded bytes and Image handles:
- Decoding bytes / files with Pillow into BGR NumPy surfaces
- Encoding surfaces back to bytes, files or base64 strings
- NumPy (OpenCV BGR) <-> PIL (RGB) conversion

The transform engine never imports this module; it only sees Image handles.
"""

import base64
import io
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cv2
import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from imagelib.config import get_settings
from imagelib.constants import ErrorMessages
from imagelib.core.image import Image
from imagelib.enums import ImageFormat
from imagelib.exceptions import OperationFailed

logger = logging.getLogger(__name__)


def numpy_to_pil(image: np.ndarray) -> PILImage.Image:
    """
    Convert NumPy array (OpenCV format) to PIL Image.

    Args:
        image: NumPy array in BGR format (OpenCV)

    Returns:
        PIL Image in RGB format
    """
    if len(image.shape) == 3 and image.shape[2] == 3:
        image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    else:
        image_rgb = image

    return PILImage.fromarray(image_rgb)


def pil_to_numpy(image: PILImage.Image, bgr: bool = True) -> np.ndarray:
    """
    Convert PIL Image to NumPy array.

    Args:
        image: PIL Image
        bgr: If True, convert to BGR format (OpenCV), else keep RGB

    Returns:
        NumPy array
    """
    array = np.array(image)

    if bgr and len(array.shape) == 3 and array.shape[2] == 3:
        array = cv2.cvtColor(array, cv2.COLOR_RGB2BGR)

    return array


def decode(data: bytes, format_hint: Union[ImageFormat, str]) -> Image:
    """
    Decode encoded image bytes.

    Every surface is normalised to 8-bit, 3-channel BGR.

    Args:
        data: Encoded image bytes
        format_hint: Format tag for the resulting handle, e.g. "png"

    Returns:
        Image handle

    Raises:
        InvalidArgument: If the format is not supported
        OperationFailed: If the bytes cannot be decoded
    """
    image_format = ImageFormat.parse(format_hint)

    try:
        with PILImage.open(io.BytesIO(data)) as pil_image:
            pil_image.load()
            rgb_image = pil_image.convert("RGB")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.error(f"Failed to decode {image_format.value} image: {e}")
        raise OperationFailed(
            ErrorMessages.DECODE_FAILED.format(format=image_format.value, error=e)
        ) from e

    return Image.from_surface(pil_to_numpy(rgb_image, bgr=True), image_format)


def _save_kwargs(image_format: ImageFormat, quality: Optional[int]) -> Dict[str, Any]:
    codec_settings = get_settings().codec
    save_kwargs: Dict[str, Any] = {"format": image_format.pil_format}

    if image_format == ImageFormat.JPEG:
        save_kwargs["quality"] = quality or codec_settings.jpeg_quality
        save_kwargs["optimize"] = True
    elif image_format == ImageFormat.WEBP:
        save_kwargs["quality"] = quality or codec_settings.webp_quality
    elif image_format == ImageFormat.PNG:
        save_kwargs["compress_level"] = codec_settings.png_compress_level

    return save_kwargs


def encode(
    image: Image,
    image_format: Optional[Union[ImageFormat, str]] = None,
    quality: Optional[int] = None,
) -> bytes:
    """
    Encode an image to bytes.

    Args:
        image: Image handle
        image_format: Output format (defaults to the image's own tag)
        quality: JPEG/WebP quality (1-100, ignored for other formats)

    Returns:
        Encoded bytes

    Raises:
        InvalidArgument: If the format is not supported
        OperationFailed: If encoding fails
    """
    target = ImageFormat.parse(image_format) if image_format is not None else image.format

    try:
        buffer = io.BytesIO()
        numpy_to_pil(image.surface).save(buffer, **_save_kwargs(target, quality))
        return buffer.getvalue()
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Failed to encode image as {target.value}: {e}")
        raise OperationFailed(
            ErrorMessages.ENCODE_FAILED.format(format=target.value, error=e)
        ) from e


def load(path: Union[str, Path], image_format: Optional[Union[ImageFormat, str]] = None) -> Image:
    """
    Load an image from disk.

    Args:
        path: File to read
        image_format: Format tag; taken from the file extension if omitted

    Returns:
        Image handle

    Raises:
        FileNotFoundError: If the path is not an existing file
        InvalidArgument: If the format is not supported
        OperationFailed: If the file cannot be decoded
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(ErrorMessages.FILE_NOT_FOUND.format(path=path))

    if image_format is None:
        image_format = ImageFormat.from_path(path)

    logger.debug(f"Loading {path} as {image_format}")
    return decode(path.read_bytes(), image_format)


def save(
    image: Image,
    path: Union[str, Path],
    image_format: Optional[Union[ImageFormat, str]] = None,
    quality: Optional[int] = None,
) -> None:
    """
    Write an image to disk.

    Args:
        image: Image handle
        path: Destination file
        image_format: Output format; taken from the file extension if omitted
        quality: JPEG/WebP quality
    """
    path = Path(path)
    if image_format is None:
        image_format = ImageFormat.from_path(path)

    path.write_bytes(encode(image, image_format, quality))
    logger.debug(f"Saved {image!r} to {path}")


def to_base64(
    image: Image,
    image_format: Optional[Union[ImageFormat, str]] = None,
    quality: Optional[int] = None,
) -> str:
    """Encode an image and return it as a base64 string."""
    return base64.b64encode(encode(image, image_format, quality)).decode("utf-8")
