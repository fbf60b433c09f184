"""
Enumerations for imagelib.

ImageFormat is the closed set of raster formats the codec knows how to read
and write. Parsing is strict: an unknown format is an InvalidArgument rather
than a silent default.
"""

from enum import Enum
from pathlib import Path
from typing import Union

from imagelib.constants import ErrorMessages
from imagelib.exceptions import InvalidArgument


class ImageFormat(str, Enum):
    """Supported raster formats."""

    BMP = "bmp"
    GIF = "gif"
    JPEG = "jpeg"
    PNG = "png"
    TIFF = "tiff"
    WEBP = "webp"

    @property
    def pil_format(self) -> str:
        """Format name understood by Pillow's Image.save."""
        return self.value.upper()

    @classmethod
    def parse(cls, value: Union["ImageFormat", str]) -> "ImageFormat":
        """
        Parse a format name or file extension.

        Case-insensitive, tolerates a leading dot and accepts the common
        aliases "jpg" and "tif".

        Args:
            value: ImageFormat member or string such as "PNG", ".jpg"

        Returns:
            Matching ImageFormat

        Raises:
            InvalidArgument: If the format is not supported
        """
        if isinstance(value, cls):
            return value

        if not isinstance(value, str):
            raise InvalidArgument(ErrorMessages.UNSUPPORTED_FORMAT.format(format=value))

        normalized = value.strip().lstrip(".").lower()
        normalized = _FORMAT_ALIASES.get(normalized, normalized)

        try:
            return cls(normalized)
        except ValueError:
            raise InvalidArgument(ErrorMessages.UNSUPPORTED_FORMAT.format(format=value))

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageFormat":
        """Parse the format from a file path's extension."""
        suffix = Path(path).suffix
        if not suffix:
            raise InvalidArgument(ErrorMessages.MISSING_EXTENSION.format(path=path))
        return cls.parse(suffix)


_FORMAT_ALIASES = {
    "jpg": ImageFormat.JPEG.value,
    "tif": ImageFormat.TIFF.value,
}
