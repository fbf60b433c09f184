"""
Tests for the Image handle
"""

import numpy as np
import pytest

from imagelib.core.image import Image
from imagelib.enums import ImageFormat
from imagelib.exceptions import InvalidArgument


class TestImage:
    """Test Image handle behaviour"""

    def test_format_parsed(self):
        """Test string tags are parsed to ImageFormat"""
        image = Image(np.zeros((4, 6, 3), dtype=np.uint8), "jpg")
        assert image.format == ImageFormat.JPEG

    def test_invalid_format(self):
        """Test unknown tags are rejected at construction"""
        with pytest.raises(InvalidArgument):
            Image(np.zeros((4, 6, 3), dtype=np.uint8), "psd")

    def test_from_surface_shares_array(self):
        surface = np.zeros((4, 6, 3), dtype=np.uint8)
        image = Image.from_surface(surface, ImageFormat.PNG)

        assert image.surface is surface

    def test_copy_is_independent(self, image):
        """Test writes to a copy do not reach the original"""
        duplicate = image.copy()
        duplicate.surface[:] = 7

        assert duplicate.format == image.format
        assert not (image.surface == 7).all()

    def test_with_format_shares_surface(self, image):
        """Test retagging keeps the same pixels"""
        retagged = image.with_format("webp")

        assert retagged.format == ImageFormat.WEBP
        assert image.format == ImageFormat.PNG
        assert retagged.surface is image.surface

    def test_repr(self, image):
        assert repr(image) == "Image(640x480, format=png)"
