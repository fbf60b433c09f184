"""
Tests for the image codec
"""

import base64
import io

import numpy as np
import pytest
from PIL import Image as PILImage

from imagelib.config import reset_settings
from imagelib.core import codec
from imagelib.core.image import Image
from imagelib.enums import ImageFormat
from imagelib.exceptions import InvalidArgument, OperationFailed


def pil_bytes(pil_image, pil_format):
    buffer = io.BytesIO()
    pil_image.save(buffer, format=pil_format)
    return buffer.getvalue()


class TestConversions:
    """Test NumPy <-> PIL conversion"""

    def test_numpy_to_pil_swaps_channels(self):
        """Test BGR surfaces become RGB images"""
        surface = np.zeros((2, 2, 3), dtype=np.uint8)
        surface[:, :] = (255, 0, 0)  # blue in BGR

        assert codec.numpy_to_pil(surface).getpixel((0, 0)) == (0, 0, 255)

    def test_pil_to_numpy_swaps_channels(self):
        """Test RGB images become BGR surfaces"""
        pil_image = PILImage.new("RGB", (2, 2), (255, 0, 0))

        assert codec.pil_to_numpy(pil_image)[0, 0].tolist() == [0, 0, 255]
        assert codec.pil_to_numpy(pil_image, bgr=False)[0, 0].tolist() == [255, 0, 0]


class TestDecode:
    """Test decoding bytes"""

    def test_decode_png(self):
        """Test PNG bytes become a BGR surface with the hinted tag"""
        data = pil_bytes(PILImage.new("RGB", (8, 4), (10, 20, 30)), "PNG")
        image = codec.decode(data, "png")

        assert image.format == ImageFormat.PNG
        assert image.surface.shape == (4, 8, 3)
        assert image.surface[0, 0].tolist() == [30, 20, 10]

    def test_decode_grayscale_normalized(self):
        """Test single-channel images are expanded to three channels"""
        data = pil_bytes(PILImage.new("L", (5, 5), 77), "PNG")
        image = codec.decode(data, ImageFormat.PNG)

        assert image.surface.shape == (5, 5, 3)
        assert image.surface[2, 2].tolist() == [77, 77, 77]

    def test_decode_gif(self):
        """Test palette formats decode"""
        data = pil_bytes(PILImage.new("RGB", (6, 3), (255, 255, 255)), "GIF")
        image = codec.decode(data, "gif")

        assert image.format == ImageFormat.GIF
        assert image.surface.shape == (3, 6, 3)

    def test_decode_invalid_bytes(self):
        """Test garbage bytes raise OperationFailed"""
        with pytest.raises(OperationFailed):
            codec.decode(b"not an image", "png")

    def test_decode_unsupported_format(self):
        """Test unknown format hints are rejected"""
        data = pil_bytes(PILImage.new("RGB", (2, 2)), "PNG")
        with pytest.raises(InvalidArgument):
            codec.decode(data, "xyz")


class TestEncode:
    """Test encoding images"""

    @pytest.fixture
    def image(self):
        surface = np.random.default_rng(1).integers(0, 255, (16, 24, 3), dtype=np.uint8)
        return Image(surface, ImageFormat.PNG)

    def test_png_round_trip_lossless(self, image):
        """Test PNG preserves every pixel"""
        decoded = codec.decode(codec.encode(image), "png")
        assert np.array_equal(decoded.surface, image.surface)

    def test_encode_uses_own_format(self, image):
        """Test the image's tag picks the encoder by default"""
        assert codec.encode(image).startswith(b"\x89PNG")
        assert codec.encode(image.with_format("jpg")).startswith(b"\xff\xd8")

    @pytest.mark.parametrize("image_format", ["bmp", "gif", "jpeg", "tiff", "webp"])
    def test_encode_formats(self, image, image_format):
        """Test every supported format encodes and decodes back to the same size"""
        decoded = codec.decode(codec.encode(image, image_format), image_format)
        assert decoded.surface.shape == image.surface.shape

    def test_jpeg_quality(self, image):
        """Test lower quality gives smaller output"""
        high = codec.encode(image, ImageFormat.JPEG, quality=95)
        low = codec.encode(image, ImageFormat.JPEG, quality=10)
        assert len(low) < len(high)

    def test_jpeg_quality_from_settings(self, image, monkeypatch):
        """Test the configured default quality is used"""
        default = codec.encode(image, ImageFormat.JPEG)
        monkeypatch.setenv("IMAGELIB_CODEC__JPEG_QUALITY", "10")

        reset_settings()
        configured = codec.encode(image, ImageFormat.JPEG)

        assert len(configured) < len(default)

    def test_to_base64(self, image):
        """Test base64 output decodes to the encoded bytes"""
        encoded = codec.to_base64(image)
        assert base64.b64decode(encoded) == codec.encode(image)


class TestFiles:
    """Test loading and saving files"""

    def test_save_and_load(self, tmp_path):
        """Test format comes from the extension on both sides"""
        image = Image(np.full((10, 12, 3), 90, dtype=np.uint8), ImageFormat.PNG)
        path = tmp_path / "out.png"

        codec.save(image, path)
        loaded = codec.load(path)

        assert loaded.format == ImageFormat.PNG
        assert np.array_equal(loaded.surface, image.surface)

    def test_save_jpg_extension(self, tmp_path):
        """Test the jpg alias maps to JPEG"""
        image = Image(np.zeros((10, 12, 3), dtype=np.uint8), ImageFormat.PNG)
        path = tmp_path / "out.jpg"

        codec.save(image, path)

        assert path.read_bytes().startswith(b"\xff\xd8")
        assert codec.load(path).format == ImageFormat.JPEG

    def test_load_explicit_format(self, tmp_path):
        """Test an explicit format overrides a missing extension"""
        path = tmp_path / "upload"
        path.write_bytes(pil_bytes(PILImage.new("RGB", (3, 3)), "PNG"))

        assert codec.load(path, "png").format == ImageFormat.PNG
        with pytest.raises(InvalidArgument):
            codec.load(path)

    def test_load_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError"""
        with pytest.raises(FileNotFoundError):
            codec.load(tmp_path / "missing.png")
