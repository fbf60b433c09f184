"""
Pytest configuration and fixtures for imagelib tests
"""

import cv2
import numpy as np
import pytest

from imagelib.config import reset_settings
from imagelib.core.image import Image
from imagelib.enums import ImageFormat


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test read settings from its own environment"""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def test_image():
    """Create a 640x480 BGR test surface"""
    image = np.zeros((480, 640, 3), dtype=np.uint8)
    # Add some content
    cv2.rectangle(image, (100, 100), (300, 300), (255, 255, 255), -1)
    cv2.circle(image, (450, 350), 50, (128, 128, 128), -1)
    return image


@pytest.fixture
def image(test_image):
    """Wrap the test surface in a PNG-tagged handle"""
    return Image(test_image, ImageFormat.PNG)


@pytest.fixture
def square_image():
    """Create a 100x100 image whose quadrants have distinct fill values"""
    surface = np.zeros((100, 100, 3), dtype=np.uint8)
    surface[0:50, 0:50] = 10  # top-left
    surface[50:100, 0:50] = 20  # bottom-left
    surface[0:50, 50:100] = 30  # top-right
    surface[50:100, 50:100] = 40  # bottom-right
    return Image(surface, ImageFormat.JPEG)


@pytest.fixture
def blank_image():
    """Create a black 100x100 image"""
    return Image(np.zeros((100, 100, 3), dtype=np.uint8), ImageFormat.PNG)


@pytest.fixture
def split_image():
    """Create a 100x100 image, black on the left half and white on the right"""
    surface = np.zeros((100, 100, 3), dtype=np.uint8)
    surface[:, 50:] = 255
    return Image(surface, ImageFormat.PNG)
