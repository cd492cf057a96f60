import sys
import os
import numpy as np
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from image_compare.models.image import Image


def solid(width, height, value, channels=3):
    return Image(np.full((height, width, channels), value, dtype=np.uint8))


def gradient(width, height, channels=3):
    # Every byte distinct-ish so misplaced pixels are easy to spot
    values = np.arange(width * height * channels, dtype=np.int64) % 256
    return Image(values.astype(np.uint8).reshape(height, width, channels))


@pytest.fixture
def black_4x4():
    return solid(4, 4, 0)


@pytest.fixture
def white_4x4():
    return solid(4, 4, 255)
