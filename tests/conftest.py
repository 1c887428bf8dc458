import pytest
import numpy as np


@pytest.fixture
def sample_rgba():
    """Returns a 100x100 uint8 RGBA image with four colour quadrants."""
    img = np.zeros((100, 100, 4), dtype=np.uint8)
    img[:50, :50] = [255, 0, 0, 255]      # Red quadrant
    img[:50, 50:] = [0, 255, 0, 200]      # Green quadrant, translucent
    img[50:, :50] = [0, 0, 255, 128]      # Blue quadrant, half alpha
    img[50:, 50:] = [255, 255, 0, 0]      # Yellow quadrant, transparent
    return img


@pytest.fixture
def random_rgba():
    """Returns a seeded random 24x32 RGBA image with random alpha."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(24, 32, 4), dtype=np.uint8)


@pytest.fixture
def all_filters():
    """Returns a parameter mapping with every filter away from neutral."""
    return {
        'brightness': 120,
        'contrast': 130,
        'saturation': 140,
        'temperature': 25,
        'hue': 45,
        'grayscale': 20,
        'sepia': 30,
        'blur': 1.5,
        'vignette': 50,
        'hdr': 40,
        'clarify': 60,
        'vintage': 30,
        'drama': 30,
        'lomo': 30,
        'cross': 30,
        'pinhole': 30,
        'kodachrome': 30,
        'technicolor': 30,
        'polaroid': 30,
    }


@pytest.fixture
def solid():
    """Returns a factory building uniform RGBA images."""
    def make(height, width, rgba):
        img = np.empty((height, width, 4), dtype=np.uint8)
        img[...] = rgba
        return img
    return make
