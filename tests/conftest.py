import numpy as np
import pytest

from edgemap.raster import Raster


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def black_5x5():
    return Raster(np.zeros((5, 5), dtype=np.uint8))


@pytest.fixture
def vertical_step_5x5():
    """Left half 0, right half 255."""
    img = np.zeros((5, 5), dtype=np.uint8)
    img[:, 5 // 2:] = 255
    return Raster(img)


@pytest.fixture
def bright_square_20x20():
    img = np.zeros((20, 20), dtype=np.uint8)
    img[5:15, 5:15] = 255
    return Raster(img)


@pytest.fixture
def random_raster(rng):
    return Raster(rng.integers(0, 256, size=(7, 9), dtype=np.uint8))
