import numpy as np
import pytest

from edgemap.errors import DimensionMismatch, InvalidRaster
from edgemap.gradient import AngleClass
from edgemap.raster import Raster
from edgemap.suppression import suppress


def _directions(shape, angle):
    return Raster(np.full(shape, int(angle), dtype=np.uint8))


def test_horizontal_ridge_is_thinned_to_its_peak():
    mag = np.zeros((5, 5), dtype=np.uint8)
    mag[:, :] = [0, 50, 100, 50, 0]
    out = suppress(Raster(mag), _directions(mag.shape, AngleClass.DEG_0)).data
    assert out[2].tolist() == [0, 0, 100, 0, 0]


def test_border_pixels_are_copied_unchanged():
    mag = np.zeros((5, 5), dtype=np.uint8)
    mag[:, :] = [0, 50, 100, 50, 0]
    out = suppress(Raster(mag), _directions(mag.shape, AngleClass.DEG_0)).data
    assert out[0].tolist() == mag[0].tolist()
    assert out[4].tolist() == mag[4].tolist()
    assert out[:, 0].tolist() == mag[:, 0].tolist()


def test_plateau_pixels_survive():
    mag = np.zeros((5, 5), dtype=np.uint8)
    mag[:, :] = [0, 80, 80, 0, 0]
    out = suppress(Raster(mag), _directions(mag.shape, AngleClass.DEG_0)).data
    assert out[2].tolist() == [0, 80, 80, 0, 0]


def test_vertical_direction_compares_up_and_down():
    mag = np.zeros((5, 5), dtype=np.uint8)
    mag[:, 2] = [0, 50, 100, 50, 0]
    out = suppress(Raster(mag), _directions(mag.shape, AngleClass.DEG_90)).data
    assert out[:, 2].tolist() == [0, 0, 100, 0, 0]


@pytest.mark.parametrize("angle, survives", [
    (AngleClass.DEG_45, False),   # compares (2, 2) which is larger
    (AngleClass.DEG_135, True),   # compares (2, 0) and (0, 2), both zero
    (AngleClass.DEG_0, True),
])
def test_diagonal_neighbours(angle, survives):
    mag = np.zeros((3, 3), dtype=np.uint8)
    mag[1, 1] = 10
    mag[2, 2] = 20
    out = suppress(Raster(mag), _directions(mag.shape, angle))
    assert out[1, 1] == (10 if survives else 0)


def test_raster_without_interior_is_returned_as_is():
    mag = Raster([[5, 9], [7, 3]])
    assert suppress(mag, _directions((2, 2), AngleClass.DEG_0)) == mag


def test_shape_mismatch_is_rejected():
    with pytest.raises(DimensionMismatch):
        suppress(Raster.filled(4, 4), Raster.filled(5, 4))


def test_unknown_direction_values_are_rejected():
    with pytest.raises(InvalidRaster):
        suppress(Raster.filled(3, 3, 10), Raster.filled(3, 3, 30))
