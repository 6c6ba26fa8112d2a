"""Non-maximal suppression: thin gradient ridges to one pixel along the gradient."""

from __future__ import annotations

import numpy as np

from edgemap.errors import InvalidRaster
from edgemap.gradient.sobel import AngleClass
from edgemap.raster import Raster
from edgemap.utils import setup_logger

logger = setup_logger("suppression")

# (dx, dy) of the two neighbours compared against, per direction class
NEIGHBOUR_OFFSETS: dict[AngleClass, tuple[tuple[int, int], tuple[int, int]]] = {
    AngleClass.DEG_0: ((1, 0), (-1, 0)),
    AngleClass.DEG_45: ((1, 1), (-1, -1)),
    AngleClass.DEG_90: ((0, 1), (0, -1)),
    AngleClass.DEG_135: ((1, -1), (-1, 1)),
}


def _shifted(mag: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Interior-sized view of mag offset by (dx, dy)."""
    h, w = mag.shape
    return mag[1 + dy:h - 1 + dy, 1 + dx:w - 1 + dx]


def suppress(magnitude: Raster, direction: Raster) -> Raster:
    """
    Zero every interior pixel that is not a local maximum along its direction.

    A pixel survives when its magnitude is >= both neighbours on its direction
    axis, so flat-topped ridges keep all their pixels. Border pixels have no
    full neighbourhood and are copied from magnitude unchanged.
    """
    magnitude.require_grayscale("suppress")
    direction.require_grayscale("suppress")
    magnitude.require_same_shape(direction, "suppress(magnitude, direction)")

    dirs = direction.data
    valid = np.isin(dirs, [int(a) for a in AngleClass])
    if not valid.all():
        bad = sorted({int(v) for v in np.unique(dirs[~valid])})
        raise InvalidRaster(f"direction raster holds non-AngleClass values: {bad}")

    mag = magnitude.data.astype(np.int32)
    out = mag.copy()
    h, w = mag.shape
    if h < 3 or w < 3:
        return Raster(out.astype(np.uint8))

    centre = mag[1:-1, 1:-1]
    inner_dirs = dirs[1:-1, 1:-1]
    keep = np.zeros(centre.shape, dtype=bool)
    for angle, (first, second) in NEIGHBOUR_OFFSETS.items():
        is_angle = inner_dirs == int(angle)
        local_max = (centre >= _shifted(mag, *first)) & (centre >= _shifted(mag, *second))
        keep |= is_angle & local_max

    out[1:-1, 1:-1] = np.where(keep, centre, 0)
    logger.debug(
        f"suppress {w}x{h}: {int(np.count_nonzero(centre))} -> "
        f"{int(np.count_nonzero(out[1:-1, 1:-1]))} non-zero interior pixels"
    )
    return Raster(out.astype(np.uint8))
