"""Collapse a colour raster to single-channel intensity."""

from __future__ import annotations

import numpy as np

from edgemap.raster import Raster


def to_grayscale(src: Raster) -> Raster:
    """
    Per pixel gray = (red + green + blue) // 3. Alpha, if present, is ignored.

    Single-channel input is returned as a fresh copy, so the reduction is idempotent.
    """
    if src.is_grayscale:
        return Raster(src.data)
    rgb = src.data[:, :, :3].astype(np.uint16)
    return Raster((rgb.sum(axis=2) // 3).astype(np.uint8))
