"""Gradient stage: Sobel derivatives, magnitude and quantised direction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from edgemap.convolution.convolve import BoundaryPolicy, convolve
from edgemap.kernels.builder import sobel_x, sobel_y
from edgemap.raster import Raster
from edgemap.utils import setup_logger

logger = setup_logger("gradient")

# Upper edges of the half-open direction bins, in degrees over [0, 180)
BIN_EDGES: tuple[float, ...] = (22.5, 67.5, 112.5, 157.5)


class AngleClass(IntEnum):
    """Gradient direction quantised to the four neighbour axes."""

    DEG_0 = 0
    DEG_45 = 45
    DEG_90 = 90
    DEG_135 = 135


@dataclass(frozen=True)
class Gradients:
    """Per-pixel outputs of the gradient stage, all the shape of the input."""

    grad_x: Raster
    grad_y: Raster
    magnitude: Raster
    direction: Raster  # samples are AngleClass values


def quantize_angle(degrees: float) -> AngleClass:
    """
    Snap an angle to the nearest of 0/45/90/135.

    The angle is folded into [0, 180) first; bins are [0, 22.5) -> 0,
    [22.5, 67.5) -> 45, [67.5, 112.5) -> 90, [112.5, 157.5) -> 135,
    [157.5, 180) -> 0.
    """
    return AngleClass(int(_quantize(np.array([degrees], dtype=np.float64))[0]))


def _quantize(degrees: np.ndarray) -> np.ndarray:
    folded = np.mod(degrees, 180.0)
    return np.select(
        [folded < BIN_EDGES[0], folded < BIN_EDGES[1], folded < BIN_EDGES[2], folded < BIN_EDGES[3]],
        [0, 45, 90, 135],
        default=0,
    ).astype(np.uint8)


def direction_classes(grad_x: np.ndarray, grad_y: np.ndarray) -> np.ndarray:
    """Quantised direction for each pixel of two derivative arrays."""
    gx = np.asarray(grad_x, dtype=np.float64)
    gy = np.asarray(grad_y, dtype=np.float64)
    # arctan2 folded mod 180 equals atan(gy/gx) wherever gx != 0
    classes = _quantize(np.degrees(np.arctan2(gy, gx)))
    vertical = np.where(gy != 0, 90, 0).astype(np.uint8)
    return np.where(gx == 0, vertical, classes).astype(np.uint8)


def gradient_magnitude(grad_x: np.ndarray, grad_y: np.ndarray) -> np.ndarray:
    gx = np.asarray(grad_x, dtype=np.float64)
    gy = np.asarray(grad_y, dtype=np.float64)
    return np.sqrt(gx * gx + gy * gy)


def compute_gradients(
    gray: Raster,
    policy: BoundaryPolicy = BoundaryPolicy.DROP,
) -> Gradients:
    """
    Run both Sobel kernels over a single-channel raster.

    grad_x / grad_y are the clamped convolution outputs; magnitude is
    clamp(round(sqrt(gx^2 + gy^2))); direction holds AngleClass values.
    """
    gray.require_grayscale("compute_gradients")
    grad_x = convolve(gray, sobel_x(), policy)
    grad_y = convolve(gray, sobel_y(), policy)

    magnitude = Raster.from_clamped(gradient_magnitude(grad_x.data, grad_y.data))
    direction = Raster(direction_classes(grad_x.data, grad_y.data))
    logger.debug(
        f"gradients {gray.width}x{gray.height}: max magnitude {int(magnitude.data.max())}"
    )
    return Gradients(grad_x=grad_x, grad_y=grad_y, magnitude=magnitude, direction=direction)
