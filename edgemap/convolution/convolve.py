"""Convolution engine: generic 2D kernel over a single-channel raster."""

from __future__ import annotations

from enum import Enum

import numpy as np

from edgemap.errors import EdgeMapError
from edgemap.kernels.builder import Kernel
from edgemap.raster import Raster
from edgemap.utils import setup_logger

logger = setup_logger("convolution")


class BoundaryPolicy(str, Enum):
    """How taps that land outside the raster are treated."""

    # Reference behaviour: the first out-of-range tap ends accumulation for that
    # kernel row, so the left kw columns receive no contribution at all.
    DROP = "drop"
    ZERO = "zero"
    EXTEND = "extend"
    WRAP = "wrap"


def boundary_policy(value) -> BoundaryPolicy:
    """Coerce a policy or its name (any case) to a BoundaryPolicy."""
    if isinstance(value, str) and not isinstance(value, BoundaryPolicy):
        value = value.strip().lower()
    try:
        return BoundaryPolicy(value)
    except ValueError as e:
        choices = ", ".join(p.value for p in BoundaryPolicy)
        raise EdgeMapError(f"Unknown boundary policy {value!r} (choose from {choices})") from e


_PAD_MODES = {
    BoundaryPolicy.DROP: "constant",
    BoundaryPolicy.ZERO: "constant",
    BoundaryPolicy.EXTEND: "edge",
    BoundaryPolicy.WRAP: "wrap",
}


def _pad(samples: np.ndarray, kw: int, kh: int, policy: BoundaryPolicy) -> np.ndarray:
    mode = _PAD_MODES[policy]
    if mode == "constant":
        return np.pad(samples, ((kh, kh), (kw, kw)), mode=mode, constant_values=0.0)
    return np.pad(samples, ((kh, kh), (kw, kw)), mode=mode)


def accumulate(
    src: Raster,
    kernel: Kernel,
    policy: BoundaryPolicy = BoundaryPolicy.DROP,
) -> np.ndarray:
    """
    Weighted sum of kernel taps per pixel, before normalisation and clamping.

    acc[y, x] = sum over (fx, fy) of src[x+fx, y+fy] * kernel[fx+kw, fy+kh]
    Returns a float64 (H, W) array.
    """
    src.require_grayscale("convolve")
    policy = boundary_policy(policy)
    kw, kh = kernel.half_width, kernel.half_height
    samples = src.data.astype(np.float64)
    h, w = samples.shape
    padded = _pad(samples, kw, kh, policy)

    acc = np.zeros((h, w), dtype=np.float64)
    for fy in range(-kh, kh + 1):
        for fx in range(-kw, kw + 1):
            weight = kernel.at(fx, fy)
            if weight == 0.0:
                continue
            acc += weight * padded[kh + fy:kh + fy + h, kw + fx:kw + fx + w]

    if policy is BoundaryPolicy.DROP and kw:
        # Leftmost tap is out of range on every kernel row for x < kw.
        acc[:, :min(kw, w)] = 0.0
    return acc


def convolve(
    src: Raster,
    kernel: Kernel,
    policy: BoundaryPolicy = BoundaryPolicy.DROP,
) -> Raster:
    """
    Apply kernel to src under policy and return a fresh raster of the same shape.

    The accumulated sum is divided by the kernel's weight sum (1 for zero-sum
    kernels), rounded half up and clamped to [0, 255].
    """
    policy = boundary_policy(policy)
    acc = accumulate(src, kernel, policy)
    logger.debug(f"convolve {src.width}x{src.height} with {kernel!r} ({policy.value})")
    return Raster.from_clamped(acc / kernel.divisor)


def add_clamped(first: Raster, second: Raster) -> Raster:
    """Pointwise sum of two single-channel rasters, saturating at 255."""
    first.require_grayscale("add_clamped")
    second.require_grayscale("add_clamped")
    first.require_same_shape(second, "add_clamped")
    total = first.data.astype(np.int32) + second.data.astype(np.int32)
    return Raster(np.minimum(total, 255).astype(np.uint8))
