"""Convolution kernels. Weights are stored row-major, indexed [y, x]."""

from __future__ import annotations

import math
import numbers
from functools import lru_cache

import numpy as np

from edgemap.errors import InvalidKernelShape, InvalidSigma

# Divisor guard for zero-sum kernels such as Sobel
ZERO_SUM_EPSILON = 1e-4

GAUSSIAN_RADIUS = 2  # fixed 5x5 footprint


def validate_sigma(sigma) -> None:
    """Require a real, finite sigma > 0 whose 5x5 weights are representable."""
    if isinstance(sigma, bool) or not isinstance(sigma, numbers.Real):
        raise InvalidSigma(f"sigma must be a number, got {sigma!r}")
    if not sigma > 0 or math.isinf(sigma):
        raise InvalidSigma(f"sigma must be a finite value > 0, got {sigma}")
    sigma_sq = float(sigma) * float(sigma)
    # sigma^2 underflowing to 0 or 1/(2*pi*sigma^2) overflowing leaves no usable weights
    if sigma_sq == 0.0 or math.isinf(sigma_sq) or math.isinf(1.0 / (2.0 * math.pi * sigma_sq)):
        raise InvalidSigma(f"sigma {sigma} is outside the range the 5x5 Gaussian can represent")


class Kernel:
    """Odd-sized 2D grid of float weights with a unique centre cell."""

    __slots__ = ("_weights",)

    def __init__(self, weights) -> None:
        try:
            arr = np.array(weights, dtype=np.float64)
        except ValueError as e:
            raise InvalidKernelShape(f"Kernel rows must all have the same length: {e}") from e
        if arr.ndim != 2 or arr.size == 0:
            raise InvalidKernelShape(f"Kernel must be a non-empty 2D grid, got shape {arr.shape}")
        h, w = arr.shape
        if w % 2 == 0 or h % 2 == 0:
            raise InvalidKernelShape(f"Kernel width and height must be odd, got {w}x{h}")
        arr.flags.writeable = False
        self._weights = arr

    @property
    def width(self) -> int:
        return int(self._weights.shape[1])

    @property
    def height(self) -> int:
        return int(self._weights.shape[0])

    @property
    def half_width(self) -> int:
        return self.width // 2

    @property
    def half_height(self) -> int:
        return self.height // 2

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    @property
    def weight_sum(self) -> float:
        return float(self._weights.sum())

    @property
    def divisor(self) -> float:
        """Normalisation divisor applied after accumulation."""
        total = self.weight_sum
        return 1.0 if abs(total) < ZERO_SUM_EPSILON else total

    def at(self, fx: int, fy: int) -> float:
        """Weight at offset (fx, fy) from the centre."""
        return float(self._weights[fy + self.half_height, fx + self.half_width])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Kernel):
            return NotImplemented
        return np.array_equal(self._weights, other._weights)

    def __hash__(self) -> int:
        return hash((self._weights.shape, self._weights.tobytes()))

    def __repr__(self) -> str:
        return f"Kernel({self.width}x{self.height}, sum={self.weight_sum:.4f})"


@lru_cache(maxsize=32, typed=True)
def gaussian_kernel(sigma: float) -> Kernel:
    """
    Build the fixed 5x5 Gaussian kernel for sigma.

    cell(x, y) = 1 / (2*pi*sigma^2) * exp(-(x^2 + y^2) / (2*sigma^2)) for x, y in -2..2.
    Weights are left unnormalised; convolve() divides by their sum.
    """
    validate_sigma(sigma)
    sigma_sq = sigma * sigma
    first_term = 1.0 / (2.0 * math.pi * sigma_sq)
    ax = np.arange(-GAUSSIAN_RADIUS, GAUSSIAN_RADIUS + 1, dtype=np.float64)
    xx, yy = np.meshgrid(ax, ax)
    # off-centre exponents may overflow to -inf for tiny sigma; exp(-inf) is the right 0
    with np.errstate(over="ignore"):
        exponent = -(xx ** 2 + yy ** 2) / (2.0 * sigma_sq)
    return Kernel(first_term * np.exp(exponent))


# Sign convention: x grows to the right, y grows downward; both kernels take
# "far side minus near side", so a dark-to-bright step gives a positive response.
_SOBEL_X = Kernel([[-1, 0, 1],
                   [-2, 0, 2],
                   [-1, 0, 1]])

_SOBEL_Y = Kernel([[-1, -2, -1],
                   [ 0,  0,  0],
                   [ 1,  2,  1]])

_IDENTITY = Kernel([[1]])


def sobel_x() -> Kernel:
    """Horizontal derivative (responds to vertical edges)."""
    return _SOBEL_X


def sobel_y() -> Kernel:
    """Vertical derivative (responds to horizontal edges)."""
    return _SOBEL_Y


def identity_kernel() -> Kernel:
    return _IDENTITY
