"""Caller-input errors raised at stage entry. None of them are retryable."""

from __future__ import annotations


class EdgeMapError(ValueError):
    """Base class for every edgemap input error."""


class InvalidKernelShape(EdgeMapError):
    """Kernel is empty, ragged, or has an even width or height."""


class InvalidThresholdRange(EdgeMapError):
    """Hysteresis thresholds are outside [0, 255] or low > high."""


class InvalidSigma(EdgeMapError):
    """Gaussian sigma is not a finite number > 0 with representable weights."""


class DimensionMismatch(EdgeMapError):
    """Two rasters combined by a stage have different width/height."""

    def __init__(self, what: str, first: tuple[int, int], second: tuple[int, int]):
        self.first = first
        self.second = second
        super().__init__(
            f"{what}: shape mismatch {first[0]}x{first[1]} vs {second[0]}x{second[1]}"
        )


class InvalidRaster(EdgeMapError):
    """Raster data has the wrong dimensionality, channel count, or value range."""
