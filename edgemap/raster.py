"""Raster value type: an owned, read-only grid of 0..255 samples.

A Raster is either single-channel (H, W) or packed colour (H, W, 3|4). Only the
grayscale reducer accepts colour input; every other stage works on one channel.
Each stage builds a fresh Raster, so no two rasters ever share a buffer.
"""

from __future__ import annotations

import numpy as np

from edgemap.errors import DimensionMismatch, InvalidRaster

COLOR_CHANNELS = (3, 4)


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to nearest integer with .5 going up (np.round rounds half to even)."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def clamp_to_byte(values: np.ndarray) -> np.ndarray:
    """Round half up and clamp to [0, 255], returning uint8."""
    return np.clip(round_half_up(values), 0, 255).astype(np.uint8)


class Raster:
    """Immutable-shape 2D intensity grid with explicit width and height."""

    __slots__ = ("_data",)

    def __init__(self, data) -> None:
        try:
            arr = np.array(data, copy=True)
        except ValueError as e:
            raise InvalidRaster(f"Raster rows must all have the same length: {e}") from e
        if arr.ndim not in (2, 3):
            raise InvalidRaster(f"Raster data must be 2D or 3D, got {arr.ndim}D")
        if arr.ndim == 3 and arr.shape[2] not in COLOR_CHANNELS:
            raise InvalidRaster(f"Colour raster must have 3 or 4 channels, got {arr.shape[2]}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise InvalidRaster("Raster must have at least one pixel")
        if arr.dtype != np.uint8:
            if arr.dtype.kind not in "iuf" or arr.min() < 0 or arr.max() > 255:
                raise InvalidRaster("Raster samples must be numbers in [0, 255]")
            if arr.dtype.kind == "f" and not np.array_equal(arr, np.floor(arr)):
                raise InvalidRaster("Raster samples must be integers")
            arr = arr.astype(np.uint8)
        arr.flags.writeable = False
        self._data = arr

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def filled(cls, width: int, height: int, value: int = 0) -> "Raster":
        return cls(np.full((height, width), value, dtype=np.uint8))

    @classmethod
    def from_clamped(cls, values: np.ndarray) -> "Raster":
        """Build a single-channel raster from arbitrary floats (round half up, clamp)."""
        return cls(clamp_to_byte(values))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        """(width, height)."""
        return self.width, self.height

    @property
    def channels(self) -> int:
        return 1 if self._data.ndim == 2 else int(self._data.shape[2])

    @property
    def is_grayscale(self) -> bool:
        return self._data.ndim == 2

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the samples, indexed [y, x] (or [y, x, c])."""
        return self._data

    def to_array(self) -> np.ndarray:
        """Writable copy of the samples."""
        return self._data.copy()

    def __getitem__(self, xy: tuple[int, int]) -> int:
        x, y = xy
        if not self.is_grayscale:
            raise InvalidRaster("Pixel indexing is only defined on single-channel rasters")
        return int(self._data[y, x])

    def count(self, value: int) -> int:
        """Number of samples equal to value."""
        return int(np.count_nonzero(self._data == value))

    # ------------------------------------------------------------------
    # Checks used at stage entry
    # ------------------------------------------------------------------

    def require_grayscale(self, stage: str) -> None:
        if not self.is_grayscale:
            raise InvalidRaster(
                f"{stage} expects a single-channel raster, got {self.channels} channels; "
                "reduce with to_grayscale() first"
            )

    def require_same_shape(self, other: "Raster", what: str) -> None:
        if self.shape != other.shape:
            raise DimensionMismatch(what, self.shape, other.shape)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return self._data.shape == other._data.shape and np.array_equal(self._data, other._data)

    def __hash__(self) -> int:
        return hash((self._data.shape, self._data.tobytes()))

    def __repr__(self) -> str:
        return f"Raster({self.width}x{self.height}, channels={self.channels})"
