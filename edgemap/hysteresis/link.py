"""Hysteresis stage: double thresholding plus weak-to-strong edge linking.

Pixels are seeded as strong (white), suppressed (black) or weak (pending).
Each pass promotes every interior weak pixel that has a white 8-neighbour in
the state at the start of the pass; promotions land together at the end of the
pass. Passes repeat until one promotes nothing or MAX_HYSTERESIS_PASSES have
run. Whatever is still pending at that point is written black.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import cv2
import numpy as np

from edgemap.errors import InvalidThresholdRange
from edgemap.raster import Raster
from edgemap.utils import setup_logger

logger = setup_logger("hysteresis")

MAX_HYSTERESIS_PASSES = 100

EDGE = 255
NON_EDGE = 0

_NEIGHBOURHOOD = np.ones((3, 3), dtype=np.uint8)


class PixelClass(IntEnum):
    SUPPRESSED = 0
    WEAK = 1
    STRONG = 2


@dataclass(frozen=True)
class HysteresisResult:
    """Binary edge raster plus propagation diagnostics."""

    edges: Raster
    passes: int
    converged: bool
    strong: int
    weak: int
    promoted: int

    @property
    def edge_count(self) -> int:
        return self.edges.count(EDGE)


def validate_thresholds(low_threshold: int, high_threshold: int) -> None:
    """Require 0 <= low <= high <= 255."""
    for name, value in (("low_threshold", low_threshold), ("high_threshold", high_threshold)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidThresholdRange(f"{name} must be an int, got {value!r}")
        if not 0 <= value <= 255:
            raise InvalidThresholdRange(f"{name} must be within [0, 255], got {value}")
    if low_threshold > high_threshold:
        raise InvalidThresholdRange(
            f"low_threshold ({low_threshold}) must be <= high_threshold ({high_threshold})"
        )


def classify_pixels(suppressed: Raster, low_threshold: int, high_threshold: int) -> np.ndarray:
    """
    Seed classification per pixel.

    value >= high -> STRONG, value < low -> SUPPRESSED, otherwise WEAK.
    With low == high there are no WEAK pixels.
    """
    values = suppressed.data
    classes = np.full(values.shape, PixelClass.WEAK, dtype=np.uint8)
    classes[values >= high_threshold] = PixelClass.STRONG
    classes[values < low_threshold] = PixelClass.SUPPRESSED
    return classes


def _interior_mask(shape: tuple[int, int]) -> np.ndarray:
    mask = np.zeros(shape, dtype=bool)
    if shape[0] > 2 and shape[1] > 2:
        mask[1:-1, 1:-1] = True
    return mask


def run_hysteresis(
    suppressed: Raster,
    low_threshold: int,
    high_threshold: int,
    max_passes: int = MAX_HYSTERESIS_PASSES,
) -> HysteresisResult:
    """Threshold and link a suppressed-magnitude raster, returning diagnostics."""
    suppressed.require_grayscale("hysteresis")
    validate_thresholds(low_threshold, high_threshold)
    if max_passes < 1:
        raise ValueError(f"max_passes must be >= 1, got {max_passes}")

    classes = classify_pixels(suppressed, low_threshold, high_threshold)
    white = classes == PixelClass.STRONG
    pending = (classes == PixelClass.WEAK) & _interior_mask(classes.shape)
    n_strong = int(np.count_nonzero(white))
    n_weak = int(np.count_nonzero(classes == PixelClass.WEAK))

    passes = 0
    promoted = 0
    converged = n_weak == 0
    while not converged and passes < max_passes:
        passes += 1
        near_white = cv2.dilate(white.astype(np.uint8), _NEIGHBOURHOOD) > 0
        promote = pending & near_white
        n_promote = int(np.count_nonzero(promote))
        if n_promote == 0:
            converged = True
            break
        white |= promote
        pending &= ~promote
        promoted += n_promote

    if not converged:
        logger.warning(
            f"Hysteresis stopped at the {max_passes}-pass cap with "
            f"{int(np.count_nonzero(pending))} weak pixels still pending"
        )
    logger.debug(
        f"hysteresis {suppressed.width}x{suppressed.height}: strong={n_strong} "
        f"weak={n_weak} promoted={promoted} passes={passes}"
    )

    edges = Raster(np.where(white, EDGE, NON_EDGE).astype(np.uint8))
    return HysteresisResult(
        edges=edges,
        passes=passes,
        converged=converged,
        strong=n_strong,
        weak=n_weak,
        promoted=promoted,
    )


def hysteresis(suppressed: Raster, low_threshold: int, high_threshold: int) -> Raster:
    """Binary (0/255) edge raster from a suppressed-magnitude raster."""
    return run_hysteresis(suppressed, low_threshold, high_threshold).edges
