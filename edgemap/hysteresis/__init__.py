"""Hysteresis stage."""

from edgemap.hysteresis.link import (
    MAX_HYSTERESIS_PASSES,
    HysteresisResult,
    PixelClass,
    classify_pixels,
    hysteresis,
    run_hysteresis,
    validate_thresholds,
)

__all__ = [
    "MAX_HYSTERESIS_PASSES",
    "HysteresisResult",
    "PixelClass",
    "classify_pixels",
    "hysteresis",
    "run_hysteresis",
    "validate_thresholds",
]
