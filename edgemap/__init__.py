"""edgemap: Canny and Sobel edge maps over in-memory grayscale rasters."""

from edgemap.config import EdgeConfig, load_config
from edgemap.convolution import BoundaryPolicy, add_clamped, boundary_policy, convolve
from edgemap.errors import (
    DimensionMismatch,
    EdgeMapError,
    InvalidKernelShape,
    InvalidRaster,
    InvalidSigma,
    InvalidThresholdRange,
)
from edgemap.gradient import AngleClass, Gradients, compute_gradients, quantize_angle
from edgemap.grayscale import to_grayscale
from edgemap.hysteresis import MAX_HYSTERESIS_PASSES, HysteresisResult, PixelClass, hysteresis, run_hysteresis
from edgemap.kernels import Kernel, gaussian_kernel, identity_kernel, sobel_x, sobel_y, validate_sigma
from edgemap.pipeline import CannyResult, canny, detect_edges, run_canny, sobel
from edgemap.raster import Raster
from edgemap.suppression import suppress

__all__ = [
    "AngleClass",
    "BoundaryPolicy",
    "CannyResult",
    "DimensionMismatch",
    "EdgeConfig",
    "EdgeMapError",
    "Gradients",
    "HysteresisResult",
    "InvalidKernelShape",
    "InvalidRaster",
    "InvalidSigma",
    "InvalidThresholdRange",
    "Kernel",
    "MAX_HYSTERESIS_PASSES",
    "PixelClass",
    "Raster",
    "add_clamped",
    "boundary_policy",
    "canny",
    "compute_gradients",
    "convolve",
    "detect_edges",
    "gaussian_kernel",
    "hysteresis",
    "identity_kernel",
    "load_config",
    "quantize_angle",
    "run_canny",
    "run_hysteresis",
    "sobel",
    "sobel_x",
    "sobel_y",
    "suppress",
    "to_grayscale",
    "validate_sigma",
]
