"""Edge pipelines: raster → grayscale → smooth → gradient → suppress → hysteresis.

Two orchestrations are provided:
  canny  full five-stage pipeline, binary 0/255 output
  sobel  grayscale, both Sobel convolutions summed with saturation
"""

from __future__ import annotations

from dataclasses import dataclass

from edgemap.config import DEFAULT_HIGH_THRESHOLD, DEFAULT_LOW_THRESHOLD, DEFAULT_SIGMA, EdgeConfig
from edgemap.convolution.convolve import BoundaryPolicy, add_clamped, boundary_policy, convolve
from edgemap.errors import EdgeMapError
from edgemap.gradient.sobel import Gradients, compute_gradients
from edgemap.grayscale.reduce import to_grayscale
from edgemap.hysteresis.link import HysteresisResult, run_hysteresis, validate_thresholds
from edgemap.kernels.builder import gaussian_kernel, sobel_x, sobel_y
from edgemap.raster import Raster
from edgemap.suppression.nms import suppress
from edgemap.utils import setup_logger

logger = setup_logger("pipeline")

ALGORITHMS = ("canny", "sobel")


@dataclass(frozen=True)
class CannyResult:
    """Every intermediate raster of one Canny run."""

    gray: Raster
    smoothed: Raster
    gradients: Gradients
    suppressed: Raster
    hysteresis: HysteresisResult

    @property
    def edges(self) -> Raster:
        return self.hysteresis.edges


def run_canny(
    src: Raster,
    sigma: float = DEFAULT_SIGMA,
    low_threshold: int = DEFAULT_LOW_THRESHOLD,
    high_threshold: int = DEFAULT_HIGH_THRESHOLD,
    boundary: BoundaryPolicy = BoundaryPolicy.DROP,
) -> CannyResult:
    """
    Full Canny pipeline keeping each stage's output.

    Parameters are validated before any stage runs, so a bad sigma or
    threshold pair never produces partial output.
    """
    validate_thresholds(low_threshold, high_threshold)
    kernel = gaussian_kernel(sigma)
    boundary = boundary_policy(boundary)

    logger.debug(f"[1/5] Grayscale {src.width}x{src.height} ({src.channels} ch)")
    gray = to_grayscale(src)

    logger.debug(f"[2/5] Gaussian smoothing (sigma={sigma}, boundary={boundary.value})")
    smoothed = convolve(gray, kernel, boundary)

    logger.debug("[3/5] Sobel gradients")
    gradients = compute_gradients(smoothed, boundary)

    logger.debug("[4/5] Non-maximal suppression")
    thinned = suppress(gradients.magnitude, gradients.direction)

    logger.debug(f"[5/5] Hysteresis (low={low_threshold}, high={high_threshold})")
    linked = run_hysteresis(thinned, low_threshold, high_threshold)

    logger.info(
        f"Canny {src.width}x{src.height}: {linked.edge_count} edge pixels "
        f"({linked.passes} hysteresis passes)"
    )
    return CannyResult(
        gray=gray,
        smoothed=smoothed,
        gradients=gradients,
        suppressed=thinned,
        hysteresis=linked,
    )


def canny(
    src: Raster,
    sigma: float = DEFAULT_SIGMA,
    low_threshold: int = DEFAULT_LOW_THRESHOLD,
    high_threshold: int = DEFAULT_HIGH_THRESHOLD,
    boundary: BoundaryPolicy = BoundaryPolicy.DROP,
) -> Raster:
    """Binary Canny edge raster of src."""
    return run_canny(src, sigma, low_threshold, high_threshold, boundary).edges


def sobel(src: Raster, boundary: BoundaryPolicy = BoundaryPolicy.DROP) -> Raster:
    """Sum of the clamped x and y Sobel responses, saturating at 255."""
    gray = to_grayscale(src)
    edges_x = convolve(gray, sobel_x(), boundary)
    edges_y = convolve(gray, sobel_y(), boundary)
    return add_clamped(edges_x, edges_y)


def detect_edges(src: Raster, config: EdgeConfig | None = None, algorithm: str = "canny") -> Raster:
    """Run the named algorithm with parameters from config (defaults if None)."""
    config = config or EdgeConfig()
    if algorithm == "canny":
        return canny(src, config.sigma, config.low_threshold, config.high_threshold, config.boundary)
    if algorithm == "sobel":
        return sobel(src, config.boundary)
    raise EdgeMapError(f"Unknown algorithm {algorithm!r} (choose from {', '.join(ALGORITHMS)})")
