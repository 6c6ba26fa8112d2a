"""Canny / Sobel edge maps for image files. Saves a PNG next to other stage outputs."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from edgemap.config import EdgeConfig
from edgemap.pipeline import detect_edges
from edgemap.raster import Raster
from edgemap.utils import get_image_id, load_image, save_image, setup_logger

logger = setup_logger("edges")


def raster_from_image(img: np.ndarray) -> Raster:
    """Wrap an RGB/RGBA/grayscale uint8 array as a Raster (copied)."""
    if img.ndim == 3 and img.shape[2] == 1:
        img = img[:, :, 0]
    return Raster(img)


def image_from_raster(raster: Raster) -> np.ndarray:
    """3-channel RGB copy of a raster so it can be saved like any other image."""
    if raster.is_grayscale:
        return np.stack([raster.data] * 3, axis=-1)
    return raster.data[:, :, :3].copy()


def _compute_edges(
    image_path: str,
    output_dir: str,
    algorithm: str,
    config: EdgeConfig | None,
) -> str:
    image_id = get_image_id(image_path)
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    out_png = str(Path(output_dir) / f"{image_id}_{algorithm}.png")

    src = raster_from_image(load_image(image_path))
    edges = detect_edges(src, config, algorithm=algorithm)
    # Save as 3-channel so it works with save_image and downstream image readers
    save_image(image_from_raster(edges), out_png)
    logger.info(f"{image_id}: {algorithm} edges saved → {out_png}")
    return out_png


def compute_canny_edges(
    image_path: str,
    output_dir: str,
    config: EdgeConfig | None = None,
) -> str:
    """
    Run Canny edge detection and save a visualization PNG.

    Reads from image_path, writes {output_dir}/{image_id}_canny.png.

    Returns:
        Path to the saved canny PNG.
    """
    return _compute_edges(image_path, output_dir, "canny", config)


def compute_sobel_edges(
    image_path: str,
    output_dir: str,
    config: EdgeConfig | None = None,
) -> str:
    """Run the plain Sobel detector and save {output_dir}/{image_id}_sobel.png."""
    return _compute_edges(image_path, output_dir, "sobel", config)


# ---------------------------------------------------------------------------
# CLI smoke test
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m edgemap.edges.canny <image> [output_dir]")
        sys.exit(1)

    out_d = sys.argv[2] if len(sys.argv) > 2 else "data/edges"
    print(f"Saved: {compute_canny_edges(sys.argv[1], out_d)}")
