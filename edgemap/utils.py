"""Shared utilities — logging, image I/O adapters, JSON output."""

import json
import logging
from pathlib import Path

import cv2
import numpy as np

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".bmp")

OUTPUT_DIR = Path("data/edges")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logger(name: str) -> logging.Logger:
    """Return a configured logger for a pipeline stage."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger


# ---------------------------------------------------------------------------
# Image I/O
# ---------------------------------------------------------------------------


def load_image(path: str) -> np.ndarray:
    """Load image from disk, return as RGB uint8 array."""
    img = cv2.imread(path)
    if img is None:
        raise FileNotFoundError(f"Could not load image: {path}")
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def save_image(img: np.ndarray, path: str) -> None:
    """Save RGB (or single-channel) numpy array to disk as PNG/JPG."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    if img.ndim == 3:
        img = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
    cv2.imwrite(path, img)


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


def save_json(data: dict, path: str) -> None:
    """Write dict to JSON file, creating parent dirs as needed."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------


def get_image_id(image_path: str) -> str:
    """Return stem of image filename, e.g. 'frame_001' from 'data/frames/frame_001.jpg'."""
    return Path(image_path).stem


def list_images(image_dir: str) -> list[Path]:
    """Return sorted image paths in a directory, matched by extension."""
    return sorted(
        p for p in Path(image_dir).iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    )
