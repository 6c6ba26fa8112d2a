"""Edge-detection parameters: defaults, YAML file, then environment overrides."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from edgemap.convolution.convolve import BoundaryPolicy, boundary_policy
from edgemap.errors import EdgeMapError
from edgemap.hysteresis.link import validate_thresholds
from edgemap.kernels.builder import validate_sigma

# Canny defaults (sigma, low, high)
DEFAULT_SIGMA = 1.4
DEFAULT_LOW_THRESHOLD = 25
DEFAULT_HIGH_THRESHOLD = 70

ENV_PREFIX = "EDGEMAP_"

_ENV_KEYS: dict[str, str] = {
    "sigma": "SIGMA",
    "low_threshold": "LOW_THRESHOLD",
    "high_threshold": "HIGH_THRESHOLD",
    "boundary": "BOUNDARY",
}


@dataclass(frozen=True)
class EdgeConfig:
    """Parameters consumed by the pipeline orchestrator."""

    sigma: float = DEFAULT_SIGMA
    low_threshold: int = DEFAULT_LOW_THRESHOLD
    high_threshold: int = DEFAULT_HIGH_THRESHOLD
    boundary: BoundaryPolicy = field(default=BoundaryPolicy.DROP)

    def __post_init__(self):
        """Validate parameters and coerce the boundary name to a BoundaryPolicy."""
        validate_sigma(self.sigma)
        validate_thresholds(self.low_threshold, self.high_threshold)
        object.__setattr__(self, "boundary", boundary_policy(self.boundary))

    def to_dict(self) -> dict:
        d = asdict(self)
        d["boundary"] = self.boundary.value
        return d


def _from_env() -> dict:
    overrides: dict = {}
    for key, suffix in _ENV_KEYS.items():
        raw = os.getenv(ENV_PREFIX + suffix)
        if raw is None or raw.strip() == "":
            continue
        raw = raw.strip()
        try:
            if key == "sigma":
                overrides[key] = float(raw)
            elif key == "boundary":
                overrides[key] = raw.lower()
            else:
                overrides[key] = int(raw)
        except ValueError as e:
            raise EdgeMapError(f"{ENV_PREFIX + suffix}={raw!r} is not a valid {key}") from e
    return overrides


def load_config(path: str | Path | None = None, use_env: bool = True) -> EdgeConfig:
    """
    Build an EdgeConfig.

    Layers, last one wins:
      1. dataclass defaults
      2. YAML mapping at path (keys: sigma, low_threshold, high_threshold, boundary)
      3. EDGEMAP_* environment variables (a .env file is loaded first)
    """
    values: dict = {}
    if path is not None:
        with open(path) as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise EdgeMapError(f"Config file {path} is not valid YAML: {e}") from e
        if not isinstance(loaded, dict):
            raise EdgeMapError(f"Config file {path} must contain a mapping")
        unknown = set(loaded) - set(_ENV_KEYS)
        if unknown:
            raise EdgeMapError(f"Unknown config keys in {path}: {sorted(unknown)}")
        values.update(loaded)

    if use_env:
        load_dotenv()
        values.update(_from_env())

    return EdgeConfig(**values)
