"""Convolution engine: kernel application under a boundary policy."""

from edgemap.convolution.convolve import BoundaryPolicy, accumulate, add_clamped, boundary_policy, convolve

__all__ = ["BoundaryPolicy", "accumulate", "add_clamped", "boundary_policy", "convolve"]
