"""Gradient stage."""

from edgemap.gradient.sobel import AngleClass, Gradients, compute_gradients, quantize_angle

__all__ = ["AngleClass", "Gradients", "compute_gradients", "quantize_angle"]
