"""Grayscale reduction stage."""

from edgemap.grayscale.reduce import to_grayscale

__all__ = ["to_grayscale"]
