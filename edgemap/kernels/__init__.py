"""Gaussian smoothing and Sobel gradient kernels."""

from edgemap.kernels.builder import Kernel, gaussian_kernel, identity_kernel, sobel_x, sobel_y, validate_sigma

__all__ = ["Kernel", "gaussian_kernel", "identity_kernel", "sobel_x", "sobel_y", "validate_sigma"]
